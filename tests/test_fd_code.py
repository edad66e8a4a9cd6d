"""Line tables must point at the right lines of every listing."""

import pytest

from floyd.fd_code import ALGORITHM_CODE, VARIABLE_LINES, code_lines_for
from floyd.fd_model import LANGUAGES


def _line(language, number):
    return ALGORITHM_CODE[language].splitlines()[number - 1]


@pytest.mark.parametrize("language", LANGUAGES)
class TestLineTables:
    def test_priming_lines(self, language):
        first, second = code_lines_for("prime")[language]
        assert "slow = nums[slow]" in _line(language, first)
        assert "fast = nums[nums[fast]]" in _line(language, second)

    def test_loop_lines(self, language):
        lines = code_lines_for("phase2_loop")[language]
        assert "pre1 = nums[pre1]" in _line(language, lines[1])
        assert "pre2 = nums[pre2]" in _line(language, lines[2])

    def test_result_line(self, language):
        (line,) = code_lines_for("result")[language]
        assert "return pre1" in _line(language, line)

    def test_all_lines_exist(self, language):
        total = len(ALGORITHM_CODE[language].splitlines())
        for kind in VARIABLE_LINES:
            assert all(1 <= n <= total for n in code_lines_for(kind)[language])


def test_code_lines_are_fresh_copies():
    first = code_lines_for("init")
    first["python"] = (99,)
    assert code_lines_for("init")["python"] == (3, 4)
