"""Tests for parsing, validating and generating input arrays."""

import random

import pytest

from floyd.fd_input import (
    EXAMPLE_DATA,
    InputFormatError,
    find_duplicate,
    format_numbers,
    generate_random_array,
    parse_numbers,
    validate_input,
    validate_numbers,
)


class TestParse:
    @pytest.mark.parametrize(
        "text",
        ["[1,3,4,2,2]", "1,3,4,2,2", "1 3 4 2 2", " 1, 3  4,2 ,2 ", "1，3，4，2，2"],
    )
    def test_accepted_formats(self, text):
        assert parse_numbers(text) == [1, 3, 4, 2, 2]

    def test_bad_token(self):
        with pytest.raises(InputFormatError, match="x"):
            parse_numbers("1,x,2")

    def test_bad_json(self):
        with pytest.raises(InputFormatError):
            parse_numbers("[1,2,")

    def test_json_with_non_integers(self):
        with pytest.raises(InputFormatError):
            parse_numbers("[1, 2.5, 2]")

    def test_empty(self):
        assert parse_numbers("") == []


class TestValidate:
    def test_valid(self):
        data = validate_input("[1,3,4,2,2]")
        assert data.valid
        assert data.nums == [1, 3, 4, 2, 2]
        assert data.message is None

    def test_format_error_message(self):
        data = validate_input("1,a")
        assert not data.valid
        assert data.nums == []
        assert "[1,3,4,2,2]" in data.message

    def test_too_short(self):
        assert not validate_numbers([1]).valid

    def test_out_of_range(self):
        data = validate_numbers([1, 5, 2])
        assert not data.valid
        assert "[1, 2]" in data.message

    def test_zero_is_out_of_range(self):
        data = validate_numbers([1, 2, 0])
        assert not data.valid
        assert "Value 0" in data.message

    def test_permutation_without_repeat_is_out_of_range(self):
        # four values means n = 3, so a permutation of 1..4 cannot fit
        data = validate_numbers([1, 2, 3, 4])
        assert not data.valid
        assert "Value 4" in data.message

    def test_value_repeated_three_times(self):
        assert validate_numbers([3, 3, 3, 3, 3]).valid

    def test_two_duplicates(self):
        data = validate_numbers([1, 1, 2, 2, 3])
        assert not data.valid
        assert "Only one" in data.message

    def test_examples_are_valid(self):
        for _, values in EXAMPLE_DATA:
            assert validate_numbers(values).valid


class TestHelpers:
    def test_find_duplicate(self):
        assert find_duplicate([2, 5, 9, 6, 9, 3, 8, 9, 7, 1]) == 9
        assert find_duplicate([1, 2]) is None

    def test_format(self):
        assert format_numbers([1, 3, 4]) == "[1,3,4]"

    def test_random_arrays_are_valid(self):
        rng = random.Random(7)
        for size in range(2, 25):
            nums = generate_random_array(size, rng=rng)
            assert len(nums) == size
            assert validate_numbers(nums).valid

    def test_random_is_reproducible_with_seed(self):
        assert generate_random_array(9, random.Random(3)) == generate_random_array(9, random.Random(3))

    def test_random_size_too_small(self):
        with pytest.raises(ValueError):
            generate_random_array(1)
