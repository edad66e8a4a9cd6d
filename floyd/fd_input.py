import json
import random
import re
from collections import Counter
from dataclasses import dataclass, field
from typing import List, Optional, Sequence


class InputFormatError(ValueError):
    pass


@dataclass
class InputData:
    nums: List[int] = field(default_factory=list)
    valid: bool = False
    message: Optional[str] = None


EXAMPLE_DATA = [
    ("Example 1", [1, 3, 4, 2, 2]),
    ("Example 2", [3, 1, 3, 4, 2]),
    ("Example 3", [3, 3, 3, 3, 3]),
    ("Example 4", [2, 5, 9, 6, 9, 3, 8, 9, 7, 1]),
]


def parse_numbers(text: str) -> List[int]:
    """
    Accepts either a JSON style list (``[1,3,4,2,2]``) or values separated
    by commas and/or whitespace (``1, 3 4,2 2``).
    """
    trimmed = (text or "").strip().replace("，", ",")
    if trimmed.startswith("[") and trimmed.endswith("]"):
        try:
            values = json.loads(trimmed)
        except json.JSONDecodeError as exc:
            raise InputFormatError(f"Invalid array: {exc.msg}") from exc
        if not all(isinstance(v, int) and not isinstance(v, bool) for v in values):
            raise InputFormatError("Array must contain integers only")
        return values

    tokens = [part for part in re.split(r"[,\s]+", trimmed) if part]
    nums = []
    for token in tokens:
        try:
            nums.append(int(token))
        except ValueError:
            raise InputFormatError(f"Invalid number: {token}") from None
    return nums


def validate_numbers(nums: Sequence[int]) -> InputData:
    nums = list(nums)
    if len(nums) < 2:
        return InputData(nums, False, "The array needs at least 2 values")

    n = len(nums) - 1
    for num in nums:
        if num < 1 or num > n:
            return InputData(nums, False, f"Value {num} is outside the range [1, {n}]")

    repeated = [value for value, count in Counter(nums).items() if count > 1]
    if not repeated:
        return InputData(nums, False, "The array must contain a repeated value")
    if len(repeated) > 1:
        return InputData(nums, False, "Only one value may be repeated")
    return InputData(nums, True)


def validate_input(text: str) -> InputData:
    try:
        nums = parse_numbers(text)
    except InputFormatError as exc:
        return InputData(
            [],
            False,
            f"{exc}. Enter an array such as [1,3,4,2,2] or 1,3,4,2,2",
        )
    return validate_numbers(nums)


def find_duplicate(nums: Sequence[int]) -> Optional[int]:
    """Repeated value by plain counting, independent of the pointer walk."""
    for value, count in Counter(nums).items():
        if count > 1:
            return value
    return None


def generate_random_array(size: int = 5, rng: Optional[random.Random] = None) -> List[int]:
    """
    Random valid input of ``size`` values (n = size - 1): every value in
    [1, n] once plus one extra copy of a random value, shuffled.
    """
    if size < 2:
        raise ValueError("size must be at least 2")
    rng = rng or random.Random()
    n = size - 1
    nums = list(range(1, n + 1))
    nums.append(rng.randint(1, n))
    rng.shuffle(nums)
    return nums


def format_numbers(nums: Sequence[int]) -> str:
    return "[" + ",".join(str(v) for v in nums) + "]"
