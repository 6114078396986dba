import json
import math
import re
from pathlib import Path
from typing import Any, TypeVar, Union

# python insantiates generics separate to function definition
T = TypeVar("T")

ADDRESS_PATTERN = re.compile(r"0x[a-fA-F0-9]{40}")
BYTES32_PATTERN = re.compile(r"0x[a-fA-F0-9]{64}")
NUMERIC_STRING_PATTERN = re.compile(r"[0-9]+")


def is_address(value: Any) -> bool:
    """20 byte hex string with a 0x prefix, any casing. Checksums are not enforced"""
    return isinstance(value, str) and ADDRESS_PATTERN.fullmatch(value) is not None


def is_bytes32(value: Any) -> bool:
    return isinstance(value, str) and BYTES32_PATTERN.fullmatch(value) is not None


def is_numeric_string(value: Any) -> bool:
    """Token amounts are serialized as base 10 integer strings"""
    return isinstance(value, str) and NUMERIC_STRING_PATTERN.fullmatch(value) is not None


def is_number(value: Any) -> bool:
    # bool is a subclass of int, but `true` is not a number in JSON
    if isinstance(value, bool):
        return False
    if isinstance(value, float):
        # NaN and Infinity literals are not JSON
        return math.isfinite(value)
    return isinstance(value, int)


def is_non_negative_number(value: Any) -> bool:
    """Accepts numbers and strings holding a number, as long as they are finite and >= 0"""
    if isinstance(value, str):
        # python accepts digit separators, JSON consumers do not
        if "_" in value:
            return False
        try:
            value = int(value) if NUMERIC_STRING_PATTERN.fullmatch(value) else float(value)
        except ValueError:
            return False
    return is_number(value) and value >= 0


def duplicates(ls: list[T]) -> list[T]:
    """
    Return the items that appear more than once in `ls`,
    each listed once, in the order they were first repeated
    """
    seen: set[T] = set()
    repeated: list[T] = []
    for item in ls:
        if item in seen and item not in repeated:
            repeated.append(item)
        seen.add(item)
    return repeated


def display(value: Any) -> str:
    """Render a raw JSON value for an error message"""
    if isinstance(value, str):
        return value
    return json.dumps(value)


def read_json(path: Union[str, Path]) -> Any:
    with open(path, encoding="utf-8") as f:
        return json.load(f)
