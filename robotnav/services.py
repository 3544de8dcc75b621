"""Arithmetic services and the input handling of their clients."""

from __future__ import annotations

import re
from collections.abc import Sequence

_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _check_int_range(value: int, text: str) -> int:
    if not _INT_MIN <= value <= _INT_MAX:
        raise ValueError(f"integer out of range: {text!r}")
    return value


def _leading_int(text: str) -> int:
    match = _LEADING_INT.match(text)
    if match is None:
        raise ValueError(f"not an integer: {text!r}")
    return _check_int_range(int(match.group(1)), text)


def add_two_ints(a: int, b: int) -> int:
    """The add service: the sum of two integers."""
    return a + b


def multiply_two_floats(a: float, b: float) -> float:
    """The multiply service: the product of two floats."""
    return float(a) * float(b)


def parse_operands(argv: Sequence[str]) -> tuple[int, int]:
    """Read the two integer operands given on the adder client's command line.

    As with the command-line client, each argument may carry trailing
    non-digit text after a leading integer; further arguments are ignored.
    """
    if len(argv) < 2:
        raise ValueError("Usage: adder_client_node <a> <b>")
    return _leading_int(argv[0]), _leading_int(argv[1])


def parse_int_pair(line: str) -> tuple[int, int]:
    """Read two whitespace-separated integers typed at the interactive client."""
    tokens = line.split()
    if len(tokens) < 2:
        raise ValueError("Enter two integers (a b)")
    try:
        first, second = int(tokens[0]), int(tokens[1])
    except ValueError as exc:
        raise ValueError(f"Enter two integers (a b), got {line!r}") from exc
    return _check_int_range(first, tokens[0]), _check_int_range(second, tokens[1])


def bridge_operands(data: Sequence[int]) -> tuple[float, float]:
    """Turn an incoming integer array into the multiply request's operands."""
    if len(data) != 2:
        raise ValueError(f"Expected 2 numbers, got {len(data)}")
    return float(data[0]), float(data[1])