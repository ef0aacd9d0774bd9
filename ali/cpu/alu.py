"""
ALI — Accumulator arithmetic

Each function returns (result, flag_bits); the caller applies the flag
word with Registers.set_ZV().

Overflow policy: the result is the exact mathematical value. V only
records that it left the signed 32-bit range; nothing is clamped or
wrapped, so a later SUB can bring the accumulator back into range.
"""

from ..config import INT32_MAX, INT32_MIN
from .regs import CC_Z, CC_V


def flags_for(result: int) -> int:
    """Z/V flag word for an arithmetic result."""
    flags = 0
    if result == 0:
        flags |= CC_Z
    if not in_int32(result):
        flags |= CC_V
    return flags


def add(a: int, b: int) -> tuple:
    """A + B. Sets Z, V."""
    result = a + b
    return (result, flags_for(result))


def sub(a: int, b: int) -> tuple:
    """A - B. Sets Z, V."""
    result = a - b
    return (result, flags_for(result))


def in_int32(value: int) -> bool:
    return INT32_MIN <= value <= INT32_MAX
