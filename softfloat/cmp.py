"""Soft-float comparisons and their C and ARM EABI return conventions."""

from __future__ import annotations

import enum

from .format import F32, F64, FloatFormat


class Comparison(enum.Enum):
    """Outcome of comparing two floats."""

    LESS = "less"
    EQUAL = "equal"
    GREATER = "greater"
    UNORDERED = "unordered"

    def to_le_abi(self) -> int:
        """Encoding used by the ``le``/``lt``/``eq``/``ne`` routines: NaN maps to 1."""
        return _LE_ABI[self]

    def to_ge_abi(self) -> int:
        """Encoding used by the ``ge``/``gt`` routines: NaN maps to -1."""
        return _GE_ABI[self]


_LE_ABI = {
    Comparison.LESS: -1,
    Comparison.EQUAL: 0,
    Comparison.GREATER: 1,
    Comparison.UNORDERED: 1,
}
_GE_ABI = {
    Comparison.LESS: -1,
    Comparison.EQUAL: 0,
    Comparison.GREATER: 1,
    Comparison.UNORDERED: -1,
}


def _ordering(x: int, y: int) -> Comparison:
    if x < y:
        return Comparison.LESS
    if x == y:
        return Comparison.EQUAL
    return Comparison.GREATER


def unordered(fmt: FloatFormat, a: int, b: int) -> bool:
    """True when either bit pattern is a NaN."""
    abs_mask = fmt.sign_mask - 1
    inf_rep = fmt.exponent_mask
    return (a & abs_mask) > inf_rep or (b & abs_mask) > inf_rep


def compare(fmt: FloatFormat, a: int, b: int) -> Comparison:
    """Compare two bit patterns of ``fmt`` as floating-point values."""
    abs_mask = fmt.sign_mask - 1
    a_abs = a & abs_mask
    b_abs = b & abs_mask

    if unordered(fmt, a, b):
        return Comparison.UNORDERED
    if a_abs | b_abs == 0:
        return Comparison.EQUAL

    a_srep = fmt.signed_repr(a)
    b_srep = fmt.signed_repr(b)

    # With at least one non-negative operand, integer order matches float order;
    # with both negative it is reversed.
    if a_srep & b_srep >= 0:
        return _ordering(a_srep, b_srep)
    return _ordering(b_srep, a_srep)


def _cmp32(a: float, b: float) -> Comparison:
    return compare(F32, F32.to_bits(a), F32.to_bits(b))


def _cmp64(a: float, b: float) -> Comparison:
    return compare(F64, F64.to_bits(a), F64.to_bits(b))


def lesf2(a: float, b: float) -> int:
    return _cmp32(a, b).to_le_abi()


def gesf2(a: float, b: float) -> int:
    return _cmp32(a, b).to_ge_abi()


def unordsf2(a: float, b: float) -> int:
    return int(unordered(F32, F32.to_bits(a), F32.to_bits(b)))


def eqsf2(a: float, b: float) -> int:
    return _cmp32(a, b).to_le_abi()


def ltsf2(a: float, b: float) -> int:
    return _cmp32(a, b).to_le_abi()


def nesf2(a: float, b: float) -> int:
    return _cmp32(a, b).to_le_abi()


def gtsf2(a: float, b: float) -> int:
    return _cmp32(a, b).to_ge_abi()


def ledf2(a: float, b: float) -> int:
    return _cmp64(a, b).to_le_abi()


def gedf2(a: float, b: float) -> int:
    return _cmp64(a, b).to_ge_abi()


def unorddf2(a: float, b: float) -> int:
    return int(unordered(F64, F64.to_bits(a), F64.to_bits(b)))


def eqdf2(a: float, b: float) -> int:
    return _cmp64(a, b).to_le_abi()


def ltdf2(a: float, b: float) -> int:
    return _cmp64(a, b).to_le_abi()


def nedf2(a: float, b: float) -> int:
    return _cmp64(a, b).to_le_abi()


def gtdf2(a: float, b: float) -> int:
    return _cmp64(a, b).to_ge_abi()


def aeabi_fcmple(a: float, b: float) -> int:
    return int(lesf2(a, b) <= 0)


def aeabi_fcmpge(a: float, b: float) -> int:
    return int(gesf2(a, b) >= 0)


def aeabi_fcmpeq(a: float, b: float) -> int:
    return int(eqsf2(a, b) == 0)


def aeabi_fcmplt(a: float, b: float) -> int:
    return int(ltsf2(a, b) < 0)


def aeabi_fcmpgt(a: float, b: float) -> int:
    return int(gtsf2(a, b) > 0)


def aeabi_dcmple(a: float, b: float) -> int:
    return int(ledf2(a, b) <= 0)


def aeabi_dcmpge(a: float, b: float) -> int:
    return int(gedf2(a, b) >= 0)


def aeabi_dcmpeq(a: float, b: float) -> int:
    return int(eqdf2(a, b) == 0)


def aeabi_dcmplt(a: float, b: float) -> int:
    return int(ltdf2(a, b) < 0)


def aeabi_dcmpgt(a: float, b: float) -> int:
    return int(gtdf2(a, b) > 0)