"""Soft-float integer powers by repeated squaring."""

from __future__ import annotations

from .div import div32, div64
from .format import F32, F64, FloatFormat
from .mul import mul

_I32_MIN = -(1 << 31)
_I32_MAX = (1 << 31) - 1


def _divide(fmt: FloatFormat, a: int, b: int) -> int:
    if fmt == F32:
        return div32(a, b)
    if fmt == F64:
        return div64(a, b)
    raise ValueError(f"no division for {fmt.name}")


def powi(fmt: FloatFormat, a: int, b: int) -> int:
    """Return the bit pattern of ``a`` raised to the 32-bit signed integer ``b``.

    A negative exponent takes the reciprocal of the positive power.
    """
    if not _I32_MIN <= b <= _I32_MAX:
        raise ValueError(f"{b} does not fit in 32 signed bits")
    if not 0 <= a <= fmt.int_mask:
        raise ValueError(f"{a:#x} is not a {fmt.bits}-bit pattern")

    one = fmt.exponent_bias << fmt.significand_bits
    base = a
    result = one
    remaining = abs(b)
    while True:
        if remaining & 1:
            result = mul(fmt, result, base)
        remaining >>= 1
        if remaining == 0:
            break
        base = mul(fmt, base, base)

    if b < 0:
        return _divide(fmt, one, result)
    return result


def powisf2(a: float, b: int) -> float:
    """Single-precision ``a`` to an integer power."""
    return F32.from_bits(powi(F32, F32.to_bits(a), b))


def powidf2(a: float, b: int) -> float:
    """Double-precision ``a`` to an integer power."""
    return F64.from_bits(powi(F64, F64.to_bits(a), b))