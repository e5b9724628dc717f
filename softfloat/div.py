"""Soft-float division with round-to-nearest-even for normal results.

The quotient comes from a Newton-Raphson reciprocal estimate followed by a
residual-based rounding step. Results that would be subnormal are flushed
to a zero of the right sign.
"""

from __future__ import annotations

from dataclasses import dataclass

from .format import F32, F64, FloatFormat

_M32 = (1 << 32) - 1
_M64 = (1 << 64) - 1


@dataclass
class _Operands:
    a_significand: int
    b_significand: int
    scale: int


def _check(fmt: FloatFormat, bits: int) -> int:
    if not 0 <= bits <= fmt.int_mask:
        raise ValueError(f"{bits:#x} is not a {fmt.bits}-bit pattern")
    return bits


def _negate_u32(value: int) -> int:
    return (-value) & _M32


def _negate_u64(value: int) -> int:
    return (-value) & _M64


def _special_cases(fmt: FloatFormat, a: int, b: int) -> int | _Operands:
    """Handle zero, subnormal, infinite and NaN operands.

    Returns either the final bit pattern or the significands (renormalized if
    subnormal) together with the exponent adjustment they need.
    """
    significand_bits = fmt.significand_bits
    max_exponent = fmt.exponent_max
    implicit_bit = fmt.implicit_bit
    abs_mask = fmt.sign_mask - 1
    inf_rep = fmt.exponent_mask
    quiet_bit = implicit_bit >> 1
    qnan_rep = inf_rep | quiet_bit
    mask = fmt.int_mask

    a_exponent = (a >> significand_bits) & max_exponent
    b_exponent = (b >> significand_bits) & max_exponent
    quotient_sign = (a ^ b) & fmt.sign_mask

    a_significand = a & fmt.significand_mask
    b_significand = b & fmt.significand_mask
    scale = 0

    if (
        ((a_exponent - 1) & mask) >= max_exponent - 1
        or ((b_exponent - 1) & mask) >= max_exponent - 1
    ):
        a_abs = a & abs_mask
        b_abs = b & abs_mask

        if a_abs > inf_rep:
            return a | quiet_bit
        if b_abs > inf_rep:
            return b | quiet_bit

        if a_abs == inf_rep:
            if b_abs == inf_rep:
                return qnan_rep
            return a_abs | quotient_sign

        if b_abs == inf_rep:
            return quotient_sign

        if a_abs == 0:
            if b_abs == 0:
                return qnan_rep
            return quotient_sign

        if b_abs == 0:
            return inf_rep | quotient_sign

        if a_abs < implicit_bit:
            exponent, a_significand = fmt.normalize(a_significand)
            scale += exponent
        if b_abs < implicit_bit:
            exponent, b_significand = fmt.normalize(b_significand)
            scale -= exponent

    return _Operands(a_significand, b_significand, scale)


def _refine_reciprocal32(q31b: int) -> int:
    """Three Newton-Raphson steps on a Q32 reciprocal estimate of ``q31b``."""
    reciprocal = (0x7504F333 - q31b) & _M32
    for _ in range(3):
        correction = _negate_u32((reciprocal * q31b) >> 32)
        reciprocal = ((reciprocal * correction) >> 31) & _M32
    return reciprocal


def _finish(
    fmt: FloatFormat,
    a: int,
    b: int,
    operands: _Operands,
    reciprocal: int,
    pre_shift: int,
) -> int:
    """Form the quotient from the reciprocal, round it and assemble the result."""
    mask = fmt.int_mask
    bits = fmt.bits
    significand_bits = fmt.significand_bits
    implicit_bit = fmt.implicit_bit
    max_exponent = fmt.exponent_max
    quotient_sign = (a ^ b) & fmt.sign_mask

    a_significand = operands.a_significand | implicit_bit
    b_significand = operands.b_significand | implicit_bit
    a_exponent = (a >> significand_bits) & max_exponent
    b_exponent = (b >> significand_bits) & max_exponent
    quotient_exponent = a_exponent - b_exponent + operands.scale

    quotient = (((a_significand << pre_shift) & mask) * reciprocal) >> bits

    # The quotient lies in [0.5, 2); bring it to [1, 2) and compute the
    # residual r = a - q*b used to decide rounding.
    if quotient < (implicit_bit << 1):
        quotient_exponent -= 1
        residual = (
            ((a_significand << (significand_bits + 1)) & mask)
            - ((quotient * b_significand) & mask)
        ) & mask
    else:
        quotient >>= 1
        residual = (
            ((a_significand << significand_bits) & mask)
            - ((quotient * b_significand) & mask)
        ) & mask

    written_exponent = quotient_exponent + fmt.exponent_bias

    if written_exponent >= max_exponent:
        return fmt.exponent_mask | quotient_sign
    if written_exponent < 1:
        return quotient_sign

    round_up = int(((residual << 1) & mask) > b_significand)
    abs_result = quotient & fmt.significand_mask
    abs_result |= written_exponent << significand_bits
    abs_result = (abs_result + round_up) & mask
    return abs_result | quotient_sign


def div32(a: int, b: int) -> int:
    """Return the binary32 bit pattern of ``a / b`` for binary32 patterns."""
    _check(F32, a)
    _check(F32, b)
    operands = _special_cases(F32, a, b)
    if isinstance(operands, int):
        return operands

    b_significand = operands.b_significand | F32.implicit_bit
    q31b = (b_significand << 8) & _M32
    reciprocal = (_refine_reciprocal32(q31b) - 2) & _M32
    return _finish(F32, a, b, operands, reciprocal, 1)


def div64(a: int, b: int) -> int:
    """Return the binary64 bit pattern of ``a / b`` for binary64 patterns."""
    _check(F64, a)
    _check(F64, b)
    operands = _special_cases(F64, a, b)
    if isinstance(operands, int):
        return operands

    b_significand = operands.b_significand | F64.implicit_bit
    q31b = (b_significand >> 21) & _M32
    # Step down by one in case the estimate overflowed to zero.
    recip32 = (_refine_reciprocal32(q31b) - 1) & _M32

    # One more iteration at double width for 56 bits of accuracy.
    q63blo = (b_significand << 11) & _M32
    correction = _negate_u64(
        (recip32 * q31b + ((recip32 * q63blo) >> 32)) & _M64
    )
    c_hi = correction >> 32
    c_lo = correction & _M32
    reciprocal = (recip32 * c_hi + ((recip32 * c_lo) >> 32)) & _M64
    reciprocal = (reciprocal - 2) & _M64
    return _finish(F64, a, b, operands, reciprocal, 2)


def divsf3(a: float, b: float) -> float:
    """Single-precision division."""
    return F32.from_bits(div32(F32.to_bits(a), F32.to_bits(b)))


def divdf3(a: float, b: float) -> float:
    """Double-precision division."""
    return F64.from_bits(div64(F64.to_bits(a), F64.to_bits(b)))