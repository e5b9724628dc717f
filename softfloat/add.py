"""Soft-float addition and subtraction with round-to-nearest-even."""

from __future__ import annotations

from .format import F32, F64, FloatFormat, leading_zeros


def add(fmt: FloatFormat, a: int, b: int) -> int:
    """Return the bit pattern of ``a + b``, where both are bit patterns in ``fmt``."""
    bits = fmt.bits
    mask = fmt.int_mask
    significand_bits = fmt.significand_bits
    max_exponent = fmt.exponent_max
    implicit_bit = fmt.implicit_bit
    significand_mask = fmt.significand_mask
    sign_bit = fmt.sign_mask
    abs_mask = sign_bit - 1
    inf_rep = fmt.exponent_mask
    quiet_bit = implicit_bit >> 1
    qnan_rep = inf_rep | quiet_bit

    a_rep, b_rep = a, b
    a_abs = a_rep & abs_mask
    b_abs = b_rep & abs_mask

    # Zero, infinity or NaN among the operands.
    if ((a_abs - 1) & mask) >= inf_rep - 1 or ((b_abs - 1) & mask) >= inf_rep - 1:
        if a_abs > inf_rep:
            return a_abs | quiet_bit
        if b_abs > inf_rep:
            return b_abs | quiet_bit
        if a_abs == inf_rep:
            if (a ^ b) == sign_bit:
                return qnan_rep
            return a
        if b_abs == inf_rep:
            return b
        if a_abs == 0:
            return a & b if b_abs == 0 else b
        if b_abs == 0:
            return a

    if b_abs > a_abs:
        a_rep, b_rep = b_rep, a_rep

    a_exponent = (a_rep & inf_rep) >> significand_bits
    b_exponent = (b_rep & inf_rep) >> significand_bits
    a_significand = a_rep & significand_mask
    b_significand = b_rep & significand_mask

    if a_exponent == 0:
        a_exponent, a_significand = fmt.normalize(a_significand)
    if b_exponent == 0:
        b_exponent, b_significand = fmt.normalize(b_significand)

    result_sign = a_rep & sign_bit
    subtraction = ((a_rep ^ b_rep) & sign_bit) != 0

    # Three extra low bits: round, guard and sticky.
    a_significand = (a_significand | implicit_bit) << 3
    b_significand = (b_significand | implicit_bit) << 3

    align = a_exponent - b_exponent
    if align:
        if align < bits:
            sticky = int(((b_significand << (bits - align)) & mask) != 0)
            b_significand = (b_significand >> align) | sticky
        else:
            b_significand = 1

    if subtraction:
        a_significand = (a_significand - b_significand) & mask
        if a_significand == 0:
            return 0
        top = implicit_bit << 3
        if a_significand < top:
            shift = leading_zeros(a_significand, bits) - leading_zeros(top, bits)
            a_significand <<= shift
            a_exponent -= shift
    else:
        a_significand += b_significand
        if a_significand & (implicit_bit << 4):
            sticky = a_significand & 1
            a_significand = (a_significand >> 1) | sticky
            a_exponent += 1

    if a_exponent >= max_exponent:
        return inf_rep | result_sign

    if a_exponent <= 0:
        shift = 1 - a_exponent
        sticky = int(((a_significand << (bits - shift)) & mask) != 0)
        a_significand = (a_significand >> shift) | sticky
        a_exponent = 0

    round_guard_sticky = a_significand & 0x7

    result = (a_significand >> 3) & significand_mask
    result |= a_exponent << significand_bits
    result |= result_sign

    if round_guard_sticky > 0x4:
        result += 1
    if round_guard_sticky == 0x4:
        result += result & 1

    return result


def sub(fmt: FloatFormat, a: int, b: int) -> int:
    """Return the bit pattern of ``a - b``, where both are bit patterns in ``fmt``."""
    return add(fmt, a, b ^ fmt.sign_mask)


def addsf3(a: float, b: float) -> float:
    """Single-precision addition."""
    return F32.from_bits(add(F32, F32.to_bits(a), F32.to_bits(b)))


def adddf3(a: float, b: float) -> float:
    """Double-precision addition."""
    return F64.from_bits(add(F64, F64.to_bits(a), F64.to_bits(b)))


def subsf3(a: float, b: float) -> float:
    """Single-precision subtraction."""
    return F32.from_bits(sub(F32, F32.to_bits(a), F32.to_bits(b)))


def subdf3(a: float, b: float) -> float:
    """Double-precision subtraction."""
    return F64.from_bits(sub(F64, F64.to_bits(a), F64.to_bits(b)))