"""Soft-float multiplication with round-to-nearest-even."""

from __future__ import annotations

from .format import F32, F64, FloatFormat


def _check(fmt: FloatFormat, bits: int) -> int:
    if not 0 <= bits <= fmt.int_mask:
        raise ValueError(f"{bits:#x} is not a {fmt.bits}-bit pattern")
    return bits


def mul(fmt: FloatFormat, a: int, b: int) -> int:
    """Return the bit pattern of ``a * b``, where both are bit patterns in ``fmt``."""
    _check(fmt, a)
    _check(fmt, b)

    bits = fmt.bits
    mask = fmt.int_mask
    significand_bits = fmt.significand_bits
    max_exponent = fmt.exponent_max
    exponent_bias = fmt.exponent_bias
    implicit_bit = fmt.implicit_bit
    significand_mask = fmt.significand_mask
    sign_bit = fmt.sign_mask
    abs_mask = sign_bit - 1
    inf_rep = fmt.exponent_mask
    quiet_bit = implicit_bit >> 1
    qnan_rep = inf_rep | quiet_bit
    exponent_bits = fmt.exponent_bits

    a_exponent = (a >> significand_bits) & max_exponent
    b_exponent = (b >> significand_bits) & max_exponent
    product_sign = (a ^ b) & sign_bit

    a_significand = a & significand_mask
    b_significand = b & significand_mask
    scale = 0

    # Zero, subnormal, infinity or NaN among the operands.
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
            return a_abs | product_sign if b_abs != 0 else qnan_rep
        if b_abs == inf_rep:
            return b_abs | product_sign if a_abs != 0 else qnan_rep

        if a_abs == 0 or b_abs == 0:
            return product_sign

        if a_abs < implicit_bit:
            exponent, a_significand = fmt.normalize(a_significand)
            scale += exponent
        if b_abs < implicit_bit:
            exponent, b_significand = fmt.normalize(b_significand)
            scale += exponent

    a_significand |= implicit_bit
    b_significand |= implicit_bit

    # Left-align one factor so the product's leading bit lands at or just
    # below the implicit bit of the high word.
    product = a_significand * ((b_significand << exponent_bits) & mask)
    product_low = product & mask
    product_high = (product >> bits) & mask

    product_exponent = a_exponent + b_exponent + scale - exponent_bias

    if product_high & implicit_bit:
        product_exponent += 1
    else:
        product_high = ((product_high << 1) | (product_low >> (bits - 1))) & mask
        product_low = (product_low << 1) & mask

    if product_exponent >= max_exponent:
        return inf_rep | product_sign

    if product_exponent <= 0:
        # Denormal before rounding.
        shift = 1 - product_exponent
        if shift >= bits:
            return product_sign
        sticky = (product_low << (bits - shift)) & mask
        product_low = (
            ((product_high << (bits - shift)) & mask) | (product_low >> shift) | sticky
        )
        product_high >>= shift
    else:
        product_high &= significand_mask
        product_high |= product_exponent << significand_bits

    product_high |= product_sign

    if product_low > sign_bit:
        product_high += 1
    if product_low == sign_bit:
        product_high += product_high & 1

    return product_high & mask


def mulsf3(a: float, b: float) -> float:
    """Single-precision multiplication."""
    return F32.from_bits(mul(F32, F32.to_bits(a), F32.to_bits(b)))


def muldf3(a: float, b: float) -> float:
    """Double-precision multiplication."""
    return F64.from_bits(mul(F64, F64.to_bits(a), F64.to_bits(b)))