"""Widening conversion between IEEE-754 binary formats."""

from __future__ import annotations

from .format import F32, F64, FloatFormat, leading_zeros


def extend(src: FloatFormat, dst: FloatFormat, a: int) -> int:
    """Convert the ``src`` bit pattern ``a`` to the wider format ``dst``.

    The conversion is exact; NaNs become quiet NaNs carrying the payload.
    """
    if dst.bits <= src.bits or dst.significand_bits < src.significand_bits:
        raise ValueError(f"{dst.name} is not wider than {src.name}")
    if not 0 <= a <= src.int_mask:
        raise ValueError(f"{a:#x} is not a {src.bits}-bit pattern")

    src_min_normal = src.implicit_bit
    src_infinity = src.exponent_mask
    src_abs_mask = src.sign_mask - 1
    src_qnan = src.significand_mask
    src_nan_code = src_qnan - 1

    dst_sb = dst.significand_bits
    sign_bits_delta = dst_sb - src.significand_bits
    exp_bias_delta = dst.exponent_bias - src.exponent_bias

    a_abs = a & src_abs_mask

    if ((a_abs - src_min_normal) & src.int_mask) < src_infinity - src_min_normal:
        # Normal: move the fields into place and rebias the exponent.
        abs_result = (a_abs << sign_bits_delta) + (exp_bias_delta << dst_sb)
    elif a_abs >= src_infinity:
        # Infinity or NaN: start from infinity, then set quiet bit and payload.
        abs_result = dst.exponent_max << dst_sb
        abs_result |= (a_abs & src_qnan) << sign_bits_delta
        abs_result |= (a_abs & src_nan_code) << sign_bits_delta
    elif a_abs != 0:
        # Subnormal: renormalize and drop the leading bit.
        scale = leading_zeros(a_abs, src.bits) - leading_zeros(src_min_normal, src.bits)
        abs_result = a_abs << (sign_bits_delta + scale)
        abs_result = (abs_result ^ dst.implicit_bit) | (
            (exp_bias_delta - scale + 1) << dst_sb
        )
    else:
        abs_result = 0

    sign_result = (a & src.sign_mask) << (dst.bits - src.bits)
    return (abs_result | sign_result) & dst.int_mask


def extendsfdf2(a: float) -> float:
    """Single precision to double precision."""
    return F64.from_bits(extend(F32, F64, F32.to_bits(a)))