"""Narrowing conversion between IEEE-754 binary formats."""

from __future__ import annotations

from .format import F32, F64, FloatFormat


def truncate(src: FloatFormat, dst: FloatFormat, a: int) -> int:
    """Convert the ``src`` bit pattern ``a`` to the narrower format ``dst``.

    Rounds to nearest, ties to even; overflow gives infinity and
    underflow gives a subnormal or zero.
    """
    if dst.bits >= src.bits or dst.significand_bits >= src.significand_bits:
        raise ValueError(f"{dst.name} is not narrower than {src.name}")
    if not 0 <= a <= src.int_mask:
        raise ValueError(f"{a:#x} is not a {src.bits}-bit pattern")

    src_sb = src.significand_bits
    dst_sb = dst.significand_bits
    src_mask = src.int_mask
    dst_mask = dst.int_mask
    src_exp_bias = src.exponent_bias
    dst_exp_bias = dst.exponent_bias
    dst_inf_exp = dst.exponent_max

    sign_bits_delta = src_sb - dst_sb
    src_abs_mask = src.sign_mask - 1
    round_mask = (1 << sign_bits_delta) - 1
    halfway = 1 << (sign_bits_delta - 1)
    src_qnan = 1 << (src_sb - 1)
    src_nan_code = src_qnan - 1

    underflow = (src_exp_bias + 1 - dst_exp_bias) << src_sb
    overflow = (src_exp_bias + dst_inf_exp - dst_exp_bias) << src_sb

    dst_qnan = 1 << (dst_sb - 1)
    dst_nan_code = dst_qnan - 1

    a_abs = a & src_abs_mask
    sign = a & src.sign_mask

    if ((a_abs - underflow) & src_mask) < ((a_abs - overflow) & src_mask):
        # Normal in the destination: shift with rounding and rebias.
        abs_result = (a_abs >> sign_bits_delta) & dst_mask
        rebias = ((src_exp_bias - dst_exp_bias) << dst_sb) & dst_mask
        abs_result = (abs_result - rebias) & dst_mask
        round_bits = a_abs & round_mask
        if round_bits > halfway:
            abs_result += 1
        elif round_bits == halfway:
            abs_result += abs_result & 1
    elif a_abs > src.exponent_mask:
        # NaN: quiet it and keep what fits of the payload.
        abs_result = (dst_inf_exp << dst_sb) | dst_qnan
        abs_result |= dst_nan_code & ((a_abs & src_nan_code) >> sign_bits_delta)
    elif a_abs >= overflow:
        abs_result = dst_inf_exp << dst_sb
    else:
        # Underflow or exact zero: denormalize with a sticky bit, then round.
        a_exp = a_abs >> src_sb
        shift = src_exp_bias - dst_exp_bias - a_exp + 1
        significand = (a & src.significand_mask) | src.implicit_bit
        if shift > src_sb:
            abs_result = 0
        else:
            sticky = int(((significand << (src.bits - shift)) & src_mask) != 0)
            denormalized = (significand >> shift) | sticky
            abs_result = (denormalized >> sign_bits_delta) & dst_mask
            round_bits = denormalized & round_mask
            if round_bits > halfway:
                abs_result += 1
            elif round_bits == halfway:
                abs_result += abs_result & 1

    return (abs_result | (sign >> (src.bits - dst.bits))) & dst_mask


def truncdfsf2(a: float) -> float:
    """Double precision to single precision."""
    return F32.from_bits(truncate(F64, F32, F64.to_bits(a)))