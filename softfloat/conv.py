"""Conversions between integers and soft floats.

Integer-to-float conversions round to nearest, ties to even.
Float-to-integer conversions truncate toward zero and saturate.
NaN converts to zero.
"""

from __future__ import annotations

from .format import F32, F64, FloatFormat, leading_zeros

_M32 = (1 << 32) - 1
_M64 = (1 << 64) - 1
_M128 = (1 << 128) - 1


def _check_unsigned(value: int, width: int) -> int:
    if not 0 <= value < (1 << width):
        raise ValueError(f"{value} does not fit in {width} unsigned bits")
    return value


def _check_signed(value: int, width: int) -> int:
    limit = 1 << (width - 1)
    if not -limit <= value < limit:
        raise ValueError(f"{value} does not fit in {width} signed bits")
    return value


def _round_up(a: int, b: int, top: int) -> int:
    """Return 1 when the discarded bits ``b`` call for rounding ``a`` up (ties to even)."""
    return (b - ((b >> top) & ~a & 1)) >> top


def u32_to_f32_bits(i: int) -> int:
    """Bit pattern of the binary32 nearest to the unsigned 32-bit ``i``."""
    _check_unsigned(i, 32)
    if i == 0:
        return 0
    n = leading_zeros(i, 32)
    y = (i << n) & _M32
    a = y >> 8
    b = (y << 24) & _M32
    m = a + _round_up(a, b, 31)
    e = 157 - n
    # Addition, not OR, so a carry out of the mantissa bumps the exponent.
    return ((e << 23) + m) & _M32


def u32_to_f64_bits(i: int) -> int:
    """Bit pattern of the binary64 equal to the unsigned 32-bit ``i``."""
    _check_unsigned(i, 32)
    if i == 0:
        return 0
    n = leading_zeros(i, 32)
    m = i << (21 + n)
    e = 1053 - n
    return ((e << 52) + m) & _M64


def u64_to_f32_bits(i: int) -> int:
    """Bit pattern of the binary32 nearest to the unsigned 64-bit ``i``."""
    _check_unsigned(i, 64)
    n = leading_zeros(i, 64)
    y = (i << (n & 63)) & _M64
    a = y >> 40
    b = ((y >> 8) | (y & 0xFFFF)) & _M32
    m = a + _round_up(a, b, 31)
    e = 0 if i == 0 else 189 - n
    return ((e << 23) + m) & _M32


def u64_to_f64_bits(i: int) -> int:
    """Bit pattern of the binary64 nearest to the unsigned 64-bit ``i``."""
    _check_unsigned(i, 64)
    if i == 0:
        return 0
    n = leading_zeros(i, 64)
    y = (i << n) & _M64
    a = y >> 11
    b = (y << 53) & _M64
    m = a + _round_up(a, b, 63)
    e = 1085 - n
    return ((e << 52) + m) & _M64


def u128_to_f32_bits(i: int) -> int:
    """Bit pattern of the binary32 nearest to the unsigned 128-bit ``i``."""
    _check_unsigned(i, 128)
    n = leading_zeros(i, 128)
    y = (i << (n & 127)) & _M128
    a = y >> 104
    b = ((y >> 72) & _M32) | int((((y << 32) & _M128) >> 32) != 0)
    m = a + _round_up(a, b, 31)
    e = 0 if i == 0 else 253 - n
    return ((e << 23) + m) & _M32


def u128_to_f64_bits(i: int) -> int:
    """Bit pattern of the binary64 nearest to the unsigned 128-bit ``i``."""
    _check_unsigned(i, 128)
    n = leading_zeros(i, 128)
    y = (i << (n & 127)) & _M128
    a = y >> 75
    b = ((y >> 11) | (y & 0xFFFF_FFFF)) & _M64
    m = a + _round_up(a, b, 63)
    e = 0 if i == 0 else 1149 - n
    return ((e << 52) + m) & _M64


def floatunsisf(i: int) -> float:
    """Unsigned 32-bit integer to single precision."""
    return F32.from_bits(u32_to_f32_bits(i))


def floatunsidf(i: int) -> float:
    """Unsigned 32-bit integer to double precision."""
    return F64.from_bits(u32_to_f64_bits(i))


def floatundisf(i: int) -> float:
    """Unsigned 64-bit integer to single precision."""
    return F32.from_bits(u64_to_f32_bits(i))


def floatundidf(i: int) -> float:
    """Unsigned 64-bit integer to double precision."""
    return F64.from_bits(u64_to_f64_bits(i))


def floatuntisf(i: int) -> float:
    """Unsigned 128-bit integer to single precision."""
    return F32.from_bits(u128_to_f32_bits(i))


def floatuntidf(i: int) -> float:
    """Unsigned 128-bit integer to double precision."""
    return F64.from_bits(u128_to_f64_bits(i))


def _signed(i: int, width: int, to_bits, fmt: FloatFormat) -> float:
    _check_signed(i, width)
    sign = fmt.sign_mask if i < 0 else 0
    return fmt.from_bits(to_bits(abs(i)) | sign)


def floatsisf(i: int) -> float:
    """Signed 32-bit integer to single precision."""
    return _signed(i, 32, u32_to_f32_bits, F32)


def floatsidf(i: int) -> float:
    """Signed 32-bit integer to double precision."""
    return _signed(i, 32, u32_to_f64_bits, F64)


def floatdisf(i: int) -> float:
    """Signed 64-bit integer to single precision."""
    return _signed(i, 64, u64_to_f32_bits, F32)


def floatdidf(i: int) -> float:
    """Signed 64-bit integer to double precision."""
    return _signed(i, 64, u64_to_f64_bits, F64)


def floattisf(i: int) -> float:
    """Signed 128-bit integer to single precision."""
    return _signed(i, 128, u128_to_f32_bits, F32)


def floattidf(i: int) -> float:
    """Signed 128-bit integer to double precision."""
    return _signed(i, 128, u128_to_f64_bits, F64)


def _mantissa(fmt: FloatFormat, fbits: int, width: int) -> int:
    """Significand with its implicit bit, left-aligned in a ``width``-bit word."""
    shift = width - 1 - fmt.significand_bits
    frac = fbits & fmt.significand_mask
    frac = frac << shift if shift >= 0 else frac >> -shift
    return (1 << (width - 1)) | frac


def _float_to_unsigned(fmt: FloatFormat, f: float, width: int) -> int:
    fbits = fmt.to_bits(f)
    sb = fmt.significand_bits
    bias = fmt.exponent_bias
    if fbits < bias << sb:  # >= 0, < 1
        return 0
    if fbits < (bias + width) << sb:  # >= 1, < max
        shift = bias + width - 1 - (fbits >> sb)
        return _mantissa(fmt, fbits, width) >> shift
    if fbits <= fmt.exponent_mask:  # >= max, including infinity
        return (1 << width) - 1
    return 0  # negative or NaN


def _float_to_signed(fmt: FloatFormat, f: float, width: int) -> int:
    raw = fmt.to_bits(f)
    negative = bool(raw & fmt.sign_mask)
    fbits = raw & (fmt.sign_mask - 1)
    sb = fmt.significand_bits
    bias = fmt.exponent_bias
    if fbits < bias << sb:  # |f| < 1
        return 0
    if fbits < (bias + width - 1) << sb:
        shift = bias + width - 1 - (fbits >> sb)
        magnitude = _mantissa(fmt, fbits, width) >> shift
        return -magnitude if negative else magnitude
    if fbits <= fmt.exponent_mask:  # out of range, including infinity
        return -(1 << (width - 1)) if negative else (1 << (width - 1)) - 1
    return 0  # NaN


def fixunssfsi(f: float) -> int:
    """Single precision to unsigned 32-bit integer."""
    return _float_to_unsigned(F32, f, 32)


def fixunssfdi(f: float) -> int:
    """Single precision to unsigned 64-bit integer."""
    return _float_to_unsigned(F32, f, 64)


def fixunssfti(f: float) -> int:
    """Single precision to unsigned 128-bit integer."""
    return _float_to_unsigned(F32, f, 128)


def fixunsdfsi(f: float) -> int:
    """Double precision to unsigned 32-bit integer."""
    return _float_to_unsigned(F64, f, 32)


def fixunsdfdi(f: float) -> int:
    """Double precision to unsigned 64-bit integer."""
    return _float_to_unsigned(F64, f, 64)


def fixunsdfti(f: float) -> int:
    """Double precision to unsigned 128-bit integer."""
    return _float_to_unsigned(F64, f, 128)


def fixsfsi(f: float) -> int:
    """Single precision to signed 32-bit integer."""
    return _float_to_signed(F32, f, 32)


def fixsfdi(f: float) -> int:
    """Single precision to signed 64-bit integer."""
    return _float_to_signed(F32, f, 64)


def fixsfti(f: float) -> int:
    """Single precision to signed 128-bit integer."""
    return _float_to_signed(F32, f, 128)


def fixdfsi(f: float) -> int:
    """Double precision to signed 32-bit integer."""
    return _float_to_signed(F64, f, 32)


def fixdfdi(f: float) -> int:
    """Double precision to signed 64-bit integer."""
    return _float_to_signed(F64, f, 64)


def fixdfti(f: float) -> int:
    """Double precision to signed 128-bit integer."""
    return _float_to_signed(F64, f, 128)