import math

import pytest
from hypothesis import given
from hypothesis import strategies as st

from softfloat.extend import extend, extendsfdf2
from softfloat.format import F32, F64

NON_NAN_F32_BITS = st.integers(min_value=0, max_value=2**32 - 1).filter(
    lambda b: (b & (F32.sign_mask - 1)) <= F32.exponent_mask
)


@given(NON_NAN_F32_BITS)
def test_extend_matches_native_widening(bits):
    assert extend(F32, F64, bits) == F64.to_bits(F32.from_bits(bits))


@given(st.floats(width=32, allow_nan=False))
def test_extendsfdf2_is_exact(x):
    result = extendsfdf2(x)
    assert result == x
    assert math.copysign(1.0, result) == math.copysign(1.0, x)


def test_signed_zeros():
    assert F64.to_bits(extendsfdf2(0.0)) == F64.to_bits(0.0)
    assert F64.to_bits(extendsfdf2(-0.0)) == F64.to_bits(-0.0)


def test_infinities():
    assert extendsfdf2(math.inf) == math.inf
    assert extendsfdf2(-math.inf) == -math.inf


def test_smallest_subnormal():
    tiny = F32.from_bits(1)
    assert extendsfdf2(tiny) == tiny
    assert not F64.is_subnormal(F64.to_bits(extendsfdf2(tiny)))


def test_nan_stays_quiet_nan():
    result = extend(F32, F64, F32.exponent_mask | (F32.implicit_bit >> 1))
    assert result == 0x7FF8000000000000


def test_signalling_nan_stays_nan():
    result = extend(F32, F64, F32.exponent_mask | 1)
    assert result & F64.exponent_mask == F64.exponent_mask
    assert result & F64.significand_mask > 0
    assert result & F64.sign_mask == 0


def test_negative_nan_keeps_sign():
    result = extend(F32, F64, F32.sign_mask | F32.exponent_mask | 1)
    assert F64.sign(result)


def test_rejects_narrowing_formats():
    with pytest.raises(ValueError):
        extend(F64, F32, 0)


def test_rejects_out_of_range_pattern():
    with pytest.raises(ValueError):
        extend(F32, F64, 2**32)
    with pytest.raises(ValueError):
        extend(F32, F64, -1)