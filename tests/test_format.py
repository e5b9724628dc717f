import math

import pytest
from hypothesis import given
from hypothesis import strategies as st

from softfloat.format import F32, F64, leading_zeros


def test_pinned_bit_patterns():
    assert F32.to_bits(1.0) == 0x3F800000
    assert F64.to_bits(-2.0) == 0xC000000000000000
    assert F32.exponent_bias == 127


def test_exponent_of_one_is_bias():
    for fmt in (F32, F64):
        bits = fmt.to_bits(1.0)
        assert fmt.exponent(bits) == fmt.exponent_bias
        assert fmt.fraction(bits) == 0
        assert fmt.implicit_fraction(bits) == fmt.implicit_bit


@pytest.mark.parametrize("fmt", [F32, F64])
def test_masks_partition_the_word(fmt):
    all_ones_exponent = fmt.exponent_mask >> fmt.significand_bits
    assert fmt.from_parts(True, all_ones_exponent, fmt.significand_mask) == fmt.int_mask
    assert fmt.from_parts(False, 0, fmt.significand_mask) == fmt.significand_mask
    assert fmt.from_parts(False, all_ones_exponent, 0) == fmt.exponent_mask
    assert fmt.from_parts(True, 0, 0) == fmt.sign_mask
    assert fmt.fraction(fmt.sign_mask | fmt.exponent_mask) == 0
    assert fmt.exponent(fmt.sign_mask | fmt.significand_mask) == 0


@given(st.floats(allow_nan=False))
def test_f64_round_trip(x):
    bits = F64.to_bits(x)
    assert F64.to_bits(F64.from_bits(bits)) == bits
    assert F64.from_bits(bits) == x


@given(st.floats(width=32, allow_nan=False))
def test_f32_round_trip(x):
    assert F32.from_bits(F32.to_bits(x)) == x


@given(st.integers(min_value=0, max_value=F32.int_mask))
def test_from_parts_reassembles(bits):
    rebuilt = F32.from_parts(F32.sign(bits), F32.exponent(bits), F32.fraction(bits))
    assert rebuilt == bits


@given(st.integers(min_value=0, max_value=F64.int_mask))
def test_signed_repr_wraps(bits):
    signed = F64.signed_repr(bits)
    assert signed & F64.int_mask == bits
    assert (signed < 0) == F64.sign(bits)


def test_sign_of_negative_zero():
    assert F64.sign(F64.to_bits(-0.0)) is True
    assert F64.sign(F64.to_bits(0.0)) is False


def test_eq_repr_treats_nans_as_equal():
    quiet = F32.exponent_mask | (F32.implicit_bit >> 1)
    signalling = F32.exponent_mask | 1
    assert F32.eq_repr(quiet, signalling)
    assert not F32.eq_repr(F32.to_bits(0.0), F32.to_bits(-0.0))
    assert F32.eq_repr(F32.to_bits(1.5), F32.to_bits(1.5))


def test_is_subnormal():
    assert F64.is_subnormal(1)
    assert F64.is_subnormal(0)
    assert not F64.is_subnormal(F64.to_bits(1.0))
    assert F64.from_bits(1) == 5e-324


def test_normalize_smallest():
    exponent, significand = F32.normalize(1)
    assert significand == F32.implicit_bit
    assert exponent == 1 - F32.significand_bits


@given(st.integers(min_value=1, max_value=F64.implicit_bit - 1))
def test_normalize_invariant(s):
    exponent, significand = F64.normalize(s)
    assert F64.implicit_bit <= significand < 2 * F64.implicit_bit
    assert significand >> (1 - exponent) == s


def test_leading_zeros():
    assert leading_zeros(0, 32) == 32
    assert leading_zeros(1 << 31, 32) == 0
    assert leading_zeros(1, 64) == 63


def test_leading_zeros_rejects_wide_value():
    with pytest.raises(ValueError):
        leading_zeros(1 << 32, 32)


def test_from_bits_rejects_out_of_range():
    with pytest.raises(ValueError):
        F32.from_bits(1 << 32)
    with pytest.raises(ValueError):
        F64.from_bits(-1)


def test_to_bits_f32_overflow():
    with pytest.raises(OverflowError):
        F32.to_bits(1e300)


def test_infinity_bits():
    assert F32.to_bits(math.inf) == F32.exponent_mask
    assert F64.to_bits(-math.inf) == F64.exponent_mask | F64.sign_mask