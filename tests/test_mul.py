import math
import sys

import pytest
from hypothesis import assume, given
from hypothesis import strategies as st

from softfloat.format import F32, F64
from softfloat.mul import mul, muldf3, mulsf3

finite64 = st.floats(allow_nan=False, allow_infinity=False)
finite32 = st.floats(width=32, allow_nan=False, allow_infinity=False)
nonnan64 = st.floats(allow_nan=False)


def test_two_times_three():
    assert muldf3(2.0, 3.0) == 6.0
    assert mulsf3(2.0, 3.0) == 6.0


@given(finite64, finite64)
def test_double_matches_native_for_normal_results(a, b):
    expected = a * b
    assume(
        expected == 0
        or math.isinf(expected)
        or abs(expected) >= 2 * sys.float_info.min
    )
    assume(not (expected == 0 and a != 0 and b != 0))
    assert F64.to_bits(muldf3(a, b)) == F64.to_bits(expected)


@given(finite32, finite32)
def test_single_matches_native_for_normal_results(a, b):
    exact = a * b  # exact in binary64
    assume(2.0**-125 <= abs(exact) < 2.0**127)
    assert F32.to_bits(mulsf3(a, b)) == F32.to_bits(exact)


@given(nonnan64, nonnan64)
def test_commutative(a, b):
    x, y = F64.to_bits(a), F64.to_bits(b)
    assert mul(F64, x, y) == mul(F64, y, x)


@given(nonnan64, nonnan64)
def test_negating_an_operand_flips_the_sign(a, b):
    x, y = F64.to_bits(a), F64.to_bits(b)
    assume(not math.isnan(muldf3(a, b)))
    assert mul(F64, x ^ F64.sign_mask, y) == mul(F64, x, y) ^ F64.sign_mask


def test_zero_signs():
    assert F64.to_bits(muldf3(0.0, -5.0)) == F64.to_bits(-0.0)
    assert F64.to_bits(muldf3(-0.0, -5.0)) == F64.to_bits(0.0)


def test_infinity_times_zero_is_quiet_nan():
    assert mul(F64, F64.to_bits(math.inf), 0) == F64.exponent_mask | (
        F64.implicit_bit >> 1
    )
    assert math.isnan(mulsf3(math.inf, 0.0))


def test_infinity_times_negative_is_negative_infinity():
    assert muldf3(math.inf, -2.0) == -math.inf
    assert mulsf3(-3.0, math.inf) == -math.inf


def test_nan_operand_is_quieted():
    signaling = F64.exponent_mask | 1
    result = mul(F64, signaling, F64.to_bits(1.0))
    assert result == signaling | (F64.implicit_bit >> 1)


def test_overflow_gives_infinity():
    assert muldf3(sys.float_info.max, 2.0) == math.inf
    assert mulsf3(-3.0e38, 2.0) == -math.inf


def test_total_underflow_gives_signed_zero():
    tiny = F64.from_bits(1)
    assert F64.to_bits(muldf3(tiny, -tiny)) == F64.sign_mask


def test_rejects_out_of_range_pattern():
    with pytest.raises(ValueError):
        mul(F32, 1 << 32, 0)
    with pytest.raises(ValueError):
        mul(F64, 0, -1)