import numpy as np
import pytest

from safefrac import (
    INT8,
    INT64,
    PYTHON_INT,
    FractionOverflowError,
    IntegerDomain,
    can_add,
    can_mul,
    can_neg,
    can_sub,
    gcd,
    lcm,
    try_lcm,
)
from safefrac.core.checked import trunc_div, trunc_mod

SIGNED5 = IntegerDomain.signed(5)
INT8_SAMPLES = [-128, -127, -65, -64, -12, -2, -1, 0, 1, 2, 11, 63, 64, 126, 127]


def _fits(value: int, domain: IntegerDomain) -> bool:
    return domain.min_value <= value <= domain.max_value


def test_unbounded_predicates_always_true():
    big = 10**100
    assert can_add(big, big)
    assert can_sub(-big, big)
    assert can_neg(-big)
    assert can_mul(big, -big)
    assert can_add(big, big, PYTHON_INT)


def test_can_add_int8_boundaries():
    i8 = np.int8
    assert can_add(i8(127), i8(0))
    assert not can_add(i8(127), i8(1))
    assert not can_add(i8(-128), i8(-1))
    assert can_add(i8(-128), i8(127))
    assert can_add(i8(-64), i8(-64))
    assert not can_add(i8(-64), i8(-65))


def test_can_sub_and_can_neg_int8_boundaries():
    i8 = np.int8
    assert not can_sub(i8(-128), i8(1))
    assert not can_sub(i8(127), i8(-1))
    assert not can_sub(i8(0), i8(-128))
    assert can_sub(i8(-1), i8(-128))
    assert not can_neg(i8(-128))
    assert can_neg(i8(127))
    assert can_neg(i8(-127))


def test_predicates_match_exact_arithmetic_exhaustively():
    """Every pair of a 5-bit domain agrees with the exact result range"""
    values = range(SIGNED5.min_value, SIGNED5.max_value + 1)
    for a in values:
        assert can_neg(a, SIGNED5) == _fits(-a, SIGNED5)
        for b in values:
            assert can_add(a, b, SIGNED5) == _fits(a + b, SIGNED5), (a, b)
            assert can_sub(a, b, SIGNED5) == _fits(a - b, SIGNED5), (a, b)
            assert can_mul(a, b, SIGNED5) == _fits(a * b, SIGNED5), (a, b)


def test_can_mul_numpy_int8_samples():
    for a in INT8_SAMPLES:
        for b in INT8_SAMPLES:
            expected = _fits(a * b, INT8)
            assert can_mul(np.int8(a), np.int8(b)) == expected, (a, b)


def test_can_mul_int64_extremes():
    i64 = np.int64
    assert can_mul(i64(2**31), i64(2**31 - 1))
    assert not can_mul(i64(2**32), i64(2**31))
    assert can_mul(i64(-(2**62)), i64(2))
    assert not can_mul(i64(-(2**63)), i64(-1))
    assert can_mul(i64(-(2**63)), i64(1))


def test_truncating_division_and_remainder():
    for a, b, q, r in [(7, 2, 3, 1), (-7, 2, -3, -1), (7, -2, -3, 1), (-7, -2, 3, -1), (6, 3, 2, 0)]:
        assert trunc_div(a, b) == q
        assert trunc_mod(a, b) == r
        assert trunc_div(np.int8(a), np.int8(b)) == q
        assert trunc_mod(np.int8(a), np.int8(b)) == r
    assert trunc_mod(np.int8(-128), np.int8(-1)) == 0


def test_gcd():
    assert gcd(12, 18) == 6
    assert gcd(-12, 18) == 6
    assert gcd(12, -18) == 6
    assert gcd(0, -5) == 5
    assert gcd(0, 0) == 0
    assert gcd(17, 5) == 1
    assert gcd(np.int8(-128), np.int8(64)) == 64


def test_gcd_of_lowest_value_overflows():
    with pytest.raises(FractionOverflowError) as err:
        gcd(np.int8(-128), np.int8(-128))
    assert err.value.where == "gcd"
    with pytest.raises(FractionOverflowError):
        gcd(np.int8(-128), np.int8(0))


def test_lcm():
    assert lcm(4, 6) == 12
    assert lcm(0, 5) == 0
    assert lcm(np.int8(20), np.int8(6)) == 60
    assert lcm(np.int8(127), np.int8(1)) == 127


def test_lcm_overflow():
    assert try_lcm(np.int8(100), np.int8(3)) is None
    with pytest.raises(FractionOverflowError) as err:
        lcm(np.int8(100), np.int8(3))
    assert err.value.where == "lcm"
    assert err.value.domain_name == "int8"
    assert try_lcm(np.int64(2**62), np.int64(3), INT64) is None
