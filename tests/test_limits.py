from safefrac import INT8, INT64, PYTHON_INT, Fraction, fraction_limits

from .utils import SIGNED8, terms


def test_bounded_limits():
    for domain in (INT8, SIGNED8):
        limits = fraction_limits(domain)
        assert limits.is_bounded
        assert limits.is_exact and limits.is_signed and not limits.is_integer
        assert terms(limits.max()) == (127, 1)
        assert terms(limits.min()) == (1, 127)
        assert terms(limits.lowest()) == (-128, 127)
        assert terms(limits.epsilon()) == (1, 126)
        assert terms(limits.round_error()) == (0, 1)
        assert limits.digits == 14
        assert limits.digits10 == 4
        assert limits.max().domain == domain


def test_int64_digits():
    limits = fraction_limits(INT64)
    assert limits.digits == 126
    assert limits.digits10 == 36


def test_unbounded_limits_are_default_fractions():
    limits = fraction_limits(PYTHON_INT)
    assert not limits.is_bounded
    assert limits.digits == 0
    for value in (limits.min(), limits.max(), limits.lowest(), limits.epsilon()):
        assert terms(value) == (0, 1)


def test_limits_are_cached_and_values_independent():
    assert fraction_limits(INT8) is fraction_limits(INT8)
    value = fraction_limits(INT8).max()
    value.numerator = 3
    assert fraction_limits(INT8).max() == Fraction(127, domain=INT8)


def test_exponent_ranges():
    for domain in (INT8, SIGNED8):
        limits = fraction_limits(domain)
        assert limits.min_exponent == limits.max_exponent == 7
        assert limits.min_exponent10 == limits.max_exponent10 == 3
        assert limits.max_digits10 == 0
    limits = fraction_limits(INT64)
    assert limits.max_exponent == 64
    assert limits.max_exponent10 == 19
    unbounded = fraction_limits(PYTHON_INT)
    assert unbounded.min_exponent == unbounded.max_exponent10 == 0


def test_special_values_are_default_fractions():
    """Fractions have no infinity, NaN or denormals"""
    limits = fraction_limits(INT8)
    assert not (limits.has_infinity or limits.has_quiet_nan or limits.has_signaling_nan)
    assert not limits.is_iec559
    for value in (limits.infinity(), limits.quiet_nan(), limits.signaling_nan(), limits.denorm_min()):
        assert terms(value) == (0, 1)
        assert value.domain == INT8
