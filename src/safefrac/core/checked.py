from __future__ import annotations

from typing import Any

from safefrac.core.domain import IntegerDomain, domain_of
from safefrac.core.errors import FractionOverflowError


def _resolve(a: Any, domain: IntegerDomain | None) -> IntegerDomain:
    return domain if domain is not None else domain_of(a)


def can_add(
    a: Any,
    b: Any,
    domain: IntegerDomain | None = None,
) -> bool:
    """Whether ``a + b`` stays within the representable range, without computing it."""
    domain = _resolve(a, domain)
    if not domain.bounded:
        return True
    zero = domain.zero
    if (a < zero) != (b < zero):
        return True
    if a < zero:
        return domain.lowest - a <= b
    return domain.highest - a >= b


def can_sub(
    a: Any,
    b: Any,
    domain: IntegerDomain | None = None,
) -> bool:
    """Whether ``a - b`` stays within the representable range, without computing it."""
    domain = _resolve(a, domain)
    if not domain.bounded:
        return True
    if b < domain.zero:
        return domain.highest + b >= a
    return domain.lowest + b <= a


def can_neg(
    a: Any,
    domain: IntegerDomain | None = None,
) -> bool:
    """Whether ``-a`` is representable. The lowest value of a two's complement type is not."""
    domain = _resolve(a, domain)
    return can_sub(domain.zero, a, domain)


def can_mul(
    a: Any,
    b: Any,
    domain: IntegerDomain | None = None,
) -> bool:
    """Whether ``a * b`` stays within the representable range, without computing it.

    All supported domains divide with truncation toward zero (see ``trunc_div``), so a quotient
    bound is exact when compared inclusively.
    """
    domain = _resolve(a, domain)
    if not domain.bounded:
        return True
    zero = domain.zero
    if a == zero or b == zero:
        return True
    if a < zero:
        if b < zero:
            if not can_neg(a, domain) or not can_neg(b, domain):
                return False
            return trunc_div(domain.highest, -a, domain) >= -b
        return trunc_div(domain.lowest, b, domain) <= a
    if b < zero:
        return trunc_div(domain.lowest, a, domain) <= b
    return trunc_div(domain.highest, a, domain) >= b


def trunc_div(
    a: Any,
    b: Any,
    domain: IntegerDomain | None = None,
) -> Any:
    """Integer division rounding toward zero.

    Python and NumPy both floor, so the quotient is corrected when the signs differ. Dividing the
    lowest value of a bounded domain by -1 is not representable and has to be excluded by the caller.
    """
    domain = _resolve(a, domain)
    if b == -domain.one:
        return -a
    quotient = a // b
    if (a % b != domain.zero) and ((a < domain.zero) != (b < domain.zero)):
        quotient += domain.one
    return quotient


def trunc_mod(
    a: Any,
    b: Any,
    domain: IntegerDomain | None = None,
) -> Any:
    """Remainder of ``trunc_div``, carrying the sign of the dividend."""
    domain = _resolve(a, domain)
    if b == domain.one or b == -domain.one:
        return domain.zero
    remainder = a % b
    if remainder != domain.zero and ((remainder < domain.zero) != (a < domain.zero)):
        remainder -= b
    return remainder


def euclid(
    a: Any,
    b: Any,
    domain: IntegerDomain | None = None,
) -> Any:
    """Last non-zero remainder of the Euclidean algorithm. Its sign is not normalized."""
    domain = _resolve(a, domain)
    while b != domain.zero:
        a, b = b, trunc_mod(a, b, domain)
    return a


def gcd(
    a: Any,
    b: Any,
    domain: IntegerDomain | None = None,
) -> Any:
    """Non-negative greatest common divisor, zero if both inputs are zero.

    Raises:
        FractionOverflowError: If the divisor is the magnitude of the lowest value of a bounded domain.
    """
    domain = _resolve(a, domain)
    result = euclid(a, b, domain)
    if result < domain.zero:
        if not can_neg(result, domain):
            raise FractionOverflowError("gcd", domain.name)
        result = -result
    return result


def try_lcm(
    a: Any,
    b: Any,
    domain: IntegerDomain | None = None,
) -> Any | None:
    """Least common multiple ``(a / gcd(a, b)) * b``, or None if it is not representable."""
    domain = _resolve(a, domain)
    if a == domain.zero or b == domain.zero:
        return domain.zero
    divisor = euclid(a, b, domain)
    if divisor < domain.zero:
        if not can_neg(divisor, domain):
            return None
        divisor = -divisor
    factor = trunc_div(a, divisor, domain)
    if not can_mul(factor, b, domain):
        return None
    return factor * b


def lcm(
    a: Any,
    b: Any,
    domain: IntegerDomain | None = None,
) -> Any:
    """Least common multiple ``(a / gcd(a, b)) * b``.

    Raises:
        FractionOverflowError: If the multiplication would overflow.
    """
    domain = _resolve(a, domain)
    result = try_lcm(a, b, domain)
    if result is None:
        raise FractionOverflowError("lcm", domain.name)
    return result
