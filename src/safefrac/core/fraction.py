from __future__ import annotations

from typing import Any, NamedTuple

import numpy as np

from safefrac.core.checked import (
    can_add,
    can_mul,
    can_neg,
    can_sub,
    euclid,
    gcd,
    trunc_div,
    trunc_mod,
    try_lcm,
)
from safefrac.core.constants import (
    DEFAULT_DENOMINATOR,
    DEFAULT_NUMERATOR,
    FRACTION_SEPARATOR,
    HASH_DENOMINATOR_FACTOR,
    HASH_NUMERATOR_FACTOR,
)
from safefrac.core.domain import PYTHON_INT, IntegerDomain, domain_of
from safefrac.core.errors import (
    FractionDenominatorIsZeroError,
    FractionOverflowError,
    FractionZeroDivisionError,
)
from safefrac.core.typing import FractionLike, IntegerLike, NumeratorCheck


class CommonDenominator(NamedTuple):
    denominator: Any
    first: Any  # numerator of the first fraction scaled to the common denominator
    second: Any  # numerator of the second fraction scaled to the common denominator


def _reduce_terms(
    numerator: Any,
    denominator: Any,
    domain: IntegerDomain,
) -> tuple[Any, Any]:
    divisor = euclid(numerator, denominator, domain)
    # a negative divisor is only kept if its magnitude is not representable
    if divisor < domain.zero and can_neg(divisor, domain):
        divisor = -divisor
    return trunc_div(numerator, divisor, domain), trunc_div(denominator, divisor, domain)


def _normalize(
    numerator: Any,
    denominator: Any,
    domain: IntegerDomain,
    where: str,
) -> tuple[Any, Any, bool]:
    """
    Rejects zero denominators and moves the sign of the denominator into the numerator. If negating
    is not possible, the terms are reduced first.

    Returns:
        tuple[Any, Any, bool]: numerator, denominator and whether the terms were reduced on the way.
    """
    if denominator == domain.zero:
        raise FractionDenominatorIsZeroError(where, domain.name)
    if denominator > domain.zero:
        return numerator, denominator, False
    reduced = False
    if not can_neg(numerator, domain) or not can_neg(denominator, domain):
        numerator, denominator = _reduce_terms(numerator, denominator, domain)
        reduced = True
        if denominator < domain.zero and (not can_neg(numerator, domain) or not can_neg(denominator, domain)):
            raise FractionOverflowError(where, domain.name)
    if denominator < domain.zero:
        numerator, denominator = -numerator, -denominator
    return numerator, denominator, reduced


def _infer_domain(*values: Any) -> IntegerDomain:
    # plain Python ints adapt to the domain of the other argument
    for v in values:
        if isinstance(v, Fraction):
            raise TypeError("Fraction terms must be integers, got a Fraction")
        if type(v) is not int:
            return domain_of(v)
    return PYTHON_INT


def _accept_any(first: Any, second: Any, domain: IntegerDomain) -> bool:
    del first, second, domain
    return True


class Fraction:
    """Exact rational number over a signed integer domain with overflow-checked arithmetic.

    The denominator is always positive. Every operation first tries the cheapest computation and
    only reduces terms or cancels common factors if that would overflow the integer domain. If no
    overflow-free way exists, a FractionOverflowError is raised and in-place operators leave the
    receiving fraction unchanged.
    """

    __slots__ = ("_numerator", "_denominator", "_reduced", "_domain")

    # numpy scalars on the left hand side defer to the reflected operators
    __array_ufunc__ = None

    def __init__(
        self,
        numerator: IntegerLike = DEFAULT_NUMERATOR,
        denominator: IntegerLike = DEFAULT_DENOMINATOR,
        *,
        domain: IntegerDomain | None = None,
    ):
        if domain is None:
            domain = _infer_domain(numerator, denominator)
        n = domain.cast(numerator)
        d = domain.cast(denominator)
        self._domain = domain
        self._numerator, self._denominator, self._reduced = _normalize(n, d, domain, "Fraction.__init__")

    @classmethod
    def _from_terms(
        cls,
        numerator: Any,
        denominator: Any,
        domain: IntegerDomain,
        reduced: bool,
    ) -> Fraction:
        result = cls.__new__(cls)
        result._numerator = numerator
        result._denominator = denominator
        result._domain = domain
        result._reduced = reduced
        return result

    @classmethod
    def from_string(
        cls,
        text: str,
        domain: IntegerDomain | None = None,
    ) -> Fraction:
        from safefrac.core.text import parse_fraction

        return parse_fraction(text, PYTHON_INT if domain is None else domain)

    def _assign(
        self,
        numerator: Any,
        denominator: Any,
        reduced: bool,
    ) -> None:
        self._numerator = numerator
        self._denominator = denominator
        self._reduced = reduced

    def _reduced_terms(self) -> tuple[Any, Any]:
        if self._reduced:
            return self._numerator, self._denominator
        return _reduce_terms(self._numerator, self._denominator, self._domain)

    def _coerce(
        self,
        other: Any,
        strict: bool = True,
    ) -> Fraction | None:
        if isinstance(other, Fraction):
            if other._domain != self._domain:
                if not strict:
                    return None
                raise TypeError(
                    f"Cannot combine Fraction<{self._domain.name}> with Fraction<{other._domain.name}>"
                )
            return other
        if isinstance(other, int | np.integer) and not isinstance(other, bool):
            return Fraction(other, domain=self._domain)
        return None

    # ---------------------------------------------------------
    # Field access
    # ---------------------------------------------------------
    @property
    def domain(self) -> IntegerDomain:
        return self._domain

    @property
    def numerator(self) -> Any:
        return self._numerator

    @numerator.setter
    def numerator(self, value: IntegerLike) -> None:
        self._numerator = self._domain.cast(value)
        self._reduced = False

    @property
    def denominator(self) -> Any:
        return self._denominator

    @denominator.setter
    def denominator(self, value: IntegerLike) -> None:
        d = self._domain.cast(value)
        n, d, reduced = _normalize(self._numerator, d, self._domain, "Fraction.denominator")
        self._assign(n, d, reduced)

    def value(self) -> Any:
        """Integer part of the fraction, truncated toward zero."""
        return trunc_div(self._numerator, self._denominator, self._domain)

    def copy(self) -> Fraction:
        return Fraction._from_terms(self._numerator, self._denominator, self._domain, self._reduced)

    def __copy__(self) -> Fraction:
        return self.copy()

    def __deepcopy__(self, memo: dict) -> Fraction:
        del memo
        return self.copy()

    def swap(self, other: Fraction) -> Fraction:
        """Exchanges the complete state with another fraction."""
        own_state = (self._numerator, self._denominator, self._reduced, self._domain)
        self._numerator, self._denominator, self._reduced, self._domain = (
            other._numerator,
            other._denominator,
            other._reduced,
            other._domain,
        )
        other._numerator, other._denominator, other._reduced, other._domain = own_state
        return self

    # ---------------------------------------------------------
    # Reduction and inversion
    # ---------------------------------------------------------
    def reduced(self) -> bool:
        """Whether the terms are known to be coprime. False only means unknown."""
        return self._reduced

    def reduce(self) -> Fraction:
        if not self._reduced:
            n, d = _reduce_terms(self._numerator, self._denominator, self._domain)
            self._assign(n, d, True)
        return self

    def invert(self) -> Fraction:
        n, d, reduced = _normalize(self._denominator, self._numerator, self._domain, "Fraction.invert")
        self._assign(n, d, self._reduced or reduced)
        return self

    def inverted(self) -> Fraction:
        return self.copy().invert()

    # ---------------------------------------------------------
    # In-place arithmetic. Results are committed only once they are known to be representable.
    # ---------------------------------------------------------
    def _add(self, other: Fraction, where: str) -> Fraction:
        common = common_denominator(self, other, where, can_add)
        self._assign(common.first + common.second, common.denominator, False)
        return self

    def _sub(self, other: Fraction, where: str) -> Fraction:
        common = common_denominator(self, other, where, can_sub)
        self._assign(common.first - common.second, common.denominator, False)
        return self

    def _mul(self, other: Fraction, where: str) -> Fraction:
        domain = self._domain
        n1, d1, n2, d2 = self._numerator, self._denominator, other._numerator, other._denominator

        def fits() -> bool:
            return can_mul(n1, n2, domain) and can_mul(d1, d2, domain)

        if fits():
            self._assign(n1 * n2, d1 * d2, False)
            return self
        if not self._reduced:
            n1, d1 = _reduce_terms(n1, d1, domain)
            if fits():
                self._assign(n1 * n2, d1 * d2, False)
                return self
        if not other._reduced:
            n2, d2 = _reduce_terms(n2, d2, domain)
            if fits():
                self._assign(n1 * n2, d1 * d2, False)
                return self
        # both operands are reduced from here on, cross-cancel the remaining common factors
        divisor = gcd(n1, d2, domain)
        n1, d2 = trunc_div(n1, divisor, domain), trunc_div(d2, divisor, domain)
        if fits():
            self._assign(n1 * n2, d1 * d2, False)
            return self
        divisor = gcd(d1, n2, domain)
        d1, n2 = trunc_div(d1, divisor, domain), trunc_div(n2, divisor, domain)
        if fits():
            n, d = n1 * n2, d1 * d2
            # all four cross pairs are coprime now, only a zero numerator can share factors
            self._assign(n, d, n != domain.zero or d == domain.one)
            return self
        raise FractionOverflowError(where, domain.name)

    def _truediv(self, other: Fraction, where: str) -> Fraction:
        return self._mul(other.inverted(), where)

    def _mod(self, other: Fraction, where: str) -> Fraction:
        if other._numerator == self._domain.zero:
            raise FractionZeroDivisionError(where, self._domain.name)
        common = common_denominator(self, other, where)
        self._assign(trunc_mod(common.first, common.second, self._domain), common.denominator, False)
        return self

    def __iadd__(self, other: FractionLike) -> Fraction:
        other_fraction = self._coerce(other)
        if other_fraction is None:
            return NotImplemented
        return self._add(other_fraction, "Fraction.__iadd__")

    def __isub__(self, other: FractionLike) -> Fraction:
        other_fraction = self._coerce(other)
        if other_fraction is None:
            return NotImplemented
        return self._sub(other_fraction, "Fraction.__isub__")

    def __imul__(self, other: FractionLike) -> Fraction:
        other_fraction = self._coerce(other)
        if other_fraction is None:
            return NotImplemented
        return self._mul(other_fraction, "Fraction.__imul__")

    def __itruediv__(self, other: FractionLike) -> Fraction:
        other_fraction = self._coerce(other)
        if other_fraction is None:
            return NotImplemented
        return self._truediv(other_fraction, "Fraction.__itruediv__")

    def __imod__(self, other: FractionLike) -> Fraction:
        other_fraction = self._coerce(other)
        if other_fraction is None:
            return NotImplemented
        return self._mod(other_fraction, "Fraction.__imod__")

    # ---------------------------------------------------------
    # Binary arithmetic
    # ---------------------------------------------------------
    def __add__(self, other: FractionLike) -> Fraction:
        other_fraction = self._coerce(other)
        if other_fraction is None:
            return NotImplemented
        return self.copy()._add(other_fraction, "Fraction.__add__")

    def __radd__(self, other: FractionLike) -> Fraction:
        other_fraction = self._coerce(other)
        if other_fraction is None:
            return NotImplemented
        return other_fraction.copy()._add(self, "Fraction.__add__")

    def __sub__(self, other: FractionLike) -> Fraction:
        other_fraction = self._coerce(other)
        if other_fraction is None:
            return NotImplemented
        return self.copy()._sub(other_fraction, "Fraction.__sub__")

    def __rsub__(self, other: FractionLike) -> Fraction:
        other_fraction = self._coerce(other)
        if other_fraction is None:
            return NotImplemented
        return other_fraction.copy()._sub(self, "Fraction.__sub__")

    def __mul__(self, other: FractionLike) -> Fraction:
        other_fraction = self._coerce(other)
        if other_fraction is None:
            return NotImplemented
        return self.copy()._mul(other_fraction, "Fraction.__mul__")

    def __rmul__(self, other: FractionLike) -> Fraction:
        other_fraction = self._coerce(other)
        if other_fraction is None:
            return NotImplemented
        return other_fraction.copy()._mul(self, "Fraction.__mul__")

    def __truediv__(self, other: FractionLike) -> Fraction:
        other_fraction = self._coerce(other)
        if other_fraction is None:
            return NotImplemented
        return self.copy()._truediv(other_fraction, "Fraction.__truediv__")

    def __rtruediv__(self, other: FractionLike) -> Fraction:
        other_fraction = self._coerce(other)
        if other_fraction is None:
            return NotImplemented
        return other_fraction.copy()._truediv(self, "Fraction.__truediv__")

    def __mod__(self, other: FractionLike) -> Fraction:
        other_fraction = self._coerce(other)
        if other_fraction is None:
            return NotImplemented
        return self.copy()._mod(other_fraction, "Fraction.__mod__")

    def __rmod__(self, other: FractionLike) -> Fraction:
        other_fraction = self._coerce(other)
        if other_fraction is None:
            return NotImplemented
        return other_fraction.copy()._mod(self, "Fraction.__mod__")

    # ---------------------------------------------------------
    # Unary operations
    # ---------------------------------------------------------
    def __neg__(self) -> Fraction:
        domain = self._domain
        n, d, reduced = self._numerator, self._denominator, self._reduced
        if not can_neg(n, domain):
            if reduced:
                raise FractionOverflowError("Fraction.__neg__", domain.name)
            n, d = _reduce_terms(n, d, domain)
            reduced = True
            if not can_neg(n, domain):
                raise FractionOverflowError("Fraction.__neg__", domain.name)
        return Fraction._from_terms(-n, d, domain, reduced)

    def __pos__(self) -> Fraction:
        """Reduced copy of the fraction. The fraction itself is left untouched."""
        n, d = self._reduced_terms()
        return Fraction._from_terms(n, d, self._domain, True)

    def __abs__(self) -> Fraction:
        if self._numerator < self._domain.zero:
            return -self
        return self.copy()

    def _step(self, up: bool, where: str) -> Fraction:
        domain = self._domain
        check = can_add if up else can_sub
        n, d, reduced = self._numerator, self._denominator, self._reduced
        if not check(n, d, domain):
            if reduced:
                raise FractionOverflowError(where, domain.name)
            n, d = _reduce_terms(n, d, domain)
            reduced = True
            if not check(n, d, domain):
                raise FractionOverflowError(where, domain.name)
        # n and d are coprime exactly if n +- d and d are
        self._assign(n + d if up else n - d, d, reduced)
        return self

    def increment(self) -> Fraction:
        """Adds one in place and returns the fraction."""
        return self._step(True, "Fraction.increment")

    def decrement(self) -> Fraction:
        """Subtracts one in place and returns the fraction."""
        return self._step(False, "Fraction.decrement")

    def post_increment(self) -> Fraction:
        """Adds one in place and returns a copy of the previous value."""
        previous = self.copy()
        self._step(True, "Fraction.post_increment")
        return previous

    def post_decrement(self) -> Fraction:
        """Subtracts one in place and returns a copy of the previous value."""
        previous = self.copy()
        self._step(False, "Fraction.post_decrement")
        return previous

    # ---------------------------------------------------------
    # Comparison
    # ---------------------------------------------------------
    def _less(self, other: Fraction, where: str) -> bool:
        common = common_denominator(self, other, where)
        return bool(common.first < common.second)

    def __lt__(self, other: FractionLike) -> bool:
        other_fraction = self._coerce(other)
        if other_fraction is None:
            return NotImplemented
        return self._less(other_fraction, "Fraction.__lt__")

    def __gt__(self, other: FractionLike) -> bool:
        other_fraction = self._coerce(other)
        if other_fraction is None:
            return NotImplemented
        return other_fraction._less(self, "Fraction.__gt__")

    def __le__(self, other: FractionLike) -> bool:
        other_fraction = self._coerce(other)
        if other_fraction is None:
            return NotImplemented
        return not other_fraction._less(self, "Fraction.__le__")

    def __ge__(self, other: FractionLike) -> bool:
        other_fraction = self._coerce(other)
        if other_fraction is None:
            return NotImplemented
        return not self._less(other_fraction, "Fraction.__ge__")

    def __eq__(self, other: Any) -> bool:
        # integers outside of the domain cannot equal any fraction of it
        if isinstance(other, int | np.integer) and not isinstance(other, bool):
            if not self._domain.contains(other):
                return False
        # unreduced representations of the same value are equal, so no field comparison
        other_fraction = self._coerce(other, strict=False)
        if other_fraction is None:
            return NotImplemented
        return not other_fraction._less(self, "Fraction.__eq__") and not self._less(
            other_fraction, "Fraction.__eq__"
        )

    def __ne__(self, other: Any) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self) -> int:
        n, d = self._reduced_terms()
        if d == self._domain.one:
            return hash(n)
        return hash(HASH_NUMERATOR_FACTOR * hash(n) + HASH_DENOMINATOR_FACTOR * hash(d))

    # ---------------------------------------------------------
    # Conversion
    # ---------------------------------------------------------
    def __int__(self) -> int:
        return int(self.value())

    def __bool__(self) -> bool:
        return bool(self._numerator != self._domain.zero)

    def __str__(self) -> str:
        return f"{self._numerator}{FRACTION_SEPARATOR}{self._denominator}"

    def __repr__(self) -> str:
        return f"Fraction({self}, {self._domain.name})"


def common_denominator(
    a: Fraction,
    b: Fraction,
    where: str = "common_denominator",
    check: NumeratorCheck | None = None,
) -> CommonDenominator:
    """
    Finds a denominator shared by two fractions together with their numerators scaled to it. The
    cheapest candidate is the product of the denominators, tried again after lazily reducing each
    operand. The least common multiple of the denominators comes last, since it needs a gcd but
    keeps the scaled numerators smallest. Neither fraction is modified.

    Args:
        a (Fraction): First fraction
        b (Fraction): Second fraction
        where (str): Operation reported in overflow errors
        check (NumeratorCheck | None): Additional condition on the two scaled numerators, e.g.
            ``can_add`` if they are going to be added. Defaults to accepting every pair.

    Returns:
        CommonDenominator: The common denominator and both scaled numerators
    """
    domain = a.domain
    if b.domain != domain:
        raise TypeError(f"Cannot combine Fraction<{domain.name}> with Fraction<{b.domain.name}>")
    if check is None:
        check = _accept_any

    a, b = a.copy(), b.copy()
    result = _product_denominator(a, b, check)
    if result is None and not a.reduced():
        result = _product_denominator(a.reduce(), b, check)
    if result is None and not b.reduced():
        result = _product_denominator(a, b.reduce(), check)
    if result is not None:
        return result

    denominator = try_lcm(a.denominator, b.denominator, domain)
    if denominator is None:
        raise FractionOverflowError(where, domain.name)
    a_factor = trunc_div(denominator, a.denominator, domain)
    b_factor = trunc_div(denominator, b.denominator, domain)
    if not can_mul(a.numerator, a_factor, domain) or not can_mul(b.numerator, b_factor, domain):
        raise FractionOverflowError("common_denominator", domain.name)
    first, second = a.numerator * a_factor, b.numerator * b_factor
    if not check(first, second, domain):
        raise FractionOverflowError(where, domain.name)
    return CommonDenominator(denominator, first, second)


def _product_denominator(
    a: Fraction,
    b: Fraction,
    check: NumeratorCheck,
) -> CommonDenominator | None:
    domain = a.domain
    an, ad, bn, bd = a.numerator, a.denominator, b.numerator, b.denominator
    if not (can_mul(an, bd, domain) and can_mul(bn, ad, domain) and can_mul(ad, bd, domain)):
        return None
    first, second = an * bd, bn * ad
    if not check(first, second, domain):
        return None
    return CommonDenominator(ad * bd, first, second)


def swap(
    one: Fraction,
    two: Fraction,
) -> None:
    one.swap(two)
