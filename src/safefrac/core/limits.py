from __future__ import annotations

import math
from dataclasses import dataclass
from functools import lru_cache
from typing import Callable

from safefrac.core.domain import IntegerDomain
from safefrac.core.fraction import Fraction


@dataclass(frozen=True)
class FractionLimits:
    """Properties of the fractions over an integer domain, in the manner of numeric limits.

    The extreme values are returned as new fractions on every call, so callers may modify them.
    """

    domain: IntegerDomain
    is_specialized: bool = True
    is_signed: bool = True
    is_integer: bool = False
    is_exact: bool = True
    has_infinity: bool = False
    has_quiet_nan: bool = False
    has_signaling_nan: bool = False
    has_denorm_loss: bool = False
    is_iec559: bool = False
    is_modulo: bool = False
    traps: bool = True
    radix: int = 2
    tinyness_before: bool = False

    @property
    def is_bounded(self) -> bool:
        return self.domain.bounded

    @property
    def digits(self) -> int:
        """Binary digits of numerator and denominator together."""
        return 2 * self.domain.bit_width

    @property
    def digits10(self) -> int:
        return 2 * math.floor(self.domain.bit_width * math.log10(2))

    @property
    def max_digits10(self) -> int:
        # integer terms never need extra digits to round trip
        return 0

    def _exponent(self, log: Callable[[float], float]) -> int:
        if not self.is_bounded:
            return 0
        assert self.domain.max_value is not None
        return int(log(self.domain.max_value) + 1)

    @property
    def min_exponent(self) -> int:
        """Binary exponent range, given by the magnitude of max() and min()."""
        return self._exponent(math.log2)

    @property
    def max_exponent(self) -> int:
        return self._exponent(math.log2)

    @property
    def min_exponent10(self) -> int:
        return self._exponent(math.log10)

    @property
    def max_exponent10(self) -> int:
        return self._exponent(math.log10)

    def min(self) -> Fraction:
        """Smallest positive fraction."""
        if not self.is_bounded:
            return Fraction(domain=self.domain)
        return Fraction(1, self.domain.max_value, domain=self.domain)

    def lowest(self) -> Fraction:
        if not self.is_bounded:
            return Fraction(domain=self.domain)
        return Fraction(self.domain.min_value, self.domain.max_value, domain=self.domain)

    def max(self) -> Fraction:
        if not self.is_bounded:
            return Fraction(domain=self.domain)
        return Fraction(self.domain.max_value, 1, domain=self.domain)

    def epsilon(self) -> Fraction:
        if not self.is_bounded:
            return Fraction(domain=self.domain)
        assert self.domain.max_value is not None
        return Fraction(1, self.domain.max_value - 1, domain=self.domain)

    def round_error(self) -> Fraction:
        return Fraction(0, domain=self.domain)

    # fractions have no infinity, NaN or denormals, these return the default fraction
    def infinity(self) -> Fraction:
        return Fraction(domain=self.domain)

    def quiet_nan(self) -> Fraction:
        return Fraction(domain=self.domain)

    def signaling_nan(self) -> Fraction:
        return Fraction(domain=self.domain)

    def denorm_min(self) -> Fraction:
        return Fraction(domain=self.domain)


@lru_cache(maxsize=None)
def fraction_limits(domain: IntegerDomain) -> FractionLimits:
    return FractionLimits(domain=domain)
