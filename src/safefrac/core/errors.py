from __future__ import annotations


class FractionError(Exception):
    """Base error."""

    kind: str = "error"

    def __init__(
        self,
        where: str,
        domain_name: str | None = None,
    ):
        self.where = where
        self.domain_name = domain_name
        type_str = "" if domain_name is None else f"<{domain_name}>"
        super().__init__(f"{self.kind} for Fraction{type_str} in {where}")


class FractionDenominatorIsZeroError(FractionError, ZeroDivisionError):
    """Raised when a fraction would end up with a zero denominator."""

    kind = "denominator is zero"


class FractionZeroDivisionError(FractionError, ZeroDivisionError):
    """Raised when the modulo of a fraction by a zero fraction is requested."""

    kind = "division by zero"


class FractionOverflowError(FractionError, OverflowError):
    """Raised when every overflow-free way of computing a result has been exhausted."""

    kind = "overflow"


class FractionInputError(FractionError, ValueError):
    """Raised when text does not have the form <numerator>/<denominator>."""

    kind = "wrong input"
