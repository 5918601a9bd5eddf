from safefrac.core.checked import can_add, can_mul, can_neg, can_sub, gcd, lcm, try_lcm
from safefrac.core.domain import (
    INT8,
    INT16,
    INT32,
    INT64,
    PYTHON_INT,
    IntegerDomain,
    domain_of,
    register_domain,
    registered_domains,
)
from safefrac.core.errors import (
    FractionDenominatorIsZeroError,
    FractionError,
    FractionInputError,
    FractionOverflowError,
    FractionZeroDivisionError,
)
from safefrac.core.fraction import CommonDenominator, Fraction, common_denominator, swap
from safefrac.core.limits import FractionLimits, fraction_limits
from safefrac.core.text import FractionReader, format_fraction, parse_fraction, write_fraction

__all__ = [
    "Fraction",
    "CommonDenominator",
    "common_denominator",
    "swap",
    "IntegerDomain",
    "PYTHON_INT",
    "INT8",
    "INT16",
    "INT32",
    "INT64",
    "domain_of",
    "register_domain",
    "registered_domains",
    "can_add",
    "can_sub",
    "can_neg",
    "can_mul",
    "gcd",
    "lcm",
    "try_lcm",
    "FractionError",
    "FractionDenominatorIsZeroError",
    "FractionZeroDivisionError",
    "FractionOverflowError",
    "FractionInputError",
    "FractionLimits",
    "fraction_limits",
    "FractionReader",
    "format_fraction",
    "parse_fraction",
    "write_fraction",
]
