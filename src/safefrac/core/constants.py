"""Default numerator and denominator of a default-constructed Fraction (the value zero)"""

DEFAULT_NUMERATOR: int = 0
DEFAULT_DENOMINATOR: int = 1

"""Separator between numerator and denominator in the textual representation"""
FRACTION_SEPARATOR: str = "/"

"""
Factors combining the hashes of the reduced numerator and denominator.
Integral fractions (denominator 1) hash like the integer itself, so these only apply to proper fractions.
"""
HASH_NUMERATOR_FACTOR: int = 7
HASH_DENOMINATOR_FACTOR: int = (257 << 32) + 1023
