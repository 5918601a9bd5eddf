from __future__ import annotations

import re
from typing import IO, Any, Iterator

from safefrac.core.constants import FRACTION_SEPARATOR
from safefrac.core.domain import PYTHON_INT, IntegerDomain
from safefrac.core.errors import FractionInputError, FractionOverflowError
from safefrac.core.fraction import Fraction

_INTEGER = r"[+-]?\d+"
_FRACTION_PATTERN = re.compile(rf"\s*({_INTEGER})\s*{re.escape(FRACTION_SEPARATOR)}\s*({_INTEGER})\s*")


def format_fraction(fraction: Fraction) -> str:
    """Formats as ``<numerator>/<denominator>`` without reducing."""
    return str(fraction)


def _integer_token(
    token: str,
    domain: IntegerDomain,
    where: str,
) -> Any:
    try:
        return domain.cast(int(token))
    except (ValueError, FractionOverflowError):
        raise FractionInputError(where, domain.name) from None


def _build(
    numerator_token: str,
    denominator_token: str,
    domain: IntegerDomain,
    where: str,
) -> Fraction:
    numerator = _integer_token(numerator_token, domain, where)
    denominator = _integer_token(denominator_token, domain, where)
    result = Fraction(numerator, domain=domain)
    result.denominator = denominator
    return result


def parse_fraction(
    text: str,
    domain: IntegerDomain = PYTHON_INT,
) -> Fraction:
    """
    Parses ``<numerator>/<denominator>``. Whitespace is allowed around both integers.

    Raises:
        FractionInputError: If the text has a different structure or an integer does not fit the domain.
        FractionDenominatorIsZeroError: If the denominator is zero.
    """
    match = _FRACTION_PATTERN.fullmatch(text)
    if match is None:
        raise FractionInputError("parse_fraction", domain.name)
    return _build(match.group(1), match.group(2), domain, "parse_fraction")


def write_fraction(
    stream: IO[str],
    fraction: Fraction,
) -> None:
    stream.write(format_fraction(fraction))


class FractionReader:
    """Reads whitespace separated fractions from a text stream.

    One character of lookahead is kept between reads, so the reader has to be used for all
    consecutive reads from the same stream.
    """

    def __init__(
        self,
        stream: IO[str],
        domain: IntegerDomain = PYTHON_INT,
    ):
        self.stream = stream
        self.domain = domain
        self._lookahead = ""

    def _peek(self) -> str:
        if not self._lookahead:
            self._lookahead = self.stream.read(1)
        return self._lookahead

    def _take(self) -> str:
        char = self._peek()
        self._lookahead = ""
        return char

    def _skip_whitespace(self) -> None:
        while self._peek() and self._peek().isspace():
            self._take()

    def _integer(self) -> str:
        self._skip_whitespace()
        token = ""
        if self._peek() in ("+", "-"):
            token += self._take()
        digits = ""
        while self._peek() and self._peek().isdigit():
            digits += self._take()
        if not digits:
            raise FractionInputError("FractionReader.read", self.domain.name)
        return token + digits

    def at_end(self) -> bool:
        self._skip_whitespace()
        return self._peek() == ""

    def read(self) -> Fraction:
        numerator = self._integer()
        self._skip_whitespace()
        if self._take() != FRACTION_SEPARATOR:
            raise FractionInputError("FractionReader.read", self.domain.name)
        denominator = self._integer()
        return _build(numerator, denominator, self.domain, "FractionReader.read")

    def __iter__(self) -> Iterator[Fraction]:
        while not self.at_end():
            yield self.read()
