import io

import numpy as np
import pytest

from safefrac import (
    INT8,
    Fraction,
    FractionDenominatorIsZeroError,
    FractionInputError,
    FractionOverflowError,
    FractionReader,
    format_fraction,
    parse_fraction,
    write_fraction,
)

from .utils import terms


def test_format_does_not_reduce():
    assert format_fraction(Fraction(2, 4)) == "2/4"
    assert format_fraction(Fraction(3, -9)) == "-3/9"
    assert format_fraction(Fraction(np.int8(5), np.int8(7))) == "5/7"


@pytest.mark.parametrize(
    "text, expected",
    [
        ("3/4", (3, 4)),
        (" -3 / 4 ", (-3, 4)),
        ("3/-4", (-3, 4)),
        ("+6/8", (6, 8)),
        ("0/5", (0, 5)),
        ("123456789012345678901234567890/7", (123456789012345678901234567890, 7)),
    ],
)
def test_parse_valid_text(text, expected):
    assert terms(parse_fraction(text)) == expected


@pytest.mark.parametrize("text", ["", "3", "3/", "/4", "3/4/5", "a/b", "3.0/4", "3 4", "3\\4", "- 3/4"])
def test_parse_malformed_text(text):
    with pytest.raises(FractionInputError) as err:
        parse_fraction(text)
    assert err.value.where == "parse_fraction"
    assert isinstance(err.value, ValueError)


def test_parse_zero_denominator():
    with pytest.raises(FractionDenominatorIsZeroError):
        parse_fraction("1/0")


def test_parse_into_bounded_domain():
    f = parse_fraction("-128/127", INT8)
    assert f.domain == INT8
    assert isinstance(f.numerator, np.int8)
    with pytest.raises(FractionInputError) as err:
        parse_fraction("200/1", INT8)
    assert "Fraction<int8>" in str(err.value)
    with pytest.raises(FractionOverflowError):
        parse_fraction("-128/-1", INT8)


def test_from_string():
    assert Fraction.from_string("1/2") == Fraction(1, 2)
    assert Fraction.from_string("1/2", INT8).domain == INT8


def test_format_parse_round_trip():
    for f in [Fraction(2, 4), Fraction(-7, 3), Fraction(0, 9)]:
        text = format_fraction(f)
        parsed = parse_fraction(text)
        assert format_fraction(parsed) == text
        assert format_fraction(parsed.reduce()) == format_fraction(f.copy().reduce())


def test_reader_reads_consecutive_fractions():
    reader = FractionReader(io.StringIO("1/2  3 / 4\n-5/6\t+7/-8  "))
    values = [terms(f) for f in reader]
    assert values == [(1, 2), (3, 4), (-5, 6), (-7, 8)]
    assert reader.at_end()


def test_reader_single_reads():
    reader = FractionReader(io.StringIO("1/2 10/20"), INT8)
    first = reader.read()
    second = reader.read()
    assert first.domain == INT8
    assert first == second
    with pytest.raises(FractionInputError):
        reader.read()


@pytest.mark.parametrize("text", ["1 2", "1/x", "x/2", "1/", "1/2 /3", "1/2,3/4"])
def test_reader_malformed_input(text):
    reader = FractionReader(io.StringIO(text))
    with pytest.raises(FractionInputError) as err:
        list(reader)
    assert err.value.where == "FractionReader.read"


def test_reader_out_of_range():
    reader = FractionReader(io.StringIO("300/1"), INT8)
    with pytest.raises(FractionInputError):
        reader.read()


def test_write_fraction():
    stream = io.StringIO()
    write_fraction(stream, Fraction(-2, 6))
    stream.write(" ")
    write_fraction(stream, Fraction(1, 3))
    assert stream.getvalue() == "-2/6 1/3"
    assert [terms(f) for f in FractionReader(io.StringIO(stream.getvalue()))] == [(-2, 6), (1, 3)]
