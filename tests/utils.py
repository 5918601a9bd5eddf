from safefrac import INT8, INT16, INT32, INT64, PYTHON_INT, Fraction, IntegerDomain

SIGNED8 = IntegerDomain.signed(8)

# two realisations of the same 8-bit range: NumPy scalars and bounded Python ints
EIGHT_BIT_DOMAINS = [INT8, SIGNED8]

ALL_DOMAINS = [PYTHON_INT, INT8, INT16, INT32, INT64, SIGNED8]


def frac(n, d=1, domain=PYTHON_INT) -> Fraction:
    return Fraction(n, d, domain=domain)


def terms(f: Fraction) -> tuple[int, int]:
    return int(f.numerator), int(f.denominator)
