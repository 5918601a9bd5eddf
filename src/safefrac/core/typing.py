from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Union

import numpy as np

if TYPE_CHECKING:
    from safefrac.core.fraction import Fraction


# Integer values a Fraction can be built from. Custom integer types registered with
# register_domain are accepted as well, but cannot be expressed statically.
IntegerLike = Union[
    int,
    np.signedinteger,
]

# Operands accepted by the arithmetic and comparison operators of Fraction
FractionLike = Union[
    "Fraction",
    int,
    np.signedinteger,
]

# Compatibility check applied to the two scaled numerators of a common denominator
NumeratorCheck = Callable[[Any, Any, Any], bool]
