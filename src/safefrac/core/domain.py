# ruff: noqa: F811
from __future__ import annotations

import operator
from dataclasses import dataclass
from functools import cached_property, lru_cache
from typing import Any, Callable

import numpy as np
from frozendict import frozendict
from plum import dispatch, overload

from safefrac.core.errors import FractionOverflowError


@dataclass(frozen=True)
class IntegerDomain:
    """Capability set of an exact signed integer type used as numerator and denominator.

    A domain is bounded if it carries both ``min_value`` and ``max_value``. The checked-arithmetic
    predicates use the bounds of bounded domains and are trivially true for unbounded ones.

    Args:
        name (str): Name used in error messages, e.g. ``int8``.
        type (Callable[[int], Any]): Builds a value of the integer type from a Python int.
        min_value (int | None): Lowest representable value, None if unbounded.
        max_value (int | None): Highest representable value, None if unbounded.
    """

    name: str
    type: Callable[[int], Any]
    min_value: int | None = None
    max_value: int | None = None

    def __post_init__(self):
        if (self.min_value is None) != (self.max_value is None):
            raise ValueError(f"Domain {self.name} needs either both bounds or none")
        if self.min_value is not None and self.max_value is not None:
            if not self.min_value < 0 < self.max_value:
                raise ValueError(f"Domain {self.name} must be signed, got [{self.min_value}, {self.max_value}]")

    @classmethod
    def signed(
        cls,
        bits: int,
        type: Callable[[int], Any] = int,
        name: str | None = None,
    ) -> IntegerDomain:
        """Two's complement range of the given bit width, by default over Python ints."""
        if bits < 2:
            raise ValueError(f"A signed domain needs at least two bits, got {bits}")
        return cls(
            name=name if name is not None else f"signed{bits}",
            type=type,
            min_value=-(1 << (bits - 1)),
            max_value=(1 << (bits - 1)) - 1,
        )

    @property
    def bounded(self) -> bool:
        return self.max_value is not None

    @cached_property
    def zero(self) -> Any:
        return self.type(0)

    @cached_property
    def one(self) -> Any:
        return self.type(1)

    @cached_property
    def lowest(self) -> Any:
        if self.min_value is None:
            raise ValueError(f"Unbounded domain {self.name} has no lowest value")
        return self.type(self.min_value)

    @cached_property
    def highest(self) -> Any:
        if self.max_value is None:
            raise ValueError(f"Unbounded domain {self.name} has no highest value")
        return self.type(self.max_value)

    @property
    def bit_width(self) -> int:
        """Number of value bits (without sign), zero for unbounded domains."""
        if self.max_value is None:
            return 0
        return self.max_value.bit_length()

    def contains(self, value: Any) -> bool:
        if not self.bounded:
            return True
        assert self.min_value is not None and self.max_value is not None
        return self.min_value <= int(value) <= self.max_value

    def cast(self, value: Any) -> Any:
        """Converts an integer into a value of this domain.

        Values of custom integer types have to support ``operator.index`` to be range checked.

        Raises:
            TypeError: If the value is not an integer.
            FractionOverflowError: If the value is outside of the bounds of the domain.
        """
        if isinstance(value, bool | np.bool_):
            raise TypeError(f"Boolean {value!r} is not a valid integer for domain {self.name}")
        # bounds may be narrower than the range of the underlying type
        if type(value) is self.type and self.contains(value):
            return value
        try:
            as_int = operator.index(value)
        except TypeError:
            raise TypeError(f"Value {value!r} of type {type(value).__name__} is not an integer") from None
        if not self.contains(as_int):
            raise FractionOverflowError(f"IntegerDomain.cast({as_int})", self.name)
        return self.type(as_int)

    def __str__(self) -> str:
        if not self.bounded:
            return self.name
        return f"{self.name}[{self.min_value}, {self.max_value}]"


def _numpy_domain(np_type: type[np.signedinteger]) -> IntegerDomain:
    info = np.iinfo(np_type)
    return IntegerDomain(
        name=np.dtype(np_type).name,
        type=np_type,
        min_value=int(info.min),
        max_value=int(info.max),
    )


PYTHON_INT = IntegerDomain(name="int", type=int)
INT8 = _numpy_domain(np.int8)
INT16 = _numpy_domain(np.int16)
INT32 = _numpy_domain(np.int32)
INT64 = _numpy_domain(np.int64)

_REGISTRY: frozendict[Any, IntegerDomain] = frozendict(
    {
        int: PYTHON_INT,
        np.int8: INT8,
        np.int16: INT16,
        np.int32: INT32,
        np.int64: INT64,
    }
)


def register_domain(domain: IntegerDomain) -> IntegerDomain:
    """Makes ``domain_of`` resolve values of ``domain.type`` to the given domain."""
    global _REGISTRY
    _REGISTRY = _REGISTRY.set(domain.type, domain)
    _lookup_numpy_domain.cache_clear()
    return domain


def registered_domains() -> frozendict[Any, IntegerDomain]:
    return _REGISTRY


@lru_cache(maxsize=None)
def _lookup_numpy_domain(np_type: type[np.signedinteger]) -> IntegerDomain:
    # platform aliases like np.longlong are not registered under their own type
    if np_type in _REGISTRY:
        return _REGISTRY[np_type]
    return _numpy_domain(np_type)


## domain_of #####################################
@overload
def domain_of(value: bool) -> IntegerDomain:
    raise TypeError(f"Boolean {value!r} cannot be used as an integer")


@overload
def domain_of(value: int) -> IntegerDomain:
    # subclasses of int may have been registered separately
    return _REGISTRY.get(type(value), PYTHON_INT)


@overload
def domain_of(value: np.signedinteger) -> IntegerDomain:
    return _lookup_numpy_domain(type(value))


@overload
def domain_of(value: object) -> IntegerDomain:
    for cls in type(value).__mro__:
        if cls in _REGISTRY:
            return _REGISTRY[cls]
    raise TypeError(f"No integer domain registered for type {type(value).__name__}")


@dispatch
def domain_of(value):
    """Integer domain of a value, resolved from its type.

    Raises:
        TypeError: If the value is a boolean or no domain is registered for its type.
    """
    del value
    raise NotImplementedError()
