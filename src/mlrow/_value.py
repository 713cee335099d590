"""
Scalar Values

Rows hold scalar values that expose a single capability: a numeric coercion
via ``to_number()``. Anything implementing that method can live in a row
(see ``SupportsToNumber``); this module also ships the small set of concrete
values the rest of the package needs.

Type Hierarchy:

    MLValue (ABC)
    ├── MLDouble   - float payload
    ├── MLInt      - int payload
    └── MLString   - text payload, coerces via float() or fails

Example:
    >>> as_value(3).to_number()
    3.0
    >>> MLString("abc").to_number()
    Traceback (most recent call last):
        ...
    mlrow._errors.ValueCoercionError: ...
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from numbers import Integral, Real
from typing import Any, Protocol, runtime_checkable

from ._errors import RowTypeError, ValueCoercionError

__all__ = [
    'SupportsToNumber',
    'MLValue',
    'MLDouble',
    'MLInt',
    'MLString',
    'ZERO',
    'as_value',
]


@runtime_checkable
class SupportsToNumber(Protocol):
    """Anything a row can hold."""

    def to_number(self) -> float:
        ...


class MLValue(ABC):
    """Abstract scalar value with a numeric coercion."""

    @abstractmethod
    def to_number(self) -> float:
        """Numeric coercion of this value.

        Raises:
            ValueCoercionError: If the value has no numeric meaning
        """
        ...

    @property
    def is_numeric(self) -> bool:
        return True


@dataclass(frozen=True)
class MLDouble(MLValue):
    value: float

    def to_number(self) -> float:
        return float(self.value)

    def __repr__(self) -> str:
        return f"MLDouble({self.value!r})"


@dataclass(frozen=True)
class MLInt(MLValue):
    value: int

    def to_number(self) -> float:
        return float(self.value)

    def __repr__(self) -> str:
        return f"MLInt({self.value!r})"


@dataclass(frozen=True)
class MLString(MLValue):
    """Text value. Only numeric-looking strings have a coercion."""
    value: str

    def to_number(self) -> float:
        try:
            return float(self.value)
        except ValueError:
            raise ValueCoercionError(
                f"cannot coerce string {self.value!r} to a number"
            ) from None

    @property
    def is_numeric(self) -> bool:
        try:
            float(self.value)
        except ValueError:
            return False
        return True

    def __repr__(self) -> str:
        return f"MLString({self.value!r})"


# Empty value of every sparse row derived from a numeric sequence.
ZERO = MLDouble(0.0)


def as_value(obj: Any) -> SupportsToNumber:
    """
    Wrap a plain Python/numpy scalar as a row value.

    Values that already implement ``to_number()`` are returned unchanged.

    Args:
        obj: bool, int, float, numpy scalar, str, or an existing value

    Returns:
        A value exposing ``to_number()``

    Raises:
        RowTypeError: If obj has no value wrapper
    """
    if isinstance(obj, SupportsToNumber):
        return obj
    if isinstance(obj, Integral):
        return MLInt(int(obj))
    if isinstance(obj, Real):
        return MLDouble(float(obj))
    if isinstance(obj, str):
        return MLString(obj)
    raise RowTypeError(f"Cannot convert {type(obj).__name__} to a row value")
