"""
MLVector - dense numeric companion of MLRow.

A row holds arbitrary scalar values; its vector holds their numeric
coercions as a contiguous float64 array. Conversion is always explicit:

    row.to_vector()          # row -> vector
    vector.to_row()          # vector -> row (representation auto-selected)
    MLRow.from_vector(vec)   # same as above
"""

from typing import Iterable, Iterator, TYPE_CHECKING, Union

import numpy as np

from ._errors import DimensionMismatchError, check_index

if TYPE_CHECKING:
    from ._base import MLRow

__all__ = ['MLVector']


class MLVector:
    """
    Immutable dense vector of float64 values.

    The backing array is owned by the vector and marked read-only; every
    accessor that hands out an array returns a copy.

    Example:
        >>> v = MLVector.from_values([1, 0, 2])
        >>> v.dot(v)
        5.0
        >>> v.to_row()
        DenseMLRow(length=3)
    """

    __slots__ = ("_data",)

    def __init__(self, data: np.ndarray):
        """
        Internal constructor - use from_values() or from_numpy() instead.

        Args:
            data: 1-D float64 array, taken over without copying
        """
        data.setflags(write=False)
        self._data = data

    # =========================================================================
    # Construction
    # =========================================================================

    @classmethod
    def from_values(cls, values: Iterable[float]) -> "MLVector":
        """Build from an iterable of plain numbers."""
        return cls(np.fromiter((float(v) for v in values), dtype=np.float64))

    @classmethod
    def from_numpy(cls, array: np.ndarray) -> "MLVector":
        """Build from a 1-D array (copied)."""
        array = np.asarray(array)
        if array.ndim != 1:
            raise DimensionMismatchError(
                f"MLVector requires a 1-D array, got shape {array.shape}"
            )
        return cls(np.array(array, dtype=np.float64, copy=True))

    @classmethod
    def zeros(cls, length: int) -> "MLVector":
        return cls(np.zeros(length, dtype=np.float64))

    # =========================================================================
    # Element Access
    # =========================================================================

    def __len__(self) -> int:
        return self._data.shape[0]

    @property
    def length(self) -> int:
        return self._data.shape[0]

    def __getitem__(self, index: int) -> float:
        return float(self._data[check_index(index, len(self), "vector")])

    def __iter__(self) -> Iterator[float]:
        return (float(x) for x in self._data)

    def to_numpy(self) -> np.ndarray:
        """Return a writable copy of the data."""
        return self._data.copy()

    def tolist(self) -> list:
        return self._data.tolist()

    # =========================================================================
    # Arithmetic
    # =========================================================================

    def _check_same_length(self, other: "MLVector", op: str) -> None:
        if len(self) != len(other):
            raise DimensionMismatchError(
                f"{op}: length mismatch ({len(self)} vs {len(other)})"
            )

    def dot(self, other: "MLVector") -> float:
        self._check_same_length(other, "dot")
        return float(np.dot(self._data, other._data))

    def norm(self) -> float:
        """Euclidean norm."""
        return float(np.linalg.norm(self._data))

    def __add__(self, other: "MLVector") -> "MLVector":
        if not isinstance(other, MLVector):
            return NotImplemented
        self._check_same_length(other, "add")
        return MLVector(self._data + other._data)

    def __sub__(self, other: "MLVector") -> "MLVector":
        if not isinstance(other, MLVector):
            return NotImplemented
        self._check_same_length(other, "sub")
        return MLVector(self._data - other._data)

    def __mul__(self, scalar: Union[int, float]) -> "MLVector":
        if not isinstance(scalar, (int, float, np.number)):
            return NotImplemented
        return MLVector(self._data * float(scalar))

    __rmul__ = __mul__

    # =========================================================================
    # Conversion
    # =========================================================================

    def to_row(self) -> "MLRow":
        """Convert to a row, letting the selector pick the representation."""
        from ._selector import choose_representation
        from ._value import MLDouble
        return choose_representation([MLDouble(x) for x in self])

    # =========================================================================
    # Magic Methods
    # =========================================================================

    def __eq__(self, other) -> bool:
        if not isinstance(other, MLVector):
            return NotImplemented
        return bool(np.array_equal(self._data, other._data))

    __hash__ = None

    def __repr__(self) -> str:
        n = len(self)
        if n <= 6:
            data_str = str(self._data.tolist())
        else:
            data_str = str(self._data[:3].tolist() + ['...'] + self._data[-3:].tolist())
        return f"MLVector({data_str})"
