"""
DenseMLRow - every element stored by position.

Targeted at rows whose values are mostly interesting (non-zero). Indexed
access is O(1); ``non_zeros()`` is a filtered scan over all elements.
"""

from typing import Any, Iterable, Iterator, Tuple

import numpy as np

from ._base import MLRow
from ._builder import RowBuilder
from ._vector import MLVector

__all__ = ['DenseMLRow']


class DenseMLRow(MLRow):
    """
    Row backed by an immutable tuple of values.

    The input sequence is captured into an owned tuple at construction, so
    later changes to the caller's list are not visible through the row.

    Example:
        >>> row = DenseMLRow.of(MLInt(1), MLInt(0), MLInt(2))
        >>> list(row.non_zeros())
        [(0, MLInt(1)), (2, MLInt(2))]
    """

    __slots__ = ("_row",)

    def __init__(self, row: Tuple[Any, ...]):
        """Internal constructor - use from_seq() or of() instead."""
        self._row = row

    @classmethod
    def from_seq(cls, values: Iterable) -> "DenseMLRow":
        return cls(tuple(values))

    @classmethod
    def of(cls, *values) -> "DenseMLRow":
        return cls(tuple(values))

    @property
    def length(self) -> int:
        return len(self._row)

    def apply(self, index: int) -> Any:
        return self._row[self._check_index(index)]

    def iterator(self) -> Iterator[Any]:
        return iter(self._row)

    def non_zeros(self) -> Iterator[Tuple[int, Any]]:
        return ((i, v) for i, v in enumerate(self._row) if v.to_number() != 0)

    def new_row_builder(self) -> RowBuilder["DenseMLRow"]:
        return RowBuilder(DenseMLRow.from_seq)

    def to_vector(self) -> MLVector:
        return MLVector(self.to_double_array())

    def to_double_array(self) -> np.ndarray:
        """Coercions of the stored values as a float64 array."""
        return np.fromiter(
            (v.to_number() for v in self._row),
            dtype=np.float64,
            count=len(self._row),
        )
