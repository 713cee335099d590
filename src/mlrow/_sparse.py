"""
SparseMLRow - only non-empty (index, value) pairs stored.

Storage:
    _elements: dict index -> value, populated in ascending index order so
               iteration over it is already sorted
    _indices:  int64 array of the same keys, ascending (vectorized fills)
    _length:   declared logical length, possibly far beyond the stored keys
    _empty:    value returned for every in-range index that is not stored

Complexity:
    apply(i)      O(1) dict lookup
    iterator()    O(length)
    non_zeros()   O(stored) - no scan over absent indices
    to_vector()   O(length), since the target is dense

Construction:
    from_sparse_collection(pairs, true_length, empty_value)
        Pairs are absorbed in order; when an index repeats, the last pair
        wins. Indices outside [0, true_length) are rejected immediately.
    from_numeric_seq(values)
        Keeps positions whose coercion is non-zero; the empty value is
        MLDouble(0.0).
"""

from typing import Any, Dict, Iterable, Iterator, List, Tuple, TYPE_CHECKING

import numpy as np

from ._base import MLRow
from ._builder import RowBuilder
from ._errors import DimensionMismatchError, RowTypeError, SparseConstructionError
from ._value import MLDouble, ZERO
from ._vector import MLVector

if TYPE_CHECKING:
    from scipy.sparse import spmatrix

__all__ = ['SparseMLRow']


def _validate_length(true_length) -> int:
    if isinstance(true_length, bool) or not hasattr(true_length, '__index__'):
        raise SparseConstructionError(
            f"true_length must be an integer, got {type(true_length).__name__}"
        )
    true_length = true_length.__index__()
    if true_length < 0:
        raise SparseConstructionError(f"true_length must be non-negative, got {true_length}")
    return true_length


class SparseMLRow(MLRow):
    """
    Row backed by an ordered index -> value mapping.

    Use for long rows with few interesting entries. Build with
    ``from_sparse_collection()`` or ``from_numeric_seq()``; the constructor
    is internal.

    Example:
        >>> row = SparseMLRow.from_numeric_seq([MLInt(0), MLInt(0), MLInt(5)])
        >>> row[0]
        MLDouble(0.0)
        >>> list(row.non_zeros())
        [(2, MLInt(5))]
    """

    __slots__ = ("_elements", "_indices", "_length", "_empty")

    def __init__(self, elements: Dict[int, Any], true_length: int, empty_value: Any):
        """
        Internal constructor.

        Args:
            elements: Mapping with keys already validated and inserted in
                      ascending order (taken over without copying)
            true_length: Logical length
            empty_value: Value for absent indices
        """
        self._elements = elements
        self._indices = np.fromiter(elements.keys(), dtype=np.int64, count=len(elements))
        self._indices.setflags(write=False)
        self._length = true_length
        self._empty = empty_value

    # =========================================================================
    # Construction
    # =========================================================================

    @classmethod
    def from_sparse_collection(
        cls,
        elements: Iterable[Tuple[int, Any]],
        true_length: int,
        empty_value: Any,
    ) -> "SparseMLRow":
        """
        Build from explicit (index, value) pairs.

        Args:
            elements: Pairs in any order; a repeated index keeps its last value
            true_length: Logical length of the row
            empty_value: Value returned for indices not in ``elements``

        Raises:
            SparseConstructionError: If true_length is negative or any index
                is not an integer in [0, true_length)
        """
        true_length = _validate_length(true_length)

        mapping: Dict[int, Any] = {}
        for pair in elements:
            try:
                index, value = pair
            except (TypeError, ValueError):
                raise SparseConstructionError(
                    f"sparse elements must be (index, value) pairs, got {pair!r}"
                ) from None
            if isinstance(index, bool) or not hasattr(index, '__index__'):
                raise SparseConstructionError(
                    f"sparse index must be an integer, got {type(index).__name__}"
                )
            index = index.__index__()
            if index < 0 or index >= true_length:
                raise SparseConstructionError(
                    f"sparse index {index} out of bounds [0, {true_length})"
                )
            mapping[index] = value

        ordered = dict(sorted(mapping.items(), key=lambda kv: kv[0]))
        return cls(ordered, true_length, empty_value)

    @classmethod
    def from_numeric_seq(cls, values: Iterable) -> "SparseMLRow":
        """Keep the entries of a dense sequence whose coercion is non-zero."""
        values = tuple(values)
        elements = {i: v for i, v in enumerate(values) if v.to_number() != 0}
        return cls(elements, len(values), ZERO)

    @classmethod
    def from_seq(cls, values: Iterable) -> "SparseMLRow":
        return cls.from_numeric_seq(values)

    @classmethod
    def of(cls, *values) -> "SparseMLRow":
        return cls.from_numeric_seq(values)

    @classmethod
    def from_scipy(cls, matrix: 'spmatrix') -> "SparseMLRow":
        """
        Build from a 1 x n or n x 1 scipy sparse matrix or array.

        Stored entries become MLDouble values; explicit zeros are dropped.

        Raises:
            RowTypeError: If matrix is not a scipy sparse object
            DimensionMismatchError: If the input is 2-D and neither dimension is 1
        """
        from scipy import sparse

        if not sparse.issparse(matrix):
            raise RowTypeError(f"Expected a scipy sparse matrix, got {type(matrix).__name__}")
        shape = matrix.shape
        if len(shape) not in (1, 2) or (len(shape) == 2 and 1 not in shape):
            raise DimensionMismatchError(
                f"Expected a single row or column, got shape {shape}"
            )

        coo = matrix.tocoo(copy=True)
        coo.sum_duplicates()
        if len(shape) == 1:
            # 1-D sparse array (scipy >= 1.13)
            positions, length = coo.coords[0], shape[0]
        elif shape[0] == 1:
            positions, length = coo.col, shape[1]
        else:
            positions, length = coo.row, shape[0]

        elements = {
            int(i): MLDouble(float(x))
            for i, x in sorted(zip(positions, coo.data))
            if x != 0
        }
        return cls(elements, length, ZERO)

    # =========================================================================
    # Row Interface
    # =========================================================================

    @property
    def length(self) -> int:
        return self._length

    @property
    def is_sparse(self) -> bool:
        return True

    def apply(self, index: int) -> Any:
        return self._elements.get(self._check_index(index), self._empty)

    def iterator(self) -> Iterator[Any]:
        elements, empty = self._elements, self._empty
        return (elements.get(i, empty) for i in range(self._length))

    def non_zeros(self) -> Iterator[Tuple[int, Any]]:
        # Generator: nothing is coerced until the caller iterates.
        if self._has_absent_indices() and self._empty.to_number() != 0:
            # Absent entries are non-zero too; only a full scan is correct.
            for i, value in enumerate(self.iterator()):
                if value.to_number() != 0:
                    yield i, value
            return
        for i, value in self._elements.items():
            if value.to_number() != 0:
                yield i, value

    def new_row_builder(self) -> RowBuilder["SparseMLRow"]:
        """Builder that skips values equal to this row's empty value."""
        empty = self._empty

        def finalize(values: List) -> "SparseMLRow":
            elements = {
                i: v for i, v in enumerate(values)
                if v is not empty and v != empty
            }
            return SparseMLRow(elements, len(values), empty)

        return RowBuilder(finalize)

    def to_vector(self) -> MLVector:
        fill = self._empty.to_number() if self._has_absent_indices() else 0.0
        data = np.full(self._length, fill, dtype=np.float64)
        if self._elements:
            data[self._indices] = np.fromiter(
                (v.to_number() for v in self._elements.values()),
                dtype=np.float64,
                count=len(self._elements),
            )
        return MLVector(data)

    # =========================================================================
    # Sparse Accessors
    # =========================================================================

    @property
    def empty_value(self) -> Any:
        return self._empty

    @property
    def stored_count(self) -> int:
        """Number of explicitly stored pairs."""
        return len(self._elements)

    @property
    def indices(self) -> np.ndarray:
        """Stored indices, ascending (copy)."""
        return self._indices.copy()

    def items(self) -> Iterator[Tuple[int, Any]]:
        """Stored (index, value) pairs, ascending, without coercing anything."""
        return iter(self._elements.items())

    def _has_absent_indices(self) -> bool:
        return len(self._elements) < self._length

    def __repr__(self) -> str:
        return f"SparseMLRow(length={self._length}, stored={len(self._elements)})"
