"""
Row Base Class

This module defines the abstract base class every row representation
implements. Callers work only against ``MLRow``; which concrete class backs a
given row is decided once, at construction, by the representation selector.

Type Hierarchy:

    MLRow (ABC, collections.abc.Sequence)
    ├── DenseMLRow  - every element stored by position
    └── SparseMLRow - only non-empty (index, value) pairs stored

Contract:

1. Fixed length: ``len(row)`` never changes; valid indices are [0, length).
   Negative indices are out of range, they do not wrap around.

2. Transparent access: ``row[i]``, ``iter(row)`` and ``row.to_vector()``
   behave identically for both representations holding the same content.

3. Non-zero iteration: ``row.non_zeros()`` yields (index, value) pairs for
   exactly the entries whose numeric coercion is non-zero, in ascending
   index order. Merge-style algorithms across rows may rely on the order.

4. Immutability: no operation mutates a row after construction, so rows can
   be shared across threads without locking.

Example:

    row = MLRow.from_numbers([0, 0, 5, 0, 7])
    row[2]                   # MLInt(5)
    list(row.non_zeros())    # [(2, MLInt(5)), (4, MLInt(7))]
    row.to_vector()          # MLVector([0.0, 0.0, 5.0, 0.0, 7.0])
"""

from abc import abstractmethod
from collections.abc import Sequence
from typing import Any, Iterable, Iterator, Tuple, TYPE_CHECKING, Union

import numpy as np

from ._builder import RowBuilder
from ._errors import check_index
from ._vector import MLVector

if TYPE_CHECKING:
    from scipy.sparse import csr_matrix

__all__ = ['MLRow']


class MLRow(Sequence):
    """
    Abstract base class for all rows.

    Required (subclasses must implement):
        length: Logical number of elements
        apply(i): Value at index i
        non_zeros(): Ascending (index, value) pairs with non-zero coercion
        new_row_builder(): Builder producing a row of the same kind

    Optional (subclasses may override for efficiency):
        iterator(), to_vector(), to_scipy(), is_sparse
    """

    __slots__ = ()

    # =========================================================================
    # Abstract Interface
    # =========================================================================

    @property
    @abstractmethod
    def length(self) -> int:
        """Logical number of elements, including empty ones."""
        ...

    @abstractmethod
    def apply(self, index: int) -> Any:
        """Value at ``index``.

        Raises:
            RowIndexError: If index is not in [0, length)
        """
        ...

    @abstractmethod
    def non_zeros(self) -> Iterator[Tuple[int, Any]]:
        """Iterate (index, value) pairs whose value coerces to non-zero.

        Pairs come in ascending index order. Each call returns a fresh
        iterator.
        """
        ...

    @abstractmethod
    def new_row_builder(self) -> RowBuilder["MLRow"]:
        """Builder that finalizes into a row of the same kind as this one."""
        ...

    # =========================================================================
    # Iteration and Access
    # =========================================================================

    def iterator(self) -> Iterator[Any]:
        """Iterate all ``length`` values in index order."""
        return (self.apply(i) for i in range(self.length))

    def __iter__(self) -> Iterator[Any]:
        return self.iterator()

    def __len__(self) -> int:
        return self.length

    def __getitem__(self, index: Union[int, slice]):
        if isinstance(index, slice):
            builder = self.new_row_builder()
            builder.extend(self.apply(i) for i in range(*index.indices(self.length)))
            return builder.result()
        return self.apply(index)

    def _check_index(self, index: int) -> int:
        return check_index(index, self.length, type(self).__name__)

    # =========================================================================
    # Derived Properties
    # =========================================================================

    @property
    def is_sparse(self) -> bool:
        return False

    @property
    def nnz(self) -> int:
        """Number of entries with a non-zero coercion."""
        return sum(1 for _ in self.non_zeros())

    @property
    def density(self) -> float:
        """Fraction of entries with a non-zero coercion."""
        n = self.length
        return self.nnz / n if n > 0 else 0.0

    # =========================================================================
    # Conversion
    # =========================================================================

    def to_vector(self) -> MLVector:
        """Dense numeric vector of the coercions, same length and order."""
        return MLVector(np.fromiter(
            (v.to_number() for v in self.iterator()),
            dtype=np.float64,
            count=self.length,
        ))

    def to_numpy(self) -> np.ndarray:
        """Coercions as a writable float64 array."""
        return self.to_vector().to_numpy()

    def to_scipy(self) -> 'csr_matrix':
        """Convert to a 1 x length scipy CSR matrix."""
        from scipy.sparse import csr_matrix

        indices, data = [], []
        for i, value in self.non_zeros():
            indices.append(i)
            data.append(value.to_number())
        indptr = np.array([0, len(indices)], dtype=np.int64)
        return csr_matrix(
            (np.asarray(data, dtype=np.float64), np.asarray(indices, dtype=np.int64), indptr),
            shape=(1, self.length),
        )

    # =========================================================================
    # Companion Constructors
    # =========================================================================

    @staticmethod
    def of(*values) -> "MLRow":
        """Build a row from explicit values, auto-selecting representation."""
        from ._selector import choose_representation
        return choose_representation(values)

    @staticmethod
    def from_seq(values: Iterable) -> "MLRow":
        from ._selector import choose_representation
        return choose_representation(values)

    @staticmethod
    def from_numbers(numbers: Iterable) -> "MLRow":
        """Wrap plain numbers with ``as_value`` and build a row."""
        from ._selector import choose_representation
        from ._value import as_value
        return choose_representation([as_value(x) for x in numbers])

    @staticmethod
    def from_vector(vector: MLVector) -> "MLRow":
        return vector.to_row()

    @staticmethod
    def new_builder() -> RowBuilder["MLRow"]:
        """Generic builder; the representation is chosen at ``result()``."""
        from ._selector import choose_representation
        return RowBuilder(choose_representation)

    # =========================================================================
    # Magic Methods
    # =========================================================================

    def __eq__(self, other) -> bool:
        if not isinstance(other, MLRow):
            return NotImplemented
        if self.length != other.length:
            return False
        return all(a == b for a, b in zip(self.iterator(), other.iterator()))

    def __hash__(self) -> int:
        return hash((self.length, tuple(self.iterator())))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(length={self.length})"

    def __str__(self) -> str:
        return self.__repr__()
