"""
mlrow - dense and sparse rows of numeric-capable values.

A row is one record of scalar values, used standalone as a feature or
parameter vector or as a record inside a table. Two representations share
one contract:

    DenseMLRow:  every element stored by position, O(1) access
    SparseMLRow: only non-empty (index, value) pairs stored, plus a declared
                 length and an empty value for everything else

The representation is chosen automatically from the row's length and
non-zero density (see ``choose_representation``), and never changes after
construction.

Usage:
    >>> import mlrow
    >>> row = mlrow.MLRow.from_numbers([0] * 99 + [1])
    >>> row.is_sparse
    False
    >>> row = mlrow.MLRow.from_numbers([0] * 1990 + [1] * 10)
    >>> row.is_sparse
    True
    >>> [i for i, _ in row.non_zeros()][:3]
    [1990, 1991, 1992]

    # Explicit sparse construction
    >>> sp = mlrow.SparseMLRow.from_sparse_collection(
    ...     [(3, mlrow.MLDouble(2.5))], true_length=10, empty_value=mlrow.ZERO)
    >>> sp.to_vector()[3]
    2.5

    # Thresholds are configurable
    >>> with mlrow.thresholds(min_size=10):
    ...     mlrow.MLRow.from_numbers([0] * 19 + [1]).is_sparse
    True
"""

__version__ = "0.1.0"

from ._errors import (
    MLRowError,
    RowIndexError,
    SparseConstructionError,
    ValueCoercionError,
    RowTypeError,
    ConfigError,
    DimensionMismatchError,
)

from ._config import (
    MIN_SIZE_FOR_SPARSE_REPRESENTATION,
    MAX_DENSITY_FOR_SPARSE_REPRESENTATION,
    get_config,
    set_thresholds,
    get_thresholds,
    reset_thresholds,
    thresholds,
)

from ._value import (
    SupportsToNumber,
    MLValue,
    MLDouble,
    MLInt,
    MLString,
    ZERO,
    as_value,
)

from ._vector import MLVector
from ._builder import RowBuilder
from ._base import MLRow
from ._dense import DenseMLRow
from ._sparse import SparseMLRow
from ._selector import choose_representation, prefers_sparse

__all__ = [
    # Version
    "__version__",
    # Rows
    "MLRow",
    "DenseMLRow",
    "SparseMLRow",
    "RowBuilder",
    "choose_representation",
    "prefers_sparse",
    # Vector
    "MLVector",
    # Values
    "SupportsToNumber",
    "MLValue",
    "MLDouble",
    "MLInt",
    "MLString",
    "ZERO",
    "as_value",
    # Configuration
    "MIN_SIZE_FOR_SPARSE_REPRESENTATION",
    "MAX_DENSITY_FOR_SPARSE_REPRESENTATION",
    "get_config",
    "set_thresholds",
    "get_thresholds",
    "reset_thresholds",
    "thresholds",
    # Error handling
    "MLRowError",
    "RowIndexError",
    "SparseConstructionError",
    "ValueCoercionError",
    "RowTypeError",
    "ConfigError",
    "DimensionMismatchError",
]
