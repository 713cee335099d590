"""
Representation Selector

Decides, once per row, whether a sequence of values is stored densely or
sparsely:

    n  = len(values)
    nz = number of values whose coercion is non-zero

    n >= min_size and nz < n * max_density   ->  SparseMLRow.from_numeric_seq
    otherwise                                ->  DenseMLRow.from_seq

Thresholds default to MIN_SIZE_FOR_SPARSE_REPRESENTATION (1000) and
MAX_DENSITY_FOR_SPARSE_REPRESENTATION (0.5), read through the global
configuration, and can be overridden per call. The choice is never
revisited: rows are immutable.
"""

import logging
from typing import Iterable, Optional

from ._base import MLRow
from ._config import _validate_max_density, _validate_min_size, get_config
from ._dense import DenseMLRow
from ._sparse import SparseMLRow

logger = logging.getLogger("mlrow.selector")

__all__ = ['choose_representation', 'prefers_sparse']


def prefers_sparse(
    length: int,
    nnz: int,
    min_size: Optional[int] = None,
    max_density: Optional[float] = None,
) -> bool:
    """
    Apply the selection rule to precomputed counts.

    Args:
        length: Row length
        nnz: Number of non-zero entries
        min_size: Override for the size threshold
        max_density: Override for the density threshold
    """
    config = get_config()
    if min_size is None:
        min_size = config.min_size_for_sparse
    else:
        min_size = _validate_min_size(min_size)
    if max_density is None:
        max_density = config.max_density_for_sparse
    else:
        max_density = _validate_max_density(max_density)

    return length >= min_size and nnz < length * max_density


def choose_representation(
    values: Iterable,
    *,
    min_size: Optional[int] = None,
    max_density: Optional[float] = None,
) -> MLRow:
    """
    Choose a sparse or dense representation for ``values``.

    Args:
        values: Values exposing ``to_number()``; any iterable, consumed once
        min_size: Override for the size threshold
        max_density: Override for the density threshold

    Returns:
        SparseMLRow or DenseMLRow holding the same values

    Raises:
        ValueCoercionError: If a value has no numeric coercion
    """
    values = tuple(values)
    n = len(values)
    nnz = sum(1 for v in values if v.to_number() != 0)

    if prefers_sparse(n, nnz, min_size, max_density):
        row = SparseMLRow.from_numeric_seq(values)
    else:
        row = DenseMLRow.from_seq(values)

    logger.debug(
        "Selected %s for length=%d nnz=%d", type(row).__name__, n, nnz,
    )
    return row
