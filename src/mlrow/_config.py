"""
Global configuration for mlrow.

Provides:
- Representation selector thresholds (size and density)
- Environment variable overrides
- Temporary overrides via the ``thresholds()`` context manager

Environment:
    MLROW_MIN_SPARSE_SIZE       overrides MIN_SIZE_FOR_SPARSE_REPRESENTATION
    MLROW_MAX_SPARSE_DENSITY    overrides MAX_DENSITY_FOR_SPARSE_REPRESENTATION

Example:
    >>> import mlrow
    >>> mlrow.set_thresholds(min_size=10)
    >>> with mlrow.thresholds(max_density=0.1):
    ...     row = mlrow.MLRow.from_numbers([0] * 20)
"""

import logging
import os
from contextlib import contextmanager
from typing import Iterator, Optional, Tuple, Union

from ._errors import ConfigError

logger = logging.getLogger("mlrow.config")

__all__ = [
    'MIN_SIZE_FOR_SPARSE_REPRESENTATION',
    'MAX_DENSITY_FOR_SPARSE_REPRESENTATION',
    'get_config',
    'set_thresholds',
    'get_thresholds',
    'reset_thresholds',
    'thresholds',
]


# =============================================================================
# Policy Constants
# =============================================================================

# Below this length sparse bookkeeping costs more than it saves.
MIN_SIZE_FOR_SPARSE_REPRESENTATION = 1000

# At or above this fraction of non-zeros a flat store is cheaper.
MAX_DENSITY_FOR_SPARSE_REPRESENTATION = 0.5

ENV_MIN_SIZE = "MLROW_MIN_SPARSE_SIZE"
ENV_MAX_DENSITY = "MLROW_MAX_SPARSE_DENSITY"


def _validate_min_size(value: Union[int, str]) -> int:
    if isinstance(value, str):
        try:
            size = int(value.strip())
        except ValueError:
            raise ConfigError(f"min_size must be an integer, got {value!r}") from None
    elif isinstance(value, bool) or not hasattr(value, '__index__'):
        raise ConfigError(f"min_size must be an integer, got {value!r}")
    else:
        size = value.__index__()
    if size < 0:
        raise ConfigError(f"min_size must be non-negative, got {size}")
    return size


def _validate_max_density(value: Union[float, str]) -> float:
    if isinstance(value, bool):
        raise ConfigError(f"max_density must be a number, got {value!r}")
    try:
        density = float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"max_density must be a number, got {value!r}") from None
    if not 0.0 <= density <= 1.0:
        raise ConfigError(f"max_density must be in [0, 1], got {density}")
    return density


# =============================================================================
# Global Configuration State
# =============================================================================

class _Config:
    """
    Global configuration singleton.

    Thresholds start from the module constants, optionally replaced by
    environment variables the first time they are read.
    """

    def __init__(self):
        self._min_size = MIN_SIZE_FOR_SPARSE_REPRESENTATION
        self._max_density = MAX_DENSITY_FOR_SPARSE_REPRESENTATION
        self._loaded = False

    def _ensure_loaded(self) -> None:
        """Apply environment overrides once, on first access."""
        if self._loaded:
            return

        # Both values are checked before either is applied.
        env_size = os.environ.get(ENV_MIN_SIZE)
        env_density = os.environ.get(ENV_MAX_DENSITY)
        min_size = _validate_min_size(env_size) if env_size else None
        max_density = _validate_max_density(env_density) if env_density else None

        if min_size is not None:
            self._min_size = min_size
            logger.info("%s override: min_size=%d", ENV_MIN_SIZE, min_size)
        if max_density is not None:
            self._max_density = max_density
            logger.info("%s override: max_density=%s", ENV_MAX_DENSITY, max_density)
        self._loaded = True

    @property
    def min_size_for_sparse(self) -> int:
        """Smallest row length eligible for the sparse representation."""
        self._ensure_loaded()
        return self._min_size

    @min_size_for_sparse.setter
    def min_size_for_sparse(self, value: int):
        self._ensure_loaded()
        self._min_size = _validate_min_size(value)

    @property
    def max_density_for_sparse(self) -> float:
        """Non-zero fraction below which the sparse representation is used."""
        self._ensure_loaded()
        return self._max_density

    @max_density_for_sparse.setter
    def max_density_for_sparse(self, value: float):
        self._ensure_loaded()
        self._max_density = _validate_max_density(value)

    def reset(self) -> None:
        """Forget overrides; the next read reloads constants and environment."""
        self._min_size = MIN_SIZE_FOR_SPARSE_REPRESENTATION
        self._max_density = MAX_DENSITY_FOR_SPARSE_REPRESENTATION
        self._loaded = False


_config = _Config()


# =============================================================================
# Public API
# =============================================================================

def get_config() -> _Config:
    """Get global configuration instance."""
    return _config


def set_thresholds(
    min_size: Optional[int] = None,
    max_density: Optional[float] = None,
) -> None:
    """
    Set the representation selector thresholds.

    Args:
        min_size: Minimum row length for the sparse representation
        max_density: Density below which the sparse representation is used

    Raises:
        ConfigError: If a value is out of range
    """
    # Validate both first; a rejected call leaves the thresholds unchanged.
    if min_size is not None:
        min_size = _validate_min_size(min_size)
    if max_density is not None:
        max_density = _validate_max_density(max_density)

    if min_size is not None:
        _config.min_size_for_sparse = min_size
    if max_density is not None:
        _config.max_density_for_sparse = max_density
    logger.info(
        "Sparse thresholds set: min_size=%d, max_density=%s",
        _config.min_size_for_sparse, _config.max_density_for_sparse,
    )


def get_thresholds() -> Tuple[int, float]:
    """
    Get current selector thresholds.

    Returns:
        Tuple of (min_size, max_density)
    """
    return (_config.min_size_for_sparse, _config.max_density_for_sparse)


def reset_thresholds() -> None:
    """Restore thresholds to the constants (and environment overrides)."""
    _config.reset()


@contextmanager
def thresholds(
    min_size: Optional[int] = None,
    max_density: Optional[float] = None,
) -> Iterator[Tuple[int, float]]:
    """
    Temporarily override selector thresholds.

    Not thread-safe: the override is process-wide while the block runs.

    Yields:
        The thresholds in effect inside the block
    """
    saved = get_thresholds()
    set_thresholds(min_size=min_size, max_density=max_density)
    try:
        yield get_thresholds()
    finally:
        _config.min_size_for_sparse, _config.max_density_for_sparse = saved
