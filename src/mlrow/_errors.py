"""
Error handling for mlrow.

Every failure raised by this package is an ``MLRowError`` carrying a numeric
code. Subclasses also derive from the matching builtin exception so callers
can catch ``IndexError``/``ValueError``/``TypeError`` without importing
anything from here.

Nothing in this package retries or masks an error: all operations are pure
computations over in-memory data, so a failure is always a contract
violation and is reported to the caller.
"""

from typing import Optional

__all__ = [
    'MLRowError',
    'RowIndexError',
    'SparseConstructionError',
    'ValueCoercionError',
    'RowTypeError',
    'ConfigError',
    'DimensionMismatchError',
    'check_index',
]


# =============================================================================
# Error Codes
# =============================================================================

MLROW_OK = 0

# General errors (1-9)
MLROW_ERROR_UNKNOWN = 1

# Argument errors (10-19)
MLROW_ERROR_DIMENSION_MISMATCH = 11
MLROW_ERROR_INDEX_OUT_OF_BOUNDS = 14
MLROW_ERROR_MALFORMED_SPARSE = 15

# Type errors (20-29)
MLROW_ERROR_TYPE_ERROR = 20
MLROW_ERROR_COERCION = 22

# Configuration errors (60-69)
MLROW_ERROR_CONFIG = 60


_ERROR_MESSAGES = {
    MLROW_OK: "Success",
    MLROW_ERROR_UNKNOWN: "Unknown error",
    MLROW_ERROR_DIMENSION_MISMATCH: "Dimension mismatch",
    MLROW_ERROR_INDEX_OUT_OF_BOUNDS: "Index out of bounds",
    MLROW_ERROR_MALFORMED_SPARSE: "Malformed sparse row",
    MLROW_ERROR_TYPE_ERROR: "Type error",
    MLROW_ERROR_COERCION: "Value has no numeric coercion",
    MLROW_ERROR_CONFIG: "Invalid configuration",
}


# =============================================================================
# Exception Classes
# =============================================================================

class MLRowError(Exception):
    """
    Base exception for all mlrow errors.

    Attributes:
        code: One of the ``MLROW_ERROR_*`` codes
        message: Human readable description
    """

    OK = MLROW_OK
    ERROR_UNKNOWN = MLROW_ERROR_UNKNOWN
    ERROR_DIMENSION_MISMATCH = MLROW_ERROR_DIMENSION_MISMATCH
    ERROR_INDEX_OUT_OF_BOUNDS = MLROW_ERROR_INDEX_OUT_OF_BOUNDS
    ERROR_MALFORMED_SPARSE = MLROW_ERROR_MALFORMED_SPARSE
    ERROR_TYPE_ERROR = MLROW_ERROR_TYPE_ERROR
    ERROR_COERCION = MLROW_ERROR_COERCION
    ERROR_CONFIG = MLROW_ERROR_CONFIG

    default_code = MLROW_ERROR_UNKNOWN

    def __init__(self, message: Optional[str] = None, code: Optional[int] = None):
        if code is None:
            code = self.default_code
        self.code = code
        if message is None:
            message = _ERROR_MESSAGES.get(code, f"Unknown error (code={code})")
        self.message = message
        super().__init__(f"mlrow error {code}: {message}")

    @classmethod
    def from_code(cls, code: int, context: str = "") -> "MLRowError":
        """Create exception from error code with optional context."""
        base_msg = _ERROR_MESSAGES.get(code, "Unknown error")
        msg = f"{context}: {base_msg}" if context else base_msg
        return cls(msg, code)


class RowIndexError(MLRowError, IndexError):
    """Index outside ``[0, length)`` passed to a row or vector."""
    default_code = MLROW_ERROR_INDEX_OUT_OF_BOUNDS


class SparseConstructionError(MLRowError, ValueError):
    """Sparse pairs or declared length rejected at construction."""
    default_code = MLROW_ERROR_MALFORMED_SPARSE


class ValueCoercionError(MLRowError, TypeError):
    """A scalar value cannot produce a numeric coercion."""
    default_code = MLROW_ERROR_COERCION


class RowTypeError(MLRowError, TypeError):
    """Argument of the wrong kind, such as a float index or a dense matrix."""
    default_code = MLROW_ERROR_TYPE_ERROR


class ConfigError(MLRowError, ValueError):
    default_code = MLROW_ERROR_CONFIG


class DimensionMismatchError(MLRowError, ValueError):
    default_code = MLROW_ERROR_DIMENSION_MISMATCH


# =============================================================================
# Checking Helpers
# =============================================================================

def check_index(index, length: int, context: str = "row") -> int:
    """
    Validate a positional index against ``[0, length)``.

    Negative indices are rejected rather than wrapped around.

    Args:
        index: Candidate index (anything supporting ``__index__``)
        length: Logical length of the container
        context: Prefix for the error message

    Returns:
        The index as a plain int

    Raises:
        RowTypeError: If index is not an integer
        RowIndexError: If index is out of range
    """
    if isinstance(index, bool) or not hasattr(index, '__index__'):
        raise RowTypeError(
            f"{context} indices must be integers, not {type(index).__name__}"
        )
    index = index.__index__()
    if index < 0 or index >= length:
        raise RowIndexError(f"{context} index {index} out of bounds [0, {length})")
    return index
