"""
Row builders.

A builder accumulates values one at a time and finalizes them into a row.
Each row kind supplies its own finalizer through ``new_row_builder()``, so
rebuilding a row from its own elements gives back a row of the same kind.

Builders are single-owner: they are not safe for concurrent writers. Once
``result()`` returns, the row is immutable and can be shared freely.
"""

from typing import Callable, Generic, Iterable, List, TypeVar

__all__ = ['RowBuilder']

R = TypeVar("R")


class RowBuilder(Generic[R]):
    """
    Accumulate values, then finalize with a row factory.

    Example:
        >>> b = DenseMLRow.of(MLInt(1)).new_row_builder()
        >>> _ = b.append(MLInt(2)).extend([MLInt(3), MLInt(4)])
        >>> b.result()
        DenseMLRow(length=3)
    """

    def __init__(self, finalize: Callable[[List], R]):
        self._finalize = finalize
        self._values: List = []

    def append(self, value) -> "RowBuilder[R]":
        self._values.append(value)
        return self

    def extend(self, values: Iterable) -> "RowBuilder[R]":
        self._values.extend(values)
        return self

    def __iadd__(self, value) -> "RowBuilder[R]":
        return self.append(value)

    def __len__(self) -> int:
        return len(self._values)

    def clear(self) -> None:
        self._values = []

    def result(self) -> R:
        """Finalize into a row. The builder keeps its contents."""
        return self._finalize(list(self._values))
