# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Row class: a named set of column values inside a block."""

from __future__ import annotations

from typing import Iterable


class Row:
    """A named row in a Block.

    Each row has:
    - name: The row's unique name within its block
    - columns: Dictionary mapping column names to their string values

    Example:
        >>> row = Row('job', {'ratio': '0.3'})
        >>> row.name
        'job'
        >>> row.get('ratio')
        '0.3'
    """

    __slots__ = ('name', 'columns')

    def __init__(self, name: str, columns: dict[str, str] | None = None) -> None:
        """Initialize a Row.

        Args:
            name: The row's name.
            columns: Optional initial column values.
        """
        self.name = name
        self.columns: dict[str, str] = dict(columns) if columns else {}

    def __repr__(self) -> str:
        return f"Row({self.name!r}, {self.columns!r})"

    def __len__(self) -> int:
        return len(self.columns)

    def __contains__(self, column: str) -> bool:
        return column in self.columns

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Row):
            return NotImplemented
        return self.name == other.name and self.columns == other.columns

    def get(self, column: str, default: str | None = None) -> str | None:
        """Get a column value, or default if the column is missing."""
        return self.columns.get(column, default)

    def set(self, column: str, value: str) -> None:
        """Set a column value, adding the column if needed."""
        self.columns[column] = value

    def update(self, pairs: dict[str, str] | Iterable[tuple[str, str]]) -> None:
        """Merge column values into the row, overwriting existing columns.

        Args:
            pairs: A dict or an iterable of (column, value) tuples.
        """
        self.columns.update(pairs)
