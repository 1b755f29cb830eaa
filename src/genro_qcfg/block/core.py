# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Block - the in-memory representation of a qcfg configuration.

This module provides the Block class, the container for hierarchical
configuration data, and ConfigTree, the root block of a named
configuration. A Block owns a set of named rows and a set of named child
blocks; rows own their column values.

Lookup Patterns:
    - Plain: ``get_<type>(block, row, col, default)`` looks in a child block
    - Self: ``self_<type>(row, col, default)`` looks in the block itself
    - Nested: ``nested_<type>(path, row, col, default)`` descends first

Every lookup returns the caller's default when the block, row or column is
missing, or when the stored text does not parse as the requested type.

Example:
    Basic usage::

        cfg = ConfigTree('app')
        cfg.edit_entry('server', 'main', 'port', '8080')

        cfg.get_int('server', 'main', 'port', 80)        # 8080
        cfg.get_str('server', 'main', 'host', 'localhost')  # 'localhost'

        server = cfg.resolve(['server'])
        server.self_int('main', 'port', 80)               # 8080
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any, Callable, Iterator, Sequence, TypeVar

from ..node import Row

logger = logging.getLogger(__name__)

T = TypeVar('T')

INT32_RANGE = (-(2 ** 31), 2 ** 31 - 1)
INT64_RANGE = (-(2 ** 63), 2 ** 63 - 1)

_INT_TEXT = re.compile(r'[+-]?[0-9]+')


def _to_str(text: str) -> str:
    return text


def _int_converter(bounds: tuple[int, int]) -> Callable[[str], int]:
    """Build a converter accepting decimal integers within bounds."""
    low, high = bounds

    def convert(text: str) -> int:
        if not _INT_TEXT.fullmatch(text):
            raise ValueError(f"not an integer: {text!r}")
        value = int(text)
        if value < low or value > high:
            raise ValueError(f"integer out of range: {text!r}")
        return value

    return convert


_to_int32 = _int_converter(INT32_RANGE)
_to_int64 = _int_converter(INT64_RANGE)


def _to_float(text: str) -> float:
    if not text.isascii() or '_' in text:
        raise ValueError(f"not a float: {text!r}")
    return float(text)


class Block:
    """A named container of rows and child blocks.

    Block provides:
    - Typed lookups with defaults (str, int, int64, float) in plain, self
      and nested variants
    - Introspection: list_blocks(), list_rows(), list_columns(), row_exists()
    - Navigation: resolve(path)
    - Editing: edit_entry() with autocreate
    - Serialization: dumps() / write(path)

    Attributes:
        name: The block's name.
        source_file: File that defined the block ('' if built in memory).
        rows: Mapping of row name to Row.
        children: Mapping of child block name to Block.

    Example:
        >>> block = Block('root')
        >>> block.edit_entry('db', 'main', 'host', 'localhost')
        >>> block.get_str('db', 'main', 'host', '')
        'localhost'
    """

    __slots__ = ('name', 'source_file', 'rows', 'children')

    def __init__(self, name: str, source_file: str = '') -> None:
        """Initialize an empty Block.

        Args:
            name: The block's name.
            source_file: Informational name of the file defining the block.
        """
        self.name = name
        self.source_file = source_file
        self.rows: dict[str, Row] = {}
        self.children: dict[str, Block] = {}

    # ==================== Special Methods ====================

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({self.name!r}, "
            f"blocks={sorted(self.children)}, rows={sorted(self.rows)})"
        )

    def __len__(self) -> int:
        """Return the number of direct child blocks."""
        return len(self.children)

    def __iter__(self) -> Iterator[Block]:
        """Iterate over direct child blocks."""
        return iter(self.children.values())

    def __contains__(self, name: str) -> bool:
        """Check if a direct child block exists."""
        return name in self.children

    # ==================== Structure ====================

    def add_block(self, name: str, source_file: str = '') -> Block:
        """Create a child block, replacing any existing child of that name.

        Args:
            name: Name of the new child block.
            source_file: Informational name of the defining file.

        Returns:
            The new child Block.
        """
        if name in self.children:
            logger.debug("block %r: replacing child block %r", self.name, name)
        child = Block(name, source_file)
        self.children[name] = child
        return child

    def add_row(self, name: str, columns: dict[str, str] | None = None) -> Row:
        """Create a row, replacing any existing row of that name."""
        row = Row(name, columns)
        self.rows[name] = row
        return row

    def resolve(self, path: Sequence[str]) -> Block | None:
        """Return the block found by descending through path.

        Args:
            path: Sequence of child block names. Empty means self.

        Returns:
            The Block at the end of path, or None if a segment is missing.

        Example:
            >>> cfg.resolve(['oneblock', 'lowerblock0'])
        """
        current = self
        for name in path:
            child = current.children.get(name)
            if child is None:
                logger.debug("resolve: path %s failed at %r", ':'.join(path), name)
                return None
            current = child
        return current

    # ==================== Lookup Core ====================

    def _column_text(self, row: str, col: str) -> str | None:
        """Return the raw text of a column in this block, or None."""
        row_obj = self.rows.get(row)
        if row_obj is None:
            logger.debug("block %r: row %r not found", self.name, row)
            return None
        return row_obj.columns.get(col)

    def _convert(self, text: str | None, default: T, convert: Callable[[str], T]) -> T:
        if text is None:
            return default
        try:
            return convert(text)
        except ValueError:
            logger.debug("block %r: cannot convert %r, using default", self.name, text)
            return default

    def _lookup_self(self, row: str, col: str, default: T, convert: Callable[[str], T]) -> T:
        return self._convert(self._column_text(row, col), default, convert)

    def _lookup(self, tbl: str, row: str, col: str, default: T, convert: Callable[[str], T]) -> T:
        child = self.children.get(tbl)
        if child is None:
            logger.debug("block %r: child block %r not found", self.name, tbl)
            return default
        return child._lookup_self(row, col, default, convert)

    def _lookup_nested(
        self,
        path: Sequence[str],
        row: str,
        col: str,
        default: T,
        convert: Callable[[str], T],
    ) -> T:
        """Nested lookup dispatch.

        An empty path uses self semantics, a single name uses plain
        semantics, a longer path resolves its parent part first.
        """
        if not path:
            return self._lookup_self(row, col, default, convert)
        parent = self.resolve(path[:-1])
        if parent is None:
            return default
        return parent._lookup(path[-1], row, col, default, convert)

    # ==================== Plain Lookups ====================

    def get_str(self, tbl: str, row: str, col: str, default: str = '') -> str:
        """Get a column of a row of a child block as a string.

        Args:
            tbl: Name of the child block.
            row: Row name within that block.
            col: Column name within that row.
            default: Returned if the block, row or column is missing.

        Returns:
            The stored value, or default.
        """
        return self._lookup(tbl, row, col, default, _to_str)

    def get_int(self, tbl: str, row: str, col: str, default: int = 0) -> int:
        """Get a column as a 32-bit integer, or default if missing/invalid."""
        return self._lookup(tbl, row, col, default, _to_int32)

    def get_int64(self, tbl: str, row: str, col: str, default: int = 0) -> int:
        """Get a column as a 64-bit integer, or default if missing/invalid."""
        return self._lookup(tbl, row, col, default, _to_int64)

    def get_float(self, tbl: str, row: str, col: str, default: float = 0.0) -> float:
        """Get a column as a float, or default if missing/invalid."""
        return self._lookup(tbl, row, col, default, _to_float)

    # ==================== Self Lookups ====================

    def self_str(self, row: str, col: str, default: str = '') -> str:
        """Like get_str(), on a row of this block."""
        return self._lookup_self(row, col, default, _to_str)

    def self_int(self, row: str, col: str, default: int = 0) -> int:
        """Like get_int(), on a row of this block."""
        return self._lookup_self(row, col, default, _to_int32)

    def self_int64(self, row: str, col: str, default: int = 0) -> int:
        """Like get_int64(), on a row of this block."""
        return self._lookup_self(row, col, default, _to_int64)

    def self_float(self, row: str, col: str, default: float = 0.0) -> float:
        """Like get_float(), on a row of this block."""
        return self._lookup_self(row, col, default, _to_float)

    # ==================== Nested Lookups ====================

    def nested_str(self, path: Sequence[str], row: str, col: str, default: str = '') -> str:
        """Like get_str(), on the block reached by path.

        Example:
            >>> cfg.nested_str(['oneblock', 'lowerblock0', 'lowerblock'],
            ...                'inner-row', 'user', 'nobody')
        """
        return self._lookup_nested(path, row, col, default, _to_str)

    def nested_int(self, path: Sequence[str], row: str, col: str, default: int = 0) -> int:
        return self._lookup_nested(path, row, col, default, _to_int32)

    def nested_int64(self, path: Sequence[str], row: str, col: str, default: int = 0) -> int:
        return self._lookup_nested(path, row, col, default, _to_int64)

    def nested_float(self, path: Sequence[str], row: str, col: str, default: float = 0.0) -> float:
        return self._lookup_nested(path, row, col, default, _to_float)

    # ==================== Introspection ====================

    def list_blocks(self) -> set[str]:
        """Return the names of the direct child blocks."""
        return set(self.children)

    def list_rows(self, tbl: str) -> set[str]:
        """Return the row names of a child block (empty if absent)."""
        child = self.children.get(tbl)
        if child is None:
            logger.debug("block %r: child block %r not found", self.name, tbl)
            return set()
        return set(child.rows)

    def list_columns(self, tbl: str, row: str) -> set[str]:
        """Return the column names of a row of a child block (empty if absent)."""
        child = self.children.get(tbl)
        if child is None:
            logger.debug("block %r: child block %r not found", self.name, tbl)
            return set()
        row_obj = child.rows.get(row)
        if row_obj is None:
            logger.debug("block %r: row %r not found in %r", self.name, row, tbl)
            return set()
        return set(row_obj.columns)

    def row_exists(self, tbl: str, row: str) -> bool:
        """True if the child block exists and contains the row."""
        child = self.children.get(tbl)
        return child is not None and row in child.rows

    # ==================== Convenience ====================

    def split_value(self, tbl: str, row: str, col: str, default: str = '') -> list[str]:
        """Comma-split the string value of a column.

        Items are not trimmed; a missing value splits the default.

        Example:
            >>> cfg.split_value('someblock', 'lmirror', 'plugins', '')
            ['transpath', 'split']
        """
        return self.get_str(tbl, row, col, default).split(',')

    def expand_list(self, tbl: str, row: str, col: str, target_row: str) -> set[str]:
        """Expand a list of keys into the union of the lists they name.

        The value at (tbl, row, col) is a comma-separated list of keys. Each
        key names a column of target_row in the same block, itself holding a
        comma-separated list. The result is the union of those lists.

        Args:
            tbl: Name of the child block holding both rows.
            row: Row holding the key list.
            col: Column holding the key list.
            target_row: Row whose columns are named by the keys.

        Returns:
            Set of members, without empty items. Empty if any argument is empty.

        Example:
            Given ``groups :: all=web,db;`` and
            ``members :: web=a,b; db=b,c;`` in block ``hosts``::

                cfg.expand_list('hosts', 'groups', 'all', 'members')
                # {'a', 'b', 'c'}
        """
        if not (tbl and row and col and target_row):
            return set()
        members: set[str] = set()
        for key in self.split_value(tbl, row, col, ''):
            if not key:
                continue
            members.update(
                item for item in self.split_value(tbl, target_row, key, '') if item
            )
        return members

    # ==================== Editing ====================

    def edit_entry(self, tbl: str, row: str, col: str, value: str) -> None:
        """Set a column value, creating the child block and row if needed.

        Args:
            tbl: Name of the child block.
            row: Row name within that block.
            col: Column name within that row.
            value: New column value.
        """
        child = self.children.get(tbl)
        if child is None:
            child = self.add_block(tbl)
        row_obj = child.rows.get(row)
        if row_obj is None:
            row_obj = child.add_row(row)
        row_obj.set(col, value)

    # ==================== Conversion ====================

    def as_dict(self) -> dict[str, Any]:
        """Return a nested dict snapshot of the block.

        Returns:
            ``{'rows': {row: {col: value}}, 'blocks': {name: {...}}}``
        """
        return {
            'rows': {name: dict(row.columns) for name, row in self.rows.items()},
            'blocks': {name: child.as_dict() for name, child in self.children.items()},
        }

    def dumps(self) -> str:
        """Serialize the child blocks of this block to qcfg text."""
        from ..writer import dumps
        return dumps(self)

    def write(self, path: str | Path) -> None:
        """Write the child blocks of this block to a qcfg file.

        The path is expanded (``~/``) and any existing file is truncated.
        """
        from ..writer import write
        write(self, path)


class ConfigTree(Block):
    """Root block of a named configuration.

    The name is the registration name used by ConfigRegistry; source_file
    is the expanded path of the top-level file ('' for in-memory configs).

    Example:
        >>> cfg = ConfigTree('app')
        >>> cfg.edit_entry('thirdblock', 'some-row', 'numProcs', '8')
        >>> cfg.get_int('thirdblock', 'some-row', 'numProcs', -1)
        8
    """

    __slots__ = ()
