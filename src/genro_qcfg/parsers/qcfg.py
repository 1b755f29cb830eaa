# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Parser for qcfg configuration files.

Reads qcfg text (and, recursively, the files it includes) into a Block
tree. Each cleaned line is classified in this order:

    %include <path>     parse another file into the current block
    }                   close the current block
    %block <name>       open a child block (followed by a '{' line)
    += c=v; ...         continue the most recent row of the current block
    {                   ignored
    <row> :: c=v; ...   define a row (replacing an existing one)
    <row> += c=v; ...   continue a named row

Comments start at '#' and run to end of line; whitespace around lines,
names, keys and values is trimmed.

Lines that cannot be understood are logged and skipped, or raise
QcfgParseError when the parser is strict. Files that cannot be opened
always raise ConfigFileError.

Usage:
    >>> from genro_qcfg.parsers import parse_qcfg
    >>> cfg = parse_qcfg('''
    ... %block server
    ... {
    ...     main :: host=localhost; port=8080;
    ... }
    ... ''')
    >>> cfg.get_int('server', 'main', 'port', 80)
    8080
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Iterator

from ..block import Block, ConfigTree
from ..exceptions import ConfigFileError, IncludeCycleError, QcfgParseError
from ..paths import expand_path

logger = logging.getLogger(__name__)

NEW_ROW = '::'
ADD_ROW = '+='


def clean_line(line: str) -> str:
    """Drop the comment part of a line and trim surrounding whitespace."""
    pos = line.find('#')
    if pos >= 0:
        line = line[:pos]
    return line.strip()


def parse_columns(data: str) -> dict[str, str]:
    """Parse ``key=value; key=value`` pairs.

    Pieces with an empty key or without '=' are skipped.

    Example:
        >>> parse_columns(' a = 1; b=2;; =3; c ')
        {'a': '1', 'b': '2'}
    """
    columns: dict[str, str] = {}
    for piece in data.split(';'):
        key, sep, value = piece.partition('=')
        key = key.strip()
        if not key or not sep:
            continue
        columns[key] = value.strip()
    return columns


def _directive(line: str) -> tuple[str, str]:
    """Split a '%keyword argument' line into (lowercased keyword, argument)."""
    parts = line.split(None, 1)
    keyword = parts[0].lower()
    argument = parts[1].strip() if len(parts) > 1 else ''
    return keyword, argument


def _unquote(path: str) -> str:
    if len(path) >= 2 and path[0] == '"' and path[-1] == '"':
        return path[1:-1]
    return path


class QcfgParser:
    """Parser for qcfg text and files.

    Args:
        strict: If True, raise QcfgParseError on lines that cannot be
            understood, on a '}' with no open block and on blocks left open
            at end of file. If False (default), log a warning and go on.
        verbose: If True, log each opened file at INFO level instead of DEBUG.

    Example:
        >>> parser = QcfgParser(strict=True)
        >>> cfg = parser.parse_file('~/app.cfg')
    """

    def __init__(self, strict: bool = False, verbose: bool = False) -> None:
        self.strict = strict
        self.verbose = verbose
        self._include_stack: list[str] = []

    # ==================== Public API ====================

    def parse_file(self, path: str | Path, block: Block | None = None) -> Block:
        """Parse a qcfg file into block.

        Args:
            path: File to read; a leading ``~/`` is expanded.
            block: Block receiving the content. A new ConfigTree if None.

        Returns:
            The populated block.

        Raises:
            ConfigFileError: If the file or an included file cannot be opened.
            IncludeCycleError: If the files include each other in a loop.
            QcfgParseError: In strict mode, on the first bad line.
        """
        filename = expand_path(path)
        if block is None:
            block = ConfigTree('', filename)
        self._read_file(block, filename)
        return block

    def parse(self, text: str, block: Block | None = None, source: str = '<string>') -> Block:
        """Parse qcfg text into block.

        Args:
            text: The qcfg content. Includes are resolved on the filesystem.
            block: Block receiving the content. A new ConfigTree if None.
            source: Name used as source_file and in diagnostics.

        Returns:
            The populated block.
        """
        if block is None:
            block = ConfigTree('', source)
        self._parse_scope(block, enumerate(io.StringIO(text, newline=None), 1), source, depth=0)
        return block

    # ==================== Files ====================

    def _read_file(self, block: Block, filename: str) -> None:
        """Parse a whole file into block, guarding against include loops."""
        key = str(Path(filename).resolve())
        if key in self._include_stack:
            chain = ' -> '.join(self._include_stack + [key])
            raise IncludeCycleError(f"include cycle: {chain}")

        logger.log(
            logging.INFO if self.verbose else logging.DEBUG,
            "opening file %s", filename,
        )
        try:
            handle = open(filename, encoding='utf-8-sig', errors='replace')
        except OSError as exc:
            raise ConfigFileError(f"could not open file {filename}: {exc.strerror}") from exc

        self._include_stack.append(key)
        try:
            with handle:
                self._parse_scope(block, enumerate(handle, 1), filename, depth=0)
        finally:
            self._include_stack.pop()

    def _include(self, block: Block, argument: str) -> None:
        filename = expand_path(_unquote(argument))
        self._read_file(block, filename)

    # ==================== Lines ====================

    def _reject(self, message: str, source: str, lineno: int, line: str) -> None:
        """Report a line that cannot be used: raise if strict, else log."""
        if self.strict:
            raise QcfgParseError(message, source, lineno, line)
        logger.warning("%s:%d: %s (%r)", source, lineno, message, line)

    def _parse_scope(
        self,
        block: Block,
        lines: Iterator[tuple[int, str]],
        source: str,
        depth: int,
        expect_open: bool = False,
    ) -> None:
        """Parse lines into block until its closing '}' or end of input.

        Nested blocks recurse on the same line iterator, so the inner call
        consumes the lines up to and including its own '}'.

        Args:
            block: Block receiving rows and child blocks.
            lines: Iterator of (line number, raw line).
            source: File name for diagnostics and source_file.
            depth: Block nesting level within this source; 0 at file level.
            expect_open: True right after '%block', when '{' is due.
        """
        prev_row: str | None = None
        lineno = 0
        for lineno, raw in lines:
            line = clean_line(raw)
            if not line:
                continue

            if expect_open:
                expect_open = False
                if line[0] == '{':
                    continue
                self._reject("expected '{' after %block", source, lineno, line)

            keyword, argument = _directive(line) if line[0] == '%' else ('', '')

            if keyword == '%include':
                if argument:
                    self._include(block, argument)
                else:
                    self._reject("%include without a file name", source, lineno, line)
            elif line[0] == '}':
                if depth > 0:
                    return
                self._reject("'}' without an open block", source, lineno, line)
            elif keyword == '%block':
                if argument:
                    child = block.add_block(argument, source)
                    self._parse_scope(child, lines, source, depth + 1, expect_open=True)
                else:
                    self._reject("%block without a name", source, lineno, line)
            elif line.startswith(ADD_ROW):
                prev_row = self._load_row(block, line[2:], prev_row, source, lineno, line)
            elif line[0] == '{':
                continue
            else:
                prev_row = self._load_row(block, line, None, source, lineno, line)

        if depth > 0:
            self._reject(f"block {block.name!r} not closed at end of input", source, lineno, '')

    def _load_row(
        self,
        block: Block,
        text: str,
        prev_row: str | None,
        source: str,
        lineno: int,
        line: str,
    ) -> str | None:
        """Define or continue a row from text.

        With prev_row set, text holds only column pairs to merge into that
        row. Otherwise the first of '::' and '+=' found in text decides:
        '::' starts a new row (dropping existing columns), '+=' continues
        the row named before it.

        Returns:
            The row name, to continue on later '+=' lines, or None if the
            text could not be understood.
        """
        if prev_row is not None:
            name, data, merge = prev_row, text, True
        else:
            found = [(text.find(op), op) for op in (NEW_ROW, ADD_ROW)]
            found = [item for item in found if item[0] >= 0]
            if not found:
                self._reject("could not understand line", source, lineno, line)
                return None
            pos, op = min(found)
            name = text[:pos].strip()
            if not name:
                self._reject("row without a name", source, lineno, line)
                return None
            data = text[pos + len(op):]
            merge = op == ADD_ROW

        row = block.rows.get(name)
        if row is None or not merge:
            row = block.add_row(name)
        row.update(parse_columns(data))
        return name


def parse_qcfg(text: str, name: str = '', strict: bool = False) -> ConfigTree:
    """Parse qcfg text into a new ConfigTree.

    Args:
        text: The qcfg content.
        name: Name of the returned tree.
        strict: Raise on bad lines instead of skipping them.
    """
    tree = ConfigTree(name)
    QcfgParser(strict=strict).parse(text, tree)
    return tree


def parse_qcfg_file(
    path: str | Path,
    name: str = '',
    strict: bool = False,
    verbose: bool = False,
) -> ConfigTree:
    """Parse a qcfg file into a new ConfigTree.

    Args:
        path: File to read; a leading ``~/`` is expanded.
        name: Name of the returned tree.
        strict: Raise on bad lines instead of skipping them.
        verbose: Log opened files at INFO level.

    Raises:
        ConfigFileError: If the file or an included file cannot be opened.
    """
    filename = expand_path(path)
    tree = ConfigTree(name, filename)
    QcfgParser(strict=strict, verbose=verbose).parse_file(filename, tree)
    return tree
