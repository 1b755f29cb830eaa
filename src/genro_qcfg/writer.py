# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Serialization of a Block tree to qcfg text.

Only child blocks are written; the rows of the block passed in are not.
Comments, original line order and include structure are not preserved,
so a round trip keeps the semantic content only.

Output format::

    %block server
    {
        main :: host=localhost; port=8080;
        %block tls
        {
            files :: cert=/etc/cert.pem;
        }
    }
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from .paths import expand_path

if TYPE_CHECKING:
    from .block import Block
    from .node import Row

logger = logging.getLogger(__name__)

INDENT = '\t'

# Text the parser treats as syntax inside names and values
_VALUE_BREAKERS = (';', '#', '\n', '\r')
_KEY_BREAKERS = _VALUE_BREAKERS + ('=',)
_ROW_BREAKERS = ('#', '\n', '\r', '::', '+=')
_BLOCK_BREAKERS = ('#', '\n', '\r')

# A row line starting with these is read as a directive or a brace
_ROW_LEADERS = ('%', '{', '}')


def _check(
    kind: str,
    text: str,
    breakers: tuple[str, ...],
    leaders: tuple[str, ...] = (),
    required: bool = True,
) -> None:
    """Warn when text would read back differently.

    Names must be non-empty (unless not required), carry no surrounding
    whitespace, contain none of breakers and start with none of leaders.
    """
    if (
        (required and not text)
        or text != text.strip()
        or text.startswith(leaders)
        or any(b in text for b in breakers)
    ):
        logger.warning("%s %r contains qcfg syntax and will not survive a round trip", kind, text)


def _format_row(row: Row) -> str:
    _check('row name', row.name, _ROW_BREAKERS, _ROW_LEADERS)
    parts = []
    for col, value in row.columns.items():
        _check('column name', col, _KEY_BREAKERS)
        _check('value', value, _VALUE_BREAKERS, required=False)
        parts.append(f"{col}={value};")
    return f"{row.name} :: {' '.join(parts)}".rstrip()


def _format_block(block: Block, depth: int) -> list[str]:
    pad = INDENT * depth
    _check('block name', block.name, _BLOCK_BREAKERS)
    lines = [f"{pad}%block {block.name}", f"{pad}{{"]
    for row in block.rows.values():
        lines.append(f"{pad}{INDENT}{_format_row(row)}")
    for child in block.children.values():
        lines.extend(_format_block(child, depth + 1))
    lines.append(f"{pad}}}")
    return lines


def dumps(block: Block) -> str:
    """Return the qcfg text for every child block of block.

    Args:
        block: The block whose children are serialized.

    Returns:
        The text, one top-level block per paragraph.
    """
    paragraphs = ['\n'.join(_format_block(child, 0)) for child in block.children.values()]
    if not paragraphs:
        return ''
    return '\n\n'.join(paragraphs) + '\n'


def write(block: Block, path: str | Path) -> None:
    """Write dumps(block) to path, truncating any existing file.

    Args:
        block: The block whose children are serialized.
        path: Destination file; a leading ``~/`` is expanded.
    """
    filename = expand_path(path)
    logger.debug("writing config %r to %s", block.name, filename)
    Path(filename).write_text(dumps(block), encoding='utf-8')
