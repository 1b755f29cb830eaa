# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Parsers for populating Block trees from configuration text.

Available parsers:
- qcfg: block/row/column configuration files with includes

Example:
    >>> from genro_qcfg.parsers import parse_qcfg, parse_qcfg_file
    >>> cfg = parse_qcfg_file('app.cfg')
    >>> cfg.get_str('server', 'main', 'host', 'localhost')
"""

from .qcfg import QcfgParser, clean_line, parse_columns, parse_qcfg, parse_qcfg_file

__all__ = [
    'QcfgParser',
    'clean_line',
    'parse_columns',
    'parse_qcfg',
    'parse_qcfg_file',
]
