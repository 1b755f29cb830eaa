# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Genro-Qcfg - Hierarchical plain-text configuration files.

A lightweight, zero-dependency library that loads block/row/column
configuration files into an in-memory tree, answers typed lookups with
defaults, and writes the tree back to the same format.
"""

import logging

__version__ = "0.1.0"

from .block import Block, ConfigTree
from .exceptions import (
    ConfigFileError,
    IncludeCycleError,
    QcfgError,
    QcfgParseError,
    RegistryError,
)
from .node import Row
from .parsers import QcfgParser, parse_qcfg, parse_qcfg_file
from .paths import expand_path
from .registry import ConfigRegistry
from .writer import dumps, write

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Core classes
    "Block",
    "ConfigTree",
    "Row",
    # Loading
    "ConfigRegistry",
    "QcfgParser",
    "parse_qcfg",
    "parse_qcfg_file",
    # Writing
    "dumps",
    "write",
    # Paths
    "expand_path",
    # Exceptions
    "QcfgError",
    "ConfigFileError",
    "IncludeCycleError",
    "QcfgParseError",
    "RegistryError",
]
