# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Qcfg exceptions."""

from __future__ import annotations


class QcfgError(Exception):
    """Base exception for qcfg errors."""

    pass


class ConfigFileError(QcfgError, OSError):
    """Raised when a top-level or included config file cannot be opened."""

    pass


class IncludeCycleError(QcfgError):
    """Raised when a file includes itself, directly or through other files."""

    pass


class QcfgParseError(QcfgError, ValueError):
    """Raised in strict mode when a line cannot be understood.

    Attributes:
        filename: The file being read.
        lineno: 1-based line number within that file.
        line: The cleaned line text.
    """

    def __init__(self, message: str, filename: str = '', lineno: int = 0, line: str = '') -> None:
        super().__init__(f"{filename}:{lineno}: {message} ({line!r})")
        self.filename = filename
        self.lineno = lineno
        self.line = line


class RegistryError(QcfgError, KeyError):
    """Raised when an in-memory config is created under a registered name."""

    pass
