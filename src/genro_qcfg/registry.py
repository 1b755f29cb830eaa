# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""ConfigRegistry - name to ConfigTree cache owned by the application.

A registry loads each named configuration once. Later requests for the
same name return the cached tree without reading the file again, even if
the path differs or the file changed on disk.

Example:
    >>> registry = ConfigRegistry()
    >>> cfg = registry.load('app', '~/app.cfg')
    >>> registry.load('app', '~/app.cfg') is cfg
    True
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

from .block import ConfigTree
from .exceptions import RegistryError
from .parsers import QcfgParser
from .paths import expand_path

logger = logging.getLogger(__name__)


class ConfigRegistry:
    """Cache of named configuration trees.

    Args:
        strict: Parsing policy for loaded files. If True, lines that cannot
            be understood raise QcfgParseError; if False (default) they are
            logged and skipped.

    Trees are registered only after their file was parsed successfully, so
    a failed load leaves the name free.
    """

    __slots__ = ('_configs', 'strict')

    def __init__(self, strict: bool = False) -> None:
        self._configs: dict[str, ConfigTree] = {}
        self.strict = strict

    def __repr__(self) -> str:
        return f"ConfigRegistry({list(self._configs)})"

    def __len__(self) -> int:
        return len(self._configs)

    def __contains__(self, name: str) -> bool:
        return name in self._configs

    def __iter__(self) -> Iterator[str]:
        return iter(self._configs)

    def load(self, name: str, path: str | Path, verbose: bool = False) -> ConfigTree:
        """Return the config registered as name, loading it on first use.

        Args:
            name: Registration name, also the name of the root block.
            path: Top-level file; a leading ``~/`` is expanded.
            verbose: Log opened files at INFO level.

        Returns:
            The cached or newly parsed ConfigTree.

        Raises:
            ConfigFileError: If the file or an included file cannot be opened.
            IncludeCycleError: If the files include each other in a loop.
            QcfgParseError: In strict mode, on the first bad line.
        """
        cfg = self._configs.get(name)
        if cfg is not None:
            logger.debug("config %r already loaded from %s", name, cfg.source_file)
            return cfg

        filename = expand_path(path)
        cfg = ConfigTree(name, filename)
        QcfgParser(strict=self.strict, verbose=verbose).parse_file(filename, cfg)
        self._configs[name] = cfg
        return cfg

    def new_empty(self, name: str) -> ConfigTree:
        """Create and register an empty in-memory config.

        Use it to build a config programmatically before writing it out.

        Raises:
            RegistryError: If name is already registered.
        """
        if name in self._configs:
            raise RegistryError(f"config {name!r} is already registered")
        cfg = ConfigTree(name)
        self._configs[name] = cfg
        return cfg

    def get(self, name: str) -> ConfigTree | None:
        """Return the registered config, or None."""
        return self._configs.get(name)

    def names(self) -> list[str]:
        """Return the registered names in registration order."""
        return list(self._configs)
