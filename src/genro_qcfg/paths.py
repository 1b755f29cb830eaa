# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Path helpers shared by the parser and the writer."""

from __future__ import annotations

from pathlib import Path


def expand_path(path: str | Path) -> str:
    """Expand a leading ``~/`` to the current user's home directory.

    Only the ``~/`` prefix is expanded; ``~user`` forms and relative paths
    are returned unchanged.

    Example:
        >>> expand_path('/etc/app.cfg')
        '/etc/app.cfg'
    """
    path = str(path)
    if not path.startswith('~/'):
        return path
    return str(Path.home()) + path[1:]
