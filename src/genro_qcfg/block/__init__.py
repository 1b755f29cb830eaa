# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Block package - In-memory configuration tree.

This package provides the Block class, a named container of rows and child
blocks with typed lookups, introspection and editing, and ConfigTree, the
root block of a named configuration.

Example:
    >>> from genro_qcfg import ConfigTree
    >>> cfg = ConfigTree('app')
    >>> cfg.edit_entry('server', 'main', 'port', '8080')
    >>> cfg.get_int('server', 'main', 'port', 80)
    8080
"""

from .core import Block, ConfigTree

__all__ = ["Block", "ConfigTree"]
