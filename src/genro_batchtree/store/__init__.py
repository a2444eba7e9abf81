# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""BatchTree store package - the item tree engine.

The package is organized into:
- core: Main BatchTree class with lookup, batch queries and batch deletion
- loading: Functions building the item tree and attaching batch values

Example:
    >>> from genro_batchtree import BatchTree
    >>> from genro_batchtree.parsers import parse_xml
    >>> tree = BatchTree()
    >>> tree.build(parse_xml('<Tree><Content index="1" name="student"/></Tree>'))
    >>> tree.item_name(0x1)
    'student'
"""

from .core import BatchTree
from .loading import build_item_tree, load_batches

__all__ = ["BatchTree", "build_item_tree", "load_batches"]
