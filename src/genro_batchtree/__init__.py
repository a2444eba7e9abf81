# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Genro-BatchTree - A fixed item tree holding many batches of values.

A lightweight, zero-dependency library for the Genro ecosystem: the tree
shape is read once from a structural document, then batches of values for
that shape are added, queried and deleted, with equal values shared between
batches.
"""

__version__ = "0.1.0"

from .document import DEFAULT_TAGS, DocumentNode, DocumentTags
from .exceptions import (
    AlreadyBuiltError,
    BatchTreeError,
    IllegalIdError,
    IllegalIndexError,
    IllegalTypeError,
    MissingAttributeError,
    MissingNodeError,
    NullInputError,
    OverItemError,
    OverLayerError,
    TreeErrorCode,
    UnregisteredIndexError,
    UnregisteredItemError,
    UsedIndexError,
)
from .node import TreeItem, TreeMember
from .store import BatchTree
from .value import Value, ValueKind

__all__ = [
    # Core classes
    "BatchTree",
    "TreeItem",
    "TreeMember",
    # Values
    "Value",
    "ValueKind",
    # Documents
    "DocumentNode",
    "DocumentTags",
    "DEFAULT_TAGS",
    # Exceptions
    "TreeErrorCode",
    "BatchTreeError",
    "OverLayerError",
    "NullInputError",
    "OverItemError",
    "MissingNodeError",
    "MissingAttributeError",
    "IllegalIndexError",
    "IllegalIdError",
    "UsedIndexError",
    "UnregisteredIndexError",
    "UnregisteredItemError",
    "IllegalTypeError",
    "AlreadyBuiltError",
]
