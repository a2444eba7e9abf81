# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""BatchTree exceptions.

Every exception carries a ``code`` from :class:`TreeErrorCode`, so callers
that prefer to dispatch on a discriminant can do so without matching on
exception classes::

    try:
        tree.add_batch(doc)
    except BatchTreeError as exc:
        print(exc.code.name)
"""

from __future__ import annotations

from enum import IntEnum


class TreeErrorCode(IntEnum):
    """Error kinds reported by tree construction, ingestion and queries."""

    NONE = 0
    OVER_LAYER = 1
    NULL_INPUT = 2
    OVER_ITEM = 3
    MISSING_NODE = 4
    MISSING_ATTRIBUTE = 5
    ILLEGAL_INDEX = 6
    ILLEGAL_ID = 7
    USED_INDEX = 8
    UNREGISTERED_INDEX = 9
    UNREGISTERED_ITEM = 10
    ILLEGAL_TYPE = 11
    ALREADY_BUILT = 12


class BatchTreeError(Exception):
    """Base exception for BatchTree errors."""

    code: TreeErrorCode = TreeErrorCode.NONE


class OverLayerError(BatchTreeError):
    """Raised when the structural document nests deeper than the id allows."""

    code = TreeErrorCode.OVER_LAYER


class NullInputError(BatchTreeError):
    """Raised when a required document node or item is None."""

    code = TreeErrorCode.NULL_INPUT


class OverItemError(BatchTreeError):
    """Raised when an item has more children than one id field can address."""

    code = TreeErrorCode.OVER_ITEM


class MissingNodeError(BatchTreeError):
    """Raised when an expected document node is absent."""

    code = TreeErrorCode.MISSING_NODE


class MissingAttributeError(BatchTreeError):
    """Raised when an expected document attribute is absent."""

    code = TreeErrorCode.MISSING_ATTRIBUTE


class IllegalIndexError(BatchTreeError):
    """Raised when an item or batch index is out of range, malformed or reused."""

    code = TreeErrorCode.ILLEGAL_INDEX


class IllegalIdError(BatchTreeError):
    """Raised when a member entry does not resolve to a well-formed item."""

    code = TreeErrorCode.ILLEGAL_ID


class UsedIndexError(BatchTreeError):
    """Raised when an item already holds a value for the batch being loaded."""

    code = TreeErrorCode.USED_INDEX


class UnregisteredIndexError(BatchTreeError):
    """Raised when a batch index is not in the registry."""

    code = TreeErrorCode.UNREGISTERED_INDEX


class UnregisteredItemError(BatchTreeError):
    """Raised when a name does not resolve to any item."""

    code = TreeErrorCode.UNREGISTERED_ITEM


class IllegalTypeError(BatchTreeError):
    """Raised when a member entry declares an unknown value type."""

    code = TreeErrorCode.ILLEGAL_TYPE


class AlreadyBuiltError(BatchTreeError):
    """Raised when build() is called on a tree that already has items."""

    code = TreeErrorCode.ALREADY_BUILT
