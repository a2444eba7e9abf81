# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Packed hierarchical item identifiers.

An item id is a 32-bit unsigned integer split into 4-bit fields, one per tree
level, least-significant field first. Each field holds the item's sibling
index (1..15) at that level; 0 means "no item". The id of an item is therefore
the path of sibling indexes from the root down to the item::

    >>> child_id(0, 3, 0)        # root -> #3
    3
    >>> child_id(0x3, 2, 1)      # root -> #3 -> #2
    35
    >>> id_path(0x23)
    [3, 2]

The root item has id 0.
"""

from __future__ import annotations

from typing import Iterable

ID_BITS = 32
FIELD_WIDTH = 4
FIELD_MASK = (1 << FIELD_WIDTH) - 1
MAX_INDEX = FIELD_MASK
MAX_LAYERS = ID_BITS // FIELD_WIDTH
MAX_ID = (1 << ID_BITS) - 1
ROOT_ID = 0


def is_valid_index(index: int) -> bool:
    """True if index fits a single id field and is not the reserved 0."""
    return 1 <= index <= MAX_INDEX


def is_valid_layer(layer: int) -> bool:
    """True if layer has a field in the id."""
    return 0 <= layer < MAX_LAYERS


def child_id(parent_id: int, index: int, layer: int) -> int:
    """Return the id of the child at sibling ``index`` under ``parent_id``.

    Args:
        parent_id: Id of the parent item (0 for the root).
        index: Sibling index of the child, 1..15.
        layer: Depth of the child; the root's direct children are layer 0.

    Returns:
        The packed id of the child.

    Raises:
        ValueError: If index or layer is out of range, or if parent_id
            already uses the field at ``layer``.
    """
    if not is_valid_index(index):
        raise ValueError(f"Index {index} out of range (1-{MAX_INDEX})")
    if not is_valid_layer(layer):
        raise ValueError(f"Layer {layer} out of range (0-{MAX_LAYERS - 1})")
    if parent_id >> (FIELD_WIDTH * layer):
        raise ValueError(f"Parent id {parent_id:08x} already uses layer {layer}")
    return (index << (FIELD_WIDTH * layer)) | parent_id


def field_at(item_id: int, layer: int) -> int:
    """Return the sibling index stored in the field for ``layer``."""
    return (item_id >> (FIELD_WIDTH * layer)) & FIELD_MASK


def id_path(item_id: int) -> list[int]:
    """Decode an id into its sibling indexes, outermost level first.

    Decoding stops at the first empty field, so an id with a hole in the
    middle decodes only up to the hole.
    """
    path = []
    while item_id & FIELD_MASK:
        path.append(item_id & FIELD_MASK)
        item_id >>= FIELD_WIDTH
    return path


def id_depth(item_id: int) -> int:
    """Number of used fields, i.e. the level count of the item (root = 0)."""
    depth = 0
    while item_id:
        depth += 1
        item_id >>= FIELD_WIDTH
    return depth


def parent_id(item_id: int) -> int:
    """Return the parent's id by clearing the most-significant used field.

    The root (id 0) is its own parent.
    """
    depth = id_depth(item_id)
    if depth == 0:
        return ROOT_ID
    return item_id & ((1 << (FIELD_WIDTH * (depth - 1))) - 1)


def make_id(path: Iterable[int]) -> int:
    """Encode a path of sibling indexes (outermost first) into an id."""
    item_id = ROOT_ID
    for layer, index in enumerate(path):
        item_id = child_id(item_id, index, layer)
    return item_id


def format_id(item_id: int) -> str:
    """Render an id the way the loaders log it (8 hex digits)."""
    return f"{item_id:08x}"
