# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Loading functions for BatchTree.

- build_item_tree: builds the item tree from a structural document
- load_batches: attaches batch values from a batch document

Both stop at the first error and raise it. Nothing is rolled back: items and
members created before the error stay in the tree.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..document import DEFAULT_TAGS, DocumentNode, DocumentTags, iter_children
from ..exceptions import (
    IllegalIdError,
    IllegalIndexError,
    MissingAttributeError,
    MissingNodeError,
    NullInputError,
    OverItemError,
    OverLayerError,
    UsedIndexError,
)
from ..ids import (
    MAX_ID,
    MAX_INDEX,
    MAX_LAYERS,
    child_id,
    format_id,
    is_valid_index,
    is_valid_layer,
    parent_id,
)
from ..node import TreeItem
from ..value import Value, ValueKind, parse_integer

if TYPE_CHECKING:
    from .core import BatchTree

logger = logging.getLogger(__name__)


# ==================== Tree Builder ====================

def build_item_tree(
    tree: BatchTree,
    structural_root: DocumentNode | None,
    tags: DocumentTags = DEFAULT_TAGS,
) -> None:
    """Build the item tree of ``tree`` from a structural document.

    Args:
        tree: The BatchTree whose root item receives the top-level items.
        structural_root: Root node of the structural document.
        tags: Tag and attribute names of the document.

    Raises:
        NullInputError: If structural_root is None.
        MissingNodeError: If the document root has no item nodes.
        MissingAttributeError: If an item node lacks its index or name.
        IllegalIndexError: If an index is outside 1..15 or repeats a sibling's.
        OverItemError: If an item has more than 15 children.
        OverLayerError: If items nest deeper than 8 levels.
    """
    _build_level(structural_root, tree.root, 0, tags)


def _build_level(
    node: DocumentNode | None,
    parent_item: TreeItem | None,
    layer: int,
    tags: DocumentTags,
) -> None:
    """Create the children of ``parent_item`` from the item nodes under ``node``."""
    if node is None or parent_item is None:
        raise NullInputError("Structural node or parent item is None")

    if node.first_child(tags.item_tag) is None:
        if layer > 0:
            return
        raise MissingNodeError(f"No '{tags.item_tag}' node found under <{node.tag}>")

    if not is_valid_layer(layer):
        raise OverLayerError(
            f"Item '{parent_item.name}' has children beyond layer {MAX_LAYERS}"
        )

    used_indexes: set[int] = set()
    for count, child_node in enumerate(iter_children(node, tags.item_tag)):
        if count >= MAX_INDEX:
            raise OverItemError(
                f"Item '{parent_item.name}' has more than {MAX_INDEX} children"
            )

        raw_index = child_node.attribute(tags.index_attr)
        if raw_index is None:
            raise MissingAttributeError(
                f"<{child_node.tag}> under '{parent_item.name}' has no '{tags.index_attr}'"
            )
        name = child_node.attribute(tags.name_attr)
        if name is None:
            raise MissingAttributeError(
                f"<{child_node.tag} {tags.index_attr}=\"{raw_index}\"> has no '{tags.name_attr}'"
            )

        index = parse_integer(raw_index)
        if not is_valid_index(index):
            raise IllegalIndexError(
                f"Item '{name}' index {raw_index!r} out of range (1-{MAX_INDEX})"
            )
        if index in used_indexes:
            raise IllegalIndexError(
                f"Item '{name}' index {index} duplicates a sibling's index"
            )
        used_indexes.add(index)

        item = parent_item.add_child(
            TreeItem(child_id(parent_item.item_id, index, layer), name)
        )
        logger.debug("add item: name(%s) id(%s)", item.name, format_id(item.item_id))

        _build_level(child_node, item, layer + 1, tags)


# ==================== Batch Ingestor ====================

def load_batches(
    tree: BatchTree,
    batch_root: DocumentNode | None,
    tags: DocumentTags = DEFAULT_TAGS,
) -> list[int]:
    """Attach every batch block of a batch document to the items of ``tree``.

    Each block's index is registered once all of its member entries are
    stored. A failing block stops the load; blocks before it stay registered.

    Args:
        tree: The BatchTree receiving the values.
        batch_root: Root node of the batch document.
        tags: Tag and attribute names of the document.

    Returns:
        The batch indexes registered by this call, in document order.

    Raises:
        NullInputError: If batch_root is None.
        MissingAttributeError: If a block lacks its index or a member entry
            lacks its name or type.
        IllegalIndexError: If a block index is not a positive 32-bit integer.
        IllegalIdError: If a member name does not resolve to a tree item.
        UsedIndexError: If the item already holds a value for the batch.
        IllegalTypeError: If a member entry declares an unknown type.
    """
    if batch_root is None:
        raise NullInputError("Batch document root is None")

    loaded: list[int] = []
    for batch_node in iter_children(batch_root, tags.batch_tag):
        batch_index = _batch_index(batch_node, tags)
        logger.debug("adding batch %d", batch_index)
        for member_node in iter_children(batch_node):
            _load_member(tree, member_node, batch_index, tags)
        tree._batches.add(batch_index)
        loaded.append(batch_index)
    return loaded


def _batch_index(batch_node: DocumentNode, tags: DocumentTags) -> int:
    """Parse the index attribute of a batch block."""
    raw_index = batch_node.attribute(tags.index_attr)
    if raw_index is None:
        raise MissingAttributeError(f"<{batch_node.tag}> has no '{tags.index_attr}'")
    batch_index = parse_integer(raw_index)
    if not 0 < batch_index <= MAX_ID:
        raise IllegalIndexError(f"Batch index {raw_index!r} out of range (1-{MAX_ID})")
    return batch_index


def _load_member(
    tree: BatchTree,
    member_node: DocumentNode,
    batch_index: int,
    tags: DocumentTags,
) -> None:
    """Store one member entry of a batch block on its target item."""
    name = member_node.attribute(tags.name_attr)
    if name is None:
        raise MissingAttributeError(
            f"<{member_node.tag}> in batch {batch_index} has no '{tags.name_attr}'"
        )

    item = tree.item_by_name(name)
    if item is None or tree.item_by_id(parent_id(item.item_id)) is None:
        raise IllegalIdError(f"Member '{name}' does not resolve to a tree item")

    if item.member_for(batch_index) is not None:
        raise UsedIndexError(f"Item '{name}' already has a value for batch {batch_index}")

    type_name = member_node.attribute(tags.type_attr)
    if type_name is None:
        raise MissingAttributeError(
            f"Member '{name}' in batch {batch_index} has no '{tags.type_attr}'"
        )

    value = Value.from_text(ValueKind.from_type_name(type_name), member_node.text())
    item.add_value(batch_index, value)
    logger.debug("item (%s) add value: %s", item.name, value)
