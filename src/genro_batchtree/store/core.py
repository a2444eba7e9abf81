# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""BatchTree - A fixed item tree holding many batches of values.

This module provides the BatchTree class, the engine of genro-batchtree. The
tree's shape (item names and nesting) is read once from a structural
document; batches of values for that shape are then added, queried and
deleted independently.

Key Features:
    - **Packed ids**: every item id encodes its sibling path, 4 bits a level
    - **Deduplication**: equal values of one item are stored once and shared
      by all the batches holding them
    - **Batch registry**: the set of known batch indexes, checked by every
      batch query and deletion
    - **Format independence**: documents are read through the DocumentNode
      interface; XML is available via genro_batchtree.parsers

Example:
    Basic usage::

        tree = BatchTree()
        tree.build_from_file('xml_name.xml')
        tree.add_batch_from_file('xml_val.xml')

        tree.batch_indices()        # [1, 2, 3]
        tree.item_values('age')     # {1: Value(INT, 20), 2: ..., 3: ...}
        tree.batch_values(2)        # {'': Value(NONE), 'student': Value(NONE), ...}
        tree.delete_batch(2)

The engine is single-threaded. Concurrent readers are safe only while no
build, add_batch, delete_batch or clear is running.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterator

from ..document import DEFAULT_TAGS, DocumentNode, DocumentTags
from ..exceptions import (
    AlreadyBuiltError,
    BatchTreeError,
    UnregisteredIndexError,
    UnregisteredItemError,
)
from ..ids import MAX_ID, ROOT_ID, field_at
from ..node import TreeItem
from ..value import Value
from .loading import build_item_tree, load_batches

logger = logging.getLogger(__name__)


class BatchTree:
    """An item tree with batch-versioned, deduplicated values.

    BatchTree provides:
    - build(doc): Build the item tree from a structural document (once)
    - add_batch(doc): Attach batches of values from a batch document
    - item_name(id) / item_by_id(id) / item_by_name(name): Item lookup
    - batch_indices(): Registered batch indexes
    - batch_values(index) / item_values(name): Value projections
    - delete_batch(index): Retire a batch and evict unshared values

    Attributes:
        root: The root TreeItem (id 0, no name). Its children are the
            top-level items of the structural document.
        tags: Tag and attribute names used to read documents.
    """

    __slots__ = ('root', 'tags', '_batches')

    def __init__(self, tags: DocumentTags | None = None) -> None:
        """Initialize an empty BatchTree.

        Args:
            tags: Optional tag and attribute names for the structural and
                batch documents. Defaults to Content/Batch with index, name
                and type attributes.
        """
        self.root = TreeItem(ROOT_ID)
        self.tags = tags or DEFAULT_TAGS
        self._batches: set[int] = set()

    # ==================== Special Methods ====================

    def __repr__(self) -> str:
        return f"BatchTree(items={len(self)}, batches={self.batch_indices()})"

    def __len__(self) -> int:
        """Return the number of items in the tree (root excluded)."""
        return sum(1 for _ in self.walk())

    def __iter__(self) -> Iterator[TreeItem]:
        """Iterate over the top-level items in document order."""
        return iter(self.root.children)

    def __contains__(self, name: str) -> bool:
        """Check if some item has the given name."""
        return self.item_by_name(name) is not None

    @property
    def is_built(self) -> bool:
        """True once the item tree has been built."""
        return bool(self.root.children)

    # ==================== Loading ====================

    def build(self, document: DocumentNode | None) -> None:
        """Build the item tree from the root node of a structural document.

        Args:
            document: Root node of the structural document.

        Raises:
            AlreadyBuiltError: If the tree already has items.
            BatchTreeError: The first construction error met (see
                build_item_tree). Items built before it are kept.
        """
        if self.is_built:
            raise AlreadyBuiltError("Item tree is already built")
        try:
            build_item_tree(self, document, self.tags)
        except BatchTreeError as exc:
            logger.warning("tree build failed, err code: %d (%s)", exc.code, exc)
            raise
        logger.info("tree build succeeded: %d items", len(self))

    def build_from_file(self, filepath: str | Path) -> None:
        """Build the item tree from a structural XML file."""
        from ..parsers import parse_xml_file
        self.build(parse_xml_file(filepath))

    def add_batch(self, document: DocumentNode | None) -> list[int]:
        """Attach the batches of a batch document to the tree.

        Args:
            document: Root node of the batch document.

        Returns:
            Batch indexes registered by this call, in document order.

        Raises:
            BatchTreeError: The first ingestion error met (see load_batches).
                Blocks loaded before the failing one stay registered.
        """
        try:
            loaded = load_batches(self, document, self.tags)
        except BatchTreeError as exc:
            logger.warning("adding batches failed, err code: %d (%s)", exc.code, exc)
            raise
        logger.info("added batches %s", loaded)
        return loaded

    def add_batch_from_file(self, filepath: str | Path) -> list[int]:
        """Attach the batches of a batch XML file to the tree."""
        from ..parsers import parse_xml_file
        return self.add_batch(parse_xml_file(filepath))

    def clear(self) -> None:
        """Drop every item, member and registered batch.

        The tree returns to its freshly constructed state and can be built
        again.
        """
        self.root = TreeItem(ROOT_ID)
        self._batches.clear()

    # ==================== Item Lookup ====================

    def item_by_id(self, item_id: int) -> TreeItem | None:
        """Get the item with the given packed id.

        Descends one level per id field, so the cost is the item's depth.

        Args:
            item_id: Packed item id (0 is the root).

        Returns:
            The TreeItem, or None if the id does not address an existing item.
        """
        if not 0 <= item_id <= MAX_ID:
            return None
        item = self.root
        layer = 0
        while item.item_id != item_id:
            index = field_at(item_id, layer)
            if index == 0:
                return None
            item = item.child_at(index)
            if item is None:
                return None
            layer += 1
        return item

    def item_name(self, item_id: int) -> str | None:
        """Get the name of the item with the given id.

        Returns:
            The item name, or None if the id addresses no item or the item
            has an empty name (the root).
        """
        item = self.item_by_id(item_id)
        if item is None or not item.name:
            return None
        return item.name

    def item_by_name(self, name: str) -> TreeItem | None:
        """Get the first item named ``name`` in depth-first pre-order.

        Names need not be unique; later items with the same name are
        unreachable by name.
        """
        for _path, item in self.walk():
            if item.name == name:
                return item
        return None

    # ==================== Batch Queries ====================

    def batch_indices(self) -> list[int]:
        """Return the registered batch indexes in ascending order."""
        return sorted(self._batches)

    def has_batch(self, batch_index: int) -> bool:
        """True if ``batch_index`` is registered."""
        return batch_index in self._batches

    def batch_values(self, batch_index: int) -> dict[str, Value]:
        """Get the values of one batch, keyed by item name.

        Every item of the tree gets an entry, starting with the unnamed root
        under '', then items with children and items with no value in this
        batch (those map to Value.none()). When names repeat, the first item
        in pre-order wins.

        Args:
            batch_index: A registered batch index.

        Returns:
            Dict of item name to an independent copy of its value.

        Raises:
            UnregisteredIndexError: If batch_index is not registered.
        """
        self._check_batch(batch_index)
        values = {self.root.name: self.root.value_for(batch_index)}
        for _path, item in self.walk():
            if item.name not in values:
                values[item.name] = item.value_for(batch_index)
        return values

    def item_values(self, name: str) -> dict[int, Value]:
        """Get the values of one item, keyed by batch index.

        A value shared by several batches appears once per batch.

        Args:
            name: Item name, resolved as in item_by_name().

        Returns:
            Dict of batch index (ascending) to an independent copy of its value.

        Raises:
            UnregisteredItemError: If no item has that name.
        """
        item = self.item_by_name(name)
        if item is None:
            raise UnregisteredItemError(f"Item '{name}' not found")
        values = {}
        for member in item.members:
            for batch_index in member.batches:
                values[batch_index] = member.value.copy()
        return dict(sorted(values.items()))

    # ==================== Batch Retirement ====================

    def delete_batch(self, batch_index: int) -> None:
        """Delete one batch of values.

        Removes the batch from every member of every item; members left with
        no batch are dropped. The index is unregistered after the sweep.

        Raises:
            UnregisteredIndexError: If batch_index is not registered. Nothing
                is changed in that case.
        """
        self._check_batch(batch_index)
        dropped = 0
        for _path, item in self.walk():
            dropped += item.discard_batch(batch_index)
        self._batches.discard(batch_index)
        logger.info("deleted batch %d, %d members dropped", batch_index, dropped)

    def _check_batch(self, batch_index: int) -> None:
        if batch_index not in self._batches:
            raise UnregisteredIndexError(f"Batch {batch_index} is not registered")

    # ==================== Walk ====================

    def walk(
        self,
        callback: Callable[[TreeItem], object] | None = None,
    ) -> Iterator[tuple[str, TreeItem]] | None:
        """Walk the items in depth-first pre-order, root excluded.

        Args:
            callback: Optional function to call on each item.
                      If provided, walk returns None.

        Yields:
            Tuples of (dotted name path, item) if no callback provided.

        Example:
            >>> for path, item in tree.walk():
            ...     print(path, item.item_id)
            student 1
            student.age 17
        """
        if callback is not None:
            for _path, item in self.walk():
                callback(item)
            return None

        def _walk_gen(parent: TreeItem, prefix: str) -> Iterator[tuple[str, TreeItem]]:
            for item in parent.children:
                path = f"{prefix}.{item.name}" if prefix else item.name
                yield path, item
                yield from _walk_gen(item, path)

        return _walk_gen(self.root, '')
