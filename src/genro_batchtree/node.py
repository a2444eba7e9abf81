# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""BatchTree item and member classes."""

from __future__ import annotations

from typing import Iterator

from .ids import ROOT_ID, field_at, format_id, id_depth
from .value import Value


class TreeMember:
    """A deduplicated value attached to an item, with the batches sharing it.

    Example:
        >>> member = TreeMember(Value(ValueKind.INT, 20), {1, 2})
        >>> member.batches
        {1, 2}
    """

    __slots__ = ('value', 'batches')

    def __init__(self, value: Value, batches: set[int] | None = None) -> None:
        """Initialize a TreeMember.

        Args:
            value: The value shared by every batch in ``batches``.
            batches: Batch indexes holding this value.
        """
        self.value = value
        self.batches: set[int] = set(batches or ())

    def __repr__(self) -> str:
        return f"TreeMember({self.value!r}, batches={sorted(self.batches)})"


class TreeItem:
    """A named node of the structural tree.

    Each item has:
    - item_id: Packed id encoding the sibling path from the root
    - name: Name from the structural document ('' for the root)
    - children: Child items in document order
    - members: Deduplicated values, one per distinct value across batches

    Children are also indexed by their sibling index, so id lookups never
    depend on document order.

    Example:
        >>> root = TreeItem(0)
        >>> student = root.add_child(TreeItem(0x1, 'student'))
        >>> root.child_at(1) is student
        True
    """

    __slots__ = ('item_id', 'name', 'children', 'members', '_by_index')

    def __init__(self, item_id: int = ROOT_ID, name: str = '') -> None:
        self.item_id = item_id
        self.name = name
        self.children: list[TreeItem] = []
        self.members: list[TreeMember] = []
        self._by_index: dict[int, TreeItem] = {}

    def __repr__(self) -> str:
        return (
            f"TreeItem({self.name!r}, id={format_id(self.item_id)}, "
            f"children={len(self.children)}, members={len(self.members)})"
        )

    def __iter__(self) -> Iterator[TreeItem]:
        """Iterate over child items in document order."""
        return iter(self.children)

    @property
    def depth(self) -> int:
        """Number of levels below the root (root = 0)."""
        return id_depth(self.item_id)

    @property
    def sibling_index(self) -> int:
        """Index of this item among its siblings (0 for the root)."""
        if self.item_id == ROOT_ID:
            return 0
        return field_at(self.item_id, self.depth - 1)

    @property
    def is_leaf(self) -> bool:
        """True if the item has no children."""
        return not self.children

    def add_child(self, child: TreeItem) -> TreeItem:
        """Append a child and index it by its sibling index."""
        self.children.append(child)
        self._by_index[child.sibling_index] = child
        return child

    def child_at(self, index: int) -> TreeItem | None:
        """Return the child with the given sibling index, or None."""
        return self._by_index.get(index)

    # ==================== Members ====================

    def member_for(self, batch_index: int) -> TreeMember | None:
        """Return the member holding a value for ``batch_index``, or None."""
        for member in self.members:
            if batch_index in member.batches:
                return member
        return None

    def value_for(self, batch_index: int) -> Value:
        """Return a copy of the value for ``batch_index`` (NONE if absent)."""
        member = self.member_for(batch_index)
        if member is None:
            return Value.none()
        return member.value.copy()

    def add_value(self, batch_index: int, value: Value) -> TreeMember:
        """Attach ``value`` for ``batch_index``, sharing an equal member if any.

        The caller guarantees the item holds no value for ``batch_index`` yet.

        Returns:
            The member now holding ``batch_index``.
        """
        for member in self.members:
            if member.value == value:
                member.batches.add(batch_index)
                return member
        member = TreeMember(value.copy(), {batch_index})
        self.members.append(member)
        return member

    def discard_batch(self, batch_index: int) -> int:
        """Remove ``batch_index`` from every member, dropping emptied members.

        Returns:
            Number of members dropped.
        """
        kept = []
        for member in self.members:
            member.batches.discard(batch_index)
            if member.batches:
                kept.append(member)
        dropped = len(self.members) - len(kept)
        self.members = kept
        return dropped
