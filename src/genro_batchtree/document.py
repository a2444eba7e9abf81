# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Document node interface consumed by the tree loaders.

The loaders never see a concrete markup format. They walk any object
implementing :class:`DocumentNode`; :mod:`genro_batchtree.parsers` provides
the XML implementation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Protocol, runtime_checkable


@runtime_checkable
class DocumentNode(Protocol):
    """A node of a structural or batch document."""

    @property
    def tag(self) -> str:
        """The node's tag name."""
        ...

    def attribute(self, key: str) -> str | None:
        """Return the attribute value, or None if the node has no such attribute."""
        ...

    def first_child(self, tag: str | None = None) -> DocumentNode | None:
        """Return the first child element, optionally restricted to ``tag``."""
        ...

    def next_sibling(self, tag: str | None = None) -> DocumentNode | None:
        """Return the next sibling element, optionally restricted to ``tag``."""
        ...

    def text(self) -> str:
        """Return the node's text content ('' if it has none)."""
        ...


def iter_children(node: DocumentNode, tag: str | None = None) -> Iterator[DocumentNode]:
    """Yield the children of ``node`` in document order, optionally by tag."""
    child = node.first_child(tag)
    while child is not None:
        yield child
        child = child.next_sibling(tag)


@dataclass(frozen=True)
class DocumentTags:
    """Tag and attribute names used by the structural and batch documents.

    Attributes:
        item_tag: Tag of structural items.
        batch_tag: Tag of batch blocks in the batch document.
        index_attr: Attribute holding an item's sibling index or a batch index.
        name_attr: Attribute holding an item name.
        type_attr: Attribute holding a member entry's value type.
    """

    item_tag: str = 'Content'
    batch_tag: str = 'Batch'
    index_attr: str = 'index'
    name_attr: str = 'name'
    type_attr: str = 'type'


DEFAULT_TAGS = DocumentTags()
