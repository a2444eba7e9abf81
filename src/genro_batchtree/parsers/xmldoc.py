# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""XML implementation of the DocumentNode interface.

Structural document::

    <Tree>
      <Content index="1" name="student">
        <Content index="1" name="age"/>
      </Content>
    </Tree>

Batch document::

    <Values>
      <Batch index="1">
        <Member name="age" type="int">20</Member>
      </Batch>
    </Values>

Malformed XML raises ``xml.etree.ElementTree.ParseError``.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path


class XmlNode:
    """DocumentNode over an ElementTree element.

    Keeps a reference to the parent node so that next_sibling() can walk the
    parent's element list, which ElementTree does not expose from the child.
    """

    __slots__ = ('element', 'parent', '_position')

    def __init__(
        self,
        element: ET.Element,
        parent: XmlNode | None = None,
        position: int = 0,
    ) -> None:
        self.element = element
        self.parent = parent
        self._position = position

    def __repr__(self) -> str:
        return f"XmlNode({self.element.tag!r}, {dict(self.element.attrib)!r})"

    @property
    def tag(self) -> str:
        return self.element.tag

    def attribute(self, key: str) -> str | None:
        return self.element.get(key)

    def first_child(self, tag: str | None = None) -> XmlNode | None:
        return self._find_from(self.element, 0, tag, parent=self)

    def next_sibling(self, tag: str | None = None) -> XmlNode | None:
        if self.parent is None:
            return None
        return self._find_from(
            self.parent.element, self._position + 1, tag, parent=self.parent
        )

    def text(self) -> str:
        return self.element.text or ''

    @staticmethod
    def _find_from(
        element: ET.Element, start: int, tag: str | None, parent: XmlNode
    ) -> XmlNode | None:
        """Return the first child of ``element`` at or after ``start`` matching tag."""
        for position in range(start, len(element)):
            child = element[position]
            if not isinstance(child.tag, str):
                # comments and processing instructions
                continue
            if tag is None or child.tag == tag:
                return XmlNode(child, parent=parent, position=position)
        return None


def parse_xml(content: str | bytes) -> XmlNode:
    """Parse XML content and return its root element as a DocumentNode.

    Args:
        content: XML document text.

    Returns:
        XmlNode wrapping the document's root element.
    """
    return XmlNode(ET.fromstring(content))


def parse_xml_file(filepath: str | Path) -> XmlNode:
    """Parse an XML file and return its root element as a DocumentNode."""
    return XmlNode(ET.parse(Path(filepath)).getroot())
