# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tests for the XML DocumentNode adapter."""

import xml.etree.ElementTree as ET

import pytest

from genro_batchtree import DocumentNode
from genro_batchtree.document import iter_children
from genro_batchtree.parsers import XmlNode, parse_xml, parse_xml_file

DOC = (
    '<Values>'
    '<Batch index="1"><Member name="a" type="int">1</Member></Batch>'
    '<Note/>'
    '<Batch index="2"/>'
    '</Values>'
)


class TestXmlNode:
    """Tests for XmlNode navigation."""

    def test_is_document_node(self):
        """Test XmlNode satisfies the DocumentNode protocol."""
        assert isinstance(parse_xml(DOC), DocumentNode)

    def test_tag_and_attribute(self):
        """Test tag and attribute lookup."""
        batch = parse_xml(DOC).first_child('Batch')
        assert batch.tag == 'Batch'
        assert batch.attribute('index') == '1'
        assert batch.attribute('missing') is None

    def test_first_child_by_tag(self):
        """Test first_child filters by tag."""
        root = parse_xml(DOC)
        assert root.first_child().tag == 'Batch'
        assert root.first_child('Note').tag == 'Note'
        assert root.first_child('Member') is None

    def test_next_sibling_by_tag(self):
        """Test next_sibling skips siblings with another tag."""
        first = parse_xml(DOC).first_child('Batch')
        second = first.next_sibling('Batch')
        assert second.attribute('index') == '2'
        assert second.next_sibling('Batch') is None
        assert first.next_sibling().tag == 'Note'

    def test_root_has_no_sibling(self):
        """Test the document root has no siblings."""
        assert parse_xml(DOC).next_sibling() is None

    def test_text(self):
        """Test text returns element text or ''."""
        root = parse_xml(DOC)
        member = root.first_child('Batch').first_child()
        assert member.text() == '1'
        assert root.first_child('Note').text() == ''

    def test_comments_are_skipped(self):
        """Test comment nodes are not returned as children."""
        parser = ET.XMLParser(target=ET.TreeBuilder(insert_comments=True))
        element = ET.fromstring('<R><!-- c --><A/><!-- d --><B/></R>', parser=parser)
        root = XmlNode(element)
        assert root.first_child().tag == 'A'
        assert root.first_child().next_sibling().tag == 'B'

    def test_iter_children(self):
        """Test iter_children walks children in document order."""
        root = parse_xml(DOC)
        assert [n.tag for n in iter_children(root)] == ['Batch', 'Note', 'Batch']
        assert [n.attribute('index') for n in iter_children(root, 'Batch')] == ['1', '2']


class TestParse:
    """Tests for parse_xml and parse_xml_file."""

    def test_parse_file(self, tmp_path):
        """Test parsing a file returns its root element."""
        path = tmp_path / 'tree.xml'
        path.write_text('<Tree><Content index="1" name="a"/></Tree>')
        root = parse_xml_file(path)
        assert root.tag == 'Tree'
        assert root.first_child('Content').attribute('name') == 'a'

    def test_parse_bytes(self):
        """Test parsing bytes content."""
        assert parse_xml(b'<Tree/>').tag == 'Tree'

    def test_malformed(self):
        """Test malformed XML raises ParseError."""
        with pytest.raises(ET.ParseError):
            parse_xml('<Tree>')
