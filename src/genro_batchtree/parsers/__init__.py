# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Parsers producing DocumentNode trees for BatchTree.

Available parsers:
- xmldoc: structural and batch documents in XML

Example:
    >>> from genro_batchtree.parsers import parse_xml_file
    >>> root = parse_xml_file('xml_name.xml')
    >>> root.first_child('Content').attribute('name')
    'student'
"""

from .xmldoc import XmlNode, parse_xml, parse_xml_file

__all__ = [
    'XmlNode',
    'parse_xml',
    'parse_xml_file',
]
