#!/usr/bin/env python
# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Demo script for BatchTree.

Builds the item tree from a structural XML file, adds the batches of a batch
XML file and prints what the query methods return.

Usage:
    python tools/batchtree_demo.py [xml_name] [xml_val] [-v]

Examples:
    # Use the student example documents
    python tools/batchtree_demo.py

    # Use your own documents, logging every item and value added
    python tools/batchtree_demo.py tree.xml values.xml -v
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# Add src to path for development
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from genro_batchtree import BatchTree, BatchTreeError

EXAMPLES = Path(__file__).parent.parent / 'examples' / 'student'


def demo(xml_name: Path, xml_val: Path, item: str = 'student', batch: int = 2) -> BatchTree:
    """Run the demo over a structural and a batch document.

    Args:
        xml_name: Structural XML file.
        xml_val: Batch XML file.
        item: Item whose values are listed.
        batch: Batch listed and then deleted.
    """
    tree = BatchTree()
    tree.build_from_file(xml_name)
    tree.add_batch_from_file(xml_val)

    print("\n" + "=" * 60)
    print("1. Batch indices:")
    print("=" * 60)
    indices = tree.batch_indices()
    print(f"  batch num: {len(indices)}")
    for index in indices:
        print(f"  batch index: {index}")

    print("\n" + "=" * 60)
    print(f"2. Item '{item}' has values:")
    print("=" * 60)
    for index, value in tree.item_values(item).items():
        print(f"  {index}: {value}")

    print("\n" + "=" * 60)
    print(f"3. Batch {batch} content:")
    print("=" * 60)
    for name, value in tree.batch_values(batch).items():
        print(f"  {name}: {value}")

    tree.delete_batch(batch)
    print("\n" + "=" * 60)
    print(f"4. After deleting batch {batch}, batch num: {len(tree.batch_indices())}")
    print("=" * 60)

    return tree


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description='BatchTree demo')
    parser.add_argument('xml_name', nargs='?', type=Path, default=EXAMPLES / 'xml_name.xml')
    parser.add_argument('xml_val', nargs='?', type=Path, default=EXAMPLES / 'xml_val.xml')
    parser.add_argument('--item', default='student', help='item to list values of')
    parser.add_argument('--batch', type=int, default=2, help='batch to list and delete')
    parser.add_argument('-v', '--verbose', action='store_true', help='log items and values')
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(levelname)s %(name)s: %(message)s',
    )

    try:
        demo(args.xml_name, args.xml_val, item=args.item, batch=args.batch)
    except BatchTreeError as e:
        print(f"error {e.code.name}: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
