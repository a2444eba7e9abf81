# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tests for packed item ids."""

import pytest

from genro_batchtree.ids import (
    MAX_ID,
    MAX_INDEX,
    MAX_LAYERS,
    child_id,
    field_at,
    format_id,
    id_depth,
    id_path,
    is_valid_index,
    make_id,
    parent_id,
)


class TestConstants:
    """Tests for id layout constants."""

    def test_layout(self):
        """Test 4-bit fields give 15 siblings and 8 levels in 32 bits."""
        assert MAX_INDEX == 15
        assert MAX_LAYERS == 8
        assert MAX_ID == 0xFFFFFFFF

    def test_valid_index(self):
        """Test index range excludes the reserved 0."""
        assert not is_valid_index(0)
        assert is_valid_index(1)
        assert is_valid_index(15)
        assert not is_valid_index(16)


class TestEncodeDecode:
    """Tests for child_id and the decoding helpers."""

    @pytest.mark.parametrize('layer', range(MAX_LAYERS))
    def test_every_layer_and_index(self, layer):
        """Test encode/decode agree for every (layer, index) pair."""
        parent = make_id([1] * layer)
        for index in range(1, MAX_INDEX + 1):
            item_id = child_id(parent, index, layer)
            assert field_at(item_id, layer) == index
            assert id_path(item_id) == [1] * layer + [index]
            assert id_depth(item_id) == layer + 1
            assert parent_id(item_id) == parent
            assert make_id(id_path(item_id)) == item_id

    def test_child_id_is_concatenation(self):
        """Test a child id keeps the parent's fields below its own."""
        assert child_id(0, 3, 0) == 0x3
        assert child_id(0x3, 2, 1) == 0x23
        assert child_id(0x23, 15, 2) == 0xF23

    def test_deepest_id(self):
        """Test the deepest, widest path fills all 32 bits."""
        assert make_id([15] * 8) == MAX_ID

    @pytest.mark.parametrize('index', [0, 16, -1])
    def test_child_id_bad_index_raises(self, index):
        """Test child_id rejects indexes outside 1..15."""
        with pytest.raises(ValueError, match='Index'):
            child_id(0, index, 0)

    @pytest.mark.parametrize('layer', [-1, 8])
    def test_child_id_bad_layer_raises(self, layer):
        """Test child_id rejects layers without a field."""
        with pytest.raises(ValueError, match='Layer'):
            child_id(0, 1, layer)

    def test_child_id_occupied_layer_raises(self):
        """Test child_id rejects a parent already using the layer."""
        with pytest.raises(ValueError, match='already uses'):
            child_id(0x21, 1, 1)

    def test_id_path_stops_at_hole(self):
        """Test decoding stops at the first empty field."""
        assert id_path(0x201) == [1]
        assert id_path(0) == []


class TestParentId:
    """Tests for parent_id."""

    def test_clears_most_significant_field(self):
        """Test parent_id removes the deepest level."""
        assert parent_id(0x321) == 0x21
        assert parent_id(0x21) == 0x1
        assert parent_id(0x1) == 0

    def test_root_is_own_parent(self):
        """Test the root's parent is the root."""
        assert parent_id(0) == 0

    def test_deepest(self):
        """Test parent of a full 8-level id."""
        assert parent_id(0x87654321) == 0x07654321


def test_format_id():
    """Test ids are rendered as 8 hex digits."""
    assert format_id(0x11) == '00000011'
    assert format_id(MAX_ID) == 'ffffffff'
