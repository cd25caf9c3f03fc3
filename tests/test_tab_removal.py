"""
Unit tests for removal records and their application order.

Tests cover:
- Building records from addresses of each shape
- Value semantics (immutable, hashable)
- removal_order() as used by the compaction pass
"""

import dataclasses

import pytest

from FrameDock.dock_model import DockState, TabGroupNode
from FrameDock.tab_removal import (
    TabRemoval, LeafRemoval, SurfaceRemoval, removal_from, removal_order,
)


class TestRemovalFrom:
    """Test building records from addresses."""

    def test_three_tuple_is_tab(self):
        """Test (surface, node, tab) gives a TabRemoval with fields in order."""
        record = removal_from((3, 5, 7))
        assert record == TabRemoval(surface=3, node=5, tab=7)
        assert (record.surface, record.node, record.tab) == (3, 5, 7)

    def test_two_tuple_is_leaf(self):
        """Test (surface, node) gives a LeafRemoval."""
        record = removal_from((4, 9))
        assert isinstance(record, LeafRemoval)
        assert (record.surface, record.node) == (4, 9)

    def test_one_tuple_is_surface(self):
        """Test (surface,) gives a SurfaceRemoval."""
        assert removal_from((6,)) == SurfaceRemoval(6)

    def test_bare_index_is_surface(self):
        """Test a plain surface index gives a SurfaceRemoval."""
        assert removal_from(2) == SurfaceRemoval(surface=2)

    def test_invalid_shapes(self):
        """Test empty, too long and non-tuple addresses are rejected."""
        with pytest.raises(ValueError):
            removal_from(())
        with pytest.raises(ValueError):
            removal_from((1, 2, 3, 4))
        with pytest.raises(ValueError):
            removal_from([1, 2])

    def test_records_are_immutable(self):
        """Test records cannot be changed after construction."""
        record = TabRemoval(0, 1, 2)
        with pytest.raises(dataclasses.FrozenInstanceError):
            record.tab = 5

    def test_equal_payload_means_equal_record(self):
        """Test records have no identity beyond their payload."""
        assert TabRemoval(0, 1, 2) == TabRemoval(0, 1, 2)
        assert len({LeafRemoval(0, 1), LeafRemoval(0, 1)}) == 1
        assert TabRemoval(0, 1, 2) != LeafRemoval(0, 1)


class TestRemovalOrder:
    """Test the order the compaction pass applies records in."""

    def test_tabs_descending_within_node(self):
        """Test higher tab indices come first."""
        records = [TabRemoval(0, 1, 2), TabRemoval(0, 1, 0), TabRemoval(0, 1, 1)]
        assert removal_order(records) == [TabRemoval(0, 1, 2), TabRemoval(0, 1, 1), TabRemoval(0, 1, 0)]

    def test_kinds_ordered_tabs_leaves_surfaces(self):
        """Test tabs are removed before leaves, and leaves before surfaces."""
        records = [SurfaceRemoval(1), LeafRemoval(0, 0), TabRemoval(2, 0, 0), SurfaceRemoval(2), LeafRemoval(0, 3)]
        assert removal_order(records) == [
            TabRemoval(2, 0, 0),
            LeafRemoval(0, 3),
            LeafRemoval(0, 0),
            SurfaceRemoval(2),
            SurfaceRemoval(1),
        ]

    def test_duplicates_dropped(self):
        """Test a target queued twice is removed once."""
        assert removal_order([TabRemoval(0, 0, 1), TabRemoval(0, 0, 1)]) == [TabRemoval(0, 0, 1)]

    def test_rejects_foreign_values(self):
        """Test anything outside the three record kinds is refused."""
        with pytest.raises(TypeError):
            removal_order([TabRemoval(0, 0, 0), (0, 0, 0)])


class TestApplyingRecords:
    """Test the index-shifting hazard with three tabs in one node."""

    def _state(self):
        state = DockState(main_tabs=["other"])
        state.surfaces[0].nodes.append(TabGroupNode(tabs=["first", "middle", "last"]))
        return state

    def test_descending_order_removes_correct_tabs(self):
        """Test removal_order applies tab 2 before tab 0 and keeps the middle tab."""
        state = self._state()
        collected = [TabRemoval(surface=0, node=1, tab=2), TabRemoval(surface=0, node=1, tab=0)]

        ordered = removal_order(collected)
        assert [r.tab for r in ordered] == [2, 0]
        for record in ordered:
            state.apply_removal(record)

        assert state.surfaces[0].nodes[1].tabs == ["middle"]
        assert state.surfaces[0].nodes[0].tabs == ["other"]

    def test_ascending_order_removes_wrong_tabs(self):
        """Test applying lowest index first without recomputation hits the wrong target."""
        state = self._state()
        state.apply_removal(TabRemoval(0, 1, 0))
        # Tab 2 no longer exists once "first" is gone.
        with pytest.raises(IndexError):
            state.apply_removal(TabRemoval(0, 1, 2))
        assert state.surfaces[0].nodes[1].tabs == ["middle", "last"]

    def test_ascending_order_with_four_tabs(self):
        """Test ascending application deletes a tab that was never requested."""
        state = DockState(main_tabs=["a", "b", "c", "d"])
        for record in [TabRemoval(0, 0, 0), TabRemoval(0, 0, 2)]:
            state.apply_removal(record)
        assert state.surfaces[0].nodes[0].tabs == ["b", "c"]

        state = DockState(main_tabs=["a", "b", "c", "d"])
        for record in removal_order([TabRemoval(0, 0, 0), TabRemoval(0, 0, 2)]):
            state.apply_removal(record)
        assert state.surfaces[0].nodes[0].tabs == ["b", "d"]
