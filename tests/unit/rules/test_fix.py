"""Unit tests for tsx_guard.rules.fix module."""

import pytest

from tsx_guard.rules.fix import (
    Edit,
    EditConflictError,
    apply_edits,
    find_overlap,
    select_compatible,
)


class TestEdit:
    """Tests for the Edit dataclass."""

    def test_insertion_and_deletion(self):
        """Test the two degenerate edit shapes."""
        assert Edit(3, 3, "x").is_insertion
        assert not Edit(3, 5).is_insertion
        assert Edit(3, 5).text == ""

    def test_rejects_inverted_range(self):
        """Test that end before start is rejected."""
        with pytest.raises(ValueError):
            Edit(5, 3, "")

    def test_rejects_negative_start(self):
        """Test that negative offsets are rejected."""
        with pytest.raises(ValueError):
            Edit(-1, 2)

    def test_touching_ranges_do_not_overlap(self):
        """Test that adjacent ranges can be spliced together."""
        assert not Edit(0, 3).overlaps(Edit(3, 6))
        assert Edit(0, 4).overlaps(Edit(3, 6))

    def test_insertions_at_same_offset_overlap(self):
        """Test that two insertions at one offset are ambiguous."""
        assert Edit(4, 4, "a").overlaps(Edit(4, 4, "b"))

    def test_touching_ranges_conflict(self):
        """Test that conflicts is stricter than overlaps."""
        assert Edit(0, 3).conflicts(Edit(3, 6))
        assert not Edit(0, 3).conflicts(Edit(4, 6))

    def test_dict_roundtrip(self):
        """Test Edit serialization."""
        edit = Edit(2, 7, "cn(x)")
        assert edit.to_dict() == {"start": 2, "end": 7, "text": "cn(x)"}
        assert Edit.from_dict(edit.to_dict()) == edit


class TestApplyEdits:
    """Tests for apply_edits."""

    def test_no_edits_returns_text(self):
        """Test that an empty edit list is a no-op."""
        assert apply_edits("abc", []) == "abc"

    def test_applies_in_offset_order(self):
        """Test that edit order in the list does not matter."""
        text = "const a = 1;"
        edits = [Edit(10, 11, "2"), Edit(6, 7, "b")]
        assert apply_edits(text, edits) == "const b = 2;"

    def test_insertion_and_deletion(self):
        """Test pure insertions and deletions."""
        assert apply_edits("ab", [Edit(1, 1, "-")]) == "a-b"
        assert apply_edits("a--b", [Edit(1, 3)]) == "ab"

    def test_offsets_are_utf8_bytes(self):
        """Test that offsets count bytes, not characters."""
        text = 'const s = "é"; x'
        start = len('const s = "é"; '.encode("utf-8"))
        assert apply_edits(text, [Edit(start, start + 1, "y")]) == 'const s = "é"; y'

    def test_overlapping_edits_raise(self):
        """Test that overlapping edits are refused."""
        with pytest.raises(EditConflictError):
            apply_edits("abcdef", [Edit(0, 3, "x"), Edit(2, 4, "y")])

    def test_out_of_range_edit_raises(self):
        """Test that edits past the end of the document are refused."""
        with pytest.raises(EditConflictError):
            apply_edits("abc", [Edit(2, 10, "")])

    def test_conflict_error_is_value_error(self):
        """Test the exception hierarchy."""
        assert issubclass(EditConflictError, ValueError)


class TestFindOverlap:
    """Tests for find_overlap."""

    def test_finds_pair(self):
        """Test that the overlapping pair is returned sorted."""
        pair = find_overlap([Edit(5, 8), Edit(0, 2), Edit(1, 3)])
        assert pair == (Edit(0, 2), Edit(1, 3))

    def test_none_when_disjoint(self):
        """Test disjoint edits."""
        assert find_overlap([Edit(0, 2), Edit(2, 4), Edit(6, 6, "x")]) is None


class TestSelectCompatible:
    """Tests for select_compatible."""

    def test_accepts_disjoint_groups(self):
        """Test that independent groups are all accepted."""
        groups = [[Edit(0, 1)], [Edit(5, 6), Edit(9, 10)]]
        accepted, deferred = select_compatible(groups)
        assert accepted == groups
        assert deferred == []

    def test_defers_touching_group(self):
        """Test that a group touching an accepted edit waits a pass."""
        first = [Edit(0, 4, "x")]
        second = [Edit(4, 6, "y")]
        accepted, deferred = select_compatible([first, second])
        assert accepted == [first]
        assert deferred == [second]

    def test_groups_are_atomic(self):
        """Test that one conflicting edit defers its whole group."""
        first = [Edit(10, 12)]
        second = [Edit(0, 1, "a"), Edit(11, 11, "b")]
        accepted, deferred = select_compatible([first, second])
        assert accepted == [first]
        assert deferred == [second]
