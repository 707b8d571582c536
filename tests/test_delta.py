"""
Test suite for seqdelta.region and seqdelta.delta.

    §1  Region construction and partial order
    §2  Rewrite values
    §3  SequenceDelta construction and inspection
    §4  Apply
    §5  One-rewrite constructors
"""

import sys
import os
import pytest

# Add parent to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from seqdelta.delta import PayloadView, SequenceDelta, insert, remove, replace
from seqdelta.errors import MalformedDelta, OutOfRange, OverlappingRewrite
from seqdelta.region import Region, Rewrite, strictly_before


# ═══════════════════════════════════════════════════════════════════
#  §1  REGION
# ═══════════════════════════════════════════════════════════════════

class TestRegion:

    def test_fields(self):
        r = Region(2, 4)
        assert r.offset == 2
        assert r.length == 4
        assert r.end == 6

    def test_from_range(self):
        assert Region.from_range(range(2, 6)) == Region(2, 4)
        assert Region.from_range(range(3, 3)) == Region(3, 0)
        assert Region.from_bounds(1, 2) == Region(1, 1)

    def test_as_range_and_slice(self):
        r = Region(1, 2)
        assert r.as_range() == range(1, 3)
        assert [0, 1, 2, 3][r.as_slice()] == [1, 2]

    def test_invalid(self):
        with pytest.raises(ValueError):
            Region(-1, 2)
        with pytest.raises(ValueError):
            Region(0, -2)
        with pytest.raises(ValueError):
            Region.from_range(range(0, 6, 2))

    def test_before_and_after(self):
        assert Region(0, 2) < Region(3, 1)
        assert Region(3, 1) > Region(0, 2)
        assert not Region(3, 1) < Region(0, 2)

    def test_touching_is_ordered(self):
        assert Region(0, 2) < Region(2, 1)
        assert Region(2, 1) > Region(0, 2)

    def test_overlap_is_incomparable(self):
        a, b = Region(0, 2), Region(1, 2)
        assert not a < b
        assert not a > b
        assert not b < a
        assert not b > a
        assert a != b
        assert not a <= b
        assert not a >= b

    def test_equality(self):
        assert Region(1, 2) == Region(1, 2)
        assert Region(1, 2) <= Region(1, 2)
        assert Region(1, 2) >= Region(1, 2)
        assert Region(1, 2) != Region(1, 3)
        assert hash(Region(1, 2)) == hash(Region(1, 2))

    def test_strictly_before(self):
        assert strictly_before(Region(0, 2), Region(3, 1))
        assert not strictly_before(Region(0, 2), Region(2, 1))
        assert not strictly_before(Region(0, 2), Region(1, 1))
        assert strictly_before(Region(0, 0), Region(1, 0))
        assert not strictly_before(Region(0, 0), Region(0, 0))


# ═══════════════════════════════════════════════════════════════════
#  §2  REWRITE
# ═══════════════════════════════════════════════════════════════════

class TestRewrite:

    def test_fields(self):
        rw = Rewrite(Region(0, 1), [1, 2, 3])
        assert rw.region.offset == 0
        assert rw.payload == [1, 2, 3]

    def test_structural_equality(self):
        assert Rewrite(Region(0, 1), [1]) == Rewrite(Region(0, 1), [1])
        assert Rewrite(Region(0, 1), [1]) != Rewrite(Region(0, 2), [1])
        assert Rewrite(Region(0, 1), [1]) != Rewrite(Region(0, 1), [2])

    def test_map(self):
        rw = Rewrite(Region(2, 1), [1, 2]).map(lambda x: x * 10)
        assert rw == Rewrite(Region(2, 1), [10, 20])


# ═══════════════════════════════════════════════════════════════════
#  §3  SEQUENCE DELTA
# ═══════════════════════════════════════════════════════════════════

class TestSequenceDelta:

    def test_empty(self):
        d = SequenceDelta()
        assert len(d) == 0
        assert d.is_empty()
        assert d.get(0) is None
        assert list(d) == []

    def test_get_out_of_range(self):
        d = SequenceDelta().append(range(0, 1), [4])
        assert d.get(1) is None
        assert d.get(-1) is None

    def test_append_records_arena_slices(self):
        d = SequenceDelta()
        d.append(range(0, 1), [4, 5])
        d.append(range(3, 4), [6, 7, 8])
        assert len(d) == 2
        assert not d.is_empty()
        assert d.entries() == (
            (Region(0, 1), Region(0, 2)),
            (Region(3, 1), Region(2, 3)),
        )
        assert d.arena == (4, 5, 6, 7, 8)

    def test_get_returns_view(self):
        d = SequenceDelta().append(range(0, 1), [4, 5]).append(range(3, 4), [6])
        rw = d.get(1)
        assert rw.region == Region(3, 1)
        assert isinstance(rw.payload, PayloadView)
        assert rw.payload == [6]
        assert [6] == rw.payload
        assert rw == Rewrite(Region(3, 1), [6])

    def test_iteration_is_restartable(self):
        d = SequenceDelta().append(range(0, 0), [1]).append(range(2, 3), [])
        first = [(rw.region, list(rw.payload)) for rw in d]
        second = [(rw.region, list(rw.payload)) for rw in d]
        assert first == second == [(Region(0, 0), [1]), (Region(2, 1), [])]

    def test_append_accepts_region(self):
        d = SequenceDelta().append(Region(2, 2), "ab")
        assert d.get(0) == Rewrite(Region(2, 2), ["a", "b"])

    def test_overlapping_append_rejected(self):
        d = SequenceDelta().append(range(0, 2), [4, 5])
        with pytest.raises(OverlappingRewrite):
            d.append(range(1, 3), [6, 7])

    def test_touching_append_rejected(self):
        d = SequenceDelta().append(range(0, 2), [4, 5])
        with pytest.raises(OverlappingRewrite):
            d.append(range(2, 3), [6])

    def test_out_of_order_append_rejected(self):
        d = SequenceDelta().append(range(4, 5), [1])
        with pytest.raises(OverlappingRewrite):
            d.append(range(0, 1), [2])
        # The failed append left the delta untouched
        assert len(d) == 1
        assert d.arena == (1,)

    def test_map(self):
        d = SequenceDelta().append(range(0, 1), [4, 5]).append(range(3, 4), [6])
        flags = d.map(lambda _: False)
        assert flags.entries() == d.entries()
        assert flags.arena == (False, False, False)
        # The original is unchanged
        assert d.arena == (4, 5, 6)

    def test_equality(self):
        a = SequenceDelta().append(range(0, 1), [4])
        b = SequenceDelta().append(range(0, 1), [4])
        c = SequenceDelta().append(range(0, 1), [5])
        assert a == b
        assert a != c

    def test_repr(self):
        d = SequenceDelta().append(range(0, 1), [4])
        assert "Region(0..1)" in repr(d)


# ═══════════════════════════════════════════════════════════════════
#  §4  APPLY
# ═══════════════════════════════════════════════════════════════════

class TestApply:

    def test_single_rewrite(self):
        v = [1, 2, 3]
        d = SequenceDelta().append(range(0, 1), [4, 5])
        d.apply(v)
        assert v == [4, 5, 2, 3]

    def test_offsets_are_in_target_coordinates(self):
        v = [1, 2, 3]
        d = SequenceDelta().append(range(0, 1), [4, 5]).append(range(3, 4), [6, 7])
        d.apply(v)
        assert v == [4, 5, 2, 6, 7]

    def test_empty_delta_is_noop(self):
        v = [1, 2, 3]
        SequenceDelta().apply(v)
        assert v == [1, 2, 3]

    def test_out_of_range(self):
        v = [1, 2]
        d = SequenceDelta().append(range(1, 3), [9])
        with pytest.raises(OutOfRange):
            d.apply(v)

    def test_out_of_range_is_malformed_delta(self):
        d = SequenceDelta().append(range(5, 5), [9])
        with pytest.raises(MalformedDelta):
            d.apply([1, 2])
        with pytest.raises(IndexError):
            d.apply([1, 2])

    def test_partial_failure_keeps_earlier_rewrites(self):
        v = [1, 2, 3]
        d = SequenceDelta().append(range(0, 1), [9]).append(range(2, 10), [])
        with pytest.raises(OutOfRange):
            d.apply(v)
        assert v == [9, 2, 3]

    def test_transactional_failure_leaves_target(self):
        v = [1, 2, 3]
        d = SequenceDelta().append(range(0, 1), [9]).append(range(2, 10), [])
        with pytest.raises(OutOfRange):
            d.apply(v, transactional=True)
        assert v == [1, 2, 3]

    def test_transactional_success(self):
        v = [1, 2, 3]
        SequenceDelta().append(range(1, 2), [7, 8]).apply(v, transactional=True)
        assert v == [1, 7, 8, 3]

    def test_append_at_end(self):
        v = [1, 2, 3]
        SequenceDelta().append(range(3, 3), [4]).apply(v)
        assert v == [1, 2, 3, 4]


# ═══════════════════════════════════════════════════════════════════
#  §5  ONE-REWRITE CONSTRUCTORS
# ═══════════════════════════════════════════════════════════════════

class TestConstructors:

    def test_replace_unit(self):
        v = [0, 2, 3]
        replace(range(0, 1), [1]).apply(v)
        assert v == [1, 2, 3]

    def test_replace_multi(self):
        v = [1, 2, 3]
        replace(range(0, 2), [1, 0]).apply(v)
        assert v == [1, 0, 3]

    def test_replace_shrinking(self):
        v = [1, 2, 3]
        replace(range(0, 2), [0]).apply(v)
        assert v == [0, 3]

    def test_replace_chained(self):
        v = [1, 2, 3]
        d = replace(range(0, 0), [0])
        d.and_replace(range(1, 3), [4, 5, 6])
        d.apply(v)
        assert v == [0, 4, 5, 6, 3]

    def test_insert(self):
        v = [1, 2, 3]
        insert(0, [0]).apply(v)
        assert v == [0, 1, 2, 3]

    def test_remove(self):
        v = [1, 2, 3]
        remove(range(0, 2)).apply(v)
        assert v == [3]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
