import pytest

from boolset.bounds import UNBOUNDED
from boolset.errors import InvalidArgument, MalformedState
from boolset.intrangeset import IntRangeSet


def test_initialization_and_merging():
    s = IntRangeSet([1, (2, 2), (3, 4), (6, 8), 7])
    assert s.ranges == [(1, 4), (6, 8)]


def test_initialization_merges_into_tail():
    s = IntRangeSet([(10, UNBOUNDED), (3, 9), 1, (20, 30)])
    assert s.ranges == [(1, 1), (3, UNBOUNDED)]


def test_invalid_inputs():
    with pytest.raises(TypeError):
        IntRangeSet([1, "a"])
    with pytest.raises(ValueError):
        IntRangeSet([(5, 3)])
    with pytest.raises(TypeError):
        IntRangeSet([(1, 2, 3)])
    with pytest.raises(InvalidArgument):
        IntRangeSet([-1])
    with pytest.raises(InvalidArgument):
        IntRangeSet([(UNBOUNDED, 3)])


def test_contains_and_iteration():
    s = IntRangeSet([(1, 3), 5, (7, 8)])
    assert 2 in s
    assert 4 not in s
    assert 5 in s
    assert -1 not in s
    assert "x" not in s
    assert list(s) == [(1, 3), (5, 5), (7, 8)]
    assert len(s) == 3


def test_contains_unbounded_tail():
    s = IntRangeSet([(1, 3), (10, UNBOUNDED)])
    assert s.contains(10)
    assert s.contains(10 ** 30)
    assert not s.contains(9)
    assert s.has_tail()


def test_repr_and_str():
    s = IntRangeSet([1, (3, 4), (9, UNBOUNDED)])
    assert repr(s) == "IntRangeSet([1, (3, 4), (9, UNBOUNDED)])"
    assert str(s) == "{1, 3-4, 9-∞}"


def test_equality_and_hash():
    s1 = IntRangeSet([1, (3, 5)])
    s2 = IntRangeSet([(1, 1), (3, 5)])
    s3 = IntRangeSet([1, 4])
    assert s1 == s2
    assert hash(s1) == hash(s2)
    assert s1 != s3
    assert IntRangeSet.empty == IntRangeSet()


def test_insert_merges_overlapping_and_adjacent():
    s = IntRangeSet([(1, 3), (7, 9), (15, 20)])
    s.insert(4, 6)
    assert s.ranges == [(1, 9), (15, 20)]
    s.insert(11, 13)
    assert s.ranges == [(1, 9), (11, 13), (15, 20)]
    s.insert(10, 14)
    assert s.ranges == [(1, 20)]
    s.insert(0, 0)
    assert s.ranges == [(0, 20)]
    s.insert(5, 6)
    assert s.ranges == [(0, 20)]


def test_insert_unbounded():
    s = IntRangeSet([(1, 3), (7, 9)])
    s.insert(5, UNBOUNDED)
    assert s.ranges == [(1, 3), (5, UNBOUNDED)]
    s.insert(4, 4)
    assert s.ranges == [(1, UNBOUNDED)]
    s.insert(100, 200)
    assert s.ranges == [(1, UNBOUNDED)]


def test_insert_adjoining_tail():
    s = IntRangeSet([(10, UNBOUNDED)])
    s.insert(5, 9)
    assert s.ranges == [(5, UNBOUNDED)]
    s.insert(2, 3)
    assert s.ranges == [(2, 3), (5, UNBOUNDED)]


def test_remove_splits_truncates_and_drops():
    s = IntRangeSet([(0, 10), (20, 30), (40, 50)])
    s.remove(3, 5)
    assert s.ranges == [(0, 2), (6, 10), (20, 30), (40, 50)]
    s.remove(8, 25)
    assert s.ranges == [(0, 2), (6, 7), (26, 30), (40, 50)]
    s.remove(26, 45)
    assert s.ranges == [(0, 2), (6, 7), (46, 50)]
    s.remove(60, 70)
    assert s.ranges == [(0, 2), (6, 7), (46, 50)]
    s.remove(0, UNBOUNDED)
    assert s.ranges == []


def test_remove_from_tail():
    s = IntRangeSet([(5, UNBOUNDED)])
    s.remove(10, 20)
    assert s.ranges == [(5, 9), (21, UNBOUNDED)]
    s.remove(30, UNBOUNDED)
    assert s.ranges == [(5, 9), (21, 29)]
    s.insert(40, UNBOUNDED)
    s.remove(0, 45)
    assert s.ranges == [(46, UNBOUNDED)]


def test_covered_and_gaps():
    s = IntRangeSet([(2, 4), (8, 9), (12, UNBOUNDED)])
    assert list(s.covered(3, 10)) == [(3, 4), (8, 9)]
    assert list(s.gaps(3, 10)) == [(5, 7), (10, 10)]
    assert list(s.gaps(0, UNBOUNDED)) == [(0, 1), (5, 7), (10, 11)]
    assert list(s.covered(10, UNBOUNDED)) == [(12, UNBOUNDED)]
    assert list(IntRangeSet().gaps(3, UNBOUNDED)) == [(3, UNBOUNDED)]


def test_xor():
    s = IntRangeSet([(5, 10)])
    s.xor(7, 8)
    assert s.ranges == [(5, 6), (9, 10)]
    s.xor(7, 8)
    assert s.ranges == [(5, 10)]
    s.xor(0, 20)
    assert s.ranges == [(0, 4), (11, 20)]
    s.xor(15, UNBOUNDED)
    assert s.ranges == [(0, 4), (11, 14), (21, UNBOUNDED)]
    s.xor(21, UNBOUNDED)
    assert s.ranges == [(0, 4), (11, 14)]


def test_xor_merges_with_touching_neighbours():
    s = IntRangeSet([(0, 4), (11, 20)])
    s.xor(5, 10)
    assert s.ranges == [(0, 20)]
    s = IntRangeSet([(5, 6), (9, 10)])
    s.xor(7, 8)
    assert s.ranges == [(5, 10)]
    s = IntRangeSet()
    s.xor(3, 5)
    assert s.ranges == [(3, 5)]


def test_xor_over_many_ranges_leaves_outside_untouched():
    s = IntRangeSet([(i, i) for i in range(0, 20_000, 2)])
    s.xor(1, 19_997)
    assert s.ranges == [(0, 1)] + [(i, i) for i in range(3, 19_997, 2)] + [(19_997, 19_998)]
    s.xor(0, UNBOUNDED)
    assert s.ranges == [(i, i) for i in range(2, 19_997, 2)] + [(19_999, UNBOUNDED)]
    s = IntRangeSet([(i, i) for i in range(0, 100, 2)])
    s.xor(10, 19)
    assert s.ranges == [(i, i) for i in range(0, 10, 2)] + [(11, 11), (13, 13), (15, 15), (17, 17), (19, 20)] + [(i, i) for i in range(22, 100, 2)]


def test_first_gap_or_range():
    s = IntRangeSet([(5, 10), (20, UNBOUNDED)])
    assert s.first_gap_or_range(True, 0, UNBOUNDED) == 5
    assert s.first_gap_or_range(True, 7, UNBOUNDED) == 7
    assert s.first_gap_or_range(True, 11, UNBOUNDED) == 20
    assert s.first_gap_or_range(True, 11, 19) is None
    assert s.first_gap_or_range(False, 0, UNBOUNDED) == 0
    assert s.first_gap_or_range(False, 6, UNBOUNDED) == 11
    assert s.first_gap_or_range(False, 6, 10) is None
    assert s.first_gap_or_range(False, 25, UNBOUNDED) is None


def test_last_gap_or_range():
    s = IntRangeSet([(5, 10), (20, 30)])
    assert s.last_gap_or_range(True, 0, UNBOUNDED) == 30
    assert s.last_gap_or_range(True, 0, 25) == 25
    assert s.last_gap_or_range(True, 0, 15) == 10
    assert s.last_gap_or_range(True, 11, 19) is None
    assert s.last_gap_or_range(False, 0, UNBOUNDED) is UNBOUNDED
    assert s.last_gap_or_range(False, 0, 25) == 19
    assert s.last_gap_or_range(False, 5, 10) is None
    assert s.last_gap_or_range(False, 6, 12) == 12


def test_last_gap_or_range_with_tail():
    s = IntRangeSet([(5, 10), (20, UNBOUNDED)])
    assert s.last_gap_or_range(True, 0, UNBOUNDED) is UNBOUNDED
    assert s.last_gap_or_range(True, 0, 100) == 100
    assert s.last_gap_or_range(False, 0, UNBOUNDED) == 19
    assert s.last_gap_or_range(False, 20, UNBOUNDED) is None
    assert IntRangeSet([(0, UNBOUNDED)]).last_gap_or_range(False, 0, UNBOUNDED) is None


def test_max_finite_end():
    assert IntRangeSet().max_finite_end() is None
    assert IntRangeSet([(1, 3), (6, UNBOUNDED)]).max_finite_end() == 3
    assert IntRangeSet([(6, UNBOUNDED)]).max_finite_end() is None


def test_from_ranges_validates():
    assert IntRangeSet.from_ranges([(1, 2), (4, UNBOUNDED)]).ranges == [(1, 2), (4, UNBOUNDED)]
    for bad in (
        [(4, 5), (1, 2)],                   # unsorted
        [(1, 5), (3, 8)],                   # overlapping
        [(1, 2), (3, 4)],                   # adjacent
        [(1, UNBOUNDED), (5, UNBOUNDED)],   # two tails
        [(1, UNBOUNDED), (5, 6)],           # tail not last
        [(-1, 2)],
        [(3, 2)],
        [(1, 2, 3)],
        [1],
    ):
        with pytest.raises(MalformedState):
            IntRangeSet.from_ranges(bad)


def test_copy_is_independent():
    s = IntRangeSet([(1, 3)])
    c = s.copy()
    c.insert(10, 12)
    assert s.ranges == [(1, 3)]
    assert c.ranges == [(1, 3), (10, 12)]
