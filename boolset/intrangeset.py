from bisect import bisect_right
from typing import Any, ClassVar, Iterable, Iterator, List, Tuple, Union as TypingUnion

from boolset.bounds import UNBOUNDED, Bound, is_bound, is_index, next_index
from boolset.errors import InvalidArgument, MalformedState

Range = Tuple[int, Bound]


def _start(r: Range) -> int:
    return r[0]


class IntRangeSet:
    # Invariant: A list of sorted tuples (start, end) where 0 <= start <= end,
    # and for any two adjacent ranges (s1, e1), (s2, e2), we have e1 < s2 - 1.
    # Only the last range may have end == UNBOUNDED.
    ranges: List[Range]

    empty: ClassVar["IntRangeSet"]  # type: ignore

    def __init__(self, values: Iterable[TypingUnion[int, Range]] = ()):
        """
        Initializes an IntRangeSet from a list of integers or (start, end) tuples.
        The end of a tuple may be UNBOUNDED. The ranges are automatically sorted,
        merged, and validated.
        """
        processed_ranges: List[Range] = []
        for value in values:
            if is_index(value):
                processed_ranges.append((value, value))  # type: ignore[arg-type]
            elif isinstance(value, tuple) and len(value) == 2:
                start, end = value
                if not is_index(start) or not is_bound(end):
                    raise InvalidArgument(f"Range endpoints must be integers >= 0 or UNBOUNDED: {value}")
                if start > end:
                    raise InvalidArgument(
                        f"Invalid range: start ({start}) cannot be greater than end ({end}) in {value}"
                    )
                processed_ranges.append((start, end))
            else:
                raise InvalidArgument(
                    f"Invalid value: {value!r}. Must be int >= 0 or tuple[int, int | UNBOUNDED]."
                )

        processed_ranges.sort(key=_start)

        merged_ranges: List[Range] = []
        for start, end in processed_ranges:
            if merged_ranges and start <= next_index(merged_ranges[-1][1]):
                last_start, last_end = merged_ranges[-1]
                merged_ranges[-1] = (last_start, max(last_end, end))
            else:
                merged_ranges.append((start, end))

        self.ranges = merged_ranges

    @classmethod
    def from_ranges(cls, ranges: Iterable[Any]) -> "IntRangeSet":
        """
        Builds a set from ranges that must already satisfy the invariant.
        Nothing is merged or reordered; any violation raises MalformedState.
        """
        try:
            candidate = [tuple(r) for r in ranges]
        except TypeError as e:
            raise MalformedState(f"Ranges must be an iterable of (start, end) pairs: {e}") from e
        cls._check_ranges(candidate)
        new_set = cls()
        new_set.ranges = candidate  # type: ignore[assignment]
        return new_set

    @staticmethod
    def _check_ranges(ranges: List[Any]) -> None:
        previous = None
        for i, r in enumerate(ranges):
            if len(r) != 2:
                raise MalformedState(f"Range #{i} is not a (start, end) pair: {r!r}")
            start, end = r
            if not is_index(start):
                raise MalformedState(f"Range #{i} has an invalid start: {r!r}")
            if not is_bound(end) or start > end:
                raise MalformedState(f"Range #{i} has an invalid end: {r!r}")
            if previous is not None:
                if previous[1] is UNBOUNDED:
                    raise MalformedState(f"Unbounded range {previous!r} must be the last range")
                if start <= previous[1] + 1:
                    raise MalformedState(
                        f"Ranges {previous!r} and {r!r} are unsorted, overlapping or adjacent"
                    )
            previous = r

    def validate(self) -> None:
        """Raises MalformedState if the invariant does not hold."""
        self._check_ranges(self.ranges)

    def copy(self) -> "IntRangeSet":
        new_set = IntRangeSet()
        new_set.ranges = list(self.ranges)
        return new_set

    ###########################################################################
    # Lookup
    ###########################################################################

    def _locate(self, idx: int) -> int:
        """Position of the last range starting at or before idx, or -1."""
        return bisect_right(self.ranges, idx, key=_start) - 1

    def _last_starting_by(self, bound: Bound) -> int:
        if bound is UNBOUNDED:
            return len(self.ranges) - 1
        return self._locate(bound)  # type: ignore[arg-type]

    def contains(self, idx: int) -> bool:
        i = self._locate(idx)
        return i >= 0 and idx <= self.ranges[i][1]

    def __contains__(self, value: object) -> bool:
        """Checks if an integer value is contained within any of the ranges."""
        if not is_index(value):
            return False
        return self.contains(value)  # type: ignore[arg-type]

    ###########################################################################
    # Mutation
    ###########################################################################

    def insert(self, start: int, end: Bound) -> None:
        """
        Adds [start, end], merging every range that overlaps or touches it.
        """
        assert start <= end, f"Invalid range: [{start}, {end}]"

        lo = self._locate(start)
        if lo < 0 or next_index(self.ranges[lo][1]) < start:
            lo += 1
        hi = self._last_starting_by(next_index(end))

        if lo <= hi:
            start = min(start, self.ranges[lo][0])
            end = max(end, self.ranges[hi][1])
        self.ranges[lo:hi + 1] = [(start, end)]

    def remove(self, start: int, end: Bound) -> None:
        """
        Removes [start, end]. Ranges fully covered are dropped, a range that
        strictly contains the interval is split in two, and ranges overlapping
        a single boundary are truncated.
        """
        assert start <= end, f"Invalid range: [{start}, {end}]"

        lo = self._locate(start)
        if lo < 0 or self.ranges[lo][1] < start:
            lo += 1
        hi = self._last_starting_by(end)
        if lo > hi:
            return

        remainders: List[Range] = []
        first_start, _ = self.ranges[lo]
        if first_start < start:
            remainders.append((first_start, start - 1))
        _, last_end = self.ranges[hi]
        if last_end > end:
            # end is finite here; an unbounded last_end stays unbounded
            remainders.append((end + 1, last_end))  # type: ignore[operator]
        self.ranges[lo:hi + 1] = remainders

    def xor(self, start: int, end: Bound) -> None:
        """
        Flips membership of every index in [start, end] and nothing else.
        The ranges overlapping or touching the interval are rebuilt in one
        pass and spliced back in place.
        """
        assert start <= end, f"Invalid range: [{start}, {end}]"

        lo = self._locate(start)
        if lo < 0 or next_index(self.ranges[lo][1]) < start:
            lo += 1
        hi = self._last_starting_by(next_index(end))

        pieces: List[Range] = []
        right: Range | None = None
        cursor: Bound = start
        for s, e in self.ranges[lo:hi + 1]:
            if s < start:
                pieces.append((s, min(e, start - 1)))
            inner_start, inner_end = max(s, start), min(e, end)
            if inner_start <= inner_end:
                if inner_start > cursor:
                    pieces.append((cursor, inner_start - 1))  # type: ignore[operator]
                cursor = next_index(inner_end)
            if e > end:
                # only the last range can reach past a finite end
                right = (max(s, end + 1), e)  # type: ignore[operator]
        if cursor is not UNBOUNDED and cursor <= end:
            pieces.append((cursor, end))  # type: ignore[arg-type]
        if right is not None:
            pieces.append(right)

        merged: List[Range] = []
        for s, e in pieces:
            if merged and s <= next_index(merged[-1][1]):
                merged[-1] = (merged[-1][0], max(merged[-1][1], e))
            else:
                merged.append((s, e))
        self.ranges[lo:hi + 1] = merged

    ###########################################################################
    # Scans
    ###########################################################################

    def covered(self, start: int, end: Bound) -> Iterator[Range]:
        """Yields the sub-intervals of [start, end] that are in the set."""
        i = self._locate(start)
        if i < 0 or self.ranges[i][1] < start:
            i += 1
        while i < len(self.ranges):
            s, e = self.ranges[i]
            if s > end:
                break
            yield (max(s, start), min(e, end))
            i += 1

    def gaps(self, start: int, end: Bound) -> Iterator[Range]:
        """Yields the sub-intervals of [start, end] that are not in the set."""
        cursor: Bound = start
        for s, e in self.covered(start, end):
            if s > cursor:
                yield (cursor, s - 1)  # type: ignore[misc]
            cursor = next_index(e)
            if cursor is UNBOUNDED:
                return
        if cursor <= end:
            yield (cursor, end)  # type: ignore[misc]

    def first_gap_or_range(self, want_covered: bool, start: int, end: Bound) -> int | None:
        """
        First index in [start, end] that is covered (want_covered) or not
        covered (otherwise). None when there is no such index.
        """
        i = self._locate(start)
        inside = i >= 0 and start <= self.ranges[i][1]

        if want_covered:
            if inside:
                return start
            if i + 1 < len(self.ranges) and self.ranges[i + 1][0] <= end:
                return self.ranges[i + 1][0]
            return None

        if not inside:
            return start
        # ranges never touch, so the index after a range is always uncovered
        after = next_index(self.ranges[i][1])
        if after is UNBOUNDED or after > end:
            return None
        return after  # type: ignore[return-value]

    def last_gap_or_range(self, want_covered: bool, start: int, end: Bound) -> Bound | None:
        """
        Last index in [start, end] that is covered (want_covered) or not
        covered (otherwise). None when there is no such index; UNBOUNDED when
        end is UNBOUNDED and matching indices never stop.
        """
        if want_covered:
            hi = self._last_starting_by(end)
            if hi < 0:
                return None
            _, e = self.ranges[hi]
            if e < start:
                return None
            return min(e, end)

        if end is UNBOUNDED:
            if not self.ranges or self.ranges[-1][1] is not UNBOUNDED:
                return UNBOUNDED
            # the tail covers everything from its start on
            end = self.ranges[-1][0] - 1
            if end < start:
                return None

        if not self.contains(end):  # type: ignore[arg-type]
            return end
        before = self.ranges[self._locate(end)][0] - 1  # type: ignore[arg-type]
        return before if before >= start else None

    def max_finite_end(self) -> int | None:
        """End of the last range that does not reach infinity."""
        for _, end in reversed(self.ranges):
            if end is not UNBOUNDED:
                return end  # type: ignore[return-value]
        return None

    def has_tail(self) -> bool:
        return bool(self.ranges) and self.ranges[-1][1] is UNBOUNDED

    ###########################################################################
    # Protocol
    ###########################################################################

    def __iter__(self) -> Iterator[Range]:
        """Iterates over the (start, end) ranges in ascending order."""
        return iter(self.ranges)

    def __len__(self) -> int:
        return len(self.ranges)

    def __bool__(self) -> bool:
        return bool(self.ranges)

    def __repr__(self) -> str:
        """Returns a developer-friendly string representation of the IntRangeSet."""
        range_strs = []
        for s, e in self.ranges:
            if s == e:
                range_strs.append(str(s))
            else:
                range_strs.append(f"({s}, {e!r})")
        return f"IntRangeSet([{', '.join(range_strs)}])"

    def __str__(self) -> str:
        """Returns a user-friendly string representation, e.g. {1-3, 5, 7-∞}."""
        range_strs = []
        for s, e in self.ranges:
            if s == e:
                range_strs.append(str(s))
            else:
                range_strs.append(f"{s}-{e}")
        return f"{{{', '.join(range_strs)}}}"

    def __eq__(self, other: object) -> bool:
        """Checks if two IntRangeSets are equal (contain the same ranges)."""
        if not isinstance(other, IntRangeSet):
            return NotImplemented
        return self.ranges == other.ranges

    def __hash__(self) -> int:
        return hash(tuple(self.ranges))


IntRangeSet.empty = IntRangeSet()
