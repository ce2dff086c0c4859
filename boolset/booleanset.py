from typing import Any, Dict, List, Mapping, Optional, Tuple
from dataclasses import dataclass
import logging

from boolset.bounds import UNBOUNDED, Bound, is_bound, is_index
from boolset.config import Config, get_config
from boolset.errors import InvalidArgument, MalformedState
from boolset.intrangeset import IntRangeSet, Range

logger = logging.getLogger(__name__)


################################################################################
# State
################################################################################

@dataclass(frozen=True)
class BooleanSetState:
    """
    Snapshot of a BooleanSet: the ranges whose value differs from the
    background, and the background value itself (``inverted``).
    """
    ranges: Tuple[Range, ...] = ()
    inverted: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {'ranges': list(self.ranges), 'inverted': self.inverted}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'BooleanSetState':
        missing = [key for key in ('ranges', 'inverted') if key not in data]
        if missing:
            raise MalformedState(f"State is missing {', '.join(missing)}")
        try:
            ranges = tuple(tuple(r) for r in data['ranges'])
        except TypeError as e:
            raise MalformedState(f"State ranges must be a list of (start, end) pairs: {e}") from e
        return cls(ranges=ranges, inverted=data['inverted'])  # type: ignore[arg-type]


################################################################################
# Argument checks
################################################################################

def _check_value(val: Any) -> None:
    if not isinstance(val, bool):
        raise InvalidArgument(f"Value must be a boolean but was {val!r}")


def _check_index(idx: Any, what: str = "Index") -> None:
    if not is_index(idx):
        raise InvalidArgument(f"{what} must be an integer >= 0 but was {idx!r}")


def _check_interval(start: Any, end: Any) -> None:
    _check_index(start, "Start")
    if not is_bound(end):
        raise InvalidArgument(f"End must be an integer >= 0 or UNBOUNDED but was {end!r}")
    if start > end:
        raise InvalidArgument(f"Start ({start}) cannot be greater than end ({end})")


################################################################################
# BooleanSet
################################################################################

class BooleanSet:
    """
    An infinite sequence of booleans indexed by non-negative integers.

    Every index holds the background value (``inverted``) unless it falls in
    one of the stored ranges, in which case it holds the opposite. Flipping
    the whole sequence therefore only toggles the background.

    Mutators return the set itself so calls can be chained::

        bs = BooleanSet().set_range(True, 5, 10).flip_range(7, 8)
    """

    def __init__(self, source: 'BooleanSet | BooleanSetState | Mapping[str, Any] | None' = None,
                 *, config: Optional[Config] = None):
        """
        Creates an all-false set, a deep copy of another BooleanSet, or a set
        restored from a BooleanSetState (or a mapping with ``ranges`` and
        ``inverted``). Restored state is validated and MalformedState is
        raised if it is not well formed.
        """
        self._config = config
        self._inverted = False
        self._ranges = IntRangeSet()

        if source is None:
            return
        if isinstance(source, BooleanSet):
            self._ranges = source._ranges.copy()
            self._inverted = source._inverted
            if config is None:
                self._config = source._config
            return
        if isinstance(source, Mapping):
            source = BooleanSetState.from_dict(source)
        if not isinstance(source, BooleanSetState):
            raise InvalidArgument(f"Cannot build a BooleanSet from {type(source).__name__}")
        self._restore(source)

    def _restore(self, state: BooleanSetState) -> None:
        if not isinstance(state.inverted, bool):
            raise MalformedState(f"State inverted flag must be a boolean but was {state.inverted!r}")
        self._ranges = IntRangeSet.from_ranges(state.ranges)
        self._inverted = state.inverted

    @property
    def config(self) -> Config:
        return self._config if self._config is not None else get_config()

    @property
    def inverted(self) -> bool:
        """The background value held by every index outside the stored ranges."""
        return self._inverted

    @property
    def ranges(self) -> Tuple[Range, ...]:
        return tuple(self._ranges.ranges)

    def get_state(self) -> BooleanSetState:
        return BooleanSetState(ranges=tuple(self._ranges.ranges), inverted=self._inverted)

    def copy(self) -> 'BooleanSet':
        return BooleanSet(self)

    def __copy__(self) -> 'BooleanSet':
        return self.copy()

    def __deepcopy__(self, memo: Any) -> 'BooleanSet':
        return self.copy()

    def _mutated(self, config: Config, operation: str, *args: Any) -> 'BooleanSet':
        # config is resolved by the caller before anything changes
        if config.check_invariants:
            self._ranges.validate()
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("%s(%s) -> %s", operation, ', '.join(map(repr, args)), self)
        return self

    def _apply(self, val: bool, start: int, end: Bound) -> None:
        # stored ranges hold exactly the indices that differ from the background
        if val != self._inverted:
            self._ranges.insert(start, end)
        else:
            self._ranges.remove(start, end)

    ############################################################################
    # Mutation
    ############################################################################

    def set(self, val: bool, idx: Optional[int] = None) -> 'BooleanSet':
        """
        Sets the value at ``idx``, or every value when ``idx`` is omitted.
        """
        _check_value(val)
        config = self.config
        if idx is None:
            self._ranges = IntRangeSet()
            self._inverted = val
            return self._mutated(config, 'set', val)

        _check_index(idx)
        self._apply(val, idx, idx)
        return self._mutated(config, 'set', val, idx)

    def clear(self) -> 'BooleanSet':
        """Sets every value to False."""
        return self.set(False)

    def set_range(self, val: bool, start: int = 0, end: Bound = UNBOUNDED) -> 'BooleanSet':
        """Sets every value in [start, end] (inclusive)."""
        _check_value(val)
        _check_interval(start, end)
        config = self.config
        self._apply(val, start, end)
        return self._mutated(config, 'set_range', val, start, end)

    def flip(self, idx: Optional[int] = None) -> 'BooleanSet':
        """
        Flips the value at ``idx``, or every value when ``idx`` is omitted.
        Flipping everything toggles the background and leaves the stored
        ranges alone.
        """
        if idx is None:
            config = self.config
            self._inverted = not self._inverted
            return self._mutated(config, 'flip')

        _check_index(idx)
        return self.set(not self.get(idx), idx)

    def flip_range(self, start: int = 0, end: Bound = UNBOUNDED) -> 'BooleanSet':
        """Flips every value in [start, end] (inclusive)."""
        _check_interval(start, end)
        if start == 0 and end is UNBOUNDED:
            return self.flip()

        config = self.config
        self._ranges.xor(start, end)
        return self._mutated(config, 'flip_range', start, end)

    ############################################################################
    # Queries
    ############################################################################

    def get(self, idx: int) -> bool:
        _check_index(idx)
        return self._ranges.contains(idx) != self._inverted

    def __getitem__(self, idx: int) -> bool:
        return self.get(idx)

    def get_first(self, val: bool, start: int = 0, end: Bound = UNBOUNDED) -> Optional[int]:
        """
        First index in [start, end] holding ``val``, or None if there is none.
        """
        _check_value(val)
        _check_interval(start, end)
        return self._ranges.first_gap_or_range(val != self._inverted, start, end)

    def get_last(self, val: bool, start: int = 0, end: Bound = UNBOUNDED) -> Optional[Bound]:
        """
        Last index in [start, end] holding ``val``.

        Returns None if ``val`` does not occur in the range, and UNBOUNDED if
        ``end`` is UNBOUNDED and ``val`` keeps occurring forever, so that
        "never" and "always from some point on" are not confused.
        """
        _check_value(val)
        _check_interval(start, end)
        return self._ranges.last_gap_or_range(val != self._inverted, start, end)

    def all_set(self, val: bool, start: int = 0, end: Bound = UNBOUNDED) -> bool:
        _check_value(val)
        return self.get_first(not val, start, end) is None

    def any_set(self, val: bool, start: int = 0, end: Bound = UNBOUNDED) -> bool:
        _check_value(val)
        return self.get_first(val, start, end) is not None

    def to_list(self, start: int = 0, end: Optional[Bound] = None) -> List[bool]:
        """
        Materializes the values in [start, end) (end exclusive). ``end`` must
        be finite; it defaults to ``length()``, or to ``start`` when ``start``
        is already past ``length()``, giving an empty list.
        """
        _check_index(start, "Start")
        if end is None:
            end = max(start, self.length())
        if end is UNBOUNDED:
            raise InvalidArgument("Cannot materialize an unbounded range; end must be finite")
        _check_index(end, "End")
        if start > end:
            raise InvalidArgument(f"Start ({start}) cannot be greater than end ({end})")

        count = end - start  # type: ignore[operator]
        limit = self.config.max_materialize
        if count > limit:
            raise InvalidArgument(f"Refusing to materialize {count} values (limit is {limit})")

        values = [self._inverted] * count
        if count:
            for s, e in self._ranges.covered(start, end - 1):  # type: ignore[operator]
                values[s - start:e - start + 1] = [not self._inverted] * (e - s + 1)  # type: ignore[operator]
        return values

    def length(self) -> int:
        """
        The smallest index from which every value is the same forever: the
        start of the unbounded tail if there is one, one past the last stored
        range otherwise, or 0 when nothing is stored.
        """
        if self._ranges.has_tail():
            return self._ranges.ranges[-1][0]
        end = self._ranges.max_finite_end()
        return 0 if end is None else end + 1

    ############################################################################
    # Protocol
    ############################################################################

    def _true_ranges(self) -> Tuple[Range, ...]:
        if not self._inverted:
            return tuple(self._ranges.ranges)
        return tuple(self._ranges.gaps(0, UNBOUNDED))

    def __eq__(self, other: object) -> bool:
        """Two sets are equal when they hold the same value at every index."""
        if not isinstance(other, BooleanSet):
            return NotImplemented
        if self._inverted == other._inverted:
            return self._ranges == other._ranges
        return self._true_ranges() == other._true_ranges()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"BooleanSet(ranges={list(self._ranges.ranges)!r}, inverted={self._inverted!r})"

    def __str__(self) -> str:
        background = 'true' if self._inverted else 'false'
        return f"{self._ranges} (background {background})"
