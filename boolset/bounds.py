from typing import Any, TypeAlias


class Unbounded:
    """
    Marks the end of a range that extends to infinity.

    There is exactly one instance, ``UNBOUNDED``. It compares greater than
    every integer so that range ends can be ordered with ``max``/``min``.
    """
    _instance: 'Unbounded | None' = None

    def __new__(cls) -> 'Unbounded':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNBOUNDED"

    def __str__(self) -> str:
        return "∞"

    def __reduce__(self):
        return (Unbounded, ())

    def __copy__(self) -> 'Unbounded':
        return self

    def __deepcopy__(self, memo: Any) -> 'Unbounded':
        return self

    def __eq__(self, other: object) -> bool:
        return other is self

    def __hash__(self) -> int:
        return hash("boolset.UNBOUNDED")

    def __lt__(self, other: object) -> bool:
        if other is self or isinstance(other, int):
            return False
        return NotImplemented

    def __le__(self, other: object) -> bool:
        if other is self:
            return True
        if isinstance(other, int):
            return False
        return NotImplemented

    def __gt__(self, other: object) -> bool:
        if other is self:
            return False
        if isinstance(other, int):
            return True
        return NotImplemented

    def __ge__(self, other: object) -> bool:
        if other is self or isinstance(other, int):
            return True
        return NotImplemented


UNBOUNDED = Unbounded()

Bound: TypeAlias = int | Unbounded


def is_index(value: Any) -> bool:
    # bool is an int subclass but never a valid index
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def is_bound(value: Any) -> bool:
    return value is UNBOUNDED or is_index(value)


def next_index(end: Bound) -> Bound:
    """The index right after ``end``; infinity has no successor."""
    return end if end is UNBOUNDED else end + 1
