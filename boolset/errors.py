class BooleanSetError(Exception):
    """Base class for every error raised by boolset."""


class InvalidArgument(BooleanSetError, ValueError, TypeError):
    """
    A public operation was called with an argument it cannot accept: a
    non-boolean value, a negative or non-integer index, ``start > end``, or
    an unbounded end where a finite one is required.
    """


class MalformedState(BooleanSetError, ValueError):
    """
    An externally supplied state breaks the range collection invariant.
    """
