"""
Equality — when is a cached input still good?

    from memostate import equality as E

    E.REFERENCE   # identity; value types by value
    E.SHALLOW     # primitives by value, tuples component-wise
    E.DEEP        # ==
    E.custom(lambda a, b: a.id == b.id)
"""

from memostate.equality._policy import (
    Predicate,
    Equality,
    reference_equal,
    shallow_equal,
    deep_equal,
    REFERENCE,
    SHALLOW,
    DEEP,
    custom,
)

__all__ = (
    "Predicate",
    "Equality",
    "reference_equal",
    "shallow_equal",
    "deep_equal",
    "REFERENCE",
    "SHALLOW",
    "DEEP",
    "custom",
)
