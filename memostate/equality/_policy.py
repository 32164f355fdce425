"""
Equality policies — decide when a cached input is still good.

A policy must be reflexive, and must only call two values equal when
substituting one for the other would not change what the node computes.
A policy that breaks this gives stale caches, not errors.
"""

from __future__ import annotations

import dataclasses
import enum
from collections.abc import Callable
from dataclasses import dataclass

# ═══════════════════════════════════════════════════════════════════════════════
# Equality — Policy Object
# ═══════════════════════════════════════════════════════════════════════════════

type Predicate = Callable[[object, object], bool]


@dataclass(frozen=True, slots=True)
class Equality:
    """
    Named equality predicate.

    Example:
        E.SHALLOW((1, "a"), (1, "a"))  # True
        E.REFERENCE([1], [1])          # False, different lists
        E.DEEP([1], [1])               # True
    """

    name: str
    test: Predicate

    def __call__(self, a: object, b: object) -> bool:
        return self.test(a, b)

    def __repr__(self) -> str:
        return f"Equality({self.name})"


# ═══════════════════════════════════════════════════════════════════════════════
# Predicates
# ═══════════════════════════════════════════════════════════════════════════════

_VALUE_TYPES: tuple[type, ...] = (
    type(None),
    bool,
    int,
    float,
    complex,
    str,
    bytes,
)


def _is_value(a: object) -> bool:
    return type(a) in _VALUE_TYPES


def reference_equal(a: object, b: object) -> bool:
    """Value types by value, everything else by identity."""
    if a is b:
        return True
    if _is_value(a):
        return type(a) is type(b) and a == b
    return False


def _is_tag(a: object) -> bool:
    """Dataclass instance without fields — equal to any other of its class."""
    return (
        dataclasses.is_dataclass(a)
        and not isinstance(a, type)
        and not dataclasses.fields(a)
    )


def shallow_equal(a: object, b: object) -> bool:
    """
    Identity, then by value for primitives and component-wise for tuples.

    Tuples recurse with the same rule, so a projection such as
    `lambda p: (p.first_name, p.last_name)` compares equal across calls.
    """
    if a is b:
        return True
    if type(a) is not type(b):
        return False
    if _is_value(a):
        return a == b
    if isinstance(a, tuple) and isinstance(b, tuple):
        if len(a) != len(b):
            return False
        return all(shallow_equal(x, y) for x, y in zip(a, b))
    if isinstance(a, enum.Enum):
        return False
    return _is_tag(a) and _is_tag(b)


def deep_equal(a: object, b: object) -> bool:
    """Structural equality via `==`."""
    return a is b or bool(a == b)


# ═══════════════════════════════════════════════════════════════════════════════
# Presets
# ═══════════════════════════════════════════════════════════════════════════════

REFERENCE = Equality("reference", reference_equal)
SHALLOW = Equality("shallow", shallow_equal)
DEEP = Equality("deep", deep_equal)


def custom(test: Predicate, name: str = "custom") -> Equality:
    """
    Wrap a caller predicate.

    Example:
        by_id = E.custom(lambda a, b: a.id == b.id, name="by-id")
    """
    if not callable(test):
        raise TypeError(f"equality predicate must be callable, got {type(test).__name__}")
    return Equality(name, test)


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

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
