"""
Leaf constructors — where computation actually happens.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from memostate._types import Compute, ComputeWithEffect, Effects
from memostate.equality import Equality, SHALLOW
from memostate.deriver._node import Leaf, Constant, identity


def _label(fn: Callable[..., object]) -> str:
    return getattr(fn, "__qualname__", None) or repr(fn)


def _require_callable(fn: object, role: str) -> None:
    if not callable(fn):
        raise TypeError(f"{role} must be callable, got {type(fn).__name__}")


# ═══════════════════════════════════════════════════════════════════════════════
# leaf() — Pure Output
# ═══════════════════════════════════════════════════════════════════════════════


def leaf[I, O](
    compute: Compute[I, O],
    *,
    equal: Equality = SHALLOW,
) -> Leaf[I, O, Any]:
    """
    Memoize `compute` on its last input.

    The first advance always computes. Later advances compute again only
    when `equal(input, last_input)` is false.

    `compute` must be deterministic: the cache assumes equal inputs give
    equal outputs.

    Example:
        full_name = D.leaf(lambda p: f"{p[0]} {p[1]}")
    """
    _require_callable(compute, "compute")

    def run(input: I) -> tuple[O, Effects[Any]]:
        return compute(input), ()

    return Leaf(run, equal, label=_label(compute))


# ═══════════════════════════════════════════════════════════════════════════════
# leaf_with_effect() — Output + One Effect
# ═══════════════════════════════════════════════════════════════════════════════


def leaf_with_effect[I, O, F](
    compute: ComputeWithEffect[I, O, F],
    *,
    equal: Equality = SHALLOW,
) -> Leaf[I, O, F]:
    """
    Like `leaf`, but `compute` returns `(output, effect)`.

    Every recomputation emits exactly one effect; a cache hit emits none.

    Example:
        squared = D.leaf_with_effect(lambda x: (x * x, "squared"))
    """
    _require_callable(compute, "compute")

    def run(input: I) -> tuple[O, Effects[F]]:
        output, effect = compute(input)
        return output, (effect,)

    return Leaf(run, equal, label=_label(compute))


# ═══════════════════════════════════════════════════════════════════════════════
# effect_only() — No Output
# ═══════════════════════════════════════════════════════════════════════════════


def effect_only[I, F](
    compute: Compute[I, F],
    *,
    equal: Equality = SHALLOW,
) -> Leaf[I, None, F]:
    """
    Emit one effect whenever the input changes. Output is `None`.

    Example:
        notify = D.effect_only(lambda user: Notify(user.id))
    """
    _require_callable(compute, "compute")

    def run(input: I) -> tuple[None, Effects[F]]:
        return None, (compute(input),)

    return Leaf(run, equal, label=_label(compute))


# ═══════════════════════════════════════════════════════════════════════════════
# constant()
# ═══════════════════════════════════════════════════════════════════════════════


def constant[O](output: O) -> Constant[O]:
    """Always `output`. Changed once, with no effects, then Unchanged."""
    return Constant(output)


__all__ = (
    "leaf",
    "leaf_with_effect",
    "effect_only",
    "constant",
    "identity",
)
