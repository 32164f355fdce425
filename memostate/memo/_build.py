"""
Memo constructors.
"""

from __future__ import annotations

from typing import Any

from memostate._types import Batcher, Compute, ComputeWithEffect
from memostate.equality import Equality, SHALLOW
from memostate.deriver import Node, advance, leaf, leaf_with_effect
from memostate.memo._memo import Memo, EffectMemo

# ═══════════════════════════════════════════════════════════════════════════════
# Without Effects
# ═══════════════════════════════════════════════════════════════════════════════


def new[S, C](
    initial: S,
    compute: Compute[S, C],
    *,
    equal: Equality = SHALLOW,
) -> Memo[S, C]:
    """
    Memo over a single function of the whole state.

    Example:
        m = M.new("ABC", str.lower)
        m.computed  # "abc"
    """
    return from_deriver(initial, leaf(compute, equal=equal), equal=equal)


def from_deriver[S, C](
    initial: S,
    node: Node[S, C, Any],
    *,
    equal: Equality = SHALLOW,
) -> Memo[S, C]:
    """
    Memo over a node graph. `equal` guards the whole-state fast path.

    Example:
        m = M.from_deriver(person, D.selecting(names, D.leaf(join)))
    """
    node, computed, _ = advance(node, initial)
    return Memo(initial, computed, node, equal)


# ═══════════════════════════════════════════════════════════════════════════════
# With Effects
# ═══════════════════════════════════════════════════════════════════════════════


def new_with_effect[S, C, F](
    initial: S,
    compute: ComputeWithEffect[S, C, F],
    batch: Batcher[F],
    *,
    equal: Equality = SHALLOW,
) -> tuple[EffectMemo[S, C, F], F]:
    """
    Memo over one function returning `(output, effect)`.

    Returns the memo and the batched effect of the initial computation.
    """
    return from_deriver_with_effects(
        initial,
        leaf_with_effect(compute, equal=equal),
        batch,
        equal=equal,
    )


def from_deriver_with_effects[S, C, F](
    initial: S,
    node: Node[S, C, F],
    batch: Batcher[F],
    *,
    equal: Equality = SHALLOW,
) -> tuple[EffectMemo[S, C, F], F]:
    """
    Memo over a node graph, keeping its effects.

    Example:
        m, effect = M.from_deriver_with_effects(state, graph, list)
    """
    node, computed, effects = advance(node, initial)
    return EffectMemo(initial, computed, node, batch, equal), batch(effects)


__all__ = (
    "new",
    "from_deriver",
    "new_with_effect",
    "from_deriver_with_effects",
)
