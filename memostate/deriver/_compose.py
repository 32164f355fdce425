"""
Combinators — build nodes out of nodes.

Every function here has a fluent twin on `Node`:

    D.map(node, f)            node.map(f)
    D.map2(a, b, f)           a.map2(b, f)
    D.chain(a, b)             a.chain(b)
    D.selecting(p, node)      node.selecting(p)
    D.add(acc, node)          acc.add(node)
    D.add_effect(node, e)     node.add_effect(e)
    D.chain_effect(node, e)   node.chain_effect(e)
"""

from __future__ import annotations

import inspect
from collections.abc import Callable
from typing import Any

from memostate.equality import Equality, REFERENCE, SHALLOW, DEEP, custom, Predicate
from memostate.deriver._node import (
    Node,
    Constant,
    Selecting,
    Mapped,
    Combined,
    Chained,
    _require_node,
)

# ═══════════════════════════════════════════════════════════════════════════════
# selecting() — Depend on Part of the Input
# ═══════════════════════════════════════════════════════════════════════════════


def selecting[I, J, O, F](
    project: Callable[[I], J],
    inner: Node[J, O, F],
) -> Selecting[I, J, O, F]:
    """
    Feed `project(input)` to `inner`.

    `project` runs on every advance and should be cheap. Whether `inner`
    recomputes is still decided by `inner`'s own equality, so a projection
    returning a tuple of fields isolates `inner` from every other field.

    Example:
        full_name = D.selecting(
            lambda p: (p.first_name, p.last_name),
            D.leaf(lambda names: " ".join(names)),
        )
    """
    _require_node(inner, "inner")
    return inner.selecting(project)


# ═══════════════════════════════════════════════════════════════════════════════
# map() / map2() / chain()
# ═══════════════════════════════════════════════════════════════════════════════


def map[I, A, O, F](
    inner: Node[I, A, F],
    transform: Callable[[A], O],
) -> Mapped[I, A, O, F]:
    """Transform `inner`'s output. `transform` runs only when `inner` changes."""
    _require_node(inner, "inner")
    return inner.map(transform)


def map2[I, L, R, O, F](
    left: Node[I, L, F],
    right: Node[I, R, F],
    combine: Callable[[L, R], O],
) -> Combined[I, L, R, O, F]:
    """
    Run `left` and `right` on the same input and merge their outputs.

    Only the sides whose inputs changed recompute; each side keeps its own
    cache. The merged output is recomputed when either side changed.
    Effects are ordered right side first, then left side.

    Example:
        total = D.map2(subtotal, tax, lambda s, t: s + t)
    """
    _require_node(left, "left")
    return left.map2(right, combine)


combine = map2


def chain[I, M, O, F](
    first: Node[I, M, F],
    second: Node[M, O, F],
) -> Chained[I, M, O, F]:
    """
    Feed `first`'s output into `second`.

    Reports Changed whenever `first` changed, even if `second` found the new
    intermediate value equal to its cache. Effects: second's, then first's.

    Example:
        D.chain(D.leaf(parse), D.leaf(render))
    """
    _require_node(first, "first")
    return first.chain(second)


# ═══════════════════════════════════════════════════════════════════════════════
# deriving() + add() — Records From Independent Parts
# ═══════════════════════════════════════════════════════════════════════════════


def _arity(fn: Callable[..., object]) -> int:
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError) as e:
        raise TypeError(f"cannot read the signature of {fn!r}; pass arity= explicitly") from e
    return sum(
        1
        for p in signature.parameters.values()
        if p.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
        and p.default is inspect.Parameter.empty
    )


def curry(fn: Callable[..., Any], arity: int | None = None) -> Callable[..., Any]:
    """
    One-argument-at-a-time form of `fn`.

        curry(lambda a, b: a + b)(1)(2)  # 3

    `arity` defaults to the number of required positional parameters.
    """
    if not callable(fn):
        raise TypeError(f"cannot curry {type(fn).__name__}")
    n = _arity(fn) if arity is None else arity
    if n <= 1:
        return fn

    def collect(args: tuple[Any, ...]) -> Callable[[Any], Any]:
        def apply(value: Any) -> Any:
            collected = (*args, value)
            if len(collected) == n:
                return fn(*collected)
            return collect(collected)

        return apply

    return collect(())


def deriving(constructor: Callable[..., Any], *, arity: int | None = None) -> Constant[Any]:
    """
    Start a record assembled field by field with `add`.

    Each added node caches and emits effects on its own; the record is
    rebuilt only when one of them changed.

    Example:
        @dataclass(frozen=True)
        class Stats:
            squared: list[int]
            doubled: list[int]

        stats = (
            D.deriving(Stats)
            .add(D.leaf(lambda xs: [x * x for x in xs]))
            .add(D.leaf(lambda xs: [x * 2 for x in xs]))
        )
    """
    return Constant(curry(constructor, arity))


def add[I, A, U, F](
    acc: Node[I, Callable[[A], U], F],
    node: Node[I, A, F],
) -> Combined[I, Callable[[A], U], A, U, F]:
    """Apply the accumulated constructor to `node`'s output."""
    _require_node(acc, "acc")
    return acc.add(node)


# ═══════════════════════════════════════════════════════════════════════════════
# Effect Attachment
# ═══════════════════════════════════════════════════════════════════════════════


def chain_effect[I, O, F](
    inner: Node[I, O, F],
    effect_node: Node[O, None, F],
) -> Chained[I, O, O, F]:
    """
    Run `effect_node` on `inner`'s output when `inner` changes.

    The output is `inner`'s. Effects: the effect node's, then `inner`'s.
    """
    _require_node(inner, "inner")
    return inner.chain_effect(effect_node)


def add_effect[I, O, F](
    inner: Node[I, O, F],
    effect_node: Node[I, None, F],
) -> Combined[I, O, None, O, F]:
    """
    Run `effect_node` on the same input as `inner`.

    The output is `inner`'s. Effects: the effect node's, then `inner`'s.
    """
    _require_node(inner, "inner")
    return inner.add_effect(effect_node)


# ═══════════════════════════════════════════════════════════════════════════════
# Equality Selectors
# ═══════════════════════════════════════════════════════════════════════════════


def with_reference_equality[I, O, F](node: Node[I, O, F]) -> Node[I, O, F]:
    """`node` is skipped while its input is identical to the last one."""
    return with_equality(node, REFERENCE)


def with_shallow_equality[I, O, F](node: Node[I, O, F]) -> Node[I, O, F]:
    """`node` is skipped while its input is shallowly equal to the last one."""
    return with_equality(node, SHALLOW)


def with_deep_equality[I, O, F](node: Node[I, O, F]) -> Node[I, O, F]:
    """`node` is skipped while its input `==` the last one."""
    return with_equality(node, DEEP)


def with_custom_equality[I, O, F](node: Node[I, O, F], test: Predicate) -> Node[I, O, F]:
    """`node` is skipped while `test(input, last_input)` holds."""
    return with_equality(node, custom(test))


def with_equality[I, O, F](node: Node[I, O, F], equal: Equality) -> Node[I, O, F]:
    """
    Apply `equal` to the input `node` receives.

    On a leaf this replaces the leaf's own policy. On any other node it adds
    a guard in front; the policy never reaches projected or intermediate
    values inside.
    """
    _require_node(node, "node")
    return node.with_equality(equal)


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = (
    "selecting",
    "map",
    "map2",
    "combine",
    "chain",
    "curry",
    "deriving",
    "add",
    "chain_effect",
    "add_effect",
    "with_reference_equality",
    "with_shallow_equality",
    "with_deep_equality",
    "with_custom_equality",
    "with_equality",
)
