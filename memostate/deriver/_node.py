"""
Node — persistent memoized computation.

A node is a value. `advance(input)` never mutates it; it returns an
Outcome whose `Changed.next` is the node to use next time. Advancing the
same node twice with the same input gives the same Outcome.

Node kinds form a closed family:

    Leaf       compute + equality + remembered input/output
    Constant   one Changed, then Unchanged forever
    Selecting  feed project(input) to inner
    Mapped     transform inner's output, cached
    Combined   left and right on the same input, merged
    Chained    first's output is second's input
    Guarded    skips everything while the whole input is equal

Effects are concatenated right-before-left: in Combined the right side's
effects come first, in Chained the second stage's effects come first.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from typing import Any

from memostate._types import Effects, Memory, Option, Some, Nothing
from memostate.equality import Equality, REFERENCE
from memostate.deriver._outcome import Outcome, Changed, Unchanged, successor

logger = logging.getLogger(__name__)


def _require_node(value: object, role: str) -> None:
    if not isinstance(value, Node):
        raise TypeError(f"{role} must be a Node, got {type(value).__name__}")


def _keep_left[A](left: A, _right: object) -> A:
    return left


def _apply[A, B](fn: Callable[[A], B], value: A) -> B:
    return fn(value)


# ═══════════════════════════════════════════════════════════════════════════════
# Node — Base
# ═══════════════════════════════════════════════════════════════════════════════


class Node[I, O, F](ABC):
    """
    Base of every node kind.

    Fluent constructors mirror the module-level combinators:

        D.leaf(parse).map(validate).add_effect(D.effect_only(log_change))
    """

    __slots__ = ()

    @abstractmethod
    def advance(self, input: I) -> Outcome[I, O, F]:
        """Advance with `input`; see module docstring."""

    def with_equality(self, equal: Equality) -> Node[I, O, F]:
        """
        Skip advancing while `equal(input, last_input)` holds.

        `equal` only ever sees this node's own input; leaves inside keep
        their own policies.
        """
        return Guarded(self, equal)

    def map[U](self, transform: Callable[[O], U]) -> Mapped[I, O, U, F]:
        """Transform the output; `transform` only runs when this node changes."""
        return Mapped(self, transform)

    def map2[R, U](
        self,
        other: Node[I, R, F],
        combine: Callable[[O, R], U],
    ) -> Combined[I, O, R, U, F]:
        """Combine with `other`, both fed the same input."""
        _require_node(other, "other")
        return Combined(self, other, combine)

    def chain[U](self, second: Node[O, U, F]) -> Chained[I, O, U, F]:
        """Feed this node's output into `second`."""
        _require_node(second, "second")
        return Chained(self, second)

    def selecting[J](self, project: Callable[[J], I]) -> Selecting[J, I, O, F]:
        """Depend only on `project(input)`."""
        return Selecting(project, self)

    def add[A, U](self: Node[I, Callable[[A], U], F], node: Node[I, A, F]) -> Combined[I, Callable[[A], U], A, U, F]:
        """Apply the accumulated constructor to `node`'s output."""
        _require_node(node, "node")
        return Combined(self, node, _apply)

    def add_effect(self, effect_node: Node[I, None, F]) -> Combined[I, O, None, O, F]:
        """Run `effect_node` on the same input; output passes through."""
        _require_node(effect_node, "effect_node")
        return Combined(self, effect_node, _keep_left)

    def chain_effect(self, effect_node: Node[O, None, F]) -> Chained[I, O, O, F]:
        """Run `effect_node` on this node's output whenever it changes."""
        _require_node(effect_node, "effect_node")
        return Chained(self, Combined(identity(), effect_node, _keep_left))


# ═══════════════════════════════════════════════════════════════════════════════
# Leaf — Compute + Memory
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Leaf[I, O, F](Node[I, O, F]):
    """
    Recomputes when `equal(input, remembered_input)` is false.

    `compute` returns the output together with the effects of one
    recomputation.
    """

    compute: Callable[[I], tuple[O, Effects[F]]]
    equal: Equality
    memory: Option[Memory[I, O]] = field(default_factory=Nothing)
    label: str = "leaf"

    def advance(self, input: I) -> Outcome[I, O, F]:
        match self.memory:
            case Some(memory) if self.equal(input, memory.input):
                logger.debug("%s: cached (%s)", self.label, self.equal.name)
                return Unchanged(memory.output)
            case _:
                output, effects = self.compute(input)
                logger.debug("%s: recomputed, %d effect(s)", self.label, len(effects))
                return Changed(output, effects, replace(self, memory=Some(Memory(input, output))))

    def with_equality(self, equal: Equality) -> Leaf[I, O, F]:
        """A leaf compares its own input, so the policy is replaced in place."""
        return replace(self, equal=equal)


def identity[I](*, equal: Equality = REFERENCE) -> Leaf[I, I, Any]:
    """Pass the input through unchanged."""

    def run(input: I) -> tuple[I, Effects[Any]]:
        return input, ()

    return Leaf(run, equal, label="identity")


@dataclass(frozen=True, slots=True)
class Constant[O](Node[Any, O, Any]):
    """Reports Changed once with no effects, then Unchanged."""

    value: O
    reported: bool = False

    def advance(self, input: object) -> Outcome[Any, O, Any]:
        if self.reported:
            return Unchanged(self.value)
        return Changed(self.value, (), Constant(self.value, reported=True))

    def with_equality(self, equal: Equality) -> Constant[O]:
        return self


# ═══════════════════════════════════════════════════════════════════════════════
# Selecting — Projection
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Selecting[I, J, O, F](Node[I, O, F]):
    """`inner` sees `project(input)`. `project` runs on every advance."""

    project: Callable[[I], J]
    inner: Node[J, O, F]

    def advance(self, input: I) -> Outcome[I, O, F]:
        outcome = self.inner.advance(self.project(input))
        match outcome:
            case Changed(output, effects, node):
                return Changed(output, effects, Selecting(self.project, node))
            case Unchanged():
                return outcome


# ═══════════════════════════════════════════════════════════════════════════════
# Mapped — Output Transform
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Mapped[I, A, O, F](Node[I, O, F]):
    """`transform` runs only when `inner` changes; its result is cached."""

    inner: Node[I, A, F]
    transform: Callable[[A], O]
    memory: Option[O] = field(default_factory=Nothing)

    def advance(self, input: I) -> Outcome[I, O, F]:
        outcome = self.inner.advance(input)
        match outcome, self.memory:
            case Unchanged(), Some(cached):
                return Unchanged(cached)
            case _:
                output = self.transform(outcome.output)
                return Changed(
                    output,
                    outcome.effects,
                    Mapped(successor(outcome, self.inner), self.transform, Some(output)),
                )


# ═══════════════════════════════════════════════════════════════════════════════
# Combined — Diamond
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Combined[I, L, R, O, F](Node[I, O, F]):
    """
    Both sides advance on the same input; each keeps its own successor.

    Changed when either side changed. Effects: right's, then left's.
    """

    left: Node[I, L, F]
    right: Node[I, R, F]
    combine: Callable[[L, R], O]
    memory: Option[O] = field(default_factory=Nothing)

    def advance(self, input: I) -> Outcome[I, O, F]:
        left = self.left.advance(input)
        right = self.right.advance(input)
        match left, right, self.memory:
            case Unchanged(), Unchanged(), Some(cached):
                return Unchanged(cached)
            case _:
                output = self.combine(left.output, right.output)
                return Changed(
                    output,
                    (*right.effects, *left.effects),
                    Combined(
                        successor(left, self.left),
                        successor(right, self.right),
                        self.combine,
                        Some(output),
                    ),
                )


# ═══════════════════════════════════════════════════════════════════════════════
# Chained — Sequential Composition
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Chained[I, M, O, F](Node[I, O, F]):
    """
    `second` is fed `first`'s output.

    When `first` changes the chain reports Changed even if `second` judged
    the new intermediate value equal to its cached one, so `second` is always
    warmed against the latest intermediate. When `first` is unchanged,
    `second` is not advanced at all. Effects: second's, then first's.
    """

    first: Node[I, M, F]
    second: Node[M, O, F]
    memory: Option[O] = field(default_factory=Nothing)

    def advance(self, input: I) -> Outcome[I, O, F]:
        first = self.first.advance(input)
        match first, self.memory:
            case Unchanged(), Some(cached):
                return Unchanged(cached)
            case _:
                second = self.second.advance(first.output)
                return Changed(
                    second.output,
                    (*second.effects, *first.effects),
                    Chained(
                        successor(first, self.first),
                        successor(second, self.second),
                        Some(second.output),
                    ),
                )


# ═══════════════════════════════════════════════════════════════════════════════
# Guarded — Whole-Input Equality
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Guarded[I, O, F](Node[I, O, F]):
    """
    `inner` is not advanced while `equal(input, last_input)` holds.

    Built by `with_equality` on composite nodes. `equal` only sees the input
    this node receives; projections, intermediate values and the leaves
    inside `inner` are compared by their own policies.
    """

    inner: Node[I, O, F]
    equal: Equality
    memory: Option[Memory[I, O]] = field(default_factory=Nothing)

    def advance(self, input: I) -> Outcome[I, O, F]:
        match self.memory:
            case Some(memory) if self.equal(input, memory.input):
                logger.debug("guard: input unchanged (%s)", self.equal.name)
                return Unchanged(memory.output)
            case Some(_):
                outcome = self.inner.advance(input)
                if not outcome.changed:
                    return outcome
            case _:
                outcome = self.inner.advance(input)
        return Changed(
            outcome.output,
            outcome.effects,
            Guarded(successor(outcome, self.inner), self.equal, Some(Memory(input, outcome.output))),
        )

    def with_equality(self, equal: Equality) -> Guarded[I, O, F]:
        return replace(self, equal=equal)


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = (
    "Node",
    "Leaf",
    "Constant",
    "Selecting",
    "Mapped",
    "Combined",
    "Chained",
    "Guarded",
    "identity",
)
