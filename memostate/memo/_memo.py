"""
Memo — a node paired with its current state and output.

A Memo is a value. `set_state` and `update` return a new Memo; the old one
stays valid.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import Any

from memostate._types import Batcher, Result, Ok, Error
from memostate.equality import Equality, SHALLOW
from memostate.deriver import Node, advance

logger = logging.getLogger(__name__)

# ═══════════════════════════════════════════════════════════════════════════════
# DeriveError — Caller Function Raised
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class DeriveError[S]:
    """
    A compute, transform, projection or combine function raised.

    `state` is the state that was rejected; the Memo it was offered to is
    unchanged.
    """

    state: S
    error: Exception

    def __str__(self) -> str:
        return f"deriving from {self.state!r} failed: {self.error}"


# ═══════════════════════════════════════════════════════════════════════════════
# Memo — Without Effects
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Memo[S, C]:
    """
    Current `state`, its `computed` output, and the node that produced it.

    `set_state` first compares the new state with the current one using
    `equal`; when they match the node is not touched at all. Effects
    emitted by the node are discarded, use `EffectMemo` to keep them.

    Example:
        m = M.new("abc", str.upper)
        m = m.set_state("abd")
        m.computed  # "ABD"
    """

    state: S
    computed: C
    node: Node[S, C, Any]
    equal: Equality = SHALLOW

    def set_state(self, state: S) -> Memo[S, C]:
        if self.equal(state, self.state):
            logger.debug("state unchanged (%s), node not advanced", self.equal.name)
            return self
        node, computed, _ = advance(self.node, state)
        return replace(self, state=state, computed=computed, node=node)

    def update(self, f: Callable[[S], S]) -> Memo[S, C]:
        """`set_state(f(state))`."""
        return self.set_state(f(self.state))

    def try_set_state(self, state: S) -> Result[Memo[S, C], DeriveError[S]]:
        """`set_state`, with exceptions from caller functions as `Error`."""
        try:
            return Ok(self.set_state(state))
        except Exception as e:
            return Error(DeriveError(state, e))

    def try_update(self, f: Callable[[S], S]) -> Result[Memo[S, C], DeriveError[S]]:
        """`update`, with exceptions from caller functions as `Error`."""
        try:
            state = f(self.state)
        except Exception as e:
            return Error(DeriveError(self.state, e))
        return self.try_set_state(state)


# ═══════════════════════════════════════════════════════════════════════════════
# EffectMemo — With Batched Effects
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class EffectMemo[S, C, F]:
    """
    Memo that also returns the effects of each step, reduced by `batch`.

    `batch` receives the ordered effects of one step, `()` when nothing was
    recomputed.

    Example:
        m, effect = M.new_with_effect(8, lambda x: (x * x, "squared"), list)
        m, effect = m.set_state(-8)  # effect == ["squared"]
    """

    state: S
    computed: C
    node: Node[S, C, F]
    batch: Batcher[F]
    equal: Equality = SHALLOW

    def set_state(self, state: S) -> tuple[EffectMemo[S, C, F], F]:
        if self.equal(state, self.state):
            logger.debug("state unchanged (%s), node not advanced", self.equal.name)
            return self, self.batch(())
        node, computed, effects = advance(self.node, state)
        return replace(self, state=state, computed=computed, node=node), self.batch(effects)

    def update(self, f: Callable[[S], S]) -> tuple[EffectMemo[S, C, F], F]:
        """`set_state(f(state))`."""
        return self.set_state(f(self.state))

    def try_set_state(
        self, state: S
    ) -> Result[tuple[EffectMemo[S, C, F], F], DeriveError[S]]:
        """`set_state`, with exceptions from caller functions as `Error`."""
        try:
            return Ok(self.set_state(state))
        except Exception as e:
            return Error(DeriveError(state, e))

    def try_update(
        self, f: Callable[[S], S]
    ) -> Result[tuple[EffectMemo[S, C, F], F], DeriveError[S]]:
        """`update`, with exceptions from caller functions as `Error`."""
        try:
            state = f(self.state)
        except Exception as e:
            return Error(DeriveError(self.state, e))
        return self.try_set_state(state)


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = ("DeriveError", "Memo", "EffectMemo")
