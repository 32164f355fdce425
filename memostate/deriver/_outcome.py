"""
Outcome — what advancing a node reports.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from memostate._types import Effects

if TYPE_CHECKING:
    from memostate.deriver._node import Node


@dataclass(frozen=True, slots=True)
class Unchanged[O]:
    """Cached output is still valid. No effects, the node stays as it was."""

    output: O

    @property
    def changed(self) -> bool:
        return False

    @property
    def effects(self) -> Effects[object]:
        return ()


@dataclass(frozen=True, slots=True)
class Changed[I, O, F]:
    """
    Input differed from memory (or this was the first advance).

    `next` replaces the advanced node for the following call.
    """

    output: O
    effects: Effects[F]
    next: Node[I, O, F]

    @property
    def changed(self) -> bool:
        return True


type Outcome[I, O, F] = Unchanged[O] | Changed[I, O, F]


def successor[I, O, F](outcome: Outcome[I, O, F], current: Node[I, O, F]) -> Node[I, O, F]:
    """Node to use after `outcome`; `current` itself when nothing changed."""
    match outcome:
        case Changed(next=node):
            return node
        case Unchanged():
            return current


__all__ = ("Unchanged", "Changed", "Outcome", "successor")
