"""
Core types for memostate.

Re-exports from kungfu + custom type aliases.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

# Re-export from kungfu
from kungfu import Result, Ok, Error, Option, Some, Nothing

# ═══════════════════════════════════════════════════════════════════════════════
# Function Aliases
# ═══════════════════════════════════════════════════════════════════════════════

type Effects[F] = tuple[F, ...]
"""Ordered effects produced by one advance."""

type Compute[I, O] = Callable[[I], O]
"""Pure function from input to output."""

type ComputeWithEffect[I, O, F] = Callable[[I], tuple[O, F]]
"""Pure function producing an output and exactly one effect."""

type Batcher[F] = Callable[[Effects[F]], F]
"""
Reduces an ordered tuple of effects into one effect.

Must be defined on the empty tuple (the "no effect" case).
"""

# ═══════════════════════════════════════════════════════════════════════════════
# Memory — last seen input/output pair
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Memory[I, O]:
    """What a leaf remembers after it has been advanced once."""

    input: I
    output: O


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = (
    # Re-exports from kungfu
    "Result",
    "Ok",
    "Error",
    "Option",
    "Some",
    "Nothing",
    # Type aliases
    "Effects",
    "Compute",
    "ComputeWithEffect",
    "Batcher",
    # Memory
    "Memory",
)
