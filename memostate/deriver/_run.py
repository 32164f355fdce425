"""
Driving nodes directly, without a Memo.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from memostate._types import Effects
from memostate.deriver._node import Node
from memostate.deriver._outcome import successor

# ═══════════════════════════════════════════════════════════════════════════════
# advance() — One Step
# ═══════════════════════════════════════════════════════════════════════════════


def advance[I, O, F](node: Node[I, O, F], input: I) -> tuple[Node[I, O, F], O, Effects[F]]:
    """
    Advance `node` with `input`.

    Returns the node to use next, the output, and the effects of this step
    (empty when nothing was recomputed). `node` itself is left untouched and
    can be advanced again, e.g. to replay from an earlier point.

    Example:
        node, output, effects = D.advance(node, 8)
    """
    outcome = node.advance(input)
    return successor(outcome, node), outcome.output, outcome.effects


# ═══════════════════════════════════════════════════════════════════════════════
# replay() — Many Steps
# ═══════════════════════════════════════════════════════════════════════════════


def replay[I, O, F](node: Node[I, O, F], inputs: Iterable[I]) -> Iterator[tuple[O, Effects[F]]]:
    """
    Advance through `inputs` in order, threading successor nodes.

    Example:
        outputs = [out for out, _ in D.replay(node, [8, 8, -8, 5])]
    """
    current = node
    for input in inputs:
        current, output, effects = advance(current, input)
        yield output, effects


__all__ = ("advance", "replay")
