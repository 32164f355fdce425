"""
Deriver — persistent incremental computation.

    from memostate import deriver as D

    full_name = D.selecting(
        lambda p: (p.first_name, p.last_name),
        D.leaf(lambda names: " ".join(names)),
    )
    node, output, effects = D.advance(full_name, person)

Nodes are values: advancing returns the next node instead of mutating.
Only the parts of a graph whose inputs changed are recomputed.
"""

from memostate.deriver._outcome import (
    Unchanged,
    Changed,
    Outcome,
    successor,
)
from memostate.deriver._node import (
    Node,
    Leaf,
    Constant,
    Selecting,
    Mapped,
    Combined,
    Chained,
    Guarded,
)
from memostate.deriver._leaf import (
    leaf,
    leaf_with_effect,
    effect_only,
    constant,
    identity,
)
from memostate.deriver._compose import (
    selecting,
    map,
    map2,
    combine,
    chain,
    curry,
    deriving,
    add,
    chain_effect,
    add_effect,
    with_reference_equality,
    with_shallow_equality,
    with_deep_equality,
    with_custom_equality,
    with_equality,
)
from memostate.deriver._run import advance, replay

__all__ = (
    # Outcome
    "Unchanged",
    "Changed",
    "Outcome",
    "successor",
    # Nodes
    "Node",
    "Leaf",
    "Constant",
    "Selecting",
    "Mapped",
    "Combined",
    "Chained",
    "Guarded",
    # Leaves
    "leaf",
    "leaf_with_effect",
    "effect_only",
    "constant",
    "identity",
    # Combinators
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
    # Equality
    "with_reference_equality",
    "with_shallow_equality",
    "with_deep_equality",
    "with_custom_equality",
    "with_equality",
    # Running
    "advance",
    "replay",
)
