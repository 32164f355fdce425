"""
Memo — keep a derived value in step with a state.

    from memostate import memo as M

    m = M.new(person, lambda p: f"{p.first_name} {p.last_name}")
    m = m.update(lambda p: replace(p, age=p.age + 1))
    m.computed

    m, effect = M.from_deriver_with_effects(state, graph, batch=list)
    m, effect = m.set_state(new_state)
"""

from memostate.memo._memo import (
    DeriveError,
    Memo,
    EffectMemo,
)
from memostate.memo._build import (
    new,
    from_deriver,
    new_with_effect,
    from_deriver_with_effects,
)

__all__ = (
    "DeriveError",
    "Memo",
    "EffectMemo",
    "new",
    "from_deriver",
    "new_with_effect",
    "from_deriver_with_effects",
)
