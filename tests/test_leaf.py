"""Unit tests for leaf nodes and the low-level advance API."""

import logging

import pytest

from memostate import Some, deriver as D
from memostate import equality as E


@pytest.mark.unit
@pytest.mark.deriver
def test_first_advance_is_always_changed(calls):
    node = D.leaf(calls.wrap("square", lambda x: x * x))

    outcome = node.advance(3)

    assert isinstance(outcome, D.Changed)
    assert outcome.output == 9
    assert outcome.effects == ()
    assert calls["square"] == 1


@pytest.mark.unit
@pytest.mark.deriver
def test_advancing_twice_with_same_input_is_unchanged(calls):
    """Second advance with an equal input hits the cache"""
    node = D.leaf(calls.wrap("square", lambda x: x * x))

    first = node.advance(4)
    second = first.next.advance(4)

    assert second == D.Unchanged(16)
    assert second.effects == ()
    assert calls["square"] == 1


@pytest.mark.unit
@pytest.mark.deriver
def test_different_input_recomputes(calls):
    node = D.leaf(calls.wrap("square", lambda x: x * x))

    node, _, _ = D.advance(node, 4)
    node, output, _ = D.advance(node, 5)

    assert output == 25
    assert calls["square"] == 2


@pytest.mark.unit
@pytest.mark.deriver
def test_advance_does_not_mutate_node(calls):
    """The same snapshot can be advanced again with identical results"""
    node = D.leaf_with_effect(calls.wrap("double", lambda x: (x * 2, "doubled")))
    node, _, _ = D.advance(node, 1)

    a = node.advance(2)
    b = node.advance(2)

    assert a.output == b.output == 4
    assert a.effects == b.effects == ("doubled",)
    assert node.advance(1) == D.Unchanged(2)


@pytest.mark.unit
@pytest.mark.deriver
def test_successor_remembers_input_and_output():
    outcome = D.leaf(str.upper).advance("abc")

    match outcome.next.memory:
        case Some(memory):
            assert memory.input == "abc"
            assert memory.output == "ABC"
        case _:
            pytest.fail("successor has no memory")


@pytest.mark.unit
@pytest.mark.deriver
def test_leaf_with_effect_emits_one_effect_per_recompute():
    node = D.leaf_with_effect(lambda x: (x + 1, f"inc:{x}"))

    results = list(D.replay(node, [1, 1, 2]))

    assert results == [(2, ("inc:1",)), (2, ()), (3, ("inc:2",))]


@pytest.mark.unit
@pytest.mark.deriver
def test_effect_only_has_no_output():
    node = D.effect_only(lambda x: ("saw", x))

    results = list(D.replay(node, ["a", "a", "b"]))

    assert results == [(None, (("saw", "a"),)), (None, ()), (None, (("saw", "b"),))]


@pytest.mark.unit
@pytest.mark.deriver
def test_constant_changes_once():
    node = D.constant("fixed")

    first = node.advance(1)
    second = first.next.advance(2)

    assert first == D.Changed("fixed", (), D.Constant("fixed", reported=True))
    assert second == D.Unchanged("fixed")


@pytest.mark.unit
@pytest.mark.deriver
def test_identity_passes_input_through():
    items = [1, 2]
    node, output, _ = D.advance(D.identity(), items)

    assert output is items
    assert node.advance(items) == D.Unchanged(items)
    assert isinstance(node.advance([1, 2]), D.Changed)


@pytest.mark.unit
@pytest.mark.deriver
def test_leaf_equality_is_configurable(calls):
    """Reference equality recomputes for an equal but distinct list"""
    total = calls.wrap("sum", sum)
    by_reference = D.leaf(total, equal=E.REFERENCE)
    deep = D.leaf(total, equal=E.DEEP)

    list(D.replay(by_reference, [[1, 2], [1, 2]]))
    assert calls["sum"] == 2

    list(D.replay(deep, [[1, 2], [1, 2]]))
    assert calls["sum"] == 3


@pytest.mark.unit
@pytest.mark.deriver
def test_default_shallow_equality_caches_equal_tuples(calls):
    node = D.leaf(calls.wrap("join", " ".join))

    list(D.replay(node, [("Ada", "Lovelace"), ("Ada", "Lovelace")]))

    assert calls["join"] == 1


@pytest.mark.unit
@pytest.mark.deriver
def test_exception_leaves_node_usable():
    """A raising compute does not corrupt the node it was called on"""

    def fragile(x):
        if x < 0:
            raise ValueError("negative")
        return x

    node, _, _ = D.advance(D.leaf(fragile), 1)

    with pytest.raises(ValueError, match="negative"):
        node.advance(-1)

    assert node.advance(1) == D.Unchanged(1)
    assert node.advance(2).output == 2


@pytest.mark.unit
@pytest.mark.deriver
def test_leaf_rejects_non_callable():
    with pytest.raises(TypeError, match="compute must be callable"):
        D.leaf(42)


@pytest.mark.unit
@pytest.mark.deriver
def test_leaf_logs_recompute_and_cache_hit(calls, caplog):
    caplog.set_level(logging.DEBUG, logger="memostate")
    node = D.leaf(calls.wrap("square", lambda x: x * x))

    list(D.replay(node, [3, 3]))

    messages = [r.getMessage() for r in caplog.records if r.name.startswith("memostate")]
    assert messages == ["square: recomputed, 0 effect(s)", "square: cached (shallow)"]
