"""Unit tests for the Memo and EffectMemo facades."""

import logging
from dataclasses import replace

import pytest

from memostate import Ok, Error
from memostate import deriver as D
from memostate import equality as E
from memostate import memo as M


def collect(effects):
    return list(effects)


@pytest.mark.unit
@pytest.mark.memo
def test_new_computes_initial_value():
    m = M.new("ABC", str.lower)

    assert m.state == "ABC"
    assert m.computed == "abc"


@pytest.mark.unit
@pytest.mark.memo
def test_set_state_same_value_is_fast_path(calls):
    """An equal state returns the same memo and an empty batch"""
    compute = calls.wrap("lower", lambda s: (s.lower(), "lowered"))
    m, effect = M.new_with_effect("ABC", compute, collect)

    again, batched = m.set_state("ABC")

    assert effect == ["lowered"]
    assert again is m
    assert again.computed == "abc"
    assert batched == []
    assert calls["lower"] == 1


@pytest.mark.unit
@pytest.mark.memo
def test_fast_path_does_not_advance_node():
    m = M.from_deriver(5, D.leaf(str))

    assert m.set_state(5).node is m.node


@pytest.mark.unit
@pytest.mark.memo
def test_set_state_recomputes_and_keeps_old_memo():
    m = M.new(2, lambda x: x * 10)

    changed = m.set_state(3)

    assert (changed.state, changed.computed) == (3, 30)
    assert (m.state, m.computed) == (2, 20)


@pytest.mark.unit
@pytest.mark.memo
def test_update_applies_function_to_state():
    m = M.new(1, lambda x: -x)

    m = m.update(lambda x: x + 4)

    assert m.state == 5
    assert m.computed == -5


@pytest.mark.unit
@pytest.mark.memo
def test_memo_over_graph_skips_unrelated_changes(calls, ada):
    """A new state that differs outside the selected fields recomputes nothing"""
    full_name = D.selecting(
        lambda p: (p.first_name, p.last_name),
        D.leaf(calls.wrap("join", " ".join)),
    )
    m = M.from_deriver(ada, full_name)

    m = m.update(lambda p: replace(p, age=p.age + 1))

    assert m.state.age == 37
    assert m.computed == "Ada Lovelace"
    assert calls["join"] == 1


@pytest.mark.unit
@pytest.mark.memo
def test_effect_memo_batches_in_order():
    first = D.leaf_with_effect(lambda x: (x * x, "first"))
    second = D.leaf_with_effect(lambda x: (x - 1, "second"))

    m, effect = M.from_deriver_with_effects(8, D.chain(first, second), collect)
    steps = [effect]
    for state in (8, -8, 5):
        m, effect = m.set_state(state)
        steps.append(effect)

    assert m.computed == 24
    assert steps == [["second", "first"], [], ["first"], ["second", "first"]]


@pytest.mark.unit
@pytest.mark.memo
def test_effect_memo_with_unit_batcher():
    m, effect = M.new_with_effect(1, lambda x: (x, "changed"), lambda effects: None)

    m, effect = m.update(lambda x: x + 1)

    assert effect is None
    assert m.computed == 2


@pytest.mark.unit
@pytest.mark.memo
def test_fast_path_equality_is_configurable(calls):
    compute = calls.wrap("sum", sum)
    m = M.from_deriver([1, 2], D.leaf(compute, equal=E.DEEP), equal=E.DEEP)

    assert m.set_state([1, 2]) is m
    assert calls["sum"] == 1

    shallow = M.new([1, 2], compute)
    assert shallow.set_state([1, 2]) is not shallow
    assert calls["sum"] == 3


@pytest.mark.unit
@pytest.mark.memo
def test_try_set_state_returns_error_and_keeps_memo():
    def parse(text):
        return int(text)

    m = M.new("1", parse)

    match m.try_set_state("one"):
        case Error(err):
            assert isinstance(err, M.DeriveError)
            assert err.state == "one"
            assert isinstance(err.error, ValueError)
            assert "one" in str(err)
        case Ok(_):
            pytest.fail("expected an error")

    match m.try_set_state("2"):
        case Ok(updated):
            assert updated.computed == 2
        case Error(err):
            pytest.fail(str(err))

    assert m.computed == 1


@pytest.mark.unit
@pytest.mark.memo
def test_try_update_catches_errors_in_update_function():
    m = M.new(1, str)

    match m.try_update(lambda x: x / 0):
        case Error(err):
            assert err.state == 1
            assert isinstance(err.error, ZeroDivisionError)
        case Ok(_):
            pytest.fail("expected an error")


@pytest.mark.unit
@pytest.mark.memo
def test_effect_memo_try_set_state():
    m, _ = M.new_with_effect(1, lambda x: (10 // x, "divided"), collect)

    match m.try_set_state(0):
        case Error(err):
            assert isinstance(err.error, ZeroDivisionError)
        case Ok(_):
            pytest.fail("expected an error")

    match m.try_update(lambda x: x + 1):
        case Ok((updated, effect)):
            assert updated.computed == 5
            assert effect == ["divided"]
        case Error(err):
            pytest.fail(str(err))


@pytest.mark.unit
@pytest.mark.memo
def test_fast_path_is_logged_without_touching_leaves(caplog):
    m = M.new("ABC", str.lower)
    caplog.set_level(logging.DEBUG, logger="memostate")

    m.set_state("ABC")

    records = [r for r in caplog.records if r.name.startswith("memostate")]
    assert [r.getMessage() for r in records] == ["state unchanged (shallow), node not advanced"]
    assert records[0].name == "memostate.memo._memo"
