from __future__ import annotations

import random

from photo_vault.services.selection import SelectionMachine


def test_long_press_enters_selection():
    machine = SelectionMachine()
    state = machine.long_press("a")
    assert state.active
    assert state.selected_ids == frozenset({"a"})


def test_toggle_adds_and_removes_until_idle():
    machine = SelectionMachine()
    machine.long_press("a")
    machine.toggle("b")
    assert machine.selected_ids == frozenset({"a", "b"})

    machine.toggle("a")
    assert machine.active
    state = machine.toggle("b")
    assert not state.active
    assert state.selected_ids == frozenset()


def test_toggle_while_idle_does_nothing():
    machine = SelectionMachine()
    state = machine.toggle("a")
    assert not state.active
    assert not machine.is_selected("a")


def test_long_press_while_selecting_restarts_selection():
    machine = SelectionMachine()
    machine.select_all(["a", "b"])
    machine.long_press("c")
    assert machine.selected_ids == frozenset({"c"})


def test_select_all_with_nothing_goes_idle_from_any_state():
    machine = SelectionMachine()
    assert not machine.select_all([]).active

    machine.select_all(["a", "b", "c"])
    assert machine.state.count == 3
    state = machine.select_all([])
    assert not state.active
    assert state.count == 0


def test_select_all_replaces_the_selection():
    machine = SelectionMachine()
    machine.long_press("x")
    machine.select_all(["a", "b"])
    assert machine.selected_ids == frozenset({"a", "b"})


def test_clear_from_any_state():
    machine = SelectionMachine()
    machine.clear()
    assert not machine.active
    machine.long_press("a")
    machine.clear()
    assert not machine.active
    assert machine.selected_ids == frozenset()


def test_active_always_matches_non_empty_selection():
    rng = random.Random(7)
    machine = SelectionMachine()
    ids = ["a", "b", "c", "d"]
    for _ in range(500):
        op = rng.choice(["long_press", "toggle", "select_all", "clear"])
        if op == "long_press":
            machine.long_press(rng.choice(ids))
        elif op == "toggle":
            machine.toggle(rng.choice(ids))
        elif op == "select_all":
            machine.select_all(rng.sample(ids, rng.randint(0, len(ids))))
        else:
            machine.clear()
        assert machine.active == (len(machine.selected_ids) > 0)
