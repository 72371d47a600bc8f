"""Tests for the undo/redo history."""

from bulletpoints.core.history import History, dispatch
from bulletpoints.core.tree.navigation import find_parent
from bulletpoints.models.actions import (
    Delete,
    Indent,
    Insert,
    LoadState,
    MoveItems,
    Outdent,
    Redo,
    SetText,
    ToggleCollapse,
    Undo,
)
from bulletpoints.models.item import Item, Store
from tests.unit.trees import make_store


def test_initial_history_uses_default_store() -> None:
    history = History.initial()
    assert history.present.root.text == "Home"
    assert not history.can_undo
    assert not history.can_redo


def test_change_pushes_previous_present(hello_store: Store) -> None:
    history = dispatch(History.initial(hello_store), Insert("root", "b", after_id="a"))
    assert history.past == (hello_store,)
    assert history.future == ()
    assert history.present.items["root"].children == ("a", "b")


def test_noop_action_leaves_history_identical(nested_store: Store) -> None:
    history = History.initial(nested_store)
    assert dispatch(history, Indent("a", "root")) is history
    assert dispatch(history, MoveItems(("a",), "a1", "inside")) is history


def test_consecutive_text_edits_coalesce(hello_store: Store) -> None:
    history = History.initial(hello_store)
    for text in ("a", "ab", "abc"):
        history = dispatch(history, SetText("a", text))
    assert history.past == (hello_store,)
    assert history.present.items["a"].text == "abc"


def test_text_edits_on_different_items_do_not_coalesce(nested_store: Store) -> None:
    history = History.initial(nested_store)
    history = dispatch(history, SetText("a", "x"))
    history = dispatch(history, SetText("b", "y"))
    assert len(history.past) == 2


def test_other_action_breaks_coalescing(nested_store: Store) -> None:
    history = History.initial(nested_store)
    history = dispatch(history, SetText("a", "x"))
    history = dispatch(history, ToggleCollapse("c"))
    history = dispatch(history, SetText("a", "xy"))
    assert len(history.past) == 3


def test_undo_and_redo(hello_store: Store) -> None:
    history = History.initial(hello_store)
    history = dispatch(history, Insert("root", "b", after_id="a"))
    edited = history.present

    history = dispatch(history, Undo())
    assert history.present is hello_store
    assert history.future == (edited,)
    assert history.can_redo

    history = dispatch(history, Redo())
    assert history.present is edited
    assert history.past == (hello_store,)
    assert history.future == ()


def test_undo_and_redo_on_empty_stacks_are_noops(hello_store: Store) -> None:
    history = History.initial(hello_store)
    assert dispatch(history, Undo()) is history
    assert dispatch(history, Redo()) is history


def test_new_action_clears_future(hello_store: Store) -> None:
    history = History.initial(hello_store)
    history = dispatch(history, Insert("root", "b"))
    history = dispatch(history, Undo())
    history = dispatch(history, Insert("root", "c"))
    assert history.future == ()


def test_undo_resets_coalescing(hello_store: Store) -> None:
    history = History.initial(hello_store)
    history = dispatch(history, ToggleCollapse("a"))
    history = dispatch(history, SetText("a", "H"))
    history = dispatch(history, Undo())
    assert history.last_action is None

    history = dispatch(history, SetText("a", "Hx"))
    assert len(history.past) == 2


def test_undo_redo_inverse_law(nested_store: Store) -> None:
    actions = [
        Insert("root", "n", after_id="b"),
        SetText("n", "new"),
        Indent("n", "root"),
        MoveItems(("a1",), "c", "inside"),
        ToggleCollapse("a"),
    ]
    history = History.initial(nested_store)
    for action in actions:
        history = dispatch(history, action)
    final = history.present

    for _ in actions:
        history = dispatch(history, Undo())
    assert history.present is nested_store

    for _ in actions:
        history = dispatch(history, Redo())
    assert history.present is final


def test_load_state_clears_history(hello_store: Store) -> None:
    history = History.initial(hello_store)
    history = dispatch(history, SetText("a", "x"))
    history = dispatch(history, Insert("root", "b"))
    history = dispatch(history, Undo())

    loaded = make_store({"root": ["z"]})
    history = dispatch(history, LoadState(loaded))
    assert history.present is loaded
    assert history.past == ()
    assert history.future == ()
    assert history.last_action is None


def test_loaded_plain_store_supports_structural_edits() -> None:
    """A Store built directly, without a parent index, still edits correctly."""
    plain = Store(
        items={
            "root": Item(id="root", children=("a",)),
            "a": Item(id="a", children=("b",)),
            "b": Item(id="b"),
        },
        root_id="root",
    )
    history = dispatch(History.initial(), LoadState(plain))
    assert find_parent(history.present, "b") == "a"

    outdented = dispatch(history, Outdent("b", "a"))
    assert outdented.present.items["root"].children == ("a", "b")

    deleted = dispatch(history, Delete("b", "a"))
    assert "b" not in deleted.present
    assert deleted.present.items["a"].children == ()
