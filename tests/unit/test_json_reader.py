"""Tests for the JSON snapshot codec."""

import pytest

from bulletpoints.core.importer.json_reader import parse_store_data, store_to_data
from bulletpoints.core.store import InvariantError
from bulletpoints.models.item import Store

MINIMAL_DOC = {
    "rootId": "root",
    "items": {
        "root": {
            "id": "root",
            "text": "Home",
            "children": ["a"],
            "isCompleted": False,
            "collapsed": False,
        },
        "a": {
            "id": "a",
            "text": "Child A",
            "children": [],
            "isCompleted": True,
            "collapsed": False,
            "isTask": True,
            "fontSize": "large",
        },
    },
}


def test_parse_reads_items_and_defaults() -> None:
    store = parse_store_data(MINIMAL_DOC)
    assert store.root_id == "root"
    assert store.root.children == ("a",)

    child = store.items["a"]
    assert child.text == "Child A"
    assert child.is_completed is True
    assert child.is_task is True
    assert child.font_size == "large"
    assert child.is_bold is False
    assert store.parent_of["a"] == "root"


def test_serialise_uses_camel_case_keys(nested_store: Store) -> None:
    data = store_to_data(nested_store)
    assert data["rootId"] == "root"
    assert data["items"]["c"]["collapsed"] is True
    assert data["items"]["a"]["children"] == ["a1", "a2"]
    assert set(data["items"]["a"]) >= {"isCompleted", "isTask", "fontSize", "isUnderlined"}


def test_serialise_then_parse_preserves_store(nested_store: Store) -> None:
    assert parse_store_data(store_to_data(nested_store)) == nested_store


def test_parse_rejects_missing_root_id() -> None:
    with pytest.raises(ValueError, match="rootId"):
        parse_store_data({"items": {}})


def test_parse_rejects_orphans() -> None:
    doc = {
        "rootId": "root",
        "items": {
            "root": {"id": "root", "text": "", "children": []},
            "lost": {"id": "lost", "text": "", "children": []},
        },
    }
    with pytest.raises(InvariantError, match="Orphaned"):
        parse_store_data(doc)


def test_parse_rejects_unknown_font_size() -> None:
    doc = {
        "rootId": "root",
        "items": {"root": {"id": "root", "children": [], "fontSize": "huge"}},
    }
    with pytest.raises(ValueError, match="font size"):
        parse_store_data(doc)


@pytest.mark.parametrize(
    ("doc", "message"),
    [
        (["not", "an", "object"], "Snapshot must be an object"),
        ({"items": [], "rootId": "root"}, "'items' must be an object"),
        ({"items": {}, "rootId": 7}, "'rootId' must be a string"),
        ({"items": {"root": "oops"}, "rootId": "root"}, "must be an object"),
        ({"items": {"root": {"children": "a"}}, "rootId": "root"}, "malformed children"),
        ({"items": {"root": {"text": 3}}, "rootId": "root"}, "non-string text"),
    ],
)
def test_parse_rejects_wrong_shapes(doc: object, message: str) -> None:
    with pytest.raises(ValueError, match=message):
        parse_store_data(doc)  # type: ignore[arg-type]
