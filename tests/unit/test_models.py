"""Tests for domain models."""

import pytest

from bulletpoints.models.actions import MoveItems
from bulletpoints.models.item import Item


def test_item_is_frozen() -> None:
    item = Item(id="abc", text="Test")
    with pytest.raises(AttributeError):
        item.text = "changed"  # type: ignore[misc]


def test_item_defaults_are_plain_display_attributes() -> None:
    item = Item(id="abc")
    assert item.text == ""
    assert item.children == ()
    assert item.collapsed is False
    assert item.font_size == "small"
    assert not (item.is_task or item.is_completed or item.is_bold)


def test_actions_compare_by_value() -> None:
    assert MoveItems(("a",), "b", "inside") == MoveItems(("a",), "b", "inside")
