"""Shared test fixtures."""

import pytest

from bulletpoints.models.item import Store
from tests.unit.trees import make_store


@pytest.fixture
def hello_store() -> Store:
    """root -> [a] where a reads "Hello"."""
    return make_store({"root": ["a"]}, a={"text": "Hello"})


@pytest.fixture
def nested_store() -> Store:
    """A small outline with nesting and one collapsed branch.

    root
      a
        a1
          a1x
        a2
      b
      c (collapsed)
        c1
    """
    return make_store(
        {
            "root": ["a", "b", "c"],
            "a": ["a1", "a2"],
            "a1": ["a1x"],
            "c": ["c1"],
        },
        c={"collapsed": True},
    )
