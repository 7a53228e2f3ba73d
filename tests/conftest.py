"""Pytest fixtures shared across the content-tree test suite."""

from __future__ import annotations

from collections.abc import Sequence

import pytest

from contenttree import Item, ItemKind, make_item


@pytest.fixture
def viz():
    """Return a factory for visualization items."""

    def _make(tabgroup=None, *, tabset_label=None, **params) -> Item:
        params.setdefault("type", "bar")
        return make_item(ItemKind.visualization, tabgroup=tabgroup, tabset_label=tabset_label, **params)

    return _make


@pytest.fixture
def text():
    """Return a factory for text items."""

    def _make(content: str = "Hello", tabgroup=None) -> Item:
        return make_item(ItemKind.text, tabgroup=tabgroup, content=content)

    return _make


@pytest.fixture
def page_break() -> Item:
    """Return a bare page-break item."""

    return make_item(ItemKind.page_break)


def pytest_collection_modifyitems(items: Sequence[pytest.Item]) -> None:
    """Enforce that every test has exactly one speed marker.

    The suite is runnable by intent:
    - `unit`: pure, fast tests over in-memory values.
    - `integration`: tests touching the environment, logging handlers, files,
      or several layers end to end.

    Each test must have exactly one of these markers.
    """

    invalid: list[str] = []
    for item in items:
        has_unit = item.get_closest_marker("unit") is not None
        has_integration = item.get_closest_marker("integration") is not None
        if has_unit == has_integration:
            markers = []
            if has_unit:
                markers.append("unit")
            if has_integration:
                markers.append("integration")
            invalid.append(f"{item.nodeid} (markers={markers or 'none'})")

    if invalid:
        joined = "\n".join(f"- {nodeid}" for nodeid in invalid)
        raise pytest.UsageError(
            "Each test must have exactly one speed marker: `@pytest.mark.unit` or "
            "`@pytest.mark.integration`.\n"
            f"Offending tests:\n{joined}"
        )
