"""Shared pytest configuration and suite marker assignment."""

from __future__ import annotations

from pathlib import Path

import pytest

_SUITE_MARKERS = {
    "e2e_tests": "e2e",
    "integration_tests": "integration",
    "unit_tests": "unit",
}


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Attach the suite marker matching each test file's directory."""
    del config
    for item in items:
        for directory in Path(str(item.fspath)).parts:
            marker = _SUITE_MARKERS.get(directory)
            if marker is not None:
                item.add_marker(getattr(pytest.mark, marker))
                break
