import os
from pathlib import Path

import pytest


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        if Path(item.path).is_relative_to(Path(__file__).parent):
            item.add_marker(pytest.mark.unit)


@pytest.fixture(autouse=True)
def _clear_relcount_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep RELCOUNT_* variables from the host out of the tests."""
    for key in list(os.environ):
        if key.startswith("RELCOUNT_"):
            monkeypatch.delenv(key)
