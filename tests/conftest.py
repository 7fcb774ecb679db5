"""Shared fixtures.

Every test gets its own config and data directories so nothing touches the
real ~/.config or ~/.local/share.
"""

from collections.abc import Iterator
from pathlib import Path

import pytest

from cashio.store.records import RecordStore


@pytest.fixture(autouse=True)
def _isolate_dirs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Point XDG directories at the test's temporary directory."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.delenv("CASHIO_DB_PATH", raising=False)
    monkeypatch.delenv("CASHIO_LOG_LEVEL", raising=False)


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "cashio.db"


@pytest.fixture
def store(db_path: Path) -> Iterator[RecordStore]:
    """An initialized store on a fresh database file."""
    with RecordStore.connect(db_path) as record_store:
        record_store.init()
        yield record_store
