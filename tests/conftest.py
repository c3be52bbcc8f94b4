"""Pytest configuration for test isolation.

The import pipeline resolves upload files against
``TRANSACTION_IMPORT_UPLOAD_DIR`` and the database client keeps a
process-wide engine. Both are reset per test so tests never share on-disk or
connection state.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
from db.client import reset_engine

from tests.helpers.db import bootstrap_sqlite_db

HEADER = "title, type, value, category"


@pytest.fixture(autouse=True)
def _isolate_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Point the upload dir at the test's temp dir and drop any shared engine."""

    upload_root = tmp_path / "uploads"
    upload_root.mkdir(parents=True, exist_ok=True)
    monkeypatch.setenv("TRANSACTION_IMPORT_UPLOAD_DIR", os.fspath(upload_root))
    monkeypatch.delenv("TRANSACTION_IMPORT_CSV_DELIMITER", raising=False)
    monkeypatch.delenv("DATABASE_URL", raising=False)
    reset_engine()
    yield
    reset_engine()


@pytest.fixture
def upload_dir(tmp_path: Path) -> Path:
    return tmp_path / "uploads"


@pytest.fixture
def db_url(tmp_path: Path) -> str:
    return bootstrap_sqlite_db(tmp_path / "import.db")


@pytest.fixture
def write_csv(upload_dir: Path) -> Callable[..., str]:
    """Write rows (header first) into the upload dir and return the file name."""

    def _write(*rows: str, name: str = "upload.csv", header: str = HEADER) -> str:
        (upload_dir / name).write_text("\n".join([header, *rows]) + "\n", encoding="utf-8")
        return name

    return _write
