# tests/conftest.py

import pytest

from lunaris.reference import time_scales as ts


@pytest.fixture(autouse=True)
def _isolated_tables(tmp_path, monkeypatch):
    """Every test sees the packaged tables, never a user cache or override."""
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "cache"))
    monkeypatch.delenv(ts.DELTAT_ENV, raising=False)
    monkeypatch.delenv(ts.LEAP_SECONDS_ENV, raising=False)
    ts.clear_table_cache()
    yield
    ts.clear_table_cache()
