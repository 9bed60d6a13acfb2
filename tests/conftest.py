"""Shared fixtures."""

from __future__ import annotations

import pytest

from payu_pl.core.config import clear_config


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Give every test fresh settings without PAYU_* variables from the host."""
    for name in ("PAYU_SECOND_KEY", "PAYU_LOCALE", "PAYU_ENVIRONMENT", "PAYU_CLIENT_ID", "PAYU_CLIENT_SECRET"):
        monkeypatch.delenv(name, raising=False)
    clear_config()
    yield
    clear_config()
