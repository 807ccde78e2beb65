"""Shared fixtures for integration tests."""

from __future__ import annotations

import os

import pytest


@pytest.fixture(autouse=True)
def _clean_magnetarr_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's MAGNETARR_* variables out of config tests."""
    for key in list(os.environ):
        if key.upper().startswith("MAGNETARR_"):
            monkeypatch.delenv(key, raising=False)
