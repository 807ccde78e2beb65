"""Hardcoded default configuration values."""

from __future__ import annotations

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {
    "app_name": "magnetarr",
    "environment": "dev",
    "http": {
        "timeout_seconds": 30.0,
    },
    "logging": {
        "level": "INFO",
        "format": None,  # Derived from environment in schema.py
    },
    "stremio": {
        "index_base_url": "https://bitsearch.to",
        "cinemeta_base_url": "https://v3-cinemeta.strem.io",
        "imdb_suggest_fallback": True,
        "realdebrid_base_url": "https://api.real-debrid.com/rest/1.0",
    },
}
