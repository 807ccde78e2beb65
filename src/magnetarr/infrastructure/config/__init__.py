from __future__ import annotations

from .load import load_config
from .schema import AppConfig, EnvOverrides, StremioConfig

__all__ = ["AppConfig", "EnvOverrides", "StremioConfig", "load_config"]
