"""Domain exceptions."""

from __future__ import annotations


class MagnetarrError(Exception):
    """Base class for all magnetarr errors."""


class AddonSettingsError(MagnetarrError):
    """Raised when the per-install addon settings cannot be decoded."""
