"""Per-install addon settings carried in the Stremio install URL.

The settings page base64-encodes a JSON object and embeds it as one
path segment, which keeps long preference lists out of query strings.
"""

from __future__ import annotations

import base64
import binascii
import json

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from magnetarr.domain.entities.stremio import PreferencePolicy, UserSettings
from magnetarr.domain.exceptions import AddonSettingsError


class AddonSettings(BaseModel):
    """Raw settings object as produced by the configuration page."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    realdebrid_key: str = Field(default="", alias="realdebridKey")
    quality: str = ""
    codec: str = ""
    audio: str = ""
    exclude: str = ""
    fallback: bool = False

    @field_validator("quality", "codec", "audio", "exclude", mode="before")
    @classmethod
    def _join_lists(cls, v: object) -> object:
        # Older settings pages sent arrays instead of comma-separated strings.
        if isinstance(v, list):
            return ",".join(str(item) for item in v)
        if v is None:
            return ""
        return v

    @field_validator("fallback", mode="before")
    @classmethod
    def _coerce_fallback(cls, v: object) -> object:
        if v is None or v == "":
            return False
        return v

    def to_user_settings(self) -> UserSettings:
        return UserSettings(
            api_key=self.realdebrid_key.strip(),
            policy=PreferencePolicy.from_csv(
                quality=self.quality,
                codec=self.codec,
                audio=self.audio,
                exclude=self.exclude,
            ),
            fallback=self.fallback,
        )


def _b64decode(segment: str) -> bytes:
    # Accept both standard and URL-safe alphabets, with or without padding.
    normalized = segment.replace("-", "+").replace("_", "/")
    normalized += "=" * (-len(normalized) % 4)
    return base64.b64decode(normalized, validate=True)


def decode_addon_settings(segment: str) -> AddonSettings:
    """Decode a base64 JSON path segment into AddonSettings.

    Raises:
        AddonSettingsError: segment is not base64, not JSON, not an
            object, or fails validation.
    """
    try:
        raw = _b64decode(segment).decode("utf-8")
        payload = json.loads(raw)
    except (binascii.Error, UnicodeDecodeError, ValueError) as exc:
        raise AddonSettingsError("settings segment is not base64-encoded JSON") from exc

    if not isinstance(payload, dict):
        raise AddonSettingsError("settings must be a JSON object")

    try:
        return AddonSettings.model_validate(payload)
    except ValidationError as exc:
        raise AddonSettingsError(str(exc)) from exc
