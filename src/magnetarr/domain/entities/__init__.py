from .stremio import (
    CACHED_PREFIX,
    DOWNLOADING_PREFIX,
    AddonManifest,
    Candidate,
    PreferencePolicy,
    StreamResolution,
    StreamResult,
    StremioContentType,
    StremioStreamRequest,
    UserSettings,
)

__all__ = [
    "CACHED_PREFIX",
    "DOWNLOADING_PREFIX",
    "AddonManifest",
    "Candidate",
    "PreferencePolicy",
    "StreamResolution",
    "StreamResult",
    "StremioContentType",
    "StremioStreamRequest",
    "UserSettings",
]
