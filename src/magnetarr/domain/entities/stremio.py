"""Domain entities for Stremio stream resolution.

Pure value objects: no framework dependencies, no I/O.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

StremioContentType = Literal["movie", "series"]

# Title prefixes marking where a StreamResult came from.
CACHED_PREFIX = "RD Cached: "
DOWNLOADING_PREFIX = "[RD - Downloading]: "


@dataclass(frozen=True)
class Candidate:
    """A torrent search result not yet known to be cache-available."""

    title: str
    magnet_uri: str


def _split_terms(raw: str | None) -> frozenset[str]:
    if not raw:
        return frozenset()
    return frozenset(t.strip().lower() for t in raw.split(",") if t.strip())


@dataclass(frozen=True)
class PreferencePolicy:
    """User-declared inclusion/exclusion terms.

    Empty include sets mean "no constraint". The exclude set rejects a
    candidate when any single term matches.
    """

    include_quality: frozenset[str] = frozenset()
    include_codec: frozenset[str] = frozenset()
    include_audio: frozenset[str] = frozenset()
    exclude: frozenset[str] = frozenset()

    @classmethod
    def from_csv(
        cls,
        quality: str | None = None,
        codec: str | None = None,
        audio: str | None = None,
        exclude: str | None = None,
    ) -> PreferencePolicy:
        """Build a policy from comma-separated settings strings.

        Terms are lower-cased and stripped; empty terms are dropped.
        """
        return cls(
            include_quality=_split_terms(quality),
            include_codec=_split_terms(codec),
            include_audio=_split_terms(audio),
            exclude=_split_terms(exclude),
        )

    @property
    def is_empty(self) -> bool:
        return not (
            self.include_quality
            or self.include_codec
            or self.include_audio
            or self.exclude
        )


@dataclass(frozen=True)
class StreamResult:
    """Stremio stream entry: a direct URL or a download placeholder."""

    title: str
    url: str

    def to_dict(self) -> dict[str, str]:
        return {"title": self.title, "url": self.url}


@dataclass(frozen=True)
class StremioStreamRequest:
    """Parsed Stremio stream request.

    Created from URL path: ``tt1234567`` (movie) or
    ``tt1234567:1:5`` (series, season 1, episode 5).
    """

    imdb_id: str
    content_type: StremioContentType
    season: int | None = None
    episode: int | None = None


@dataclass(frozen=True)
class StreamResolution:
    """Outcome of one stream request.

    ``error`` carries an explanatory marker for missing input or an
    internal fault; ``fault`` is only set for the latter.
    """

    streams: list[StreamResult] = field(default_factory=list)
    error: str | None = None
    fault: bool = False


@dataclass(frozen=True)
class AddonManifest:
    """Stremio addon manifest (process-wide, built once at startup)."""

    id: str
    version: str
    name: str
    description: str
    types: tuple[str, ...] = ("movie", "series")
    resources: tuple[str, ...] = ("stream",)
    id_prefixes: tuple[str, ...] = ("tt",)

    def to_dict(self, *, configured: bool = False) -> dict[str, Any]:
        """Render the Stremio JSON manifest.

        A configured install no longer asks Stremio to open the settings
        page before use.
        """
        return {
            "id": self.id,
            "version": self.version,
            "name": self.name,
            "description": self.description,
            "types": list(self.types),
            "catalogs": [],
            "resources": list(self.resources),
            "idPrefixes": list(self.id_prefixes),
            "behaviorHints": {
                "configurable": True,
                "configurationRequired": not configured,
            },
        }


@dataclass(frozen=True)
class UserSettings:
    """Per-install settings that drive one stream request."""

    api_key: str = ""
    policy: PreferencePolicy = field(default_factory=PreferencePolicy)
    fallback: bool = False
