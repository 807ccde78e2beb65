"""Pydantic configuration models with validation."""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import (
    AliasChoices,
    AliasPath,
    BaseModel,
    Field,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

Environment = Literal["dev", "test", "prod"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
LogFormat = Literal["json", "console"]


class StremioConfig(BaseModel):
    """Configuration for the Stremio addon and its upstream services.

    All values configurable via YAML (stremio section).
    """

    addon_id: str = Field(
        default="community.magnetarr",
        description="Stremio addon id (reverse-DNS style).",
    )
    addon_version: str = Field(default="0.1.0", description="Manifest version.")
    addon_name: str = Field(
        default="Magnetarr",
        description="Addon name shown in Stremio.",
    )
    addon_description: str = Field(
        default="Bitsearch torrents, checked against the Real-Debrid cache.",
        description="Addon description shown in Stremio.",
    )

    index_base_url: str = Field(
        default="https://bitsearch.to",
        description="Base URL of the torrent index.",
    )
    cinemeta_base_url: str = Field(
        default="https://v3-cinemeta.strem.io",
        description="Base URL of the Cinemeta metadata addon.",
    )
    imdb_suggest_fallback: bool = Field(
        default=True,
        description="Ask IMDb Suggest when Cinemeta has no title.",
    )
    realdebrid_base_url: str = Field(
        default="https://api.real-debrid.com/rest/1.0",
        description="Real-Debrid REST API base URL.",
    )

    @field_validator("index_base_url", "cinemeta_base_url", "realdebrid_base_url")
    @classmethod
    def _strip_trailing_slash(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("base URLs must start with http:// or https://")
        return v.rstrip("/")


class AppConfig(BaseModel):
    """
    Canonical application configuration (validated, final).

    Note:
    - YAML is expected to be sectioned (http/logging/stremio).
    - Environment variables are handled by EnvOverrides(BaseSettings) to allow strict
      precedence control (defaults < YAML < ENV < CLI) in load.py.
    """

    # General
    app_name: str = Field(default="magnetarr", description="Application name.")
    environment: Environment = Field(
        default="dev",
        description="Runtime environment (affects defaults like log format).",
    )

    # HTTP (YAML section: http.*)
    http_timeout_seconds: float = Field(
        default=30.0,
        validation_alias=AliasChoices(
            "http_timeout_seconds",
            AliasPath("http", "timeout_seconds"),
        ),
        description="Timeout in seconds for every upstream HTTP call.",
    )
    http_user_agent: str = Field(
        default=(
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
            "AppleWebKit/537.36 (KHTML, like Gecko) "
            "Chrome/131.0.0.0 Safari/537.36"
        ),
        validation_alias=AliasChoices(
            "http_user_agent",
            AliasPath("http", "user_agent"),
        ),
        description="User-Agent for index page requests.",
    )

    # Logging (YAML section: logging.*)
    log_level: LogLevel = Field(
        default="INFO",
        validation_alias=AliasChoices(
            "log_level",
            AliasPath("logging", "level"),
        ),
        description="Log level.",
    )
    log_format: Optional[LogFormat] = Field(
        default=None,
        validation_alias=AliasChoices(
            "log_format",
            AliasPath("logging", "format"),
        ),
        description=(
            "Log renderer format (console/json). If unset, derived from environment."
        ),
    )

    # Stremio addon configuration (YAML section: stremio.*)
    stremio: StremioConfig = Field(default_factory=StremioConfig)

    @field_validator("http_timeout_seconds")
    @classmethod
    def _validate_http_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("http_timeout_seconds must be > 0")
        return v

    @model_validator(mode="after")
    def _derive_defaults(self) -> "AppConfig":
        # Default log format: console in dev/test, json in prod.
        if self.log_format is None:
            self.log_format = "json" if self.environment == "prod" else "console"
        return self

    def to_sectioned_dict(self) -> dict[str, Any]:
        """
        Dump configuration in the sectioned shape used by config.yaml/docs.
        """
        return {
            "app_name": self.app_name,
            "environment": self.environment,
            "http": {
                "timeout_seconds": self.http_timeout_seconds,
                "user_agent": self.http_user_agent,
            },
            "logging": {"level": self.log_level, "format": self.log_format},
            "stremio": self.stremio.model_dump(),
        }


class EnvOverrides(BaseSettings):
    """
    Environment-variable overrides (all optional).

    Supported env var examples (flat, explicit):
    - MAGNETARR_ENVIRONMENT
    - MAGNETARR_HTTP_TIMEOUT_SECONDS
    - MAGNETARR_LOG_LEVEL
    - MAGNETARR_INDEX_BASE_URL
    """

    model_config = SettingsConfigDict(
        env_prefix="MAGNETARR_",
        extra="ignore",
        case_sensitive=False,
    )

    app_name: Optional[str] = None
    environment: Optional[Environment] = None

    http_timeout_seconds: Optional[float] = None
    http_user_agent: Optional[str] = None

    log_level: Optional[LogLevel] = None
    log_format: Optional[LogFormat] = None

    index_base_url: Optional[str] = None
    cinemeta_base_url: Optional[str] = None
    realdebrid_base_url: Optional[str] = None

    def to_update_dict(self) -> dict[str, Any]:
        """
        Return only values that were actually provided (non-None), for merging.
        """
        return self.model_dump(exclude_none=True)
