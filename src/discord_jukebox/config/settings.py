"""Application Settings and Configuration

Pydantic-based settings management using environment variables.
Settings are loaded from environment variables with support for .env files,
type validation, and sensible defaults. All settings are frozen and immutable
after initialization.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, BaseModel, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..domain.shared.constants import AudioConstants
from ..domain.shared.messages import ErrorMessages
from ..domain.shared.types import (
    BusyTimeoutMs,
    CommandPrefixStr,
    ConnectionTimeoutS,
    LookupConcurrency,
    PlaylistLimit,
    VolumeFloat,
)
from ..domain.shared.validators import validate_discord_snowflake


class DatabaseSettings(BaseModel):
    """Database configuration."""

    model_config = SettingsConfigDict(frozen=True, populate_by_name=True)

    url: str = Field(
        default="sqlite:///data/bot.db",
        validation_alias=AliasChoices("url", "database_url", "db_url"),
    )
    busy_timeout_ms: BusyTimeoutMs = Field(
        default=5000,
        validation_alias=AliasChoices("busy_timeout_ms", "busy_timeout"),
    )
    connection_timeout_s: ConnectionTimeoutS = Field(
        default=10,
        validation_alias=AliasChoices("connection_timeout_s", "connection_timeout"),
    )

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate database URL format."""
        if not v.startswith("sqlite://"):
            raise ValueError(ErrorMessages.INVALID_DATABASE_URL)
        return v


class DiscordSettings(BaseModel):
    """Discord bot configuration."""

    model_config = SettingsConfigDict(frozen=True, populate_by_name=True)

    token: SecretStr = Field(
        default=SecretStr(""), validation_alias=AliasChoices("token", "bot_token", "discord_token")
    )
    command_prefix: CommandPrefixStr = Field(
        default="!",
        validation_alias=AliasChoices("command_prefix", "prefix"),
    )
    test_guild_ids: tuple[int, ...] = Field(
        default_factory=tuple, validation_alias=AliasChoices("test_guild_ids", "test_guilds")
    )
    sync_on_startup: bool = False

    @field_validator("test_guild_ids", mode="before")
    @classmethod
    def validate_snowflake_ids(cls, v: tuple[int, ...] | list[int]) -> tuple[int, ...]:
        """Validate Discord snowflake IDs and convert lists to tuples."""
        # JSON arrays from env vars arrive as lists
        if isinstance(v, list):
            v = tuple(v)
        for snowflake in v:
            validate_discord_snowflake(snowflake)
        return v


class AudioSettings(BaseModel):
    """Audio playback and extraction configuration."""

    model_config = SettingsConfigDict(frozen=True, populate_by_name=True)

    default_volume: VolumeFloat = 0.5
    ffmpeg_options: dict[str, str] = Field(
        default_factory=lambda: {
            "before_options": "-reconnect 1 -reconnect_streamed 1 -reconnect_delay_max 5",
            "options": "-vn",
        }
    )
    ytdlp_format: str = "251/140/bestaudio[protocol^=http]/bestaudio/best"
    socket_timeout_s: int = Field(
        default=10,
        ge=1,
        le=120,
        validation_alias=AliasChoices("socket_timeout_s", "socket_timeout"),
    )


class SpotifySettings(BaseModel):
    """Spotify catalog credentials. Spotify links are rejected when unset."""

    model_config = SettingsConfigDict(frozen=True, populate_by_name=True)

    client_id: SecretStr = Field(
        default=SecretStr(""),
        validation_alias=AliasChoices("client_id", "spotify_client_id"),
    )
    client_secret: SecretStr = Field(
        default=SecretStr(""),
        validation_alias=AliasChoices("client_secret", "spotify_client_secret"),
    )
    requests_timeout_s: int = Field(default=10, ge=1, le=120)

    @property
    def is_configured(self) -> bool:
        return bool(self.client_id.get_secret_value() and self.client_secret.get_secret_value())


class QueueSettings(BaseModel):
    """Queue population limits."""

    model_config = SettingsConfigDict(frozen=True, populate_by_name=True)

    default_playlist_limit: PlaylistLimit = Field(
        default=AudioConstants.DEFAULT_PLAYLIST_LIMIT,
        validation_alias=AliasChoices("default_playlist_limit", "playlist_limit"),
    )
    catalog_lookup_concurrency: LookupConcurrency = Field(
        default=AudioConstants.DEFAULT_LOOKUP_CONCURRENCY,
        validation_alias=AliasChoices("catalog_lookup_concurrency", "lookup_concurrency"),
    )


class Settings(BaseSettings):
    """Application settings container.

    Automatically loads configuration from environment variables.

    Environment variable naming:
    - ENVIRONMENT, DEBUG, LOG_LEVEL (top-level)
    - DISCORD__TOKEN, DISCORD__COMMAND_PREFIX, etc. (nested with prefix)
    - SPOTIFY__CLIENT_ID, SPOTIFY__CLIENT_SECRET
    - QUEUE__DEFAULT_PLAYLIST_LIMIT, QUEUE__CATALOG_LOOKUP_CONCURRENCY
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    environment: Literal["development", "production", "test"] = "development"
    debug: bool = False
    log_level: str = "INFO"

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    discord: DiscordSettings = Field(default_factory=DiscordSettings)
    audio: AudioSettings = Field(default_factory=AudioSettings)
    spotify: SpotifySettings = Field(default_factory=SpotifySettings)
    queue: QueueSettings = Field(default_factory=QueueSettings)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(ErrorMessages.INVALID_LOG_LEVEL.format(level=v, valid_levels=valid_levels))
        return v_upper


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached application settings.

    Settings are automatically loaded from:
    1. .env file (if present)
    2. Environment variables
    3. Default values
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing)."""
    get_settings.cache_clear()
