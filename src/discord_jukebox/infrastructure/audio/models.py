"""Pydantic models for yt-dlp data transformation and configuration.

These are infrastructure-specific models for parsing external yt-dlp data,
caching extraction results, and configuring yt-dlp options.
"""

from __future__ import annotations

from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, field_validator

from discord_jukebox.domain.shared.types import (
    NonEmptyStr,
    NonNegativeFloat,
    NonNegativeInt,
    PositiveInt,
)

CACHE_TTL: Final[int] = 3600
CACHE_MAX_SIZE: Final[int] = 500
DEFAULT_RETRIES: Final[int] = 3
DEFAULT_SOCKET_TIMEOUT: Final[int] = 10
DEFAULT_HTTP_CHUNK_SIZE: Final[int] = 1024 * 1024  # 1 MiB
DEFAULT_FORMAT: Final[str] = "251/140/bestaudio[protocol^=http]/bestaudio/best"
LOG_URL_TRUNCATE: Final[int] = 60
RESOLVE_BATCH_SIZE: Final[int] = 5
UNAVAILABLE_TITLES: Final[frozenset[str]] = frozenset({"[Private video]", "[Deleted video]"})


def _coerce_non_negative_int(v: Any) -> int | None:
    if v is None:
        return None
    try:
        val = int(v)
    except (TypeError, ValueError):
        return None
    return val if val >= 0 else None


# ── Pydantic models for yt-dlp data ────────────────────────────────────


class AudioFormatInfo(BaseModel):
    """A single audio format entry from yt-dlp extraction."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    url: NonEmptyStr | None = None
    acodec: NonEmptyStr | None = None


class ChapterInfo(BaseModel):
    """A chapter marker of a video."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    title: NonEmptyStr = "Untitled chapter"
    start_time: NonNegativeInt = 0
    end_time: NonNegativeInt = 0

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def _coerce_time(cls, v: Any) -> int:
        return _coerce_non_negative_int(v) or 0

    @field_validator("title", mode="before")
    @classmethod
    def _coerce_title(cls, v: Any) -> str:
        if not isinstance(v, str) or not v.strip():
            return "Untitled chapter"
        return v

    @property
    def length(self) -> int:
        return max(self.end_time - self.start_time, 0)


class YtDlpTrackInfo(BaseModel):
    """Trimmed yt-dlp extraction result for caching and song conversion.

    Extra fields from yt-dlp are silently ignored, keeping memory usage low.
    Before-validators coerce garbage from external yt-dlp data gracefully.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: NonEmptyStr | None = None
    webpage_url: NonEmptyStr | None = None
    url: NonEmptyStr | None = None
    title: NonEmptyStr = "Unknown Title"
    duration: NonNegativeInt | None = None
    thumbnail: NonEmptyStr | None = None
    artist: NonEmptyStr | None = None
    creator: NonEmptyStr | None = None
    uploader: NonEmptyStr | None = None
    channel: NonEmptyStr | None = None
    is_live: bool = False
    chapters: list[ChapterInfo] = Field(default_factory=list)
    formats: list[AudioFormatInfo] = Field(default_factory=list)

    @field_validator(
        "id", "webpage_url", "url",
        "artist", "creator", "uploader", "channel",
        mode="before",
    )
    @classmethod
    def _coerce_empty_to_none(cls, v: Any) -> str | None:
        """Convert empty / whitespace-only / non-string values to None."""
        if not isinstance(v, str) or not v.strip():
            return None
        return v

    @field_validator("thumbnail", mode="before")
    @classmethod
    def _coerce_thumbnail(cls, v: Any) -> str | None:
        """Keep only http(s) thumbnails."""
        if not isinstance(v, str) or not v.startswith(("http://", "https://")):
            return None
        return v

    @field_validator("title", mode="before")
    @classmethod
    def _coerce_title(cls, v: Any) -> str:
        """Fall back to default when yt-dlp sends empty or non-string title."""
        if not isinstance(v, str) or not v.strip():
            return "Unknown Title"
        return v

    @field_validator("duration", mode="before")
    @classmethod
    def _coerce_duration(cls, v: Any) -> int | None:
        """Coerce to non-negative int; return None for garbage values."""
        return _coerce_non_negative_int(v)

    @field_validator("is_live", mode="before")
    @classmethod
    def _coerce_is_live(cls, v: Any) -> bool:
        return bool(v)

    @field_validator("chapters", "formats", mode="before")
    @classmethod
    def _coerce_list(cls, v: Any) -> list[Any]:
        return v if isinstance(v, list) else []


class YtDlpPlaylistInfo(BaseModel):
    """Flat playlist extraction: playlist title plus lightweight entries."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    title: NonEmptyStr | None = None
    entries: list[YtDlpTrackInfo] = Field(default_factory=list)

    @field_validator("title", mode="before")
    @classmethod
    def _coerce_title(cls, v: Any) -> str | None:
        if not isinstance(v, str) or not v.strip():
            return None
        return v

    @field_validator("entries", mode="before")
    @classmethod
    def _drop_empty_entries(cls, v: Any) -> list[Any]:
        if not isinstance(v, list):
            return []
        return [entry for entry in v if isinstance(entry, dict)]


class CacheEntry(BaseModel):
    """Cached yt-dlp extraction result with expiry timestamp."""

    model_config = ConfigDict(frozen=True)

    info: YtDlpTrackInfo | None = None
    cached_at: NonNegativeFloat


# ── yt-dlp option models ───────────────────────────────────────────────


class YtDlpOpts(BaseModel):
    """Typed yt-dlp configuration options passed to YoutubeDL."""

    model_config = ConfigDict(frozen=True)

    quiet: bool = True
    noprogress: bool = True
    noplaylist: bool = True
    default_search: NonEmptyStr = "ytsearch"
    forceipv4: bool = True
    retries: PositiveInt = DEFAULT_RETRIES
    socket_timeout: PositiveInt = DEFAULT_SOCKET_TIMEOUT
    http_chunk_size: PositiveInt = DEFAULT_HTTP_CHUNK_SIZE
    format: NonEmptyStr = DEFAULT_FORMAT
    skip_download: bool = True
    extract_flat: NonEmptyStr | bool = False
