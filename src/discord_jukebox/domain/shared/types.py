"""Reusable Pydantic Annotated types for domain-wide validation.

Every constrained type used across the code base is defined here once,
so models can simply annotate their fields::

    from discord_jukebox.domain.shared.types import DiscordSnowflake, NonEmptyStr

    class MyModel(BaseModel):
        guild_id: DiscordSnowflake
        name: NonEmptyStr
"""

from __future__ import annotations

from typing import Annotated

from pydantic import Field

# ── Numeric constraints ─────────────────────────────────────────────

DiscordSnowflake = Annotated[int, Field(gt=0, lt=2**64)]
"""Positive integer that fits a Discord snowflake (1 … 2^64-1)."""

NonNegativeInt = Annotated[int, Field(ge=0)]
"""Integer >= 0."""

NonNegativeFloat = Annotated[float, Field(ge=0.0)]
"""Float >= 0."""

PositiveInt = Annotated[int, Field(gt=0)]
"""Integer > 0."""

VolumeFloat = Annotated[float, Field(ge=0.0, le=2.0)]
"""Audio volume multiplier in [0.0, 2.0]."""


# ── String constraints ──────────────────────────────────────────────

NonEmptyStr = Annotated[str, Field(min_length=1)]
"""String with at least one character."""

SongTitleStr = Annotated[str, Field(min_length=1, max_length=500)]
"""Song title: 1-500 characters."""

HttpUrlStr = Annotated[str, Field(pattern=r"^https?://")]
"""String that starts with http:// or https://."""


# ── Domain-specific numeric constraints ─────────────────────────────

DurationSeconds = Annotated[int, Field(ge=0, le=86_400)]
"""Song duration in seconds: 0 … 86 400 (24 hours)."""

PlaylistLimit = Annotated[int, Field(ge=1, le=1000)]
"""Maximum number of catalog entries sampled per request: 1 … 1 000."""

LookupConcurrency = Annotated[int, Field(ge=1, le=50)]
"""Concurrent catalog-to-video lookups: 1 … 50."""


# ── Settings-specific constraints ──────────────────────────────────

BusyTimeoutMs = Annotated[int, Field(ge=1000, le=30000)]
"""Database busy timeout in milliseconds: 1 000 … 30 000."""

ConnectionTimeoutS = Annotated[int, Field(ge=1, le=60)]
"""Database connection timeout in seconds: 1 … 60."""

CommandPrefixStr = Annotated[str, Field(min_length=1, max_length=5)]
"""Bot command prefix: 1-5 characters."""


# ── Pydantic-compatible ID aliases ──────────────────────────────────

GuildIdField = DiscordSnowflake
"""Alias: guild ID used as a plain Pydantic field."""

ChannelIdField = DiscordSnowflake
"""Alias: channel ID used as a plain Pydantic field."""
