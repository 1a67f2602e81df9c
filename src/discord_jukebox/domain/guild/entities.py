"""Entities for per-guild configuration."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from discord_jukebox.domain.shared.constants import AudioConstants
from discord_jukebox.domain.shared.types import GuildIdField, PlaylistLimit


class GuildSettings(BaseModel):
    """Settings a guild can change at runtime."""

    model_config = ConfigDict(frozen=True, strict=True)

    guild_id: GuildIdField
    playlist_limit: PlaylistLimit = AudioConstants.DEFAULT_PLAYLIST_LIMIT

    def with_playlist_limit(self, limit: int) -> GuildSettings:
        return GuildSettings(guild_id=self.guild_id, playlist_limit=limit)
