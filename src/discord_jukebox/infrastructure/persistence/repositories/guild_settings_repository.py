"""SQLite implementation of the guild settings repository."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from discord_jukebox.domain.guild.entities import GuildSettings
from discord_jukebox.domain.guild.repository import GuildSettingsRepository
from discord_jukebox.domain.shared.constants import AudioConstants, DatabaseTables
from discord_jukebox.domain.shared.messages import LogTemplates

if TYPE_CHECKING:
    from ..database import Database

logger = logging.getLogger(__name__)


class SQLiteGuildSettingsRepository(GuildSettingsRepository):
    def __init__(
        self,
        database: Database,
        *,
        default_playlist_limit: int = AudioConstants.DEFAULT_PLAYLIST_LIMIT,
    ) -> None:
        self._db = database
        self._default_playlist_limit = default_playlist_limit

    async def get(self, guild_id: int) -> GuildSettings:
        row = await self._db.fetch_one(
            f"SELECT playlist_limit FROM {DatabaseTables.GUILD_SETTINGS} WHERE guild_id = ?",
            (guild_id,),
        )
        if row is None:
            return GuildSettings(guild_id=guild_id, playlist_limit=self._default_playlist_limit)
        return GuildSettings(guild_id=guild_id, playlist_limit=row["playlist_limit"])

    async def save(self, settings: GuildSettings) -> None:
        await self._db.execute(
            f"""
            INSERT OR REPLACE INTO {DatabaseTables.GUILD_SETTINGS} (guild_id, playlist_limit)
            VALUES (?, ?)
            """,
            (settings.guild_id, settings.playlist_limit),
        )
        logger.info(LogTemplates.GUILD_SETTINGS_SAVED, settings.guild_id, settings.playlist_limit)
