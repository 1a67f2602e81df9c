"""SQLite repository implementations."""

from discord_jukebox.infrastructure.persistence.repositories.guild_settings_repository import (
    SQLiteGuildSettingsRepository,
)

__all__ = [
    "SQLiteGuildSettingsRepository",
]
