"""
Guild Domain Repository Interfaces

Abstract base classes defining the contracts for data persistence.
Implementations live in the infrastructure layer.
"""

from abc import ABC, abstractmethod

from discord_jukebox.domain.guild.entities import GuildSettings


class GuildSettingsRepository(ABC):
    """Abstract repository for per-guild settings."""

    @abstractmethod
    async def get(self, guild_id: int) -> GuildSettings:
        """Return the guild's settings, or defaults if none were saved.

        Args:
            guild_id: The Discord guild ID.

        Returns:
            The stored settings, or a default ``GuildSettings``.
        """
        ...

    @abstractmethod
    async def save(self, settings: GuildSettings) -> None:
        """Insert or replace the guild's settings.

        Args:
            settings: The settings to persist.
        """
        ...
