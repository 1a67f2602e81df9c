"""
Guild Bounded Context

Per-guild configuration such as the playlist limit.
"""

from discord_jukebox.domain.guild.entities import GuildSettings
from discord_jukebox.domain.guild.repository import GuildSettingsRepository

__all__ = [
    "GuildSettings",
    "GuildSettingsRepository",
]
