"""Infrastructure layer - external systems integration.

This layer contains implementations for:
- Persistence (SQLite guild settings)
- Discord (bot, cogs, voice and channel adapters)
- Audio (yt-dlp media provider)
- Catalog (Spotify via spotipy)
"""

from discord_jukebox.infrastructure.discord.adapters.voice_adapter import DiscordVoiceAdapter
from discord_jukebox.infrastructure.discord.bot import create_bot
from discord_jukebox.infrastructure.persistence.database import Database

__all__ = [
    "create_bot",
    "DiscordVoiceAdapter",
    "Database",
]
