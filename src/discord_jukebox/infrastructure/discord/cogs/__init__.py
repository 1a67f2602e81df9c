"""Discord cogs - command handlers."""

from discord_jukebox.infrastructure.discord.cogs.message_command_cog import MessageCommandCog
from discord_jukebox.infrastructure.discord.cogs.music_cog import MusicCog

__all__ = [
    "MusicCog",
    "MessageCommandCog",
]
