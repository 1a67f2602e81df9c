"""
Music Bounded Context

Domain logic for songs, guild queues, and voice destination selection.
"""

from discord_jukebox.domain.music.entities import GuildQueue, SongDescriptor
from discord_jukebox.domain.music.services import VoiceDestinationService
from discord_jukebox.domain.music.value_objects import (
    MediaSource,
    PlaybackStatus,
    VoiceChannelOccupancy,
)

__all__ = [
    # Entities
    "SongDescriptor",
    "GuildQueue",
    # Value Objects
    "MediaSource",
    "PlaybackStatus",
    "VoiceChannelOccupancy",
    # Services
    "VoiceDestinationService",
]
