"""Port interface for looking up guild voice channels and their members."""

from __future__ import annotations

from abc import ABC, abstractmethod

from discord_jukebox.domain.music.value_objects import VoiceChannelOccupancy
from discord_jukebox.domain.shared.types import DiscordSnowflake


class ChannelLocator(ABC):
    """Interface for reading voice state from the chat platform."""

    @abstractmethod
    def member_voice_channel(
        self, guild_id: DiscordSnowflake, user_id: DiscordSnowflake
    ) -> int | None:
        """Voice channel the member is currently in, or None."""
        ...

    @abstractmethod
    def voice_channel_occupancy(self, guild_id: DiscordSnowflake) -> list[VoiceChannelOccupancy]:
        """Non-bot member counts for every voice channel in the guild."""
        ...
