"""Port interface for Discord voice operations."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from discord_jukebox.domain.shared.types import ChannelIdField, DiscordSnowflake

if TYPE_CHECKING:
    from ...domain.music.entities import SongDescriptor


class VoiceAdapter(ABC):
    """Interface for Discord voice channel operations."""

    @abstractmethod
    async def connect(self, guild_id: DiscordSnowflake, channel_id: ChannelIdField) -> bool:
        """Connect to a voice channel, moving if already connected elsewhere."""
        ...

    @abstractmethod
    async def disconnect(self, guild_id: DiscordSnowflake) -> bool:
        """Disconnect from voice in a guild."""
        ...

    @abstractmethod
    async def play(
        self,
        guild_id: DiscordSnowflake,
        song: "SongDescriptor",
        stream_url: str,
    ) -> bool:
        """Start playing a song from an already resolved stream URL."""
        ...

    @abstractmethod
    async def stop(self, guild_id: DiscordSnowflake) -> bool:
        """Stop current playback."""
        ...

    @abstractmethod
    async def pause(self, guild_id: DiscordSnowflake) -> bool:
        """Pause current playback."""
        ...

    @abstractmethod
    async def resume(self, guild_id: DiscordSnowflake) -> bool:
        """Resume paused playback."""
        ...

    @abstractmethod
    def is_connected(self, guild_id: DiscordSnowflake) -> bool:
        ...

    @abstractmethod
    def set_on_track_end_callback(
        self,
        callback: Callable[[DiscordSnowflake], Awaitable[None]],
    ) -> None:
        """Set callback for when a track ends."""
        ...
