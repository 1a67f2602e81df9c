"""Owns one Player per guild and routes voice track-end events to them."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ...domain.shared.exceptions import DomainError
from ...domain.shared.messages import LogTemplates
from ...domain.shared.types import DiscordSnowflake
from .player import Player

if TYPE_CHECKING:
    from ..interfaces.media_provider import MediaProvider
    from ..interfaces.voice_adapter import VoiceAdapter

logger = logging.getLogger(__name__)


class PlayerRegistry:
    def __init__(self, *, voice_adapter: VoiceAdapter, media_provider: MediaProvider) -> None:
        self._voice_adapter = voice_adapter
        self._media_provider = media_provider
        self._players: dict[DiscordSnowflake, Player] = {}

        self._voice_adapter.set_on_track_end_callback(self._on_track_end)

    def __len__(self) -> int:
        return len(self._players)

    def __contains__(self, guild_id: object) -> bool:
        return guild_id in self._players

    def get(self, guild_id: DiscordSnowflake) -> Player:
        """Return the guild's player, creating it on first access."""
        player = self._players.get(guild_id)
        if player is None:
            player = Player(
                guild_id,
                voice_adapter=self._voice_adapter,
                media_provider=self._media_provider,
            )
            self._players[guild_id] = player
            logger.debug(LogTemplates.PLAYER_CREATED, guild_id)
        return player

    def get_if_exists(self, guild_id: DiscordSnowflake) -> Player | None:
        return self._players.get(guild_id)

    async def remove(self, guild_id: DiscordSnowflake) -> None:
        """Disconnect and forget the guild's player."""
        player = self._players.pop(guild_id, None)
        if player is None:
            return
        async with player.lock:
            await player.stop()
            if player.voice_channel_id is not None:
                await player.disconnect()
        logger.info(LogTemplates.PLAYER_REMOVED, guild_id)

    async def shutdown(self) -> None:
        for guild_id in list(self._players):
            await self.remove(guild_id)

    async def _on_track_end(self, guild_id: DiscordSnowflake) -> None:
        player = self._players.get(guild_id)
        if player is None:
            logger.debug(LogTemplates.PLAYBACK_NO_PLAYER, guild_id)
            return

        async with player.lock:
            try:
                await player.handle_track_end()
            except DomainError as exc:
                logger.warning(LogTemplates.PLAYBACK_CALLBACK_ERROR, guild_id, exc.message)
