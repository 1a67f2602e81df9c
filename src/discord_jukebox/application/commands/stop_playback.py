"""Command and handler for stopping playback while keeping the queue."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from discord_jukebox.domain.music.value_objects import PlaybackStatus
from discord_jukebox.domain.shared.messages import DiscordUIMessages
from discord_jukebox.domain.shared.types import DiscordSnowflake

if TYPE_CHECKING:
    from ..services.player_registry import PlayerRegistry


class StopStatus(Enum):
    """Status codes for stop results."""

    SUCCESS = "success"
    NOT_CONNECTED = "not_connected"
    NOT_PLAYING = "not_playing"


class StopPlaybackCommand(BaseModel):
    model_config = ConfigDict(frozen=True)

    guild_id: DiscordSnowflake


class StopResult(BaseModel):

    status: StopStatus
    message: str

    @property
    def is_success(self) -> bool:
        return self.status == StopStatus.SUCCESS

    @classmethod
    def success(cls) -> StopResult:
        return cls(status=StopStatus.SUCCESS, message=DiscordUIMessages.STOP_STOPPED)

    @classmethod
    def error(cls, status: StopStatus, message: str) -> StopResult:
        return cls(status=status, message=message)


class StopPlaybackHandler:

    def __init__(self, *, player_registry: PlayerRegistry) -> None:
        self._players = player_registry

    async def handle(self, command: StopPlaybackCommand) -> StopResult:
        player = self._players.get_if_exists(command.guild_id)
        if player is None or not player.is_connected:
            return StopResult.error(StopStatus.NOT_CONNECTED, DiscordUIMessages.STOP_NOT_CONNECTED)

        async with player.lock:
            if player.status is not PlaybackStatus.PLAYING:
                return StopResult.error(StopStatus.NOT_PLAYING, DiscordUIMessages.STOP_NOT_PLAYING)
            await player.stop()

        return StopResult.success()
