"""Command and handler for pausing and resuming the current song."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from discord_jukebox.domain.music.value_objects import PlaybackStatus
from discord_jukebox.domain.shared.messages import DiscordUIMessages
from discord_jukebox.domain.shared.types import DiscordSnowflake

if TYPE_CHECKING:
    from ..services.player_registry import PlayerRegistry


class PauseStatus(Enum):
    """Status codes for pause and resume results."""

    SUCCESS = "success"
    NOT_CONNECTED = "not_connected"
    NOT_PLAYING = "not_playing"
    NOT_PAUSED = "not_paused"


class PausePlaybackCommand(BaseModel):
    """Pause the current song, or resume it when ``resume`` is set."""

    model_config = ConfigDict(frozen=True)

    guild_id: DiscordSnowflake
    resume: bool = False


class PauseResult(BaseModel):

    status: PauseStatus
    message: str

    @property
    def is_success(self) -> bool:
        return self.status == PauseStatus.SUCCESS

    @classmethod
    def success(cls, message: str) -> PauseResult:
        return cls(status=PauseStatus.SUCCESS, message=message)

    @classmethod
    def error(cls, status: PauseStatus, message: str) -> PauseResult:
        return cls(status=status, message=message)


class PausePlaybackHandler:

    def __init__(self, *, player_registry: PlayerRegistry) -> None:
        self._players = player_registry

    async def handle(self, command: PausePlaybackCommand) -> PauseResult:
        player = self._players.get_if_exists(command.guild_id)
        if player is None or not player.is_connected:
            return PauseResult.error(
                PauseStatus.NOT_CONNECTED, DiscordUIMessages.PAUSE_NOT_CONNECTED
            )

        async with player.lock:
            if command.resume:
                if player.status is not PlaybackStatus.PAUSED:
                    return PauseResult.error(
                        PauseStatus.NOT_PAUSED, DiscordUIMessages.RESUME_NOT_PAUSED
                    )
                await player.resume()
                return PauseResult.success(DiscordUIMessages.RESUME_RESUMED)

            if player.status is not PlaybackStatus.PLAYING:
                return PauseResult.error(
                    PauseStatus.NOT_PLAYING, DiscordUIMessages.PAUSE_NOT_PLAYING
                )
            await player.pause()

        return PauseResult.success(DiscordUIMessages.PAUSE_PAUSED)
