"""
Skip Song Command

Command and handler for forwarding past one or more songs.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from ...domain.shared.exceptions import NoNextItemError
from ...domain.shared.messages import DiscordUIMessages

if TYPE_CHECKING:
    from ...domain.music.entities import SongDescriptor
    from ..services.player_registry import PlayerRegistry


class SkipStatus(Enum):
    """Status codes for skip results."""

    SUCCESS = "success"
    NOTHING_TO_SKIP = "nothing_to_skip"


@dataclass
class SkipSongCommand:
    """Command to skip ``count`` songs, the current one included."""

    guild_id: int
    count: int = 1

    def __post_init__(self) -> None:
        if self.guild_id <= 0:
            raise ValueError("Guild ID must be positive")


@dataclass
class SkipResult:
    """Result of a skip song command."""

    status: SkipStatus
    message: str
    now_playing: SongDescriptor | None = None

    @property
    def is_success(self) -> bool:
        return self.status == SkipStatus.SUCCESS

    @classmethod
    def success(cls, now_playing: SongDescriptor | None) -> SkipResult:
        return cls(
            status=SkipStatus.SUCCESS,
            message=DiscordUIMessages.SKIP_SKIPPING,
            now_playing=now_playing,
        )

    @classmethod
    def nothing_to_skip(cls) -> SkipResult:
        return cls(status=SkipStatus.NOTHING_TO_SKIP, message=DiscordUIMessages.SKIP_NOTHING)


class SkipSongHandler:
    """Handler for SkipSongCommand."""

    def __init__(self, *, player_registry: PlayerRegistry) -> None:
        self._players = player_registry

    async def handle(self, command: SkipSongCommand) -> SkipResult:
        player = self._players.get_if_exists(command.guild_id)
        if player is None:
            return SkipResult.nothing_to_skip()

        async with player.lock:
            try:
                await player.forward(command.count)
            except NoNextItemError:
                return SkipResult.nothing_to_skip()
            return SkipResult.success(player.current)
