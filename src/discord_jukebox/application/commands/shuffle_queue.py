"""Command and handler for shuffling the pending songs of a guild."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ...domain.shared.messages import DiscordUIMessages

if TYPE_CHECKING:
    from ..services.player_registry import PlayerRegistry


@dataclass(frozen=True)
class ShuffleQueueCommand:
    guild_id: int


@dataclass(frozen=True)
class ShuffleResult:
    shuffled: bool
    message: str


class ShuffleQueueHandler:

    def __init__(self, *, player_registry: PlayerRegistry) -> None:
        self._players = player_registry

    async def handle(self, command: ShuffleQueueCommand) -> ShuffleResult:
        player = self._players.get_if_exists(command.guild_id)
        if player is None:
            return ShuffleResult(False, DiscordUIMessages.SHUFFLE_NOT_ENOUGH)

        async with player.lock:
            if not player.shuffle():
                return ShuffleResult(False, DiscordUIMessages.SHUFFLE_NOT_ENOUGH)

        return ShuffleResult(True, DiscordUIMessages.SHUFFLE_DONE)
