"""
Music Domain Services

Domain services containing business logic that doesn't naturally fit
within a single entity or value object.
"""

from __future__ import annotations

from collections.abc import Iterable

from discord_jukebox.domain.music.value_objects import VoiceChannelOccupancy
from discord_jukebox.domain.shared.exceptions import PreconditionError
from discord_jukebox.domain.shared.messages import ErrorMessages


class VoiceDestinationService:
    """Chooses the voice channel a player should join."""

    @classmethod
    def select(
        cls,
        member_channel_id: int | None,
        occupancy: Iterable[VoiceChannelOccupancy],
    ) -> int:
        """Pick the requester's channel, else the busiest populated channel.

        Ties between equally populated channels go to the lowest channel id.

        Args:
            member_channel_id: Voice channel the requester is in, if any.
            occupancy: Listener counts for the guild's voice channels.

        Returns:
            The chosen channel id.

        Raises:
            PreconditionError: If nobody is listening anywhere.
        """
        if member_channel_id is not None:
            return member_channel_id

        populated = [entry for entry in occupancy if entry.listener_count > 0]
        if not populated:
            raise PreconditionError(ErrorMessages.NO_VOICE_DESTINATION)

        best = max(populated, key=lambda entry: (entry.listener_count, -entry.channel_id))
        return best.channel_id
