"""Command and handler for adding a query's songs to a guild queue."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, field_validator

from discord_jukebox.domain.music.entities import SongDescriptor
from discord_jukebox.domain.music.services import VoiceDestinationService
from discord_jukebox.domain.music.value_objects import PlaybackStatus
from discord_jukebox.domain.shared.messages import DiscordUIMessages, LogTemplates
from discord_jukebox.domain.shared.types import DiscordSnowflake, NonEmptyStr

if TYPE_CHECKING:
    from ...domain.guild.repository import GuildSettingsRepository
    from ..interfaces.channel_locator import ChannelLocator
    from ..services.player_registry import PlayerRegistry
    from ..services.source_resolver import SourceResolver

logger = logging.getLogger(__name__)


class AddQueryCommand(BaseModel):
    """Request to resolve a query, queue its songs, and start playback if idle."""

    model_config = ConfigDict(frozen=True, strict=True)

    guild_id: DiscordSnowflake
    requester_id: DiscordSnowflake
    text_channel_id: DiscordSnowflake
    query: NonEmptyStr

    add_to_front: bool = False
    shuffle_additions: bool = False
    split_chapters: bool = False

    @field_validator("query", mode="before")
    @classmethod
    def _strip_query(cls, v: str) -> str:
        if isinstance(v, str):
            return v.strip()
        return v


class AddQueryResult(BaseModel):
    """Outcome summary rendered by the transport."""

    model_config = ConfigDict(frozen=True)

    message: str
    show_now_playing: bool = False
    songs: list[SongDescriptor] = Field(default_factory=list)
    now_playing: SongDescriptor | None = None

    @classmethod
    def build(
        cls,
        songs: list[SongDescriptor],
        *,
        add_to_front: bool,
        notes: list[str],
        show_now_playing: bool = False,
        now_playing: SongDescriptor | None = None,
    ) -> AddQueryResult:
        note_text = ", ".join(note for note in notes if note)
        note = f" ({note_text})" if note_text else ""

        if len(songs) == 1:
            message = DiscordUIMessages.QUEUE_ADDED_SINGLE.format(
                title=songs[0].title,
                front=DiscordUIMessages.QUEUE_FRONT_OF_THE if add_to_front else "",
                note=note,
            )
        else:
            message = DiscordUIMessages.QUEUE_ADDED_MANY.format(
                title=songs[0].title, others=len(songs) - 1, note=note
            )

        return cls(
            message=message,
            show_now_playing=show_now_playing,
            songs=songs,
            now_playing=now_playing,
        )


class AddQueryHandler:
    """Handler for AddQueryCommand.

    Resolution runs before the player lock is taken; queue insertion and the
    connect/play decision run under it.
    """

    def __init__(
        self,
        *,
        player_registry: PlayerRegistry,
        source_resolver: SourceResolver,
        channel_locator: ChannelLocator,
        guild_settings_repository: GuildSettingsRepository,
    ) -> None:
        self._players = player_registry
        self._resolver = source_resolver
        self._channels = channel_locator
        self._settings_repo = guild_settings_repository

    async def handle(self, command: AddQueryCommand) -> AddQueryResult:
        """Execute the add query command.

        Raises:
            PreconditionError: Nobody is in a voice channel.
            ResolutionError: The query produced no songs.
            VoiceConnectionError: The voice channel could not be joined.
            PlaybackError: Playback could not be started.
        """
        destination = VoiceDestinationService.select(
            self._channels.member_voice_channel(command.guild_id, command.requester_id),
            self._channels.voice_channel_occupancy(command.guild_id),
        )

        settings = await self._settings_repo.get(command.guild_id)
        outcome = await self._resolver.resolve(
            command.query,
            playlist_limit=settings.playlist_limit,
            split_chapters=command.split_chapters,
            shuffle=command.shuffle_additions,
        )
        songs = [
            song.with_request(command.text_channel_id, command.requester_id)
            for song in outcome.songs
        ]

        player = self._players.get(command.guild_id)
        async with player.lock:
            was_playing = player.current is not None
            player.queue.extend(songs, immediate=command.add_to_front)
            logger.info(
                LogTemplates.QUEUE_ADDED,
                len(songs),
                "front" if command.add_to_front else "back",
                command.guild_id,
            )

            status_note = ""
            show_now_playing = False
            if not player.is_connected:
                await player.connect(destination)
                await player.play()
                show_now_playing = True
                if was_playing:
                    status_note = DiscordUIMessages.NOTE_RESUMING
            elif player.status is PlaybackStatus.IDLE:
                await player.play()

            now_playing = player.current

        return AddQueryResult.build(
            songs,
            add_to_front=command.add_to_front,
            notes=[status_note, outcome.note],
            show_now_playing=show_now_playing,
            now_playing=now_playing,
        )
