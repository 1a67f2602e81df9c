"""Per-guild playback state machine."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from ...domain.music.entities import GuildQueue, SongDescriptor
from ...domain.music.value_objects import PlaybackStatus
from ...domain.shared.exceptions import (
    InvalidOperationError,
    NoNextItemError,
    PlaybackError,
    ResolutionError,
    VoiceConnectionError,
)
from ...domain.shared.messages import ErrorMessages, LogTemplates
from ...domain.shared.types import DiscordSnowflake

if TYPE_CHECKING:
    from ..interfaces.media_provider import MediaProvider
    from ..interfaces.voice_adapter import VoiceAdapter

logger = logging.getLogger(__name__)


class Player:
    """Queue, voice connection and playback status of one guild.

    Methods mutate state without locking. Callers hold ``lock`` around every
    sequence of reads and mutations so decisions use fresh state.
    """

    MAX_START_ATTEMPTS: int = 3

    def __init__(
        self,
        guild_id: DiscordSnowflake,
        *,
        voice_adapter: VoiceAdapter,
        media_provider: MediaProvider,
    ) -> None:
        self.guild_id = guild_id
        self.queue = GuildQueue()
        self.status = PlaybackStatus.IDLE
        self.current: SongDescriptor | None = None
        self.voice_channel_id: int | None = None
        self.lock = asyncio.Lock()

        self._voice = voice_adapter
        self._media = media_provider

        # discord.py fires the "after" callback for songs we stop ourselves.
        self._ignore_next_track_end = False

    @property
    def is_connected(self) -> bool:
        return self.voice_channel_id is not None and self._voice.is_connected(self.guild_id)

    def _transition(self, target: PlaybackStatus, operation: str) -> None:
        if self.status is target:
            return
        if not self.status.can_transition_to(target):
            raise InvalidOperationError(operation, self.status.value)
        self.status = target

    async def connect(self, channel_id: int) -> None:
        """Join ``channel_id`` or move there if connected elsewhere."""
        if not await self._voice.connect(self.guild_id, channel_id):
            raise VoiceConnectionError(channel_id)
        self.voice_channel_id = channel_id

    async def play(self) -> SongDescriptor:
        """Start or resume playback and return the song now current.

        Calling it while already playing is a no-op.

        Raises:
            InvalidOperationError: The player is not connected.
            NoNextItemError: There is no current song and the queue is empty.
            PlaybackError: No song could be started.
        """
        if self.status is PlaybackStatus.PLAYING and self.current is not None:
            logger.debug(LogTemplates.PLAYBACK_ALREADY_PLAYING, self.guild_id)
            return self.current

        if not self.is_connected:
            raise InvalidOperationError("play", self.status.value, ErrorMessages.NOT_CONNECTED)

        if self.status is PlaybackStatus.PAUSED and self.current is not None:
            await self.resume()
            return self.current

        song = self.current or self.queue.pop_head()
        if song is None:
            raise NoNextItemError(self.status.value, ErrorMessages.NOTHING_TO_PLAY)

        return await self._start_with_retries(song)

    async def pause(self) -> None:
        if self.status is not PlaybackStatus.PLAYING:
            raise InvalidOperationError("pause", self.status.value)
        await self._voice.pause(self.guild_id)
        self._transition(PlaybackStatus.PAUSED, "pause")
        logger.info(LogTemplates.PLAYBACK_PAUSED, self.guild_id)

    async def resume(self) -> None:
        if self.status is not PlaybackStatus.PAUSED:
            raise InvalidOperationError("resume", self.status.value)
        await self._voice.resume(self.guild_id)
        self._transition(PlaybackStatus.PLAYING, "resume")
        logger.info(LogTemplates.PLAYBACK_RESUMED, self.guild_id)

    async def forward(self, count: int = 1) -> SongDescriptor | None:
        """Skip ``count`` songs, the current song counting as the first.

        Returns the new current song, or None when the queue ran out.

        Raises:
            NoNextItemError: ``count`` exceeds what can be skipped.
        """
        skippable = len(self.queue) + (1 if self.current is not None else 0)
        if count < 1 or count > skippable:
            raise NoNextItemError(self.status.value)

        was_active = self.status.is_active
        from_queue = count - 1 if self.current is not None else count
        self.queue.discard_head(from_queue)
        next_song = self.queue.pop_head()

        if was_active:
            await self._stop_audio()
            self._transition(PlaybackStatus.IDLE, "forward")
        self.current = None
        logger.info(LogTemplates.TRACK_FORWARDED, count, self.guild_id)

        if next_song is None:
            logger.info(LogTemplates.QUEUE_EXHAUSTED, self.guild_id)
            return None

        if not was_active:
            self.current = next_song
            return next_song

        return await self._start_with_retries(next_song)

    async def stop(self) -> None:
        """Stop audio and drop the current song. The queue is kept."""
        if self.status.is_active:
            await self._stop_audio()
        self.status = PlaybackStatus.IDLE
        self.current = None
        logger.info(LogTemplates.PLAYBACK_STOPPED, self.guild_id)

    def shuffle(self) -> bool:
        shuffled = self.queue.shuffle()
        if shuffled:
            logger.info(LogTemplates.QUEUE_SHUFFLED, self.guild_id)
        return shuffled

    async def disconnect(self) -> None:
        """Leave voice but keep the current song and queue for a later resume."""
        if self.status.is_active:
            self._ignore_next_track_end = True
        await self._voice.disconnect(self.guild_id)
        self.voice_channel_id = None
        self.status = PlaybackStatus.IDLE

    async def handle_track_end(self) -> SongDescriptor | None:
        """Advance after a song finished on its own.

        Returns the song that started, or None if playback went idle.
        """
        if self._ignore_next_track_end:
            self._ignore_next_track_end = False
            logger.debug(LogTemplates.PLAYBACK_IGNORING_CALLBACK, self.guild_id)
            return None

        logger.debug(LogTemplates.TRACK_ENDED, self.guild_id)
        self.current = None
        self.status = PlaybackStatus.IDLE

        if not self.is_connected:
            logger.info(LogTemplates.VOICE_NOT_CONNECTED, self.guild_id)
            return None

        next_song = self.queue.pop_head()
        if next_song is None:
            logger.info(LogTemplates.QUEUE_EXHAUSTED, self.guild_id)
            return None

        return await self._start_with_retries(next_song)

    async def _stop_audio(self) -> None:
        self._ignore_next_track_end = True
        await self._voice.stop(self.guild_id)

    async def _start_with_retries(self, song: SongDescriptor) -> SongDescriptor:
        """Start ``song``; if it fails, drop it and try the following songs."""
        for attempt in range(1, self.MAX_START_ATTEMPTS + 1):
            self.current = song
            try:
                await self._start(song)
                return song
            except PlaybackError as exc:
                self.current = None
                next_song = self.queue.peek()
                if attempt == self.MAX_START_ATTEMPTS or next_song is None:
                    raise
                logger.warning(
                    LogTemplates.PLAYBACK_RETRY, song.title, self.guild_id, exc.message
                )
                self.queue.pop_head()
                song = next_song
        raise PlaybackError(ErrorMessages.NOTHING_TO_PLAY)

    async def _start(self, song: SongDescriptor) -> None:
        try:
            stream_url = await self._media.get_stream_url(song)
        except ResolutionError as exc:
            raise PlaybackError(exc.message, title=song.title) from exc
        if not stream_url:
            raise PlaybackError(ErrorMessages.NO_STREAM_URL.format(title=song.title), title=song.title)

        if not await self._voice.play(self.guild_id, song, stream_url):
            raise PlaybackError(
                ErrorMessages.VOICE_PLAY_REFUSED.format(title=song.title), title=song.title
            )

        self._transition(PlaybackStatus.PLAYING, "play")
        logger.info(LogTemplates.PLAYBACK_STARTED, song.title, self.guild_id)
