"""Discord voice adapter implementing VoiceAdapter for connection and playback."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

import discord

from discord_jukebox.application.interfaces.voice_adapter import VoiceAdapter
from discord_jukebox.config.settings import AudioSettings
from discord_jukebox.domain.music.value_objects import MediaSource
from discord_jukebox.domain.shared.messages import LogTemplates

if TYPE_CHECKING:
    from ....domain.music.entities import SongDescriptor

logger = logging.getLogger(__name__)

CONNECT_TIMEOUT: float = 10.0
FADE_IN_SECONDS: float = 0.5

# Matches yt-dlp's Android client user-agent to avoid YouTube 403 responses
ANDROID_USER_AGENT = "com.google.android.youtube/19.44.38 (Linux; U; Android 14) gzip"


def build_ffmpeg_options(
    song: SongDescriptor, base_options: dict[str, str]
) -> tuple[str, str]:
    """Return ``(before_options, options)`` for playing ``song`` through FFmpeg.

    Chapters seek to their offset before the input and stop after their length.
    """
    before = [base_options.get("before_options", "")]
    if song.source is MediaSource.YOUTUBE:
        before.append(f'-headers "User-Agent: {ANDROID_USER_AGENT}"')
    if song.offset_seconds > 0:
        before.append(f"-ss {song.offset_seconds}")

    options = [base_options.get("options", "")]
    if song.offset_seconds > 0 and song.length_seconds:
        options.append(f"-t {song.length_seconds}")
    options.append(f'-af "afade=t=in:ss=0:d={FADE_IN_SECONDS}"')

    return " ".join(p for p in before if p), " ".join(p for p in options if p)


class DiscordVoiceAdapter(VoiceAdapter):
    def __init__(self, bot: discord.Client, settings: AudioSettings | None = None) -> None:
        self._bot = bot
        self._settings = settings or AudioSettings()
        self._volume = self._settings.default_volume
        self._on_track_end: Callable[[int], Awaitable[None]] | None = None
        self._ffmpeg_options = self._settings.ffmpeg_options

    def _get_voice_client(self, guild_id: int) -> discord.VoiceClient | None:
        guild = self._bot.get_guild(guild_id)
        if not guild:
            return None

        vc = guild.voice_client
        return vc if isinstance(vc, discord.VoiceClient) else None

    def _get_voice_channel(
        self, guild_id: int, channel_id: int
    ) -> discord.VoiceChannel | discord.StageChannel | None:
        guild = self._bot.get_guild(guild_id)
        if not guild:
            logger.warning(LogTemplates.GUILD_NOT_FOUND, guild_id)
            return None

        channel = guild.get_channel(channel_id)
        if not isinstance(channel, discord.VoiceChannel | discord.StageChannel):
            logger.warning(LogTemplates.CHANNEL_NOT_VOICE, channel_id)
            return None
        return channel

    async def connect(self, guild_id: int, channel_id: int) -> bool:
        channel = self._get_voice_channel(guild_id, channel_id)
        if channel is None:
            return False

        vc = self._get_voice_client(guild_id)
        if vc and not vc.is_connected():
            logger.warning(LogTemplates.VOICE_STALE_CLEANUP, guild_id)
            await self.disconnect(guild_id)
            vc = None

        try:
            async with asyncio.timeout(CONNECT_TIMEOUT):
                if vc is None:
                    await channel.connect(self_deaf=True)
                elif vc.channel is None or vc.channel.id != channel_id:
                    await vc.move_to(channel)
            logger.info(LogTemplates.VOICE_CONNECTED, channel.name, channel.guild.name)
            return True
        except TimeoutError:
            logger.error(LogTemplates.VOICE_CONNECTION_TIMEOUT, channel_id)
            return False
        except discord.Forbidden:
            logger.error(LogTemplates.VOICE_NO_PERMISSION, channel_id)
            return False
        except discord.ClientException as e:
            logger.error(LogTemplates.VOICE_CLIENT_ERROR, e)
            return False

    async def disconnect(self, guild_id: int) -> bool:
        vc = self._get_voice_client(guild_id)
        if not vc:
            return True  # Not connected

        await vc.disconnect(force=True)
        logger.info(LogTemplates.VOICE_DISCONNECTED, guild_id)
        return True

    # TODO(integ): Play a short chapter on a live connection and verify -ss/-t cut it.
    async def play(self, guild_id: int, song: SongDescriptor, stream_url: str) -> bool:
        vc = self._get_voice_client(guild_id)
        if not vc:
            logger.warning(LogTemplates.VOICE_NOT_CONNECTED, guild_id)
            return False

        if vc.is_playing() or vc.is_paused():
            vc.stop()

        before_opts, opts = build_ffmpeg_options(song, self._ffmpeg_options)
        try:
            source = discord.FFmpegPCMAudio(stream_url, before_options=before_opts, options=opts)
            volume_source = discord.PCMVolumeTransformer(source, volume=self._volume)

            def after_callback(error: Exception | None = None) -> None:
                if error:
                    logger.warning(LogTemplates.PLAYBACK_ERROR, guild_id, error)
                asyncio.run_coroutine_threadsafe(
                    self._handle_track_end(guild_id),
                    self._bot.loop,
                )

            vc.play(volume_source, after=after_callback)
            return True
        except discord.ClientException as e:
            logger.error(LogTemplates.VOICE_CLIENT_ERROR, e)
            return False

    async def stop(self, guild_id: int) -> bool:
        vc = self._get_voice_client(guild_id)
        if not vc:
            return True

        if vc.is_playing() or vc.is_paused():
            vc.stop()
        return True

    async def pause(self, guild_id: int) -> bool:
        vc = self._get_voice_client(guild_id)
        if not vc or not vc.is_playing():
            return False

        vc.pause()
        return True

    async def resume(self, guild_id: int) -> bool:
        vc = self._get_voice_client(guild_id)
        if not vc or not vc.is_paused():
            return False

        vc.resume()
        return True

    def is_connected(self, guild_id: int) -> bool:
        vc = self._get_voice_client(guild_id)
        return vc is not None and vc.is_connected()

    def set_on_track_end_callback(self, callback: Callable[[int], Awaitable[None]]) -> None:
        self._on_track_end = callback

    async def _handle_track_end(self, guild_id: int) -> None:
        """Called from the FFmpeg thread via run_coroutine_threadsafe."""
        logger.debug(LogTemplates.TRACK_ENDED, guild_id)
        if self._on_track_end is None:
            logger.warning(LogTemplates.PLAYBACK_NO_CALLBACK, guild_id)
            return

        try:
            await self._on_track_end(guild_id)
        except Exception:
            logger.exception(LogTemplates.PLAYBACK_CALLBACK_CRASHED, guild_id)
