"""MediaProvider implementation using yt-dlp for YouTube lookups and streams."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, cast

from yt_dlp import YoutubeDL
from yt_dlp.utils import DownloadError, ExtractorError

from discord_jukebox.application.interfaces.media_provider import MediaProvider
from discord_jukebox.config.settings import AudioSettings
from discord_jukebox.domain.music.entities import SongDescriptor
from discord_jukebox.domain.music.value_objects import MediaSource
from discord_jukebox.domain.shared.constants import AudioConstants
from discord_jukebox.domain.shared.exceptions import ProviderError
from discord_jukebox.domain.shared.messages import LogTemplates

from .models import (
    CACHE_MAX_SIZE,
    CACHE_TTL,
    LOG_URL_TRUNCATE,
    RESOLVE_BATCH_SIZE,
    UNAVAILABLE_TITLES,
    AudioFormatInfo,
    CacheEntry,
    YtDlpOpts,
    YtDlpPlaylistInfo,
    YtDlpTrackInfo,
)

logger = logging.getLogger(__name__)

PROVIDER_NAME = "youtube"
WATCH_URL = "https://www.youtube.com/watch?v={id}"
PLAYLIST_URL = "https://www.youtube.com/playlist?list={list_id}"
MAX_TITLE_LENGTH = 500
MAX_SONG_LENGTH = 86_400

_info_cache: dict[str, CacheEntry] = {}


def _is_missing(exc: DownloadError | ExtractorError) -> bool:
    """True when yt-dlp reports the target itself is unavailable."""
    if isinstance(exc, ExtractorError):
        return bool(exc.expected)
    cause = exc.exc_info[1] if exc.exc_info else None
    return isinstance(cause, ExtractorError) and bool(cause.expected)


class YtDlpMediaProvider(MediaProvider):

    def __init__(self, settings: AudioSettings | None = None) -> None:
        self._settings = settings or AudioSettings()
        self._base_opts = YtDlpOpts(
            format=self._settings.ytdlp_format,
            socket_timeout=self._settings.socket_timeout_s,
        )

    def _get_opts(self, **overrides: Any) -> YtDlpOpts:
        if overrides:
            return self._base_opts.model_copy(update=overrides)
        return self._base_opts

    def _get_playlist_opts(self) -> YtDlpOpts:
        return self._get_opts(noplaylist=False, extract_flat="in_playlist")

    # ── info dict → SongDescriptor ─────────────────────────────────────

    @staticmethod
    def _song_url(info: YtDlpTrackInfo) -> str | None:
        if info.webpage_url:
            return info.webpage_url
        if info.id:
            return WATCH_URL.format(id=info.id)
        return info.url

    @staticmethod
    def _artist(info: YtDlpTrackInfo) -> str | None:
        return info.artist or info.creator or info.uploader or info.channel

    @staticmethod
    def _length(seconds: int | None) -> int | None:
        if seconds is None or seconds > MAX_SONG_LENGTH:
            return None
        return seconds

    def _info_to_songs(
        self,
        info: YtDlpTrackInfo,
        *,
        split_chapters: bool,
        playlist_title: str | None = None,
    ) -> list[SongDescriptor]:
        url = self._song_url(info)
        if not url:
            logger.warning(LogTemplates.YTDLP_NO_URL_IN_INFO_DICT)
            return []

        artist = self._artist(info)

        if split_chapters and info.chapters:
            songs = [
                SongDescriptor(
                    title=chapter.title[:MAX_TITLE_LENGTH],
                    url=url,
                    length_seconds=self._length(chapter.length),
                    offset_seconds=chapter.start_time,
                    artist=artist,
                    thumbnail_url=info.thumbnail,
                    playlist_title=info.title[:MAX_TITLE_LENGTH],
                )
                for chapter in info.chapters
                if chapter.length > 0
            ]
            logger.debug(LogTemplates.YTDLP_CHAPTERS_SPLIT, info.title, len(songs))
            if songs:
                return songs

        return [
            SongDescriptor(
                title=info.title[:MAX_TITLE_LENGTH],
                url=url,
                length_seconds=None if info.is_live else self._length(info.duration),
                is_live=info.is_live,
                artist=artist,
                thumbnail_url=info.thumbnail,
                playlist_title=playlist_title,
            )
        ]

    @staticmethod
    def _extract_stream_url(info: YtDlpTrackInfo) -> str | None:
        if info.url:
            return info.url
        return YtDlpMediaProvider._extract_stream_from_formats(info.formats)

    @staticmethod
    def _extract_stream_from_formats(formats: list[AudioFormatInfo]) -> str | None:
        audio_formats = [f for f in formats if f.acodec != "none" and f.url]
        if audio_formats:
            return audio_formats[-1].url
        return None

    # ── blocking yt-dlp calls (run in a worker thread) ─────────────────

    def _extract_info_sync(self, url: str) -> YtDlpTrackInfo | None:
        now = time.time()
        cached = _info_cache.get(url)
        if cached is not None:
            if now - cached.cached_at < CACHE_TTL:
                logger.debug(LogTemplates.CACHE_HIT_URL, url[:LOG_URL_TRUNCATE])
                return cached.info
            _info_cache.pop(url, None)

        try:
            with YoutubeDL(params=cast(Any, self._get_opts().model_dump())) as ydl:
                data = ydl.extract_info(url, download=False)
        except (DownloadError, ExtractorError) as exc:
            if _is_missing(exc):
                logger.info(LogTemplates.YTDLP_FAILED_EXTRACT_INFO, url)
                return None
            raise ProviderError(PROVIDER_NAME, str(exc), query=url) from exc

        result = YtDlpTrackInfo.model_validate(dict(data)) if isinstance(data, dict) else None
        _info_cache[url] = CacheEntry(info=result, cached_at=now)

        if len(_info_cache) > CACHE_MAX_SIZE:
            expired = [k for k, entry in _info_cache.items() if now - entry.cached_at >= CACHE_TTL]
            for k in expired:
                _info_cache.pop(k, None)
            if expired:
                logger.debug(LogTemplates.CACHE_EXPIRED_CLEANED, len(expired))

        return result

    def _search_sync(self, query: str, limit: int = 1) -> list[YtDlpTrackInfo]:
        try:
            with YoutubeDL(params=cast(Any, self._get_opts().model_dump())) as ydl:
                data = ydl.extract_info(f"ytsearch{limit}:{query}", download=False)
        except (DownloadError, ExtractorError) as exc:
            if _is_missing(exc):
                logger.info(LogTemplates.YTDLP_FAILED_SEARCH, query)
                return []
            raise ProviderError(PROVIDER_NAME, str(exc), query=query) from exc

        if not isinstance(data, dict):
            return []
        entries = data.get("entries", [])
        if not isinstance(entries, list):
            return []
        return [YtDlpTrackInfo.model_validate(dict(e)) for e in entries if e]

    def _extract_playlist_sync(self, url: str) -> YtDlpPlaylistInfo | None:
        try:
            with YoutubeDL(params=cast(Any, self._get_playlist_opts().model_dump())) as ydl:
                data = ydl.extract_info(url, download=False)
        except (DownloadError, ExtractorError) as exc:
            if _is_missing(exc):
                logger.info(LogTemplates.YTDLP_FAILED_EXTRACT_PLAYLIST, url)
                return None
            raise ProviderError(PROVIDER_NAME, str(exc), query=url) from exc

        if not isinstance(data, dict):
            return None
        return YtDlpPlaylistInfo.model_validate(dict(data))

    # ── MediaProvider ──────────────────────────────────────────────────

    async def resolve_video(self, url: str, *, split_chapters: bool = False) -> list[SongDescriptor]:
        info = await asyncio.to_thread(self._extract_info_sync, url)
        if info is None:
            return []
        return self._info_to_songs(info, split_chapters=split_chapters)

    async def resolve_playlist(
        self, list_id: str, *, split_chapters: bool = False
    ) -> list[SongDescriptor]:
        playlist = await asyncio.to_thread(
            self._extract_playlist_sync, PLAYLIST_URL.format(list_id=list_id)
        )
        if playlist is None:
            return []

        entries = [e for e in playlist.entries if e.title not in UNAVAILABLE_TITLES]
        if not split_chapters:
            songs: list[SongDescriptor] = []
            for entry in entries:
                songs.extend(
                    self._info_to_songs(
                        entry, split_chapters=False, playlist_title=playlist.title
                    )
                )
            return songs

        # Flat entries carry no chapters; fetch full info in small batches.
        songs = []
        for i in range(0, len(entries), RESOLVE_BATCH_SIZE):
            batch = entries[i : i + RESOLVE_BATCH_SIZE]
            async with asyncio.TaskGroup() as tg:
                tasks = [
                    tg.create_task(self._resolve_entry(entry, playlist.title))
                    for entry in batch
                ]
            for task in tasks:
                songs.extend(task.result())
        return songs

    async def _resolve_entry(
        self, entry: YtDlpTrackInfo, playlist_title: str | None
    ) -> list[SongDescriptor]:
        url = self._song_url(entry)
        if not url:
            return []
        info = await asyncio.to_thread(self._extract_info_sync, url)
        if info is None:
            return []
        return self._info_to_songs(info, split_chapters=True, playlist_title=playlist_title)

    async def search(self, query: str, *, split_chapters: bool = False) -> list[SongDescriptor]:
        results = await asyncio.to_thread(self._search_sync, query, 1)
        if not results:
            return []
        return self._info_to_songs(results[0], split_chapters=split_chapters)

    async def resolve_live_stream(self, url: str) -> SongDescriptor | None:
        info = await asyncio.to_thread(self._extract_info_sync, url)
        if info is None:
            return None
        return SongDescriptor(
            title=AudioConstants.LIVE_STREAM_TITLE,
            url=url,
            source=MediaSource.HLS,
            is_live=True,
            artist=url,
        )

    async def get_stream_url(self, song: SongDescriptor) -> str | None:
        if song.source is MediaSource.HLS:
            return song.url
        info = await asyncio.to_thread(self._extract_info_sync, song.url)
        if info is None:
            return None
        return self._extract_stream_url(info)
