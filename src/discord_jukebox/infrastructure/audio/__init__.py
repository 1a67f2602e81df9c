"""Audio infrastructure - yt-dlp media provider."""

from discord_jukebox.infrastructure.audio.models import (
    AudioFormatInfo,
    CacheEntry,
    ChapterInfo,
    YtDlpOpts,
    YtDlpPlaylistInfo,
    YtDlpTrackInfo,
)
from discord_jukebox.infrastructure.audio.ytdlp_provider import YtDlpMediaProvider

__all__ = [
    "AudioFormatInfo",
    "CacheEntry",
    "ChapterInfo",
    "YtDlpMediaProvider",
    "YtDlpOpts",
    "YtDlpPlaylistInfo",
    "YtDlpTrackInfo",
]
