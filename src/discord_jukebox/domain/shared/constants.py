"""Centralized constants for provider hosts, database schema, and other shared values."""

from __future__ import annotations


class ProviderHosts:
    """Hosts and schemes that select a resolution branch."""

    YOUTUBE = frozenset(
        {
            "www.youtube.com",
            "youtu.be",
            "youtube.com",
            "music.youtube.com",
            "www.music.youtube.com",
        }
    )
    SPOTIFY = "open.spotify.com"
    SPOTIFY_SCHEME = "spotify"
    YOUTUBE_PLAYLIST_PARAM = "list"


class AudioConstants:
    """Audio playback defaults."""

    DEFAULT_PLAYLIST_LIMIT = 50
    DEFAULT_LOOKUP_CONCURRENCY = 5
    LIVE_STREAM_TITLE = "HLS stream"


class DatabaseTables:
    """Database table names."""

    GUILD_SETTINGS = "guild_settings"


class SQLPragmas:
    """SQLite PRAGMA statements for database configuration.

    These pragmas are applied to each connection to ensure consistent behavior.
    """

    JOURNAL_MODE_WAL = "PRAGMA journal_mode=WAL"
    FOREIGN_KEYS_ON = "PRAGMA foreign_keys=ON"
    BUSY_TIMEOUT = "PRAGMA busy_timeout={timeout}"
