"""Port interface for resolving songs and audio streams from a media provider."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from discord_jukebox.domain.shared.types import HttpUrlStr, NonEmptyStr

if TYPE_CHECKING:
    from ...domain.music.entities import SongDescriptor


class MediaProvider(ABC):
    """Interface for turning URLs and search text into playable songs.

    Transport failures and timeouts surface as ``ProviderError``.
    """

    @abstractmethod
    async def resolve_video(
        self, url: HttpUrlStr, *, split_chapters: bool = False
    ) -> list["SongDescriptor"]:
        """Resolve a single video, one song per chapter when splitting."""
        ...

    @abstractmethod
    async def resolve_playlist(
        self, list_id: NonEmptyStr, *, split_chapters: bool = False
    ) -> list["SongDescriptor"]:
        """Resolve every entry of a playlist in playlist order."""
        ...

    @abstractmethod
    async def search(
        self, query: NonEmptyStr, *, split_chapters: bool = False
    ) -> list["SongDescriptor"]:
        """Return the first search match, or an empty list."""
        ...

    @abstractmethod
    async def resolve_live_stream(self, url: HttpUrlStr) -> "SongDescriptor | None":
        """Treat an arbitrary URL as a direct live stream."""
        ...

    @abstractmethod
    async def get_stream_url(self, song: "SongDescriptor") -> str | None:
        """Get a fresh audio stream URL for a song right before playback."""
        ...
