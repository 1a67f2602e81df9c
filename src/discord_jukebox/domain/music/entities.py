"""Core domain entities for the music bounded context."""

from __future__ import annotations

import random
from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field

from discord_jukebox.domain.music.value_objects import MediaSource
from discord_jukebox.domain.shared.types import (
    DiscordSnowflake,
    DurationSeconds,
    HttpUrlStr,
    NonEmptyStr,
    NonNegativeInt,
    SongTitleStr,
)


class SongDescriptor(BaseModel):
    """Immutable value object describing one playable song."""

    model_config = ConfigDict(frozen=True, strict=True)

    title: SongTitleStr
    url: NonEmptyStr
    source: MediaSource = MediaSource.YOUTUBE
    length_seconds: DurationSeconds | None = None
    offset_seconds: NonNegativeInt = 0
    is_live: bool = False

    artist: NonEmptyStr | None = None
    thumbnail_url: HttpUrlStr | None = None
    playlist_title: NonEmptyStr | None = None

    # Request metadata (set when queued)
    added_in_channel_id: DiscordSnowflake | None = None
    requested_by_id: DiscordSnowflake | None = None

    @property
    def duration_formatted(self) -> str:
        """Format duration as MM:SS or HH:MM:SS."""
        if self.is_live:
            return "LIVE"
        if self.length_seconds is None:
            return "Unknown"

        hours, remainder = divmod(self.length_seconds, 3600)
        minutes, seconds = divmod(remainder, 60)

        if hours > 0:
            return f"{hours}:{minutes:02d}:{seconds:02d}"
        return f"{minutes}:{seconds:02d}"

    @property
    def display_title(self) -> str:
        """Get display title with duration if available."""
        if self.is_live or self.length_seconds:
            return f"{self.title} [{self.duration_formatted}]"
        return self.title

    def with_request(
        self, channel_id: DiscordSnowflake, user_id: DiscordSnowflake
    ) -> SongDescriptor:
        """Return a copy of this song with request metadata populated."""
        return self.model_copy(
            update={"added_in_channel_id": channel_id, "requested_by_id": user_id}
        )


class GuildQueue(BaseModel):
    """Ordered list of songs waiting to be played in one guild.

    The song currently playing is not part of the queue; the player pops it
    from the head when playback advances.
    """

    model_config = ConfigDict(strict=True)

    songs: list[SongDescriptor] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.songs)

    @property
    def is_empty(self) -> bool:
        return not self.songs

    @property
    def total_length_seconds(self) -> int | None:
        """Sum of queued song lengths, or None if any length is unknown."""
        total = 0
        for song in self.songs:
            if song.length_seconds is None:
                return None
            total += song.length_seconds
        return total

    def add(self, song: SongDescriptor, *, immediate: bool = False) -> None:
        """Append a song, or put it at the head when ``immediate`` is set."""
        if immediate:
            self.songs.insert(0, song)
        else:
            self.songs.append(song)

    def extend(self, songs: Iterable[SongDescriptor], *, immediate: bool = False) -> int:
        """Insert several songs keeping their order, at the head or the tail."""
        batch = list(songs)
        if immediate:
            self.songs[0:0] = batch
        else:
            self.songs.extend(batch)
        return len(batch)

    def peek(self) -> SongDescriptor | None:
        return self.songs[0] if self.songs else None

    def pop_head(self) -> SongDescriptor | None:
        """Remove and return the next song."""
        if not self.songs:
            return None
        return self.songs.pop(0)

    def discard_head(self, count: int) -> int:
        """Drop up to ``count`` songs from the head and return how many were dropped."""
        dropped = min(max(count, 0), len(self.songs))
        del self.songs[:dropped]
        return dropped

    def shuffle(self) -> bool:
        """Shuffle the queue in place. Returns False if there is nothing to reorder."""
        if len(self.songs) < 2:
            return False
        random.shuffle(self.songs)
        return True
