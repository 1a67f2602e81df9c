"""Immutable value objects for the music bounded context."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class MediaSource(Enum):
    """Provider that serves a song's audio."""

    YOUTUBE = "youtube"
    HLS = "hls"


class PlaybackStatus(Enum):
    """Playback status with enforced transitions.

    State transitions:
    - IDLE -> PLAYING (start playback)
    - PLAYING -> PAUSED (pause)
    - PAUSED -> PLAYING (resume)
    - PLAYING -> IDLE (stop, skip past the end, disconnect)
    - PAUSED -> IDLE (stop, disconnect)
    """

    IDLE = "idle"
    PLAYING = "playing"
    PAUSED = "paused"

    def can_transition_to(self, target: PlaybackStatus) -> bool:
        """Check if transition to target state is valid."""
        valid_transitions = {
            PlaybackStatus.IDLE: {PlaybackStatus.PLAYING},
            PlaybackStatus.PLAYING: {PlaybackStatus.PAUSED, PlaybackStatus.IDLE},
            PlaybackStatus.PAUSED: {PlaybackStatus.PLAYING, PlaybackStatus.IDLE},
        }
        return target in valid_transitions.get(self, set())

    @property
    def is_active(self) -> bool:
        return self in {PlaybackStatus.PLAYING, PlaybackStatus.PAUSED}


@dataclass(frozen=True)
class VoiceChannelOccupancy:
    """Snapshot of how many non-bot members sit in a voice channel."""

    channel_id: int
    listener_count: int

    def __post_init__(self) -> None:
        if self.listener_count < 0:
            raise ValueError("Listener count cannot be negative")
