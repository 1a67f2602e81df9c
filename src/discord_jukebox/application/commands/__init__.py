"""
Application Commands (CQRS Write Side)

Command objects and their handlers for write operations.
Commands represent intent to change the system state.
"""

from discord_jukebox.application.commands.add_query import (
    AddQueryCommand,
    AddQueryHandler,
    AddQueryResult,
)
from discord_jukebox.application.commands.pause_playback import (
    PausePlaybackCommand,
    PausePlaybackHandler,
    PauseResult,
)
from discord_jukebox.application.commands.shuffle_queue import (
    ShuffleQueueCommand,
    ShuffleQueueHandler,
    ShuffleResult,
)
from discord_jukebox.application.commands.skip_song import (
    SkipResult,
    SkipSongCommand,
    SkipSongHandler,
)
from discord_jukebox.application.commands.stop_playback import (
    StopPlaybackCommand,
    StopPlaybackHandler,
    StopResult,
)

__all__ = [
    # Add
    "AddQueryCommand",
    "AddQueryResult",
    "AddQueryHandler",
    # Skip
    "SkipSongCommand",
    "SkipResult",
    "SkipSongHandler",
    # Stop
    "StopPlaybackCommand",
    "StopResult",
    "StopPlaybackHandler",
    # Pause
    "PausePlaybackCommand",
    "PauseResult",
    "PausePlaybackHandler",
    # Shuffle
    "ShuffleQueueCommand",
    "ShuffleResult",
    "ShuffleQueueHandler",
]
