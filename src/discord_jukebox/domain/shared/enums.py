"""Shared string enumerations for type-safe comparisons across cogs."""

from __future__ import annotations

from enum import StrEnum


class MessageCommand(StrEnum):
    """Prefixed text commands understood by the message listener."""

    PLAY = "play"
    BUMPPLAY = "bumpplay"
    SKIP = "skip"
    STOP = "stop"
    SHUFFLE = "shuffle"
