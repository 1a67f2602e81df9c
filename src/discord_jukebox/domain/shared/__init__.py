"""
Shared Domain Kernel

Contains types, messages and exceptions shared across all bounded contexts.
"""

from discord_jukebox.domain.shared.exceptions import (
    DomainError,
    EmptyResultError,
    InvalidOperationError,
    NoNextItemError,
    NotFoundError,
    PlaybackError,
    PreconditionError,
    ProviderError,
    ResolutionError,
    VoiceConnectionError,
)

__all__ = [
    "DomainError",
    "PreconditionError",
    "ResolutionError",
    "NotFoundError",
    "EmptyResultError",
    "ProviderError",
    "InvalidOperationError",
    "NoNextItemError",
    "PlaybackError",
    "VoiceConnectionError",
]
