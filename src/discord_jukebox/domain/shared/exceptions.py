"""Base exception classes for domain-level errors."""

from __future__ import annotations

from discord_jukebox.domain.shared.messages import ErrorMessages


class DomainError(Exception):
    """Base exception for all domain-level errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class PreconditionError(DomainError):
    """Raised when a request cannot start because its context is incomplete."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="PRECONDITION_FAILED")


class ResolutionError(DomainError):
    """Raised when a query cannot be turned into playable songs."""

    def __init__(self, message: str, query: str | None = None, code: str | None = None) -> None:
        super().__init__(message, code=code or "RESOLUTION_FAILED")
        self.query = query


class NotFoundError(ResolutionError):
    """Raised when a specific URL or search target does not exist."""

    def __init__(self, query: str | None = None, message: str = ErrorMessages.NOT_FOUND) -> None:
        super().__init__(message, query=query, code="NOT_FOUND")


class EmptyResultError(ResolutionError):
    """Raised when resolution finished but produced no songs at all."""

    def __init__(self, query: str | None = None, message: str = ErrorMessages.NO_SONGS_FOUND) -> None:
        super().__init__(message, query=query, code="EMPTY_RESULT")


class ProviderError(ResolutionError):
    """Raised by provider adapters on transport failures or timeouts."""

    def __init__(self, provider: str, message: str, query: str | None = None) -> None:
        super().__init__(message, query=query, code="PROVIDER_ERROR")
        self.provider = provider


class InvalidOperationError(DomainError):
    """Raised when an operation is invalid in the current state."""

    def __init__(self, operation: str, current_state: str, message: str | None = None) -> None:
        msg = message or f"Cannot perform '{operation}' in state '{current_state}'"
        super().__init__(msg, code="INVALID_OPERATION")
        self.operation = operation
        self.current_state = current_state


class NoNextItemError(InvalidOperationError):
    """Raised when there is nothing to advance or play to."""

    def __init__(self, current_state: str, message: str = "No songs in queue to forward to") -> None:
        super().__init__("forward", current_state, message)
        self.code = "NO_NEXT_ITEM"


class PlaybackError(DomainError):
    """Raised when the voice layer refuses to start a song."""

    def __init__(self, message: str, title: str | None = None) -> None:
        super().__init__(message, code="PLAYBACK_FAILED")
        self.title = title


class VoiceConnectionError(DomainError):
    """Raised when the bot cannot join a voice channel."""

    def __init__(self, channel_id: int, message: str | None = None) -> None:
        super().__init__(
            message or f"Could not connect to voice channel {channel_id}",
            code="VOICE_CONNECTION_FAILED",
        )
        self.channel_id = channel_id
