# ruff: noqa: N999
"""
Domain Layer

Contains pure business logic organized by bounded contexts:
- shared/: Cross-cutting types, messages and exceptions
- music/: Song, queue, and voice destination logic
- guild/: Per-guild settings
"""

from discord_jukebox.domain.shared.exceptions import DomainError

__all__ = [
    "DomainError",
]
