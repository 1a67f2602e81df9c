"""
Application Interfaces (Ports)

Abstract interfaces that define contracts between the application
layer and infrastructure adapters. These are the "ports" in
hexagonal architecture.
"""

from discord_jukebox.application.interfaces.catalog_provider import (
    CatalogEntry,
    CatalogListing,
    CatalogProvider,
)
from discord_jukebox.application.interfaces.channel_locator import ChannelLocator
from discord_jukebox.application.interfaces.media_provider import MediaProvider
from discord_jukebox.application.interfaces.voice_adapter import VoiceAdapter

__all__ = [
    "MediaProvider",
    "CatalogProvider",
    "CatalogEntry",
    "CatalogListing",
    "VoiceAdapter",
    "ChannelLocator",
]
