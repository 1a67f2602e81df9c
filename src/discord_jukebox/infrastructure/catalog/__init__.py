"""Catalog infrastructure - Spotify listings."""

from discord_jukebox.infrastructure.catalog.spotify_catalog import (
    SpotifyCatalogProvider,
    parse_spotify_link,
)

__all__ = [
    "SpotifyCatalogProvider",
    "parse_spotify_link",
]
