"""CatalogProvider implementation backed by the Spotify Web API via spotipy."""

from __future__ import annotations

import asyncio
import logging
from typing import Any
from urllib.parse import urlsplit

import requests
import spotipy
from spotipy.exceptions import SpotifyException
from spotipy.oauth2 import SpotifyClientCredentials

from discord_jukebox.application.interfaces.catalog_provider import (
    CatalogEntry,
    CatalogListing,
    CatalogProvider,
)
from discord_jukebox.config.settings import SpotifySettings
from discord_jukebox.domain.shared.constants import ProviderHosts
from discord_jukebox.domain.shared.exceptions import (
    NotFoundError,
    ProviderError,
    ResolutionError,
)
from discord_jukebox.domain.shared.messages import ErrorMessages, LogTemplates

logger = logging.getLogger(__name__)

PROVIDER_NAME = "spotify"
SUPPORTED_KINDS = frozenset({"track", "album", "playlist", "artist"})


def parse_spotify_link(link: str) -> tuple[str, str]:
    """Split a Spotify URI or open.spotify.com URL into ``(kind, id)``.

    Raises:
        ResolutionError: If the link does not point at a supported item.
    """
    url = urlsplit(link.strip())
    if url.scheme == ProviderHosts.SPOTIFY_SCHEME:
        parts = [p for p in url.path.split(":") if p]
    elif url.hostname == ProviderHosts.SPOTIFY:
        parts = [p for p in url.path.split("/") if p and not p.startswith("intl-")]
    else:
        parts = []

    if len(parts) < 2 or parts[0] not in SUPPORTED_KINDS:
        raise ResolutionError(ErrorMessages.SPOTIFY_UNSUPPORTED_LINK, query=link)
    return parts[0], parts[1]


def _entry(track: dict[str, Any] | None) -> CatalogEntry | None:
    if not track or not track.get("name"):
        return None
    artists = track.get("artists") or []
    artist = artists[0].get("name", "") if artists else ""
    return CatalogEntry(name=track["name"], artist=artist)


class SpotifyCatalogProvider(CatalogProvider):

    def __init__(
        self,
        settings: SpotifySettings,
        client: spotipy.Spotify | None = None,
    ) -> None:
        self._client = client or spotipy.Spotify(
            auth_manager=SpotifyClientCredentials(
                client_id=settings.client_id.get_secret_value(),
                client_secret=settings.client_secret.get_secret_value(),
            ),
            requests_timeout=settings.requests_timeout_s,
        )

    async def get_listing(self, link: str) -> CatalogListing:
        kind, item_id = parse_spotify_link(link)
        try:
            listing = await asyncio.to_thread(self._fetch_sync, kind, item_id)
        except SpotifyException as exc:
            if exc.http_status in (400, 404):
                raise NotFoundError(link) from exc
            raise ProviderError(PROVIDER_NAME, exc.msg, query=link) from exc
        except requests.RequestException as exc:
            raise ProviderError(PROVIDER_NAME, str(exc), query=link) from exc

        logger.info(LogTemplates.CATALOG_FETCHED, listing.kind, listing.title, len(listing))
        return listing

    def _fetch_sync(self, kind: str, item_id: str) -> CatalogListing:
        match kind:
            case "track":
                track = self._client.track(item_id)
                entry = _entry(track)
                return CatalogListing(
                    kind=kind,
                    title=track.get("name", ""),
                    entries=[entry] if entry else [],
                )
            case "album":
                album = self._client.album(item_id)
                tracks = self._collect(album.get("tracks"))
                return CatalogListing(
                    kind=kind,
                    title=album.get("name", ""),
                    entries=[e for e in map(_entry, tracks) if e],
                )
            case "playlist":
                playlist = self._client.playlist(item_id)
                items = self._collect(playlist.get("tracks"))
                return CatalogListing(
                    kind=kind,
                    title=playlist.get("name", ""),
                    entries=[e for e in (_entry(item.get("track")) for item in items) if e],
                )
            case "artist":
                artist = self._client.artist(item_id)
                top = self._client.artist_top_tracks(item_id)
                return CatalogListing(
                    kind=kind,
                    title=artist.get("name", ""),
                    entries=[e for e in map(_entry, top.get("tracks", [])) if e],
                )
            case _:
                raise ResolutionError(ErrorMessages.SPOTIFY_UNSUPPORTED_LINK)

    def _collect(self, page: dict[str, Any] | None) -> list[dict[str, Any]]:
        """Follow ``next`` links of a paging object and return every item."""
        items: list[dict[str, Any]] = []
        while page:
            items.extend(item for item in page.get("items", []) if item)
            page = self._client.next(page) if page.get("next") else None
        return items
