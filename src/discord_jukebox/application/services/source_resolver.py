"""Source Resolver - turns a user query into playable songs."""

from __future__ import annotations

import asyncio
import logging
import random
from typing import TYPE_CHECKING
from urllib.parse import SplitResult, parse_qs, urlsplit

from pydantic import BaseModel, Field

from ...domain.music.entities import SongDescriptor
from ...domain.shared.constants import AudioConstants, ProviderHosts
from ...domain.shared.exceptions import (
    EmptyResultError,
    NotFoundError,
    ProviderError,
    ResolutionError,
)
from ...domain.shared.messages import DiscordUIMessages, ErrorMessages, LogTemplates

if TYPE_CHECKING:
    from ..interfaces.catalog_provider import CatalogEntry, CatalogProvider
    from ..interfaces.media_provider import MediaProvider

logger = logging.getLogger(__name__)


class ResolutionOutcome(BaseModel):
    songs: list[SongDescriptor] = Field(default_factory=list)
    note: str = ""


class SourceResolver:
    """Dispatches a query to the right provider and applies sampling policies.

    Resolution never touches a player or queue; callers insert the outcome.
    """

    def __init__(
        self,
        *,
        media_provider: MediaProvider,
        catalog_provider: CatalogProvider | None = None,
        lookup_concurrency: int = AudioConstants.DEFAULT_LOOKUP_CONCURRENCY,
        rng: random.Random | None = None,
    ) -> None:
        self._media = media_provider
        self._catalog = catalog_provider
        self._lookup_concurrency = lookup_concurrency
        self._rng = rng or random.Random()

    async def resolve(
        self,
        query: str,
        *,
        playlist_limit: int,
        split_chapters: bool = False,
        shuffle: bool = False,
    ) -> ResolutionOutcome:
        """Resolve ``query`` into songs.

        Raises:
            NotFoundError: A video, stream or search target does not exist.
            EmptyResultError: The query resolved to zero songs.
            ResolutionError: The query could not be handled at all.
        """
        query = query.strip()
        logger.info(LogTemplates.RESOLVE_STARTED, query, playlist_limit, split_chapters)

        url = self._parse_absolute_url(query)
        note = ""

        if url is None:
            logger.debug(LogTemplates.RESOLVE_BRANCH, query, "search")
            songs = await self._media.search(query, split_chapters=split_chapters)
            if not songs:
                raise NotFoundError(query)
        elif (url.hostname or "") in ProviderHosts.YOUTUBE:
            logger.debug(LogTemplates.RESOLVE_BRANCH, query, "youtube")
            songs = await self._resolve_youtube(query, url, split_chapters)
        elif url.scheme == ProviderHosts.SPOTIFY_SCHEME or url.hostname == ProviderHosts.SPOTIFY:
            logger.debug(LogTemplates.RESOLVE_BRANCH, query, "spotify")
            songs, note = await self._resolve_catalog(query, playlist_limit, split_chapters)
        else:
            logger.debug(LogTemplates.RESOLVE_BRANCH, query, "live stream")
            song = await self._media.resolve_live_stream(query)
            if song is None:
                raise NotFoundError(query)
            songs = [song]

        if not songs:
            raise EmptyResultError(query)

        if shuffle:
            songs = self._rng.sample(songs, len(songs))

        logger.info(LogTemplates.RESOLVE_COMPLETED, len(songs), query)
        return ResolutionOutcome(songs=songs, note=note)

    @staticmethod
    def _parse_absolute_url(query: str) -> SplitResult | None:
        try:
            url = urlsplit(query)
        except ValueError:
            return None
        if not url.scheme:
            return None
        if url.netloc or url.scheme == ProviderHosts.SPOTIFY_SCHEME:
            return url
        return None

    async def _resolve_youtube(
        self, query: str, url: SplitResult, split_chapters: bool
    ) -> list[SongDescriptor]:
        list_ids = parse_qs(url.query).get(ProviderHosts.YOUTUBE_PLAYLIST_PARAM)
        if list_ids and list_ids[0]:
            return await self._media.resolve_playlist(list_ids[0], split_chapters=split_chapters)

        songs = await self._media.resolve_video(query, split_chapters=split_chapters)
        if not songs:
            raise NotFoundError(query)
        return songs

    async def _resolve_catalog(
        self, query: str, playlist_limit: int, split_chapters: bool
    ) -> tuple[list[SongDescriptor], str]:
        if self._catalog is None:
            raise ResolutionError(ErrorMessages.SPOTIFY_NOT_CONFIGURED, query=query)

        listing = await self._catalog.get_listing(query)
        entries = list(listing.entries)
        total = len(entries)

        sampled = total > playlist_limit
        if sampled:
            logger.info(LogTemplates.CATALOG_SAMPLED, total, playlist_limit)
            entries = self._rng.sample(entries, playlist_limit)

        semaphore = asyncio.Semaphore(self._lookup_concurrency)

        async def lookup(entry: CatalogEntry) -> list[SongDescriptor]:
            async with semaphore:
                try:
                    matches = await self._media.search(
                        entry.search_query, split_chapters=split_chapters
                    )
                except ProviderError as exc:
                    logger.warning(LogTemplates.CATALOG_ENTRY_FAILED, entry.search_query, exc.message)
                    return []
            if not matches:
                logger.debug(LogTemplates.CATALOG_ENTRY_MISSED, entry.search_query)
            return matches

        results = await asyncio.gather(*(lookup(entry) for entry in entries))
        # one search match may expand into several chapter songs
        songs = [song for matches in results for song in matches]
        not_found = sum(1 for matches in results if not matches)

        notes = []
        if sampled:
            notes.append(DiscordUIMessages.NOTE_SAMPLED.format(limit=playlist_limit))
        if not_found == 1:
            notes.append(DiscordUIMessages.NOTE_ONE_NOT_FOUND)
        elif not_found > 1:
            notes.append(DiscordUIMessages.NOTE_MANY_NOT_FOUND.format(count=not_found))

        return songs, " and ".join(notes)
