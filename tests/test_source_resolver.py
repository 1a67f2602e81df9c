"""
Tests for SourceResolver

Tests for:
- Dispatch between search, YouTube, Spotify and live stream branches
- Catalog sampling and not-found notes
- Shuffling of resolved songs
- Error mapping for missing and empty results
"""

import random

import pytest

from discord_jukebox.application.interfaces.catalog_provider import CatalogEntry, CatalogListing
from discord_jukebox.application.services.source_resolver import SourceResolver
from discord_jukebox.domain.music.value_objects import MediaSource
from discord_jukebox.domain.shared.exceptions import (
    EmptyResultError,
    NotFoundError,
    ProviderError,
    ResolutionError,
)


def _listing(count: int) -> CatalogListing:
    return CatalogListing(
        kind="playlist",
        title="Mix",
        entries=[CatalogEntry(name=f"Track {i}", artist="Band") for i in range(count)],
    )


@pytest.fixture
def resolver(mock_media_provider, mock_catalog_provider):
    return SourceResolver(
        media_provider=mock_media_provider,
        catalog_provider=mock_catalog_provider,
        rng=random.Random(1234),
    )


class TestSearchBranch:
    @pytest.mark.asyncio
    async def test_plain_text_is_searched(self, resolver, mock_media_provider, song_factory):
        mock_media_provider.search.return_value = [song_factory("Found")]

        outcome = await resolver.resolve("  never gonna give you up ", playlist_limit=50)

        mock_media_provider.search.assert_awaited_once_with(
            "never gonna give you up", split_chapters=False
        )
        assert [s.title for s in outcome.songs] == ["Found"]
        assert outcome.note == ""

    @pytest.mark.asyncio
    async def test_search_without_match_raises_not_found(self, resolver):
        with pytest.raises(NotFoundError):
            await resolver.resolve("nothing matches this", playlist_limit=50)

    @pytest.mark.asyncio
    async def test_relative_path_is_not_a_url(self, resolver, mock_media_provider, song_factory):
        mock_media_provider.search.return_value = [song_factory("Found")]

        await resolver.resolve("www.youtube.com/watch?v=abc", playlist_limit=50)

        mock_media_provider.search.assert_awaited_once()
        mock_media_provider.resolve_video.assert_not_awaited()


class TestYouTubeBranch:
    @pytest.mark.asyncio
    async def test_video_url(self, resolver, mock_media_provider, song_factory):
        mock_media_provider.resolve_video.return_value = [song_factory("Video")]

        outcome = await resolver.resolve(
            "https://youtu.be/abc", playlist_limit=50, split_chapters=True
        )

        mock_media_provider.resolve_video.assert_awaited_once_with(
            "https://youtu.be/abc", split_chapters=True
        )
        assert outcome.songs[0].title == "Video"

    @pytest.mark.asyncio
    async def test_missing_video_raises_not_found(self, resolver):
        with pytest.raises(NotFoundError):
            await resolver.resolve("https://www.youtube.com/watch?v=gone", playlist_limit=50)

    @pytest.mark.asyncio
    async def test_playlist_ignores_limit(self, resolver, mock_media_provider, song_factory):
        mock_media_provider.resolve_playlist.return_value = [
            song_factory(f"Song {i}") for i in range(80)
        ]

        outcome = await resolver.resolve(
            "https://www.youtube.com/watch?v=abc&list=XYZ", playlist_limit=50
        )

        mock_media_provider.resolve_playlist.assert_awaited_once_with("XYZ", split_chapters=False)
        assert [s.title for s in outcome.songs] == [f"Song {i}" for i in range(80)]
        assert outcome.note == ""

    @pytest.mark.asyncio
    async def test_empty_playlist_raises_empty_result(self, resolver):
        with pytest.raises(EmptyResultError):
            await resolver.resolve("https://music.youtube.com/playlist?list=EMPTY", playlist_limit=50)


class TestSpotifyBranch:
    @pytest.mark.asyncio
    async def test_small_listing_is_not_sampled(
        self, resolver, mock_media_provider, mock_catalog_provider, song_factory
    ):
        mock_catalog_provider.get_listing.return_value = _listing(3)
        mock_media_provider.search.side_effect = lambda query, **_: [song_factory(query[:40])]

        outcome = await resolver.resolve("https://open.spotify.com/album/A", playlist_limit=50)

        assert len(outcome.songs) == 3
        assert outcome.note == ""
        searched = [call.args[0] for call in mock_media_provider.search.await_args_list]
        assert '"Track 0" "Band"' in searched

    @pytest.mark.asyncio
    async def test_large_listing_is_sampled_and_misses_counted(
        self, resolver, mock_media_provider, mock_catalog_provider, song_factory
    ):
        mock_catalog_provider.get_listing.return_value = _listing(120)
        calls = {"n": 0}

        async def search(query, **_):
            calls["n"] += 1
            if calls["n"] <= 5:
                return []
            return [song_factory(query[:40])]

        mock_media_provider.search.side_effect = search

        outcome = await resolver.resolve("https://open.spotify.com/playlist/P", playlist_limit=50)

        assert mock_media_provider.search.await_count == 50
        assert len(outcome.songs) == 45
        assert outcome.note == "a random sample of 50 songs was taken and 5 songs were not found"

    @pytest.mark.asyncio
    async def test_single_miss_uses_singular_note(
        self, resolver, mock_media_provider, mock_catalog_provider, song_factory
    ):
        mock_catalog_provider.get_listing.return_value = _listing(2)
        mock_media_provider.search.side_effect = [[song_factory("Hit")], []]

        outcome = await resolver.resolve("spotify:album:A", playlist_limit=50)

        assert outcome.note == "1 song was not found"
        assert len(outcome.songs) == 1

    @pytest.mark.asyncio
    async def test_split_chapters_is_forwarded_to_searches(
        self, resolver, mock_media_provider, mock_catalog_provider, song_factory
    ):
        mock_catalog_provider.get_listing.return_value = _listing(1)
        mock_media_provider.search.return_value = [
            song_factory("Part 1", offset_seconds=0),
            song_factory("Part 2", offset_seconds=60),
        ]

        outcome = await resolver.resolve("spotify:album:A", playlist_limit=5, split_chapters=True)

        mock_media_provider.search.assert_awaited_once_with(
            '"Track 0" "Band"', split_chapters=True
        )
        assert [s.title for s in outcome.songs] == ["Part 1", "Part 2"]
        assert outcome.note == ""

    @pytest.mark.asyncio
    async def test_provider_error_counts_as_miss(
        self, resolver, mock_media_provider, mock_catalog_provider, song_factory
    ):
        mock_catalog_provider.get_listing.return_value = _listing(3)
        mock_media_provider.search.side_effect = [
            [song_factory("Hit")],
            ProviderError("youtube", "timed out"),
            ProviderError("youtube", "timed out"),
        ]

        outcome = await resolver.resolve("https://open.spotify.com/playlist/P", playlist_limit=50)

        assert outcome.note == "2 songs were not found"

    @pytest.mark.asyncio
    async def test_all_misses_raise_empty_result(
        self, resolver, mock_catalog_provider
    ):
        mock_catalog_provider.get_listing.return_value = _listing(2)

        with pytest.raises(EmptyResultError):
            await resolver.resolve("https://open.spotify.com/playlist/P", playlist_limit=50)

    @pytest.mark.asyncio
    async def test_without_catalog_spotify_is_rejected(self, mock_media_provider):
        resolver = SourceResolver(media_provider=mock_media_provider)

        with pytest.raises(ResolutionError) as exc_info:
            await resolver.resolve("https://open.spotify.com/track/T", playlist_limit=50)

        assert "Spotify" in exc_info.value.message


class TestLiveStreamBranch:
    @pytest.mark.asyncio
    async def test_other_hosts_are_live_streams(
        self, resolver, mock_media_provider, song_factory
    ):
        stream = song_factory(
            "HLS stream", url="https://radio.test/live.m3u8", source=MediaSource.HLS, is_live=True
        )
        mock_media_provider.resolve_live_stream.return_value = stream

        outcome = await resolver.resolve("https://radio.test/live.m3u8", playlist_limit=50)

        assert outcome.songs == [stream]

    @pytest.mark.asyncio
    async def test_unknown_stream_raises_not_found(self, resolver):
        with pytest.raises(NotFoundError):
            await resolver.resolve("https://radio.test/missing", playlist_limit=50)


class TestShuffle:
    @pytest.mark.asyncio
    async def test_shuffle_keeps_the_same_songs(
        self, resolver, mock_media_provider, song_factory
    ):
        songs = [song_factory(f"Song {i}") for i in range(20)]
        mock_media_provider.resolve_playlist.return_value = list(songs)

        outcome = await resolver.resolve(
            "https://www.youtube.com/playlist?list=L", playlist_limit=50, shuffle=True
        )

        assert sorted(s.title for s in outcome.songs) == sorted(s.title for s in songs)
        assert [s.title for s in outcome.songs] != [s.title for s in songs]
