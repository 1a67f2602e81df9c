"""Tests for the Spotify catalog provider and link parsing."""

from unittest.mock import MagicMock

import pytest
import requests
from spotipy.exceptions import SpotifyException

from discord_jukebox.config.settings import SpotifySettings
from discord_jukebox.domain.shared.exceptions import (
    NotFoundError,
    ProviderError,
    ResolutionError,
)
from discord_jukebox.infrastructure.catalog import SpotifyCatalogProvider, parse_spotify_link


def _track(name: str, artist: str = "Artist") -> dict:
    return {"name": name, "artists": [{"name": artist}, {"name": "Featured"}]}


@pytest.fixture
def client():
    return MagicMock()


@pytest.fixture
def catalog(client):
    return SpotifyCatalogProvider(SpotifySettings(), client=client)


class TestParseSpotifyLink:
    def test_uri(self):
        assert parse_spotify_link("spotify:track:4uLU6hMCjMI75M1A2tKUQC") == (
            "track",
            "4uLU6hMCjMI75M1A2tKUQC",
        )

    def test_url_with_query(self):
        assert parse_spotify_link("https://open.spotify.com/album/1DFixLWuPkv3KT3TnV35m3?si=x") == (
            "album",
            "1DFixLWuPkv3KT3TnV35m3",
        )

    def test_url_with_locale_segment(self):
        assert parse_spotify_link("https://open.spotify.com/intl-de/playlist/37i9dQZF1DX") == (
            "playlist",
            "37i9dQZF1DX",
        )

    @pytest.mark.parametrize(
        "link",
        [
            "https://open.spotify.com/show/abc",
            "https://open.spotify.com/track",
            "spotify:episode:abc",
            "https://example.com/track/abc",
        ],
    )
    def test_unsupported_links(self, link):
        with pytest.raises(ResolutionError):
            parse_spotify_link(link)


class TestGetListing:
    @pytest.mark.asyncio
    async def test_track(self, catalog, client):
        client.track.return_value = _track("Song", "Singer")

        listing = await catalog.get_listing("spotify:track:abc")

        client.track.assert_called_once_with("abc")
        assert listing.kind == "track"
        assert listing.title == "Song"
        assert [(e.name, e.artist) for e in listing.entries] == [("Song", "Singer")]
        assert listing.entries[0].search_query == '"Song" "Singer"'

    @pytest.mark.asyncio
    async def test_album_follows_pagination(self, catalog, client):
        second_page = {"items": [_track("C")], "next": None}
        client.album.return_value = {
            "name": "Album",
            "tracks": {"items": [_track("A"), _track("B")], "next": "https://api/next"},
        }
        client.next.return_value = second_page

        listing = await catalog.get_listing("https://open.spotify.com/album/xyz")

        assert listing.title == "Album"
        assert [e.name for e in listing.entries] == ["A", "B", "C"]
        client.next.assert_called_once()

    @pytest.mark.asyncio
    async def test_playlist_items_wrap_tracks(self, catalog, client):
        client.playlist.return_value = {
            "name": "Mix",
            "tracks": {
                "items": [{"track": _track("A")}, {"track": None}, {"track": _track("B")}],
                "next": None,
            },
        }

        listing = await catalog.get_listing("https://open.spotify.com/playlist/p1")

        assert len(listing) == 2
        assert [e.name for e in listing.entries] == ["A", "B"]

    @pytest.mark.asyncio
    async def test_artist_uses_top_tracks(self, catalog, client):
        client.artist.return_value = {"name": "Band"}
        client.artist_top_tracks.return_value = {"tracks": [_track("Hit", "Band")]}

        listing = await catalog.get_listing("spotify:artist:band1")

        client.artist_top_tracks.assert_called_once_with("band1")
        assert listing.kind == "artist"
        assert listing.title == "Band"
        assert [e.name for e in listing.entries] == ["Hit"]

    @pytest.mark.asyncio
    async def test_missing_item_is_not_found(self, catalog, client):
        client.track.side_effect = SpotifyException(404, -1, "not found")

        with pytest.raises(NotFoundError):
            await catalog.get_listing("spotify:track:gone")

    @pytest.mark.asyncio
    async def test_server_error_is_provider_error(self, catalog, client):
        client.track.side_effect = SpotifyException(500, -1, "server error")

        with pytest.raises(ProviderError) as exc_info:
            await catalog.get_listing("spotify:track:abc")
        assert exc_info.value.provider == "spotify"

    @pytest.mark.asyncio
    async def test_transport_error_is_provider_error(self, catalog, client):
        client.track.side_effect = requests.ConnectionError("unreachable")

        with pytest.raises(ProviderError):
            await catalog.get_listing("spotify:track:abc")
