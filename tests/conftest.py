from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio

# ============================================================================
# Database Fixtures
# ============================================================================


@pytest_asyncio.fixture
async def in_memory_database():
    """Create an in-memory SQLite database for testing."""
    from discord_jukebox.infrastructure.persistence.database import Database

    db = Database(":memory:")
    await db.initialize()
    yield db
    await db.close()


@pytest_asyncio.fixture
async def guild_settings_repository(in_memory_database):
    from discord_jukebox.infrastructure.persistence.repositories.guild_settings_repository import (
        SQLiteGuildSettingsRepository,
    )

    return SQLiteGuildSettingsRepository(in_memory_database, default_playlist_limit=50)


# ============================================================================
# Domain Fixtures
# ============================================================================


def make_song(title: str = "Song", **overrides):
    """Build a SongDescriptor with sensible defaults."""
    from discord_jukebox.domain.music.entities import SongDescriptor

    fields = {
        "title": title,
        "url": f"https://www.youtube.com/watch?v={title.replace(' ', '_')}",
        "length_seconds": 180,
    }
    fields.update(overrides)
    return SongDescriptor(**fields)


@pytest.fixture
def song_factory():
    return make_song


@pytest.fixture
def sample_song():
    return make_song("Test Song", artist="Test Artist")


# ============================================================================
# Port Mocks
# ============================================================================


@pytest.fixture
def mock_voice_adapter():
    """Voice adapter that connects and plays successfully."""
    from discord_jukebox.application.interfaces.voice_adapter import VoiceAdapter

    adapter = MagicMock(spec=VoiceAdapter)
    connected: set[int] = set()

    async def connect(guild_id, channel_id):
        connected.add(guild_id)
        return True

    async def disconnect(guild_id):
        connected.discard(guild_id)
        return True

    adapter.connect = AsyncMock(side_effect=connect)
    adapter.disconnect = AsyncMock(side_effect=disconnect)
    adapter.play = AsyncMock(return_value=True)
    adapter.stop = AsyncMock(return_value=True)
    adapter.pause = AsyncMock(return_value=True)
    adapter.resume = AsyncMock(return_value=True)
    adapter.is_connected = MagicMock(side_effect=lambda guild_id: guild_id in connected)
    adapter.set_on_track_end_callback = MagicMock()
    return adapter


@pytest.fixture
def mock_media_provider():
    """Media provider that hands out a stream URL for every song."""
    from discord_jukebox.application.interfaces.media_provider import MediaProvider

    provider = MagicMock(spec=MediaProvider)
    provider.resolve_video = AsyncMock(return_value=[])
    provider.resolve_playlist = AsyncMock(return_value=[])
    provider.search = AsyncMock(return_value=[])
    provider.resolve_live_stream = AsyncMock(return_value=None)
    provider.get_stream_url = AsyncMock(side_effect=lambda song: f"https://stream.test/{song.title}")
    return provider


@pytest.fixture
def mock_catalog_provider():
    from discord_jukebox.application.interfaces.catalog_provider import CatalogProvider

    provider = MagicMock(spec=CatalogProvider)
    provider.get_listing = AsyncMock()
    return provider


@pytest.fixture
def mock_channel_locator():
    from discord_jukebox.application.interfaces.channel_locator import ChannelLocator

    locator = MagicMock(spec=ChannelLocator)
    locator.member_voice_channel = MagicMock(return_value=555)
    locator.voice_channel_occupancy = MagicMock(return_value=[])
    return locator


# ============================================================================
# Application Fixtures
# ============================================================================


@pytest.fixture
def player(mock_voice_adapter, mock_media_provider):
    from discord_jukebox.application.services.player import Player

    return Player(111, voice_adapter=mock_voice_adapter, media_provider=mock_media_provider)


@pytest.fixture
def player_registry(mock_voice_adapter, mock_media_provider):
    from discord_jukebox.application.services.player_registry import PlayerRegistry

    return PlayerRegistry(voice_adapter=mock_voice_adapter, media_provider=mock_media_provider)
