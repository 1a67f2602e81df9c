"""
Unit Tests for Dependency Injection Container

Tests for:
- Bot instance management (set_bot, bot property, error when not set)
- Lazy, cached component creation
- Spotify catalog wiring only when credentials are configured
- Lifecycle methods (initialize, shutdown)
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from pydantic import SecretStr

from discord_jukebox.config.container import Container, create_container
from discord_jukebox.config.settings import Settings, SpotifySettings


@pytest.fixture
def settings():
    return Settings(_env_file=None)


@pytest.fixture
def container(settings):
    container = create_container(settings)
    container.set_bot(MagicMock())
    return container


class TestBot:
    def test_bot_not_set_raises(self, settings):
        with pytest.raises(RuntimeError, match="Bot not initialized"):
            _ = Container(settings).bot

    def test_set_bot(self, settings):
        bot = MagicMock()
        container = Container(settings)

        container.set_bot(bot)

        assert container.bot is bot


class TestLazyComponents:
    def test_components_are_cached(self, container):
        assert container.media_provider is container.media_provider
        assert container.player_registry is container.player_registry
        assert container.add_query_handler is container.add_query_handler

    def test_registry_shares_adapters(self, container):
        registry = container.player_registry

        assert registry._voice_adapter is container.voice_adapter
        assert registry._media_provider is container.media_provider

    def test_handlers_share_registry(self, container):
        registry = container.player_registry

        for handler in (
            container.add_query_handler,
            container.skip_song_handler,
            container.stop_playback_handler,
            container.shuffle_queue_handler,
            container.pause_playback_handler,
        ):
            assert handler._players is registry

    def test_no_catalog_without_credentials(self, container):
        assert container.catalog_provider is None
        assert container.source_resolver._catalog is None

    def test_catalog_with_credentials(self):
        settings = Settings(
            _env_file=None,
            spotify=SpotifySettings(client_id=SecretStr("id"), client_secret=SecretStr("secret")),
        )
        container = create_container(settings)

        assert container.catalog_provider is not None
        assert container.catalog_provider is container.catalog_provider

    def test_guild_settings_use_configured_default(self, container):
        repository = container.guild_settings_repository

        assert repository._default_playlist_limit == 50


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_initialize_opens_database(self, container):
        container._database = MagicMock(initialize=AsyncMock())

        await container.initialize()

        container._database.initialize.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_shutdown_stops_players_then_closes_database(self, container):
        container._player_registry = MagicMock(shutdown=AsyncMock())
        container._database = MagicMock(close=AsyncMock())

        await container.shutdown()

        container._player_registry.shutdown.assert_awaited_once()
        container._database.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_shutdown_without_components(self, settings):
        await Container(settings).shutdown()
