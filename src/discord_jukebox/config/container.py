"""Dependency Injection Container

Manages the application's dependency graph, providing lazy initialization
and lifecycle management for providers, adapters, repositories and handlers.
Components are created on-demand and cached for reuse throughout the application.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..domain.shared.messages import ErrorMessages

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from discord.ext.commands import Bot

    from ..application.commands.add_query import AddQueryHandler
    from ..application.commands.pause_playback import PausePlaybackHandler
    from ..application.commands.shuffle_queue import ShuffleQueueHandler
    from ..application.commands.skip_song import SkipSongHandler
    from ..application.commands.stop_playback import StopPlaybackHandler
    from ..application.interfaces.catalog_provider import CatalogProvider
    from ..application.interfaces.channel_locator import ChannelLocator
    from ..application.interfaces.media_provider import MediaProvider
    from ..application.interfaces.voice_adapter import VoiceAdapter
    from ..application.services.player_registry import PlayerRegistry
    from ..application.services.source_resolver import SourceResolver
    from ..domain.guild.repository import GuildSettingsRepository
    from ..infrastructure.persistence.database import Database
    from .settings import Settings


@dataclass
class Container:
    """Dependency injection container.

    Components are lazily initialized when first accessed. The Discord-bound
    adapters need ``set_bot()`` to have been called first.
    """

    settings: Settings
    _bot: Bot | None = None

    # Persistence layer
    _database: Database | None = None
    _guild_settings_repository: GuildSettingsRepository | None = None

    # Infrastructure adapters
    _media_provider: MediaProvider | None = None
    _catalog_provider: CatalogProvider | None = None
    _voice_adapter: VoiceAdapter | None = None
    _channel_locator: ChannelLocator | None = None

    # Application services
    _player_registry: PlayerRegistry | None = None
    _source_resolver: SourceResolver | None = None

    # Command handlers
    _add_query_handler: AddQueryHandler | None = None
    _skip_song_handler: SkipSongHandler | None = None
    _stop_playback_handler: StopPlaybackHandler | None = None
    _shuffle_queue_handler: ShuffleQueueHandler | None = None
    _pause_playback_handler: PausePlaybackHandler | None = None

    def set_bot(self, bot: Bot) -> None:
        """Set the Discord bot instance."""
        self._bot = bot

    @property
    def bot(self) -> Bot:
        """Get the Discord bot instance."""
        if self._bot is None:
            raise RuntimeError(ErrorMessages.BOT_NOT_INITIALIZED)
        return self._bot

    # === Database ===

    @property
    def database(self) -> Database:
        """Get the database connection manager."""
        if self._database is None:
            from ..infrastructure.persistence.database import Database

            self._database = Database(self.settings.database.url, settings=self.settings.database)
        return self._database

    # === Repositories ===

    @property
    def guild_settings_repository(self) -> GuildSettingsRepository:
        """Get the per-guild settings repository."""
        if self._guild_settings_repository is None:
            from ..infrastructure.persistence.repositories.guild_settings_repository import (
                SQLiteGuildSettingsRepository,
            )

            self._guild_settings_repository = SQLiteGuildSettingsRepository(
                self.database,
                default_playlist_limit=self.settings.queue.default_playlist_limit,
            )
        return self._guild_settings_repository

    # === Infrastructure Adapters ===

    @property
    def media_provider(self) -> MediaProvider:
        """Get the yt-dlp media provider."""
        if self._media_provider is None:
            from ..infrastructure.audio.ytdlp_provider import YtDlpMediaProvider

            self._media_provider = YtDlpMediaProvider(self.settings.audio)
        return self._media_provider

    @property
    def catalog_provider(self) -> CatalogProvider | None:
        """Get the Spotify catalog provider, or None without credentials."""
        if self._catalog_provider is None and self.settings.spotify.is_configured:
            from ..infrastructure.catalog.spotify_catalog import SpotifyCatalogProvider

            self._catalog_provider = SpotifyCatalogProvider(self.settings.spotify)
        return self._catalog_provider

    @property
    def voice_adapter(self) -> VoiceAdapter:
        """Get the voice adapter."""
        if self._voice_adapter is None:
            from ..infrastructure.discord.adapters.voice_adapter import (
                DiscordVoiceAdapter,
            )

            self._voice_adapter = DiscordVoiceAdapter(self.bot, self.settings.audio)
        return self._voice_adapter

    @property
    def channel_locator(self) -> ChannelLocator:
        if self._channel_locator is None:
            from ..infrastructure.discord.adapters.channel_locator import (
                DiscordChannelLocator,
            )

            self._channel_locator = DiscordChannelLocator(self.bot)
        return self._channel_locator

    # === Application Services ===

    @property
    def player_registry(self) -> PlayerRegistry:
        """Get the registry holding one player per guild."""
        if self._player_registry is None:
            from ..application.services.player_registry import PlayerRegistry

            self._player_registry = PlayerRegistry(
                voice_adapter=self.voice_adapter,
                media_provider=self.media_provider,
            )
        return self._player_registry

    @property
    def source_resolver(self) -> SourceResolver:
        if self._source_resolver is None:
            from ..application.services.source_resolver import SourceResolver

            self._source_resolver = SourceResolver(
                media_provider=self.media_provider,
                catalog_provider=self.catalog_provider,
                lookup_concurrency=self.settings.queue.catalog_lookup_concurrency,
            )
        return self._source_resolver

    # === Command Handlers ===

    @property
    def add_query_handler(self) -> AddQueryHandler:
        if self._add_query_handler is None:
            from ..application.commands.add_query import AddQueryHandler

            self._add_query_handler = AddQueryHandler(
                player_registry=self.player_registry,
                source_resolver=self.source_resolver,
                channel_locator=self.channel_locator,
                guild_settings_repository=self.guild_settings_repository,
            )
        return self._add_query_handler

    @property
    def skip_song_handler(self) -> SkipSongHandler:
        if self._skip_song_handler is None:
            from ..application.commands.skip_song import SkipSongHandler

            self._skip_song_handler = SkipSongHandler(player_registry=self.player_registry)
        return self._skip_song_handler

    @property
    def stop_playback_handler(self) -> StopPlaybackHandler:
        if self._stop_playback_handler is None:
            from ..application.commands.stop_playback import StopPlaybackHandler

            self._stop_playback_handler = StopPlaybackHandler(
                player_registry=self.player_registry
            )
        return self._stop_playback_handler

    @property
    def shuffle_queue_handler(self) -> ShuffleQueueHandler:
        if self._shuffle_queue_handler is None:
            from ..application.commands.shuffle_queue import ShuffleQueueHandler

            self._shuffle_queue_handler = ShuffleQueueHandler(
                player_registry=self.player_registry
            )
        return self._shuffle_queue_handler

    @property
    def pause_playback_handler(self) -> PausePlaybackHandler:
        if self._pause_playback_handler is None:
            from ..application.commands.pause_playback import PausePlaybackHandler

            self._pause_playback_handler = PausePlaybackHandler(
                player_registry=self.player_registry
            )
        return self._pause_playback_handler

    # === Lifecycle ===

    async def initialize(self) -> None:
        """Initialize all async resources."""
        await self.database.initialize()

    async def shutdown(self) -> None:
        """Disconnect every player and close the database."""
        if self._player_registry is not None:
            await self._player_registry.shutdown()

        if self._database is not None:
            await self._database.close()


def create_container(settings: Settings) -> Container:
    """Create a new dependency injection container."""
    return Container(settings)
