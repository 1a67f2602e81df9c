"""
Tests for AddQueryHandler

Tests for:
- Command validation
- Connecting and starting playback on the first request
- Queueing behind a playing song
- Front insertion, resume note and catalog notes
- Failures leaving the queue untouched
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest
from pydantic import ValidationError

from discord_jukebox.application.commands.add_query import (
    AddQueryCommand,
    AddQueryHandler,
    AddQueryResult,
)
from discord_jukebox.application.services.source_resolver import (
    ResolutionOutcome,
    SourceResolver,
)
from discord_jukebox.domain.guild.entities import GuildSettings
from discord_jukebox.domain.music.value_objects import PlaybackStatus, VoiceChannelOccupancy
from discord_jukebox.domain.shared.exceptions import NotFoundError, PreconditionError

GUILD = 111


def _command(query: str = "some song", **overrides) -> AddQueryCommand:
    fields = {
        "guild_id": GUILD,
        "requester_id": 222,
        "text_channel_id": 333,
        "query": query,
    }
    fields.update(overrides)
    return AddQueryCommand(**fields)


@pytest.fixture
def resolver():
    resolver = MagicMock(spec=SourceResolver)
    resolver.resolve = AsyncMock()
    return resolver


@pytest.fixture
def settings_repository():
    repository = MagicMock()
    repository.get = AsyncMock(side_effect=lambda guild_id: GuildSettings(guild_id=guild_id))
    return repository


@pytest.fixture
def handler(player_registry, resolver, mock_channel_locator, settings_repository):
    return AddQueryHandler(
        player_registry=player_registry,
        source_resolver=resolver,
        channel_locator=mock_channel_locator,
        guild_settings_repository=settings_repository,
    )


class TestAddQueryCommand:
    def test_query_is_stripped(self):
        assert _command("  hello  ").query == "hello"

    def test_blank_query_rejected(self):
        with pytest.raises(ValidationError):
            _command("   ")

    def test_invalid_guild_rejected(self):
        with pytest.raises(ValidationError):
            _command(guild_id=0)


class TestAddQueryResult:
    def test_single_song_front_message(self, song_factory):
        result = AddQueryResult.build([song_factory("A")], add_to_front=True, notes=[])

        assert result.message == "A added to the front of the queue"

    def test_many_songs_message_with_notes(self, song_factory):
        result = AddQueryResult.build(
            [song_factory("A"), song_factory("B"), song_factory("C")],
            add_to_front=False,
            notes=["resuming playback", "1 song was not found"],
        )

        assert result.message == (
            "A and 2 other songs were added to the queue "
            "(resuming playback, 1 song was not found)"
        )


class TestAddQueryHandler:
    @pytest.mark.asyncio
    async def test_first_request_connects_and_plays(
        self, handler, resolver, player_registry, mock_voice_adapter, song_factory
    ):
        resolver.resolve.return_value = ResolutionOutcome(songs=[song_factory("A")])

        result = await handler.handle(_command())

        player = player_registry.get(GUILD)
        mock_voice_adapter.connect.assert_awaited_once_with(GUILD, 555)
        assert player.status is PlaybackStatus.PLAYING
        assert player.current.title == "A"
        assert player.current.requested_by_id == 222
        assert player.current.added_in_channel_id == 333
        assert result.show_now_playing is True
        assert result.now_playing.title == "A"
        assert result.message == "A added to the queue"

    @pytest.mark.asyncio
    async def test_uses_guild_playlist_limit(
        self, handler, resolver, settings_repository, song_factory
    ):
        settings_repository.get.side_effect = lambda guild_id: GuildSettings(
            guild_id=guild_id, playlist_limit=7
        )
        resolver.resolve.return_value = ResolutionOutcome(songs=[song_factory("A")])

        await handler.handle(_command(split_chapters=True, shuffle_additions=True))

        resolver.resolve.assert_awaited_once_with(
            "some song", playlist_limit=7, split_chapters=True, shuffle=True
        )

    @pytest.mark.asyncio
    async def test_queues_behind_playing_song(
        self, handler, resolver, player_registry, mock_voice_adapter, song_factory
    ):
        resolver.resolve.return_value = ResolutionOutcome(songs=[song_factory("A")])
        await handler.handle(_command())
        resolver.resolve.return_value = ResolutionOutcome(
            songs=[song_factory("B"), song_factory("C")]
        )

        result = await handler.handle(_command())

        player = player_registry.get(GUILD)
        assert player.current.title == "A"
        assert [s.title for s in player.queue.songs] == ["B", "C"]
        assert mock_voice_adapter.connect.await_count == 1
        assert mock_voice_adapter.play.await_count == 1
        assert result.show_now_playing is False
        assert result.message == "B and 1 other songs were added to the queue"

    @pytest.mark.asyncio
    async def test_front_insertion(self, handler, resolver, player_registry, song_factory):
        resolver.resolve.return_value = ResolutionOutcome(
            songs=[song_factory("A"), song_factory("B")]
        )
        await handler.handle(_command())
        resolver.resolve.return_value = ResolutionOutcome(
            songs=[song_factory("X"), song_factory("Y")]
        )

        await handler.handle(_command(add_to_front=True))

        player = player_registry.get(GUILD)
        assert [s.title for s in player.queue.songs] == ["X", "Y", "B"]

    @pytest.mark.asyncio
    async def test_idle_connected_player_starts_playing(
        self, handler, resolver, player_registry, song_factory
    ):
        player = player_registry.get(GUILD)
        await player.connect(555)
        resolver.resolve.return_value = ResolutionOutcome(songs=[song_factory("A")])

        result = await handler.handle(_command())

        assert player.status is PlaybackStatus.PLAYING
        assert result.show_now_playing is False
        assert result.now_playing.title == "A"

    @pytest.mark.asyncio
    async def test_reconnect_resumes_kept_song(
        self, handler, resolver, player_registry, song_factory
    ):
        resolver.resolve.return_value = ResolutionOutcome(songs=[song_factory("A")])
        await handler.handle(_command())
        player = player_registry.get(GUILD)
        await player.disconnect()
        resolver.resolve.return_value = ResolutionOutcome(songs=[song_factory("B")])

        result = await handler.handle(_command())

        assert player.current.title == "A"
        assert [s.title for s in player.queue.songs] == ["B"]
        assert result.message == "B added to the queue (resuming playback)"

    @pytest.mark.asyncio
    async def test_adding_while_paused_keeps_player_paused(
        self, handler, resolver, player_registry, mock_voice_adapter, song_factory
    ):
        resolver.resolve.return_value = ResolutionOutcome(songs=[song_factory("A")])
        await handler.handle(_command())
        player = player_registry.get(GUILD)
        await player.pause()
        resolver.resolve.return_value = ResolutionOutcome(songs=[song_factory("B")])

        result = await handler.handle(_command())

        assert player.status is PlaybackStatus.PAUSED
        assert player.current.title == "A"
        assert [s.title for s in player.queue.songs] == ["B"]
        mock_voice_adapter.resume.assert_not_awaited()
        assert mock_voice_adapter.play.await_count == 1
        assert result.show_now_playing is False

    @pytest.mark.asyncio
    async def test_concurrent_adds_connect_and_play_once(
        self, handler, resolver, player_registry, mock_voice_adapter, song_factory
    ):
        async def resolve(query, **_):
            await asyncio.sleep(0)
            return ResolutionOutcome(songs=[song_factory(query)])

        resolver.resolve.side_effect = resolve

        await asyncio.gather(*(handler.handle(_command(f"song {i}")) for i in range(5)))

        player = player_registry.get(GUILD)
        mock_voice_adapter.connect.assert_awaited_once_with(GUILD, 555)
        assert mock_voice_adapter.play.await_count == 1
        assert player.status is PlaybackStatus.PLAYING
        assert len(player.queue.songs) == 4

    @pytest.mark.asyncio
    async def test_catalog_note_is_appended(self, handler, resolver, song_factory):
        resolver.resolve.return_value = ResolutionOutcome(
            songs=[song_factory("A")], note="1 song was not found"
        )

        result = await handler.handle(_command())

        assert result.message == "A added to the queue (1 song was not found)"

    @pytest.mark.asyncio
    async def test_falls_back_to_busiest_channel(
        self, handler, resolver, mock_channel_locator, mock_voice_adapter, song_factory
    ):
        mock_channel_locator.member_voice_channel.return_value = None
        mock_channel_locator.voice_channel_occupancy.return_value = [
            VoiceChannelOccupancy(900, 1),
            VoiceChannelOccupancy(800, 4),
        ]
        resolver.resolve.return_value = ResolutionOutcome(songs=[song_factory("A")])

        await handler.handle(_command())

        mock_voice_adapter.connect.assert_awaited_once_with(GUILD, 800)

    @pytest.mark.asyncio
    async def test_no_destination_fails_before_resolving(
        self, handler, resolver, mock_channel_locator
    ):
        mock_channel_locator.member_voice_channel.return_value = None

        with pytest.raises(PreconditionError):
            await handler.handle(_command())
        resolver.resolve.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_resolution_failure_leaves_queue_untouched(
        self, handler, resolver, player_registry, mock_voice_adapter
    ):
        resolver.resolve.side_effect = NotFoundError("missing")

        with pytest.raises(NotFoundError):
            await handler.handle(_command())

        mock_voice_adapter.connect.assert_not_awaited()
        player = player_registry.get_if_exists(GUILD)
        assert player is None or player.queue.is_empty
