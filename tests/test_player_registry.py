"""Tests for PlayerRegistry."""

import logging

import pytest

from discord_jukebox.domain.music.value_objects import PlaybackStatus


class TestPlayerRegistry:
    def test_registers_track_end_callback(self, player_registry, mock_voice_adapter):
        mock_voice_adapter.set_on_track_end_callback.assert_called_once_with(
            player_registry._on_track_end
        )

    def test_get_creates_one_player_per_guild(self, player_registry):
        first = player_registry.get(1)

        assert player_registry.get(1) is first
        assert player_registry.get(2) is not first
        assert len(player_registry) == 2
        assert 1 in player_registry

    def test_get_if_exists_does_not_create(self, player_registry):
        assert player_registry.get_if_exists(1) is None
        assert len(player_registry) == 0

    @pytest.mark.asyncio
    async def test_remove_stops_and_disconnects(
        self, player_registry, mock_voice_adapter, song_factory
    ):
        player = player_registry.get(1)
        player.queue.add(song_factory("A"))
        await player.connect(555)
        await player.play()

        await player_registry.remove(1)

        assert 1 not in player_registry
        mock_voice_adapter.stop.assert_awaited_once_with(1)
        mock_voice_adapter.disconnect.assert_awaited_once_with(1)
        assert player.status is PlaybackStatus.IDLE

    @pytest.mark.asyncio
    async def test_remove_unknown_guild_is_noop(self, player_registry, mock_voice_adapter):
        await player_registry.remove(99)

        mock_voice_adapter.disconnect.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_shutdown_removes_every_player(self, player_registry):
        player_registry.get(1)
        player_registry.get(2)

        await player_registry.shutdown()

        assert len(player_registry) == 0


class TestTrackEndRouting:
    @pytest.mark.asyncio
    async def test_track_end_advances_player(self, player_registry, song_factory):
        player = player_registry.get(1)
        player.queue.extend([song_factory("A"), song_factory("B")])
        await player.connect(555)
        await player.play()

        await player_registry._on_track_end(1)

        assert player.current.title == "B"

    @pytest.mark.asyncio
    async def test_track_end_for_unknown_guild_is_ignored(self, player_registry):
        await player_registry._on_track_end(42)

        assert len(player_registry) == 0

    @pytest.mark.asyncio
    async def test_domain_error_is_logged(
        self, player_registry, song_factory, mock_voice_adapter, caplog
    ):
        player = player_registry.get(1)
        player.queue.extend([song_factory("A"), song_factory("B")])
        await player.connect(555)
        await player.play()
        mock_voice_adapter.play.return_value = False

        with caplog.at_level(logging.WARNING):
            await player_registry._on_track_end(1)

        assert player.current is None
        assert any("Track-end callback failed" in r.getMessage() for r in caplog.records)

    @pytest.mark.asyncio
    async def test_non_domain_errors_propagate(
        self, player_registry, song_factory, mock_media_provider
    ):
        player = player_registry.get(1)
        player.queue.extend([song_factory("A"), song_factory("B")])
        await player.connect(555)
        await player.play()
        mock_media_provider.get_stream_url.side_effect = RuntimeError("boom")

        with pytest.raises(RuntimeError):
            await player_registry._on_track_end(1)
