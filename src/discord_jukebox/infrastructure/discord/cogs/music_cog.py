"""Slash-command music cog delegating to application command handlers."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import discord
from discord import app_commands
from discord.ext import commands

from discord_jukebox.application.commands.add_query import AddQueryCommand
from discord_jukebox.application.commands.pause_playback import PausePlaybackCommand
from discord_jukebox.application.commands.shuffle_queue import ShuffleQueueCommand
from discord_jukebox.application.commands.skip_song import SkipSongCommand
from discord_jukebox.application.commands.stop_playback import StopPlaybackCommand
from discord_jukebox.domain.shared.messages import DiscordUIMessages, ErrorMessages
from discord_jukebox.infrastructure.discord.embeds import build_now_playing_embed
from discord_jukebox.infrastructure.discord.guards.voice_guards import get_member

if TYPE_CHECKING:
    from ....config.container import Container

logger = logging.getLogger(__name__)


class MusicCog(commands.Cog):
    def __init__(self, bot: commands.Bot, container: Container) -> None:
        self.bot = bot
        self.container = container

    async def _reply(
        self,
        interaction: discord.Interaction,
        message: str,
        *,
        with_now_playing: bool = False,
    ) -> None:
        """Send ``message`` on a deferred interaction, optionally with the now-playing embed."""
        embed = None
        if with_now_playing and interaction.guild_id is not None:
            player = self.container.player_registry.get_if_exists(interaction.guild_id)
            if player is not None and player.current is not None:
                embed = build_now_playing_embed(player)

        if embed is None:
            await interaction.followup.send(message)
        else:
            await interaction.followup.send(message, embed=embed)

    @app_commands.command(name="play", description="Queue songs from a link or a search.")
    @app_commands.describe(
        query="YouTube or Spotify link, stream URL, or search terms",
        immediate="Put the songs at the front of the queue",
        shuffle="Shuffle the songs before queueing them",
        split="Split videos with chapters into one song per chapter",
    )
    async def play(
        self,
        interaction: discord.Interaction,
        query: str,
        immediate: bool = False,
        shuffle: bool = False,
        split: bool = False,
    ) -> None:
        member = await get_member(interaction)
        if member is None:
            return

        # Resolution and voice connection can exceed the 3-second interaction deadline
        await interaction.response.defer()

        result = await self.container.add_query_handler.handle(
            AddQueryCommand(
                guild_id=member.guild.id,
                requester_id=member.id,
                text_channel_id=interaction.channel_id,
                query=query,
                add_to_front=immediate,
                shuffle_additions=shuffle,
                split_chapters=split,
            )
        )
        await self._reply(interaction, result.message, with_now_playing=result.show_now_playing)

    @app_commands.command(name="skip", description="Skip the current song, or several songs.")
    @app_commands.describe(number="How many songs to skip, the current one included")
    async def skip(
        self,
        interaction: discord.Interaction,
        number: app_commands.Range[int, 1, 1000] = 1,
    ) -> None:
        member = await get_member(interaction)
        if member is None:
            return

        await interaction.response.defer()
        result = await self.container.skip_song_handler.handle(
            SkipSongCommand(guild_id=member.guild.id, count=number)
        )
        await self._reply(
            interaction, result.message, with_now_playing=result.now_playing is not None
        )

    @app_commands.command(name="stop", description="Stop playback. The queue is kept.")
    async def stop(self, interaction: discord.Interaction) -> None:
        member = await get_member(interaction)
        if member is None:
            return

        await interaction.response.defer()
        result = await self.container.stop_playback_handler.handle(
            StopPlaybackCommand(guild_id=member.guild.id)
        )
        await self._reply(interaction, result.message)

    @app_commands.command(name="pause", description="Pause the current song.")
    async def pause(self, interaction: discord.Interaction) -> None:
        member = await get_member(interaction)
        if member is None:
            return

        await interaction.response.defer()
        result = await self.container.pause_playback_handler.handle(
            PausePlaybackCommand(guild_id=member.guild.id)
        )
        await self._reply(interaction, result.message, with_now_playing=result.is_success)

    @app_commands.command(name="resume", description="Resume the paused song.")
    async def resume(self, interaction: discord.Interaction) -> None:
        member = await get_member(interaction)
        if member is None:
            return

        await interaction.response.defer()
        result = await self.container.pause_playback_handler.handle(
            PausePlaybackCommand(guild_id=member.guild.id, resume=True)
        )
        await self._reply(interaction, result.message, with_now_playing=result.is_success)

    @app_commands.command(name="shuffle", description="Shuffle the songs waiting in the queue.")
    async def shuffle(self, interaction: discord.Interaction) -> None:
        member = await get_member(interaction)
        if member is None:
            return

        await interaction.response.defer()
        result = await self.container.shuffle_queue_handler.handle(
            ShuffleQueueCommand(guild_id=member.guild.id)
        )
        await self._reply(interaction, result.message)

    @app_commands.command(
        name="playlist-limit",
        description="Set how many songs are sampled from large Spotify lists.",
    )
    @app_commands.describe(value="Maximum number of songs taken from one list")
    async def playlist_limit(
        self,
        interaction: discord.Interaction,
        value: app_commands.Range[int, 1, 1000],
    ) -> None:
        member = await get_member(interaction)
        if member is None:
            return

        await interaction.response.defer()
        repository = self.container.guild_settings_repository
        settings = await repository.get(member.guild.id)
        await repository.save(settings.with_playlist_limit(value))
        await self._reply(
            interaction, DiscordUIMessages.SETTINGS_PLAYLIST_LIMIT_UPDATED.format(limit=value)
        )


async def setup(bot: commands.Bot) -> None:
    container = getattr(bot, "container", None)
    if container is None:
        raise RuntimeError(ErrorMessages.CONTAINER_NOT_FOUND)

    await bot.add_cog(MusicCog(bot, container))
