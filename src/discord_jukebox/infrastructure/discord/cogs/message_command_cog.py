"""Prefixed text commands and bare song links posted in guild channels."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

import discord
from discord.ext import commands

from discord_jukebox.application.commands.add_query import AddQueryCommand
from discord_jukebox.application.commands.shuffle_queue import ShuffleQueueCommand
from discord_jukebox.application.commands.skip_song import SkipSongCommand
from discord_jukebox.application.commands.stop_playback import StopPlaybackCommand
from discord_jukebox.domain.shared.enums import MessageCommand
from discord_jukebox.domain.shared.exceptions import DomainError, EmptyResultError
from discord_jukebox.domain.shared.messages import DiscordUIMessages, ErrorMessages, LogTemplates
from discord_jukebox.infrastructure.discord.embeds import build_now_playing_embed

if TYPE_CHECKING:
    from ....config.container import Container

logger = logging.getLogger(__name__)

WORKING_REACTION = "🧑‍💻"
SONG_LINK_HOSTS = ("www.youtube.com", "youtu.be", "youtube.com", "open.spotify.com")

_SONG_LINK = re.compile(
    r"^https://(?:" + "|".join(re.escape(host) for host in SONG_LINK_HOSTS) + r")\S*"
)


@dataclass(frozen=True)
class ParsedMessage:
    command: MessageCommand
    query: str = ""


def _command_pattern(prefix: str) -> re.Pattern[str]:
    names = "|".join(re.escape(command.value) for command in MessageCommand)
    return re.compile(rf"^{re.escape(prefix)}(?P<command>{names})\s*(?P<query>.*)$", re.DOTALL)


def parse_message(content: str, prefix: str) -> ParsedMessage | None:
    """Map a chat message to a command, or None when it is not meant for the bot.

    A message that only starts with a YouTube or Spotify link is queued as ``play``.
    """
    match = _command_pattern(prefix).match(content)
    if match is not None:
        return ParsedMessage(MessageCommand(match["command"]), match["query"].strip())
    if _SONG_LINK.match(content):
        return ParsedMessage(MessageCommand.PLAY, content.strip())
    return None


class MessageCommandCog(commands.Cog):
    def __init__(self, bot: commands.Bot, container: Container) -> None:
        self.bot = bot
        self.container = container

    @commands.Cog.listener()
    async def on_message(self, message: discord.Message) -> None:
        if message.author.bot or message.guild is None:
            return

        parsed = parse_message(message.content, self.container.settings.discord.command_prefix)
        if parsed is None:
            return

        try:
            await self._dispatch(message, parsed)
        except DomainError as exc:
            logger.warning(LogTemplates.COMMAND_FAILED, parsed.command, message.guild.id, exc.message)
            await message.reply(exc.message)
        except Exception:
            logger.exception(LogTemplates.COMMAND_UNEXPECTED_ERROR, parsed.command, message.guild.id)
            await message.reply(DiscordUIMessages.ERROR_UNEXPECTED)

    async def _dispatch(self, message: discord.Message, parsed: ParsedMessage) -> None:
        assert message.guild is not None
        guild_id = message.guild.id

        match parsed.command:
            case MessageCommand.PLAY:
                await self._add_query(message, parsed.query, add_to_front=False)
            case MessageCommand.BUMPPLAY:
                await self._add_query(message, parsed.query, add_to_front=True)
            case MessageCommand.SKIP:
                result = await self.container.skip_song_handler.handle(
                    SkipSongCommand(guild_id=guild_id)
                )
                await self._reply(message, result.message, with_now_playing=result.is_success)
            case MessageCommand.STOP:
                result = await self.container.stop_playback_handler.handle(
                    StopPlaybackCommand(guild_id=guild_id)
                )
                await message.reply(result.message)
            case MessageCommand.SHUFFLE:
                result = await self.container.shuffle_queue_handler.handle(
                    ShuffleQueueCommand(guild_id=guild_id)
                )
                await message.reply(result.message)

    async def _add_query(self, message: discord.Message, query: str, *, add_to_front: bool) -> None:
        assert message.guild is not None
        if not query:
            raise EmptyResultError(query)

        command = AddQueryCommand(
            guild_id=message.guild.id,
            requester_id=message.author.id,
            text_channel_id=message.channel.id,
            query=query,
            add_to_front=add_to_front,
        )

        await message.add_reaction(WORKING_REACTION)
        try:
            async with message.channel.typing():
                result = await self.container.add_query_handler.handle(command)
        finally:
            await message.remove_reaction(WORKING_REACTION, self.bot.user)

        await self._reply(message, result.message, with_now_playing=result.show_now_playing)

    async def _reply(
        self, message: discord.Message, content: str, *, with_now_playing: bool = False
    ) -> None:
        assert message.guild is not None
        player = self.container.player_registry.get_if_exists(message.guild.id)
        if with_now_playing and player is not None and player.current is not None:
            await message.reply(content, embed=build_now_playing_embed(player))
        else:
            await message.reply(content)


async def setup(bot: commands.Bot) -> None:
    container = getattr(bot, "container", None)
    if container is None:
        raise RuntimeError(ErrorMessages.CONTAINER_NOT_FOUND)

    await bot.add_cog(MessageCommandCog(bot, container))
