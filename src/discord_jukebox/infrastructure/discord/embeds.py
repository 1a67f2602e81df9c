"""Embed builders for player state."""

from __future__ import annotations

from typing import TYPE_CHECKING

import discord

from discord_jukebox.domain.music.value_objects import MediaSource, PlaybackStatus
from discord_jukebox.domain.shared.messages import DiscordUIMessages
from discord_jukebox.utils.reply import format_duration, truncate

if TYPE_CHECKING:
    from ...application.services.player import Player

UP_NEXT_COUNT = 5


def build_now_playing_embed(player: Player) -> discord.Embed:
    """Describe the player's current song, its requester and what comes next."""
    song = player.current
    paused = player.status is PlaybackStatus.PAUSED
    embed = discord.Embed(
        title=DiscordUIMessages.EMBED_PAUSED if paused else DiscordUIMessages.EMBED_NOW_PLAYING,
        color=discord.Color.dark_grey() if paused else discord.Color.green(),
    )
    if song is None:
        return embed

    title = truncate(song.title, 200)
    if song.source is MediaSource.HLS:
        embed.description = title
    else:
        embed.description = f"[{title}]({song.url})"

    if song.thumbnail_url:
        embed.set_thumbnail(url=song.thumbnail_url)

    embed.add_field(
        name="⏱️ Duration",
        value=DiscordUIMessages.EMBED_LIVE if song.is_live else format_duration(song.length_seconds),
        inline=True,
    )
    if song.artist:
        embed.add_field(name="👤 Artist", value=truncate(song.artist, 64), inline=True)
    if song.requested_by_id:
        embed.add_field(
            name=DiscordUIMessages.EMBED_REQUESTED_BY,
            value=f"<@{song.requested_by_id}>",
            inline=True,
        )

    upcoming = player.queue.songs[:UP_NEXT_COUNT]
    if upcoming:
        embed.add_field(
            name=DiscordUIMessages.EMBED_UP_NEXT,
            value="\n".join(
                f"{i}. {truncate(s.display_title, 80)}" for i, s in enumerate(upcoming, start=1)
            ),
            inline=False,
        )
    footer = DiscordUIMessages.EMBED_QUEUE_LENGTH.format(count=len(player.queue))
    total = player.queue.total_length_seconds
    if upcoming and total is not None:
        footer += DiscordUIMessages.EMBED_QUEUE_DURATION.format(duration=format_duration(total))
    embed.set_footer(text=footer)
    return embed
