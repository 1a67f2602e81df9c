"""ChannelLocator implementation reading voice state from the discord.py cache."""

from __future__ import annotations

import discord

from discord_jukebox.application.interfaces.channel_locator import ChannelLocator
from discord_jukebox.domain.music.value_objects import VoiceChannelOccupancy


class DiscordChannelLocator(ChannelLocator):
    def __init__(self, bot: discord.Client) -> None:
        self._bot = bot

    def member_voice_channel(self, guild_id: int, user_id: int) -> int | None:
        guild = self._bot.get_guild(guild_id)
        if guild is None:
            return None

        member = guild.get_member(user_id)
        if member is None or member.voice is None or member.voice.channel is None:
            return None
        return member.voice.channel.id

    def voice_channel_occupancy(self, guild_id: int) -> list[VoiceChannelOccupancy]:
        guild = self._bot.get_guild(guild_id)
        if guild is None:
            return []

        return [
            VoiceChannelOccupancy(
                channel_id=channel.id,
                listener_count=sum(1 for member in channel.members if not member.bot),
            )
            for channel in guild.voice_channels
        ]
