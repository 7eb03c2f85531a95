"""Tests for welcome and announcement messages."""

from unittest.mock import AsyncMock, MagicMock

import discord
import pytest

from common import config
from domain.notification import (
    announce,
    handle_member_join,
    send_announcement,
    send_welcome_dm,
    send_welcome_message,
)
from tests.helpers import UNVERIFIED_ROLE_ID, FakeMember, http_error, make_interaction


@pytest.fixture
def welcome_channel(monkeypatch):
    monkeypatch.setattr(config, 'WELCOME_CHANNEL_ID', 500)
    channel = MagicMock()
    channel.send = AsyncMock()
    return channel


@pytest.mark.asyncio
async def test_member_join_gets_unverified_role_and_welcome(role_ids, welcome_channel):
    member = FakeMember()
    member.guild.get_channel.return_value = welcome_channel

    await handle_member_join(member)

    assert member.role_ids == {UNVERIFIED_ROLE_ID}
    member.guild.get_channel.assert_called_once_with(500)
    welcome_channel.send.assert_awaited_once()


@pytest.mark.asyncio
async def test_member_join_role_failure_still_welcomes(role_ids, welcome_channel):
    member = FakeMember()
    member.add_roles.side_effect = http_error()
    member.guild.get_channel.return_value = welcome_channel

    await handle_member_join(member)

    welcome_channel.send.assert_awaited_once()


@pytest.mark.asyncio
async def test_welcome_message_without_channel(welcome_channel):
    member = FakeMember()
    member.guild.get_channel.return_value = None

    await send_welcome_message(member)

    welcome_channel.send.assert_not_awaited()


@pytest.mark.asyncio
async def test_welcome_dm():
    member = FakeMember()

    assert await send_welcome_dm(member) is True
    embed = member.send.call_args.kwargs['embed']
    assert '/loadouts' in embed.description


@pytest.mark.asyncio
async def test_welcome_dm_blocked():
    member = FakeMember()
    member.send.side_effect = http_error()

    assert await send_welcome_dm(member) is False


@pytest.mark.asyncio
async def test_announcement(monkeypatch):
    monkeypatch.setattr(config, 'ANNOUNCEMENTS_CHANNEL_ID', 700)
    channel = MagicMock()
    channel.send = AsyncMock()
    bot = MagicMock()
    bot.get_channel.return_value = channel

    sent = await send_announcement(bot, '정기 모임', '토요일 9시', 'admin#0001')

    assert sent is True
    bot.get_channel.assert_called_once_with(700)
    embed = channel.send.call_args.kwargs['embed']
    assert embed.title == '정기 모임'
    assert 'admin#0001' in embed.footer.text


@pytest.mark.asyncio
async def test_announcement_channel_missing():
    bot = MagicMock()
    bot.get_channel.return_value = None
    bot.fetch_channel = AsyncMock(side_effect=http_error(status=404))

    assert await send_announcement(bot, 'title', 'body', 'admin') is False


class TestAnnounceCommand:

    @staticmethod
    def _interaction(bot):
        interaction = make_interaction(FakeMember(name='admin'))
        interaction.client = bot
        return interaction

    @pytest.mark.asyncio
    async def test_success_reply(self, monkeypatch):
        monkeypatch.setattr(config, 'ANNOUNCEMENTS_CHANNEL_ID', 700)
        channel = MagicMock()
        channel.send = AsyncMock()
        bot = MagicMock()
        bot.get_channel.return_value = channel
        interaction = self._interaction(bot)

        await announce(interaction, '정기 모임', '토요일 9시')

        interaction.response.defer.assert_awaited_once_with(ephemeral=True)
        channel.send.assert_awaited_once()
        assert '✅' in interaction.followup.send.call_args.args[0]
        assert interaction.followup.send.call_args.kwargs['ephemeral'] is True

    @pytest.mark.asyncio
    async def test_missing_channel_reports_failure(self):
        bot = MagicMock()
        bot.get_channel.return_value = None
        bot.fetch_channel = AsyncMock(side_effect=http_error(discord.NotFound, status=404))
        interaction = self._interaction(bot)

        await announce(interaction, 'title', 'body')

        assert '❌' in interaction.followup.send.call_args.args[0]

    @pytest.mark.asyncio
    async def test_send_error_reports_failure(self):
        channel = MagicMock()
        channel.send = AsyncMock(side_effect=http_error())
        bot = MagicMock()
        bot.get_channel.return_value = channel
        interaction = self._interaction(bot)

        await announce(interaction, 'title', 'body')

        assert '❌' in interaction.followup.send.call_args.args[0]
        assert interaction.followup.send.call_args.kwargs['ephemeral'] is True
