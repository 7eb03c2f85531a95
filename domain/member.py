"""
멤버 프로필/목록 명령어
"""
import sqlite3

import discord

from common import config, database
from common.logger import get_logger
from common.utils import format_date

logger = get_logger()


def build_members_embed(members) -> discord.Embed:
    """캐시된 멤버 목록 임베드 (임베드 필드 제한까지만 표시)"""
    embed = discord.Embed(
        title="클랜 멤버",
        color=discord.Color.blue()
    )

    rows = list(members)
    if not rows:
        embed.description = "아직 등록된 멤버가 없습니다."
        return embed

    for member in rows[:config.MEMBER_LIST_LIMIT]:
        embed.add_field(
            name=member['game_nick'],
            value=f"가입일: {format_date(member.get('join_date'))}",
            inline=True
        )

    hidden = len(rows) - config.MEMBER_LIST_LIMIT
    embed.description = f"총 {len(rows)}명"
    if hidden > 0:
        embed.description += f" (외 {hidden}명)"
    return embed


async def show_profile(interaction: discord.Interaction):
    """내 프로필 (DB에서 직접 조회)"""
    user = interaction.user
    try:
        member_row = database.get_member(str(user.id))
    except sqlite3.Error as e:
        logger.error(f'프로필 조회 실패: {user} ({user.id}) - {e}')
        await interaction.response.send_message("❌ 프로필을 불러오는 중 오류가 발생했습니다.", ephemeral=True)
        return

    if not member_row:
        await interaction.response.send_message(
            "❌ 클랜에 등록되어 있지 않습니다. 먼저 인증을 완료해주세요.", ephemeral=True
        )
        return

    embed = discord.Embed(
        title=f"{member_row['game_nick']}님의 프로필",
        color=discord.Color.blue()
    )
    embed.set_thumbnail(url=user.display_avatar.url)
    embed.add_field(name="가입일", value=format_date(member_row.get('join_date')), inline=False)
    await interaction.response.send_message(embed=embed)


async def show_members(interaction: discord.Interaction, cache):
    await interaction.response.send_message(embed=build_members_embed(cache.members))


def setup(bot, cache):
    """봇에 명령어 등록"""

    @bot.tree.command(name='profile', description='클랜 프로필을 봅니다')
    async def profile(interaction: discord.Interaction):
        await show_profile(interaction)

    @bot.tree.command(name='members', description='클랜 멤버 목록을 봅니다')
    async def members(interaction: discord.Interaction):
        await show_members(interaction, cache)
