"""
환영/공지 메시지 전송
"""
import discord
from discord import app_commands

from common import config
from common.logger import get_logger
from common.utils import get_kst_now

logger = get_logger()

WELCOME_DM_TEXT = (
    "이제 인증이 완료되었습니다! 다음 명령어를 사용할 수 있어요:\n\n"
    "- `/profile` 내 프로필 보기\n"
    "- `/members` 클랜 멤버 목록\n"
    "- `/add-loadout` 로드아웃 추가\n"
    "- `/loadouts` 로드아웃 목록\n\n"
    "즐거운 게임 되세요!"
)


async def handle_member_join(member: discord.Member):
    """신규 멤버: 미인증 역할 부여 후 환영 채널에 인사"""
    try:
        await member.add_roles(discord.Object(id=config.UNVERIFIED_ROLE_ID), reason="신규 멤버 (미인증)")
    except discord.HTTPException as e:
        logger.error(f'미인증 역할 부여 실패: {member} ({member.id}) - {e}')

    try:
        await send_welcome_message(member)
    except discord.HTTPException as e:
        logger.error(f'환영 메시지 전송 실패: {member} ({member.id}) - {e}')


async def send_welcome_message(member: discord.Member):
    """환영 채널에 환영 메시지 전송"""
    channel = member.guild.get_channel(config.WELCOME_CHANNEL_ID)
    if not channel:
        logger.warning(f'환영 채널을 찾을 수 없습니다: {config.WELCOME_CHANNEL_ID}')
        return

    embed = discord.Embed(
        title=f"{member.name}님, 서버에 오신 것을 환영합니다!",
        description="인증 채널에서 인증을 완료하면 서버의 모든 기능을 사용할 수 있습니다.",
        color=discord.Color.green(),
        timestamp=get_kst_now()
    )
    embed.set_thumbnail(url=member.display_avatar.url)
    await channel.send(embed=embed)


async def send_welcome_dm(member: discord.Member) -> bool:
    """인증 완료 DM 전송 (DM 차단 등으로 실패해도 인증은 계속 진행)"""
    embed = discord.Embed(
        title="🎉 클랜 서버에 오신 것을 환영합니다! 🎉",
        description=WELCOME_DM_TEXT,
        color=discord.Color.green()
    )
    try:
        await member.send(embed=embed)
    except discord.HTTPException as e:
        logger.warning(f'환영 DM 전송 실패: {member} ({member.id}) - {e}')
        return False
    return True


async def send_announcement(bot, title: str, description: str, author: str) -> bool:
    """공지 채널에 공지 전송"""
    channel = bot.get_channel(config.ANNOUNCEMENTS_CHANNEL_ID)
    if channel is None:
        try:
            channel = await bot.fetch_channel(config.ANNOUNCEMENTS_CHANNEL_ID)
        except discord.HTTPException as e:
            logger.error(f'공지 채널을 찾을 수 없습니다: {config.ANNOUNCEMENTS_CHANNEL_ID} - {e}')
            return False

    embed = discord.Embed(
        title=title,
        description=description,
        color=discord.Color.orange(),
        timestamp=get_kst_now()
    )
    embed.set_footer(text=f"공지 작성자: {author}")
    await channel.send(embed=embed)
    logger.info(f'공지 전송: {author} - {title}')
    return True


async def announce(interaction: discord.Interaction, title: str, description: str):
    """/announce 처리: 공지 전송 결과를 작성자에게만 안내"""
    await interaction.response.defer(ephemeral=True)
    try:
        sent = await send_announcement(interaction.client, title, description, str(interaction.user))
    except discord.HTTPException as e:
        logger.error(f'공지 전송 실패: {interaction.user} - {e}')
        sent = False

    if sent:
        await interaction.followup.send("✅ 공지가 전송되었습니다.", ephemeral=True)
    else:
        await interaction.followup.send("❌ 공지 전송 중 오류가 발생했습니다.", ephemeral=True)


def setup(bot, cache):
    """봇에 명령어 등록"""

    @bot.tree.command(name='announce', description='공지 채널에 공지를 보냅니다 (관리자 전용)')
    @app_commands.describe(title='공지 제목', description='공지 내용')
    @app_commands.checks.has_permissions(administrator=True)
    async def announce_command(interaction: discord.Interaction, title: str, description: str):
        await announce(interaction, title, description)
