"""
게임 클랜 커뮤니티 관리용 Discord 봇
- 닉네임 형식 인증 (WFx)
- 멤버 목록/프로필
- 로드아웃 카탈로그
- 환영/공지 메시지
"""

import discord
from discord import app_commands
from discord.ext import commands
import os
import sqlite3
import sys
from dotenv import load_dotenv

# 환경변수 로드 (스크립트 파일 위치 기준으로 .env 파일 찾기)
script_dir = os.path.dirname(os.path.abspath(__file__))
load_dotenv(os.path.join(script_dir, '.env'))

from common import config, database
from common.cache import ClanCache
from common.logger import setup_logger

logger = setup_logger()

# 봇 설정
intents = discord.Intents.default()
intents.members = True
intents.guilds = True


class ClanBot(commands.Bot):
    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.cache = ClanCache()

    async def setup_hook(self) -> None:
        """
        discord.py가 내부 이벤트 루프를 준비한 뒤 호출됨.
        persistent view 등록과 슬래시 명령어 동기화는 여기서 합니다.
        """
        from domain.verification import register_persistent_view

        register_persistent_view(self, self.cache)

        if config.GUILD_ID:
            guild = discord.Object(id=config.GUILD_ID)
            self.tree.copy_global_to(guild=guild)
            try:
                synced = await self.tree.sync(guild=guild)
                logger.info(f'슬래시 명령어 {len(synced)}개 동기화 완료')
            except discord.HTTPException as e:
                logger.error(f'슬래시 명령어 동기화 실패: {e}')
        else:
            logger.warning('GUILD_ID가 설정되지 않아 슬래시 명령어를 동기화하지 않습니다.')

    async def close(self) -> None:
        self.cache.stop()
        await super().close()


bot = ClanBot(command_prefix='/', intents=intents)


@bot.event
async def on_ready():
    logger.info(f'{bot.user}로 로그인했습니다!')
    logger.info(f'서버 수: {len(bot.guilds)}')

    # 캐시 갱신 스케줄러는 채널 설정 결과와 무관하게 먼저 시작
    bot.cache.start()
    await bot.change_presence(activity=discord.Game(name="클랜 관리"))

    from domain.verification import setup_verification_channel

    await setup_verification_channel(bot, bot.cache)


@bot.event
async def on_member_join(member: discord.Member):
    from domain.notification import handle_member_join

    await handle_member_join(member)


@bot.event
async def on_interaction(interaction: discord.Interaction):
    """로드아웃 페이지 버튼 처리 (봇 재시작 후에도 동작하도록 custom_id로 해석)"""
    from domain.loadout import handle_navigation

    await handle_navigation(interaction, bot.cache)


@bot.tree.error
async def on_app_command_error(interaction: discord.Interaction, error: app_commands.AppCommandError):
    logger.error(f'명령어 오류: {interaction.user} - {interaction.command.name if interaction.command else "?"} - {error}')
    if isinstance(error, app_commands.MissingPermissions):
        msg = "❌ 이 명령어를 사용할 권한이 없습니다."
    else:
        msg = "❌ 오류가 발생했습니다."

    if interaction.response.is_done():
        await interaction.followup.send(msg, ephemeral=True)
    else:
        await interaction.response.send_message(msg, ephemeral=True)


# 모듈 로드
def load_modules():
    """모든 모듈 로드"""
    from domain import loadout, member, notification, verification

    member.setup(bot, bot.cache)
    verification.setup(bot, bot.cache)
    loadout.setup(bot, bot.cache)
    notification.setup(bot, bot.cache)


# 봇 실행
if __name__ == '__main__':
    try:
        database.init_database()
        logger.info('SQLite 데이터베이스 초기화 완료')
    except sqlite3.Error as e:
        logger.error(f'데이터베이스 연결 실패: {e}')
        sys.exit(1)

    missing = config.missing_settings()
    if missing:
        logger.warning(f'설정되지 않은 항목: {", ".join(missing)}')

    bot.cache.refresh_all()
    load_modules()

    if not config.DISCORD_BOT_TOKEN:
        logger.error('DISCORD_BOT_TOKEN 환경변수가 설정되지 않았습니다. .env 파일에 DISCORD_BOT_TOKEN=your_token_here 를 추가해주세요.')
        sys.exit(1)

    bot.run(config.DISCORD_BOT_TOKEN)
