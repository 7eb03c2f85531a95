"""
멤버 인증 (게임 닉네임 형식 검증 + 역할 전환)

미인증 -> (인증 요청) -> 입력 대기 -> (닉네임 제출) -> 인증 완료
입력 대기 상태는 저장하지 않고 Modal이 살아있는 동안만 존재합니다.
"""

import discord

from common import config, database
from common.logger import get_logger
from domain.notification import send_welcome_dm

logger = get_logger()

VERIFY_BUTTON_ID = 'verify_button'


class VerificationError(Exception):
    """인증 단계 실패 (이미 적용된 단계는 되돌린 뒤 발생)"""

    def __init__(self, step: str, original: Exception):
        super().__init__(f"{step} 단계 실패: {original}")
        self.step = step
        self.original = original


def is_valid_game_nick(nickname: str) -> bool:
    """클랜 닉네임 규칙 (WFx 접두사 + 길이 제한) 확인"""
    if not nickname:
        return False
    return (
        nickname.startswith(config.NICKNAME_PREFIX)
        and config.NICKNAME_MIN_LENGTH <= len(nickname) <= config.NICKNAME_MAX_LENGTH
    )


def is_verified(member) -> bool:
    """인증 역할 보유 여부"""
    get_role = getattr(member, 'get_role', None)
    if get_role is None:
        return False
    return get_role(config.VERIFIED_ROLE_ID) is not None


async def verify_member(member: discord.Member, nickname: str):
    """
    인증 처리: 닉네임 변경 -> 인증 역할 부여 -> 미인증 역할 제거 -> DB 저장

    중간 단계가 실패하면 이미 적용된 단계를 역순으로 되돌리고
    VerificationError를 발생시킵니다. 되돌리기 실패는 로그만 남깁니다.
    """
    verified_role = discord.Object(id=config.VERIFIED_ROLE_ID)
    unverified_role = discord.Object(id=config.UNVERIFIED_ROLE_ID)
    previous_nick = member.nick
    had_unverified = member.get_role(config.UNVERIFIED_ROLE_ID) is not None

    async def set_nick():
        await member.edit(nick=nickname, reason="클랜 인증")

    async def restore_nick():
        await member.edit(nick=previous_nick, reason="클랜 인증 실패 - 되돌리기")

    async def grant_verified():
        await member.add_roles(verified_role, reason="클랜 인증")

    async def revoke_verified():
        await member.remove_roles(verified_role, reason="클랜 인증 실패 - 되돌리기")

    async def revoke_unverified():
        await member.remove_roles(unverified_role, reason="클랜 인증")

    async def restore_unverified():
        if had_unverified:
            await member.add_roles(unverified_role, reason="클랜 인증 실패 - 되돌리기")

    async def save_member():
        database.upsert_member(str(member.id), nickname)

    steps = [
        ('닉네임 변경', set_nick, restore_nick),
        ('인증 역할 부여', grant_verified, revoke_verified),
        ('미인증 역할 제거', revoke_unverified, restore_unverified),
        ('멤버 저장', save_member, None),
    ]

    applied = []
    for step_name, action, compensate in steps:
        try:
            await action()
        except Exception as e:
            logger.error(f'인증 실패: {member} ({member.id}) - {step_name}: {e}')
            for done_name, undo in reversed(applied):
                try:
                    await undo()
                except Exception as undo_error:
                    logger.error(f'인증 되돌리기 실패: {member} ({member.id}) - {done_name}: {undo_error}')
            raise VerificationError(step_name, e) from e
        if compensate is not None:
            applied.append((step_name, compensate))

    logger.info(f'인증 완료: {member} ({member.id}) - {nickname}')


async def request_verification(interaction: discord.Interaction, cache):
    """인증 요청: 이미 인증된 멤버면 안내, 아니면 닉네임 입력 폼 표시"""
    if is_verified(interaction.user):
        await interaction.response.send_message("✅ 이미 인증된 멤버입니다!", ephemeral=True)
        return

    await interaction.response.send_modal(VerificationModal(cache))


async def submit_verification(interaction: discord.Interaction, cache, nickname: str):
    """닉네임 제출 처리"""
    # 입력값 그대로 검증 (앞뒤 공백도 형식 오류)
    nickname = nickname or ''
    if not is_valid_game_nick(nickname):
        await interaction.response.send_message(
            f"❌ 닉네임 형식이 올바르지 않습니다! `{config.NICKNAME_PREFIX}닉네임` 형식으로 입력해주세요. "
            f"(예: {config.NICKNAME_PREFIX}Player123)",
            ephemeral=True
        )
        return

    member = interaction.user
    await interaction.response.defer(ephemeral=True)

    try:
        await verify_member(member, nickname)
    except VerificationError:
        await interaction.followup.send(
            "❌ 인증 중 오류가 발생했습니다. 다시 시도하거나 운영진에게 문의해주세요.",
            ephemeral=True
        )
        return

    await interaction.followup.send(
        f"✅ 인증이 완료되었습니다! 닉네임이 **{nickname}**(으)로 설정되었습니다.",
        ephemeral=True
    )

    await send_welcome_dm(member)
    cache.refresh_members()


class VerificationModal(discord.ui.Modal, title="닉네임 인증"):
    """게임 닉네임 입력 Modal"""

    def __init__(self, cache):
        super().__init__(timeout=config.VERIFICATION_FORM_TIMEOUT)
        self.cache = cache
        self.nickname_input = discord.ui.TextInput(
            label=f"{config.NICKNAME_PREFIX}닉네임 형식으로 입력해주세요",
            placeholder=f"{config.NICKNAME_PREFIX}Player123",
            style=discord.TextStyle.short,
            min_length=config.NICKNAME_MIN_LENGTH,
            max_length=config.NICKNAME_MAX_LENGTH,
            required=True,
        )
        self.add_item(self.nickname_input)

    async def on_submit(self, interaction: discord.Interaction):
        await submit_verification(interaction, self.cache, self.nickname_input.value)

    async def on_error(self, interaction: discord.Interaction, error: Exception):
        logger.error(f'인증 폼 처리 오류: {interaction.user} - {type(error).__name__}: {error}')
        msg = "❌ 인증 중 오류가 발생했습니다. 다시 시도하거나 운영진에게 문의해주세요."
        if interaction.response.is_done():
            await interaction.followup.send(msg, ephemeral=True)
        else:
            await interaction.response.send_message(msg, ephemeral=True)

    async def on_timeout(self):
        logger.info('인증 폼 시간 초과 (멤버는 미인증 상태 유지)')


class VerifyButtonView(discord.ui.View):
    """인증 버튼 View (봇 재시작 후에도 작동)"""

    def __init__(self, cache):
        super().__init__(timeout=None)
        self.cache = cache

    @discord.ui.button(label='인증하기', style=discord.ButtonStyle.primary, custom_id=VERIFY_BUTTON_ID)
    async def verify_button(self, interaction: discord.Interaction, button: discord.ui.Button):
        await request_verification(interaction, self.cache)


def register_persistent_view(bot, cache):
    """봇 재시작 후에도 인증 버튼이 작동하도록 persistent view 등록"""
    bot.add_view(VerifyButtonView(cache))
    logger.info(f'Persistent view 등록 완료 (custom_id: {VERIFY_BUTTON_ID})')


async def setup_verification_channel(bot, cache):
    """인증 채널 정리 후 안내 메시지와 인증 버튼 게시"""
    channel = bot.get_channel(config.VERIFY_CHANNEL_ID)
    if channel is None:
        logger.warning(f'인증 채널을 찾을 수 없습니다: {config.VERIFY_CHANNEL_ID}')
        return False

    try:
        await channel.purge(limit=100)
    except discord.HTTPException as e:
        logger.warning(f'인증 채널 정리 실패: {e}')

    embed = discord.Embed(
        title="멤버 인증",
        description=(
            "서버를 이용하려면 인증이 필요합니다.\n\n"
            f"아래 버튼을 누르고 게임 닉네임을 **{config.NICKNAME_PREFIX}닉네임** 형식으로 입력해주세요."
        ),
        color=discord.Color.blue()
    )
    try:
        await channel.send(embed=embed, view=VerifyButtonView(cache))
    except discord.HTTPException as e:
        logger.error(f'인증 채널 메시지 게시 실패: {e}')
        return False
    logger.info('인증 채널 메시지 게시 완료')
    return True


def setup(bot, cache):
    """봇에 명령어 등록"""

    @bot.tree.command(name='verify', description='클랜 인증을 시작합니다')
    async def verify(interaction: discord.Interaction):
        await request_verification(interaction, cache)
