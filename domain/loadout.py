"""
로드아웃 카탈로그 (추가 + 페이지 목록)
"""
import math
import re
import sqlite3
from dataclasses import dataclass
from typing import Optional, Sequence

import discord
from discord import app_commands

from common import config, database
from common.logger import get_logger
from common.utils import is_http_url

logger = get_logger()

NAVIGATION_PATTERN = re.compile(r'^loadout_(prev|next)_(\d{1,9})$')


@dataclass(frozen=True)
class LoadoutNavigation:
    """페이지 이동 버튼 payload (custom_id를 한 번만 해석)"""
    direction: str
    page: int

    @property
    def target_page(self) -> int:
        if self.direction == 'prev':
            return self.page - 1
        return self.page + 1

    @property
    def custom_id(self) -> str:
        return f'loadout_{self.direction}_{self.page}'


def parse_navigation(custom_id: str) -> Optional[LoadoutNavigation]:
    """버튼 custom_id를 LoadoutNavigation으로 변환 (로드아웃 버튼이 아니면 None)"""
    match = NAVIGATION_PATTERN.match(custom_id or '')
    if not match:
        return None
    return LoadoutNavigation(direction=match.group(1), page=int(match.group(2)))


@dataclass(frozen=True)
class LoadoutPage:
    page: int
    total: int
    entries: tuple
    image: Optional[str]

    @property
    def has_previous(self) -> bool:
        return self.page > 0

    @property
    def has_next(self) -> bool:
        return self.page < self.total - 1


def total_pages(count: int, per_page: int = config.LOADOUTS_PER_PAGE) -> int:
    return math.ceil(count / per_page)


def clamp_page(page: int, total: int) -> int:
    """페이지 번호를 0 ~ total-1 범위로 제한"""
    if total <= 0:
        return 0
    return max(0, min(page, total - 1))


def paginate(loadouts: Sequence[dict], page: int, per_page: int = config.LOADOUTS_PER_PAGE) -> Optional[LoadoutPage]:
    """로드아웃 목록에서 한 페이지 계산 (비어있으면 None)"""
    if not loadouts:
        return None

    total = total_pages(len(loadouts), per_page)
    page = clamp_page(page, total)
    entries = tuple(loadouts[page * per_page:(page + 1) * per_page])

    # 이미지 슬롯은 하나뿐이라 마지막 이미지가 표시됨
    image = None
    for loadout in entries:
        if loadout.get('weapon_image'):
            image = loadout['weapon_image']

    return LoadoutPage(page=page, total=total, entries=entries, image=image)


def build_loadout_embed(loadout_page: LoadoutPage) -> discord.Embed:
    embed = discord.Embed(
        title="📜 로드아웃 목록",
        description=f"{loadout_page.page + 1} / {loadout_page.total} 페이지",
        color=discord.Color.blue()
    )
    for loadout in loadout_page.entries:
        embed.add_field(
            name=loadout['weapon_name'],
            value=f"코드: `{loadout['weapon_code']}`\n등록자: {loadout['added_by']}",
            inline=False
        )
    if loadout_page.image:
        embed.set_image(url=loadout_page.image)
    return embed


class LoadoutPageView(discord.ui.View):
    """
    이전/다음 버튼만 담는 View

    버튼에는 콜백이 없고 클릭은 handle_navigation (main.py의 on_interaction)에서
    custom_id로 처리합니다. timeout은 View 저장소에 남아있는 기간일 뿐이며
    만료 후에도 버튼은 계속 동작합니다.
    """

    def __init__(self, loadout_page: LoadoutPage):
        super().__init__(timeout=180)
        if loadout_page.has_previous:
            self.add_item(discord.ui.Button(
                label="⬅️ 이전",
                style=discord.ButtonStyle.primary,
                custom_id=LoadoutNavigation('prev', loadout_page.page).custom_id,
            ))
        if loadout_page.has_next:
            self.add_item(discord.ui.Button(
                label="다음 ➡️",
                style=discord.ButtonStyle.primary,
                custom_id=LoadoutNavigation('next', loadout_page.page).custom_id,
            ))


async def show_loadouts(interaction: discord.Interaction, cache, page: int = 0, edit: bool = False):
    """로드아웃 목록 표시 (edit=True면 기존 메시지를 수정)"""
    loadout_page = paginate(cache.loadouts.rows, page)
    if loadout_page is None:
        await interaction.response.send_message("❌ 등록된 로드아웃이 없습니다.", ephemeral=True)
        return

    embed = build_loadout_embed(loadout_page)
    view = LoadoutPageView(loadout_page)
    if edit:
        await interaction.response.edit_message(embed=embed, view=view)
    else:
        await interaction.response.send_message(embed=embed, view=view)


async def handle_navigation(interaction: discord.Interaction, cache) -> bool:
    """컴포넌트 인터랙션이 로드아웃 페이지 버튼이면 해당 페이지로 메시지 수정"""
    if interaction.type != discord.InteractionType.component:
        return False

    navigation = parse_navigation((interaction.data or {}).get('custom_id', ''))
    if navigation is None:
        return False

    await show_loadouts(interaction, cache, navigation.target_page, edit=True)
    return True


async def add_loadout(interaction: discord.Interaction, cache, name: str, code: str, image: Optional[str] = None):
    """로드아웃 추가 후 캐시를 갱신하고 응답"""
    image = (image or '').strip() or None
    if image and not is_http_url(image):
        await interaction.response.send_message(
            "❌ 이미지는 http:// 또는 https:// 로 시작하는 링크여야 합니다.", ephemeral=True
        )
        return

    added_by = str(interaction.user)
    try:
        loadout_id = database.add_loadout(name, code, image, added_by)
    except sqlite3.Error as e:
        logger.error(f'로드아웃 추가 실패: {added_by} - {name}: {e}')
        await interaction.response.send_message("❌ 로드아웃 추가 중 오류가 발생했습니다.", ephemeral=True)
        return

    cache.refresh_loadouts()
    logger.info(f'로드아웃 추가: {added_by} - #{loadout_id} {name}')

    embed = discord.Embed(
        title="로드아웃 추가 완료",
        description=f"**{name}** 로드아웃이 추가되었습니다!",
        color=discord.Color.green()
    )
    embed.add_field(name="코드", value=f"```{code}```", inline=False)
    if image:
        embed.set_image(url=image)
    await interaction.response.send_message(embed=embed)


def setup(bot, cache):
    """봇에 명령어 등록"""

    @bot.tree.command(name='add-loadout', description='새 로드아웃을 추가합니다')
    @app_commands.describe(name='무기 이름', code='무기 코드', image='무기 이미지 URL (선택)')
    async def add_loadout_command(interaction: discord.Interaction, name: str, code: str, image: Optional[str] = None):
        await add_loadout(interaction, cache, name, code, image)

    @bot.tree.command(name='loadouts', description='등록된 로드아웃 목록을 봅니다')
    async def loadouts_command(interaction: discord.Interaction):
        await show_loadouts(interaction, cache, 0)
