"""
멤버/로드아웃 캐시
DB 전체를 읽어 스냅샷을 통째로 교체합니다. (부분 갱신 없음)
"""
import sqlite3
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from discord.ext import tasks

from common import config, database
from common.logger import get_logger
from common.utils import get_kst_now

logger = get_logger()


@dataclass(frozen=True)
class Snapshot:
    """DB 내용을 복사한 읽기 전용 스냅샷"""
    rows: tuple = ()
    refreshed_at: Optional[datetime] = None

    def __len__(self):
        return len(self.rows)

    def __iter__(self):
        return iter(self.rows)


class ClanCache:
    """봇이 소유하고 각 기능 모듈에 주입되는 캐시 객체"""

    def __init__(self):
        self.members = Snapshot()
        self.loadouts = Snapshot()

    def refresh_members(self) -> bool:
        """멤버 캐시 갱신 (실패 시 기존 스냅샷 유지)"""
        try:
            rows = database.get_all_members()
        except sqlite3.Error as e:
            logger.error(f'멤버 캐시 갱신 실패: {e}')
            return False
        self.members = Snapshot(tuple(rows), get_kst_now())
        logger.info(f'멤버 캐시 갱신 완료 ({len(rows)}명)')
        return True

    def refresh_loadouts(self) -> bool:
        """로드아웃 캐시 갱신 (실패 시 기존 스냅샷 유지)"""
        try:
            rows = database.get_all_loadouts()
        except sqlite3.Error as e:
            logger.error(f'로드아웃 캐시 갱신 실패: {e}')
            return False
        self.loadouts = Snapshot(tuple(rows), get_kst_now())
        logger.info(f'로드아웃 캐시 갱신 완료 ({len(rows)}개)')
        return True

    def refresh_all(self) -> bool:
        members_ok = self.refresh_members()
        loadouts_ok = self.refresh_loadouts()
        return members_ok and loadouts_ok

    @tasks.loop(hours=config.CACHE_REFRESH_HOURS)
    async def member_refresh_loop(self):
        """주기적 멤버 캐시 갱신"""
        self.refresh_members()

    @tasks.loop(hours=config.CACHE_REFRESH_HOURS)
    async def loadout_refresh_loop(self):
        """주기적 로드아웃 캐시 갱신"""
        self.refresh_loadouts()

    def start(self):
        """캐시 갱신 스케줄러 시작"""
        if not self.member_refresh_loop.is_running():
            self.member_refresh_loop.start()
        if not self.loadout_refresh_loop.is_running():
            self.loadout_refresh_loop.start()
        logger.info(f'캐시 갱신 스케줄러 시작됨 ({config.CACHE_REFRESH_HOURS}시간 주기)')

    def stop(self):
        """캐시 갱신 스케줄러 중지"""
        self.member_refresh_loop.cancel()
        self.loadout_refresh_loop.cancel()
