"""
SQLite 데이터베이스 관리 모듈
클랜 멤버와 로드아웃 카탈로그를 저장
"""
import sqlite3
from typing import Dict, List, Optional

from common import config
from common.utils import get_kst_now

DB_FILE = config.DATABASE_FILE


def get_connection():
    """데이터베이스 연결"""
    conn = sqlite3.connect(DB_FILE, check_same_thread=False)
    conn.row_factory = sqlite3.Row
    return conn


def init_database():
    """데이터베이스 초기화 (연결 실패 시 sqlite3.Error 발생)"""
    conn = get_connection()
    try:
        cursor = conn.cursor()

        # 인증된 멤버 테이블 (discord_id 기준 1행)
        cursor.execute('''
            CREATE TABLE IF NOT EXISTS members (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                discord_id TEXT NOT NULL UNIQUE,
                game_nick TEXT NOT NULL,
                join_date TEXT
            )
        ''')

        # 로드아웃 테이블 (추가 전용)
        cursor.execute('''
            CREATE TABLE IF NOT EXISTS loadouts (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                weapon_name TEXT NOT NULL,
                weapon_code TEXT NOT NULL,
                weapon_image TEXT,
                added_by TEXT NOT NULL,
                added_date TEXT
            )
        ''')

        conn.commit()
    finally:
        conn.close()

# ==================== 멤버 관리 ====================

def get_member(discord_id: str) -> Optional[Dict]:
    """멤버 정보 가져오기"""
    conn = get_connection()
    try:
        cursor = conn.cursor()
        cursor.execute('SELECT * FROM members WHERE discord_id = ?', (discord_id,))
        row = cursor.fetchone()
    finally:
        conn.close()

    if row:
        return dict(row)
    return None


def upsert_member(discord_id: str, game_nick: str):
    """멤버 생성 또는 닉네임 업데이트 (가입일은 최초 인증 시각 유지)"""
    conn = get_connection()
    try:
        cursor = conn.cursor()
        now = get_kst_now().isoformat()
        cursor.execute('''
            INSERT INTO members (discord_id, game_nick, join_date)
            VALUES (?, ?, ?)
            ON CONFLICT(discord_id) DO UPDATE SET game_nick = excluded.game_nick
        ''', (discord_id, game_nick, now))
        conn.commit()
    finally:
        conn.close()


def get_all_members() -> List[Dict]:
    """전체 멤버 목록 (가입 순)"""
    conn = get_connection()
    try:
        cursor = conn.cursor()
        cursor.execute('SELECT discord_id, game_nick, join_date FROM members ORDER BY join_date, id')
        rows = cursor.fetchall()
    finally:
        conn.close()

    return [dict(row) for row in rows]

# ==================== 로드아웃 관리 ====================

def add_loadout(weapon_name: str, weapon_code: str, weapon_image: Optional[str], added_by: str) -> int:
    """로드아웃 추가 (새 id 반환)"""
    conn = get_connection()
    try:
        cursor = conn.cursor()
        now = get_kst_now().isoformat()
        cursor.execute('''
            INSERT INTO loadouts (weapon_name, weapon_code, weapon_image, added_by, added_date)
            VALUES (?, ?, ?, ?, ?)
        ''', (weapon_name, weapon_code, weapon_image, added_by, now))
        conn.commit()
        return cursor.lastrowid
    finally:
        conn.close()


def get_all_loadouts() -> List[Dict]:
    """전체 로드아웃 목록 (등록 순)"""
    conn = get_connection()
    try:
        cursor = conn.cursor()
        cursor.execute('SELECT * FROM loadouts ORDER BY id')
        rows = cursor.fetchall()
    finally:
        conn.close()

    return [dict(row) for row in rows]
