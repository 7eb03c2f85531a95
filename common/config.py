"""
봇 설정 파일
환경변수는 main.py에서 .env 로드 후 읽힙니다.
"""
import os


def _env_int(name: str) -> int:
    """정수형 환경변수 (없거나 잘못된 값이면 0)"""
    value = os.getenv(name, '').strip()
    try:
        return int(value)
    except ValueError:
        return 0


# 디스코드
DISCORD_BOT_TOKEN = os.getenv('DISCORD_BOT_TOKEN')
GUILD_ID = _env_int('GUILD_ID')

# 채널
VERIFY_CHANNEL_ID = _env_int('VERIFY_CHANNEL_ID')
WELCOME_CHANNEL_ID = _env_int('WELCOME_CHANNEL_ID')
ANNOUNCEMENTS_CHANNEL_ID = _env_int('ANNOUNCEMENTS_CHANNEL_ID')

# 역할
UNVERIFIED_ROLE_ID = _env_int('UNVERIFIED_ROLE_ID')
VERIFIED_ROLE_ID = _env_int('VERIFIED_ROLE_ID')

# 데이터베이스 파일 경로
DATABASE_FILE = os.getenv('DATABASE_FILE', 'clan_bot.db')

# 닉네임 규칙 (클랜 태그)
NICKNAME_PREFIX = 'WFx'
NICKNAME_MIN_LENGTH = 5
NICKNAME_MAX_LENGTH = 20

# 인증 폼 유효 시간 (초)
VERIFICATION_FORM_TIMEOUT = 600

# 로드아웃 목록 페이지당 개수
LOADOUTS_PER_PAGE = 5

# 캐시 갱신 주기 (시간)
CACHE_REFRESH_HOURS = 1

# 멤버 목록 임베드 필드 제한
MEMBER_LIST_LIMIT = 25


def missing_settings() -> list:
    """설정되지 않은 ID 항목 이름 목록"""
    settings = {
        'GUILD_ID': GUILD_ID,
        'VERIFY_CHANNEL_ID': VERIFY_CHANNEL_ID,
        'WELCOME_CHANNEL_ID': WELCOME_CHANNEL_ID,
        'ANNOUNCEMENTS_CHANNEL_ID': ANNOUNCEMENTS_CHANNEL_ID,
        'UNVERIFIED_ROLE_ID': UNVERIFIED_ROLE_ID,
        'VERIFIED_ROLE_ID': VERIFIED_ROLE_ID,
    }
    return [name for name, value in settings.items() if not value]
