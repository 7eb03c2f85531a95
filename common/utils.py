"""
공통 유틸리티 함수
"""
from datetime import datetime, timedelta, timezone
from typing import Optional, Union

# 한국 시간대 (KST, UTC+9)
KST = timezone(timedelta(hours=9))


def get_kst_now() -> datetime:
    """한국 시간(KST) 현재 시간 반환"""
    return datetime.now(KST)


def ensure_kst(dt: datetime) -> datetime:
    """datetime이 timezone-naive면 KST timezone을 추가, 이미 timezone-aware면 그대로 반환"""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=KST)
    return dt


def parse_stored_datetime(value: Union[str, datetime, None]) -> Optional[datetime]:
    """DB에 저장된 ISO 문자열을 KST datetime으로 변환 (실패 시 None)"""
    if value is None:
        return None
    if isinstance(value, datetime):
        return ensure_kst(value)
    try:
        return ensure_kst(datetime.fromisoformat(value))
    except ValueError:
        return None


def format_date(value: Union[str, datetime, None]) -> str:
    """가입일 등 날짜 표시용 포맷 (YYYY-MM-DD)"""
    dt = parse_stored_datetime(value)
    if dt is None:
        return '알 수 없음'
    return dt.strftime('%Y-%m-%d')


def is_http_url(value: str) -> bool:
    """http/https 링크인지 확인"""
    value = (value or '').strip().lower()
    return value.startswith('http://') or value.startswith('https://')
