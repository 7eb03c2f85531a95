"""
로깅 유틸리티

setup_logger는 main.py에서 한 번만 호출합니다.
get_logger는 핸들러를 붙이지 않으므로 setup_logger 없이 import된 모듈(backup_data, 테스트)은
루트 로거 설정을 따릅니다.
"""
import logging
import os
from datetime import datetime

# 로그 디렉토리
LOG_DIR = 'logs'

LOGGER_NAME = 'clan_bot'


def _log_file_path():
    """오늘 날짜 로그 파일 경로 (디렉토리가 없으면 생성)"""
    if not os.path.exists(LOG_DIR):
        os.makedirs(LOG_DIR)
    return os.path.join(LOG_DIR, f'bot_{datetime.now().strftime("%Y%m%d")}.log')


def setup_logger():
    """로거 설정"""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.INFO)

    # 기존 핸들러 제거
    if logger.handlers:
        logger.handlers.clear()

    # 파일 핸들러
    file_handler = logging.FileHandler(_log_file_path(), encoding='utf-8')
    file_handler.setLevel(logging.INFO)
    file_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    file_handler.setFormatter(file_formatter)

    # 콘솔 핸들러
    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO)
    console_formatter = logging.Formatter(
        '%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    console_handler.setFormatter(console_formatter)

    logger.addHandler(file_handler)
    logger.addHandler(console_handler)

    return logger


def get_logger():
    """로거 가져오기 (설정 전이면 핸들러 없이 반환, 메시지는 상위 로거로 전파)"""
    return logging.getLogger(LOGGER_NAME)
