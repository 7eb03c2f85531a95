"""
데이터베이스 백업 스크립트
다른 PC로 데이터를 옮기거나 백업할 때 사용
"""
import os
import shutil
import sqlite3
from datetime import datetime
from typing import Optional

from common import config

BACKUP_DIR = 'backups'


def backup_database(db_file: str = config.DATABASE_FILE, backup_dir: str = BACKUP_DIR) -> Optional[str]:
    """SQLite 온라인 백업으로 DB 파일 복사 (봇 실행 중에도 안전)"""
    if not os.path.exists(db_file):
        print("❌ 백업할 데이터베이스 파일이 없습니다.")
        return None

    if not os.path.exists(backup_dir):
        os.makedirs(backup_dir)

    timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
    backup_path = os.path.join(backup_dir, f'clan_bot_backup_{timestamp}.db')

    source = sqlite3.connect(db_file)
    target = sqlite3.connect(backup_path)
    try:
        source.backup(target)
    finally:
        target.close()
        source.close()

    print(f"✅ 데이터베이스 백업 완료: {backup_path}")
    return backup_path


def restore_database(backup_file: str, db_file: str = config.DATABASE_FILE) -> bool:
    """백업 파일에서 데이터베이스 복원"""
    if not os.path.exists(backup_file):
        print(f"❌ 백업 파일을 찾을 수 없습니다: {backup_file}")
        return False

    if not backup_file.endswith('.db'):
        print("❌ 지원하지 않는 파일 형식입니다. (.db)")
        return False

    # 기존 파일 백업 (덮어쓰기 전)
    if os.path.exists(db_file):
        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        old_backup = f'{db_file}.old_{timestamp}'
        shutil.copy2(db_file, old_backup)
        print(f"⚠️ 기존 파일을 백업했습니다: {old_backup}")

    shutil.copy2(backup_file, db_file)
    print(f"✅ 데이터 복원 완료: {db_file}")
    return True


if __name__ == '__main__':
    import sys

    if len(sys.argv) > 1:
        # 복원 모드
        restore_database(sys.argv[1])
    else:
        # 백업 모드
        backup_database()
        print("\n💡 사용법:")
        print("  백업: python backup_data.py")
        print("  복원: python backup_data.py <백업파일경로>")
