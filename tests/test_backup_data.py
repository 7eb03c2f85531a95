"""Tests for the database backup script."""

import os

from common import database
from backup_data import backup_database, restore_database


def test_backup_and_restore(temp_db, tmp_path):
    database.upsert_member('1', 'WFxAlpha')

    backup_path = backup_database(temp_db, str(tmp_path / 'backups'))
    assert backup_path and os.path.exists(backup_path)

    database.upsert_member('1', 'WFxChanged')
    assert restore_database(backup_path, temp_db) is True

    assert database.get_member('1')['game_nick'] == 'WFxAlpha'
    assert any(name.startswith('test_bot.db.old_') for name in os.listdir(tmp_path))


def test_backup_without_database(tmp_path):
    assert backup_database(str(tmp_path / 'nope.db'), str(tmp_path / 'backups')) is None


def test_restore_rejects_unknown_file(tmp_path):
    bad = tmp_path / 'dump.json'
    bad.write_text('{}')

    assert restore_database(str(bad), str(tmp_path / 'bot.db')) is False
