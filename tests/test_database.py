"""Tests for the sqlite store."""

import sqlite3

import pytest

from common import database


class TestMembers:

    def test_get_member_missing(self, temp_db):
        assert database.get_member('404') is None

    def test_upsert_creates_row(self, temp_db):
        database.upsert_member('1', 'WFxAlpha')

        row = database.get_member('1')
        assert row['game_nick'] == 'WFxAlpha'
        assert row['join_date']

    def test_upsert_updates_in_place(self, temp_db):
        database.upsert_member('1', 'WFxAlpha')
        first = database.get_member('1')

        database.upsert_member('1', 'WFxBravo')

        rows = database.get_all_members()
        assert len(rows) == 1
        assert rows[0]['game_nick'] == 'WFxBravo'
        assert database.get_member('1')['join_date'] == first['join_date']

    def test_same_nick_for_different_members_allowed(self, temp_db):
        database.upsert_member('1', 'WFxTwin')
        database.upsert_member('2', 'WFxTwin')

        assert [row['game_nick'] for row in database.get_all_members()] == ['WFxTwin', 'WFxTwin']


class TestLoadouts:

    def test_add_loadout_assigns_increasing_ids(self, temp_db):
        first = database.add_loadout('M4', 'AAA-111', None, 'alice#0001')
        second = database.add_loadout('AK', 'BBB-222', 'https://img.example.com/ak.png', 'bob#0002')

        assert second > first
        rows = database.get_all_loadouts()
        assert [row['weapon_name'] for row in rows] == ['M4', 'AK']
        assert rows[0]['weapon_image'] is None
        assert rows[1]['added_by'] == 'bob#0002'
        assert rows[1]['added_date']


def test_init_database_unreachable_path(tmp_path, monkeypatch):
    monkeypatch.setattr(database, 'DB_FILE', str(tmp_path / 'missing_dir' / 'bot.db'))

    with pytest.raises(sqlite3.Error):
        database.init_database()
