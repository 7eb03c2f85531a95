import pytest

from common import config, database
from common.cache import ClanCache
from tests.helpers import UNVERIFIED_ROLE_ID, VERIFIED_ROLE_ID


@pytest.fixture
def role_ids(monkeypatch):
    monkeypatch.setattr(config, 'VERIFIED_ROLE_ID', VERIFIED_ROLE_ID)
    monkeypatch.setattr(config, 'UNVERIFIED_ROLE_ID', UNVERIFIED_ROLE_ID)


@pytest.fixture
def temp_db(tmp_path, monkeypatch):
    db_file = str(tmp_path / 'test_bot.db')
    monkeypatch.setattr(database, 'DB_FILE', db_file)
    database.init_database()
    return db_file


@pytest.fixture
def cache(temp_db):
    clan_cache = ClanCache()
    clan_cache.refresh_all()
    return clan_cache
