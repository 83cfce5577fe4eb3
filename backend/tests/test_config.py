"""
Acronym API: Settings Tests
==============================
"""

import pytest
from pydantic import ValidationError

from acronym_api.config import Settings
from acronym_api.database import AcronymStore, id_filter


class TestSettings:

    def test_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.collection_name == "acronyms"
        assert settings.search_index == "default"
        assert settings.search_max_edits == 2
        assert settings.backend_port == 8000
        assert settings.cors_origins_list == ["*"]

    def test_mongo_uri_from_environment(self, monkeypatch):
        monkeypatch.setenv("MONGO_URI", "mongodb://db.internal:27017")

        assert Settings(_env_file=None).mongo_uri == "mongodb://db.internal:27017"

    def test_log_level_normalized(self):
        assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_level="LOUD")

    def test_fuzzy_edits_capped(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, search_max_edits=3)

    def test_cors_origins_split(self):
        settings = Settings(_env_file=None, cors_origins="http://a.test, http://b.test")

        assert settings.cors_origins_list == ["http://a.test", "http://b.test"]


class TestStore:

    def test_close_without_use_is_noop(self):
        store = AcronymStore(Settings(_env_file=None))

        store.close()

    def test_id_filter_plain_string(self):
        assert id_filter("not-an-object-id") == {"_id": "not-an-object-id"}
