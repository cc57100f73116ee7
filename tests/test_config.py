"""Tests for configuration loading and saving."""
from __future__ import annotations

import json
from unittest.mock import patch

import pytest

from quiz_extractor.config import Settings, load_settings, save_settings, validate_settings
from quiz_extractor.markers import DEFAULT_MARKERS


class TestSettings:
    def test_defaults(self):
        s = Settings()
        assert s.db_path == ":memory:"
        assert s.max_upload_bytes == 50 * 1024 * 1024
        assert s.words_per_page == 250
        assert s.strict_mode is False

    def test_to_dict(self):
        d = Settings().to_dict()
        assert d["db_path"] == ":memory:"
        assert isinstance(d["markers"], dict)
        assert len(d) == 7  # all fields present

    def test_to_dict_roundtrip(self):
        s = Settings(strict_mode=True, words_per_page=300)
        s2 = Settings(**s.to_dict())
        assert s2.strict_mode is True
        assert s2.words_per_page == 300

    def test_in_memory_db_path_not_resolved(self):
        assert Settings().db_full_path == ":memory:"

    def test_file_db_path_resolved(self):
        s = Settings(db_path="documents.db")
        assert s.db_full_path.endswith("documents.db")
        assert s.db_full_path != "documents.db"

    def test_marker_table_default(self):
        assert Settings().marker_table() is DEFAULT_MARKERS

    def test_marker_table_overrides(self):
        s = Settings(markers={"select_one": "Chọn một"})
        assert s.marker_table().select_one == "Chọn một"

    def test_marker_table_bad_override(self):
        with pytest.raises(ValueError):
            Settings(markers={"nope": "x"}).marker_table()


class TestLoadSaveSettings:
    def test_load_from_file(self, tmp_path):
        config = {"strict_mode": True, "port": 9000}
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps(config))

        with patch("quiz_extractor.config.CONFIG_PATH", config_path):
            s = load_settings()
        assert s.strict_mode is True
        assert s.port == 9000
        # Defaults for unspecified fields
        assert s.words_per_page == 250

    def test_load_missing_file(self, tmp_path):
        config_path = tmp_path / "nonexistent.json"
        with patch("quiz_extractor.config.CONFIG_PATH", config_path):
            s = load_settings()
        assert s.db_path == ":memory:"  # all defaults

    def test_save_creates_file(self, tmp_path):
        config_path = tmp_path / "config.json"
        with patch("quiz_extractor.config.CONFIG_PATH", config_path):
            save_settings(Settings(markers={"because": "Giải thích:"}))

        assert config_path.exists()
        data = json.loads(config_path.read_text(encoding="utf-8"))
        assert data["markers"] == {"because": "Giải thích:"}

    def test_unknown_keys_ignored(self, tmp_path):
        config = {"port": 8000, "unknown_key": "value"}
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps(config))

        with patch("quiz_extractor.config.CONFIG_PATH", config_path):
            s = load_settings()
        assert s.port == 8000
        assert not hasattr(s, "unknown_key")

    def test_unknown_marker_fails_at_load(self, tmp_path):
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({"markers": {"bogus": "x"}}))

        with patch("quiz_extractor.config.CONFIG_PATH", config_path):
            with pytest.raises(ValueError, match="bogus"):
                load_settings()

    def test_empty_marker_fails_at_load(self, tmp_path):
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({"markers": {"select_one": " "}}))

        with patch("quiz_extractor.config.CONFIG_PATH", config_path):
            with pytest.raises(ValueError, match="select_one"):
                load_settings()

    def test_marker_override_loaded(self, tmp_path):
        config_path = tmp_path / "config.json"
        config_path.write_text(
            json.dumps({"markers": {"select_one": "Chọn một"}}, ensure_ascii=False),
            encoding="utf-8",
        )

        with patch("quiz_extractor.config.CONFIG_PATH", config_path):
            s = load_settings()
        assert s.marker_table().select_one == "Chọn một"


class TestValidateSettings:
    def test_defaults_valid(self):
        s = Settings()
        assert validate_settings(s) is s

    def test_bad_words_per_page(self):
        with pytest.raises(ValueError, match="words_per_page"):
            validate_settings(Settings(words_per_page=0))

    def test_bad_upload_limit(self):
        with pytest.raises(ValueError, match="max_upload_bytes"):
            validate_settings(Settings(max_upload_bytes=0))
