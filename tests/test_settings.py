"""Tests for settings persistence."""

import json
import logging

from overtimer.settings import Settings, load_settings, save_settings


class TestSettings:

    def test_defaults(self):
        s = Settings()
        assert s.target_total_seconds == 1500
        assert s.warning_seconds == 300
        assert s.session_name == ""
        assert s.server_url is None
        assert s.show_history is False
        assert s.skin == "classic"
        assert s.window_x is None

    def test_missing_file_gives_defaults(self, settings_path):
        assert not settings_path.exists()
        assert load_settings() == Settings()

    def test_round_trip(self, settings_path):
        original = Settings(
            target_minutes=45, target_seconds=30,
            session_name="Thesis", skin="ocean",
            show_history=True, server_url="http://127.0.0.1:8000",
            window_x=10, window_y=20,
        )
        save_settings(original)
        assert json.loads(settings_path.read_text())["skin"] == "ocean"
        assert load_settings() == original

    def test_unknown_keys_ignored(self, settings_path):
        settings_path.write_text(json.dumps({"skin": "paper", "xp_per_level": 9000}))
        loaded = load_settings()
        assert loaded.skin == "paper"
        assert not hasattr(loaded, "xp_per_level")

    def test_corrupt_file_falls_back(self, settings_path, caplog):
        settings_path.write_text("{not json")
        with caplog.at_level(logging.WARNING, logger="overtimer.settings"):
            assert load_settings() == Settings()
        assert "Ignoring unreadable settings file" in caplog.text

    def test_non_object_json_falls_back(self, settings_path):
        settings_path.write_text("[1, 2, 3]")
        assert load_settings() == Settings()

    def test_wrong_type_values_fall_back_to_defaults(self, settings_path, caplog):
        settings_path.write_text(json.dumps({
            "target_minutes": "abc",
            "warning_seconds": "300",
            "show_history": 1,
            "window_x": 1.5,
            "skin": "paper",
            "target_seconds": 30,
        }))
        with caplog.at_level(logging.WARNING, logger="overtimer.settings"):
            loaded = load_settings()
        assert loaded.target_minutes == Settings().target_minutes
        assert loaded.warning_seconds == Settings().warning_seconds
        assert loaded.show_history is False
        assert loaded.window_x is None
        assert loaded.skin == "paper"
        assert loaded.target_total_seconds == 25 * 60 + 30
        assert "target_minutes='abc'" in caplog.text

    def test_optional_fields_accept_null_and_value(self, settings_path):
        settings_path.write_text(json.dumps({
            "server_url": None, "window_x": 40, "window_y": None, "show_history": True,
        }))
        loaded = load_settings()
        assert loaded.server_url is None
        assert loaded.window_x == 40
        assert loaded.window_y is None
        assert loaded.show_history is True

    def test_bool_is_not_taken_as_an_int(self, settings_path):
        settings_path.write_text(json.dumps({"target_minutes": True}))
        assert load_settings().target_minutes == Settings().target_minutes

    def test_target_is_clamped(self):
        assert Settings(target_minutes=999, target_seconds=99).target_total_seconds == 180 * 60 + 59
        assert Settings(target_minutes=-3, target_seconds=10).target_total_seconds == 10
