"""Tests for persistent settings (settings.py)."""

import json

from renpy_transcoder.settings import _SETTINGS_FILE, Settings


def test_settings_round_trip(tmp_path, monkeypatch):
    """Save then load: all fields should be restored exactly."""
    monkeypatch.setattr("renpy_transcoder.settings._config_path", lambda: tmp_path)

    s = Settings(
        check_toggles={"Labels": True, "Menus": False},
        output_format="json",
        last_script_path="/my/game/script.rpy",
        fail_on_warnings=True,
    )
    s.save()

    loaded = Settings.load()
    assert loaded.check_toggles == {"Labels": True, "Menus": False}
    assert loaded.output_format == "json"
    assert loaded.last_script_path == "/my/game/script.rpy"
    assert loaded.fail_on_warnings is True


def test_settings_load_missing_file(tmp_path, monkeypatch):
    """Loading from a nonexistent path returns defaults."""
    monkeypatch.setattr("renpy_transcoder.settings._config_path", lambda: tmp_path / "nope")

    s = Settings.load()
    assert s.check_toggles == {}
    assert s.output_format == "text"
    assert s.last_script_path == ""
    assert s.fail_on_warnings is False


def test_settings_load_corrupt_file(tmp_path, monkeypatch):
    """Corrupt JSON returns defaults without crashing."""
    monkeypatch.setattr("renpy_transcoder.settings._config_path", lambda: tmp_path)

    (tmp_path / _SETTINGS_FILE).write_text("NOT VALID JSON {{{{", encoding="utf-8")

    s = Settings.load()
    assert s == Settings()


def test_settings_load_non_dict(tmp_path, monkeypatch):
    monkeypatch.setattr("renpy_transcoder.settings._config_path", lambda: tmp_path)

    (tmp_path / _SETTINGS_FILE).write_text("[1, 2, 3]", encoding="utf-8")

    assert Settings.load() == Settings()


def test_settings_ignores_unknown_and_wrong_types(tmp_path, monkeypatch):
    """Unknown keys are dropped and wrong-typed values fall back to defaults."""
    monkeypatch.setattr("renpy_transcoder.settings._config_path", lambda: tmp_path)

    (tmp_path / _SETTINGS_FILE).write_text(
        json.dumps(
            {
                "check_toggles": {"Labels": False, "Menus": "no"},
                "output_format": "xml",
                "last_script_path": 42,
                "fail_on_warnings": 1,
                "future_option": True,
            }
        ),
        encoding="utf-8",
    )

    s = Settings.load()
    assert s.check_toggles == {"Labels": False}
    assert s.output_format == "text"
    assert s.last_script_path == ""
    assert s.fail_on_warnings is False


def test_enabled_checks():
    s = Settings(check_toggles={"Menus": False, "Labels": True})
    assert s.enabled_checks(["Labels", "Menus", "Variables"]) == ["Labels", "Variables"]


def test_save_failure_is_logged(tmp_path, monkeypatch, caplog):
    """A read-only target logs a warning instead of raising."""
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    monkeypatch.setattr("renpy_transcoder.settings._config_path", lambda: blocker / "sub")

    Settings().save()
    assert any("Failed to save settings" in r.getMessage() for r in caplog.records)
