import pytest


@pytest.fixture(autouse=True)
def _isolated_settings(tmp_path, monkeypatch):
    """Keep every test away from the real user config directory."""
    monkeypatch.setattr("renpy_transcoder.settings._config_path", lambda: tmp_path / "config")
