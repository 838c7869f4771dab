import importlib

import pytest

import config.settings as settings_module


@pytest.fixture
def reload_settings(monkeypatch):
    def _reload():
        return importlib.reload(settings_module).settings

    yield _reload
    monkeypatch.undo()
    importlib.reload(settings_module)


def test_gemini_key_preferred_over_legacy_name(monkeypatch, reload_settings) -> None:
    monkeypatch.setenv("GEMINI_API_KEY", "new-key")
    monkeypatch.setenv("API_KEY", "old-key")
    assert reload_settings().GEMINI_API_KEY == "new-key"


def test_legacy_api_key_is_accepted(monkeypatch, reload_settings) -> None:
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.setenv("API_KEY", "old-key")
    settings = reload_settings()
    assert settings.GEMINI_API_KEY == "old-key"
    assert settings.has_remote_credential()


def test_missing_key_is_a_warning_not_an_error(monkeypatch, reload_settings) -> None:
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("API_KEY", raising=False)
    settings = reload_settings()
    assert settings.GEMINI_API_KEY == ""
    assert not settings.has_remote_credential()
    assert any("GEMINI_API_KEY" in w for w in settings.validate_config())


def test_numeric_overrides(monkeypatch, reload_settings) -> None:
    monkeypatch.setenv("TICK_INTERVAL", "0.5")
    monkeypatch.setenv("REMOTE_TIMEOUT", "4")
    monkeypatch.setenv("SIMULATION_SEED", "123")
    monkeypatch.setenv("AUTOSTART_SIMULATION", "false")
    settings = reload_settings()
    assert settings.TICK_INTERVAL == 0.5
    assert settings.REMOTE_TIMEOUT == 4.0
    assert settings.SIMULATION_SEED == 123
    assert settings.AUTOSTART_SIMULATION is False


def test_defaults(monkeypatch, reload_settings) -> None:
    for name in ("TICK_INTERVAL", "REMOTE_TIMEOUT", "SIMULATION_SEED", "GEMINI_MODEL"):
        monkeypatch.delenv(name, raising=False)
    settings = reload_settings()
    assert settings.TICK_INTERVAL == 2.0
    assert settings.HISTORY_SIZE == 50
    assert settings.SIMULATION_SEED is None
    assert settings.GEMINI_MODEL == "gemini-2.5-flash"


def test_non_positive_interval_is_reported(monkeypatch, reload_settings) -> None:
    monkeypatch.setenv("TICK_INTERVAL", "0")
    settings = reload_settings()
    assert any("TICK_INTERVAL" in w for w in settings.validate_config())
