import pytest

from config import get_settings_module


@pytest.mark.parametrize(
    "env,expected",
    [
        ("production", "config.production"),
        ("PROD", "config.production"),
        ("testing", "config.testing"),
        ("dev", "config.development"),
        ("staging", "config.development"),
    ],
)
def test_app_env_picks_module(monkeypatch, env, expected):
    monkeypatch.delenv("RFID_SETTINGS_MODULE", raising=False)
    monkeypatch.setenv("APP_ENV", env)

    assert get_settings_module() == expected


def test_explicit_module_wins(monkeypatch):
    monkeypatch.setenv("APP_ENV", "production")
    monkeypatch.setenv("RFID_SETTINGS_MODULE", "site_settings")

    assert get_settings_module() == "site_settings"
