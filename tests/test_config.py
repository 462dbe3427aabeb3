import pytest

from airsense.core import config
from airsense.core.config import _env_bool, get_settings
from airsense.repositories.pollutant_source_repo import AirNowSource, OpenAQSource, get_pollutant_source


@pytest.mark.parametrize("raw, expected", [("true", True), ("1", True), ("Yes", True), ("false", False), ("0", False), ("", False)])
def test_env_bool(monkeypatch, raw, expected):
    monkeypatch.setenv("FLAG_UNDER_TEST", raw)
    assert _env_bool("FLAG_UNDER_TEST") is expected


def test_missing_jwt_secret_fails_fast(monkeypatch):
    monkeypatch.setattr(config, "_settings", None)
    monkeypatch.delenv("JWT_SECRET_KEY", raising=False)
    with pytest.raises(RuntimeError):
        get_settings()


def test_source_selection_follows_settings(monkeypatch):
    settings = get_settings()
    monkeypatch.setattr(settings, "upstream_timeout_seconds", 5.0)

    monkeypatch.setattr(settings, "pollutant_source", "openaq")
    assert isinstance(get_pollutant_source(), OpenAQSource)

    monkeypatch.setattr(settings, "pollutant_source", "airnow")
    source = get_pollutant_source()
    assert isinstance(source, AirNowSource)
    assert source.name == "airnow"
