from __future__ import annotations

import pytest

from config import Configuration
from utils import current_weekday, normalize_weekday

ENV_KEYS = ("HISTORY_PATH", "TOP_N", "WEATHER_TOP_N", "LOG_LEVEL", "API_HOST", "API_PORT")


def test_defaults(monkeypatch) -> None:
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    cfg = Configuration.from_env()
    assert cfg.history_path == "data/user_history.json"
    assert cfg.top_n == 2
    assert cfg.weather_top_n == 3
    assert cfg.api_port == 8010


def test_env_and_overrides(monkeypatch) -> None:
    monkeypatch.setenv("TOP_N", "4")
    monkeypatch.setenv("API_PORT", "9000")
    cfg = Configuration.from_env({"api_port": 9100, "log_level": None})
    assert cfg.top_n == 4
    assert cfg.api_port == 9100
    assert "top_n=4" in cfg.log_summary()


def test_top_n_validation() -> None:
    with pytest.raises(ValueError):
        Configuration(top_n=1).require_valid_top_n()
    Configuration(top_n=2).require_valid_top_n()


def test_weekday_normalization() -> None:
    assert normalize_weekday("fri") == "Friday"
    assert normalize_weekday("  SUNDAY ") == "Sunday"
    assert normalize_weekday("토요일") == "Saturday"
    assert normalize_weekday(None) == current_weekday()
    with pytest.raises(ValueError):
        normalize_weekday("someday")
