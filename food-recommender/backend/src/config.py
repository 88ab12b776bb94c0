from __future__ import annotations

import os
from typing import Any, Optional

from pydantic import BaseModel, Field


class Configuration(BaseModel):
    # History log
    history_path: str = Field(default="data/user_history.json")

    # Ranking
    top_n: int = Field(default=2)
    weather_top_n: int = Field(default=3)

    # Service
    log_level: str = Field(default="INFO")
    api_host: str = Field(default="0.0.0.0")
    api_port: int = Field(default=8010)

    @classmethod
    def from_env(cls, overrides: Optional[dict[str, Any]] = None) -> "Configuration":
        raw: dict[str, Any] = {}

        env_map = {
            "history_path": os.getenv("HISTORY_PATH"),
            "top_n": os.getenv("TOP_N"),
            "weather_top_n": os.getenv("WEATHER_TOP_N"),
            "log_level": os.getenv("LOG_LEVEL"),
            "api_host": os.getenv("API_HOST"),
            "api_port": os.getenv("API_PORT"),
        }

        for k, v in env_map.items():
            if v is None:
                continue
            raw[k] = v

        if overrides:
            raw.update({k: v for k, v in overrides.items() if v is not None})

        return cls(**raw)

    def require_valid_top_n(self) -> None:
        if self.top_n < 2:
            raise ValueError("TOP_N must be at least 2")
        if self.weather_top_n < 1:
            raise ValueError("WEATHER_TOP_N must be at least 1")

    def log_summary(self) -> str:
        return "history=%s top_n=%s weather_top_n=%s log_level=%s api=%s:%s" % (
            self.history_path,
            self.top_n,
            self.weather_top_n,
            self.log_level,
            self.api_host,
            self.api_port,
        )
