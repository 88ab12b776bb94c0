"""Utility helpers for the food category recommender."""

from __future__ import annotations

import math
import time
from datetime import datetime
from typing import Optional

WEEKDAYS = [
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
]

WEEKDAY_KO = {
    "Monday": "월요일",
    "Tuesday": "화요일",
    "Wednesday": "수요일",
    "Thursday": "목요일",
    "Friday": "금요일",
    "Saturday": "토요일",
    "Sunday": "일요일",
}

_WEEKDAY_ALIASES = {}
for _day in WEEKDAYS:
    _WEEKDAY_ALIASES[_day.lower()] = _day
    _WEEKDAY_ALIASES[_day[:3].lower()] = _day
    _WEEKDAY_ALIASES[WEEKDAY_KO[_day]] = _day
    _WEEKDAY_ALIASES[WEEKDAY_KO[_day][0]] = _day


def current_weekday(now: Optional[datetime] = None) -> str:
    now = now or datetime.now()
    return WEEKDAYS[now.weekday()]


def normalize_weekday(value: Optional[str], *, now: Optional[datetime] = None) -> str:
    """Map "fri", "Friday", "금요일" or "금" to "Friday"; None means today."""
    if value is None or not str(value).strip():
        return current_weekday(now)
    key = str(value).strip().lower()
    day = _WEEKDAY_ALIASES.get(key)
    if day is None:
        raise ValueError(f"unknown weekday: {value!r}")
    return day


def korean_day(day: str) -> str:
    return WEEKDAY_KO.get(day, day)


def now_millis() -> int:
    return int(time.time() * 1000)


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in kilometers."""
    R = 6371.0
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lon2 - lon1)
    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return R * c
