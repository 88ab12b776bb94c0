"""Data models for the food category recommender."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class ServeTemperature(str, Enum):
    HOT = "hot"
    WARM = "warm"
    COLD = "cold"
    HOT_OR_COLD = "hot-or-cold"  # scored as the better of cold / warm


class TemperatureClass(str, Enum):
    HOT = "hot"
    MODERATE = "moderate"
    COLD = "cold"


class HumidityClass(str, Enum):
    HIGH = "high"
    MODERATE = "moderate"
    LOW = "low"


class EntryKind(str, Enum):
    QUERY = "query"
    SELECTION = "user_selection"


@dataclass(frozen=True)
class Coordinate:
    lat: float
    lng: float


@dataclass(frozen=True)
class GridCoordinate:
    x: int
    y: int


@dataclass(frozen=True)
class FoodCategory:
    id: int
    name: str
    name_ko: str
    serve_temp: ServeTemperature
    description: str = ""


@dataclass(frozen=True)
class WeatherReading:
    """Raw reading handed over by the weather collaborator."""

    temperature_celsius: Optional[float] = None
    humidity_percent: Optional[float] = None


@dataclass(frozen=True)
class WeatherConditions:
    temperature: TemperatureClass
    humidity: HumidityClass
    actual_temperature: Optional[float] = None
    actual_humidity: Optional[float] = None


@dataclass
class ScoredCategory:
    category: FoodCategory
    score: float
    reason: str
    rank: int = 0  # assigned after sorting

    @property
    def id(self) -> int:
        return self.category.id

    @property
    def name_ko(self) -> str:
        return self.category.name_ko

    def to_dict(self) -> Dict[str, object]:
        return {
            "id": self.category.id,
            "name": self.category.name,
            "name_ko": self.category.name_ko,
            "serve_temp": self.category.serve_temp.value,
            "description": self.category.description,
            "score": self.score,
            "rank": self.rank,
            "reason": self.reason,
        }


@dataclass(frozen=True)
class HistoryEntry:
    weekday: str  # "Monday" .. "Sunday"
    raw_text: str
    timestamp: int  # epoch millis
    kind: EntryKind = EntryKind.QUERY
    category: Optional[str] = None
    restaurant_name: Optional[str] = None
    selected_food: Optional[str] = None


@dataclass(frozen=True)
class CityLocation:
    name: str
    name_en: str
    coordinate: Coordinate
    district: Optional[str] = None


@dataclass
class SelectionSummary:
    category: str
    count: int
    percentage: int
    restaurants: List[Dict[str, object]] = field(default_factory=list)


@dataclass
class DaySelectionStats:
    day: str
    day_ko: str
    total_selections: int
    top_selections: List[SelectionSummary] = field(default_factory=list)
