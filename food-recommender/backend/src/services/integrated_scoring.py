"""Integrated ranking: weather, weekday history and hunger in one additive score.

Per category:
    base 10
  + weather term   (temperature match + humidity match, capped at 25)
  + history term   (weekday affinity / 10 * 50, capped at 50)
  + satiety term   (portion class vs. hunger level, capped at 30)
  - 25 for a hearty category when the user is full
clamped at 0 and rounded to two decimals.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

from loguru import logger

from models import (
    FoodCategory,
    HumidityClass,
    ScoredCategory,
    ServeTemperature,
    TemperatureClass,
    WeatherConditions,
)
from services.catalog import FOOD_CATEGORIES, HEARTY_FOODS, LIGHT_FOODS, MODERATE_FOODS
from services.history_store import HistoryStore
from services.preferences import analyze_day_preference
from services.weather_analysis import neutral_conditions
from services.weather_scoring import rank_scored
from utils import normalize_weekday

BASE_SCORE = 10.0
WEATHER_CAP = 25.0
HISTORY_CAP = 50.0
SATIETY_CAP = 30.0
FULL_HEARTY_PENALTY = 25.0
MIN_RESULTS = 2

SATIETY_FULL = 1
SATIETY_MODERATE = 2
SATIETY_HUNGRY = 3

_HIGH_HUMIDITY_MARKERS = ("샐러드", "회", "디저트")
_LOW_HUMIDITY_MARKERS = ("찜/탕", "죽", "커피/차")

Term = Tuple[float, str]


class InsufficientCategoriesError(RuntimeError):
    pass


def _temperature_term(category: FoodCategory, temperature: TemperatureClass) -> Term:
    serve = category.serve_temp
    if temperature == TemperatureClass.HOT:
        if serve == ServeTemperature.COLD:
            return 15.0, "더운 날씨에 시원한 음식"
        if serve == ServeTemperature.HOT_OR_COLD:
            return 12.0, "더운 날씨에 시원하게 드실 수 있는 음식"
    elif temperature == TemperatureClass.COLD:
        if serve == ServeTemperature.HOT:
            if category.name_ko == "찜/탕":
                return 17.0, "추운 날씨에 뜨끈한 국물 음식"
            if category.name_ko == "한식":
                return 16.0, "추운 날씨에 뜨끈한 국물 음식"
            return 15.0, "추운 날씨에 따뜻한 음식"
        if serve == ServeTemperature.WARM:
            return 12.0, "추운 날씨에 따뜻한 음식"
    else:
        if serve == ServeTemperature.WARM:
            return 9.0, "온화한 날씨에 적당한 온도"
        if serve == ServeTemperature.HOT_OR_COLD:
            return 7.0, "온화한 날씨에 다양하게 즐길 수 있는 음식"
    return 0.0, ""


def _humidity_term(category: FoodCategory, humidity: HumidityClass) -> Term:
    if humidity == HumidityClass.HIGH and any(m in category.name_ko for m in _HIGH_HUMIDITY_MARKERS):
        return 10.0, "습한 날씨에 가벼운 음식"
    if humidity == HumidityClass.LOW and any(m in category.name_ko for m in _LOW_HUMIDITY_MARKERS):
        return 10.0, "건조한 날씨에 수분 보충 음식"
    return 0.0, ""


def weather_term(category: FoodCategory, weather: WeatherConditions) -> Term:
    parts = [_temperature_term(category, weather.temperature), _humidity_term(category, weather.humidity)]
    score = min(WEATHER_CAP, sum(s for s, _ in parts))
    return score, ", ".join(r for s, r in parts if s > 0)


def history_term(category: FoodCategory, preference: Dict[str, float]) -> Term:
    affinity = preference.get(category.name_ko, 0.0)
    if affinity <= 0:
        return 0.0, ""
    score = min(HISTORY_CAP, (affinity / 10.0) * HISTORY_CAP)
    return score, f"이 요일에 자주 드시는 음식 (선호도: {affinity:.1f})"


def satiety_term(category: FoodCategory, satiety_level: int) -> Term:
    name = category.name_ko
    if satiety_level == SATIETY_HUNGRY:
        if name in HEARTY_FOODS:
            return 30.0, "배고픈 상태에 든든한 음식"
        if name in MODERATE_FOODS:
            return 15.0, "배고픈 상태에 적당한 음식"
    elif satiety_level == SATIETY_MODERATE:
        if name in MODERATE_FOODS:
            return 25.0, "적당한 배고픔에 맞는 음식"
        if name in HEARTY_FOODS:
            return 15.0, "든든하게 드실 수 있는 음식"
        if name in LIGHT_FOODS:
            return 10.0, "가볍게 드실 수 있는 음식"
    elif satiety_level == SATIETY_FULL:
        if name in LIGHT_FOODS:
            return 30.0, "배부른 상태에 가벼운 음식"
        if name in MODERATE_FOODS:
            return 10.0, "가볍게 드실 수 있는 음식"
    return 0.0, ""


def _check_satiety(satiety_level: int) -> int:
    if isinstance(satiety_level, bool) or satiety_level not in (SATIETY_FULL, SATIETY_MODERATE, SATIETY_HUNGRY):
        raise ValueError(f"satiety level must be 1, 2 or 3, got {satiety_level!r}")
    return int(satiety_level)


class IntegratedScorer:
    """Ranks the catalog for one request. Holds no per-request state."""

    def __init__(
        self,
        store: Optional[HistoryStore] = None,
        *,
        top_n: int = MIN_RESULTS,
        categories: Sequence[FoodCategory] = FOOD_CATEGORIES,
    ) -> None:
        self.store = store
        self.top_n = top_n
        self.categories = tuple(categories)

    def score_category(
        self,
        category: FoodCategory,
        weather: WeatherConditions,
        satiety_level: int,
        preference: Dict[str, float],
    ) -> ScoredCategory:
        satiety_level = _check_satiety(satiety_level)
        total = BASE_SCORE
        reasons: List[str] = []

        for score, reason in (history_term(category, preference), satiety_term(category, satiety_level)):
            total += score
            if score > 0:
                reasons.append(reason)

        if satiety_level == SATIETY_FULL and category.name_ko in HEARTY_FOODS:
            total -= FULL_HEARTY_PENALTY
            reasons.append("배부른 상태에 부담스러운 음식")

        score, reason = weather_term(category, weather)
        total += score
        if score > 0:
            reasons.append(reason)

        total = round(max(0.0, total), 2)
        return ScoredCategory(category=category, score=total, reason=", ".join(reasons) or "기본 점수")

    def load_preference(self, weekday: str) -> Dict[str, float]:
        if self.store is None:
            return {}
        try:
            entries = self.store.read_all_entries(weekday)
            return analyze_day_preference(entries, weekday)
        except Exception as exc:
            logger.warning("history lookup failed, scoring without preferences: {}", exc)
            return {}

    def score_all(
        self,
        weather: Optional[WeatherConditions],
        satiety_level: int,
        weekday: Optional[str] = None,
    ) -> List[ScoredCategory]:
        satiety_level = _check_satiety(satiety_level)
        day = normalize_weekday(weekday)
        if weather is None:
            logger.warning("weather unavailable, using neutral conditions")
            weather = neutral_conditions()

        preference = self.load_preference(day)
        scored = [self.score_category(c, weather, satiety_level, preference) for c in self.categories]
        ranked = rank_scored(scored)

        for item in ranked[:5]:
            logger.debug("{}. {}: {:.2f} - {}", item.rank, item.name_ko, item.score, item.reason)
        return ranked

    def calculate_top_categories(
        self,
        weather: Optional[WeatherConditions],
        satiety_level: int,
        weekday: Optional[str] = None,
    ) -> List[ScoredCategory]:
        ranked = self.score_all(weather, satiety_level, weekday)
        if len(ranked) < MIN_RESULTS:
            raise InsufficientCategoriesError(f"expected at least {MIN_RESULTS} categories, got {len(ranked)}")
        return ranked[: max(MIN_RESULTS, self.top_n)]
