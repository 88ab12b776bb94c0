from __future__ import annotations

from typing import Dict, Iterable, List, Sequence, Union

from models import (
    FoodCategory,
    HumidityClass,
    ScoredCategory,
    ServeTemperature,
    WeatherConditions,
)
from services.catalog import FOOD_CATEGORIES

#   humidity \ serve | cold | warm | hot
#   high             |  3   |  2   |  1
#   moderate         |  2   |  3   |  2
#   low              |  1   |  2   |  3
HUMIDITY_SERVE_TEMP_MATRIX: Dict[HumidityClass, Dict[ServeTemperature, int]] = {
    HumidityClass.HIGH: {ServeTemperature.COLD: 3, ServeTemperature.WARM: 2, ServeTemperature.HOT: 1},
    HumidityClass.MODERATE: {ServeTemperature.COLD: 2, ServeTemperature.WARM: 3, ServeTemperature.HOT: 2},
    HumidityClass.LOW: {ServeTemperature.COLD: 1, ServeTemperature.WARM: 2, ServeTemperature.HOT: 3},
}

_HUMIDITY_TEXT = {
    HumidityClass.HIGH: "높은 습도",
    HumidityClass.MODERATE: "보통 습도",
    HumidityClass.LOW: "낮은 습도",
}

_SERVE_TEXT = {
    ServeTemperature.HOT: "뜨거운 음식",
    ServeTemperature.WARM: "따뜻한 음식",
    ServeTemperature.COLD: "차가운 음식",
    ServeTemperature.HOT_OR_COLD: "따뜻하거나 차가운 음식",
}


def _either_side(humidity: HumidityClass) -> ServeTemperature:
    row = HUMIDITY_SERVE_TEMP_MATRIX[humidity]
    if row[ServeTemperature.COLD] > row[ServeTemperature.WARM]:
        return ServeTemperature.COLD
    return ServeTemperature.WARM


def matrix_score(serve_temp: ServeTemperature, humidity: HumidityClass) -> int:
    if serve_temp == ServeTemperature.HOT_OR_COLD:
        return HUMIDITY_SERVE_TEMP_MATRIX[humidity][_either_side(humidity)]
    return HUMIDITY_SERVE_TEMP_MATRIX[humidity][serve_temp]


def _reason(category: FoodCategory, humidity: HumidityClass) -> str:
    humidity_text = _HUMIDITY_TEXT[humidity]
    if category.serve_temp == ServeTemperature.HOT_OR_COLD:
        selected = _SERVE_TEXT[_either_side(humidity)]
        return f"{selected} + {humidity_text}"
    return f"{_SERVE_TEXT[category.serve_temp]} + {humidity_text}"


def rank_scored(scored: Iterable[ScoredCategory]) -> List[ScoredCategory]:
    """Score descending, category id ascending; ranks are 1..N."""
    ordered = sorted(scored, key=lambda s: (-s.score, s.category.id))
    for idx, item in enumerate(ordered, start=1):
        item.rank = idx
    return ordered


def score_all_categories(
    conditions: WeatherConditions,
    categories: Sequence[FoodCategory] = FOOD_CATEGORIES,
) -> List[ScoredCategory]:
    scored = [
        ScoredCategory(
            category=c,
            score=float(matrix_score(c.serve_temp, conditions.humidity)),
            reason=_reason(c, conditions.humidity),
        )
        for c in categories
    ]
    return rank_scored(scored)


def select_top_categories(scored: Sequence[ScoredCategory], top_n: int = 3) -> List[ScoredCategory]:
    return list(scored[: max(0, min(top_n, len(scored)))])


def scoring_statistics(scored: Sequence[ScoredCategory]) -> Dict[str, Union[int, float, Dict[float, int]]]:
    scores = [s.score for s in scored]
    if not scores:
        return {"total_categories": 0, "average_score": 0.0, "max_score": 0.0, "min_score": 0.0, "distribution": {}}
    distribution: Dict[float, int] = {}
    for value in scores:
        distribution[value] = distribution.get(value, 0) + 1
    return {
        "total_categories": len(scores),
        "average_score": round(sum(scores) / len(scores), 2),
        "max_score": max(scores),
        "min_score": min(scores),
        "distribution": distribution,
    }
