"""Per-weekday food preference mining over the history log."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from loguru import logger

from models import DaySelectionStats, EntryKind, HistoryEntry, SelectionSummary
from services.catalog import CATEGORY_KEYWORDS
from utils import korean_day, normalize_weekday

MAX_AFFINITY = 10.0
TOP_SELECTIONS = 5
TOP_RESTAURANTS = 3


def extract_keyword_hits(message: str, counts: Optional[Dict[str, int]] = None) -> Dict[str, int]:
    """Add one hit per category keyword found in message.

    Counts are keyed by localized category name.
    """
    counts = {} if counts is None else counts
    lower = message.lower()
    for name_ko, keywords in CATEGORY_KEYWORDS.items():
        for keyword in keywords:
            if keyword.lower() in lower:
                counts[name_ko] = counts.get(name_ko, 0) + 1
    return counts


def _normalize(counts: Dict[str, int]) -> Dict[str, float]:
    max_count = max(counts.values(), default=0)
    if max_count <= 0:
        return {}
    return {name: (count / max_count) * MAX_AFFINITY for name, count in counts.items() if count > 0}


def analyze_day_preference(entries: Iterable[HistoryEntry], weekday: Optional[str] = None) -> Dict[str, float]:
    """Affinity 0-10 per category for the given weekday (today if omitted).

    The most-mentioned category scores exactly 10; categories never
    mentioned are left out.
    """
    day = normalize_weekday(weekday)
    day_entries = [e for e in entries if e.weekday == day]
    if not day_entries:
        logger.debug("no history for {}", day)
        return {}

    counts: Dict[str, int] = {}
    for entry in day_entries:
        if not isinstance(entry.raw_text, str):
            logger.warning("skipping history entry with unreadable text: {}", entry)
            continue
        extract_keyword_hits(entry.raw_text, counts)

    preference = _normalize(counts)
    logger.debug("preference for {}: {} categories", day, len(preference))
    return preference


def day_selection_stats(entries: Iterable[HistoryEntry], weekday: Optional[str] = None) -> DaySelectionStats:
    day = normalize_weekday(weekday)
    selections = [e for e in entries if e.weekday == day and e.kind == EntryKind.SELECTION]
    if not selections:
        return DaySelectionStats(day=day, day_ko=korean_day(day), total_selections=0)

    counts: Dict[str, int] = {}
    restaurants: Dict[str, Dict[str, int]] = {}
    for entry in selections:
        category = entry.category or entry.selected_food or "기타"
        counts[category] = counts.get(category, 0) + 1
        per_category = restaurants.setdefault(category, {})
        if entry.restaurant_name:
            per_category[entry.restaurant_name] = per_category.get(entry.restaurant_name, 0) + 1

    total = len(selections)
    # sorted() is stable, so equal counts keep first-seen order
    ranked = sorted(counts.items(), key=lambda kv: -kv[1])[:TOP_SELECTIONS]
    top: List[SelectionSummary] = []
    for category, count in ranked:
        top_restaurants = sorted(restaurants[category].items(), key=lambda kv: -kv[1])[:TOP_RESTAURANTS]
        top.append(
            SelectionSummary(
                category=category,
                count=count,
                percentage=round(count / total * 100),
                restaurants=[{"name": name, "count": n} for name, n in top_restaurants],
            )
        )

    logger.info("{} selections: total={} categories={}", day, total, len(top))
    return DaySelectionStats(day=day, day_ko=korean_day(day), total_selections=total, top_selections=top)
