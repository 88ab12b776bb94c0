from __future__ import annotations

from models import EntryKind, HistoryEntry
from services.preferences import analyze_day_preference, day_selection_stats, extract_keyword_hits


def _query(day: str, text: str) -> HistoryEntry:
    return HistoryEntry(weekday=day, raw_text=text, timestamp=0)


def _selection(day: str, food: str, restaurant: str | None = None) -> HistoryEntry:
    return HistoryEntry(
        weekday=day,
        raw_text=f"실제 선택: {food}",
        timestamp=0,
        kind=EntryKind.SELECTION,
        category=food,
        restaurant_name=restaurant,
        selected_food=food,
    )


def test_keyword_hits_count_once_per_keyword() -> None:
    hits = extract_keyword_hits("PIZZA 말고 피자")
    # "pizza" and "피자" are two different keywords of the same category
    assert hits == {"피자": 2}


def test_most_mentioned_category_scores_ten() -> None:
    entries = [
        _query("Friday", "냉면 먹고 싶어"),
        _query("Friday", "냉면 먹고 싶어"),
        _query("Friday", "피자 주문"),
        _query("Monday", "치킨"),
    ]
    preference = analyze_day_preference(entries, "Friday")
    assert preference == {"냉면": 10.0, "피자": 5.0}
    assert "치킨" not in preference


def test_no_entries_for_day_is_empty() -> None:
    assert analyze_day_preference([_query("Monday", "치킨")], "Sunday") == {}
    assert analyze_day_preference([], "Sunday") == {}


def test_weekday_aliases_accepted() -> None:
    entries = [_query("Friday", "냉면")]
    assert analyze_day_preference(entries, "fri") == {"냉면": 10.0}
    assert analyze_day_preference(entries, "금요일") == {"냉면": 10.0}


def test_selection_stats_per_day() -> None:
    entries = [
        _selection("Friday", "치킨", "교촌치킨"),
        _selection("Friday", "치킨", "교촌치킨"),
        _selection("Friday", "치킨", "BBQ"),
        _selection("Friday", "피자", "도미노"),
        _selection("Monday", "한식"),
        _query("Friday", "치킨 먹을까"),
    ]
    stats = day_selection_stats(entries, "Friday")
    assert stats.day == "Friday"
    assert stats.day_ko == "금요일"
    assert stats.total_selections == 4
    assert [s.category for s in stats.top_selections] == ["치킨", "피자"]

    chicken = stats.top_selections[0]
    assert chicken.count == 3
    assert chicken.percentage == 75
    assert chicken.restaurants == [{"name": "교촌치킨", "count": 2}, {"name": "BBQ", "count": 1}]


def test_selection_stats_empty_day() -> None:
    stats = day_selection_stats([], "Tuesday")
    assert stats.total_selections == 0
    assert stats.top_selections == []
