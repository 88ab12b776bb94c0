from __future__ import annotations

import json
import threading
from datetime import datetime

from models import EntryKind, HistoryEntry
from services.history_store import (
    InMemoryHistoryStore,
    JsonFileHistoryStore,
    record_query,
    record_selection,
)

FRIDAY = datetime(2024, 7, 5, 12, 30)  # a Friday


def test_in_memory_store_filters_by_weekday() -> None:
    store = InMemoryHistoryStore()
    record_query(store, "냉면", weekday="Friday")
    record_query(store, "치킨", weekday="Monday")

    assert len(store.read_all_entries()) == 2
    friday = store.read_all_entries("fri")
    assert [e.raw_text for e in friday] == ["냉면"]


def test_record_uses_clock_when_weekday_omitted() -> None:
    store = InMemoryHistoryStore()
    entry = record_query(store, "피자", now=FRIDAY)
    assert entry.weekday == "Friday"
    assert entry.timestamp == int(FRIDAY.timestamp() * 1000)


def test_json_store_persists_records(tmp_path) -> None:
    path = tmp_path / "history.json"
    store = JsonFileHistoryStore(path)
    record_query(store, "오늘은 냉면", weekday="Friday")

    raw = json.loads(path.read_text(encoding="utf-8"))
    assert len(raw) == 1
    assert raw[0]["day"] == "Friday"
    chat = json.loads(raw[0]["chat"])
    assert chat["message"] == "오늘은 냉면"
    assert chat["type"] == "query"

    reread = JsonFileHistoryStore(path).read_all_entries()
    assert reread[0].raw_text == "오늘은 냉면"
    assert reread[0].kind == EntryKind.QUERY


def test_selection_round_trips_through_file(tmp_path) -> None:
    store = JsonFileHistoryStore(tmp_path / "history.json")
    entry = record_selection(store, "치킨", category="치킨", restaurant_name="교촌치킨", weekday="Friday")
    assert entry.raw_text == "실제 선택: 치킨 - 교촌치킨 (카테고리: 치킨)"

    [loaded] = store.read_all_entries("Friday")
    assert loaded.kind == EntryKind.SELECTION
    assert loaded.category == "치킨"
    assert loaded.restaurant_name == "교촌치킨"
    assert loaded.selected_food == "치킨"


def test_selection_message_without_optional_parts() -> None:
    entry = record_selection(InMemoryHistoryStore(), "냉면", weekday="Sunday")
    assert entry.raw_text == "실제 선택: 냉면"


def test_missing_or_corrupt_file_reads_empty(tmp_path) -> None:
    assert JsonFileHistoryStore(tmp_path / "absent.json").read_all_entries() == []

    bad = tmp_path / "bad.json"
    bad.write_text("{not json", encoding="utf-8")
    assert JsonFileHistoryStore(bad).read_all_entries() == []

    not_list = tmp_path / "object.json"
    not_list.write_text('{"day": "Friday"}', encoding="utf-8")
    assert JsonFileHistoryStore(not_list).read_all_entries() == []


def test_malformed_records_are_skipped(tmp_path) -> None:
    path = tmp_path / "history.json"
    records = [
        {"day": "Friday", "chat": "냉면 먹고 싶어"},
        {"day": "Funday", "chat": "피자"},
        42,
        {"day": "Monday", "chat": json.dumps({"message": 5})},
        {"chat": "no day"},
    ]
    path.write_text(json.dumps(records, ensure_ascii=False), encoding="utf-8")

    entries = JsonFileHistoryStore(path).read_all_entries()
    assert entries == [HistoryEntry(weekday="Friday", raw_text="냉면 먹고 싶어", timestamp=0)]


def test_concurrent_appends_are_not_lost(tmp_path) -> None:
    path = tmp_path / "history.json"

    def worker(idx: int) -> None:
        store = JsonFileHistoryStore(path)
        for n in range(10):
            record_query(store, f"worker-{idx}-{n}", weekday="Friday")

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    entries = JsonFileHistoryStore(path).read_all_entries()
    assert len(entries) == 80
    assert len({e.raw_text for e in entries}) == 80


def test_append_to_unparseable_file_keeps_original_bytes(tmp_path) -> None:
    path = tmp_path / "history.json"
    records = [
        {"day": "Friday", "chat": json.dumps({"message": f"냉면 {n}", "type": "query", "timestamp": n})}
        for n in range(50)
    ]
    original = json.dumps(records, ensure_ascii=False) + "\n,"
    path.write_text(original, encoding="utf-8")

    record_query(JsonFileHistoryStore(path), "피자", weekday="Friday")

    [moved] = list(tmp_path.glob("history.json.corrupt-*"))
    assert moved.read_text(encoding="utf-8") == original
    assert [e.raw_text for e in JsonFileHistoryStore(path).read_all_entries()] == ["피자"]


def test_append_to_non_array_file_keeps_original_bytes(tmp_path) -> None:
    path = tmp_path / "history.json"
    path.write_text('{"entries": [1, 2, 3]}', encoding="utf-8")

    record_query(JsonFileHistoryStore(path), "피자", weekday="Friday")

    [moved] = list(tmp_path.glob("history.json.corrupt-*"))
    assert json.loads(moved.read_text(encoding="utf-8")) == {"entries": [1, 2, 3]}
    assert len(json.loads(path.read_text(encoding="utf-8"))) == 1


def test_append_keeps_records_it_cannot_interpret(tmp_path) -> None:
    path = tmp_path / "history.json"
    path.write_text(json.dumps([42, {"day": "Funday", "chat": "x"}]), encoding="utf-8")

    record_query(JsonFileHistoryStore(path), "피자", weekday="Friday")

    raw = json.loads(path.read_text(encoding="utf-8"))
    assert raw[:2] == [42, {"day": "Funday", "chat": "x"}]
    assert len(raw) == 3
    assert not list(tmp_path.glob("*.corrupt-*"))
