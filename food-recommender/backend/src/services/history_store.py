from __future__ import annotations

import json
import os
import tempfile
import threading
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from loguru import logger

from models import EntryKind, HistoryEntry
from utils import normalize_weekday, now_millis


class HistoryStore(ABC):
    """Append-only log of past queries and confirmed selections."""

    @abstractmethod
    def append_entry(self, entry: HistoryEntry) -> None:
        ...

    @abstractmethod
    def read_all_entries(self, weekday: Optional[str] = None) -> List[HistoryEntry]:
        ...


class InMemoryHistoryStore(HistoryStore):
    def __init__(self, entries: Optional[List[HistoryEntry]] = None) -> None:
        self._entries: List[HistoryEntry] = list(entries or [])
        self._lock = threading.Lock()

    def append_entry(self, entry: HistoryEntry) -> None:
        with self._lock:
            self._entries.append(entry)

    def read_all_entries(self, weekday: Optional[str] = None) -> List[HistoryEntry]:
        with self._lock:
            snapshot = list(self._entries)
        if weekday is None:
            return snapshot
        day = normalize_weekday(weekday)
        return [e for e in snapshot if e.weekday == day]


def _entry_to_record(entry: HistoryEntry) -> Dict[str, Any]:
    chat: Dict[str, Any] = {
        "message": entry.raw_text,
        "type": entry.kind.value,
        "timestamp": entry.timestamp,
    }
    if entry.kind == EntryKind.SELECTION:
        chat["selectedFood"] = entry.selected_food
        chat["category"] = entry.category
        chat["restaurantName"] = entry.restaurant_name
    return {"day": entry.weekday, "chat": json.dumps(chat, ensure_ascii=False)}


def _entry_from_record(record: Any) -> Optional[HistoryEntry]:
    if not isinstance(record, dict):
        return None
    raw_day = record.get("day")
    if not isinstance(raw_day, str) or not raw_day.strip():
        return None
    try:
        day = normalize_weekday(raw_day)
    except ValueError:
        return None

    chat = record.get("chat")
    if isinstance(chat, str):
        try:
            decoded = json.loads(chat)
        except json.JSONDecodeError:
            decoded = None
        if not isinstance(decoded, dict):
            # plain-text question log
            return HistoryEntry(weekday=day, raw_text=chat, timestamp=0)
        chat = decoded
    if not isinstance(chat, dict):
        return None

    message = chat.get("message", "")
    if not isinstance(message, str):
        return None
    kind = EntryKind.SELECTION if chat.get("type") == EntryKind.SELECTION.value else EntryKind.QUERY
    timestamp = chat.get("timestamp")
    return HistoryEntry(
        weekday=day,
        raw_text=message,
        timestamp=int(timestamp) if isinstance(timestamp, (int, float)) else 0,
        kind=kind,
        category=chat.get("category") or None,
        restaurant_name=chat.get("restaurantName") or None,
        selected_food=chat.get("selectedFood") or None,
    )


class JsonFileHistoryStore(HistoryStore):
    """History persisted as a JSON array of {"day": ..., "chat": "<json>"}.

    Writers are serialized by a lock shared by every store pointing at the
    same file, and each write replaces the file atomically. A file that
    cannot be parsed reads as empty and is moved aside on the next append.
    """

    _locks: Dict[str, threading.Lock] = {}
    _locks_guard = threading.Lock()

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)
        key = str(self.path.resolve())
        with JsonFileHistoryStore._locks_guard:
            self._lock = JsonFileHistoryStore._locks.setdefault(key, threading.Lock())

    def _load_records(self) -> Optional[List[Any]]:
        """Raw records, [] for a missing file, None if the file cannot be parsed."""
        if not self.path.exists():
            return []
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except ValueError as exc:
            logger.warning("history file is not valid json: {} ({})", self.path, exc)
            return None
        if not isinstance(data, list):
            logger.warning("history file is not a json array: {}", self.path)
            return None
        return data

    def _set_aside(self) -> Path:
        target = self.path.with_name(f"{self.path.name}.corrupt-{now_millis()}")
        os.replace(self.path, target)
        logger.error("unreadable history file moved to {}, starting a new log", target)
        return target

    def _write_records(self, records: List[Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=str(self.path.parent), prefix=".history-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(records, f, ensure_ascii=False, indent=2)
            os.replace(tmp, self.path)
        except BaseException:
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise

    def append_entry(self, entry: HistoryEntry) -> None:
        with self._lock:
            records = self._load_records()
            if records is None:
                # never overwrite a log we could not read
                self._set_aside()
                records = []
            records.append(_entry_to_record(entry))
            self._write_records(records)

    def read_all_entries(self, weekday: Optional[str] = None) -> List[HistoryEntry]:
        day = normalize_weekday(weekday) if weekday is not None else None
        with self._lock:
            records = self._load_records() or []

        entries: List[HistoryEntry] = []
        for record in records:
            entry = _entry_from_record(record)
            if entry is None:
                logger.warning("skipping unreadable history record: {}", record)
                continue
            if day is None or entry.weekday == day:
                entries.append(entry)
        return entries


def record_query(
    store: HistoryStore,
    text: str,
    *,
    weekday: Optional[str] = None,
    now: Optional[datetime] = None,
) -> HistoryEntry:
    entry = HistoryEntry(
        weekday=normalize_weekday(weekday, now=now),
        raw_text=text,
        timestamp=int(now.timestamp() * 1000) if now else now_millis(),
        kind=EntryKind.QUERY,
    )
    store.append_entry(entry)
    return entry


def record_selection(
    store: HistoryStore,
    selected_food: str,
    *,
    category: Optional[str] = None,
    restaurant_name: Optional[str] = None,
    weekday: Optional[str] = None,
    now: Optional[datetime] = None,
) -> HistoryEntry:
    """Persist what the user actually ate, e.g. "치킨" at "교촌치킨"."""
    message = f"실제 선택: {selected_food}"
    if restaurant_name:
        message += f" - {restaurant_name}"
    if category:
        message += f" (카테고리: {category})"

    entry = HistoryEntry(
        weekday=normalize_weekday(weekday, now=now),
        raw_text=message,
        timestamp=int(now.timestamp() * 1000) if now else now_millis(),
        kind=EntryKind.SELECTION,
        category=category,
        restaurant_name=restaurant_name,
        selected_food=selected_food,
    )
    store.append_entry(entry)
    logger.info("selection saved: {} ({})", selected_food, entry.weekday)
    return entry
