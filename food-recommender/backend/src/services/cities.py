from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from models import CityLocation, Coordinate
from utils import haversine_km

# (lat, lng) of each city hall and, where known, district offices.
KR_CITY_REGISTRY: Dict[str, Dict[str, object]] = {
    "서울": {
        "name_en": "Seoul",
        "center": (37.5663, 126.9779),
        "districts": {
            "강남구": (37.5172, 127.0473),
            "강동구": (37.5301, 127.1238),
            "강북구": (37.6396, 127.0256),
            "강서구": (37.5509, 126.8495),
            "관악구": (37.4784, 126.9516),
            "마포구": (37.5660, 126.9015),
            "서초구": (37.4836, 127.0327),
            "송파구": (37.5145, 127.1059),
            "영등포구": (37.5264, 126.8962),
            "용산구": (37.5326, 126.9900),
            "종로구": (37.5735, 126.9788),
            "중구": (37.5663, 126.9779),
        },
    },
    "부산": {
        "name_en": "Busan",
        "center": (35.1796, 129.0756),
        "districts": {
            "중구": (35.1041, 129.0325),
            "부산진구": (35.1626, 129.0533),
            "동래구": (35.2046, 129.0837),
            "해운대구": (35.1631, 129.1640),
            "사하구": (35.1045, 128.9744),
            "금정구": (35.2425, 129.0920),
            "수영구": (35.1453, 129.1136),
            "기장군": (35.2441, 129.2233),
        },
    },
    "대구": {
        "name_en": "Daegu",
        "center": (35.8714, 128.6014),
        "districts": {
            "중구": (35.8685, 128.6060),
            "수성구": (35.8581, 128.6306),
            "달서구": (35.8329, 128.5354),
            "달성군": (35.7749, 128.4311),
        },
    },
    "인천": {
        "name_en": "Incheon",
        "center": (37.4563, 126.7052),
        "districts": {
            "미추홀구": (37.4635, 126.6505),
            "연수구": (37.4106, 126.6783),
            "남동구": (37.4470, 126.7311),
            "부평구": (37.5073, 126.7218),
            "계양구": (37.5379, 126.7379),
            "강화군": (37.7473, 126.4877),
        },
    },
    "광주": {
        "name_en": "Gwangju",
        "center": (35.1595, 126.8526),
        "districts": {
            "광산구": (35.1958, 126.7934),
        },
    },
    "대전": {
        "name_en": "Daejeon",
        "center": (36.3504, 127.3845),
        "districts": {
            "유성구": (36.3625, 127.3564),
            "대덕구": (36.3465, 127.4148),
        },
    },
    "울산": {
        "name_en": "Ulsan",
        "center": (35.5384, 129.3114),
        "districts": {
            "울주군": (35.5225, 129.2428),
        },
    },
    "세종": {"name_en": "Sejong", "center": (36.4800, 127.2890)},
    "수원": {"name_en": "Suwon", "center": (37.2636, 127.0286)},
    "성남": {"name_en": "Seongnam", "center": (37.4201, 127.1262)},
    "고양": {"name_en": "Goyang", "center": (37.6564, 126.8347)},
    "용인": {"name_en": "Yongin", "center": (37.2411, 127.1776)},
    "청주": {"name_en": "Cheongju", "center": (36.6424, 127.4890)},
    "천안": {"name_en": "Cheonan", "center": (36.8151, 127.1139)},
    "전주": {"name_en": "Jeonju", "center": (35.8242, 127.1480)},
    "포항": {"name_en": "Pohang", "center": (36.0190, 129.3435)},
    "창원": {"name_en": "Changwon", "center": (35.2281, 128.6811)},
    "제주": {"name_en": "Jeju", "center": (33.4996, 126.5312)},
    "서귀포": {"name_en": "Seogwipo", "center": (33.2541, 126.5601)},
}

_DISTRICT_SUFFIXES = ("구", "군")


def _normalize(text: Optional[str]) -> str:
    if not text:
        return ""
    return " ".join(text.strip().lower().split())


def _to_location(name: str, district: Optional[str] = None) -> CityLocation:
    entry = KR_CITY_REGISTRY[name]
    point: Tuple[float, float] = entry["center"]  # type: ignore[assignment]
    if district:
        point = entry["districts"][district]  # type: ignore[index]
    return CityLocation(
        name=name,
        name_en=str(entry["name_en"]),
        coordinate=Coordinate(lat=point[0], lng=point[1]),
        district=district,
    )


def _exact_city(needle: str) -> Optional[str]:
    for name, entry in KR_CITY_REGISTRY.items():
        if needle in (name, str(entry["name_en"]).lower()):
            return name
    return None


def _districts(name: str) -> Dict[str, Tuple[float, float]]:
    return KR_CITY_REGISTRY[name].get("districts", {})  # type: ignore[return-value]


def find_city(text: Optional[str]) -> Optional[CityLocation]:
    """Exact Korean/English match first, then containment either way.

    Tokens ending in a district suffix ("해운대구", "기장군") are ignored, so
    a district is never read as the city whose name it happens to contain.
    """
    needle = _normalize(text)
    if not needle:
        return None

    exact = _exact_city(needle)
    if exact is not None:
        return _to_location(exact)

    tokens = [t for t in needle.split() if _exact_city(t) or not t.endswith(_DISTRICT_SUFFIXES)]
    for token in tokens:
        exact = _exact_city(token)
        if exact is not None:
            return _to_location(exact)

    for token in tokens:
        for name, entry in KR_CITY_REGISTRY.items():
            name_en = str(entry["name_en"]).lower()
            if token in name or token in name_en or name in token or name_en in token:
                return _to_location(name)
    return None


def find_district(text: Optional[str]) -> Optional[CityLocation]:
    needle = _normalize(text)
    if not needle:
        return None
    for name in KR_CITY_REGISTRY:
        if needle in _districts(name):
            return _to_location(name, needle)
    for name in KR_CITY_REGISTRY:
        for district in _districts(name):
            if needle in district or district in needle:
                return _to_location(name, district)
    return None


def find_nearest_city(coord: Coordinate) -> CityLocation:
    best_name = ""
    best_km = float("inf")
    for name, entry in KR_CITY_REGISTRY.items():
        lat, lng = entry["center"]  # type: ignore[misc]
        dist = haversine_km(coord.lat, coord.lng, lat, lng)
        if dist < best_km:
            best_name, best_km = name, dist
    return _to_location(best_name)


def resolve_location(text: Optional[str]) -> Optional[CityLocation]:
    """Resolve "서울 강남구", "Busan" or "해운대구" to a coordinate.

    Exact names win over partial ones, so "해운대구" is not read as "대구".
    """
    needle = _normalize(text)
    if not needle:
        return None

    tokens: List[str] = needle.split()
    city = _exact_city(tokens[0])
    if city is not None:
        for token in tokens[1:]:
            if token in _districts(city):
                return _to_location(city, token)
        return _to_location(city)

    for name in KR_CITY_REGISTRY:
        if needle in _districts(name):
            return _to_location(name, needle)

    return find_city(needle) or find_district(needle)
