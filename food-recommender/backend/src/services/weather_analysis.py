from __future__ import annotations

from typing import Optional

from models import HumidityClass, TemperatureClass, WeatherConditions, WeatherReading

HOT_THRESHOLD_C = 28.0
MODERATE_THRESHOLD_C = 18.0
HIGH_HUMIDITY_PCT = 70.0
MODERATE_HUMIDITY_PCT = 40.0


def classify_temperature(celsius: Optional[float]) -> TemperatureClass:
    if celsius is None:
        return TemperatureClass.MODERATE
    if celsius >= HOT_THRESHOLD_C:
        return TemperatureClass.HOT
    if celsius >= MODERATE_THRESHOLD_C:
        return TemperatureClass.MODERATE
    return TemperatureClass.COLD


def classify_humidity(percent: Optional[float]) -> HumidityClass:
    if percent is None:
        return HumidityClass.MODERATE
    if percent >= HIGH_HUMIDITY_PCT:
        return HumidityClass.HIGH
    if percent >= MODERATE_HUMIDITY_PCT:
        return HumidityClass.MODERATE
    return HumidityClass.LOW


def analyze_reading(reading: Optional[WeatherReading]) -> WeatherConditions:
    """Turn a raw reading into the buckets used for scoring. None is neutral."""
    if reading is None:
        return neutral_conditions()
    return WeatherConditions(
        temperature=classify_temperature(reading.temperature_celsius),
        humidity=classify_humidity(reading.humidity_percent),
        actual_temperature=reading.temperature_celsius,
        actual_humidity=reading.humidity_percent,
    )


def neutral_conditions() -> WeatherConditions:
    return WeatherConditions(
        temperature=TemperatureClass.MODERATE,
        humidity=HumidityClass.MODERATE,
    )


_TEMPERATURE_TEXT = {
    TemperatureClass.HOT: "더운 날씨 (28°C 이상)",
    TemperatureClass.MODERATE: "온화한 날씨 (18-27°C)",
    TemperatureClass.COLD: "추운 날씨 (17°C 이하)",
}

_HUMIDITY_TEXT = {
    HumidityClass.HIGH: "높은 습도 (70% 이상)",
    HumidityClass.MODERATE: "보통 습도 (40-69%)",
    HumidityClass.LOW: "낮은 습도 (39% 이하)",
}


def describe_temperature(temperature: TemperatureClass) -> str:
    return _TEMPERATURE_TEXT.get(temperature, "알 수 없는 온도")


def describe_humidity(humidity: HumidityClass) -> str:
    return _HUMIDITY_TEXT.get(humidity, "알 수 없는 습도")


def weather_summary(conditions: WeatherConditions) -> str:
    return f"{describe_temperature(conditions.temperature)}, {describe_humidity(conditions.humidity)}"
