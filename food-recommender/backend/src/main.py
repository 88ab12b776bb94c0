from __future__ import annotations

import sys
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from pydantic import BaseModel, Field

from config import Configuration
from models import Coordinate, GridCoordinate, WeatherReading
from services.cities import resolve_location
from services.grid_projection import OutOfDomainError, ProjectionRangeError, to_coordinate, to_grid
from services.history_store import JsonFileHistoryStore, record_query, record_selection
from services.integrated_scoring import InsufficientCategoriesError, IntegratedScorer
from services.preferences import day_selection_stats
from services.weather_analysis import analyze_reading, weather_summary
from services.weather_scoring import score_all_categories, select_top_categories
from utils import normalize_weekday


app = FastAPI(title="Food Category Recommender")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class CoordinatePayload(BaseModel):
    lat: float = Field(..., description="Latitude, 33.0 ~ 38.9")
    lng: float = Field(..., description="Longitude, 124.0 ~ 132.0")


class GridPayload(BaseModel):
    x: int = Field(..., description="Grid x, 1 ~ 149")
    y: int = Field(..., description="Grid y, 1 ~ 253")


class WeatherPayload(BaseModel):
    temperature_celsius: Optional[float] = None
    humidity_percent: Optional[float] = None


class ConditionsPayload(BaseModel):
    temperature: str
    humidity: str
    actual_temperature: Optional[float] = None
    actual_humidity: Optional[float] = None
    summary: str


class ScoredPayload(BaseModel):
    id: int
    name: str
    name_ko: str
    serve_temp: str
    description: str = ""
    score: float
    rank: int
    reason: str


class EvaluateResponse(BaseModel):
    weather: ConditionsPayload
    top_categories: List[ScoredPayload]
    total_categories_evaluated: int


class RecommendRequest(BaseModel):
    satiety: int = Field(..., description="1 = full, 2 = moderate, 3 = very hungry")
    weather: Optional[WeatherPayload] = Field(None, description="Current reading; omitted means unknown")
    weekday: Optional[str] = Field(None, description="Monday..Sunday; defaults to today")


class RecommendResponse(BaseModel):
    weather: ConditionsPayload
    weekday: str
    top_categories: List[ScoredPayload]


class QueryRequest(BaseModel):
    text: str


class SelectionRequest(BaseModel):
    selected_food: str
    category: Optional[str] = None
    restaurant_name: Optional[str] = None


def _history_store(cfg: Configuration) -> JsonFileHistoryStore:
    return JsonFileHistoryStore(cfg.history_path)


def _conditions_payload(reading: Optional[WeatherPayload]) -> tuple:
    raw = WeatherReading(**reading.model_dump()) if reading is not None else None
    conditions = analyze_reading(raw)
    payload = ConditionsPayload(
        temperature=conditions.temperature.value,
        humidity=conditions.humidity.value,
        actual_temperature=conditions.actual_temperature,
        actual_humidity=conditions.actual_humidity,
        summary=weather_summary(conditions),
    )
    return conditions, payload


@app.get("/healthz")
def healthz() -> dict:
    return {"status": "ok"}


@app.post("/grid", response_model=GridPayload)
def grid(req: CoordinatePayload) -> GridPayload:
    try:
        cell = to_grid(Coordinate(lat=req.lat, lng=req.lng))
    except OutOfDomainError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except ProjectionRangeError as exc:
        logger.error("projection failed for in-domain input {}: {}", req, exc)
        raise HTTPException(status_code=500, detail="internal error")
    return GridPayload(x=cell.x, y=cell.y)


@app.post("/grid/inverse", response_model=CoordinatePayload)
def grid_inverse(req: GridPayload) -> CoordinatePayload:
    try:
        coord = to_coordinate(GridCoordinate(x=req.x, y=req.y))
    except OutOfDomainError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return CoordinatePayload(lat=coord.lat, lng=coord.lng)


@app.post("/weather/evaluate", response_model=EvaluateResponse)
def evaluate(req: WeatherPayload) -> EvaluateResponse:
    cfg = Configuration.from_env()
    conditions, payload = _conditions_payload(req)
    scored = score_all_categories(conditions)
    top = select_top_categories(scored, cfg.weather_top_n)
    return EvaluateResponse(
        weather=payload,
        top_categories=[ScoredPayload(**s.to_dict()) for s in top],
        total_categories_evaluated=len(scored),
    )


@app.post("/recommend", response_model=RecommendResponse)
def recommend(req: RecommendRequest) -> RecommendResponse:
    try:
        cfg = Configuration.from_env()
        cfg.require_valid_top_n()
        day = normalize_weekday(req.weekday)
        conditions, payload = _conditions_payload(req.weather)
        scorer = IntegratedScorer(_history_store(cfg), top_n=cfg.top_n)
        top = scorer.calculate_top_categories(conditions, req.satiety, day)
        logger.info(
            "recommendation satiety={} weather={} top={}",
            req.satiety,
            payload.summary,
            [s.name_ko for s in top],
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except InsufficientCategoriesError as exc:
        logger.error("catalog unusable: {}", exc)
        raise HTTPException(status_code=500, detail="internal error")
    except Exception as exc:
        logger.exception("recommendation failed: {}", exc)
        raise HTTPException(status_code=500, detail="internal error")

    return RecommendResponse(
        weather=payload,
        weekday=day,
        top_categories=[ScoredPayload(**s.to_dict()) for s in top],
    )


@app.post("/history/query")
def history_query(req: QueryRequest) -> Dict[str, Any]:
    cfg = Configuration.from_env()
    entry = record_query(_history_store(cfg), req.text)
    return {"ok": True, "day": entry.weekday}


@app.post("/history/selection")
def history_selection(req: SelectionRequest) -> Dict[str, Any]:
    if not req.selected_food.strip():
        raise HTTPException(status_code=400, detail="selected_food is required")
    cfg = Configuration.from_env()
    entry = record_selection(
        _history_store(cfg),
        req.selected_food,
        category=req.category,
        restaurant_name=req.restaurant_name,
    )
    return {"ok": True, "day": entry.weekday, "message": entry.raw_text}


@app.get("/history/stats")
def history_stats(weekday: Optional[str] = None) -> Dict[str, Any]:
    cfg = Configuration.from_env()
    try:
        entries = _history_store(cfg).read_all_entries()
        stats = day_selection_stats(entries, weekday)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return {
        "day": stats.day,
        "day_ko": stats.day_ko,
        "total_selections": stats.total_selections,
        "top_selections": [s.__dict__ for s in stats.top_selections],
    }


@app.get("/locations/resolve")
def locations_resolve(q: str) -> Dict[str, Any]:
    location = resolve_location(q)
    if location is None:
        raise HTTPException(status_code=404, detail=f"unknown location: {q}")
    cell = to_grid(location.coordinate)
    return {
        "name": location.name,
        "name_en": location.name_en,
        "district": location.district,
        "lat": location.coordinate.lat,
        "lng": location.coordinate.lng,
        "grid": {"x": cell.x, "y": cell.y},
    }


def run() -> None:
    import uvicorn

    load_dotenv()
    cfg = Configuration.from_env()
    logger.remove()
    logger.add(sys.stderr, level=cfg.log_level.upper())
    logger.info("cfg: {}", cfg.log_summary())
    uvicorn.run("main:app", host=cfg.api_host, port=cfg.api_port, reload=False)


if __name__ == "__main__":
    run()
