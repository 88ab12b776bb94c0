from __future__ import annotations

import pytest

from models import Coordinate, GridCoordinate
from services.grid_projection import (
    OutOfDomainError,
    ProjectionRangeError,
    to_coordinate,
    to_grid,
    validate_conversion,
)

CITIES = {
    "seoul": Coordinate(37.5663, 126.9779),
    "busan": Coordinate(35.1796, 129.0756),
    "daejeon": Coordinate(36.3504, 127.3845),
    "gwangju": Coordinate(35.1595, 126.8526),
    "daegu": Coordinate(35.8714, 128.6014),
    "incheon": Coordinate(37.4563, 126.7052),
}


def test_known_city_cells() -> None:
    assert to_grid(CITIES["seoul"]) == GridCoordinate(60, 127)
    assert to_grid(CITIES["busan"]) == GridCoordinate(98, 76)


def test_in_range_edges_project() -> None:
    for coord in (
        Coordinate(33.0, 126.5),
        Coordinate(38.9, 127.0),
        Coordinate(35.0, 124.0),
        Coordinate(37.0, 132.0),
    ):
        cell = to_grid(coord)
        assert 1 <= cell.x <= 149
        assert 1 <= cell.y <= 253


def test_outside_bounding_box_rejected() -> None:
    with pytest.raises(OutOfDomainError):
        to_grid(Coordinate(32.999, 127.0))
    with pytest.raises(OutOfDomainError):
        to_grid(Coordinate(37.0, 132.001))
    with pytest.raises(ValueError):
        to_grid(Coordinate(40.0, 127.0))


def test_round_trip_within_a_cell() -> None:
    for coord in CITIES.values():
        back = to_coordinate(to_grid(coord))
        assert abs(back.lat - coord.lat) <= 0.03
        assert abs(back.lng - coord.lng) <= 0.03


def test_inverse_rejects_grid_outside_range() -> None:
    with pytest.raises(OutOfDomainError):
        to_coordinate(GridCoordinate(0, 100))
    with pytest.raises(OutOfDomainError):
        to_coordinate(GridCoordinate(60, 254))


def test_reference_cell_maps_to_origin() -> None:
    coord = to_coordinate(GridCoordinate(43, 136))
    assert abs(coord.lat - 38.0) < 1e-6
    assert abs(coord.lng - 126.0) < 1e-6


def test_validate_conversion_reports_errors() -> None:
    report = validate_conversion(CITIES["seoul"])
    assert report["is_valid"] is True
    assert report["grid"] == GridCoordinate(60, 127)

    outside = validate_conversion(Coordinate(20.0, 127.0))
    assert outside["is_valid"] is False
    assert outside["grid"] is None


def test_south_east_corner_falls_off_grid() -> None:
    # inside the bounding box, but x projects to 153
    with pytest.raises(ProjectionRangeError):
        to_grid(Coordinate(33.0, 132.0))
    report = validate_conversion(Coordinate(33.0, 132.0))
    assert report["is_valid"] is False
