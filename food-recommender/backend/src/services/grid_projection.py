"""Lambert Conformal Conic conversion between lat/lng and the forecast grid.

The forecast provider addresses its 5 km cells by integer (x, y). The
projection uses two standard parallels (30N, 60N) and a reference point at
38N 126E that maps to grid (43, 136).
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict

from loguru import logger

from models import Coordinate, GridCoordinate

EARTH_RADIUS_KM = 6371.00877
GRID_KM = 5.0
SLAT1 = 30.0
SLAT2 = 60.0
OLON = 126.0
OLAT = 38.0
XO = 43
YO = 136

LAT_MIN, LAT_MAX = 33.0, 38.9
LNG_MIN, LNG_MAX = 124.0, 132.0
X_MIN, X_MAX = 1, 149
Y_MIN, Y_MAX = 1, 253

DEGRAD = math.pi / 180.0
RADDEG = 180.0 / math.pi


class OutOfDomainError(ValueError):
    """Input lies outside the supported bounding box or grid."""


class ProjectionRangeError(RuntimeError):
    """A projected grid cell fell outside the grid for in-domain input."""


@dataclass(frozen=True)
class _Projection:
    re: float
    sn: float
    sf: float
    ro: float


def _projection() -> _Projection:
    re = EARTH_RADIUS_KM / GRID_KM
    slat1 = SLAT1 * DEGRAD
    slat2 = SLAT2 * DEGRAD
    olat = OLAT * DEGRAD

    sn = math.tan(math.pi * 0.25 + slat2 * 0.5) / math.tan(math.pi * 0.25 + slat1 * 0.5)
    sn = math.log(math.cos(slat1) / math.cos(slat2)) / math.log(sn)

    sf = math.tan(math.pi * 0.25 + slat1 * 0.5)
    sf = math.pow(sf, sn) * math.cos(slat1) / sn

    ro = math.tan(math.pi * 0.25 + olat * 0.5)
    ro = re * sf / math.pow(ro, sn)
    return _Projection(re=re, sn=sn, sf=sf, ro=ro)


_PROJ = _projection()


def in_domain(coord: Coordinate) -> bool:
    return LAT_MIN <= coord.lat <= LAT_MAX and LNG_MIN <= coord.lng <= LNG_MAX


def _grid_in_range(x: int, y: int) -> bool:
    return X_MIN <= x <= X_MAX and Y_MIN <= y <= Y_MAX


def to_grid(coord: Coordinate) -> GridCoordinate:
    """Project a coordinate onto the forecast grid.

    Raises:
        OutOfDomainError: coord is outside lat [33.0, 38.9] / lng [124.0, 132.0].
        ProjectionRangeError: the projected cell is outside [1,149] x [1,253].
    """
    if not in_domain(coord):
        raise OutOfDomainError(
            f"coordinate outside supported area: lat={coord.lat} ({LAT_MIN}~{LAT_MAX}), "
            f"lng={coord.lng} ({LNG_MIN}~{LNG_MAX})"
        )

    p = _PROJ
    ra = math.tan(math.pi * 0.25 + coord.lat * DEGRAD * 0.5)
    ra = p.re * p.sf / math.pow(ra, p.sn)

    theta = coord.lng * DEGRAD - OLON * DEGRAD
    if theta > math.pi:
        theta -= 2.0 * math.pi
    if theta < -math.pi:
        theta += 2.0 * math.pi
    theta *= p.sn

    x = math.floor(ra * math.sin(theta) + XO + 0.5)
    y = math.floor(p.ro - ra * math.cos(theta) + YO + 0.5)

    if not _grid_in_range(x, y):
        raise ProjectionRangeError(
            f"projected grid outside range: x={x} ({X_MIN}~{X_MAX}), y={y} ({Y_MIN}~{Y_MAX})"
        )
    return GridCoordinate(x=x, y=y)


def to_coordinate(grid: GridCoordinate) -> Coordinate:
    """Inverse projection. Accurate to the grid cell (about 0.03 degrees)."""
    if not _grid_in_range(grid.x, grid.y):
        raise OutOfDomainError(
            f"grid outside range: x={grid.x} ({X_MIN}~{X_MAX}), y={grid.y} ({Y_MIN}~{Y_MAX})"
        )

    p = _PROJ
    xn = grid.x - XO
    yn = p.ro - grid.y + YO
    ra = math.sqrt(xn * xn + yn * yn)
    if p.sn < 0.0:
        ra = -ra

    alat = math.pow(p.re * p.sf / ra, 1.0 / p.sn)
    alat = 2.0 * math.atan(alat) - math.pi * 0.5

    if abs(xn) <= 0.0:
        theta = 0.0
    elif abs(yn) <= 0.0:
        theta = math.pi * 0.5
        if xn < 0.0:
            theta = -theta
    else:
        theta = math.atan2(xn, yn)

    alon = theta / p.sn + OLON * DEGRAD
    coord = Coordinate(lat=alat * RADDEG, lng=alon * RADDEG)
    if not in_domain(coord):
        logger.warning("inverse projection left supported area: grid={} -> {}", grid, coord)
    return coord


def validate_conversion(coord: Coordinate, tolerance: float = 0.03) -> Dict[str, object]:
    """Round-trip coord through the grid and report the error per axis."""
    try:
        grid = to_grid(coord)
    except (OutOfDomainError, ProjectionRangeError):
        return {
            "is_valid": False,
            "original": coord,
            "grid": None,
            "converted": None,
            "error": {"lat": math.inf, "lng": math.inf},
        }
    converted = to_coordinate(grid)
    lat_err = abs(coord.lat - converted.lat)
    lng_err = abs(coord.lng - converted.lng)
    return {
        "is_valid": lat_err <= tolerance and lng_err <= tolerance,
        "original": coord,
        "grid": grid,
        "converted": converted,
        "error": {"lat": lat_err, "lng": lng_err},
    }
