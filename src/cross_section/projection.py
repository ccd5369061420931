"""Coordinate reprojection between geodetic and projected CRSs.

The engine only talks to pyproj through :func:`project`, so any other callable
with the same signature can stand in for it (tests use an identity projector).
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Sequence
from functools import lru_cache

from pyproj import CRS, Geod, Transformer
from pyproj.exceptions import CRSError, ProjError

from .errors import ProjectionError
from .models import ProjectionInfo

logger = logging.getLogger(__name__)

Projector = Callable[[str, str, tuple[float, float]], tuple[float, float]]

GEODETIC_CRS = "EPSG:4326"

_GEOD = Geod(ellps="WGS84")

# UTM zones covering the Indonesian archipelago, where the block models come from
_UTM_REGIONS = {
    46: "West Indonesia",
    47: "West Indonesia",
    48: "Central Indonesia",
    49: "Central Indonesia",
    50: "East Indonesia",
    51: "East Indonesia",
    52: "Papua",
}


def _build_catalogue() -> list[ProjectionInfo]:
    catalogue = [ProjectionInfo(code=GEODETIC_CRS, name="WGS84 (EPSG:4326)", description="GPS coordinates")]
    for hemisphere, prefix in (("N", 326), ("S", 327)):
        label = "North" if hemisphere == "N" else "South"
        for zone, region in _UTM_REGIONS.items():
            code = f"EPSG:{prefix}{zone}"
            catalogue.append(
                ProjectionInfo(
                    code=code,
                    name=f"UTM Zone {zone}{hemisphere} ({code})",
                    description=f"{region} ({label})",
                )
            )
    return catalogue


PROJECTIONS: list[ProjectionInfo] = _build_catalogue()


@lru_cache(maxsize=64)
def _transformer(from_crs: str, to_crs: str) -> Transformer:
    return Transformer.from_crs(from_crs, to_crs, always_xy=True)


def project(from_crs: str, to_crs: str, xy: tuple[float, float]) -> tuple[float, float]:
    """Transform one ``(x, y)`` coordinate; x is longitude/easting.

    Raises ProjectionError for unknown CRS codes, out-of-domain input or
    non-finite output.
    """
    x, y = float(xy[0]), float(xy[1])
    if from_crs == to_crs:
        return x, y

    try:
        tx, ty = _transformer(from_crs, to_crs).transform(x, y, errcheck=True)
    except (CRSError, ProjError) as exc:
        raise ProjectionError(f"Cannot transform ({x}, {y}): {exc}", from_crs, to_crs) from exc

    if not (math.isfinite(tx) and math.isfinite(ty)):
        raise ProjectionError(f"Transform of ({x}, {y}) is not finite", from_crs, to_crs)
    return tx, ty


def to_projected(
    xy: tuple[float, float],
    from_crs: str,
    to_crs: str,
    projector: Projector | None = None,
) -> tuple[float, float]:
    """Best-effort :func:`project`: on failure the coordinate is returned unchanged."""
    projector = projector or project
    try:
        tx, ty = projector(from_crs, to_crs, xy)
        tx, ty = float(tx), float(ty)
    except (ProjectionError, ValueError, TypeError) as exc:
        logger.debug("Projection %s -> %s failed, keeping original coordinate: %s", from_crs, to_crs, exc)
        return float(xy[0]), float(xy[1])

    if not (math.isfinite(tx) and math.isfinite(ty)):
        logger.debug("Projection %s -> %s gave a non-finite result for %s", from_crs, to_crs, xy)
        return float(xy[0]), float(xy[1])
    return tx, ty


def validate_projection(code: str) -> bool:
    """Return True if ``code`` names a CRS pyproj understands."""
    try:
        CRS.from_user_input(code)
    except CRSError:
        return False
    return True


def is_geodetic(x: float, y: float) -> bool:
    """True when a coordinate lies strictly inside the longitude/latitude domain."""
    return -180 < x < 180 and -90 < y < 90


def looks_geodetic(coords: Sequence[tuple[float, float]], sample_size: int = 100) -> bool:
    """Guess whether a point cloud is geodetic from the extent of its first points."""
    sample = coords[:sample_size]
    if not sample:
        return False
    xs = [c[0] for c in sample]
    ys = [c[1] for c in sample]
    return min(xs) >= -180 and max(xs) <= 180 and min(ys) >= -90 and max(ys) <= 90


def line_length_m(start_lat: float, start_lng: float, end_lat: float, end_lng: float) -> float:
    """Geodesic length of the section line on the WGS84 ellipsoid, in metres."""
    _, _, distance = _GEOD.inv(start_lng, start_lat, end_lng, end_lat)
    return float(distance)
