"""Map heterogeneous raw records onto the canonical input models.

Block models, elevation grids and pit boundaries arrive from several file
formats, each with its own column names. Records that lack a required value
are skipped without raising.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from .config import DEFAULT_SETTINGS, Settings
from .models import Block, ElevationPoint, PitPoint, PitSample

logger = logging.getLogger(__name__)

BLOCK_X_FIELDS = ("centroid_x", "x", "X", "easting")
BLOCK_Y_FIELDS = ("centroid_y", "y", "Y", "northing")
BLOCK_Z_FIELDS = ("centroid_z", "z", "Z", "elevation")
BLOCK_WIDTH_FIELDS = ("dim_x", "xinc", "width")
BLOCK_HEIGHT_FIELDS = ("dim_z", "zinc", "height")
ROCK_FIELDS = ("rock", "Rock", "ROCK")

ELEVATION_X_FIELDS = ("x", "lon", "lng", "longitude", "easting")
ELEVATION_Y_FIELDS = ("y", "lat", "latitude", "northing")
ELEVATION_Z_FIELDS = ("elevation", "z", "elev", "height", "alt", "altitude")

PIT_Z_FIELDS = ("z", "level", "elevation")

ROCK_COLORS = {
    "ore": "#b40c0d",
    "waste": "#606060",
    "overburden": "#a37c75",
    "lim": "#045993",
    "sap": "#75499c",
    "unknown": "#CCCCCC",
}
DEFAULT_ROCK_COLOR = "#CCCCCC"


def rock_color(rock: str | None) -> str:
    """Display colour for a rock type, case-insensitive."""
    if not isinstance(rock, str):
        return DEFAULT_ROCK_COLOR
    return ROCK_COLORS.get(rock.lower(), DEFAULT_ROCK_COLOR)


def to_float(value: Any) -> float | None:
    """Parse a numeric cell; blanks, junk and non-finite values give None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _first_float(record: Mapping[str, Any], fields: Sequence[str], positive: bool = False) -> float | None:
    for field in fields:
        number = to_float(record.get(field))
        if number is not None and (number > 0 or not positive):
            return number
    return None


def _first_text(record: Mapping[str, Any], fields: Sequence[str]) -> str | None:
    for field in fields:
        value = record.get(field)
        if value is not None and str(value).strip():
            return str(value).strip()
    return None


def normalize_block(record: Mapping[str, Any], settings: Settings = DEFAULT_SETTINGS) -> Block | None:
    """Build a Block from one raw record, or None if it is unusable."""
    x = _first_float(record, BLOCK_X_FIELDS)
    y = _first_float(record, BLOCK_Y_FIELDS)
    z = _first_float(record, BLOCK_Z_FIELDS)
    if x is None or y is None or z is None:
        return None

    width = _first_float(record, BLOCK_WIDTH_FIELDS, positive=True)
    height = _first_float(record, BLOCK_HEIGHT_FIELDS, positive=True)
    if width is None and height is None:
        return None

    return Block(
        x=x,
        y=y,
        z=z,
        width=width if width is not None else settings.default_block_size,
        height=height if height is not None else settings.default_block_size,
        rock=_first_text(record, ROCK_FIELDS) or "unknown",
        color=_first_text(record, ("color", "colour")),
        concentrate=to_float(record.get("concentrate")),
    )


def normalize_blocks(
    records: Iterable[Mapping[str, Any]],
    settings: Settings = DEFAULT_SETTINGS,
) -> list[Block]:
    blocks: list[Block] = []
    skipped = 0
    for record in records:
        block = normalize_block(record, settings)
        if block is None:
            skipped += 1
        else:
            blocks.append(block)
    if skipped:
        logger.debug("Skipped %d block records without a usable centroid or extent", skipped)
    return blocks


def normalize_elevation_points(records: Iterable[Mapping[str, Any]]) -> list[ElevationPoint]:
    """Build ElevationPoints, dropping incomplete rows and ``(0, 0)`` placeholders."""
    points: list[ElevationPoint] = []
    skipped = 0
    for record in records:
        x = _first_float(record, ELEVATION_X_FIELDS)
        y = _first_float(record, ELEVATION_Y_FIELDS)
        z = _first_float(record, ELEVATION_Z_FIELDS)
        if x is None or y is None or z is None or (x == 0 and y == 0):
            skipped += 1
            continue
        points.append(ElevationPoint(x=x, y=y, z=z))
    if skipped:
        logger.debug("Skipped %d elevation records", skipped)
    return points


def _iter_vertices(coordinates: Any) -> Iterable[Sequence[Any]]:
    """Yield every ``[x, y, ...]`` position from nested GeoJSON coordinates."""
    if not isinstance(coordinates, (list, tuple)) or not coordinates:
        return
    if not isinstance(coordinates[0], (list, tuple)):
        yield coordinates
        return
    for child in coordinates:
        yield from _iter_vertices(child)


def _feature_pit_points(feature: Mapping[str, Any]) -> list[PitPoint]:
    geometry = feature.get("geometry") or {}
    properties = feature.get("properties") or {}
    level = _first_float(properties, ("level", "z", "elevation"))
    if level is None:
        return []

    points = []
    for position in _iter_vertices(geometry.get("coordinates")):
        if len(position) < 2:
            continue
        x, y = to_float(position[0]), to_float(position[1])
        if x is not None and y is not None:
            points.append(PitPoint(x=x, y=y, z=level))
    return points


def normalize_pit_records(
    records: Iterable[Mapping[str, Any]],
) -> tuple[list[PitPoint], list[PitSample]]:
    """Split raw pit records into raw geometry vertices and pre-computed samples.

    Accepted shapes:
    - ``{"distance": ..., "elevation": ...}``: a pre-computed sample
    - a GeoJSON feature: every vertex, at ``properties.level``
    - ``{"x": ..., "y": ..., "z"|"level"|"elevation": ...}``: one vertex
    """
    points: list[PitPoint] = []
    samples: list[PitSample] = []
    for record in records:
        if "distance" in record:
            distance = to_float(record.get("distance"))
            elevation = to_float(record.get("elevation"))
            if distance is not None and elevation is not None:
                samples.append(PitSample(distance=distance, elevation=elevation))
        elif "geometry" in record:
            points.extend(_feature_pit_points(record))
        else:
            x = to_float(record.get("x"))
            y = to_float(record.get("y"))
            z = _first_float(record, PIT_Z_FIELDS)
            if x is not None and y is not None and z is not None:
                points.append(PitPoint(x=x, y=y, z=z))
    return points, samples
