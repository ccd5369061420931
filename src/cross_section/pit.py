"""Project pit-boundary samples onto the distance axis of a section line."""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

import numpy as np

from .config import DEFAULT_SETTINGS, Settings
from .models import PitPoint, PitProfilePoint, PitSample
from .projection import Projector, is_geodetic, looks_geodetic, to_projected

logger = logging.getLogger(__name__)


def project_pit(pit_points: Sequence[PitSample]) -> list[PitProfilePoint]:
    """Order pre-computed ``(distance, elevation)`` samples along the line."""
    try:
        profile = [
            PitProfilePoint(distance=p.distance, elevation=p.elevation)
            for p in pit_points
            if math.isfinite(p.distance) and math.isfinite(p.elevation)
        ]
        profile.sort(key=lambda p: p.distance)
        return profile
    except Exception:
        logger.exception("Pit projection failed")
        return []


def project_pit_geometry(
    pit_points: Sequence[PitPoint],
    source_projection: str,
    start_lat: float,
    start_lng: float,
    end_lat: float,
    end_lng: float,
    line_length: float,
    *,
    settings: Settings | None = None,
    projector: Projector | None = None,
) -> list[PitProfilePoint]:
    """Project raw pit-boundary vertices onto the section line.

    Vertices within ``pit_max_distance`` of the line segment are kept at
    ``ratio * line_length``, the ratio clamped to the segment. Gaps are not
    filled in.
    """
    settings = settings or DEFAULT_SETTINGS
    if not pit_points:
        return []
    try:
        start = to_projected((start_lng, start_lat), settings.geodetic_crs, source_projection, projector)
        end = to_projected((end_lng, end_lat), settings.geodetic_crs, source_projection, projector)
        geodetic = looks_geodetic([(p.x, p.y) for p in pit_points], settings.geodetic_sample_size)

        xy = []
        for p in pit_points:
            point = (p.x, p.y)
            if geodetic and is_geodetic(p.x, p.y):
                point = to_projected(point, settings.geodetic_crs, source_projection, projector)
            xy.append(point)

        origin = np.asarray(start, dtype=np.float64)
        direction = np.asarray(end, dtype=np.float64) - origin
        length_sq = float(np.dot(direction, direction))
        if length_sq == 0:
            logger.debug("Section line has zero length, no pit vertices projected")
            return []

        offsets = np.asarray(xy, dtype=np.float64) - origin
        ratios = np.clip(offsets @ direction / length_sq, 0.0, 1.0)
        perp_dist = np.hypot(*(offsets - np.outer(ratios, direction)).T)
        near = perp_dist < settings.pit_max_distance

        elevations = np.array([p.z for p in pit_points], dtype=np.float64)
        order = np.argsort(ratios[near], kind="stable")
        profile = [
            PitProfilePoint(distance=float(ratio * line_length), elevation=float(z))
            for ratio, z in zip(ratios[near][order], elevations[near][order])
        ]
        logger.debug("%d of %d pit vertices lie near the section", len(profile), len(pit_points))
        return profile
    except Exception:
        logger.exception("Pit projection failed")
        return []
