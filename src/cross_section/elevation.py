"""Sample a scattered terrain point cloud along a section line."""

from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np
from scipy.spatial import cKDTree

from .config import DEFAULT_SETTINGS, Settings
from .geometry import interpolate
from .models import ElevationPoint, ElevationProfilePoint
from .projection import Projector, is_geodetic, looks_geodetic, to_projected

logger = logging.getLogger(__name__)


def convert_to_projected(
    points: Sequence[ElevationPoint],
    source_projection: str,
    settings: Settings,
    projector: Projector | None = None,
) -> list[tuple[float, float, float]]:
    """Return ``(x, y, z)`` triples in the metric CRS.

    A point cloud whose leading sample fits the longitude/latitude domain is
    treated as geodetic and reprojected point by point; anything else is taken
    to be projected already.
    """
    coords = [(p.x, p.y) for p in points]
    if not looks_geodetic(coords, settings.geodetic_sample_size):
        return [(p.x, p.y, p.z) for p in points]

    logger.debug("Elevation points look geodetic, reprojecting to %s", source_projection)
    converted = []
    for p in points:
        x, y = p.x, p.y
        if is_geodetic(x, y):
            x, y = to_projected((x, y), settings.geodetic_crs, source_projection, projector)
        converted.append((x, y, p.z))
    return converted


def _build_tree(cloud: Sequence[tuple[float, float, float]]) -> tuple[cKDTree | None, np.ndarray]:
    """KD-tree over the cloud's XY and the matching elevations."""
    if not cloud:
        return None, np.empty(0)
    data = np.asarray(cloud, dtype=np.float64)
    return cKDTree(data[:, :2]), data[:, 2]


def idw_elevation(
    positions: np.ndarray,
    tree: cKDTree,
    values: np.ndarray,
    cutoff: float,
    epsilon: float,
) -> list[float | None]:
    """Inverse-distance-weighted elevations from points within ``cutoff``.

    Weights are ``1 / (d**2 + epsilon)``. A position with no point close
    enough gets None.
    """
    positions = np.atleast_2d(np.asarray(positions, dtype=np.float64))
    estimates: list[float | None] = []
    for position, neighbours in zip(positions, tree.query_ball_point(positions, r=cutoff)):
        if not neighbours:
            estimates.append(None)
            continue
        neighbours = np.asarray(neighbours)
        d = np.hypot(*(tree.data[neighbours] - position).T)
        weights = 1.0 / (d**2 + epsilon)
        estimates.append(float((weights * values[neighbours]).sum() / weights.sum()))
    return estimates


def sample_elevation(
    elevation_points: Sequence[ElevationPoint],
    source_projection: str,
    start_lat: float,
    start_lng: float,
    end_lat: float,
    end_lng: float,
    line_length: float,
    *,
    settings: Settings | None = None,
    projector: Projector | None = None,
) -> list[ElevationProfilePoint]:
    """Build an evenly spaced elevation profile along the section line.

    ``elevation_sample_count`` intervals give ``elevation_sample_count + 1``
    samples from distance 0 to ``line_length``. Each takes the nearest point
    strictly within ``elevation_search_radius``. When fewer than
    ``idw_min_coverage`` of the samples found one, the empty samples are
    backfilled by IDW over ``idw_cutoff_radius``. Samples that still have no
    data keep ``elevation=None``.

    Never raises: on an internal error the failure is logged and an empty
    list is returned.
    """
    settings = settings or DEFAULT_SETTINGS
    try:
        start = to_projected((start_lng, start_lat), settings.geodetic_crs, source_projection, projector)
        end = to_projected((end_lng, end_lat), settings.geodetic_crs, source_projection, projector)
        cloud = convert_to_projected(elevation_points, source_projection, settings, projector)

        n = settings.elevation_sample_count
        positions = np.array([interpolate(start, end, i / n) for i in range(n + 1)])
        tree, values = _build_tree(cloud)

        elevations: list[float | None] = [None] * (n + 1)
        if tree is not None:
            distances, indices = tree.query(positions, distance_upper_bound=settings.elevation_search_radius)
            for i, (d, index) in enumerate(zip(distances, indices)):
                if d < settings.elevation_search_radius:
                    elevations[i] = float(values[index])

        found = sum(1 for e in elevations if e is not None)
        logger.debug("Nearest-neighbour sampling found %d of %d samples", found, n + 1)

        missing = [i for i, e in enumerate(elevations) if e is None]
        if tree is not None and missing and settings.idw_enabled and found < n * settings.idw_min_coverage:
            backfill = idw_elevation(
                positions[missing], tree, values, settings.idw_cutoff_radius, settings.idw_epsilon
            )
            for i, elevation in zip(missing, backfill):
                elevations[i] = elevation

        return [
            ElevationProfilePoint(distance=i / n * line_length, elevation=elevation)
            for i, elevation in enumerate(elevations)
        ]
    except Exception:
        logger.exception("Elevation sampling failed")
        return []
