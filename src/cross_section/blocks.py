"""Lay block-model cells onto the distance axis of a section line."""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

from .config import DEFAULT_SETTINGS, Settings
from .geometry import Point, block_footprint, line_intersects_polygon, polygon_crossings, project_point_on_line
from .models import Block, IntersectedBlock
from .normalize import rock_color
from .projection import Projector, to_projected

logger = logging.getLogger(__name__)


def _intersect_block(
    block: Block,
    start: Point,
    end: Point,
    line_length: float,
    settings: Settings,
) -> IntersectedBlock | None:
    if block.width <= 0:
        return None
    polygon = block_footprint(block.x, block.y, block.width, block.depth)

    if line_intersects_polygon(start, end, polygon):
        crossings = polygon_crossings(start, end, polygon)
        # A single touching point has no chord
        if len(crossings) < 2:
            return None
        distance, width = crossings[0], crossings[-1] - crossings[0]
    else:
        projection = project_point_on_line((block.x, block.y), start, end, line_length)
        if projection.distance_to_line >= settings.block_proximity_threshold:
            return None
        distance = projection.distance_along
        width = block.width * settings.proximity_width_factor

    return IntersectedBlock(
        distance=distance,
        width=width,
        height=block.height,
        elevation=block.z,
        rock=block.rock,
        color=block.color or rock_color(block.rock),
    )


def intersect_blocks(
    blocks: Sequence[Block],
    source_projection: str,
    start_lat: float,
    start_lng: float,
    end_lat: float,
    end_lng: float,
    *,
    settings: Settings | None = None,
    projector: Projector | None = None,
) -> list[IntersectedBlock]:
    """Find the blocks crossed by the section line.

    Each block's square footprint is tested against the projected line. A
    crossing yields the entry distance and the chord length through the
    footprint; otherwise a block whose centroid lies within
    ``block_proximity_threshold`` of the line is kept with a damped width.

    Returns blocks sorted by distance, then elevation. Never raises: on an
    internal error the failure is logged and an empty list is returned.
    """
    settings = settings or DEFAULT_SETTINGS
    try:
        start = to_projected((start_lng, start_lat), settings.geodetic_crs, source_projection, projector)
        end = to_projected((end_lng, end_lat), settings.geodetic_crs, source_projection, projector)
        line_length = math.hypot(end[0] - start[0], end[1] - start[1])
        logger.debug("Section line in %s: %s -> %s (%.1f m)", source_projection, start, end, line_length)

        if line_length == 0:
            logger.debug("Section line has zero length, no blocks intersected")
            return []

        intersected = []
        for block in blocks:
            result = _intersect_block(block, start, end, line_length, settings)
            if result is not None:
                intersected.append(result)

        intersected.sort(key=lambda b: (b.distance, b.elevation))
        logger.debug("%d of %d blocks intersect the section", len(intersected), len(blocks))
        return intersected
    except Exception:
        logger.exception("Block intersection failed")
        return []
