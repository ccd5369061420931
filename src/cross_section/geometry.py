"""Planar geometry primitives used to lay blocks and pit points onto a section line.

All coordinates are ``(x, y)`` tuples in a projected, metric CRS.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import NamedTuple

Point = tuple[float, float]


class LineProjection(NamedTuple):
    """Where a point falls relative to a line segment."""

    ratio: float
    distance_along: float
    distance_to_line: float


def _crossing_parameters(p1: Point, p2: Point, p3: Point, p4: Point) -> tuple[float, float] | None:
    """Return the parameters ``(ua, ub)`` where segment p1-p2 meets p3-p4.

    Parallel and collinear segments have no single crossing and yield None.
    """
    x1, y1 = p1
    x2, y2 = p2
    x3, y3 = p3
    x4, y4 = p4

    den = (y4 - y3) * (x2 - x1) - (x4 - x3) * (y2 - y1)
    if den == 0:
        return None

    ua = ((x4 - x3) * (y1 - y3) - (y4 - y3) * (x1 - x3)) / den
    ub = ((x2 - x1) * (y1 - y3) - (y2 - y1) * (x1 - x3)) / den
    return ua, ub


def segments_intersect(p1: Point, p2: Point, p3: Point, p4: Point) -> bool:
    """True if segment p1-p2 crosses segment p3-p4 (endpoints inclusive)."""
    params = _crossing_parameters(p1, p2, p3, p4)
    if params is None:
        return False
    ua, ub = params
    return 0 <= ua <= 1 and 0 <= ub <= 1


def segment_intersection(p1: Point, p2: Point, p3: Point, p4: Point) -> Point | None:
    """Crossing point of segment p1-p2 with segment p3-p4, or None."""
    params = _crossing_parameters(p1, p2, p3, p4)
    if params is None:
        return None
    ua, ub = params
    if not (0 <= ua <= 1 and 0 <= ub <= 1):
        return None
    return p1[0] + ua * (p2[0] - p1[0]), p1[1] + ua * (p2[1] - p1[1])


def point_in_polygon(point: Point, polygon: Sequence[Point]) -> bool:
    """Ray-casting containment test using the odd-crossings rule."""
    x, y = point
    inside = False
    j = len(polygon) - 1
    for i in range(len(polygon)):
        xi, yi = polygon[i]
        xj, yj = polygon[j]
        if (yi > y) != (yj > y) and x < (xj - xi) * (y - yi) / (yj - yi) + xi:
            inside = not inside
        j = i
    return inside


def block_footprint(x: float, y: float, width: float, depth: float | None = None) -> list[Point]:
    """Closed 5-vertex ring around a block centroid, counter-clockwise from bottom-left."""
    half_width = width / 2
    half_depth = (depth if depth is not None else width) / 2
    return [
        (x - half_width, y - half_depth),
        (x + half_width, y - half_depth),
        (x + half_width, y + half_depth),
        (x - half_width, y + half_depth),
        (x - half_width, y - half_depth),
    ]


def line_intersects_polygon(start: Point, end: Point, polygon: Sequence[Point]) -> bool:
    """True if the segment crosses any polygon edge or either endpoint lies inside."""
    for a, b in zip(polygon, polygon[1:]):
        if segments_intersect(start, end, a, b):
            return True
    return point_in_polygon(start, polygon) or point_in_polygon(end, polygon)


def polygon_crossings(start: Point, end: Point, polygon: Sequence[Point]) -> list[float]:
    """Distances from ``start`` at which the segment enters or leaves the polygon.

    Edge crossings come first. When fewer than two are found, a line endpoint
    lying inside the polygon contributes its own distance (0 for the start,
    the segment length for the end). The result is sorted ascending.
    """
    distances: list[float] = []
    for a, b in zip(polygon, polygon[1:]):
        hit = segment_intersection(start, end, a, b)
        if hit is not None:
            distances.append(math.hypot(hit[0] - start[0], hit[1] - start[1]))

    if len(distances) < 2:
        if point_in_polygon(start, polygon):
            distances.append(0.0)
        if point_in_polygon(end, polygon):
            distances.append(math.hypot(end[0] - start[0], end[1] - start[1]))

    distances.sort()
    return distances


def project_point_on_line(
    point: Point,
    start: Point,
    end: Point,
    line_length: float | None = None,
) -> LineProjection:
    """Project ``point`` onto segment start-end, clamping to the segment.

    ``distance_along`` is ``ratio * line_length``; ``line_length`` defaults to
    the planar segment length. A zero-length segment matches nothing: the
    ratio and distance are 0 and ``distance_to_line`` is infinite.
    """
    vx = end[0] - start[0]
    vy = end[1] - start[1]
    length_sq = vx * vx + vy * vy
    if length_sq == 0:
        return LineProjection(0.0, 0.0, math.inf)

    px = point[0] - start[0]
    py = point[1] - start[1]
    ratio = max(0.0, min(1.0, (px * vx + py * vy) / length_sq))

    proj_x = start[0] + ratio * vx
    proj_y = start[1] + ratio * vy
    distance_to_line = math.hypot(point[0] - proj_x, point[1] - proj_y)

    if line_length is None:
        line_length = math.sqrt(length_sq)
    return LineProjection(ratio, ratio * line_length, distance_to_line)


def interpolate(start: Point, end: Point, ratio: float) -> Point:
    """Point at ``ratio`` of the way from start to end."""
    return start[0] + ratio * (end[0] - start[0]), start[1] + ratio * (end[1] - start[1])
