"""Run every stage for one section line and memoize the results."""

from __future__ import annotations

import hashlib
import logging
import threading
from collections import OrderedDict

from .blocks import intersect_blocks
from .config import DEFAULT_SETTINGS, Settings
from .elevation import sample_elevation
from .models import CrossSectionRequest, CrossSectionResult
from .normalize import normalize_blocks, normalize_elevation_points, normalize_pit_records
from .pit import project_pit, project_pit_geometry
from .projection import Projector, line_length_m
from .ranges import compute_elevation_range

logger = logging.getLogger(__name__)


def build_cross_section(
    request: CrossSectionRequest,
    settings: Settings | None = None,
    projector: Projector | None = None,
) -> CrossSectionResult:
    """Normalize the raw records in ``request`` and build all section profiles."""
    settings = settings or DEFAULT_SETTINGS
    line = request.line
    length = line.length
    if length is None:
        length = line_length_m(line.start_lat, line.start_lng, line.end_lat, line.end_lng)

    endpoints = (line.start_lat, line.start_lng, line.end_lat, line.end_lng)

    blocks = normalize_blocks(request.blocks, settings)
    section_blocks = intersect_blocks(
        blocks, line.source_projection, *endpoints, settings=settings, projector=projector
    )

    elevation_points = normalize_elevation_points(request.elevation)
    elevation_profile = sample_elevation(
        elevation_points, line.source_projection, *endpoints, length, settings=settings, projector=projector
    )

    pit_points, pit_samples = normalize_pit_records(request.pit)
    pit_profile = project_pit(pit_samples)
    if pit_points:
        pit_profile.extend(
            project_pit_geometry(
                pit_points, line.source_projection, *endpoints, length, settings=settings, projector=projector
            )
        )
        pit_profile.sort(key=lambda p: p.distance)

    elevation_range = compute_elevation_range(section_blocks, elevation_profile, pit_profile, settings=settings)

    logger.info(
        "Cross-section %.1f m: %d blocks, %d elevation samples, %d pit points",
        length,
        len(section_blocks),
        sum(1 for p in elevation_profile if p.elevation is not None),
        len(pit_profile),
    )
    return CrossSectionResult(
        blocks=section_blocks,
        elevation_profile=elevation_profile,
        pit_profile=pit_profile,
        elevation_range=elevation_range,
    )


def request_key(request: CrossSectionRequest) -> str:
    """Content hash identifying a request."""
    return hashlib.sha256(request.model_dump_json().encode("utf-8")).hexdigest()


class CrossSectionCache:
    """LRU cache of built sections keyed by the content hash of the request.

    Callers receive copies, so mutating a result leaves the cache intact.
    A cache instance is bound to one settings/projector pair; results built
    under different thresholds must use a separate cache.
    """

    def __init__(
        self,
        maxsize: int = 32,
        settings: Settings | None = None,
        projector: Projector | None = None,
    ):
        self.maxsize = maxsize
        self.settings = settings or DEFAULT_SETTINGS
        self.projector = projector
        self._results: OrderedDict[str, CrossSectionResult] = OrderedDict()
        self.hits = 0
        self.misses = 0
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._results)

    def get_or_build(self, request: CrossSectionRequest) -> CrossSectionResult:
        key = request_key(request)
        with self._lock:
            if key in self._results:
                self.hits += 1
                self._results.move_to_end(key)
                return self._results[key].model_copy(deep=True)
            self.misses += 1

        result = build_cross_section(request, self.settings, self.projector)
        if self.maxsize > 0:
            with self._lock:
                self._results[key] = result
                self._results.move_to_end(key)
                if len(self._results) > self.maxsize:
                    self._results.popitem(last=False)
        return result.model_copy(deep=True)

    def clear(self) -> None:
        with self._lock:
            self._results.clear()
            self.hits = 0
            self.misses = 0
