"""Vertical display range covering every profile of a section."""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

from .config import DEFAULT_SETTINGS, Settings
from .models import ElevationProfilePoint, ElevationRange, IntersectedBlock, PitProfilePoint

logger = logging.getLogger(__name__)

EMPTY_RANGE = ElevationRange(min=0, max=100)


def compute_elevation_range(
    blocks: Sequence[IntersectedBlock],
    elevation_profile: Sequence[ElevationProfilePoint] | None,
    pit_profile: Sequence[PitProfilePoint] | None,
    *,
    settings: Settings | None = None,
) -> ElevationRange:
    """Padded min/max over block tops and bottoms, terrain and pit elevations."""
    settings = settings or DEFAULT_SETTINGS
    try:
        values: list[float] = []
        for block in blocks:
            values.append(block.elevation + block.height / 2)
            values.append(block.elevation - block.height / 2)
        values.extend(p.elevation for p in (elevation_profile or ()) if p.elevation is not None)
        values.extend(p.elevation for p in (pit_profile or ()))

        values = [v for v in values if math.isfinite(v)]
        if not values:
            return EMPTY_RANGE.model_copy()

        pad = settings.range_padding
        return ElevationRange(min=min(values) - pad, max=max(values) + pad)
    except Exception:
        logger.exception("Elevation range computation failed")
        return EMPTY_RANGE.model_copy()
