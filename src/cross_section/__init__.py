"""Cross-section geometry engine for mining block-model data."""

from .blocks import intersect_blocks
from .config import Settings
from .elevation import sample_elevation
from .errors import CrossSectionError, ProjectionError
from .models import (
    Block,
    CrossSectionLine,
    CrossSectionRequest,
    CrossSectionResult,
    ElevationPoint,
    ElevationProfilePoint,
    ElevationRange,
    IntersectedBlock,
    PitPoint,
    PitProfilePoint,
    PitSample,
)
from .pipeline import CrossSectionCache, build_cross_section
from .pit import project_pit, project_pit_geometry
from .projection import project
from .ranges import compute_elevation_range

__all__ = [
    "Block",
    "CrossSectionCache",
    "CrossSectionError",
    "CrossSectionLine",
    "CrossSectionRequest",
    "CrossSectionResult",
    "ElevationPoint",
    "ElevationProfilePoint",
    "ElevationRange",
    "IntersectedBlock",
    "PitPoint",
    "PitProfilePoint",
    "PitSample",
    "ProjectionError",
    "Settings",
    "build_cross_section",
    "compute_elevation_range",
    "intersect_blocks",
    "project",
    "project_pit",
    "project_pit_geometry",
    "sample_elevation",
]
