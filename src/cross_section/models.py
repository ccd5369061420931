"""Pydantic data models for the cross-section engine."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Block(BaseModel):
    """A single block-model cell with its centroid in projected metres."""

    x: float
    y: float
    z: float
    width: float
    height: float
    rock: str = "unknown"
    color: str | None = None
    concentrate: float | None = None

    @property
    def depth(self) -> float:
        """Footprint depth, taken to equal the width."""
        return self.width


class ElevationPoint(BaseModel):
    """A terrain sample; ``x``/``y`` may be geodetic or projected."""

    x: float
    y: float
    z: float


class PitPoint(BaseModel):
    """A raw pit-boundary vertex, ``z`` being the boundary level."""

    x: float
    y: float
    z: float


class PitSample(BaseModel):
    """A pit-boundary sample already expressed along the section line."""

    distance: float
    elevation: float


class CrossSectionLine(BaseModel):
    """The user-drawn section line between two geodetic endpoints."""

    model_config = ConfigDict(frozen=True)

    start_lat: float
    start_lng: float
    end_lat: float
    end_lng: float
    length: float | None = Field(default=None, ge=0)
    source_projection: str


class IntersectedBlock(BaseModel):
    """A block footprint mapped onto the distance axis of the section."""

    distance: float
    width: float
    height: float
    elevation: float
    rock: str
    color: str | None = None


class ElevationProfilePoint(BaseModel):
    distance: float
    elevation: float | None = None


class PitProfilePoint(BaseModel):
    distance: float
    elevation: float


class ElevationRange(BaseModel):
    """Padded vertical bounds covering every profile."""

    min: float
    max: float


class CrossSectionRequest(BaseModel):
    """Everything needed to build one cross-section, with raw input records."""

    line: CrossSectionLine
    blocks: list[dict[str, Any]] = []
    elevation: list[dict[str, Any]] = []
    pit: list[dict[str, Any]] = []


class CrossSectionResult(BaseModel):
    """Complete result of building a cross-section."""

    blocks: list[IntersectedBlock]
    elevation_profile: list[ElevationProfilePoint]
    pit_profile: list[PitProfilePoint]
    elevation_range: ElevationRange


class ProjectionInfo(BaseModel):
    code: str
    name: str
    description: str
