"""Tunable settings for the cross-section engine."""

import os

from pydantic import BaseModel, Field

ENV_PREFIX = "CROSS_SECTION_"


class Settings(BaseModel):
    """Thresholds and sampling parameters shared by every stage."""

    geodetic_crs: str = "EPSG:4326"

    # Block intersector
    block_proximity_threshold: float = Field(default=20.0, gt=0)
    proximity_width_factor: float = Field(default=0.7, gt=0, le=1)
    default_block_size: float = Field(default=10.0, gt=0)

    # Elevation sampler
    elevation_sample_count: int = Field(default=100, ge=1)
    elevation_search_radius: float = Field(default=200.0, gt=0)
    idw_enabled: bool = True
    idw_min_coverage: float = Field(default=0.3, ge=0, le=1)
    idw_cutoff_radius: float = Field(default=500.0, gt=0)
    idw_epsilon: float = Field(default=0.1, gt=0)
    geodetic_sample_size: int = Field(default=100, ge=1)

    # Pit projector
    pit_max_distance: float = Field(default=150.0, gt=0)

    # Range aggregator
    range_padding: float = Field(default=20.0, gt=0)

    cache_size: int = Field(default=32, ge=0)
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "Settings":
        """Build settings from ``CROSS_SECTION_*`` environment variables.

        Unset variables keep their defaults; values are validated by pydantic,
        so a malformed number raises ``pydantic.ValidationError``.
        """
        environ = os.environ if environ is None else environ
        values = {}
        for name in cls.model_fields:
            raw = environ.get(ENV_PREFIX + name.upper())
            if raw is not None and raw.strip():
                values[name] = raw.strip()
        return cls.model_validate(values)


DEFAULT_SETTINGS = Settings()
