"""Tests for environment-driven settings and logging setup."""

import logging

import pytest
from pydantic import ValidationError

from cross_section.config import Settings
from cross_section.logging_utils import configure_logging


class TestSettings:
    def test_defaults(self):
        settings = Settings()
        assert settings.elevation_search_radius == 200
        assert settings.idw_enabled is True
        assert settings.block_proximity_threshold == 20
        assert settings.proximity_width_factor == 0.7
        assert settings.range_padding == 20

    def test_from_env(self):
        settings = Settings.from_env(
            {
                "CROSS_SECTION_ELEVATION_SEARCH_RADIUS": "20",
                "CROSS_SECTION_IDW_ENABLED": "false",
                "CROSS_SECTION_ELEVATION_SAMPLE_COUNT": "50",
                "CROSS_SECTION_LOG_LEVEL": "DEBUG",
                "UNRELATED": "1",
            }
        )
        assert settings.elevation_search_radius == 20
        assert settings.idw_enabled is False
        assert settings.elevation_sample_count == 50
        assert settings.log_level == "DEBUG"

    def test_blank_values_keep_defaults(self):
        assert Settings.from_env({"CROSS_SECTION_RANGE_PADDING": " "}).range_padding == 20

    def test_invalid_values_rejected(self):
        with pytest.raises(ValidationError):
            Settings.from_env({"CROSS_SECTION_PROXIMITY_WIDTH_FACTOR": "1.5"})
        with pytest.raises(ValidationError):
            Settings(elevation_sample_count=0)


class TestConfigureLogging:
    def test_single_handler_at_level(self):
        logger = configure_logging("DEBUG")
        configure_logging("DEBUG")
        assert logger.name == "cross_section"
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert logger.propagate is False

        logger.handlers.clear()
        logger.propagate = True
