"""Exceptions raised by the cross-section engine."""

from typing import Any


class CrossSectionError(Exception):
    """Base exception for cross-section errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ProjectionError(CrossSectionError):
    """A coordinate could not be transformed between two CRSs."""

    def __init__(self, message: str, from_crs: str, to_crs: str):
        super().__init__(message, details={"from_crs": from_crs, "to_crs": to_crs})
        self.from_crs = from_crs
        self.to_crs = to_crs
