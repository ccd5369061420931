import pytest

from cross_section.errors import ProjectionError


def identity_projector(from_crs, to_crs, xy):
    """Treat every CRS as the same planar system."""
    return float(xy[0]), float(xy[1])


def failing_projector(from_crs, to_crs, xy):
    raise ProjectionError("no such projection", from_crs, to_crs)


@pytest.fixture
def identity():
    return identity_projector


@pytest.fixture
def failing():
    return failing_projector
