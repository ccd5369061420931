"""Tests for the pit projector."""

import math

import pytest

from cross_section import PitPoint, PitSample, Settings, project_pit, project_pit_geometry


class TestPrecomputedSamples:
    def test_sorted_by_distance(self):
        samples = [
            PitSample(distance=40, elevation=90),
            PitSample(distance=5, elevation=100),
            PitSample(distance=20, elevation=80),
        ]
        profile = project_pit(samples)
        assert [p.distance for p in profile] == [5, 20, 40]
        assert [p.elevation for p in profile] == [100, 80, 90]

    def test_non_finite_samples_dropped(self):
        samples = [PitSample(distance=math.nan, elevation=1), PitSample(distance=1, elevation=2)]
        profile = project_pit(samples)
        assert len(profile) == 1
        assert profile[0].distance == 1

    def test_empty(self):
        assert project_pit([]) == []


class TestRawGeometry:
    def _project(self, points, projector, **kwargs):
        # Line from (0, 0) to (100, 0) under a planar projector
        return project_pit_geometry(points, "EPSG:32652", 0, 0, 0, 100, 100, projector=projector, **kwargs)

    def test_points_near_line_are_kept(self, identity):
        points = [
            PitPoint(x=60, y=-20, z=70),
            PitPoint(x=50, y=200, z=80),
            PitPoint(x=10, y=10, z=90),
        ]
        profile = self._project(points, identity)
        assert [(p.distance, p.elevation) for p in profile] == [
            pytest.approx((10, 90)),
            pytest.approx((60, 70)),
        ]

    def test_points_past_the_end_clamp_to_line(self, identity):
        profile = self._project([PitPoint(x=150, y=0, z=10)], identity)
        assert len(profile) == 1
        assert profile[0].distance == pytest.approx(100)

    def test_clamped_distance_counts_towards_threshold(self, identity):
        assert self._project([PitPoint(x=300, y=0, z=10)], identity) == []

    def test_max_distance_is_configurable(self, identity):
        settings = Settings(pit_max_distance=500)
        profile = self._project([PitPoint(x=50, y=200, z=80)], identity, settings=settings)
        assert len(profile) == 1
        assert profile[0].distance == pytest.approx(50)

    def test_distances_within_line_length(self, identity):
        points = [PitPoint(x=x, y=y, z=1) for x in range(-200, 300, 25) for y in (-50, 0, 50)]
        profile = self._project(points, identity)
        assert profile
        assert all(0 <= p.distance <= 100 for p in profile)

    def test_internal_error_returns_empty_list(self):
        def broken(from_crs, to_crs, xy):
            raise RuntimeError("boom")

        assert self._project([PitPoint(x=1, y=1, z=1)], broken) == []

    def test_zero_length_line_matches_nothing(self, identity):
        profile = project_pit_geometry(
            [PitPoint(x=0, y=0, z=5)], "EPSG:32652", 0, 0, 0, 0, 0, projector=identity
        )
        assert profile == []
