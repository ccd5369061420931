"""Tests for the end-to-end pipeline and its result cache."""

import pytest

from cross_section import CrossSectionCache, CrossSectionLine, CrossSectionRequest, build_cross_section
from cross_section.pipeline import request_key


@pytest.fixture
def request_doc():
    """A 100 m east-west section in planar coordinates (identity projector)."""
    return CrossSectionRequest(
        line=CrossSectionLine(
            start_lat=0, start_lng=1000, end_lat=0, end_lng=1100, length=100, source_projection="EPSG:32652"
        ),
        blocks=[
            {"centroid_x": 1020, "centroid_y": 0, "centroid_z": 60, "dim_x": 10, "dim_z": 10, "rock": "ore"},
            {"centroid_x": 1070, "centroid_y": 0, "centroid_z": 50, "dim_x": 10, "dim_z": 10, "rock": "waste"},
            {"centroid_x": 1070, "centroid_y": 500, "centroid_z": 50, "dim_x": 10, "dim_z": 10},
            {"centroid_x": "n/a", "centroid_y": 0, "centroid_z": 50, "dim_x": 10},
        ],
        elevation=[{"x": 1000 + x, "y": 0, "z": 80} for x in range(0, 101, 10)],
        pit=[
            {"distance": 90, "elevation": 30},
            {"geometry": {"type": "LineString", "coordinates": [[1040, 10], [1060, -10]]}, "properties": {"level": 40}},
        ],
    )


class TestBuildCrossSection:
    def test_all_profiles(self, request_doc, identity):
        result = build_cross_section(request_doc, projector=identity)

        assert [b.rock for b in result.blocks] == ["ore", "waste"]
        assert result.blocks[0].distance == pytest.approx(15)
        assert result.blocks[0].color == "#b40c0d"

        assert len(result.elevation_profile) == 101
        assert all(p.elevation == 80 for p in result.elevation_profile)

        assert [(p.distance, p.elevation) for p in result.pit_profile] == [
            pytest.approx((40, 40)),
            pytest.approx((60, 40)),
            pytest.approx((90, 30)),
        ]

        assert result.elevation_range.min == pytest.approx(10)
        assert result.elevation_range.max == pytest.approx(100)

    def test_degenerate_line(self, request_doc, identity):
        line = request_doc.line.model_copy(update={"end_lng": 1000, "length": 0})
        result = build_cross_section(request_doc.model_copy(update={"line": line}), projector=identity)
        assert result.blocks == []
        assert all(p.distance == 0 for p in result.elevation_profile)
        assert result.elevation_range.min < result.elevation_range.max

    def test_empty_request(self, identity):
        line = CrossSectionLine(start_lat=0, start_lng=0, end_lat=0, end_lng=10, length=10, source_projection="EPSG:32652")
        result = build_cross_section(CrossSectionRequest(line=line), projector=identity)
        assert result.blocks == []
        assert result.pit_profile == []
        assert (result.elevation_range.min, result.elevation_range.max) == (0, 100)

    def test_length_defaults_to_geodesic(self):
        line = CrossSectionLine(start_lat=0, start_lng=129.0, end_lat=0, end_lng=129.01, source_projection="EPSG:32652")
        result = build_cross_section(CrossSectionRequest(line=line))
        assert result.elevation_profile[-1].distance == pytest.approx(1113.2, abs=0.5)


class TestCrossSectionCache:
    def test_identical_requests_hit(self, request_doc, identity):
        cache = CrossSectionCache(projector=identity)
        first = cache.get_or_build(request_doc)
        second = cache.get_or_build(request_doc.model_copy(deep=True))
        assert first == second
        assert first is not second
        assert (cache.hits, cache.misses) == (1, 1)
        assert len(cache) == 1

    def test_mutating_a_result_leaves_cache_intact(self, request_doc, identity):
        cache = CrossSectionCache(projector=identity)
        first = cache.get_or_build(request_doc)
        expected = first.model_copy(deep=True)
        first.elevation_profile[0].elevation = -999
        first.blocks.clear()
        assert cache.get_or_build(request_doc) == expected

    def test_content_hash_changes_with_input(self, request_doc):
        changed = request_doc.model_copy(update={"pit": []})
        assert request_key(request_doc) == request_key(request_doc.model_copy(deep=True))
        assert request_key(request_doc) != request_key(changed)

    def test_evicts_least_recently_used(self, request_doc, identity):
        cache = CrossSectionCache(maxsize=1, projector=identity)
        cache.get_or_build(request_doc)
        cache.get_or_build(request_doc.model_copy(update={"pit": []}))
        assert len(cache) == 1
        cache.get_or_build(request_doc)
        assert cache.misses == 3

    def test_zero_size_disables_caching(self, request_doc, identity):
        cache = CrossSectionCache(maxsize=0, projector=identity)
        cache.get_or_build(request_doc)
        assert len(cache) == 0

    def test_clear(self, request_doc, identity):
        cache = CrossSectionCache(projector=identity)
        cache.get_or_build(request_doc)
        cache.clear()
        assert len(cache) == 0
        assert cache.hits == cache.misses == 0
