# File: tests/penetrations/test_wall_geometry.py
"""Tests for the box-based wall ray query."""

import pytest

from src.penetration_generator.core.penetration_types import SizeCategory
from src.penetration_generator.penetrations.planner import PenetrationPlanner
from src.penetration_generator.penetrations.json_io import (
    JsonModelRepository,
    JsonParameterAccessor,
)
from src.penetration_generator.penetrations.wall_geometry import (
    WallBox,
    WallBoxGeometryQuery,
)


def make_wall(wall_id="W1", x=5.0, thickness=0.5, base=0.0, height=12.0, link=None):
    """Wall running along Y at the given X."""
    return WallBox(
        wall_id=wall_id,
        start=(x, -10.0, 0.0),
        end=(x, 10.0, 0.0),
        thickness=thickness,
        base_elevation=base,
        height=height,
        level_id="L1",
        link_instance_id=link,
    )


class TestWallBoxIntersect:
    def test_crossing_gives_entry_and_exit(self):
        wall = make_wall()

        distances = wall.intersect((0.0, 0.0, 4.0), (1.0, 0.0, 0.0))

        assert distances == pytest.approx([4.75, 5.25])

    def test_parallel_ray_misses(self):
        wall = make_wall()

        assert wall.intersect((0.0, 0.0, 4.0), (0.0, 1.0, 0.0)) == []

    def test_ray_above_wall_misses(self):
        wall = make_wall(height=3.0)

        assert wall.intersect((0.0, 0.0, 4.0), (1.0, 0.0, 0.0)) == []

    def test_ray_pointing_away_misses(self):
        wall = make_wall()

        assert wall.intersect((0.0, 0.0, 4.0), (-1.0, 0.0, 0.0)) == []

    def test_origin_inside_wall_gives_exit_only(self):
        wall = make_wall()

        distances = wall.intersect((5.0, 0.0, 4.0), (1.0, 0.0, 0.0))

        assert distances == pytest.approx([0.25])

    def test_beyond_wall_end_misses(self):
        wall = make_wall()

        assert wall.intersect((0.0, 15.0, 4.0), (1.0, 0.0, 0.0)) == []

    def test_oblique_crossing(self):
        wall = make_wall()
        d = 2 ** -0.5

        distances = wall.intersect((0.0, 0.0, 4.0), (d, d, 0.0))

        assert distances == pytest.approx([4.75 * 2 ** 0.5, 5.25 * 2 ** 0.5])

    def test_invalid_dimensions(self):
        with pytest.raises(ValueError):
            make_wall(thickness=0.0)


class TestWallBoxGeometryQuery:
    def test_hits_sorted_across_walls(self):
        query = WallBoxGeometryQuery([make_wall("W2", x=8.0), make_wall("W1", x=3.0)])

        hits = query.find((0.0, 0.0, 4.0), (1.0, 0.0, 0.0))

        assert [h.element_id for h in hits] == ["W1", "W1", "W2", "W2"]
        assert [h.distance for h in hits] == sorted(h.distance for h in hits)

    def test_unnormalized_direction(self):
        query = WallBoxGeometryQuery([make_wall()])

        hits = query.find((0.0, 0.0, 4.0), (2.0, 0.0, 0.0))

        assert hits[0].distance == pytest.approx(4.75)

    def test_link_instance_on_hits(self):
        query = WallBoxGeometryQuery([make_wall(link="linkA")])

        hits = query.find((0.0, 0.0, 4.0), (1.0, 0.0, 0.0))

        assert {h.link_instance_id for h in hits} == {"linkA"}
        assert query.wall_for(hits[0]).wall_id == "W1"

    def test_other_filter_returns_nothing(self):
        query = WallBoxGeometryQuery([make_wall()])

        assert query.find((0.0, 0.0, 4.0), (1.0, 0.0, 0.0), "floors") == []


class TestPlanningAgainstBoxes:
    def test_entry_and_exit_collapse_to_one_opening(self, make_segment):
        query = WallBoxGeometryQuery([make_wall("W1", x=3.0), make_wall("W2", x=8.0)])
        planner = PenetrationPlanner(query, JsonModelRepository(query), JsonParameterAccessor())
        segment = make_segment("D1", start=(0.0, 0.0, 4.0), end=(10.0, 0.0, 4.0))

        placements = planner.plan(segment, SizeCategory.DUCT)

        assert [p.wall_id for p in placements] == ["W1", "W2"]
        assert placements[0].point == pytest.approx((2.75, 0.0, 4.0))
        assert placements[1].point == pytest.approx((7.75, 0.0, 4.0))
        assert all(p.level_id == "L1" for p in placements)

    def test_wall_past_segment_end_ignored(self, make_segment):
        query = WallBoxGeometryQuery([make_wall("W1", x=12.0)])
        planner = PenetrationPlanner(query, JsonModelRepository(query), JsonParameterAccessor())
        segment = make_segment("D1", start=(0.0, 0.0, 4.0), end=(10.0, 0.0, 4.0))

        assert planner.plan(segment, SizeCategory.DUCT) == []
