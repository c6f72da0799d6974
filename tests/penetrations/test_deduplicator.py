# File: tests/penetrations/test_deduplicator.py
"""Tests for ray hit deduplication and ordering."""

import random

import pytest

from src.penetration_generator.core.penetration_types import HitIdentity, RayHit
from src.penetration_generator.penetrations.deduplicator import dedupe, order_by_distance


class TestDedupe:
    """Test identity-based deduplication."""

    def test_same_wall_twice_kept_once(self):
        """Duplicate crossing of W1 at the same distance is dropped."""
        hits = [RayHit(3.0, "W1"), RayHit(3.0, "W1"), RayHit(7.0, "W2")]

        result = dedupe(hits)

        assert [(h.distance, h.element_id) for h in result] == [(3.0, "W1"), (7.0, "W2")]

    def test_distance_is_not_part_of_identity(self):
        """Two faces of one wall count as one crossing; first wins."""
        hits = [RayHit(4.8, "W1"), RayHit(5.2, "W1")]

        result = dedupe(hits)

        assert len(result) == 1
        assert result[0].distance == 4.8

    def test_different_links_are_different_walls(self):
        """Same element id in two link instances is kept twice."""
        hits = [RayHit(2.0, "W1", "linkA"), RayHit(2.0, "W1", "linkB")]

        result = dedupe(hits)

        assert len(result) == 2
        assert {h.link_instance_id for h in result} == {"linkA", "linkB"}

    def test_host_and_link_are_different_walls(self):
        """A host wall and a linked wall with the same id are distinct."""
        hits = [RayHit(2.0, "W1"), RayHit(2.5, "W1", "linkA")]

        assert len(dedupe(hits)) == 2

    def test_empty(self):
        assert dedupe([]) == []

    def test_unique_and_subsequence(self):
        """Result has unique identities and preserves input order."""
        rng = random.Random(42)
        hits = [
            RayHit(rng.uniform(0, 20), rng.choice(["W1", "W2", "W3"]),
                   rng.choice([None, "linkA"]))
            for _ in range(50)
        ]

        result = dedupe(hits)

        identities = [h.identity for h in result]
        assert len(identities) == len(set(identities))

        # subsequence: every kept hit appears in input, in the same order
        it = iter(hits)
        assert all(any(h is candidate for candidate in it) for h in result)

        # every input identity is represented
        assert set(identities) == {h.identity for h in hits}


class TestOrderByDistance:
    """Test explicit distance ordering before dedupe."""

    def test_sorts_ascending(self):
        hits = [RayHit(7.0, "W2"), RayHit(3.0, "W1"), RayHit(5.0, "W3")]

        assert [h.distance for h in order_by_distance(hits)] == [3.0, 5.0, 7.0]

    def test_stable_for_equal_distance(self):
        hits = [RayHit(3.0, "A"), RayHit(3.0, "B")]

        assert [h.element_id for h in order_by_distance(hits)] == ["A", "B"]

    def test_nearest_becomes_representative(self):
        """Out-of-order input still keeps the nearest crossing."""
        hits = [RayHit(5.2, "W1"), RayHit(4.8, "W1")]

        result = dedupe(order_by_distance(hits))

        assert result[0].distance == pytest.approx(4.8)

    def test_identity(self):
        assert RayHit(1.0, "W1", "L").identity == HitIdentity("L", "W1")
