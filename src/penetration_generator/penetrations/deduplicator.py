# File: src/penetration_generator/penetrations/deduplicator.py
"""
Deduplication of ray hits by physical wall.

A face-level ray query reports one hit per crossed face, so a single wall
usually shows up at least twice (entry and exit face, more for compound
walls). Hits are collapsed on HitIdentity, i.e. (link instance, element):
the distance is not part of the identity, so every crossing of the same
wall by one duct or pipe counts once. The same element id reached through
two different link instances is two different walls.
"""

from typing import Iterable, List, Set

from src.penetration_generator.core.penetration_types import HitIdentity, RayHit
from src.penetration_generator.utils.logging_config import get_logger, log_hits

logger = get_logger(__name__)


def order_by_distance(hits: Iterable[RayHit]) -> List[RayHit]:
    """
    Sort hits by ascending distance.

    The sort is stable, so hits at equal distance keep the order in which
    the query reported them.

    Args:
        hits: Hits in any order

    Returns:
        New list sorted by distance
    """
    return sorted(hits, key=lambda hit: hit.distance)


def dedupe(hits: Iterable[RayHit]) -> List[RayHit]:
    """
    Keep the first hit of every HitIdentity.

    Args:
        hits: Hits in the order they should compete; callers that want the
            nearest crossing as representative pass them through
            order_by_distance first

    Returns:
        Subsequence of hits with unique identities
    """
    seen: Set[HitIdentity] = set()
    unique: List[RayHit] = []

    for hit in hits:
        identity = hit.identity
        if identity in seen:
            logger.debug(
                "Dropping duplicate hit on %s at %.4f", identity, hit.distance
            )
            continue
        seen.add(identity)
        unique.append(hit)

    log_hits(logger, "unique", unique)
    return unique
