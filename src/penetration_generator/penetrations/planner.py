# File: src/penetration_generator/penetrations/planner.py
"""
Penetration planning for a single duct or pipe.

For each straight centerline the planner casts a ray from the start point
along the segment direction, keeps the wall crossings that lie on the
segment itself, collapses crossings of the same wall, and emits one
PlannedPlacement per penetrated wall.

Segments that cannot be planned are skipped as a whole:
- the location curve is not a straight line
- a penetrated wall has no resolvable level
- the duct/pipe has no readable diameter

Skipping is not fatal. Each skip is logged and recorded in
PenetrationPlanner.skipped so callers can report it.
"""

import logging
from typing import Iterable, List, Optional

from src.penetration_generator.config.settings import PenetrationSettings
from src.penetration_generator.core.interfaces import (
    WALL_FILTER,
    GeometryQuery,
    ModelRepository,
    ParameterAccessor,
)
from src.penetration_generator.core.penetration_types import (
    MEPSegment,
    ParameterKind,
    PlannedPlacement,
    RayHit,
    SizeCategory,
    SkippedSegment,
    SkipReason,
)
from src.penetration_generator.penetrations.deduplicator import dedupe, order_by_distance

logger = logging.getLogger(__name__)


class PenetrationPlanner:
    """
    Plans hole placements for duct and pipe segments.

    Args:
        geometry_query: Ray query against the wall model
        model: Repository resolving wall levels
        parameters: Accessor reading the duct/pipe diameter
        settings: Tolerance settings; defaults apply when omitted
    """

    def __init__(
        self,
        geometry_query: GeometryQuery,
        model: ModelRepository,
        parameters: ParameterAccessor,
        settings: Optional[PenetrationSettings] = None,
    ) -> None:
        self._geometry_query = geometry_query
        self._model = model
        self._parameters = parameters
        self._settings = settings or PenetrationSettings()
        self.skipped: List[SkippedSegment] = []

    def find_wall_hits(self, segment: MEPSegment) -> List[RayHit]:
        """
        Unique wall crossings lying on the segment, nearest first.

        Args:
            segment: Segment with a straight centerline

        Returns:
            Deduplicated hits with 0 <= distance <= length
        """
        line = segment.centerline
        hits = self._geometry_query.find(line.origin, line.direction, WALL_FILTER)

        max_distance = line.length + self._settings.distance_tolerance
        on_segment = [hit for hit in hits if 0 <= hit.distance <= max_distance]

        logger.debug(
            "Segment %s: %d hits, %d within length %.4f",
            segment.element_id, len(hits), len(on_segment), line.length
        )

        return dedupe(order_by_distance(on_segment))

    def plan(
        self,
        segment: MEPSegment,
        category: Optional[SizeCategory] = None,
    ) -> List[PlannedPlacement]:
        """
        Plan the hole placements of one duct or pipe.

        Args:
            segment: Source segment
            category: Batch the placements belong to; defaults to the
                segment's own category

        Returns:
            One placement per penetrated wall, nearest first. Empty when the
            segment crosses no wall or is skipped.
        """
        category = category or segment.category

        if segment.centerline is None:
            self._skip(segment, category, SkipReason.NON_LINEAR_CENTERLINE,
                       "location curve is not a straight line")
            return []

        hits = self.find_wall_hits(segment)
        if not hits:
            return []

        size = self._parameters.get_scalar(segment.element, ParameterKind.DIAMETER)
        if size is None or size <= 0:
            self._skip(segment, category, SkipReason.MISSING_SIZE,
                       f"diameter not available ({size})")
            return []

        placements = []
        for hit in hits:
            level_id = self._model.resolve_level(hit)
            if level_id is None:
                self._skip(segment, category, SkipReason.UNRESOLVED_LEVEL,
                           f"wall {hit.element_id} has no level")
                return []

            placements.append(PlannedPlacement(
                wall_id=hit.element_id,
                link_instance_id=hit.link_instance_id,
                level_id=level_id,
                point=segment.centerline.point_at(hit.distance),
                distance=hit.distance,
                size=size,
                category=category,
                source_element_id=segment.element_id,
            ))

        return placements

    def plan_all(
        self,
        segments: Iterable[MEPSegment],
        category: SizeCategory,
    ) -> List[PlannedPlacement]:
        """
        Plan a batch of segments of one category.

        Args:
            segments: Ducts or pipes
            category: Batch category

        Returns:
            Flat list of placements in segment order
        """
        placements: List[PlannedPlacement] = []
        count = 0
        for segment in segments:
            placements.extend(self.plan(segment, category))
            count += 1

        logger.info(
            "Planned %d %s openings for %d segments",
            len(placements), category, count
        )
        return placements

    def _skip(
        self,
        segment: MEPSegment,
        category: SizeCategory,
        reason: SkipReason,
        detail: str,
    ) -> None:
        logger.warning(
            "Skipping %s %s: %s", category, segment.element_id, detail
        )
        self.skipped.append(SkippedSegment(
            element_id=segment.element_id,
            category=category,
            reason=reason,
            detail=detail,
        ))
