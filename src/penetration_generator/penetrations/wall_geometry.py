# File: src/penetration_generator/penetrations/wall_geometry.py
"""
Host-independent wall geometry and ray query.

Walls are modelled as oriented boxes built from their baseline, thickness,
base elevation and height, the same data the JSON wall exports carry. The
ray is clipped against each box with the slab method. Like a face-level
host query, every crossed face is reported: a ray passing through a wall
yields an entry hit and an exit hit, a ray starting inside a wall yields
only the exit hit.
"""

from dataclasses import dataclass
from typing import Any, Dict, Hashable, Iterable, List, Optional, Tuple

from src.penetration_generator.core.geometry import (
    Vector3,
    ZERO_LENGTH,
    dot_product,
    normalize_vector,
    subtract,
)
from src.penetration_generator.core.interfaces import WALL_FILTER, GeometryQuery
from src.penetration_generator.core.penetration_types import RayHit
from src.penetration_generator.utils.logging_config import get_logger, log_hits

logger = get_logger(__name__)


@dataclass(frozen=True)
class WallBox:
    """
    A straight wall as an oriented box.

    Attributes:
        wall_id: Element id of the wall
        start: Baseline start (x, y); z is ignored
        end: Baseline end (x, y); z is ignored
        thickness: Total wall thickness, centered on the baseline
        base_elevation: Bottom of the wall
        height: Unconnected height of the wall
        level_id: Level the wall is placed on, None if unknown
        link_instance_id: Link instance owning the wall, None for host walls
    """
    wall_id: Hashable
    start: Vector3
    end: Vector3
    thickness: float
    base_elevation: float
    height: float
    level_id: Optional[Hashable] = None
    link_instance_id: Optional[Hashable] = None

    def __post_init__(self):
        """Validate wall dimensions."""
        if self.thickness <= 0 or self.height <= 0:
            raise ValueError(
                f"Wall {self.wall_id} needs positive thickness and height"
            )
        if self.length < ZERO_LENGTH:
            raise ValueError(f"Wall {self.wall_id} has a zero-length baseline")

    @property
    def length(self) -> float:
        dx = self.end[0] - self.start[0]
        dy = self.end[1] - self.start[1]
        return (dx**2 + dy**2) ** 0.5

    def local_axes(self) -> Tuple[Vector3, Vector3, Vector3]:
        """Unit axes along the baseline, across the wall, and up."""
        u_axis = normalize_vector(
            (self.end[0] - self.start[0], self.end[1] - self.start[1], 0.0)
        )
        n_axis = (-u_axis[1], u_axis[0], 0.0)
        return u_axis, n_axis, (0.0, 0.0, 1.0)

    def bounds(self) -> Tuple[Tuple[float, float], ...]:
        """Box extent along each local axis."""
        half = self.thickness / 2
        return (
            (0.0, self.length),
            (-half, half),
            (self.base_elevation, self.base_elevation + self.height),
        )

    def intersect(self, origin: Vector3, direction: Vector3) -> List[float]:
        """
        Distances at which a ray crosses the faces of this wall.

        Args:
            origin: Ray origin
            direction: Ray direction, unit length

        Returns:
            Face-crossing distances >= 0, ascending; empty for a miss
        """
        base = (self.start[0], self.start[1], 0.0)
        relative = subtract(origin, base)

        t_near = float("-inf")
        t_far = float("inf")

        for axis, (low, high) in zip(self.local_axes(), self.bounds()):
            o = dot_product(relative, axis)
            d = dot_product(direction, axis)

            if abs(d) < ZERO_LENGTH:
                if o < low or o > high:
                    return []
                continue

            t1 = (low - o) / d
            t2 = (high - o) / d
            if t1 > t2:
                t1, t2 = t2, t1
            t_near = max(t_near, t1)
            t_far = min(t_far, t2)
            if t_near > t_far:
                return []

        if t_far < 0:
            return []

        distances = [t for t in (t_near, t_far) if t >= 0]
        if len(distances) == 2 and distances[0] == distances[1]:
            distances = distances[:1]
        return distances


class WallBoxGeometryQuery(GeometryQuery):
    """
    GeometryQuery over a fixed list of WallBox walls.

    Args:
        walls: Walls to intersect
    """

    def __init__(self, walls: Iterable[WallBox]) -> None:
        self._walls: List[WallBox] = list(walls)
        self._by_identity: Dict[Tuple[Any, Any], WallBox] = {
            (w.link_instance_id, w.wall_id): w for w in self._walls
        }

    @property
    def walls(self) -> List[WallBox]:
        return list(self._walls)

    def wall_for(self, hit: RayHit) -> Optional[WallBox]:
        return self._by_identity.get((hit.link_instance_id, hit.element_id))

    def find(
        self,
        origin: Vector3,
        direction: Vector3,
        target_filter: str = WALL_FILTER,
    ) -> List[RayHit]:
        if target_filter != WALL_FILTER:
            return []

        direction = normalize_vector(direction)
        hits: List[RayHit] = []

        for wall in self._walls:
            for distance in wall.intersect(origin, direction):
                hits.append(RayHit(
                    distance=distance,
                    element_id=wall.wall_id,
                    link_instance_id=wall.link_instance_id,
                ))

        hits.sort(key=lambda hit: hit.distance)
        logger.debug("Ray from %s hit %d wall faces", origin, len(hits))
        log_hits(logger, "box query", hits)
        return hits
