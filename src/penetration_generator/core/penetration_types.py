# File: src/penetration_generator/core/penetration_types.py
"""
Core data types for wall penetration planning.

This module defines the value objects passed between the planner, the
deduplicator and the placement executor:
- SizeCategory: Duct or pipe, selects the transaction batch
- ParameterKind: Host parameters read or written by the tool
- LinearSegment: Straight centerline of one duct or pipe
- MEPSegment: Source element together with its centerline
- RayHit / HitIdentity: Ray crossings and their deduplication key
- PlannedPlacement: One hole marker to be created
- SkippedSegment: Segment dropped during planning, with the reason
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Hashable, Optional

from src.penetration_generator.core.geometry import (
    Vector3,
    ZERO_LENGTH,
    normalize_vector,
    point_along,
    subtract,
    vector_length,
)


class SizeCategory(Enum):
    """
    Category of a source segment.

    The geometric algorithm is identical for both members; the category
    only decides which diameter is read and which transaction batch the
    resulting placements belong to.

    Attributes:
        DUCT: Round duct, read from the mechanical model
        PIPE: Pipe, read from the mechanical model
    """
    DUCT = "duct"
    PIPE = "pipe"

    def __str__(self) -> str:
        """Return the string value for display."""
        return self.value

    @classmethod
    def from_string(cls, value: str) -> "SizeCategory":
        """
        Create SizeCategory from string value.

        Args:
            value: String value (e.g., "duct", "Pipe")

        Returns:
            Corresponding SizeCategory member

        Raises:
            ValueError: If value doesn't match any category
        """
        value_lower = value.lower()
        for member in cls:
            if member.value == value_lower:
                return member
        raise ValueError(
            f"Unknown size category: {value}. "
            f"Valid categories: {[m.value for m in cls]}"
        )


class ParameterKind(Enum):
    """Host parameters accessed through a ParameterAccessor."""
    WIDTH = "width"
    HEIGHT = "height"
    DIAMETER = "diameter"


class SkipReason(Enum):
    """Why a segment produced no placements."""
    NON_LINEAR_CENTERLINE = "non_linear_centerline"
    UNRESOLVED_LEVEL = "unresolved_level"
    MISSING_SIZE = "missing_size"


@dataclass(frozen=True)
class LinearSegment:
    """
    Straight centerline of a duct or pipe.

    Attributes:
        origin: Start point (x, y, z)
        direction: Unit direction (x, y, z)
        length: Segment length, strictly positive
    """
    origin: Vector3
    direction: Vector3
    length: float

    def __post_init__(self):
        """Validate length and direction."""
        if self.length <= 0:
            raise ValueError(f"LinearSegment length must be positive, got {self.length}")
        if vector_length(self.direction) < ZERO_LENGTH:
            raise ValueError("LinearSegment direction must be non-zero")

    @classmethod
    def from_endpoints(cls, start: Vector3, end: Vector3) -> "LinearSegment":
        """
        Build a segment from its two endpoints.

        Args:
            start: First endpoint, becomes the ray origin
            end: Second endpoint

        Returns:
            LinearSegment pointing from start to end

        Raises:
            ValueError: If the endpoints coincide
        """
        delta = subtract(end, start)
        length = vector_length(delta)
        if length < ZERO_LENGTH:
            raise ValueError(f"Degenerate segment: {start} -> {end}")
        return cls(
            origin=tuple(float(c) for c in start),
            direction=normalize_vector(delta),
            length=length,
        )

    @property
    def end(self) -> Vector3:
        return self.point_at(self.length)

    def point_at(self, distance: float) -> Vector3:
        """Point at distance along the centerline from the origin."""
        return point_along(self.origin, self.direction, distance)


@dataclass
class MEPSegment:
    """
    A duct or pipe element read from the source document.

    Attributes:
        element_id: Host id of the duct/pipe
        category: Duct or pipe
        centerline: Straight centerline, or None when the element's
            location curve is not a line (arc, spline, missing)
        element: Opaque host element handle passed back to the
            ParameterAccessor when reading the diameter
    """
    element_id: Hashable
    category: SizeCategory
    centerline: Optional[LinearSegment]
    element: Any = None


@dataclass(frozen=True)
class HitIdentity:
    """
    Deduplication key for a ray hit.

    Two hits with equal identity are the same physical wall, whatever the
    distance at which each was found.
    """
    link_instance_id: Optional[Hashable]
    element_id: Hashable


@dataclass(frozen=True)
class RayHit:
    """
    One crossing of a ray with a target surface.

    Attributes:
        distance: Distance from the ray origin, >= 0
        element_id: Id of the hit element (the wall)
        link_instance_id: Id of the link instance owning the wall, None when
            the wall lives in the host document
    """
    distance: float
    element_id: Hashable
    link_instance_id: Optional[Hashable] = None

    @property
    def identity(self) -> HitIdentity:
        return HitIdentity(self.link_instance_id, self.element_id)


@dataclass(frozen=True)
class PlannedPlacement:
    """
    A hole marker to be created on a wall.

    Attributes:
        wall_id: Id of the penetrated wall
        level_id: Level of the wall (never the duct/pipe level)
        point: Placement point, origin + direction * distance
        distance: Distance along the source centerline
        size: Opening size, applied to both width and height
        category: Duct or pipe batch
        source_element_id: Id of the duct/pipe that causes the opening
        link_instance_id: Link instance of the wall, None for host walls
    """
    wall_id: Hashable
    level_id: Hashable
    point: Vector3
    distance: float
    size: float
    category: SizeCategory
    source_element_id: Hashable = None
    link_instance_id: Optional[Hashable] = None

    @property
    def identity(self) -> HitIdentity:
        return HitIdentity(self.link_instance_id, self.wall_id)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to dictionary for JSON serialization.

        Returns:
            Dictionary representation of the placement
        """
        return {
            "wall_id": self.wall_id,
            "link_instance_id": self.link_instance_id,
            "level_id": self.level_id,
            "point": {
                "x": self.point[0],
                "y": self.point[1],
                "z": self.point[2],
            },
            "distance": self.distance,
            "size": self.size,
            "category": self.category.value,
            "source_element_id": self.source_element_id,
        }


@dataclass(frozen=True)
class SkippedSegment:
    """Record of a segment dropped by the planner."""
    element_id: Hashable
    category: SizeCategory
    reason: SkipReason
    detail: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "element_id": self.element_id,
            "category": self.category.value,
            "reason": self.reason.value,
            "detail": self.detail,
        }
