# File: src/penetration_generator/core/geometry.py
"""
Vector helpers for penetration planning.

Points and vectors are plain (x, y, z) tuples in model units (feet for
Revit). Keeping the math on tuples lets the planner run without a host
geometry library.
"""

from typing import Tuple
import math

Vector3 = Tuple[float, float, float]

# Below this length a vector is treated as zero
ZERO_LENGTH = 1e-10


def add(p: Vector3, v: Vector3) -> Vector3:
    """Add vector v to point p."""
    return (p[0] + v[0], p[1] + v[1], p[2] + v[2])


def subtract(p1: Vector3, p2: Vector3) -> Vector3:
    """Vector from p2 to p1."""
    return (p1[0] - p2[0], p1[1] - p2[1], p1[2] - p2[2])


def scale(v: Vector3, factor: float) -> Vector3:
    """Multiply vector v by a scalar."""
    return (v[0] * factor, v[1] * factor, v[2] * factor)


def dot_product(v1: Vector3, v2: Vector3) -> float:
    """
    Calculate dot product of two 3D vectors.

    Args:
        v1: First vector (x, y, z)
        v2: Second vector (x, y, z)

    Returns:
        Dot product scalar
    """
    return v1[0] * v2[0] + v1[1] * v2[1] + v1[2] * v2[2]


def vector_length(v: Vector3) -> float:
    return math.sqrt(v[0]**2 + v[1]**2 + v[2]**2)


def normalize_vector(v: Vector3) -> Vector3:
    """
    Normalize a 3D vector to unit length.

    Args:
        v: Vector (x, y, z)

    Returns:
        Unit vector (x, y, z)

    Raises:
        ValueError: If the vector has (near) zero length
    """
    length = vector_length(v)
    if length < ZERO_LENGTH:
        raise ValueError(f"Cannot normalize zero-length vector {v}")
    return (v[0] / length, v[1] / length, v[2] / length)


def point_along(origin: Vector3, direction: Vector3, distance: float) -> Vector3:
    """
    Point at a given distance along a ray.

    Args:
        origin: Ray origin (x, y, z)
        direction: Ray direction, expected to be unit length
        distance: Distance from origin along direction

    Returns:
        origin + direction * distance
    """
    return add(origin, scale(direction, distance))
