# File: src/penetration_generator/core/__init__.py
"""
Core abstractions for wall penetration planning.

This module provides the value types shared by the planner and executor
and the collaborator interfaces the host application implements.
"""

from .penetration_types import (
    SizeCategory,
    ParameterKind,
    SkipReason,
    LinearSegment,
    MEPSegment,
    HitIdentity,
    RayHit,
    PlannedPlacement,
    SkippedSegment,
)

from .interfaces import (
    WALL_FILTER,
    GeometryQuery,
    ModelRepository,
    ParameterAccessor,
    TransactionRunner,
)

__all__ = [
    # Types
    "SizeCategory",
    "ParameterKind",
    "SkipReason",
    "LinearSegment",
    "MEPSegment",
    "HitIdentity",
    "RayHit",
    "PlannedPlacement",
    "SkippedSegment",
    # Interfaces
    "WALL_FILTER",
    "GeometryQuery",
    "ModelRepository",
    "ParameterAccessor",
    "TransactionRunner",
]
