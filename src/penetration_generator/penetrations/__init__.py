# File: src/penetration_generator/penetrations/__init__.py
"""
Wall penetration planning and placement.

Pipeline:
    segments -> PenetrationPlanner (ray query, length filter, dedupe)
             -> PlacementExecutor (one transaction per category)

Example:
    >>> from src.penetration_generator.penetrations import PenetrationWorkflow
    >>> workflow = PenetrationWorkflow(model, parameters, transactions)
    >>> result = workflow.run(source_doc, family_symbol, geometry_query)
    >>> result.created
"""

from .deduplicator import dedupe, order_by_distance
from .planner import PenetrationPlanner
from .executor import PlacementExecutor
from .workflow import (
    BATCH_ORDER,
    PenetrationWorkflow,
    WorkflowResult,
    WorkflowStatus,
    check_preconditions,
)
from .wall_geometry import WallBox, WallBoxGeometryQuery
from .json_io import (
    parse_segments_json,
    parse_walls_json,
    plan_penetrations_from_json,
)

__all__ = [
    # Deduplication
    "dedupe",
    "order_by_distance",
    # Planning and placement
    "PenetrationPlanner",
    "PlacementExecutor",
    # Workflow
    "BATCH_ORDER",
    "PenetrationWorkflow",
    "WorkflowResult",
    "WorkflowStatus",
    "check_preconditions",
    # Offline geometry
    "WallBox",
    "WallBoxGeometryQuery",
    # JSON pipeline
    "parse_segments_json",
    "parse_walls_json",
    "plan_penetrations_from_json",
]
