# File: src/penetration_generator/penetrations/json_io.py
"""
JSON pipeline for planning penetrations outside the host application.

Takes duct/pipe segments and walls exported as JSON, plans the openings with
the same planner the Revit command uses, and returns the placements as
JSON.

Segments JSON:
    {"segments": [{"id": 101, "category": "duct",
                   "start": {"x": 0, "y": 0, "z": 10},
                   "end": {"x": 20, "y": 0, "z": 10},
                   "diameter": 0.5,
                   "curve_type": "line"}]}

Walls JSON:
    {"walls": [{"id": 7, "start_point": {"x": 5, "y": -10},
                "end_point": {"x": 5, "y": 10}, "thickness": 0.5,
                "base_elevation": 0, "height": 12, "level_id": 311,
                "link_instance_id": null}]}

Points may also be given as [x, y, z] lists.
"""

import json
import logging
from typing import Any, Dict, Hashable, List, Optional

from src.penetration_generator.config.settings import PenetrationSettings
from src.penetration_generator.core.geometry import Vector3
from src.penetration_generator.core.interfaces import ModelRepository, ParameterAccessor
from src.penetration_generator.core.penetration_types import (
    LinearSegment,
    MEPSegment,
    ParameterKind,
    PlannedPlacement,
    RayHit,
    SizeCategory,
)
from src.penetration_generator.penetrations.planner import PenetrationPlanner
from src.penetration_generator.penetrations.wall_geometry import (
    WallBox,
    WallBoxGeometryQuery,
)
from src.penetration_generator.penetrations.workflow import BATCH_ORDER

logger = logging.getLogger(__name__)

# Curve types accepted as straight centerlines
LINE_CURVE_TYPES = {"line", "linear", "straight"}


# ============================================================================
# JSON Parsing
# ============================================================================

def _load_json(json_str: str, key: str) -> List[Dict[str, Any]]:
    try:
        data = json.loads(json_str)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid {key} JSON: {e}")

    if isinstance(data, list):
        return data
    if not isinstance(data, dict) or key not in data:
        raise ValueError(f"{key.capitalize()} JSON missing '{key}' key")
    if not isinstance(data[key], list):
        raise ValueError(f"'{key}' must be a list")
    return data[key]


def _parse_point(value: Any) -> Vector3:
    """Accept {"x", "y", "z"} dicts or [x, y, z] lists; z defaults to 0."""
    try:
        if isinstance(value, dict):
            return (
                float(value.get("x", 0)),
                float(value.get("y", 0)),
                float(value.get("z", 0)),
            )
        if isinstance(value, (list, tuple)) and len(value) in (2, 3):
            coords = [float(c) for c in value]
            if len(coords) == 2:
                coords.append(0.0)
            return tuple(coords)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid point: {value!r}") from e
    raise ValueError(f"Invalid point: {value!r}")


def parse_segments_json(segments_json: str) -> List[MEPSegment]:
    """
    Parse duct/pipe segments.

    A segment whose curve_type is not a line, or whose endpoints coincide,
    gets no centerline so the planner skips it.

    Args:
        segments_json: JSON string with a "segments" list

    Returns:
        List of MEPSegment; the raw dict is kept as element handle

    Raises:
        ValueError: If JSON is invalid or a segment lacks id/category
    """
    segments = []

    for item in _load_json(segments_json, "segments"):
        if "id" not in item or "category" not in item:
            raise ValueError(f"Segment missing 'id' or 'category': {item}")

        centerline = None
        curve_type = str(item.get("curve_type", "line")).lower()
        if curve_type in LINE_CURVE_TYPES:
            try:
                centerline = LinearSegment.from_endpoints(
                    _parse_point(item["start"]), _parse_point(item["end"])
                )
            except (KeyError, ValueError) as e:
                logger.warning("Segment %s has no usable centerline: %s", item["id"], e)

        segments.append(MEPSegment(
            element_id=item["id"],
            category=SizeCategory.from_string(item["category"]),
            centerline=centerline,
            element=item,
        ))

    return segments


def parse_walls_json(walls_json: str) -> List[WallBox]:
    """
    Parse walls into WallBox boxes.

    Args:
        walls_json: JSON string with a "walls" list

    Returns:
        List of WallBox

    Raises:
        ValueError: If JSON is invalid or a wall lacks geometry
    """
    walls = []

    for item in _load_json(walls_json, "walls"):
        try:
            walls.append(WallBox(
                wall_id=item["id"],
                start=_parse_point(item["start_point"]),
                end=_parse_point(item["end_point"]),
                thickness=float(item["thickness"]),
                base_elevation=float(item.get("base_elevation", 0.0)),
                height=float(item["height"]),
                level_id=item.get("level_id"),
                link_instance_id=item.get("link_instance_id"),
            ))
        except KeyError as e:
            raise ValueError(f"Wall missing {e}: {item}")
        except TypeError as e:
            raise ValueError(f"Invalid wall value: {e}: {item}")

    return walls


# ============================================================================
# In-memory collaborators
# ============================================================================

class JsonModelRepository(ModelRepository):
    """
    ModelRepository over parsed JSON data.

    The "document" passed to list_segments is the list of parsed segments.
    Created instances are plain dicts collected in ``instances``.
    """

    def __init__(self, geometry_query: WallBoxGeometryQuery) -> None:
        self._geometry_query = geometry_query
        self.instances: List[Dict[str, Any]] = []

    def list_segments(
        self, document: List[MEPSegment], category: SizeCategory
    ) -> List[MEPSegment]:
        return [s for s in document if s.category == category]

    def resolve_level(self, hit: RayHit) -> Optional[Hashable]:
        wall = self._geometry_query.wall_for(hit)
        return wall.level_id if wall else None

    def create_instance(self, family_template: Any, placement: PlannedPlacement) -> Any:
        instance = {"family": family_template, "placement": placement.to_dict()}
        self.instances.append(instance)
        return instance


class JsonParameterAccessor(ParameterAccessor):
    """Reads and writes parameters as dict keys."""

    def get_scalar(self, instance: Dict[str, Any], kind: ParameterKind) -> Optional[float]:
        value = instance.get(kind.value)
        if value is None:
            return None
        try:
            return float(value)
        except (TypeError, ValueError):
            logger.warning("Unreadable %s value %r", kind.value, value)
            return None

    def set_scalar(self, instance: Dict[str, Any], kind: ParameterKind, value: float) -> None:
        instance[kind.value] = value


# ============================================================================
# Main Entry Point
# ============================================================================

def plan_penetrations_from_json(
    segments_json: str,
    walls_json: str,
    settings: Optional[PenetrationSettings] = None,
) -> str:
    """
    Plan wall openings for JSON segments against JSON walls.

    Args:
        segments_json: Duct/pipe segments JSON
        walls_json: Walls JSON
        settings: Optional settings (tolerance)

    Returns:
        JSON string:
            - placements: planned placements, ducts first then pipes
            - skipped: segments the planner dropped
            - summary: counts per category
    """
    segments = parse_segments_json(segments_json)
    query = WallBoxGeometryQuery(parse_walls_json(walls_json))
    model = JsonModelRepository(query)
    planner = PenetrationPlanner(query, model, JsonParameterAccessor(), settings)

    placements: List[PlannedPlacement] = []
    summary: Dict[str, int] = {}
    for category in BATCH_ORDER:
        batch = planner.plan_all(model.list_segments(segments, category), category)
        placements.extend(batch)
        summary[category.value] = len(batch)

    summary["skipped"] = len(planner.skipped)

    return json.dumps({
        "placements": [p.to_dict() for p in placements],
        "skipped": [s.to_dict() for s in planner.skipped],
        "summary": summary,
    }, indent=2)
