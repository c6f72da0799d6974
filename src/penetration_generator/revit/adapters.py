# File: src/penetration_generator/revit/adapters.py
"""
Revit implementations of the collaborator interfaces.

This module isolates all Revit-specific API calls behind the interfaces of
``core.interfaces``, keeping the planner and executor testable without a
Revit environment. Revit imports are conditional; constructing an adapter
without the Revit API raises RuntimeError.

Element ids crossing the interface are plain ints (``ElementId.Value`` on
Revit 2024+, ``IntegerValue`` before).

Usage (inside pyRevit / RevitPythonShell only):
    query = RevitGeometryQuery(view3d, find_in_links=False)
    model = RevitModelRepository(doc)
    parameters = RevitParameterAccessor(settings)
    transactions = RevitTransactionRunner(doc)
"""

from typing import Any, Callable, Hashable, List, Optional, TypeVar

from src.penetration_generator.config.settings import PenetrationSettings
from src.penetration_generator.core.geometry import Vector3
from src.penetration_generator.core.interfaces import (
    WALL_FILTER,
    GeometryQuery,
    ModelRepository,
    ParameterAccessor,
    TransactionRunner,
)
from src.penetration_generator.core.penetration_types import (
    LinearSegment,
    MEPSegment,
    ParameterKind,
    PlannedPlacement,
    RayHit,
    SizeCategory,
)
from src.penetration_generator.errors import ParameterNotFoundError, PenetrationError
from src.penetration_generator.utils.logging_config import get_logger, log_hits

logger = get_logger(__name__)

T = TypeVar("T")

# =============================================================================
# Conditional Revit Imports
# =============================================================================

REVIT_AVAILABLE = False
REVIT_ERROR: Optional[str] = None

try:
    import clr
    clr.AddReference("RevitAPI")
    from Autodesk.Revit.DB import (
        BuiltInParameter,
        ElementClassFilter,
        ElementId,
        FilteredElementCollector,
        FindReferenceTarget,
        Level,
        Line,
        LocationCurve,
        ReferenceIntersector,
        Transaction,
        TransactionStatus,
        Wall,
        XYZ,
    )
    from Autodesk.Revit.DB.Mechanical import Duct
    from Autodesk.Revit.DB.Plumbing import Pipe
    from Autodesk.Revit.DB.Structure import StructuralType
    REVIT_AVAILABLE = True
except ImportError as e:
    REVIT_ERROR = str(e)
except Exception as e:
    REVIT_ERROR = str(e)

# Value of ElementId.InvalidElementId
INVALID_ID = -1

# Tolerance (feet) when matching a linked level to a host level by elevation
LEVEL_ELEVATION_TOLERANCE = 1e-6


def _require_revit() -> None:
    if not REVIT_AVAILABLE:
        raise RuntimeError(f"Revit API not available: {REVIT_ERROR}")


def id_value(element_id: Any) -> int:
    """Integer value of an ElementId across Revit versions."""
    value = getattr(element_id, "Value", None)
    if value is None:
        value = element_id.IntegerValue
    return int(value)


def _to_xyz(point: Vector3):
    return XYZ(point[0], point[1], point[2])


def _from_xyz(xyz) -> Vector3:
    return (xyz.X, xyz.Y, xyz.Z)


# =============================================================================
# Geometry Query
# =============================================================================

class RevitGeometryQuery(GeometryQuery):
    """
    Ray query backed by ReferenceIntersector on a 3D view.

    Args:
        view3d: Non-template View3D of the target document
        find_in_links: Also report walls of linked documents
    """

    def __init__(self, view3d: Any, find_in_links: bool = False) -> None:
        _require_revit()
        self._intersector = ReferenceIntersector(
            ElementClassFilter(Wall), FindReferenceTarget.Element, view3d
        )
        self._intersector.FindReferencesInRevitLinks = find_in_links

    def find(
        self,
        origin: Vector3,
        direction: Vector3,
        target_filter: str = WALL_FILTER,
    ) -> List[RayHit]:
        if target_filter != WALL_FILTER:
            raise ValueError(f"Unsupported target filter: {target_filter}")

        hits = []
        for context in self._intersector.Find(_to_xyz(origin), _to_xyz(direction)):
            reference = context.GetReference()
            linked_id = reference.LinkedElementId
            if linked_id is not None and id_value(linked_id) != INVALID_ID:
                hit = RayHit(
                    distance=context.Proximity,
                    element_id=id_value(linked_id),
                    link_instance_id=id_value(reference.ElementId),
                )
            else:
                hit = RayHit(
                    distance=context.Proximity,
                    element_id=id_value(reference.ElementId),
                )
            hits.append(hit)

        hits.sort(key=lambda h: h.distance)
        log_hits(logger, "reference intersector", hits)
        return hits


# =============================================================================
# Model Repository
# =============================================================================

def _centerline(element: Any) -> Optional[LinearSegment]:
    """Straight centerline of a duct/pipe, None for any other curve."""
    location = element.Location
    if not isinstance(location, LocationCurve):
        return None
    curve = location.Curve
    if not isinstance(curve, Line):
        return None
    return LinearSegment(
        origin=_from_xyz(curve.GetEndPoint(0)),
        direction=_from_xyz(curve.Direction),
        length=curve.Length,
    )


class RevitModelRepository(ModelRepository):
    """
    Reads segments from a source document and places openings in the
    target (architectural) document.

    Args:
        doc: Target document holding the walls and receiving the openings
    """

    def __init__(self, doc: Any) -> None:
        _require_revit()
        self._doc = doc

    def list_segments(self, document: Any, category: SizeCategory) -> List[MEPSegment]:
        element_class = Duct if category == SizeCategory.DUCT else Pipe
        segments = []
        for element in FilteredElementCollector(document).OfClass(element_class):
            segments.append(MEPSegment(
                element_id=id_value(element.Id),
                category=category,
                centerline=_centerline(element),
                element=element,
            ))
        logger.info("Found %d %ss in '%s'", len(segments), category, document.Title)
        return segments

    def resolve_level(self, hit: RayHit) -> Optional[Hashable]:
        if hit.link_instance_id is None:
            wall = self._doc.GetElement(ElementId(hit.element_id))
            if not isinstance(wall, Wall):
                return None
            level = self._doc.GetElement(wall.LevelId)
            return id_value(level.Id) if isinstance(level, Level) else None

        return self._resolve_linked_level(hit)

    def _resolve_linked_level(self, hit: RayHit) -> Optional[Hashable]:
        """Host level at the elevation of the linked wall's level."""
        link = self._doc.GetElement(ElementId(hit.link_instance_id))
        link_doc = link.GetLinkDocument() if link is not None else None
        if link_doc is None:
            return None

        wall = link_doc.GetElement(ElementId(hit.element_id))
        if not isinstance(wall, Wall):
            return None
        linked_level = link_doc.GetElement(wall.LevelId)
        if not isinstance(linked_level, Level):
            return None

        elevation = linked_level.Elevation + link.GetTotalTransform().Origin.Z
        for level in FilteredElementCollector(self._doc).OfClass(Level):
            if abs(level.Elevation - elevation) < LEVEL_ELEVATION_TOLERANCE:
                return id_value(level.Id)

        logger.debug("No host level at elevation %.4f for linked wall %s",
                     elevation, hit.element_id)
        return None

    def prepare_template(self, family_template: Any) -> None:
        if not family_template.IsActive:
            family_template.Activate()
            self._doc.Regenerate()
            logger.info("Activated family type '%s'", family_template.FamilyName)

    def create_instance(self, family_template: Any, placement: PlannedPlacement) -> Any:
        point = _to_xyz(placement.point)
        level = self._doc.GetElement(ElementId(placement.level_id))

        if placement.link_instance_id is None:
            wall = self._doc.GetElement(ElementId(placement.wall_id))
            return self._doc.Create.NewFamilyInstance(
                point, family_template, wall, level, StructuralType.NonStructural
            )

        # Linked walls cannot host; place unhosted on the matching level
        return self._doc.Create.NewFamilyInstance(
            point, family_template, level, StructuralType.NonStructural
        )


# =============================================================================
# Parameters
# =============================================================================

class RevitParameterAccessor(ParameterAccessor):
    """
    Maps ParameterKind to Revit parameters.

    DIAMETER reads the built-in duct or pipe diameter. WIDTH and HEIGHT are
    looked up by label on the opening family (labels from settings).
    """

    def __init__(self, settings: Optional[PenetrationSettings] = None) -> None:
        _require_revit()
        self._settings = settings or PenetrationSettings()
        self._diameter_parameters = (
            BuiltInParameter.RBS_CURVE_DIAMETER_PARAM,
            BuiltInParameter.RBS_PIPE_DIAMETER_PARAM,
        )

    def _lookup(self, instance: Any, kind: ParameterKind):
        if kind == ParameterKind.DIAMETER:
            for builtin in self._diameter_parameters:
                parameter = instance.get_Parameter(builtin)
                if parameter is not None and parameter.HasValue:
                    return parameter
            return None
        return instance.LookupParameter(self._settings.label_for(kind))

    def get_scalar(self, instance: Any, kind: ParameterKind) -> Optional[float]:
        parameter = self._lookup(instance, kind)
        if parameter is None or not parameter.HasValue:
            return None
        return parameter.AsDouble()

    def set_scalar(self, instance: Any, kind: ParameterKind, value: float) -> None:
        parameter = self._lookup(instance, kind)
        if parameter is None or parameter.IsReadOnly:
            raise ParameterNotFoundError(kind, self._settings.label_for(kind) or kind.value)
        parameter.Set(float(value))


# =============================================================================
# Transactions
# =============================================================================

class RevitTransactionRunner(TransactionRunner):
    """Runs closures inside a Revit Transaction."""

    def __init__(self, doc: Any) -> None:
        _require_revit()
        self._doc = doc

    def run(self, name: str, operation: Callable[[], T]) -> T:
        """
        Commit when operation returns, roll back and re-raise when it raises.

        Revit failure handling can turn Commit() into a rollback; any status
        other than Committed is raised as PenetrationError.
        """
        t = Transaction(self._doc, name)
        t.Start()
        try:
            result = operation()
            status = t.Commit()
            if status != TransactionStatus.Committed:
                raise PenetrationError(
                    f"Transaction '{name}' was not committed ({status})",
                    extra={"transaction": name, "status": str(status)},
                )
            return result
        except Exception:
            if t.HasStarted() and not t.HasEnded():
                t.RollBack()
            raise
