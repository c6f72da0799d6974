# File: src/penetration_generator/core/interfaces.py
"""
Collaborator interfaces implemented by the host application layer.

The planner, executor and workflow only talk to these abstractions. The
Revit implementations live in ``penetration_generator.revit``; tests use
in-memory fakes.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Hashable, List, Optional, TypeVar

from src.penetration_generator.core.geometry import Vector3
from src.penetration_generator.core.penetration_types import (
    MEPSegment,
    ParameterKind,
    PlannedPlacement,
    RayHit,
    SizeCategory,
)

T = TypeVar("T")

# Target filter restricting ray hits to wall elements
WALL_FILTER = "walls"


class GeometryQuery(ABC):
    """
    Ray-intersection primitive over the current model state.

    Implementations return every crossing of the ray with elements accepted
    by target_filter. Each call re-queries the scene.
    """

    @abstractmethod
    def find(
        self,
        origin: Vector3,
        direction: Vector3,
        target_filter: str = WALL_FILTER,
    ) -> List[RayHit]:
        """
        Cast a ray and collect the crossings.

        Args:
            origin: Ray origin (finite)
            direction: Ray direction (finite, non-zero)
            target_filter: Element filter key, WALL_FILTER for walls

        Returns:
            Hits in ascending distance order
        """
        pass


class ModelRepository(ABC):
    """Read and write access to the model documents."""

    @abstractmethod
    def list_segments(self, document: Any, category: SizeCategory) -> List[MEPSegment]:
        """
        Enumerate the ducts or pipes of a document.

        Args:
            document: Source (mechanical) document
            category: Which element class to list

        Returns:
            One MEPSegment per element
        """
        pass

    @abstractmethod
    def resolve_level(self, hit: RayHit) -> Optional[Hashable]:
        """
        Level of the wall a hit belongs to.

        Returns:
            Level id usable for placement, or None if it cannot be resolved
        """
        pass

    def prepare_template(self, family_template: Any) -> None:
        """
        Make family_template placeable.

        Called inside the batch transaction before the first create_instance,
        so any model change it needs is committed or rolled back with the
        batch. The default does nothing.
        """
        pass

    @abstractmethod
    def create_instance(self, family_template: Any, placement: PlannedPlacement) -> Any:
        """
        Place a component from family_template at placement.point,
        hosted by the wall on the wall's level.

        Returns:
            The created component instance
        """
        pass


class ParameterAccessor(ABC):
    """Typed access to scalar parameters of host elements."""

    @abstractmethod
    def get_scalar(self, instance: Any, kind: ParameterKind) -> Optional[float]:
        """Read a scalar parameter, None when the element has no such value."""
        pass

    @abstractmethod
    def set_scalar(self, instance: Any, kind: ParameterKind, value: float) -> None:
        """Write a scalar parameter."""
        pass


class TransactionRunner(ABC):
    """Scoped model transactions."""

    @abstractmethod
    def run(self, name: str, operation: Callable[[], T]) -> T:
        """
        Run operation inside a named transaction.

        Commits when operation returns; rolls back and re-raises when it
        raises. The model is never left half-mutated for one transaction.

        Args:
            name: Transaction name shown in the host's undo history
            operation: Closure performing the mutations

        Returns:
            Whatever operation returns
        """
        pass
