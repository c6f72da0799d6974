# File: src/penetration_generator/penetrations/workflow.py
"""
Entry point of the wall penetration command.

The workflow receives every document-level dependency explicitly: the
mechanical source document, the opening family template and the geometry
query built from a 3D view of the target document. Looking these up (by
title, by family name, first non-template 3D view) is the job of the host
adapter; the workflow only checks that they are present.

Batches run in a fixed order, ducts first then pipes. Each batch is one
transaction. A failed batch stops the workflow; batches already committed
stay committed and later batches are not started.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from src.penetration_generator.config.settings import PenetrationSettings
from src.penetration_generator.core.interfaces import (
    GeometryQuery,
    ModelRepository,
    ParameterAccessor,
    TransactionRunner,
)
from src.penetration_generator.core.penetration_types import (
    PlannedPlacement,
    SizeCategory,
    SkippedSegment,
)
from src.penetration_generator.errors import PlacementBatchError, PreconditionError
from src.penetration_generator.penetrations.executor import PlacementExecutor
from src.penetration_generator.penetrations.planner import PenetrationPlanner

logger = logging.getLogger(__name__)

# Order in which batches are committed
BATCH_ORDER: Tuple[SizeCategory, ...] = (SizeCategory.DUCT, SizeCategory.PIPE)

MISSING_SOURCE_DOCUMENT = "Не найден ОВ файл"
MISSING_FAMILY_TEMPLATE = "Не найдено семейство \"{family}\""
MISSING_VIEW_3D = "Не найден 3D вид"


class WorkflowStatus(Enum):
    """Outcome of a workflow run."""
    SUCCEEDED = "succeeded"
    CANCELLED = "cancelled"
    FAILED = "failed"


@dataclass
class WorkflowResult:
    """
    Result of a penetration workflow run.

    Attributes:
        status: SUCCEEDED, CANCELLED (precondition failed, nothing touched)
            or FAILED (a batch was rolled back)
        message: User-facing message for CANCELLED / FAILED
        created: Number of created components per committed category
        planned: All planned placements, including those of a failed batch
        skipped: Segments dropped during planning
    """
    status: WorkflowStatus = WorkflowStatus.SUCCEEDED
    message: str = ""
    created: Dict[SizeCategory, int] = field(default_factory=dict)
    planned: List[PlannedPlacement] = field(default_factory=list)
    skipped: List[SkippedSegment] = field(default_factory=list)

    @property
    def total_created(self) -> int:
        return sum(self.created.values())

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dict for JSON output."""
        return {
            "status": self.status.value,
            "message": self.message,
            "created": {str(k): v for k, v in self.created.items()},
            "total_created": self.total_created,
            "planned_count": len(self.planned),
            "skipped": [s.to_dict() for s in self.skipped],
        }


def check_preconditions(
    source_document: Any,
    family_template: Any,
    geometry_query: Optional[GeometryQuery],
    settings: PenetrationSettings,
) -> None:
    """
    Verify that every external dependency was found.

    Raises:
        PreconditionError: For the first missing dependency
    """
    if source_document is None:
        raise PreconditionError("source_document", MISSING_SOURCE_DOCUMENT)
    if family_template is None:
        raise PreconditionError(
            "family_template",
            MISSING_FAMILY_TEMPLATE.format(family=settings.family_name),
        )
    if geometry_query is None:
        raise PreconditionError("view_3d", MISSING_VIEW_3D)


class PenetrationWorkflow:
    """
    Plans and places wall openings for all ducts and pipes.

    Args:
        model: Repository listing segments, resolving levels and placing
            components
        parameters: Parameter accessor for diameters and opening sizes
        transactions: Scoped transaction runner of the target document
        settings: Command settings; defaults apply when omitted
    """

    def __init__(
        self,
        model: ModelRepository,
        parameters: ParameterAccessor,
        transactions: TransactionRunner,
        settings: Optional[PenetrationSettings] = None,
    ) -> None:
        self._model = model
        self._parameters = parameters
        self._transactions = transactions
        self._settings = settings or PenetrationSettings()

    def run(
        self,
        source_document: Any,
        family_template: Any,
        geometry_query: Optional[GeometryQuery],
    ) -> WorkflowResult:
        """
        Run the duct batch then the pipe batch.

        Args:
            source_document: Mechanical document holding ducts and pipes,
                None if it could not be found
            family_template: Opening family symbol, None if not found
            geometry_query: Wall ray query, None if no 3D view exists

        Returns:
            WorkflowResult describing what was committed
        """
        result = WorkflowResult()

        try:
            check_preconditions(
                source_document, family_template, geometry_query, self._settings
            )
        except PreconditionError as e:
            logger.error("Penetration command cancelled: %s", e.detail)
            result.status = WorkflowStatus.CANCELLED
            result.message = e.detail
            return result

        planner = PenetrationPlanner(
            geometry_query, self._model, self._parameters, self._settings
        )
        executor = PlacementExecutor(
            self._model, self._parameters, self._transactions, self._settings
        )

        for category in BATCH_ORDER:
            segments = self._model.list_segments(source_document, category)
            placements = planner.plan_all(segments, category)
            result.planned.extend(placements)

            try:
                result.created[category] = executor.execute(
                    placements, family_template, category
                )
            except PlacementBatchError as e:
                result.status = WorkflowStatus.FAILED
                result.message = e.detail
                break

        result.skipped = list(planner.skipped)
        if result.skipped:
            logger.warning("%d segments skipped", len(result.skipped))

        logger.info(
            "Penetration command %s: %d openings created",
            result.status.value, result.total_created
        )
        return result
