# File: src/penetration_generator/penetrations/executor.py
"""
Creation of hole marker components from planned placements.

All placements of one category are created inside a single transaction,
preceded by preparing the family template (Revit symbol activation).
If any creation or parameter write fails, the transaction runner rolls the
whole batch back and the failure is re-raised as PlacementBatchError.
"""

import logging
from typing import Any, List, Optional, Sequence

from src.penetration_generator.config.settings import PenetrationSettings
from src.penetration_generator.core.interfaces import (
    ModelRepository,
    ParameterAccessor,
    TransactionRunner,
)
from src.penetration_generator.core.penetration_types import (
    ParameterKind,
    PlannedPlacement,
    SizeCategory,
)
from src.penetration_generator.errors import PlacementBatchError

logger = logging.getLogger(__name__)


class PlacementExecutor:
    """
    Places opening components for a batch of planned placements.

    Args:
        model: Repository that instantiates family components
        parameters: Accessor writing width/height
        transactions: Scoped transaction runner
        settings: Transaction names; defaults apply when omitted
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

    def transaction_name(self, category: SizeCategory) -> str:
        if category == SizeCategory.DUCT:
            return self._settings.duct_transaction_name
        return self._settings.pipe_transaction_name

    def execute(
        self,
        placements: Sequence[PlannedPlacement],
        family_template: Any,
        category: SizeCategory,
    ) -> int:
        """
        Create one component per placement inside one transaction.

        Args:
            placements: Planned placements of a single category
            family_template: Family symbol to instantiate
            category: Batch category, selects the transaction name

        Returns:
            Number of created components

        Raises:
            PlacementBatchError: If the batch failed and was rolled back
        """
        if not placements:
            logger.info("No %s openings to create", category)
            return 0

        def create_all() -> List[Any]:
            self._model.prepare_template(family_template)
            created = []
            for placement in placements:
                created.append(self._place(family_template, placement))
            return created

        name = self.transaction_name(category)
        try:
            created = self._transactions.run(name, create_all)
        except Exception as e:
            logger.error("Transaction '%s' rolled back: %s", name, e)
            raise PlacementBatchError(category, e) from e

        logger.info("Created %d %s openings", len(created), category)
        return len(created)

    def _place(self, family_template: Any, placement: PlannedPlacement) -> Any:
        instance = self._model.create_instance(family_template, placement)
        self._parameters.set_scalar(instance, ParameterKind.WIDTH, placement.size)
        self._parameters.set_scalar(instance, ParameterKind.HEIGHT, placement.size)
        logger.debug(
            "Placed opening on wall %s at %s (size %.4f)",
            placement.wall_id, placement.point, placement.size
        )
        return instance
