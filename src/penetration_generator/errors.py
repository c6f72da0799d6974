# File: src/penetration_generator/errors.py
"""
Exceptions raised by the penetration generator.

Precondition failures stop the command before any transaction opens.
Batch failures are raised after the host rolled back the batch.
"""

from typing import Any, Dict, Optional


class PenetrationError(Exception):
    """
    Base class for penetration generator exceptions.

    Carries an optional dictionary of extra context for logs and JSON
    output.
    """
    def __init__(self, detail: str, extra: Optional[Dict[str, Any]] = None):
        self.detail = detail
        self.extra = extra or {}
        super().__init__(detail)


class PreconditionError(PenetrationError):
    """A required document, family or view is missing."""
    def __init__(self, missing: str, detail: str):
        """
        Initialize with the missing resource.

        Args:
            missing: Short key of what is missing ("source_document",
                "family_template", "view_3d")
            detail: User-facing message
        """
        self.missing = missing
        super().__init__(detail, extra={"missing": missing})


class PlacementBatchError(PenetrationError):
    """Placement failed inside a batch; the batch was rolled back."""
    def __init__(self, category: Any, cause: Exception):
        self.category = category
        self.cause = cause
        detail = f"Placement of {category} openings failed: {cause}"
        super().__init__(detail, extra={"category": str(category)})


class ParameterNotFoundError(PenetrationError):
    """A component has no parameter with the configured label."""
    def __init__(self, kind: Any, label: str):
        self.kind = kind
        self.label = label
        super().__init__(
            f"Parameter '{label}' ({kind}) not found on element",
            extra={"label": label},
        )


class SettingsError(PenetrationError):
    """Configuration could not be loaded or validated."""
