# File: src/penetration_generator/config/settings.py
"""
Settings for the wall penetration command.

Defaults reproduce the naming conventions of the projects the tool was
written for (Russian-language templates): the mechanical model is the open
document whose title contains "ОВ", the marker family is "Отверстия" and
its size parameters are "Ширина" / "Высота".

Settings are resolved in three layers:
1. Model defaults
2. Optional JSON file
3. Environment variables prefixed with PENETRATION_

Example:
    >>> settings = load_settings("penetration_settings.json")
    >>> settings.label_for(ParameterKind.WIDTH)
    'Ширина'
"""

import json
import logging
import os
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from src.penetration_generator.core.penetration_types import ParameterKind
from src.penetration_generator.errors import SettingsError

logger = logging.getLogger(__name__)

ENV_PREFIX = "PENETRATION_"


class PenetrationSettings(BaseModel):
    """Validated configuration for document lookup, family and parameters."""
    source_title_marker: str = Field(
        default="ОВ",
        description="Substring identifying the mechanical document by title",
        min_length=1,
    )
    family_name: str = Field(
        default="Отверстия",
        description="Family name of the opening marker",
        min_length=1,
    )
    family_category: str = Field(
        default="OST_GenericModel",
        description="BuiltInCategory name the marker family belongs to",
    )
    parameter_labels: Dict[ParameterKind, str] = Field(
        default_factory=lambda: {
            ParameterKind.WIDTH: "Ширина",
            ParameterKind.HEIGHT: "Высота",
        },
        description="Parameter labels on the marker family",
    )
    duct_transaction_name: str = Field(default="Create hole for ducts", min_length=1)
    pipe_transaction_name: str = Field(default="Create hole for pipes", min_length=1)
    distance_tolerance: float = Field(
        default=0.0,
        description="Slack (feet) when comparing hit distance to segment length",
        ge=0,
    )
    find_in_links: bool = Field(
        default=False,
        description="Also intersect walls of linked documents",
    )

    @field_validator("parameter_labels")
    @classmethod
    def validate_labels(cls, v: Dict[ParameterKind, str]) -> Dict[ParameterKind, str]:
        """Width and height labels are required for every placement."""
        for kind in (ParameterKind.WIDTH, ParameterKind.HEIGHT):
            if not v.get(kind):
                raise ValueError(f"Missing parameter label for {kind.value}")
        return v

    def label_for(self, kind: ParameterKind) -> Optional[str]:
        return self.parameter_labels.get(kind)


def _env_overrides(environ: Mapping[str, str]) -> Dict[str, Any]:
    """Collect PENETRATION_* variables that match a settings field."""
    overrides: Dict[str, Any] = {}
    for name in PenetrationSettings.model_fields:
        raw = environ.get(ENV_PREFIX + name.upper())
        if raw is None:
            continue
        if name == "parameter_labels":
            try:
                overrides[name] = json.loads(raw)
            except json.JSONDecodeError as e:
                raise SettingsError(f"Invalid JSON in {ENV_PREFIX}{name.upper()}: {e}")
        else:
            overrides[name] = raw
    return overrides


def load_settings(
    path: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> PenetrationSettings:
    """
    Load settings from defaults, an optional JSON file and the environment.

    Args:
        path: Optional path to a JSON settings file
        environ: Environment mapping, defaults to os.environ

    Returns:
        Validated PenetrationSettings

    Raises:
        SettingsError: If the file cannot be read or a value is invalid
    """
    data: Dict[str, Any] = {}

    if path:
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise SettingsError(f"Cannot read settings file {path}: {e}")
        if not isinstance(data, dict):
            raise SettingsError(f"Settings file {path} must contain a JSON object")
        logger.debug("Loaded settings file %s", path)

    data.update(_env_overrides(os.environ if environ is None else environ))

    try:
        return PenetrationSettings.model_validate(data)
    except ValidationError as e:
        raise SettingsError(f"Invalid penetration settings: {e}")
