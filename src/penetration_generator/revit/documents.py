# File: src/penetration_generator/revit/documents.py
"""
Lookups of the documents, family and view the command depends on.

These run in the host adapter before the workflow starts. Each returns
None when nothing matches; the workflow turns a None into a cancelled
result before any transaction opens.
"""

import logging
from typing import Any, Dict, Optional

from src.penetration_generator.revit.adapters import REVIT_AVAILABLE, REVIT_ERROR

logger = logging.getLogger(__name__)

if REVIT_AVAILABLE:
    from Autodesk.Revit.DB import (
        BuiltInCategory,
        FamilySymbol,
        FilteredElementCollector,
        View3D,
    )

# Map settings category strings to Revit BuiltInCategory
CATEGORY_MAP: Dict[str, Any] = {}
if REVIT_AVAILABLE:
    CATEGORY_MAP = {
        "OST_GenericModel": BuiltInCategory.OST_GenericModel,
        "OST_MechanicalEquipment": BuiltInCategory.OST_MechanicalEquipment,
        "OST_SpecialityEquipment": BuiltInCategory.OST_SpecialityEquipment,
    }


def find_document_by_title_substring(application: Any, text: str) -> Optional[Any]:
    """
    First open document whose title contains text.

    Args:
        application: Revit Application
        text: Title substring (e.g., "ОВ")

    Returns:
        Matching Document, or None
    """
    for doc in application.Documents:
        if text in doc.Title:
            logger.info("Using '%s' as source document", doc.Title)
            return doc
    logger.warning("No open document title contains '%s'", text)
    return None


def find_family_template_by_name(
    doc: Any, family_name: str, category_name: str = "OST_GenericModel"
) -> Optional[Any]:
    """
    First FamilySymbol of the named family.

    The lookup does not touch the model. An inactive symbol is returned as
    is; RevitModelRepository.prepare_template activates it inside the first
    placement transaction.

    Args:
        doc: Target document
        family_name: Family name (e.g., "Отверстия")
        category_name: BuiltInCategory name from settings

    Returns:
        FamilySymbol, or None if the family is not loaded
    """
    if not REVIT_AVAILABLE:
        logger.warning("Revit API not available: %s", REVIT_ERROR)
        return None

    collector = FilteredElementCollector(doc).OfClass(FamilySymbol)
    if category_name in CATEGORY_MAP:
        collector = collector.OfCategory(CATEGORY_MAP[category_name])

    symbol = next((s for s in collector if s.FamilyName == family_name), None)
    if symbol is None:
        logger.warning("Family '%s' not loaded", family_name)
        return None

    if not symbol.IsActive:
        logger.debug("Family type '%s' is inactive; activated with the first batch", family_name)
    return symbol


def find_3d_view(doc: Any) -> Optional[Any]:
    """First 3D view of the document that is not a view template."""
    if not REVIT_AVAILABLE:
        logger.warning("Revit API not available: %s", REVIT_ERROR)
        return None

    for view in FilteredElementCollector(doc).OfClass(View3D):
        if not view.IsTemplate:
            return view
    return None
