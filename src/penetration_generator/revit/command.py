# File: src/penetration_generator/revit/command.py
"""
Revit command: place openings wherever ducts and pipes cross walls.

Performs the host lookups (source document by title, opening family by
name, first 3D view), builds the Revit collaborators and runs the
workflow. The caller decides how to report the result (TaskDialog in the
pushbutton script).
"""

import logging
from typing import Any, Optional

from src.penetration_generator.config.settings import PenetrationSettings
from src.penetration_generator.penetrations.workflow import PenetrationWorkflow, WorkflowResult
from src.penetration_generator.revit.adapters import (
    RevitGeometryQuery,
    RevitModelRepository,
    RevitParameterAccessor,
    RevitTransactionRunner,
)
from src.penetration_generator.revit.documents import (
    find_3d_view,
    find_document_by_title_substring,
    find_family_template_by_name,
)

logger = logging.getLogger(__name__)


def run_add_holes(
    doc: Any,
    settings: Optional[PenetrationSettings] = None,
) -> WorkflowResult:
    """
    Run the penetration command on the active document.

    Args:
        doc: Active (architectural) Revit Document
        settings: Command settings; defaults apply when omitted

    Returns:
        WorkflowResult; CANCELLED when a lookup found nothing
    """
    settings = settings or PenetrationSettings()
    workflow = PenetrationWorkflow(
        RevitModelRepository(doc),
        RevitParameterAccessor(settings),
        RevitTransactionRunner(doc),
        settings,
    )

    # Each lookup runs only when the previous one succeeded; the workflow
    # reports the first missing dependency
    family_template = None
    geometry_query = None

    source_doc = find_document_by_title_substring(
        doc.Application, settings.source_title_marker
    )
    if source_doc is not None:
        family_template = find_family_template_by_name(
            doc, settings.family_name, settings.family_category
        )
    if family_template is not None:
        view3d = find_3d_view(doc)
        if view3d is not None:
            geometry_query = RevitGeometryQuery(view3d, settings.find_in_links)

    return workflow.run(source_doc, family_template, geometry_query)
