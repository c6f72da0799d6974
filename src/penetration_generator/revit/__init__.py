# File: src/penetration_generator/revit/__init__.py
"""
Revit host layer.

Implements the collaborator interfaces on top of the Revit API and the
lookups the command needs before it starts. Importing this package outside
Revit is safe; the adapters raise RuntimeError when constructed there.
"""

from .adapters import (
    REVIT_AVAILABLE,
    RevitGeometryQuery,
    RevitModelRepository,
    RevitParameterAccessor,
    RevitTransactionRunner,
)
from .documents import (
    find_3d_view,
    find_document_by_title_substring,
    find_family_template_by_name,
)
from .command import run_add_holes

__all__ = [
    "REVIT_AVAILABLE",
    "RevitGeometryQuery",
    "RevitModelRepository",
    "RevitParameterAccessor",
    "RevitTransactionRunner",
    "find_3d_view",
    "find_document_by_title_substring",
    "find_family_template_by_name",
    "run_add_holes",
]
