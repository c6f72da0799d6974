# File: scripts/revit_add_holes.py
"""Add Holes pushbutton for pyRevit.

Places opening markers in the active (architectural) document wherever a
duct or pipe of the open mechanical document crosses a wall.

Key Features:
1. Document lookup
   - Mechanical document found by title marker (default "ОВ")
   - Opening family found by name (default "Отверстия")
   - First non-template 3D view used for ray casting

2. Placement
   - One opening per wall crossed by each duct/pipe
   - Width/height set to the duct/pipe diameter

3. Transaction Management
   - Ducts and pipes committed in separate transactions
   - A failed batch is rolled back; earlier batches stay committed

Environment:
    Revit 2022+
    pyRevit (CPython 3 or IronPython 3 engine)

Settings:
    Optional JSON file next to this script (penetration_settings.json) and
    PENETRATION_* environment variables, see config/settings.py.

Version: 1.0.0
"""

# =============================================================================
# Imports
# =============================================================================

import os
import sys

# Project path (repository root, one level above scripts/)
PROJECT_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_PATH not in sys.path:
    sys.path.insert(0, PROJECT_PATH)

import clr
clr.AddReference("RevitAPIUI")
from Autodesk.Revit.UI import TaskDialog

from src.penetration_generator.config.settings import load_settings
from src.penetration_generator.errors import SettingsError
from src.penetration_generator.penetrations.workflow import WorkflowStatus
from src.penetration_generator.revit.command import run_add_holes
from src.penetration_generator.utils.logging_config import PenetrationLogger

# =============================================================================
# Constants
# =============================================================================

DIALOG_TITLE = "Ошибка"
SETTINGS_FILE = os.path.join(os.path.dirname(__file__), "penetration_settings.json")

# =============================================================================
# Main
# =============================================================================

def main():
    PenetrationLogger.configure(
        debug_mode=bool(os.environ.get("PENETRATION_DEBUG")),
        log_dir=os.path.join(PROJECT_PATH, "logs"),
        trace_hits=bool(os.environ.get("PENETRATION_TRACE")),
    )

    try:
        settings = load_settings(SETTINGS_FILE if os.path.exists(SETTINGS_FILE) else None)
    except SettingsError as e:
        TaskDialog.Show(DIALOG_TITLE, e.detail)
        return

    doc = __revit__.ActiveUIDocument.Document  # noqa: F821 (pyRevit global)
    result = run_add_holes(doc, settings)

    if result.status != WorkflowStatus.SUCCEEDED:
        TaskDialog.Show(DIALOG_TITLE, result.message)
        return

    print(f"Created {result.total_created} openings")
    for skipped in result.skipped:
        print(f"Skipped {skipped.category} {skipped.element_id}: {skipped.detail}")


if __name__ == "__main__":
    main()
