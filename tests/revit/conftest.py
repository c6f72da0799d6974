# File: tests/revit/conftest.py

"""Stand-ins for the Revit API names the host layer imports.

The adapters and lookups bind Revit classes as module globals. These
fixtures replace them with plain classes and MagicMocks so the Revit code
paths run outside Revit:
- ElementId and XYZ become identity / tuple constructors
- Wall, Level, LocationCurve and Line become small classes for isinstance
- Transaction, ReferenceIntersector and FilteredElementCollector are mocks
"""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from src.penetration_generator.revit import adapters, documents


class FakeWall:
    def __init__(self, level_id=None):
        self.LevelId = level_id


class FakeLevel:
    def __init__(self, elevation=0.0, level_id=None):
        self.Elevation = elevation
        self.Id = SimpleNamespace(Value=level_id)


class FakeLine:
    def __init__(self, start, direction, length):
        self._start = SimpleNamespace(X=start[0], Y=start[1], Z=start[2])
        self.Direction = SimpleNamespace(X=direction[0], Y=direction[1], Z=direction[2])
        self.Length = length

    def GetEndPoint(self, index):
        return self._start


class FakeLocationCurve:
    def __init__(self, curve):
        self.Curve = curve


def revit_id(value):
    return SimpleNamespace(Value=value)


def make_context(distance, element_id, linked_id=None):
    """ReferenceWithContext as returned by ReferenceIntersector.Find."""
    reference = SimpleNamespace(
        ElementId=revit_id(element_id),
        LinkedElementId=revit_id(-1 if linked_id is None else linked_id),
    )
    context = MagicMock()
    context.Proximity = distance
    context.GetReference.return_value = reference
    return context


def make_symbol(family_name="Отверстия", active=False):
    symbol = MagicMock(name="symbol")
    symbol.FamilyName = family_name
    symbol.IsActive = active
    return symbol


@pytest.fixture
def fake_revit(monkeypatch):
    """Patch the Revit globals of revit.adapters and revit.documents."""
    api = SimpleNamespace(
        Transaction=MagicMock(name="Transaction"),
        ReferenceIntersector=MagicMock(name="ReferenceIntersector"),
        FilteredElementCollector=MagicMock(name="FilteredElementCollector"),
        LookupCollector=MagicMock(name="LookupCollector"),
    )

    patches = {
        "REVIT_AVAILABLE": True,
        "XYZ": lambda x, y, z: (x, y, z),
        "ElementId": lambda value: value,
        "ElementClassFilter": MagicMock(name="ElementClassFilter"),
        "FindReferenceTarget": SimpleNamespace(Element="Element"),
        "ReferenceIntersector": api.ReferenceIntersector,
        "FilteredElementCollector": api.FilteredElementCollector,
        "Transaction": api.Transaction,
        "TransactionStatus": SimpleNamespace(Committed="Committed", RolledBack="RolledBack"),
        "StructuralType": SimpleNamespace(NonStructural="NonStructural"),
        "BuiltInParameter": SimpleNamespace(
            RBS_CURVE_DIAMETER_PARAM="duct_diameter",
            RBS_PIPE_DIAMETER_PARAM="pipe_diameter",
        ),
        "Wall": FakeWall,
        "Level": FakeLevel,
        "Line": FakeLine,
        "LocationCurve": FakeLocationCurve,
        "Duct": "Duct",
        "Pipe": "Pipe",
    }
    for name, value in patches.items():
        monkeypatch.setattr(adapters, name, value, raising=False)

    for name, value in {
        "REVIT_AVAILABLE": True,
        "FilteredElementCollector": api.LookupCollector,
        "FamilySymbol": "FamilySymbol",
        "View3D": "View3D",
    }.items():
        monkeypatch.setattr(documents, name, value, raising=False)

    transaction = MagicMock(name="transaction")
    transaction.Commit.return_value = "Committed"
    transaction.HasStarted.return_value = True
    transaction.HasEnded.return_value = False
    api.Transaction.return_value = transaction
    api.transaction = transaction

    api.Wall = FakeWall
    api.Level = FakeLevel
    api.Line = FakeLine
    api.LocationCurve = FakeLocationCurve
    api.make_context = make_context
    api.make_symbol = make_symbol
    api.revit_id = revit_id
    return api


@pytest.fixture
def lookup_results(fake_revit):
    """Set what documents.FilteredElementCollector(...).OfClass(cls) yields."""
    results = {"FamilySymbol": [], "View3D": []}
    collector = MagicMock()
    collector.OfClass.side_effect = lambda cls: list(results[cls])
    fake_revit.LookupCollector.return_value = collector
    return results


