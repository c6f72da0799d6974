# File: tests/penetrations/conftest.py

"""Shared fakes for planner, executor and workflow tests.

The fakes stand in for the host collaborators:
- FakeGeometryQuery returns a fixed list of hits and records each ray
- FakeModel resolves levels, lists segments and records created instances
- FakeParameters reads/writes dict keys
- FakeTransactions records transactions and undoes a batch on failure
"""

import pytest
from typing import Any, Dict, List, Optional, Set

from src.penetration_generator.core.interfaces import (
    GeometryQuery,
    ModelRepository,
    ParameterAccessor,
    TransactionRunner,
)
from src.penetration_generator.core.penetration_types import (
    HitIdentity,
    MEPSegment,
    ParameterKind,
    PlannedPlacement,
    RayHit,
    SizeCategory,
)


class FakeGeometryQuery(GeometryQuery):
    def __init__(self, hits: Optional[List[RayHit]] = None):
        self.hits = list(hits or [])
        self.calls = []

    def find(self, origin, direction, target_filter="walls"):
        self.calls.append((origin, direction, target_filter))
        return list(self.hits)


class FakeModel(ModelRepository):
    def __init__(self):
        self.segments: Dict[SizeCategory, List[MEPSegment]] = {
            SizeCategory.DUCT: [],
            SizeCategory.PIPE: [],
        }
        self.levels: Dict[HitIdentity, Any] = {}
        self.default_level = "L1"
        self.missing_levels: Set[HitIdentity] = set()
        self.fail_categories: Set[SizeCategory] = set()
        self.created: List[Dict[str, Any]] = []
        self.prepared: List[Any] = []
        self.list_calls: List[SizeCategory] = []

    def list_segments(self, document, category):
        self.list_calls.append(category)
        return list(self.segments[category])

    def resolve_level(self, hit: RayHit):
        if hit.identity in self.missing_levels:
            return None
        return self.levels.get(hit.identity, self.default_level)

    def prepare_template(self, family_template):
        self.prepared.append(family_template)

    def create_instance(self, family_template, placement: PlannedPlacement):
        if placement.category in self.fail_categories:
            raise RuntimeError("host fault")
        instance = {"family": family_template, "placement": placement}
        self.created.append(instance)
        return instance


class FakeParameters(ParameterAccessor):
    def get_scalar(self, instance, kind: ParameterKind):
        return instance.get(kind.value)

    def set_scalar(self, instance, kind: ParameterKind, value: float):
        instance[kind.value] = value


class FakeTransactions(TransactionRunner):
    def __init__(self, model: FakeModel):
        self._model = model
        self.started: List[str] = []
        self.committed: List[str] = []
        self.rolled_back: List[str] = []

    def run(self, name, operation):
        self.started.append(name)
        mark = len(self._model.created)
        try:
            result = operation()
        except Exception:
            del self._model.created[mark:]
            self.rolled_back.append(name)
            raise
        self.committed.append(name)
        return result


@pytest.fixture
def geometry_query():
    return FakeGeometryQuery()


@pytest.fixture
def model():
    return FakeModel()


@pytest.fixture
def parameters():
    return FakeParameters()


@pytest.fixture
def transactions(model):
    return FakeTransactions(model)
