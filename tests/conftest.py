# tests/conftest.py
import sys
import os

# Add repository root to path so "src.penetration_generator" resolves
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest

from src.penetration_generator.core.penetration_types import (
    LinearSegment,
    MEPSegment,
    SizeCategory,
)


@pytest.fixture
def x_axis_segment():
    """Duct centerline from the origin along +X, 10 ft long."""
    return LinearSegment(origin=(0.0, 0.0, 0.0), direction=(1.0, 0.0, 0.0), length=10.0)


@pytest.fixture
def make_segment():
    """Factory for MEPSegments whose element is a plain dict with a diameter."""
    def _make(
        element_id,
        category=SizeCategory.DUCT,
        centerline=None,
        diameter=0.5,
        start=(0.0, 0.0, 0.0),
        end=(10.0, 0.0, 0.0),
        straight=True,
    ):
        if centerline is None and straight:
            centerline = LinearSegment.from_endpoints(start, end)
        element = {"id": element_id}
        if diameter is not None:
            element["diameter"] = diameter
        return MEPSegment(
            element_id=element_id,
            category=category,
            centerline=centerline if straight else None,
            element=element,
        )
    return _make
