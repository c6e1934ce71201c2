"""Shared fixtures for kumiko tests."""

import pytest

from kumiko.config import CuttingParams
from kumiko.domain import Segment


@pytest.fixture
def params() -> CuttingParams:
    """Cutting parameters with a 20 mm grid unit (400 mm stock, 20 divisions)."""
    return CuttingParams(stock_length=400.0, grid_divisions=20)


@pytest.fixture
def cross() -> list[Segment]:
    """A horizontal and a vertical segment crossing at (5, 0), horizontal drawn first."""
    return [
        Segment("h", 0, 0, 10, 0),
        Segment("v", 5, -5, 5, 5),
    ]
