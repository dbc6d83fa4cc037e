import sys
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from causeway.models import DesignInput
from causeway.sessions import SessionStore
from causeway.structural import calculate


@pytest.fixture
def road_input() -> DesignInput:
    """Standard road causeway: 100 x 8 x 2 m, 1.5 m water, medium soil."""
    return DesignInput(length=100, width=8, height=2, water_depth=1.5,
                       soil_type="medium", load_type="light", safety_factor=2.5)


@pytest.fixture
def road_result(road_input):
    return calculate(road_input)


@pytest.fixture
def store():
    s = SessionStore()
    yield s
    s.clear()
