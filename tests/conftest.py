"""
Test Configuration and Fixtures
================================

Shared pytest fixtures for the netcascade test suite.

Usage:
    pytest tests/                    # Run all tests
    pytest tests/ -v                 # Verbose output
    pytest tests/ -k "propagation"   # Run only propagation tests
    pytest tests/ --quick            # Skip slow tests
"""

import random
import sys
from datetime import datetime
from pathlib import Path
from typing import List

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from netcascade.application import ICascadeObserver, SimulationService
from netcascade.domain.config import DEFAULT_EDGES, DEFAULT_NODES
from netcascade.domain.models import InfraEdge, InfraNode, InfraType
from netcascade.simulation import NarrativeGenerator


# =============================================================================
# Custom Markers
# =============================================================================

def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line("markers", "slow: marks tests as slow")
    config.addinivalue_line("markers", "integration: marks integration tests")


def pytest_addoption(parser):
    """Add custom command line options"""
    parser.addoption(
        "--quick",
        action="store_true",
        default=False,
        help="Skip slow tests",
    )


def pytest_collection_modifyitems(config, items):
    """Skip slow tests if --quick is specified"""
    if config.getoption("--quick"):
        skip_slow = pytest.mark.skip(reason="Skipped with --quick")
        for item in items:
            if "slow" in item.keywords:
                item.add_marker(skip_slow)


# =============================================================================
# Graph Fixtures
# =============================================================================

@pytest.fixture
def default_nodes() -> List[InfraNode]:
    return list(DEFAULT_NODES)


@pytest.fixture
def default_edges() -> List[InfraEdge]:
    return list(DEFAULT_EDGES)


@pytest.fixture
def chain_nodes() -> List[InfraNode]:
    """Four-node toy graph: A feeds B and X, X feeds B, B feeds C."""
    return [
        InfraNode("a", "A", InfraType.DNS, user_count=100),
        InfraNode("x", "X", InfraType.CLOUD, user_count=100),
        InfraNode("b", "B", InfraType.SAAS, user_count=100, financial_impact_per_hour=10),
        InfraNode("c", "C", InfraType.SAAS, user_count=100, financial_impact_per_hour=10),
    ]


@pytest.fixture
def chain_edges() -> List[InfraEdge]:
    return [
        InfraEdge("a", "b", False),
        InfraEdge("a", "x", True),
        InfraEdge("x", "b", True),
        InfraEdge("b", "c", True),
    ]


# =============================================================================
# Service Fixtures
# =============================================================================

FIXED_NOW = datetime(2024, 1, 1, 12, 0, 0)


@pytest.fixture
def narrator() -> NarrativeGenerator:
    """Narrative generator with a fixed clock and seeded jitter."""
    return NarrativeGenerator(clock=lambda: FIXED_NOW, rng=random.Random(42))


@pytest.fixture
def service(narrator) -> SimulationService:
    return SimulationService(narrator=narrator)


class RecordingObserver(ICascadeObserver):
    """Collects observer callbacks for assertions."""

    def __init__(self):
        self.waves = []
        self.runs = []

    def on_wave_applied(self, wave_index, wave, metrics):
        self.waves.append((wave_index, [c.node_id for c in wave], metrics))

    def on_run_complete(self, run):
        self.runs.append(run)


@pytest.fixture
def recorder() -> RecordingObserver:
    return RecordingObserver()
