"""
Application Layer

Orchestration over the pure simulation core.
"""

from .ports import ICascadeObserver
from .simulation_service import SimulationService, merge_site_into_graph

__all__ = [
    "ICascadeObserver",
    "SimulationService",
    "merge_site_into_graph",
]
