"""
Simulation Package

    - propagate_failure / propagate_from_state: cascade wave computation
    - NarrativeGenerator: human-readable log lines for waves and reports
"""

from .propagation import (
    CascadePropagator,
    propagate_failure,
    propagate_from_state,
    healthy_status_map,
    final_status_map,
    DIRECT_IMPACT_REASON,
)
from .narrative import (
    NarrativeGenerator,
    generate_narrative_for_wave,
    generate_final_analysis,
    generate_site_narrative,
    generate_scenario_header,
    generate_manual_kill_header,
)

__all__ = [
    "CascadePropagator",
    "propagate_failure",
    "propagate_from_state",
    "healthy_status_map",
    "final_status_map",
    "DIRECT_IMPACT_REASON",
    "NarrativeGenerator",
    "generate_narrative_for_wave",
    "generate_final_analysis",
    "generate_site_narrative",
    "generate_scenario_header",
    "generate_manual_kill_header",
]
