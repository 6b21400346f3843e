"""
Static configuration: default graph, scenarios and website profiles.
"""

from .seed_data import (
    DEFAULT_NODES,
    DEFAULT_EDGES,
    SCENARIOS,
    SCENARIO_IDS,
    DECENTRALIZATION_TIERS,
    DecentralizationTier,
    USERS_NODE_ID,
    default_graph,
    get_scenario,
    scenario_table,
)
from .domain_profiles import (
    KNOWN_DOMAINS,
    TLD_PROFILES,
    DEFAULT_PROFILE,
    CUSTOM_NODE_PREFIX,
)

__all__ = [
    "DEFAULT_NODES", "DEFAULT_EDGES", "SCENARIOS", "SCENARIO_IDS",
    "DECENTRALIZATION_TIERS", "DecentralizationTier", "USERS_NODE_ID",
    "default_graph", "get_scenario", "scenario_table",
    "KNOWN_DOMAINS", "TLD_PROFILES", "DEFAULT_PROFILE", "CUSTOM_NODE_PREFIX",
]
