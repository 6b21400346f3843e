"""
Default Internet Dependency Graph

Static seed data treated as constant configuration by the engine:
    - DEFAULT_NODES:  DNS, cloud, CDN, application, finance, government
                      and end-user nodes
    - DEFAULT_EDGES:  upstream -> downstream dependencies
    - SCENARIOS:      preset kill sets
    - DECENTRALIZATION_TIERS: redundant edges unlocked by the
                      decentralization dial
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from ..models.enums import InfraType
from ..models.graph import InfraNode, InfraEdge, InternetGraph, Scenario


def _node(id: str, label: str, type: InfraType, glyph: str, users: float, impact: float) -> InfraNode:
    return InfraNode(
        id=id, label=label, type=type, glyph=glyph,
        user_count=users, financial_impact_per_hour=impact,
    )


# =============================================================================
# Nodes
# =============================================================================

DEFAULT_NODES: Tuple[InfraNode, ...] = (
    # DNS layer
    _node("dns-root",       "Root DNS",         InfraType.DNS,        "🌐", 4500, 0),
    _node("cloudflare-dns", "Cloudflare DNS",   InfraType.DNS,        "🌐", 500,  0),
    _node("google-dns",     "Google DNS",       InfraType.DNS,        "🌐", 500,  0),

    # Cloud layer
    _node("aws",            "AWS",              InfraType.CLOUD,      "☁️", 1000, 0),
    _node("gcp",            "Google Cloud",     InfraType.CLOUD,      "☁️", 400,  0),
    _node("azure",          "Azure",            InfraType.CLOUD,      "☁️", 300,  0),

    # CDN layer
    _node("cloudflare-cdn", "Cloudflare CDN",   InfraType.CDN,        "📡", 800,  0),
    _node("fastly-cdn",     "Fastly CDN",       InfraType.CDN,        "📡", 300,  0),
    _node("akamai-cdn",     "Akamai CDN",       InfraType.CDN,        "📡", 400,  0),

    # Applications
    _node("netflix",        "Netflix",          InfraType.SAAS,       "🎬", 250,  30),
    _node("shopify",        "Shopify",          InfraType.SAAS,       "🛒", 50,   20),
    _node("gmail",          "Gmail",            InfraType.SAAS,       "📧", 1800, 15),
    _node("github",         "GitHub",           InfraType.SAAS,       "💻", 100,  10),

    # Social media
    _node("twitter",        "X / Twitter",      InfraType.SOCIAL,     "🐦", 400,  5),

    # Finance
    _node("stripe",         "Stripe",           InfraType.FINANCE,    "💳", 100,  100),
    _node("bank-app",       "Banking Services", InfraType.FINANCE,    "🏦", 500,  200),

    # Government
    _node("gov-services",   "Gov Services",     InfraType.GOVERNMENT, "🏛️", 300,  50),

    # End users
    _node("users",          "End Users",        InfraType.USER,       "👤", 4500, 0),
)

USERS_NODE_ID = "users"


# =============================================================================
# Edges
# =============================================================================

DEFAULT_EDGES: Tuple[InfraEdge, ...] = (
    # Root DNS feeds the resolvers
    InfraEdge("dns-root",       "cloudflare-dns", True),
    InfraEdge("dns-root",       "google-dns",     True),

    # Resolvers feed CDN and cloud
    InfraEdge("cloudflare-dns", "cloudflare-cdn", True),
    InfraEdge("google-dns",     "gcp",            False),

    # Cloud hosting
    InfraEdge("aws",            "netflix",        True),
    InfraEdge("aws",            "shopify",        True),
    InfraEdge("aws",            "stripe",         True),
    InfraEdge("aws",            "github",         True),
    InfraEdge("aws",            "bank-app",       False),
    InfraEdge("gcp",            "gmail",          True),
    InfraEdge("azure",          "gov-services",   True),
    InfraEdge("azure",          "bank-app",       True),

    # CDN delivery
    InfraEdge("cloudflare-cdn", "netflix",        False),
    InfraEdge("cloudflare-cdn", "twitter",        False),
    InfraEdge("cloudflare-cdn", "shopify",        False),
    InfraEdge("fastly-cdn",     "twitter",        True),
    InfraEdge("fastly-cdn",     "github",         False),
    InfraEdge("akamai-cdn",     "bank-app",       False),
    InfraEdge("akamai-cdn",     "gov-services",   False),

    # Direct DNS dependencies
    InfraEdge("dns-root",       "bank-app",       True),
    InfraEdge("dns-root",       "gov-services",   True),
    InfraEdge("dns-root",       "stripe",         False),
    InfraEdge("google-dns",     "gmail",          True),

    # Services reach end users
    InfraEdge("netflix",        "users",          False),
    InfraEdge("twitter",        "users",          False),
    InfraEdge("gmail",          "users",          False),
    InfraEdge("github",         "users",          False),
    InfraEdge("shopify",        "users",          False),
    InfraEdge("stripe",         "users",          False),
    InfraEdge("bank-app",       "users",          True),
    InfraEdge("gov-services",   "users",          False),
)


def default_graph() -> InternetGraph:
    return InternetGraph(nodes=DEFAULT_NODES, edges=DEFAULT_EDGES)


# =============================================================================
# Scenarios
# =============================================================================

SCENARIOS: Tuple[Scenario, ...] = (
    Scenario(
        id="dns-collapse",
        label="DNS Collapse",
        description="Root DNS servers fail, name resolution breaks globally.",
        kill_nodes=("dns-root",),
    ),
    Scenario(
        id="cdn-outage",
        label="CDN Outage",
        description="All major CDN providers go down simultaneously.",
        kill_nodes=("cloudflare-cdn", "fastly-cdn", "akamai-cdn"),
    ),
    Scenario(
        id="aws-outage",
        label="AWS Outage",
        description="Amazon Web Services suffers a complete outage.",
        kill_nodes=("aws",),
    ),
)

SCENARIO_IDS: Tuple[str, ...] = tuple(s.id for s in SCENARIOS)


def get_scenario(scenario_id: str) -> Optional[Scenario]:
    """Look up a scenario by id, None when unknown."""
    for scenario in SCENARIOS:
        if scenario.id == scenario_id:
            return scenario
    return None


# =============================================================================
# Decentralization tiers
# =============================================================================

@dataclass(frozen=True)
class DecentralizationTier:
    """Redundant failover edges unlocked at ``min_level`` and above."""
    min_level: int
    redundant_edges: Tuple[InfraEdge, ...]
    downgrade_redundant: bool = False


DECENTRALIZATION_TIERS: Tuple[DecentralizationTier, ...] = (
    DecentralizationTier(30, (
        InfraEdge("gcp",        "netflix",      False),   # Netflix failover to GCP
        InfraEdge("azure",      "shopify",      False),   # Shopify failover to Azure
    )),
    DecentralizationTier(50, (
        InfraEdge("google-dns", "bank-app",     False),   # backup DNS for banking
        InfraEdge("azure",      "github",       False),
        InfraEdge("gcp",        "stripe",       False),
    )),
    DecentralizationTier(70, (
        InfraEdge("aws",        "gmail",        False),
        InfraEdge("google-dns", "gov-services", False),
    ), downgrade_redundant=True),
)

# At or below this level the graph is returned unchanged.
NO_CHANGE_LEVEL = 10


def scenario_table() -> List[Dict[str, object]]:
    return [s.to_dict() for s in SCENARIOS]
