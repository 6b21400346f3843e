"""
Core graph transforms: decentralization and site analysis.
"""

from .decentralization import apply_decentralization, dedupe_edges
from .site_analyzer import (
    SiteAnalyzer,
    ProfileRule,
    ExactDomainRule,
    TldSuffixRule,
    DefaultProfileRule,
    analyze_site,
    normalize_url,
    site_node_id,
)

__all__ = [
    "apply_decentralization",
    "dedupe_edges",
    "SiteAnalyzer",
    "ProfileRule",
    "ExactDomainRule",
    "TldSuffixRule",
    "DefaultProfileRule",
    "analyze_site",
    "normalize_url",
    "site_node_id",
]
