"""
Analysis Package

    - compute_metrics: weighted health metrics for a status snapshot
    - compute_insights / InsightAnalyzer: structural risk indicators
"""

from .metrics import compute_metrics, round_half_up
from .insights import InsightAnalyzer, build_dependency_graph, compute_insights

__all__ = [
    "compute_metrics",
    "round_half_up",
    "InsightAnalyzer",
    "build_dependency_graph",
    "compute_insights",
]
