"""
Insight Analyzer

Computes fixed structural risk indicators from graph topology using
NetworkX. Insights depend only on nodes and edges, never on run-time status.

Insights (always in this order):
    1. Most critical node        - highest out-degree
    2. DNS centralization risk   - edges sourced from DNS vs. DNS node count
    3. Cloud concentration       - busiest cloud provider
    4. CDN dependency density    - edges sourced from CDN nodes
    5. Single points of failure  - nodes with out-degree >= 3 (omitted if none)

Out-degree ties go to the source that appears first in the edge list.

Usage:
    insights = compute_insights(nodes, edges)
"""

from __future__ import annotations
import logging
from typing import Dict, List, Optional, Sequence, Tuple

import networkx as nx

from ..domain.models import InfraNode, InfraEdge, InfraType, Insight, Severity

logger = logging.getLogger(__name__)

SPOF_MIN_OUT_DEGREE = 3


# ---------------------------------------------------------------------------
# Graph construction (pure function)
# ---------------------------------------------------------------------------

def build_dependency_graph(
    nodes: Sequence[InfraNode],
    edges: Sequence[InfraEdge],
) -> nx.MultiDiGraph:
    """
    Build a NetworkX MultiDiGraph of the topology.

    Parallel edges are kept so that out-degree counts every declared edge.
    Edge endpoints that reference unknown nodes become attribute-less nodes.
    """
    G = nx.MultiDiGraph()
    for node in nodes:
        G.add_node(node.id, label=node.label, node_type=node.type.value)
    for edge in edges:
        G.add_edge(edge.source, edge.target, critical=edge.critical)
    return G


# ---------------------------------------------------------------------------
# Analyzer
# ---------------------------------------------------------------------------

class InsightAnalyzer:
    """Structural risk analysis over one dependency graph."""

    def __init__(self, nodes: Sequence[InfraNode], edges: Sequence[InfraEdge]):
        self.G = build_dependency_graph(nodes, edges)
        # Sources in order of first appearance; drives tie-breaking
        self.sources: List[str] = list(dict.fromkeys(e.source for e in edges))

    def analyze(self) -> List[Insight]:
        insights = [
            self.most_critical_node(),
            self.dns_centralization(),
            self.cloud_concentration(),
            self.cdn_density(),
        ]
        spof = self.single_points_of_failure()
        if spof is not None:
            insights.append(spof)
        logger.debug(f"Computed {len(insights)} insights over {self.G.number_of_edges()} edges")
        return insights

    def label(self, node_id: str) -> str:
        if node_id in self.G:
            return self.G.nodes[node_id].get("label", node_id)
        return node_id

    def ids_of_type(self, node_type: InfraType) -> List[str]:
        return [n for n, t in self.G.nodes(data="node_type") if t == node_type.value]

    def _top_source(self, candidates: Optional[set] = None) -> Tuple[str, int]:
        top_id, top_degree = "", 0
        for source in self.sources:
            if candidates is not None and source not in candidates:
                continue
            degree = self.G.out_degree(source)
            if degree > top_degree:
                top_id, top_degree = source, degree
        return top_id, top_degree

    def most_critical_node(self) -> Insight:
        node_id, degree = self._top_source()
        if degree > 5:
            severity = Severity.CRITICAL
        elif degree > 3:
            severity = Severity.HIGH
        else:
            severity = Severity.MEDIUM
        label = self.label(node_id) if node_id else "None"
        return Insight("Most critical node", f"{label} ({degree} dependencies)", severity)

    def dns_centralization(self) -> Insight:
        dns_ids = self.ids_of_type(InfraType.DNS)
        dependents = sum(self.G.out_degree(n) for n in dns_ids)
        return Insight(
            "DNS centralization risk",
            f"{dependents} services depend on {len(dns_ids)} DNS providers",
            Severity.CRITICAL if len(dns_ids) <= 2 else Severity.MEDIUM,
        )

    def cloud_concentration(self) -> Insight:
        cloud_id, hosted = self._top_source(set(self.ids_of_type(InfraType.CLOUD)))
        label = self.label(cloud_id) if cloud_id else "None"
        return Insight(
            "Cloud concentration",
            f"{label} hosts {hosted} services",
            Severity.HIGH if hosted >= 4 else Severity.MEDIUM,
        )

    def cdn_density(self) -> Insight:
        dependents = sum(self.G.out_degree(n) for n in self.ids_of_type(InfraType.CDN))
        return Insight(
            "CDN dependency density",
            f"{dependents} services rely on CDN layer",
            Severity.HIGH if dependents > 5 else Severity.MEDIUM,
        )

    def single_points_of_failure(self) -> Optional[Insight]:
        labels = [
            self.label(s) for s in self.sources
            if self.G.out_degree(s) >= SPOF_MIN_OUT_DEGREE
        ]
        if not labels:
            return None
        return Insight("Single points of failure", ", ".join(labels), Severity.CRITICAL)

    def out_degrees(self) -> Dict[str, int]:
        return {s: self.G.out_degree(s) for s in self.sources}


def compute_insights(nodes: Sequence[InfraNode], edges: Sequence[InfraEdge]) -> List[Insight]:
    return InsightAnalyzer(nodes, edges).analyze()
