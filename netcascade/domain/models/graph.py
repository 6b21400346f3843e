"""
Graph Domain Models

Immutable value objects describing the internet dependency graph.

Edges are directed from the upstream provider (source) to the downstream
dependent (target). A critical edge means the target cannot survive the loss
of its source; a non-critical edge only degrades it.
"""

from __future__ import annotations
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, List, Any, Iterable, Tuple

from .enums import NodeStatus, InfraType


@dataclass(frozen=True)
class InfraNode:
    """A named infrastructure or service entity."""
    id: str
    label: str
    type: InfraType
    glyph: str = "🌐"
    status: NodeStatus = NodeStatus.HEALTHY
    user_count: float = 0.0                  # millions of users
    financial_impact_per_hour: float = 0.0   # millions USD / hour

    @property
    def is_service(self) -> bool:
        """True for every node that counts towards service health."""
        return self.type != InfraType.USER

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "type": self.type.value,
            "glyph": self.glyph,
            "status": self.status.value,
            "user_count": self.user_count,
            "financial_impact_per_hour": self.financial_impact_per_hour,
        }


@dataclass(frozen=True)
class InfraEdge:
    """Directed dependency: ``target`` depends on ``source``."""
    source: str
    target: str
    critical: bool = False

    @property
    def key(self) -> Tuple[str, str]:
        return (self.source, self.target)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source": self.source,
            "target": self.target,
            "critical": self.critical,
        }


@dataclass(frozen=True)
class Scenario:
    """A named preset kill set."""
    id: str
    label: str
    description: str
    kill_nodes: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "description": self.description,
            "kill_nodes": list(self.kill_nodes),
        }


@dataclass(frozen=True)
class InternetGraph:
    """A complete node/edge collection."""
    nodes: Tuple[InfraNode, ...] = field(default_factory=tuple)
    edges: Tuple[InfraEdge, ...] = field(default_factory=tuple)

    @classmethod
    def of(cls, nodes: Iterable[InfraNode], edges: Iterable[InfraEdge]) -> "InternetGraph":
        return cls(nodes=tuple(nodes), edges=tuple(edges))

    def node_index(self) -> Dict[str, InfraNode]:
        return index_nodes(self.nodes)

    def incoming_index(self) -> Dict[str, List[InfraEdge]]:
        return index_incoming(self.edges)

    def get_nodes_by_type(self, node_type: InfraType) -> List[InfraNode]:
        return [n for n in self.nodes if n.type == node_type]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
        }


# =============================================================================
# Index helpers
# =============================================================================

def index_nodes(nodes: Iterable[InfraNode]) -> Dict[str, InfraNode]:
    """Map node id -> node. Later duplicates do not replace earlier ones."""
    index: Dict[str, InfraNode] = {}
    for node in nodes:
        index.setdefault(node.id, node)
    return index


def index_incoming(edges: Iterable[InfraEdge]) -> Dict[str, List[InfraEdge]]:
    """
    Map target id -> incoming edges.

    Each list keeps the declaration order of the edge list, which is the
    scan order the propagation engine relies on.
    """
    incoming: Dict[str, List[InfraEdge]] = defaultdict(list)
    for edge in edges:
        incoming[edge.target].append(edge)
    return dict(incoming)


def label_of(node_index: Dict[str, InfraNode], node_id: str) -> str:
    node = node_index.get(node_id)
    return node.label if node else node_id
