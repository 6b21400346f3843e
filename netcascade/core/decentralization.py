"""
Decentralization Transform

Models a more resilient internet by adding redundant failover providers and,
at high levels, relaxing critical dependencies that now have an alternative.

The transform is pure: inputs are never mutated, and callers always derive
from the untouched default graph so repeated calls at one level do not
compound.
"""

from __future__ import annotations
import logging
from collections import Counter
from dataclasses import replace
from typing import List, Sequence, Set, Tuple

from ..domain.config.seed_data import DECENTRALIZATION_TIERS, NO_CHANGE_LEVEL
from ..domain.models import InfraNode, InfraEdge

logger = logging.getLogger(__name__)


def apply_decentralization(
    nodes: Sequence[InfraNode],
    edges: Sequence[InfraEdge],
    level: int,
) -> Tuple[List[InfraNode], List[InfraEdge]]:
    """
    Derive a decentralized copy of the graph.

    Args:
        nodes: Node list (returned as a shallow copy)
        edges: Edge list of the baseline graph
        level: Decentralization level, 0-100

    Returns:
        (nodes, edges) with redundant edges added, deduplicated by
        (source, target) keeping the first occurrence.
    """
    if level <= NO_CHANGE_LEVEL:
        return list(nodes), list(edges)

    base: List[InfraEdge] = list(edges)
    extra: List[InfraEdge] = []

    for tier in DECENTRALIZATION_TIERS:
        if level < tier.min_level:
            continue
        if tier.downgrade_redundant:
            base = _downgrade_redundant(base, extra)
        extra.extend(tier.redundant_edges)

    deduped = dedupe_edges(base + extra)
    logger.debug(
        f"Decentralization {level}%: {len(edges)} -> {len(deduped)} edges, "
        f"{sum(1 for e in deduped if e.critical)} critical"
    )
    return list(nodes), deduped


def _downgrade_redundant(base: List[InfraEdge], extra: List[InfraEdge]) -> List[InfraEdge]:
    """Make critical edges non-critical when their target has another provider."""
    incoming = Counter(e.target for e in base)
    incoming.update(e.target for e in extra)
    return [
        replace(e, critical=False) if e.critical and incoming[e.target] > 1 else e
        for e in base
    ]


def dedupe_edges(edges: Sequence[InfraEdge]) -> List[InfraEdge]:
    seen: Set[Tuple[str, str]] = set()
    result = []
    for edge in edges:
        if edge.key in seen:
            continue
        seen.add(edge.key)
        result.append(edge)
    return result
