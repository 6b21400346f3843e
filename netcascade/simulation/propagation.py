"""
Cascading Failure Propagation Engine

Computes, wave by wave, how the failure of a kill set spreads through the
dependency graph.

Algorithm:
    Wave 0  : every requested, known, not-yet-down node goes down.
    Round k : every node that is not down inspects its incoming edges
              against the statuses left by round k-1:
                - critical edge, source down      -> down (first match wins)
                - non-critical edge, source down  -> degraded
                - critical edge, source degraded  -> degraded
              A degraded node can only move to down.
    The run stops at the first round without changes.

Scan-order contract:
    Nodes are visited in declaration order and each node's incoming edges
    are inspected in the order they appear in the edge list. Wave contents
    and reason texts are therefore fully deterministic.

The engine never mutates its inputs. It copies the snapshot it is given and
returns a fresh list of waves; applying them is the caller's business.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Sequence

from ..domain.models import (
    InfraNode,
    InfraEdge,
    NodeStatus,
    StatusChange,
    Wave,
    index_nodes,
    index_incoming,
    label_of,
)

logger = logging.getLogger(__name__)

DIRECT_IMPACT_REASON = "Directly impacted: service offline."


# =============================================================================
# Public API
# =============================================================================

def propagate_failure(
    nodes: Sequence[InfraNode],
    edges: Sequence[InfraEdge],
    kill_ids: Iterable[str],
) -> List[Wave]:
    """
    Propagate a failure from the baseline state of ``nodes``.

    Args:
        nodes: Graph nodes; each node's own status is the baseline
        edges: Graph edges
        kill_ids: Node ids to take down directly

    Returns:
        Ordered waves; empty when nothing new could be killed
    """
    baseline = {n.id: n.status for n in nodes}
    return CascadePropagator(nodes, edges).run(
        baseline, kill_ids, lambda node: DIRECT_IMPACT_REASON
    )


def propagate_from_state(
    nodes: Sequence[InfraNode],
    edges: Sequence[InfraEdge],
    current_status_map: Mapping[str, NodeStatus],
    new_kill_ids: Iterable[str],
) -> List[Wave]:
    """
    Layer additional kills on top of an existing status snapshot.

    The snapshot is read, never modified. Nodes missing from it are treated
    as healthy.
    """
    return CascadePropagator(nodes, edges).run(
        current_status_map,
        new_kill_ids,
        lambda node: f"Manually killed: {node.label} taken offline.",
    )


def healthy_status_map(nodes: Iterable[InfraNode]) -> Dict[str, NodeStatus]:
    return {n.id: NodeStatus.HEALTHY for n in nodes}


def final_status_map(
    base_status: Mapping[str, NodeStatus],
    waves: Iterable[Wave],
) -> Dict[str, NodeStatus]:
    """Fold waves into a fresh snapshot; ``base_status`` is left untouched."""
    status = dict(base_status)
    for wave in waves:
        for change in wave:
            status[change.node_id] = change.new_status
    return status


# =============================================================================
# Propagator
# =============================================================================

@dataclass
class _Verdict:
    status: NodeStatus
    reason: str


class CascadePropagator:
    """
    Fixed-point propagation over one graph.

    The incoming-edge index is built once per propagator, so a run costs
    O(rounds x edges) lookups without rescanning the edge list.
    """

    def __init__(self, nodes: Sequence[InfraNode], edges: Sequence[InfraEdge]):
        self.nodes = list(nodes)
        self.node_index = index_nodes(self.nodes)
        self.incoming = index_incoming(edges)

    def run(
        self,
        status_map: Mapping[str, NodeStatus],
        kill_ids: Iterable[str],
        kill_reason: Callable[[InfraNode], str],
    ) -> List[Wave]:
        status: Dict[str, NodeStatus] = {
            n.id: NodeStatus(status_map.get(n.id, NodeStatus.HEALTHY)) for n in self.nodes
        }

        wave0 = self._kill_wave(status, kill_ids, kill_reason)
        if not wave0:
            logger.debug("No new nodes to kill, propagation skipped")
            return []

        waves: List[Wave] = [wave0]
        self._apply(status, wave0)

        while True:
            wave = self._next_wave(status)
            if not wave:
                break
            waves.append(wave)
            self._apply(status, wave)

        logger.info(
            f"Propagation from {[c.node_id for c in wave0]}: {len(waves)} waves, "
            f"{sum(len(w) for w in waves) - len(wave0)} cascaded changes"
        )
        return waves

    def _kill_wave(
        self,
        status: Dict[str, NodeStatus],
        kill_ids: Iterable[str],
        kill_reason: Callable[[InfraNode], str],
    ) -> Wave:
        wave: Wave = []
        seen = set()
        for node_id in kill_ids:
            if node_id in seen:
                continue
            seen.add(node_id)
            node = self.node_index.get(node_id)
            if node is None:
                logger.debug(f"Kill target '{node_id}' not found, skipping.")
                continue
            if status[node_id] == NodeStatus.DOWN:
                continue
            wave.append(StatusChange(node_id, NodeStatus.DOWN, kill_reason(node)))
        return wave

    def _next_wave(self, status: Dict[str, NodeStatus]) -> Wave:
        """Evaluate one round against the statuses of the previous round."""
        wave: Wave = []
        for node in self.nodes:
            current = status[node.id]
            if current == NodeStatus.DOWN:
                continue
            verdict = self._evaluate(node.id, current, status)
            if verdict is not None and verdict.status != current:
                wave.append(StatusChange(node.id, verdict.status, verdict.reason))
        return wave

    def _evaluate(
        self,
        node_id: str,
        current: NodeStatus,
        status: Dict[str, NodeStatus],
    ) -> Optional[_Verdict]:
        down_reason: Optional[str] = None
        degraded_by_down: Optional[str] = None
        degraded_by_degraded: Optional[str] = None

        for edge in self.incoming.get(node_id, ()):
            source_status = status.get(edge.source)
            if source_status == NodeStatus.DOWN:
                label = label_of(self.node_index, edge.source)
                if edge.critical:
                    down_reason = f"Critical dependency {label} is down."
                    break
                if degraded_by_down is None:
                    degraded_by_down = f"Non-critical dependency {label} is down."
            elif source_status == NodeStatus.DEGRADED and edge.critical:
                if degraded_by_degraded is None:
                    label = label_of(self.node_index, edge.source)
                    degraded_by_degraded = f"Critical dependency {label} is degraded."

        if down_reason is not None:
            return _Verdict(NodeStatus.DOWN, down_reason)

        degrade_reason = degraded_by_down or degraded_by_degraded
        if degrade_reason is not None and current == NodeStatus.HEALTHY:
            return _Verdict(NodeStatus.DEGRADED, degrade_reason)
        return None

    @staticmethod
    def _apply(status: Dict[str, NodeStatus], wave: Wave) -> None:
        for change in wave:
            status[change.node_id] = change.new_status
