"""
Metrics Aggregator

Reduces a status snapshot to weighted health and impact numbers.

Weighting:
    weight(node)        = node.user_count, for every non-user node
    healthy-weighted    = full weight if healthy, half if degraded, 0 if down
    percent_operational = healthy-weighted / total weight * 100
    affected_users      = 0.5 * weight if degraded, full weight if down
    financial_impact    = 0.3 * hourly impact if degraded, full if down

Totals are rounded half-up once, at the end.
"""

from __future__ import annotations
import math
from typing import Iterable, Mapping

from ..domain.models import InfraNode, Metrics, NodeStatus

DEGRADED_CAPACITY = 0.5
DEGRADED_USER_IMPACT = 0.5
DEGRADED_FINANCIAL_IMPACT = 0.3


def compute_metrics(
    nodes: Iterable[InfraNode],
    status_map: Mapping[str, NodeStatus],
) -> Metrics:
    """
    Compute weighted health metrics for a snapshot.

    Args:
        nodes: Graph nodes; user-type nodes are skipped
        status_map: node id -> status, missing ids count as healthy

    Returns:
        Metrics; percent_operational is 100 when there is nothing to weigh
    """
    total_weight = 0.0
    healthy_weight = 0.0
    affected_users = 0.0
    financial_impact = 0.0
    down = degraded = healthy = 0

    for node in nodes:
        if not node.is_service:
            continue

        status = status_map.get(node.id, NodeStatus.HEALTHY)
        total_weight += node.user_count

        if status == NodeStatus.HEALTHY:
            healthy_weight += node.user_count
            healthy += 1
        elif status == NodeStatus.DEGRADED:
            healthy_weight += node.user_count * DEGRADED_CAPACITY
            affected_users += node.user_count * DEGRADED_USER_IMPACT
            financial_impact += node.financial_impact_per_hour * DEGRADED_FINANCIAL_IMPACT
            degraded += 1
        else:
            affected_users += node.user_count
            financial_impact += node.financial_impact_per_hour
            down += 1

    percent = round_half_up(healthy_weight / total_weight * 100) if total_weight > 0 else 100

    return Metrics(
        percent_operational=percent,
        affected_users=round_half_up(affected_users),
        financial_impact=round_half_up(financial_impact),
        services_down=down,
        services_degraded=degraded,
        services_healthy=healthy,
    )


def round_half_up(value: float) -> int:
    # round() would use banker's rounding
    return int(math.floor(value + 0.5))
