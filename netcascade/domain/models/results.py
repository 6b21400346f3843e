"""
Simulation Result Models

Value objects returned by the propagation engine, the analyzers, the
narrative generator and the site analyzer.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Any, Optional

from .enums import NodeStatus, Severity, MessageType, InfraType
from .graph import InfraNode, InfraEdge


@dataclass(frozen=True)
class StatusChange:
    """One node moving to a new status within a wave."""
    node_id: str
    new_status: NodeStatus
    reason: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "node_id": self.node_id,
            "new_status": self.new_status.value,
            "reason": self.reason,
        }


# One synchronized batch of status changes; wave 0 is the directly killed set.
Wave = List[StatusChange]


@dataclass
class Metrics:
    """Weighted health snapshot of the graph."""
    percent_operational: int = 100
    affected_users: int = 0        # millions
    financial_impact: int = 0      # millions USD / hour
    services_down: int = 0
    services_degraded: int = 0
    services_healthy: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "percent_operational": self.percent_operational,
            "affected_users": self.affected_users,
            "financial_impact": self.financial_impact,
            "services": {
                "down": self.services_down,
                "degraded": self.services_degraded,
                "healthy": self.services_healthy,
            },
        }


@dataclass(frozen=True)
class Insight:
    """A structural risk indicator derived from topology."""
    label: str
    value: str
    severity: Severity

    def to_dict(self) -> Dict[str, Any]:
        return {"label": self.label, "value": self.value, "severity": self.severity.value}


@dataclass(frozen=True)
class NarrativeMessage:
    timestamp: str
    text: str
    type: MessageType

    def to_dict(self) -> Dict[str, Any]:
        return {"timestamp": self.timestamp, "text": self.text, "type": self.type.value}


@dataclass(frozen=True)
class DomainProfile:
    """Inferred infrastructure footprint of a website."""
    cloud: tuple = ()
    cdn: tuple = ()
    dns: tuple = ()
    extra_deps: tuple = ()
    type: InfraType = InfraType.SAAS
    glyph: str = "🌐"
    user_count: float = 10
    financial_impact: float = 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "cloud": list(self.cloud),
            "cdn": list(self.cdn),
            "dns": list(self.dns),
            "extra_deps": list(self.extra_deps),
            "type": self.type.value,
            "glyph": self.glyph,
            "user_count": self.user_count,
            "financial_impact": self.financial_impact,
        }


@dataclass
class SiteAnalysis:
    """Synthetic node and inferred upstream dependencies for a domain."""
    url: str
    normalized_url: str
    domain: str
    node: InfraNode
    edges: List[InfraEdge]
    dependency_ids: List[str]
    summary: str
    profile: DomainProfile = field(default_factory=DomainProfile)
    matched_rule: str = "default"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "url": self.url,
            "normalized_url": self.normalized_url,
            "domain": self.domain,
            "node": self.node.to_dict(),
            "edges": [e.to_dict() for e in self.edges],
            "dependency_ids": list(self.dependency_ids),
            "summary": self.summary,
            "profile": self.profile.to_dict(),
            "matched_rule": self.matched_rule,
        }


@dataclass
class CascadeRun:
    """Everything one orchestrated propagation run produced."""
    kill_ids: List[str]
    waves: List[Wave]
    metrics: Metrics
    insights: List[Insight] = field(default_factory=list)
    narrative: List[NarrativeMessage] = field(default_factory=list)
    comparison_metrics: Optional[Metrics] = None
    scenario_id: Optional[str] = None

    @property
    def total_waves(self) -> int:
        return len(self.waves)

    @property
    def cascaded_ids(self) -> List[str]:
        """Ids changed after wave 0, in wave order."""
        return [c.node_id for wave in self.waves[1:] for c in wave]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "scenario_id": self.scenario_id,
            "kill_ids": list(self.kill_ids),
            "waves": [[c.to_dict() for c in wave] for wave in self.waves],
            "metrics": self.metrics.to_dict(),
            "insights": [i.to_dict() for i in self.insights],
            "narrative": [m.to_dict() for m in self.narrative],
            "comparison_metrics": (
                self.comparison_metrics.to_dict() if self.comparison_metrics else None
            ),
        }
