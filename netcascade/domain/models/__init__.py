"""
Domain Models Package

Pure domain entities with no infrastructure dependencies.
Re-exports all domain models for convenient imports.
"""

from .enums import NodeStatus, InfraType, Severity, MessageType
from .graph import (
    InfraNode, InfraEdge, InternetGraph, Scenario,
    index_nodes, index_incoming, label_of,
)
from .results import (
    StatusChange, Wave, Metrics, Insight, NarrativeMessage,
    DomainProfile, SiteAnalysis, CascadeRun,
)

__all__ = [
    # Enums
    "NodeStatus", "InfraType", "Severity", "MessageType",
    # Graph
    "InfraNode", "InfraEdge", "InternetGraph", "Scenario",
    "index_nodes", "index_incoming", "label_of",
    # Results
    "StatusChange", "Wave", "Metrics", "Insight", "NarrativeMessage",
    "DomainProfile", "SiteAnalysis", "CascadeRun",
]
