"""
Simulation Service

Headless orchestrator that owns the live graph and status snapshot.

The propagation engine only describes changes; this service is the single
place where the snapshot is mutated. It applies every wave eagerly (pacing
and animation are presentation concerns, reachable through observers) and
keeps the narrative log of the session.

Example:
    >>> service = SimulationService()
    >>> run = service.run_scenario("dns-collapse")
    >>> run.metrics.percent_operational
    22
"""

from __future__ import annotations
import logging
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from netcascade.analysis import compute_insights, compute_metrics
from netcascade.core import SiteAnalyzer, apply_decentralization
from netcascade.domain.config import (
    CUSTOM_NODE_PREFIX,
    DEFAULT_EDGES,
    DEFAULT_NODES,
    SCENARIO_IDS,
    get_scenario,
)
from netcascade.domain.models import (
    CascadeRun,
    InfraEdge,
    InfraNode,
    Insight,
    Metrics,
    NarrativeMessage,
    NodeStatus,
    SiteAnalysis,
    Wave,
    index_nodes,
)
from netcascade.simulation import (
    NarrativeGenerator,
    final_status_map,
    healthy_status_map,
    propagate_failure,
    propagate_from_state,
)

from .ports import ICascadeObserver

logger = logging.getLogger(__name__)

MIN_LEVEL = 0
MAX_LEVEL = 100


def merge_site_into_graph(
    nodes: Sequence[InfraNode],
    edges: Sequence[InfraEdge],
    analysis: SiteAnalysis,
) -> Tuple[List[InfraNode], List[InfraEdge]]:
    """
    Replace any previously synthesized site node with ``analysis.node``.

    Returns new lists; the inputs are not modified.
    """
    clean_nodes = [n for n in nodes if not n.id.startswith(CUSTOM_NODE_PREFIX)]
    clean_edges = [
        e for e in edges
        if not e.source.startswith(CUSTOM_NODE_PREFIX)
        and not e.target.startswith(CUSTOM_NODE_PREFIX)
    ]
    return clean_nodes + [analysis.node], clean_edges + list(analysis.edges)


class SimulationService:
    """
    Orchestrates scenarios, interactive kills and site analysis over one
    live graph.
    """

    def __init__(
        self,
        decentralization: int = 0,
        narrator: Optional[NarrativeGenerator] = None,
        site_analyzer: Optional[SiteAnalyzer] = None,
        observers: Optional[Iterable[ICascadeObserver]] = None,
    ):
        self.narrator = narrator or NarrativeGenerator()
        self.site_analyzer = site_analyzer or SiteAnalyzer()
        self.observers: List[ICascadeObserver] = list(observers or [])

        self._decentralization = MIN_LEVEL
        self._site: Optional[SiteAnalysis] = None
        self._nodes: List[InfraNode] = list(DEFAULT_NODES)
        self._edges: List[InfraEdge] = list(DEFAULT_EDGES)
        self._status: Dict[str, NodeStatus] = {}
        self._killed: List[str] = []
        self._log: List[NarrativeMessage] = []
        self._insights: List[Insight] = []

        self.set_decentralization(decentralization)
        self.reset()

    # =========================================================================
    # State accessors
    # =========================================================================

    @property
    def nodes(self) -> List[InfraNode]:
        return list(self._nodes)

    @property
    def edges(self) -> List[InfraEdge]:
        return list(self._edges)

    @property
    def status_map(self) -> Dict[str, NodeStatus]:
        return dict(self._status)

    @property
    def metrics(self) -> Metrics:
        return compute_metrics(self._nodes, self._status)

    @property
    def insights(self) -> List[Insight]:
        return list(self._insights)

    @property
    def narrative_log(self) -> List[NarrativeMessage]:
        return list(self._log)

    @property
    def killed_ids(self) -> List[str]:
        return list(self._killed)

    @property
    def decentralization(self) -> int:
        return self._decentralization

    @property
    def analyzed_site(self) -> Optional[SiteAnalysis]:
        return self._site

    def add_observer(self, observer: ICascadeObserver) -> None:
        self.observers.append(observer)

    # =========================================================================
    # Graph configuration
    # =========================================================================

    def set_decentralization(self, level: int) -> None:
        """
        Rebuild the live graph from the default graph at ``level``.

        Raises:
            ValueError: If level is outside 0-100
        """
        if not MIN_LEVEL <= level <= MAX_LEVEL:
            raise ValueError(f"Decentralization level must be within {MIN_LEVEL}-{MAX_LEVEL}, got {level}")

        self._decentralization = level
        nodes, edges = apply_decentralization(DEFAULT_NODES, DEFAULT_EDGES, level)
        if self._site is not None:
            nodes, edges = merge_site_into_graph(nodes, edges, self._site)
        self._nodes, self._edges = nodes, edges
        logger.info(f"Decentralization set to {level}%: {len(edges)} edges")

    def reset(self) -> None:
        """Back to an all-healthy graph without any analyzed site."""
        self._site = None
        self._nodes, self._edges = apply_decentralization(
            DEFAULT_NODES, DEFAULT_EDGES, self._decentralization
        )
        self._status = healthy_status_map(self._nodes)
        self._killed = []
        self._log = []
        self._insights = []

    # =========================================================================
    # Runs
    # =========================================================================

    def run_scenario(self, scenario_id: str) -> CascadeRun:
        """
        Run a preset scenario from an all-healthy snapshot.

        Raises:
            ValueError: If the scenario id is unknown
        """
        scenario = get_scenario(scenario_id)
        if scenario is None:
            raise ValueError(f"Unknown scenario '{scenario_id}'. Valid: {list(SCENARIO_IDS)}")

        logger.info(f"Running scenario '{scenario.id}' at {self._decentralization}% decentralization")
        self._status = healthy_status_map(self._nodes)
        self._killed = list(scenario.kill_nodes)
        self._log = self.narrator.scenario_header(scenario)

        waves = propagate_failure(self._nodes, self._edges, scenario.kill_nodes)
        return self._execute(waves, scenario_id=scenario.id)

    def kill_node(self, node_id: str) -> Optional[CascadeRun]:
        """
        Kill one more node on top of the current snapshot.

        Returns None for unknown or already-down nodes.
        """
        node = index_nodes(self._nodes).get(node_id)
        if node is None:
            logger.warning(f"Cannot kill unknown node '{node_id}'")
            return None
        if self._status.get(node_id) == NodeStatus.DOWN:
            logger.info(f"Node '{node_id}' is already down")
            return None

        waves = propagate_from_state(self._nodes, self._edges, self._status, [node_id])
        if not waves:
            return None

        self._killed.append(node_id)
        self._log.extend(self.narrator.manual_kill_header(node))
        return self._execute(waves)

    def analyze_site(self, url: str) -> SiteAnalysis:
        """Analyze a URL and merge its synthetic node into the live graph."""
        analysis = self.site_analyzer.analyze(url)
        self._site = analysis
        self._nodes, self._edges = merge_site_into_graph(self._nodes, self._edges, analysis)

        self._status = healthy_status_map(self._nodes)
        self._killed = []
        self._insights = []
        self._log.extend(self.narrator.site_scan(analysis))
        logger.info(f"Merged '{analysis.node.id}' with {len(analysis.edges)} edges")
        return analysis

    def compare_with_decentralized(self, kill_ids: Sequence[str]) -> Metrics:
        """Metrics the same kill set would produce on a fully decentralized graph."""
        nodes, edges = apply_decentralization(DEFAULT_NODES, DEFAULT_EDGES, MAX_LEVEL)
        waves = propagate_failure(nodes, edges, kill_ids)
        status = final_status_map(healthy_status_map(nodes), waves)
        return compute_metrics(nodes, status)

    # =========================================================================
    # Internals
    # =========================================================================

    def _execute(self, waves: List[Wave], scenario_id: Optional[str] = None) -> CascadeRun:
        narrative: List[NarrativeMessage] = []
        total = len(waves)

        for index, wave in enumerate(waves):
            for change in wave:
                self._status[change.node_id] = change.new_status
            metrics = compute_metrics(self._nodes, self._status)
            narrative.extend(self.narrator.for_wave(index, wave, self._nodes, total))
            for observer in self.observers:
                observer.on_wave_applied(index, wave, metrics)

        final_metrics = compute_metrics(self._nodes, self._status)
        self._insights = compute_insights(self._nodes, self._edges)
        narrative.extend(self.narrator.final_analysis(final_metrics, self._insights))
        self._log.extend(narrative)

        run = CascadeRun(
            kill_ids=list(self._killed),
            waves=waves,
            metrics=final_metrics,
            insights=list(self._insights),
            narrative=narrative,
            comparison_metrics=self.compare_with_decentralized(self._killed),
            scenario_id=scenario_id,
        )
        for observer in self.observers:
            observer.on_run_complete(run)

        logger.info(
            f"Run complete: {total} waves, {final_metrics.percent_operational}% operational, "
            f"{final_metrics.affected_users}M users affected"
        )
        return run
