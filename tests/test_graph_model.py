"""
Tests for the graph domain models and the static seed data.

Covers:
    - Default graph integrity (ids, edge endpoints, scenario kill sets)
    - Index helpers and InternetGraph accessors
    - Serialization of value objects
"""

import pytest

from netcascade.domain.config import (
    DEFAULT_EDGES,
    DEFAULT_NODES,
    KNOWN_DOMAINS,
    SCENARIO_IDS,
    SCENARIOS,
    TLD_PROFILES,
    USERS_NODE_ID,
    default_graph,
    get_scenario,
    scenario_table,
)
from netcascade.domain.models import (
    CascadeRun,
    InfraEdge,
    InfraNode,
    InfraType,
    InternetGraph,
    Metrics,
    NodeStatus,
    StatusChange,
    index_incoming,
    index_nodes,
    label_of,
)


# =============================================================================
# Seed Data Tests
# =============================================================================

class TestSeedData:
    """Integrity of the default graph and scenarios."""

    def test_default_graph_size(self):
        assert len(DEFAULT_NODES) == 18
        assert len(DEFAULT_EDGES) == 31

    def test_node_ids_unique(self):
        ids = [n.id for n in DEFAULT_NODES]
        assert len(ids) == len(set(ids))

    def test_edge_endpoints_reference_known_nodes(self):
        ids = {n.id for n in DEFAULT_NODES}
        for edge in DEFAULT_EDGES:
            assert edge.source in ids
            assert edge.target in ids

    def test_no_duplicate_edges(self):
        keys = [e.key for e in DEFAULT_EDGES]
        assert len(keys) == len(set(keys))

    def test_users_node_is_the_only_user_type(self):
        users = [n for n in DEFAULT_NODES if n.type == InfraType.USER]
        assert [n.id for n in users] == [USERS_NODE_ID]
        assert not users[0].is_service

    def test_all_nodes_start_healthy(self):
        assert all(n.status == NodeStatus.HEALTHY for n in DEFAULT_NODES)

    def test_scenarios_reference_known_nodes(self):
        ids = {n.id for n in DEFAULT_NODES}
        for scenario in SCENARIOS:
            assert scenario.kill_nodes
            assert set(scenario.kill_nodes) <= ids

    def test_scenario_lookup(self):
        assert SCENARIO_IDS == ("dns-collapse", "cdn-outage", "aws-outage")
        assert get_scenario("aws-outage").kill_nodes == ("aws",)
        assert get_scenario("no-such-scenario") is None

    def test_scenario_table_is_serializable(self):
        table = scenario_table()
        assert [row["id"] for row in table] == list(SCENARIO_IDS)
        assert table[1]["kill_nodes"] == ["cloudflare-cdn", "fastly-cdn", "akamai-cdn"]

    def test_domain_profiles_reference_known_providers(self):
        ids = {n.id for n in DEFAULT_NODES}
        for profile in list(KNOWN_DOMAINS.values()) + list(TLD_PROFILES.values()):
            for provider in (*profile.cloud, *profile.cdn, *profile.dns, *profile.extra_deps):
                assert provider in ids


# =============================================================================
# Model Tests
# =============================================================================

class TestGraphModels:
    """Tests for InfraNode, InfraEdge and InternetGraph."""

    def test_default_graph_accessors(self):
        graph = default_graph()
        assert isinstance(graph, InternetGraph)
        assert [n.id for n in graph.get_nodes_by_type(InfraType.DNS)] == [
            "dns-root", "cloudflare-dns", "google-dns",
        ]
        assert graph.node_index()["aws"].label == "AWS"

    def test_incoming_index_keeps_declaration_order(self):
        incoming = index_incoming(DEFAULT_EDGES)
        assert [e.source for e in incoming["bank-app"]] == ["aws", "azure", "akamai-cdn", "dns-root"]
        assert "dns-root" not in incoming

    def test_index_nodes_keeps_first_duplicate(self):
        first = InfraNode("n", "First", InfraType.SAAS)
        second = InfraNode("n", "Second", InfraType.SAAS)
        assert index_nodes([first, second])["n"] is first

    def test_label_of_falls_back_to_id(self):
        index = index_nodes(DEFAULT_NODES)
        assert label_of(index, "gcp") == "Google Cloud"
        assert label_of(index, "ghost") == "ghost"

    def test_edges_are_immutable(self):
        edge = InfraEdge("a", "b")
        with pytest.raises(AttributeError):
            edge.critical = True
        assert edge.key == ("a", "b")

    def test_of_builds_tuples(self):
        graph = InternetGraph.of([DEFAULT_NODES[0]], [])
        assert graph.nodes == (DEFAULT_NODES[0],)
        assert graph.to_dict()["nodes"][0]["type"] == "dns"


# =============================================================================
# Result Serialization Tests
# =============================================================================

class TestResultSerialization:
    """to_dict() output of result value objects."""

    def test_metrics_to_dict(self):
        d = Metrics(percent_operational=40, affected_users=12, services_down=3).to_dict()
        assert d["percent_operational"] == 40
        assert d["services"] == {"down": 3, "degraded": 0, "healthy": 0}

    def test_cascade_run_to_dict(self):
        waves = [
            [StatusChange("aws", NodeStatus.DOWN, "Directly impacted: service offline.")],
            [StatusChange("netflix", NodeStatus.DOWN, "Critical dependency AWS is down.")],
        ]
        run = CascadeRun(kill_ids=["aws"], waves=waves, metrics=Metrics())
        d = run.to_dict()

        assert run.total_waves == 2
        assert run.cascaded_ids == ["netflix"]
        assert d["waves"][1][0] == {
            "node_id": "netflix",
            "new_status": "down",
            "reason": "Critical dependency AWS is down.",
        }
        assert d["comparison_metrics"] is None
