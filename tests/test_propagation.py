"""
Tests for the cascade propagation engine.

Covers:
    - Wave 0 semantics (dedupe, unknown ids, already-down nodes)
    - Synchronous rounds and reason texts
    - Status monotonicity and termination
    - Layering kills on an existing snapshot
"""

import logging
from dataclasses import replace

import pytest

from netcascade.core import apply_decentralization
from netcascade.domain.config import DEFAULT_EDGES, DEFAULT_NODES
from netcascade.domain.models import InfraEdge, NodeStatus
from netcascade.simulation import (
    DIRECT_IMPACT_REASON,
    final_status_map,
    healthy_status_map,
    propagate_failure,
    propagate_from_state,
)

RANK = {NodeStatus.HEALTHY: 0, NodeStatus.DEGRADED: 1, NodeStatus.DOWN: 2}


def _ids(wave):
    return [c.node_id for c in wave]


# =============================================================================
# Default Graph Scenarios
# =============================================================================

class TestDnsCollapse:
    """Root DNS failure on the default graph."""

    @pytest.fixture
    def waves(self, default_nodes, default_edges):
        return propagate_failure(default_nodes, default_edges, ["dns-root"])

    def test_wave_count(self, waves):
        assert len(waves) == 4

    def test_wave_zero_is_the_kill_set(self, waves):
        assert [(c.node_id, c.new_status, c.reason) for c in waves[0]] == [
            ("dns-root", NodeStatus.DOWN, DIRECT_IMPACT_REASON),
        ]

    def test_first_cascade_wave(self, waves):
        assert _ids(waves[1]) == ["cloudflare-dns", "google-dns", "stripe", "bank-app", "gov-services"]
        by_id = {c.node_id: c for c in waves[1]}
        assert by_id["cloudflare-dns"].new_status == NodeStatus.DOWN
        assert by_id["cloudflare-dns"].reason == "Critical dependency Root DNS is down."
        assert by_id["stripe"].new_status == NodeStatus.DEGRADED
        assert by_id["stripe"].reason == "Non-critical dependency Root DNS is down."

    def test_second_and_third_waves(self, waves):
        assert [(c.node_id, c.new_status) for c in waves[2]] == [
            ("gcp", NodeStatus.DEGRADED),
            ("cloudflare-cdn", NodeStatus.DOWN),
            ("gmail", NodeStatus.DOWN),
            ("users", NodeStatus.DOWN),
        ]
        assert [(c.node_id, c.new_status) for c in waves[3]] == [
            ("netflix", NodeStatus.DEGRADED),
            ("shopify", NodeStatus.DEGRADED),
            ("twitter", NodeStatus.DEGRADED),
        ]

    def test_gmail_reason_names_the_down_critical_source(self, waves):
        gmail = next(c for c in waves[2] if c.node_id == "gmail")
        assert gmail.reason == "Critical dependency Google DNS is down."


class TestAwsOutage:

    def test_centralized_graph(self, default_nodes, default_edges):
        waves = propagate_failure(default_nodes, default_edges, ["aws"])
        assert len(waves) == 3
        assert [(c.node_id, c.new_status) for c in waves[1]] == [
            ("netflix", NodeStatus.DOWN),
            ("shopify", NodeStatus.DOWN),
            ("github", NodeStatus.DOWN),
            ("stripe", NodeStatus.DOWN),
            ("bank-app", NodeStatus.DEGRADED),
        ]
        assert [(c.node_id, c.new_status) for c in waves[2]] == [("users", NodeStatus.DEGRADED)]

    def test_fully_decentralized_graph_only_degrades(self):
        nodes, edges = apply_decentralization(DEFAULT_NODES, DEFAULT_EDGES, 100)
        waves = propagate_failure(nodes, edges, ["aws"])
        status = final_status_map(healthy_status_map(nodes), waves)

        assert len(waves) == 2
        assert set(_ids(waves[1])) == {"netflix", "shopify", "gmail", "github", "stripe", "bank-app"}
        assert all(c.new_status == NodeStatus.DEGRADED for c in waves[1])
        assert status["users"] == NodeStatus.HEALTHY


# =============================================================================
# Wave 0 Semantics
# =============================================================================

class TestKillWave:

    def test_empty_kill_set_yields_no_waves(self, default_nodes, default_edges):
        assert propagate_failure(default_nodes, default_edges, []) == []

    def test_unknown_ids_are_skipped_silently(self, default_nodes, default_edges, caplog):
        with caplog.at_level(logging.WARNING):
            waves = propagate_failure(default_nodes, default_edges, ["ghost", "aws"])
        assert _ids(waves[0]) == ["aws"]
        assert not [r for r in caplog.records if r.levelno >= logging.WARNING]

    def test_unknown_ids_logged_at_debug(self, default_nodes, default_edges, caplog):
        with caplog.at_level(logging.DEBUG, logger="netcascade.simulation.propagation"):
            propagate_failure(default_nodes, default_edges, ["ghost"])
        assert any("ghost" in r.getMessage() and r.levelno == logging.DEBUG for r in caplog.records)

    def test_only_unknown_ids_yield_no_waves(self, default_nodes, default_edges):
        assert propagate_failure(default_nodes, default_edges, ["ghost"]) == []

    def test_duplicate_ids_killed_once(self, default_nodes, default_edges):
        waves = propagate_failure(default_nodes, default_edges, ["aws", "aws"])
        assert _ids(waves[0]) == ["aws"]

    def test_multi_kill_keeps_request_order(self, default_nodes, default_edges):
        waves = propagate_failure(
            default_nodes, default_edges, ["cloudflare-cdn", "fastly-cdn", "akamai-cdn"]
        )
        assert _ids(waves[0]) == ["cloudflare-cdn", "fastly-cdn", "akamai-cdn"]

    def test_baseline_down_nodes_are_not_killed_again(self, default_nodes, default_edges):
        nodes = [replace(n, status=NodeStatus.DOWN) if n.id == "aws" else n for n in default_nodes]
        assert propagate_failure(nodes, default_edges, ["aws"]) == []


# =============================================================================
# Round Semantics
# =============================================================================

class TestRounds:
    """Synchronous rounds on the toy chain graph."""

    def test_degraded_node_can_go_down_later(self, chain_nodes, chain_edges):
        waves = propagate_failure(chain_nodes, chain_edges, ["a"])

        assert [(c.node_id, c.new_status) for c in waves[1]] == [
            ("x", NodeStatus.DOWN),
            ("b", NodeStatus.DEGRADED),
        ]
        assert [(c.node_id, c.new_status) for c in waves[2]] == [
            ("b", NodeStatus.DOWN),
            ("c", NodeStatus.DEGRADED),
        ]
        assert [(c.node_id, c.new_status) for c in waves[3]] == [("c", NodeStatus.DOWN)]

    def test_critical_degraded_source_degrades(self, chain_nodes, chain_edges):
        waves = propagate_failure(chain_nodes, chain_edges, ["a"])
        c_change = next(c for c in waves[2] if c.node_id == "c")
        assert c_change.reason == "Critical dependency B is degraded."

    def test_rounds_use_previous_statuses(self, chain_nodes, chain_edges):
        waves = propagate_failure(chain_nodes, chain_edges, ["a"])
        # c must not react to b within the round that changed b
        assert "c" not in _ids(waves[1])

    def test_dangling_edges_are_inert(self, chain_nodes, chain_edges):
        edges = chain_edges + [InfraEdge("ghost", "c", True)]
        waves = propagate_failure(chain_nodes, edges, ["x"])
        assert "c" in _ids(waves[-1])
        assert all(c.node_id != "ghost" for w in waves for c in w)

    def test_non_critical_degraded_source_has_no_effect(self, chain_nodes):
        edges = [InfraEdge("a", "b", False), InfraEdge("b", "c", False)]
        waves = propagate_failure(chain_nodes, edges, ["a"])
        assert len(waves) == 2
        assert _ids(waves[1]) == ["b"]


# =============================================================================
# Properties
# =============================================================================

class TestProperties:
    """Monotonicity and termination for every single-node kill."""

    @pytest.mark.parametrize("level", [0, 50, 100])
    def test_statuses_only_get_worse(self, level):
        nodes, edges = apply_decentralization(DEFAULT_NODES, DEFAULT_EDGES, level)
        for node in nodes:
            status = healthy_status_map(nodes)
            for wave in propagate_failure(nodes, edges, [node.id]):
                for change in wave:
                    assert RANK[change.new_status] > RANK[status[change.node_id]]
                for change in wave:
                    status[change.node_id] = change.new_status

    @pytest.mark.parametrize("level", [0, 100])
    def test_runs_terminate_within_node_count(self, level):
        nodes, edges = apply_decentralization(DEFAULT_NODES, DEFAULT_EDGES, level)
        for node in nodes:
            assert len(propagate_failure(nodes, edges, [node.id])) <= len(nodes)

    def test_no_empty_waves(self, default_nodes, default_edges):
        waves = propagate_failure(default_nodes, default_edges, ["cloudflare-cdn"])
        assert all(waves)


# =============================================================================
# Layered Kills
# =============================================================================

class TestPropagateFromState:

    def test_snapshot_is_not_mutated(self, default_nodes, default_edges):
        snapshot = healthy_status_map(default_nodes)
        before = dict(snapshot)
        propagate_from_state(default_nodes, default_edges, snapshot, ["aws"])
        assert snapshot == before

    def test_manual_kill_reason(self, default_nodes, default_edges):
        waves = propagate_from_state(default_nodes, default_edges, {}, ["azure"])
        assert waves[0][0].reason == "Manually killed: Azure taken offline."

    def test_already_down_node_is_a_no_op(self, default_nodes, default_edges):
        first = propagate_failure(default_nodes, default_edges, ["aws"])
        status = final_status_map(healthy_status_map(default_nodes), first)
        assert propagate_from_state(default_nodes, default_edges, status, ["aws"]) == []

    def test_second_kill_builds_on_existing_damage(self, default_nodes, default_edges):
        first = propagate_failure(default_nodes, default_edges, ["aws"])
        status = final_status_map(healthy_status_map(default_nodes), first)
        waves = propagate_from_state(default_nodes, default_edges, status, ["azure"])

        # bank-app was degraded by aws; azure is critical for it
        bank = next(c for c in waves[1] if c.node_id == "bank-app")
        assert bank.new_status == NodeStatus.DOWN
        assert bank.reason == "Critical dependency Azure is down."
