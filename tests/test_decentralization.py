"""
Tests for the decentralization transform.
"""

import pytest

from netcascade.core import apply_decentralization, dedupe_edges
from netcascade.domain.config import DEFAULT_EDGES, DEFAULT_NODES
from netcascade.domain.models import InfraEdge


def _keys(edges):
    return {e.key for e in edges}


class TestDecentralizationTiers:
    """Edges added at each decentralization level."""

    @pytest.mark.parametrize("level", [0, 5, 10, 29])
    def test_low_levels_leave_graph_unchanged(self, level):
        nodes, edges = apply_decentralization(DEFAULT_NODES, DEFAULT_EDGES, level)
        assert edges == list(DEFAULT_EDGES)
        assert nodes == list(DEFAULT_NODES)

    @pytest.mark.parametrize("level,expected", [(30, 33), (49, 33), (50, 36), (69, 36), (70, 38), (100, 38)])
    def test_edge_counts_per_level(self, level, expected):
        _, edges = apply_decentralization(DEFAULT_NODES, DEFAULT_EDGES, level)
        assert len(edges) == expected

    def test_level_30_adds_failover_hosting(self):
        _, edges = apply_decentralization(DEFAULT_NODES, DEFAULT_EDGES, 30)
        added = _keys(edges) - _keys(DEFAULT_EDGES)
        assert added == {("gcp", "netflix"), ("azure", "shopify")}

    def test_redundant_edges_are_non_critical(self):
        _, edges = apply_decentralization(DEFAULT_NODES, DEFAULT_EDGES, 100)
        added = [e for e in edges if e.key not in _keys(DEFAULT_EDGES)]
        assert len(added) == 7
        assert not any(e.critical for e in added)

    def test_below_70_keeps_criticality(self):
        _, edges = apply_decentralization(DEFAULT_NODES, DEFAULT_EDGES, 69)
        assert edges[:len(DEFAULT_EDGES)] == list(DEFAULT_EDGES)

    def test_full_decentralization_leaves_three_critical_edges(self):
        _, edges = apply_decentralization(DEFAULT_NODES, DEFAULT_EDGES, 100)
        critical = [e.key for e in edges if e.critical]
        assert critical == [
            ("dns-root", "cloudflare-dns"),
            ("dns-root", "google-dns"),
            ("cloudflare-dns", "cloudflare-cdn"),
        ]

    def test_inputs_not_mutated(self):
        edges_in = list(DEFAULT_EDGES)
        apply_decentralization(DEFAULT_NODES, edges_in, 100)
        assert edges_in == list(DEFAULT_EDGES)

    def test_repeated_calls_do_not_compound(self):
        first = apply_decentralization(DEFAULT_NODES, DEFAULT_EDGES, 70)
        second = apply_decentralization(DEFAULT_NODES, DEFAULT_EDGES, 70)
        assert first == second


class TestDedupeEdges:

    def test_first_occurrence_wins(self):
        edges = [InfraEdge("a", "b", True), InfraEdge("a", "b", False), InfraEdge("b", "a")]
        result = dedupe_edges(edges)
        assert result == [InfraEdge("a", "b", True), InfraEdge("b", "a")]
