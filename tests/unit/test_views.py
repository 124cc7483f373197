"""Tests for derived per-node views."""

from __future__ import annotations

import pytest

from chat_graph.models.graph import Edge, Graph, Node
from chat_graph.views import (
    edge_table,
    filter_edges,
    inbound_ratio_per_node,
    inbound_weight_per_node,
    node_table,
    outbound_weight_per_node,
    turn_count_per_speaker,
)
from tests.helpers import make_turns


@pytest.fixture()
def graph() -> Graph:
    """A -> B (3), B -> A (1), C -> A (1), A -> A (1), D isolated."""
    return Graph(
        nodes=tuple(Node(id=i, label=s) for i, s in enumerate("ABCD")),
        edges=(
            Edge(from_id=0, to_id=0, weight=1),
            Edge(from_id=0, to_id=1, weight=3),
            Edge(from_id=1, to_id=0, weight=1),
            Edge(from_id=2, to_id=0, weight=1),
        ),
    )


class TestWeights:
    def test_inbound(self, graph: Graph) -> None:
        assert inbound_weight_per_node(graph) == {0: 3, 1: 3, 2: 0, 3: 0}

    def test_outbound(self, graph: Graph) -> None:
        assert outbound_weight_per_node(graph) == {0: 4, 1: 1, 2: 1, 3: 0}

    def test_in_and_out_totals_match(self, graph: Graph) -> None:
        assert sum(inbound_weight_per_node(graph).values()) == graph.total_weight
        assert sum(outbound_weight_per_node(graph).values()) == graph.total_weight

    def test_inbound_ratio(self, graph: Graph) -> None:
        ratios = inbound_ratio_per_node(graph)

        assert ratios[0] == pytest.approx(3 / 7)
        assert ratios[1] == pytest.approx(3 / 4)
        assert ratios[2] == 0.0
        assert ratios[3] is None


class TestTurnCounts:
    def test_counts_physical_turns(self) -> None:
        turns = make_turns(("A", 1, "I"), ("A", 1, "-"), ("B", 2, "1"), ("A", 3, "2"))

        assert turn_count_per_speaker(turns) == {"A": 3, "B": 1}

    def test_first_appearance_order(self) -> None:
        turns = make_turns(("B", 1, "I"), ("A", 2, "1"), ("B", 3, "2"))

        assert list(turn_count_per_speaker(turns)) == ["B", "A"]


class TestFilterEdges:
    def test_default_keeps_all(self, graph: Graph) -> None:
        assert filter_edges(graph) == graph.edges

    def test_threshold(self, graph: Graph) -> None:
        assert filter_edges(graph, 2) == (Edge(from_id=0, to_id=1, weight=3),)

    def test_threshold_above_all(self, graph: Graph) -> None:
        assert filter_edges(graph, 10) == ()


class TestTables:
    def test_node_table_plain(self, graph: Graph) -> None:
        assert node_table(graph)[:2] == [{"id": 0, "label": "A"}, {"id": 1, "label": "B"}]

    def test_node_table_derived(self, graph: Graph) -> None:
        turns = make_turns(("A", 1, "I"), ("B", 2, "1"), ("A", 3, "2"), ("C", 4, "1"))

        rows = node_table(graph, turns, derived=True)

        assert rows[0] == {
            "id": 0,
            "label": "A",
            "turn_count": 2,
            "inbound": 3,
            "outbound": 4,
            "inbound_ratio": pytest.approx(3 / 7),
        }
        assert rows[3]["turn_count"] == 0
        assert rows[3]["inbound_ratio"] is None

    def test_edge_table_keys(self, graph: Graph) -> None:
        rows = edge_table(graph)

        assert rows[1] == {"from": 0, "to": 1, "weight": 3}
        assert len(rows) == 4

    def test_edge_table_filtered(self, graph: Graph) -> None:
        assert edge_table(graph, min_weight=3) == [{"from": 0, "to": 1, "weight": 3}]
