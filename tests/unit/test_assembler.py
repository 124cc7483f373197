"""Tests for graph assembly."""

from __future__ import annotations

import pytest

from chat_graph.assembler import assemble_graph
from chat_graph.exceptions import GraphAssemblyError
from chat_graph.models.graph import Edge, Node, WeightedPair


class TestAssembleGraph:
    def test_nodes_in_speaker_order(self) -> None:
        graph = assemble_graph(["A", "B", "C"], [])

        assert graph.nodes == (
            Node(id=0, label="A"),
            Node(id=1, label="B"),
            Node(id=2, label="C"),
        )
        assert graph.edges == ()

    def test_speakers_without_edges_still_nodes(self) -> None:
        graph = assemble_graph(["A", "B", "Lurker"], [WeightedPair("B", "A", 1)])

        assert len(graph.nodes) == 3
        assert graph.nodes[2].label == "Lurker"

    def test_pairs_translated_and_sorted(self) -> None:
        pairs = [
            WeightedPair("C", "B", 1),
            WeightedPair("B", "A", 1),
            WeightedPair("C", "A", 4),
        ]

        graph = assemble_graph(["A", "B", "C"], pairs)

        assert graph.edges == (
            Edge(from_id=1, to_id=0, weight=1),
            Edge(from_id=2, to_id=0, weight=4),
            Edge(from_id=2, to_id=1, weight=1),
        )

    def test_unknown_speaker_raises(self) -> None:
        with pytest.raises(GraphAssemblyError, match="'Ghost'"):
            assemble_graph(["A"], [WeightedPair("Ghost", "A", 1)])

    def test_self_loop(self) -> None:
        graph = assemble_graph(["A"], [WeightedPair("A", "A", 2)])

        assert graph.edges == (Edge(from_id=0, to_id=0, weight=2),)
