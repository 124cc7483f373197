"""Derived per-node views for renderers.

None of these values is owned by the graph; they are computed on demand
so a renderer can map them to node size, node color or edge width with
its own scales and thresholds.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from typing import Any

from chat_graph.models.graph import Edge, Graph
from chat_graph.models.transcript import Turn


def turn_count_per_speaker(turns: Iterable[Turn]) -> dict[str, int]:
    """Count physical turns per speaker, in order of first appearance."""
    return dict(Counter(turn.speaker for turn in turns))


def inbound_weight_per_node(graph: Graph) -> dict[int, int]:
    """Sum of weights of edges pointing at each node (responses received)."""
    totals = {node.id: 0 for node in graph.nodes}
    for edge in graph.edges:
        totals[edge.to_id] += edge.weight
    return totals


def outbound_weight_per_node(graph: Graph) -> dict[int, int]:
    """Sum of weights of edges leaving each node (responses given)."""
    totals = {node.id: 0 for node in graph.nodes}
    for edge in graph.edges:
        totals[edge.from_id] += edge.weight
    return totals


def inbound_ratio_per_node(graph: Graph) -> dict[int, float | None]:
    """Share of each node's total weight that is inbound.

    ``1.0`` means the participant only received responses, ``0.0`` that
    they only responded.  Self-loops count on both sides.  Nodes with no
    edges map to ``None``.
    """
    inbound = inbound_weight_per_node(graph)
    outbound = outbound_weight_per_node(graph)
    ratios: dict[int, float | None] = {}
    for node_id, received in inbound.items():
        total = received + outbound[node_id]
        ratios[node_id] = received / total if total else None
    return ratios


def filter_edges(graph: Graph, min_weight: int = 1) -> tuple[Edge, ...]:
    """Return the edges whose weight is at least *min_weight*."""
    return tuple(edge for edge in graph.edges if edge.weight >= min_weight)


def node_table(
    graph: Graph,
    turns: Iterable[Turn] = (),
    *,
    derived: bool = False,
) -> list[dict[str, Any]]:
    """Render the nodes as plain rows.

    Args:
        graph: The assembled graph.
        turns: Transcript turns, needed only for the ``turn_count`` column.
        derived: Add ``turn_count``, ``inbound``, ``outbound`` and
            ``inbound_ratio`` columns.
    """
    rows = [node.model_dump() for node in graph.nodes]
    if not derived:
        return rows

    counts = turn_count_per_speaker(turns)
    inbound = inbound_weight_per_node(graph)
    outbound = outbound_weight_per_node(graph)
    ratios = inbound_ratio_per_node(graph)
    for row in rows:
        node_id = row["id"]
        row["turn_count"] = counts.get(row["label"], 0)
        row["inbound"] = inbound[node_id]
        row["outbound"] = outbound[node_id]
        row["inbound_ratio"] = ratios[node_id]
    return rows


def edge_table(graph: Graph, min_weight: int = 1) -> list[dict[str, int]]:
    """Render the edges as ``{"from", "to", "weight"}`` rows."""
    return [edge.model_dump(by_alias=True) for edge in filter_edges(graph, min_weight)]
