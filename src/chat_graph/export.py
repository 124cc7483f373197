"""Export of node and edge tables for external renderers.

Two formats are supported: a single JSON document with ``nodes`` and
``edges`` arrays, and a pair of CSV files (``nodes.csv``, ``edges.csv``).
Both carry the derived node columns from :mod:`chat_graph.views`.
"""

from __future__ import annotations

import csv
import json
import logging
from collections.abc import Iterable
from pathlib import Path

from chat_graph.models.graph import Graph
from chat_graph.models.transcript import Turn
from chat_graph.views import edge_table, node_table

logger = logging.getLogger(__name__)

NODE_COLUMNS: tuple[str, ...] = (
    "id",
    "label",
    "turn_count",
    "inbound",
    "outbound",
    "inbound_ratio",
)
EDGE_COLUMNS: tuple[str, ...] = ("from", "to", "weight")


def export_graph_json(graph: Graph, turns: Iterable[Turn] = (), min_weight: int = 1) -> str:
    """Serialize the graph as a JSON document.

    Args:
        graph: The assembled graph.
        turns: Transcript turns, for the ``turn_count`` node column.
        min_weight: Drop edges lighter than this.

    Returns:
        Indented JSON text with ``nodes`` and ``edges`` keys.
    """
    document = {
        "nodes": node_table(graph, turns, derived=True),
        "edges": edge_table(graph, min_weight),
    }
    return json.dumps(document, indent=2, ensure_ascii=False)


def write_graph_json(
    path: str | Path,
    graph: Graph,
    turns: Iterable[Turn] = (),
    min_weight: int = 1,
) -> Path:
    """Write :func:`export_graph_json` output to *path* and return it."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(export_graph_json(graph, turns, min_weight) + "\n", encoding="utf-8")
    logger.info("Wrote graph JSON to %s", target)
    return target


def write_graph_csv(
    directory: str | Path,
    graph: Graph,
    turns: Iterable[Turn] = (),
    min_weight: int = 1,
) -> tuple[Path, Path]:
    """Write ``nodes.csv`` and ``edges.csv`` into *directory*.

    Returns:
        The paths of the node and edge files.
    """
    target = Path(directory)
    target.mkdir(parents=True, exist_ok=True)
    nodes_path = target / "nodes.csv"
    edges_path = target / "edges.csv"

    with open(nodes_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=NODE_COLUMNS)
        writer.writeheader()
        for row in node_table(graph, turns, derived=True):
            # Empty cell rather than "None" for nodes with no edges.
            if row["inbound_ratio"] is None:
                row["inbound_ratio"] = ""
            writer.writerow(row)

    with open(edges_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=EDGE_COLUMNS)
        writer.writeheader()
        writer.writerows(edge_table(graph, min_weight))

    logger.info("Wrote %s and %s", nodes_path, edges_path)
    return nodes_path, edges_path
