"""Demo output formatter for the transcript-to-graph pipeline.

Renders a :class:`~chat_graph.pipeline.PipelineResult` as structured
console output: transcript metadata, annotation expansion, reference
resolution, the graph itself, and a summary with drop counts.

The primary entry point is :func:`format_pipeline_result`, which returns
the formatted string.  :func:`print_pipeline_result` is a convenience
wrapper that writes directly to stdout.
"""

from __future__ import annotations

import sys

from chat_graph.pipeline import PipelineResult
from chat_graph.views import (
    filter_edges,
    inbound_weight_per_node,
    outbound_weight_per_node,
    turn_count_per_speaker,
)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_BANNER_WIDTH = 60
_SEPARATOR = "=" * _BANNER_WIDTH


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def format_pipeline_result(result: PipelineResult, min_weight: int = 1) -> str:
    """Render a :class:`PipelineResult` as structured demo output.

    Args:
        result: The pipeline result to format.
        min_weight: Edges lighter than this are left out of the edge
            listing (they still count in the summary).

    Returns:
        A multi-line string ready for console display.
    """
    lines: list[str] = []

    _append_banner(lines)
    _append_transcript(lines, result)
    _append_resolution(lines, result)
    _append_graph(lines, result, min_weight)
    _append_summary(lines, result)
    lines.append(_SEPARATOR)

    return "\n".join(lines)


def print_pipeline_result(result: PipelineResult, min_weight: int = 1) -> None:
    """Format and print a :class:`PipelineResult` to stdout."""
    sys.stdout.write(format_pipeline_result(result, min_weight) + "\n")


# ---------------------------------------------------------------------------
# Internal formatters
# ---------------------------------------------------------------------------


def _append_banner(lines: list[str]) -> None:
    lines.append(_SEPARATOR)
    lines.append("  CHAT INTERACTION GRAPH")
    lines.append(_SEPARATOR)


def _append_transcript(lines: list[str], result: PipelineResult) -> None:
    """Append Stage 1: Transcript Loaded."""
    lines.append("")
    lines.append("--- STAGE 1: Transcript Loaded ---")
    lines.append(f"  Source: {result.source}")
    speakers = ", ".join(result.speakers) if result.speakers else "none"
    lines.append(f"  Speakers: {speakers}")
    lines.append(f"  Turns: {result.turn_count}")

    grouped = result.store.grouped_ids()
    if grouped:
        lines.append(f"  Turn groups: {', '.join(grouped)}")


def _append_resolution(lines: list[str], result: PipelineResult) -> None:
    """Append Stage 2: Annotations Resolved."""
    lines.append("")
    lines.append("--- STAGE 2: Annotations Resolved ---")
    lines.append(f"  Single-target annotations: {result.expanded_count}")
    lines.append(f"  Links resolved: {result.links_resolved}")

    for ref in result.unresolved:
        lines.append(
            f"  [DROPPED] turn {ref.source_turn_id} ({ref.responder}) -> "
            f"unknown turn {ref.target_id}"
        )


def _append_graph(lines: list[str], result: PipelineResult, min_weight: int) -> None:
    """Append Stage 3: Graph Assembled."""
    graph = result.graph
    lines.append("")
    lines.append("--- STAGE 3: Graph Assembled ---")

    if not graph.nodes:
        lines.append("  Empty transcript, no graph.")
        return

    counts = turn_count_per_speaker(result.store)
    inbound = inbound_weight_per_node(graph)
    outbound = outbound_weight_per_node(graph)

    lines.append("  Nodes:")
    for node in graph.nodes:
        lines.append(
            f"    [{node.id}] {node.label}: {counts.get(node.label, 0)} turn(s), "
            f"in {inbound[node.id]}, out {outbound[node.id]}"
        )

    edges = filter_edges(graph, min_weight)
    if not edges:
        lines.append("  No edges.")
        return

    heading = "  Edges:" if min_weight <= 1 else f"  Edges (weight >= {min_weight}):"
    lines.append(heading)
    for edge in edges:
        lines.append(
            f"    {graph.label_of(edge.from_id)} -> {graph.label_of(edge.to_id)}: "
            f"{edge.weight}"
        )


def _append_summary(lines: list[str], result: PipelineResult) -> None:
    """Append the summary section."""
    lines.append("")
    lines.append("--- SUMMARY ---")
    lines.append(f"  Nodes: {len(result.graph.nodes)}")
    lines.append(f"  Edges: {len(result.graph.edges)}")
    lines.append(f"  Total weight: {result.graph.total_weight}")
    lines.append(f"  Malformed annotations: {result.malformed_count}")
    lines.append(f"  Unresolved references: {result.unresolved_count}")
    lines.append(f"  Warnings: {len(result.warnings)}")

    for warning in result.warnings:
        lines.append(f"    - {warning}")

    lines.append(f"  Pipeline duration: {result.duration_seconds:.3f}s")
