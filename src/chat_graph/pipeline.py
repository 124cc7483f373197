"""Pipeline orchestrator for the transcript-to-graph workflow.

Wires the stages together: transcript store, annotation expansion,
reference resolution, edge aggregation and graph assembly.  The top-level
entry point is :func:`run_pipeline`, which returns a :class:`PipelineResult`
suitable for rendering by the demo output formatter or the exporters.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path

from chat_graph.aggregator import aggregate_links
from chat_graph.assembler import assemble_graph
from chat_graph.config import AnnotationScheme
from chat_graph.expander import expand_annotations
from chat_graph.models.graph import Graph, UnresolvedReference
from chat_graph.models.transcript import TranscriptParseResult
from chat_graph.parser import parse_transcript_file
from chat_graph.resolver import resolve_references
from chat_graph.store import TranscriptStore

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Result dataclass
# ---------------------------------------------------------------------------


@dataclass
class PipelineResult:
    """Aggregated result from the full pipeline run.

    Attributes:
        source: Origin of the transcript (file path or ``"<string>"``).
        store: The transcript store the graph was built from.
        graph: The assembled graph.
        speakers: Unique speakers, in order of first appearance.
        turn_count: Number of turns in the transcript.
        expanded_count: Single-target annotations after expansion.
        links_resolved: Response links that resolved.
        resolved_multiplicity: Sum of multiplicities of resolved links.
            Equals ``graph.total_weight``.
        malformed_count: Annotations that failed to parse and were treated
            as ambiguous.
        unresolved: References whose target matched no turn.
        warnings: Non-fatal warnings from any stage.
        duration_seconds: Wall-clock time for the run.
    """

    source: str
    store: TranscriptStore
    graph: Graph = field(default_factory=Graph)
    speakers: list[str] = field(default_factory=list)
    turn_count: int = 0
    expanded_count: int = 0
    links_resolved: int = 0
    resolved_multiplicity: int = 0
    malformed_count: int = 0
    unresolved: list[UnresolvedReference] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    duration_seconds: float = 0.0

    @property
    def unresolved_count(self) -> int:
        """Number of response links dropped as unresolved."""
        return len(self.unresolved)

    @property
    def complete(self) -> bool:
        """Whether every annotation parsed and every reference resolved."""
        return self.malformed_count == 0 and not self.unresolved


# ---------------------------------------------------------------------------
# Pipeline entry points
# ---------------------------------------------------------------------------


def run_pipeline(parse_result: TranscriptParseResult) -> PipelineResult:
    """Build the interaction graph from a parsed transcript.

    Executes five stages:

    1. **Store** -- index turns by id and validate turn-groups.
    2. **Expand** -- split compound annotations into single targets.
    3. **Resolve** -- map each target to a speaker and multiplicity.
    4. **Aggregate** -- sum multiplicities per ordered speaker pair.
    5. **Assemble** -- assign node ids and build the edge list.

    Malformed annotations and unresolved references are counted and
    reported on the result without stopping the run.

    Args:
        parse_result: Output of one of the :mod:`chat_graph.parser`
            functions.

    Returns:
        A :class:`PipelineResult` with the graph and drop counts.

    Raises:
        InconsistentTurnGroupError: If a turn-group mixes speakers or is
            not contiguous.
    """
    start_time = time.monotonic()

    # ------------------------------------------------------------------
    # Stage 1: Store
    # ------------------------------------------------------------------
    logger.info("Stage 1: Building transcript store from %s", parse_result.source)

    store = TranscriptStore(parse_result.turns)
    result = PipelineResult(
        source=parse_result.source,
        store=store,
        speakers=list(store.speakers),
        turn_count=len(store),
        malformed_count=parse_result.malformed_count,
    )

    for warning in parse_result.warnings:
        msg = f"Parse warning at line {warning.line_number}: {warning.message}"
        result.warnings.append(msg)

    logger.info(
        "Stage 1 complete: %d speaker(s), %d turn(s), %d turn group(s)",
        len(result.speakers),
        result.turn_count,
        len(store.grouped_ids()),
    )

    # ------------------------------------------------------------------
    # Stage 2: Expand
    # ------------------------------------------------------------------
    expanded = expand_annotations(store)
    result.expanded_count = len(expanded)
    logger.info("Stage 2 complete: %d single-target annotation(s)", result.expanded_count)

    # ------------------------------------------------------------------
    # Stage 3: Resolve
    # ------------------------------------------------------------------
    resolution = resolve_references(store, expanded)
    result.links_resolved = len(resolution.links)
    result.resolved_multiplicity = resolution.total_multiplicity
    result.unresolved = list(resolution.unresolved)

    for ref in resolution.unresolved:
        result.warnings.append(
            f"Unresolved reference at line {ref.line_number}: turn {ref.source_turn_id} "
            f"by {ref.responder} responds to unknown turn {ref.target_id}"
        )
    for item in resolution.forward_references:
        result.warnings.append(
            f"Forward reference at line {item.turn.line_number}: turn {item.turn.turn_id} "
            f"by {item.turn.speaker} responds to later turn {item.target_id}"
        )

    logger.info(
        "Stage 3 complete: %d link(s) resolved, %d unresolved",
        result.links_resolved,
        result.unresolved_count,
    )

    # ------------------------------------------------------------------
    # Stages 4-5: Aggregate and assemble
    # ------------------------------------------------------------------
    pairs = aggregate_links(resolution.links)
    result.graph = assemble_graph(store.speakers, pairs)

    logger.info(
        "Stage 5 complete: %d node(s), %d edge(s), total weight %d",
        len(result.graph.nodes),
        len(result.graph.edges),
        result.graph.total_weight,
    )

    if not result.complete:
        logger.warning(
            "Graph is partial: %d malformed annotation(s), %d unresolved reference(s)",
            result.malformed_count,
            result.unresolved_count,
        )

    result.duration_seconds = time.monotonic() - start_time
    return result


def run_pipeline_file(
    transcript_path: str | Path,
    scheme: AnnotationScheme | None = None,
) -> PipelineResult:
    """Parse a CSV transcript file and run the pipeline on it.

    Raises:
        FileNotFoundError: If *transcript_path* does not exist.
        TranscriptFormatError: If the file lacks required columns.
        InconsistentTurnGroupError: If a turn-group is inconsistent.
    """
    logger.info("Loading transcript from %s", transcript_path)
    parse_result = parse_transcript_file(transcript_path, scheme or AnnotationScheme())
    return run_pipeline(parse_result)
