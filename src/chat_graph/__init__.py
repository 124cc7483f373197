"""chat-graph: response graphs from annotated chat transcripts.

Derives a directed, weighted social-interaction graph from a turn-taking
chat transcript whose turns are coded with the turn(s) they respond to,
and exposes node and edge tables for interactive visualization.
"""

from __future__ import annotations

from chat_graph.aggregator import aggregate_links
from chat_graph.assembler import assemble_graph
from chat_graph.exceptions import (
    ChatGraphError,
    GraphAssemblyError,
    InconsistentTurnGroupError,
    MalformedAnnotationError,
    TranscriptFormatError,
    UnresolvedReferenceError,
)
from chat_graph.expander import expand_annotations
from chat_graph.models.graph import Edge, Graph, Node, ResponseLink
from chat_graph.models.transcript import ParseWarning, TranscriptParseResult, Turn
from chat_graph.parser import parse_transcript, parse_transcript_file, parse_transcript_rows
from chat_graph.pipeline import PipelineResult, run_pipeline, run_pipeline_file
from chat_graph.resolver import resolve_references
from chat_graph.store import TranscriptStore

__version__ = "0.1.0"

__all__ = [
    "ChatGraphError",
    "Edge",
    "Graph",
    "GraphAssemblyError",
    "InconsistentTurnGroupError",
    "MalformedAnnotationError",
    "Node",
    "ParseWarning",
    "PipelineResult",
    "ResponseLink",
    "TranscriptFormatError",
    "TranscriptParseResult",
    "TranscriptStore",
    "Turn",
    "UnresolvedReferenceError",
    "aggregate_links",
    "assemble_graph",
    "expand_annotations",
    "parse_transcript",
    "parse_transcript_file",
    "parse_transcript_rows",
    "resolve_references",
    "run_pipeline",
    "run_pipeline_file",
]
