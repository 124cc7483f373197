"""Data models for chat-graph."""

from __future__ import annotations

from chat_graph.models.annotation import (
    Ambiguous,
    Annotation,
    CompoundTarget,
    ExpandedAnnotation,
    Initiation,
    SingleTarget,
)
from chat_graph.models.graph import (
    Edge,
    Graph,
    Node,
    ResponseLink,
    UnresolvedReference,
    WeightedPair,
)
from chat_graph.models.transcript import ParseWarning, TranscriptParseResult, Turn

__all__ = [
    "Ambiguous",
    "Annotation",
    "CompoundTarget",
    "Edge",
    "ExpandedAnnotation",
    "Graph",
    "Initiation",
    "Node",
    "ParseWarning",
    "ResponseLink",
    "SingleTarget",
    "TranscriptParseResult",
    "Turn",
    "UnresolvedReference",
    "WeightedPair",
]
