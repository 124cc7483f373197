"""Transcript data models for parsed chat transcripts.

These dataclasses represent the structured output of the transcript parser.
They are plain frozen dataclasses; the graph output models in
:mod:`chat_graph.models.graph` are the validated Pydantic boundary.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from chat_graph.models.annotation import Annotation


@dataclass(frozen=True)
class Turn:
    """A single contribution by one participant.

    Attributes:
        turn_id: Normalized nominal turn id.  Several consecutive turns may
            share one id (a turn-group).
        speaker: Participant identifier, trimmed.
        annotation: Parsed response annotation.
        raw_annotation: Annotation text as it appeared in the source.
        position: 0-based index of the turn in transcript order.
        line_number: 1-based source line of the row, or ``0`` when the
            turn did not come from a file.
    """

    turn_id: str
    speaker: str
    annotation: Annotation
    raw_annotation: str = ""
    position: int = 0
    line_number: int = 0


@dataclass(frozen=True)
class ParseWarning:
    """A structured warning produced during transcript parsing.

    Attributes:
        line_number: 1-based line number of the problematic row.
        message: Human-readable description of the issue.
        raw_line: The original row text that triggered the warning.
    """

    line_number: int
    message: str
    raw_line: str


@dataclass(frozen=True)
class TranscriptParseResult:
    """Top-level return type from the transcript parser.

    Attributes:
        turns: Parsed turns, in transcript order.
        speakers: Unique speakers, ordered by first appearance.
        warnings: Any parse warnings encountered.
        malformed_count: Number of annotations that failed to parse and
            were recorded as ambiguous.
        source: File path of the parsed transcript, or ``"<string>"``.
    """

    turns: list[Turn] = field(default_factory=list)
    speakers: list[str] = field(default_factory=list)
    warnings: list[ParseWarning] = field(default_factory=list)
    malformed_count: int = 0
    source: str = "<string>"
