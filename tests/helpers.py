"""Builders shared by the unit tests."""

from __future__ import annotations

from chat_graph.models.transcript import TranscriptParseResult, Turn
from chat_graph.parser import parse_annotation, parse_transcript_rows
from chat_graph.store import TranscriptStore


def make_turns(*rows: tuple[str, object, str]) -> list[Turn]:
    """Build turns from ``(speaker, turn_id, raw_annotation)`` tuples."""
    return [
        Turn(
            turn_id=str(turn_id),
            speaker=speaker,
            annotation=parse_annotation(raw),
            raw_annotation=raw,
            position=idx,
        )
        for idx, (speaker, turn_id, raw) in enumerate(rows)
    ]


def make_store(*rows: tuple[str, object, str]) -> TranscriptStore:
    """Build a :class:`TranscriptStore` from row tuples."""
    return TranscriptStore(make_turns(*rows))


def parse_rows(*rows: tuple[object, object, object]) -> TranscriptParseResult:
    """Parse row tuples through :func:`parse_transcript_rows`.

    Cells are passed through unchanged, so integer ids and annotations
    reach the parser as integers.
    """
    return parse_transcript_rows(
        {"speaker": s, "turn_id": t, "raw_annotation": a} for s, t, a in rows
    )
