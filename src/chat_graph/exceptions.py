"""Custom exceptions for the chat-graph extraction pipeline.

Exception hierarchy::

    ChatGraphError                  (base for all pipeline errors)
    +-- MalformedAnnotationError    (recoverable: annotation treated as ambiguous)
    +-- UnresolvedReferenceError    (recoverable: the single link is dropped)
    +-- InconsistentTurnGroupError  (fatal: turn-group invariant violated)
    +-- GraphAssemblyError          (fatal: dangling speaker during assembly)
    +-- TranscriptFormatError       (fatal: input table is unusable)
"""

from __future__ import annotations


class ChatGraphError(Exception):
    """Base exception for all chat-graph errors."""


class MalformedAnnotationError(ChatGraphError):
    """Raised when an annotation string cannot be parsed.

    The transcript parser catches this and records the turn as
    ambiguous, so it never aborts a batch.

    Attributes:
        raw_annotation: The annotation text that failed to parse.
    """

    def __init__(self, message: str, raw_annotation: str = "") -> None:
        super().__init__(message)
        self.raw_annotation = raw_annotation


class UnresolvedReferenceError(ChatGraphError):
    """Raised when an annotation targets a turn id absent from the transcript.

    Attributes:
        target_id: The turn id that could not be found.
        source_turn_id: The turn id of the responding turn.
    """

    def __init__(self, target_id: str, source_turn_id: str) -> None:
        super().__init__(
            f"Turn {source_turn_id!r} responds to unknown turn {target_id!r}"
        )
        self.target_id = target_id
        self.source_turn_id = source_turn_id


class InconsistentTurnGroupError(ChatGraphError):
    """Raised when the turns sharing one id break the turn-group invariant.

    Member turns of a group must share a single speaker and be contiguous
    in transcript order.  Either violation means the input data is bad and
    no resolution against it can be trusted.

    Attributes:
        turn_id: The nominal id of the offending group.
        speakers: Speakers of the group's member turns, in order.
        positions: Transcript positions of the member turns.
    """

    def __init__(
        self,
        message: str,
        turn_id: str,
        speakers: tuple[str, ...] = (),
        positions: tuple[int, ...] = (),
    ) -> None:
        super().__init__(message)
        self.turn_id = turn_id
        self.speakers = speakers
        self.positions = positions


class GraphAssemblyError(ChatGraphError):
    """Raised when an aggregated pair names a speaker with no node."""


class TranscriptFormatError(ChatGraphError):
    """Raised when the input table lacks required columns."""
