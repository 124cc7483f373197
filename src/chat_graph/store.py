"""Immutable transcript store with a turn-group index.

The store is built once from parsed turns and never mutated.  It indexes
every nominal turn id to the ordered tuple of turns sharing it, and checks
the turn-group invariant at construction time: all turns in a group are
by one speaker and contiguous in transcript order.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import replace

from chat_graph.exceptions import InconsistentTurnGroupError
from chat_graph.models.transcript import Turn

logger = logging.getLogger(__name__)


class TranscriptStore:
    """The canonical ordered list of turns.

    Args:
        turns: Turns in transcript order.  Positions are reassigned from
            the iteration order so the store never depends on the caller
            numbering them.

    Raises:
        InconsistentTurnGroupError: If the turns sharing one id have
            different speakers or are separated by other turns.
    """

    def __init__(self, turns: Iterable[Turn]) -> None:
        ordered: list[Turn] = []
        for position, turn in enumerate(turns):
            if turn.position != position:
                turn = replace(turn, position=position)
            ordered.append(turn)

        self._turns: tuple[Turn, ...] = tuple(ordered)
        self._groups: dict[str, tuple[Turn, ...]] = _build_group_index(self._turns)
        self._speakers: tuple[str, ...] = tuple(dict.fromkeys(t.speaker for t in self._turns))

        logger.debug(
            "Transcript store built: %d turn(s), %d turn id(s), %d speaker(s)",
            len(self._turns),
            len(self._groups),
            len(self._speakers),
        )

    @property
    def turns(self) -> tuple[Turn, ...]:
        """All turns in transcript order."""
        return self._turns

    @property
    def speakers(self) -> tuple[str, ...]:
        """Unique speakers in order of first appearance."""
        return self._speakers

    def __len__(self) -> int:
        return len(self._turns)

    def __iter__(self) -> Iterator[Turn]:
        return iter(self._turns)

    def group(self, turn_id: str) -> tuple[Turn, ...]:
        """Return every turn sharing *turn_id*, or ``()`` if there is none."""
        return self._groups.get(turn_id, ())

    def __contains__(self, turn_id: object) -> bool:
        return turn_id in self._groups

    def grouped_ids(self) -> list[str]:
        """Return ids shared by more than one turn, in transcript order."""
        return [turn_id for turn_id, members in self._groups.items() if len(members) > 1]


def _build_group_index(turns: tuple[Turn, ...]) -> dict[str, tuple[Turn, ...]]:
    """Index turns by nominal id and validate every group.

    Insertion order of the returned dict follows first appearance of each
    id, which keeps every derived view deterministic.
    """
    members: dict[str, list[Turn]] = {}
    for turn in turns:
        members.setdefault(turn.turn_id, []).append(turn)

    for turn_id, group in members.items():
        if len(group) == 1:
            continue

        speakers = tuple(t.speaker for t in group)
        positions = tuple(t.position for t in group)

        if len(set(speakers)) > 1:
            raise InconsistentTurnGroupError(
                f"Turn group {turn_id!r} has turns by several speakers "
                f"({', '.join(dict.fromkeys(speakers))}) at positions {list(positions)}",
                turn_id=turn_id,
                speakers=speakers,
                positions=positions,
            )

        if positions[-1] - positions[0] != len(positions) - 1:
            raise InconsistentTurnGroupError(
                f"Turn group {turn_id!r} by {speakers[0]} is not contiguous: "
                f"positions {list(positions)}",
                turn_id=turn_id,
                speakers=speakers,
                positions=positions,
            )

    return {turn_id: tuple(group) for turn_id, group in members.items()}
