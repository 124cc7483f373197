"""Annotation expansion.

Turns the store's raw annotations into a flat sequence of single-target
items.  A compound annotation on one turn becomes one item per target,
each carrying the same originating turn.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from chat_graph.models.annotation import CompoundTarget, ExpandedAnnotation, SingleTarget
from chat_graph.models.transcript import Turn

logger = logging.getLogger(__name__)


def expand_turn(turn: Turn) -> tuple[ExpandedAnnotation, ...]:
    """Expand the annotation of a single turn.

    Returns:
        One item for a single target, one per target (duplicates kept)
        for a compound target, and nothing for initiations and ambiguous
        turns.
    """
    annotation = turn.annotation
    if isinstance(annotation, SingleTarget):
        return (ExpandedAnnotation(turn=turn, target_id=annotation.turn_id),)
    if isinstance(annotation, CompoundTarget):
        return tuple(
            ExpandedAnnotation(turn=turn, target_id=target) for target in annotation.turn_ids
        )
    return ()


def expand_annotations(turns: Iterable[Turn]) -> tuple[ExpandedAnnotation, ...]:
    """Expand every turn's annotation, preserving transcript order.

    Args:
        turns: Turns in transcript order, typically a
            :class:`~chat_graph.store.TranscriptStore`.

    Returns:
        A new tuple containing only single-target items.
    """
    expanded: list[ExpandedAnnotation] = []
    compound = 0
    for turn in turns:
        items = expand_turn(turn)
        if len(items) > 1:
            compound += 1
            logger.debug(
                "Turn %s by %s expanded into %d targets", turn.turn_id, turn.speaker, len(items)
            )
        expanded.extend(items)

    logger.debug("Expanded %d compound annotation(s)", compound)
    return tuple(expanded)
