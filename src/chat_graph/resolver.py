"""Reference resolution.

Maps each single-target annotation to the speaker of the turn or
turn-group it names.  Lookups always go through the full, static
:class:`~chat_graph.store.TranscriptStore`, so the result for one item
never depends on the others.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from chat_graph.exceptions import UnresolvedReferenceError
from chat_graph.models.annotation import ExpandedAnnotation
from chat_graph.models.graph import ResponseLink, UnresolvedReference
from chat_graph.store import TranscriptStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolutionResult:
    """Outcome of resolving a batch of expanded annotations.

    Attributes:
        links: Resolved response links, in input order.
        unresolved: Items whose target id matched no turn.  They
            contribute nothing to the graph.
        forward_references: Items that resolved to a turn-group starting
            after the responding turn.  They are kept in ``links``.
    """

    links: tuple[ResponseLink, ...] = ()
    unresolved: tuple[UnresolvedReference, ...] = ()
    forward_references: tuple[ExpandedAnnotation, ...] = field(default=())

    @property
    def total_multiplicity(self) -> int:
        """Sum of the multiplicities of all resolved links."""
        return sum(link.multiplicity for link in self.links)


def resolve_reference(store: TranscriptStore, item: ExpandedAnnotation) -> ResponseLink:
    """Resolve one single-target annotation to a response link.

    A target naming one turn yields multiplicity ``1``; a target naming a
    turn-group yields the group size, since the response acknowledges
    every turn in the group.

    Raises:
        UnresolvedReferenceError: If no turn has the target id.
    """
    group = store.group(item.target_id)
    if not group:
        raise UnresolvedReferenceError(item.target_id, item.turn.turn_id)

    # The store guarantees one speaker per group.
    return ResponseLink(
        responder=item.turn.speaker,
        respondee=group[0].speaker,
        multiplicity=len(group),
    )


def resolve_references(
    store: TranscriptStore,
    items: Iterable[ExpandedAnnotation],
) -> ResolutionResult:
    """Resolve a batch of expanded annotations.

    Unresolved references are logged and recorded, then skipped; they
    never abort the pass.
    """
    links: list[ResponseLink] = []
    unresolved: list[UnresolvedReference] = []
    forward: list[ExpandedAnnotation] = []

    for item in items:
        try:
            link = resolve_reference(store, item)
        except UnresolvedReferenceError as exc:
            logger.warning("%s; link dropped", exc)
            unresolved.append(
                UnresolvedReference(
                    source_turn_id=item.turn.turn_id,
                    responder=item.turn.speaker,
                    target_id=item.target_id,
                    line_number=item.turn.line_number,
                )
            )
            continue

        if store.group(item.target_id)[0].position > item.turn.position:
            logger.warning(
                "Turn %s by %s responds to later turn %s",
                item.turn.turn_id,
                item.turn.speaker,
                item.target_id,
            )
            forward.append(item)

        logger.debug(
            "Resolved %s -> %s (x%d)", link.responder, link.respondee, link.multiplicity
        )
        links.append(link)

    return ResolutionResult(
        links=tuple(links),
        unresolved=tuple(unresolved),
        forward_references=tuple(forward),
    )
