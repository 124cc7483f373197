"""Annotation data models.

A raw response annotation parses into exactly one of four variants.
Compound annotations exist only until expansion; everything after the
expander sees :class:`ExpandedAnnotation` items.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chat_graph.models.transcript import Turn

# A turn number as written in an annotation: integral, optionally with the
# ".0" suffix spreadsheets add.
TURN_NUMBER_RE = re.compile(r"^(\d+)(?:\.0+)?$")


@dataclass(frozen=True)
class Initiation:
    """The turn starts a new topic and responds to nothing."""


@dataclass(frozen=True)
class Ambiguous:
    """The turn responds to something, but the target is unknown."""


@dataclass(frozen=True)
class SingleTarget:
    """The turn responds to one prior turn (or turn-group).

    Attributes:
        turn_id: Normalized id of the target turn.
    """

    turn_id: str


@dataclass(frozen=True)
class CompoundTarget:
    """The turn responds to several prior turns at once.

    Attributes:
        turn_ids: Normalized target ids in annotation order.  Duplicates
            are kept; each one yields its own response link.
    """

    turn_ids: tuple[str, ...]


Annotation = Initiation | Ambiguous | SingleTarget | CompoundTarget


@dataclass(frozen=True)
class ExpandedAnnotation:
    """One single-target annotation produced by expansion.

    Attributes:
        turn: The responding turn.  Shared by every item expanded from
            the same compound annotation.
        target_id: Normalized id of the turn or turn-group responded to.
    """

    turn: Turn
    target_id: str
