"""Graph data models.

- :class:`ResponseLink` -- one resolved interaction (transient).
- :class:`UnresolvedReference` -- record of a link that could not be resolved.
- :class:`WeightedPair` -- aggregated speaker-to-speaker weight.
- :class:`Node`, :class:`Edge`, :class:`Graph` -- the validated output handed
  to renderers.  Edges serialize with the keys ``from``, ``to`` and
  ``weight``.
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field, model_validator

# ---------------------------------------------------------------------------
# Intermediate records
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ResponseLink:
    """A resolved directed interaction.

    Attributes:
        responder: Speaker of the responding turn.
        respondee: Speaker of the turn or turn-group responded to.
        multiplicity: ``1`` for a single turn, otherwise the group size.
    """

    responder: str
    respondee: str
    multiplicity: int = 1


@dataclass(frozen=True)
class UnresolvedReference:
    """A single-target annotation whose target id matched no turn.

    Attributes:
        source_turn_id: Id of the responding turn.
        responder: Speaker of the responding turn.
        target_id: The id that matched nothing.
        line_number: Source line of the responding turn, if known.
    """

    source_turn_id: str
    responder: str
    target_id: str
    line_number: int = 0


@dataclass(frozen=True)
class WeightedPair:
    """Summed multiplicity for one ordered (responder, respondee) pair."""

    responder: str
    respondee: str
    weight: int


# ---------------------------------------------------------------------------
# Output models
# ---------------------------------------------------------------------------


class Node(BaseModel):
    """One unique speaker.

    Attributes:
        id: Dense integer id, assigned in order of first appearance.
        label: The speaker identifier, for display.
    """

    model_config = ConfigDict(frozen=True)

    id: int = Field(ge=0)
    label: str


class Edge(BaseModel):
    """One weighted, directed responder-to-respondee edge."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    from_id: int = Field(ge=0, alias="from")
    to_id: int = Field(ge=0, alias="to")
    weight: int = Field(ge=1)

    @property
    def is_self_loop(self) -> bool:
        """Whether the speaker responded to their own earlier turn."""
        return self.from_id == self.to_id


class Graph(BaseModel):
    """The assembled interaction graph.

    Validation enforces dense node ids, at most one edge per ordered pair
    and that every edge endpoint names an existing node.
    """

    model_config = ConfigDict(frozen=True)

    nodes: tuple[Node, ...] = ()
    edges: tuple[Edge, ...] = ()

    @model_validator(mode="after")
    def check_integrity(self) -> Graph:
        ids = [node.id for node in self.nodes]
        if ids != list(range(len(ids))):
            raise ValueError("node ids must be dense and ordered from 0")

        seen: set[tuple[int, int]] = set()
        for edge in self.edges:
            pair = (edge.from_id, edge.to_id)
            if pair in seen:
                raise ValueError(f"duplicate edge {pair}")
            seen.add(pair)
            if edge.from_id >= len(ids) or edge.to_id >= len(ids):
                raise ValueError(f"edge {pair} references an unknown node")
        return self

    @property
    def total_weight(self) -> int:
        """Sum of all edge weights."""
        return sum(edge.weight for edge in self.edges)

    def label_of(self, node_id: int) -> str:
        """Return the label of the node with *node_id*."""
        return self.nodes[node_id].label
