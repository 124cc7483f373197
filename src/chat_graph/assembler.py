"""Graph assembly: speakers become nodes, weighted pairs become edges."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from chat_graph.exceptions import GraphAssemblyError
from chat_graph.models.graph import Edge, Graph, Node, WeightedPair

logger = logging.getLogger(__name__)


def assemble_graph(speakers: Sequence[str], pairs: Iterable[WeightedPair]) -> Graph:
    """Build the output graph.

    Args:
        speakers: Every unique speaker of the transcript, in order of first
            appearance.  Speakers without edges still get a node.
        pairs: Aggregated speaker pairs.

    Returns:
        A :class:`Graph` whose node ids are dense from ``0`` in speaker
        order and whose edges are sorted by ``(from_id, to_id)``.

    Raises:
        GraphAssemblyError: If a pair names a speaker not in *speakers*.
    """
    nodes = tuple(Node(id=idx, label=speaker) for idx, speaker in enumerate(speakers))
    ids = {node.label: node.id for node in nodes}

    edges: list[Edge] = []
    for pair in pairs:
        try:
            from_id = ids[pair.responder]
            to_id = ids[pair.respondee]
        except KeyError as exc:
            raise GraphAssemblyError(
                f"Pair {pair.responder!r} -> {pair.respondee!r} names unknown speaker {exc.args[0]!r}"
            ) from exc
        edges.append(Edge(from_id=from_id, to_id=to_id, weight=pair.weight))

    edges.sort(key=lambda edge: (edge.from_id, edge.to_id))

    logger.debug("Assembled graph: %d node(s), %d edge(s)", len(nodes), len(edges))
    return Graph(nodes=nodes, edges=tuple(edges))
