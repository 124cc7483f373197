"""Edge aggregation: sum response-link multiplicity per ordered pair."""

from __future__ import annotations

from collections.abc import Iterable

from chat_graph.models.graph import ResponseLink, WeightedPair


def aggregate_links(links: Iterable[ResponseLink]) -> tuple[WeightedPair, ...]:
    """Group links by (responder, respondee) and sum their multiplicities.

    Pairs with no links produce no entry.  Weights depend only on the
    multiset of links; pairs are listed in order of first appearance.
    """
    weights: dict[tuple[str, str], int] = {}
    for link in links:
        key = (link.responder, link.respondee)
        weights[key] = weights.get(key, 0) + link.multiplicity

    return tuple(
        WeightedPair(responder=responder, respondee=respondee, weight=weight)
        for (responder, respondee), weight in weights.items()
    )
