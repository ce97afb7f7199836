"""Relation flattening.

Resolves relations that reference ways and other relations into the flat
set of ways they ultimately contain. Real-world data occasionally contains
relation cycles, so every relation id is expanded at most once per call.

Typical usage:
    from airportgen.osm.flatten import flatten_relations

    for way in flatten_relations(data.relations.values()):
        print(way.id)
"""

import logging
from collections.abc import Iterable, Iterator
from typing import assert_never

from airportgen.osm.models import Node, Relation, Way

logger = logging.getLogger(__name__)


def flatten_relations(relations: Iterable[Relation]) -> Iterator[Way]:
    """Lazily yield every way reachable from the given relations.

    Expansion is breadth-first by frontier: all members of the current
    frontier are scanned, ways are yielded in member order, and the newly
    discovered sub-relations form the next frontier. Relation ids are marked
    as expanded before their members are visited, so cycles and shared
    sub-relations expand exactly once. Each way id is yielded once.

    Args:
        relations: Root relations.

    Yields:
        Ways in deterministic discovery order. Node members are ignored.
    """
    expanded: set[int] = set()
    seen_ways: set[int] = set()

    frontier: list[Relation] = []
    for relation in relations:
        if relation.id not in expanded:
            expanded.add(relation.id)
            frontier.append(relation)

    depth = 0
    while frontier:
        subrelations: list[Relation] = []

        for relation in frontier:
            for member in relation.members:
                match member:
                    case Way():
                        if member.id not in seen_ways:
                            seen_ways.add(member.id)
                            yield member
                    case Relation():
                        if member.id not in expanded:
                            expanded.add(member.id)
                            subrelations.append(member)
                    case Node():
                        # No drawable geometry
                        pass
                    case _:
                        assert_never(member)

        depth += 1
        if subrelations:
            logger.debug("Expanding %d nested relations at depth %d", len(subrelations), depth)
        frontier = subrelations
