"""OpenStreetMap element model.

Nodes, ways and relations as returned by the Overpass API, with member
references already resolved to concrete objects. Relations may reference
each other (and themselves) so they never recurse in repr or comparison.

Typical usage:
    from airportgen.osm.models import OsmData, aeroway_filter

    taxiways = data.filter(aeroway_filter("taxiway"))
    for way in taxiways.all_ways():
        print(way.id, way.get("ref"))
"""

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import TypeAlias

TagPredicate: TypeAlias = Callable[[dict[str, str]], bool]


@dataclass
class Node:
    """A single coordinate.

    Attributes:
        id: OSM node id (0 for generated nodes).
        latitude: Latitude in degrees.
        longitude: Longitude in degrees.
        tags: OSM tags.
    """

    id: int
    latitude: float
    longitude: float
    tags: dict[str, str] = field(default_factory=dict)

    def get(self, key: str) -> str | None:
        """Get a tag value, or None if the tag is absent."""
        return self.tags.get(key)


@dataclass
class Way:
    """An ordered polyline or ring of nodes.

    Attributes:
        id: OSM way id.
        nodes: Ordered nodes; order defines direction.
        tags: OSM tags.
    """

    id: int
    nodes: list[Node] = field(default_factory=list)
    tags: dict[str, str] = field(default_factory=dict)

    def get(self, key: str) -> str | None:
        """Get a tag value, or None if the tag is absent."""
        return self.tags.get(key)


@dataclass
class Relation:
    """A named grouping of nodes, ways and other relations.

    Attributes:
        id: OSM relation id, unique within one data set.
        members: Ordered members.
        tags: OSM tags.
    """

    id: int
    members: list["Member"] = field(default_factory=list, repr=False, compare=False)
    tags: dict[str, str] = field(default_factory=dict)

    def get(self, key: str) -> str | None:
        """Get a tag value, or None if the tag is absent."""
        return self.tags.get(key)


Member: TypeAlias = Node | Way | Relation


@dataclass
class OsmData:
    """Result of one Overpass query.

    Attributes:
        nodes: Nodes by id.
        ways: Ways by id.
        relations: Relations by id.
    """

    nodes: dict[int, Node] = field(default_factory=dict)
    ways: dict[int, Way] = field(default_factory=dict)
    relations: dict[int, Relation] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        """True when the query returned no nodes and no ways."""
        return not self.nodes and not self.ways

    def filter(self, predicate: TagPredicate) -> "OsmData":
        """Keep only the elements whose tags satisfy a predicate.

        Members of kept relations are not filtered; a multipolygon's outer
        ways usually carry no tags of their own.

        Args:
            predicate: Called with each element's tags.

        Returns:
            A new OsmData sharing the kept element objects.
        """
        return OsmData(
            nodes={k: v for k, v in self.nodes.items() if predicate(v.tags)},
            ways={k: v for k, v in self.ways.items() if predicate(v.tags)},
            relations={k: v for k, v in self.relations.items() if predicate(v.tags)},
        )

    def all_ways(self) -> Iterator[Way]:
        """Iterate direct ways followed by the ways nested within relations."""
        from airportgen.osm.flatten import flatten_relations

        yield from self.ways.values()
        yield from flatten_relations(self.relations.values())


def aeroway_filter(*values: str) -> TagPredicate:
    """Build a predicate matching elements whose ``aeroway`` tag is one of values.

    Args:
        *values: Accepted ``aeroway`` values (e.g. "taxiway").

    Returns:
        Tag predicate for OsmData.filter().
    """
    accepted = frozenset(values)

    def predicate(tags: dict[str, str]) -> bool:
        return tags.get("aeroway") in accepted

    return predicate
