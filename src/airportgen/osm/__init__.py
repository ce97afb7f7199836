"""OpenStreetMap data: element model, relation flattening and Overpass access.

Typical usage:
    from airportgen.osm import OverpassClient, aeroway_filter

    data = OverpassClient().fetch_airport("EBBR")
    aprons = list(data.filter(aeroway_filter("apron")).all_ways())
"""

from airportgen.osm.flatten import flatten_relations
from airportgen.osm.models import Member, Node, OsmData, Relation, Way, aeroway_filter
from airportgen.osm.overpass import OverpassClient, OverpassError, build_query, parse_elements

__all__ = [
    "Member",
    "Node",
    "OsmData",
    "OverpassClient",
    "OverpassError",
    "Relation",
    "Way",
    "aeroway_filter",
    "build_query",
    "flatten_relations",
    "parse_elements",
]
