"""Overpass API client.

Downloads every ``aeroway`` element inside an airport's boundary and turns
the JSON response into an OsmData graph with member references resolved.

Typical usage:
    from airportgen.osm.overpass import OverpassClient

    client = OverpassClient()
    data = client.fetch_airport("EBBR")
    print(f"{len(data.ways)} ways, {len(data.relations)} relations")
"""

import logging
from collections.abc import Iterable
from typing import Any

import requests

from airportgen.osm.models import Member, Node, OsmData, Relation, Way

logger = logging.getLogger(__name__)

DEFAULT_OVERPASS_URL = "https://overpass-api.de/api/interpreter"

# Server-side query timeout; the HTTP timeout allows one more minute on top
DEFAULT_QUERY_TIMEOUT_S = 300
DEFAULT_HTTP_TIMEOUT_S = 360


class OverpassError(Exception):
    """Raised when airport data cannot be downloaded or decoded."""


def build_query(icao: str, timeout_s: int = DEFAULT_QUERY_TIMEOUT_S) -> str:
    """Build the Overpass QL query for an airport.

    Selects the area of the way tagged ``icao=<ICAO>``, then every node, way
    and relation with an ``aeroway`` tag inside it, recursed down to the
    nodes of the ways.

    Args:
        icao: Airport ICAO code.
        timeout_s: Server-side timeout in seconds.

    Returns:
        Query text.
    """
    return (
        f"[out:json][timeout:{timeout_s}];\n"
        f'(way["icao"="{icao}"];)->.searchArea;\n'
        "(\n"
        '\tnwr["aeroway"](area.searchArea);\n'
        "\t>;\n"
        ");\n"
        "out;"
    )


def parse_elements(elements: Iterable[dict[str, Any]]) -> OsmData:
    """Build an OsmData graph from Overpass JSON elements.

    Nodes are created first, then ways, then relations in two passes so that
    relations can refer to each other in any order (including cycles).
    References to elements not present in the response are skipped.

    Args:
        elements: The ``elements`` array of an Overpass JSON response.

    Returns:
        Resolved data.
    """
    data = OsmData()
    raw_ways: list[dict[str, Any]] = []
    raw_relations: list[dict[str, Any]] = []

    for element in elements:
        kind = element.get("type")
        if kind == "node":
            if "lat" not in element or "lon" not in element:
                logger.debug("Skipping node %s without coordinates", element.get("id"))
                continue
            node = Node(
                id=int(element["id"]),
                latitude=float(element["lat"]),
                longitude=float(element["lon"]),
                tags=dict(element.get("tags", {})),
            )
            data.nodes[node.id] = node
        elif kind == "way":
            raw_ways.append(element)
        elif kind == "relation":
            raw_relations.append(element)

    missing = 0
    for element in raw_ways:
        nodes = []
        for ref in element.get("nodes", []):
            node = data.nodes.get(ref)
            if node is None:
                missing += 1
                continue
            nodes.append(node)
        way = Way(id=int(element["id"]), nodes=nodes, tags=dict(element.get("tags", {})))
        data.ways[way.id] = way

    for element in raw_relations:
        relation = Relation(id=int(element["id"]), tags=dict(element.get("tags", {})))
        data.relations[relation.id] = relation

    lookup: dict[str, dict[int, Any]] = {
        "node": data.nodes,
        "way": data.ways,
        "relation": data.relations,
    }
    for element in raw_relations:
        relation = data.relations[int(element["id"])]
        for ref in element.get("members", []):
            member: Member | None = lookup.get(ref.get("type"), {}).get(ref.get("ref"))
            if member is None:
                missing += 1
                continue
            relation.members.append(member)

    if missing:
        logger.debug("Skipped %d unresolved references", missing)

    return data


class OverpassClient:
    """Fetches airport data from an Overpass API server.

    Examples:
        >>> client = OverpassClient(http_timeout_s=60)
        >>> data = client.fetch_airport("ebbr")
    """

    def __init__(
        self,
        url: str = DEFAULT_OVERPASS_URL,
        query_timeout_s: int = DEFAULT_QUERY_TIMEOUT_S,
        http_timeout_s: float = DEFAULT_HTTP_TIMEOUT_S,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            url: Overpass interpreter endpoint.
            query_timeout_s: Timeout passed to the Overpass server.
            http_timeout_s: Timeout of the HTTP request itself.
            session: Optional requests session (for connection reuse or tests).
        """
        self.url = url
        self.query_timeout_s = query_timeout_s
        self.http_timeout_s = http_timeout_s
        self._session = session or requests.Session()

    def fetch_airport(self, icao: str) -> OsmData:
        """Download all aeroway data of an airport.

        Args:
            icao: Airport ICAO code (case-insensitive).

        Returns:
            Resolved data; empty if the airport is unknown to OSM.

        Raises:
            OverpassError: If the request fails or the response is not valid JSON.
        """
        icao = icao.upper()
        query = build_query(icao, self.query_timeout_s)
        logger.info("Querying %s for %s", self.url, icao)

        try:
            response = self._session.post(
                self.url, data={"data": query}, timeout=self.http_timeout_s
            )
            response.raise_for_status()
            payload = response.json()
        except requests.Timeout as e:
            raise OverpassError(f"Overpass request for {icao} timed out") from e
        except requests.RequestException as e:
            raise OverpassError(f"Overpass request for {icao} failed: {e}") from e
        except ValueError as e:
            raise OverpassError(f"Invalid Overpass response for {icao}: {e}") from e

        elements = payload.get("elements") if isinstance(payload, dict) else None
        if not isinstance(elements, list):
            raise OverpassError(f"Overpass response for {icao} has no elements")

        data = parse_elements(elements)
        logger.info(
            "Loaded %s: %d nodes, %d ways, %d relations",
            icao,
            len(data.nodes),
            len(data.ways),
            len(data.relations),
        )
        return data
