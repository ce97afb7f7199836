"""Centreline inflation.

Turns a centreline (taxiway, runway) into a filled outline by offsetting it
with round joins and flat ends.
"""

import logging
from dataclasses import replace

from shapely.geometry import LineString, Polygon

from airportgen.osm.models import Node, Way

logger = logging.getLogger(__name__)

# Decimal places kept on inflated coordinates
INFLATE_PRECISION = 6


def inflate_way(way: Way, radius: float) -> Way:
    """Inflate a way into a polygon outline.

    Args:
        way: Centreline to inflate around.
        radius: Offset distance in degrees.

    Returns:
        A copy of the way whose nodes trace the outline. Ways with fewer than
        2 nodes (or with no extent) come back with their nodes unchanged.
    """
    if len(way.nodes) < 2:
        return replace(way, nodes=list(way.nodes))

    line = LineString([(n.longitude, n.latitude) for n in way.nodes])
    outline = line.buffer(radius, cap_style="flat", join_style="round")

    if outline.is_empty or not isinstance(outline, Polygon):
        logger.debug("Way %d has no extent, not inflating", way.id)
        return replace(way, nodes=list(way.nodes))

    # Drop the closing vertex; overlay polygons close implicitly
    ring = list(outline.exterior.coords)[:-1]
    nodes = [
        Node(0, round(y, INFLATE_PRECISION), round(x, INFLATE_PRECISION))
        for x, y in ring
    ]
    return replace(way, nodes=nodes)
