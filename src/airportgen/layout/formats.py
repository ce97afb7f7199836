"""Overlay text formats.

Three line-oriented formats are produced:
- TFL: filled polygons (``STATIC;fill;1;stroke;0;FILTER`` then one
  coordinate per line).
- GEO: line segments (``lat;lon;lat;lon;colour;``).
- TXI: text labels (``label;airport;lat;lon;``).

Typical usage:
    with open_overlay(prefix.with_suffix(".tfl")) as f:
        f.write(to_tfl(way, "APRON", "APRON", "APRON"))
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import date
from pathlib import Path
from typing import TextIO

from airportgen.osm.models import Way

logger = logging.getLogger(__name__)

OSM_ATTRIBUTION = "// Data ⓒ OpenStreetMap Contributors (https://www.openstreetmap.org/copyright)"


def _pad(value: float, int_digits: int) -> str:
    sign = "-" if value < 0 else ""
    return f"{sign}{abs(value):0{int_digits + 7}.6f}"


def format_coordinate(latitude: float, longitude: float) -> str:
    """Format a coordinate pair as ``DD.dddddd;DDD.dddddd;``."""
    return f"{_pad(latitude, 2)};{_pad(longitude, 3)};"


def to_tfl(way: Way, fill: str, stroke: str, filter_name: str | None = None) -> str:
    """Render a way as a TFL polygon block.

    Args:
        way: Polygon outline.
        fill: Fill colour, written verbatim.
        stroke: Stroke colour, written verbatim.
        filter_name: Optional display filter (RUNWAY, TAXIWAY, APRON, BUILDING...).

    Returns:
        The whole block, ending with a newline.
    """
    lines = [f"STATIC;{fill};1;{stroke};0;{filter_name or ''}"]
    lines.extend(format_coordinate(n.latitude, n.longitude) for n in way.nodes)
    return "\n".join(lines) + "\n"


def to_geo(way: Way, colour: str) -> str:
    """Render a way as GEO line segments (empty for fewer than 2 nodes)."""
    if len(way.nodes) < 2:
        return ""

    return "".join(
        f"{format_coordinate(a.latitude, a.longitude)}"
        f"{format_coordinate(b.latitude, b.longitude)}{colour};\n"
        for a, b in zip(way.nodes, way.nodes[1:])
    )


def to_txi(label: str, airport: str, latitude: float, longitude: float) -> str:
    """Render a single TXI label line."""
    return f"{label};{airport};{format_coordinate(latitude, longitude)}\n"


@contextmanager
def open_overlay(path: Path) -> Iterator[TextIO]:
    """Open an overlay file for appending.

    New files start with a generation header; existing files get a blank
    spacer line so blocks from different categories stay apart.

    Args:
        path: File to append to.

    Yields:
        Text stream positioned at the end of the file.
    """
    exists = path.exists()
    with open(path, "a", encoding="utf-8", newline="\n") as f:
        if exists:
            f.write("\n")
        else:
            f.write(f"// Automatically generated {date.today():%Y-%m-%d} by airportgen.\n")
            f.write(OSM_ATTRIBUTION + "\n")
            logger.debug("Created overlay file %s", path)
        yield f
