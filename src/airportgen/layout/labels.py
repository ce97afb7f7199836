"""Centreline label placement.

Places text labels roughly evenly along taxiway (or taxilane, runway...)
centrelines. Distances are planar, in degrees of longitude/latitude, which is
good enough for placing text on an ATC scope.

Every labelled way is measured on its own; a label shared by several ways is
never stitched into one path. A label that fits on none of its ways still
gets one placement at the middle node of its best way.

Typical usage:
    from airportgen.layout.labels import place_labels

    for placement in place_labels(taxiways):
        print(placement.label, placement.latitude, placement.longitude)
"""

import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass

from airportgen.osm.models import Way

logger = logging.getLogger(__name__)

# Label spacing in degrees
SPACING_SHORT = 0.0025
SPACING_LONG = 0.005

# Tolerance for comparing accumulated distances
_EPSILON = 1e-12


@dataclass(frozen=True)
class LabelPlacement:
    """A label anchored at a coordinate.

    Attributes:
        label: Text to display.
        latitude: Anchor latitude.
        longitude: Anchor longitude.
    """

    label: str
    latitude: float
    longitude: float


def centerline_label(way: Way) -> str | None:
    """Derive the label for a way: its ``ref``, else its ``name``, else None."""
    label = way.get("ref")
    if label is None:
        label = way.get("name")
    return label


def label_spacing(label: str) -> float:
    """Pick the label spacing.

    Designators containing a digit (e.g. "A1") are usually short stubs, so
    they are spaced more tightly than plain letters.
    """
    if any(ch.isdecimal() for ch in label):
        return SPACING_SHORT
    return SPACING_LONG


def way_length(way: Way) -> float:
    """Planar length of a way in degrees (0.0 for fewer than 2 nodes)."""
    return sum(
        math.hypot(b.longitude - a.longitude, b.latitude - a.latitude)
        for a, b in zip(way.nodes, way.nodes[1:])
    )


def _spaced_placements(way: Way, label: str, spacing: float) -> list[LabelPlacement]:
    """Walk a single way and drop a label every ``spacing`` degrees.

    Args:
        way: Centreline with at least 2 nodes.
        label: Label text.
        spacing: Distance between labels.

    Returns:
        Placements in walking order (possibly empty).
    """
    total = way_length(way)
    if total < spacing / 2:
        return []

    # Split the leftover length across both ends. An exact multiple of the
    # spacing counts as a full leftover, not an empty one.
    remainder = math.fmod(total, spacing)
    if remainder <= _EPSILON:
        remainder = spacing
    since_last = remainder / 2

    placements: list[LabelPlacement] = []
    for start, end in zip(way.nodes, way.nodes[1:]):
        dx = end.longitude - start.longitude
        dy = end.latitude - start.latitude
        segment = math.hypot(dx, dy)
        if segment == 0.0:
            continue

        offset = 0.0
        while True:
            needed = spacing - since_last
            if segment - offset < needed - _EPSILON:
                since_last += segment - offset
                break

            offset += needed
            fraction = min(offset / segment, 1.0)
            placements.append(
                LabelPlacement(
                    label=label,
                    latitude=start.latitude + dy * fraction,
                    longitude=start.longitude + dx * fraction,
                )
            )
            since_last = 0.0

    return placements


def place_labels(ways: Iterable[Way]) -> list[LabelPlacement]:
    """Place labels along a group of centrelines.

    Ways without a ``ref`` or ``name`` are ignored entirely. Each remaining
    way gets evenly spaced labels if it is long enough; any label that ends up
    with no placement at all is put once on the median node of the way with
    the most nodes carrying that label.

    Args:
        ways: Candidate centrelines.

    Returns:
        Spaced placements grouped by way, followed by fallback placements.
    """
    centerlines: list[tuple[str, Way]] = []
    for way in ways:
        label = centerline_label(way)
        if label is not None:
            centerlines.append((label, way))

    # Insertion-ordered so the fallback pass is deterministic
    needed: dict[str, None] = {}
    placed: set[str] = set()
    placements: list[LabelPlacement] = []

    for label, way in centerlines:
        needed[label] = None
        if len(way.nodes) < 2:
            continue

        spaced = _spaced_placements(way, label, label_spacing(label))
        if spaced:
            placed.add(label)
            placements.extend(spaced)

    for label in needed:
        if label in placed:
            continue

        candidates = [way for way_label, way in centerlines if way_label == label]
        if not candidates:
            continue
        best = max(candidates, key=lambda w: len(w.nodes))
        if not best.nodes:
            continue

        median = best.nodes[len(best.nodes) // 2]
        placements.append(LabelPlacement(label, median.latitude, median.longitude))
        logger.debug("Label %s too short for spacing, placed at median of way %d", label, best.id)

    return placements
