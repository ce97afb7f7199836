"""Overlay layout: label placement, centreline inflation, text formats and generators.

Typical usage:
    from airportgen.layout import place_labels

    placements = place_labels(taxiways)
"""

from airportgen.layout.generators import generate_all
from airportgen.layout.geometry import inflate_way
from airportgen.layout.labels import (
    SPACING_LONG,
    SPACING_SHORT,
    LabelPlacement,
    centerline_label,
    label_spacing,
    place_labels,
)

__all__ = [
    "LabelPlacement",
    "SPACING_LONG",
    "SPACING_SHORT",
    "centerline_label",
    "generate_all",
    "inflate_way",
    "label_spacing",
    "place_labels",
]
