"""Per-category overlay generation.

Each generator filters the downloaded data down to one kind of ``aeroway``
feature and appends it to the airport's TFL/GEO/TXI files. Generators for
categories hidden in the settings do nothing.

Typical usage:
    from airportgen.layout.generators import generate_all

    generated = generate_all("EBBR", Path(tmp) / "EBBR", data, settings)
"""

import logging
from collections.abc import Callable
from pathlib import Path
from statistics import fmean

from airportgen.layout.formats import open_overlay, to_geo, to_tfl, to_txi
from airportgen.layout.geometry import inflate_way
from airportgen.layout.labels import centerline_label, place_labels
from airportgen.osm.models import OsmData, aeroway_filter
from airportgen.settings import GeneratorSettings

logger = logging.getLogger(__name__)


def generate_boundary(prefix: Path, data: OsmData, settings: GeneratorSettings) -> bool:
    """Fill the aerodrome boundaries."""
    if not settings.visibility.boundary:
        return False

    colour = settings.colours.boundary
    with open_overlay(prefix.with_suffix(".tfl")) as tfl:
        for way in data.filter(aeroway_filter("aerodrome")).all_ways():
            tfl.write(to_tfl(way, colour.fill, colour.stroke))
    return True


def generate_aprons(prefix: Path, data: OsmData, settings: GeneratorSettings) -> bool:
    """Fill the aprons."""
    if not settings.visibility.apron:
        return False

    colour = settings.colours.apron
    with open_overlay(prefix.with_suffix(".tfl")) as tfl:
        for way in data.filter(aeroway_filter("apron")).all_ways():
            tfl.write(to_tfl(way, colour.fill, colour.stroke, "APRON"))
    return True


def generate_buildings(
    airport: str, prefix: Path, data: OsmData, settings: GeneratorSettings
) -> bool:
    """Fill terminals, hangars and towers, labelling the named ones at their centre."""
    if not settings.visibility.building:
        return False

    colour = settings.colours.building
    buildings = list(data.filter(aeroway_filter("terminal", "hangar", "tower")).all_ways())

    with open_overlay(prefix.with_suffix(".tfl")) as tfl:
        for way in buildings:
            tfl.write(to_tfl(way, colour.fill, colour.stroke, "BUILDING"))

    with open_overlay(prefix.with_suffix(".txi")) as txi:
        for way in buildings:
            label = centerline_label(way)
            if label is None or not way.nodes:
                continue
            latitude = fmean(n.latitude for n in way.nodes)
            longitude = fmean(n.longitude for n in way.nodes)
            txi.write(to_txi(label, airport, latitude, longitude))
    return True


def generate_taxilanes(prefix: Path, data: OsmData, settings: GeneratorSettings) -> bool:
    """Draw taxilane centrelines.

    Relations are not unpacked: a taxilane relation would mean someone
    outlined the taxilane instead of drawing its centreline.
    """
    if not settings.visibility.taxilane:
        return False

    colour = settings.colours.taxilane
    with open_overlay(prefix.with_suffix(".geo")) as geo:
        for way in data.filter(aeroway_filter("taxilane")).ways.values():
            geo.write(to_geo(way, colour.stroke))
    return True


def generate_taxiways(
    airport: str, prefix: Path, data: OsmData, settings: GeneratorSettings
) -> bool:
    """Draw taxiway centrelines, their inflated outlines and their labels."""
    if not settings.visibility.taxiway:
        return False

    colour = settings.colours.taxiway
    taxiways = list(data.filter(aeroway_filter("taxiway")).all_ways())

    with open_overlay(prefix.with_suffix(".geo")) as geo:
        for way in taxiways:
            geo.write(to_geo(way, colour.stroke))

    with open_overlay(prefix.with_suffix(".tfl")) as tfl:
        for way in taxiways:
            outline = inflate_way(way, settings.inflation.taxiway)
            tfl.write(to_tfl(outline, colour.fill, colour.stroke, "TAXIWAY"))

    placements = place_labels(taxiways)
    with open_overlay(prefix.with_suffix(".txi")) as txi:
        for placement in placements:
            txi.write(to_txi(placement.label, airport, placement.latitude, placement.longitude))

    logger.debug("Placed %d taxiway labels for %s", len(placements), airport)
    return True


def generate_helipads(prefix: Path, data: OsmData, settings: GeneratorSettings) -> bool:
    """Fill the helipads (shown with the runway filter)."""
    if not settings.visibility.helipad:
        return False

    colour = settings.colours.helipad
    with open_overlay(prefix.with_suffix(".tfl")) as tfl:
        for way in data.filter(aeroway_filter("helipad")).all_ways():
            tfl.write(to_tfl(way, colour.fill, colour.stroke, "RUNWAY"))
    return True


def generate_runways(prefix: Path, data: OsmData, settings: GeneratorSettings) -> bool:
    """Fill the runways by inflating their centrelines."""
    if not settings.visibility.runway:
        return False

    colour = settings.colours.runway
    with open_overlay(prefix.with_suffix(".tfl")) as tfl:
        for way in data.filter(aeroway_filter("runway")).all_ways():
            outline = inflate_way(way, settings.inflation.runway)
            tfl.write(to_tfl(outline, colour.fill, colour.stroke, "RUNWAY"))
    return True


def generate_all(
    airport: str, prefix: Path, data: OsmData, settings: GeneratorSettings
) -> list[str]:
    """Run every category generator in display order.

    Args:
        airport: ICAO code written into label files.
        prefix: Directory and base name of the output files; the extension is replaced.
        data: Downloaded airport data.
        settings: Colours, visibility and inflation.

    Returns:
        Names of the categories that were generated.
    """
    steps: list[tuple[str, Callable[[], bool]]] = [
        ("boundary", lambda: generate_boundary(prefix, data, settings)),
        ("apron", lambda: generate_aprons(prefix, data, settings)),
        ("building", lambda: generate_buildings(airport, prefix, data, settings)),
        ("taxilane", lambda: generate_taxilanes(prefix, data, settings)),
        ("taxiway", lambda: generate_taxiways(airport, prefix, data, settings)),
        ("helipad", lambda: generate_helipads(prefix, data, settings)),
        ("runway", lambda: generate_runways(prefix, data, settings)),
    ]

    generated = []
    for name, step in steps:
        if step():
            generated.append(name)
            logger.debug("Generated %s for %s", name, airport)
    return generated
