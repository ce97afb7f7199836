"""airportgen - OpenStreetMap airport layout generator for ATC overlays."""

from airportgen.version import __version__

__all__ = ["__version__"]
