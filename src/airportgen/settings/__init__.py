"""Persistent generator settings."""

from airportgen.settings.generator_settings import (
    CATEGORIES,
    Colour,
    ColourScheme,
    GeneratorSettings,
    Inflation,
    Visibility,
)

__all__ = [
    "CATEGORIES",
    "Colour",
    "ColourScheme",
    "GeneratorSettings",
    "Inflation",
    "Visibility",
]
