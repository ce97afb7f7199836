"""Generator settings management.

Colours, category visibility, inflation radii and terms-of-use acceptance,
stored as JSON (``config.json`` in the working directory by default).

Typical usage:
    from airportgen.settings import GeneratorSettings

    settings = GeneratorSettings()
    settings.load()
    if settings.visibility.taxiway:
        ...
    settings.terms_accepted = True
    settings.save()
"""

import json
import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_PATH = Path("config.json")

# Categories in generation order
CATEGORIES = ("boundary", "apron", "building", "taxilane", "taxiway", "helipad", "runway")

DEFAULT_TAXIWAY_INFLATION = 0.0001
DEFAULT_RUNWAY_INFLATION = 0.0002


@dataclass
class Colour:
    """Fill and stroke colour of one category.

    Attributes:
        fill: Fill colour, written verbatim into overlay files.
        stroke: Stroke (outline/line) colour.
    """

    fill: str
    stroke: str

    @classmethod
    def from_value(cls, value: Any, default: str) -> "Colour":
        """Build from a config value: a string, a {"fill", "stroke"} dict or None."""
        if isinstance(value, str):
            return cls(value, value)
        if isinstance(value, dict):
            return cls(str(value.get("fill", default)), str(value.get("stroke", default)))
        return cls(default, default)


def _default_colour(category: str) -> Colour:
    return Colour(category.upper(), category.upper())


@dataclass
class ColourScheme:
    """Colours per category. Defaults to the upper-cased category name."""

    boundary: Colour = field(default_factory=lambda: _default_colour("boundary"))
    apron: Colour = field(default_factory=lambda: _default_colour("apron"))
    building: Colour = field(default_factory=lambda: _default_colour("building"))
    taxilane: Colour = field(default_factory=lambda: _default_colour("taxilane"))
    taxiway: Colour = field(default_factory=lambda: _default_colour("taxiway"))
    helipad: Colour = field(default_factory=lambda: _default_colour("helipad"))
    runway: Colour = field(default_factory=lambda: _default_colour("runway"))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ColourScheme":
        """Create from a JSON dictionary, defaulting missing categories."""
        return cls(**{c: Colour.from_value(data.get(c), c.upper()) for c in CATEGORIES})

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            c: {"fill": getattr(self, c).fill, "stroke": getattr(self, c).stroke}
            for c in CATEGORIES
        }


@dataclass
class Visibility:
    """Which categories are generated. The aerodrome boundary is off by default."""

    boundary: bool = False
    apron: bool = True
    building: bool = True
    taxilane: bool = True
    taxiway: bool = True
    helipad: bool = True
    runway: bool = True

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Visibility":
        """Create from a JSON dictionary, defaulting missing categories."""
        defaults = cls()
        return cls(**{c: bool(data.get(c, getattr(defaults, c))) for c in CATEGORIES})

    def to_dict(self) -> dict[str, bool]:
        """Convert to dictionary for serialization."""
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass
class Inflation:
    """Half-widths (degrees) used to inflate centrelines into polygons."""

    taxiway: float = DEFAULT_TAXIWAY_INFLATION
    runway: float = DEFAULT_RUNWAY_INFLATION

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Inflation":
        """Create from a JSON dictionary."""
        return cls(
            taxiway=float(data.get("taxiway", DEFAULT_TAXIWAY_INFLATION)),
            runway=float(data.get("runway", DEFAULT_RUNWAY_INFLATION)),
        )

    def to_dict(self) -> dict[str, float]:
        """Convert to dictionary for serialization."""
        return {"taxiway": self.taxiway, "runway": self.runway}


@dataclass
class GeneratorSettings:
    """Generator settings with persistence.

    Attributes:
        terms_accepted: Whether the user accepted the terms of use.
        colours: Colour scheme.
        visibility: Generated categories.
        inflation: Centreline inflation radii.
    """

    terms_accepted: bool = False
    colours: ColourScheme = field(default_factory=ColourScheme)
    visibility: Visibility = field(default_factory=Visibility)
    inflation: Inflation = field(default_factory=Inflation)
    _settings_path: Path = field(default=DEFAULT_SETTINGS_PATH, repr=False)

    def load(self, path: Path | str | None = None) -> bool:
        """Load settings from file.

        Args:
            path: Optional path to settings file. Defaults to ./config.json.

        Returns:
            True if loaded successfully, False if missing or invalid.
        """
        if path is not None:
            self._settings_path = Path(path)

        if not self._settings_path.exists():
            logger.info("No settings file found, using defaults")
            return False

        try:
            with open(self._settings_path, encoding="utf-8") as f:
                data = json.load(f)

            if not isinstance(data, dict):
                raise ValueError("settings root must be an object")

            self.apply_dict(data)
            logger.info("Loaded settings from %s", self._settings_path)
            return True

        except (OSError, ValueError, TypeError, AttributeError) as e:
            logger.error("Failed to load settings from %s: %s", self._settings_path, e)
            return False

    def apply_dict(self, data: dict[str, Any]) -> None:
        """Replace the current values with those of a settings dictionary."""
        self.terms_accepted = bool(data.get("termsAccepted", False))
        self.colours = ColourScheme.from_dict(data.get("colours") or {})
        self.visibility = Visibility.from_dict(data.get("visibility") or {})
        self.inflation = Inflation.from_dict(data.get("inflation") or {})

    def save(self, path: Path | str | None = None) -> bool:
        """Save settings to file.

        Args:
            path: Optional path to settings file. Defaults to the load path.

        Returns:
            True if saved successfully, False otherwise.
        """
        if path is not None:
            self._settings_path = Path(path)

        try:
            self._settings_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self._settings_path, "w", encoding="utf-8") as f:
                json.dump(self.to_dict(), f, indent=2)

            logger.info("Saved settings to %s", self._settings_path)
            return True

        except OSError as e:
            logger.error("Failed to save settings: %s", e)
            return False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "termsAccepted": self.terms_accepted,
            "colours": self.colours.to_dict(),
            "visibility": self.visibility.to_dict(),
            "inflation": self.inflation.to_dict(),
        }
