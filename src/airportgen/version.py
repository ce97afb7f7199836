"""Version information for airportgen."""

from importlib.metadata import PackageNotFoundError, version

__version__ = "0.1.0"  # Fallback version


def get_version() -> str:
    """Get the installed version string, falling back to __version__."""
    try:
        return version("airportgen")
    except PackageNotFoundError:
        return __version__
