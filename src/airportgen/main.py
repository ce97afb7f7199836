"""airportgen - OpenStreetMap airport layout generator.

Downloads an airport's aeroway data from the Overpass API and packs overlay
files (TFL polygons, GEO lines, TXI labels) into ``<ICAO>.zip``.

Typical usage:
    airportgen                       # interactive prompt
    airportgen --icao EBBR EBLG      # batch
    python -m airportgen.main --icao EBBR --output-dir out
"""

import argparse
import shutil
import sys
import tempfile
from collections.abc import Callable
from pathlib import Path

from airportgen.core.logging_system import get_logger, initialize_logging
from airportgen.layout.generators import generate_all
from airportgen.osm.overpass import DEFAULT_OVERPASS_URL, OverpassClient, OverpassError
from airportgen.settings import GeneratorSettings
from airportgen.settings.generator_settings import DEFAULT_SETTINGS_PATH
from airportgen.version import get_version

logger = get_logger(__name__)

TERMS_OF_USE = """OSM LAYOUT GENERATOR - TERMS OF USE:
1. This tool is for IVAO use only.
2. If you notice inaccurate data, fix it on OSM's website.
3. Follow OSM contributor guidelines for all your edits. Do not modify data to enhance the appearance of generated layouts.
4. You are solely responsible for any edits that you make.
"""

AGREEMENT = "I AGREE"
EXIT_WORDS = ("EXIT", "QUIT")
OSM_EDIT_URL = "https://www.openstreetmap.org/edit"


def ensure_terms_accepted(
    settings: GeneratorSettings,
    accept: bool = False,
    input_fn: Callable[[str], str] = input,
) -> bool:
    """Make sure the terms of use have been accepted, asking until they are.

    Args:
        settings: Settings to read and persist acceptance in.
        accept: Accept without prompting (--accept-terms).
        input_fn: Prompt function.

    Returns:
        True once accepted, False if input ended first.
    """
    if settings.terms_accepted:
        return True

    if accept:
        settings.terms_accepted = True
        settings.save()
        return True

    while not settings.terms_accepted:
        print(TERMS_OF_USE)
        try:
            answer = input_fn(
                f"To confirm your acceptance of the above, type \"{AGREEMENT}\" "
                "in all capital letters: "
            )
        except EOFError:
            return False

        if answer.strip() == AGREEMENT:
            settings.terms_accepted = True
            settings.save()

    return True


def process_airport(
    icao: str,
    client: OverpassClient,
    settings: GeneratorSettings,
    output_dir: Path,
) -> Path | None:
    """Download, generate and zip one airport.

    Args:
        icao: Airport ICAO code.
        client: Overpass client.
        settings: Generator settings.
        output_dir: Directory receiving ``<ICAO>.zip``.

    Returns:
        Path of the written archive, or None if the airport was skipped.

    Raises:
        OverpassError: If the download fails.
    """
    icao = icao.strip().upper()
    print("Downloading data... ", end="", flush=True)
    data = client.fetch_airport(icao)
    print("Done!")

    if data.is_empty:
        print("Not a known airport! You might need to add it in OSM.")
        print(OSM_EDIT_URL)
        print("Don't forget! Follow OSM rules when editing OSM data.")
        return None

    if data.relations:
        print(f"{icao} contains OSM relations. Generated data may be incomplete!")

    print("Generating... ", end="", flush=True)
    output_dir.mkdir(parents=True, exist_ok=True)
    archive = output_dir / f"{icao}.zip"

    with tempfile.TemporaryDirectory(prefix="airportgen-") as tmp:
        generated = generate_all(icao, Path(tmp) / icao, data, settings)
        logger.info("Generated %s for %s", ", ".join(generated) or "nothing", icao)

        if archive.exists():
            archive.unlink()
        shutil.make_archive(str(archive.with_suffix("")), "zip", root_dir=tmp)

    print("Done!")
    print(f"File saved to {archive}")
    return archive


def run_interactive(
    client: OverpassClient,
    settings: GeneratorSettings,
    output_dir: Path,
    input_fn: Callable[[str], str] = input,
) -> int:
    """Prompt for ICAO codes until EXIT or QUIT.

    Returns:
        Exit code: 0 on EXIT/QUIT, 2 if input ended.
    """
    while True:
        try:
            icao = input_fn("Enter an airport ICAO code: ").strip().upper()
        except EOFError:
            logger.error("Error in reading input.")
            return 2

        if icao in EXIT_WORDS:
            print("Goodbye!")
            return 0
        if not icao:
            continue

        try:
            process_airport(icao, client, settings, output_dir)
        except OverpassError as e:
            print("Failed!")
            logger.error("%s", e)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(description="OpenStreetMap airport layout generator")

    parser.add_argument(
        "--icao",
        nargs="+",
        help="Airport ICAO codes to generate (e.g., EBBR EBLG); prompts when omitted",
    )

    parser.add_argument(
        "--config",
        type=Path,
        default=DEFAULT_SETTINGS_PATH,
        help="Settings file (default: ./config.json)",
    )

    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path.cwd(),
        help="Directory for the generated archives (default: current directory)",
    )

    parser.add_argument(
        "--log-config",
        type=Path,
        default=Path("config/logging.yaml"),
        help="Logging configuration YAML",
    )

    parser.add_argument(
        "--overpass-url",
        default=DEFAULT_OVERPASS_URL,
        help="Overpass API endpoint",
    )

    parser.add_argument(
        "--accept-terms",
        action="store_true",
        help="Accept the terms of use without prompting",
    )

    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    parser.add_argument("--version", action="version", version=f"%(prog)s {get_version()}")

    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Returns:
        Exit code (0 for success).
    """
    args = parse_args(argv)
    initialize_logging(args.log_config, level="DEBUG" if args.verbose else None)

    try:
        settings = GeneratorSettings()
        if not settings.load(args.config) and args.config.exists():
            print("Invalid configuration file.", file=sys.stderr)
            return 1

        if not ensure_terms_accepted(settings, accept=args.accept_terms):
            return 2

        client = OverpassClient(url=args.overpass_url)

        if not args.icao:
            return run_interactive(client, settings, args.output_dir)

        exit_code = 0
        for icao in args.icao:
            try:
                process_airport(icao, client, settings, args.output_dir)
            except OverpassError as e:
                print("Failed!")
                logger.error("%s", e)
                exit_code = 1
        return exit_code

    except Exception as e:  # pylint: disable=broad-exception-caught
        logger.exception("Fatal error: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
