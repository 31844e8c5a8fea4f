"""Command line entry point: pick an origin, pick a destination, watch itineraries."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence

from routewatch import __version__
from routewatch.client import RouteWatchClient
from routewatch.config import RouteWatchConfig
from routewatch.exceptions import ConfigError, NoSelectionError, ViewAborted
from routewatch.models.location import Candidate
from routewatch.ui.keys import Keyboard, TerminalKeyboard
from routewatch.ui.surface import RichSurface, Surface
from routewatch.ui.views import ItineraryView, SearchView

_logger = logging.getLogger(__name__)

NO_SELECTION_HINT = "Select a location with Up/Down before pressing Enter"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="routewatch",
        description="Search two locations and keep the public transport itineraries between them up to date.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--api-key-file", help="File holding the Digitransit subscription key")
    parser.add_argument("--poll-interval", type=float, help="Seconds between itinerary refreshes")
    parser.add_argument("--search-cooldown", type=float, help="Minimum seconds between location searches")
    parser.add_argument("--itineraries", type=int, dest="num_itineraries", help="Number of itineraries to request")
    parser.add_argument("--log-file", help="Where to write logs (the terminal is used by the UI)")
    parser.add_argument("--log-level", help="Logging level, e.g. DEBUG or INFO")
    return parser


def configure_logging(config: RouteWatchConfig) -> None:
    logging.basicConfig(
        filename=config.log_file,
        level=config.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


async def pick_location(
    client: RouteWatchClient,
    surface: Surface,
    keyboard: Keyboard,
    config: RouteWatchConfig,
    *,
    title: str,
    name: str,
) -> Candidate:
    """Run a search view, reopening it until a location is selected."""
    query = ""
    hint = ""
    while True:
        view = SearchView(
            client.search_locations,
            surface,
            keyboard,
            config,
            title=title,
            name=name,
            initial_text=query,
            hint=hint,
        )
        try:
            return await view.run()
        except NoSelectionError as exc:
            _logger.info("%s: %s", name, exc)
            query = exc.query
            hint = NO_SELECTION_HINT


async def run_app(config: RouteWatchConfig) -> None:
    async with RouteWatchClient(config) as client:
        with RichSurface() as surface, TerminalKeyboard() as keyboard:
            origin = await pick_location(client, surface, keyboard, config, title="From", name="origin-search")
            destination = await pick_location(
                client, surface, keyboard, config, title="To", name="destination-search"
            )
            _logger.info("Planning %s -> %s", origin.label, destination.label)
            await ItineraryView(client.plan_request, surface, keyboard, config).run(origin, destination)


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    overrides = {key: value for key, value in vars(args).items() if value is not None}
    try:
        config = RouteWatchConfig.from_env(**overrides)
    except ConfigError as exc:
        print(f"routewatch: {exc}", file=sys.stderr)
        return 2

    configure_logging(config)
    if not sys.stdin.isatty():
        print("routewatch: an interactive terminal is required", file=sys.stderr)
        return 2

    try:
        asyncio.run(run_app(config))
    except ViewAborted:
        _logger.info("Aborted by user")
    except KeyboardInterrupt:
        _logger.info("Interrupted")
        return 130
    return 0
