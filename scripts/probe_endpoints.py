#!/usr/bin/env python3
"""Dump what the geocoding and routing endpoints return.

Runs one autocomplete search per location, then plans between the first
candidate of each, printing both the parsed models **and** the raw JSON so
fields the models do not read yet are easy to spot.

Usage
-----
Set the subscription key (or put it in ``.apikey``) and run::

    export DIGITRANSIT_SUBSCRIPTION_KEY="..."
    python scripts/probe_endpoints.py "Kamppi" "Otaniemi"

Options::

    --json               Output as machine-readable JSON
    --output FILE        Write JSON output to FILE instead of stdout
    --skip-plan          Only run the two searches
    --verbose, -v        Enable debug logging
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

import aiohttp  # noqa: E402

from routewatch import RouteWatchConfig, RouteWatchError  # noqa: E402
from routewatch._api.geocoding import parse_candidates  # noqa: E402
from routewatch._api.planning import build_plan_request, parse_itineraries  # noqa: E402
from routewatch._transport import HttpTransport  # noqa: E402
from routewatch.models.location import Candidate  # noqa: E402
from routewatch.ui.formatting import format_title, leg_label  # noqa: E402


def _section(title: str) -> str:
    line = "=" * 60
    return f"\n{line}\n  {title}\n{line}"


def _print_raw(name: str, raw: Any, out: list[str]) -> None:
    out.append(f"\n  -- {name} (raw JSON) --")
    out.append(json.dumps(raw, indent=2, default=str, ensure_ascii=False))


async def probe_search(
    transport: HttpTransport,
    config: RouteWatchConfig,
    text: str,
    out: list[str],
) -> tuple[list[Candidate], dict[str, Any]]:
    out.append(_section(f"SEARCH  text={text!r}"))
    raw = await transport.get_json(config.geocoding_url, {"text": text})
    try:
        candidates = parse_candidates(raw, endpoint=config.geocoding_url)
    except RouteWatchError as exc:
        out.append(f"  !! parse failed: {exc}")
        _print_raw("search", raw, out)
        return [], {"raw": raw, "error": str(exc)}
    for candidate in candidates:
        coords = candidate.coordinates
        out.append(f"  - {candidate.label}  ({coords.lat:.5f}, {coords.lon:.5f})  layer={candidate.layer}")
    _print_raw("search", raw, out)
    return candidates, {"parsed": [c.model_dump() for c in candidates], "raw": raw}


async def probe_plan(
    transport: HttpTransport,
    config: RouteWatchConfig,
    origin: Candidate,
    destination: Candidate,
    out: list[str],
) -> dict[str, Any]:
    out.append(_section(f"PLAN  {origin.label} -> {destination.label}"))
    request = build_plan_request(origin, destination, num_itineraries=config.num_itineraries)
    raw = await transport.post_json(config.routing_url, request)
    try:
        itineraries = parse_itineraries(raw, endpoint=config.routing_url)
    except RouteWatchError as exc:
        out.append(f"  !! parse failed: {exc}")
        _print_raw("plan", raw, out)
        return {"raw": raw, "error": str(exc)}
    for itinerary in itineraries:
        out.append(f"  {format_title(itinerary)}")
        for leg in itinerary.legs:
            out.append(f"      {leg_label(leg)}  {leg.from_stop_name} -> {leg.to_stop_name}")
    _print_raw("plan", raw, out)
    return {"parsed": [i.model_dump(mode="json") for i in itineraries], "raw": raw}


async def main() -> int:
    parser = argparse.ArgumentParser(
        description="Dump raw and parsed geocoding/plan responses for debugging.",
    )
    parser.add_argument("origin", help="Origin search text")
    parser.add_argument("destination", help="Destination search text")
    parser.add_argument("--json", action="store_true", dest="json_mode", help="Output machine-readable JSON")
    parser.add_argument("--output", "-o", help="Write JSON output to FILE instead of stdout")
    parser.add_argument("--skip-plan", action="store_true", help="Only run the two searches")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    config = RouteWatchConfig.from_env()
    result: dict[str, Any] = {"timestamp": datetime.now(UTC).isoformat()}
    out: list[str] = [_section("routewatch probe_endpoints"), f"  time      : {result['timestamp']}"]

    async with aiohttp.ClientSession() as session:
        transport = HttpTransport(config, session)
        try:
            origins, result["origin"] = await probe_search(transport, config, args.origin, out)
            destinations, result["destination"] = await probe_search(transport, config, args.destination, out)
            if not args.skip_plan:
                if origins and destinations:
                    result["plan"] = await probe_plan(transport, config, origins[0], destinations[0], out)
                else:
                    out.append("\n  !! skipping plan: a search returned no candidates")
        except RouteWatchError as exc:
            out.append(f"\n  !! request failed: {exc}")
            result["error"] = str(exc)

    if args.json_mode or args.output:
        payload = json.dumps(result, indent=2, default=str, ensure_ascii=False)
        if args.output:
            Path(args.output).write_text(payload, encoding="utf-8")
            print(f"JSON written to {args.output}", file=sys.stderr)
        else:
            print(payload)
    if not args.json_mode:
        print("\n".join(out))
    return 1 if "error" in result else 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
