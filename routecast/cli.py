"""routecast CLI: rank routes between two places, or feed back an observed trip time."""

from __future__ import annotations

import argparse
import json
import re
import sys
from typing import Optional

from dotenv import load_dotenv

from routecast.domain.models import Coordinate, RouteSearchResult
from routecast.services.route_service import RouteService, build_route_service

_COORD_RE = re.compile(r"^\s*(-?\d+(?:\.\d+)?)\s*,\s*(-?\d+(?:\.\d+)?)\s*$")


def parse_coordinate(text: str) -> Optional[Coordinate]:
    """``"lat,lon"`` -> Coordinate; anything else is treated as a place name."""
    match = _COORD_RE.match(text)
    if match is None:
        return None
    return Coordinate(lat=float(match.group(1)), lon=float(match.group(2)))


def _resolve(service: RouteService, text: str) -> tuple[Optional[Coordinate], Optional[str]]:
    point = parse_coordinate(text)
    if point is not None:
        return point, None
    return service.geocode(text), text


def format_result(result: RouteSearchResult) -> str:
    if not result.routes:
        return "No routes found."

    lines: list[str] = []
    for ranked in result.routes:
        buckets = "  ".join(
            f"+{offset}m {bucket.formatted_duration}" for offset, bucket in sorted(ranked.predictions.items())
        )
        corridor = f" [{ranked.corridor_name}]" if ranked.corridor_name else ""
        lines.append(f"{ranked.ui_label.value:<5} {ranked.distance_km:>5.1f} km  {buckets}{corridor}")
        lines.append(f"      {ranked.ui_reason} (confidence {ranked.confidence}%)")

    if result.road_conditions:
        lines.append("")
        lines.append("Road conditions:")
        for cond in result.road_conditions:
            lines.append(
                f"  {cond.road_name}: {cond.severity.value}, +{cond.delay_minutes:.1f} min "
                f"({cond.predicted_speed}/{cond.base_speed} km/h)"
            )

    if result.narrative:
        lines.append("")
        lines.append(result.narrative)
    return "\n".join(lines)


def _cmd_route(service: RouteService, args: argparse.Namespace) -> int:
    origin, origin_name = _resolve(service, args.origin)
    destination, dest_name = _resolve(service, args.destination)
    if origin is None or destination is None:
        missing = args.origin if origin is None else args.destination
        print(f"Could not locate {missing!r}", file=sys.stderr)
        return 2

    result = service.get_route(
        origin,
        destination,
        origin_name=origin_name,
        dest_name=dest_name,
        departure_minutes=args.departure,
    )
    if args.json:
        print(json.dumps(result.model_dump(mode="json"), ensure_ascii=False, indent=2))
    else:
        print(format_result(result))
    return 0


def _cmd_train(service: RouteService, args: argparse.Namespace) -> int:
    service.train_model_off_feedback(args.corridor_route, args.predicted, args.actual).result()
    weight = service.learner.store.get(args.corridor_route)
    if weight is not None:
        print(f"{args.corridor_route}: multiplier={weight.multiplier:.3f} dataPoints={weight.data_points}")
    return 0


def _cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run("routecast.api.main:app", host=args.host, port=args.port)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="routecast", description="Traffic-aware route ranking")
    sub = parser.add_subparsers(dest="command", required=True)

    route = sub.add_parser("route", help="rank routes between two places")
    # Southern latitudes start with "-", so coordinates go in the --from=LAT,LON form.
    route.add_argument("--from", dest="origin", required=True, metavar="PLACE", help='place name or "lat,lon"')
    route.add_argument("--to", dest="destination", required=True, metavar="PLACE", help='place name or "lat,lon"')
    route.add_argument("--departure", type=int, default=0, help="departure offset in minutes")
    route.add_argument("--json", action="store_true", help="print the raw result as JSON")

    train = sub.add_parser("train", help="record an observed trip time for a corridor route")
    train.add_argument("corridor_route", help='e.g. "via Cecil Ave"')
    train.add_argument("predicted", type=float, help="predicted minutes")
    train.add_argument("actual", type=float, help="actual minutes")

    serve = sub.add_parser("serve", help="run the HTTP API")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)
    return parser


def main(argv: list[str] | None = None, service: Optional[RouteService] = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    if args.command == "route" and args.departure < 0:
        print("--departure must be >= 0", file=sys.stderr)
        return 2

    if args.command == "serve":
        return _cmd_serve(args)

    service = service or build_route_service()
    try:
        if args.command == "route":
            return _cmd_route(service, args)
        return _cmd_train(service, args)
    finally:
        service.shutdown()


if __name__ == "__main__":
    raise SystemExit(main())
