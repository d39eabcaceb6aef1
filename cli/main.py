"""CLI entry point for Dev Journal.

Commands:
  devjournal serve [--host H] [--port P] [--data FILE]   Run the web API
  devjournal stats --data FILE [--days N]                Print an activity report
  devjournal draw --output PNG [--style S] [--data FILE] Render a visualization
"""

from __future__ import annotations

import argparse
import random
import sys

from devjournal.analytics import (
    activity_series,
    dashboard_stats,
    format_activity_report,
    journey_input,
    technology_distribution,
)
from devjournal.log import configure_logging
from devjournal.models import JourneyStyle
from devjournal.storage import MemStorage, SnapshotError
from devjournal.turtle import DEFAULT_CANVAS_SIZE, DEFAULT_COMPLEXITY, TurtleCanvas, journey_stats

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000


def _load_storage(data_path: str | None) -> MemStorage | None:
    """Seed a store from ``data_path``. Prints the error and returns None on failure."""
    if not data_path:
        return MemStorage()
    try:
        return MemStorage.from_snapshot(data_path)
    except FileNotFoundError:
        print(f"Error: Data file not found at {data_path}", file=sys.stderr)
    except SnapshotError as e:
        print(f"Error: {e}", file=sys.stderr)
    return None


def cmd_serve(args: argparse.Namespace) -> int:
    """Run the web API under uvicorn."""
    import uvicorn

    from web.app import create_app

    storage = _load_storage(getattr(args, "data", None))
    if storage is None:
        return 1

    app = create_app(storage=storage)
    print(f"Starting Dev Journal at http://{args.host}:{args.port}")
    uvicorn.run(app, host=args.host, port=args.port)
    return 0


def cmd_stats(args: argparse.Namespace) -> int:
    """Print totals, streak, recent activity and top technologies."""
    storage = _load_storage(args.data)
    if storage is None:
        return 1

    days = args.days
    if days <= 0:
        print(f"Error: --days must be positive, got {days}", file=sys.stderr)
        return 1

    now = storage.clock()
    records = storage.records()
    stats = dashboard_stats(*records, now=now)
    series = activity_series(*records, today=now.date(), days=days)
    distribution = technology_distribution(*records)

    print(format_activity_report(stats, series, distribution))
    return 0


def cmd_draw(args: argparse.Namespace) -> int:
    """Draw one visualization style and write it as a PNG."""
    from web.export import save_png

    storage = _load_storage(getattr(args, "data", None))
    if storage is None:
        return 1

    records = storage.records()
    stats = dashboard_stats(*records, now=storage.clock())
    data = journey_input(stats, technology_distribution(*records))

    canvas = TurtleCanvas(args.width, args.height)
    rng = random.Random(args.seed) if args.seed is not None else None
    canvas.draw_style(args.style, data, complexity=args.complexity, rng=rng)

    output_path = save_png(canvas, args.output)
    figures = journey_stats(data)

    print(f"Visualization written: {output_path}")
    print(f"  Style:     {args.style}")
    print(f"  Segments:  {len(canvas.segments)}")
    print(f"  Distance:  {figures.distance}")
    print(f"  Turns:     {figures.turns}")
    print(f"  Peaks:     {figures.peaks}")
    return 0


def _complexity(value: str) -> int:
    n = int(value)
    if not 1 <= n <= 10:
        raise argparse.ArgumentTypeError("complexity must be between 1 and 10")
    return n


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="devjournal",
        description="Dev Journal — developer knowledge dashboard CLI",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (default: INFO)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- serve ---
    serve_parser = subparsers.add_parser("serve", help="Run the web API")
    serve_parser.add_argument("--host", default=DEFAULT_HOST, help=f"Bind address (default: {DEFAULT_HOST})")
    serve_parser.add_argument("--port", type=int, default=DEFAULT_PORT, help=f"Port (default: {DEFAULT_PORT})")
    serve_parser.add_argument("--data", default="", help="JSON snapshot to seed the store with")

    # --- stats ---
    stats_parser = subparsers.add_parser("stats", help="Print an activity report")
    stats_parser.add_argument("--data", required=True, help="JSON snapshot with journal/bugs/snippets")
    stats_parser.add_argument(
        "--days", type=int, default=7,
        help="Days of activity to list (default: 7)",
    )

    # --- draw ---
    draw_parser = subparsers.add_parser("draw", help="Render a learning-journey visualization")
    draw_parser.add_argument("--output", required=True, help="PNG file to write")
    draw_parser.add_argument(
        "--style", default=JourneyStyle.SPIRAL.value,
        choices=[s.value for s in JourneyStyle],
        help="Visualization style (default: spiral)",
    )
    draw_parser.add_argument(
        "--complexity", type=_complexity, default=DEFAULT_COMPLEXITY,
        help="Organic style detail, 1-10 (default: 5)",
    )
    draw_parser.add_argument("--seed", type=int, default=None, help="Seed for a reproducible drawing")
    draw_parser.add_argument("--data", default="", help="JSON snapshot with journal/bugs/snippets")
    draw_parser.add_argument("--width", type=int, default=DEFAULT_CANVAS_SIZE[0], help="Canvas width")
    draw_parser.add_argument("--height", type=int, default=DEFAULT_CANVAS_SIZE[1], help="Canvas height")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    configure_logging(args.log_level)

    commands = {
        "serve": cmd_serve,
        "stats": cmd_stats,
        "draw": cmd_draw,
    }

    handler = commands.get(args.command)
    if not handler:
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return 1

    return handler(args)


if __name__ == "__main__":
    sys.exit(main())
