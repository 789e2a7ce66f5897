"""
Command-Line Interface

Run differential growth headlessly and write a JSON snapshot of the result.
"""

import argparse
import logging
import sys
from typing import List, Optional, Tuple

from growth_policies import ConfigurationError, get_preset, list_presets
from .api.export import save_report_json, save_world_json
from .core.bounds import BoundaryRegion
from .core.path import Path
from .core.world import World
from .utils.shapes import circle_points

logger = logging.getLogger(__name__)


def _floats(text: str, count: int, name: str) -> Tuple[float, ...]:
    try:
        values = tuple(float(x) for x in text.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(f"{name} must be {count} comma-separated numbers")
    if len(values) != count:
        raise argparse.ArgumentTypeError(f"{name} must be {count} comma-separated numbers")
    return values


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="diffgrowth",
        description="Differential Growth - grow organic curves from a seed shape",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    run_parser = subparsers.add_parser("run", help="Grow a circle seed for a number of ticks")
    run_parser.add_argument(
        "--ticks", "-t",
        type=int,
        default=500,
        help="Number of ticks to run (default: 500)",
    )
    run_parser.add_argument(
        "--nodes", "-n",
        type=int,
        default=12,
        help="Number of seed nodes (default: 12)",
    )
    run_parser.add_argument(
        "--radius",
        type=float,
        default=20.0,
        help="Seed circle radius (default: 20)",
    )
    run_parser.add_argument(
        "--center",
        type=lambda s: _floats(s, 2, "--center"),
        default=(256.0, 256.0),
        help="Seed circle center as x,y (default: 256,256)",
    )
    run_parser.add_argument(
        "--jitter",
        type=float,
        default=0.1,
        help="Radial seed jitter as a fraction of the radius (default: 0.1)",
    )
    run_parser.add_argument(
        "--preset",
        type=str,
        default="organic",
        choices=list_presets(),
        help="Growth policy preset (default: organic)",
    )
    run_parser.add_argument(
        "--max-nodes",
        type=int,
        default=None,
        help="Node cap for the path (default: preset value)",
    )
    run_parser.add_argument(
        "--no-brownian",
        action="store_true",
        help="Disable per-tick jitter",
    )
    run_parser.add_argument(
        "--bound-rect",
        type=lambda s: _floats(s, 4, "--bound-rect"),
        default=None,
        help="Rectangular bound as min_x,min_y,max_x,max_y",
    )
    run_parser.add_argument(
        "--bound-circle",
        type=lambda s: _floats(s, 3, "--bound-circle"),
        default=None,
        help="Circular bound as x,y,radius",
    )
    run_parser.add_argument(
        "--reverse-bound",
        action="store_true",
        help="Pin nodes entering the bound instead of leaving it",
    )
    run_parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducibility",
    )
    run_parser.add_argument(
        "--output", "-O",
        type=str,
        default="./output/growth.json",
        help="Snapshot output path (default: ./output/growth.json)",
    )
    run_parser.add_argument(
        "--report",
        type=str,
        default=None,
        help="Optional path for the run report JSON",
    )
    run_parser.add_argument(
        "--progress",
        action="store_true",
        help="Show a progress bar",
    )
    run_parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose output",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "run":
        return run_growth(args)

    return 1


def run_growth(args: argparse.Namespace) -> int:
    """Run the run command."""
    try:
        policy = get_preset(args.preset)
        overrides = {}
        if args.max_nodes is not None:
            overrides["max_nodes"] = args.max_nodes
        if args.no_brownian:
            overrides["use_brownian_motion"] = False
        if overrides:
            policy = policy.with_overrides(**overrides)
        logger.debug(f"Growth policy: {policy.to_dict()}")

        bounds = []
        if args.bound_rect is not None:
            min_x, min_y, max_x, max_y = args.bound_rect
            bounds.append(BoundaryRegion.rectangle(min_x, min_y, max_x, max_y, reverse=args.reverse_bound))
        if args.bound_circle is not None:
            cx, cy, r = args.bound_circle
            bounds.append(BoundaryRegion.circle((cx, cy), r, reverse=args.reverse_bound))

        world = World(seed=args.seed)
        seed_points = circle_points(args.center, args.radius, args.nodes, jitter=args.jitter, rng=world.rng)
        world.add_path(Path.from_points(seed_points, policy=policy, closed=True, bounds=bounds))
        summary = world.run(args.ticks, progress=args.progress)
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2
    except ValueError as e:
        print(f"Invalid arguments: {e}", file=sys.stderr)
        return 2

    out = save_world_json(world, args.output)
    if args.report:
        save_report_json(summary, args.report)

    metrics = summary.metrics
    print(f"Ran {metrics['ticks_run']} ticks: {metrics['node_count']} nodes")
    if metrics["done"]:
        print("Node cap reached")
    for warning in summary.warnings:
        print(f"Warning: {warning}")
    print(f"Snapshot written to {out}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
