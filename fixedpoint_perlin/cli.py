"""Command line interface for sampling the field and emitting table sources."""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from .codec import render_lookup, tree_depth
from .config import DEFAULT_ENV_PREFIX, load_sampling_settings
from .fixed import to_fixed
from .sampling import export_samples_csv, sample_plane, write_samples_csv
from .tables import fade_tree, permutation_tree, verify_tables

LOGGER = logging.getLogger(__name__)

_TREES = {
    "permutation": ("ptable", permutation_tree),
    "fade": ("ftable", fade_tree),
}


def fixed_value(value: str) -> int:
    """Parse a Q16.16 coordinate: raw integers in any base, or decimals like ``1.5``."""
    text = value.strip()
    try:
        return int(text, 0)
    except ValueError:
        pass
    try:
        return to_fixed(float(text))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"'{value}' is not a valid coordinate") from exc


def positive_int(value: str) -> int:
    try:
        parsed = int(value, 0)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"'{value}' is not a valid integer") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("Value must be positive")
    return parsed


def create_parser() -> argparse.ArgumentParser:
    # //1.- Top-level parser with one subcommand per workflow.
    parser = argparse.ArgumentParser(
        prog="fixedpoint-perlin",
        description="Deterministic fixed-point Perlin noise tools",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    commands = parser.add_subparsers(dest="command", required=True)

    # //2.- Sampling options override the config file, which overrides the environment.
    sample = commands.add_parser("sample", help="Sample a plane of the noise field as CSV")
    sample.add_argument("--config", help="JSON file with sampling settings")
    sample.add_argument("--env-prefix", default=DEFAULT_ENV_PREFIX, help="Environment variable prefix")
    sample.add_argument("--origin", nargs="+", type=fixed_value, metavar="COORD", help="Origin x y [z]")
    sample.add_argument("--step", type=fixed_value, help="Distance between samples")
    sample.add_argument("--width", type=positive_int, help="Samples per row")
    sample.add_argument("--height", type=positive_int, help="Number of rows")
    sample.add_argument("--dimensions", type=int, choices=(2, 3), help="Evaluate noise2d or a noise3d slice")
    sample.add_argument("--real", action="store_true", help="Write real values instead of raw Q16.16")
    sample.add_argument("--output", "-o", default="-", help="CSV path (default: stdout)")

    tables = commands.add_parser("tables", help="Print a table as nested conditionals")
    tables.add_argument("table", choices=sorted(_TREES), help="Table to render")

    commands.add_parser("verify", help="Check decision-tree encodings against the flat tables")
    return parser


def _run_sample(args: argparse.Namespace, parser: argparse.ArgumentParser) -> int:
    origin = args.origin or []
    if len(origin) > 3:
        parser.error("--origin takes at most three coordinates")
    try:
        settings = load_sampling_settings(path=args.config, env_prefix=args.env_prefix)
        settings = settings.overridden(
            origin_x=origin[0] if len(origin) > 0 else None,
            origin_y=origin[1] if len(origin) > 1 else None,
            origin_z=origin[2] if len(origin) > 2 else None,
            step=args.step,
            width=args.width,
            height=args.height,
            dimensions=args.dimensions,
        )
    except (OSError, ValueError) as exc:
        parser.error(str(exc))
    samples = sample_plane(settings)
    if args.output in (None, "-"):
        write_samples_csv(samples, sys.stdout, settings=settings, real=args.real)
    else:
        export_samples_csv(samples, args.output, settings=settings, real=args.real)
    return 0


def _run_tables(args: argparse.Namespace) -> int:
    name, build = _TREES[args.table]
    tree = build()
    LOGGER.debug("%s tree depth %d", args.table, tree_depth(tree))
    for line in render_lookup(tree, name):
        print(line)
    return 0


def _run_verify() -> int:
    try:
        verify_tables()
    except ValueError as exc:
        LOGGER.error("%s", exc)
        return 1
    LOGGER.info("Decision-tree encodings match the permutation and fade tables")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)
    # //3.- Log to stderr so CSV and rendered sources on stdout stay clean.
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[%(asctime)s] %(levelname)s %(message)s",
    )
    if args.command == "sample":
        return _run_sample(args, parser)
    if args.command == "tables":
        return _run_tables(args)
    return _run_verify()


if __name__ == "__main__":  # pragma: no cover - exercised via ``python -m`` execution
    raise SystemExit(main())
