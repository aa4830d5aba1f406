"""
meander CLI.

Usage:
    python -m meander.cli contour <tin.json> [--config cfg.json] [--thresholds N]
                                             [--z-min Z] [--z-max Z] [--nearness D]
                                             [--join first|nearest] [--geojson OUT]
                                             [--precision P] [--plot OUT]
    python -m meander.cli demo <out_tin.json> [--radius R] [--resolution D]
                                              [--slope-x S] [--slope-y S]
                                              [--bump X Y HEIGHT SIGMA ...]
"""

import argparse
import json
import sys

from meander.contours import ContourParams, contours_from_params
from meander.errors import ContourConfigError
from meander.log import configure_logging, get_logger
from meander.terrain import HeightMap, z_range
from meander.tools.plot_contours import render_contours
from meander.tools.tin_io import load_tin, save_tin, write_geojson

logger = get_logger("meander.cli")


def load_config(path: str) -> dict:
    with open(path, "r") as f:
        try:
            cfg = json.load(f)
        except json.JSONDecodeError as e:
            raise ContourConfigError(f"Could not parse config {path}: {e}") from e
    if not isinstance(cfg, dict):
        raise ContourConfigError(f"Config {path} must contain a JSON object")
    return cfg


def resolve_params(args, tin) -> ContourParams:
    """Config file first, then command-line flags. Without a configured z range, the TIN's height range is used."""
    cfg = load_config(args.config) if args.config else {}
    if "z_min" not in cfg and "z_max" not in cfg and len(tin):
        lo, hi = z_range(tin)
        cfg = {"z_min": lo, "z_max": hi, **cfg}

    return ContourParams.from_dict(cfg).with_overrides(
        threshold_count=args.thresholds,
        z_min=args.z_min,
        z_max=args.z_max,
        nearness_threshold=args.nearness,
        join_policy=args.join,
    )


def print_summary(result) -> None:
    print("\n=== Contour Summary ===")
    if not result:
        print("  (no contours)")
        return
    for threshold, lines in result.items():
        points = sum(len(line) for line in lines)
        print(f"  {threshold:.6g}: {len(lines)} polylines, {points} points")


def cmd_contour(args):
    """Handle the 'contour' subcommand."""
    tin = load_tin(args.tin)
    params = resolve_params(args, tin)
    logger.info(
        "Contouring %d triangles: %d thresholds in [%s, %s], nearness=%s, join=%s",
        len(tin), params.threshold_count, params.z_min, params.z_max,
        params.nearness_threshold, params.join_policy,
    )

    result = contours_from_params(tin, params)
    print_summary(result)

    if args.geojson:
        write_geojson(args.geojson, result, precision=args.precision)
        print(f"  Wrote: {args.geojson}")
    if args.plot:
        render_contours(args.plot, result, params.z_min, params.z_max,
                        title=f"{params.threshold_count} thresholds")
        print(f"  Wrote: {args.plot}")


def cmd_demo(args):
    """Handle the 'demo' subcommand."""
    hm = HeightMap.circular(radius=args.radius, resolution=args.resolution)
    hm.add_planar_slope(slope_x=args.slope_x, slope_y=args.slope_y)
    for cx, cy, height, sigma in args.bump or []:
        hm.add_gaussian_bump(cx, cy, height, sigma)

    tin = hm.to_tin()
    save_tin(args.out, tin)
    lo, hi = hm.z_range()
    print(f"  Wrote: {args.out}")
    print(f"  Triangles: {len(tin)}, z range: [{lo:.6g}, {hi:.6g}]")


# ---------------------------------------------------------------------------
# main
# ---------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="meander",
        description="Meandering-triangles contour extraction",
    )
    parser.add_argument("--log-level", default=None,
                        help="Log level (or set MEANDER_LOG_LEVEL env var)")
    parser.add_argument("--log-json", action="store_true",
                        help="Emit log records as JSON lines")
    sub = parser.add_subparsers(dest="command")

    # contour subcommand
    contour_p = sub.add_parser("contour", help="Extract contour lines from a TIN JSON file")
    contour_p.add_argument("tin", help="TIN JSON file")
    contour_p.add_argument("--config", default=None, help="JSON file of contour parameters")
    contour_p.add_argument("--thresholds", type=int, default=None, help="Number of thresholds")
    contour_p.add_argument("--z-min", type=float, default=None, help="Lowest threshold")
    contour_p.add_argument("--z-max", type=float, default=None, help="Highest threshold")
    contour_p.add_argument("--nearness", type=float, default=None,
                           help="Max distance between endpoints considered the same point")
    contour_p.add_argument("--join", choices=["first", "nearest"], default=None,
                           help="Which matching segment wins when several are near")
    contour_p.add_argument("--geojson", default=None, help="Write contours as GeoJSON")
    contour_p.add_argument("--precision", type=int, default=None,
                           help="Decimal places kept in GeoJSON coordinates")
    contour_p.add_argument("--plot", default=None, help="Render contours to an image (.png, .svg)")
    contour_p.set_defaults(func=cmd_contour)

    # demo subcommand
    demo_p = sub.add_parser("demo", help="Write a synthetic TIN built from a circular heightmap")
    demo_p.add_argument("out", help="Output TIN JSON file")
    demo_p.add_argument("--radius", type=float, default=50.0)
    demo_p.add_argument("--resolution", type=float, default=1.0)
    demo_p.add_argument("--slope-x", type=float, default=0.0)
    demo_p.add_argument("--slope-y", type=float, default=0.0)
    demo_p.add_argument("--bump", type=float, nargs=4, action="append",
                        metavar=("X", "Y", "HEIGHT", "SIGMA"),
                        help="Add a gaussian bump (repeatable)")
    demo_p.set_defaults(func=cmd_demo)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        sys.exit(1)

    configure_logging(args.log_level, json_format=args.log_json)
    try:
        args.func(args)
    except (ValueError, OSError) as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
