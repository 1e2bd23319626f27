"""Command line interface: generate, view and analyze planets."""
from __future__ import annotations

import argparse
import logging
import sys
import time
import uuid
from pathlib import Path
from typing import Optional, Sequence

from planetforge.core.config import CLI_CFG, RENDER_CFG
from planetforge.core.errors import InvalidParameter
from planetforge.core.lighting import Light
from planetforge.core.logging_utils import RunLogger, configure_logging
from planetforge.core.noise import as_uuid
from planetforge.core.planet import Planet
from planetforge.data.presets import get_scheme, list_schemes


logger = logging.getLogger(__name__)

HEX_COLOR_HELP = "Only 6-character hexadecimal codes are allowed, e.g., FF1234"


def parse_hex_color(text: str) -> tuple[int, int, int]:
    value = text.strip().lstrip("#")
    if len(value) != 6:
        raise argparse.ArgumentTypeError(HEX_COLOR_HELP)
    try:
        raw = bytes.fromhex(value)
    except ValueError:
        raise argparse.ArgumentTypeError(HEX_COLOR_HELP) from None
    return (raw[0], raw[1], raw[2])


def parse_seed(text: str) -> uuid.UUID:
    try:
        return as_uuid(text)
    except InvalidParameter as exc:
        raise argparse.ArgumentTypeError(str(exc)) from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="planetforge", description="A pixel-art planet generator")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="More log output (-vv for debug)")
    commands = parser.add_subparsers(dest="command")

    generate = commands.add_parser("generate", help="Render a planet to a PNG file")
    generate.add_argument("-o", "--output", type=Path, default=CLI_CFG.default_output)
    generate.add_argument(
        "-p", "--resolution", type=int, default=CLI_CFG.default_resolution,
        help="Render resolution, in pixels",
    )
    generate.add_argument(
        "-r", "--repeat", type=float, default=None,
        help="Regenerate with a fresh seed every REPEAT seconds",
    )
    generate.add_argument("--seed", type=parse_seed, default=None, help="Planet seed (UUID)")
    generate.add_argument(
        "--radius", type=float, default=CLI_CFG.default_radius_km,
        help="Planet's radius, in kilometers",
    )
    generate.add_argument(
        "-d", "--distance", type=float, default=CLI_CFG.default_distance_km,
        help="Planet distance from the sun, in kilometers",
    )
    generate.add_argument(
        "-a", "--angle", type=float, default=CLI_CFG.default_angle_rad,
        help="Planet rotation around the sun, in radians",
    )
    generate.add_argument(
        "--scheme", choices=list_schemes(), default=CLI_CFG.default_scheme,
        help="Coloring scheme",
    )
    generate.add_argument(
        "--sun-color", type=parse_hex_color, default=None,
        help="Simulate sun lighting, using the hexadecimal color",
    )
    generate.add_argument(
        "--sols", type=float, default=None,
        help="If simulating the sun, how intense should the light be? (needs --sun-color)",
    )
    generate.add_argument("--workers", type=int, default=RENDER_CFG.workers)
    generate.add_argument(
        "--log-dir", type=Path, default=None,
        help="Record every render of this run under LOG_DIR",
    )

    view = commands.add_parser("view", help="Open the interactive viewer")
    view.add_argument("--seed", type=parse_seed, default=None)
    view.add_argument("--scheme", choices=list_schemes(), default=CLI_CFG.default_scheme)

    analyze = commands.add_parser("analyze", help="Plot statistics of a logged run")
    analyze.add_argument("run_dir", nargs="?", help="Path to (or id of) a run directory")
    analyze.add_argument("--runs-root", type=Path, default=CLI_CFG.runs_dir)

    commands.add_parser("schemes", help="List the built-in coloring schemes")
    return parser


def light_from_args(args: argparse.Namespace) -> Optional[Light]:
    """The sun sits at the world origin; without a sun color the planet is unlit."""
    if args.sun_color is None:
        return None
    return Light.at(
        (0.0, 0.0, 0.0),
        color=args.sun_color,
        intensity=1.0 if args.sols is None else args.sols,
    )


def planet_from_args(args: argparse.Namespace, seed: Optional[uuid.UUID] = None) -> Planet:
    return Planet(
        seed=seed or args.seed or uuid.uuid4(),
        origin=Planet.calculate_origin(args.angle, args.distance),
        radius=args.radius,
        colors=get_scheme(args.scheme),
    )


def cmd_generate(args: argparse.Namespace) -> int:
    light = light_from_args(args)
    run_logger = RunLogger(args.log_dir) if args.log_dir is not None else None
    if run_logger is not None:
        run_logger.write_meta(
            {
                "scheme": args.scheme,
                "resolution": args.resolution,
                "radius_km": args.radius,
                "distance_km": args.distance,
                "angle_rad": args.angle,
                "sun_color": args.sun_color,
                "sols": args.sols,
            }
        )

    try:
        seed = args.seed
        while True:
            planet = planet_from_args(args, seed)
            start = time.perf_counter()
            image = planet.generate(args.resolution, light, workers=args.workers)
            elapsed = time.perf_counter() - start
            path = image.save(args.output)
            logger.info("Saved planet %s to %s (%.2fs)", planet.seed, path, elapsed)
            if run_logger is not None:
                run_logger.log_render(planet.seed, image, elapsed)

            if args.repeat is None:
                break
            seed = None
            time.sleep(args.repeat)
    except KeyboardInterrupt:
        logger.info("Stopped")
    finally:
        if run_logger is not None:
            run_logger.close()
    return 0


def cmd_view(args: argparse.Namespace) -> int:
    from planetforge.render.viewer import run_viewer

    planet = Planet(seed=args.seed or uuid.uuid4(), colors=get_scheme(args.scheme))
    run_viewer(planet)
    return 0


def cmd_analyze(args: argparse.Namespace) -> int:
    from planetforge.analyze import analyze_run, resolve_run_dir

    run_dir = resolve_run_dir(args.run_dir, args.runs_root)
    summary, figures = analyze_run(run_dir)
    print(f"Run: {run_dir.name}")
    for key, value in summary.items():
        print(f" {key}: {value}")
    for figure in figures:
        print(f" figure: {figure}")
    return 0


def cmd_schemes(args: argparse.Namespace) -> int:
    for name in list_schemes():
        scheme = get_scheme(name)
        print(f"{name}: {len(scheme.bands)} bands")
    return 0


COMMANDS = {
    "generate": cmd_generate,
    "view": cmd_view,
    "analyze": cmd_analyze,
    "schemes": cmd_schemes,
}


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    argv = list(sys.argv[1:] if argv is None else argv)
    args = parser.parse_args(argv)
    if args.command is None:
        args = parser.parse_args([*argv, "generate"])
    configure_logging(args.verbose)

    try:
        return COMMANDS[args.command](args)
    except (FileNotFoundError, ValueError) as exc:
        # InvalidParameter is a ValueError
        parser.error(str(exc))
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
