from __future__ import annotations

import argparse
import logging
import sys

from . import __version__
from .app import play
from .config import LIMITS
from .settings import Settings


def _setup_logging(verbosity: int, log_file: str | None = None) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        filename=log_file,
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="escape-room",
        description="Escape Room - collect the key, open the door, leave the room",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--terminal", dest="frontend", action="store_const", const="terminal", help="Play in the terminal (curses)")
    mode.add_argument("--headless", dest="frontend", action="store_const", const="headless", help="Read one key per line from stdin, print frames to stdout")
    mode.add_argument("--gui", dest="frontend", action="store_const", const="gui", help="Play in an Arcade window")
    parser.add_argument("--width", type=int, default=None, help=f"Room width ({LIMITS.min_width}-{LIMITS.max_width}); prompts if omitted")
    parser.add_argument("--height", type=int, default=None, help=f"Room height ({LIMITS.min_height}-{LIMITS.max_height}); prompts if omitted")
    parser.add_argument("--seed", default=None, help="Seed for the room layout (int or any string)")
    parser.add_argument("--config", default=None, help="Path to a YAML settings file")
    parser.add_argument("--no-instructions", dest="show_instructions", action="store_const", const=False, default=None, help="Skip the instruction screen")
    parser.add_argument("--log-file", default=None, help="Write log records to this file instead of stderr")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity (-v, -vv)")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.verbose, args.log_file)

    if (args.width is None) != (args.height is None):
        parser.error("--width and --height must be given together")
    if args.width is not None:
        if not LIMITS.in_range(args.width, args.height):
            print("Invalid input: out of allowed range.", file=sys.stderr)
            return 1
        if not LIMITS.interior_ok(args.width, args.height):
            print("Invalid input: interior area is too small.", file=sys.stderr)
            return 1

    overrides = {
        "frontend": args.frontend,
        "width": args.width,
        "height": args.height,
        "seed": args.seed,
        "show_instructions": args.show_instructions,
    }
    settings = Settings.from_sources(file_path=args.config, overrides=overrides)
    return play(settings)


if __name__ == "__main__":
    sys.exit(main())
