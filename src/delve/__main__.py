from __future__ import annotations

import argparse
import logging
import sys

from . import __version__
from .app import run_headless
from .config import load_settings
from .exceptions import ConfigError
from .logging_config import configure_logging

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="delve",
        description="Delve - headless dungeon turn runner",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--seed", type=int, default=None, help="Seed for level generation")
    parser.add_argument("--config", default=None, help="YAML file overriding the default settings")
    parser.add_argument(
        "--keys",
        default="",
        help="Key script, one character per key (wasd/hjkl move, q exits)",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity (-v, -vv)")

    args = parser.parse_args(argv)
    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose >= 2:
        level = logging.DEBUG
    configure_logging(level)

    try:
        settings = load_settings(args.config)
    except ConfigError as exc:
        logger.error("%s", exc)
        print(f"error: {exc}", file=sys.stderr)
        return 2

    return run_headless(settings, keys=list(args.keys), seed=args.seed)


if __name__ == "__main__":
    sys.exit(main())
