from __future__ import annotations

import argparse
import logging
import os
from importlib.metadata import entry_points

import cavemap

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def main(argv: list[str] | None = None) -> int:
    """Dispatch ``cavemap <command> ...`` to a registered ``cavemap.actions``."""
    registered_commands = entry_points(group="cavemap.actions")

    parser = argparse.ArgumentParser(
        prog="cavemap",
        description="Turn cave survey notes into maps",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s version: {cavemap.__version__}",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=os.getenv("CAVEMAP_LOG_LEVEL", "WARNING"),
        help="Level of the messages printed on stderr "
        "(default: $CAVEMAP_LOG_LEVEL or WARNING)",
    )
    parser.add_argument(
        "command",
        choices=sorted(registered_commands.names),
    )
    parser.add_argument(
        "args",
        help=argparse.SUPPRESS,
        nargs=argparse.REMAINDER,
    )

    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level, format=LOG_FORMAT)

    main_fn = registered_commands[args.command].load()
    return main_fn(args.args)
