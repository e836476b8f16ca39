#!/usr/bin/env python3
# roninshell/main.py
from __future__ import annotations

"""
Command-line entry point.

    roninshell                 interactive shell
    roninshell -c 'ls -l'      run one command and exit with its status
    roninshell -d              debug logging (shows boot steps)
"""

import argparse
from typing import Sequence

from roninshell import DESCRIPTION, version_string
from roninshell.boot import boot_sequence
from roninshell.interface import Dispatcher, Shell


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="roninshell", description=DESCRIPTION)
    parser.add_argument(
        "-c", "--command",
        metavar="COMMAND",
        help="execute COMMAND non-interactively and exit with its status",
    )
    parser.add_argument(
        "-d", "--debug",
        action="store_true",
        help="turn on debug logging",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=version_string(),
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    one_shot = args.command is not None

    try:
        context = boot_sequence(debug=args.debug, load_history=not one_shot)
    except Exception:
        # The failing boot step has already been reported
        return 1

    if not one_shot:
        return Shell(context).run()

    try:
        Dispatcher(context).resolve(args.command)
    except SystemExit as exc:
        return exc.code if isinstance(exc.code, int) else 0
    return context.last_status or 0


if __name__ == "__main__":
    raise SystemExit(main())
