# This file is dual licensed under the terms of the Apache License, Version
# 2.0, and the BSD License. See the LICENSE file in the root of this repository
# for complete details.
"""
The ``univers`` command.

``compare`` prints -1, 0 or 1, ``sort`` prints versions in ascending order
and ``contains`` answers through its exit status: 0 when the version is in
the range and 1 when it is not. Invalid input exits with status 2.
"""

from __future__ import annotations

import argparse
import logging
import sys

from . import __version__
from .api import compare, contains
from .ecosystems import ECOSYSTEMS, get_ecosystem
from .errors import UniversError

__all__ = ["main"]

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="univers",
        description="Compare versions and test VERS ranges across ecosystems.",
    )
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log parsing and normalization details to stderr",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    compare_parser = commands.add_parser(
        "compare", help="Print -1, 0 or 1 as A sorts before, equal to or after B"
    )
    compare_parser.add_argument("ecosystem", choices=sorted(ECOSYSTEMS))
    compare_parser.add_argument("a")
    compare_parser.add_argument("b")

    sort_parser = commands.add_parser("sort", help="Print versions in ascending order")
    sort_parser.add_argument("ecosystem", choices=sorted(ECOSYSTEMS))
    sort_parser.add_argument("versions", nargs="+")

    contains_parser = commands.add_parser(
        "contains", help="Exit 0 if VERSION is inside RANGE and 1 otherwise"
    )
    contains_parser.add_argument("range", help="A vers: string or a native range")
    contains_parser.add_argument("version")
    contains_parser.add_argument(
        "-e",
        "--ecosystem",
        choices=sorted(ECOSYSTEMS),
        help="The ecosystem of a native range",
    )
    return parser


def _run(args: argparse.Namespace) -> int:
    if args.command == "compare":
        print(compare(args.ecosystem, args.a, args.b))
        return 0

    if args.command == "sort":
        ecosystem = get_ecosystem(args.ecosystem)
        for version in sorted(ecosystem.parse_version(v) for v in args.versions):
            print(ecosystem.render(version))
        return 0

    result = contains(args.range, args.version, ecosystem=args.ecosystem)
    logger.debug("%s in %s: %s", args.version, args.range, result)
    return 0 if result else 1


def main() -> None:
    args = _build_parser().parse_args(sys.argv[1:])
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        code = _run(args)
    except UniversError as e:
        print(f"univers: error: {e}", file=sys.stderr)
        code = 2
    sys.exit(code)
