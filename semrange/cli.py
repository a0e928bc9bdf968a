# semrange/cli.py
from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from semrange import __version__
from semrange.errors import FormatError
from semrange.logging import configureLogging
from semrange.parser import parseRange
from semrange.resolver import RangeResolver
from semrange.version import Version, parseVersion

logger = logging.getLogger(__name__)

__all__ = ["buildParser", "main"]



EXIT_OK = 0
EXIT_NO_MATCH = 1
EXIT_BAD_INPUT = 2



def _parseVersions(raw: Sequence[str]) -> list[Version]:
    return [parseVersion(text) for text in raw]



def _cmdCheck(args: argparse.Namespace) -> int:
    spec = parseRange(args.range)
    versions = _parseVersions(args.versions)
    allMatch = True
    for raw, version in zip(args.versions, versions):
        ok = spec.isSatisfiedBy(version)
        allMatch = allMatch and ok
        print(f"{raw}: {'yes' if ok else 'no'}")
    return EXIT_OK if allMatch else EXIT_NO_MATCH



def _cmdFormat(args: argparse.Namespace) -> int:
    print(str(parseRange(args.range)))
    return EXIT_OK



def _cmdBest(args: argparse.Namespace) -> int:
    best = RangeResolver.maxSatisfying(_parseVersions(args.versions), args.range)
    if best is None:
        logger.info("No version satisfies %r", args.range)
        return EXIT_NO_MATCH
    print(str(best))
    return EXIT_OK



def buildParser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="semrange",
        description="Parse Node-style version ranges and test versions against them",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
Examples:
  semrange check "^1.2.3" 1.4.0 2.0.0     Report which versions satisfy the range
  semrange format "1.x || 2.4.x"          Print the canonical form of a range
  semrange best "~1.2" 1.2.0 1.2.7 1.3.0  Print the highest satisfying version
"""
    )
    parser.add_argument("--version", action="version", version=f"semrange {__version__}")
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level (overrides the logging.level setting)"
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Emit logs as one JSON object per line"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    check = subparsers.add_parser("check", help="Test versions against a range")
    check.add_argument("range")
    check.add_argument("versions", nargs="+")
    check.set_defaults(handler=_cmdCheck)

    fmt = subparsers.add_parser("format", help="Print the canonical form of a range")
    fmt.add_argument("range")
    fmt.set_defaults(handler=_cmdFormat)

    best = subparsers.add_parser("best", help="Print the highest version satisfying a range")
    best.add_argument("range")
    best.add_argument("versions", nargs="+")
    best.set_defaults(handler=_cmdBest)

    return parser



def main(argv: Sequence[str] | None = None) -> int:
    """Main CLI entry point."""
    args = buildParser().parse_args(argv)
    configureLogging(level=args.log_level, fmt="json" if args.json_logs else None)

    try:
        return args.handler(args)
    except FormatError as err:
        print(f"semrange: {err}", file=sys.stderr)
        return EXIT_BAD_INPUT
