"""wikihome command line interface."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from wikihome.config import settings
from wikihome.core.errors import PreconditionError
from wikihome.core.synthesizer import synthesize

logger = logging.getLogger("wikihome")

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_PRECONDITION = 2


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="wikihome",
        description="A tool to update wiki repo table of contents.",
    )
    sub = p.add_subparsers(dest="command")
    for name, help_text in (
        ("write", "Regenerate the home file and every folder home file"),
        ("check", "Report home files that are out of date without writing"),
    ):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument(
            "-l",
            "--directory",
            type=Path,
            default=None,
            help=f"The wiki directory (default: {settings.root_dir})",
        )
        cmd.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return p


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command not in ("write", "check"):
        parser.print_help()
        return EXIT_FAILED

    configure_logging(args.verbose)
    directory = args.directory or settings.root_dir
    try:
        report = asyncio.run(synthesize(directory, check=args.command == "check"))
    except PreconditionError as exc:
        logger.error("%s", exc)
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_PRECONDITION

    for failure in report.failures:
        print(f"failed: {failure.path}: {failure.error}", file=sys.stderr)
    if report.check:
        for path in report.stale:
            print(f"stale: {path}")
    else:
        for path in report.written:
            print(f"wrote: {path}")
    return EXIT_OK if report.ok else EXIT_FAILED


if __name__ == "__main__":
    sys.exit(main())
