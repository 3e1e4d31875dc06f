#!/usr/bin/env python3
"""
sepa-viewer: browse a SEPA pain.001.001.03 credit transfer file in the terminal.

Usage:
  sepa-viewer <filepath>
  sepa-viewer --print <filepath>
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

import yaml
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from sepa_viewer import sepa
from sepa_viewer.app import SepaViewerApp
from sepa_viewer.config import ViewerConfig
from sepa_viewer.models import Field
from sepa_viewer.session import Session

logger = logging.getLogger(__name__)

console = Console(highlight=False, soft_wrap=True)

PROG = "sepa-viewer"
EXAMPLE = f"Example: {PROG} example/SEPA_Example_2024.xml"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class ArgumentParser(argparse.ArgumentParser):
    """Reports usage errors on stdout and exits with status 1."""

    def error(self, message: str) -> None:  # type: ignore[override]
        console.print(escape(self.format_usage().rstrip()))
        console.print(f"[red]Error:[/red] {escape(message)}")
        raise SystemExit(1)


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog=PROG,
        description="Interactive viewer for SEPA credit transfer (pain.001.001.03) files.",
        epilog=EXAMPLE,
    )
    parser.add_argument("filepath", nargs="?", help="SEPA XML file to show")
    parser.add_argument(
        "--config", metavar="FILE", help="YAML file overriding layout and clipboard"
    )
    parser.add_argument(
        "--log-file", metavar="FILE", help="write log messages to FILE"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="log debug messages"
    )
    parser.add_argument(
        "--print",
        dest="print_only",
        action="store_true",
        help="print the fields as a table instead of starting the viewer",
    )
    return parser


def setup_logging(log_file: str | None, verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    if log_file:
        logging.basicConfig(filename=log_file, level=level, format=LOG_FORMAT)
    else:
        # the viewer owns the terminal, so nothing may be written to it
        logging.basicConfig(handlers=[logging.NullHandler()], level=level)


def print_fields(fields: Sequence[Field], title: str) -> None:
    table = Table(
        title=title,
        box=box.SIMPLE_HEAD,
        show_header=True,
        header_style="bold",
        expand=False,
    )
    table.add_column("Category", style="bold", no_wrap=True)
    table.add_column("Field", no_wrap=True)
    table.add_column("Value", overflow="fold")
    for field in fields:
        table.add_row(escape(field.category), escape(field.name), escape(field.value))
    console.print(table)


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_file, args.verbose)

    if args.filepath is None:
        console.print(f"Usage: {PROG} <filepath>")
        console.print(EXAMPLE)
        return 1

    path = Path(args.filepath)
    if not path.exists():
        console.print(f"[red]Error:[/red] File '{escape(str(path))}' does not exist")
        return 1

    try:
        config = ViewerConfig.from_yaml(args.config) if args.config else ViewerConfig()
    except (OSError, yaml.YAMLError, TypeError, ValueError) as e:
        console.print(f"[red]Error:[/red] invalid config: {escape(str(e))}")
        return 1
    logger.debug(f"Using {config=}")

    fields: list[Field] = []
    error: sepa.ParseError | None = None
    try:
        fields = sepa.parse_file(path)
    except sepa.ParseError as e:
        logger.error(f"Could not parse {path}: {e}")
        error = e

    if args.print_only:
        if error is not None:
            console.print(f"[red]Error:[/red] {escape(str(error))}")
            return 1
        print_fields(fields, config.title)
        return 0

    session = Session(fields, error=error, truncate_width=config.truncate_width)
    app = SepaViewerApp(session, config)
    try:
        app.run()
    except Exception as e:
        logger.exception("Viewer crashed")
        console.print(f"Error running program: {escape(str(e))}")
        return 1

    if app.return_code:
        console.print(f"Error running program: exit status {app.return_code}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
