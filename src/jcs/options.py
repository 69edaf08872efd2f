# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Command-line option parsing and input path validation."""

import argparse
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_FORMAT = "csv"
DEFAULT_CHARSET = "UTF-8"


@dataclass(frozen=True)
class ScanOptions:
    """Represent the parsed command line.

    Attributes:
        inputs: Positional arguments exactly as given.
        verbose: Print full class detail instead of names only.
        quiet: Suppress every console and log message.
        packages: Package prefix filters, ``None`` when not given.
        methods_csv: Methods output file.
        fields_csv: Fields output file.
        constructors_csv: Constructors output file.
        output_format: Requested output format name, lower-cased.
        charset: Requested output encoding name.
        unrecognized: Arguments the parser did not recognize.
    """

    inputs: tuple[str, ...] = ()
    verbose: bool = False
    quiet: bool = False
    packages: tuple[str, ...] | None = None
    methods_csv: str | None = None
    fields_csv: str | None = None
    constructors_csv: str | None = None
    output_format: str = DEFAULT_FORMAT
    charset: str = DEFAULT_CHARSET
    unrecognized: tuple[str, ...] = ()


class _FirstValueAction(argparse.Action):
    """Keep the first value of an option that is given more than once."""

    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: Any,
        option_string: str | None = None,
    ) -> None:
        if getattr(namespace, self.dest, None) is None:
            setattr(namespace, self.dest, values)


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser.

    Returns:
        Configured argument parser instance.
    """
    parser = argparse.ArgumentParser(
        prog="java-class-scanner",
        description="List classes, methods, fields and constructors of compiled Java classes.",
        allow_abbrev=False,
        add_help=False,
    )
    parser.add_argument(
        "inputs", nargs="*", metavar="file|directory", help="Class file, JAR or directory."
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Show detailed class information."
    )
    parser.add_argument(
        "--package",
        dest="packages",
        action="append",
        default=None,
        help="Filter by package name prefix (repeatable).",
    )
    parser.add_argument(
        "--methods-csv", action=_FirstValueAction, help="Output methods to a CSV file."
    )
    parser.add_argument(
        "--fields-csv", action=_FirstValueAction, help="Output fields to a CSV file."
    )
    parser.add_argument(
        "--constructors-csv",
        action=_FirstValueAction,
        help="Output constructors to a CSV file.",
    )
    parser.add_argument(
        "--format",
        dest="output_format",
        action=_FirstValueAction,
        help="Output format: csv or tsv (default: csv).",
    )
    parser.add_argument(
        "--charset",
        action=_FirstValueAction,
        help="Character encoding for output files (default: UTF-8).",
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Suppress standard output."
    )
    return parser


def parse_options(
    argv: Sequence[str], parser: argparse.ArgumentParser | None = None
) -> ScanOptions:
    """Parse command-line arguments into scan options.

    Unknown options are collected rather than rejected.

    Args:
        argv: CLI arguments without the program name.
        parser: Parser to use; a new one is built when omitted.

    Returns:
        Parsed options.

    Raises:
        SystemExit: If a known option is malformed, e.g. missing its value.
    """
    parser = parser or build_parser()
    args, unrecognized = parser.parse_known_intermixed_args(list(argv))
    packages = (
        tuple(package.strip() for package in args.packages)
        if args.packages is not None
        else None
    )
    return ScanOptions(
        inputs=tuple(args.inputs),
        verbose=args.verbose,
        quiet=args.quiet,
        packages=packages,
        methods_csv=args.methods_csv,
        fields_csv=args.fields_csv,
        constructors_csv=args.constructors_csv,
        output_format=(
            args.output_format if args.output_format is not None else DEFAULT_FORMAT
        ).lower(),
        charset=args.charset if args.charset is not None else DEFAULT_CHARSET,
        unrecognized=tuple(unrecognized),
    )


def find_processable_paths(inputs: Sequence[str]) -> list[str]:
    """Keep inputs that exist as a regular file or a directory.

    Args:
        inputs: Candidate paths in command-line order.

    Returns:
        Accepted paths, literal as given, in the same order.
    """
    accepted: list[str] = []
    for candidate in inputs:
        path = Path(candidate)
        if path.is_file() or path.is_dir():
            accepted.append(candidate)
        else:
            logger.debug(f"Dropping input that is not a file or directory (path={candidate})")
    return accepted
