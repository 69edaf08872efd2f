# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Command-line entry point for the Java class scanner."""

import logging
import sys
from typing import TextIO

from rich.logging import RichHandler

from jcs.console import ConsolePrinter
from jcs.introspector import ClassIntrospector
from jcs.introspectors import ClassFileIntrospector
from jcs.options import build_parser, find_processable_paths, parse_options
from jcs.orchestrator import ScanOrchestrator

logger = logging.getLogger(__name__)


def configure_logging(level: int = logging.INFO) -> None:
    """Configure application logging with Rich handler.

    Args:
        level: Logging severity threshold.
    """
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )


def run(
    argv: list[str],
    stdout: TextIO,
    stderr: TextIO,
    introspector: ClassIntrospector | None = None,
) -> int:
    """Run the scanner.

    Args:
        argv: CLI arguments.
        stdout: Standard output stream.
        stderr: Standard error stream.
        introspector: Introspection backend; defaults to the class file reader.

    Returns:
        Exit code.
    """
    parser = build_parser()
    try:
        options = parse_options(argv, parser=parser)
    except SystemExit as exc:
        if exc.code:
            if "--quiet" not in argv:
                logger.warning(f"Argument parsing failed (argv={argv})")
            stderr.write("Invalid arguments, see --help\n")
        return exc.code if isinstance(exc.code, int) else 2

    if not options.inputs:
        if not options.quiet:
            ConsolePrinter(stdout=stdout).print_text(parser.format_help())
        return 0

    if options.unrecognized and not options.quiet:
        logger.warning(
            f"Ignoring unrecognized arguments (arguments={' '.join(options.unrecognized)})"
        )

    paths = find_processable_paths(options.inputs)
    if not paths:
        if not options.quiet:
            logger.warning("No processable files or directories found in arguments.")
        return 0

    orchestrator = ScanOrchestrator(
        introspector=introspector or ClassFileIntrospector(),
        options=options,
        stdout=stdout,
    )
    return orchestrator.run(paths)


def main() -> None:
    """Run the CLI application and exit."""
    configure_logging()
    exit_code = run(sys.argv[1:], stdout=sys.stdout, stderr=sys.stderr)
    raise SystemExit(exit_code)


if __name__ == "__main__":
    main()
