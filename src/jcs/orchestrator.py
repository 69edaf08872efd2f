# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Per-input scan, filter and report orchestration."""

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import TextIO

from jcs.console import ConsolePrinter
from jcs.csv_output import (
    CsvTargetState,
    CsvWriter,
    OutputKind,
    resolve_charset,
    resolve_format,
)
from jcs.introspector import ClassIntrospector, ClassRecord
from jcs.options import ScanOptions
from jcs.selection import select_classes

logger = logging.getLogger(__name__)


class ScanOrchestrator:
    """Scan each input path in turn and report its classes."""

    def __init__(
        self,
        introspector: ClassIntrospector,
        options: ScanOptions,
        stdout: TextIO,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            introspector: Bytecode introspection backend.
            options: Parsed command-line options.
            stdout: Stream receiving console output.
        """
        self._introspector = introspector
        self._options = options
        self._printer = ConsolePrinter(stdout=stdout, verbose=options.verbose)
        self._csv_state = CsvTargetState()
        self._csv_writer: CsvWriter | None = None

    def run(self, paths: Sequence[str]) -> int:
        """Process all accepted input paths.

        Args:
            paths: Accepted input paths in command-line order.

        Returns:
            ``0`` on success, ``1`` when an I/O failure aborted the run.
        """
        try:
            for path in paths:
                self._process_path(path)
        except OSError as exc:
            if not self._options.quiet:
                logger.error(f"Error processing files: {exc}")
            return 1
        return 0

    def _process_path(self, source_path: str) -> None:
        quiet = self._options.quiet
        path = Path(source_path)
        label = "directory" if path.is_dir() else "file"
        if not quiet:
            logger.info(f"=== Analyzing {label} : {source_path} ===")

        classes, errors = self._introspector.scan(path)
        if not quiet:
            for error in errors:
                logger.warning(
                    f"Skipping undecodable class file (path={source_path} "
                    f"source={error.source} error={error.message})"
                )
        if not classes:
            if not quiet:
                logger.info(f"No classes found in {label}.")
            return

        selected = select_classes(classes, self._options.packages)
        if not quiet:
            logger.info(f"Found {len(selected)} classes:")

        self._write_csv_outputs(source_path, selected)

        if not quiet:
            self._printer.print_classes(selected)

    def _write_csv_outputs(self, source_path: str, classes: list[ClassRecord]) -> None:
        destinations: list[tuple[OutputKind, str | None]] = [
            ("methods", self._options.methods_csv),
            ("fields", self._options.fields_csv),
            ("constructors", self._options.constructors_csv),
        ]
        for kind, destination in destinations:
            if destination is None:
                continue
            self._get_csv_writer().write(
                kind=kind,
                source_path=source_path,
                classes=classes,
                destination=destination,
            )

    def _get_csv_writer(self) -> CsvWriter:
        if self._csv_writer is None:
            quiet = self._options.quiet
            self._csv_writer = CsvWriter(
                output_format=resolve_format(self._options.output_format, quiet),
                charset=resolve_charset(self._options.charset, quiet),
                quiet=quiet,
                state=self._csv_state,
            )
        return self._csv_writer
