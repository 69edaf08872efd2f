# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""CSV/TSV output of methods, fields and constructors."""

import codecs
import csv
import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Literal

from jcs.introspector import ClassRecord
from jcs.selection import sorted_constructors, sorted_fields, sorted_methods

logger = logging.getLogger(__name__)

OutputKind = Literal["methods", "fields", "constructors"]

FALLBACK_CHARSET = "utf-8"
ANNOTATION_SEPARATOR = "|"
PARAMETER_GROUP_SEPARATOR = ";"
PARAMETER_TYPE_SEPARATOR = ", "

HEADERS: dict[OutputKind, tuple[str, ...]] = {
    "methods": (
        "source-path",
        "class-name",
        "method-name",
        "return-type",
        "parameters",
        "modifiers",
        "is-static",
        "method-annotations",
        "parameter-annotations",
    ),
    "fields": (
        "source-path",
        "class-name",
        "field-name",
        "field-type",
        "modifiers",
        "is-static",
        "field-annotations",
    ),
    "constructors": (
        "source-path",
        "class-name",
        "parameters",
        "modifiers",
        "constructor-annotations",
        "parameter-annotations",
    ),
}

_DIALECTS: dict[str, type[csv.Dialect]] = {"csv": csv.excel, "tsv": csv.excel_tab}


@dataclass(frozen=True)
class OutputFormat:
    """Represent a resolved output format."""

    name: str
    dialect: type[csv.Dialect]


def resolve_charset(name: str, quiet: bool) -> str:
    """Resolve an encoding name, falling back to UTF-8.

    Args:
        name: Requested encoding name.
        quiet: Suppress the fallback warning.

    Returns:
        Canonical codec name usable with ``open``.
    """
    try:
        codec_name = codecs.lookup(name).name
        # binary codecs such as base64 resolve but cannot back a text file
        "".encode(codec_name)
        return codec_name
    except (LookupError, TypeError, ValueError):
        if not quiet:
            logger.warning(f"Invalid charset '{name}', using UTF-8")
        return FALLBACK_CHARSET


def resolve_format(name: str, quiet: bool) -> OutputFormat:
    """Resolve an output format name, falling back to CSV.

    Args:
        name: Requested format name (``csv`` or ``tsv``).
        quiet: Suppress the fallback warning.

    Returns:
        The resolved format.
    """
    key = name.lower()
    if key not in _DIALECTS:
        if not quiet:
            logger.warning(f"Unknown format '{name}', using CSV")
        key = "csv"
    return OutputFormat(name=key, dialect=_DIALECTS[key])


class CsvTargetState:
    """Track which (kind, destination) pairs already carry a header row."""

    def __init__(self) -> None:
        self._written: set[tuple[OutputKind, str]] = set()

    def claim(self, kind: OutputKind, destination: str) -> bool:
        """Return ``True`` the first time a pair is claimed, ``False`` afterwards."""
        key = (kind, destination)
        if key in self._written:
            return False
        self._written.add(key)
        return True


class CsvWriter:
    """Append member rows to CSV/TSV files with header-once semantics."""

    def __init__(
        self,
        output_format: OutputFormat,
        charset: str,
        quiet: bool = False,
        state: CsvTargetState | None = None,
    ) -> None:
        """Initialize writer configuration.

        Args:
            output_format: Resolved CSV or TSV format.
            charset: Resolved output encoding.
            quiet: Suppress informational logging.
            state: Header bookkeeping shared across calls.
        """
        self._format = output_format
        self._charset = charset
        self._quiet = quiet
        self._state = state or CsvTargetState()

    def write(
        self,
        kind: OutputKind,
        source_path: str,
        classes: Sequence[ClassRecord],
        destination: str,
    ) -> int:
        """Write one input's rows for an output kind.

        The first call for a ``(kind, destination)`` pair truncates the file
        and writes the header; later calls append.

        Args:
            kind: Output kind selecting columns and rows.
            source_path: Input path the classes were read from, as given.
            classes: Filtered classes in output order.
            destination: Output file path.

        Returns:
            Number of data rows written.

        Raises:
            OSError: If the file cannot be opened or written.
        """
        first_write = self._state.claim(kind, destination)
        row_count = 0
        with open(
            destination,
            "w" if first_write else "a",
            encoding=self._charset,
            errors="replace",
            newline="",
        ) as handle:
            writer = csv.writer(handle, dialect=self._format.dialect)
            if first_write:
                writer.writerow(HEADERS[kind])
            for row in iter_rows(kind, source_path, classes):
                writer.writerow(row)
                row_count += 1

        if not self._quiet:
            logger.info(
                f"{kind.capitalize()} {self._format.name.upper()} generated: "
                f"{destination} (encoding: {self._charset})"
            )
        return row_count


def iter_rows(
    kind: OutputKind, source_path: str, classes: Sequence[ClassRecord]
) -> Iterator[list[str]]:
    """Yield the data rows of one output kind for a list of classes."""
    for record in classes:
        if kind == "methods":
            for method in sorted_methods(record):
                yield [
                    source_path,
                    record.name,
                    method.name,
                    method.return_type,
                    PARAMETER_TYPE_SEPARATOR.join(method.parameter_types),
                    method.modifiers,
                    _flag(method.is_static),
                    ANNOTATION_SEPARATOR.join(method.annotations),
                    format_parameter_annotations(method.parameter_annotations),
                ]
        elif kind == "fields":
            for field in sorted_fields(record):
                yield [
                    source_path,
                    record.name,
                    field.name,
                    field.type_name,
                    field.modifiers,
                    _flag(field.is_static),
                    ANNOTATION_SEPARATOR.join(field.annotations),
                ]
        else:
            for ctor in sorted_constructors(record):
                yield [
                    source_path,
                    record.name,
                    PARAMETER_TYPE_SEPARATOR.join(ctor.parameter_types),
                    ctor.modifiers,
                    ANNOTATION_SEPARATOR.join(ctor.annotations),
                    format_parameter_annotations(ctor.parameter_annotations),
                ]


def format_parameter_annotations(groups: Sequence[Sequence[str]]) -> str:
    """Render per-parameter annotation groups.

    Returns:
        ``A|B;;C`` style text, or an empty string when no parameter is annotated.
    """
    if not any(groups):
        return ""
    return PARAMETER_GROUP_SEPARATOR.join(
        ANNOTATION_SEPARATOR.join(group) for group in groups
    )


def _flag(value: bool) -> str:
    return "true" if value else "false"
