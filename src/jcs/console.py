# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Console rendering of discovered classes."""

from collections.abc import Sequence
from typing import TextIO

from rich.console import Console

from jcs.introspector import ClassKind, ClassRecord
from jcs.selection import sorted_constructors, sorted_fields, sorted_methods

KIND_LABELS: dict[ClassKind, str] = {
    "interface": "Interface",
    "abstract": "Abstract Class",
    "enum": "Enum",
    "annotation": "Annotation",
    "class": "Class",
}


class ConsolePrinter:
    """Print class names or full class detail to a text stream."""

    def __init__(self, stdout: TextIO, verbose: bool = False) -> None:
        self._console = Console(
            file=stdout, force_terminal=False, color_system=None, soft_wrap=True
        )
        self._verbose = verbose

    def print_classes(self, classes: Sequence[ClassRecord]) -> None:
        for record in classes:
            if self._verbose:
                for line in verbose_lines(record):
                    self._emit(line)
            else:
                self._emit(f"  {record.name}")

    def print_text(self, text: str) -> None:
        self._emit(text.rstrip("\n"))

    def _emit(self, line: str) -> None:
        self._console.print(line, markup=False, highlight=False, emoji=False)


def verbose_lines(record: ClassRecord) -> list[str]:
    """Render the detailed view of one class.

    Args:
        record: Class to render.

    Returns:
        Output lines, ending with an empty separator line.
    """
    lines = [f"  {record.name}", f"    Type: {KIND_LABELS[record.kind]}"]
    if record.superclass is not None:
        lines.append(f"    Superclass: {record.superclass}")
    if record.interfaces:
        lines.append(f"    Interfaces: {', '.join(record.interfaces)}")
    lines.append(f"    Package: {record.package}")

    fields = sorted_fields(record)
    if fields:
        lines.append("    Fields:")
        for field in fields:
            scope = "class variable" if field.is_static else "instance variable"
            declaration = _join(field.modifiers, field.type_name, field.name)
            lines.append(f"      {declaration} ({scope})")

    methods = sorted_methods(record)
    if methods:
        lines.append("    Methods:")
        for method in methods:
            signature = f"{method.name}({', '.join(method.parameter_types)})"
            lines.append(f"      {_join(method.modifiers, method.return_type, signature)}")

    constructors = sorted_constructors(record)
    if constructors:
        lines.append("    Constructors:")
        for ctor in constructors:
            signature = f"{record.simple_name}({', '.join(ctor.parameter_types)})"
            lines.append(f"      {_join(ctor.modifiers, signature)}")

    lines.append("")
    return lines


def _join(*parts: str) -> str:
    return " ".join(part for part in parts if part)
