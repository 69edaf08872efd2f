# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Introspection interfaces and DTOs for compiled Java classes."""

from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Protocol


ClassKind = Literal["interface", "abstract", "enum", "annotation", "class"]


@dataclass(frozen=True)
class FieldRecord:
    """Represent one declared field.

    Attributes:
        name: Field name.
        type_name: Rendered field type, e.g. ``java.lang.String``.
        modifiers: Space-separated modifier keywords.
        is_static: Whether the field is a class variable.
        annotations: Qualified annotation type names.
    """

    name: str
    type_name: str
    modifiers: str
    is_static: bool
    annotations: tuple[str, ...] = ()


@dataclass(frozen=True)
class MethodRecord:
    """Represent one declared method (never a constructor or initializer).

    Attributes:
        name: Method name.
        return_type: Rendered return type.
        parameter_types: Rendered parameter types in declaration order.
        modifiers: Space-separated modifier keywords.
        is_static: Whether the method is static.
        annotations: Qualified annotation type names on the method.
        parameter_annotations: Annotation names per parameter position.
    """

    name: str
    return_type: str
    parameter_types: tuple[str, ...] = ()
    modifiers: str = ""
    is_static: bool = False
    annotations: tuple[str, ...] = ()
    parameter_annotations: tuple[tuple[str, ...], ...] = ()


@dataclass(frozen=True)
class ConstructorRecord:
    """Represent one declared constructor."""

    parameter_types: tuple[str, ...] = ()
    modifiers: str = ""
    annotations: tuple[str, ...] = ()
    parameter_annotations: tuple[tuple[str, ...], ...] = ()


@dataclass(frozen=True)
class ClassRecord:
    """Represent one discovered class, interface, enum or annotation type.

    Attributes:
        name: Fully qualified dotted class name.
        package: Package name; empty for the default package.
        kind: Classification, see ``ClassKind``.
        superclass: Superclass name, ``None`` when absent or ``java.lang.Object``.
        interfaces: Implemented interface names in declaration order.
        fields: Declared fields in discovery order.
        methods: Declared methods in discovery order.
        constructors: Declared constructors in discovery order.
    """

    name: str
    package: str
    kind: ClassKind = "class"
    superclass: str | None = None
    interfaces: tuple[str, ...] = ()
    fields: tuple[FieldRecord, ...] = ()
    methods: tuple[MethodRecord, ...] = ()
    constructors: tuple[ConstructorRecord, ...] = ()

    @property
    def simple_name(self) -> str:
        """Return the unqualified name, nested classes included."""
        return self.name.rsplit(".", 1)[-1].rsplit("$", 1)[-1]


@dataclass(frozen=True)
class IntrospectionError:
    """Represent a class entry that could not be decoded."""

    source: str
    message: str


class ClassIntrospector(Protocol):
    """Bytecode introspection contract scoped to one input path."""

    def scan(self, path: Path) -> tuple[list[ClassRecord], list[IntrospectionError]]:
        """Enumerate classes found under one file or directory.

        Raises:
            OSError: If the input cannot be read.
        """
