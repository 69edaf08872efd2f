# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Package filtering and deterministic ordering of classes and members."""

from collections.abc import Iterable, Sequence

from jcs.introspector import ClassRecord, ConstructorRecord, FieldRecord, MethodRecord

EXCLUDED_METHOD_NAMES = frozenset({"<init>", "<clinit>"})
LAMBDA_MARKER = "lambda$"


def is_excluded_method(name: str) -> bool:
    """Return whether a method name denotes an initializer or a lambda body."""
    return name in EXCLUDED_METHOD_NAMES or LAMBDA_MARKER in name


def matches_package_filter(class_name: str, package_filter: Sequence[str] | None) -> bool:
    """Check a class name against package filters.

    Matching is a raw string prefix test, so ``com.examplefoo.A`` matches the
    filter ``com.example``.

    Args:
        class_name: Fully qualified class name.
        package_filter: Filter prefixes, or ``None`` when no filter was given.

    Returns:
        ``True`` when no filter is set or any trimmed prefix matches.
    """
    if package_filter is None:
        return True
    return any(class_name.startswith(prefix.strip()) for prefix in package_filter)


def select_classes(
    classes: Iterable[ClassRecord], package_filter: Sequence[str] | None
) -> list[ClassRecord]:
    """Filter classes by package prefix and sort them by name."""
    return sorted(
        (record for record in classes if matches_package_filter(record.name, package_filter)),
        key=lambda record: record.name,
    )


def sorted_fields(record: ClassRecord) -> list[FieldRecord]:
    return sorted(record.fields, key=lambda field: field.name)


def sorted_methods(record: ClassRecord) -> list[MethodRecord]:
    return sorted(
        (method for method in record.methods if not is_excluded_method(method.name)),
        key=lambda method: method.name,
    )


def sorted_constructors(record: ClassRecord) -> list[ConstructorRecord]:
    # sorted() is stable: equal arities keep discovery order
    return sorted(record.constructors, key=lambda ctor: len(ctor.parameter_types))
