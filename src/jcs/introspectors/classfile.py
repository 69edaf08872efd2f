# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Class file introspector backed by the javatools library."""

import logging
import zipfile
import zlib
from collections.abc import Iterator
from pathlib import Path

import javatools
from javatools.pack import UnpackException

from jcs.introspector import (
    ClassKind,
    ClassRecord,
    ConstructorRecord,
    FieldRecord,
    IntrospectionError,
    MethodRecord,
)
from jcs.selection import is_excluded_method

logger = logging.getLogger(__name__)

CLASS_SUFFIX = ".class"
SKIPPED_CLASS_FILES = frozenset({"module-info.class", "package-info.class"})
MULTI_RELEASE_PREFIX = "META-INF/versions/"
OBJECT_CLASS = "java.lang.Object"

_DECODE_ERRORS = (
    javatools.ClassUnpackException,
    javatools.Unimplemented,
    UnpackException,
    IndexError,
    ValueError,
)

# zlib.error on corrupt deflate data, NotImplementedError on unsupported
# compression, RuntimeError on encrypted entries
_ARCHIVE_READ_ERRORS = (
    zipfile.BadZipFile,
    zlib.error,
    EOFError,
    NotImplementedError,
    RuntimeError,
)


class ClassFileIntrospector:
    """Enumerate classes in a class file, an archive or a class directory."""

    def scan(self, path: Path) -> tuple[list[ClassRecord], list[IntrospectionError]]:
        """Decode every class reachable from one input path.

        Args:
            path: A ``.class`` file, a JAR/ZIP archive or a directory.

        Returns:
            A tuple of decoded classes and recoverable decode errors.

        Raises:
            OSError: If the input or one of its entries cannot be read.
        """
        classes: list[ClassRecord] = []
        errors: list[IntrospectionError] = []

        for source, data in self._iter_class_data(path):
            try:
                info = javatools.unpack_class(data)
                classes.append(_build_class_record(info))
            except _DECODE_ERRORS as exc:
                logger.debug(f"Class file decode failed (source={source} error={exc})")
                errors.append(IntrospectionError(source=source, message=str(exc)))

        return classes, errors

    def _iter_class_data(self, path: Path) -> Iterator[tuple[str, bytes]]:
        if path.is_dir():
            for class_file in sorted(path.rglob(f"*{CLASS_SUFFIX}")):
                if not class_file.is_file() or class_file.name in SKIPPED_CLASS_FILES:
                    continue
                yield str(class_file.relative_to(path)), class_file.read_bytes()
        elif javatools.is_class_file(str(path)):
            if path.name not in SKIPPED_CLASS_FILES:
                yield path.name, path.read_bytes()
        elif zipfile.is_zipfile(path):
            yield from self._iter_archive(path)
        else:
            logger.debug(f"Input is neither a class file nor an archive (path={path})")

    def _iter_archive(self, path: Path) -> Iterator[tuple[str, bytes]]:
        try:
            with zipfile.ZipFile(path) as archive:
                for entry in archive.infolist():
                    if not _is_archive_class_entry(entry):
                        continue
                    yield entry.filename, _read_archive_entry(path, archive, entry)
        except zipfile.BadZipFile as exc:
            raise OSError(f"Corrupt archive {path}: {exc}") from exc


def _read_archive_entry(
    path: Path, archive: zipfile.ZipFile, entry: zipfile.ZipInfo
) -> bytes:
    try:
        return archive.read(entry)
    except _ARCHIVE_READ_ERRORS as exc:
        raise OSError(f"Cannot read {entry.filename} from archive {path}: {exc}") from exc


def _is_archive_class_entry(entry: zipfile.ZipInfo) -> bool:
    name = entry.filename
    if entry.is_dir() or not name.endswith(CLASS_SUFFIX):
        return False
    if name.startswith(MULTI_RELEASE_PREFIX):
        return False
    return name.rsplit("/", 1)[-1] not in SKIPPED_CLASS_FILES


def _build_class_record(info: javatools.JavaClassInfo) -> ClassRecord:
    name = info.pretty_this()
    superclass = info.pretty_super() or None
    if superclass == OBJECT_CLASS:
        superclass = None

    methods: list[MethodRecord] = []
    constructors: list[ConstructorRecord] = []
    for member in info.methods:
        member_name = member.get_name()
        if member_name == "<init>":
            constructors.append(_build_constructor_record(member))
        elif not is_excluded_method(member_name):
            methods.append(_build_method_record(member))

    return ClassRecord(
        name=name,
        package=name.rpartition(".")[0],
        kind=_classify(info),
        superclass=superclass,
        interfaces=tuple(info.pretty_interfaces()),
        fields=tuple(_build_field_record(field) for field in info.fields),
        methods=tuple(methods),
        constructors=tuple(constructors),
    )


def _classify(info: javatools.JavaClassInfo) -> ClassKind:
    if info.is_interface():
        return "interface"
    if info.is_abstract():
        return "abstract"
    if info.is_enum():
        return "enum"
    if info.is_annotation():
        return "annotation"
    return "class"


def _build_field_record(member: javatools.JavaMemberInfo) -> FieldRecord:
    return FieldRecord(
        name=member.get_name(),
        type_name=member.pretty_type(),
        modifiers=_modifiers(member),
        is_static=bool(member.is_static()),
        annotations=_annotation_names(member),
    )


def _build_method_record(member: javatools.JavaMemberInfo) -> MethodRecord:
    parameter_types = tuple(member.pretty_arg_types())
    return MethodRecord(
        name=member.get_name(),
        return_type=member.pretty_type(),
        parameter_types=parameter_types,
        modifiers=_modifiers(member),
        is_static=bool(member.is_static()),
        annotations=_annotation_names(member),
        parameter_annotations=_parameter_annotation_names(
            member, len(parameter_types)
        ),
    )


def _build_constructor_record(member: javatools.JavaMemberInfo) -> ConstructorRecord:
    parameter_types = tuple(member.pretty_arg_types())
    return ConstructorRecord(
        parameter_types=parameter_types,
        modifiers=_modifiers(member),
        annotations=_annotation_names(member),
        parameter_annotations=_parameter_annotation_names(
            member, len(parameter_types)
        ),
    )


def _modifiers(member: javatools.JavaMemberInfo) -> str:
    return " ".join(member.pretty_access_flags())


def _annotation_names(member: javatools.JavaMemberInfo) -> tuple[str, ...]:
    annotations = member.get_annotations() + member.get_invisible_annotations()
    return tuple(annotation.pretty_type() for annotation in annotations)


def _parameter_annotation_names(
    member: javatools.JavaMemberInfo, parameter_count: int
) -> tuple[tuple[str, ...], ...]:
    """Merge visible and invisible parameter annotations by position.

    The attribute tables may list fewer entries than the descriptor has
    parameters (javac omits synthetic leading parameters), so entries are
    aligned to the last parameter.
    """
    groups: list[list[str]] = [[] for _ in range(parameter_count)]
    for table in (
        member.get_parameter_annotations(),
        member.get_invisible_parameter_annotations(),
    ):
        offset = parameter_count - len(table)
        for index, annotations in enumerate(table):
            position = index + offset
            if 0 <= position < parameter_count:
                groups[position].extend(a.pretty_type() for a in annotations)
    return tuple(tuple(group) for group in groups)
