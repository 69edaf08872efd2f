import struct
import sys
import zipfile
from pathlib import Path

import pytest


def _add_src_to_path() -> None:
    root = Path(__file__).resolve().parents[1]
    src_path = root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


_add_src_to_path()


ACC_PUBLIC = 0x0001
ACC_PRIVATE = 0x0002
ACC_SUPER = 0x0020


class ClassFileBuilder:
    """Assemble a minimal class file: constant pool, members and annotations."""

    def __init__(
        self,
        name: str,
        access: int = ACC_PUBLIC | ACC_SUPER,
        superclass: str | None = "java/lang/Object",
        interfaces: tuple[str, ...] = (),
    ) -> None:
        self._name = name
        self._access = access
        self._superclass = superclass
        self._interfaces = interfaces
        self._pool: list[bytes] = []
        self._utf8: dict[str, int] = {}
        self._class_refs: dict[str, int] = {}
        self._fields: list[tuple[int, str, str, tuple[str, ...], tuple[tuple[str, ...], ...]]] = []
        self._methods: list[tuple[int, str, str, tuple[str, ...], tuple[tuple[str, ...], ...]]] = []

    def add_field(
        self,
        name: str,
        descriptor: str,
        access: int = ACC_PRIVATE,
        annotations: tuple[str, ...] = (),
    ) -> "ClassFileBuilder":
        self._fields.append((access, name, descriptor, annotations, ()))
        return self

    def add_method(
        self,
        name: str,
        descriptor: str,
        access: int = ACC_PUBLIC,
        annotations: tuple[str, ...] = (),
        parameter_annotations: tuple[tuple[str, ...], ...] = (),
    ) -> "ClassFileBuilder":
        self._methods.append((access, name, descriptor, annotations, parameter_annotations))
        return self

    def build(self) -> bytes:
        this_index = self._class_index(self._name)
        super_index = self._class_index(self._superclass) if self._superclass else 0
        interface_indices = [self._class_index(name) for name in self._interfaces]
        fields = [self._member(*member) for member in self._fields]
        methods = [self._member(*member) for member in self._methods]

        out = bytearray(b"\xca\xfe\xba\xbe")
        out += struct.pack(">HH", 0, 52)
        out += struct.pack(">H", len(self._pool) + 1)
        for entry in self._pool:
            out += entry
        out += struct.pack(">HHH", self._access, this_index, super_index)
        out += struct.pack(">H", len(interface_indices))
        for index in interface_indices:
            out += struct.pack(">H", index)
        out += struct.pack(">H", len(fields))
        for field in fields:
            out += field
        out += struct.pack(">H", len(methods))
        for method in methods:
            out += method
        out += struct.pack(">H", 0)
        return bytes(out)

    def write_to(self, root: Path) -> Path:
        target = root / f"{self._name}.class"
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(self.build())
        return target

    def _utf8_index(self, value: str) -> int:
        if value not in self._utf8:
            encoded = value.encode("utf-8")
            self._pool.append(struct.pack(">BH", 1, len(encoded)) + encoded)
            self._utf8[value] = len(self._pool)
        return self._utf8[value]

    def _class_index(self, internal_name: str) -> int:
        if internal_name not in self._class_refs:
            name_index = self._utf8_index(internal_name)
            self._pool.append(struct.pack(">BH", 7, name_index))
            self._class_refs[internal_name] = len(self._pool)
        return self._class_refs[internal_name]

    def _annotation_block(self, annotations: tuple[str, ...]) -> bytes:
        block = struct.pack(">H", len(annotations))
        for annotation in annotations:
            type_index = self._utf8_index(f"L{annotation.replace('.', '/')};")
            block += struct.pack(">HH", type_index, 0)
        return block

    def _attribute(self, name: str, info: bytes) -> bytes:
        return struct.pack(">HI", self._utf8_index(name), len(info)) + info

    def _member(
        self,
        access: int,
        name: str,
        descriptor: str,
        annotations: tuple[str, ...],
        parameter_annotations: tuple[tuple[str, ...], ...],
    ) -> bytes:
        attributes: list[bytes] = []
        if annotations:
            attributes.append(
                self._attribute(
                    "RuntimeVisibleAnnotations", self._annotation_block(annotations)
                )
            )
        if parameter_annotations:
            info = struct.pack(">B", len(parameter_annotations))
            for group in parameter_annotations:
                info += self._annotation_block(group)
            attributes.append(
                self._attribute("RuntimeVisibleParameterAnnotations", info)
            )
        member = struct.pack(
            ">HHHH",
            access,
            self._utf8_index(name),
            self._utf8_index(descriptor),
            len(attributes),
        )
        return member + b"".join(attributes)


@pytest.fixture
def class_file_builder() -> type[ClassFileBuilder]:
    return ClassFileBuilder


@pytest.fixture
def corrupt_jar(tmp_path: Path) -> Path:
    """Write a JAR whose only class entry has an invalid deflate stream."""
    jar_path = tmp_path / "corrupt.jar"
    data = ClassFileBuilder("com/example/Broken").add_method("run", "()V").build()
    with zipfile.ZipFile(jar_path, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        archive.writestr("com/example/Broken.class", data)
    with zipfile.ZipFile(jar_path) as archive:
        entry = archive.getinfo("com/example/Broken.class")
    raw = bytearray(jar_path.read_bytes())
    name_length, extra_length = struct.unpack_from("<HH", raw, entry.header_offset + 26)
    # BTYPE bits 11 mark a reserved block type
    raw[entry.header_offset + 30 + name_length + extra_length] = 0xFF
    jar_path.write_bytes(bytes(raw))
    return jar_path
