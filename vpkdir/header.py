"""
The fixed-size header at the start of a VPK directory file. Version 1 headers consist of three
little-endian 32-bit integers: the signature, the version, and the size of the directory tree.
Version 2 headers are followed by four additional section sizes.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from vpkdir.errors import InvalidSignature, UnsupportedVersion

if TYPE_CHECKING:
    from vpkdir.lib.structures import StreamReader


@dataclass(frozen=True)
class HeaderExtension:
    file_data_section_size: int
    archive_md5_section_size: int
    other_md5_section_size: int
    signature_section_size: int

    Size: ClassVar[int] = 16

    @classmethod
    def Parse(cls, reader: StreamReader) -> HeaderExtension:
        return cls(
            file_data_section_size=reader.u32(),
            archive_md5_section_size=reader.u32(),
            other_md5_section_size=reader.u32(),
            signature_section_size=reader.u32(),
        )


@dataclass(frozen=True)
class Header:
    version: int
    tree_size: int
    extension: HeaderExtension | None = None

    Signature: ClassVar[int] = 0x55AA1234
    Versions: ClassVar[tuple[int, ...]] = (1, 2)
    Size: ClassVar[int] = 12

    @classmethod
    def Parse(cls, reader: StreamReader) -> Header:
        """
        Read the header from the given reader, which has to be positioned at the start of the
        directory file. Exactly 12 bytes are consumed for version 1 and 28 bytes for version 2.
        """
        signature = reader.u32()
        if signature != cls.Signature:
            raise InvalidSignature(signature, cls.Signature)
        version = reader.u32()
        if version not in cls.Versions:
            raise UnsupportedVersion(version, cls.Versions)
        tree_size = reader.u32()
        extension = HeaderExtension.Parse(reader) if version == 2 else None
        return cls(version, tree_size, extension)

    @property
    def header_size(self) -> int:
        size = self.Size
        if self.extension is not None:
            size += HeaderExtension.Size
        return size

    @property
    def data_offset(self) -> int:
        """
        Offset of the file data section from the start of the directory file; it begins right
        after the directory tree.
        """
        return self.header_size + self.tree_size

    @property
    def data_len(self) -> int | None:
        """
        Length of the file data section; only recorded in version 2 headers.
        """
        if self.extension is None:
            return None
        return self.extension.file_data_section_size
