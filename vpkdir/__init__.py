R"""
This is the documentation of the `vpkdir` package, a reader for the directory files of Valve Pak
(VPK) archives. A directory file begins with a header and a tree that lists every file in the
archive: its path, a CRC32 checksum, an optional preload block of inline data, and the location of
the remaining data. That data is stored either in the data section of the directory file itself
or in one of the numbered archives that accompany it.

The reader never loads the tree into memory as a whole; it decodes one file record at a time:

    from vpkdir import DirReader

    with DirReader.Open('pak01_dir.vpk') as vpk:
        for record in vpk:
            print(record.path, record.archive_index, record.entry_offset, record.entry_length)

The following modules are relevant:

1. `vpkdir.header`: the fixed-size header and the offsets derived from it
2. `vpkdir.reader`: the tree iterator and the `vpkdir.reader.FileRecord` type
3. `vpkdir.errors`: exceptions raised for malformed input
4. `vpkdir.lib.environment`: configuration via environment variables and logging
"""
from __future__ import annotations

__version__ = '0.1.0'
__distribution__ = 'vpkdir'

from vpkdir.errors import (
    InvalidHeader,
    InvalidPath,
    InvalidSignature,
    InvalidTerminator,
    TruncatedTree,
    UnsupportedVersion,
    VPKError,
)
from vpkdir.header import Header, HeaderExtension
from vpkdir.reader import DirReader, FileRecord

__all__ = [
    'DirReader',
    'FileRecord',
    'Header',
    'HeaderExtension',
    'InvalidHeader',
    'InvalidPath',
    'InvalidSignature',
    'InvalidTerminator',
    'TruncatedTree',
    'UnsupportedVersion',
    'VPKError',
]
