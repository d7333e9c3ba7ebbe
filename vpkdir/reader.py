"""
Reader for the directory tree of VPK files. The tree groups all files first by extension, then by
directory, and finally lists the file names. Every group level is a sequence of null-terminated
strings which is terminated by an empty string:

    <extension>\\0
        <directory>\\0
            <name>\\0 <entry> <preload data>
            <name>\\0 <entry> <preload data>
            \\0
        <directory>\\0
            ...
            \\0
        \\0
    <extension>\\0
        ...
    \\0

A single space in place of an extension, directory, or name denotes that this component is empty.
The `vpkdir.reader.DirReader` flattens this tree into a sequence of `vpkdir.reader.FileRecord`s
that is produced lazily while the stream is consumed.
"""
from __future__ import annotations

import codecs

from dataclasses import dataclass
from typing import TYPE_CHECKING, BinaryIO, Iterator

from vpkdir.errors import InvalidPath, InvalidTerminator, TruncatedTree
from vpkdir.header import Header
from vpkdir.lib.environment import environment, logger
from vpkdir.lib.structures import EOF, StreamReader

if TYPE_CHECKING:
    from typing import Self

    from vpkdir.lib.types import buf

NO_ARCHIVE = 0x7FFF
ENTRY_TERMINATOR = 0xFFFF
PLACEHOLDER = ' '

_log = logger(__name__)


@dataclass(frozen=True)
class FileRecord:
    """
    A single file listed in the directory tree. The offset and length refer to the file data
    section of this directory file when `archive_index` is `None`, and to the start of the
    numbered archive otherwise. The first part of the file content is stored in `preload_data`.
    """
    path: str
    checksum: int
    preload_data: bytes = B''
    archive_index: int | None = None
    entry_offset: int = 0
    entry_length: int = 0

    @property
    def in_directory_file(self) -> bool:
        return self.archive_index is None

    @property
    def size(self) -> int:
        return len(self.preload_data) + self.entry_length


def join_path(extension: str, directory: str, name: str) -> str:
    """
    Combine the three components of a tree entry into a path. Components that consist of the
    placeholder are omitted along with their separator.
    """
    path = []
    if directory != PLACEHOLDER:
        path.append(directory)
        path.append('/')
    if name != PLACEHOLDER:
        path.append(name)
    if extension != PLACEHOLDER:
        path.append('.')
        path.append(extension)
    return ''.join(path)


def _decode(token: buf) -> str:
    try:
        return codecs.decode(token, 'utf8')
    except UnicodeDecodeError as error:
        raise InvalidPath(F'invalid UTF-8 in directory tree token {bytes(token)!r}') from error


class DirReader(Iterator[FileRecord]):
    """
    Iterates the files in a VPK directory tree. The header is decoded when the reader is created,
    which fails with a `vpkdir.errors.InvalidHeader` if the stream does not begin with a supported
    VPK header. The reader takes ownership of the stream and consumes it while iterating; it can
    therefore only be iterated once. No more than `tree_size` bytes of the tree are consumed.

    When the stream ends before the tree is complete, a `vpkdir.errors.TruncatedTree` is raised,
    unless the reader is not `strict`. By default, the reader is strict unless the environment
    variable `VPKDIR_LENIENT` is set. After an exception was raised, iteration stops.
    """
    header: Header
    strict: bool

    def __init__(self, stream: BinaryIO, strict: bool | None = None):
        reader = StreamReader(stream)
        self.header = header = Header.Parse(reader)
        self.strict = not environment.lenient.value if strict is None else strict
        self._tree = reader.limited(header.tree_size)
        self._path = bytearray()
        self._extn_len = 0
        self._dir_len = 0
        self._done = False
        self._count = 0
        _log.debug(
            F'version {header.version} header decoded; tree size is {header.tree_size}, '
            F'data offset is {header.data_offset}.')

    @classmethod
    def Open(cls, path: str, strict: bool | None = None) -> Self:
        stream = open(path, 'rb')
        try:
            return cls(stream, strict)
        except BaseException:
            stream.close()
            raise

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *_) -> bool:
        self.close()
        return False

    def close(self) -> None:
        self._done = True
        self._tree.close()

    def version(self) -> int:
        return self.header.version

    def tree_size(self) -> int:
        return self.header.tree_size

    def data_offset(self) -> int:
        return self.header.data_offset

    def data_len(self) -> int | None:
        return self.header.data_len

    @property
    def bytes_read(self) -> int:
        """
        The number of bytes of the directory tree that have been consumed so far.
        """
        return self._tree.tell()

    @property
    def done(self) -> bool:
        return self._done

    def __iter__(self) -> Self:
        return self

    def __next__(self) -> FileRecord:
        if self._done:
            raise StopIteration
        try:
            record = self._next_record()
        except Exception:
            self._done = True
            raise
        if record is None:
            self._done = True
            _log.info(F'read {self._count} files from {self.bytes_read} bytes of directory tree.')
            raise StopIteration
        self._count += 1
        return record

    def _next_record(self) -> FileRecord | None:
        tree = self._tree
        path = self._path
        while True:
            if tree.eof:
                return None
            token = tree.read_terminated_array(0)
            if not token or token[-1] != 0:
                if tree.eof:
                    _log.debug(F'tree boundary reached inside a token of {len(token)} bytes.')
                    return None
                if not self.strict:
                    return None
                raise TruncatedTree(
                    F'stream ended after {tree.tell()} of {tree.limit} bytes of the directory tree',
                    tree.limit - tree.tell(), token)
            del token[-1]
            if not token:
                if self._dir_len:
                    del path[self._extn_len:]
                    self._dir_len = 0
                elif self._extn_len:
                    path.clear()
                    self._extn_len = 0
                else:
                    if not tree.eof:
                        _log.warning(F'directory tree ended with {tree.remaining} bytes left unread.')
                    return None
                continue
            path.extend(token)
            if not self._extn_len:
                self._extn_len = len(token)
            elif not self._dir_len:
                self._dir_len = len(token)
            else:
                record = self._read_record()
                del path[self._extn_len + self._dir_len:]
                return record

    def _read_record(self) -> FileRecord:
        path = self._path
        a = self._extn_len
        b = self._extn_len + self._dir_len
        file_path = join_path(_decode(path[:a]), _decode(path[a:b]), _decode(path[b:]))
        if not file_path:
            raise InvalidPath('entry has neither a directory, a name, nor an extension')
        tree = self._tree
        try:
            checksum = tree.u32()
            preload_size = tree.u16()
            archive_index = tree.u16()
            entry_offset = tree.u32()
            entry_length = tree.u32()
            terminator = tree.u16()
            if terminator != ENTRY_TERMINATOR:
                raise InvalidTerminator(terminator)
            preload_data = bytes(tree.read_exactly(preload_size))
        except EOF as eof:
            raise TruncatedTree(
                F'entry for {file_path} extends past the end of the directory tree', eof.size, eof.rest) from eof
        if archive_index == NO_ARCHIVE:
            archive_index = None
        record = FileRecord(
            file_path,
            checksum,
            preload_data,
            archive_index,
            entry_offset,
            entry_length,
        )
        _log.debug(
            F'decoded {file_path} with {preload_size} preload bytes and {entry_length} bytes at '
            F'offset 0x{entry_offset:08X} in archive {archive_index}.')
        return record
