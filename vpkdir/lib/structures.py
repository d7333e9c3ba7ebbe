"""
Interfaces and classes to read structured data from binary streams.
"""
from __future__ import annotations

import io

from typing import TYPE_CHECKING, BinaryIO

if TYPE_CHECKING:
    from vpkdir.lib.types import buf


class EOF(EOFError):
    """
    While reading from a `vpkdir.lib.structures.StreamReader`, less bytes were available than
    requested. The exception contains the data from the incomplete read.
    """
    def __init__(self, size: int, rest: buf = B''):
        super().__init__(F'Unexpected end of stream; attempted to read {size} bytes, but got only {len(rest)}.')
        self.rest = rest
        self.size = size

    def __bytes__(self):
        return bytes(self.rest)


class StreamReader:
    """
    A reader for little-endian structured data on top of a binary stream. The stream can only be
    consumed in forward direction. The reader counts every byte that it consumes and can optionally
    be bounded by a `limit`; no read will ever consume data beyond this limit. The stream position
    always reflects exactly the data that was consumed: terminated reads use `peek` where the stream
    provides it, otherwise they seek back over unused data or, for streams that cannot seek, read
    one byte at a time.
    """
    __slots__ = 'stream', 'limit', '_cursor', '_seekable'

    ChunkSize = 0x100

    def __init__(self, stream: BinaryIO, limit: int | None = None):
        self.stream = stream
        self.limit = limit
        self._cursor = 0
        try:
            self._seekable = stream.seekable()
        except AttributeError:
            self._seekable = False

    def close(self) -> None:
        self.stream.close()

    def limited(self, limit: int) -> StreamReader:
        """
        Return a reader for the same stream with a fresh byte count which will not consume more
        than `limit` bytes.
        """
        return self.__class__(self.stream, limit)

    @property
    def remaining(self) -> int | None:
        if self.limit is None:
            return None
        return max(0, self.limit - self._cursor)

    @property
    def eof(self) -> bool:
        return self.limit is not None and self._cursor >= self.limit

    def tell(self) -> int:
        return self._cursor

    def _clamp(self, size: int | None) -> int | None:
        remaining = self.remaining
        if remaining is None:
            return size
        if size is None or size < 0:
            return remaining
        return min(size, remaining)

    def read(self, size: int | None = None) -> bytes:
        size = self._clamp(size)
        data = self.stream.read(size)
        self._cursor += len(data)
        return data

    def read_exactly(self, size: int) -> bytes:
        """
        Read exactly `size` bytes from the stream. Raises an exception of type
        `vpkdir.lib.structures.EOF` when fewer bytes are available, either because the stream
        has ended or because the limit of this reader was reached.
        """
        data = self.read(size)
        if len(data) < size:
            raise EOF(size, data)
        return data

    def read_integer(self, size: int) -> int:
        """
        Read an unsigned integer of the given size (in bits) from the stream.
        """
        nbytes, rest = divmod(size, 8)
        if rest > 0:
            raise ValueError(
                F'A {self.__class__.__name__} cannot read {size} bit{"s" * (size > 1)}, only multiples of 8 are possible.')
        return int.from_bytes(self.read_exactly(nbytes), 'little')

    def u16(self) -> int:
        return self.read_integer(16)

    def u32(self) -> int:
        return self.read_integer(32)

    def _next_chunk(self, size: int) -> bytes:
        stream = self.stream
        if hasattr(stream, 'peek'):
            return stream.peek(1)[:size]
        if self._seekable:
            return stream.read(size)
        return stream.read(1)

    def read_terminated_array(self, terminator: int = 0) -> bytearray:
        """
        Read all bytes up to and including the next occurrence of the `terminator` byte. When the
        stream ends or the limit is reached first, the data that could be read is returned and it
        will not end in the terminator.
        """
        result = bytearray()
        peeking = hasattr(self.stream, 'peek')
        while True:
            remaining = self.remaining
            if remaining == 0:
                break
            chunk = self._next_chunk(self.ChunkSize if remaining is None else min(remaining, self.ChunkSize))
            if not chunk:
                break
            end = chunk.find(terminator)
            size = len(chunk) if end < 0 else end + 1
            if peeking:
                chunk = self.stream.read(size)
            elif size < len(chunk):
                self.stream.seek(size - len(chunk), io.SEEK_CUR)
            result.extend(chunk[:size])
            self._cursor += size
            if end >= 0:
                break
        return result
