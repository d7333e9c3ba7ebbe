"""
Exceptions raised while decoding a VPK directory file. All format violations derive from
`vpkdir.errors.VPKError`, which is a `ValueError`. A stream that ends prematurely raises a
`vpkdir.errors.TruncatedTree`, which is an `EOFError`. Errors of the underlying stream are
never wrapped.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from vpkdir.lib.structures import EOF

if TYPE_CHECKING:
    from vpkdir.lib.types import buf


class VPKError(ValueError):
    """
    Base class for all format errors.
    """


class InvalidHeader(VPKError):
    """
    The header of the directory file could not be decoded; no reader is produced.
    """


class InvalidSignature(InvalidHeader):
    def __init__(self, signature: int, expected: int):
        super().__init__(
            F'vpk file signature invalid; expected 0x{expected:08x}, found 0x{signature:08x}')
        self.signature = signature


class UnsupportedVersion(InvalidHeader):
    def __init__(self, version: int, supported):
        options = ' or '.join(str(v) for v in supported)
        super().__init__(F'vpk version unsupported; expected {options}, found {version}')
        self.version = version


class InvalidPath(VPKError):
    """
    A token in the directory tree is not valid UTF-8.
    """


class InvalidTerminator(VPKError):
    def __init__(self, value: int):
        super().__init__(F'expected 0xffff, found 0x{value:x}')
        self.value = value


class TruncatedTree(EOF):
    """
    The stream ended before the directory tree was complete, or an entry record extends past
    the end of the tree section.
    """
    def __init__(self, message: str, size: int = 0, rest: buf = B''):
        EOFError.__init__(self, message)
        self.rest = rest
        self.size = size
