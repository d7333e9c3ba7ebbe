import io
import logging
import random
import struct
import unittest

import vpkdir


__all__ = ['vpkdir', 'TestBase', 'Entry']


class Entry:
    """
    Describes a file for the synthetic directory trees that are generated by the tests.
    """
    def __init__(
        self,
        extension: str,
        directory: str,
        name: str,
        crc: int = 0,
        preload: bytes = B'',
        archive_index: int = 0x7FFF,
        offset: int = 0,
        length: int = 0,
        terminator: int = 0xFFFF,
    ):
        self.extension = extension
        self.directory = directory
        self.name = name
        self.crc = crc
        self.preload = preload
        self.archive_index = archive_index
        self.offset = offset
        self.length = length
        self.terminator = terminator

    def __bytes__(self):
        return struct.pack(
            '<IHHIIH',
            self.crc,
            len(self.preload),
            self.archive_index,
            self.offset,
            self.length,
            self.terminator,
        ) + self.preload


class TestBase(unittest.TestCase):

    def generate_random_buffer(self, size):
        return bytes(random.randrange(0, 0x100) for _ in range(size))

    def setUp(self):
        random.seed(0xBAADF00D)  # guarantee deterministic 'random' buffers
        logging.disable(logging.CRITICAL)

    def tearDown(self):
        logging.disable(logging.NOTSET)

    @staticmethod
    def c_string(text) -> bytes:
        if isinstance(text, str):
            text = text.encode('utf8')
        return text + B'\0'

    @classmethod
    def build_tree(cls, *entries: Entry) -> bytes:
        """
        Encode the given entries as a directory tree. Entries are grouped by extension and then by
        directory in order of their first occurrence.
        """
        groups = {}
        for entry in entries:
            groups.setdefault(entry.extension, {}).setdefault(entry.directory, []).append(entry)
        tree = bytearray()
        for extension, directories in groups.items():
            tree.extend(cls.c_string(extension))
            for directory, files in directories.items():
                tree.extend(cls.c_string(directory))
                for entry in files:
                    tree.extend(cls.c_string(entry.name))
                    tree.extend(bytes(entry))
                tree.append(0)
            tree.append(0)
        tree.append(0)
        return bytes(tree)

    @staticmethod
    def build_header(tree_size: int, version: int = 1, extension=(0, 0, 0, 0), signature=0x55AA1234) -> bytes:
        header = struct.pack('<III', signature, version, tree_size)
        if version == 2:
            header += struct.pack('<IIII', *extension)
        return header

    @classmethod
    def build_vpk(cls, *entries: Entry, version: int = 1, trailer: bytes = B'', **kwargs) -> bytes:
        tree = cls.build_tree(*entries)
        return cls.build_header(len(tree), version, **kwargs) + tree + trailer

    @staticmethod
    def stream(data: bytes):
        return io.BufferedReader(io.BytesIO(data))
