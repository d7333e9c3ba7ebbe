import io
import struct

from vpkdir.errors import InvalidHeader, InvalidSignature, UnsupportedVersion
from vpkdir.header import Header, HeaderExtension
from vpkdir.lib.structures import EOF, StreamReader

from . import TestBase


class TestHeader(TestBase):

    def test_version1(self):
        reader = StreamReader(io.BytesIO(self.build_header(0x1234) + B'TREE'))
        header = Header.Parse(reader)
        self.assertEqual(header.version, 1)
        self.assertEqual(header.tree_size, 0x1234)
        self.assertIsNone(header.extension)
        self.assertEqual(header.header_size, 12)
        self.assertEqual(header.data_offset, 12 + 0x1234)
        self.assertIsNone(header.data_len)
        self.assertEqual(reader.tell(), 12)

    def test_version2(self):
        data = self.build_header(100, version=2, extension=(5000, 48, 64, 296)) + B'TREE'
        reader = StreamReader(io.BytesIO(data))
        header = Header.Parse(reader)
        self.assertEqual(header.version, 2)
        self.assertEqual(header.extension, HeaderExtension(5000, 48, 64, 296))
        self.assertEqual(header.header_size, 28)
        self.assertEqual(header.data_offset, 128)
        self.assertEqual(header.data_len, 5000)
        self.assertEqual(reader.tell(), 28)
        self.assertEqual(reader.read(4), B'TREE')

    def test_data_offset_is_header_size_plus_tree_size(self):
        for version, header_size in ((1, 12), (2, 28)):
            for tree_size in (0, 1, 0x100, 0xFFFFFFFF):
                header = Header.Parse(StreamReader(io.BytesIO(self.build_header(tree_size, version))))
                self.assertEqual(header.data_offset, header_size + tree_size)

    def test_invalid_signature(self):
        data = struct.pack('<III', 0x34123412, 1, 0)
        with self.assertRaises(InvalidSignature) as context:
            Header.Parse(StreamReader(io.BytesIO(data)))
        self.assertEqual(context.exception.signature, 0x34123412)
        self.assertIn('0x55aa1234', str(context.exception))

    def test_big_endian_signature_is_rejected(self):
        data = struct.pack('>III', 0x55AA1234, 1, 0)
        self.assertRaises(InvalidHeader, Header.Parse, StreamReader(io.BytesIO(data)))

    def test_unsupported_version(self):
        for version in (0, 3, 0x100):
            with self.assertRaises(UnsupportedVersion) as context:
                Header.Parse(StreamReader(io.BytesIO(self.build_header(0, version))))
            self.assertEqual(context.exception.version, version)
            self.assertIsInstance(context.exception, ValueError)

    def test_invalid_signature_consumes_nothing_else(self):
        reader = StreamReader(io.BytesIO(B'VPK!' + self.build_header(10)))
        self.assertRaises(InvalidSignature, Header.Parse, reader)
        self.assertEqual(reader.tell(), 4)

    def test_truncated_header(self):
        data = self.build_header(10, version=2)[:20]
        with self.assertRaises(EOF) as context:
            Header.Parse(StreamReader(io.BytesIO(data)))
        self.assertEqual(context.exception.size, 4)
        self.assertEqual(context.exception.rest, B'')

    def test_header_is_immutable(self):
        header = Header(1, 20)
        with self.assertRaises(AttributeError):
            header.tree_size = 30
