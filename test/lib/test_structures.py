from pngme.lib.structures import EOF, MemoryFile, StructReader

from .. import TestBase


class TestStructures(TestBase):

    def test_memoryfile_buffers(self):
        buffers: list[bytes | bytearray | memoryview] = [
            B'Portable Network Graphics'
        ]
        buffers.append(bytearray(buffers[0]))
        buffers.append(memoryview(buffers[0]))
        for b in buffers:
            mem = MemoryFile(b)
            self.assertEqual(len(mem), 25)
            self.assertEqual(bytes(mem.read(8)), B'Portable')
            self.assertEqual(mem.tell(), 8)
            self.assertEqual(mem.remaining_bytes, 17)
            self.assertEqual(bytes(mem.read(9, peek=True)), B' Network ')
            self.assertEqual(mem.tell(), 8)
            self.assertEqual(bytes(mem.read()), B' Network Graphics')
            self.assertTrue(mem.eof)
            self.assertEqual(mem.read(4), B'')

    def test_memoryfile_does_not_copy(self):
        data = bytearray(B'ABCD')
        mem = MemoryFile(data)
        data[0] = 0x5A
        self.assertEqual(mem.read(1), B'Z')

    def test_memoryfile_invalid_input(self):
        with self.assertRaises(TypeError):
            MemoryFile('text')  # type: ignore

    def test_bigendian_integers(self):
        sr = StructReader(bytes.fromhex('0000002A 49484452 AE426082'), bigendian=True)
        self.assertEqual(sr.u32(), 42)
        self.assertEqual(sr.read_bytes(4), B'IHDR')
        self.assertEqual(sr.u32(peek=True), 0xAE426082)
        self.assertEqual(sr.read_integer(16), 0xAE42)
        self.assertEqual(sr.read_integer(16), 0x6082)
        self.assertTrue(sr.eof)

    def test_littleendian_integers(self):
        sr = StructReader(bytes.fromhex('2A000000 FFFF'))
        self.assertEqual(sr.u32(), 42)
        self.assertEqual(sr.read_integer(16, signed=True), -1)

    def test_bigendian_context(self):
        sr = StructReader(bytes.fromhex('00000001 00000001'))
        with sr.be:
            self.assertTrue(sr.bigendian)
            self.assertEqual(sr.u32(), 1)
        self.assertFalse(sr.bigendian)
        self.assertEqual(sr.u32(), 0x01000000)

    def test_bigendian_context_restores_bigendian(self):
        sr = StructReader(B'', bigendian=True)
        with sr.be:
            pass
        self.assertTrue(sr.bigendian)

    def test_eof(self):
        sr = StructReader(B'\x01\x02\x03')
        with self.assertRaises(EOF) as context:
            sr.u32()
        self.assertEqual(bytes(context.exception), B'\x01\x02\x03')
        self.assertEqual(context.exception.size, 4)
        sr = StructReader(B'\x01\x02\x03')
        with self.assertRaises(EOF):
            sr.read_exactly(4)
        with self.assertRaises(EOF):
            StructReader(B'IDA').read_bytes(4)

    def test_read_bytes_copies(self):
        data = bytearray(B'IDAT')
        sr = StructReader(memoryview(data))
        out = sr.read_bytes(4)
        self.assertIsInstance(out, bytes)
        data[0] = 0x20
        self.assertEqual(out, B'IDAT')

    def test_invalid_integer_size(self):
        with self.assertRaises(ValueError):
            StructReader(B'\0\0').read_integer(12)
