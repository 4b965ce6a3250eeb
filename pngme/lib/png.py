#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
A codec for the chunk structure of PNG files. A PNG file is a fixed 8-byte signature followed by
a sequence of chunks, each of which is laid out as follows; all integers are big endian:

    length (4) | type (4) | data (length) | crc (4)

The checksum is the standard CRC-32 computed over the type code and the data. This module parses
such a file into a `pngme.lib.png.Png` object, allows to append, find and remove chunks, and
serializes the result back to bytes. Image data is never interpreted.
"""
from __future__ import annotations

import zlib

from typing import TYPE_CHECKING, Iterable, Union

from pngme.lib.environment import logger
from pngme.lib.structures import EOF, StructReader

if TYPE_CHECKING:
    from typing import Iterator

    from pngme.lib.structures import buf

    ChunkTypeLike = Union[str, bytes, 'ChunkType']


__all__ = [
    'Chunk',
    'ChunkNotFound',
    'ChunkType',
    'ChecksumMismatch',
    'EncodingError',
    'InvalidSignature',
    'InvalidTypeCode',
    'LengthMismatch',
    'Png',
    'PngError',
]

_logger = logger(__name__)


class PngError(ValueError):
    """
    Base class for all errors raised while decoding or manipulating PNG chunk data.
    """


class InvalidSignature(PngError):
    def __init__(self, signature: buf):
        self.signature = bytes(signature)
        super().__init__(
            F'Invalid PNG signature {self.signature.hex(":").upper() or "(empty)"}, '
            F'should be {Png.Signature.hex(":").upper()}.')


class InvalidTypeCode(PngError):
    def __init__(self, code: buf | str):
        self.code = code
        super().__init__(F'Invalid chunk type {code!r}; a chunk type must consist of 4 ASCII letters.')


class LengthMismatch(PngError):
    """
    The buffer does not hold the number of bytes that the chunk layout requires; `expected` is the
    size that the chunk header announces and `available` is what the buffer actually contains.
    """
    def __init__(self, offset: int, expected: int, available: int):
        self.offset = offset
        self.expected = expected
        self.available = available
        super().__init__(
            F'Chunk at offset {offset:#x} requires {expected} bytes, but {available} bytes are available.')


class ChecksumMismatch(PngError):
    def __init__(self, chunk_type: ChunkType, expected: int, computed: int):
        self.chunk_type = chunk_type
        self.expected = expected
        self.computed = computed
        super().__init__(
            F'Invalid checksum for chunk {chunk_type};'
            F' computed {computed:08X},'
            F' expected {expected:08X}.')


class ChunkNotFound(PngError, LookupError):
    def __init__(self, chunk_type: ChunkType):
        self.chunk_type = chunk_type
        super().__init__(F'No chunk of type {chunk_type} was found.')


class EncodingError(PngError, UnicodeError):
    def __init__(self, chunk_type: ChunkType, encoding: str, reason: str):
        self.chunk_type = chunk_type
        self.encoding = encoding
        super().__init__(F'The data of chunk {chunk_type} is not valid {encoding} text: {reason}')


class ChunkType:
    """
    The 4-byte type code of a chunk. Bit 5 of each byte, i.e. the case of the letter, encodes a
    property of the chunk:

    1. first byte uppercase: the chunk is critical, otherwise it is ancillary.
    2. second byte uppercase: the chunk type is public, otherwise it is private.
    3. third byte uppercase: the reserved bit is valid; it must be unset in conforming files.
    4. fourth byte lowercase: the chunk is safe to copy for editors that do not understand it.

    The reserved bit is only queried, it does not prevent construction.
    """
    __slots__ = '_code',

    _code: bytes

    PropertyBit = 0x20

    def __init__(self, code: buf):
        code = bytes(code)
        if len(code) != 4 or not code.isalpha():
            raise InvalidTypeCode(code)
        self._code = code

    @classmethod
    def FromBytes(cls, data: buf) -> ChunkType:
        return cls(data)

    @classmethod
    def FromString(cls, code: str) -> ChunkType:
        if not code.isascii():
            raise InvalidTypeCode(code)
        return cls(code.encode('ascii'))

    @classmethod
    def Coerce(cls, code: ChunkTypeLike) -> ChunkType:
        """
        Convert a string, a byte string or a `pngme.lib.png.ChunkType` into a chunk type.
        """
        if isinstance(code, cls):
            return code
        if isinstance(code, str):
            return cls.FromString(code)
        return cls.FromBytes(code)

    def bytes(self) -> bytes:
        return self._code

    def _bit(self, index: int) -> bool:
        return bool(self._code[index] & self.PropertyBit)

    def is_critical(self) -> bool:
        return not self._bit(0)

    def is_public(self) -> bool:
        return not self._bit(1)

    def is_reserved_bit_valid(self) -> bool:
        return not self._bit(2)

    def is_safe_to_copy(self) -> bool:
        return self._bit(3)

    def is_valid(self) -> bool:
        return self.is_reserved_bit_valid()

    def __setattr__(self, name, value):
        if hasattr(self, '_code'):
            raise AttributeError(F'{self.__class__.__name__} is immutable.')
        super().__setattr__(name, value)

    def __bytes__(self):
        return self._code

    def __str__(self):
        return self._code.decode('ascii')

    def __repr__(self):
        return F'{self.__class__.__name__}({str(self)!r})'

    def __eq__(self, other):
        if not isinstance(other, ChunkType):
            return NotImplemented
        return self._code == other._code

    def __hash__(self):
        return hash(self._code)


class Chunk:
    """
    A single PNG chunk. The length and the checksum are always derived from the chunk type and
    the data, so they can never disagree with the payload.
    """
    __slots__ = '_type', '_data'

    PreviewLimit = 64

    def __init__(self, chunk_type: ChunkTypeLike, data: buf = B''):
        self._type = ChunkType.Coerce(chunk_type)
        self._data = bytes(data)

    @classmethod
    def Parse(cls, reader: buf | StructReader) -> Chunk:
        """
        Parse one chunk from the current position of the given reader; a buffer is wrapped in a new
        reader. The cursor of the reader is advanced past the chunk. The data of the resulting
        chunk is a copy and does not reference the input buffer.
        """
        if not isinstance(reader, StructReader):
            reader = StructReader(memoryview(reader))
        offset = reader.tell()
        available = reader.remaining_bytes
        with reader.be:
            try:
                length = reader.u32()
            except EOF:
                raise LengthMismatch(offset, 12, available)
            if available < length + 12:
                raise LengthMismatch(offset, length + 12, available)
            chunk_type = ChunkType.FromBytes(reader.read_bytes(4))
            data = reader.read_bytes(length)
            crc = reader.u32()
        chunk = cls(chunk_type, data)
        _logger.debug(
            F'{offset:#x}: chunk {chunk_type} of size {length:#010x}, crc32={chunk.crc:08X}, check={crc:08X}')
        if chunk.crc != crc:
            raise ChecksumMismatch(chunk_type, crc, chunk.crc)
        return chunk

    @classmethod
    def FromBytes(cls, data: buf) -> Chunk:
        """
        Parse a buffer that contains exactly one chunk and nothing else.
        """
        reader = StructReader(memoryview(data))
        chunk = cls.Parse(reader)
        if not reader.eof:
            raise LengthMismatch(0, reader.tell(), len(reader))
        return chunk

    @property
    def chunk_type(self) -> ChunkType:
        return self._type

    @property
    def data(self) -> bytes:
        return self._data

    @property
    def length(self) -> int:
        return len(self._data)

    @property
    def crc(self) -> int:
        return zlib.crc32(self._data, zlib.crc32(self._type.bytes())) & 0xFFFFFFFF

    def data_as_string(self, encoding: str = 'utf8') -> str:
        try:
            return self._data.decode(encoding)
        except UnicodeDecodeError as error:
            raise EncodingError(self._type, encoding, error.reason) from error

    def as_bytes(self) -> bytes:
        return b''.join((
            self.length.to_bytes(4, 'big'),
            self._type.bytes(),
            self._data,
            self.crc.to_bytes(4, 'big'),
        ))

    def __bytes__(self):
        return self.as_bytes()

    def __eq__(self, other):
        if not isinstance(other, Chunk):
            return NotImplemented
        return self._type == other._type and self._data == other._data

    def __hash__(self):
        return hash((self._type, self._data))

    def __repr__(self):
        return F'{self.__class__.__name__}({self._type!r}, length={self.length})'

    def __str__(self):
        preview = None
        if self.length < self.PreviewLimit:
            try:
                preview = self.data_as_string()
            except EncodingError:
                pass
        if preview is None:
            preview = F'[.. {self.length} bytes ..]'
        return F"Chunk{{type: {self._type}, data: '{preview}', len: {self.length}}}"


class Png:
    """
    An in-memory PNG document: the signature followed by an ordered list of chunks. Chunks are
    kept in file order; appending adds to the end and removing never reorders the remainder.
    """
    Signature = B'\x89PNG\r\n\x1A\n'

    def __init__(self, chunks: Iterable[Chunk] = ()):
        self._chunks: list[Chunk] = list(chunks)

    @classmethod
    def FromBytes(cls, data: buf) -> Png:
        """
        Parse a complete PNG file. Any error in the signature or in one of the chunks aborts the
        parse; there is no partial result.
        """
        reader = StructReader(memoryview(data), bigendian=True)
        signature = reader.read(len(cls.Signature))
        if signature != cls.Signature:
            raise InvalidSignature(signature)
        chunks = []
        while not reader.eof:
            chunks.append(Chunk.Parse(reader))
        _logger.debug(F'parsed {len(chunks)} chunks from {len(data)} bytes')
        return cls(chunks)

    @property
    def chunks(self) -> tuple[Chunk, ...]:
        return tuple(self._chunks)

    def append_chunk(self, chunk: Chunk) -> None:
        self._chunks.append(chunk)
        _logger.info(F'appended chunk {chunk.chunk_type} with {chunk.length} bytes of data')

    def _index_of(self, code: ChunkTypeLike) -> int | None:
        chunk_type = ChunkType.Coerce(code)
        for index, chunk in enumerate(self._chunks):
            if chunk.chunk_type == chunk_type:
                return index
        return None

    def chunk_by_type(self, code: ChunkTypeLike) -> Chunk | None:
        """
        Return the first chunk of the given type or `None` if there is no such chunk.
        """
        index = self._index_of(code)
        if index is None:
            return None
        return self._chunks[index]

    def remove_chunk(self, code: ChunkTypeLike) -> Chunk:
        """
        Remove and return the first chunk of the given type. Raises a
        `pngme.lib.png.ChunkNotFound` exception if the document has no such chunk.
        """
        index = self._index_of(code)
        if index is None:
            raise ChunkNotFound(ChunkType.Coerce(code))
        chunk = self._chunks.pop(index)
        _logger.info(F'removed chunk {chunk.chunk_type} at index {index}')
        return chunk

    def as_bytes(self) -> bytes:
        return self.Signature + b''.join(chunk.as_bytes() for chunk in self._chunks)

    def __bytes__(self):
        return self.as_bytes()

    def __len__(self):
        return len(self._chunks)

    def __iter__(self) -> Iterator[Chunk]:
        return iter(self.chunks)

    def __repr__(self):
        return F'{self.__class__.__name__}(chunks={len(self._chunks)})'

    def __str__(self):
        return '\n'.join(F'{chunk.chunk_type} {chunk.length}' for chunk in self._chunks)
