"""
Interfaces and classes to read structured binary data from memory.
"""
from __future__ import annotations

import contextlib
import io

from typing import TYPE_CHECKING, Any, Generic, TypeVar, Union, cast

if TYPE_CHECKING:
    buf = Union[bytes, bytearray, memoryview]
    T = TypeVar('T', bound=buf)
else:
    buf = Any
    T = TypeVar('T')


class EOF(EOFError):
    """
    While reading from a `pngme.lib.structures.MemoryFile`, less bytes were available than
    requested. The exception contains the data from the incomplete read.
    """
    def __init__(self, size: int, rest: buf = B''):
        super().__init__(F'Unexpected end of buffer; attempted to read {size} bytes, but got only {len(rest)}.')
        self.rest = rest
        self.size = size

    def __bytes__(self):
        return bytes(self.rest)


class MemoryFile(io.BytesIO, Generic[T]):
    """
    A thin wrapper around a byte sequence which gives it a read cursor without copying the
    underlying buffer.
    """
    _data: T
    _cursor: int

    def __init__(self, data: T) -> None:
        if not isinstance(data, (bytearray, bytes, memoryview)):
            raise TypeError(F'Invalid input: {data!r}.')
        self._cursor = 0
        self._data = data

    def __len__(self):
        return len(self._data)

    @property
    def eof(self) -> bool:
        return self._cursor >= len(self._data)

    @property
    def remaining_bytes(self) -> int:
        return len(self._data) - self.tell()

    def read(self, size: int | None = None, peek: bool = False) -> T:
        beginning = self._cursor
        if size is None or size < 0:
            end = len(self._data)
        else:
            end = min(self._cursor + size, len(self._data))
        result = self._data[beginning:end]
        if not peek:
            self._cursor = end
        return cast(T, result)

    def tell(self) -> int:
        return self._cursor


class StructReader(MemoryFile[T]):
    """
    An extension of a `pngme.lib.structures.MemoryFile` which provides methods to read
    integers and exactly sized byte strings.
    """
    def __init__(self, data: T, bigendian: bool = False):
        super().__init__(data)
        self.bigendian = bigendian

    @property
    @contextlib.contextmanager
    def be(self):
        bigendian = self.bigendian
        self.bigendian = True
        try:
            yield self
        finally:
            self.bigendian = bigendian

    @property
    def byteorder_name(self):
        return 'big' if self.bigendian else 'little'

    def read_exactly(self, size: int | None = None, peek: bool = False) -> T:
        """
        Read bytes from the underlying stream. Raises an exception of type `pngme.lib.structures.EOF`
        when fewer data is available in the stream than requested via the `size` parameter. The
        remaining data can be extracted from the exception.
        """
        data = self.read(size, peek)
        if size and len(data) < size:
            raise EOF(size, data)
        return data

    def read_integer(self, size: int, peek: bool = False, signed: bool = False) -> int:
        """
        Read an integer of the given size (in bits) from the stream.
        """
        nbytes, rest = divmod(size, 8)
        if rest > 0:
            raise ValueError(
                F'A {self.__class__.__name__} cannot read {size} bit{"s" * (size > 1)}, only multiples of 8 are possible.')
        data = self.read(nbytes, peek)
        if len(data) < nbytes:
            raise EOF(nbytes, data)
        return int.from_bytes(data, self.byteorder_name, signed=signed)

    def read_bytes(self, size: int, peek: bool = False) -> bytes:
        """
        Read exactly `size` many bytes and return them as an immutable copy.
        """
        data = self.read_exactly(size, peek)
        if not isinstance(data, bytes):
            data = bytes(data)
        return data

    def u32(self, peek: bool = False) -> int:
        return self.read_integer(32, peek)
