R"""
This is the pngme package documentation. The package hides messages inside PNG files by storing
them in chunks of their own, and recovers or removes them again. The image data is never touched.

The library part is contained in `pngme.lib.png`, which exports the three classes that a caller
will usually need; they are also available from the package root:

1. `pngme.lib.png.ChunkType`: the 4-letter type code of a chunk and its property bits
2. `pngme.lib.png.Chunk`: a single chunk with its data and checksum
3. `pngme.lib.png.Png`: a complete PNG file as an ordered sequence of chunks

For example, a message can be added to a PNG file as follows:

    >>> from pngme import Chunk, Png
    >>> png = Png.FromBytes(data)
    >>> png.append_chunk(Chunk('ruSt', B'secret message'))
    >>> data = bytes(png)

The command line interface is documented in `pngme.commands`.
"""
from __future__ import annotations

__version__ = '0.3.1'
__distribution__ = 'pngme'

from pngme.lib.png import (
    Chunk,
    ChunkNotFound,
    ChunkType,
    ChecksumMismatch,
    EncodingError,
    InvalidSignature,
    InvalidTypeCode,
    LengthMismatch,
    Png,
    PngError,
)

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
