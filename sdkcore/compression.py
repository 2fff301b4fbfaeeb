"""Streaming gzip compression and decompression of binary readers."""

from __future__ import annotations

import gzip
import io
import zlib
from typing import BinaryIO

_CHUNK_SIZE = 64 * 1024
_GZIP_MAGIC = b"\x1f\x8b"


def _as_stream(source: BinaryIO | bytes | bytearray | memoryview) -> BinaryIO:
    if isinstance(source, (bytes, bytearray, memoryview)):
        return io.BytesIO(bytes(source))
    return source


class _GzipCompressingStream(io.RawIOBase):
    """Raw stream that yields the gzip-compressed form of a source, on demand."""

    def __init__(self, source: BinaryIO) -> None:
        self._source = source
        self._compressor = zlib.compressobj(zlib.Z_DEFAULT_COMPRESSION, zlib.DEFLATED, 31)
        self._pending = bytearray()
        self._finished = False

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:
        while not self._pending and not self._finished:
            chunk = self._source.read(_CHUNK_SIZE)
            if chunk:
                self._pending += self._compressor.compress(chunk)
            else:
                self._pending += self._compressor.flush()
                self._finished = True
        count = min(len(buffer), len(self._pending))
        buffer[:count] = self._pending[:count]
        del self._pending[:count]
        return count


class _PrefixedStream(io.RawIOBase):
    """Raw stream that yields already-consumed bytes before the rest of a source."""

    def __init__(self, prefix: bytes, source: BinaryIO) -> None:
        self._prefix = bytearray(prefix)
        self._source = source

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:
        if self._prefix:
            count = min(len(buffer), len(self._prefix))
            buffer[:count] = self._prefix[:count]
            del self._prefix[:count]
            return count
        chunk = self._source.read(len(buffer))
        if not chunk:
            return 0
        buffer[: len(chunk)] = chunk
        return len(chunk)


def gzip_compression_reader(uncompressed: BinaryIO | bytes) -> io.BufferedReader:
    """Return a reader delivering the gzip-compressed form of ``uncompressed``.

    The source is read lazily, as the returned reader is consumed.
    """
    return io.BufferedReader(_GzipCompressingStream(_as_stream(uncompressed)))


def gzip_decompression_reader(compressed: BinaryIO | bytes) -> gzip.GzipFile:
    """Return a reader delivering the decompressed form of gzip data.

    Raises EOFError if the input is empty or truncated before the header,
    and gzip.BadGzipFile if it does not start with a gzip header.
    """
    stream = _as_stream(compressed)
    magic = stream.read(len(_GZIP_MAGIC))
    if len(magic) < len(_GZIP_MAGIC):
        raise EOFError("gzip stream ended before its header")
    if magic != _GZIP_MAGIC:
        raise gzip.BadGzipFile(f"not a gzipped stream (magic {magic!r})")
    return gzip.GzipFile(fileobj=_PrefixedStream(magic, stream), mode="rb")