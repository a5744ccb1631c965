"""Seekable big-endian reader over an in-memory buffer.

Every multi-byte integer in a FreeHand document is big-endian. Reads past
the end raise ``EndOfStreamError``; seeks are clamped to the buffer.
"""

from __future__ import annotations

import struct
import zlib

from .errors import EndOfStreamError, GenericError

SEEK_SET = 0
SEEK_CUR = 1
SEEK_END = 2


class FreeHandStream:
    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._offset = 0

    def __len__(self) -> int:
        return len(self._data)

    @property
    def data(self) -> bytes:
        return self._data

    def tell(self) -> int:
        return self._offset

    def seek(self, offset: int, whence: int = SEEK_SET) -> None:
        if whence == SEEK_CUR:
            target = self._offset + offset
        elif whence == SEEK_END:
            target = len(self._data) + offset
        else:
            target = offset
        self._offset = max(0, min(target, len(self._data)))

    def skip(self, count: int) -> None:
        self.seek(count, SEEK_CUR)

    def at_end(self) -> bool:
        return self._offset >= len(self._data)

    def remaining(self) -> int:
        return len(self._data) - self._offset

    def read(self, count: int) -> bytes:
        """Up to ``count`` bytes; short at the end of the buffer."""
        chunk = self._data[self._offset:self._offset + max(count, 0)]
        self._offset += len(chunk)
        return chunk

    def _unpack(self, fmt: str, size: int) -> int:
        if self.remaining() < size:
            position = self._offset
            self._offset = len(self._data)
            raise EndOfStreamError(f"need {size} bytes at offset 0x{position:x}")
        value = struct.unpack_from(fmt, self._data, self._offset)[0]
        self._offset += size
        return value

    def read_u8(self) -> int:
        return self._unpack(">B", 1)

    def read_u16(self) -> int:
        return self._unpack(">H", 2)

    def read_u32(self) -> int:
        return self._unpack(">I", 4)

    def read_s32(self) -> int:
        return self._unpack(">i", 4)


def inflate(payload: bytes) -> bytes:
    """Decompress a document data stream.

    Raw deflate is tried first, then a zlib-wrapped stream. Both failing is
    a structural error.
    """

    obj = zlib.decompressobj(-zlib.MAX_WBITS)
    try:
        return obj.decompress(payload) + obj.flush()
    except zlib.error:
        pass
    try:
        return zlib.decompress(payload)
    except zlib.error as exc:
        raise GenericError(f"cannot decompress document data: {exc}") from exc


def internal_stream(stream: FreeHandStream, length: int, compressed: bool) -> FreeHandStream:
    """Slice ``length`` bytes from the current position into a new stream."""
    payload = stream.read(max(length, 0))
    if compressed:
        payload = inflate(payload)
    return FreeHandStream(payload)
