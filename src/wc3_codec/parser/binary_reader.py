"""Bounded little-endian reader over a record buffer."""

import struct

from wc3_codec.models.errors import OutOfRangeAccessError


def check_range(size: int, offset: int, length: int) -> None:
    """Raise unless [offset, offset + length) lies within a buffer of *size*."""
    if offset < 0 or length < 0 or offset + length > size:
        raise OutOfRangeAccessError(
            f"Access of {length} bytes at offset {offset} "
            f"would exceed boundary at {size}"
        )


class BinaryReader:
    """Wraps a buffer with typed reads and a moving cursor.

    Reads never run past the end of the buffer; a short field raises
    OutOfRangeAccessError instead of returning truncated bytes.
    """

    __slots__ = ("_data", "_pos", "_end")

    def __init__(self, data: bytes | bytearray, offset: int = 0) -> None:
        self._data = data
        self._end = len(data)
        if not 0 <= offset <= self._end:
            raise OutOfRangeAccessError(f"Start offset {offset} is outside bounds [0, {self._end}]")
        self._pos = offset

    def _read(self, size: int) -> bytes:
        check_range(self._end, self._pos, size)
        chunk = bytes(self._data[self._pos : self._pos + size])
        self._pos += size
        return chunk

    def uint8(self) -> int:
        return self._read(1)[0]

    def uint16(self) -> int:
        return struct.unpack_from("<H", self._read(2))[0]

    def uint32(self) -> int:
        return struct.unpack_from("<I", self._read(4))[0]

    def skip(self, size: int) -> None:
        check_range(self._end, self._pos, size)
        self._pos += size
