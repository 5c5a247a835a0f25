"""Compact binary encoding shared by the protocol messages.

Unsigned integers take one byte below 251; larger values are a marker byte
(251, 252, 253) followed by a little-endian u16, u32 or u64. Byte strings and
text are a length followed by the raw bytes; floats are little-endian f32.
"""

from __future__ import annotations

import struct

U32_MAX = 0xFFFF_FFFF
U64_MAX = 0xFFFF_FFFF_FFFF_FFFF

_SINGLE_BYTE_LIMIT = 251
_U16_MARK = 251
_U32_MARK = 252
_U64_MARK = 253


class DecodeError(ValueError):
    """Raised when bytes cannot be decoded into a message."""


class Writer:
    """Accumulates encoded values."""

    def __init__(self) -> None:
        self._buf = bytearray()

    def varint(self, value: int) -> "Writer":
        if not 0 <= value <= U64_MAX:
            raise ValueError(f"unsigned integer out of range: {value}")
        if value < _SINGLE_BYTE_LIMIT:
            self._buf.append(value)
        elif value <= 0xFFFF:
            self._buf.append(_U16_MARK)
            self._buf += struct.pack("<H", value)
        elif value <= U32_MAX:
            self._buf.append(_U32_MARK)
            self._buf += struct.pack("<I", value)
        else:
            self._buf.append(_U64_MARK)
            self._buf += struct.pack("<Q", value)
        return self

    def boolean(self, value: bool) -> "Writer":
        self._buf.append(1 if value else 0)
        return self

    def f32(self, value: float) -> "Writer":
        try:
            self._buf += struct.pack("<f", value)
        except OverflowError as exc:
            raise ValueError(f"value does not fit in f32: {value}") from exc
        return self

    def blob(self, data: bytes) -> "Writer":
        self.varint(len(data))
        self._buf += data
        return self

    def string(self, text: str) -> "Writer":
        return self.blob(text.encode("utf-8"))

    def getvalue(self) -> bytes:
        return bytes(self._buf)


class Reader:
    """Reads encoded values from a byte string, front to back."""

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._pos = 0

    def _take(self, count: int) -> bytes:
        end = self._pos + count
        if end > len(self._data):
            raise DecodeError("unexpected end of data")
        chunk = self._data[self._pos:end]
        self._pos = end
        return chunk

    def _byte(self) -> int:
        return self._take(1)[0]

    def varint(self) -> int:
        first = self._byte()
        if first < _SINGLE_BYTE_LIMIT:
            return first
        if first == _U16_MARK:
            return struct.unpack("<H", self._take(2))[0]
        if first == _U32_MARK:
            return struct.unpack("<I", self._take(4))[0]
        if first == _U64_MARK:
            return struct.unpack("<Q", self._take(8))[0]
        raise DecodeError(f"invalid integer marker: {first}")

    def boolean(self) -> bool:
        value = self._byte()
        if value not in (0, 1):
            raise DecodeError(f"invalid boolean value: {value}")
        return value == 1

    def f32(self) -> float:
        return struct.unpack("<f", self._take(4))[0]

    def blob(self) -> bytes:
        return self._take(self.varint())

    def string(self) -> str:
        raw = self.blob()
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DecodeError("invalid utf-8 in string") from exc

    def option_tag(self) -> bool:
        """Read an optional-value marker; True when a value follows."""
        tag = self._byte()
        if tag not in (0, 1):
            raise DecodeError(f"invalid option tag: {tag}")
        return tag == 1