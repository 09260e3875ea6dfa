"""Big-endian readers and writers over contiguous byte buffers."""

from __future__ import annotations

import struct
from typing import Callable, TypeVar

from .errors import InvalidString, OutOfBounds, ShortRead

T = TypeVar("T")

_U8 = struct.Struct(">B")
_I8 = struct.Struct(">b")
_U16 = struct.Struct(">H")
_I16 = struct.Struct(">h")
_U32 = struct.Struct(">I")
_I32 = struct.Struct(">i")
_U64 = struct.Struct(">Q")
_I64 = struct.Struct(">q")


class Reader:
    """A cursor over an immutable byte buffer."""

    __slots__ = ("_data", "_pos")

    def __init__(self, data: bytes | bytearray | memoryview = b"") -> None:
        view = memoryview(data)
        if view.format != "B" or view.ndim != 1:
            view = view.cast("B")
        self._data = view
        self._pos = 0

    def __repr__(self) -> str:
        return f"Reader(remaining={self.remaining()})"

    def _check(self, size: int) -> None:
        if size < 0 or size > self.remaining():
            raise OutOfBounds()

    def remaining(self) -> int:
        """Number of bytes not yet consumed."""
        return len(self._data) - self._pos

    def has_remaining(self) -> bool:
        return self.remaining() > 0

    def peek(self, size: int) -> bytes:
        """Return the next ``size`` bytes without consuming them."""
        self._check(size)
        return bytes(self._data[self._pos : self._pos + size])

    def advance(self, n: int) -> None:
        """Skip ``n`` bytes."""
        self._check(n)
        self._pos += n

    def take(self, size: int) -> Reader:
        """Consume the next ``size`` bytes and return a reader over just them."""
        self._check(size)
        sub = Reader(self._data[self._pos : self._pos + size])
        self._pos += size
        return sub

    def read_bytes(self, n: int) -> bytes:
        """Consume exactly ``n`` bytes."""
        data = self.peek(n)
        self._pos += n
        return data

    def read_rest(self) -> bytes:
        """Consume every remaining byte."""
        return self.read_bytes(self.remaining())

    def _unpack(self, fmt: struct.Struct) -> int:
        self._check(fmt.size)
        (value,) = fmt.unpack_from(self._data, self._pos)
        self._pos += fmt.size
        return value

    def read_u8(self) -> int:
        return self._unpack(_U8)

    def read_i8(self) -> int:
        return self._unpack(_I8)

    def read_u16(self) -> int:
        return self._unpack(_U16)

    def read_i16(self) -> int:
        return self._unpack(_I16)

    def read_u32(self) -> int:
        return self._unpack(_U32)

    def read_i32(self) -> int:
        return self._unpack(_I32)

    def read_u64(self) -> int:
        return self._unpack(_U64)

    def read_i64(self) -> int:
        return self._unpack(_I64)

    def read_cstring(self) -> str:
        """Read a NUL-terminated UTF-8 string; the terminator is optional at the end."""
        rest = bytes(self._data[self._pos :])
        end = rest.find(0)
        if end < 0:
            raw = rest
            self._pos += len(rest)
        else:
            raw = rest[:end]
            self._pos += end + 1
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as err:
            raise InvalidString(str(err)) from err

    def read_exact(self, size: int, decode: Callable[[Reader], T]) -> T:
        """Decode a value that must occupy exactly the next ``size`` bytes."""
        if self.remaining() < size:
            raise OutOfBounds()
        inner = Reader(self._data[self._pos : self._pos + size])
        result = decode(inner)
        if inner.has_remaining():
            raise ShortRead()
        self._pos += size
        return result


class Writer:
    """A growable byte buffer that can patch bytes already written."""

    __slots__ = ("_buf",)

    def __init__(self) -> None:
        self._buf = bytearray()

    def __len__(self) -> int:
        return len(self._buf)

    def __bytes__(self) -> bytes:
        return bytes(self._buf)

    def write_bytes(self, data: bytes | bytearray | memoryview) -> None:
        self._buf += data

    def _write_int(self, value: int, size: int, signed: bool) -> None:
        self._buf += value.to_bytes(size, "big", signed=signed)

    def write_u8(self, value: int) -> None:
        self._write_int(value, 1, False)

    def write_i8(self, value: int) -> None:
        self._write_int(value, 1, True)

    def write_u16(self, value: int) -> None:
        self._write_int(value, 2, False)

    def write_i16(self, value: int) -> None:
        self._write_int(value, 2, True)

    def write_u32(self, value: int) -> None:
        self._write_int(value, 4, False)

    def write_i32(self, value: int) -> None:
        self._write_int(value, 4, True)

    def write_u64(self, value: int) -> None:
        self._write_int(value, 8, False)

    def write_i64(self, value: int) -> None:
        self._write_int(value, 8, True)

    def write_cstring(self, value: str) -> None:
        """Write a string as UTF-8 followed by a NUL terminator."""
        self._buf += value.encode("utf-8")
        self._buf.append(0)

    def set_bytes(self, pos: int, data: bytes) -> None:
        """Overwrite bytes already written, starting at ``pos``."""
        if pos < 0 or pos + len(data) > len(self._buf):
            raise IndexError("set_bytes outside the written region")
        self._buf[pos : pos + len(data)] = data

    def getvalue(self) -> bytes:
        return bytes(self._buf)