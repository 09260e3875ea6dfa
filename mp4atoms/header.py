"""Four-character codes and atom headers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import BinaryIO

from .codec import Reader, Writer
from .errors import InvalidFourCC, InvalidSize, OutOfBounds, UnexpectedEof

_U32_MAX = 0xFFFFFFFF


@dataclass(frozen=True, init=False)
class FourCC:
    """A four-byte code naming an atom or a brand."""

    value: bytes

    def __init__(self, value: FourCC | bytes | bytearray | str | int) -> None:
        if isinstance(value, FourCC):
            raw = value.value
        elif isinstance(value, int):
            if not 0 <= value <= _U32_MAX:
                raise InvalidFourCC()
            raw = value.to_bytes(4, "big")
        elif isinstance(value, str):
            try:
                raw = value.encode("latin-1")
            except UnicodeEncodeError as err:
                raise InvalidFourCC() from err
        else:
            raw = bytes(value)
        if len(raw) != 4:
            raise InvalidFourCC()
        object.__setattr__(self, "value", raw)

    def __str__(self) -> str:
        return self.value.decode("latin-1")

    def __repr__(self) -> str:
        return f"FourCC({str(self)!r})"

    def __bytes__(self) -> bytes:
        return self.value

    def __int__(self) -> int:
        return int.from_bytes(self.value, "big")

    @classmethod
    def decode(cls, reader: Reader) -> FourCC:
        return cls(reader.read_bytes(4))

    def encode(self, writer: Writer) -> None:
        writer.write_bytes(self.value)


def _read_up_to(stream: BinaryIO, size: int) -> bytes:
    chunks = bytearray()
    while len(chunks) < size:
        chunk = stream.read(size - len(chunks))
        if not chunk:
            break
        chunks += chunk
    return bytes(chunks)


def _read_exactly(stream: BinaryIO, size: int) -> bytes:
    data = _read_up_to(stream, size)
    if len(data) != size:
        raise UnexpectedEof()
    return data


def _body_size(raw_size: int, header_len: int) -> int:
    if raw_size < header_len:
        raise InvalidSize()
    return raw_size - header_len


@dataclass(frozen=True)
class Header:
    """An atom header: its kind and the size of its body, excluding the header.

    A size of ``None`` means the atom extends to the end of the data.
    """

    kind: FourCC
    size: int | None = None

    def encode(self, writer: Writer) -> None:
        if self.size is None:
            writer.write_u32(0)
            self.kind.encode(writer)
            return
        total = self.size + 8
        if total > _U32_MAX:
            writer.write_u32(1)
            self.kind.encode(writer)
            # The extended size field counts itself as well.
            writer.write_u64(total + 8)
        else:
            writer.write_u32(total)
            self.kind.encode(writer)

    @classmethod
    def decode(cls, reader: Reader) -> Header:
        raw_size = reader.read_u32()
        kind = FourCC.decode(reader)
        if raw_size == 0:
            size = None
        elif raw_size == 1:
            size = _body_size(reader.read_u64(), 16)
        else:
            size = _body_size(raw_size, 8)
        return cls(kind, size)

    @classmethod
    def decode_maybe(cls, reader: Reader) -> Header | None:
        """Decode a header, or return ``None`` if the buffer is too short to hold one."""
        if reader.remaining() < 8:
            return None
        raw_size = int.from_bytes(reader.peek(4), "big")
        if raw_size == 1 and reader.remaining() < 16:
            return None
        return cls.decode(reader)

    @classmethod
    def read_from(cls, stream: BinaryIO) -> Header:
        header = cls.read_optional(stream)
        if header is None:
            raise UnexpectedEof()
        return header

    @classmethod
    def read_optional(cls, stream: BinaryIO) -> Header | None:
        """Read a header from a stream, or return ``None`` at a clean end of stream."""
        first = stream.read(8)
        if not first:
            return None
        head = first + _read_exactly(stream, 8 - len(first))
        raw_size = int.from_bytes(head[:4], "big")
        kind = FourCC(head[4:8])
        if raw_size == 0:
            size = None
        elif raw_size == 1:
            size = _body_size(int.from_bytes(_read_exactly(stream, 8), "big"), 16)
        else:
            size = _body_size(raw_size, 8)
        return cls(kind, size)

    def read_body(self, stream: BinaryIO) -> Reader:
        """Read this header's body from a stream into memory."""
        if self.size is None:
            return Reader(stream.read())
        data = _read_up_to(stream, self.size)
        if len(data) != self.size:
            raise OutOfBounds()
        return Reader(data)