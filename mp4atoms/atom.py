"""The atom base classes, version/flag handling and generic atom decoding."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import BinaryIO, ClassVar, Iterable, Mapping, Sequence, TypeVar

from .codec import Reader, Writer
from .errors import (
    DuplicateBox,
    MissingBox,
    OutOfBounds,
    OverDecode,
    ShortRead,
    TooLarge,
    UnderDecode,
    UnexpectedBox,
    UnexpectedEof,
    UnknownVersion,
    Unsupported,
)
from .header import FourCC, Header

logger = logging.getLogger(__name__)

_U32_MAX = 0xFFFFFFFF

A = TypeVar("A", bound="Atom")


def _decode_checked(cls: type[A], body: Reader) -> A:
    """Decode a whole atom body, mapping buffer errors onto the atom kind."""
    try:
        atom = cls.decode_body(body)
    except OutOfBounds as err:
        raise OverDecode(cls.KIND) from err
    except ShortRead as err:
        raise UnderDecode(cls.KIND) from err
    if body.has_remaining():
        raise UnderDecode(cls.KIND)
    return atom


class Atom(ABC):
    """An atom of a known kind: a size, a four-character code and a body."""

    KIND: ClassVar[FourCC]

    def _kind(self) -> FourCC:
        return type(self).KIND

    @classmethod
    @abstractmethod
    def decode_body(cls: type[A], reader: Reader) -> A:
        """Decode the body of the atom, the header already consumed."""

    @abstractmethod
    def encode_body(self, writer: Writer) -> None:
        """Encode the body of the atom, without its header."""

    def encode(self, writer: Writer) -> None:
        """Encode the atom, header included."""
        start = len(writer)
        writer.write_u32(0)
        self._kind().encode(writer)
        self.encode_body(writer)
        size = len(writer) - start
        if size > _U32_MAX:
            raise TooLarge(self._kind())
        writer.set_bytes(start, size.to_bytes(4, "big"))

    def to_bytes(self) -> bytes:
        writer = Writer()
        self.encode(writer)
        return writer.getvalue()

    @classmethod
    def decode(cls: type[A], reader: Reader) -> A:
        atom = cls.decode_maybe(reader)
        if atom is None:
            raise OutOfBounds()
        return atom

    @classmethod
    def decode_maybe(cls: type[A], reader: Reader) -> A | None:
        """Decode the atom, or return ``None`` if the buffer does not hold all of it."""
        header = Header.decode_maybe(reader)
        if header is None:
            return None
        size = reader.remaining() if header.size is None else header.size
        if size > reader.remaining():
            return None
        atom = _decode_checked(cls, Reader(reader.peek(size)))
        reader.advance(size)
        return atom

    @classmethod
    def decode_atom(cls: type[A], header: Header, reader: Reader) -> A:
        """Decode the body that follows an already decoded header."""
        if header.kind != cls.KIND:
            raise UnexpectedBox(header.kind)
        size = reader.remaining() if header.size is None else header.size
        if size > reader.remaining():
            raise OutOfBounds()
        atom = _decode_checked(cls, Reader(reader.peek(size)))
        reader.advance(size)
        return atom

    @classmethod
    def read_from(cls: type[A], stream: BinaryIO) -> A:
        atom = cls.read_optional(stream)
        if atom is None:
            raise MissingBox(cls.KIND)
        return atom

    @classmethod
    def read_optional(cls: type[A], stream: BinaryIO) -> A | None:
        """Read the atom from a stream, or return ``None`` at a clean end of stream."""
        header = Header.read_optional(stream)
        if header is None:
            return None
        return _decode_checked(cls, header.read_body(stream))

    @classmethod
    def read_until(cls: type[A], stream: BinaryIO) -> A:
        """Discard atoms from a stream until one of this kind is found."""
        while (header := Header.read_optional(stream)) is not None:
            body = header.read_body(stream)
            if header.kind == cls.KIND:
                return cls.decode_atom(header, body)
        raise MissingBox(cls.KIND)

    @classmethod
    def read_atom(cls: type[A], header: Header, stream: BinaryIO) -> A:
        """Read the body that follows an already read header."""
        if header.kind != cls.KIND:
            raise UnexpectedBox(header.kind)
        return cls.decode_atom(header, header.read_body(stream))

    def write_to(self, stream: BinaryIO) -> None:
        stream.write(self.to_bytes())


@dataclass(frozen=True)
class Ext:
    """The version and the set flags of a full atom."""

    version: int = 0
    flags: frozenset[str] = frozenset()

    def __post_init__(self) -> None:
        object.__setattr__(self, "flags", frozenset(self.flags))


@dataclass(frozen=True)
class ExtSpec:
    """The versions a full atom accepts and the bit position of each named flag."""

    versions: Sequence[int] = (0,)
    flags: Mapping[str, int] = field(default_factory=dict)

    def decode(self, value: int) -> Ext:
        version = (value >> 24) & 0xFF
        if version not in self.versions:
            raise UnknownVersion(version)
        set_flags = {name for name, bit in self.flags.items() if value & (1 << bit)}
        return Ext(version, frozenset(set_flags))

    def encode(self, ext: Ext) -> int:
        if ext.version not in self.versions:
            raise UnknownVersion(ext.version)
        value = ext.version << 24
        for name in ext.flags:
            if name not in self.flags:
                raise ValueError(f"unknown flag: {name}")
            value |= 1 << self.flags[name]
        return value


class FullAtom(Atom):
    """An atom whose body starts with a version byte and 24 bits of flags.

    Subclasses without an ``EXT`` ignore the field when decoding and write zero.
    """

    EXT: ClassVar[ExtSpec | None] = None

    @classmethod
    @abstractmethod
    def decode_body_ext(cls: type[A], reader: Reader, ext: Ext) -> A:
        """Decode the body after the version and flags."""

    @abstractmethod
    def encode_body_ext(self, writer: Writer) -> Ext | None:
        """Encode the body after the version and flags, returning them."""

    @classmethod
    def decode_body(cls, reader: Reader):
        value = reader.read_u32()
        ext = cls.EXT.decode(value) if cls.EXT is not None else Ext()
        return cls.decode_body_ext(reader, ext)

    def encode_body(self, writer: Writer) -> None:
        start = len(writer)
        writer.write_u32(0)
        ext = self.encode_body_ext(writer)
        spec = type(self).EXT
        value = spec.encode(ext or Ext()) if spec is not None else 0
        writer.set_bytes(start, value.to_bytes(4, "big"))


@dataclass
class Unknown(Atom):
    """An atom of a kind that has no registered class, kept as raw bytes."""

    kind: FourCC
    data: bytes = b""

    def _kind(self) -> FourCC:
        return self.kind

    @classmethod
    def decode_body(cls, reader: Reader) -> Unknown:
        raise Unsupported("unknown atoms are decoded with decode_any")

    def encode_body(self, writer: Writer) -> None:
        writer.write_bytes(self.data)

    def __repr__(self) -> str:
        return f"Unknown(kind={self.kind!r}, size={len(self.data)}, data={self.data!r})"


_REGISTRY: dict[FourCC, type[Atom]] = {}


def register(cls: type[A]) -> type[A]:
    """Class decorator making an atom class known to the generic decoders."""
    _REGISTRY[cls.KIND] = cls
    return cls


def atom_class(kind: FourCC | bytes | str) -> type[Atom] | None:
    """Return the registered class for a kind, if any."""
    return _REGISTRY.get(FourCC(kind))


def decode_any(reader: Reader) -> Atom:
    atom = decode_any_maybe(reader)
    if atom is None:
        raise OutOfBounds()
    return atom


def decode_any_maybe(reader: Reader) -> Atom | None:
    """Decode any atom, or return ``None`` if the buffer does not hold all of it."""
    header = Header.decode_maybe(reader)
    if header is None:
        return None
    size = reader.remaining() if header.size is None else header.size
    if size > reader.remaining():
        return None
    return decode_any_atom(header, reader)


def decode_any_atom(header: Header, reader: Reader) -> Atom:
    """Decode any atom's body given its header."""
    size = reader.remaining() if header.size is None else header.size
    if size > reader.remaining():
        raise OutOfBounds()
    body = Reader(reader.peek(size))
    cls = _REGISTRY.get(header.kind)
    if cls is None:
        atom: Atom = Unknown(header.kind, body.read_rest())
    else:
        atom = _decode_checked(cls, body)
    reader.advance(size)
    return atom


def read_any(stream: BinaryIO) -> Atom:
    atom = read_any_optional(stream)
    if atom is None:
        raise UnexpectedEof()
    return atom


def read_any_optional(stream: BinaryIO) -> Atom | None:
    """Read any atom from a stream, or return ``None`` at a clean end of stream."""
    header = Header.read_optional(stream)
    if header is None:
        return None
    return decode_any_atom(header, header.read_body(stream))


def read_any_atom(header: Header, stream: BinaryIO) -> Atom:
    return decode_any_atom(header, header.read_body(stream))


def decode_nested(
    reader: Reader,
    required: Iterable[type[Atom]] = (),
    optional: Iterable[type[Atom]] = (),
    multiple: Iterable[type[Atom]] = (),
) -> dict[str, object]:
    """Decode child atoms into a dict keyed by each class name in lower case.

    Required and optional children may appear once; multiple children are
    collected into lists. Unknown kinds are skipped with a warning.
    """
    required = list(required)
    optional = list(optional)
    multiple = list(multiple)
    single = {cls: None for cls in required + optional}
    lists: dict[type[Atom], list[Atom]] = {cls: [] for cls in multiple}

    while (atom := decode_any_maybe(reader)) is not None:
        cls = type(atom)
        if isinstance(atom, Unknown):
            logger.warning("unknown box: %r", atom.kind)
        elif cls in single:
            if single[cls] is not None:
                raise DuplicateBox(cls.KIND)
            single[cls] = atom
        elif cls in lists:
            lists[cls].append(atom)
        else:
            raise UnexpectedBox(atom._kind())

    result: dict[str, object] = {}
    for cls in required:
        if single[cls] is None:
            raise MissingBox(cls.KIND)
        result[cls.__name__.lower()] = single[cls]
    for cls in optional:
        result[cls.__name__.lower()] = single[cls]
    for cls in multiple:
        result[cls.__name__.lower()] = lists[cls]
    return result