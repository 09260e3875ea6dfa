"""Item list atoms carrying metadata: ilst, name, day, covr and desc."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import ClassVar

from .atom import Atom, Unknown, decode_any_maybe, register
from .codec import Reader, Writer
from .errors import UnexpectedBox
from .header import FourCC

logger = logging.getLogger(__name__)


@register
@dataclass
class Name(Atom):
    """A title."""

    KIND: ClassVar[FourCC] = FourCC(b"name")

    value: str = ""

    @classmethod
    def decode_body(cls, reader: Reader) -> Name:
        return cls(reader.read_cstring())

    def encode_body(self, writer: Writer) -> None:
        writer.write_cstring(self.value)


@register
@dataclass
class Year(Atom):
    """A year or date; the kind is called day in the specification."""

    KIND: ClassVar[FourCC] = FourCC(b"day ")

    value: str = ""

    @classmethod
    def decode_body(cls, reader: Reader) -> Year:
        return cls(reader.read_cstring())

    def encode_body(self, writer: Writer) -> None:
        writer.write_cstring(self.value)


@register
@dataclass
class Covr(Atom):
    """Cover art, kept as raw bytes."""

    KIND: ClassVar[FourCC] = FourCC(b"covr")

    data: bytes = b""

    @classmethod
    def decode_body(cls, reader: Reader) -> Covr:
        return cls(reader.read_rest())

    def encode_body(self, writer: Writer) -> None:
        writer.write_bytes(self.data)


@register
@dataclass
class Desc(Atom):
    """A description."""

    KIND: ClassVar[FourCC] = FourCC(b"desc")

    value: str = ""

    @classmethod
    def decode_body(cls, reader: Reader) -> Desc:
        return cls(reader.read_cstring())

    def encode_body(self, writer: Writer) -> None:
        writer.write_cstring(self.value)


@register
@dataclass
class Ilst(Atom):
    """The metadata item list; a later child of the same kind replaces an earlier one."""

    KIND: ClassVar[FourCC] = FourCC(b"ilst")

    name: Name | None = None
    year: Year | None = None
    covr: Covr | None = None
    desc: Desc | None = None

    @classmethod
    def decode_body(cls, reader: Reader) -> Ilst:
        values: dict[str, Atom] = {}
        while (atom := decode_any_maybe(reader)) is not None:
            if isinstance(atom, Unknown):
                logger.warning("unknown atom: %r", atom.kind)
                continue
            attr = _FIELDS.get(type(atom))
            if attr is None:
                raise UnexpectedBox(type(atom).KIND)
            values[attr] = atom
        return cls(**values)

    def encode_body(self, writer: Writer) -> None:
        for child in (self.name, self.year, self.covr, self.desc):
            if child is not None:
                child.encode(writer)


_FIELDS: dict[type[Atom], str] = {Name: "name", Year: "year", Covr: "covr", Desc: "desc"}