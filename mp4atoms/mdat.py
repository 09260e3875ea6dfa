"""The media data atom."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from .atom import Atom, register
from .codec import Reader, Writer
from .header import FourCC


@register
@dataclass
class Mdat(Atom):
    """Media data, held entirely in memory.

    For large files read the header first and handle the body separately.
    """

    KIND: ClassVar[FourCC] = FourCC(b"mdat")

    data: bytes = b""

    @classmethod
    def decode_body(cls, reader: Reader) -> Mdat:
        return cls(reader.read_rest())

    def encode_body(self, writer: Writer) -> None:
        writer.write_bytes(self.data)