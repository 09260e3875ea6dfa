"""The item data atom."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from .atom import Atom, register
from .codec import Reader, Writer
from .header import FourCC


@register
@dataclass
class Idat(Atom):
    """Item data stored inside the meta atom."""

    KIND: ClassVar[FourCC] = FourCC(b"idat")

    data: bytes = b""

    @classmethod
    def decode_body(cls, reader: Reader) -> Idat:
        return cls(reader.read_rest())

    def encode_body(self, writer: Writer) -> None:
        writer.write_bytes(self.data)