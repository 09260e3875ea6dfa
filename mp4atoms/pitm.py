"""The primary item atom."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from .atom import Ext, ExtSpec, FullAtom, register
from .codec import Reader, Writer
from .header import FourCC

_U16_MAX = 0xFFFF


@register
@dataclass
class Pitm(FullAtom):
    """The primary item, the one to show by default."""

    KIND: ClassVar[FourCC] = FourCC(b"pitm")
    EXT: ClassVar[ExtSpec] = ExtSpec(versions=(0, 1))

    item_id: int = 0

    @classmethod
    def decode_body_ext(cls, reader: Reader, ext: Ext) -> Pitm:
        if ext.version == 0:
            return cls(reader.read_u16())
        return cls(reader.read_u32())

    def encode_body_ext(self, writer: Writer) -> Ext:
        if self.item_id <= _U16_MAX:
            writer.write_u16(self.item_id)
            return Ext(version=0)
        writer.write_u32(self.item_id)
        return Ext(version=1)