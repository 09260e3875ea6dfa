"""The file type atom."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from .atom import Atom, register
from .codec import Reader, Writer
from .header import FourCC


@register
@dataclass
class Ftyp(Atom):
    """File type and compatibility: a major brand and the brands it is compatible with."""

    KIND: ClassVar[FourCC] = FourCC(b"ftyp")

    major_brand: FourCC
    minor_version: int = 0
    compatible_brands: list[FourCC] = field(default_factory=list)

    @classmethod
    def decode_body(cls, reader: Reader) -> Ftyp:
        major_brand = FourCC.decode(reader)
        minor_version = reader.read_u32()
        brands = []
        while reader.has_remaining():
            brands.append(FourCC.decode(reader))
        return cls(major_brand, minor_version, brands)

    def encode_body(self, writer: Writer) -> None:
        self.major_brand.encode(writer)
        writer.write_u32(self.minor_version)
        for brand in self.compatible_brands:
            brand.encode(writer)