"""Image item properties: auxC, clap, imir, irot, iscl, ispe, pixi and rref."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from .atom import Atom, Ext, FullAtom, register
from .codec import Reader, Writer
from .header import FourCC


@register
@dataclass
class Auxc(FullAtom):
    """Auxiliary image type, such as an alpha plane."""

    KIND: ClassVar[FourCC] = FourCC(b"auxC")

    aux_type: str = ""
    aux_subtype: bytes = b""

    @classmethod
    def decode_body_ext(cls, reader: Reader, ext: Ext) -> Auxc:
        aux_type = reader.read_cstring()
        return cls(aux_type, reader.read_rest())

    def encode_body_ext(self, writer: Writer) -> None:
        writer.write_cstring(self.aux_type)
        writer.write_bytes(self.aux_subtype)


@register
@dataclass
class Clap(Atom):
    """Clean aperture: a cropping operation.

    The offset numerators are signed, whatever the specification's syntax says.
    """

    KIND: ClassVar[FourCC] = FourCC(b"clap")

    clean_aperture_width_n: int = 0
    clean_aperture_width_d: int = 0
    clean_aperture_height_n: int = 0
    clean_aperture_height_d: int = 0
    horiz_off_n: int = 0
    horiz_off_d: int = 0
    vert_off_n: int = 0
    vert_off_d: int = 0

    @classmethod
    def decode_body(cls, reader: Reader) -> Clap:
        return cls(
            clean_aperture_width_n=reader.read_u32(),
            clean_aperture_width_d=reader.read_u32(),
            clean_aperture_height_n=reader.read_u32(),
            clean_aperture_height_d=reader.read_u32(),
            horiz_off_n=reader.read_i32(),
            horiz_off_d=reader.read_u32(),
            vert_off_n=reader.read_i32(),
            vert_off_d=reader.read_u32(),
        )

    def encode_body(self, writer: Writer) -> None:
        writer.write_u32(self.clean_aperture_width_n)
        writer.write_u32(self.clean_aperture_width_d)
        writer.write_u32(self.clean_aperture_height_n)
        writer.write_u32(self.clean_aperture_height_d)
        writer.write_i32(self.horiz_off_n)
        writer.write_u32(self.horiz_off_d)
        writer.write_i32(self.vert_off_n)
        writer.write_u32(self.vert_off_d)


@register
@dataclass
class Imir(Atom):
    """Image mirror about an axis."""

    KIND: ClassVar[FourCC] = FourCC(b"imir")

    axis: int = 0

    @classmethod
    def decode_body(cls, reader: Reader) -> Imir:
        return cls(reader.read_u8())

    def encode_body(self, writer: Writer) -> None:
        writer.write_u8(self.axis)


@register
@dataclass
class Irot(Atom):
    """Image rotation in steps of 90 degrees anti-clockwise."""

    KIND: ClassVar[FourCC] = FourCC(b"irot")

    angle: int = 0

    @classmethod
    def decode_body(cls, reader: Reader) -> Irot:
        return cls(reader.read_u8() & 0x03)

    def encode_body(self, writer: Writer) -> None:
        writer.write_u8(self.angle)


@register
@dataclass
class Iscl(FullAtom):
    """Image scaling to a target width and height."""

    KIND: ClassVar[FourCC] = FourCC(b"iscl")

    target_width_numerator: int = 0
    target_width_denominator: int = 0
    target_height_numerator: int = 0
    target_height_denominator: int = 0

    @classmethod
    def decode_body_ext(cls, reader: Reader, ext: Ext) -> Iscl:
        return cls(
            target_width_numerator=reader.read_u16(),
            target_width_denominator=reader.read_u16(),
            target_height_numerator=reader.read_u16(),
            target_height_denominator=reader.read_u16(),
        )

    def encode_body_ext(self, writer: Writer) -> None:
        writer.write_u16(self.target_width_numerator)
        writer.write_u16(self.target_width_denominator)
        writer.write_u16(self.target_height_numerator)
        writer.write_u16(self.target_height_denominator)


@register
@dataclass
class Ispe(FullAtom):
    """Image spatial extent: width and height."""

    KIND: ClassVar[FourCC] = FourCC(b"ispe")

    width: int = 0
    height: int = 0

    @classmethod
    def decode_body_ext(cls, reader: Reader, ext: Ext) -> Ispe:
        width = reader.read_u32()
        return cls(width, reader.read_u32())

    def encode_body_ext(self, writer: Writer) -> None:
        writer.write_u32(self.width)
        writer.write_u32(self.height)


@register
@dataclass
class Pixi(FullAtom):
    """Pixel information: the bit depth of each channel."""

    KIND: ClassVar[FourCC] = FourCC(b"pixi")

    bits_per_channel: list[int] = field(default_factory=list)

    @classmethod
    def decode_body_ext(cls, reader: Reader, ext: Ext) -> Pixi:
        count = reader.read_u8()
        return cls([reader.read_u8() for _ in range(count)])

    def encode_body_ext(self, writer: Writer) -> None:
        writer.write_u8(len(self.bits_per_channel) & 0xFF)
        for bits in self.bits_per_channel:
            writer.write_u8(bits)


@register
@dataclass
class Rref(FullAtom):
    """Reference types required to decode a predictively coded image item."""

    KIND: ClassVar[FourCC] = FourCC(b"rref")

    reference_types: list[FourCC] = field(default_factory=list)

    @classmethod
    def decode_body_ext(cls, reader: Reader, ext: Ext) -> Rref:
        count = reader.read_u8()
        return cls([FourCC.decode(reader) for _ in range(count)])

    def encode_body_ext(self, writer: Writer) -> None:
        writer.write_u8(len(self.reference_types) & 0xFF)
        for reference_type in self.reference_types:
            reference_type.encode(writer)