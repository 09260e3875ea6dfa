"""Item properties atoms: iprp, ipco and ipma."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from . import properties  # noqa: F401  (registers the property atoms)
from .atom import Atom, Ext, ExtSpec, FullAtom, decode_any_maybe, decode_nested, register
from .codec import Reader, Writer
from .header import FourCC

_U16_MAX = 0xFFFF


@register
@dataclass
class Ipco(Atom):
    """Item property container; properties may repeat and their order matters."""

    KIND: ClassVar[FourCC] = FourCC(b"ipco")

    properties: list[Atom] = field(default_factory=list)

    @classmethod
    def decode_body(cls, reader: Reader) -> Ipco:
        props = []
        while (prop := decode_any_maybe(reader)) is not None:
            props.append(prop)
        return cls(props)

    def encode_body(self, writer: Writer) -> None:
        for prop in self.properties:
            prop.encode(writer)


@dataclass
class PropertyAssociation:
    """A one-based index into ipco, and whether the property is essential."""

    essential: bool = False
    property_index: int = 0

    def encode(self, writer: Writer, prop_index_15_bit: bool) -> None:
        if prop_index_15_bit:
            value = self.property_index & _U16_MAX
            writer.write_u16(0x8000 | value if self.essential else value)
        else:
            value = self.property_index & 0xFF
            writer.write_u8(0x80 | value if self.essential else value)


@dataclass
class PropertyAssociations:
    """The properties associated with one item."""

    item_id: int = 0
    associations: list[PropertyAssociation] = field(default_factory=list)

    def encode(self, writer: Writer, version: int, prop_index_15_bit: bool) -> None:
        if version == 0:
            writer.write_u16(self.item_id & _U16_MAX)
        else:
            writer.write_u32(self.item_id)
        writer.write_u8(len(self.associations) & 0xFF)
        for association in self.associations:
            association.encode(writer, prop_index_15_bit)


@register
@dataclass
class Ipma(FullAtom):
    """Item property associations."""

    KIND: ClassVar[FourCC] = FourCC(b"ipma")
    EXT: ClassVar[ExtSpec] = ExtSpec(versions=(0, 1), flags={"prop_index_15_bits": 1})

    item_properties: list[PropertyAssociations] = field(default_factory=list)

    @classmethod
    def decode_body_ext(cls, reader: Reader, ext: Ext) -> Ipma:
        wide_index = "prop_index_15_bits" in ext.flags
        entry_count = reader.read_u32()
        item_properties = []
        for _ in range(entry_count):
            item_id = reader.read_u16() if ext.version == 0 else reader.read_u32()
            associations = []
            for _ in range(reader.read_u8()):
                if wide_index:
                    packed = reader.read_u16()
                    associations.append(
                        PropertyAssociation(bool(packed & 0x8000), packed & 0x7FFF)
                    )
                else:
                    packed = reader.read_u8()
                    associations.append(PropertyAssociation(bool(packed & 0x80), packed & 0x7F))
            item_properties.append(PropertyAssociations(item_id, associations))
        return cls(item_properties)

    def encode_body_ext(self, writer: Writer) -> Ext:
        version = 0
        wide_index = False
        for item in self.item_properties:
            if item.item_id > _U16_MAX:
                version = 1
            if any(a.property_index > 0x7F for a in item.associations):
                wide_index = True
        writer.write_u32(len(self.item_properties))
        for item in self.item_properties:
            item.encode(writer, version, wide_index)
        flags = frozenset({"prop_index_15_bits"}) if wide_index else frozenset()
        return Ext(version=version, flags=flags)


@register
@dataclass
class Iprp(Atom):
    """Item properties: the property container and its associations."""

    KIND: ClassVar[FourCC] = FourCC(b"iprp")

    ipco: Ipco = field(default_factory=Ipco)
    ipma: list[Ipma] = field(default_factory=list)

    @classmethod
    def decode_body(cls, reader: Reader) -> Iprp:
        return cls(**decode_nested(reader, required=[Ipco], multiple=[Ipma]))

    def encode_body(self, writer: Writer) -> None:
        self.ipco.encode(writer)
        for ipma in self.ipma:
            ipma.encode(writer)