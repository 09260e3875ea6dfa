"""The item reference atom."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from .atom import Ext, ExtSpec, FullAtom, register
from .codec import Reader, Writer
from .errors import InvalidSize
from .header import FourCC

_U16_MAX = 0xFFFF


@dataclass
class Reference:
    """A typed reference from one item to others."""

    reference_type: FourCC
    from_item_id: int = 0
    to_item_ids: list[int] = field(default_factory=list)


@register
@dataclass
class Iref(FullAtom):
    """Item references: how items relate to each other."""

    KIND: ClassVar[FourCC] = FourCC(b"iref")
    EXT: ClassVar[ExtSpec] = ExtSpec(versions=(0, 1))

    references: list[Reference] = field(default_factory=list)

    @classmethod
    def decode_body_ext(cls, reader: Reader, ext: Ext) -> Iref:
        read_id = reader.read_u16 if ext.version == 0 else reader.read_u32
        bytes_remaining = reader.remaining()
        references = []
        while bytes_remaining > 0:
            box_len = reader.read_u32()
            if box_len > bytes_remaining:
                raise InvalidSize()
            bytes_remaining -= box_len
            reference_type = FourCC.decode(reader)
            from_item_id = read_id()
            count = reader.read_u16()
            to_item_ids = [read_id() for _ in range(count)]
            references.append(Reference(reference_type, from_item_id, to_item_ids))
        return cls(references)

    def encode_body_ext(self, writer: Writer) -> Ext:
        wide = any(
            ref.from_item_id > _U16_MAX or any(i > _U16_MAX for i in ref.to_item_ids)
            for ref in self.references
        )
        id_size = 4 if wide else 2
        write_id = writer.write_u32 if wide else writer.write_u16
        for ref in self.references:
            writer.write_u32(4 + 4 + id_size + 2 + id_size * len(ref.to_item_ids))
            ref.reference_type.encode(writer)
            write_id(ref.from_item_id)
            writer.write_u16(len(ref.to_item_ids) & _U16_MAX)
            for item_id in ref.to_item_ids:
                write_id(item_id)
        return Ext(version=1 if wide else 0)