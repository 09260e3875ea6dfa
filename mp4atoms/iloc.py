"""The item location atom."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from .atom import Ext, ExtSpec, FullAtom, register
from .codec import Reader
from .codec import Writer
from .errors import Unsupported
from .header import FourCC

_U16_MAX = 0xFFFF
_U32_MAX = 0xFFFFFFFF


@dataclass
class ItemLocationExtent:
    """A run of bytes holding part of an item."""

    item_reference_index: int = 0
    offset: int = 0
    length: int = 0


@dataclass
class ItemLocation:
    """Where one item's data lives."""

    item_id: int = 0
    construction_method: int = 0
    data_reference_index: int = 0
    base_offset: int = 0
    extents: list[ItemLocationExtent] = field(default_factory=list)


def _read_sized(reader: Reader, size: int, name: str) -> int:
    if size == 0:
        return 0
    if size == 4:
        return reader.read_u32()
    if size == 8:
        return reader.read_u64()
    raise Unsupported(f"iloc {name} must be in [0,4,8]")


@register
@dataclass
class Iloc(FullAtom):
    """Item locations."""

    KIND: ClassVar[FourCC] = FourCC(b"iloc")
    EXT: ClassVar[ExtSpec] = ExtSpec(versions=(0, 1, 2))

    item_locations: list[ItemLocation] = field(default_factory=list)

    @classmethod
    def decode_body_ext(cls, reader: Reader, ext: Ext) -> Iloc:
        sizes0 = reader.read_u8()
        offset_size = sizes0 >> 4
        length_size = sizes0 & 0x0F
        sizes1 = reader.read_u8()
        base_offset_size = sizes1 >> 4
        index_size = sizes1 & 0x0F if ext.version in (1, 2) else 0
        short_ids = ext.version in (0, 1)

        item_count = reader.read_u16() if short_ids else reader.read_u32()
        locations = []
        for _ in range(item_count):
            item_id = reader.read_u16() if short_ids else reader.read_u32()
            construction_method = reader.read_u16() & 0x0F if ext.version in (1, 2) else 0
            data_reference_index = reader.read_u16()
            base_offset = _read_sized(reader, base_offset_size, "base_offset_size")
            extent_count = reader.read_u16()
            extents = []
            for _ in range(extent_count):
                index = _read_sized(reader, index_size, "index_size")
                offset = _read_sized(reader, offset_size, "offset_size")
                length = _read_sized(reader, length_size, "length_size")
                extents.append(ItemLocationExtent(index, offset, length))
            locations.append(
                ItemLocation(
                    item_id=item_id,
                    construction_method=construction_method,
                    data_reference_index=data_reference_index,
                    base_offset=base_offset,
                    extents=extents,
                )
            )
        return cls(locations)

    def encode_body_ext(self, writer: Writer) -> Ext:
        base_offset_size = 0
        for location in self.item_locations:
            if location.base_offset > 0:
                if location.base_offset > _U32_MAX:
                    base_offset_size = 8
                elif base_offset_size != 8:
                    base_offset_size = 4
        offset_size = 4
        length_size = 4
        index_size = 0

        writer.write_u8((offset_size << 4) | length_size)
        writer.write_u8((base_offset_size << 4) | index_size)
        writer.write_u16(len(self.item_locations) & _U16_MAX)
        for location in self.item_locations:
            writer.write_u16(location.item_id & _U16_MAX)
            writer.write_u16(location.data_reference_index)
            if base_offset_size == 4:
                writer.write_u32(location.base_offset & _U32_MAX)
            elif base_offset_size == 8:
                writer.write_u64(location.base_offset)
            writer.write_u16(len(location.extents) & _U16_MAX)
            for extent in location.extents:
                writer.write_u32(extent.offset & _U32_MAX)
                writer.write_u32(extent.length & _U32_MAX)
        return Ext(version=0)