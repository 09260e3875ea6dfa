"""Item information atoms: iinf and its infe entries."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from .atom import Ext, ExtSpec, FullAtom, register
from .codec import Reader, Writer
from .errors import Unsupported
from .header import FourCC

_U16_MAX = 0xFFFF
_MIME = FourCC(b"mime")


def _require_content_type(entry: ItemInfoEntry) -> str:
    if entry.content_type is None:
        raise ValueError(f"item {entry.item_id} needs a content_type to be encoded")
    return entry.content_type


@dataclass
class ItemInfoEntry(FullAtom):
    """One item's identity, protection index, type and name."""

    KIND: ClassVar[FourCC] = FourCC(b"infe")
    EXT: ClassVar[ExtSpec] = ExtSpec(
        versions=(0, 1, 2, 3),
        flags={"item_not_in_presentation": 0},
    )

    item_id: int = 0
    item_protection_index: int = 0
    item_type: FourCC | None = None
    item_name: str = ""
    content_type: str | None = None
    content_encoding: str | None = None
    item_not_in_presentation: bool = False

    @classmethod
    def decode_body_ext(cls, reader: Reader, ext: Ext) -> ItemInfoEntry:
        item_type = None
        content_type = None
        content_encoding = None
        if ext.version in (0, 1):
            item_id = reader.read_u16()
            item_protection_index = reader.read_u16()
            item_name = reader.read_cstring()
            content_type = reader.read_cstring()
            content_encoding = reader.read_cstring()
            if ext.version == 1:
                raise Unsupported("infe extensions are not yet supported")
        else:
            item_id = reader.read_u16() if ext.version == 2 else reader.read_u32()
            item_protection_index = reader.read_u16()
            item_type = FourCC.decode(reader)
            item_name = reader.read_cstring()
            if item_type == _MIME:
                content_type = reader.read_cstring()
                content_encoding = reader.read_cstring()
        return cls(
            item_id=item_id,
            item_protection_index=item_protection_index,
            item_type=item_type,
            item_name=item_name,
            content_type=content_type,
            content_encoding=content_encoding,
            item_not_in_presentation="item_not_in_presentation" in ext.flags,
        )

    def encode_body_ext(self, writer: Writer) -> Ext:
        if self.item_id > _U16_MAX:
            version = 3
        elif self.item_type is not None:
            version = 2
        else:
            version = 0

        if version == 0:
            writer.write_u16(self.item_id & _U16_MAX)
            writer.write_u16(self.item_protection_index)
            writer.write_cstring(self.item_name)
            writer.write_cstring(_require_content_type(self))
            writer.write_cstring(self.content_encoding or "")
        else:
            if version == 2:
                writer.write_u16(self.item_id & _U16_MAX)
            else:
                writer.write_u32(self.item_id)
            writer.write_u16(self.item_protection_index)
            if self.item_type is not None:
                self.item_type.encode(writer)
            writer.write_cstring(self.item_name)
            if self.item_type == _MIME:
                writer.write_cstring(_require_content_type(self))
                writer.write_cstring(self.content_encoding or "")

        flags = frozenset({"item_not_in_presentation"}) if self.item_not_in_presentation else frozenset()
        return Ext(version=version, flags=flags)


@register
@dataclass
class Iinf(FullAtom):
    """Item information: the list of item entries."""

    KIND: ClassVar[FourCC] = FourCC(b"iinf")
    EXT: ClassVar[ExtSpec] = ExtSpec(versions=(0, 1))

    item_infos: list[ItemInfoEntry] = field(default_factory=list)

    @classmethod
    def decode_body_ext(cls, reader: Reader, ext: Ext) -> Iinf:
        count = reader.read_u16() if ext.version == 0 else reader.read_u32()
        return cls([ItemInfoEntry.decode(reader) for _ in range(count)])

    def encode_body_ext(self, writer: Writer) -> Ext:
        count = len(self.item_infos)
        if count > _U16_MAX:
            version = 1
            writer.write_u32(count)
        else:
            version = 0
            writer.write_u16(count)
        for entry in self.item_infos:
            entry.encode(writer)
        return Ext(version=version)