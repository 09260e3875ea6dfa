"""The event message atom."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Union

from .atom import Ext, ExtSpec, FullAtom, register
from .codec import Reader, Writer
from .header import FourCC


@dataclass(frozen=True)
class RelativeTime:
    """A presentation time delta relative to the segment, written as 32 bits."""

    value: int


@dataclass(frozen=True)
class AbsoluteTime:
    """An absolute presentation time, written as 64 bits."""

    value: int


EmsgTimestamp = Union[RelativeTime, AbsoluteTime]


@register
@dataclass
class Emsg(FullAtom):
    """An event message; the kind of timestamp decides the version."""

    KIND: ClassVar[FourCC] = FourCC(b"emsg")
    EXT: ClassVar[ExtSpec] = ExtSpec(versions=(0, 1))

    timescale: int
    presentation_time: EmsgTimestamp
    event_duration: int
    id: int
    scheme_id_uri: str
    value: str
    message_data: bytes = b""

    @classmethod
    def decode_body_ext(cls, reader: Reader, ext: Ext) -> Emsg:
        if ext.version == 0:
            scheme_id_uri = reader.read_cstring()
            value = reader.read_cstring()
            timescale = reader.read_u32()
            presentation_time: EmsgTimestamp = RelativeTime(reader.read_u32())
            event_duration = reader.read_u32()
            event_id = reader.read_u32()
        else:
            timescale = reader.read_u32()
            presentation_time = AbsoluteTime(reader.read_u64())
            event_duration = reader.read_u32()
            event_id = reader.read_u32()
            scheme_id_uri = reader.read_cstring()
            value = reader.read_cstring()
        return cls(
            timescale=timescale,
            presentation_time=presentation_time,
            event_duration=event_duration,
            id=event_id,
            scheme_id_uri=scheme_id_uri,
            value=value,
            message_data=reader.read_rest(),
        )

    def encode_body_ext(self, writer: Writer) -> Ext:
        if isinstance(self.presentation_time, AbsoluteTime):
            writer.write_u32(self.timescale)
            writer.write_u64(self.presentation_time.value)
            writer.write_u32(self.event_duration)
            writer.write_u32(self.id)
            writer.write_cstring(self.scheme_id_uri)
            writer.write_cstring(self.value)
            writer.write_bytes(self.message_data)
            return Ext(version=1)
        writer.write_cstring(self.scheme_id_uri)
        writer.write_cstring(self.value)
        writer.write_u32(self.timescale)
        writer.write_u32(self.presentation_time.value)
        writer.write_u32(self.event_duration)
        writer.write_u32(self.id)
        writer.write_bytes(self.message_data)
        return Ext(version=0)