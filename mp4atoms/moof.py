"""Movie fragment atoms: moof, mfhd, traf, tfhd, tfdt and trun."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from .atom import Atom, Ext, ExtSpec, FullAtom, decode_nested, register
from .codec import Reader, Writer
from .errors import OutOfMemory
from .header import FourCC

# Entries without any per-sample field occupy no bytes, so cap how many we accept.
_MAX_EMPTY_ENTRIES = 4096


@register
@dataclass
class Mfhd(FullAtom):
    """Movie fragment header: the fragment's sequence number."""

    KIND: ClassVar[FourCC] = FourCC(b"mfhd")

    sequence_number: int = 1

    @classmethod
    def decode_body_ext(cls, reader: Reader, ext: Ext) -> Mfhd:
        return cls(reader.read_u32())

    def encode_body_ext(self, writer: Writer) -> None:
        writer.write_u32(self.sequence_number)


@register
@dataclass
class Tfdt(FullAtom):
    """Track fragment decode time."""

    KIND: ClassVar[FourCC] = FourCC(b"tfdt")
    EXT: ClassVar[ExtSpec] = ExtSpec(versions=(0, 1))

    base_media_decode_time: int = 0

    @classmethod
    def decode_body_ext(cls, reader: Reader, ext: Ext) -> Tfdt:
        if ext.version == 1:
            return cls(reader.read_u64())
        return cls(reader.read_u32())

    def encode_body_ext(self, writer: Writer) -> Ext:
        writer.write_u64(self.base_media_decode_time)
        return Ext(version=1)


_TFHD_FIELDS = (
    "sample_description_index",
    "default_sample_duration",
    "default_sample_size",
    "default_sample_flags",
)


@register
@dataclass
class Tfhd(FullAtom):
    """Track fragment header with optional per-fragment defaults."""

    KIND: ClassVar[FourCC] = FourCC(b"tfhd")
    EXT: ClassVar[ExtSpec] = ExtSpec(
        versions=(0,),
        flags={
            "base_data_offset": 0,
            "sample_description_index": 1,
            "default_sample_duration": 3,
            "default_sample_size": 4,
            "default_sample_flags": 5,
            "duration_is_empty": 16,
            "default_base_is_moof": 17,
        },
    )

    track_id: int = 0
    base_data_offset: int | None = None
    sample_description_index: int | None = None
    default_sample_duration: int | None = None
    default_sample_size: int | None = None
    default_sample_flags: int | None = None

    @classmethod
    def decode_body_ext(cls, reader: Reader, ext: Ext) -> Tfhd:
        track_id = reader.read_u32()
        base_data_offset = reader.read_u64() if "base_data_offset" in ext.flags else None
        values = {
            name: reader.read_u32() if name in ext.flags else None for name in _TFHD_FIELDS
        }
        return cls(track_id=track_id, base_data_offset=base_data_offset, **values)

    def encode_body_ext(self, writer: Writer) -> Ext:
        flags = set()
        writer.write_u32(self.track_id)
        if self.base_data_offset is not None:
            flags.add("base_data_offset")
            writer.write_u64(self.base_data_offset)
        for name in _TFHD_FIELDS:
            value = getattr(self, name)
            if value is not None:
                flags.add(name)
                writer.write_u32(value)
        return Ext(version=0, flags=frozenset(flags))


@dataclass
class TrunEntry:
    """One sample of a track run; absent fields take the track defaults."""

    duration: int | None = None
    size: int | None = None
    flags: int | None = None
    cts: int | None = None


_TRUN_ENTRY_FLAGS = (
    ("sample_duration", "duration"),
    ("sample_size", "size"),
    ("sample_flags", "flags"),
    ("sample_cts", "cts"),
)


@register
@dataclass
class Trun(FullAtom):
    """Track fragment run: the samples of a fragment."""

    KIND: ClassVar[FourCC] = FourCC(b"trun")
    EXT: ClassVar[ExtSpec] = ExtSpec(
        versions=(0, 1),
        flags={
            "data_offset": 0,
            "first_sample_flags": 2,
            "sample_duration": 8,
            "sample_size": 9,
            "sample_flags": 10,
            "sample_cts": 11,
        },
    )

    data_offset: int | None = None
    entries: list[TrunEntry] = field(default_factory=list)

    @classmethod
    def decode_body_ext(cls, reader: Reader, ext: Ext) -> Trun:
        flags = ext.flags
        sample_count = reader.read_u32()
        data_offset = reader.read_i32() if "data_offset" in flags else None
        first_sample_flags = reader.read_u32() if "first_sample_flags" in flags else None

        has_sample_fields = any(name in flags for name, _ in _TRUN_ENTRY_FLAGS)
        if not has_sample_fields and sample_count > _MAX_EMPTY_ENTRIES:
            raise OutOfMemory()

        entries = []
        for _ in range(sample_count):
            duration = reader.read_u32() if "sample_duration" in flags else None
            size = reader.read_u32() if "sample_size" in flags else None
            if first_sample_flags is not None:
                sample_flags: int | None = first_sample_flags
                first_sample_flags = None
            else:
                sample_flags = reader.read_u32() if "sample_flags" in flags else None
            cts = reader.read_i32() if "sample_cts" in flags else None
            entries.append(TrunEntry(duration, size, sample_flags, cts))
        return cls(data_offset=data_offset, entries=entries)

    def encode_body_ext(self, writer: Writer) -> Ext:
        flags = {
            name
            for name, attr in _TRUN_ENTRY_FLAGS
            if all(getattr(entry, attr) is not None for entry in self.entries)
        }
        writer.write_u32(len(self.entries))
        if self.data_offset is not None:
            flags.add("data_offset")
            writer.write_i32(self.data_offset)
        for entry in self.entries:
            if "sample_duration" in flags:
                writer.write_u32(entry.duration)
            if "sample_size" in flags:
                writer.write_u32(entry.size)
            if "sample_flags" in flags:
                writer.write_u32(entry.flags)
            if "sample_cts" in flags:
                writer.write_i32(entry.cts)
        return Ext(version=1, flags=frozenset(flags))


@register
@dataclass
class Traf(Atom):
    """Track fragment: a header, an optional decode time and an optional run."""

    KIND: ClassVar[FourCC] = FourCC(b"traf")

    tfhd: Tfhd = field(default_factory=Tfhd)
    tfdt: Tfdt | None = None
    trun: Trun | None = None

    @classmethod
    def decode_body(cls, reader: Reader) -> Traf:
        return cls(**decode_nested(reader, required=[Tfhd], optional=[Tfdt, Trun]))

    def encode_body(self, writer: Writer) -> None:
        self.tfhd.encode(writer)
        for child in (self.tfdt, self.trun):
            if child is not None:
                child.encode(writer)


@register
@dataclass
class Moof(Atom):
    """Movie fragment: a header and any number of track fragments."""

    KIND: ClassVar[FourCC] = FourCC(b"moof")

    mfhd: Mfhd = field(default_factory=Mfhd)
    traf: list[Traf] = field(default_factory=list)

    @classmethod
    def decode_body(cls, reader: Reader) -> Moof:
        return cls(**decode_nested(reader, required=[Mfhd], multiple=[Traf]))

    def encode_body(self, writer: Writer) -> None:
        self.mfhd.encode(writer)
        for traf in self.traf:
            traf.encode(writer)