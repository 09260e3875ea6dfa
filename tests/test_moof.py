import struct

import pytest

from mp4atoms.atom import Unknown, decode_any
from mp4atoms.codec import Reader
from mp4atoms.errors import DuplicateBox, MissingBox, OutOfMemory, UnexpectedBox
from mp4atoms.header import FourCC
from mp4atoms.moof import Mfhd, Moof, Tfdt, Tfhd, Traf, Trun, TrunEntry

VP9_MFHD = bytes(
    [0x00, 0x00, 0x00, 0x10, 0x6D, 0x66, 0x68, 0x64,
     0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x01]
)
VP9_TFHD = bytes(
    [0x00, 0x00, 0x00, 0x14, 0x74, 0x66, 0x68, 0x64, 0x00, 0x02, 0x00, 0x02,
     0x00, 0x00, 0x00, 0x01, 0x00, 0x00, 0x00, 0x01]
)
VP9_TFDT = bytes(
    [0x00, 0x00, 0x00, 0x10, 0x74, 0x66, 0x64, 0x74,
     0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00]
)


def _atom(kind: bytes, body: bytes) -> bytes:
    return struct.pack(">I", 8 + len(body)) + kind + body


def test_mfhd_round_trip():
    expected = Mfhd(sequence_number=1)
    assert Mfhd.decode(Reader(expected.to_bytes())) == expected


def test_mfhd_default_and_wire():
    assert Mfhd() == Mfhd(sequence_number=1)
    assert Mfhd().to_bytes() == VP9_MFHD
    assert Mfhd.decode(Reader(VP9_MFHD)) == Mfhd(1)


def test_tfdt32():
    expected = Tfdt(base_media_decode_time=0)
    assert Tfdt.decode(Reader(expected.to_bytes())) == expected


def test_tfdt64():
    expected = Tfdt(base_media_decode_time=0xFFFFFFFF + 1)
    assert Tfdt.decode(Reader(expected.to_bytes())) == expected


def test_tfdt_version0_decode():
    assert Tfdt.decode(Reader(VP9_TFDT)) == Tfdt(0)


def test_tfhd_round_trip():
    expected = Tfhd(track_id=1)
    assert Tfhd.decode(Reader(expected.to_bytes())) == expected


def test_tfhd_with_flags():
    expected = Tfhd(
        track_id=1,
        sample_description_index=1,
        default_sample_duration=512,
        default_sample_flags=0x1010000,
    )
    assert Tfhd.decode(Reader(expected.to_bytes())) == expected


def test_tfhd_with_base_data_offset():
    expected = Tfhd(track_id=2, base_data_offset=0x1_0000_0000, default_sample_size=9)
    assert Tfhd.decode(Reader(expected.to_bytes())) == expected


def test_tfhd_vp9_decode_drops_unstored_flags():
    tfhd = Tfhd.decode(Reader(VP9_TFHD))
    assert tfhd == Tfhd(track_id=1, sample_description_index=1)
    assert tfhd.to_bytes()[8:12] == b"\x00\x00\x00\x02"


def test_trun_round_trip():
    expected = Trun(
        data_offset=1080,
        entries=[
            TrunEntry(duration=33000, size=3792, flags=0, cts=0),
            TrunEntry(duration=33000, size=64, flags=0x10000, cts=-33000),
        ],
    )
    assert Trun.decode(Reader(expected.to_bytes())) == expected


def test_trun_partial_fields_round_trip():
    expected = Trun(entries=[TrunEntry(size=10), TrunEntry(size=20)])
    assert Trun.decode(Reader(expected.to_bytes())) == expected


def test_trun_empty_round_trip():
    expected = Trun()
    assert Trun.decode(Reader(expected.to_bytes())) == expected


def test_trun_first_sample_flags():
    flags = (1 << 2) | (1 << 9) | (1 << 10)
    body = struct.pack(">IIIIIII", flags, 2, 0xAB, 5, 6, 0xCD, 0)
    body = struct.pack(">I", flags) + struct.pack(">I", 2) + struct.pack(">I", 0xAB)
    body += struct.pack(">I", 5) + struct.pack(">II", 6, 0xCD)
    trun = Trun.decode(Reader(_atom(b"trun", body)))
    assert trun.entries == [TrunEntry(size=5, flags=0xAB), TrunEntry(size=6, flags=0xCD)]


def test_trun_too_many_empty_entries():
    body = struct.pack(">II", 0, _MAX + 1)
    with pytest.raises(OutOfMemory):
        Trun.decode(Reader(_atom(b"trun", body)))


_MAX = 4096


def test_trun_empty_entries_at_limit():
    body = struct.pack(">II", 0, _MAX)
    trun = Trun.decode(Reader(_atom(b"trun", body)))
    assert len(trun.entries) == _MAX
    assert all(entry == TrunEntry() for entry in trun.entries)


def test_traf_round_trip():
    expected = Traf(
        tfhd=Tfhd(track_id=1, sample_description_index=1),
        tfdt=Tfdt(0),
        trun=Trun(data_offset=8, entries=[TrunEntry(duration=1, size=2)]),
    )
    assert Traf.decode(Reader(expected.to_bytes())) == expected


def test_traf_from_vp9_children():
    traf = Traf.decode(Reader(_atom(b"traf", VP9_TFHD + VP9_TFDT)))
    assert traf == Traf(tfhd=Tfhd(track_id=1, sample_description_index=1), tfdt=Tfdt(0))


def test_moof_round_trip():
    expected = Moof(
        mfhd=Mfhd(7),
        traf=[Traf(tfhd=Tfhd(track_id=1)), Traf(tfhd=Tfhd(track_id=2), tfdt=Tfdt(90))],
    )
    encoded = expected.to_bytes()
    assert Moof.decode(Reader(encoded)) == expected
    assert decode_any(Reader(encoded)) == expected


def test_moof_missing_mfhd():
    with pytest.raises(MissingBox):
        Moof.decode(Reader(_atom(b"moof", b"")))


def test_moof_duplicate_mfhd():
    with pytest.raises(DuplicateBox):
        Moof.decode(Reader(_atom(b"moof", VP9_MFHD + VP9_MFHD)))


def test_moof_unexpected_child():
    with pytest.raises(UnexpectedBox):
        Moof.decode(Reader(_atom(b"moof", VP9_MFHD + VP9_TFDT)))


def test_moof_skips_unknown_child():
    unknown = Unknown(FourCC(b"zzzz"), b"abc").to_bytes()
    moof = Moof.decode(Reader(_atom(b"moof", VP9_MFHD + unknown)))
    assert moof == Moof(mfhd=Mfhd(1), traf=[])