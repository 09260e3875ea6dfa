import pytest

from mp4atoms.codec import Reader
from mp4atoms.errors import InvalidSize
from mp4atoms.header import FourCC
from mp4atoms.iref import Iref, Reference


def test_iref_wire_version0():
    iref = Iref([Reference(FourCC(b"cdsc"), 2, [1, 3])])
    assert iref.to_bytes() == (
        b"\x00\x00\x00\x1ciref\x00\x00\x00\x00"
        b"\x00\x00\x00\x10cdsc\x00\x02\x00\x02\x00\x01\x00\x03"
    )


def test_iref_roundtrip_version0():
    iref = Iref(
        [
            Reference(FourCC(b"cdsc"), 2, [1, 3]),
            Reference(FourCC(b"thmb"), 4, [1]),
        ]
    )
    data = iref.to_bytes()
    assert data[8] == 0
    assert Iref.decode(Reader(data)) == iref


def test_iref_roundtrip_version1():
    iref = Iref([Reference(FourCC(b"dimg"), 1, [0x10000, 2])])
    data = iref.to_bytes()
    assert data[8] == 1
    assert Iref.decode(Reader(data)) == iref


def test_iref_empty_roundtrip():
    assert Iref.decode(Reader(Iref().to_bytes())) == Iref([])


def test_iref_box_len_too_large():
    body = b"\x00\x00\x00\x00" + b"\x00\x00\x00\xffcdsc\x00\x01\x00\x00"
    data = (8 + len(body)).to_bytes(4, "big") + b"iref" + body
    with pytest.raises(InvalidSize):
        Iref.decode(Reader(data))