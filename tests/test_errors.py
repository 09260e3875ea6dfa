import pytest

from mp4atoms.errors import (
    DuplicateBox,
    InvalidFourCC,
    InvalidSize,
    InvalidString,
    MissingBox,
    MissingDescriptor,
    Mp4Error,
    OutOfBounds,
    OutOfMemory,
    OverDecode,
    Reserved,
    ShortRead,
    TooLarge,
    UnderDecode,
    UnexpectedBox,
    UnexpectedDescriptor,
    UnexpectedEof,
    UnknownQuicktimeVersion,
    UnknownVersion,
    Unsupported,
)
from mp4atoms.header import FourCC


@pytest.mark.parametrize(
    "error, message",
    [
        (OutOfBounds(), "out of bounds"),
        (ShortRead(), "short read"),
        (InvalidSize(), "invalid size"),
        (InvalidFourCC(), "invalid fourcc"),
        (UnexpectedEof(), "unexpected eof"),
        (OutOfMemory(), "out of memory"),
        (Reserved(), "reserved"),
    ],
)
def test_plain_messages(error, message):
    assert str(error) == message


@pytest.mark.parametrize(
    "cls, label",
    [
        (OverDecode, "over decode"),
        (UnderDecode, "under decode"),
        (MissingBox, "missing box"),
        (UnexpectedBox, "unexpected box"),
        (DuplicateBox, "duplicate box"),
    ],
)
def test_kind_messages(cls, label):
    kind = FourCC(b"ftyp")
    error = cls(kind)
    assert error.kind == kind
    assert str(error) == f"{label}: ftyp"


def test_too_large_keeps_kind():
    kind = FourCC(b"mdat")
    error = TooLarge(kind)
    assert error.kind == kind
    assert str(error) == "atom too large"


def test_numeric_payloads():
    assert UnknownVersion(3).version == 3
    assert str(UnknownVersion(3)) == "unknown version: 3"
    assert MissingDescriptor(4).tag == 4
    assert str(UnexpectedDescriptor(5)) == "unexpected descriptor: 5"
    assert str(UnknownQuicktimeVersion(2)) == "unknown quicktime version: 2"


def test_text_payloads():
    assert InvalidString("bad utf-8").reason == "bad utf-8"
    assert str(InvalidString("bad utf-8")) == "invalid string: bad utf-8"
    assert str(Unsupported("infe extensions")) == "unsupported: infe extensions"


@pytest.mark.parametrize(
    "error, message",
    [
        (OutOfBounds(), "out of bounds"),
        (ShortRead(), "short read"),
        (OverDecode(FourCC(b"moov")), "over decode: moov"),
        (UnknownVersion(9), "unknown version: 9"),
        (Reserved(), "reserved"),
    ],
)
def test_all_are_mp4_errors(error, message):
    with pytest.raises(Mp4Error) as info:
        raise error
    assert info.value is error
    assert str(info.value) == message