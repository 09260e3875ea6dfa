import pytest

from mp4atoms.codec import Reader, Writer
from mp4atoms.errors import InvalidString, OutOfBounds, ShortRead

FTYP = b"\0\0\0\x14ftypiso6\0\0\x02\0mp41"


def test_reads_documented_ftyp_fields():
    reader = Reader(FTYP)
    assert reader.read_u32() == len(FTYP)
    assert reader.read_bytes(4) == b"ftyp"
    assert reader.read_bytes(4) == b"iso6"
    assert reader.read_u32() == 512
    assert reader.read_rest() == b"mp41"
    assert not reader.has_remaining()


@pytest.mark.parametrize(
    "write, read, value",
    [
        ("write_u8", "read_u8", 200),
        ("write_i8", "read_i8", -100),
        ("write_u16", "read_u16", 0xBEEF),
        ("write_i16", "read_i16", -12345),
        ("write_u32", "read_u32", 0xDEADBEEF),
        ("write_i32", "read_i32", -123456789),
        ("write_u64", "read_u64", 2**63 + 17),
        ("write_i64", "read_i64", -(2**62)),
    ],
)
def test_integer_round_trip(write, read, value):
    writer = Writer()
    getattr(writer, write)(value)
    reader = Reader(writer.getvalue())
    assert getattr(reader, read)() == value
    assert reader.remaining() == 0


def test_integer_width():
    writer = Writer()
    writer.write_u16(1)
    writer.write_u64(1)
    assert len(writer) == 10


def test_signed_byte():
    assert Reader(b"\xff").read_i8() == -1
    assert Reader(b"\xff").read_u8() == 255


def test_write_out_of_range():
    with pytest.raises(OverflowError):
        Writer().write_u8(256)
    with pytest.raises(OverflowError):
        Writer().write_u32(-1)


def test_read_past_end():
    reader = Reader(b"\0\0\0")
    with pytest.raises(OutOfBounds):
        reader.read_u32()
    assert reader.remaining() == 3


def test_peek_does_not_consume():
    reader = Reader(FTYP)
    assert reader.peek(4) == FTYP[:4]
    assert reader.remaining() == len(FTYP)


def test_take_consumes_and_isolates():
    reader = Reader(FTYP)
    reader.advance(8)
    body = reader.take(4)
    assert body.read_rest() == b"iso6"
    assert reader.remaining() == len(FTYP) - 12
    with pytest.raises(OutOfBounds):
        reader.take(reader.remaining() + 1)


def test_cstring_round_trip():
    writer = Writer()
    writer.write_cstring("héllo")
    writer.write_cstring("")
    writer.write_u8(7)
    reader = Reader(writer.getvalue())
    assert reader.read_cstring() == "héllo"
    assert reader.read_cstring() == ""
    assert reader.read_u8() == 7


def test_cstring_without_terminator():
    reader = Reader(b"abc")
    assert reader.read_cstring() == "abc"
    assert not reader.has_remaining()


def test_cstring_invalid_utf8():
    with pytest.raises(InvalidString):
        Reader(b"\xff\xfe\0").read_cstring()


def test_read_exact_success():
    reader = Reader(b"\x00\x01\x02\x03\x04")
    assert reader.read_exact(2, lambda r: r.read_u16()) == 1
    assert reader.remaining() == 3


def test_read_exact_short_read():
    reader = Reader(b"\x00\x01\x02\x03")
    with pytest.raises(ShortRead):
        reader.read_exact(4, lambda r: r.read_u16())
    assert reader.remaining() == 4


def test_read_exact_out_of_bounds():
    reader = Reader(b"\x00\x01")
    with pytest.raises(OutOfBounds):
        reader.read_exact(4, lambda r: r.read_u16())


def test_read_exact_inner_overrun():
    reader = Reader(b"\x00\x01\x02\x03")
    with pytest.raises(OutOfBounds):
        reader.read_exact(2, lambda r: r.read_u32())


def test_set_bytes_patches_size():
    writer = Writer()
    writer.write_u32(0)
    writer.write_bytes(b"ftypiso6")
    writer.write_bytes(b"\0\0\x02\0mp41")
    size = Writer()
    size.write_u32(len(writer))
    writer.set_bytes(0, size.getvalue())
    assert writer.getvalue() == FTYP
    assert bytes(writer) == FTYP


def test_set_bytes_outside():
    writer = Writer()
    writer.write_u8(1)
    with pytest.raises(IndexError):
        writer.set_bytes(0, b"\0\0")