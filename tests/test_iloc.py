import pytest

from mp4atoms.codec import Reader
from mp4atoms.errors import Unsupported
from mp4atoms.iloc import Iloc, ItemLocation, ItemLocationExtent

ENCODED_ILOC_LIBAVIF = bytes(
    [
        0x00, 0x00, 0x00, 0x1E, 0x69, 0x6C, 0x6F, 0x63, 0x00, 0x00, 0x00, 0x00, 0x44, 0x00, 0x00,
        0x01, 0x00, 0x01, 0x00, 0x00, 0x00, 0x01, 0x00, 0x00, 0x01, 0x38, 0x00, 0x00, 0x00, 0x1A,
    ]
)


def libavif_iloc():
    return Iloc(
        item_locations=[
            ItemLocation(
                item_id=1,
                construction_method=0,
                data_reference_index=0,
                base_offset=0,
                extents=[ItemLocationExtent(item_reference_index=0, offset=312, length=26)],
            )
        ]
    )


def test_iloc_libavif_decode():
    assert Iloc.decode(Reader(ENCODED_ILOC_LIBAVIF)) == libavif_iloc()


def test_iloc_avif_encode():
    assert libavif_iloc().to_bytes() == ENCODED_ILOC_LIBAVIF


@pytest.mark.parametrize("base_offset", [0, 5, 0x1_0000_0000])
def test_iloc_roundtrip_base_offsets(base_offset):
    iloc = Iloc(
        [
            ItemLocation(
                item_id=3,
                base_offset=base_offset,
                extents=[ItemLocationExtent(offset=200, length=100)],
            ),
            ItemLocation(item_id=4, extents=[]),
        ]
    )
    assert Iloc.decode(Reader(iloc.to_bytes())) == iloc


def test_iloc_invalid_offset_size():
    data = bytearray(ENCODED_ILOC_LIBAVIF)
    data[12] = 0x34
    with pytest.raises(Unsupported):
        Iloc.decode(Reader(bytes(data)))


def test_iloc_empty_roundtrip():
    assert Iloc.decode(Reader(Iloc().to_bytes())) == Iloc([])