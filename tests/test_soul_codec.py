import io
import struct

import pytest

from shellcraft.soul import (
    HEADER_SIZE,
    MAGIC,
    VERSION,
    BadMagic,
    InvalidHitPoints,
    InvalidLevel,
    Soul,
    SoulTooSmall,
    UnsupportedVersion,
    decode_soul,
    encode_soul,
    read_soul,
)
from shellcraft.soul.codec import HEADER_FMT


def make_header(level=0, xp=0, slots=(0,) * 8, magic=MAGIC, version=VERSION, checksum=0):
    return struct.pack(HEADER_FMT, magic, version, checksum, level, xp, *slots)


def test_header_size_is_62():
    assert HEADER_SIZE == 62
    assert len(make_header()) == 62


def test_encoded_layout_is_byte_exact():
    soul = Soul(level=5, experience=750, hit_points=200, quest_slots=[42, 0, 0, 0, 0, 0, 0, 7])
    data = encode_soul(soul)

    assert len(data) == 62 + 200
    assert data[0:4] == b"SHC!"
    assert data[4:6] == b"\x01\x00"
    assert data[6:14] == bytes(8)
    assert struct.unpack_from("<I", data, 14)[0] == 5
    assert struct.unpack_from("<Q", data, 18)[0] == 750
    assert list(struct.unpack_from("<8I", data, 26)) == [42, 0, 0, 0, 0, 0, 0, 7]
    assert data[58:62] == bytes(4)
    assert data[62:] == bytes(200)


def test_roundtrip():
    original = Soul(level=5, experience=750, hit_points=200, quest_slots=[42, 0, 0, 0, 0, 0, 0, 0])
    assert decode_soul(encode_soul(original)) == original


def test_roundtrip_at_limits():
    original = Soul(level=42, experience=2**64 - 1, hit_points=940, quest_slots=[2**32 - 1] * 8)
    assert decode_soul(encode_soul(original)) == original


def test_header_only_decodes_to_zero_hit_points():
    soul = decode_soul(make_header())
    assert soul.hit_points == 0
    assert soul.level == 0


def test_hit_points_come_from_length_not_content():
    data = make_header(level=2) + b"\xff" * 130
    soul = decode_soul(data)
    assert soul.hit_points == 130


def test_checksum_and_padding_are_ignored():
    data = bytearray(make_header(level=1, checksum=0xDEADBEEF) + bytes(10))
    data[58:62] = b"junk"
    soul = decode_soul(bytes(data))
    assert soul.level == 1
    assert soul.hit_points == 10


@pytest.mark.parametrize("length", [0, 1, 4, 61])
def test_short_source_is_too_small(length):
    with pytest.raises(SoulTooSmall) as exc:
        decode_soul(make_header()[:length])
    assert exc.value.length == length


def test_bad_magic_reports_found_bytes():
    with pytest.raises(BadMagic) as exc:
        decode_soul(make_header(magic=b"BAD!") + bytes(10))
    assert exc.value.found == b"BAD!"


def test_unsupported_version():
    with pytest.raises(UnsupportedVersion) as exc:
        decode_soul(make_header(version=2))
    assert exc.value.version == 2


def test_decode_rejects_level_above_cap():
    with pytest.raises(InvalidLevel) as exc:
        decode_soul(make_header(level=43))
    assert exc.value.level == 43


def test_decode_rejects_hit_points_above_ceiling():
    with pytest.raises(InvalidHitPoints) as exc:
        decode_soul(make_header(level=0) + bytes(101))
    assert exc.value.hit_points == 101
    assert exc.value.ceiling == 100


def test_encode_rejects_invalid_record():
    with pytest.raises(InvalidHitPoints):
        encode_soul(Soul(level=0, hit_points=101))


def test_read_soul_from_stream():
    original = Soul(level=7, experience=12, hit_points=33, quest_slots=[1, 2, 0, 0, 0, 0, 0, 0])
    assert read_soul(io.BytesIO(encode_soul(original))) == original


class ShortReadStream(io.BytesIO):
    """Claims a full length on seek but hands back a truncated header."""

    def read(self, size=-1):
        return super().read(size)[:20]


def test_read_soul_truncated_read_is_too_small():
    with pytest.raises(SoulTooSmall) as exc:
        read_soul(ShortReadStream(encode_soul(Soul())))
    assert exc.value.length == 20
