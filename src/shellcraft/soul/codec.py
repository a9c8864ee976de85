"""Binary codec for soul.dat.

Layout (little-endian):
[Magic(4) | Version(2) | Checksum(8) | Level(4) | XP(8) | Quests(8x4) | Pad(4)] = 62 bytes
followed by ``hit_points`` zero bytes. The trailing region is counted, never read.
"""
from __future__ import annotations

import io
import logging
import os
import struct
from typing import BinaryIO

from .errors import BadMagic, SoulTooSmall, UnsupportedVersion
from .models import QUEST_SLOTS, Soul

logger = logging.getLogger(__name__)

MAGIC = b"SHC!"
VERSION = 1

HEADER_FMT = f"<4sHQIQ{QUEST_SLOTS}I4x"
HEADER_SIZE = struct.calcsize(HEADER_FMT)  # 62

# Reserved header fields, always written as zero
_CHECKSUM = 0


def encode_soul(soul: Soul) -> bytes:
    """Encode a validated Soul into the full file contents."""
    soul.validate()
    header = struct.pack(
        HEADER_FMT,
        MAGIC,
        VERSION,
        _CHECKSUM,
        soul.level,
        soul.experience,
        *soul.quest_slots,
    )
    return header + bytes(soul.hit_points)


def decode_header(header: bytes, total_length: int) -> Soul:
    """Build a Soul from the fixed header and the total source length.

    ``header`` must hold at least the fixed header; anything after it is ignored.
    """
    if total_length < HEADER_SIZE:
        raise SoulTooSmall(total_length, HEADER_SIZE)
    if len(header) < HEADER_SIZE:
        # Source reported more bytes than it delivered
        raise SoulTooSmall(len(header), HEADER_SIZE)

    magic = header[:4]
    if magic != MAGIC:
        raise BadMagic(bytes(magic), MAGIC)

    fields = struct.unpack_from(HEADER_FMT, header)
    version = fields[1]
    if version != VERSION:
        raise UnsupportedVersion(version, VERSION)

    # fields[2] is the checksum: reserved, not verified
    level, experience = fields[3], fields[4]
    quest_slots = list(fields[5 : 5 + QUEST_SLOTS])

    soul = Soul(
        level=level,
        experience=experience,
        quest_slots=quest_slots,
        hit_points=total_length - HEADER_SIZE,
    )
    soul.validate()
    return soul


def decode_soul(data: bytes) -> Soul:
    """Decode complete file contents held in memory."""
    return decode_header(bytes(data[:HEADER_SIZE]), len(data))


def read_soul(stream: BinaryIO) -> Soul:
    """Decode a soul from a seekable binary stream.

    Total length comes from seeking to the end; only the header is read.
    """
    try:
        total_length = os.fstat(stream.fileno()).st_size
    except (AttributeError, io.UnsupportedOperation):
        total_length = stream.seek(0, os.SEEK_END)
    stream.seek(0)
    header = stream.read(HEADER_SIZE)
    logger.debug("Read %d header bytes from %d byte soul source", len(header), total_length)
    return decode_header(header, total_length)
