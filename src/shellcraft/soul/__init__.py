"""Soul record subsystem.

This package provides:
- The Soul record with its derived formulas and quest-slot mutations
- A binary codec for the soul.dat wire layout
- load/save helpers with atomic, durable writes
- A typed error hierarchy for every decode/encode/mutation failure

Callers decode a Soul, mutate it, and save it back; save validates first.
"""

from .codec import HEADER_SIZE, MAGIC, VERSION, decode_soul, encode_soul, read_soul
from .errors import (
    BadMagic,
    InvalidExperience,
    InvalidHitPoints,
    InvalidLevel,
    InvalidQuest,
    NoQuestSlots,
    QuestAlreadyActive,
    QuestSlotError,
    SoulError,
    SoulFormatError,
    SoulIOError,
    SoulTooSmall,
    SoulValidationError,
    UnsupportedVersion,
)
from .models import (
    MAX_LEVEL,
    QUEST_SLOTS,
    Soul,
    experience_for_next_level,
    max_hit_points,
    unlocked_slot_count,
)
from .storage import load_soul, save_soul

__all__ = [
    "HEADER_SIZE",
    "MAGIC",
    "VERSION",
    "MAX_LEVEL",
    "QUEST_SLOTS",
    "Soul",
    "max_hit_points",
    "experience_for_next_level",
    "unlocked_slot_count",
    "encode_soul",
    "decode_soul",
    "read_soul",
    "load_soul",
    "save_soul",
    "SoulError",
    "SoulIOError",
    "SoulFormatError",
    "SoulTooSmall",
    "BadMagic",
    "UnsupportedVersion",
    "SoulValidationError",
    "InvalidLevel",
    "InvalidHitPoints",
    "InvalidExperience",
    "QuestSlotError",
    "InvalidQuest",
    "QuestAlreadyActive",
    "NoQuestSlots",
]
