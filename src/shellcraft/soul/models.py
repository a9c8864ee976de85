from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List

from .errors import (
    InvalidExperience,
    InvalidHitPoints,
    InvalidLevel,
    InvalidQuest,
    NoQuestSlots,
    QuestAlreadyActive,
)

logger = logging.getLogger(__name__)

MAX_LEVEL = 42
QUEST_SLOTS = 8
EMPTY_SLOT = 0

BASE_HIT_POINTS = 100
HIT_POINTS_PER_LEVEL = 20
BASE_NEXT_LEVEL_XP = 1000.0
LEVELS_PER_SLOT = 6

U32_MAX = 2**32 - 1
U64_MAX = 2**64 - 1


def max_hit_points(level: int) -> int:
    """Hit point ceiling for a level: 100 + level * 20."""
    return BASE_HIT_POINTS + level * HIT_POINTS_PER_LEVEL


def experience_for_next_level(level: int) -> int:
    """XP required to advance past ``level``: 1000 * 2^level.

    Computed in double precision and truncated toward zero; values beyond the
    unsigned 64-bit range saturate at ``U64_MAX``.
    """
    try:
        value = BASE_NEXT_LEVEL_XP * (2.0 ** level)
    except OverflowError:
        return U64_MAX
    if value >= 2.0 ** 64:
        return U64_MAX
    return int(value)


def unlocked_slot_count(level: int) -> int:
    """Quest slots usable at a level: 1 at L0, one more every 6 levels, max 8."""
    return min(QUEST_SLOTS, 1 + level // LEVELS_PER_SLOT)


@dataclass
class Soul:
    """In-memory soul record: one player's persisted progression state.

    Only ``level``, ``experience`` and ``quest_slots`` live in the file header.
    ``hit_points`` is carried by the length of the file's trailing region and
    never stored as a header field.
    """

    level: int = 0
    experience: int = 0
    quest_slots: List[int] = field(default_factory=lambda: [EMPTY_SLOT] * QUEST_SLOTS)
    hit_points: int = BASE_HIT_POINTS

    def __post_init__(self) -> None:
        self.quest_slots = list(self.quest_slots)
        if len(self.quest_slots) != QUEST_SLOTS:
            raise ValueError(f"quest_slots must hold exactly {QUEST_SLOTS} entries, got {len(self.quest_slots)}")

    # Derived values

    @property
    def hit_point_ceiling(self) -> int:
        return max_hit_points(self.level)

    @property
    def xp_for_next_level(self) -> int:
        return experience_for_next_level(self.level)

    @property
    def unlocked_slots(self) -> int:
        return unlocked_slot_count(self.level)

    def is_slot_unlocked(self, index: int) -> bool:
        return 0 <= index < self.unlocked_slots

    def active_quests(self) -> List[int]:
        """Non-empty quest ids in unlocked slots, in slot order.

        Ids sitting in locked slots are ignored; they only appear when the
        file was edited by hand.
        """
        return [q for q in self.quest_slots[: self.unlocked_slots] if q != EMPTY_SLOT]

    def has_quest(self, quest_id: int) -> bool:
        return quest_id in self.active_quests()

    # Mutation

    def add_quest(self, quest_id: int) -> int:
        """Place ``quest_id`` in the first empty unlocked slot.

        Returns the slot index. Locked slots are never written, even if empty.
        """
        if not EMPTY_SLOT < quest_id <= U32_MAX:
            raise InvalidQuest(quest_id)

        unlocked = self.unlocked_slots
        for index in range(unlocked):
            if self.quest_slots[index] == quest_id:
                raise QuestAlreadyActive(quest_id, index)

        for index in range(unlocked):
            if self.quest_slots[index] == EMPTY_SLOT:
                self.quest_slots[index] = quest_id
                logger.debug("Quest %d added to slot %d", quest_id, index)
                return index

        raise NoQuestSlots(unlocked)

    def remove_quest(self, quest_id: int) -> bool:
        """Clear every slot holding ``quest_id``, locked slots included.

        Returns True if at least one slot matched.
        """
        removed = False
        for index, value in enumerate(self.quest_slots):
            if value == quest_id:
                self.quest_slots[index] = EMPTY_SLOT
                removed = True
        if removed:
            logger.debug("Quest %d removed", quest_id)
        return removed

    # Validation

    def validate(self) -> None:
        """Check level, hit point, experience and slot ranges. Never mutates."""
        if not 0 <= self.level <= MAX_LEVEL:
            raise InvalidLevel(self.level, MAX_LEVEL)

        ceiling = self.hit_point_ceiling
        if not 0 <= self.hit_points <= ceiling:
            raise InvalidHitPoints(self.hit_points, ceiling)

        if not 0 <= self.experience <= U64_MAX:
            raise InvalidExperience(self.experience)

        for value in self.quest_slots:
            # 0 is the empty sentinel and valid here
            if not 0 <= value <= U32_MAX:
                raise InvalidQuest(value)
