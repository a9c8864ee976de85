from __future__ import annotations

from pathlib import Path
from typing import Optional, Union


class SoulError(Exception):
    """Base exception for soul record load/save/mutation errors."""


class SoulIOError(SoulError):
    """Raised when reading or writing the soul file fails at the OS level.

    ``ambiguous`` is True when the failure happened after the new content was
    already swapped into place, so the persisted state may or may not reflect
    the attempted save.
    """

    def __init__(
        self,
        message: str,
        cause: Optional[OSError] = None,
        path: Optional[Union[str, Path]] = None,
        ambiguous: bool = False,
    ) -> None:
        super().__init__(message)
        self.cause = cause
        self.path = Path(path) if path is not None else None
        self.ambiguous = ambiguous

    @property
    def not_found(self) -> bool:
        return isinstance(self.cause, FileNotFoundError)


class SoulFormatError(SoulError):
    """Raised when the bytes do not form a soul file at all."""


class SoulTooSmall(SoulFormatError):
    def __init__(self, length: int, required: int) -> None:
        super().__init__(f"File too small: {length} bytes (need >= {required})")
        self.length = length
        self.required = required


class BadMagic(SoulFormatError):
    def __init__(self, found: bytes, expected: bytes) -> None:
        super().__init__(f"Invalid magic bytes: {found!r} (expected {expected!r})")
        self.found = found
        self.expected = expected


class UnsupportedVersion(SoulFormatError):
    def __init__(self, version: int, supported: int) -> None:
        super().__init__(f"Unsupported version: {version} (supported: {supported})")
        self.version = version
        self.supported = supported


class SoulValidationError(SoulError):
    """Raised when a record's values break the level/hit point invariants."""


class InvalidLevel(SoulValidationError):
    def __init__(self, level: int, max_level: int) -> None:
        super().__init__(f"Invalid level: {level} (max {max_level})")
        self.level = level
        self.max_level = max_level


class InvalidHitPoints(SoulValidationError):
    def __init__(self, hit_points: int, ceiling: int) -> None:
        super().__init__(f"Invalid HP: {hit_points} (max {ceiling} for level)")
        self.hit_points = hit_points
        self.ceiling = ceiling


class InvalidExperience(SoulValidationError):
    def __init__(self, experience: int) -> None:
        super().__init__(f"Invalid experience: {experience} (must fit in 64 unsigned bits)")
        self.experience = experience


class QuestSlotError(SoulError):
    """Raised when a quest slot mutation cannot be applied."""


class InvalidQuest(QuestSlotError):
    def __init__(self, quest_id: int) -> None:
        super().__init__(f"Invalid quest ID: {quest_id} (must be a non-zero 32-bit id)")
        self.quest_id = quest_id


class QuestAlreadyActive(QuestSlotError):
    def __init__(self, quest_id: int, slot: int) -> None:
        super().__init__(f"Quest {quest_id} already active in slot {slot}")
        self.quest_id = quest_id
        self.slot = slot


class NoQuestSlots(QuestSlotError):
    def __init__(self, unlocked: int) -> None:
        super().__init__(f"No available quest slots ({unlocked} unlocked, all occupied)")
        self.unlocked = unlocked
