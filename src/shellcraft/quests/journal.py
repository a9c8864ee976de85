from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional, TextIO, Tuple, Union

from ..soul import Soul, save_soul
from .loader import QuestDataError
from .models import (
    QUEST_LOCKED_DOOR,
    QUEST_NAVIGATE_MAZE,
    QUEST_PORTAL_HOME,
    QUEST_SEWER_CLEANSE,
    QUEST_THE_CRACK,
    QuestData,
)
from .progress import check_progress

logger = logging.getLogger(__name__)

# (quest id, minimum level), offered in this order
OFFER_LADDER: List[Tuple[int, int]] = [
    (QUEST_SEWER_CLEANSE, 0),
    (QUEST_THE_CRACK, 2),
    (QUEST_LOCKED_DOOR, 3),
    (QUEST_PORTAL_HOME, 5),
    (QUEST_NAVIGATE_MAZE, 6),
]


def _indented(text: str, out: TextIO, prefix: str = "  ") -> None:
    for line in text.splitlines():
        print(f"{prefix}{line}", file=out)


def next_offer(soul: Soul) -> Optional[int]:
    """First quest in the ladder the soul is eligible for and not already on."""
    for quest_id, min_level in OFFER_LADDER:
        if soul.level >= min_level and not soul.has_quest(quest_id):
            return quest_id
    return None


def show_quest_progress(
    quest_id: int,
    catalog: Dict[int, QuestData],
    sewer_dir: Union[str, Path],
    out: Optional[TextIO] = None,
) -> None:
    out = out or sys.stdout
    quest = catalog.get(quest_id)
    if quest is None:
        print(f"Quest {quest_id}: Unknown quest", file=out)
        print(file=out)
        return

    print(f"Quest: {quest.name}", file=out)
    _indented(quest.journal_description, out)
    print(file=out)

    progress = check_progress(quest_id, sewer_dir, quest)
    if progress.message:
        print(f"  {progress.message}", file=out)
    if quest.journal_objective:
        print(f"  Objective: {quest.journal_objective}", file=out)
    if quest.journal_reward:
        print(f"  Reward: {quest.journal_reward}", file=out)

    if progress.complete:
        print(file=out)
        print("  *** QUEST COMPLETE! ***", file=out)
        if quest.completion_message:
            print(f"  {quest.completion_message}", file=out)

    print(file=out)


def offer_quest(
    soul: Soul,
    quest_id: int,
    catalog: Dict[int, QuestData],
    soul_path: Union[str, Path],
    out: Optional[TextIO] = None,
) -> int:
    """Show the offer screen, accept the quest and persist the soul.

    Returns the slot index the quest landed in. Raises QuestDataError when the
    quest has no text, and SoulError when accepting or saving fails.
    """
    out = out or sys.stdout
    quest = catalog.get(quest_id)
    if quest is None:
        raise QuestDataError(f"Quest {quest_id} not found in quest data")

    print("=== New Quest Available ===", file=out)
    print(file=out)
    print(quest.offer_title, file=out)
    print(file=out)
    _indented(quest.offer_narrative, out, prefix="")
    print(file=out)
    print(f"Objective: {quest.offer_objective}", file=out)
    print(f"Reward: {quest.offer_reward}", file=out)
    print(file=out)
    print("Quest accepted!", file=out)

    slot = soul.add_quest(quest_id)
    save_soul(soul, soul_path)
    logger.info("Quest %d accepted into slot %d", quest_id, slot)

    print("Quest added to your journal.", file=out)
    return slot


def run_journal(
    soul: Soul,
    catalog: Dict[int, QuestData],
    soul_path: Union[str, Path],
    sewer_dir: Union[str, Path],
    out: Optional[TextIO] = None,
) -> Optional[int]:
    """Print the quest journal and offer a new quest if a slot is free.

    Returns the id of the quest accepted, if any. Output goes to ``out``, or
    to whatever ``sys.stdout`` is at call time.
    """
    out = out or sys.stdout
    print(file=out)
    print("=== Quest Journal ===", file=out)
    print(file=out)

    active = soul.active_quests()
    if not active:
        print("No active quests.", file=out)
    for quest_id in active:
        show_quest_progress(quest_id, catalog, sewer_dir, out)

    print(file=out)

    unlocked = soul.unlocked_slots
    used = len(active)
    accepted: Optional[int] = None

    if used < unlocked:
        free = unlocked - used
        print(f"You have {free} empty quest slot{'' if free == 1 else 's'}.", file=out)
        print(file=out)

        quest_id = next_offer(soul)
        if quest_id is None:
            print("No new quests available at your level.", file=out)
        else:
            offer_quest(soul, quest_id, catalog, soul_path, out)
            accepted = quest_id
    else:
        print(f"All quest slots full ({used}/{unlocked}).", file=out)
        print("Complete a quest to free up a slot.", file=out)

    print(file=out)
    return accepted
