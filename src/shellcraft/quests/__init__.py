"""Quest content and journal glue.

Reads quest text from the block-structured quests.txt format, checks live
progress, and drives the journal/offer flow on top of the soul package.
"""

from .journal import OFFER_LADDER, next_offer, offer_quest, run_journal, show_quest_progress
from .loader import QuestDataError, load_quests, parse_quests
from .models import QuestData
from .progress import QuestProgress, check_progress, count_rats

__all__ = [
    "QuestData",
    "QuestDataError",
    "load_quests",
    "parse_quests",
    "QuestProgress",
    "check_progress",
    "count_rats",
    "OFFER_LADDER",
    "next_offer",
    "offer_quest",
    "run_journal",
    "show_quest_progress",
]
