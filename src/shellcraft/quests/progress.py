from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from .models import QUEST_SEWER_CLEANSE, QuestData

logger = logging.getLogger(__name__)

RAT_SUFFIX = ".rat"
DEFAULT_RAT_PROGRESS = "Progress: {count} rats remaining"


@dataclass(frozen=True)
class QuestProgress:
    complete: bool
    message: Optional[str] = None


def count_rats(sewer_dir: Union[str, Path]) -> int:
    """Count entries in ``sewer_dir`` whose name ends with '.rat'.

    A missing or unreadable sewer counts as empty.
    """
    try:
        return sum(1 for entry in Path(sewer_dir).iterdir() if entry.name.endswith(RAT_SUFFIX))
    except OSError:
        logger.debug("Sewer %s not readable; counting 0 rats", sewer_dir, exc_info=True)
        return 0


def check_progress(
    quest_id: int,
    sewer_dir: Union[str, Path],
    quest: Optional[QuestData] = None,
) -> QuestProgress:
    """Evaluate live progress for an active quest.

    Only the sewer cleanse has tracked progress; other quests report
    incomplete with no progress line.
    """
    if quest_id == QUEST_SEWER_CLEANSE:
        rats = count_rats(sewer_dir)
        fmt = (quest.progress_format if quest else None) or DEFAULT_RAT_PROGRESS
        return QuestProgress(complete=rats == 0, message=fmt.format(count=rats))
    return QuestProgress(complete=False)
