from __future__ import annotations

import logging
from importlib import resources
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from pydantic import ValidationError

from .models import QuestData, parse_u32

logger = logging.getLogger(__name__)

BLOCK_MARKER = "%% QUEST"
TRIPLE_QUOTE = '"""'

_DATA_PKG = "shellcraft.data"
_DEFAULT_FILE = "quests.txt"


class QuestDataError(Exception):
    """Raised when quest text cannot be read or a block does not validate."""

    def __init__(self, message: str, errors: Optional[list] = None):
        super().__init__(message)
        self.errors = errors or []


def load_quests(path: Optional[Union[str, Path]] = None) -> Dict[int, QuestData]:
    """Load the quest catalog from ``path`` or from the packaged quests.txt."""
    try:
        if path is None:
            text = resources.files(_DATA_PKG).joinpath(_DEFAULT_FILE).read_text(encoding="utf-8")
            source = f"{_DATA_PKG}/{_DEFAULT_FILE}"
        else:
            text = Path(path).read_text(encoding="utf-8")
            source = str(path)
    except OSError as e:
        raise QuestDataError(f"Cannot read quest data {path or _DEFAULT_FILE}: {e}") from e

    quests = parse_quests(text)
    logger.debug("Loaded %d quests from %s", len(quests), source)
    return quests


def parse_quests(text: str) -> Dict[int, QuestData]:
    """Parse the block-structured quest format.

    Each block opens with a ``%% QUEST <n>`` line followed by ``key=value``
    lines. A value starting with three double quotes runs until the next
    three double quotes, across lines, and is stripped.

    Blocks that are empty, commented out with '#', or whose id does not fit a
    quest slot (missing, zero, or outside the unsigned 32-bit range)
    are skipped. Other numbers that do not parse count as 0. Unknown keys are
    ignored.
    """
    quests: Dict[int, QuestData] = {}
    for raw_block in text.split(BLOCK_MARKER):
        block = raw_block.strip()
        if not block or block.startswith("#"):
            continue

        fields = dict(_parse_fields(_drop_block_number(block)))
        if parse_u32(fields.get("id", "")) == 0:
            logger.warning("Skipping quest block without a valid id: %r", block[:40])
            continue

        try:
            quest = QuestData.model_validate(fields)
        except ValidationError as e:
            raise QuestDataError(f"Invalid quest block {fields.get('id')}: {e}", errors=e.errors()) from e

        if quest.id in quests:
            logger.warning("Duplicate quest id %d; later block wins", quest.id)
        quests[quest.id] = quest
    return quests


def _drop_block_number(block: str) -> str:
    # "%% QUEST 1" leaves "1" on the first line after splitting
    first, sep, rest = block.partition("\n")
    if sep and (not first.strip() or first.strip().isdigit()):
        return rest
    return block


def _parse_fields(block: str) -> List[Tuple[str, str]]:
    fields: List[Tuple[str, str]] = []
    key: Optional[str] = None
    buf: List[str] = []

    for line in block.splitlines():
        if key is not None:
            end = line.find(TRIPLE_QUOTE)
            if end == -1:
                buf.append(line)
                continue
            buf.append(line[:end])
            fields.append((key, "\n".join(buf).strip()))
            key, buf = None, []
            continue

        if "=" not in line or line.lstrip().startswith("#"):
            continue
        name, _, value = line.partition("=")
        name = name.strip()
        value = value.strip()

        if value.startswith(TRIPLE_QUOTE):
            rest = value[len(TRIPLE_QUOTE):]
            end = rest.find(TRIPLE_QUOTE)
            if end != -1:
                fields.append((name, rest[:end].strip()))
            else:
                key, buf = name, [rest]
        elif value:
            fields.append((name, value))

    if key is not None:
        logger.warning("Unterminated multi-line value for %r", key)
        fields.append((key, "\n".join(buf).strip()))
    return fields
