from __future__ import annotations

from typing import Optional, Union

from pydantic import BaseModel, Field, field_validator

# Quest ids as stored in soul quest slots
QUEST_SEWER_CLEANSE = 1
QUEST_THE_CRACK = 2
QUEST_LOCKED_DOOR = 3
QUEST_PORTAL_HOME = 4
QUEST_NAVIGATE_MAZE = 5

U32_MAX = 2**32 - 1


def parse_u32(value: Union[str, int]) -> int:
    """Read an unsigned 32-bit number from hand-edited quest text.

    Anything unparsable or out of range counts as 0.
    """
    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            return 0
    return value if 0 <= value <= U32_MAX else 0


class QuestData(BaseModel):
    """Display text and metadata for one quest, keyed by its soul slot id."""

    id: int = Field(..., gt=0, le=U32_MAX, description="Quest id stored in soul quest slots")
    name: str = Field("", description="Journal heading")
    min_level: int = Field(0, ge=0, description="Lowest level at which the quest is offered")
    reward_xp: int = Field(0, ge=0, description="Experience granted on completion")

    # Offer screen (when quest first becomes available)
    offer_title: str = ""
    offer_narrative: str = ""
    offer_objective: str = ""
    offer_reward: str = ""

    # Journal display (while quest is active)
    journal_description: str = ""

    journal_objective: Optional[str] = None
    journal_reward: Optional[str] = None
    progress_format: Optional[str] = Field(default=None, description="Progress line; '{count}' is substituted")
    completion_message: Optional[str] = None

    @field_validator("id", "min_level", "reward_xp", mode="before")
    @classmethod
    def lenient_int(cls, v: object) -> object:
        if isinstance(v, (str, int)) and not isinstance(v, bool):
            return parse_u32(v)
        return v
