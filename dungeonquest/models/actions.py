"""Command and result models."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ActionType(str, Enum):
    """Canonical actions the dispatcher understands."""

    MOVE = "move"
    LOOK = "look"
    INVENTORY = "inventory"
    STATS = "stats"
    TAKE = "take"
    DROP = "drop"
    USE = "use"
    EQUIP = "equip"
    UNEQUIP = "unequip"
    ATTACK = "attack"
    FLEE = "flee"
    UNLOCK = "unlock"
    SOLVE = "solve"
    TALK = "talk"
    SAVE = "save"
    LOAD = "load"
    HELP = "help"


class Command(BaseModel):
    """A parsed command: canonical action plus argument tokens."""

    model_config = ConfigDict(frozen=True)  # Immutable model

    action: ActionType = Field(description="Canonical action")
    args: list[str] = Field(default_factory=list, description="Argument tokens, in order")

    @property
    def text(self) -> str:
        return " ".join(self.args)


class AttackResult(BaseModel):
    """Outcome of one directed attack."""

    model_config = ConfigDict(frozen=True)  # Immutable model

    attacker: str = Field(description="Attacker name")
    defender: str = Field(description="Defender name")
    damage: int = Field(ge=0, description="Damage actually subtracted from the defender")
    defender_health: int = Field(ge=0, description="Defender health after the attack")
    critical: bool = Field(default=False, description="Whether the attack was a critical hit")
    dodged: bool = Field(default=False, description="Whether the defender dodged")
    blocked: bool = Field(default=False, description="Whether the defender blocked")
    special: Optional[str] = Field(default=None, description="Special ability used, if any")


class CommandResult(BaseModel):
    """What the dispatcher hands back for display."""

    text: str = Field(description="Human readable result")
    success: bool = Field(default=True, description="Whether the action took effect")
    game_over: bool = Field(default=False, description="Whether the game has ended")
    victory: bool = Field(default=False, description="Whether the game ended in a win")
