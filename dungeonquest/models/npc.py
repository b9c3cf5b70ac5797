"""Non-player character model."""

from enum import Enum

from pydantic import BaseModel, Field, model_validator


class NPCState(str, Enum):
    NOT_TALKED = "not_talked"
    TALKED = "talked"


class NPC(BaseModel):
    """A character the player can talk to. Dialogue lines cycle in order."""

    name: str = Field(min_length=1, description="NPC name, also the lookup key")
    description: str = Field(min_length=1, description="NPC description")
    dialogue: list[str] = Field(min_length=1, description="Lines spoken in turn")
    state: NPCState = Field(default=NPCState.NOT_TALKED, description="Whether the player has talked to them")
    talked_count: int = Field(ge=0, default=0, description="Number of conversations")
    dialogue_index: int = Field(ge=0, default=0, description="Index of the next line")

    @model_validator(mode="after")
    def check_dialogue_index(self) -> "NPC":
        if self.dialogue_index >= len(self.dialogue):
            raise ValueError(f"dialogue_index {self.dialogue_index} out of range for {len(self.dialogue)} lines")
        return self

    def talk(self) -> str:
        line = self.dialogue[self.dialogue_index]
        self.state = NPCState.TALKED
        self.talked_count += 1
        self.dialogue_index = (self.dialogue_index + 1) % len(self.dialogue)
        return line
