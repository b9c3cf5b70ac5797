"""Gameplay tunables."""

from pydantic import BaseModel, Field

from dungeonquest.config import (
    DEFAULT_BOSS_SPECIAL_CHANCE,
    DEFAULT_BOSS_SPECIAL_MULTIPLIER,
    DEFAULT_DAMAGE_VARIANCE,
    DEFAULT_FLEE_CHANCE,
    DEFAULT_NARRATOR_ENABLED,
)


class GameSettings(BaseModel):
    """Game settings shared by the combat engine and dispatcher."""

    damage_variance: int = Field(
        default=DEFAULT_DAMAGE_VARIANCE, ge=0, description="Attack damage varies by +/- this much"
    )
    flee_chance: float = Field(default=DEFAULT_FLEE_CHANCE, ge=0.0, le=1.0, description="Chance to escape combat")
    boss_special_chance: float = Field(
        default=DEFAULT_BOSS_SPECIAL_CHANCE, ge=0.0, le=1.0, description="Chance a ready boss uses its special"
    )
    boss_special_multiplier: float = Field(
        default=DEFAULT_BOSS_SPECIAL_MULTIPLIER, ge=1.0, description="Special attack damage factor"
    )
    narrator_enabled: bool = Field(default=DEFAULT_NARRATOR_ENABLED, description="Add flavor text to results")

    class Config:
        frozen = True  # Immutable model
