"""Combat statistics models."""

from typing import Any

from pydantic import BaseModel, Field, model_validator

from dungeonquest.config import DEFAULT_CRIT_MULTIPLIER


class CombatStats(BaseModel):
    """Health, offense, defense and chance values of anything that fights."""

    health: int = Field(ge=0, description="Current health points")
    max_health: int = Field(ge=1, description="Maximum health points")
    attack_power: int = Field(ge=0, description="Base damage of a normal attack")
    defense: int = Field(ge=0, default=0, description="Flat damage reduction")
    dodge_chance: float = Field(ge=0.0, le=1.0, default=0.0, description="Chance to avoid a hit entirely")
    block_chance: float = Field(ge=0.0, le=1.0, default=0.0, description="Chance to halve incoming damage")
    crit_chance: float = Field(ge=0.0, le=1.0, default=0.0, description="Chance to land a critical hit")
    crit_multiplier: float = Field(ge=1.0, default=DEFAULT_CRIT_MULTIPLIER, description="Critical hit damage factor")

    @model_validator(mode="before")
    @classmethod
    def start_at_full_health(cls, data: Any) -> Any:
        """Combatants created without an explicit health value start at max health."""
        if isinstance(data, dict) and data.get("health") is None and "max_health" in data:
            return {**data, "health": data["max_health"]}
        return data

    @model_validator(mode="after")
    def check_health_bounds(self) -> "CombatStats":
        if self.health > self.max_health:
            raise ValueError(f"Health {self.health} exceeds max health {self.max_health}")
        return self

    @property
    def is_alive(self) -> bool:
        return self.health > 0

    def take_damage(self, damage: int) -> int:
        """
        Apply incoming damage after defense.

        Args:
            damage: Damage before the flat defense reduction

        Returns:
            Damage actually subtracted from health
        """
        if damage < 0:
            raise ValueError("Damage cannot be negative")

        actual_damage = max(damage - self.defense, 0)
        self.health = max(self.health - actual_damage, 0)
        return actual_damage

    def heal(self, amount: int) -> int:
        """Restore health up to max health. Returns the amount actually healed."""
        if amount < 0:
            raise ValueError("Heal amount cannot be negative")

        old_health = self.health
        self.health = min(self.health + amount, self.max_health)
        return self.health - old_health

    def clamp_health(self, max_health: int | None = None) -> None:
        """Pull health back inside [0, max_health]."""
        ceiling = self.max_health if max_health is None else max_health
        self.health = min(max(self.health, 0), ceiling)
