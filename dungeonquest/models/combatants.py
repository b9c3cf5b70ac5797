"""Enemy and boss models."""

from typing import Annotated, Literal, Protocol, Union

from pydantic import BaseModel, Field

from dungeonquest.config import DEFAULT_BOSS_MAX_COOLDOWN
from dungeonquest.models.items import Item
from dungeonquest.models.stats import CombatStats


class Combatant(Protocol):
    """Anything the combat engine can pit against something else."""

    @property
    def name(self) -> str: ...

    @property
    def stats(self) -> CombatStats: ...

    @property
    def is_alive(self) -> bool: ...

    def take_damage(self, damage: int) -> int: ...


class Enemy(BaseModel):
    """A scripted opponent that owns its loot until it dies."""

    kind: Literal["enemy"] = "enemy"
    name: str = Field(min_length=1, description="Enemy name, also the lookup key")
    description: str = Field(default="", description="Enemy description")
    stats: CombatStats = Field(description="Live combat statistics")
    loot: list[Item] = Field(default_factory=list, description="Items dropped on death, in order")

    @property
    def is_alive(self) -> bool:
        return self.stats.is_alive

    def take_damage(self, damage: int) -> int:
        return self.stats.take_damage(damage)

    def add_loot(self, item: Item) -> None:
        if item is None:
            raise ValueError("Loot item cannot be None")
        self.loot.append(item)

    def drop_loot(self) -> list[Item]:
        """Hand over the whole loot list and forget it, so loot drops exactly once."""
        dropped = list(self.loot)
        self.loot.clear()
        return dropped

    def describe(self) -> str:
        status = "Alive" if self.is_alive else "Dead"
        return (
            f"Name: {self.name}\n"
            f"Description: {self.description}\n"
            f"Health: {self.stats.health}/{self.stats.max_health}\n"
            f"Attack Power: {self.stats.attack_power}\n"
            f"Defense: {self.stats.defense}\n"
            f"Status: {status}"
        )


class Boss(BaseModel):
    """An enemy with a special ability on a cooldown.

    Boss wraps an :class:`Enemy` rather than extending it; everything an enemy
    can do is forwarded to the wrapped instance.
    """

    kind: Literal["boss"] = "boss"
    enemy: Enemy = Field(description="The underlying enemy")
    special_ability_name: str = Field(min_length=1, description="Name of the special attack")
    special_ability_cooldown: int = Field(ge=0, default=0, description="Turns until the special is ready")
    max_cooldown: int = Field(ge=0, default=DEFAULT_BOSS_MAX_COOLDOWN, description="Cooldown after the special fires")

    @property
    def name(self) -> str:
        return self.enemy.name

    @property
    def description(self) -> str:
        return self.enemy.description

    @property
    def stats(self) -> CombatStats:
        return self.enemy.stats

    @property
    def loot(self) -> list[Item]:
        return self.enemy.loot

    @property
    def is_alive(self) -> bool:
        return self.enemy.is_alive

    @property
    def special_ready(self) -> bool:
        return self.special_ability_cooldown == 0

    def take_damage(self, damage: int) -> int:
        return self.enemy.take_damage(damage)

    def add_loot(self, item: Item) -> None:
        self.enemy.add_loot(item)

    def drop_loot(self) -> list[Item]:
        return self.enemy.drop_loot()

    def tick_cooldown(self) -> None:
        self.special_ability_cooldown = max(self.special_ability_cooldown - 1, 0)

    def reset_cooldown(self) -> None:
        self.special_ability_cooldown = self.max_cooldown

    def describe(self) -> str:
        return f"{self.enemy.describe()}\nSpecial Ability: {self.special_ability_name}"


Foe = Annotated[Union[Enemy, Boss], Field(discriminator="kind")]
