"""Player model."""

from typing import Any, Optional

from pydantic import BaseModel, Field, model_validator

from dungeonquest.config import (
    DEFAULT_PLAYER_ATTACK,
    DEFAULT_PLAYER_BLOCK_CHANCE,
    DEFAULT_PLAYER_CRIT_CHANCE,
    DEFAULT_PLAYER_CRIT_MULTIPLIER,
    DEFAULT_PLAYER_DEFENSE,
    DEFAULT_PLAYER_DODGE_CHANCE,
    DEFAULT_PLAYER_HEALTH,
)
from dungeonquest.models.items import ArmorItem, Item, WeaponItem, find_item, remove_item
from dungeonquest.models.stats import CombatStats


def default_player_stats() -> CombatStats:
    """Starting stats for a fresh character."""
    return CombatStats(
        max_health=DEFAULT_PLAYER_HEALTH,
        attack_power=DEFAULT_PLAYER_ATTACK,
        defense=DEFAULT_PLAYER_DEFENSE,
        dodge_chance=DEFAULT_PLAYER_DODGE_CHANCE,
        block_chance=DEFAULT_PLAYER_BLOCK_CHANCE,
        crit_chance=DEFAULT_PLAYER_CRIT_CHANCE,
        crit_multiplier=DEFAULT_PLAYER_CRIT_MULTIPLIER,
    )


class Player(BaseModel):
    """Complete player information.

    ``base_stats`` never changes with equipment; ``current_stats`` is base
    plus equipment bonuses and carries the live health value. Keep the two in
    step through ``StatCalculator.refresh``.
    """

    name: str = Field(min_length=1, description="Player name")

    # Stats
    base_stats: CombatStats = Field(default_factory=default_player_stats, description="Stats without equipment")
    current_stats: CombatStats = Field(description="Effective stats (base + equipment), live health")

    # Items
    inventory: list[Item] = Field(default_factory=list, description="Carried items, unordered")
    weapon: Optional[WeaponItem] = Field(default=None, description="Equipped weapon")
    armor: Optional[ArmorItem] = Field(default=None, description="Equipped armor")

    @model_validator(mode="before")
    @classmethod
    def derive_current_stats(cls, data: Any) -> Any:
        """A new character starts with current stats equal to base stats."""
        if not isinstance(data, dict) or data.get("current_stats") is not None:
            return data

        base = data.get("base_stats")
        if base is None:
            base = default_player_stats()
            data = {**data, "base_stats": base}
        current = base.model_copy() if isinstance(base, CombatStats) else dict(base)
        return {**data, "current_stats": current}

    @property
    def stats(self) -> CombatStats:
        return self.current_stats

    @property
    def health(self) -> int:
        return self.current_stats.health

    @property
    def is_alive(self) -> bool:
        return self.current_stats.is_alive

    def take_damage(self, damage: int) -> int:
        return self.current_stats.take_damage(damage)

    def heal(self, amount: int) -> int:
        return self.current_stats.heal(amount)

    def add_item(self, item: Item) -> None:
        if item is None:
            raise ValueError("Item cannot be None")
        self.inventory.append(item)

    def remove_item(self, item: Item) -> bool:
        return remove_item(self.inventory, item)

    def get_item(self, item_name: str) -> Optional[Item]:
        return find_item(self.inventory, item_name)

    def has_item(self, item_name: str) -> bool:
        """Check the inventory and both equipment slots by name."""
        return find_item(self.all_items, item_name) is not None

    @property
    def all_items(self) -> list[Item]:
        """Every item the player owns, equipped ones included."""
        equipped = [item for item in (self.weapon, self.armor) if item is not None]
        return self.inventory + equipped

    def inventory_list(self) -> str:
        if not self.inventory:
            return "Inventory is empty"
        return "\n".join(
            f"{index}. {item.name} - {item.description}" for index, item in enumerate(self.inventory, 1)
        )

    def describe(self) -> str:
        stats = self.current_stats
        weapon = self.weapon.name if self.weapon else "None"
        armor = self.armor.name if self.armor else "None"
        return (
            f"Name: {self.name}\n"
            f"Health: {stats.health}/{stats.max_health}\n"
            f"Attack Power: {stats.attack_power}\n"
            f"Defense: {stats.defense}\n"
            f"Dodge: {stats.dodge_chance:.0%}  Block: {stats.block_chance:.0%}  Crit: {stats.crit_chance:.0%}\n"
            f"Weapon: {weapon}\n"
            f"Armor: {armor}\n"
            f"Items: {len(self.inventory)}"
        )
