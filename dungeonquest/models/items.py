"""Item models.

Items are immutable tagged variants. The ``category`` field is the pydantic
discriminator, so a serialized item always round-trips to the right variant.
"""

from enum import Enum
from typing import Annotated, Iterable, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class ItemCategory(str, Enum):
    """Item categories."""

    WEAPON = "weapon"
    ARMOR = "armor"
    POTION = "potion"
    KEY = "key"
    MISC = "misc"


class ItemBase(BaseModel):
    """Fields shared by every item variant."""

    model_config = ConfigDict(frozen=True)  # Immutable model

    name: str = Field(min_length=1, description="Display name, also the lookup key")
    description: str = Field(min_length=1, description="Item description")


class WeaponItem(ItemBase):
    category: Literal["weapon"] = "weapon"
    attack_bonus: int = Field(ge=0, default=0, description="Added to attack power when equipped")
    crit_bonus: float = Field(ge=0.0, le=1.0, default=0.0, description="Added to crit chance when equipped")


class ArmorItem(ItemBase):
    category: Literal["armor"] = "armor"
    defense_bonus: int = Field(ge=0, default=0, description="Added to defense when equipped")
    dodge_bonus: float = Field(ge=0.0, le=1.0, default=0.0, description="Added to dodge chance when equipped")
    block_bonus: float = Field(ge=0.0, le=1.0, default=0.0, description="Added to block chance when equipped")


class PotionItem(ItemBase):
    category: Literal["potion"] = "potion"
    heal_amount: int = Field(ge=1, description="Health restored when drunk")


class KeyItem(ItemBase):
    category: Literal["key"] = "key"


class MiscItem(ItemBase):
    category: Literal["misc"] = "misc"


Item = Annotated[
    Union[WeaponItem, ArmorItem, PotionItem, KeyItem, MiscItem],
    Field(discriminator="category"),
]

item_adapter = TypeAdapter(Item)


def is_equippable(item: Item) -> bool:
    match item:
        case WeaponItem() | ArmorItem():
            return True
        case _:
            return False


def is_usable(item: Item) -> bool:
    """Only potions can be used; using one consumes it."""
    match item:
        case PotionItem():
            return True
        case _:
            return False


def find_item(items: Iterable[Item], name: str) -> Optional[Item]:
    """Find the first item whose name matches case-insensitively."""
    wanted = name.strip().lower()
    return next((item for item in items if item.name.lower() == wanted), None)


def remove_item(items: list[Item], item: Item) -> bool:
    """Remove this exact instance from the list. Returns False when absent."""
    for index, candidate in enumerate(items):
        if candidate is item:
            del items[index]
            return True
    return False
