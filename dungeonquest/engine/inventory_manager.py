"""Inventory management system."""

import logging

from dungeonquest.engine.stat_calculator import StatCalculator
from dungeonquest.models.items import ArmorItem, PotionItem, WeaponItem
from dungeonquest.models.player import Player

logger = logging.getLogger(__name__.split(".")[-1])


class InventoryManager:
    """Handles equipping, unequipping and using the player's items.

    Every operation returns ``(success, message)``; failures leave the
    player untouched.
    """

    @staticmethod
    def equip(player: Player, item_name: str) -> tuple[bool, str]:
        """
        Equip a weapon or armor from the inventory.

        Whatever already occupies the slot goes back to the inventory first.

        Args:
            player: Player equipping the item
            item_name: Case-insensitive item name

        Returns:
            Tuple of (success, message)
        """
        item = player.get_item(item_name)
        if item is None:
            return False, f"You don't have '{item_name}'."

        match item:
            case WeaponItem():
                if player.weapon is not None:
                    InventoryManager._return_to_inventory(player, player.weapon)
                player.remove_item(item)
                player.weapon = item
            case ArmorItem():
                if player.armor is not None:
                    InventoryManager._return_to_inventory(player, player.armor)
                player.remove_item(item)
                player.armor = item
            case _:
                return False, f"{item.name} cannot be equipped."

        StatCalculator.refresh(player)
        logger.debug(f"{player.name} equipped {item.name}")
        return True, f"You equipped {item.name}."

    @staticmethod
    def unequip(player: Player, item_name: str) -> tuple[bool, str]:
        """
        Move an equipped item back to the inventory.

        Args:
            player: Player unequipping the item
            item_name: Case-insensitive name of the equipped weapon or armor

        Returns:
            Tuple of (success, message)
        """
        wanted = item_name.strip().lower()

        if player.weapon is not None and player.weapon.name.lower() == wanted:
            item = player.weapon
        elif player.armor is not None and player.armor.name.lower() == wanted:
            item = player.armor
        else:
            return False, f"You don't have '{item_name}' equipped."

        InventoryManager._return_to_inventory(player, item)
        StatCalculator.refresh(player)
        logger.debug(f"{player.name} unequipped {item.name}")
        return True, f"You unequipped {item.name}."

    @staticmethod
    def use(player: Player, item_name: str) -> tuple[bool, str]:
        """Drink a potion. Potions are single use and leave the inventory."""
        item = player.get_item(item_name)
        if item is None:
            return False, f"You don't have '{item_name}'."

        match item:
            case PotionItem(heal_amount=heal_amount):
                healed = player.heal(heal_amount)
                player.remove_item(item)
                return True, f"You drink the {item.name}. Healed {healed} HP."
            case _:
                return False, f"You can't use {item.name}."

    @staticmethod
    def _return_to_inventory(player: Player, item) -> None:
        if player.weapon is item:
            player.weapon = None
        elif player.armor is item:
            player.armor = None
        player.add_item(item)
