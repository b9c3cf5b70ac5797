"""Tests for InventoryManager and StatCalculator."""

import pytest

from dungeonquest.engine.inventory_manager import InventoryManager
from dungeonquest.engine.stat_calculator import StatCalculator
from dungeonquest.models.items import ArmorItem, KeyItem, PotionItem, WeaponItem
from dungeonquest.models.player import Player


@pytest.fixture
def sword():
    return WeaponItem(name="Iron Sword", description="Sharp", attack_bonus=5, crit_bonus=0.05)


@pytest.fixture
def shield():
    return ArmorItem(name="Wooden Shield", description="Oak", defense_bonus=3, block_bonus=0.1)


@pytest.fixture
def player(sword, shield):
    hero = Player(name="Hero")
    hero.add_item(sword)
    hero.add_item(shield)
    hero.add_item(PotionItem(name="Health Potion", description="Restores 30 HP", heal_amount=30))
    hero.add_item(KeyItem(name="Master Key", description="Ornate"))
    return hero


class TestEquip:
    """Test suite for equipping."""

    def test_equip_weapon_adds_bonuses(self, player, sword):
        """Test that a weapon raises attack and crit chance and leaves the inventory."""
        success, message = InventoryManager.equip(player, "iron sword")

        assert success is True
        assert "Iron Sword" in message
        assert player.weapon is sword
        assert sword not in player.inventory
        assert player.stats.attack_power == player.base_stats.attack_power + 5
        assert player.stats.crit_chance == pytest.approx(player.base_stats.crit_chance + 0.05)

    def test_equip_armor_adds_bonuses(self, player, shield):
        """Test that armor raises defense and block chance."""
        InventoryManager.equip(player, "Wooden Shield")
        assert player.armor is shield
        assert player.stats.defense == player.base_stats.defense + 3
        assert player.stats.block_chance == pytest.approx(player.base_stats.block_chance + 0.1)

    def test_equip_then_unequip_restores_stats_exactly(self, player):
        """Test the equip/unequip round trip for both slots."""
        before = player.current_stats.model_copy()

        InventoryManager.equip(player, "Iron Sword")
        InventoryManager.equip(player, "Wooden Shield")
        InventoryManager.unequip(player, "Wooden Shield")
        InventoryManager.unequip(player, "Iron Sword")

        assert player.current_stats == before
        assert player.weapon is None and player.armor is None
        assert len(player.inventory) == 4

    def test_equipment_change_keeps_health(self, player):
        """Test that swapping gear does not heal or hurt."""
        player.take_damage(25)
        health = player.health

        InventoryManager.equip(player, "Iron Sword")
        assert player.health == health
        InventoryManager.unequip(player, "Iron Sword")
        assert player.health == health

    def test_equip_replaces_current_weapon(self, player, sword):
        """Test that the previous weapon goes back to the inventory."""
        blade = WeaponItem(name="Legendary Blade", description="Ancient", attack_bonus=15)
        player.add_item(blade)

        InventoryManager.equip(player, "Iron Sword")
        InventoryManager.equip(player, "Legendary Blade")

        assert player.weapon is blade
        assert sword in player.inventory
        assert player.stats.attack_power == player.base_stats.attack_power + 15

    def test_equip_non_equipment_fails(self, player):
        """Test that potions and keys cannot be equipped."""
        success, message = InventoryManager.equip(player, "Health Potion")
        assert success is False
        assert "cannot be equipped" in message

    def test_equip_missing_item_fails(self, player):
        """Test equipping something the player does not have."""
        success, _ = InventoryManager.equip(player, "Excalibur")
        assert success is False

    def test_chances_capped_at_one(self):
        """Test that bonuses never push a chance above 1."""
        cloak = ArmorItem(name="Shadow Cloak", description="Dark", dodge_bonus=1.0)
        hero = Player(name="Hero")
        hero.add_item(cloak)

        InventoryManager.equip(hero, "Shadow Cloak")
        assert hero.stats.dodge_chance == 1.0


class TestUnequip:
    """Test suite for unequipping."""

    def test_unequip_not_equipped_fails(self, player):
        """Test unequipping something that is only in the inventory."""
        success, message = InventoryManager.unequip(player, "Iron Sword")
        assert success is False
        assert "equipped" in message


class TestUse:
    """Test suite for using items."""

    def test_potion_heals_and_is_consumed(self, player):
        """Test drinking a potion."""
        player.take_damage(45)
        assert player.health == 60

        success, message = InventoryManager.use(player, "health potion")

        assert success is True
        assert "30" in message
        assert player.health == 90
        assert player.get_item("Health Potion") is None

    def test_using_a_key_fails(self, player):
        """Test that non-potions cannot be used."""
        success, message = InventoryManager.use(player, "Master Key")
        assert success is False
        assert message == "You can't use Master Key."
        assert player.has_item("Master Key")


class TestStatCalculator:
    """Test suite for StatCalculator."""

    def test_health_clamped_to_new_maximum(self):
        """Test that current health never exceeds the recomputed maximum."""
        hero = Player(name="Hero")
        hero.current_stats = hero.current_stats.model_copy(update={"max_health": 150, "health": 150})

        StatCalculator.refresh(hero)

        assert hero.stats.max_health == hero.base_stats.max_health
        assert hero.health == hero.base_stats.max_health
