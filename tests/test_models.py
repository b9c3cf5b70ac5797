"""Tests for stats, items, combatants, player and NPC models."""

import pytest
from pydantic import ValidationError

from dungeonquest.models.combatants import Boss, Enemy
from dungeonquest.models.items import (
    ArmorItem,
    KeyItem,
    PotionItem,
    WeaponItem,
    find_item,
    is_equippable,
    is_usable,
    item_adapter,
)
from dungeonquest.models.npc import NPC, NPCState
from dungeonquest.models.player import Player
from dungeonquest.models.stats import CombatStats


class TestCombatStats:
    """Test suite for CombatStats."""

    def test_starts_at_full_health(self):
        """Test that health defaults to max health."""
        stats = CombatStats(max_health=50, attack_power=12)
        assert stats.health == 50
        assert stats.is_alive is True

    def test_health_above_max_rejected(self):
        """Test that health cannot exceed max health."""
        with pytest.raises(ValidationError):
            CombatStats(health=60, max_health=50, attack_power=1)

    def test_chances_must_be_probabilities(self):
        """Test that chance fields are bounded to [0, 1]."""
        with pytest.raises(ValidationError):
            CombatStats(max_health=10, attack_power=1, dodge_chance=1.5)

    def test_take_damage_subtracts_defense(self):
        """Test the goblin example: 10 damage against defense 3."""
        stats = CombatStats(max_health=50, attack_power=12, defense=3)
        actual = stats.take_damage(10)
        assert actual == 7
        assert stats.health == 43

    def test_take_damage_below_defense_deals_nothing(self):
        """Test that defense never heals."""
        stats = CombatStats(max_health=50, attack_power=12, defense=8)
        assert stats.take_damage(5) == 0
        assert stats.health == 50

    def test_health_floors_at_zero(self):
        """Test that overkill damage leaves health at zero."""
        stats = CombatStats(max_health=10, attack_power=1)
        stats.take_damage(100)
        assert stats.health == 0
        assert stats.is_alive is False

    def test_negative_damage_rejected(self):
        """Test that negative damage raises."""
        stats = CombatStats(max_health=10, attack_power=1)
        with pytest.raises(ValueError):
            stats.take_damage(-1)

    def test_heal_caps_at_max(self):
        """Test that healing stops at max health and reports the amount healed."""
        stats = CombatStats(health=80, max_health=100, attack_power=1)
        assert stats.heal(30) == 20
        assert stats.health == 100


class TestItems:
    """Test suite for item variants."""

    def test_discriminator_picks_variant(self):
        """Test that the category field selects the right model."""
        item = item_adapter.validate_python(
            {"category": "potion", "name": "Health Potion", "description": "Restores 30 HP", "heal_amount": 30}
        )
        assert isinstance(item, PotionItem)
        assert item.heal_amount == 30

    def test_unknown_category_rejected(self):
        """Test that an unknown category fails validation."""
        with pytest.raises(ValidationError):
            item_adapter.validate_python({"category": "scroll", "name": "Scroll", "description": "Old paper"})

    def test_items_are_immutable(self):
        """Test that items cannot be modified after creation."""
        sword = WeaponItem(name="Iron Sword", description="Sharp", attack_bonus=5)
        with pytest.raises(ValidationError):
            sword.attack_bonus = 50

    def test_empty_name_rejected(self):
        """Test that items need a name."""
        with pytest.raises(ValidationError):
            KeyItem(name="", description="Nothing")

    def test_capabilities(self):
        """Test equippable and usable checks per variant."""
        sword = WeaponItem(name="Iron Sword", description="Sharp", attack_bonus=5)
        shield = ArmorItem(name="Shield", description="Oak", defense_bonus=3)
        potion = PotionItem(name="Potion", description="Red", heal_amount=10)
        key = KeyItem(name="Key", description="Brass")

        assert is_equippable(sword) and is_equippable(shield)
        assert not is_equippable(potion) and not is_equippable(key)
        assert is_usable(potion)
        assert not is_usable(sword)

    def test_find_item_is_case_insensitive(self):
        """Test lookup by name ignores case."""
        key = KeyItem(name="Master Key", description="Ornate")
        assert find_item([key], "master KEY") is key
        assert find_item([key], "key") is None


class TestCombatants:
    """Test suite for Enemy and Boss."""

    def test_drop_loot_happens_once(self):
        """Test that loot is handed over exactly once."""
        potion = PotionItem(name="Potion", description="Red", heal_amount=10)
        enemy = Enemy(name="Goblin", stats=CombatStats(max_health=30, attack_power=8), loot=[potion])

        assert enemy.drop_loot() == [potion]
        assert enemy.drop_loot() == []

    def test_add_loot_rejects_none(self):
        """Test that None is not valid loot."""
        enemy = Enemy(name="Goblin", stats=CombatStats(max_health=30, attack_power=8))
        with pytest.raises(ValueError):
            enemy.add_loot(None)

    def test_boss_forwards_to_enemy(self):
        """Test that the boss exposes its wrapped enemy's state."""
        boss = Boss(
            enemy=Enemy(name="Dark Lord", stats=CombatStats(max_health=100, attack_power=20, defense=10)),
            special_ability_name="Shadow Strike",
        )
        assert boss.name == "Dark Lord"
        assert boss.take_damage(25) == 15
        assert boss.stats.health == 85
        assert boss.enemy.stats.health == 85

    def test_boss_cooldown(self):
        """Test cooldown reset and tick never going below zero."""
        boss = Boss(
            enemy=Enemy(name="Dark Lord", stats=CombatStats(max_health=100, attack_power=20)),
            special_ability_name="Shadow Strike",
        )
        assert boss.special_ready is True
        boss.reset_cooldown()
        assert boss.special_ability_cooldown == 3
        assert boss.special_ready is False
        for _ in range(5):
            boss.tick_cooldown()
        assert boss.special_ability_cooldown == 0

    def test_boss_round_trips_as_boss(self):
        """Test that serialized bosses come back as bosses."""
        boss = Boss(
            enemy=Enemy(name="Dark Lord", stats=CombatStats(max_health=100, attack_power=20)),
            special_ability_name="Shadow Strike",
            special_ability_cooldown=2,
        )
        restored = Boss.model_validate_json(boss.model_dump_json())
        assert restored.kind == "boss"
        assert restored.special_ability_cooldown == 2


class TestPlayer:
    """Test suite for Player."""

    def test_current_stats_start_as_copy_of_base(self, quiet_stats):
        """Test that a new player's current stats equal but do not alias the base stats."""
        player = Player(name="Hero", base_stats=quiet_stats)
        assert player.current_stats == player.base_stats
        assert player.current_stats is not player.base_stats

    def test_defaults(self):
        """Test the default starting character."""
        player = Player(name="Hero")
        assert player.health == 100
        assert player.stats.attack_power == 10
        assert player.stats.defense == 5

    def test_damage_touches_current_stats_only(self, quiet_stats):
        """Test that damage never changes the base stats."""
        player = Player(name="Hero", base_stats=quiet_stats)
        assert player.take_damage(15) == 10
        assert player.health == 90
        assert player.base_stats.health == 100

    def test_has_item_includes_equipped(self, quiet_stats):
        """Test that equipped items count as owned."""
        sword = WeaponItem(name="Iron Sword", description="Sharp", attack_bonus=5)
        player = Player(name="Hero", base_stats=quiet_stats, weapon=sword)
        assert player.has_item("iron sword") is True
        assert player.get_item("iron sword") is None

    def test_remove_item_by_identity(self, quiet_stats):
        """Test that only the exact instance is removed."""
        first = KeyItem(name="Key", description="Brass")
        second = KeyItem(name="Key", description="Brass")
        player = Player(name="Hero", base_stats=quiet_stats)
        player.add_item(first)
        player.add_item(second)

        assert player.remove_item(second) is True
        assert player.inventory[0] is first
        assert player.remove_item(second) is False


class TestNPC:
    """Test suite for NPC."""

    def test_talk_cycles_dialogue(self):
        """Test that dialogue lines repeat in order."""
        npc = NPC(name="Sage", description="Wise", dialogue=["One", "Two"])
        assert [npc.talk() for _ in range(3)] == ["One", "Two", "One"]
        assert npc.state == NPCState.TALKED
        assert npc.talked_count == 3

    def test_dialogue_required(self):
        """Test that an NPC needs something to say."""
        with pytest.raises(ValidationError):
            NPC(name="Mute", description="Silent", dialogue=[])
