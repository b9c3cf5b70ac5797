"""Tests for world snapshots and the two-pass restore."""

import pytest

from dungeonquest.errors import SaveGameError
from dungeonquest.models.combatants import Boss
from dungeonquest.models.items import ArmorItem, WeaponItem
from dungeonquest.models.npc import NPCState
from dungeonquest.models.room import Direction
from dungeonquest.models.state import Catalog
from dungeonquest.persistence.snapshot import SaveDocument, restore_world, snapshot_world


def round_trip(world, catalog=None):
    """Snapshot, serialize, parse and restore a world."""
    document = SaveDocument.model_validate_json(snapshot_world(world).model_dump_json(indent=2))
    return restore_world(document, catalog if catalog is not None else world.catalog)


class TestSnapshot:
    """Test suite for snapshot_world."""

    def test_connections_stored_by_name(self, small_world):
        """Test that the document holds room names, not objects."""
        document = snapshot_world(small_world)
        assert document.rooms["hall"].connections == {Direction.NORTH: "Armory", Direction.EAST: "Vault"}
        assert document.current_room == "hall"

    def test_snapshot_is_detached(self, small_world):
        """Test that later world changes do not leak into the document."""
        document = snapshot_world(small_world)
        small_world.rooms["armory"].enemies[0].stats.health = 1
        assert document.rooms["armory"].enemies[0].stats.health == 50


class TestRestore:
    """Test suite for restore_world."""

    def test_damaged_enemy_keeps_health(self, small_world, catalog):
        """Test that a 20/50 goblin is still 20/50 after a round trip."""
        small_world.rooms["armory"].enemies[0].stats.health = 20

        restored = round_trip(small_world)
        goblin = restored.rooms["armory"].enemies[0]

        assert goblin.stats.health == 20
        assert goblin.stats.max_health == 50
        assert catalog.enemies["Goblin Warrior"].stats.health == 50

    def test_solved_puzzle_stays_solved(self, small_world):
        """Test that puzzle progress survives."""
        puzzle = small_world.rooms["hall"].puzzles[0]
        puzzle.attempt("wrong")
        puzzle.attempt("echo")

        restored = round_trip(small_world).rooms["hall"].puzzles[0]

        assert restored.solved is True
        assert restored.attempts_left == 1

    def test_restored_entities_are_distinct_instances(self, small_world, catalog):
        """Test that nothing is shared with the catalog or the original world."""
        restored = round_trip(small_world)

        goblin = restored.rooms["armory"].enemies[0]
        assert goblin is not catalog.enemies["Goblin Warrior"]
        assert goblin is not small_world.rooms["armory"].enemies[0]
        assert restored.rooms["hall"].items[0] is not small_world.rooms["hall"].items[0]
        assert restored.rooms["hall"].puzzles[0] is not catalog.puzzles["Ancient Riddle"]

    def test_connections_rewired_to_restored_rooms(self, small_world):
        """Test that the second pass links the new room objects."""
        restored = round_trip(small_world)
        hall = restored.rooms["hall"]

        assert hall.get_connected_room(Direction.NORTH) is restored.rooms["armory"]
        assert restored.rooms["armory"].get_connected_room(Direction.SOUTH) is hall
        assert hall.get_connected_room(Direction.NORTH) is not small_world.rooms["armory"]

    def test_lock_state_and_visits(self, small_world):
        """Test that locks and visited flags persist."""
        small_world.rooms["armory"].mark_visited()
        restored = round_trip(small_world)

        vault = restored.rooms["vault"]
        assert vault.locked is True
        assert vault.required_key == "Master Key"
        assert restored.rooms["armory"].visited is True

    def test_boss_cooldown_persists(self, small_world):
        """Test that a boss comes back as a boss with its cooldown."""
        small_world.rooms["vault"].enemies[0].special_ability_cooldown = 2
        boss = round_trip(small_world).rooms["vault"].enemies[0]

        assert isinstance(boss, Boss)
        assert boss.special_ability_cooldown == 2
        assert boss.special_ability_name == "Shadow Strike"

    def test_player_inventory_and_equipment(self, small_world, catalog):
        """Test that the player keeps items, gear, stats and health."""
        player = small_world.player
        player.add_item(catalog.spawn_item("Health Potion"))
        player.weapon = catalog.spawn_item("Iron Sword")
        player.take_damage(25)

        restored = round_trip(small_world).player

        assert [item.name for item in restored.inventory] == ["Health Potion"]
        assert isinstance(restored.weapon, WeaponItem)
        assert restored.health == player.health
        assert restored.name == "Tester"

    def test_npc_conversation_state(self, small_world):
        """Test that NPCs remember where they are in their dialogue."""
        small_world.rooms["hall"].npcs[0].talk()
        npc = round_trip(small_world).rooms["hall"].npcs[0]

        assert npc.state == NPCState.TALKED
        assert npc.talk() == "The troll carries a key."

    def test_unknown_entities_rebuilt_from_record(self, small_world):
        """Test that an empty catalog still yields a complete world."""
        small_world.rooms["armory"].enemies[0].stats.health = 20
        restored = round_trip(small_world, catalog=Catalog())

        assert restored.rooms["armory"].enemies[0].stats.health == 20
        assert isinstance(restored.rooms["hall"].puzzles[0].reward, ArmorItem)

    def test_current_room_and_victory_room(self, small_world):
        """Test that the player's position and the win condition are kept."""
        small_world.move_to(small_world.rooms["armory"])
        restored = round_trip(small_world)

        assert restored.current_room_key == "armory"
        assert restored.victory_room == "vault"

    def test_unknown_connection_target_raises(self, small_world):
        """Test that a dangling connection name is rejected."""
        document = snapshot_world(small_world)
        document.rooms["hall"].connections[Direction.NORTH] = "Nowhere"

        with pytest.raises(SaveGameError):
            restore_world(document, small_world.catalog)

    def test_unknown_current_room_raises(self, small_world):
        """Test that the player must stand in a known room."""
        document = snapshot_world(small_world)
        document.current_room = "attic"

        with pytest.raises(SaveGameError):
            restore_world(document, small_world.catalog)

    def test_current_room_by_name_accepted(self, small_world):
        """Test that older saves naming the room instead of its key still load."""
        document = snapshot_world(small_world)
        document.current_room = "Armory"

        assert restore_world(document, small_world.catalog).current_room_key == "armory"
