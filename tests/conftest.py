"""Pytest configuration and fixtures."""

import random

import pytest

from dungeonquest.engine.dice import Dice
from dungeonquest.engine.game_engine import GameEngine
from dungeonquest.engine.narrator import Narrator
from dungeonquest.models.combatants import Boss, Enemy
from dungeonquest.models.items import ArmorItem, KeyItem, PotionItem, WeaponItem
from dungeonquest.models.npc import NPC
from dungeonquest.models.player import Player
from dungeonquest.models.puzzle import Puzzle, PuzzleKind
from dungeonquest.models.room import Direction, Room
from dungeonquest.models.state import Catalog, GameWorld
from dungeonquest.models.stats import CombatStats
from dungeonquest.persistence.save_manager import SaveManager


class ScriptedRandom(random.Random):
    """Replays queued draws, then falls back to fixed values.

    The default roll of 0.99 misses every chance check below 99%, and the
    default integer keeps damage variance at zero.
    """

    def __init__(self, rolls=(), ints=(), default_roll=0.99, default_int=0):
        super().__init__(0)
        self.rolls = list(rolls)
        self.ints = list(ints)
        self.default_roll = default_roll
        self.default_int = default_int
        self.choices_made = 0

    def random(self):
        return self.rolls.pop(0) if self.rolls else self.default_roll

    def randint(self, a, b):
        value = self.ints.pop(0) if self.ints else self.default_int
        return min(max(value, a), b)

    def choice(self, seq):
        self.choices_made += 1
        return seq[0]


@pytest.fixture
def rng():
    """Scripted random source shared by the dice fixture."""
    return ScriptedRandom()


@pytest.fixture
def dice(rng):
    """Dice driven by the scripted random source."""
    return Dice(rng)


@pytest.fixture
def quiet_stats():
    """Player stats without any chance-based mitigation."""
    return CombatStats(max_health=100, attack_power=10, defense=5)


@pytest.fixture
def catalog():
    """Prototypes for the small test world."""
    return Catalog(
        items={
            "Iron Sword": WeaponItem(name="Iron Sword", description="A sharp blade", attack_bonus=5),
            "Wooden Shield": ArmorItem(
                name="Wooden Shield", description="A sturdy shield", defense_bonus=3, block_bonus=0.1
            ),
            "Health Potion": PotionItem(name="Health Potion", description="Restores 30 HP", heal_amount=30),
            "Master Key": KeyItem(name="Master Key", description="An ornate key"),
        },
        enemies={
            "Goblin Warrior": Enemy(
                name="Goblin Warrior",
                description="A small but fierce goblin",
                stats=CombatStats(max_health=50, attack_power=12, defense=3),
                loot=[PotionItem(name="Health Potion", description="Restores 30 HP", heal_amount=30)],
            ),
            "Dark Lord": Boss(
                enemy=Enemy(
                    name="Dark Lord",
                    description="The master of the tower",
                    stats=CombatStats(max_health=100, attack_power=20, defense=10),
                ),
                special_ability_name="Shadow Strike",
            ),
        },
        puzzles={
            "Ancient Riddle": Puzzle(
                name="Ancient Riddle",
                description="I speak without a mouth. What am I?",
                kind=PuzzleKind.RIDDLE,
                solution="echo",
                reward=ArmorItem(
                    name="Wooden Shield", description="A sturdy shield", defense_bonus=3, block_bonus=0.1
                ),
            ),
        },
        npcs={
            "Old Librarian": NPC(
                name="Old Librarian",
                description="A stooped figure",
                dialogue=["Few come back down.", "The troll carries a key."],
            ),
        },
    )


@pytest.fixture
def small_world(catalog, quiet_stats):
    """Three rooms: hall (start), armory to the north with a goblin, locked vault to the east with the boss."""
    hall = Room("Hall", "A quiet hall.")
    armory = Room("Armory", "Racks of old weapons.")
    vault = Room("Vault", "A sealed vault.")

    hall.connect(Direction.NORTH, armory, bidirectional=True)
    hall.connect(Direction.EAST, vault, bidirectional=True)
    vault.lock("Master Key")

    hall.add_item(catalog.spawn_item("Health Potion"))
    hall.add_puzzle(catalog.spawn_puzzle("Ancient Riddle"))
    hall.add_npc(catalog.spawn_npc("Old Librarian"))
    armory.add_enemy(catalog.spawn_enemy("Goblin Warrior"))
    vault.add_enemy(catalog.spawn_enemy("Dark Lord"))

    player = Player(name="Tester", base_stats=quiet_stats)
    world = GameWorld(
        rooms={"hall": hall, "armory": armory, "vault": vault},
        player=player,
        current_room_key="hall",
        catalog=catalog,
        victory_room="vault",
    )
    hall.mark_visited()
    return world


@pytest.fixture
def save_manager(tmp_path):
    """Save manager writing into a temporary directory."""
    return SaveManager(save_directory=str(tmp_path / "saves"))


@pytest.fixture
def engine(small_world, save_manager, dice):
    """Game engine over the small world with scripted dice and no narration."""
    return GameEngine(small_world, save_manager=save_manager, dice=dice, narrator=Narrator(enabled=False))
