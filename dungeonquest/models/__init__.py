"""Data models module for DungeonQuest."""

# Stats
from dungeonquest.models.stats import CombatStats

# Items
from dungeonquest.models.items import (
    ArmorItem,
    Item,
    ItemCategory,
    KeyItem,
    MiscItem,
    PotionItem,
    WeaponItem,
)

# Combatants
from dungeonquest.models.combatants import Boss, Combatant, Enemy, Foe

# Player
from dungeonquest.models.player import Player

# Puzzles and NPCs
from dungeonquest.models.puzzle import Puzzle, PuzzleKind, PuzzleResult, PuzzleState
from dungeonquest.models.npc import NPC, NPCState

# World
from dungeonquest.models.room import Direction, Room
from dungeonquest.models.state import Catalog, GameWorld

# Actions
from dungeonquest.models.actions import ActionType, AttackResult, Command, CommandResult

# Settings
from dungeonquest.models.settings import GameSettings

__all__ = [
    # Stats
    "CombatStats",
    # Items
    "Item",
    "ItemCategory",
    "WeaponItem",
    "ArmorItem",
    "PotionItem",
    "KeyItem",
    "MiscItem",
    # Combatants
    "Combatant",
    "Enemy",
    "Boss",
    "Foe",
    # Player
    "Player",
    # Puzzles and NPCs
    "Puzzle",
    "PuzzleKind",
    "PuzzleResult",
    "PuzzleState",
    "NPC",
    "NPCState",
    # World
    "Direction",
    "Room",
    "Catalog",
    "GameWorld",
    # Actions
    "ActionType",
    "AttackResult",
    "Command",
    "CommandResult",
    # Settings
    "GameSettings",
]
