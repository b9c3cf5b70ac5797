"""Game engine package."""

from dungeonquest.engine.action_validator import ActionValidator
from dungeonquest.engine.combat import CombatEngine
from dungeonquest.engine.dice import Dice
from dungeonquest.engine.game_engine import GameEngine
from dungeonquest.engine.inventory_manager import InventoryManager
from dungeonquest.engine.narrator import Narrator
from dungeonquest.engine.stat_calculator import StatCalculator
from dungeonquest.engine.world_builder import WorldDefinition, build_world, load_world_definition

__all__ = [
    "ActionValidator",
    "CombatEngine",
    "Dice",
    "GameEngine",
    "InventoryManager",
    "Narrator",
    "StatCalculator",
    "WorldDefinition",
    "build_world",
    "load_world_definition",
]
