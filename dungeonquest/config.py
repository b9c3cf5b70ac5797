"""Central configuration defaults and constants for DungeonQuest."""

import os

# Save Files
DEFAULT_SAVE_DIR = os.getenv("DUNGEONQUEST_SAVE_DIR", "saves")
DEFAULT_SAVE_EXTENSION = os.getenv("DUNGEONQUEST_SAVE_EXTENSION", ".json")
DEFAULT_QUICKSAVE_NAME = os.getenv("DUNGEONQUEST_QUICKSAVE_NAME", "quicksave")

# Combat Defaults
DEFAULT_DAMAGE_VARIANCE = int(os.getenv("DUNGEONQUEST_DAMAGE_VARIANCE", "2"))  # Attack rolls +/- this much
DEFAULT_FLEE_CHANCE = float(os.getenv("DUNGEONQUEST_FLEE_CHANCE", "0.5"))
DEFAULT_BOSS_SPECIAL_CHANCE = float(os.getenv("DUNGEONQUEST_BOSS_SPECIAL_CHANCE", "0.3"))
DEFAULT_BOSS_SPECIAL_MULTIPLIER = float(os.getenv("DUNGEONQUEST_BOSS_SPECIAL_MULTIPLIER", "1.5"))
DEFAULT_BOSS_MAX_COOLDOWN = int(os.getenv("DUNGEONQUEST_BOSS_MAX_COOLDOWN", "3"))

# Player Defaults
DEFAULT_PLAYER_NAME = os.getenv("DUNGEONQUEST_PLAYER_NAME", "Adventurer")
DEFAULT_PLAYER_HEALTH = int(os.getenv("DUNGEONQUEST_PLAYER_HEALTH", "100"))
DEFAULT_PLAYER_ATTACK = int(os.getenv("DUNGEONQUEST_PLAYER_ATTACK", "10"))
DEFAULT_PLAYER_DEFENSE = int(os.getenv("DUNGEONQUEST_PLAYER_DEFENSE", "5"))
DEFAULT_PLAYER_DODGE_CHANCE = float(os.getenv("DUNGEONQUEST_PLAYER_DODGE_CHANCE", "0.05"))
DEFAULT_PLAYER_BLOCK_CHANCE = float(os.getenv("DUNGEONQUEST_PLAYER_BLOCK_CHANCE", "0.1"))
DEFAULT_PLAYER_CRIT_CHANCE = float(os.getenv("DUNGEONQUEST_PLAYER_CRIT_CHANCE", "0.1"))
DEFAULT_PLAYER_CRIT_MULTIPLIER = float(os.getenv("DUNGEONQUEST_PLAYER_CRIT_MULTIPLIER", "2.0"))

# Enemies without an explicit multiplier crit for this much
DEFAULT_CRIT_MULTIPLIER = float(os.getenv("DUNGEONQUEST_CRIT_MULTIPLIER", "1.5"))

# Puzzles
DEFAULT_PUZZLE_MAX_ATTEMPTS = int(os.getenv("DUNGEONQUEST_PUZZLE_MAX_ATTEMPTS", "3"))

# Narrator
DEFAULT_NARRATOR_ENABLED = os.getenv("DUNGEONQUEST_NARRATOR_ENABLED", "true").lower() in ("true", "1", "yes", "on")

# Input Handling
DEFAULT_MAX_INPUT_LENGTH = int(os.getenv("DUNGEONQUEST_MAX_INPUT_LENGTH", "200"))

# World
DEFAULT_WORLD_FILE = os.getenv(
    "DUNGEONQUEST_WORLD_FILE",
    os.path.join(os.path.dirname(os.path.abspath(__file__)), "data", "dark_tower.json"),
)
