"""Builds playable worlds from JSON world definitions."""

import logging
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, Field, model_validator

from dungeonquest.config import DEFAULT_PLAYER_NAME, DEFAULT_PUZZLE_MAX_ATTEMPTS, DEFAULT_WORLD_FILE
from dungeonquest.models.combatants import Boss, Enemy, Foe
from dungeonquest.models.items import Item
from dungeonquest.models.npc import NPC
from dungeonquest.models.player import Player
from dungeonquest.models.puzzle import Puzzle, PuzzleKind
from dungeonquest.models.room import Direction, Room
from dungeonquest.models.state import Catalog, GameWorld
from dungeonquest.models.stats import CombatStats

logger = logging.getLogger(__name__.split(".")[-1])


class EnemyDefinition(BaseModel):
    """An enemy prototype. Giving it a special ability makes it a boss."""

    name: str = Field(min_length=1, description="Enemy name")
    description: str = Field(default="", description="Enemy description")
    health: int = Field(ge=1, description="Starting and maximum health")
    attack_power: int = Field(ge=0, description="Base attack damage")
    defense: int = Field(default=0, ge=0, description="Flat damage reduction")
    dodge_chance: float = Field(default=0.0, ge=0.0, le=1.0, description="Chance to avoid a hit")
    block_chance: float = Field(default=0.0, ge=0.0, le=1.0, description="Chance to halve a hit")
    crit_chance: float = Field(default=0.0, ge=0.0, le=1.0, description="Chance to land a critical hit")
    loot: list[str] = Field(default_factory=list, description="Names of catalog items dropped on death")
    special_ability: Optional[str] = Field(default=None, description="Boss special ability name")


class PuzzleDefinition(BaseModel):
    """A puzzle prototype with its reward given by item name."""

    name: str = Field(min_length=1, description="Puzzle name")
    description: str = Field(min_length=1, description="Question shown to the player")
    kind: PuzzleKind = Field(description="Matching rule")
    solution: Union[str, list[str]] = Field(description="Expected answer or sequence")
    max_attempts: int = Field(default=DEFAULT_PUZZLE_MAX_ATTEMPTS, ge=1, description="Allowed attempts")
    reward: Optional[str] = Field(default=None, description="Name of the catalog item granted on success")

    @model_validator(mode="after")
    def check_solution_shape(self) -> "PuzzleDefinition":
        if self.kind != PuzzleKind.SEQUENCE and isinstance(self.solution, list):
            raise ValueError(f"Puzzle '{self.name}' is a {self.kind.value} and needs a single answer")
        return self


class RoomDefinition(BaseModel):
    """A room and the names of the prototypes placed in it."""

    name: str = Field(min_length=1, description="Room name")
    description: str = Field(min_length=1, description="Room description")
    items: list[str] = Field(default_factory=list, description="Item names placed on the floor")
    enemies: list[str] = Field(default_factory=list, description="Enemy names placed in the room")
    npcs: list[str] = Field(default_factory=list, description="NPC names placed in the room")
    puzzles: list[str] = Field(default_factory=list, description="Puzzle names placed in the room")
    locked: bool = Field(default=False, description="Whether the room starts locked")
    required_key: Optional[str] = Field(default=None, description="Key item that unlocks the room")


class ConnectionDefinition(BaseModel):
    """A passage between two rooms, referenced by room key."""

    source: str = Field(description="Room key the passage starts from")
    direction: Direction = Field(description="Direction as seen from the source room")
    target: str = Field(description="Room key the passage leads to")
    bidirectional: bool = Field(default=True, description="Also connect target back to source")


class WorldDefinition(BaseModel):
    """A complete world: prototypes, rooms and how they connect."""

    name: str = Field(min_length=1, description="World title")
    start_room: str = Field(description="Room key the player starts in")
    victory_room: Optional[str] = Field(default=None, description="Room key that must be cleared to win")
    items: list[Item] = Field(default_factory=list, description="Item prototypes")
    enemies: list[EnemyDefinition] = Field(default_factory=list, description="Enemy prototypes")
    puzzles: list[PuzzleDefinition] = Field(default_factory=list, description="Puzzle prototypes")
    npcs: list[NPC] = Field(default_factory=list, description="NPC prototypes")
    rooms: dict[str, RoomDefinition] = Field(description="Room key -> room definition")
    connections: list[ConnectionDefinition] = Field(default_factory=list, description="Passages between rooms")

    @model_validator(mode="after")
    def check_references(self) -> "WorldDefinition":
        """Every name used by a room, enemy or puzzle must resolve."""
        item_names = {item.name for item in self.items}
        enemy_names = {enemy.name for enemy in self.enemies}
        puzzle_names = {puzzle.name for puzzle in self.puzzles}
        npc_names = {npc.name for npc in self.npcs}

        for room_key in filter(None, (self.start_room, self.victory_room)):
            if room_key not in self.rooms:
                raise ValueError(f"Unknown room: {room_key}")
        for enemy in self.enemies:
            _check_names(enemy.loot, item_names, f"loot of {enemy.name}")
        for puzzle in self.puzzles:
            if puzzle.reward is not None:
                _check_names([puzzle.reward], item_names, f"reward of {puzzle.name}")
        for key, room in self.rooms.items():
            _check_names(room.items, item_names, f"items of room {key}")
            _check_names(room.enemies, enemy_names, f"enemies of room {key}")
            _check_names(room.puzzles, puzzle_names, f"puzzles of room {key}")
            _check_names(room.npcs, npc_names, f"npcs of room {key}")
        for connection in self.connections:
            _check_names([connection.source, connection.target], set(self.rooms), "connection")
        return self


def _check_names(names: list[str], known: set[str], where: str) -> None:
    unknown = [name for name in names if name not in known]
    if unknown:
        raise ValueError(f"Unknown names in {where}: {', '.join(unknown)}")


def load_world_definition(path: Union[str, Path] = DEFAULT_WORLD_FILE) -> WorldDefinition:
    """
    Read a world definition from a JSON file.

    Raises:
        OSError: If the file cannot be read
        ValueError: If the contents do not describe a valid world
    """
    with open(path, "r", encoding="utf-8") as f:
        definition = WorldDefinition.model_validate_json(f.read())
    logger.debug(f"Loaded world definition '{definition.name}' from {path}")
    return definition


def build_catalog(definition: WorldDefinition) -> Catalog:
    """Turn a definition's prototypes into a Catalog keyed by display name."""
    items = {item.name: item for item in definition.items}

    enemies: dict[str, Foe] = {}
    for enemy_definition in definition.enemies:
        enemy = Enemy(
            name=enemy_definition.name,
            description=enemy_definition.description,
            stats=CombatStats(
                max_health=enemy_definition.health,
                attack_power=enemy_definition.attack_power,
                defense=enemy_definition.defense,
                dodge_chance=enemy_definition.dodge_chance,
                block_chance=enemy_definition.block_chance,
                crit_chance=enemy_definition.crit_chance,
            ),
            loot=[items[name].model_copy() for name in enemy_definition.loot],
        )
        if enemy_definition.special_ability:
            enemies[enemy.name] = Boss(enemy=enemy, special_ability_name=enemy_definition.special_ability)
        else:
            enemies[enemy.name] = enemy

    puzzles = {
        puzzle.name: Puzzle(
            name=puzzle.name,
            description=puzzle.description,
            kind=puzzle.kind,
            solution=puzzle.solution,
            max_attempts=puzzle.max_attempts,
            reward=items[puzzle.reward].model_copy() if puzzle.reward else None,
        )
        for puzzle in definition.puzzles
    }

    return Catalog(
        items=items,
        enemies=enemies,
        puzzles=puzzles,
        npcs={npc.name: npc for npc in definition.npcs},
    )


def build_world(
    definition: Optional[Union[WorldDefinition, str, Path]] = None,
    player_name: str = DEFAULT_PLAYER_NAME,
) -> GameWorld:
    """
    Build a fresh world with a new player standing in the start room.

    Every entity placed in a room is its own copy of the catalog prototype.

    Args:
        definition: A WorldDefinition, a path to one, or None for the bundled world
        player_name: Name of the new character

    Returns:
        A ready-to-play GameWorld
    """
    if definition is None:
        definition = load_world_definition()
    elif not isinstance(definition, WorldDefinition):
        definition = load_world_definition(definition)

    catalog = build_catalog(definition)

    rooms: dict[str, Room] = {}
    for key, room_definition in definition.rooms.items():
        room = Room(room_definition.name, room_definition.description)
        for name in room_definition.items:
            room.add_item(catalog.spawn_item(name))
        for name in room_definition.enemies:
            room.add_enemy(catalog.spawn_enemy(name))
        for name in room_definition.npcs:
            room.add_npc(catalog.spawn_npc(name))
        for name in room_definition.puzzles:
            room.add_puzzle(catalog.spawn_puzzle(name))
        if room_definition.locked:
            room.lock(room_definition.required_key)
        rooms[key] = room

    for connection in definition.connections:
        rooms[connection.source].connect(
            connection.direction, rooms[connection.target], bidirectional=connection.bidirectional
        )

    world = GameWorld(
        rooms=rooms,
        player=Player(name=player_name or DEFAULT_PLAYER_NAME),
        current_room_key=definition.start_room,
        catalog=catalog,
        victory_room=definition.victory_room,
    )
    world.current_room.mark_visited()

    logger.info(f"Built world '{definition.name}' with {len(rooms)} rooms for {world.player.name}")
    return world
