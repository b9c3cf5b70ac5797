"""Save document schema and the world <-> document conversion.

Rooms reference each other cyclically, so the document stores connections
as target room *names*. Restoring is two-pass: build every room on its own,
then wire connections through a name index.
"""

import logging
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from dungeonquest.errors import SaveGameError
from dungeonquest.models.combatants import Boss, Foe
from dungeonquest.models.items import ArmorItem, Item, WeaponItem
from dungeonquest.models.npc import NPC
from dungeonquest.models.player import Player
from dungeonquest.models.puzzle import Puzzle
from dungeonquest.models.room import Direction, Room
from dungeonquest.models.state import Catalog, GameWorld

logger = logging.getLogger(__name__.split(".")[-1])

SAVE_FORMAT_VERSION = 1


class RoomRecord(BaseModel):
    """A room flattened for storage."""

    name: str = Field(min_length=1, description="Room name, used to resolve connections")
    description: str = Field(min_length=1, description="Room description")
    visited: bool = Field(default=False, description="Whether the player has been here")
    locked: bool = Field(default=False, description="Whether the room is locked")
    required_key: Optional[str] = Field(default=None, description="Key needed to unlock")
    items: list[Item] = Field(default_factory=list, description="Items on the floor")
    enemies: list[Foe] = Field(default_factory=list, description="Living enemies and bosses")
    npcs: list[NPC] = Field(default_factory=list, description="Characters in the room")
    puzzles: list[Puzzle] = Field(default_factory=list, description="Puzzles in the room")
    connections: dict[Direction, str] = Field(default_factory=dict, description="Direction -> target room name")


class SaveDocument(BaseModel):
    """Everything needed to rebuild a game."""

    version: int = Field(default=SAVE_FORMAT_VERSION, description="Save format version")
    saved_at: datetime = Field(default_factory=datetime.now, description="When the snapshot was taken")
    player: Player = Field(description="Complete player state")
    current_room: str = Field(description="Key of the room the player stands in")
    victory_room: Optional[str] = Field(default=None, description="Key of the room that must be cleared to win")
    rooms: dict[str, RoomRecord] = Field(description="Room key -> room record")


def snapshot_world(world: GameWorld) -> SaveDocument:
    """Capture a world as a self-contained document, detached from the live objects."""
    rooms = {key: _room_record(room) for key, room in world.rooms.items()}
    document = SaveDocument(
        player=world.player,
        current_room=world.current_room_key,
        victory_room=world.victory_room,
        rooms=rooms,
    )
    return document.model_copy(deep=True)


def restore_world(document: SaveDocument, catalog: Catalog) -> GameWorld:
    """
    Rebuild a world from a save document.

    Items, enemies, puzzles and NPCs are deep copies of the catalog
    prototypes with the persisted state laid over them; anything the
    catalog does not know is rebuilt from the record alone.

    Args:
        document: Parsed save document
        catalog: Prototypes keyed by display name

    Returns:
        A new GameWorld

    Raises:
        SaveGameError: If a connection or the current room cannot be resolved
    """
    # Pass 1: every room on its own
    rooms: dict[str, Room] = {}
    rooms_by_name: dict[str, Room] = {}
    for key, record in document.rooms.items():
        if record.name in rooms_by_name:
            raise SaveGameError(f"Duplicate room name in save: {record.name}")
        room = _build_room(record, catalog)
        rooms[key] = room
        rooms_by_name[room.name] = room

    # Pass 2: wire connections by name
    for key, record in document.rooms.items():
        room = rooms[key]
        for direction, target_name in record.connections.items():
            target = rooms_by_name.get(target_name)
            if target is None:
                raise SaveGameError(
                    f"Room '{record.name}' connects {direction.value} to unknown room '{target_name}'"
                )
            try:
                room.connect(direction, target)
            except ValueError as e:
                raise SaveGameError(f"Invalid connection in room '{record.name}': {e}") from e

    player = _restore_player(document.player, catalog)
    current_key = _resolve_room_key(document.current_room, rooms)
    if current_key is None:
        raise SaveGameError(f"Unknown current room: {document.current_room}")
    if document.victory_room is not None and document.victory_room not in rooms:
        raise SaveGameError(f"Unknown victory room: {document.victory_room}")

    logger.debug(f"Restored {len(rooms)} rooms, player in {current_key}")
    return GameWorld(
        rooms=rooms,
        player=player,
        current_room_key=current_key,
        catalog=catalog,
        victory_room=document.victory_room,
    )


def _room_record(room: Room) -> RoomRecord:
    return RoomRecord(
        name=room.name,
        description=room.description,
        visited=room.visited,
        locked=room.locked,
        required_key=room.required_key,
        items=list(room.items),
        enemies=list(room.enemies),
        npcs=list(room.npcs),
        puzzles=list(room.puzzles),
        connections={direction: target.name for direction, target in room.connections.items()},
    )


def _build_room(record: RoomRecord, catalog: Catalog) -> Room:
    room = Room(record.name, record.description)
    room.visited = record.visited
    if record.locked:
        room.lock(record.required_key)

    for item in record.items:
        room.add_item(_restore_item(item, catalog))
    for foe in record.enemies:
        room.add_enemy(_restore_foe(foe, catalog))
    for npc in record.npcs:
        room.add_npc(_restore_npc(npc, catalog))
    for puzzle in record.puzzles:
        room.add_puzzle(_restore_puzzle(puzzle, catalog))
    return room


def _resolve_room_key(reference: str, rooms: dict[str, Room]) -> Optional[str]:
    """Accept a room key, or a room name for older saves."""
    if reference in rooms:
        return reference
    return next((key for key, room in rooms.items() if room.name == reference), None)


def _restore_item(item: Item, catalog: Catalog) -> Item:
    restored = catalog.spawn_item(item.name)
    if restored is None or restored.category != item.category:
        logger.debug(f"Item {item.name} not in catalog, rebuilding from save")
        return item.model_copy(deep=True)
    return restored


def _restore_foe(record: Foe, catalog: Catalog) -> Foe:
    foe = catalog.spawn_enemy(record.name)
    if foe is None or foe.kind != record.kind:
        foe = record.model_copy(deep=True)

    enemy = foe.enemy if isinstance(foe, Boss) else foe
    saved = record.enemy if isinstance(record, Boss) else record
    enemy.stats = saved.stats.model_copy()
    enemy.loot = [_restore_item(item, catalog) for item in saved.loot]

    if isinstance(foe, Boss) and isinstance(record, Boss):
        foe.special_ability_cooldown = record.special_ability_cooldown
        foe.max_cooldown = record.max_cooldown
    return foe


def _restore_puzzle(record: Puzzle, catalog: Catalog) -> Puzzle:
    puzzle = catalog.spawn_puzzle(record.name) or record.model_copy(deep=True)
    puzzle.max_attempts = record.max_attempts
    puzzle.attempts_left = record.attempts_left
    puzzle.solved = record.solved
    puzzle.reward = _restore_item(record.reward, catalog) if record.reward is not None else None
    return puzzle


def _restore_npc(record: NPC, catalog: Catalog) -> NPC:
    npc = catalog.spawn_npc(record.name)
    if npc is None or len(npc.dialogue) != len(record.dialogue):
        npc = record.model_copy(deep=True)
    npc.state = record.state
    npc.talked_count = record.talked_count
    npc.dialogue_index = record.dialogue_index
    return npc


def _restore_player(record: Player, catalog: Catalog) -> Player:
    player = record.model_copy(deep=True)
    player.inventory = [_restore_item(item, catalog) for item in record.inventory]

    if record.weapon is not None:
        weapon = _restore_item(record.weapon, catalog)
        player.weapon = weapon if isinstance(weapon, WeaponItem) else record.weapon.model_copy()
    if record.armor is not None:
        armor = _restore_item(record.armor, catalog)
        player.armor = armor if isinstance(armor, ArmorItem) else record.armor.model_copy()
    return player
