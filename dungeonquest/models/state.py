"""World container and prototype catalog."""

from typing import Optional

from pydantic import BaseModel, Field

from dungeonquest.models.combatants import Foe
from dungeonquest.models.items import Item
from dungeonquest.models.npc import NPC
from dungeonquest.models.player import Player
from dungeonquest.models.puzzle import Puzzle
from dungeonquest.models.room import Room


class Catalog(BaseModel):
    """Canonical prototypes, keyed by display name.

    Prototypes are never placed in the world themselves; every ``spawn_*``
    call hands out a deep copy.
    """

    items: dict[str, Item] = Field(default_factory=dict, description="Item prototypes")
    enemies: dict[str, Foe] = Field(default_factory=dict, description="Enemy and boss prototypes")
    puzzles: dict[str, Puzzle] = Field(default_factory=dict, description="Puzzle prototypes")
    npcs: dict[str, NPC] = Field(default_factory=dict, description="NPC prototypes")

    def spawn_item(self, name: str) -> Optional[Item]:
        prototype = self.items.get(name)
        return prototype.model_copy(deep=True) if prototype is not None else None

    def spawn_enemy(self, name: str) -> Optional[Foe]:
        prototype = self.enemies.get(name)
        return prototype.model_copy(deep=True) if prototype is not None else None

    def spawn_puzzle(self, name: str) -> Optional[Puzzle]:
        prototype = self.puzzles.get(name)
        return prototype.model_copy(deep=True) if prototype is not None else None

    def spawn_npc(self, name: str) -> Optional[NPC]:
        prototype = self.npcs.get(name)
        return prototype.model_copy(deep=True) if prototype is not None else None


class GameWorld:
    """Everything a running game needs: the room graph, the player and where they stand."""

    def __init__(
        self,
        rooms: dict[str, Room],
        player: Player,
        current_room_key: str,
        catalog: Optional[Catalog] = None,
        victory_room: Optional[str] = None,
    ) -> None:
        if not rooms:
            raise ValueError("World needs at least one room")
        if current_room_key not in rooms:
            raise ValueError(f"Unknown current room: {current_room_key}")
        if victory_room is not None and victory_room not in rooms:
            raise ValueError(f"Unknown victory room: {victory_room}")

        self.rooms = rooms
        self.player = player
        self.catalog = catalog or Catalog()
        self.victory_room = victory_room
        self._current_room_key = current_room_key

    @property
    def current_room(self) -> Room:
        return self.rooms[self._current_room_key]

    @property
    def current_room_key(self) -> str:
        return self._current_room_key

    def move_to(self, room: Room) -> None:
        self._current_room_key = self.room_key(room)
        room.mark_visited()

    def room_key(self, room: Room) -> str:
        for key, candidate in self.rooms.items():
            if candidate is room:
                return key
        raise ValueError(f"Room {room.name} is not part of this world")

    def find_room(self, name: str) -> Optional[Room]:
        return next((room for room in self.rooms.values() if room.name == name), None)

    def is_won(self) -> bool:
        """The game is won once the victory room holds no living enemy."""
        if self.victory_room is None:
            return False
        return not self.rooms[self.victory_room].has_enemies()

