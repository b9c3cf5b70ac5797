"""Room graph model."""

from enum import Enum
from typing import Optional, Union

from dungeonquest.models.combatants import Boss, Enemy
from dungeonquest.models.items import Item, find_item, remove_item
from dungeonquest.models.npc import NPC
from dungeonquest.models.puzzle import Puzzle


class Direction(str, Enum):
    """Exit directions."""

    NORTH = "north"
    SOUTH = "south"
    EAST = "east"
    WEST = "west"
    UP = "up"
    DOWN = "down"

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITES[self]

    @classmethod
    def parse(cls, name: str) -> Optional["Direction"]:
        """Get direction from a full name or one-letter abbreviation."""
        name_lower = name.lower().strip()
        for direction in cls:
            if name_lower in (direction.value, direction.value[0]):
                return direction
        return None


_OPPOSITES = {
    Direction.NORTH: Direction.SOUTH,
    Direction.SOUTH: Direction.NORTH,
    Direction.EAST: Direction.WEST,
    Direction.WEST: Direction.EAST,
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
}


class Room:
    """A node of the world graph.

    Rooms reference each other directly, so the graph may be cyclic. Rooms
    are plain objects rather than pydantic models; the persistence layer
    flattens connections to room names.
    """

    def __init__(self, name: str, description: str) -> None:
        if not name:
            raise ValueError("Name cannot be empty")
        if not description:
            raise ValueError("Description cannot be empty")

        self.name = name
        self.description = description
        self.items: list[Item] = []
        self.enemies: list[Union[Enemy, Boss]] = []
        self.npcs: list[NPC] = []
        self.puzzles: list[Puzzle] = []
        self.visited = False
        self._connections: dict[Direction, "Room"] = {}
        self._locked = False
        self._required_key: Optional[str] = None

    def __repr__(self) -> str:
        return f"Room({self.name!r})"

    # Connections

    def connect(self, direction: Union[Direction, str], room: "Room", bidirectional: bool = False) -> None:
        if direction is None:
            raise ValueError("Direction cannot be None")
        if room is None:
            raise ValueError("Room cannot be None")
        if room is self:
            raise ValueError("Cannot connect room to itself")

        direction = Direction(direction)
        self._connections[direction] = room
        if bidirectional:
            room.connect(direction.opposite, self)

    @property
    def connections(self) -> dict[Direction, "Room"]:
        return dict(self._connections)

    def is_connected(self, direction: Union[Direction, str]) -> bool:
        return Direction(direction) in self._connections

    def get_connected_room(self, direction: Union[Direction, str]) -> Optional["Room"]:
        return self._connections.get(Direction(direction))

    @property
    def exits(self) -> list[Direction]:
        return list(self._connections)

    def exits_description(self) -> str:
        if not self._connections:
            return "No exits available"
        return f"Available exits: {', '.join(direction.value for direction in self._connections)}"

    # Items

    def add_item(self, item: Item) -> None:
        if item is None:
            raise ValueError("Item cannot be None")
        self.items.append(item)

    def remove_item(self, item: Item) -> bool:
        return remove_item(self.items, item)

    def get_item(self, item_name: str) -> Optional[Item]:
        return find_item(self.items, item_name)

    def has_item(self, item_name: str) -> bool:
        return self.get_item(item_name) is not None

    # Enemies

    def add_enemy(self, enemy: Union[Enemy, Boss]) -> None:
        if enemy is None:
            raise ValueError("Enemy cannot be None")
        self.enemies.append(enemy)

    def remove_enemy(self, enemy: Union[Enemy, Boss]) -> None:
        self.enemies = [candidate for candidate in self.enemies if candidate is not enemy]

    @property
    def alive_enemies(self) -> list[Union[Enemy, Boss]]:
        return [enemy for enemy in self.enemies if enemy.is_alive]

    def has_enemies(self) -> bool:
        return any(enemy.is_alive for enemy in self.enemies)

    def find_enemy(self, name: str) -> Optional[Union[Enemy, Boss]]:
        """Find a living enemy whose name contains ``name`` (case-insensitive)."""
        wanted = name.strip().lower()
        return next((enemy for enemy in self.alive_enemies if wanted in enemy.name.lower()), None)

    # NPCs

    def add_npc(self, npc: NPC) -> None:
        if npc is None:
            raise ValueError("NPC cannot be None")
        self.npcs.append(npc)

    def find_npc(self, name: str) -> Optional[NPC]:
        wanted = name.strip().lower()
        return next((npc for npc in self.npcs if wanted in npc.name.lower()), None)

    # Puzzles

    def add_puzzle(self, puzzle: Puzzle) -> None:
        if puzzle is None:
            raise ValueError("Puzzle cannot be None")
        self.puzzles.append(puzzle)

    def find_puzzle(self, name: str) -> Optional[Puzzle]:
        wanted = name.strip().lower()
        return next((puzzle for puzzle in self.puzzles if wanted in puzzle.name.lower()), None)

    def has_puzzle(self) -> bool:
        return any(puzzle.can_attempt() for puzzle in self.puzzles)

    # Locking

    def lock(self, required_key: Optional[str] = None) -> None:
        self._locked = True
        self._required_key = required_key

    def unlock(self) -> None:
        self._locked = False

    @property
    def locked(self) -> bool:
        return self._locked

    @property
    def required_key(self) -> Optional[str]:
        return self._required_key

    def can_enter(self) -> bool:
        """Only an unlocked room can be entered; carrying the key is not enough."""
        return not self._locked

    # Description

    def mark_visited(self) -> None:
        self.visited = True

    def full_description(self) -> str:
        parts = [self.description]
        if self.items:
            parts.append(f"You see: {', '.join(item.name for item in self.items)}")
        if self.has_enemies():
            parts.append(f"Enemies: {', '.join(enemy.name for enemy in self.alive_enemies)}")
        if self.npcs:
            parts.append(f"People here: {', '.join(npc.name for npc in self.npcs)}")
        for puzzle in self.puzzles:
            if puzzle.can_attempt():
                parts.append(f"There is a puzzle here: {puzzle.name} - {puzzle.description}")
        parts.append(self.exits_description())
        return "\n".join(parts)
