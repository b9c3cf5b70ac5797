"""Main game engine: dispatches commands against a game world."""

import logging
from typing import Callable, Optional, Union

from dungeonquest.config import DEFAULT_QUICKSAVE_NAME
from dungeonquest.engine.action_validator import ActionValidator
from dungeonquest.engine.combat import CombatEngine
from dungeonquest.engine.dice import Dice
from dungeonquest.engine.inventory_manager import InventoryManager
from dungeonquest.engine.narrator import Narrator
from dungeonquest.errors import GameError
from dungeonquest.helpers.debug import log_call
from dungeonquest.models.actions import ActionType, AttackResult, Command, CommandResult
from dungeonquest.models.combatants import Boss, Enemy
from dungeonquest.models.room import Direction
from dungeonquest.models.settings import GameSettings
from dungeonquest.models.state import GameWorld
from dungeonquest.persistence.save_manager import SaveManager
from dungeonquest.persistence.snapshot import restore_world, snapshot_world

logger = logging.getLogger(__name__.split(".")[-1])

HELP_TEXT = """Available Commands:

Movement:
  go/move <direction> - Move in a direction (north, south, east, west, up, down)
  Shortcuts: n, s, e, w, u, d
  unlock <direction> - Unlock a locked way using the right key

Interaction:
  look - Look around the current room
  take <item> / drop <item> - Pick up or drop an item
  use <item> - Drink a potion
  equip <item> / unequip <item> - Wield weapons and wear armor
  attack [enemy] - Attack an enemy
  flee - Try to escape from combat
  solve <puzzle> <answer> - Answer a puzzle
  talk <character> - Talk to someone

Information:
  inventory - View your inventory
  stats - View your character stats
  help - Show this help message

Game:
  save [name] - Save your game
  load <name> - Load a saved game"""


class GameEngine:
    """Turns commands into world changes and readable results.

    Every action returns a CommandResult. Expected failures (unknown items,
    closed exits, bad answers) come back as ``success=False`` text; the
    session always continues.
    """

    def __init__(
        self,
        world: GameWorld,
        save_manager: Optional[SaveManager] = None,
        dice: Optional[Dice] = None,
        settings: Optional[GameSettings] = None,
        narrator: Optional[Narrator] = None,
    ) -> None:
        """
        Initialize game engine.

        Args:
            world: World to play in
            save_manager: Where save/load read and write; defaults to the configured save directory
            dice: Random source for combat and flight
            settings: Gameplay tunables
            narrator: Flavor text source; defaults to one honoring ``settings.narrator_enabled``
        """
        self._world = world
        self.settings = settings or GameSettings()
        self.dice = dice or Dice()
        self.combat = CombatEngine(self.dice, self.settings)
        self.narrator = narrator or Narrator(enabled=self.settings.narrator_enabled)
        self.save_manager = save_manager or SaveManager()

        self._handlers: dict[ActionType, Callable[[Command], CommandResult]] = {
            ActionType.MOVE: self._move,
            ActionType.LOOK: self._look,
            ActionType.INVENTORY: self._inventory,
            ActionType.STATS: self._stats,
            ActionType.TAKE: self._take,
            ActionType.DROP: self._drop,
            ActionType.USE: self._use,
            ActionType.EQUIP: self._equip,
            ActionType.UNEQUIP: self._unequip,
            ActionType.ATTACK: self._attack,
            ActionType.FLEE: self._flee,
            ActionType.UNLOCK: self._unlock,
            ActionType.SOLVE: self._solve,
            ActionType.TALK: self._talk,
            ActionType.SAVE: self._save,
            ActionType.LOAD: self._load,
            ActionType.HELP: self._help,
        }

    @property
    def world(self) -> GameWorld:
        """Get current game world."""
        return self._world

    @property
    def game_over(self) -> bool:
        return not self._world.player.is_alive or self._world.is_won()

    @property
    def victory(self) -> bool:
        return self._world.player.is_alive and self._world.is_won()

    @log_call
    def execute(self, command: Command) -> CommandResult:
        """
        Apply a command to the world.

        Args:
            command: Canonical action plus argument tokens

        Returns:
            CommandResult with the text to show and the game-over flags
        """
        is_valid, error_msg = ActionValidator.validate_command(command, self._world)
        if not is_valid:
            return self._result(error_msg, success=False)

        try:
            return self._handlers[command.action](command)
        except GameError as e:
            logger.warning(f"{command.action.value} failed: {e}")
            return self._result(str(e), success=False)

    def _result(self, text: str, success: bool = True) -> CommandResult:
        return CommandResult(text=text, success=success, game_over=self.game_over, victory=self.victory)

    def _narrate(self, lines: list[str], action: str, **context: object) -> None:
        line = self.narrator.narrate(action, **context)
        if line:
            lines.append(line)

    # Movement

    def _move(self, command: Command) -> CommandResult:
        direction = Direction.parse(command.args[0])
        room = self._world.current_room

        target = room.get_connected_room(direction)
        if target is None:
            return self._result("You cannot go that way.", success=False)

        if not target.can_enter():
            if target.required_key:
                return self._result(
                    f"The way is locked. You need a {target.required_key} to enter.", success=False
                )
            return self._result("The way is locked.", success=False)

        if room.has_enemies():
            return self._result("You cannot leave while enemies are still alive!", success=False)

        self._world.move_to(target)
        logger.debug(f"Player moved {direction.value} to {target.name}")

        lines: list[str] = []
        self._narrate(lines, "move", direction=direction.value)
        lines.append(self._room_banner(target.name))
        lines.append(target.full_description())
        return self._result("\n".join(lines))

    def _unlock(self, command: Command) -> CommandResult:
        direction = Direction.parse(command.args[0])
        target = self._world.current_room.get_connected_room(direction)
        if target is None:
            return self._result("There is no exit in that direction.", success=False)
        if not target.locked:
            return self._result("That room is not locked.", success=False)

        key = target.required_key
        if key is not None and not self._world.player.has_item(key):
            return self._result(f"You need a {key} to unlock this door.", success=False)

        target.unlock()
        logger.info(f"Unlocked {target.name}")

        lines = [f"You used the {key} to unlock the door!" if key else "You unlocked the door!"]
        self._narrate(lines, "unlock", direction=direction.value)
        return self._result("\n".join(lines))

    # Information

    def _look(self, command: Command) -> CommandResult:
        room = self._world.current_room
        return self._result(f"{self._room_banner(room.name)}\n{room.full_description()}")

    def _inventory(self, command: Command) -> CommandResult:
        player = self._world.player
        lines = ["--- Inventory ---", player.inventory_list()]
        if player.weapon is not None:
            lines.append(f"Equipped weapon: {player.weapon.name}")
        if player.armor is not None:
            lines.append(f"Equipped armor: {player.armor.name}")
        return self._result("\n".join(lines))

    def _stats(self, command: Command) -> CommandResult:
        return self._result(f"--- Character Stats ---\n{self._world.player.describe()}")

    def _help(self, command: Command) -> CommandResult:
        return self._result(HELP_TEXT)

    @staticmethod
    def _room_banner(name: str) -> str:
        return f"== {name.upper()} =="

    # Items

    def _take(self, command: Command) -> CommandResult:
        room = self._world.current_room
        item = room.get_item(command.text)
        if item is None:
            return self._result(f"There is no '{command.text}' here.", success=False)

        room.remove_item(item)
        self._world.player.add_item(item)

        lines = [f"You picked up {item.name}."]
        self._narrate(lines, "take", item=item.name)
        return self._result("\n".join(lines))

    def _drop(self, command: Command) -> CommandResult:
        player = self._world.player
        item = player.get_item(command.text)
        if item is None:
            return self._result(f"You don't have '{command.text}'.", success=False)

        player.remove_item(item)
        self._world.current_room.add_item(item)
        return self._result(f"You dropped {item.name}.")

    def _use(self, command: Command) -> CommandResult:
        success, message = InventoryManager.use(self._world.player, command.text)
        return self._result(message, success=success)

    def _equip(self, command: Command) -> CommandResult:
        success, message = InventoryManager.equip(self._world.player, command.text)
        lines = [message]
        if success:
            self._narrate(lines, "equip", item=self._equipped_name(command.text))
        return self._result("\n".join(lines), success=success)

    def _unequip(self, command: Command) -> CommandResult:
        success, message = InventoryManager.unequip(self._world.player, command.text)
        return self._result(message, success=success)

    def _equipped_name(self, item_name: str) -> str:
        player = self._world.player
        for item in (player.weapon, player.armor):
            if item is not None and item.name.lower() == item_name.strip().lower():
                return item.name
        return item_name

    # Combat

    def _attack(self, command: Command) -> CommandResult:
        room = self._world.current_room
        if not room.has_enemies():
            return self._result("There are no enemies to attack here.", success=False)

        if command.args:
            target = room.find_enemy(command.text)
            if target is None:
                return self._result(f"No enemy named '{command.text}' here.", success=False)
        else:
            target = room.alive_enemies[0]

        player = self._world.player
        lines = ["--- Combat Round ---"]
        self._narrate(lines, "attack", enemy=target.name)

        result = self.combat.resolve_attack(player, target)
        lines.append(self._describe_attack(result))

        if not target.is_alive:
            lines.extend(self._enemy_defeated(target))
            return self._result("\n".join(lines))

        lines.extend(self._enemy_strikes(target))
        return self._result("\n".join(lines))

    def _flee(self, command: Command) -> CommandResult:
        room = self._world.current_room
        if not room.has_enemies():
            return self._result("There are no enemies to flee from.", success=False)

        exits = [target for target in room.connections.values() if target.can_enter()]
        if not exits:
            return self._result("You failed to flee! There's nowhere to run!", success=False)

        if self.dice.chance(self.settings.flee_chance):
            target = self.dice.choice(exits)
            self._world.move_to(target)
            logger.debug(f"Player fled to {target.name}")

            lines: list[str] = []
            self._narrate(lines, "flee")
            lines.append(f"You successfully fled to the {target.name}!")
            lines.append(target.full_description())
            return self._result("\n".join(lines))

        lines = ["You failed to escape!"]
        lines.extend(self._enemy_strikes(room.alive_enemies[0]))
        return self._result("\n".join(lines), success=False)

    def _enemy_strikes(self, foe: Union[Enemy, Boss]) -> list[str]:
        player = self._world.player
        result = self.combat.enemy_turn(foe, player)
        lines = [self._describe_attack(result)]

        if result.dodged:
            self._narrate(lines, "dodge", enemy=foe.name)
        elif result.blocked:
            self._narrate(lines, "block", enemy=foe.name)

        if not player.is_alive:
            logger.info(f"{player.name} was defeated by {foe.name}")
            lines.append("You have been defeated!")
            self._narrate(lines, "death")
            lines.append("--- GAME OVER ---")
        return lines

    def _enemy_defeated(self, foe: Union[Enemy, Boss]) -> list[str]:
        room = self._world.current_room
        lines = [f"{foe.name} has been defeated!"]
        logger.info(f"{foe.name} defeated in {room.name}")

        room.remove_enemy(foe)
        loot = foe.drop_loot()
        if loot:
            for item in loot:
                room.add_item(item)
            lines.append(f"{foe.name} dropped: {', '.join(item.name for item in loot)}")

        if self._world.is_won():
            logger.info("Victory room cleared")
            self._narrate(lines, "victory")
            lines.append("Victory! The last guardian has fallen and the way is clear.")
        return lines

    def _describe_attack(self, result: AttackResult) -> str:
        if result.dodged:
            return f"{result.defender} dodged {result.attacker}'s attack!"

        parts = []
        if result.special:
            parts.append(f"{result.attacker} uses {result.special}!")
        if result.critical:
            parts.append("Critical hit!")
            self._narrate(parts, "critical_hit", enemy=result.defender)
        text = f"{result.attacker} hits {result.defender} for {result.damage} damage"
        if result.blocked:
            text += " (partially blocked)"
        parts.append(f"{text}. {result.defender} has {result.defender_health} HP left.")
        return "\n".join(parts)

    # Puzzles and characters

    def _solve(self, command: Command) -> CommandResult:
        # First word names the puzzle, the rest is the answer
        puzzle_name, answer = command.args[0], " ".join(command.args[1:])
        room = self._world.current_room

        puzzle = room.find_puzzle(puzzle_name)
        if puzzle is None:
            return self._result(f"There is no puzzle called '{puzzle_name}' here.", success=False)

        lines: list[str] = []
        self._narrate(lines, "solve", puzzle=puzzle.name)

        result = puzzle.attempt(answer)
        lines.append(result.message)
        if result.success and result.reward is not None:
            room.add_item(result.reward)
            lines.append(f"You received: {result.reward.name}!")
        elif not result.success and puzzle.is_failed:
            lines.append(f"{puzzle.name} can no longer be solved.")
        return self._result("\n".join(lines), success=result.success)

    def _talk(self, command: Command) -> CommandResult:
        npc = self._world.current_room.find_npc(command.text)
        if npc is None:
            return self._result(f"There is no one called '{command.text}' here.", success=False)
        return self._result(f'{npc.name} says: "{npc.talk()}"')

    # Persistence

    def _save(self, command: Command) -> CommandResult:
        name = "_".join(command.args) if command.args else DEFAULT_QUICKSAVE_NAME
        self.save_manager.save_game(snapshot_world(self._world), name)
        logger.info(f"Game saved as {name}")
        return self._result(f"Game saved successfully as '{name}'.")

    def _load(self, command: Command) -> CommandResult:
        name = "_".join(command.args)
        document = self.save_manager.load_game(name)
        world = restore_world(document, self._world.catalog)

        # Only replace the world once the whole restore succeeded
        self._world = world
        logger.info(f"Game loaded from {name}")

        room = world.current_room
        return self._result(
            f"Game loaded successfully from '{name}'.\n{self._room_banner(room.name)}\n{room.full_description()}"
        )
