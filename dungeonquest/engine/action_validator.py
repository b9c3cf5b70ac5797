"""Command validation."""

from dungeonquest.models.actions import ActionType, Command
from dungeonquest.models.room import Direction
from dungeonquest.models.state import GameWorld


class ActionValidator:
    """Checks a command's arguments and preconditions before dispatch."""

    # Actions that need at least one argument, with the prompt shown otherwise
    REQUIRED_ARGUMENT_PROMPTS = {
        ActionType.MOVE: "Move where? (north, south, east, west, up, down)",
        ActionType.TAKE: "Take what?",
        ActionType.DROP: "Drop what?",
        ActionType.USE: "Use what?",
        ActionType.EQUIP: "Equip what?",
        ActionType.UNEQUIP: "Unequip what?",
        ActionType.UNLOCK: "Unlock which direction?",
        ActionType.SOLVE: "Solve what?",
        ActionType.TALK: "Talk to whom?",
        ActionType.LOAD: "Specify a save file to load.",
    }

    # Still allowed once the player has died
    AFTER_DEATH_ACTIONS = {ActionType.LOAD, ActionType.HELP, ActionType.STATS, ActionType.LOOK}

    @staticmethod
    def validate_command(command: Command, world: GameWorld) -> tuple[bool, str]:
        """
        Validate a command against the current world.

        Args:
            command: Command to validate
            world: Current game world

        Returns:
            Tuple of (is_valid, error_message)
        """
        if not world.player.is_alive and command.action not in ActionValidator.AFTER_DEATH_ACTIONS:
            return False, "You have been defeated. Load a saved game to continue."

        prompt = ActionValidator.REQUIRED_ARGUMENT_PROMPTS.get(command.action)
        if prompt and not command.args:
            return False, prompt

        if command.action in (ActionType.MOVE, ActionType.UNLOCK):
            if Direction.parse(command.args[0]) is None:
                return False, "Invalid direction. Use: north, south, east, west, up, or down"

        if command.action == ActionType.SOLVE and len(command.args) < 2:
            return False, "What is your answer?"

        return True, ""
