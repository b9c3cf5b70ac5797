"""Input sanitization and command parsing for player input."""

import re
import unicodedata
from typing import Optional

from dungeonquest.config import DEFAULT_MAX_INPUT_LENGTH
from dungeonquest.models.actions import ActionType, Command


class InputSanitizer:
    """Cleans raw player text and turns it into commands."""

    # Command words per action; the first word of the input picks the action
    COMMAND_ALIASES: dict[ActionType, tuple[str, ...]] = {
        ActionType.MOVE: ("go", "move", "walk", "travel"),
        ActionType.LOOK: ("look", "examine", "inspect", "l"),
        ActionType.INVENTORY: ("inventory", "inv", "i", "items"),
        ActionType.TAKE: ("take", "get", "pickup", "grab"),
        ActionType.DROP: ("drop", "leave", "discard"),
        ActionType.USE: ("use", "consume", "drink", "eat"),
        ActionType.EQUIP: ("equip", "wield", "wear"),
        ActionType.UNEQUIP: ("unequip", "unwield", "remove"),
        ActionType.ATTACK: ("attack", "fight", "hit", "strike"),
        ActionType.FLEE: ("flee", "run", "escape", "retreat"),
        ActionType.UNLOCK: ("unlock", "open"),
        ActionType.SOLVE: ("solve", "answer", "attempt"),
        ActionType.TALK: ("talk", "speak", "ask"),
        ActionType.STATS: ("stats", "status", "health"),
        ActionType.HELP: ("help", "commands", "h", "?"),
        ActionType.SAVE: ("save",),
        ActionType.LOAD: ("load",),
    }

    # A bare direction is a move
    DIRECTION_WORDS = ("north", "south", "east", "west", "up", "down", "n", "s", "e", "w", "u", "d")

    # Maximum input length (characters)
    MAX_INPUT_LENGTH = DEFAULT_MAX_INPUT_LENGTH

    # Allowed action types (whitelist)
    ALLOWED_ACTION_TYPES = {action_type.value for action_type in ActionType}

    def __init__(
        self,
        max_length: int = MAX_INPUT_LENGTH,
        allowed_action_types: Optional[set[str]] = None,
    ) -> None:
        """Initialize sanitizer with configurable limits."""
        self.max_length = max_length
        self.allowed_action_types = allowed_action_types or self.ALLOWED_ACTION_TYPES
        self._command_map = {
            word: action for action, words in self.COMMAND_ALIASES.items() for word in words
        }

    def sanitize(self, input_text: str) -> str:
        """
        Sanitize input text by:
        1. Normalizing unicode
        2. Removing control characters
        3. Truncating to max length
        4. Stripping whitespace
        """
        if not isinstance(input_text, str):
            raise TypeError(f"Input must be a string, got {type(input_text)}")

        # Normalize unicode (NFKC: compatibility decomposition + composition)
        normalized = unicodedata.normalize("NFKC", input_text)

        # Remove control characters, tabs and newlines become spaces
        sanitized = re.sub(r"[\t\n\r]", " ", normalized)
        sanitized = re.sub(r"[\x00-\x1F\x7F]", "", sanitized)

        # Truncate to max length
        if len(sanitized) > self.max_length:
            sanitized = sanitized[: self.max_length]

        # Strip leading/trailing whitespace
        sanitized = sanitized.strip()

        return sanitized

    def validate_action_type(self, action_type: str) -> bool:
        """Validate that action type is in whitelist."""
        return action_type in self.allowed_action_types

    def is_safe(self, input_text: str) -> tuple[bool, Optional[str]]:
        """
        Check if input is safe.
        Returns (is_safe, error_message).
        """
        if not input_text or not input_text.strip():
            return False, "Input is empty"

        if len(input_text) > self.max_length:
            return False, f"Input exceeds maximum length of {self.max_length} characters"

        if re.search(r"[\x00-\x08\x0B-\x0C\x0E-\x1F\x7F]", input_text):
            return False, "Input contains control characters"

        return True, None

    def sanitize_args(self, args: list[str]) -> list[str]:
        """Sanitize argument tokens, dropping any that end up empty."""
        cleaned = (self.sanitize(arg) for arg in args)
        return [arg for arg in cleaned if arg]

    def parse_command(self, input_text: str) -> Optional[Command]:
        """
        Parse free text such as ``"take health potion"`` into a Command.

        Input is sanitized and the command word lowercased; arguments keep
        their case. A bare direction (``"n"``) is a move.

        Returns:
            The Command, or None if the text is empty or the command word is unknown
        """
        words = self.sanitize(input_text).split()
        if not words:
            return None

        command_word, args = words[0].lower(), words[1:]
        if command_word in self.DIRECTION_WORDS:
            action, args = ActionType.MOVE, [command_word]
        else:
            action = self._command_map.get(command_word)

        if action is None or not self.validate_action_type(action.value):
            return None
        return Command(action=action, args=args)

    def suggest_commands(self, input_text: str) -> list[str]:
        """Command words starting with the given prefix, at most five."""
        prefix = self.sanitize(input_text).lower() if input_text else ""
        if not prefix:
            return []
        return [word for word in self._command_map if word.startswith(prefix)][:5]
