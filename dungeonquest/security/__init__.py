"""Input sanitization module for DungeonQuest."""

from dungeonquest.security.input_sanitizer import InputSanitizer

__all__ = ["InputSanitizer"]
