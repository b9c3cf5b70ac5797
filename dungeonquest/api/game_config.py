"""Gameplay configuration holder for the API."""

from typing import Optional

from dungeonquest.models.settings import GameSettings


class GameConfigManager:
    """Manages the settings handed to newly created games."""

    def __init__(self, initial_config: Optional[GameSettings] = None) -> None:
        """Initialize with optional config."""
        self._config = initial_config or GameSettings()

    @property
    def config(self) -> GameSettings:
        """Get current config."""
        return self._config

    def update_config(self, new_config: GameSettings) -> None:
        """Update configuration. Running games keep the settings they started with."""
        self._config = new_config
