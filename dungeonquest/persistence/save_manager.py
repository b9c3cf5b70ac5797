"""Save manager for writing games to disk and loading them back."""

import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError

from dungeonquest.config import DEFAULT_SAVE_DIR, DEFAULT_SAVE_EXTENSION
from dungeonquest.errors import SaveGameError
from dungeonquest.persistence.snapshot import SaveDocument

logger = logging.getLogger(__name__.split(".")[-1])

_UNSAFE_CHARACTERS = re.compile(r"[^A-Za-z0-9_-]")


class SaveInfo(BaseModel):
    """Summary of one save file."""

    name: str = Field(description="Save name without extension")
    modified: datetime = Field(description="Last modification time")
    size: int = Field(ge=0, description="File size in bytes")


def sanitize_filename(name: str) -> str:
    """Replace every character outside ``[A-Za-z0-9_-]`` with an underscore."""
    return _UNSAFE_CHARACTERS.sub("_", name)


class SaveManager:
    """Stores save documents as one JSON file per save name."""

    def __init__(self, save_directory: str = DEFAULT_SAVE_DIR, extension: str = DEFAULT_SAVE_EXTENSION):
        """
        Initialize save manager.

        The directory is created on first write, so listing or loading from
        a fresh location never touches the filesystem.

        Args:
            save_directory: Directory where saves are kept
            extension: File extension for save files
        """
        self.save_directory = Path(save_directory)
        self.extension = extension

    def _ensure_directory_exists(self) -> None:
        """Ensure save directory exists, create if it doesn't."""
        try:
            self.save_directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f"Error creating directory {self.save_directory}: {e}")
            raise SaveGameError(f"Cannot create save directory {self.save_directory}: {e}") from e

    def save_path(self, name: str) -> Path:
        """Path of the file backing a save name."""
        return self.save_directory / f"{sanitize_filename(name)}{self.extension}"

    def save_game(self, document: SaveDocument, name: str) -> Path:
        """
        Write a save document to disk.

        Args:
            document: Snapshot of the game
            name: Save name, sanitized before use

        Returns:
            Path to the written file

        Raises:
            SaveGameError: If the file cannot be written
        """
        if not name or not name.strip():
            raise SaveGameError("Save name cannot be empty")

        self._ensure_directory_exists()
        file_path = self.save_path(name)

        try:
            document_json = document.model_dump_json(indent=2)

            # Write to file atomically
            temp_path = file_path.with_suffix(".tmp")
            with open(temp_path, "w", encoding="utf-8") as f:
                f.write(document_json)

            # Atomic rename
            temp_path.replace(file_path)

            logger.debug(f"Saved game to {file_path}")
            return file_path

        except OSError as e:
            logger.error(f"Error saving game to {file_path}: {e}", exc_info=True)
            raise SaveGameError(f"Failed to save game: {e}") from e

    def load_game(self, name: str) -> SaveDocument:
        """
        Read a save document from disk.

        Args:
            name: Save name, sanitized before use

        Returns:
            The parsed SaveDocument

        Raises:
            SaveGameError: If the save is missing or cannot be parsed
        """
        file_path = self.save_path(name)
        if not file_path.exists():
            raise SaveGameError(f"Save file not found: {sanitize_filename(name)}")

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                document = SaveDocument.model_validate_json(f.read())
        except (OSError, UnicodeDecodeError, ValidationError) as e:
            logger.error(f"Error loading game from {file_path}: {e}", exc_info=True)
            raise SaveGameError(f"Failed to load game: {e}") from e

        logger.debug(f"Loaded game from {file_path}")
        return document

    def delete_save(self, name: str) -> bool:
        """Delete a save. Returns False if it did not exist."""
        file_path = self.save_path(name)
        if not file_path.exists():
            return False
        try:
            file_path.unlink()
        except OSError as e:
            raise SaveGameError(f"Failed to delete save: {e}") from e
        logger.info(f"Deleted save {file_path}")
        return True

    def save_exists(self, name: str) -> bool:
        return self.save_path(name).exists()

    def get_save_info(self, name: str) -> Optional[SaveInfo]:
        file_path = self.save_path(name)
        if not file_path.exists():
            return None
        return self._info_for(file_path)

    def list_saves(self) -> list[SaveInfo]:
        """
        List all saves, most recently modified first.

        Returns:
            List of SaveInfo, empty if the directory does not exist
        """
        if not self.save_directory.exists():
            return []

        saves = [
            self._info_for(file_path)
            for file_path in self.save_directory.iterdir()
            if file_path.is_file() and file_path.suffix == self.extension
        ]
        saves.sort(key=lambda info: info.modified, reverse=True)
        return saves

    @staticmethod
    def _info_for(file_path: Path) -> SaveInfo:
        stat = file_path.stat()
        return SaveInfo(
            name=file_path.stem,
            modified=datetime.fromtimestamp(stat.st_mtime),
            size=stat.st_size,
        )
