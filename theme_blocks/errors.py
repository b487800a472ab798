"""Exception hierarchy for block discovery, registration, and settings."""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    from pathlib import Path


class ThemeBlocksError(Exception):
    """Base class for every error raised by theme_blocks."""


class SettingsError(ThemeBlocksError, ValueError):
    """Raised when the settings file is invalid or incomplete."""


class MissingDependencyError(ThemeBlocksError, RuntimeError):
    """Raised when a required host collaborator is not available."""


class InvalidDirectoryListError(ThemeBlocksError, TypeError):
    """Raised when the directories filter returns something other than a list."""

    def __init__(self, value: object) -> None:
        self.value = value
        msg = (
            "The theme_blocks/directories filter must return a list, "
            f"got {type(value).__name__}."
        )
        super().__init__(msg)


class BlockConfigParseError(ThemeBlocksError, ValueError):
    """Raised when a block configuration file cannot be parsed."""

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        self.message = message
        super().__init__(f"Failed to parse '{path}': {message}")


class MissingTitleError(ThemeBlocksError, ValueError):
    """Raised when a block configuration has no ``title``."""

    def __init__(self, directory: str, filename: str) -> None:
        self.directory = directory
        self.filename = filename
        super().__init__(
            f"Block configuration '{directory}/{filename}' is missing a title."
        )


__all__ = [
    "BlockConfigParseError",
    "InvalidDirectoryListError",
    "MissingDependencyError",
    "MissingTitleError",
    "SettingsError",
    "ThemeBlocksError",
]
