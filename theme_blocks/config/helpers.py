"""Utility helpers shared by the settings loader."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from theme_blocks.errors import SettingsError


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _require_str(section: typ.Mapping[str, typ.Any], key: str, label: str) -> str:
    """Return a required non-empty string from ``section`` or raise."""
    value = _optional_str(section.get(key))
    if value is None:
        msg = f"Settings are missing '{label}'."
        raise SettingsError(msg)
    return value


def _resolve_path(value: str | Path, base_dir: Path) -> Path:
    """Resolve ``value`` relative to ``base_dir`` unless it is absolute."""
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = base_dir / path
    return path


def _normalize_directories(value: object) -> list[str]:
    """Normalize the ``blocks.directories`` entry into a list of strings."""
    match value:
        case None:
            return []
        case str() as text:
            return [text.strip("/")] if text.strip("/") else []
        case list() | tuple():
            normalized: list[str] = []
            for entry in value:
                text = str(entry).strip().strip("/")
                if text:
                    normalized.append(text)
            return normalized
        case _:
            msg = "'blocks.directories' must be a string or a list of strings."
            raise SettingsError(msg)


def _normalize_suffix(value: object, default: str) -> str:
    """Return a file suffix without its leading dot."""
    text = _optional_str(value)
    if text is None:
        return default
    return text.lstrip(".")


__all__ = [
    "_normalize_directories",
    "_normalize_suffix",
    "_optional_str",
    "_require_str",
    "_resolve_path",
]
