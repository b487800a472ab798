"""Enumerate block configuration files in theme directories.

Each directory identifier is resolved through a :class:`ThemeResolver`
(child theme first, then parent). Only direct children are considered:
subdirectories and dot entries are skipped and a file is selected when its
suffix matches the configuration suffix. When a directory cannot be resolved
the scan stops for every remaining directory, not only the missing one.

Example
-------
>>> from theme_blocks.scanner import scan
>>> scan(["views/blocks"], resolver, "yml")  # doctest: +SKIP
[('views/blocks', PosixPath('/srv/theme/views/blocks/hero.yml'))]
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import logging
import typing as typ
from pathlib import Path

if typ.TYPE_CHECKING:
    from .host import ThemeResolver

logger = logging.getLogger(__name__)


@dc.dataclass(slots=True)
class DirectoryListing:
    """Configuration files found directly inside one resolved directory."""

    directory: str
    path: Path
    files: list[Path]


def list_config_files(path: Path, suffix: str) -> list[Path]:
    """Return the configuration files directly inside ``path``, sorted by name."""
    wanted = f".{suffix.lstrip('.')}"
    selected = [
        entry
        for entry in path.iterdir()
        if not entry.name.startswith(".") and entry.is_file() and entry.suffix == wanted
    ]
    return sorted(selected, key=lambda entry: entry.name)


def iter_directories(
    directories: cabc.Iterable[str], resolver: ThemeResolver, suffix: str
) -> cabc.Iterator[DirectoryListing]:
    """Yield one listing per directory until one fails to resolve.

    Parameters
    ----------
    directories : Iterable[str]
        Theme-relative directory identifiers such as ``"views/blocks"``.
    resolver : ThemeResolver
        Collaborator mapping identifiers to filesystem paths.
    suffix : str
        Configuration file suffix, with or without the leading dot.
    """
    for directory in directories:
        resolved = resolver.locate_template(directory)
        if not resolved:
            logger.debug(
                "directory %s did not resolve; skipping remaining directories",
                directory,
            )
            return
        if not resolved.is_dir():
            logger.debug(
                "directory %s resolved to non-directory %s", directory, resolved
            )
            return
        files = list_config_files(resolved, suffix)
        logger.debug("found %d block configs in %s", len(files), resolved)
        yield DirectoryListing(directory=directory, path=resolved, files=files)


def scan(
    directories: cabc.Iterable[str], resolver: ThemeResolver, suffix: str
) -> list[tuple[str, Path]]:
    """Return ``(directory, config_path)`` pairs for every discovered file."""
    return [
        (listing.directory, path)
        for listing in iter_directories(directories, resolver, suffix)
        for path in listing.files
    ]


__all__ = ["DirectoryListing", "iter_directories", "list_config_files", "scan"]
