"""Typed dataclasses describing theme_blocks settings."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from theme_blocks._constants import (
    CONFIG_SUFFIX,
    DEFAULT_CAPABILITY,
    DEFAULT_CATEGORY,
    DEFAULT_CATEGORY_TITLE,
    DEFAULT_DIRECTORIES,
    DEFAULT_NAMESPACE,
    PREVIEW_SUFFIX,
    TEMPLATE_SUFFIX,
)
from theme_blocks.errors import SettingsError


@dc.dataclass(slots=True)
class SiteSettings:
    """Filesystem root and public base URL of the site."""

    root: Path
    url: str
    name: str = ""

    def public_url(self, path: Path) -> str | None:
        """Return the public URL for ``path`` or None when it lies outside the root."""
        try:
            relative = path.resolve().relative_to(self.root.resolve())
        except ValueError:
            return None
        return f"{self.url.rstrip('/')}/{relative.as_posix()}"


@dc.dataclass(slots=True)
class ThemeRoots:
    """Child (stylesheet) and parent (template) theme directories."""

    stylesheet_dir: Path
    template_dir: Path

    @property
    def search_paths(self) -> list[Path]:
        """Return theme roots in lookup order, child theme first."""
        paths = [self.stylesheet_dir]
        if self.template_dir != self.stylesheet_dir:
            paths.append(self.template_dir)
        return paths


@dc.dataclass(slots=True)
class BlockSettings:
    """Discovery and naming options for block configuration files."""

    directories: list[str] = dc.field(
        default_factory=lambda: list(DEFAULT_DIRECTORIES)
    )
    namespace: str = DEFAULT_NAMESPACE
    default_category: str = DEFAULT_CATEGORY
    config_suffix: str = CONFIG_SUFFIX
    template_suffix: str = TEMPLATE_SUFFIX
    preview_suffix: str = PREVIEW_SUFFIX

    @property
    def prefix(self) -> str:
        """Return the registered-name prefix, for example ``acf/``."""
        return f"{self.namespace}/"


@dc.dataclass(slots=True)
class CategorySettings:
    """Block category appended to the editor's category list."""

    slug: str = DEFAULT_CATEGORY
    title: str = DEFAULT_CATEGORY_TITLE


@dc.dataclass(slots=True)
class Settings:
    """Fully resolved settings for one site."""

    site: SiteSettings
    theme: ThemeRoots
    blocks: BlockSettings = dc.field(default_factory=BlockSettings)
    category: CategorySettings = dc.field(default_factory=CategorySettings)
    capability: str = DEFAULT_CAPABILITY

    def __post_init__(self) -> None:
        if not self.site.url:
            msg = "Site URL must not be empty."
            raise SettingsError(msg)


__all__ = [
    "BlockSettings",
    "CategorySettings",
    "Settings",
    "SettingsError",
    "SiteSettings",
    "ThemeRoots",
]
