"""Load and validate site settings YAML for block discovery and rendering.

This subpackage parses the project's ``blocks.yaml`` file, applies defaults
for every optional key, resolves theme and site paths relative to the file,
and produces typed dataclasses (:class:`Settings`, :class:`ThemeRoots`, etc.)
that the plugin coordinator consumes. The primary entry point is
:func:`load_settings`.

Examples
--------
>>> from pathlib import Path
>>> from theme_blocks.config import load_settings
>>> settings = load_settings(Path("config/blocks.yaml"))  # doctest: +SKIP
>>> settings.theme.search_paths  # doctest: +SKIP
[PosixPath('/srv/site/themes/child'), PosixPath('/srv/site/themes/base')]
"""

from .loader import build_settings, load_settings
from .models import (
    BlockSettings,
    CategorySettings,
    Settings,
    SettingsError,
    SiteSettings,
    ThemeRoots,
)

__all__ = [
    "BlockSettings",
    "CategorySettings",
    "Settings",
    "SettingsError",
    "SiteSettings",
    "ThemeRoots",
    "build_settings",
    "load_settings",
]
