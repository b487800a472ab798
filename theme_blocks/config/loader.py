"""Load site settings YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from theme_blocks._constants import (
    CONFIG_SUFFIX,
    DEFAULT_CAPABILITY,
    DEFAULT_DIRECTORIES,
    PREVIEW_SUFFIX,
    TEMPLATE_SUFFIX,
)

from .helpers import (
    _normalize_directories,
    _normalize_suffix,
    _optional_str,
    _require_str,
    _resolve_path,
)
from .models import (
    BlockSettings,
    CategorySettings,
    Settings,
    SettingsError,
    SiteSettings,
    ThemeRoots,
)


def load_settings(path: Path) -> Settings:
    """Load the YAML file describing the site, theme roots, and block options.

    Parameters
    ----------
    path : Path
        Filesystem path to the settings file (for example,
        ``config/blocks.yaml``). Relative paths inside the file are resolved
        against the directory containing it.

    Returns
    -------
    Settings
        Parsed settings with defaults applied for every optional key.

    Raises
    ------
    FileNotFoundError
        If the settings file does not exist at ``path``.
    SettingsError
        If the YAML is malformed, the top level is not a mapping, or a
        required key (``site.root``, ``site.url``, ``theme.template_dir``) is
        missing.

    Examples
    --------
    >>> from pathlib import Path
    >>> from theme_blocks.config import load_settings
    >>> settings = load_settings(Path("config/blocks.yaml"))  # doctest: +SKIP
    >>> settings.blocks.directories  # doctest: +SKIP
    ['views/blocks']
    """
    if not path.exists():
        msg = f"Settings file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    try:
        with path.open("r", encoding="utf-8") as handle:
            loaded = loader.load(handle) or {}
    except YAMLError as exc:
        msg = f"Settings file '{path}' is not valid YAML: {exc}"
        raise SettingsError(msg) from exc
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise SettingsError(msg)
    return build_settings(loaded, base_dir=path.resolve().parent)


def build_settings(
    raw: typ.Mapping[str, typ.Any], *, base_dir: Path | None = None
) -> Settings:
    """Build :class:`Settings` from an already parsed mapping."""
    base = base_dir or Path.cwd()
    site_raw = raw.get("site") or {}
    theme_raw = raw.get("theme") or {}
    blocks_raw = raw.get("blocks") or {}
    category_raw = raw.get("category") or {}
    admin_raw = raw.get("admin") or {}

    site = SiteSettings(
        root=_resolve_path(_require_str(site_raw, "root", "site.root"), base),
        url=_require_str(site_raw, "url", "site.url"),
        name=_optional_str(site_raw.get("name")) or "",
    )

    template_dir = _resolve_path(
        _require_str(theme_raw, "template_dir", "theme.template_dir"), base
    )
    stylesheet_value = _optional_str(theme_raw.get("stylesheet_dir"))
    stylesheet_dir = (
        _resolve_path(stylesheet_value, base) if stylesheet_value else template_dir
    )

    directories = (
        _normalize_directories(blocks_raw["directories"])
        if "directories" in blocks_raw
        else list(DEFAULT_DIRECTORIES)
    )
    defaults = BlockSettings()
    namespace = _optional_str(blocks_raw.get("namespace")) or defaults.namespace
    blocks = BlockSettings(
        directories=directories,
        namespace=namespace.strip("/"),
        default_category=_optional_str(blocks_raw.get("default_category"))
        or defaults.default_category,
        config_suffix=_normalize_suffix(blocks_raw.get("config_suffix"), CONFIG_SUFFIX),
        template_suffix=_normalize_suffix(
            blocks_raw.get("template_suffix"), TEMPLATE_SUFFIX
        ),
        preview_suffix=_normalize_suffix(
            blocks_raw.get("preview_suffix"), PREVIEW_SUFFIX
        ),
    )

    category_defaults = CategorySettings()
    category = CategorySettings(
        slug=_optional_str(category_raw.get("slug")) or category_defaults.slug,
        title=_optional_str(category_raw.get("title")) or category_defaults.title,
    )

    return Settings(
        site=site,
        theme=ThemeRoots(stylesheet_dir=stylesheet_dir, template_dir=template_dir),
        blocks=blocks,
        category=category,
        capability=_optional_str(admin_raw.get("capability")) or DEFAULT_CAPABILITY,
    )


__all__ = ["build_settings", "load_settings"]
