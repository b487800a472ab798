"""Shared fixtures building a throwaway site with parent and child themes."""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
from pathlib import Path

import pytest

from theme_blocks.config import Settings, SiteSettings, ThemeRoots
from theme_blocks.host import (
    InMemoryBlockTypeRegistry,
    RequestContext,
    StaticFieldSource,
)
from theme_blocks.plugin import BlocksPlugin

SITE_URL = "https://example.invalid"
DEFAULT_TEMPLATE = "<p>{{ name }}</p>"

WriteBlock = cabc.Callable[..., Path]


@dc.dataclass(slots=True)
class ThemeLayout:
    """Filesystem layout of the temporary site."""

    site_root: Path
    parent: Path
    child: Path

    def block_dir(
        self, directory: str = "views/blocks", *, child: bool = False
    ) -> Path:
        """Create and return ``directory`` inside the parent or child theme."""
        path = (self.child if child else self.parent) / directory
        path.mkdir(parents=True, exist_ok=True)
        return path


@pytest.fixture
def theme(tmp_path: Path) -> ThemeLayout:
    """Return a site root holding empty ``base`` and ``child`` themes."""
    site_root = tmp_path / "site"
    parent = site_root / "themes" / "base"
    child = site_root / "themes" / "child"
    parent.mkdir(parents=True)
    child.mkdir(parents=True)
    return ThemeLayout(site_root=site_root, parent=parent, child=child)


@pytest.fixture
def settings(theme: ThemeLayout) -> Settings:
    """Return settings pointing at the temporary themes."""
    return Settings(
        site=SiteSettings(root=theme.site_root, url=SITE_URL, name="Example"),
        theme=ThemeRoots(stylesheet_dir=theme.child, template_dir=theme.parent),
    )


@pytest.fixture
def write_block() -> WriteBlock:
    """Return a helper writing a block config and its sibling files."""

    def _write(
        directory: Path,
        name: str,
        config: str | None,
        *,
        template: str | None = DEFAULT_TEMPLATE,
        image: bool = False,
    ) -> Path:
        config_path = directory / f"{name}.yml"
        if config is not None:
            config_path.write_text(config, encoding="utf-8")
        if template is not None:
            (directory / f"{name}.twig").write_text(template, encoding="utf-8")
        if image:
            (directory / f"{name}.jpg").write_bytes(b"\xff\xd8\xff\xe0")
        return config_path

    return _write


@pytest.fixture
def host() -> InMemoryBlockTypeRegistry:
    """Return an empty in-memory host registry."""
    return InMemoryBlockTypeRegistry()


@pytest.fixture
def fields() -> StaticFieldSource:
    """Return a field source with no values for any item."""
    return StaticFieldSource()


@pytest.fixture
def admin_request() -> RequestContext:
    """Return an admin request made by a user who may manage options."""
    return RequestContext(is_admin=True, capabilities=frozenset({"manage_options"}))


@pytest.fixture
def plugin(
    settings: Settings,
    host: InMemoryBlockTypeRegistry,
    fields: StaticFieldSource,
    admin_request: RequestContext,
) -> BlocksPlugin:
    """Return an un-booted plugin wired to the in-memory collaborators."""
    return BlocksPlugin(settings, host=host, fields=fields, request=admin_request)
