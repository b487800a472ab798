"""Interfaces and in-process implementations of the host collaborators.

The plugin talks to four external systems: a theme resolver that maps a
theme-relative directory to a filesystem path, the host block-type registry,
a field source exposing the current content item's field values, and the
request itself (admin flag, query string, user capabilities). Each is
described by a small protocol so a real host can plug in its own adapter;
the classes below implement them in memory for the CLI and the tests.
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import logging
import typing as typ

from ._constants import DEFAULT_NAMESPACE, INSERTER_PREVIEW_QUERY

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .config import ThemeRoots

logger = logging.getLogger(__name__)

FieldData = cabc.Mapping[str, typ.Any]
RenderCallback = cabc.Callable[..., str]


class ThemeResolver(typ.Protocol):
    """Resolve theme-relative paths, child theme before parent theme."""

    def locate_template(self, relative: str) -> Path | None:
        """Return the first existing path for ``relative`` or None."""
        ...


class FieldSource(typ.Protocol):
    """Expose field values for a content item."""

    def get_fields(self, post_id: int | str | None = None) -> FieldData | None:
        """Return the field values of ``post_id`` (current item when None)."""
        ...


class BlockTypeRegistry(typ.Protocol):
    """The host's block-type registration entry point."""

    def register_block_type(self, settings: cabc.Mapping[str, typ.Any]) -> object:
        """Register a block type from its settings mapping."""
        ...

    def get_all_registered(self) -> list[RegisteredBlockType]:
        """Return every registered block type."""
        ...


class FilesystemThemeResolver:
    """Resolve directories against the child and parent theme roots."""

    def __init__(self, roots: ThemeRoots) -> None:
        self.roots = roots

    def locate_template(self, relative: str) -> Path | None:
        for root in self.roots.search_paths:
            candidate = root / relative.strip("/")
            if candidate.exists():
                return candidate
        return None


class StaticFieldSource:
    """Serve field values from a mapping keyed by content item id."""

    def __init__(
        self,
        fields: cabc.Mapping[int | str | None, FieldData] | None = None,
        *,
        current: int | str | None = None,
    ) -> None:
        self._fields = dict(fields or {})
        self.current = current

    def set_fields(self, post_id: int | str | None, values: FieldData) -> None:
        """Store ``values`` for ``post_id``."""
        self._fields[post_id] = values

    def get_fields(self, post_id: int | str | None = None) -> FieldData | None:
        key = self.current if post_id is None else post_id
        values = self._fields.get(key)
        return dict(values) if values is not None else None


@dc.dataclass(slots=True)
class RequestContext:
    """Ambient facts about the request being served."""

    post_id: int | str | None = None
    is_admin: bool = False
    query: dict[str, str] = dc.field(default_factory=dict)
    capabilities: frozenset[str] = frozenset()

    @property
    def is_inserter_preview(self) -> bool:
        """Return True when the editor requested an inserter preview."""
        value = self.query.get(INSERTER_PREVIEW_QUERY, "")
        return value.lower() in {"1", "true", "yes"}

    def current_user_can(self, capability: str) -> bool:
        """Return True when the current user holds ``capability``."""
        return capability in self.capabilities


@dc.dataclass(slots=True, order=True)
class RegisteredBlockType:
    """A block type held by the host registry."""

    name: str
    settings: dict[str, typ.Any] = dc.field(compare=False)


class InMemoryBlockTypeRegistry:
    """Host registry keeping block types in a dict, namespacing their names."""

    def __init__(self, namespace: str = DEFAULT_NAMESPACE) -> None:
        self.namespace = namespace
        self._types: dict[str, RegisteredBlockType] = {}

    def register_block_type(
        self, settings: cabc.Mapping[str, typ.Any]
    ) -> RegisteredBlockType:
        """Store ``settings`` under ``<namespace>/<name>``; later calls win."""
        raw_name = str(settings["name"])
        name = raw_name if "/" in raw_name else f"{self.namespace}/{raw_name}"
        block_type = RegisteredBlockType(name=name, settings={**settings, "name": name})
        if name in self._types:
            logger.debug("replacing registered block type %s", name)
        self._types[name] = block_type
        return block_type

    def get_registered(self, name: str) -> RegisteredBlockType | None:
        """Return the block type called ``name`` if it is registered."""
        return self._types.get(name)

    def get_all_registered(self) -> list[RegisteredBlockType]:
        return list(self._types.values())

    def render(
        self,
        name: str,
        *,
        data: FieldData | None = None,
        content: str = "",
        is_preview: bool = False,
    ) -> str:
        """Build a block instance for ``name`` and invoke its render callback.

        Raises
        ------
        KeyError
            If no block type called ``name`` is registered.
        """
        try:
            block_type = self._types[name]
        except KeyError as exc:
            available = ", ".join(sorted(self._types)) or "(none)"
            msg = f"Unknown block type '{name}'. Registered: {available}"
            raise KeyError(msg) from exc
        block = {**block_type.settings, "data": dict(data or {})}
        callback: RenderCallback = block_type.settings["render_callback"]
        return callback(block, content, is_preview)


__all__ = [
    "BlockTypeRegistry",
    "FieldSource",
    "FilesystemThemeResolver",
    "InMemoryBlockTypeRegistry",
    "RegisteredBlockType",
    "RequestContext",
    "StaticFieldSource",
    "ThemeResolver",
]
