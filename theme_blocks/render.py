"""Render a block instance through the template engine.

The host registry invokes :meth:`BlockRenderer.render` for every block placed
on a page. The adapter fetches the current field values, builds a context,
runs the field data (and, in preview mode, the preview data) through the
global and block-specific filters, and hands the template search list to the
engine.

Context keys
------------
``block``
    The block instance passed by the host.
``name`` / ``slug``
    Registered name without the namespace prefix, and its hyphen-free variant.
``is_preview``
    True while the editor renders the block.
``data``
    Filtered field values (``{}`` when the item has none).
``preview_data`` / ``preview_image``
    Present in preview mode; ``preview_image`` only for inserter previews.
``stylesheet``
    The ``attach_style`` handle, present on the first render of a block per
    render session.
``site``
    Public URL and name of the site.
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import logging
import typing as typ
import warnings

from ._constants import (
    PREVIEW_DATA_HOOK,
    PREVIEW_DATA_NAMED_HOOK,
    RENDER_BLOCK_HOOK,
    RENDER_BLOCK_NAMED_HOOK,
)
from .gate import normalize_identifier
from .host import RequestContext

if typ.TYPE_CHECKING:
    from .config import Settings
    from .hooks import HookRegistry
    from .host import FieldSource
    from .templating import TemplateEngine

logger = logging.getLogger(__name__)


@dc.dataclass(slots=True)
class RenderSession:
    """Per-request record of blocks whose stylesheet was already attached."""

    styled: set[str] = dc.field(default_factory=set)

    def claim_stylesheet(self, name: str) -> bool:
        """Return True the first time ``name`` is claimed in this session."""
        if name in self.styled:
            return False
        self.styled.add(name)
        return True


class BlockRenderer:
    """Build block contexts and render them with the template engine."""

    def __init__(
        self,
        settings: Settings,
        hooks: HookRegistry,
        fields: FieldSource,
        engine: TemplateEngine,
        *,
        directories: cabc.Sequence[str] | None = None,
        session: RenderSession | None = None,
        request: RequestContext | None = None,
        output: typ.TextIO | None = None,
    ) -> None:
        """Initialize the renderer with its collaborators.

        Parameters
        ----------
        settings : Settings
            Site settings (namespace, template suffix, site URL).
        hooks : HookRegistry
            Registry holding the data and preview filters.
        fields : FieldSource
            Source of the current content item's field values.
        engine : TemplateEngine
            Engine resolving and rendering the template search list.
        directories : Sequence[str], optional
            Block directories searched for templates; defaults to the
            configured directories.
        session : RenderSession, optional
            Stylesheet dedup state; a fresh session is created when omitted.
        request : RequestContext, optional
            The request being served.
        output : TextIO, optional
            Stream receiving rendered markup in addition to the return value.
        """
        self.settings = settings
        self.hooks = hooks
        self.fields = fields
        self.engine = engine
        self.directories = list(
            directories if directories is not None else settings.blocks.directories
        )
        self.session = session or RenderSession()
        self.request = request or RequestContext()
        self.output = output

    def display_name(self, registered_name: str) -> str:
        """Strip the namespace prefix from ``registered_name``."""
        return registered_name.removeprefix(self.settings.blocks.prefix)

    def template_candidates(self, name: str) -> list[str]:
        """Return theme-relative template paths for ``name`` in lookup order."""
        suffix = self.settings.blocks.template_suffix
        return [f"{directory}/{name}.{suffix}" for directory in self.directories]

    def build_context(
        self, block: cabc.Mapping[str, typ.Any], is_preview: bool = False
    ) -> dict[str, typ.Any]:
        """Return the template context for one render of ``block``."""
        name = self.display_name(str(block["name"]))
        slug = normalize_identifier(name)
        context: dict[str, typ.Any] = {
            "site": {"url": self.settings.site.url, "name": self.settings.site.name},
            "block": block,
            "name": name,
            "slug": slug,
            "is_preview": is_preview,
        }

        if is_preview:
            preview_data = self.hooks.apply_filters(PREVIEW_DATA_HOOK, {}, block, name)
            context["preview_data"] = self._apply_named_filters(
                PREVIEW_DATA_NAMED_HOOK, preview_data, block, name, slug
            )
            image = _preview_image(block)
            if self.request.is_inserter_preview and image:
                context["preview_image"] = image

        data = dict(self.fields.get_fields(self.request.post_id) or {})
        data = self.hooks.apply_filters(RENDER_BLOCK_HOOK, data, block, name)
        context["data"] = self._apply_named_filters(
            RENDER_BLOCK_NAMED_HOOK, data, block, name, slug
        )

        # Any configured handle counts, including an empty one.
        if "attach_style" in block and self.session.claim_stylesheet(
            str(block["name"])
        ):
            context["stylesheet"] = block["attach_style"]
        return context

    def render(
        self,
        block: cabc.Mapping[str, typ.Any],
        content: str = "",
        is_preview: bool = False,
    ) -> str:
        """Render ``block`` and return the markup, echoing it to ``output``.

        ``content`` is accepted for compatibility with the host callback
        signature and is not used.
        """
        context = self.build_context(block, is_preview)
        candidates = self.template_candidates(context["name"])
        logger.debug("rendering %s from %s", block["name"], candidates)
        html = self.engine.render(candidates, context)
        if self.output is not None:
            self.output.write(html)
        return html

    def _apply_named_filters(
        self,
        pattern: str,
        value: typ.Any,
        block: cabc.Mapping[str, typ.Any],
        name: str,
        slug: str,
    ) -> typ.Any:
        if name != slug:
            legacy = pattern.format(name=name)
            if self.hooks.has_filter(legacy):
                warnings.warn(
                    f"Filter '{legacy}' is deprecated; use "
                    f"'{pattern.format(name=slug)}' instead.",
                    DeprecationWarning,
                    stacklevel=3,
                )
            value = self.hooks.apply_filters(legacy, value, block)
        return self.hooks.apply_filters(pattern.format(name=slug), value, block)


def _preview_image(block: cabc.Mapping[str, typ.Any]) -> str | None:
    data = block.get("data") or {}
    if isinstance(data, cabc.Mapping) and data.get("preview_image"):
        return data["preview_image"]
    example = block.get("example")
    if not isinstance(example, cabc.Mapping):
        return None
    attributes = example.get("attributes")
    if not isinstance(attributes, cabc.Mapping):
        return None
    example_data = attributes.get("data")
    if not isinstance(example_data, cabc.Mapping):
        return None
    return example_data.get("preview_image")


__all__ = ["BlockRenderer", "RenderSession"]
