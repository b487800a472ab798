"""Normalize a raw block configuration into a registration-ready descriptor.

A configuration file ``views/blocks/hero.yml`` such as::

    title: Hero
    category: theme
    mode: edit
    align: full
    attach_style: block-hero
    keywords: [banner]
    supports:
      align: false
      mode: true
    icon: '<svg xmlns="http://www.w3.org/2000/svg" width="24" height="24"></svg>'

becomes a :class:`BlockDescriptor` named ``hero``. The file name (without the
``.yml`` suffix) is the block name; a sibling ``hero.twig`` is the template
and an optional ``hero.jpg`` becomes the inserter preview image.
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import typing as typ

from .errors import MissingTitleError

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .config import Settings
    from .diagnostics import DiagnosticsReporter

TEMPLATE_NOTICE_TITLE = "Theme: Block template"

KNOWN_KEYS = frozenset(
    {
        "align",
        "attach_style",
        "category",
        "description",
        "example",
        "icon",
        "keywords",
        "mode",
        "name",
        "render_callback",
        "supports",
        "title",
    }
)


@dc.dataclass(slots=True)
class BlockDescriptor:
    """A block type ready to hand to the host registry.

    Attributes
    ----------
    name : str
        Identifier derived from the configuration file name.
    title : str
        Human-readable title; never empty.
    category : str
        Inserter category, ``"theme"`` unless configured.
    render_callback : Callable or None
        Shared render adapter bound by the coordinator.
    mode, align, attach_style, icon, description : Any
        Optional editor settings passed to the host exactly as configured;
        ``icon`` may be markup or a mapping such as ``{src: star}``.
    keywords, supports : Any
        Inserter keywords and supported editor features, also unchanged.
    example : Any
        Inserter preview payload; carries ``preview_image`` when a sibling
        image exists.
    extra : dict[str, Any]
        Unrecognized keys, passed through verbatim.
    """

    name: str
    title: str
    category: str
    render_callback: cabc.Callable[..., str] | None = None
    mode: typ.Any = None
    align: typ.Any = None
    attach_style: typ.Any = None
    keywords: typ.Any = None
    supports: typ.Any = None
    icon: typ.Any = None
    description: typ.Any = None
    example: typ.Any = None
    extra: dict[str, typ.Any] = dc.field(default_factory=dict)

    @property
    def preview_image(self) -> str | None:
        """Return the preview image URL stored in ``example``, if any."""
        if not isinstance(self.example, dict):
            return None
        attributes = self.example.get("attributes")
        data = attributes.get("data") if isinstance(attributes, dict) else None
        return data.get("preview_image") if isinstance(data, dict) else None

    def to_registration(self) -> dict[str, typ.Any]:
        """Return the settings mapping accepted by the host registry."""
        settings: dict[str, typ.Any] = dict(self.extra)
        settings.update(
            {
                "name": self.name,
                "title": self.title,
                "category": self.category,
                "render_callback": self.render_callback,
            }
        )
        optional = {
            "mode": self.mode,
            "align": self.align,
            "attach_style": self.attach_style,
            "icon": self.icon,
            "description": self.description,
            "example": self.example,
            "keywords": self.keywords,
            "supports": self.supports,
        }
        settings.update(
            {key: value for key, value in optional.items() if value is not None}
        )
        return settings


def block_name(filename: str, suffix: str) -> str:
    """Return ``filename`` without its configuration suffix."""
    return filename.removesuffix(f".{suffix.lstrip('.')}")


def build_descriptor(
    raw: cabc.Mapping[str, typ.Any],
    filename: str,
    directory: str,
    resolved_dir: Path,
    *,
    settings: Settings,
    render_callback: cabc.Callable[..., str] | None = None,
    reporter: DiagnosticsReporter | None = None,
) -> BlockDescriptor:
    """Validate ``raw`` and build the descriptor for one configuration file.

    Parameters
    ----------
    raw : Mapping[str, Any]
        Parsed configuration from :func:`theme_blocks.loader.load_block_config`.
    filename : str
        Configuration file name, for example ``"hero.yml"``.
    directory : str
        Theme-relative directory identifier used in notices.
    resolved_dir : Path
        Filesystem directory holding the configuration and its siblings.
    settings : Settings
        Site settings supplying suffixes, defaults, and the public URL.
    render_callback : Callable, optional
        Render adapter bound to every descriptor.
    reporter : DiagnosticsReporter, optional
        Receives the missing-template and preview warnings.

    Returns
    -------
    BlockDescriptor
        The normalized descriptor.

    Raises
    ------
    MissingTitleError
        If ``title`` is absent or empty.
    """
    title = raw.get("title")
    if not title or not str(title).strip():
        raise MissingTitleError(directory, filename)

    options = settings.blocks
    name = block_name(filename, options.config_suffix)
    category = raw.get("category") or options.default_category

    descriptor = BlockDescriptor(
        name=name,
        title=str(title),
        category=str(category),
        render_callback=render_callback,
        mode=raw.get("mode"),
        align=raw.get("align"),
        attach_style=raw.get("attach_style"),
        keywords=raw.get("keywords"),
        supports=raw.get("supports"),
        icon=raw.get("icon"),
        description=raw.get("description"),
        example=raw.get("example"),
        extra={key: value for key, value in raw.items() if key not in KNOWN_KEYS},
    )

    preview_path = resolved_dir / f"{name}.{options.preview_suffix}"
    if preview_path.is_file():
        _attach_preview(descriptor, preview_path, directory, settings, reporter)

    template_path = resolved_dir / f"{name}.{options.template_suffix}"
    if not template_path.is_file() and reporter is not None:
        reporter.warning(
            f"The block template <strong>{directory}/{name}."
            f"{options.template_suffix}</strong> is missing.",
            TEMPLATE_NOTICE_TITLE,
        )
    return descriptor


def _attach_preview(
    descriptor: BlockDescriptor,
    image: Path,
    directory: str,
    settings: Settings,
    reporter: DiagnosticsReporter | None,
) -> None:
    url = settings.site.public_url(image)
    if url is None:
        if reporter is not None:
            reporter.warning(
                f"The preview image <strong>{directory}/{image.name}</strong> lies "
                "outside the site root and cannot be published.",
                TEMPLATE_NOTICE_TITLE,
            )
        return
    example = dict(_mapping(descriptor.example))
    attributes = dict(_mapping(example.get("attributes")))
    data = dict(_mapping(attributes.get("data")))
    data["preview_image"] = url
    attributes.setdefault("mode", "preview")
    attributes["data"] = data
    example["attributes"] = attributes
    descriptor.example = example


def _mapping(value: object) -> cabc.Mapping[str, typ.Any]:
    return value if isinstance(value, cabc.Mapping) else {}


__all__ = ["BlockDescriptor", "KNOWN_KEYS", "block_name", "build_descriptor"]
