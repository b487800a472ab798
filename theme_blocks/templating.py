"""Jinja2-backed template engine used to render blocks and admin pages."""

from __future__ import annotations

import collections.abc as cabc
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

PACKAGE_TEMPLATES = Path(__file__).parent / "templates"


class TemplateEngine:
    """Resolve template search lists against theme roots and render them.

    The loader searches ``search_paths`` in order for every candidate, so a
    child theme's copy of ``views/blocks/hero.twig`` shadows the parent's.
    """

    def __init__(
        self,
        search_paths: cabc.Sequence[Path],
        *,
        autoescape_extensions: cabc.Sequence[str] = ("html", "xml", "twig", "jinja"),
    ) -> None:
        self.search_paths = list(search_paths)
        self.env = Environment(
            loader=FileSystemLoader([str(path) for path in self.search_paths]),
            autoescape=select_autoescape(list(autoescape_extensions)),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render(
        self, candidates: cabc.Sequence[str], context: cabc.Mapping[str, typ.Any]
    ) -> str:
        """Render the first existing template in ``candidates`` with ``context``.

        Raises
        ------
        jinja2.TemplatesNotFound
            If none of the candidates exists under any search path.
        """
        template = self.env.select_template(list(candidates))
        return template.render(**context)


def package_environment() -> Environment:
    """Return an environment for the templates shipped with this package."""
    return Environment(
        loader=FileSystemLoader(PACKAGE_TEMPLATES),
        autoescape=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )


__all__ = ["PACKAGE_TEMPLATES", "TemplateEngine", "package_environment"]
