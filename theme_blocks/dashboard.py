"""Read-only admin page listing the registered theme blocks."""

from __future__ import annotations

import typing as typ

from .templating import package_environment

if typ.TYPE_CHECKING:
    from .config import Settings
    from .host import BlockTypeRegistry, RequestContext

DASHBOARD_TITLE = "Available theme blocks"
DASHBOARD_HEADING = "These blocks are currently available:"


class DashboardPage:
    """Render the sorted list of block names under the plugin's namespace."""

    def __init__(
        self,
        host: BlockTypeRegistry,
        settings: Settings,
        *,
        title: str = DASHBOARD_TITLE,
    ) -> None:
        self.host = host
        self.settings = settings
        self.title = title
        self.env = package_environment()
        self.template = self.env.get_template("dashboard.jinja")

    def block_names(self) -> list[str]:
        """Return registered names under the namespace, prefix stripped, sorted."""
        prefix = self.settings.blocks.prefix
        return sorted(
            block.name.removeprefix(prefix)
            for block in self.host.get_all_registered()
            if block.name.startswith(prefix)
        )

    def render(self, request: RequestContext) -> str:
        """Return the page markup, or an empty string without the capability."""
        if not request.current_user_can(self.settings.capability):
            return ""
        context = {
            "title": self.title,
            "heading": DASHBOARD_HEADING,
            "block_names": self.block_names(),
        }
        html = self.template.render(**context)
        if not html.endswith("\n"):
            html += "\n"
        return html


__all__ = ["DASHBOARD_TITLE", "DashboardPage"]
