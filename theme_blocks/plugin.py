"""Coordinate block discovery, registration, and rendering for one site.

:class:`BlocksPlugin` is the application context: it owns the hook registry,
the diagnostics reporter, the registry client, and the render adapter, and it
wires them to the host's lifecycle actions when :meth:`BlocksPlugin.boot`
succeeds. Construct one per process and call :meth:`BlocksPlugin.begin_request`
at the start of every request so stylesheet bookkeeping never leaks between
requests.

Example
-------
>>> from pathlib import Path
>>> from theme_blocks.config import load_settings
>>> from theme_blocks.host import InMemoryBlockTypeRegistry, StaticFieldSource
>>> from theme_blocks.plugin import BlocksPlugin
>>> settings = load_settings(Path("config/blocks.yaml"))  # doctest: +SKIP
>>> plugin = BlocksPlugin(
...     settings, host=InMemoryBlockTypeRegistry(), fields=StaticFieldSource()
... )  # doctest: +SKIP
>>> plugin.boot()  # doctest: +SKIP
True
>>> plugin.hooks.do_action("init")  # doctest: +SKIP
"""

from __future__ import annotations

import collections.abc as cabc
import logging
import typing as typ
from html import escape

from ._constants import (
    ADMIN_MENU_ACTION,
    BLOCK_CATEGORIES_HOOK,
    DASHBOARD_SLUG,
    DIRECTORIES_HOOK,
    INIT_ACTION,
)
from .dashboard import DashboardPage
from .descriptor import BlockDescriptor, build_descriptor
from .diagnostics import DiagnosticsReporter
from .errors import (
    BlockConfigParseError,
    InvalidDirectoryListError,
    MissingDependencyError,
    MissingTitleError,
)
from .gate import should_register
from .hooks import HookRegistry
from .host import FilesystemThemeResolver, RequestContext
from .loader import load_block_config
from .registry import RegistryClient
from .render import BlockRenderer, RenderSession
from .scanner import iter_directories
from .templating import TemplateEngine

if typ.TYPE_CHECKING:
    from .config import Settings
    from .host import BlockTypeRegistry, FieldSource, ThemeResolver

logger = logging.getLogger(__name__)

CONFIG_NOTICE_TITLE = "Theme: Block configuration"


class BlocksPlugin:
    """Application context tying the registration and render pipelines together."""

    def __init__(
        self,
        settings: Settings,
        *,
        host: BlockTypeRegistry | None,
        fields: FieldSource | None,
        hooks: HookRegistry | None = None,
        resolver: ThemeResolver | None = None,
        engine: TemplateEngine | None = None,
        reporter: DiagnosticsReporter | None = None,
        request: RequestContext | None = None,
        output: typ.TextIO | None = None,
    ) -> None:
        """Create the plugin without touching the host.

        Parameters
        ----------
        settings : Settings
            Site, theme, and block settings.
        host : BlockTypeRegistry or None
            Host block-type registry; ``None`` means it is not available and
            :meth:`boot` will refuse to start.
        fields : FieldSource or None
            Field value source; ``None`` means it is not available.
        hooks : HookRegistry, optional
            Shared registry of filters and actions.
        resolver : ThemeResolver, optional
            Directory resolver; defaults to the configured theme roots.
        engine : TemplateEngine, optional
            Template engine; defaults to one searching the theme roots.
        reporter : DiagnosticsReporter, optional
            Notice sink; defaults to one bound to ``hooks``.
        request : RequestContext, optional
            The first request served.
        output : TextIO, optional
            Stream receiving rendered block markup.
        """
        self.settings = settings
        self.host = host
        self.fields = fields
        self.hooks = hooks or HookRegistry()
        self.request = request or RequestContext()
        self.reporter = reporter or DiagnosticsReporter(
            self.hooks, admin=self.request.is_admin
        )
        self.resolver = resolver or FilesystemThemeResolver(settings.theme)
        self.engine = engine or TemplateEngine(settings.theme.search_paths)
        self.output = output
        self.directories: typ.Any = None
        self.admin_pages: dict[str, DashboardPage] = {}
        self.booted = False
        self._session = RenderSession()
        self._renderer: BlockRenderer | None = None

    def check_dependencies(self) -> bool:
        """Report missing host collaborators and return whether all are present."""
        try:
            self._verify_dependencies()
        except MissingDependencyError as exc:
            self.reporter.error(
                escape(str(exc)), "ERROR: Theme blocks cannot be initialised."
            )
            return False
        return True

    def boot(self) -> bool:
        """Attach the plugin's handlers to the host lifecycle hooks.

        Returns
        -------
        bool
            ``False`` when a dependency is missing; no hooks are attached in
            that case and the plugin stays inert.
        """
        if self.booted:
            return True
        if not self.check_dependencies():
            return False
        self.directories = self.hooks.apply_filters(
            DIRECTORIES_HOOK, list(self.settings.blocks.directories)
        )
        self.hooks.add_action(INIT_ACTION, self.register_blocks)
        self.hooks.add_action(ADMIN_MENU_ACTION, self.add_dashboard_page)
        self.hooks.add_filter(
            BLOCK_CATEGORIES_HOOK, self.register_block_category, priority=1
        )
        self.booted = True
        logger.debug("theme blocks booted with directories %s", self.directories)
        return True

    def begin_request(self, request: RequestContext | None = None) -> None:
        """Start a new request: fresh notices, stylesheet bookkeeping and facts."""
        self.request = request or RequestContext()
        self.reporter.reset()
        self.reporter.admin = self.request.is_admin
        self._session = RenderSession()
        if self._renderer is not None:
            self._renderer.session = self._session
            self._renderer.request = self.request

    @property
    def renderer(self) -> BlockRenderer:
        """Return the render adapter, created on first use."""
        if self._renderer is None:
            if self.fields is None:
                msg = "A field source is required to render blocks."
                raise MissingDependencyError(msg)
            directories = (
                self.directories
                if isinstance(self.directories, list)
                else self.settings.blocks.directories
            )
            self._renderer = BlockRenderer(
                self.settings,
                self.hooks,
                self.fields,
                self.engine,
                directories=directories,
                session=self._session,
                request=self.request,
                output=self.output,
            )
        return self._renderer

    def register_blocks(self) -> list[BlockDescriptor]:
        """Discover, build, gate, and register every block configuration.

        Parse errors skip the offending file. A configuration without a title
        abandons the rest of its directory. A directory that does not resolve
        ends the scan for all later directories.

        Returns
        -------
        list[BlockDescriptor]
            Descriptors handed to the host, in registration order.
        """
        try:
            directories = self._validated_directories()
            client = RegistryClient(self._require_host())
        except InvalidDirectoryListError as exc:
            self.reporter.error(escape(str(exc)), CONFIG_NOTICE_TITLE)
            return []

        registered: list[BlockDescriptor] = []
        suffix = self.settings.blocks.config_suffix
        for listing in iter_directories(directories, self.resolver, suffix):
            for path in listing.files:
                try:
                    raw = load_block_config(path)
                    descriptor = build_descriptor(
                        raw,
                        path.name,
                        listing.directory,
                        listing.path,
                        settings=self.settings,
                        render_callback=self.render_block,
                        reporter=self.reporter,
                    )
                except BlockConfigParseError as exc:
                    self.reporter.error(
                        f"Failed to parse <strong>{escape(listing.directory)}/"
                        f"{escape(path.name)}</strong>:<br>"
                        f"<code>{escape(exc.message)}</code>",
                        CONFIG_NOTICE_TITLE,
                    )
                    continue
                except MissingTitleError:
                    self.reporter.error(
                        f"The block configuration <strong>{escape(listing.directory)}/"
                        f"{escape(path.name)}</strong> is missing a title "
                        "(<code>title</code>).",
                        CONFIG_NOTICE_TITLE,
                    )
                    break

                if not should_register(descriptor.name, self.hooks):
                    logger.info("registration of block %s vetoed", descriptor.name)
                    continue
                client.register(descriptor)
                registered.append(descriptor)
        logger.info("registered %d theme blocks", len(registered))
        return registered

    def render_block(
        self,
        block: cabc.Mapping[str, typ.Any],
        content: str = "",
        is_preview: bool = False,
    ) -> str:
        """Render callback shared by every registered block."""
        return self.renderer.render(block, content, is_preview)

    def register_block_category(
        self, categories: list[dict[str, str]], post: object | None = None
    ) -> list[dict[str, str]]:
        """Append the theme block category to the editor's category list."""
        category = self.settings.category
        return [*categories, {"slug": category.slug, "title": category.title}]

    def add_dashboard_page(self) -> None:
        """Register the block listing page for users holding the capability."""
        if not self.request.current_user_can(self.settings.capability):
            return
        self.admin_pages[DASHBOARD_SLUG] = DashboardPage(
            self._require_host(), self.settings
        )

    def dashboard(self) -> str:
        """Render the block listing page for the current request."""
        page = self.admin_pages.get(DASHBOARD_SLUG) or DashboardPage(
            self._require_host(), self.settings
        )
        return page.render(self.request)

    def _validated_directories(self) -> list[str]:
        if self.directories is None:
            self.directories = self.hooks.apply_filters(
                DIRECTORIES_HOOK, list(self.settings.blocks.directories)
            )
        if not isinstance(self.directories, list):
            raise InvalidDirectoryListError(self.directories)
        return [str(directory) for directory in self.directories]

    def _verify_dependencies(self) -> None:
        missing: list[str] = []
        if not callable(getattr(self.host, "register_block_type", None)):
            missing.append("a block-type registry")
        if not callable(getattr(self.fields, "get_fields", None)):
            missing.append("a field source")
        if missing:
            msg = f"Theme blocks require {' and '.join(missing)}; none was found."
            raise MissingDependencyError(msg)

    def _require_host(self) -> BlockTypeRegistry:
        if self.host is None:
            msg = "A block-type registry is required."
            raise MissingDependencyError(msg)
        return self.host


__all__ = ["CONFIG_NOTICE_TITLE", "BlocksPlugin"]
