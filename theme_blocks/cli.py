"""Cyclopts CLI entrypoint for inspecting and rendering theme blocks.

The ``blocks`` console script loads ``config/blocks.yaml``, runs the
registration pipeline against an in-memory host registry, and reports what
was found. ``blocks scan`` prints each registered block and the queued
notices, ``blocks list`` prints the dashboard listing (optionally as JSON),
and ``blocks render`` renders one block with field values read from a YAML
file.

Examples
--------
Scan the default configuration:

>>> from theme_blocks.cli import main
>>> main()  # doctest: +SKIP

Render a block in preview mode:

>>> from theme_blocks.cli import app
>>> app.run(
...     ["render", "hero", "--data", "fields/hero.yml", "--preview"]
... )  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import sys
import typing as typ
from pathlib import Path

import cyclopts
import msgspec.json as msgspec_json
from bs4 import BeautifulSoup
from cyclopts import App, Parameter

from ._constants import (
    ADMIN_MENU_ACTION,
    DASHBOARD_SLUG,
    INIT_ACTION,
    INSERTER_PREVIEW_QUERY,
)
from .config import load_settings
from .host import InMemoryBlockTypeRegistry, RequestContext, StaticFieldSource
from .loader import load_block_config
from .plugin import BlocksPlugin

DEFAULT_CONFIG = Path("config/blocks.yaml")

app = App(name="blocks", config=cyclopts.config.Env("BLOCKS_", command=False))  # type: ignore[unknown-argument]


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _build_plugin(
    config: Path,
    *,
    fields: StaticFieldSource | None = None,
    request: RequestContext | None = None,
) -> tuple[BlocksPlugin, InMemoryBlockTypeRegistry]:
    """Load settings, boot a plugin against an in-memory host, and register."""
    settings = load_settings(config)
    host = InMemoryBlockTypeRegistry(namespace=settings.blocks.namespace)
    if request is None:
        request = RequestContext(
            is_admin=True, capabilities=frozenset({settings.capability})
        )
    plugin = BlocksPlugin(
        settings, host=host, fields=fields or StaticFieldSource(), request=request
    )
    if plugin.boot():
        plugin.hooks.do_action(INIT_ACTION)
        plugin.hooks.do_action(ADMIN_MENU_ACTION)
    return plugin, host


def _print_notices(plugin: BlocksPlugin) -> None:
    for notice in plugin.reporter.notices:
        text = BeautifulSoup(notice.message, "html.parser").get_text()
        prefix = f"{notice.title}: " if notice.title else ""
        print(f"[{notice.severity}] {prefix}{text}", file=sys.stderr)


@app.command(help="Discover and register blocks, then print what was found.")
def scan(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site settings", env_var="BLOCKS_CONFIG")
    ] = DEFAULT_CONFIG,
    verbose: typ.Annotated[bool, Parameter(help="Enable debug logging")] = False,
) -> None:
    """Run the registration pipeline and list every registered block.

    Parameters
    ----------
    config : Path, optional
        Path to the ``blocks.yaml`` settings file (overridable via
        ``BLOCKS_CONFIG``).
    verbose : bool, optional
        Log scan decisions at debug level.

    Returns
    -------
    None
        Registered blocks go to stdout and queued notices to stderr.
    """
    _configure_logging(verbose)
    plugin, host = _build_plugin(config)
    for block in sorted(host.get_all_registered()):
        print(f"{block.name}\t{block.settings['title']}")
    _print_notices(plugin)


@app.command(name="list", help="Print the registered block names.")
def list_blocks(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site settings", env_var="BLOCKS_CONFIG")
    ] = DEFAULT_CONFIG,
    json: typ.Annotated[bool, Parameter(help="Emit a JSON array")] = False,
    html: typ.Annotated[bool, Parameter(help="Emit the dashboard page")] = False,
) -> None:
    """Print the names shown on the dashboard page, sorted."""
    _configure_logging(False)
    plugin, _host = _build_plugin(config)
    if html:
        print(plugin.dashboard(), end="")
        return
    page = plugin.admin_pages.get(DASHBOARD_SLUG)
    names = page.block_names() if page else []
    if json:
        print(msgspec_json.encode(names).decode("utf-8"))
        return
    for name in names:
        print(name)


@app.command(help="Render one block with field values from a YAML file.")
def render(
    name: typ.Annotated[str, Parameter(help="Block name, with or without prefix")],
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site settings", env_var="BLOCKS_CONFIG")
    ] = DEFAULT_CONFIG,
    data: typ.Annotated[
        Path | None, Parameter(help="YAML file holding the field values")
    ] = None,
    post_id: typ.Annotated[
        int | None, Parameter(help="Content item the field values belong to")
    ] = None,
    preview: typ.Annotated[bool, Parameter(help="Render in preview mode")] = False,
    inserter_preview: typ.Annotated[
        bool, Parameter(help="Simulate an inserter preview request")
    ] = False,
    verbose: typ.Annotated[bool, Parameter(help="Enable debug logging")] = False,
) -> None:
    """Render ``name`` and print the markup to stdout.

    Raises
    ------
    KeyError
        If no block called ``name`` was registered.
    """
    _configure_logging(verbose)
    fields = StaticFieldSource({post_id: load_block_config(data)} if data else None)
    query = {INSERTER_PREVIEW_QUERY: "1"} if inserter_preview else {}
    plugin, host = _build_plugin(
        config, fields=fields, request=RequestContext(post_id=post_id, query=query)
    )
    prefix = plugin.settings.blocks.prefix
    registered = name if name.startswith(prefix) else f"{prefix}{name}"
    print(host.render(registered, is_preview=preview), end="")
    _print_notices(plugin)


def main() -> None:
    """Invoke the Cyclopts application behind the ``blocks`` console command."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
