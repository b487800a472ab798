"""Discover YAML-configured theme blocks, register them, and render them.

This package scans theme directories for ``<name>.yml`` block
configurations, registers the resulting descriptors with a host block-type
registry, and renders each block through Jinja2 with field values from a
field source. It also exposes the ``blocks`` CLI used to inspect a theme.

Exports
-------
- ``BlocksPlugin``: Application context wiring the pipeline together.
- ``app``: Cyclopts application behind the ``blocks`` command.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from theme_blocks import main
>>> main()  # doctest: +SKIP
>>> from theme_blocks import app
>>> app.name[0]
'blocks'
"""

from __future__ import annotations

from .cli import app, main
from .plugin import BlocksPlugin

__all__ = ["BlocksPlugin", "app", "main"]
