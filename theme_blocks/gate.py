"""Let external code veto the registration of individual blocks."""

from __future__ import annotations

import typing as typ

from ._constants import REGISTER_BLOCK_HOOK

if typ.TYPE_CHECKING:
    from .hooks import HookRegistry


def normalize_identifier(name: str) -> str:
    """Return ``name`` with hyphens replaced by underscores.

    >>> normalize_identifier("hero-banner")
    'hero_banner'
    """
    return name.replace("-", "_")


def should_register(identifier: str, hooks: HookRegistry) -> bool:
    """Return whether the block ``identifier`` should be registered.

    Registration is allowed by default. When ``identifier`` contains a hyphen
    the ``theme_blocks/register_block/<identifier>`` filter runs first; the
    ``theme_blocks/register_block/<normalized>`` filter always runs last and
    receives the previous result.
    """
    allowed = True
    normalized = normalize_identifier(identifier)
    if identifier != normalized:
        allowed = hooks.apply_filters(
            REGISTER_BLOCK_HOOK.format(name=identifier), allowed
        )
    allowed = hooks.apply_filters(REGISTER_BLOCK_HOOK.format(name=normalized), allowed)
    return bool(allowed)


__all__ = ["normalize_identifier", "should_register"]
