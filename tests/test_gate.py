"""Unit tests for the registration veto filters."""

from __future__ import annotations

from theme_blocks.gate import normalize_identifier, should_register
from theme_blocks.hooks import HookRegistry


def test_normalize_identifier_replaces_hyphens() -> None:
    """Hyphens become underscores so the name is usable in hook names."""
    assert normalize_identifier("foo-bar") == "foo_bar"
    assert normalize_identifier("foo_bar") == "foo_bar"


def test_blocks_register_by_default() -> None:
    """Without handlers every block is allowed."""
    assert should_register("foo-bar", HookRegistry()) is True


def test_normalized_veto_blocks_registration() -> None:
    """Returning False from the normalized filter suppresses the block."""
    hooks = HookRegistry()
    hooks.add_filter("theme_blocks/register_block/foo_bar", lambda allowed: False)
    assert should_register("foo-bar", hooks) is False


def test_raw_veto_seeds_the_normalized_filter() -> None:
    """The raw-name filter runs first and its result feeds the normalized one."""
    hooks = HookRegistry()
    seen: list[bool] = []
    hooks.add_filter("theme_blocks/register_block/foo-bar", lambda allowed: False)

    def record(allowed: bool) -> bool:
        seen.append(allowed)
        return allowed

    hooks.add_filter("theme_blocks/register_block/foo_bar", record)

    assert should_register("foo-bar", hooks) is False
    assert seen == [False]


def test_later_filter_can_restore_registration() -> None:
    """The normalized filter has the final say, even after a raw veto."""
    hooks = HookRegistry()
    hooks.add_filter("theme_blocks/register_block/foo-bar", lambda allowed: False)
    hooks.add_filter("theme_blocks/register_block/foo_bar", lambda allowed: True)
    assert should_register("foo-bar", hooks) is True


def test_plain_identifier_runs_a_single_filter() -> None:
    """Names without hyphens are only filtered once."""
    hooks = HookRegistry()
    calls: list[bool] = []
    hooks.add_filter(
        "theme_blocks/register_block/hero",
        lambda allowed: calls.append(allowed) or allowed,
    )
    assert should_register("hero", hooks) is True
    assert calls == [True]
