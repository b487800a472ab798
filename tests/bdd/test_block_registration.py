"""Behaviour tests for discovering, registering, and rendering theme blocks.

The scenarios build a throwaway parent and child theme under ``tmp_path``,
boot :class:`theme_blocks.plugin.BlocksPlugin` against the in-memory host
registry, and fire the lifecycle actions the way a host would.

Usage
-----
Run ``pytest tests/bdd/test_block_registration.py -v``.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest
from pytest_bdd import given, parsers, scenarios, then, when

from theme_blocks.config import Settings, SiteSettings, ThemeRoots
from theme_blocks.host import (
    InMemoryBlockTypeRegistry,
    RequestContext,
    StaticFieldSource,
)
from theme_blocks.plugin import BlocksPlugin

FEATURE_FILE = (
    Path(__file__).resolve().parents[2] / "features" / "block_registration.feature"
)
scenarios(FEATURE_FILE)

TEMPLATE = (
    '{% if stylesheet %}<link data-handle="{{ stylesheet }}">{% endif %}{{ name }}'
)

ScenarioState = dict[str, typ.Any]


@pytest.fixture
def scenario_state(tmp_path: Path) -> ScenarioState:
    """Share the theme directory and collaborators between steps."""
    site_root = tmp_path / "site"
    theme = site_root / "themes" / "base"
    blocks = theme / "views" / "blocks"
    blocks.mkdir(parents=True)
    settings = Settings(
        site=SiteSettings(root=site_root, url="https://example.invalid"),
        theme=ThemeRoots(stylesheet_dir=theme, template_dir=theme),
    )
    return {"settings": settings, "blocks": blocks, "renders": []}


def _write(state: ScenarioState, name: str, config: str) -> None:
    blocks: Path = state["blocks"]
    (blocks / f"{name}.yml").write_text(config, encoding="utf-8")
    (blocks / f"{name}.twig").write_text(TEMPLATE, encoding="utf-8")


@given(parsers.parse('a theme with the block "{name}" titled "{title}"'))
def given_block(scenario_state: ScenarioState, name: str, title: str) -> None:
    _write(scenario_state, name, f"title: {title}\ncategory: theme\n")


@given(
    parsers.parse('a theme with the styled block "{name}" using stylesheet "{handle}"')
)
def given_styled_block(
    scenario_state: ScenarioState, name: str, handle: str
) -> None:
    _write(scenario_state, name, f"title: {name.title()}\nattach_style: {handle}\n")


@given(parsers.parse('a theme with an untitled block "{name}"'))
def given_untitled_block(scenario_state: ScenarioState, name: str) -> None:
    _write(scenario_state, name, "category: theme\n")


@when("the plugin boots and the init action fires")
def boot_plugin(scenario_state: ScenarioState) -> None:
    host = InMemoryBlockTypeRegistry()
    plugin = BlocksPlugin(
        scenario_state["settings"],
        host=host,
        fields=StaticFieldSource(),
        request=RequestContext(is_admin=True),
    )
    assert plugin.boot(), "plugin should boot"
    plugin.hooks.do_action("init")
    scenario_state["host"] = host
    scenario_state["plugin"] = plugin


@when(parsers.parse('"{name}" is rendered twice'))
def render_twice(scenario_state: ScenarioState, name: str) -> None:
    host: InMemoryBlockTypeRegistry = scenario_state["host"]
    scenario_state["name"] = name
    scenario_state["renders"] = [host.render(name), host.render(name)]


@then(parsers.parse('the host registry contains "{name}"'))
def registry_contains(scenario_state: ScenarioState, name: str) -> None:
    host: InMemoryBlockTypeRegistry = scenario_state["host"]
    names = [block.name for block in host.get_all_registered()]
    assert names == [name], f"expected only {name}, got {names}"


@then("the host registry is empty")
def registry_empty(scenario_state: ScenarioState) -> None:
    host: InMemoryBlockTypeRegistry = scenario_state["host"]
    assert host.get_all_registered() == [], "no block should be registered"


@then(
    parsers.parse(
        'rendering "{name}" without field data gives name "{short}" and empty data'
    )
)
def render_context(scenario_state: ScenarioState, name: str, short: str) -> None:
    host: InMemoryBlockTypeRegistry = scenario_state["host"]
    plugin: BlocksPlugin = scenario_state["plugin"]
    registered = host.get_registered(name)
    assert registered is not None, f"{name} should be registered"
    context = plugin.renderer.build_context({**registered.settings, "data": {}})
    assert context["name"] == short
    assert context["data"] == {}
    assert context["is_preview"] is False
    assert host.render(name) == short


@then("only the first render includes the stylesheet")
def stylesheet_once(scenario_state: ScenarioState) -> None:
    first, second = scenario_state["renders"]
    assert 'data-handle="block-quote"' in first, "first render attaches the style"
    assert "data-handle" not in second, "second render must not attach it again"


@then("a new request renders the stylesheet again")
def stylesheet_after_new_request(scenario_state: ScenarioState) -> None:
    plugin: BlocksPlugin = scenario_state["plugin"]
    host: InMemoryBlockTypeRegistry = scenario_state["host"]
    plugin.begin_request(RequestContext())
    html = host.render(scenario_state["name"])
    assert 'data-handle="block-quote"' in html, "fresh request attaches the style"


@then(parsers.parse('an error notice mentions "{text}"'))
def error_notice(scenario_state: ScenarioState, text: str) -> None:
    plugin: BlocksPlugin = scenario_state["plugin"]
    html = plugin.reporter.render_notices()
    assert "notice-error" in html, "an error notice should be queued"
    assert text in html
