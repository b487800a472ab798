"""Unit tests for queued admin notices."""

from __future__ import annotations

import logging
import typing as typ

from bs4 import BeautifulSoup

from theme_blocks.diagnostics import DiagnosticsReporter, Severity, sanitize_markup
from theme_blocks.hooks import HookRegistry

if typ.TYPE_CHECKING:
    import pytest


def test_notices_render_only_when_action_fires() -> None:
    """Reporting queues a handler; nothing is produced until admin_notices."""
    hooks = HookRegistry()
    reporter = DiagnosticsReporter(hooks)
    assert not hooks.has_action("admin_notices")

    reporter.error("Broken <strong>hero.yml</strong>", "Block configuration")

    assert hooks.has_action("admin_notices")
    soup = BeautifulSoup(reporter.render_notices(), "html.parser")
    notice = soup.select_one("div.notice.notice-error")
    assert notice is not None, "expected an error notice container"
    assert notice.find("strong").get_text() == "Block configuration"
    assert "hero.yml" in notice.get_text()


def test_message_is_sanitized_and_title_escaped() -> None:
    """Scripts and unsafe attributes are stripped; the title is plain text."""
    reporter = DiagnosticsReporter(HookRegistry())
    notice = reporter.warning(
        '<script>alert(1)</script><strong onclick="x()">hero</strong>'
        '<a href="javascript:evil()">link</a><div>kept text</div>',
        "<b>Title</b>",
    )

    assert "<script" not in notice.message
    assert "onclick" not in notice.message
    assert "javascript:" not in notice.message
    assert "<div" not in notice.message
    assert "<strong>hero</strong>" in notice.message
    assert "kept text" in notice.message
    assert "&lt;b&gt;Title&lt;/b&gt;" in notice.to_html()


def test_sanitize_keeps_allowed_links() -> None:
    """Plain http links keep their href."""
    html = sanitize_markup('<a href="https://example.invalid" rel="x">docs</a>')
    assert html == '<a href="https://example.invalid">docs</a>'


def test_non_admin_requests_only_log(caplog: pytest.LogCaptureFixture) -> None:
    """Outside the admin surface notices are recorded and logged, not rendered."""
    hooks = HookRegistry()
    reporter = DiagnosticsReporter(hooks, admin=False)
    with caplog.at_level(logging.WARNING, logger="theme_blocks.diagnostics"):
        reporter.warning("Template <code>hero.twig</code> is missing.")

    assert reporter.render_notices() == ""
    assert [notice.severity for notice in reporter.notices] == [Severity.WARNING]
    assert "Template hero.twig is missing." in caplog.text


def test_success_and_info_levels() -> None:
    """Each helper maps to its notice class."""
    reporter = DiagnosticsReporter(HookRegistry())
    reporter.success("Done")
    reporter.info("FYI")
    html = reporter.render_notices()
    assert 'class="notice notice-success"' in html
    assert 'class="notice notice-info"' in html


def test_reset_detaches_queued_notices() -> None:
    """After a reset nothing earlier is rendered; new notices still are."""
    hooks = HookRegistry()
    reporter = DiagnosticsReporter(hooks)
    reporter.error("First")
    reporter.error("First")

    reporter.reset()

    assert reporter.notices == []
    assert not hooks.has_action("admin_notices")
    reporter.info("Second")
    html = reporter.render_notices()
    assert "First" not in html
    assert html.count("notice-info") == 1
