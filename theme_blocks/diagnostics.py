"""Queue operator-facing notices for display in the administrative surface.

Diagnostics never interrupt a scan. Each call to
:meth:`DiagnosticsReporter.report` logs the message and, for admin requests,
attaches a callback to the ``admin_notices`` action; the notice markup is only
produced once that action fires (see :meth:`DiagnosticsReporter.render_notices`).
Messages may carry a small set of inline tags and are sanitized with
BeautifulSoup; titles are escaped as plain text.

Example
-------
>>> from theme_blocks.diagnostics import DiagnosticsReporter
>>> from theme_blocks.hooks import HookRegistry
>>> reporter = DiagnosticsReporter(HookRegistry())
>>> _ = reporter.warning("Template <strong>hero.twig</strong> is missing.")
>>> "notice-warning" in reporter.render_notices()
True
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import enum
import io
import logging
import typing as typ
from html import escape

from bs4 import BeautifulSoup

from ._constants import ADMIN_NOTICES_ACTION

if typ.TYPE_CHECKING:
    from .hooks import HookRegistry

logger = logging.getLogger(__name__)

ALLOWED_TAGS = frozenset(
    {"a", "b", "br", "code", "em", "i", "li", "ol", "p", "strong", "ul"}
)
ALLOWED_ATTRIBUTES: dict[str, frozenset[str]] = {"a": frozenset({"href", "title"})}
DROPPED_TAGS = frozenset({"script", "style", "iframe", "object", "embed"})
_UNSAFE_SCHEMES = ("javascript:", "data:", "vbscript:")


class Severity(enum.StrEnum):
    """Notice levels understood by the admin notice styles."""

    ERROR = "error"
    WARNING = "warning"
    SUCCESS = "success"
    INFO = "info"


_LOG_LEVELS = {
    Severity.ERROR: logging.ERROR,
    Severity.WARNING: logging.WARNING,
    Severity.SUCCESS: logging.INFO,
    Severity.INFO: logging.INFO,
}


@dc.dataclass(slots=True, frozen=True)
class Notice:
    """A sanitized notice waiting for the ``admin_notices`` action."""

    message: str
    title: str | None
    severity: Severity

    def to_html(self) -> str:
        """Return the notice markup with the title escaped."""
        parts = [f'<div class="notice notice-{escape(self.severity.value)}">']
        if self.title:
            parts.append(f"<p><strong>{escape(self.title)}</strong></p>")
        parts.append(f"<p>{self.message}</p></div>")
        return "".join(parts)

    def write(self, out: typ.TextIO) -> None:
        """Write the notice markup to ``out``."""
        out.write(self.to_html())


def sanitize_markup(message: str) -> str:
    """Strip ``message`` down to the allowed inline tags and attributes."""
    soup = BeautifulSoup(message, "html.parser")
    for tag in soup.find_all(True):
        if tag.decomposed:
            continue
        if tag.name in DROPPED_TAGS:
            tag.decompose()
        elif tag.name not in ALLOWED_TAGS:
            tag.unwrap()
        else:
            allowed = ALLOWED_ATTRIBUTES.get(tag.name, frozenset())
            tag.attrs = {
                key: value
                for key, value in tag.attrs.items()
                if key in allowed and not _is_unsafe_url(key, value)
            }
    return str(soup)


def _is_unsafe_url(key: str, value: object) -> bool:
    if key != "href" or not isinstance(value, str):
        return False
    return value.strip().lower().startswith(_UNSAFE_SCHEMES)


class DiagnosticsReporter:
    """Format and queue admin notices bound to the ``admin_notices`` action."""

    def __init__(self, hooks: HookRegistry, *, admin: bool = True) -> None:
        """Create a reporter.

        Parameters
        ----------
        hooks : HookRegistry
            Registry whose ``admin_notices`` action renders queued notices.
        admin : bool, optional
            Whether the current request targets the administrative surface.
            Notices are only queued for admin requests; they are always logged.
        """
        self.hooks = hooks
        self.admin = admin
        self.notices: list[Notice] = []
        self._handlers: list[cabc.Callable[[typ.TextIO], object]] = []

    def report(
        self,
        message: str,
        title: str | None = None,
        severity: Severity | str = Severity.INFO,
    ) -> Notice:
        """Log ``message`` and queue it for display on the next notice render."""
        level = Severity(severity)
        notice = Notice(message=sanitize_markup(message), title=title, severity=level)
        plain = BeautifulSoup(notice.message, "html.parser").get_text()
        if title:
            logger.log(_LOG_LEVELS[level], "%s: %s", title, plain)
        else:
            logger.log(_LOG_LEVELS[level], "%s", plain)
        self.notices.append(notice)
        if self.admin:
            self._handlers.append(notice.write)
            self.hooks.add_action(ADMIN_NOTICES_ACTION, notice.write)
        return notice

    def error(self, message: str, title: str | None = None) -> Notice:
        """Queue an error notice."""
        return self.report(message, title, Severity.ERROR)

    def warning(self, message: str, title: str | None = None) -> Notice:
        """Queue a warning notice."""
        return self.report(message, title, Severity.WARNING)

    def success(self, message: str, title: str | None = None) -> Notice:
        """Queue a success notice."""
        return self.report(message, title, Severity.SUCCESS)

    def info(self, message: str, title: str | None = None) -> Notice:
        """Queue an informational notice."""
        return self.report(message, title, Severity.INFO)

    def reset(self) -> None:
        """Forget queued notices and detach their ``admin_notices`` handlers."""
        for handler in self._handlers:
            self.hooks.remove_action(ADMIN_NOTICES_ACTION, handler)
        self._handlers.clear()
        self.notices.clear()

    def render_notices(self) -> str:
        """Fire ``admin_notices`` and return the markup written by its handlers."""
        buffer = io.StringIO()
        self.hooks.do_action(ADMIN_NOTICES_ACTION, buffer)
        return buffer.getvalue()


__all__ = [
    "ALLOWED_TAGS",
    "DiagnosticsReporter",
    "Notice",
    "Severity",
    "sanitize_markup",
]
