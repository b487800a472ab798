"""Named filter and action registry used at the plugin's extension points.

External code customises discovery and rendering by attaching handlers to the
hook names listed in :mod:`theme_blocks._constants`. Filters receive a value
plus extra arguments and return the (possibly replaced) value; actions are
fired for their side effects. Handlers run in ascending priority order, and
handlers sharing a priority run in the order they were added.

Example
-------
>>> from theme_blocks.hooks import HookRegistry
>>> hooks = HookRegistry()
>>> hooks.add_filter("theme_blocks/directories", lambda dirs: [*dirs, "blocks"])
>>> hooks.apply_filters("theme_blocks/directories", ["views/blocks"])
['views/blocks', 'blocks']
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import itertools
import logging
import typing as typ

logger = logging.getLogger(__name__)

DEFAULT_PRIORITY = 10

Filter = cabc.Callable[..., typ.Any]
Action = cabc.Callable[..., None]


@dc.dataclass(slots=True, order=True)
class _Handler:
    priority: int
    sequence: int
    callback: cabc.Callable[..., typ.Any] = dc.field(compare=False)


class HookRegistry:
    """Map hook names to ordered handler lists."""

    def __init__(self) -> None:
        self._filters: dict[str, list[_Handler]] = {}
        self._actions: dict[str, list[_Handler]] = {}
        self._counter = itertools.count()

    def add_filter(
        self, name: str, callback: Filter, priority: int = DEFAULT_PRIORITY
    ) -> None:
        """Attach ``callback`` to the filter ``name``."""
        self._add(self._filters, name, callback, priority)

    def remove_filter(self, name: str, callback: Filter) -> bool:
        """Detach ``callback`` from ``name``; return whether it was attached."""
        return self._remove(self._filters, name, callback)

    def has_filter(self, name: str) -> bool:
        """Return True when at least one handler is attached to ``name``."""
        return bool(self._filters.get(name))

    def apply_filters(self, name: str, value: typ.Any, *args: typ.Any) -> typ.Any:
        """Pass ``value`` through every handler attached to ``name``.

        Parameters
        ----------
        name : str
            Filter name, for example ``theme_blocks/render_block``.
        value : Any
            Initial value handed to the first handler.
        *args : Any
            Extra positional arguments passed unchanged to every handler.

        Returns
        -------
        Any
            The value returned by the last handler, or ``value`` when nothing
            is attached.
        """
        for handler in list(self._filters.get(name, ())):
            value = handler.callback(value, *args)
        return value

    def add_action(
        self, name: str, callback: Action, priority: int = DEFAULT_PRIORITY
    ) -> None:
        """Attach ``callback`` to the action ``name``."""
        self._add(self._actions, name, callback, priority)

    def remove_action(self, name: str, callback: Action) -> bool:
        """Detach ``callback`` from ``name``; return whether it was attached."""
        return self._remove(self._actions, name, callback)

    def has_action(self, name: str) -> bool:
        """Return True when at least one handler is attached to ``name``."""
        return bool(self._actions.get(name))

    def do_action(self, name: str, *args: typ.Any) -> None:
        """Invoke every handler attached to the action ``name``."""
        handlers = list(self._actions.get(name, ()))
        logger.debug("firing action %s (%d handlers)", name, len(handlers))
        for handler in handlers:
            handler.callback(*args)

    def _add(
        self,
        table: dict[str, list[_Handler]],
        name: str,
        callback: cabc.Callable[..., typ.Any],
        priority: int,
    ) -> None:
        handlers = table.setdefault(name, [])
        handlers.append(_Handler(priority, next(self._counter), callback))
        handlers.sort()

    @staticmethod
    def _remove(
        table: dict[str, list[_Handler]],
        name: str,
        callback: cabc.Callable[..., typ.Any],
    ) -> bool:
        handlers = table.get(name, [])
        for index, handler in enumerate(handlers):
            if handler.callback == callback:
                del handlers[index]
                return True
        return False


__all__ = ["DEFAULT_PRIORITY", "HookRegistry"]
