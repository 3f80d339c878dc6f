"""Server-side UI components.

A component owns a dict of properties and renders them to an HTML fragment.
Its lifecycle is explicit: ``mount`` with initial properties, ``update`` with
changes (each change is announced to subscribers as a ``PropertyChange``), and
``unmount`` to release subscribers. Rendering happens on mount and on every
update that changes something.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, ClassVar

from hours_tracker.exceptions import AppError

logger = logging.getLogger(__name__)


class ComponentStateError(AppError):
    """A lifecycle method was called out of order."""

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=500)


@dataclass(frozen=True)
class PropertyChange:
    """A single property transition observed by a component."""

    name: str
    old_value: Any
    new_value: Any


Listener = Callable[[PropertyChange], None]


class Component:
    """Base class for renderable components."""

    tag: ClassVar[str] = ""
    observed_properties: ClassVar[frozenset[str]] = frozenset()
    defaults: ClassVar[Mapping[str, Any]] = {}

    def __init__(self) -> None:
        self._props: dict[str, Any] = dict(self.defaults)
        self._listeners: list[Listener] = []
        self._mounted = False
        self.html = ""

    @property
    def mounted(self) -> bool:
        return self._mounted

    @property
    def props(self) -> Mapping[str, Any]:
        return dict(self._props)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` for property changes; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # -- lifecycle -----------------------------------------------------------

    def mount(self, props: Mapping[str, Any] | None = None) -> str:
        if self._mounted:
            raise ComponentStateError(f"{self.tag or type(self).__name__} is already mounted")
        self._check_properties(props or {})
        self._props.update(props or {})
        self._mounted = True
        self.html = self.render()
        return self.html

    def update(self, **changes: Any) -> list[PropertyChange]:
        """Apply property changes, notify subscribers and re-render.

        Values equal to the current ones are ignored. Returns the changes applied.
        """
        if not self._mounted:
            raise ComponentStateError(f"{self.tag or type(self).__name__} is not mounted")
        self._check_properties(changes)

        applied: list[PropertyChange] = []
        for name, value in changes.items():
            old = self._props.get(name)
            if old == value:
                continue
            self._props[name] = value
            applied.append(PropertyChange(name=name, old_value=old, new_value=value))

        for change in applied:
            for listener in list(self._listeners):
                listener(change)
        if applied:
            self.html = self.render()
        return applied

    def unmount(self) -> None:
        if not self._mounted:
            raise ComponentStateError(f"{self.tag or type(self).__name__} is not mounted")
        self._listeners.clear()
        self._mounted = False

    # -- rendering -----------------------------------------------------------

    def render(self) -> str:
        raise NotImplementedError

    def _check_properties(self, props: Mapping[str, Any]) -> None:
        unknown = set(props) - self.observed_properties
        if unknown:
            raise ComponentStateError(f"Unknown properties for {self.tag}: {', '.join(sorted(unknown))}")
