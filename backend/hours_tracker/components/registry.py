from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from hours_tracker.components.cards import BereavementCard, JuryDutyCard, PtoCard, SickCard
from hours_tracker.exceptions import AppError

if TYPE_CHECKING:
    from collections.abc import Callable

    from hours_tracker.components.base import Component

logger = logging.getLogger(__name__)


class ComponentRegistry:
    """Maps component tags to factories. Built once at startup and passed around."""

    def __init__(self) -> None:
        self._factories: dict[str, Callable[[], Component]] = {}

    def register(self, tag: str, factory: Callable[[], Component]) -> None:
        if tag in self._factories:
            raise ValueError(f"Component tag already registered: {tag}")
        self._factories[tag] = factory
        logger.debug("Registered component %s", tag)

    def create(self, tag: str) -> Component:
        """Return a new, unmounted instance for ``tag``. Raises 404 for unknown tags."""
        factory = self._factories.get(tag)
        if factory is None:
            raise AppError(f"Unknown component: {tag}", status_code=404)
        return factory()

    def __contains__(self, tag: object) -> bool:
        return tag in self._factories

    @property
    def tags(self) -> list[str]:
        return sorted(self._factories)


def build_component_registry() -> ComponentRegistry:
    """Registry with every leave-bucket card."""
    registry = ComponentRegistry()
    for card in (PtoCard, SickCard, BereavementCard, JuryDutyCard):
        registry.register(card.tag, card)
    return registry
