"""Explicit, ordered registry of build customizers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from .base import ALWAYS, Activation, CustomizationContext

logger = logging.getLogger(__name__)

CustomizerFactory = Callable[[CustomizationContext], object]


@dataclass(frozen=True)
class Registration:
    """A registered customizer factory with its activation and priority."""

    name: str
    factory: CustomizerFactory
    activation: Activation
    priority: int
    index: int


class CustomizerRegistry:
    """Customizer factories in registration order.

    A factory is called with the request's CustomizationContext and must
    return an object exposing ``customize(build)``. BuildCustomizer
    subclasses are factories; their class attributes provide the default
    activation and priority.
    """

    def __init__(self):
        self._registrations: List[Registration] = []

    def register(
        self,
        factory: CustomizerFactory,
        activation: Optional[Activation] = None,
        priority: Optional[int] = None,
        name: Optional[str] = None,
    ) -> CustomizerFactory:
        """Add a factory; returns it so the method also works as a class decorator."""
        if activation is None:
            activation = getattr(factory, "activation", ALWAYS)
        if priority is None:
            priority = getattr(factory, "priority", 0)
        if name is None:
            name = getattr(factory, "__name__", repr(factory))
        self._registrations.append(Registration(
            name=name, factory=factory, activation=activation,
            priority=int(priority), index=len(self._registrations),
        ))
        logger.debug("Registered customizer %s (priority %d)", name, priority)
        return factory

    def registrations(self) -> List[Registration]:
        return list(self._registrations)

    def names(self) -> List[str]:
        return [r.name for r in self._registrations]

    def __len__(self) -> int:
        return len(self._registrations)


def default_registry() -> CustomizerRegistry:
    """Return a new registry pre-loaded with the built-in customizers."""
    from .builtin import register_builtin_customizers  # pylint: disable=import-outside-toplevel
    registry = CustomizerRegistry()
    register_builtin_customizers(registry)
    return registry
