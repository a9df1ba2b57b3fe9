"""Actors: positioned objects that own an ordered set of components."""

from __future__ import annotations

import bisect
from dataclasses import dataclass
from enum import Enum, auto
from operator import attrgetter
from typing import Any

_by_update_order = attrgetter("update_order")


class ActorState(Enum):
    """Lifecycle state of an actor."""

    PREPARATION = auto()
    ACTIVE = auto()
    PAUSED = auto()
    END = auto()
    DEAD = auto()


@dataclass(frozen=True)
class Vector:
    """A three-component vector."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


class Actor:
    """An object living in a mode, driven by its components."""

    def __init__(self, mode: Any) -> None:
        self.state = ActorState.ACTIVE
        self.position = Vector()
        self.direction = Vector(0.0, 0.0, -1.0)
        self.move = Vector()
        self.mode = mode
        self.frame_count = 0
        self._components: list[Any] = []
        mode.add_actor(self)

    @property
    def components(self) -> tuple[Any, ...]:
        """The components in update order."""
        return tuple(self._components)

    def process_input(self) -> None:
        """Let each component handle input while the actor is active."""
        if self.state is ActorState.ACTIVE:
            for component in tuple(self._components):
                component.process_input()

    def update(self) -> None:
        """Update components and the actor itself when active or preparing."""
        if self.state in (ActorState.ACTIVE, ActorState.PREPARATION):
            self.update_components()
            self.update_actor()

    def update_components(self) -> None:
        """Update every component in update order."""
        for component in tuple(self._components):
            component.update()

    def update_actor(self) -> None:
        """Actor-specific per-frame work; by default counts updated frames."""
        self.frame_count += 1

    def add_component(self, component: Any) -> None:
        """Insert a component after all components of equal or lower order."""
        bisect.insort(self._components, component, key=_by_update_order)

    def remove_component(self, component: Any) -> None:
        """Remove a component if it belongs to this actor."""
        if component in self._components:
            self._components.remove(component)

    def send(self, message: int) -> None:
        """Deliver a message to every component."""
        for component in tuple(self._components):
            component.receive(message)

    def destroy(self) -> None:
        """Leave the mode and destroy every component."""
        self.mode.remove_actor(self)
        for component in tuple(self._components):
            component.destroy()