"""Behaviour units attached to actors, including drawable sprites."""

from __future__ import annotations

from typing import Any, Optional

DEFAULT_ORDER = 100


class Component:
    """A unit of behaviour owned by an actor.

    Components register themselves with their owner on creation and are kept
    in ascending ``update_order``.
    """

    def __init__(self, owner: Any, update_order: int = DEFAULT_ORDER) -> None:
        self.owner = owner
        self.update_order = update_order
        self.update_count = 0
        self.input_count = 0
        self.last_message: Optional[int] = None
        owner.add_component(self)

    def update(self) -> None:
        """Called once per frame while the owner is updating; counts frames."""
        self.update_count += 1

    def process_input(self) -> None:
        """Called once per frame while the owner handles input; counts calls."""
        self.input_count += 1

    def receive(self, message: int) -> None:
        """Handle a message sent to the owning actor; remembers the latest one."""
        self.last_message = message

    def destroy(self) -> None:
        """Detach this component from its owner."""
        self.owner.remove_component(self)


class SpriteComponent(Component):
    """A component that is drawn by its owner's mode in ``draw_order``."""

    def __init__(self, owner: Any, draw_order: int = DEFAULT_ORDER) -> None:
        super().__init__(owner)
        self.draw_order = draw_order
        self.draw_count = 0
        self.dirty = True
        owner.mode.add_sprite(self)

    def draw(self) -> None:
        """Draw the sprite: count the draw and mark the image as up to date."""
        self.draw_count += 1
        self.dirty = False

    def set_image(self) -> None:
        """Mark the image as changed so that the next draw picks it up."""
        self.dirty = True

    def destroy(self) -> None:
        """Unregister from the mode's sprite list, then from the owner."""
        self.owner.mode.remove_sprite(self)
        super().destroy()