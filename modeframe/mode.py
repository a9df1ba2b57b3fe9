"""Modes: scenes that own actors and sprites and keep their own clock."""

from __future__ import annotations

import bisect
from operator import attrgetter
from typing import Any

from modeframe.actor import ActorState

_ULONG_MASK = 0xFFFFFFFF
_by_draw_order = attrgetter("draw_order")


def _swap_remove(items: list[Any], item: Any) -> None:
    """Remove ``item`` by swapping it with the last element, if present."""
    try:
        index = items.index(item)
    except ValueError:
        return
    items[index] = items[-1]
    items.pop()


class ModeBase:
    """A mode run by a mode server: it updates actors and draws sprites.

    Times are in milliseconds and wrap like 32-bit unsigned counters.
    """

    def __init__(self) -> None:
        self.name = ""
        self.uid = 1
        self.layer = 0
        self.is_update = False

        self._updating_actors = False
        self._actors: list[Any] = []
        self._pending_actors: list[Any] = []
        self._sprites: list[Any] = []

        self._count = 0
        self._mode_time = 0
        self._frame_time = 0
        self._mode_base = 0
        self._pause_base = 0
        self._pause_step = 0
        self._old_frame = 0

        self._call_per_frame = 1
        self._call_per_frame_count = 1
        self.call_per_frame = 1
        self.call_of_count = 1

    @property
    def call_per_frame(self) -> int:
        """How many frames pass between calls to ``process``."""
        return self._call_per_frame

    @call_per_frame.setter
    def call_per_frame(self, frames: int) -> None:
        self._call_per_frame = self._call_per_frame_count = frames

    @property
    def mode_count(self) -> int:
        """Frames counted since the mode started, from zero."""
        return self._count

    @property
    def mode_time(self) -> int:
        """Milliseconds since the mode started."""
        return self._mode_time

    @property
    def frame_time(self) -> int:
        """Milliseconds since the previous frame."""
        return self._frame_time

    @property
    def actors(self) -> tuple[Any, ...]:
        return tuple(self._actors)

    @property
    def pending_actors(self) -> tuple[Any, ...]:
        return tuple(self._pending_actors)

    @property
    def sprites(self) -> tuple[Any, ...]:
        """Sprites in draw order."""
        return tuple(self._sprites)

    def initialize(self) -> bool:
        """Called once when the mode becomes active."""
        return True

    def terminate(self) -> bool:
        """Called once when the mode is removed."""
        return True

    def process(self) -> bool:
        """Let every actor handle input."""
        self._updating_actors = True
        try:
            for actor in tuple(self._actors):
                actor.process_input()
        finally:
            self._updating_actors = False
        return True

    def update(self) -> bool:
        """Update actors, admit pending ones and destroy dead ones."""
        self._updating_actors = True
        try:
            for actor in tuple(self._actors):
                actor.update()
        finally:
            self._updating_actors = False

        self._actors.extend(self._pending_actors)
        self._pending_actors.clear()

        for actor in [a for a in self._actors if a.state is ActorState.DEAD]:
            actor.destroy()
        return False

    def render(self) -> bool:
        """Draw every sprite in draw order."""
        for sprite in tuple(self._sprites):
            sprite.draw()
        return True

    def add_actor(self, actor: Any) -> None:
        """Add an actor; while actors are updating it waits until the update ends."""
        if self._updating_actors:
            self._pending_actors.append(actor)
        else:
            self._actors.append(actor)

    def remove_actor(self, actor: Any) -> None:
        """Remove an actor from the pending and active lists."""
        _swap_remove(self._pending_actors, actor)
        _swap_remove(self._actors, actor)

    def add_sprite(self, sprite: Any) -> None:
        """Insert a sprite after all sprites of equal or lower draw order."""
        bisect.insort(self._sprites, sprite, key=_by_draw_order)

    def remove_sprite(self, sprite: Any) -> None:
        """Remove a sprite; raises ValueError if it is not registered."""
        self._sprites.remove(sprite)

    def step_time(self, now: int) -> None:
        """Advance the mode clock to ``now`` milliseconds."""
        if self._count == 0:
            self._mode_time = 0
            self._frame_time = 0
            self._mode_base = now & _ULONG_MASK
            self._pause_base = 0
            self._pause_step = 0
        else:
            self._mode_time = (now - self._mode_base + self._pause_step) & _ULONG_MASK
            self._frame_time = (now - self._old_frame) & _ULONG_MASK
        self._old_frame = now & _ULONG_MASK

    def step_count(self) -> None:
        """Advance the frame counter."""
        self._count += 1