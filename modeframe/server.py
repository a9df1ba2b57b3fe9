"""The mode server: runs a stack of layered modes each frame."""

from __future__ import annotations

import time
from itertools import chain
from operator import attrgetter
from typing import Callable, ClassVar, Iterator, Optional

from modeframe.mode import ModeBase

INT32_MAX = 2**31 - 1


def _now_ms() -> int:
    return time.monotonic_ns() // 1_000_000


class ModeServer:
    """Keeps modes ordered by layer; processes top-down and renders bottom-up.

    Additions and deletions are reserved and take effect at ``process_init``.
    """

    _instance: ClassVar[Optional["ModeServer"]] = None

    def __init__(self, clock: Optional[Callable[[], int]] = None) -> None:
        self._clock = clock if clock is not None else _now_ms
        self._modes: list[ModeBase] = []
        self._adding: list[ModeBase] = []
        self._deleting: list[ModeBase] = []
        self._uid_count = 1
        self._now_mode: Optional[ModeBase] = None
        self._skip_process_mode: Optional[ModeBase] = None
        self._skip_render_mode: Optional[ModeBase] = None
        self._pause_process_mode: Optional[ModeBase] = None
        ModeServer._instance = self

    @classmethod
    def instance(cls) -> Optional["ModeServer"]:
        """The most recently created server."""
        return ModeServer._instance

    def _registered(self) -> Iterator[ModeBase]:
        for mode in chain(self._modes, self._adding):
            if not self._is_delete_registered(mode):
                yield mode

    def _is_delete_registered(self, mode: ModeBase) -> bool:
        return any(m is mode for m in self._deleting)

    def _is_added(self, mode: ModeBase) -> bool:
        return any(m is mode for m in self._registered())

    def _release(self, mode: ModeBase) -> None:
        kept = []
        for current in self._modes:
            if current is mode:
                current.terminate()
            else:
                kept.append(current)
        self._modes[:] = kept

    def add(self, mode: ModeBase, layer: int, name: str) -> int:
        """Reserve a mode for addition and return its unique id."""
        self._adding.append(mode)
        mode.uid = self._uid_count
        self._uid_count += 1
        mode.layer = layer
        mode.name = name
        return mode.uid

    def delete(self, mode: ModeBase) -> None:
        """Reserve a mode for deletion."""
        self._deleting.append(mode)

    def get(self, key: int | str) -> Optional[ModeBase]:
        """Find a registered or pending mode by uid or by name."""
        if isinstance(key, str):
            return next((m for m in self._registered() if m.name == key), None)
        return next((m for m in self._registered() if m.uid == key), None)

    def get_id(self, key: ModeBase | str) -> Optional[int]:
        """The uid of a mode, given the mode or its name; None if not registered."""
        mode = self.get(key) if isinstance(key, str) else key
        if mode is not None and self._is_added(mode):
            return mode.uid
        return None

    def get_name(self, key: ModeBase | int) -> Optional[str]:
        """The name of a mode, given the mode or its uid; None if not registered."""
        mode = self.get(key) if isinstance(key, int) else key
        if mode is not None and self._is_added(mode):
            return mode.name
        return None

    def clear(self) -> None:
        """Terminate and drop every mode, active ones from the top layer down."""
        for mode in reversed(self._modes):
            mode.terminate()
        for mode in self._adding:
            mode.terminate()
        self._modes.clear()
        self._adding.clear()
        self._deleting.clear()

    def layer_top(self) -> int:
        """The highest possible layer."""
        return INT32_MAX

    def process_init(self) -> None:
        """Apply reserved deletions and additions, then reset skips and pauses."""
        for mode in self._deleting:
            self._release(mode)
        self._deleting.clear()

        if self._adding:
            for mode in self._adding:
                mode.initialize()
                self._modes.append(mode)
            self._adding.clear()
            self._modes.sort(key=attrgetter("layer"))

        self._skip_process_mode = None
        self._skip_render_mode = None
        self._pause_process_mode = None

    def process(self) -> None:
        """Process modes from the top layer down."""
        now = self._clock()
        paused = False
        for mode in reversed(tuple(self._modes)):
            if not self._is_delete_registered(mode):
                self._now_mode = mode
                if not paused:
                    mode.step_time(now)
                mode.process()
                mode.update()
                if not self._modes:
                    break
                if not paused:
                    mode.step_count()
            if self._skip_process_mode is mode:
                break
            if self._pause_process_mode is mode:
                paused = True
        self._now_mode = None

    def process_finish(self) -> None:
        """Finish a processing pass: no mode is current any more."""
        self._now_mode = None

    def render_init(self) -> None:
        """Prepare a rendering pass: no mode is current yet."""
        self._now_mode = None

    def render(self) -> None:
        """Render modes from the bottom layer up."""
        for mode in tuple(self._modes):
            if self._skip_render_mode is not None and self._skip_render_mode is not mode:
                continue
            self._skip_render_mode = None
            if not self._is_delete_registered(mode):
                self._now_mode = mode
                mode.render()
        self._now_mode = None

    def render_finish(self) -> None:
        """Finish a rendering pass: no mode is current any more."""
        self._now_mode = None

    def skip_process_under_layer(self) -> None:
        """Stop processing layers below the mode now being processed."""
        self._skip_process_mode = self._now_mode

    def skip_render_under_layer(self) -> None:
        """Stop rendering layers below the mode now being processed."""
        self._skip_render_mode = self._now_mode

    def pause_process_under_layer(self) -> None:
        """Freeze time for layers below the mode now being processed."""
        self._pause_process_mode = self._now_mode