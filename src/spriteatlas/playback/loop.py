"""Host-driven playback loop.

The host supplies ``request_frame(callback) -> handle`` and
``cancel_frame(handle)``, calling each registered callback once on its next
display refresh with a millisecond timestamp. The loop keeps exactly one
callback pending while it runs.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from .scheduler import PlaybackScheduler, PlayState
from .surface import Surface

logger = logging.getLogger(__name__)

FrameCallback = Callable[[float], None]


class PlaybackLoop:
    def __init__(
        self,
        scheduler: PlaybackScheduler,
        surface: Surface,
        request_frame: Callable[[FrameCallback], Any],
        cancel_frame: Callable[[Any], None],
    ):
        self.scheduler = scheduler
        self.surface = surface
        self._request_frame = request_frame
        self._cancel_frame = cancel_frame
        self._handle: Any = None

    @property
    def running(self) -> bool:
        return self._handle is not None

    def start(self) -> None:
        if self.running:
            return
        self._handle = self._request_frame(self._on_frame)

    def stop(self) -> None:
        """Cancel the pending callback and stop the scheduler."""
        if self._handle is not None:
            self._cancel_frame(self._handle)
            self._handle = None
        self.scheduler.stop()

    def toggle_pause(self) -> None:
        if self.scheduler.play_state is PlayState.PLAYING:
            self.scheduler.pause()
        elif self.scheduler.play_state is PlayState.PAUSED:
            self.scheduler.resume()

    def _on_frame(self, now: float) -> None:
        if self.scheduler.play_state is PlayState.STOPPED:
            self._handle = None
            return
        # Re-register before any work so a failing render cannot end the loop.
        self._handle = self._request_frame(self._on_frame)

        command = self.scheduler.advance(now)
        if command is not None:
            self.surface.render(command)
