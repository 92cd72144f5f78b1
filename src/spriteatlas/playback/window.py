"""OpenCV window host: a display-refresh callback source for ``PlaybackLoop``."""

from __future__ import annotations

import logging
import time
from typing import Callable

import cv2

from .loop import FrameCallback, PlaybackLoop

logger = logging.getLogger(__name__)

_KEY_ESC = 27


class WindowHost:
    """Runs registered frame callbacks once per window refresh.

    Space toggles pause; ``q``, Esc or closing the window stops playback.
    """

    def __init__(
        self,
        window_name: str = "spriteatlas",
        refresh_hz: float = 60.0,
        scale: float = 1.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.window_name = window_name
        self.refresh_ms = max(1, int(1000 / refresh_hz))
        self.scale = scale
        self._clock = clock
        self._pending: dict[int, FrameCallback] = {}
        self._next_handle = 0

    def request_frame(self, callback: FrameCallback) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._pending[handle] = callback
        return handle

    def cancel_frame(self, handle: int) -> None:
        self._pending.pop(handle, None)

    def run(self, loop: PlaybackLoop) -> None:
        """Block until playback is stopped or the window is closed."""
        cv2.namedWindow(self.window_name, cv2.WINDOW_AUTOSIZE)
        try:
            loop.start()
            while self._pending:
                callbacks, self._pending = self._pending, {}
                now = self._clock() * 1000.0
                for callback in callbacks.values():
                    try:
                        callback(now)
                    except Exception:
                        logger.exception("Frame callback failed")

                cv2.imshow(self.window_name, self._frame(loop))
                key = cv2.waitKey(self.refresh_ms) & 0xFF
                if key in (ord("q"), _KEY_ESC):
                    loop.stop()
                elif key == ord(" "):
                    loop.toggle_pause()
                elif cv2.getWindowProperty(self.window_name, cv2.WND_PROP_VISIBLE) < 1:
                    loop.stop()
        finally:
            loop.stop()
            cv2.destroyWindow(self.window_name)

    def _frame(self, loop: PlaybackLoop):
        canvas = loop.surface.canvas
        if self.scale == 1.0:
            return canvas
        return cv2.resize(canvas, None, fx=self.scale, fy=self.scale, interpolation=cv2.INTER_LINEAR)
