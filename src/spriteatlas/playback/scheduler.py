"""Fixed-rate frame scheduler for sprite atlas playback.

The host calls ``advance(now_ms)`` once per display refresh. The scheduler
is a rate limiter, not a frame-accurate clock: it moves forward by exactly
one frame when at least one target interval has passed since the last
advance. A slow host therefore plays slower instead of skipping frames, and
a fast host is capped at the target rate.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Sequence

from spriteatlas.atlas.decoder import Rect, decode, source_rect
from spriteatlas.atlas.manifest import Manifest
from spriteatlas.core.errors import ConfigurationError, LoadError, PlaybackError

logger = logging.getLogger(__name__)


class PlayState(str, Enum):
    LOADING = "loading"
    PLAYING = "playing"
    PAUSED = "paused"
    STOPPED = "stopped"


@dataclass
class PlayerState:
    """Mutable playback position, owned by one scheduler."""

    next_frame: int = 0
    last_advance: float | None = None  # ms timestamp of the last advance


@dataclass(frozen=True)
class RenderCommand:
    """Draw ``source`` of ``image`` into ``destination`` on a cleared surface."""

    frame_index: int
    page_index: int
    image: Any
    source: Rect
    destination: Rect


class PlaybackScheduler:
    """LOADING -> PLAYING <-> PAUSED, and any state -> STOPPED."""

    def __init__(
        self,
        manifest: Manifest,
        target_fps: float | None = None,
        state: PlayerState | None = None,
    ):
        fps = manifest.fps if target_fps is None else target_fps
        if fps <= 0:
            raise ConfigurationError(f"target_fps must be > 0, got {fps}")
        self.manifest = manifest
        self.target_fps = fps
        self.interval_ms = 1000.0 / fps
        self.state = state if state is not None else PlayerState()
        self.play_state = PlayState.LOADING
        self._pages: list[Any] = []
        self._destination = Rect(0, 0, manifest.frame_width, manifest.frame_height)

    def start(self, pages: Sequence[Any]) -> None:
        """Begin playing once every page image has been loaded."""
        if self.play_state is not PlayState.LOADING:
            raise PlaybackError(f"Cannot start from state {self.play_state.value}")
        if self.manifest.total_frames == 0:
            raise LoadError("Manifest contains no frames")
        if len(pages) != self.manifest.page_count:
            raise LoadError(
                f"Expected {self.manifest.page_count} page images, got {len(pages)}"
            )
        self._pages = list(pages)
        self.play_state = PlayState.PLAYING
        logger.info(
            f"Playing {self.manifest.total_frames} frames from {len(self._pages)} pages "
            f"at {self.target_fps:g} fps"
        )

    def pause(self) -> None:
        if self.play_state is not PlayState.PLAYING:
            raise PlaybackError(f"Cannot pause from state {self.play_state.value}")
        self.play_state = PlayState.PAUSED

    def resume(self) -> None:
        if self.play_state is not PlayState.PAUSED:
            raise PlaybackError(f"Cannot resume from state {self.play_state.value}")
        self.state.last_advance = None
        self.play_state = PlayState.PLAYING

    def stop(self) -> None:
        if self.play_state is not PlayState.STOPPED:
            logger.info(f"Playback stopped at frame {self.state.next_frame}")
        self.play_state = PlayState.STOPPED
        self._pages = []

    def advance(self, now: float) -> RenderCommand | None:
        """Advance at most one frame and return what to draw, if anything.

        ``now`` is a millisecond timestamp from the host's display callback.
        """
        if self.play_state is not PlayState.PLAYING:
            return None

        last = self.state.last_advance
        if last is not None and now - last < self.interval_ms:
            return None

        total = self.manifest.total_frames
        frame = self.state.next_frame % total
        self.state.next_frame = (frame + 1) % total
        self.state.last_advance = now

        location = decode(frame, self.manifest)
        return RenderCommand(
            frame_index=frame,
            page_index=location.page,
            image=self._pages[location.page],
            source=source_rect(location, self.manifest),
            destination=self._destination,
        )
