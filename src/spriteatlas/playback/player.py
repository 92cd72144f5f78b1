"""Wire manifest, page loading, scheduler and window host together."""

from __future__ import annotations

import logging
from pathlib import Path

from spriteatlas.atlas.manifest import read_manifest
from .config import PlaybackConfig
from .loader import load_pages
from .loop import PlaybackLoop
from .scheduler import PlaybackScheduler
from .surface import Surface
from .window import WindowHost

logger = logging.getLogger(__name__)


def play(manifest_path: Path, config: PlaybackConfig | None = None) -> None:
    """Play a converted sprite atlas in a window until stopped.

    Page images are expected next to the manifest. Nothing is shown unless
    the manifest and every page load successfully.
    """
    config = config or PlaybackConfig()
    manifest_path = Path(manifest_path)
    manifest = read_manifest(manifest_path)

    scheduler = PlaybackScheduler(manifest, target_fps=config.fps)
    pages = load_pages(manifest, manifest_path.parent, max_workers=config.load_workers)
    scheduler.start(pages)

    host = WindowHost(window_name=config.window_name, refresh_hz=config.refresh_hz, scale=config.scale)
    surface = Surface(manifest.frame_width, manifest.frame_height)
    loop = PlaybackLoop(scheduler, surface, host.request_frame, host.cancel_frame)
    host.run(loop)
