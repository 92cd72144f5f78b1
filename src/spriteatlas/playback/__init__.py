"""Sprite atlas playback: scheduler, render surface, page loading, hosts."""

from .scheduler import PlaybackScheduler, PlayerState, PlayState, RenderCommand
from .surface import Surface
from .loop import PlaybackLoop
from .loader import load_page, load_pages
from .config import PlaybackConfig

__all__ = [
    "PlaybackScheduler",
    "PlayerState",
    "PlayState",
    "RenderCommand",
    "Surface",
    "PlaybackLoop",
    "load_page",
    "load_pages",
    "PlaybackConfig",
]
