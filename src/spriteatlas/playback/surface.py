"""In-memory render surface backed by a numpy canvas."""

from __future__ import annotations

import numpy as np

from spriteatlas.atlas.decoder import Rect
from .scheduler import RenderCommand


class Surface:
    """A ``width x height`` BGR canvas with clear and blit primitives."""

    def __init__(self, width: int, height: int, channels: int = 3):
        self.width = width
        self.height = height
        self.canvas = np.zeros((height, width, channels), dtype=np.uint8)

    def clear(self) -> None:
        self.canvas[...] = 0

    def draw(self, image: np.ndarray, source: Rect, destination: Rect) -> None:
        """Copy ``source`` of ``image`` to ``destination``; no scaling.

        Parts of either rectangle falling outside its image are clipped.
        """
        if (source.width, source.height) != (destination.width, destination.height):
            raise ValueError(f"Source {source} and destination {destination} differ in size")
        if image.ndim != self.canvas.ndim or image.shape[2:] != self.canvas.shape[2:]:
            raise ValueError(f"Image shape {image.shape} incompatible with canvas {self.canvas.shape}")

        region = image[source.y:source.y + source.height, source.x:source.x + source.width]
        h = min(region.shape[0], self.height - destination.y)
        w = min(region.shape[1], self.width - destination.x)
        if h <= 0 or w <= 0:
            return
        self.canvas[destination.y:destination.y + h, destination.x:destination.x + w] = region[:h, :w]

    def render(self, command: RenderCommand) -> None:
        self.clear()
        self.draw(command.image, command.source, command.destination)
