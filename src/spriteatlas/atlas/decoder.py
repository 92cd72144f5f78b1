"""Global frame index <-> (page, row, column) mapping.

Frames fill each page row-major from the top-left cell, every page holds
``columns * rows`` frames except possibly the last one, and cells past the
last frame do not exist.
"""

from __future__ import annotations

from typing import NamedTuple

from .manifest import Manifest


class FrameLocation(NamedTuple):
    page: int
    row: int
    column: int


class Rect(NamedTuple):
    x: int
    y: int
    width: int
    height: int


def decode(frame_index: int, manifest: Manifest) -> FrameLocation:
    """Map a global frame index to its page and cell.

    Raises:
        IndexError: ``frame_index`` is outside ``[0, total_frames)``. Callers
            that want wraparound apply the modulo themselves.
    """
    if not 0 <= frame_index < manifest.total_frames:
        raise IndexError(
            f"frame {frame_index} out of range [0, {manifest.total_frames})"
        )
    page, offset = divmod(frame_index, manifest.capacity_per_page)
    row, column = divmod(offset, manifest.columns)
    return FrameLocation(page, row, column)


def encode(location: FrameLocation, manifest: Manifest) -> int:
    """Inverse of ``decode``."""
    page, row, column = location
    if not 0 <= column < manifest.columns or not 0 <= row < manifest.rows:
        raise IndexError(f"cell ({row}, {column}) outside a {manifest.columns}x{manifest.rows} grid")
    frame_index = page * manifest.capacity_per_page + row * manifest.columns + column
    if not 0 <= frame_index < manifest.total_frames:
        raise IndexError(f"{location} holds no frame (total {manifest.total_frames})")
    return frame_index


def source_rect(location: FrameLocation, manifest: Manifest) -> Rect:
    """Pixel rectangle of a cell within its page image."""
    return Rect(
        location.column * manifest.frame_width,
        location.row * manifest.frame_height,
        manifest.frame_width,
        manifest.frame_height,
    )
