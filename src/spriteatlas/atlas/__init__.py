"""Sprite atlas layout, manifest and frame index decoding."""

from .layout import LayoutConstraints, LayoutPlan, plan
from .manifest import (
    DEFAULT_PAGE_PATTERN,
    MANIFEST_FILENAME,
    Manifest,
    assemble,
    check_page_geometry,
    read_manifest,
    write_manifest,
)
from .decoder import FrameLocation, Rect, decode, encode, source_rect

__all__ = [
    "LayoutConstraints",
    "LayoutPlan",
    "plan",
    "DEFAULT_PAGE_PATTERN",
    "MANIFEST_FILENAME",
    "Manifest",
    "assemble",
    "check_page_geometry",
    "read_manifest",
    "write_manifest",
    "FrameLocation",
    "Rect",
    "decode",
    "encode",
    "source_rect",
]
