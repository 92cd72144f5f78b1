"""The manifest: the one durable record a conversion leaves for playback.

It is assembled only after frame extraction has finished, because the real
frame count can differ from ``duration * fps`` (rounding, a partial last
frame). Page count is always derived from the extracted count.
"""

from __future__ import annotations

import logging
import math
import re
from pathlib import Path
from typing import Sequence

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator
from pydantic.alias_generators import to_camel

from spriteatlas.core.contracts import FrameSize
from spriteatlas.core.errors import ConfigurationError, LoadError, ManifestNotFoundError
from .layout import LayoutPlan

logger = logging.getLogger(__name__)

MANIFEST_FILENAME = "info.json"
DEFAULT_PAGE_PATTERN = "sprite_%04d.jpg"

_PAGE_INDEX_FIELD = re.compile(r"%0([1-9]\d*)d")


class Manifest(BaseModel):
    """Grid, frame size and page naming of a finished sprite atlas.

    Serialized with camelCase keys (``totalFrames``, ``pageCount``, ...).
    ``page_naming_pattern`` is a printf pattern with exactly one zero-padded
    integer field, e.g. ``sprite_%04d.jpg``, so page files sort by index.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    total_frames: int = Field(..., ge=0)
    page_count: int = Field(..., ge=0)
    columns: int = Field(..., ge=1)
    rows: int = Field(..., ge=1)
    frame_width: int = Field(..., gt=0)
    frame_height: int = Field(..., gt=0)
    page_naming_pattern: str = DEFAULT_PAGE_PATTERN
    fps: float = Field(24.0, gt=0, description="Extraction rate, the default playback rate")
    poster: str | None = None

    @field_validator("page_naming_pattern")
    @classmethod
    def _single_index_field(cls, value: str) -> str:
        conversions = value.replace("%%", "").count("%")
        if conversions != 1 or len(_PAGE_INDEX_FIELD.findall(value.replace("%%", ""))) != 1:
            raise ValueError(
                f"page_naming_pattern must contain exactly one '%0Nd' field, got {value!r}"
            )
        return value

    @model_validator(mode="after")
    def _page_count_matches(self) -> Manifest:
        expected = math.ceil(self.total_frames / self.capacity_per_page)
        if self.page_count != expected:
            raise ValueError(
                f"page_count {self.page_count} does not match ceil({self.total_frames}/"
                f"{self.capacity_per_page}) = {expected}"
            )
        return self

    @property
    def capacity_per_page(self) -> int:
        return self.columns * self.rows

    @property
    def page_number_width(self) -> int:
        return int(_PAGE_INDEX_FIELD.search(self.page_naming_pattern.replace("%%", "")).group(1))

    def page_filename(self, page: int) -> str:
        if not 0 <= page < self.page_count:
            raise IndexError(f"page {page} out of range [0, {self.page_count})")
        return self.page_naming_pattern % page

    def page_filenames(self) -> list[str]:
        return [self.page_filename(i) for i in range(self.page_count)]

    def frames_on_page(self, page: int) -> int:
        """Number of frames stored on ``page``; only the last page may be under-full."""
        if not 0 <= page < self.page_count:
            raise IndexError(f"page {page} out of range [0, {self.page_count})")
        if page < self.page_count - 1:
            return self.capacity_per_page
        return self.total_frames - (self.page_count - 1) * self.capacity_per_page


def assemble(
    plan: LayoutPlan,
    frame_count: int,
    frame_sizes: Sequence[FrameSize],
    page_naming_pattern: str = DEFAULT_PAGE_PATTERN,
    poster: str | None = None,
) -> Manifest:
    """Build the manifest from the plan and what extraction actually produced.

    ``frame_sizes`` are measured sizes of extracted frames (all of them or a
    sample); they must agree with each other.

    Raises:
        ConfigurationError: frame sizes disagree, or frames exist but none
            were measured.
    """
    if frame_count < 0:
        raise ConfigurationError(f"frame_count must be >= 0, got {frame_count}")

    distinct = set(frame_sizes)
    if len(distinct) > 1:
        sizes = ", ".join(f"{s.width}x{s.height}" for s in sorted(distinct, key=lambda s: (s.width, s.height)))
        raise ConfigurationError(f"Extracted frames differ in size: {sizes}")

    if distinct:
        size = distinct.pop()
    elif frame_count == 0:
        size = FrameSize(width=plan.frame_width, height=plan.frame_height)
    else:
        raise ConfigurationError(f"{frame_count} frames extracted but no frame size measured")

    if (size.width, size.height) != (plan.frame_width, plan.frame_height):
        logger.info(
            f"Extracted frame size {size.width}x{size.height} differs from planned "
            f"{plan.frame_width}x{plan.frame_height}; using extracted size"
        )

    return Manifest(
        total_frames=frame_count,
        page_count=math.ceil(frame_count / plan.capacity_per_page),
        columns=plan.columns,
        rows=plan.rows,
        frame_width=size.width,
        frame_height=size.height,
        page_naming_pattern=page_naming_pattern,
        fps=plan.fps,
        poster=poster,
    )


def check_page_geometry(manifest: Manifest, page_sizes: Sequence[tuple[int, int]]) -> None:
    """Verify produced pages against the row-major fixed-grid layout.

    ``page_sizes`` holds ``(width, height)`` per page in index order. The
    tiler may compact the last page, so each page is checked against the
    grid it actually has: any page with more than one row of frames must
    keep exactly ``columns`` columns, and every page must be large enough
    for its frames.

    Raises:
        ConfigurationError: page count or geometry would misalign decoding.
    """
    if len(page_sizes) != manifest.page_count:
        raise ConfigurationError(
            f"Expected {manifest.page_count} pages, found {len(page_sizes)}"
        )

    for page, (width, height) in enumerate(page_sizes):
        frames = manifest.frames_on_page(page)
        page_columns = width // manifest.frame_width
        page_rows = height // manifest.frame_height
        needed_rows = math.ceil(frames / manifest.columns)

        if frames > manifest.columns:
            columns_ok = page_columns == manifest.columns
        else:
            columns_ok = frames <= page_columns <= manifest.columns
        if not columns_ok or page_rows < needed_rows:
            raise ConfigurationError(
                f"Page {page} is {width}x{height} ({page_columns}x{page_rows} cells) but holds "
                f"{frames} frames in a {manifest.columns}x{manifest.rows} grid"
            )


def write_manifest(manifest: Manifest, path: Path) -> Path:
    """Write the manifest as camelCase JSON."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(manifest.model_dump_json(by_alias=True, indent=2), encoding="utf-8")
    logger.info(f"Wrote manifest: {path} ({manifest.total_frames} frames, {manifest.page_count} pages)")
    return path


def read_manifest(path: Path) -> Manifest:
    """Read a manifest written by ``write_manifest``.

    Raises:
        ManifestNotFoundError: no file at ``path``.
        LoadError: the file is unreadable or not a valid manifest.
    """
    path = Path(path)
    if not path.is_file():
        raise ManifestNotFoundError(f"No manifest at {path}; was the conversion completed?")
    try:
        return Manifest.model_validate_json(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise LoadError(f"Cannot read manifest {path}: {e}") from e
    except ValidationError as e:
        raise LoadError(f"Invalid manifest {path}: {e}") from e
