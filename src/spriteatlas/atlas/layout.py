"""Layout planner: how many scaled frames fit on one sprite page."""

from __future__ import annotations

import math

from pydantic import BaseModel, Field

from spriteatlas.core.contracts import VideoMetrics
from spriteatlas.core.errors import LayoutError


class LayoutConstraints(BaseModel, frozen=True):
    """Target frame size, page bounds and extraction rate."""

    target_frame_width: int = Field(720, gt=0, description="Width of one scaled frame in pixels")
    max_page_width: int = Field(1920, gt=0, description="Maximum sprite page width in pixels")
    max_page_height: int = Field(1080, gt=0, description="Maximum sprite page height in pixels")
    fps: float = Field(24.0, gt=0, description="Frames per second to extract")


class LayoutPlan(BaseModel, frozen=True):
    """Grid chosen for a conversion run.

    ``frame_width``/``frame_height`` are the planned scaled size. The
    extracted frames are the truth source for the manifest, since the
    scaler rounds on its own.
    """

    scale: float = Field(..., gt=0)
    frame_width: int = Field(..., gt=0)
    frame_height: int = Field(..., gt=0)
    columns: int = Field(..., ge=1)
    rows: int = Field(..., ge=1)
    fps: float = Field(..., gt=0)
    estimated_frames: int = Field(0, ge=0, description="duration * fps, for progress only")

    @property
    def capacity_per_page(self) -> int:
        return self.columns * self.rows


def plan(metrics: VideoMetrics, constraints: LayoutConstraints) -> LayoutPlan:
    """Compute scale and page grid for a source video.

    Raises:
        LayoutError: a scaled frame is wider or taller than a page.
    """
    scale = constraints.target_frame_width / metrics.width
    scaled_width = metrics.width * scale
    scaled_height = metrics.height * scale

    columns = int(constraints.max_page_width / scaled_width)
    rows = int(constraints.max_page_height / scaled_height)

    if columns < 1:
        raise LayoutError(
            f"Frame width {scaled_width:g}px exceeds max page width "
            f"{constraints.max_page_width}px; shrink target_frame_width or widen the page"
        )
    if rows < 1:
        raise LayoutError(
            f"Frame height {scaled_height:g}px exceeds max page height "
            f"{constraints.max_page_height}px; shrink target_frame_width or enlarge the page"
        )

    return LayoutPlan(
        scale=scale,
        frame_width=constraints.target_frame_width,
        frame_height=max(1, round(scaled_height)),
        columns=columns,
        rows=rows,
        fps=constraints.fps,
        estimated_frames=math.ceil(metrics.duration * constraints.fps),
    )
