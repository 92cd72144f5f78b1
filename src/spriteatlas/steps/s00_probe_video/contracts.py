"""I/O contracts for Step 00: Probe video and plan the sprite layout."""

from pathlib import Path
from pydantic import BaseModel, Field

from spriteatlas.atlas.layout import LayoutPlan
from spriteatlas.core.contracts import VideoMetrics


class ProbeVideoInput(BaseModel):
    video_path: Path = Field(..., description="Path to the source video")


class ProbeVideoOutput(BaseModel):
    video_path: Path = Field(..., description="Path to the source video")
    source: VideoMetrics = Field(..., description="Probed video stream properties")
    layout: LayoutPlan = Field(..., description="Scale and page grid for this video")
