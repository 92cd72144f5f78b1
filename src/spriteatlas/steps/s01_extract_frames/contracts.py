"""I/O contracts for Step 01: Extract scaled frames with ffmpeg."""

from pathlib import Path
from pydantic import BaseModel, Field

from spriteatlas.atlas.layout import LayoutPlan
from spriteatlas.core.contracts import FrameSize


class ExtractFramesInput(BaseModel):
    video_path: Path = Field(..., description="Path to the source video")
    layout: LayoutPlan = Field(..., description="Layout planned by probe_video")


class ExtractFramesOutput(BaseModel):
    frames_dir: Path = Field(..., description="Directory containing extracted frames")
    frame_count: int = Field(..., ge=0, description="Number of frames extracted")
    frame_sizes: list[FrameSize] = Field(
        default_factory=list, description="Distinct measured frame sizes"
    )
    frame_list: list[str] = Field(default_factory=list, description="Frame filenames in order")
    frame_format: str = Field("png", description="Extension of the extracted frame files")
