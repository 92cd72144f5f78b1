"""I/O contracts for Step 02: Tile frames into sprite pages with montage."""

from pathlib import Path
from pydantic import BaseModel, Field

from spriteatlas.atlas.layout import LayoutPlan
from spriteatlas.atlas.manifest import Manifest
from spriteatlas.core.contracts import FrameSize


class StitchPagesInput(BaseModel):
    frames_dir: Path = Field(..., description="Directory containing extracted frames")
    frame_count: int = Field(..., ge=0, description="Number of frames extracted")
    frame_sizes: list[FrameSize] = Field(default_factory=list, description="Measured frame sizes")
    frame_format: str = Field("png", description="Extension of the extracted frame files")
    layout: LayoutPlan = Field(..., description="Layout planned by probe_video")


class StitchPagesOutput(BaseModel):
    sprites_dir: Path = Field(..., description="Directory containing sprite pages")
    manifest: Manifest = Field(..., description="Manifest describing the pages")
    page_files: list[str] = Field(default_factory=list, description="Page filenames in index order")
