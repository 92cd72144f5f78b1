"""I/O contracts for Step 03: Poster image from the first frame."""

from pathlib import Path
from pydantic import BaseModel, Field


class ExtractPosterInput(BaseModel):
    frames_dir: Path = Field(..., description="Directory containing extracted frames")
    frame_list: list[str] = Field(default_factory=list, description="Frame filenames in order")
    sprites_dir: Path = Field(..., description="Directory containing sprite pages")


class ExtractPosterOutput(BaseModel):
    poster: str | None = Field(None, description="Poster file name, None when not written")
