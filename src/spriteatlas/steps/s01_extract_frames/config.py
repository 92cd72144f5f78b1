"""Configuration for Step 01: Extract scaled frames with ffmpeg."""

from pydantic import BaseModel, Field


class ExtractFramesConfig(BaseModel):
    frame_number_width: int = Field(6, ge=1, description="Zero-pad width of frame file numbers")
    output_format: str = Field("png", description="Frame image format")
    verify_frame_sizes: bool = Field(
        True, description="Measure every frame (False = first frame only)"
    )
    timeout: int = Field(3600, gt=0, description="ffmpeg timeout in seconds")
