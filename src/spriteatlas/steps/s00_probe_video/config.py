"""Configuration for Step 00: Probe video and plan the sprite layout."""

from pydantic import BaseModel, Field


class ProbeVideoConfig(BaseModel):
    frame_width: int = Field(720, gt=0, description="Width of one frame on the sprite page")
    sheet_width_max: int = Field(1920, gt=0, description="Maximum sprite page width")
    sheet_height_max: int = Field(1080, gt=0, description="Maximum sprite page height")
    fps: float = Field(24.0, gt=0, description="Frames per second to extract")
    timeout: int = Field(120, gt=0, description="ffprobe timeout in seconds")
