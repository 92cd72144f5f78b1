"""Configuration for Step 03: Poster image from the first frame."""

from pydantic import BaseModel, Field


class ExtractPosterConfig(BaseModel):
    enabled: bool = Field(True, description="Write a poster image")
    filename: str = Field("poster.jpg", description="Poster file name in the sprite directory")
    quality: str = Field("80%", description="Poster image quality passed to convert")
    timeout: int = Field(300, gt=0, description="convert timeout in seconds")
