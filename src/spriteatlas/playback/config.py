"""Configuration for sprite atlas playback."""

from pydantic import BaseModel, Field


class PlaybackConfig(BaseModel):
    fps: float | None = Field(None, gt=0, description="Playback rate (None = manifest fps)")
    window_name: str = Field("spriteatlas", description="OpenCV window title")
    refresh_hz: float = Field(60.0, gt=0, description="Display callback rate of the window host")
    scale: float = Field(1.0, gt=0, description="Window scale factor")
    load_workers: int | None = Field(None, ge=1, description="Threads used to load pages")
