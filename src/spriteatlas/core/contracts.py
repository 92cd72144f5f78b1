"""Common Pydantic models shared across pipeline steps."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


class StepMeta(BaseModel):
    """Metadata attached to a step run for reproducibility."""

    step_name: str
    elapsed_seconds: float = 0.0
    params: dict[str, Any] = Field(default_factory=dict)


class VideoMetrics(BaseModel, frozen=True):
    """Source video stream properties as reported by the probe."""

    width: int = Field(..., gt=0, description="Source width in pixels")
    height: int = Field(..., gt=0, description="Source height in pixels")
    duration: float = Field(..., gt=0, description="Duration in seconds")


class FrameSize(BaseModel, frozen=True):
    """Pixel size of one extracted frame."""

    width: int = Field(..., gt=0)
    height: int = Field(..., gt=0)


class PipelineConfig(BaseModel):
    """Top-level pipeline configuration loaded from pipeline.yaml."""

    project_name: str = "spriteatlas_project"
    data_root: Path = Path("./data")
    inputs: dict[str, Any] = Field(
        default_factory=dict, description="Values supplied to every step input (e.g. video_path)"
    )
    steps: list[StepEntry] = Field(default_factory=list)


class StepEntry(BaseModel):
    """One entry in the pipeline step list."""

    name: str
    module: str
    config_file: str
    depends_on: list[str] = Field(default_factory=list)
    enabled: bool = True


# Fix forward reference
PipelineConfig.model_rebuild()
