"""spriteatlas core: pipeline runner, base step, shared contracts, errors."""

from .step_base import BaseStep
from .contracts import PipelineConfig, StepEntry, StepMeta, VideoMetrics, FrameSize
from .errors import (
    SpriteAtlasError,
    ConfigurationError,
    LayoutError,
    ExternalToolError,
    LoadError,
    ManifestNotFoundError,
    PlaybackError,
)
from .pipeline_runner import run_pipeline, load_pipeline_config
from .logging import setup_logging

__all__ = [
    "BaseStep",
    "PipelineConfig",
    "StepEntry",
    "StepMeta",
    "VideoMetrics",
    "FrameSize",
    "SpriteAtlasError",
    "ConfigurationError",
    "LayoutError",
    "ExternalToolError",
    "LoadError",
    "ManifestNotFoundError",
    "PlaybackError",
    "run_pipeline",
    "load_pipeline_config",
    "setup_logging",
]
