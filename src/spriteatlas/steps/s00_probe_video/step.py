"""Step 00: Probe the source video with ffprobe and plan the sprite layout.

Planning happens here so an impossible layout fails before any frames are
extracted.
"""

from __future__ import annotations

import json
import logging
from typing import Any, ClassVar

from spriteatlas.atlas.layout import LayoutConstraints, plan
from spriteatlas.core.contracts import VideoMetrics
from spriteatlas.core.errors import ConfigurationError, ExternalToolError
from spriteatlas.core.step_base import BaseStep
from spriteatlas.utils.subprocess_utils import run_command
from .config import ProbeVideoConfig
from .contracts import ProbeVideoInput, ProbeVideoOutput

logger = logging.getLogger(__name__)


def parse_probe(payload: dict[str, Any]) -> VideoMetrics:
    """Pick the first video stream out of ``ffprobe -print_format json`` output."""
    stream = next(
        (s for s in payload.get("streams", []) if s.get("codec_type") == "video"), None
    )
    if stream is None:
        raise ConfigurationError("No video stream found")

    duration = stream.get("duration") or payload.get("format", {}).get("duration")
    if duration is None:
        raise ConfigurationError("Video stream reports no duration")

    return VideoMetrics(
        width=int(stream["width"]),
        height=int(stream["height"]),
        duration=float(duration),
    )


class ProbeVideoStep(BaseStep[ProbeVideoInput, ProbeVideoOutput, ProbeVideoConfig]):
    name: ClassVar[str] = "probe_video"
    input_type: ClassVar = ProbeVideoInput
    output_type: ClassVar = ProbeVideoOutput
    config_type: ClassVar = ProbeVideoConfig

    def validate_inputs(self, inputs: ProbeVideoInput) -> bool:
        if not inputs.video_path.is_file():
            logger.error(f"Video not found: {inputs.video_path}")
            return False
        return True

    def run(self, inputs: ProbeVideoInput) -> ProbeVideoOutput:
        result = run_command(
            [
                "ffprobe",
                "-v", "quiet",
                "-print_format", "json",
                "-show_streams",
                "-show_format",
                str(inputs.video_path),
            ],
            timeout=self.config.timeout,
        )
        try:
            payload = json.loads(result.stdout)
        except json.JSONDecodeError as e:
            raise ExternalToolError(
                f"ffprobe returned invalid JSON for {inputs.video_path}", cmd="ffprobe"
            ) from e

        source = parse_probe(payload)
        layout = plan(
            source,
            LayoutConstraints(
                target_frame_width=self.config.frame_width,
                max_page_width=self.config.sheet_width_max,
                max_page_height=self.config.sheet_height_max,
                fps=self.config.fps,
            ),
        )
        logger.info(
            f"Source {source.width}x{source.height}, {source.duration:.2f}s -> "
            f"scale {layout.scale:.3f}, grid {layout.columns}x{layout.rows}, "
            f"~{layout.estimated_frames} frames"
        )
        return ProbeVideoOutput(video_path=inputs.video_path, source=source, layout=layout)
