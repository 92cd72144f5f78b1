"""Step 01: Extract scaled frames at the target rate with ffmpeg."""

from __future__ import annotations

import logging
import re
import shutil
from pathlib import Path
from typing import ClassVar

import cv2

from spriteatlas.core.contracts import FrameSize
from spriteatlas.core.errors import ExternalToolError
from spriteatlas.core.step_base import BaseStep
from spriteatlas.utils.subprocess_utils import stream_command
from .config import ExtractFramesConfig
from .contracts import ExtractFramesInput, ExtractFramesOutput

logger = logging.getLogger(__name__)

RX_FRAME_PROGRESS = re.compile(r"frame=\s*(\d+)")


class FrameProgress:
    """Turns ffmpeg ``-stats`` output into progress log lines every 10%."""

    def __init__(self, estimated_frames: int):
        self.estimated_frames = estimated_frames
        self.progress = 0.0
        self._logged_decile = -1

    def __call__(self, chunk: str) -> None:
        matches = RX_FRAME_PROGRESS.findall(chunk)
        if not matches or self.estimated_frames <= 0:
            return
        self.progress = min(int(matches[-1]) / self.estimated_frames, 1.0)
        decile = int(self.progress * 10)
        if decile > self._logged_decile:
            self._logged_decile = decile
            logger.info(f"Extracting frames: {self.progress:.0%}")


def measure_frames(frames_dir: Path, names: list[str]) -> list[FrameSize]:
    """Distinct pixel sizes of the given frames, in order of first appearance."""
    sizes: list[FrameSize] = []
    for name in names:
        image = cv2.imread(str(frames_dir / name), cv2.IMREAD_UNCHANGED)
        if image is None:
            raise ExternalToolError(f"ffmpeg produced an unreadable frame: {name}")
        size = FrameSize(width=image.shape[1], height=image.shape[0])
        if size not in sizes:
            sizes.append(size)
    return sizes


class ExtractFramesStep(BaseStep[ExtractFramesInput, ExtractFramesOutput, ExtractFramesConfig]):
    name: ClassVar[str] = "extract_frames"
    input_type: ClassVar = ExtractFramesInput
    output_type: ClassVar = ExtractFramesOutput
    config_type: ClassVar = ExtractFramesConfig

    def validate_inputs(self, inputs: ExtractFramesInput) -> bool:
        if not inputs.video_path.is_file():
            logger.error(f"Video not found: {inputs.video_path}")
            return False
        return True

    def run(self, inputs: ExtractFramesInput) -> ExtractFramesOutput:
        output_dir = self.data_root / "interim" / "s01_frames"
        if output_dir.exists():
            shutil.rmtree(output_dir)
        output_dir.mkdir(parents=True)

        layout = inputs.layout
        pattern = output_dir / f"%0{self.config.frame_number_width}d.{self.config.output_format}"
        stream_command(
            [
                "ffmpeg",
                "-v", "info",
                "-stats",
                "-nostdin",
                "-y",
                "-i", str(inputs.video_path),
                "-vf", f"scale={layout.frame_width}:-1",
                "-r", f"{layout.fps:g}",
                str(pattern),
            ],
            on_stderr=FrameProgress(layout.estimated_frames),
            timeout=self.config.timeout,
        )

        frame_list = sorted(p.name for p in output_dir.glob(f"*.{self.config.output_format}"))
        measured = frame_list if self.config.verify_frame_sizes else frame_list[:1]
        frame_sizes = measure_frames(output_dir, measured)

        logger.info(
            f"Extracted {len(frame_list)} frames (estimated {layout.estimated_frames}), "
            f"sizes: {', '.join(f'{s.width}x{s.height}' for s in frame_sizes) or '-'}"
        )
        return ExtractFramesOutput(
            frames_dir=output_dir,
            frame_count=len(frame_list),
            frame_sizes=frame_sizes,
            frame_list=frame_list,
            frame_format=self.config.output_format,
        )
