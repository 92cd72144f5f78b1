"""Step 03: Convert the first extracted frame into a poster image."""

from __future__ import annotations

import logging
from typing import ClassVar

from spriteatlas.core.step_base import BaseStep
from spriteatlas.utils.subprocess_utils import run_command
from .config import ExtractPosterConfig
from .contracts import ExtractPosterInput, ExtractPosterOutput

logger = logging.getLogger(__name__)


class ExtractPosterStep(BaseStep[ExtractPosterInput, ExtractPosterOutput, ExtractPosterConfig]):
    name: ClassVar[str] = "extract_poster"
    input_type: ClassVar = ExtractPosterInput
    output_type: ClassVar = ExtractPosterOutput
    config_type: ClassVar = ExtractPosterConfig

    def validate_inputs(self, inputs: ExtractPosterInput) -> bool:
        if not inputs.sprites_dir.is_dir():
            logger.error(f"Sprite directory not found: {inputs.sprites_dir}")
            return False
        if inputs.frame_list and not (inputs.frames_dir / inputs.frame_list[0]).is_file():
            logger.error(f"First frame not found: {inputs.frames_dir / inputs.frame_list[0]}")
            return False
        return True

    def run(self, inputs: ExtractPosterInput) -> ExtractPosterOutput:
        if not self.config.enabled:
            logger.info("Poster disabled")
            return ExtractPosterOutput()
        if not inputs.frame_list:
            logger.warning("No frames extracted; skipping poster")
            return ExtractPosterOutput()

        run_command(
            [
                "convert",
                str(inputs.frames_dir / inputs.frame_list[0]),
                "-quality", self.config.quality,
                str(inputs.sprites_dir / self.config.filename),
            ],
            timeout=self.config.timeout,
        )
        return ExtractPosterOutput(poster=self.config.filename)
