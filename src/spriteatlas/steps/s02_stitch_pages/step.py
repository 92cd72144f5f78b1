"""Step 02: Assemble the manifest and tile frames into sprite pages.

montage fills each page row-major from the top-left with a fixed
``columns x rows`` tile grid. The produced pages are checked against the
manifest afterwards, since the decoder relies on that layout.
"""

from __future__ import annotations

import logging
import shutil
from typing import ClassVar

import cv2

from spriteatlas.atlas.manifest import assemble, check_page_geometry
from spriteatlas.core.errors import ExternalToolError
from spriteatlas.core.step_base import BaseStep
from spriteatlas.utils.subprocess_utils import run_command
from .config import StitchPagesConfig
from .contracts import StitchPagesInput, StitchPagesOutput

logger = logging.getLogger(__name__)


class StitchPagesStep(BaseStep[StitchPagesInput, StitchPagesOutput, StitchPagesConfig]):
    name: ClassVar[str] = "stitch_pages"
    input_type: ClassVar = StitchPagesInput
    output_type: ClassVar = StitchPagesOutput
    config_type: ClassVar = StitchPagesConfig

    def validate_inputs(self, inputs: StitchPagesInput) -> bool:
        if not inputs.frames_dir.is_dir():
            logger.error(f"Frames directory not found: {inputs.frames_dir}")
            return False
        return True

    def run(self, inputs: StitchPagesInput) -> StitchPagesOutput:
        manifest = assemble(
            inputs.layout,
            inputs.frame_count,
            inputs.frame_sizes,
            page_naming_pattern=self.config.page_naming_pattern,
        )

        sprites_dir = self.data_root / "processed" / self.config.output_subdir
        if sprites_dir.exists():
            shutil.rmtree(sprites_dir)
        sprites_dir.mkdir(parents=True)

        if manifest.total_frames == 0:
            logger.warning("No frames extracted; no pages produced")
            return StitchPagesOutput(sprites_dir=sprites_dir, manifest=manifest)

        run_command(
            [
                "montage",
                "-border", "0",
                "-geometry", f"{manifest.frame_width}x{manifest.frame_height}+0+0",
                "-tile", f"{manifest.columns}x{manifest.rows}",
                "-quality", self.config.quality,
                str(inputs.frames_dir / f"*.{inputs.frame_format}"),
                str(sprites_dir / manifest.page_naming_pattern),
            ],
            timeout=self.config.timeout,
        )

        page_files = manifest.page_filenames()
        missing = [name for name in page_files if not (sprites_dir / name).is_file()]
        produced = sorted(p.name for p in sprites_dir.glob(f"*.{self.config.page_format}"))
        if missing or len(produced) != manifest.page_count:
            raise ExternalToolError(
                f"montage produced {len(produced)} pages, expected {manifest.page_count}"
                + (f" (missing {', '.join(missing)})" if missing else ""),
                cmd="montage",
            )

        page_sizes = []
        for name in page_files:
            image = cv2.imread(str(sprites_dir / name), cv2.IMREAD_UNCHANGED)
            if image is None:
                raise ExternalToolError(f"montage produced an unreadable page: {name}", cmd="montage")
            page_sizes.append((image.shape[1], image.shape[0]))
        check_page_geometry(manifest, page_sizes)

        last = manifest.frames_on_page(manifest.page_count - 1)
        logger.info(
            f"Stitched {manifest.total_frames} frames into {manifest.page_count} pages "
            f"({manifest.columns}x{manifest.rows}, last page {last} frames)"
        )
        return StitchPagesOutput(sprites_dir=sprites_dir, manifest=manifest, page_files=page_files)
