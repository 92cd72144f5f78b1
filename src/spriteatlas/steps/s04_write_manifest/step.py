"""Step 04: Persist the manifest and remove intermediate frames.

This is the last step, so a failure anywhere earlier leaves no manifest
behind and playback reports the conversion as missing.
"""

from __future__ import annotations

import logging
import shutil
from typing import ClassVar

from spriteatlas.atlas.manifest import write_manifest
from spriteatlas.core.step_base import BaseStep
from .config import WriteManifestConfig
from .contracts import WriteManifestInput, WriteManifestOutput

logger = logging.getLogger(__name__)


class WriteManifestStep(BaseStep[WriteManifestInput, WriteManifestOutput, WriteManifestConfig]):
    name: ClassVar[str] = "write_manifest"
    input_type: ClassVar = WriteManifestInput
    output_type: ClassVar = WriteManifestOutput
    config_type: ClassVar = WriteManifestConfig

    def validate_inputs(self, inputs: WriteManifestInput) -> bool:
        missing = [
            name for name in inputs.manifest.page_filenames()
            if not (inputs.sprites_dir / name).is_file()
        ]
        if missing:
            logger.error(f"Sprite pages missing in {inputs.sprites_dir}: {', '.join(missing)}")
            return False
        return True

    def run(self, inputs: WriteManifestInput) -> WriteManifestOutput:
        manifest = inputs.manifest
        if inputs.poster is not None:
            manifest = manifest.model_copy(update={"poster": inputs.poster})

        manifest_path = write_manifest(manifest, inputs.sprites_dir / self.config.filename)

        if inputs.frames_dir is not None and not self.config.keep_frames and inputs.frames_dir.exists():
            shutil.rmtree(inputs.frames_dir)
            logger.info(f"Removed intermediate frames: {inputs.frames_dir}")

        return WriteManifestOutput(manifest_path=manifest_path, manifest=manifest)
