"""Configuration for Step 04: Write the manifest."""

from pydantic import BaseModel, Field

from spriteatlas.atlas.manifest import MANIFEST_FILENAME


class WriteManifestConfig(BaseModel):
    filename: str = Field(MANIFEST_FILENAME, description="Manifest file name in the sprite directory")
    keep_frames: bool = Field(False, description="Keep the intermediate frames directory")
