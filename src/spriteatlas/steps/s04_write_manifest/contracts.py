"""I/O contracts for Step 04: Write the manifest."""

from pathlib import Path
from pydantic import BaseModel, Field

from spriteatlas.atlas.manifest import Manifest


class WriteManifestInput(BaseModel):
    sprites_dir: Path = Field(..., description="Directory containing sprite pages")
    manifest: Manifest = Field(..., description="Manifest assembled by stitch_pages")
    poster: str | None = Field(None, description="Poster file name from extract_poster")
    frames_dir: Path | None = Field(None, description="Intermediate frames directory to clean up")


class WriteManifestOutput(BaseModel):
    manifest_path: Path = Field(..., description="Path of the written manifest")
    manifest: Manifest = Field(..., description="Manifest as written")
