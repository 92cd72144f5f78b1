"""Configuration for Step 02: Tile frames into sprite pages with montage."""

from pydantic import BaseModel, Field


class StitchPagesConfig(BaseModel):
    output_subdir: str = Field("sprites", description="Sprite directory under data_root/processed")
    sprite_filename_prefix: str = Field("sprite_", description="Page file name prefix")
    sprite_number_width: int = Field(4, ge=1, description="Zero-pad width of page numbers")
    page_format: str = Field("jpg", description="Page image format")
    quality: str = Field("60%", description="Page image quality passed to montage")
    timeout: int = Field(3600, gt=0, description="montage timeout in seconds")

    @property
    def page_naming_pattern(self) -> str:
        prefix = self.sprite_filename_prefix.replace("%", "%%")
        return f"{prefix}%0{self.sprite_number_width}d.{self.page_format}"
