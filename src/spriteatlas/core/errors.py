"""Exception taxonomy shared by the conversion pipeline and the player.

Decoding an out-of-range frame index raises the builtin ``IndexError``;
everything else raised on purpose derives from ``SpriteAtlasError``.
"""

from __future__ import annotations


class SpriteAtlasError(Exception):
    """Base class for all sprite atlas errors."""


class ConfigurationError(SpriteAtlasError, ValueError):
    """Invalid or impossible layout constraints or inconsistent frame data."""


class LayoutError(ConfigurationError):
    """The target frame does not fit even once into a page dimension."""


class ExternalToolError(SpriteAtlasError, RuntimeError):
    """An external process (ffprobe, ffmpeg, montage, convert) failed."""

    def __init__(
        self,
        message: str,
        cmd: str = "",
        returncode: int | None = None,
        stderr: str = "",
    ):
        super().__init__(message)
        self.cmd = cmd
        self.returncode = returncode
        self.stderr = stderr


class LoadError(SpriteAtlasError, RuntimeError):
    """Playback inputs (manifest or page images) could not be loaded."""


class ManifestNotFoundError(LoadError):
    """No manifest exists, usually because the conversion never finished."""


class PlaybackError(SpriteAtlasError, RuntimeError):
    """Illegal player lifecycle transition."""
