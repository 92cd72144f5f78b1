"""Video to sprite sheet atlas conversion and fixed-rate playback."""

__version__ = "0.1.0"
