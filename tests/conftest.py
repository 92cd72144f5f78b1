"""Shared pytest fixtures for spriteatlas tests."""

import glob
import json
import subprocess
from pathlib import Path

import cv2
import numpy as np
import pytest

from spriteatlas.atlas.layout import LayoutPlan
from spriteatlas.atlas.manifest import Manifest, write_manifest


def frame_color(index: int) -> tuple[int, int, int]:
    """Distinct, exactly reproducible BGR color for a frame index."""
    return ((index * 37) % 256, (index * 91) % 256, (index * 53 + 17) % 256)


def make_frame(index: int, width: int, height: int) -> np.ndarray:
    frame = np.zeros((height, width, 3), dtype=np.uint8)
    frame[:, :] = frame_color(index)
    return frame


def tile_pages(frames: list[np.ndarray], columns: int, rows: int) -> list[np.ndarray]:
    """Row-major tiling with a full grid on every page, like montage -tile."""
    h, w = frames[0].shape[:2]
    capacity = columns * rows
    pages = []
    for start in range(0, len(frames), capacity):
        page = np.zeros((rows * h, columns * w, 3), dtype=np.uint8)
        for offset, frame in enumerate(frames[start:start + capacity]):
            row, col = divmod(offset, columns)
            page[row * h:(row + 1) * h, col * w:(col + 1) * w] = frame
        pages.append(page)
    return pages


class FakeTools:
    """Stand-ins for ffprobe, ffmpeg, montage and convert.

    They read the same command lines the steps build and write the files the
    real tools would.
    """

    def __init__(self, width=64, height=36, duration=1.0, frame_count=10, frame_width=16):
        self.width = width
        self.height = height
        self.duration = duration
        self.frame_count = frame_count
        self.frame_width = frame_width
        self.calls: list[list[str]] = []

    @property
    def frame_height(self) -> int:
        return round(self.height * self.frame_width / self.width)

    def run_command(self, cmd, cwd=None, timeout=3600, check=True):
        cmd = [str(c) for c in cmd]
        self.calls.append(cmd)
        tool = cmd[0]
        if tool == "ffprobe":
            payload = {
                "streams": [
                    {"codec_type": "audio", "duration": "9.0"},
                    {"codec_type": "video", "width": self.width, "height": self.height,
                     "duration": str(self.duration)},
                ],
                "format": {"duration": str(self.duration)},
            }
            return subprocess.CompletedProcess(cmd, 0, stdout=json.dumps(payload), stderr="")
        if tool == "montage":
            self._montage(cmd)
        elif tool == "convert":
            image = cv2.imread(cmd[1], cv2.IMREAD_COLOR)
            cv2.imwrite(cmd[-1], image)
        else:
            raise AssertionError(f"unexpected tool {tool}")
        return subprocess.CompletedProcess(cmd, 0, stdout="", stderr="")

    def stream_command(self, cmd, on_stderr, cwd=None, timeout=3600):
        cmd = [str(c) for c in cmd]
        self.calls.append(cmd)
        assert cmd[0] == "ffmpeg"
        pattern = cmd[-1]
        for i in range(self.frame_count):
            cv2.imwrite(pattern % (i + 1), make_frame(i, self.frame_width, self.frame_height))
            on_stderr(f"frame={i + 1:5d} fps=0.0 q=-0.0 size=N/A time=00:00:00.00\r")
        return 0

    def _montage(self, cmd):
        columns, rows = (int(v) for v in cmd[cmd.index("-tile") + 1].split("x"))
        frames = [cv2.imread(p, cv2.IMREAD_COLOR) for p in sorted(glob.glob(cmd[-2]))]
        for i, page in enumerate(tile_pages(frames, columns, rows)):
            cv2.imwrite(cmd[-1] % i, page)


@pytest.fixture
def fake_tools(monkeypatch) -> FakeTools:
    """Route every external tool call of the conversion steps to FakeTools."""
    tools = FakeTools()
    for module in [
        "spriteatlas.steps.s00_probe_video.step",
        "spriteatlas.steps.s02_stitch_pages.step",
        "spriteatlas.steps.s03_extract_poster.step",
    ]:
        monkeypatch.setattr(f"{module}.run_command", tools.run_command)
    monkeypatch.setattr("spriteatlas.steps.s01_extract_frames.step.stream_command", tools.stream_command)
    return tools


@pytest.fixture
def data_root(tmp_path: Path) -> Path:
    """Create a temporary data root with standard directory structure."""
    for subdir in ["raw", "interim/s01_frames", "processed"]:
        (tmp_path / subdir).mkdir(parents=True, exist_ok=True)
    return tmp_path


@pytest.fixture
def sample_video(data_root: Path) -> Path:
    """Placeholder video file; its content is never decoded by the fakes."""
    video = data_root / "raw" / "input.mov"
    video.write_bytes(b"\x00" * 64)
    return video


@pytest.fixture
def hd_layout() -> LayoutPlan:
    """1280x720 source scaled to 640 wide on 1920x1080 pages."""
    return LayoutPlan(scale=0.5, frame_width=640, frame_height=360, columns=3, rows=3,
                      fps=24.0, estimated_frames=20)


@pytest.fixture
def small_manifest() -> Manifest:
    """20 frames of 8x6 px on 3x3 pages: two full pages and one with 2 frames."""
    return Manifest(total_frames=20, page_count=3, columns=3, rows=3,
                    frame_width=8, frame_height=6, page_naming_pattern="sprite_%04d.png", fps=12.0)


@pytest.fixture
def sprite_dir(tmp_path: Path, small_manifest: Manifest) -> Path:
    """Sprite pages and info.json for ``small_manifest``."""
    sprites = tmp_path / "sprites"
    sprites.mkdir()
    frames = [make_frame(i, small_manifest.frame_width, small_manifest.frame_height)
              for i in range(small_manifest.total_frames)]
    for i, page in enumerate(tile_pages(frames, small_manifest.columns, small_manifest.rows)):
        cv2.imwrite(str(sprites / small_manifest.page_filename(i)), page)
    write_manifest(small_manifest, sprites / "info.json")
    return sprites


def color_at(canvas: np.ndarray) -> tuple[int, int, int]:
    """Color of the top-left pixel, as a tuple."""
    return tuple(int(v) for v in canvas[0, 0])

