"""Create a synthetic MP4 with numbered frames for trying the conversion.

Each frame shows its index, so a played-back sprite atlas can be checked by
eye for order and wraparound.

Usage:
    python scripts/create_test_video.py [num_frames] [output]
"""

from pathlib import Path
import sys

import cv2
import numpy as np


def create_video(
    output_path: Path,
    num_frames: int = 120,
    resolution: tuple[int, int] = (1280, 720),
    fps: float = 24.0,
) -> int:
    """Write a gradient video with the frame number drawn on every frame.

    Returns number of frames written.
    """
    width, height = resolution
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fourcc = cv2.VideoWriter_fourcc(*"mp4v")
    writer = cv2.VideoWriter(str(output_path), fourcc, fps, (width, height))

    gradient = np.linspace(0, 255, width, dtype=np.uint8)
    for i in range(num_frames):
        frame = np.zeros((height, width, 3), dtype=np.uint8)
        frame[:, :, 0] = gradient
        frame[:, :, 2] = int(255 * i / max(1, num_frames - 1))
        cv2.putText(
            frame,
            f"{i:04d}",
            (width // 3, height // 2),
            cv2.FONT_HERSHEY_SIMPLEX,
            height / 180,
            (255, 255, 255),
            max(1, height // 120),
        )
        writer.write(frame)

    writer.release()
    print(f"Created {output_path}: {num_frames} frames, {width}x{height} @ {fps}fps")
    return num_frames


if __name__ == "__main__":
    num_frames = int(sys.argv[1]) if len(sys.argv) > 1 else 120
    output = Path(sys.argv[2]) if len(sys.argv) > 2 else Path("data/raw/input.mp4")
    create_video(output, num_frames=num_frames)
