"""Load all sprite pages of a manifest before playback starts."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import cv2
import numpy as np

from spriteatlas.atlas.manifest import Manifest, check_page_geometry
from spriteatlas.core.errors import ConfigurationError, LoadError

logger = logging.getLogger(__name__)


def load_page(path: Path) -> np.ndarray:
    """Read one page image as BGR."""
    image = cv2.imread(str(path), cv2.IMREAD_COLOR)
    if image is None:
        raise LoadError(f"Cannot load page image: {path}")
    return image


def load_pages(
    manifest: Manifest,
    sprites_dir: Path,
    max_workers: int | None = None,
) -> list[np.ndarray]:
    """Load every page in parallel; all pages or a ``LoadError``.

    Pages are returned in index order and checked against the manifest grid.
    """
    sprites_dir = Path(sprites_dir)
    paths = [sprites_dir / name for name in manifest.page_filenames()]
    missing = [p.name for p in paths if not p.is_file()]
    if missing:
        raise LoadError(f"Missing page images in {sprites_dir}: {', '.join(missing)}")

    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        pages = list(pool.map(load_page, paths))

    try:
        check_page_geometry(manifest, [(p.shape[1], p.shape[0]) for p in pages])
    except ConfigurationError as e:
        raise LoadError(f"Page images do not match manifest: {e}") from e

    logger.info(f"Loaded {len(pages)} pages from {sprites_dir}")
    return pages
