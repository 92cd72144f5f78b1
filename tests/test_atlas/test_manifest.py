"""Tests for manifest assembly, validation, geometry checks and file I/O."""

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from spriteatlas.atlas.layout import LayoutPlan
from spriteatlas.atlas.manifest import (
    DEFAULT_PAGE_PATTERN,
    Manifest,
    assemble,
    check_page_geometry,
    read_manifest,
    write_manifest,
)
from spriteatlas.core.contracts import FrameSize
from spriteatlas.core.errors import ConfigurationError, LoadError, ManifestNotFoundError

HD_FRAME = FrameSize(width=640, height=360)


class TestAssemble:
    def test_hd_scenario(self, hd_layout: LayoutPlan):
        m = assemble(hd_layout, 20, [HD_FRAME])
        assert m.capacity_per_page == 9
        assert m.page_count == 3
        assert [m.frames_on_page(p) for p in range(3)] == [9, 9, 2]

    @pytest.mark.parametrize("total,pages", [(0, 0), (1, 1), (8, 1), (9, 1), (10, 2), (18, 2), (19, 3), (81, 9)])
    def test_page_count(self, hd_layout: LayoutPlan, total, pages):
        sizes = [HD_FRAME] if total else []
        assert assemble(hd_layout, total, sizes).page_count == pages

    def test_actual_count_overrides_estimate(self, hd_layout: LayoutPlan):
        assert hd_layout.estimated_frames == 20
        m = assemble(hd_layout, 19, [HD_FRAME])
        assert m.total_frames == 19
        assert m.page_count == 3

    def test_measured_size_wins(self, hd_layout: LayoutPlan):
        m = assemble(hd_layout, 5, [FrameSize(width=640, height=361)])
        assert (m.frame_width, m.frame_height) == (640, 361)

    def test_inconsistent_sizes(self, hd_layout: LayoutPlan):
        with pytest.raises(ConfigurationError, match="differ in size"):
            assemble(hd_layout, 5, [HD_FRAME, FrameSize(width=640, height=362)])

    def test_duplicate_sizes_ok(self, hd_layout: LayoutPlan):
        m = assemble(hd_layout, 3, [HD_FRAME, HD_FRAME, HD_FRAME])
        assert m.frame_height == 360

    def test_frames_without_size(self, hd_layout: LayoutPlan):
        with pytest.raises(ConfigurationError):
            assemble(hd_layout, 5, [])

    def test_zero_frames_uses_plan_size(self, hd_layout: LayoutPlan):
        m = assemble(hd_layout, 0, [])
        assert m.page_count == 0
        assert m.page_filenames() == []
        assert (m.frame_width, m.frame_height) == (640, 360)

    def test_carries_fps_and_pattern(self, hd_layout: LayoutPlan):
        m = assemble(hd_layout, 1, [HD_FRAME], page_naming_pattern="p%03d.png", poster="poster.jpg")
        assert m.fps == 24.0
        assert m.page_filename(0) == "p000.png"
        assert m.poster == "poster.jpg"


class TestManifestModel:
    def test_page_count_must_match(self):
        with pytest.raises(ValidationError, match="page_count"):
            Manifest(total_frames=20, page_count=2, columns=3, rows=3, frame_width=8, frame_height=6)

    @pytest.mark.parametrize("pattern", ["sprite.jpg", "sprite_%d.jpg", "%04d_%04d.jpg", "s_%s_%04d.jpg", "%%04d.jpg"])
    def test_bad_pattern(self, pattern):
        with pytest.raises(ValidationError):
            Manifest(total_frames=1, page_count=1, columns=1, rows=1, frame_width=8, frame_height=6,
                     page_naming_pattern=pattern)

    def test_escaped_percent_in_pattern(self):
        m = Manifest(total_frames=1, page_count=1, columns=1, rows=1, frame_width=8, frame_height=6,
                     page_naming_pattern="100%%_%02d.jpg")
        assert m.page_filename(0) == "100%_00.jpg"
        assert m.page_number_width == 2

    def test_names_sort_in_index_order(self):
        m = Manifest(total_frames=150, page_count=150, columns=1, rows=1, frame_width=8, frame_height=6)
        names = m.page_filenames()
        assert names == sorted(names)
        assert names[0] == "sprite_0000.jpg"
        assert m.page_naming_pattern == DEFAULT_PAGE_PATTERN

    def test_page_filename_out_of_range(self, small_manifest: Manifest):
        with pytest.raises(IndexError):
            small_manifest.page_filename(3)
        with pytest.raises(IndexError):
            small_manifest.frames_on_page(-1)

    def test_camel_case_json(self, small_manifest: Manifest):
        data = json.loads(small_manifest.model_dump_json(by_alias=True))
        assert data["totalFrames"] == 20
        assert data["pageCount"] == 3
        assert data["frameWidth"] == 8
        assert data["frameHeight"] == 6
        assert data["pageNamingPattern"] == "sprite_%04d.png"
        assert data["columns"] == 3 and data["rows"] == 3

    def test_accepts_field_names(self, small_manifest: Manifest):
        again = Manifest(**small_manifest.model_dump())
        assert again == small_manifest


class TestGeometry:
    def test_full_grid_pages(self, small_manifest: Manifest):
        check_page_geometry(small_manifest, [(24, 18)] * 3)

    def test_compacted_last_page(self, small_manifest: Manifest):
        # last page holds 2 frames in one row
        check_page_geometry(small_manifest, [(24, 18), (24, 18), (16, 6)])

    def test_page_count_mismatch(self, small_manifest: Manifest):
        with pytest.raises(ConfigurationError, match="Expected 3 pages"):
            check_page_geometry(small_manifest, [(24, 18)] * 2)

    def test_last_page_regridded(self):
        # 7 frames on the last page of a 3x3 grid, retiled by the tool as 4 columns
        m = Manifest(total_frames=16, page_count=2, columns=3, rows=3, frame_width=8, frame_height=6)
        with pytest.raises(ConfigurationError, match="Page 1"):
            check_page_geometry(m, [(24, 18), (32, 12)])

    def test_page_too_small(self, small_manifest: Manifest):
        with pytest.raises(ConfigurationError):
            check_page_geometry(small_manifest, [(24, 12), (24, 18), (24, 18)])

    def test_last_page_too_narrow(self, small_manifest: Manifest):
        with pytest.raises(ConfigurationError):
            check_page_geometry(small_manifest, [(24, 18), (24, 18), (8, 6)])


class TestManifestFile:
    def test_write_and_read(self, tmp_path: Path, small_manifest: Manifest):
        path = write_manifest(small_manifest, tmp_path / "out" / "info.json")
        assert path.exists()
        assert read_manifest(path) == small_manifest

    def test_missing(self, tmp_path: Path):
        with pytest.raises(ManifestNotFoundError):
            read_manifest(tmp_path / "info.json")

    def test_missing_is_load_error(self, tmp_path: Path):
        with pytest.raises(LoadError):
            read_manifest(tmp_path / "info.json")

    def test_invalid_json(self, tmp_path: Path):
        path = tmp_path / "info.json"
        path.write_text("{not json")
        with pytest.raises(LoadError):
            read_manifest(path)

    def test_inconsistent_content(self, tmp_path: Path):
        path = tmp_path / "info.json"
        path.write_text(json.dumps({
            "totalFrames": 20, "pageCount": 5, "columns": 3, "rows": 3,
            "frameWidth": 8, "frameHeight": 6, "pageNamingPattern": "s_%04d.jpg",
        }))
        with pytest.raises(LoadError, match="Invalid manifest"):
            read_manifest(path)
