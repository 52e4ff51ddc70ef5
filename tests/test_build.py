from __future__ import annotations

import json

import pytest

from sitelib.build import ICONS_DATA_FILE, METADATA_DATA_FILE, run_build
from sitelib.config import Config
from sitelib.errors import IconMissingError


def test_build_writes_cursors_only_without_data_dir(icons_dir, tmp_path):
    out = tmp_path / "public" / "icons"
    report = run_build(Config(icons_dir=icons_dir, output_dir=out))

    assert sorted(p.name for p in out.iterdir()) == ["arrow-left.svg", "arrow-right.svg"]
    assert set(report.icons) == {"externalLink", "linkedin", "instagram"}
    assert report.data_files == []
    assert report.failures == []


def test_build_writes_data_files(icons_dir, tmp_path):
    data_dir = tmp_path / "_data" / "generated"
    cfg = Config(icons_dir=icons_dir, output_dir=tmp_path / "out", data_dir=data_dir)
    report = run_build(cfg)

    assert report.data_files == [data_dir / ICONS_DATA_FILE, data_dir / METADATA_DATA_FILE]
    bundle = json.loads((data_dir / ICONS_DATA_FILE).read_text(encoding="utf-8"))
    assert set(bundle) == {"externalLink", "linkedin", "instagram"}
    assert all(markup.startswith("<svg") for markup in bundle.values())

    metadata = json.loads((data_dir / METADATA_DATA_FILE).read_text(encoding="utf-8"))
    assert metadata["title"] == "Other Dev®"
    assert metadata["author"]["url"] == "https://otherdev.com/"


def test_build_lenient_reports_failures(icons_dir, tmp_path):
    (icons_dir / "brand-instagram.svg").unlink()
    (icons_dir / "circle-arrow-left.svg").unlink()
    data_dir = tmp_path / "data"
    report = run_build(Config(icons_dir=icons_dir, output_dir=tmp_path / "out", data_dir=data_dir))

    assert report.failures == ["circle-arrow-left", "brand-instagram"]
    bundle = json.loads((data_dir / ICONS_DATA_FILE).read_text(encoding="utf-8"))
    assert bundle["instagram"] == ""


def test_build_strict_raises_before_data_files(icons_dir, tmp_path):
    (icons_dir / "external-link.svg").unlink()
    data_dir = tmp_path / "data"
    cfg = Config(icons_dir=icons_dir, output_dir=tmp_path / "out", data_dir=data_dir)

    with pytest.raises(IconMissingError) as excinfo:
        run_build(cfg, strict=True)

    assert excinfo.value.names == ["external-link"]
    assert not data_dir.exists()
    # cursors are unaffected by the missing inline icon
    assert (tmp_path / "out" / "arrow-left.svg").stat().st_size > 0


def test_build_strict_passes_when_complete(icons_dir, tmp_path):
    report = run_build(Config(icons_dir=icons_dir, output_dir=tmp_path / "out"), strict=True)
    assert report.failures == []
