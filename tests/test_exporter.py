"""Tests for modules.exporter"""

import itertools

import pytest
from PIL import Image

from modules.exporter import PLATFORM_EXPORT_SPECS, PlatformExporter
from utils.exceptions import UnsupportedPlatformError


def _source(tmp_path, size=(200, 100)):
    path = tmp_path / "rendered-1.png"
    Image.new("RGB", size, (255, 0, 0)).save(path)
    return path


def test_export_resizes_with_letterbox(tmp_path) -> None:
    exporter = PlatformExporter(output_dir=tmp_path / "exports")

    result = exporter.export(_source(tmp_path), "Meta", "story")

    assert result["success"] is True
    assert result["platform"] == "meta"
    assert result["format"] == "story"
    assert result["dimensions"] == {"width": 1080, "height": 1920}
    assert result["requirements"]["max_text_coverage"] == 0.2
    assert result["image_url"].startswith("/exports/export-meta-story-")

    output = tmp_path / "exports" / result["image_url"].rsplit("/", 1)[1]
    assert output.stat().st_size == result["file_size"]
    with Image.open(output) as image:
        assert image.size == (1080, 1920)
        assert image.convert("RGB").getpixel((540, 10)) == (255, 255, 255)
        assert image.convert("RGB").getpixel((540, 960)) == (255, 0, 0)


def test_export_defaults_to_square(tmp_path) -> None:
    exporter = PlatformExporter(output_dir=tmp_path / "exports")

    result = exporter.export(_source(tmp_path), "google")

    assert result["format"] == "square"
    assert result["dimensions"] == {"width": 250, "height": 250}


def test_unsupported_combination_lists_platforms(tmp_path) -> None:
    exporter = PlatformExporter(output_dir=tmp_path / "exports")

    with pytest.raises(UnsupportedPlatformError) as excinfo:
        exporter.export(_source(tmp_path), "amazon", "story")

    assert excinfo.value.available == ["meta", "google", "amazon"]
    assert "amazon/story" in excinfo.value.message


def test_every_spec_has_dimensions() -> None:
    for formats in PLATFORM_EXPORT_SPECS.values():
        for spec in formats.values():
            assert spec["width"] > 0 and spec["height"] > 0


def test_batch_reports_failures_in_place(tmp_path) -> None:
    exporter = PlatformExporter(output_dir=tmp_path / "exports")

    result = exporter.export_batch(_source(tmp_path), [
        {"platform": "amazon", "format": "thumbnail"},
        {"platform": "tiktok", "format": "square"},
    ])

    assert result["total"] == 2
    assert result["successful"] == 1
    assert result["exports"][0]["dimensions"] == {"width": 75, "height": 75}
    assert result["exports"][1]["success"] is False
    assert "tiktok" in result["exports"][1]["error"]
    assert [p.name for p in exporter.list_exports()] == [result["exports"][0]["image_url"].rsplit("/", 1)[1]]


def test_missing_source_is_reported(tmp_path) -> None:
    exporter = PlatformExporter(output_dir=tmp_path / "exports")

    result = exporter.export_batch(tmp_path / "missing.png", [{"platform": "meta", "format": "square"}])

    assert result["successful"] == 0
    assert result["exports"][0]["success"] is False


def test_exports_in_same_millisecond_get_distinct_files(tmp_path, monkeypatch) -> None:
    exporter = PlatformExporter(output_dir=tmp_path / "exports")
    monkeypatch.setattr("modules.exporter.time.time", lambda: 1700000000.0)
    suffixes = itertools.count()
    monkeypatch.setattr("modules.exporter.random.randint", lambda a, b: next(suffixes))

    first = exporter.export(_source(tmp_path), "meta", "square")
    second = exporter.export(_source(tmp_path), "meta", "square")

    assert first["image_url"] != second["image_url"]
    assert len(exporter.list_exports()) == 2
