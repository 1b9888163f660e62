"""Tests for modules.renderer"""

import random
from dataclasses import replace

from PIL import Image

from modules.layout import LayoutEngine
from modules.renderer import Renderer


def _image(path, size, color, mode="RGB"):
    Image.new(mode, size, color).save(path)
    return path


def _layout(tone="neutral", objective="awareness", format="square", has_logo=False):
    return LayoutEngine(rng=random.Random(0)).resolve(tone, objective, format, has_logo=has_logo)


def test_render_places_main_asset_in_its_rect(tmp_path) -> None:
    main = _image(tmp_path / "main.png", (200, 100), (255, 0, 0))
    layout = _layout()

    image = Renderer(fonts_dir=tmp_path).render(layout, main)

    assert image.size == (1080, 1080)
    assert image.mode == "RGB"
    # 810x405 after aspect fit, placed at (135, 135)
    assert image.getpixel((540, 300)) == (255, 0, 0)
    assert image.getpixel((540, 600)) == (255, 255, 255)
    assert image.getpixel((5, 5)) == (255, 255, 255)


def test_render_draws_text_box_background(tmp_path) -> None:
    main = _image(tmp_path / "main.png", (100, 100), (255, 0, 0))
    layout = _layout()

    image = Renderer(fonts_dir=tmp_path).render(layout, main)

    # left end of the text box is plain rgba(0,0,0,0.4) over white
    r, g, b = image.getpixel((layout.text_overlay.rect.x + 3, layout.text_overlay.rect.y + 3))
    assert r == g == b
    assert 140 < r < 170


def test_story_background_blends_gradient(tmp_path) -> None:
    main = _image(tmp_path / "main.png", (100, 100), (255, 0, 0))
    layout = _layout("bold", "sales", "story")

    image = Renderer(fonts_dir=tmp_path).render(layout, main)

    assert image.size == (1080, 1920)
    top = image.getpixel((5, 5))
    bottom = image.getpixel((5, 1915))
    assert top != bottom


def test_logo_is_drawn_with_opacity(tmp_path) -> None:
    main = _image(tmp_path / "main.png", (100, 100), (255, 0, 0))
    logo = _image(tmp_path / "logo.png", (140, 50), (0, 0, 255, 255), mode="RGBA")
    layout = _layout(has_logo=True)

    image = Renderer(fonts_dir=tmp_path).render(layout, main, logo_path=logo)

    rect = layout.logo.rect
    r, g, b = image.getpixel((rect.x + 60, rect.y + 25))
    assert b > 240
    assert r < 30 and g < 30


def test_unreadable_logo_is_skipped(tmp_path) -> None:
    main = _image(tmp_path / "main.png", (100, 100), (255, 0, 0))
    broken = tmp_path / "logo.png"
    broken.write_bytes(b"not an image")

    image = Renderer(fonts_dir=tmp_path).render(_layout(has_logo=True), main, logo_path=broken)

    assert image.size == (1080, 1080)


def test_bg_remove_clips_asset_to_ellipse(tmp_path) -> None:
    main = _image(tmp_path / "main.png", (100, 100), (255, 0, 0))
    layout = _layout()

    image = Renderer(fonts_dir=tmp_path).render(layout, main, bg_remove=True)

    main_rect = layout.main_asset
    assert image.getpixel((main_rect.x + 2, main_rect.y + 2)) == (255, 255, 255)
    assert image.getpixel((main_rect.x + 405, main_rect.y + 405)) == (255, 0, 0)


def test_safe_area_guide_can_be_disabled(tmp_path, monkeypatch) -> None:
    from config import settings

    main = _image(tmp_path / "main.png", (100, 100), (255, 0, 0))
    layout = _layout("bold", "awareness", "square")
    layout = replace(layout, main_asset=replace(layout.main_asset, x=500, y=500, width=10, height=10))

    with_guide = Renderer(fonts_dir=tmp_path).render(layout, main)
    monkeypatch.setattr(settings, "SHOW_SAFE_AREA_GUIDE", False)
    without_guide = Renderer(fonts_dir=tmp_path).render(layout, main)

    assert with_guide.getpixel((40, 300)) != without_guide.getpixel((40, 300))


def test_contrast_fix_darkens_text_band(tmp_path) -> None:
    image = Image.new("RGB", (1080, 1080), (255, 255, 255))

    fixed = Renderer(fonts_dir=tmp_path).apply_contrast_fix(image)

    assert fixed.mode == "RGB"
    r, g, b = fixed.getpixel((1080 - 420 + 10, 1080 - 200 + 10))
    assert r == g == b
    assert 160 < r < 172
    assert fixed.getpixel((10, 10)) == (255, 255, 255)
    assert fixed.getpixel((1079, 1079)) == (255, 255, 255)
