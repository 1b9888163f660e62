"""Tests for modules.platform"""

import random
from dataclasses import replace

from modules.descriptor import Rect
from modules.layout import LayoutEngine
from modules.platform import normalize, text_coverage


def _layout(tone="neutral", objective="awareness", format="square"):
    return LayoutEngine(rng=random.Random(0)).resolve(tone, objective, format)


def _with_text_rect(layout, rect):
    return replace(layout, text_overlay=replace(layout.text_overlay, rect=rect))


def test_oversized_text_box_is_scaled_down_from_top_left() -> None:
    layout = _with_text_rect(_layout(), Rect(x=50, y=60, width=1080, height=540))
    coverage = text_coverage(layout)
    scale = 0.2 / coverage

    result = normalize(layout, "square", clamp_far_edge=False)

    rect = result.text_overlay.rect
    assert (rect.x, rect.y) == (50, 60)
    assert rect.width == int(1080 * scale)
    assert rect.height == int(540 * scale)
    assert text_coverage(result) <= 0.2


def test_normalize_does_not_mutate_input() -> None:
    original_rect = Rect(x=0, y=0, width=1080, height=1080)
    layout = _with_text_rect(_layout(), original_rect)

    normalize(layout, "square", clamp_far_edge=False)

    assert layout.text_overlay.rect == original_rect


def test_text_within_limit_is_untouched() -> None:
    layout = _layout("bold", "sales", "story")
    assert normalize(layout, "story", clamp_far_edge=False) == layout


def test_normalize_is_idempotent() -> None:
    layout = _with_text_rect(_layout("neutral", "conversion", "banner"), Rect(x=10, y=10, width=1200, height=400))
    once = normalize(layout, "banner", clamp_far_edge=False)
    assert normalize(once, "banner", clamp_far_edge=False) == once


def test_near_edge_is_clamped_into_safe_zone() -> None:
    layout = _layout()
    layout = replace(layout, main_asset=Rect(x=5, y=-20, width=810, height=810))

    result = normalize(layout, "square", clamp_far_edge=False)

    assert (result.main_asset.x, result.main_asset.y) == (40, 40)


def test_far_edge_only_clamped_when_enabled() -> None:
    layout = replace(_layout(), main_asset=Rect(x=1000, y=900, width=810, height=810))

    partial = normalize(layout, "square", clamp_far_edge=False)
    assert (partial.main_asset.x, partial.main_asset.y) == (1000, 900)

    full = normalize(layout, "square", clamp_far_edge=True)
    assert (full.main_asset.x, full.main_asset.y) == (230, 230)


def test_far_edge_default_comes_from_settings(monkeypatch) -> None:
    from config import settings

    monkeypatch.setattr(settings, "NORMALIZE_CLAMP_FAR_EDGE", True)
    layout = replace(_layout(), main_asset=Rect(x=1000, y=900, width=810, height=810))

    result = normalize(layout, "square")

    assert (result.main_asset.x, result.main_asset.y) == (230, 230)


def test_unknown_format_normalizes_as_square() -> None:
    layout = _with_text_rect(_layout(), Rect(x=0, y=0, width=1080, height=540))
    assert normalize(layout, "billboard", clamp_far_edge=False) == normalize(layout, "square", clamp_far_edge=False)
