"""
Tests for the ReportLab drawing surface.

Tests covering:
1. Page geometry and measurement
2. Word wrap and font fitting
3. Text placement and drawing state
4. Serialization
"""

import pytest

from reporting.surface import CanvasSurface

from conftest import RecordingSurface


def _draw_everything(surface):
    surface.set_metadata(title="t", author="a", subject="s", keywords="k", creator="c")
    surface.fill_page((250, 250, 250))
    surface.set_font("Helvetica-Bold", 14)
    surface.set_text_color((10, 20, 30))
    surface.text("Left", 20, 20)
    surface.text("Right", 190, 30, align="right")
    surface.text("Centre", 105, 40, align="center")
    surface.text(["one", "two"], 20, 50, leading=6)
    surface.rotated_text("DIAGONAL", 105, 148, 45)
    surface.set_fill_color((200, 0, 0))
    surface.set_draw_color((0, 0, 200))
    surface.set_line_width(0.5)
    surface.rect(20, 60, 50, 10, fill=True, stroke=True)
    surface.line(20, 80, 190, 80)
    surface.triangle([(210, 0), (210, 60), (120, 0)])
    surface.circle(100, 100, 5)
    with surface.opacity(0.2):
        surface.rect(20, 110, 50, 10, fill=True, stroke=False)
    surface.link("https://example.com", 20, 120, 30, 5)
    return surface.to_bytes()


# =============================================================================
# Test: Geometry & Measurement
# =============================================================================


class TestMeasurement:

    def test_a4_in_millimetres(self):
        assert CanvasSurface.PAGE_WIDTH == pytest.approx(210, abs=0.01)
        assert CanvasSurface.PAGE_HEIGHT == pytest.approx(297, abs=0.01)

    def test_line_height(self, surface):
        surface.set_font_size(10)
        assert surface.line_height == pytest.approx(10 * 1.15 * 25.4 / 72)

    def test_text_width_scales_with_size(self, surface):
        small = surface.text_width("Invoice", "Helvetica", 10)
        large = surface.text_width("Invoice", "Helvetica", 20)

        assert small > 0
        assert large == pytest.approx(2 * small)
        assert surface.text_width("") == 0

    def test_text_width_uses_current_font(self, surface):
        surface.set_font("Helvetica-Bold", 12)
        assert surface.text_width("Total") == pytest.approx(
            surface.text_width("Total", "Helvetica-Bold", 12)
        )


class TestWrapAndFit:

    def test_split_text_respects_width(self, surface):
        surface.set_font("Helvetica", 9)
        text = "alpha beta gamma delta epsilon zeta eta theta iota kappa lambda mu"
        lines = surface.split_text(text, 40)

        assert len(lines) > 1
        assert " ".join(lines) == text
        for line in lines:
            assert surface.text_width(line) <= 40 + 1e-6

    def test_split_text_empty(self, surface):
        assert surface.split_text("", 50) == [""]
        assert surface.split_text(None, 50) == [""]

    def test_fit_keeps_size_when_text_fits(self, surface):
        assert surface.fit_font_size("Acme", 100, 24) == 24

    def test_fit_shrinks_long_text(self, surface):
        surface.set_font("Helvetica-Bold")
        text = "An Exceptionally Long Company Name Limited"
        size = surface.fit_font_size(text, 100, 24)

        assert size < 24
        assert surface.text_width(text, font_size=size) == pytest.approx(100)

    def test_fit_has_a_floor(self, surface):
        assert surface.fit_font_size("x" * 500, 10, 24, min_size=6) == 6


# =============================================================================
# Test: Drawing State
# =============================================================================


class TestDrawing:

    def test_multi_line_text_uses_leading(self):
        surface = RecordingSurface()
        surface.text(["first", "second", "third"], 20, 100, leading=5)
        assert [(t.text, t.y) for t in surface.texts] == [
            ("first", 100),
            ("second", 105),
            ("third", 110),
        ]

    def test_text_records_current_state(self):
        surface = RecordingSurface()
        surface.set_font("Times-Bold", 18)
        surface.set_text_color((1, 2, 3))
        surface.text("Title", 105, 40, align="center")

        (drawn,) = surface.texts
        assert (drawn.font_name, drawn.font_size, drawn.color, drawn.align) == (
            "Times-Bold", 18, (1, 2, 3), "center",
        )

    def test_set_font_without_size_keeps_size(self, surface):
        surface.set_font("Helvetica", 13)
        surface.set_font("Times-Roman")
        assert (surface.font_name, surface.font_size) == ("Times-Roman", 13)

    def test_state_set_inside_opacity_block_persists(self, surface):
        surface.set_fill_color((9, 9, 9))
        with surface.opacity(0.5):
            surface.set_fill_color((1, 1, 1))
        assert surface.fill_color == (1, 1, 1)
        assert surface.to_bytes().startswith(b"%PDF-")


# =============================================================================
# Test: Serialization
# =============================================================================


class TestSerialization:

    def test_every_primitive_serializes(self):
        pdf_bytes = _draw_everything(CanvasSurface())
        assert pdf_bytes.startswith(b"%PDF-")
        assert b"https://example.com" in pdf_bytes

    def test_invariant_output_is_stable(self):
        assert _draw_everything(CanvasSurface()) == _draw_everything(CanvasSurface())
