"""
Drawing surface for invoice layouts.

Wraps a ReportLab canvas so layout code can work the way invoice designs
are specified: millimetres, origin at the top-left corner, y growing down
the page, text positioned by its baseline. Every primitive re-applies the
current font/colour state, so ``saveState``/``restoreState`` pairs inside
the surface never leak into the caller's view of that state.
"""

from __future__ import annotations

from contextlib import contextmanager
from io import BytesIO
from typing import Iterator, List, Optional, Sequence, Tuple, Union

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas

from .palette import BLACK, RGB

# Baseline-to-baseline spacing as a multiple of the font size
LINE_HEIGHT_FACTOR = 1.15
POINT_IN_MM = 25.4 / 72

TextValue = Union[str, Sequence[str]]


def _rgb(color: RGB) -> Tuple[float, float, float]:
    r, g, b = color
    return r / 255.0, g / 255.0, b / 255.0


class CanvasSurface:
    """
    A single A4 page drawn with ReportLab.

    Usage:
        surface = CanvasSurface()
        surface.set_font("Helvetica-Bold", 24)
        surface.text("INVOICE", 195, 40, align="right")
        pdf_bytes = surface.to_bytes()

    With ``invariant`` set, ReportLab freezes the creation timestamp and
    document id, so identical drawing sequences give identical bytes.
    """

    PAGE_WIDTH = A4[0] / mm
    PAGE_HEIGHT = A4[1] / mm

    def __init__(self, invariant: bool = True):
        self._buffer = BytesIO()
        self._canvas = canvas.Canvas(
            self._buffer,
            pagesize=A4,
            invariant=1 if invariant else 0,
        )
        self.font_name = "Helvetica"
        self.font_size = 10.0
        self.text_color: RGB = BLACK
        self.fill_color: RGB = BLACK
        self.draw_color: RGB = BLACK
        self.line_width = 0.2

    # =========================================================================
    # State
    # =========================================================================

    def set_font(self, name: str, size: Optional[float] = None) -> None:
        self.font_name = name
        if size is not None:
            self.font_size = size

    def set_font_size(self, size: float) -> None:
        self.font_size = size

    def set_text_color(self, color: RGB) -> None:
        self.text_color = color

    def set_fill_color(self, color: RGB) -> None:
        self.fill_color = color

    def set_draw_color(self, color: RGB) -> None:
        self.draw_color = color

    def set_line_width(self, width: float) -> None:
        """Line width in millimetres."""
        self.line_width = width

    @contextmanager
    def opacity(self, alpha: float) -> Iterator[None]:
        """Scope fill and stroke opacity to the ``with`` block."""
        self._canvas.saveState()
        self._canvas.setFillAlpha(alpha)
        self._canvas.setStrokeAlpha(alpha)
        try:
            yield
        finally:
            self._canvas.restoreState()

    # =========================================================================
    # Coordinates & Measurement
    # =========================================================================

    def _y(self, y: float) -> float:
        return (self.PAGE_HEIGHT - y) * mm

    @property
    def line_height(self) -> float:
        """Default baseline-to-baseline distance in mm for the current font."""
        return self.font_size * LINE_HEIGHT_FACTOR * POINT_IN_MM

    def text_width(self, text: str, font_name: Optional[str] = None,
                   font_size: Optional[float] = None) -> float:
        """Width of ``text`` in mm."""
        return stringWidth(
            text,
            font_name or self.font_name,
            font_size if font_size is not None else self.font_size,
        ) / mm

    def split_text(self, text: str, max_width: float) -> List[str]:
        """Word-wrap ``text`` to ``max_width`` mm. Always returns at least one line."""
        lines = simpleSplit(text or "", self.font_name, self.font_size, max_width * mm)
        return lines or [""]

    def fit_font_size(self, text: str, max_width: float, max_size: float,
                      min_size: float = 6.0) -> float:
        """Largest size (down to ``min_size``) at which ``text`` fits ``max_width``."""
        width = self.text_width(text, font_size=max_size)
        if width <= max_width or width == 0:
            return max_size
        return max(min_size, max_size * max_width / width)

    # =========================================================================
    # Text
    # =========================================================================

    def _apply_text_state(self) -> None:
        self._canvas.setFont(self.font_name, self.font_size)
        self._canvas.setFillColorRGB(*_rgb(self.text_color))

    def text(self, value: TextValue, x: float, y: float, align: str = "left",
             leading: Optional[float] = None) -> None:
        """
        Draw text with its first baseline at (x, y).

        ``value`` may be a list of pre-wrapped lines; they are stacked
        ``leading`` mm apart (default: the font's line height).
        """
        lines = [value] if isinstance(value, str) else list(value)
        step = leading if leading is not None else self.line_height
        for index, line in enumerate(lines):
            self._draw_line_of_text(line, x, y + index * step, align)

    def _draw_line_of_text(self, line: str, x: float, y: float, align: str) -> None:
        self._apply_text_state()
        px, py = x * mm, self._y(y)
        if align == "right":
            self._canvas.drawRightString(px, py, line)
        elif align == "center":
            self._canvas.drawCentredString(px, py, line)
        else:
            self._canvas.drawString(px, py, line)

    def rotated_text(self, value: str, cx: float, cy: float, angle: float) -> None:
        """Draw ``value`` centred on (cx, cy), rotated ``angle`` degrees counter-clockwise."""
        self._canvas.saveState()
        self._apply_text_state()
        self._canvas.translate(cx * mm, self._y(cy))
        self._canvas.rotate(angle)
        self._canvas.drawCentredString(0, 0, value)
        self._canvas.restoreState()

    def link(self, url: str, x: float, y: float, width: float, height: float) -> None:
        """Clickable URL annotation over the box whose top-left is (x, y)."""
        self._canvas.linkURL(
            url,
            (x * mm, self._y(y + height), (x + width) * mm, self._y(y)),
            relative=0,
            thickness=0,
        )

    # =========================================================================
    # Shapes
    # =========================================================================

    def _apply_shape_state(self) -> None:
        self._canvas.setFillColorRGB(*_rgb(self.fill_color))
        self._canvas.setStrokeColorRGB(*_rgb(self.draw_color))
        self._canvas.setLineWidth(self.line_width * mm)

    def rect(self, x: float, y: float, width: float, height: float,
             fill: bool = False, stroke: bool = True) -> None:
        """Rectangle with top-left corner at (x, y)."""
        self._apply_shape_state()
        self._canvas.rect(
            x * mm,
            self._y(y + height),
            width * mm,
            height * mm,
            stroke=1 if stroke else 0,
            fill=1 if fill else 0,
        )

    def line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        self._apply_shape_state()
        self._canvas.line(x1 * mm, self._y(y1), x2 * mm, self._y(y2))

    def triangle(self, points: Sequence[Tuple[float, float]], fill: bool = True,
                 stroke: bool = False) -> None:
        self._apply_shape_state()
        path = self._canvas.beginPath()
        (x0, y0), rest = points[0], points[1:]
        path.moveTo(x0 * mm, self._y(y0))
        for px, py in rest:
            path.lineTo(px * mm, self._y(py))
        path.close()
        self._canvas.drawPath(path, stroke=1 if stroke else 0, fill=1 if fill else 0)

    def circle(self, cx: float, cy: float, radius: float, fill: bool = True,
               stroke: bool = False) -> None:
        self._apply_shape_state()
        self._canvas.circle(
            cx * mm,
            self._y(cy),
            radius * mm,
            stroke=1 if stroke else 0,
            fill=1 if fill else 0,
        )

    def fill_page(self, color: RGB) -> None:
        """Paint the whole page background."""
        self.set_fill_color(color)
        self.rect(0, 0, self.PAGE_WIDTH, self.PAGE_HEIGHT, fill=True, stroke=False)

    # =========================================================================
    # Document
    # =========================================================================

    def set_metadata(self, title: str = "", author: str = "", subject: str = "",
                     keywords: str = "", creator: str = "") -> None:
        self._canvas.setTitle(title)
        self._canvas.setAuthor(author)
        self._canvas.setSubject(subject)
        self._canvas.setKeywords(keywords)
        self._canvas.setCreator(creator)

    def to_bytes(self) -> bytes:
        """Finish the page and return the serialized PDF."""
        self._canvas.showPage()
        self._canvas.save()
        return self._buffer.getvalue()
