"""Painters that put header boxes on a surface.

``PdfPainter`` draws on a reportlab canvas, ``TerminalPainter`` writes to a
blessed terminal and ``CellGridPainter`` fills a plain character grid,
which is handy for previews and logs.
"""

from __future__ import annotations

import io
from typing import Iterable, List, Optional, Tuple

import blessed
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfgen import canvas

from .font_config import get_font_face
from .errors import FontLoadError
from .layout_config import LayoutConfig
from .renderer import PaintBox, Painter
from .text_fitter import strip_bidi_controls


class PdfPainter(Painter):
    """Draws boxes on a reportlab canvas whose page matches the screen."""

    def __init__(self, pdf_canvas: canvas.Canvas, page_height: float):
        self.canvas = pdf_canvas
        self.page_height = page_height
        # Track unprintable characters for warning
        self.unprintable_chars = set()

    def draw(self, box: PaintBox, config: LayoutConfig) -> None:
        face = get_font_face(config.font_face)
        if face is None or face.is_cell:
            raise FontLoadError(f"Font {config.font_face} cannot be drawn in a PDF")
        font_name = face.resolve(config.bold)
        ascent, _ = pdfmetrics.getAscentDescent(font_name, config.font_size)
        # Box y is the top of the line; PDF y grows upward from the baseline
        baseline = self.page_height - box.y - ascent
        self.canvas.setFont(font_name, config.font_size)
        self.canvas.drawString(box.x, baseline, self._make_pdf_safe(box.text))

    def _make_pdf_safe(self, text: str) -> str:
        """Replace characters the standard fonts cannot encode with '?'."""
        result = []
        for char in strip_bidi_controls(text):
            try:
                char.encode('cp1252')
                result.append(char)
            except UnicodeEncodeError:
                self.unprintable_chars.add(char)
                result.append('?')
        return ''.join(result)

    def get_unprintable_warning(self) -> Optional[str]:
        """Warning naming the characters replaced with '?', or None."""
        if not self.unprintable_chars:
            return None
        chars = sorted(self.unprintable_chars)
        shown = [f"'{char}' (U+{ord(char):04X})" for char in chars[:10]]
        if len(chars) > 10:
            shown.append(f"... and {len(chars) - 10} more")
        return (f"Warning: {len(chars)} unique unprintable character(s) "
                f"were replaced with '?' in the PDF output: {', '.join(shown)}")


def generate_preview_pdf(boxes: Iterable[PaintBox], config: LayoutConfig,
                         width: float, height: float,
                         body_lines: Optional[List[str]] = None) -> Tuple[bytes, Optional[str]]:
    """Render a single screen-sized PDF page showing the header boxes.

    Args:
        boxes: Laid-out header boxes, in points.
        config: Layout configuration used for the boxes.
        width: Page width in points.
        height: Page height in points.
        body_lines: Optional placeholder text drawn as the page body.

    Returns:
        The complete PDF document as bytes, and the unprintable-character
        warning or None.
    """
    pdf_buffer = io.BytesIO()
    c = canvas.Canvas(pdf_buffer, pagesize=(width, height))
    painter = PdfPainter(c, height)
    for box in boxes:
        painter.draw(box, config)

    if body_lines:
        c.setFont("Times-Roman", 12)
        y = height * 0.85
        for line in body_lines:
            if y < height * 0.1:
                break
            c.drawCentredString(width / 2, y, painter._make_pdf_safe(line))
            y -= 16

    c.showPage()
    c.save()
    pdf_buffer.seek(0)
    return pdf_buffer.read(), painter.get_unprintable_warning()


class CellGridPainter(Painter):
    """Paints boxes into a width x height grid of characters."""

    def __init__(self, width: int, height: int, term: Optional[blessed.Terminal] = None):
        self.width = width
        self.height = height
        self.term = term or blessed.Terminal(force_styling=None)
        self.rows = [[" "] * width for _ in range(height)]

    def draw(self, box: PaintBox, config: LayoutConfig) -> None:
        row = int(box.y)
        if not 0 <= row < self.height:
            return
        col = int(round(box.x))
        for ch in strip_bidi_controls(box.text):
            cells = self.term.length(ch)
            if cells <= 0:
                # Combining marks join the previous cell
                if 0 < col <= self.width:
                    self.rows[row][col - 1] += ch
                continue
            if 0 <= col < self.width:
                self.rows[row][col] = ch
                # A wide character covers the next cell too
                for extra in range(col + 1, min(col + cells, self.width)):
                    self.rows[row][extra] = ""
            col += cells

    def lines(self) -> List[str]:
        return ["".join(row) for row in self.rows]


class TerminalPainter(Painter):
    """Writes boxes straight to a terminal with blessed."""

    def __init__(self, term: Optional[blessed.Terminal] = None):
        self.term = term or blessed.Terminal()

    def draw(self, box: PaintBox, config: LayoutConfig) -> None:
        text = box.text
        if config.bold:
            text = self.term.bold(text)
        print(self.term.move_xy(int(round(box.x)), int(box.y)) + text, end='', flush=True)
