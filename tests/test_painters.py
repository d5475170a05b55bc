"""Tests for the PDF, terminal and grid painters."""

from unittest.mock import Mock

import blessed
import pytest
from reportlab.pdfbase import pdfmetrics

from readerheader.errors import FontLoadError
from readerheader.layout_config import LayoutConfig
from readerheader.painters import CellGridPainter, PdfPainter, TerminalPainter, generate_preview_pdf
from readerheader.renderer import PaintBox, Region
from readerheader.text_fitter import FSI, PDI


def test_pdf_painter_flips_to_pdf_coordinates():
    c = Mock()
    painter = PdfPainter(c, page_height=800)
    config = LayoutConfig(bold=True)
    painter.draw(PaintBox(Region.LEFT, "Dune", x=20, y=2, width=30, height=16), config)

    ascent, _ = pdfmetrics.getAscentDescent("Helvetica-Bold", 14)
    c.setFont.assert_called_once_with("Helvetica-Bold", 14)
    c.drawString.assert_called_once_with(20, 800 - 2 - ascent, "Dune")


def test_pdf_painter_replaces_unprintable_characters():
    c = Mock()
    painter = PdfPainter(c, page_height=800)
    painter.draw(PaintBox(Region.CENTER, FSI + "Tōkyō 中" + PDI, 0, 0, 10, 10), LayoutConfig())
    assert c.drawString.call_args.args[2] == "T?ky? ?"
    assert "中" in painter.unprintable_chars


def test_pdf_painter_rejects_cell_face():
    with pytest.raises(FontLoadError):
        PdfPainter(Mock(), 800).draw(PaintBox(Region.LEFT, "a", 0, 0, 1, 1),
                                     LayoutConfig(font_face="cell"))


def test_generate_preview_pdf():
    boxes = [PaintBox(Region.CENTER, "Frank Herbert – Dune…", 200, 2, 150, 16)]
    pdf, warning = generate_preview_pdf(boxes, LayoutConfig(), 600, 800, body_lines=["Page 42"])
    assert pdf.startswith(b"%PDF")
    assert b"/Type /Page" in pdf
    assert warning is None


def test_generate_preview_pdf_reports_unprintable_characters():
    boxes = [PaintBox(Region.CENTER, "\u6771\u4eac", 200, 2, 30, 16)]
    _, warning = generate_preview_pdf(boxes, LayoutConfig(), 600, 800)
    assert "U+6771" in warning


def test_cell_grid_painter():
    painter = CellGridPainter(10, 3)
    painter.draw(PaintBox(Region.LEFT, "ab", 1, 0, 2, 1), LayoutConfig())
    painter.draw(PaintBox(Region.RIGHT, "xyz", 8, 0, 3, 1), LayoutConfig())
    painter.draw(PaintBox(Region.CENTER, "off", 0, 5, 3, 1), LayoutConfig())
    assert painter.lines() == [" ab     xy", " " * 10, " " * 10]


def test_terminal_painter_moves_and_writes(capsys):
    term = blessed.Terminal(force_styling=None)
    painter = TerminalPainter(term)
    painter.draw(PaintBox(Region.LEFT, "Dune", 3, 1, 4, 1), LayoutConfig())
    assert "Dune" in capsys.readouterr().out


def test_cell_grid_painter_gives_wide_characters_two_cells():
    painter = CellGridPainter(10, 1)
    painter.draw(PaintBox(Region.LEFT, "中文ab", 0, 0, 6, 1), LayoutConfig())
    painter.draw(PaintBox(Region.RIGHT, "z", 9, 0, 1, 1), LayoutConfig())
    line = painter.lines()[0]
    assert line == "中文ab   z"
    term = blessed.Terminal(force_styling=None)
    assert term.length(line) == 10


def test_cell_grid_painter_keeps_combining_marks():
    painter = CellGridPainter(6, 1)
    painter.draw(PaintBox(Region.LEFT, "e\u0301t", 0, 0, 2, 1), LayoutConfig())
    assert painter.lines()[0] == "e\u0301t    "


def test_unprintable_warning_names_replaced_characters():
    painter = PdfPainter(Mock(), page_height=800)
    assert painter.get_unprintable_warning() is None
    painter.draw(PaintBox(Region.LEFT, "Tōkyō", 0, 0, 10, 10), LayoutConfig())
    warning = painter.get_unprintable_warning()
    assert "U+014D" in warning
    assert warning.startswith("Warning: 1 unique")
