"""Fit header text into a width budget.

Measurement is delegated to a ``TextMeasurer`` opened from a
``MeasurerFactory`` for the configured face, size and weight. Measurers
hold resources in the host's font subsystem, so they are only ever used
inside ``measuring()``, which frees them on every exit path.
"""

from __future__ import annotations

import unicodedata
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Iterator, Optional

import blessed
from reportlab.pdfbase import pdfmetrics

from .constants import HeaderConstants
from .errors import FontLoadError
from .font_config import get_font_face
from .layout_config import LayoutConfig

# First strong isolate / pop directional isolate
FSI = "\u2068"
PDI = "\u2069"

_BIDI_CONTROLS = frozenset(
    "\u200e\u200f\u202a\u202b\u202c\u202d\u202e\u2066\u2067\u2068\u2069"
)


def strip_bidi_controls(text: str) -> str:
    """Remove directional formatting characters (they have no width)."""
    return "".join(ch for ch in text if ch not in _BIDI_CONTROLS)


def has_rtl(text: str) -> bool:
    return any(unicodedata.bidirectional(ch) in ("R", "AL") for ch in text)


def bidi_auto(text: str) -> str:
    """Isolate text containing right-to-left script so it renders in its own direction.

    Left-to-right text is returned as is. Already isolated text is not
    wrapped twice.
    """
    if not text or (text.startswith(FSI) and text.endswith(PDI)):
        return text
    if has_rtl(text):
        return f"{FSI}{text}{PDI}"
    return text


class TextMeasurer(ABC):
    """Measures strings in one font at one size."""

    @abstractmethod
    def width(self, text: str) -> float:
        """Width of text in the measurer's units."""
        pass

    @abstractmethod
    def height(self) -> float:
        """Line height in the measurer's units."""
        pass

    def free(self) -> None:
        """Release the measurer. It must not be used afterwards."""
        pass


class MeasurerFactory(ABC):
    """Opens measurers for a layout configuration."""

    @abstractmethod
    def open(self, config: LayoutConfig) -> TextMeasurer:
        pass


@contextmanager
def measuring(factory: MeasurerFactory, config: LayoutConfig) -> Iterator[TextMeasurer]:
    """Open a measurer and free it when the block exits, even on error."""
    measurer = factory.open(config)
    try:
        yield measurer
    finally:
        measurer.free()


class ReportlabMeasurer(TextMeasurer):
    """Measures in points using reportlab's font metrics."""

    def __init__(self, font_name: str, font_size: float):
        self.font_name = font_name
        self.font_size = font_size
        self._freed = False

    def _check(self) -> None:
        if self._freed:
            raise RuntimeError("measurer used after free()")

    def width(self, text: str) -> float:
        self._check()
        return pdfmetrics.stringWidth(self._make_measurable(text), self.font_name, self.font_size)

    def height(self) -> float:
        self._check()
        ascent, descent = pdfmetrics.getAscentDescent(self.font_name, self.font_size)
        return ascent - descent

    def free(self) -> None:
        self._freed = True

    @staticmethod
    def _make_measurable(text: str) -> str:
        # Standard fonts use Windows-1252; anything else is drawn as '?'
        result = []
        for char in strip_bidi_controls(text):
            try:
                char.encode('cp1252')
                result.append(char)
            except UnicodeEncodeError:
                result.append('?')
        return ''.join(result)


class CellMeasurer(TextMeasurer):
    """Measures in terminal cells; every line is one cell tall."""

    def __init__(self, term: blessed.Terminal):
        self.term = term
        self._freed = False

    def width(self, text: str) -> float:
        if self._freed:
            raise RuntimeError("measurer used after free()")
        return self.term.length(strip_bidi_controls(text))

    def height(self) -> float:
        return 1

    def free(self) -> None:
        self._freed = True


class FontMeasurerFactory(MeasurerFactory):
    """Opens reportlab measurers for PDF faces and cell measurers for the cell face."""

    def __init__(self, term: Optional[blessed.Terminal] = None):
        self._term = term

    def open(self, config: LayoutConfig) -> TextMeasurer:
        face = get_font_face(config.font_face)
        if face is None:
            raise FontLoadError(f"Unknown font: {config.font_face}")
        if face.is_cell:
            if self._term is None:
                self._term = blessed.Terminal(force_styling=None)
            return CellMeasurer(self._term)
        return ReportlabMeasurer(face.resolve(config.bold), config.font_size)


def fit_text(measurer: TextMeasurer, text: Optional[str], max_width: float) -> str:
    """Truncate text so it fits max_width, ending with an ellipsis when cut.

    Text is measured with its spaces as no-break spaces, the way the host
    lays out a single unwrapped line. Text that already fits is returned
    unchanged, directional marks included (apart from bidi isolation), so
    fitting is idempotent. Truncated text loses its directional marks.
    """
    if not text:
        return ""
    if max_width <= 0:
        return ""

    plain = strip_bidi_controls(text)
    if _width(measurer, plain) <= max_width:
        return bidi_auto(text)

    ellipsis = HeaderConstants.ELLIPSIS
    if measurer.width(ellipsis) > max_width:
        return ""

    # Longest prefix that still fits once the ellipsis is appended
    low, high = 0, len(plain)
    while low < high:
        mid = (low + high + 1) // 2
        candidate = _trim(plain[:mid]) + ellipsis
        if _width(measurer, candidate) <= max_width:
            low = mid
        else:
            high = mid - 1

    return bidi_auto(_trim(plain[:low]) + ellipsis)


def _width(measurer: TextMeasurer, text: str) -> float:
    return measurer.width(text.replace(" ", HeaderConstants.NO_BREAK_SPACE))


def _trim(prefix: str) -> str:
    return prefix.rstrip(" " + HeaderConstants.NO_BREAK_SPACE)


class TextFitter:
    """Fits header segments using measurers from a factory."""

    def __init__(self, factory: MeasurerFactory):
        self.factory = factory

    def fit(self, text: Optional[str], max_width: float, config: LayoutConfig) -> str:
        if not text:
            return ""
        with measuring(self.factory, config) as measurer:
            return fit_text(measurer, text, max_width)

