"""Readerheader - A cyclable status header for e-book reading views."""

from .composer import BookMetadata, HeaderComposer, HeaderContent, HeaderGeometry, PaginationFact
from .errors import HeaderError, InvalidMode, InvalidSetting
from .header import ReaderHeader
from .layout_config import LayoutConfig, LayoutSettings, Separator, TopPadding
from .modes import HeaderMode, ModeState
from .renderer import HeaderRenderer, PaintBox, Painter
from .text_fitter import TextFitter

__all__ = [
    'BookMetadata',
    'HeaderComposer',
    'HeaderContent',
    'HeaderGeometry',
    'PaginationFact',
    'HeaderError',
    'InvalidMode',
    'InvalidSetting',
    'ReaderHeader',
    'LayoutConfig',
    'LayoutSettings',
    'Separator',
    'TopPadding',
    'HeaderMode',
    'ModeState',
    'HeaderRenderer',
    'PaintBox',
    'Painter',
    'TextFitter',
]
