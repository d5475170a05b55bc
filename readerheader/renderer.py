"""Turn header content into positioned boxes.

The renderer measures each fitted segment, works out where it goes on the
screen and hands the resulting boxes to a ``Painter``. Coordinates are in
the measurer's units with the origin at the top-left of the screen.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from .composer import CenterPlacement, HeaderContent, HeaderGeometry
from .host import DocumentKind
from .layout_config import LayoutConfig
from .text_fitter import TextFitter, measuring


class Region(Enum):
    LEFT = "left"
    RIGHT = "right"
    CENTER = "center"


@dataclass(frozen=True)
class PaintBox:
    region: Region
    text: str
    x: float
    y: float
    width: float
    height: float


class Painter(ABC):
    """Draws positioned text boxes on some surface."""

    @abstractmethod
    def draw(self, box: PaintBox, config: LayoutConfig) -> None:
        pass


class HeaderRenderer:
    """Lays out the corner row and the centered line of the header."""

    def __init__(self, fitter: TextFitter):
        self.fitter = fitter

    def layout(self, content: Optional[HeaderContent], config: LayoutConfig,
               geometry: HeaderGeometry,
               kind: DocumentKind = DocumentKind.REFLOWABLE) -> List[PaintBox]:
        """Compute the boxes for content without drawing them."""
        if content is None or kind != DocumentKind.REFLOWABLE:
            return []

        boxes: List[PaintBox] = []
        top = config.top_padding_px
        with measuring(self.fitter.factory, config) as measurer:
            line_height = measurer.height()

            if content.has_corners:
                if content.left_text:
                    width = measurer.width(content.left_text)
                    boxes.append(PaintBox(Region.LEFT, content.left_text,
                                          geometry.left_margin, top, width, line_height))
                if content.right_text:
                    width = measurer.width(content.right_text)
                    x = geometry.screen_width - geometry.right_margin - width
                    boxes.append(PaintBox(Region.RIGHT, content.right_text,
                                          x, top, width, line_height))

            if content.center_text:
                width = measurer.width(content.center_text)
                x = geometry.left_margin + (geometry.available_width - width) / 2
                if content.center_placement == CenterPlacement.BOTTOM:
                    y = geometry.screen_height - line_height - config.bottom_padding
                else:
                    y = top
                boxes.append(PaintBox(Region.CENTER, content.center_text,
                                      x, y, width, line_height))
        return boxes

    def paint(self, content: Optional[HeaderContent], config: LayoutConfig,
              geometry: HeaderGeometry, painter: Painter,
              kind: DocumentKind = DocumentKind.REFLOWABLE) -> List[PaintBox]:
        """Lay out content and draw every box with painter.

        Nothing is drawn for the clean mode (``content`` is None) or for
        fixed-layout documents.
        """
        boxes = self.layout(content, config, geometry, kind)
        for box in boxes:
            painter.draw(box, config)
        return boxes

