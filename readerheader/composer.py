"""Compose header text for a page.

Given the current mode, book metadata, pagination facts, clock text and
layout configuration, ``HeaderComposer.compute`` decides what goes in the
left corner, right corner and center of the header, and fits each segment
into its share of the available width.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .host import PageMargins, Screen
from .layout_config import LayoutConfig
from .modes import HeaderMode
from .text_fitter import TextFitter


@dataclass(frozen=True)
class BookMetadata:
    title: str = ""
    author: str = ""  # Raw; several authors are newline-separated


@dataclass(frozen=True)
class PaginationFact:
    page_number: int = 1
    chapter_title: str = ""
    pages_done_in_chapter: int = 1  # 1 on the first page of a chapter


class CenterPlacement(Enum):
    TOP = "top"
    BOTTOM = "bottom"


@dataclass(frozen=True)
class HeaderContent:
    left_text: str = ""
    right_text: str = ""
    center_text: str = ""
    center_placement: CenterPlacement = CenterPlacement.TOP

    @property
    def has_corners(self) -> bool:
        return bool(self.left_text or self.right_text)


@dataclass(frozen=True)
class HeaderGeometry:
    """Screen size plus the horizontal insets the header respects."""
    screen_width: int
    screen_height: int
    left_margin: int
    right_margin: int

    @property
    def available_width(self) -> int:
        return max(0, self.screen_width - self.left_margin - self.right_margin)

    @classmethod
    def resolve(cls, screen: Screen, config: LayoutConfig,
                page_margins: Optional[PageMargins] = None) -> 'HeaderGeometry':
        """Pick the book's page margins or the fixed margin, per configuration."""
        left = right = config.margin
        if config.use_book_margins and page_margins is not None:
            if page_margins.left is not None:
                left = page_margins.left
            if page_margins.right is not None:
                right = page_margins.right
        return cls(screen.width, screen.height, left, right)


def collapse_authors(author: Optional[str]) -> str:
    """Reduce a newline-separated author list to "First, et al."."""
    if not author:
        return ""
    if "\n" not in author:
        return author
    names = [name.strip() for name in author.split("\n") if name.strip()]
    if not names:
        return ""
    if len(names) == 1:
        return names[0]
    return f"{names[0]}, et al."


def join_segments(separator: str, *segments: str) -> str:
    """Join segments with " SEP ", the way the reader shows them.

    Empty segments keep their place, so missing metadata shows up as a gap
    rather than shifting the other fields.
    """
    return f" {separator} ".join(segments)


class HeaderComposer:
    """Computes header content for each paint."""

    def __init__(self, fitter: TextFitter):
        self.fitter = fitter

    def compute(self, mode: HeaderMode, book: BookMetadata, pagination: PaginationFact,
                clock_text: str, config: LayoutConfig,
                geometry: HeaderGeometry) -> Optional[HeaderContent]:
        """Return the fitted header content, or None in the clean mode.

        A None result means the caller must not render anything.
        """
        if mode == HeaderMode.CLEAN:
            return None

        author = collapse_authors(book.author)
        title = book.title or ""
        chapter = pagination.chapter_title or ""
        page = str(pagination.page_number)
        sep = config.separator_glyph

        left = right = center = ""
        placement = CenterPlacement.TOP

        if mode == HeaderMode.PRINT_EDITION:
            if pagination.pages_done_in_chapter <= 1:
                # First page of a chapter: folio at the foot of the page
                center = page
                placement = CenterPlacement.BOTTOM
            elif pagination.page_number % 2 == 0:
                left = page
                center = join_segments(sep, author, title)
            else:
                right = page
                center = chapter
        elif mode == HeaderMode.TITLE_TIME:
            left, right = title, clock_text
        elif mode == HeaderMode.CHAPTER_TIME:
            left, right = chapter, clock_text
        elif mode == HeaderMode.TIME_CENTER:
            center = clock_text
        elif mode == HeaderMode.FULL_INFO:
            center = join_segments(sep, author, title, chapter)

        available = geometry.available_width
        return HeaderContent(
            left_text=self.fitter.fit(left, available * config.left_max_width_pct / 100, config),
            right_text=self.fitter.fit(right, available * config.right_max_width_pct / 100, config),
            center_text=self.fitter.fit(center, available * config.center_max_width_pct / 100, config),
            center_placement=placement,
        )
