"""Interfaces between the header and the reader application hosting it.

The host supplies per-page facts (document properties, table of contents,
page margins, document kind) and exposes extension points where the header
registers its actions, tap zone, repaint hook and menu hook.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable, Optional

if TYPE_CHECKING:
    from .menu import MenuItem
    from .renderer import Painter


class DocumentKind(Enum):
    REFLOWABLE = "reflowable"
    FIXED_LAYOUT = "fixed_layout"


@dataclass(frozen=True)
class Screen:
    """Screen size in pixels, read once at startup."""
    width: int
    height: int


@dataclass(frozen=True)
class DocumentProps:
    display_title: Optional[str] = None
    authors: Optional[str] = None  # Newline-separated when several


@dataclass(frozen=True)
class PageMargins:
    left: Optional[int] = None
    right: Optional[int] = None


class TableOfContents(ABC):
    """Chapter lookups for the current document."""

    @abstractmethod
    def title_for_page(self, page: int) -> Optional[str]:
        """Title of the chapter containing page, if any."""
        pass

    @abstractmethod
    def chapter_pages_done(self, page: int) -> Optional[int]:
        """Pages of the chapter before page (0 on its first page)."""
        pass


@dataclass
class ReaderPage:
    """Everything the host knows about the page being painted."""
    page_number: Optional[int] = None
    kind: DocumentKind = DocumentKind.REFLOWABLE
    props: Optional[DocumentProps] = None
    toc: Optional[TableOfContents] = None
    margins: Optional[PageMargins] = None


@dataclass(frozen=True)
class TouchZone:
    """A tap region expressed as fractions of the screen."""
    id: str
    ratio_x: float
    ratio_y: float
    ratio_w: float
    ratio_h: float
    handler: Callable[[], bool]

    def contains(self, x: float, y: float, screen: Screen) -> bool:
        left = screen.width * self.ratio_x
        top = screen.height * self.ratio_y
        return (left <= x < left + screen.width * self.ratio_w and
                top <= y < top + screen.height * self.ratio_h)


RepaintHook = Callable[[ReaderPage, 'Painter'], None]
MenuHook = Callable[[], 'MenuItem']


class HostHooks(ABC):
    """Extension points a reader application offers to the header."""

    @abstractmethod
    def register_action(self, name: str, handler: Callable[[], None]) -> None:
        """Add an action to the host's gesture/command dispatch table."""
        pass

    @abstractmethod
    def register_touch_zone(self, zone: TouchZone) -> None:
        pass

    @abstractmethod
    def register_repaint_hook(self, hook: RepaintHook) -> None:
        """Call hook after the page content is painted."""
        pass

    @abstractmethod
    def register_menu_hook(self, hook: MenuHook) -> None:
        """Call hook when the reader menu is built; it returns a submenu."""
        pass

    @abstractmethod
    def request_repaint(self) -> None:
        """Schedule a redraw. Must not paint synchronously."""
        pass
