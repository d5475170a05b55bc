"""The reader header: state, composition and host integration in one place."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from .actions import CommandRegistry
from .clock import Clock
from .composer import BookMetadata, HeaderComposer, HeaderContent, HeaderGeometry, PaginationFact
from .constants import HeaderConstants
from .host import DocumentKind, HostHooks, ReaderPage, Screen, TouchZone
from .layout_config import LayoutSettings
from .menu import MenuItem, build_menu
from .modes import ModeState
from .renderer import HeaderRenderer, PaintBox, Painter
from .settings_persistence import SettingsPersistence, get_persistence
from .text_fitter import FontMeasurerFactory, MeasurerFactory, TextFitter


class ReaderHeader:
    """Cyclable status header for a reflowable reading view.

    Owns the mode ring and the layout settings, composes and renders the
    header on every repaint, and registers its actions, tap zone and menu
    with the host.
    """

    def __init__(self, screen: Screen,
                 persistence: Optional[SettingsPersistence] = None,
                 footer_settings: Optional[Dict[str, Any]] = None,
                 measurer_factory: Optional[MeasurerFactory] = None,
                 clock: Optional[Clock] = None):
        """Initialize the header from persisted settings.

        Args:
            screen: Screen size, read once at startup.
            persistence: Settings store. Defaults to the global store.
            footer_settings: Host footer settings used for default font size,
                weight and bottom padding. Read from the store when omitted.
            measurer_factory: Text measurement backend.
            clock: Clock text provider.
        """
        self.screen = screen
        self.persistence = persistence or get_persistence()
        if footer_settings is None:
            footer_settings = self.persistence.read_setting(HeaderConstants.FOOTER_KEY) or {}
        self.host: Optional[HostHooks] = None

        self.modes = ModeState(self.persistence, on_change=lambda mode: self._request_repaint())
        self.settings = LayoutSettings(self.persistence, footer_settings,
                                       on_change=lambda name, value: self._request_repaint())
        self.fitter = TextFitter(measurer_factory or FontMeasurerFactory())
        self.composer = HeaderComposer(self.fitter)
        self.renderer = HeaderRenderer(self.fitter)
        self.clock = clock or Clock(
            lambda: self.persistence.is_true(HeaderConstants.TWELVE_HOUR_CLOCK_KEY))
        self.commands = CommandRegistry()

    def install(self, host: HostHooks) -> None:
        """Register actions, the tap zone, and the repaint and menu hooks with host."""
        self.host = host
        for name in self.commands.names():
            host.register_action(name, lambda n=name: self.run_action(n))
        host.register_touch_zone(self.touch_zone())
        host.register_repaint_hook(self.paint_page)
        host.register_menu_hook(self.menu)

    def _request_repaint(self) -> None:
        if self.host is not None:
            self.host.request_repaint()

    def run_action(self, name: str) -> bool:
        return self.commands.execute(self, name)

    def touch_zone(self) -> TouchZone:
        """Center third of the top 5% of the screen; the corners stay free."""
        return TouchZone(
            id=HeaderConstants.TOUCH_ZONE_ID,
            ratio_x=HeaderConstants.TOUCH_ZONE_RATIO_X,
            ratio_y=HeaderConstants.TOUCH_ZONE_RATIO_Y,
            ratio_w=HeaderConstants.TOUCH_ZONE_RATIO_W,
            ratio_h=HeaderConstants.TOUCH_ZONE_RATIO_H,
            handler=self._on_tap,
        )

    def _on_tap(self) -> bool:
        self.modes.next()
        return True

    def handle_tap(self, x: float, y: float) -> bool:
        """Advance the mode if the tap lands in the header zone."""
        zone = self.touch_zone()
        if zone.contains(x, y, self.screen):
            return zone.handler()
        return False

    def menu(self) -> MenuItem:
        return build_menu(self)

    def gather(self, page: ReaderPage) -> Tuple[BookMetadata, PaginationFact]:
        """Collect book metadata and pagination facts from the host's page."""
        title = author = ""
        if page.props is not None:
            title = page.props.display_title or ""
            author = page.props.authors or ""

        page_number = page.page_number or 1

        chapter = ""
        pages_done = 0
        if page.toc is not None:
            chapter = page.toc.title_for_page(page_number) or ""
            pages_done = page.toc.chapter_pages_done(page_number) or 0
        # The table of contents counts from 0 on a chapter's first page
        pages_done += 1

        return (BookMetadata(title=title, author=author),
                PaginationFact(page_number=page_number, chapter_title=chapter,
                               pages_done_in_chapter=pages_done))

    def geometry(self, page: ReaderPage) -> HeaderGeometry:
        return HeaderGeometry.resolve(self.screen, self.settings.config, page.margins)

    def compute(self, page: ReaderPage, now: Optional[datetime] = None) -> Optional[HeaderContent]:
        book, pagination = self.gather(page)
        return self.composer.compute(self.modes.mode, book, pagination,
                                     self.clock.text(now), self.settings.config,
                                     self.geometry(page))

    def paint_page(self, page: ReaderPage, painter: Painter,
                   now: Optional[datetime] = None) -> List[PaintBox]:
        """Repaint hook: draw the header over the page the host just painted."""
        if page.kind != DocumentKind.REFLOWABLE:
            return []
        content = self.compute(page, now)
        return self.renderer.paint(content, self.settings.config, self.geometry(page),
                                   painter, page.kind)
