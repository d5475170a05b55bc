"""Header display modes and the mode ring.

The header cycles through six layouts in a fixed order. The current mode is
persisted as an integer 1-6 and every change requests a repaint from the
host.
"""

from __future__ import annotations

import logging
from enum import IntEnum
from typing import Callable, Optional

from .constants import HeaderConstants
from .errors import InvalidMode
from .settings_persistence import SettingsPersistence

logger = logging.getLogger(__name__)


class HeaderMode(IntEnum):
    """Header layouts, in cycling order."""
    CLEAN = 1
    PRINT_EDITION = 2
    TITLE_TIME = 3
    CHAPTER_TIME = 4
    TIME_CENTER = 5
    FULL_INFO = 6

    @property
    def label(self) -> str:
        return MODE_LABELS[self]

    @classmethod
    def coerce(cls, value) -> 'HeaderMode':
        """Convert an int (or HeaderMode) to a HeaderMode.

        Raises:
            InvalidMode: If value is not an integer in 1-6.
        """
        # bool is an int subclass but never a mode
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidMode(value)
        try:
            return cls(value)
        except ValueError:
            raise InvalidMode(value) from None


MODE_LABELS = {
    HeaderMode.CLEAN: "Clean (nothing displayed)",
    HeaderMode.PRINT_EDITION: "Print edition",
    HeaderMode.TITLE_TIME: "Book title and time",
    HeaderMode.CHAPTER_TIME: "Chapter and time",
    HeaderMode.TIME_CENTER: "Time centered",
    HeaderMode.FULL_INFO: "Author, title and chapter",
}


class ModeState:
    """Owns the current header mode.

    Transitions persist the new mode immediately and then call
    ``on_change`` so the host can schedule a redraw.
    """

    def __init__(self, persistence: SettingsPersistence,
                 on_change: Optional[Callable[[HeaderMode], None]] = None):
        self._persistence = persistence
        self.on_change = on_change
        self._mode = self._load()

    def _load(self) -> HeaderMode:
        stored = self._persistence.read_setting(HeaderConstants.MODE_KEY)
        if stored is None:
            return HeaderMode(HeaderConstants.DEFAULT_MODE)
        try:
            return HeaderMode.coerce(stored)
        except InvalidMode:
            logger.warning(f"Ignoring invalid stored header mode {stored!r}")
            return HeaderMode(HeaderConstants.DEFAULT_MODE)

    @property
    def mode(self) -> HeaderMode:
        return self._mode

    def next(self) -> HeaderMode:
        """Advance to the following mode, wrapping from the last to the first."""
        return self._set(HeaderMode(self._mode % HeaderConstants.MODE_COUNT + 1))

    def previous(self) -> HeaderMode:
        """Go back one mode, wrapping from the first to the last."""
        if self._mode == HeaderMode.CLEAN:
            return self._set(HeaderMode(HeaderConstants.MODE_COUNT))
        return self._set(HeaderMode(self._mode - 1))

    def select(self, mode) -> HeaderMode:
        """Jump directly to a mode.

        Raises:
            InvalidMode: If mode is outside 1-6. The current mode is kept.
        """
        return self._set(HeaderMode.coerce(mode))

    def _set(self, mode: HeaderMode) -> HeaderMode:
        self._mode = mode
        self._persistence.save_setting(HeaderConstants.MODE_KEY, int(mode))
        logger.debug(f"Header cycling mode changed to: {int(mode)}")
        if self.on_change is not None:
            self.on_change(mode)
        return mode
