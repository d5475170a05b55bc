"""Reader menu entries for the header.

The host calls the menu hook while building its menu; the hook returns a
``MenuItem`` tree with direct mode selection, next/previous, and a settings
submenu covering every layout field.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, List, Optional

from .font_config import CELL_FACE
from .layout_config import SETTING_FIELDS
from .modes import HeaderMode

if TYPE_CHECKING:
    from .header import ReaderHeader


# Step applied by the increase/decrease entries of numeric settings
NUMERIC_STEPS = {
    "font_size": 1,
    "bottom_padding": 1,
    "margin": 1,
    "left_max_width_pct": 2,
    "right_max_width_pct": 2,
    "center_max_width_pct": 2,
}


@dataclass
class MenuItem:
    text: str
    callback: Optional[Callable[[], None]] = None
    sub_items: List['MenuItem'] = field(default_factory=list)
    checked: Optional[Callable[[], bool]] = None
    keep_menu_open: bool = False

    def find(self, text: str) -> Optional['MenuItem']:
        """Depth-first search for an entry by its text."""
        for item in self.sub_items:
            if item.text == text:
                return item
            found = item.find(text)
            if found is not None:
                return found
        return None


def build_menu(header: 'ReaderHeader') -> MenuItem:
    """Build the "Header" submenu for the reader menu."""
    modes = header.modes
    items: List[MenuItem] = []

    for mode in HeaderMode:
        items.append(MenuItem(
            text=mode.label,
            callback=lambda m=mode: modes.select(m),
            checked=lambda m=mode: modes.mode == m,
        ))

    items.append(MenuItem(text="Next header mode", callback=modes.next, keep_menu_open=True))
    items.append(MenuItem(text="Previous header mode", callback=modes.previous, keep_menu_open=True))
    items.append(build_settings_menu(header))
    return MenuItem(text="Header", sub_items=items)


def build_settings_menu(header: 'ReaderHeader') -> MenuItem:
    """One entry per layout setting."""
    settings = header.settings
    entries: List[MenuItem] = []

    for name, spec in SETTING_FIELDS.items():
        if spec.kind == "bool":
            entries.append(MenuItem(
                text=spec.label,
                callback=lambda n=name: settings.set(n, not settings.get(n)),
                checked=lambda n=name: settings.get(n),
                keep_menu_open=True,
            ))
            continue

        if spec.kind == "int":
            step = NUMERIC_STEPS.get(name, 1)
            sub = [
                MenuItem(text="Decrease", callback=lambda n=name, s=step: settings.step(n, -s),
                         keep_menu_open=True),
                MenuItem(text="Increase", callback=lambda n=name, s=step: settings.step(n, s),
                         keep_menu_open=True),
                MenuItem(text="Reset to default", callback=lambda n=name: settings.reset(n),
                         keep_menu_open=True),
            ]
        else:
            if spec.kind == "choice":
                # The cell face only makes sense for terminal previews
                choices = [c for c in spec.choices if c != CELL_FACE]
            else:
                choices = list(spec.enum)
            sub = [
                MenuItem(
                    text=_choice_label(choice),
                    callback=lambda n=name, c=choice: settings.set(n, c),
                    checked=lambda n=name, c=choice: settings.get(n) == c,
                    keep_menu_open=True,
                )
                for choice in choices
            ]
        entries.append(MenuItem(text=spec.label, sub_items=sub))

    return MenuItem(text="Header settings", sub_items=entries)


def _choice_label(choice) -> str:
    glyph = getattr(choice, "glyph", None)
    value = getattr(choice, "value", choice)
    label = str(value).replace("_", " ").capitalize()
    if glyph:
        return f"{label} ({glyph})"
    return label
