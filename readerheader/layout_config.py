"""Layout configuration for the header.

``LayoutConfig`` holds every tunable parameter. ``LayoutSettings`` owns the
process-wide instance, validates changes and persists each field under its
own key as soon as it changes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, NamedTuple, Optional, Tuple

from .constants import HeaderConstants
from .errors import InvalidSetting
from .font_config import FONT_FACES
from .settings_persistence import SettingsPersistence

logger = logging.getLogger(__name__)


class TopPadding(str, Enum):
    SMALL = "small"
    DEFAULT = "default"
    LARGE = "large"

    @property
    def pixels(self) -> int:
        return _PADDING_PIXELS[self]


_PADDING_PIXELS = {
    TopPadding.SMALL: HeaderConstants.PADDING_SMALL,
    TopPadding.DEFAULT: HeaderConstants.PADDING_DEFAULT,
    TopPadding.LARGE: HeaderConstants.PADDING_LARGE,
}


class Separator(str, Enum):
    BAR = "bar"
    BULLET = "bullet"
    DOT = "dot"
    EM_DASH = "em_dash"
    EN_DASH = "en_dash"

    @property
    def glyph(self) -> str:
        return _SEPARATOR_GLYPHS[self]


_SEPARATOR_GLYPHS = {
    Separator.BAR: "|",
    Separator.BULLET: "•",
    Separator.DOT: "·",
    Separator.EM_DASH: "—",
    Separator.EN_DASH: "–",
}


@dataclass
class LayoutConfig:
    """User-adjustable header layout settings."""
    font_face: str = HeaderConstants.DEFAULT_FONT_FACE
    font_size: int = HeaderConstants.DEFAULT_FONT_SIZE
    bold: bool = False
    top_padding: TopPadding = TopPadding.SMALL
    bottom_padding: int = HeaderConstants.DEFAULT_BOTTOM_PADDING
    use_book_margins: bool = True
    margin: int = HeaderConstants.DEFAULT_MARGIN
    left_max_width_pct: int = HeaderConstants.DEFAULT_CORNER_WIDTH_PCT
    right_max_width_pct: int = HeaderConstants.DEFAULT_CORNER_WIDTH_PCT
    center_max_width_pct: int = HeaderConstants.DEFAULT_CENTER_WIDTH_PCT
    separator: Separator = Separator.EN_DASH

    @property
    def top_padding_px(self) -> int:
        return self.top_padding.pixels

    @property
    def separator_glyph(self) -> str:
        return self.separator.glyph


class FieldSpec(NamedTuple):
    """How a LayoutConfig field is stored and validated."""
    key: str
    kind: str  # 'int', 'bool', 'choice' or 'enum'
    bounds: Optional[Tuple[int, int]] = None
    choices: Optional[Tuple[str, ...]] = None
    enum: Optional[type] = None
    label: str = ""


SETTING_FIELDS: Dict[str, FieldSpec] = {
    "font_face": FieldSpec("header_font_face", "choice",
                           choices=tuple(FONT_FACES), label="Font face"),
    "font_size": FieldSpec("header_font_size", "int",
                           bounds=(HeaderConstants.MIN_FONT_SIZE, HeaderConstants.MAX_FONT_SIZE),
                           label="Font size"),
    "bold": FieldSpec("header_font_bold", "bool", label="Bold"),
    "top_padding": FieldSpec("header_top_padding", "enum", enum=TopPadding,
                             label="Top padding"),
    "bottom_padding": FieldSpec("header_bottom_padding", "int", bounds=(0, 500),
                                label="Bottom padding"),
    "use_book_margins": FieldSpec("header_use_book_margins", "bool",
                                  label="Use book margins"),
    "margin": FieldSpec("header_margin", "int", bounds=(0, 500), label="Margin"),
    "left_max_width_pct": FieldSpec("header_left_max_width_pct", "int",
                                    bounds=(HeaderConstants.MIN_WIDTH_PCT, HeaderConstants.MAX_CORNER_WIDTH_PCT),
                                    label="Left corner max width (%)"),
    "right_max_width_pct": FieldSpec("header_right_max_width_pct", "int",
                                     bounds=(HeaderConstants.MIN_WIDTH_PCT, HeaderConstants.MAX_CORNER_WIDTH_PCT),
                                     label="Right corner max width (%)"),
    "center_max_width_pct": FieldSpec("header_center_max_width_pct", "int",
                                      bounds=(HeaderConstants.MIN_WIDTH_PCT, HeaderConstants.MAX_CENTER_WIDTH_PCT),
                                      label="Center max width (%)"),
    "separator": FieldSpec("header_separator", "enum", enum=Separator, label="Separator"),
}


def validate_value(name: str, value: Any) -> Any:
    """Check and coerce a value for a LayoutConfig field.

    Args:
        name: LayoutConfig attribute name.
        value: Proposed value. Enum fields also accept their string value.

    Returns:
        The coerced value.

    Raises:
        InvalidSetting: If the field is unknown or the value is not allowed.
    """
    spec = SETTING_FIELDS.get(name)
    if spec is None:
        raise InvalidSetting(name, value, "unknown setting")

    if spec.kind == "bool":
        if not isinstance(value, bool):
            raise InvalidSetting(name, value, "expected true or false")
        return value

    if spec.kind == "int":
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidSetting(name, value, "expected an integer")
        low, high = spec.bounds
        if not low <= value <= high:
            raise InvalidSetting(name, value, f"must be between {low} and {high}")
        return value

    if spec.kind == "choice":
        if value not in spec.choices:
            raise InvalidSetting(name, value, f"expected one of {', '.join(spec.choices)}")
        return value

    try:
        return spec.enum(value)
    except ValueError:
        allowed = ", ".join(member.value for member in spec.enum)
        raise InvalidSetting(name, value, f"expected one of {allowed}") from None


def parse_value(name: str, text: str) -> Any:
    """Parse a command-line string into a value for a field, then validate it."""
    spec = SETTING_FIELDS.get(name)
    if spec is None:
        raise InvalidSetting(name, text, "unknown setting")
    if spec.kind == "bool":
        lowered = text.strip().lower()
        if lowered in ("1", "true", "yes", "on"):
            return True
        if lowered in ("0", "false", "no", "off"):
            return False
        raise InvalidSetting(name, text, "expected true or false")
    if spec.kind == "int":
        try:
            return validate_value(name, int(text))
        except ValueError as e:
            if isinstance(e, InvalidSetting):
                raise
            raise InvalidSetting(name, text, "expected an integer") from None
    return validate_value(name, text)


def _to_stored(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def default_config(footer_settings: Optional[Dict[str, Any]] = None) -> LayoutConfig:
    """Build the default configuration.

    Font size, weight and bottom padding follow the host's footer settings
    when it has them.
    """
    footer = footer_settings or {}
    if not isinstance(footer, dict):
        logger.warning(f"Ignoring footer settings with invalid format: {footer!r}")
        footer = {}
    config = LayoutConfig()
    size = footer.get(HeaderConstants.FOOTER_FONT_SIZE_KEY)
    if size is not None:
        try:
            config.font_size = validate_value("font_size", size)
        except InvalidSetting as e:
            logger.warning(f"Ignoring footer font size: {e}")
    bold = footer.get(HeaderConstants.FOOTER_FONT_BOLD_KEY)
    if isinstance(bold, bool):
        config.bold = bold
    height = footer.get(HeaderConstants.FOOTER_HEIGHT_KEY)
    if height is not None:
        try:
            config.bottom_padding = validate_value("bottom_padding", height)
        except InvalidSetting as e:
            logger.warning(f"Ignoring footer container height: {e}")
    return config


class LayoutSettings:
    """Owns the live LayoutConfig and writes every change through to storage."""

    def __init__(self, persistence: SettingsPersistence,
                 footer_settings: Optional[Dict[str, Any]] = None,
                 on_change: Optional[Callable[[str, Any], None]] = None):
        self._persistence = persistence
        self._defaults = default_config(footer_settings)
        self.on_change = on_change
        self._config = self._load()

    def _load(self) -> LayoutConfig:
        values = {}
        for name, spec in SETTING_FIELDS.items():
            default = getattr(self._defaults, name)
            stored = self._persistence.read_setting(spec.key)
            if stored is None:
                values[name] = default
                continue
            try:
                values[name] = validate_value(name, stored)
            except InvalidSetting as e:
                logger.warning(f"Ignoring stored {spec.key}: {e}")
                values[name] = default
        return LayoutConfig(**values)

    @property
    def config(self) -> LayoutConfig:
        """The live configuration. Treat as read-only; change it through set()."""
        return self._config

    def get(self, name: str) -> Any:
        if name not in SETTING_FIELDS:
            raise InvalidSetting(name, None, "unknown setting")
        return getattr(self._config, name)

    def set(self, name: str, value: Any) -> Any:
        """Validate, apply and persist one field.

        Raises:
            InvalidSetting: If the value is rejected. Nothing changes then.
        """
        value = validate_value(name, value)
        setattr(self._config, name, value)
        self._persistence.save_setting(SETTING_FIELDS[name].key, _to_stored(value))
        logger.debug(f"Header setting {name} changed to: {value!r}")
        if self.on_change is not None:
            self.on_change(name, value)
        return value

    def reset(self, name: str) -> Any:
        """Restore one field to its default and persist the default."""
        if name not in SETTING_FIELDS:
            raise InvalidSetting(name, None, "unknown setting")
        return self.set(name, getattr(self._defaults, name))

    def step(self, name: str, delta: int) -> Any:
        """Nudge an integer field by delta, clamped to its bounds."""
        spec = SETTING_FIELDS.get(name)
        if spec is None or spec.kind != "int":
            raise InvalidSetting(name, delta, "not a numeric setting")
        low, high = spec.bounds
        return self.set(name, max(low, min(high, getattr(self._config, name) + delta)))
