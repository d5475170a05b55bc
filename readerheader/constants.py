"""Constants and configuration for the reader header."""

class HeaderConstants:
    """Central configuration constants for the header."""
    
    # Mode persistence
    MODE_KEY = "header_cycling_mode"
    DEFAULT_MODE = 5  # Time centered
    MODE_COUNT = 6
    
    # Host settings shared with the reader footer
    FOOTER_KEY = "footer"
    FOOTER_FONT_SIZE_KEY = "text_font_size"
    FOOTER_FONT_BOLD_KEY = "text_font_bold"
    FOOTER_HEIGHT_KEY = "container_height"
    TWELVE_HOUR_CLOCK_KEY = "twelve_hour_clock"
    
    # Layout defaults
    DEFAULT_FONT_FACE = "Helvetica"
    DEFAULT_FONT_SIZE = 14
    MIN_FONT_SIZE = 8
    MAX_FONT_SIZE = 36
    DEFAULT_BOTTOM_PADDING = 7
    DEFAULT_MARGIN = 10  # Same as the large padding
    DEFAULT_CORNER_WIDTH_PCT = 48
    DEFAULT_CENTER_WIDTH_PCT = 84
    MIN_WIDTH_PCT = 10
    MAX_CORNER_WIDTH_PCT = 90
    MAX_CENTER_WIDTH_PCT = 100
    
    # Padding sizes in pixels
    PADDING_SMALL = 2
    PADDING_DEFAULT = 5
    PADDING_LARGE = 10
    
    # Fitting
    ELLIPSIS = "\u2026"
    NO_BREAK_SPACE = "\u00a0"
    
    # Tap zone (fractions of the screen): center third of the top 5%
    TOUCH_ZONE_ID = "reader_header_cycling"
    TOUCH_ZONE_RATIO_X = 0.33
    TOUCH_ZONE_RATIO_Y = 0.0
    TOUCH_ZONE_RATIO_W = 0.34
    TOUCH_ZONE_RATIO_H = 0.05
    
    # Dispatcher actions
    ACTION_NEXT = "header_mode_next"
    ACTION_PREVIOUS = "header_mode_previous"
