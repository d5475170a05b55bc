"""Exceptions raised by the reader header."""


class HeaderError(Exception):
    """Base class for reader header errors."""


class InvalidMode(HeaderError, ValueError):
    """Raised when selecting a header mode outside 1-6."""

    def __init__(self, value):
        super().__init__(f"Invalid header mode: {value!r} (expected 1-6)")
        self.value = value


class InvalidSetting(HeaderError, ValueError):
    """Raised when a layout setting is unknown, mistyped or out of range."""

    def __init__(self, key: str, value, reason: str = ""):
        message = f"Invalid value for {key}: {value!r}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)
        self.key = key
        self.value = value


class FontLoadError(HeaderError):
    """Exception raised when a font cannot be loaded."""
