"""Readerheader CLI entry point.

Allows running via `python -m readerheader` and provides the console script
defined in `pyproject.toml`.

Usage:
    readerheader --version
    readerheader mode | next | prev | select N
    readerheader settings
    readerheader set KEY VALUE
    readerheader preview [--title T] [--author A] [--chapter C] [--page N]
                         [--pages-done N] [--width W] [--height H] [--pdf FILE]
"""

from __future__ import annotations

import dataclasses
import importlib.metadata
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

from .errors import HeaderError
from .font_config import CELL_FACE
from .host import DocumentProps, PageMargins, ReaderPage, Screen, TableOfContents
from .layout_config import SETTING_FIELDS, parse_value

USAGE = __doc__.split("Usage:", 1)[1].rstrip()

# Default PDF preview page, in points
PREVIEW_WIDTH = 600
PREVIEW_HEIGHT = 800


def get_version_string() -> str:
    try:
        return importlib.metadata.version("readerheader")
    except importlib.metadata.PackageNotFoundError:
        return "unknown"


class _PreviewToc(TableOfContents):
    """A single chapter spanning the whole preview."""

    def __init__(self, title: str, pages_done: int):
        self.title = title
        self.pages_done = pages_done

    def title_for_page(self, page: int) -> Optional[str]:
        return self.title

    def chapter_pages_done(self, page: int) -> Optional[int]:
        return self.pages_done


def _parse_options(args: List[str]) -> Dict[str, str]:
    """Parse ``--name value`` pairs."""
    options: Dict[str, str] = {}
    i = 0
    while i < len(args):
        arg = args[i]
        if not arg.startswith("--") or i + 1 >= len(args):
            raise HeaderError(f"Unexpected argument: {arg}")
        options[arg[2:]] = args[i + 1]
        i += 2
    return options


def _int_option(options: Dict[str, str], name: str, default: int) -> int:
    value = options.get(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        raise HeaderError(f"--{name} expects an integer, got {value!r}") from None


def _make_header(screen: Screen):
    # Lazy import keeps --version free of the font and terminal stack
    from .header import ReaderHeader
    return ReaderHeader(screen)


def run_preview(args: List[str]) -> None:
    """Render the header for a sample page, in the terminal or to a PDF."""
    options = _parse_options(args)
    page = ReaderPage(
        page_number=_int_option(options, "page", 1),
        props=DocumentProps(
            display_title=options.get("title", "Untitled"),
            authors=options.get("author", "").replace("\\n", "\n"),
        ),
        toc=_PreviewToc(options.get("chapter", ""), _int_option(options, "pages-done", 0)),
        margins=PageMargins(),
    )

    pdf_path = options.get("pdf")
    if pdf_path:
        from .painters import generate_preview_pdf
        screen = Screen(_int_option(options, "width", PREVIEW_WIDTH),
                        _int_option(options, "height", PREVIEW_HEIGHT))
        header = _make_header(screen)
        config = header.settings.config
        content = header.compute(page)
        boxes = header.renderer.layout(content, config, header.geometry(page), page.kind)
        body = [f"Page {page.page_number}", header.modes.mode.label]
        pdf, warning = generate_preview_pdf(boxes, config, screen.width, screen.height, body)
        Path(pdf_path).write_bytes(pdf)
        if warning:
            print(warning, file=sys.stderr)
        print(f"Wrote {pdf_path}")
        return

    import blessed
    from .painters import CellGridPainter
    term = blessed.Terminal()
    screen = Screen(_int_option(options, "width", term.width or 80),
                    _int_option(options, "height", 12))
    header = _make_header(screen)
    # Terminal cells: measure in cells and keep paddings to a row or two
    config = dataclasses.replace(header.settings.config, font_face=CELL_FACE,
                                 margin=min(header.settings.config.margin, 2),
                                 bottom_padding=0)
    geometry = header.geometry(page)
    geometry = dataclasses.replace(geometry,
                                   left_margin=min(geometry.left_margin, 2),
                                   right_margin=min(geometry.right_margin, 2))
    book, pagination = header.gather(page)
    content = header.composer.compute(header.modes.mode, book, pagination,
                                      header.clock.text(), config, geometry)
    painter = CellGridPainter(screen.width, screen.height, term)
    header.renderer.paint(content, config, geometry, painter, page.kind)
    border = "-" * screen.width
    print(border)
    for line in painter.lines():
        print(line.rstrip())
    print(border)
    print(f"Mode {int(header.modes.mode)}: {header.modes.mode.label}")


def run_command(args: List[str]) -> int:
    command, rest = args[0], args[1:]

    if command == "preview":
        run_preview(rest)
        return 0

    header = _make_header(Screen(PREVIEW_WIDTH, PREVIEW_HEIGHT))
    modes = header.modes

    if command == "mode":
        pass
    elif command == "next":
        modes.next()
    elif command in ("prev", "previous"):
        modes.previous()
    elif command == "select":
        if len(rest) != 1:
            raise HeaderError("select expects a mode number 1-6")
        try:
            value = int(rest[0])
        except ValueError:
            value = rest[0]
        modes.select(value)
    elif command == "settings":
        for name, spec in SETTING_FIELDS.items():
            value = header.settings.get(name)
            value = getattr(value, "value", value)
            print(f"{spec.key} = {value}")
        return 0
    elif command == "set":
        if len(rest) != 2:
            raise HeaderError("set expects KEY VALUE")
        key, text = rest
        name = _field_for_key(key)
        value = header.settings.set(name, parse_value(name, text))
        print(f"{SETTING_FIELDS[name].key} = {getattr(value, 'value', value)}")
        return 0
    else:
        print(f"Unknown command: {command}", file=sys.stderr)
        print(f"Usage:{USAGE}", file=sys.stderr)
        return 2

    print(f"{int(modes.mode)} {modes.mode.label}")
    return 0


def _field_for_key(key: str) -> str:
    """Accept either the attribute name or the persisted key."""
    if key in SETTING_FIELDS:
        return key
    for name, spec in SETTING_FIELDS.items():
        if spec.key == key:
            return name
    raise HeaderError(f"Unknown setting: {key}")


def main() -> None:
    args = sys.argv[1:]
    verbose = False
    if args and args[0] in ("-v", "--verbose"):
        verbose = True
        args = args[1:]
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    if args and args[0] in ("--version", "-V"):
        print(get_version_string())
        return
    if not args or args[0] in ("-h", "--help"):
        print(f"Usage:{USAGE}")
        return

    try:
        sys.exit(run_command(args))
    except HeaderError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":  # pragma: no cover
    main()
