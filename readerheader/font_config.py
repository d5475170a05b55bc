"""Font faces available to the header.

The header measures text with reportlab's standard PDF fonts, or in
terminal cells when previewing in a terminal.
"""

from dataclasses import dataclass
from typing import Dict, Optional


# Name of the pseudo-face that measures in terminal cells
CELL_FACE = "cell"


@dataclass(frozen=True)
class FontFace:
    """Configuration for a header font face.

    Attributes:
        name: Display name of the face
        pdf_name: Name used for measuring and PDF drawing
        pdf_bold_name: Bold variant name
        is_cell: Whether the face measures in terminal cells
    """
    name: str
    pdf_name: str
    pdf_bold_name: str
    is_cell: bool = False

    def resolve(self, bold: bool) -> str:
        """Return the concrete font name for the weight."""
        return self.pdf_bold_name if bold else self.pdf_name


FONT_FACES: Dict[str, FontFace] = {
    "Helvetica": FontFace(
        name="Helvetica",
        pdf_name="Helvetica",
        pdf_bold_name="Helvetica-Bold",
    ),
    "Times": FontFace(
        name="Times",
        pdf_name="Times-Roman",
        pdf_bold_name="Times-Bold",
    ),
    "Courier": FontFace(
        name="Courier",
        pdf_name="Courier",
        pdf_bold_name="Courier-Bold",
    ),
    CELL_FACE: FontFace(
        name=CELL_FACE,
        pdf_name=CELL_FACE,
        pdf_bold_name=CELL_FACE,
        is_cell=True,
    ),
}


def get_font_face(name: str) -> Optional[FontFace]:
    """Get font face by name.

    Args:
        name: Name of the face

    Returns:
        FontFace if found, None otherwise
    """
    return FONT_FACES.get(name)
