"""
Text measurement and wrapped height estimation.

Widths come from a measurer callable ``(text, font, font_size) -> points``.
The default measurer reads base-14 font metrics from PyMuPDF, so no PDF needs
to be opened. Callers (and tests) can pass any callable with the same shape.

Wrapping is greedy by word: a word goes on the current line if the line plus
a space plus the word fits, otherwise it starts a new line. A single word
wider than the line occupies as many lines as its width requires.
"""

import logging
from typing import Callable, Optional

import numpy as np

logger = logging.getLogger(__name__)

Measurer = Callable[[str, str, float], float]

# PDF base-14 names -> PyMuPDF built-in font codes
BASE14_FONT_CODES = {
    "Times-Roman": "tiro",
    "Times-Bold": "tibo",
    "Times-Italic": "tiit",
    "Times-BoldItalic": "tibi",
    "Helvetica": "helv",
    "Helvetica-Bold": "hebo",
    "Helvetica-Oblique": "heit",
    "Helvetica-BoldOblique": "hebi",
    "Courier": "cour",
    "Courier-Bold": "cobo",
    "Courier-Oblique": "coit",
    "Courier-BoldOblique": "cobi",
}


def font_code(font: str) -> str:
    """
    Resolve a font name to a PyMuPDF built-in font code.

    Unknown names fall back to Times-Roman.

    Example:
        >>> font_code("Helvetica-Bold")
        'hebo'
        >>> font_code("tiro")
        'tiro'
    """
    if font in BASE14_FONT_CODES.values():
        return font
    code = BASE14_FONT_CODES.get(font)
    if code is None:
        logger.debug(f"No built-in metrics for font {font!r}, using Times-Roman")
        return "tiro"
    return code


def pymupdf_measurer(text: str, font: str, font_size: float) -> float:
    """
    Width of ``text`` in points using PyMuPDF base-14 metrics.

    Raises:
        ImportError: If PyMuPDF is not installed.
    """
    try:
        import fitz  # PyMuPDF
    except ImportError:
        raise ImportError(
            "PyMuPDF not installed. Run: pip install PyMuPDF"
        )

    return fitz.get_text_length(text, fontname=font_code(font), fontsize=font_size)


def wrap_line_count(
    text: str,
    width: float,
    font: str,
    font_size: float,
    measurer: Optional[Measurer] = None,
) -> int:
    """
    Number of lines ``text`` wraps to within ``width`` points.

    Args:
        text: One paragraph (internal newlines are treated as spaces).
        width: Available line width in points.
        font: Font name.
        font_size: Font size in points.
        measurer: Width function; defaults to PyMuPDF metrics.

    Returns:
        Line count; 0 for blank text.
    """
    words = text.split()
    if not words:
        return 0

    measure = measurer or pymupdf_measurer
    word_widths = np.array([measure(w, font, font_size) for w in words], dtype=float)
    space = measure(" ", font, font_size)

    if width <= 0:
        return len(words)

    # Whole paragraph on one line
    if word_widths.sum() + space * (len(words) - 1) <= width:
        return 1

    oversized = word_widths > width
    full_lines, remainders = np.divmod(word_widths, width)

    lines = 0
    current = None
    for idx, word_width in enumerate(word_widths.tolist()):
        if oversized[idx]:
            # Oversized word: flush, then take whole lines for it
            if current is not None:
                lines += 1
            lines += int(full_lines[idx])
            current = float(remainders[idx]) if remainders[idx] > 0 else None
            continue
        if current is None:
            current = word_width
        elif current + space + word_width <= width:
            current += space + word_width
        else:
            lines += 1
            current = word_width

    return lines + (1 if current is not None else 0)
