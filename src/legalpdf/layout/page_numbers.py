"""
Page numbering pass over a finished layout plan.

Numbers are assigned after all blocks are placed and only to pages that
received content. Blank pages (including any trailing ones) carry no label
and do not advance the count.
"""

import logging
from dataclasses import replace
from typing import List, Optional

from legalpdf.formatting.rules import (
    PAGE_NUMBER_POSITIONS,
    DocumentFormattingRules,
    PageNumberFormat,
)
from legalpdf.layout.engine import LayoutPlan, PageInfo

logger = logging.getLogger(__name__)

_ROMAN_NUMERALS = (
    (1000, "m"), (900, "cm"), (500, "d"), (400, "cd"),
    (100, "c"), (90, "xc"), (50, "l"), (40, "xl"),
    (10, "x"), (9, "ix"), (5, "v"), (4, "iv"), (1, "i"),
)


def to_roman(number: int) -> str:
    """
    Lowercase roman numerals.

    Example:
        >>> to_roman(14)
        'xiv'
        >>> to_roman(1999)
        'mcmxcix'
    """
    result = []
    for value, numeral in _ROMAN_NUMERALS:
        while number >= value:
            result.append(numeral)
            number -= value
    return "".join(result)


def to_alpha(number: int) -> str:
    """
    Lowercase letters: a..z, then aa, ab, ...

    Example:
        >>> to_alpha(1), to_alpha(26), to_alpha(27)
        ('a', 'z', 'aa')
    """
    result = ""
    number -= 1
    while number >= 0:
        result = chr(ord("a") + number % 26) + result
        number = number // 26 - 1
    return result


def format_page_number(number: int, fmt: Optional[PageNumberFormat] = None) -> str:
    """
    Render a page number with the configured style, prefix and suffix.

    Example:
        >>> format_page_number(3, PageNumberFormat(format="roman", prefix="", suffix="."))
        'iii.'
    """
    fmt = fmt or PageNumberFormat()
    if fmt.format == "roman":
        text = to_roman(number)
    elif fmt.format == "alpha":
        text = to_alpha(number)
    else:
        text = str(number)
    return f"{fmt.prefix}{text}{fmt.suffix}"


def number_pages(plan: LayoutPlan, rules: DocumentFormattingRules) -> LayoutPlan:
    """
    Label every page that received content.

    Args:
        plan: Plan from the layout engine.
        rules: Formatting rules (page_numbers flag, format, position).

    Returns:
        New plan whose pages carry ``label`` and ``number_position``.
        Returned unchanged when page numbering is disabled.
    """
    if not rules.page_numbers:
        return plan

    position = rules.page_number_position
    if position not in PAGE_NUMBER_POSITIONS:
        logger.warning(f"Unknown page number position {position!r}, using bottom-center")
        position = "bottom-center"

    fmt = rules.page_number_format
    number = fmt.starting_number
    pages: List[PageInfo] = []

    for page in plan.pages:
        if not page.has_content:
            pages.append(page)
            continue
        pages.append(replace(page, label=format_page_number(number, fmt), number_position=position))
        number += 1

    logger.debug(f"Numbered {number - fmt.starting_number} of {len(plan.pages)} pages")
    return replace(plan, pages=tuple(pages))
