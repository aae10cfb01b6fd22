"""
Block body extraction following a marker line.

After a marker, the generator usually writes the block body: role labels,
signature rules, Name:/Title: fields, notary venue lines. This module decides
how many of the following lines belong to the block.

Stop conditions (checked in order for each candidate line):
1. The line holds another marker, well-formed or not (not consumed).
2. Two consecutive blank lines (the second is not consumed).
   After a single blank, only signature-like lines continue the block.
3. An all-caps section header that is not a known party role. The first
   non-blank line after the marker never counts as a header.
4. Nothing signature-like has been collected yet and the line is not
   signature-like either (prose right after a marker stays content).

An empty body is valid: the block then carries only its marker semantics.
"""

import logging
from dataclasses import dataclass
from typing import AbstractSet, Sequence, Tuple

from legalpdf.constants import (
    COMMON_PARTY_ROLES,
    FIELD_LABEL_RX,
    INITIAL_LINE_RX,
    MARKER_RX,
    NOTARY_LINE_RX,
    ROLE_LINE_RX,
    SECTION_HEADER_PATTERNS,
    SIDE_BY_SIDE_SPLIT_RX,
    UNDERSCORE_RUN_RX,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BlockExtraction:
    """
    Result of block body extraction.

    Attributes:
        lines: Body lines, trailing blank lines removed.
        lines_consumed: Number of source lines after the marker line that
            belong to the block (including a consumed trailing blank).
    """
    lines: Tuple[str, ...]
    lines_consumed: int

    @property
    def is_empty(self) -> bool:
        return not any(line.strip() for line in self.lines)


def _is_signature_segment(text: str) -> bool:
    return bool(
        ROLE_LINE_RX.match(text)
        or INITIAL_LINE_RX.match(text)
        or UNDERSCORE_RUN_RX.search(text)
        or FIELD_LABEL_RX.match(text)
        or NOTARY_LINE_RX.match(text)
    )


def looks_like_signature_content(text: str) -> bool:
    """
    Check whether a stripped line has the shape of signature block content.

    Side-by-side rows qualify when any column segment does.

    Example:
        >>> looks_like_signature_content("ASSIGNOR:")
        True
        >>> looks_like_signature_content("DISCLOSING PARTY:          RECEIVING PARTY:")
        True
        >>> looks_like_signature_content("Notary Public Signature: ____")
        True
        >>> looks_like_signature_content("This Agreement is effective today.")
        False
    """
    if not text:
        return False
    return any(
        _is_signature_segment(segment.strip())
        for segment in SIDE_BY_SIDE_SPLIT_RX.split(text)
        if segment.strip()
    )


def is_section_header(text: str, party_roles: AbstractSet[str] = COMMON_PARTY_ROLES) -> bool:
    """
    Check whether a stripped line opens a new, unrelated document section.

    Known party roles ("ASSIGNOR:", "DISCLOSING PARTY") and lines with a
    column gap (side-by-side role rows) are never headers.

    Example:
        >>> is_section_header("TERMS AND CONDITIONS:")
        True
        >>> is_section_header("ASSIGNEE:")
        False
        >>> is_section_header("ARTICLE IV")
        True
    """
    if not text or SIDE_BY_SIDE_SPLIT_RX.search(text):
        return False
    if text.replace(":", "").strip().upper() in party_roles:
        return False
    return any(pattern.match(text) for pattern in SECTION_HEADER_PATTERNS)


def extract_block(
    lines: Sequence[str],
    marker_line_index: int,
    party_roles: AbstractSet[str] = COMMON_PARTY_ROLES,
) -> BlockExtraction:
    """
    Collect the body lines of the block whose marker sits on ``marker_line_index``.

    Args:
        lines: All document lines.
        marker_line_index: Index of the marker line.
        party_roles: Upper-case role labels never treated as section headers.

    Returns:
        BlockExtraction with the body lines and the count of lines consumed.
    """
    collected = []
    has_signature_content = False
    idx = marker_line_index + 1

    while idx < len(lines):
        line = lines[idx]

        if MARKER_RX.search(line):
            break

        stripped = line.strip()
        if not stripped:
            # A single blank is allowed inside a block; two end it
            if collected and not collected[-1].strip():
                break
            collected.append(line)
            idx += 1
            continue

        is_first = not any(c.strip() for c in collected)
        if not is_first and is_section_header(stripped, party_roles):
            break

        is_signature_line = looks_like_signature_content(stripped)
        if not is_signature_line and not has_signature_content:
            break
        if not is_signature_line and not collected[-1].strip():
            break

        has_signature_content = has_signature_content or is_signature_line
        collected.append(line)
        idx += 1

    lines_consumed = idx - marker_line_index - 1

    while collected and not collected[-1].strip():
        collected.pop()

    logger.debug(
        f"Extracted {len(collected)} body lines after line {marker_line_index} "
        f"(consumed {lines_consumed})"
    )
    return BlockExtraction(lines=tuple(collected), lines_consumed=lines_consumed)
