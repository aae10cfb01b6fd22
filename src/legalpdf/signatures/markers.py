"""
Marker scanning for signature, initials and notary regions.

Generated documents mark signature regions with bracketed tags on their own
line:

    [SIGNATURE_BLOCK:assignor-signature]
    [INITIALS_BLOCK:licensee-initials]
    [NOTARY_BLOCK:assignor-notary]

Scanning is left-to-right and non-overlapping. Anything else in brackets
(citations, placeholders, unknown keywords, unterminated brackets) is left
alone so ordinary document text never makes the scan fail. Ids must be
kebab-case; a marker with any other id is logged and ignored.
"""

import logging
import re
from typing import List

from legalpdf.constants import MARKER_ID_RX, MARKER_RX
from legalpdf.core.core_types import MarkerContext, MarkerType, SignatureMarker

logger = logging.getLogger(__name__)

_POSITION_RX = re.compile(r"-(\d+)$")


def is_valid_marker_id(marker_id: str) -> bool:
    """
    Check that a marker id is kebab-case.

    Example:
        >>> is_valid_marker_id("assignor-signature")
        True
        >>> is_valid_marker_id("Invalid_ID")
        False
        >>> is_valid_marker_id("123-numbers")
        False
    """
    return bool(MARKER_ID_RX.match(marker_id))


def find_markers_in_line(
    line: str,
    line_offset: int = 0,
    line_index: int = 0,
) -> List[SignatureMarker]:
    """
    Find all well-formed markers in a single line.

    Args:
        line: Line text (no trailing newline).
        line_offset: Offset of the line's first character in the full text,
            added to each marker's start/end offsets.
        line_index: Index of the line in the document, stored on the marker.

    Returns:
        Markers in left-to-right order.
    """
    markers: List[SignatureMarker] = []

    for match in MARKER_RX.finditer(line):
        marker_type = MarkerType.from_keyword(match.group(1))
        if marker_type is None:
            continue

        marker_id = match.group(2)
        if not is_valid_marker_id(marker_id):
            logger.warning(f"Invalid marker ID format: {marker_id!r} on line {line_index}")
            continue

        markers.append(SignatureMarker(
            marker_type=marker_type,
            marker_id=marker_id,
            full_marker_text=match.group(0),
            start_offset=line_offset + match.start(),
            end_offset=line_offset + match.end(),
            line_index=line_index,
        ))

    return markers


def scan_markers(text: str) -> List[SignatureMarker]:
    """
    Scan full document text for signature-related markers.

    Offsets are positions in ``text`` itself, so
    ``text[m.start_offset:m.end_offset] == m.full_marker_text``.

    Args:
        text: Complete document text.

    Returns:
        Markers in document order.

    Example:
        >>> [m.marker_id for m in scan_markers("A\\n[NOTARY_BLOCK:a-notary]\\n")]
        ['a-notary']
    """
    markers: List[SignatureMarker] = []
    offset = 0

    for line_index, line in enumerate(text.split("\n")):
        markers.extend(find_markers_in_line(line, offset, line_index))
        offset += len(line) + 1

    logger.debug(f"Scanned {len(markers)} markers")
    return markers


def marker_context(marker_id: str) -> MarkerContext:
    """
    Parse party/role/position hints out of a marker id.

    Example:
        >>> marker_context("assignor-signature-2")
        MarkerContext(party='assignor', role='assignor-signature', position=2)
        >>> marker_context("licensee-initials")
        MarkerContext(party='licensee', role='licensee', position=0)
        >>> marker_context("witness")
        MarkerContext(party=None, role=None, position=0)
    """
    parts = marker_id.split("-")
    if len(parts) < 2:
        return MarkerContext()

    pos_match = _POSITION_RX.search(marker_id)
    return MarkerContext(
        party=parts[0],
        role="-".join(parts[:-1]),
        position=int(pos_match.group(1)) if pos_match else 0,
    )


def expected_marker_text(marker_type: MarkerType, marker_id: str) -> str:
    """Literal marker string a generator emits for a block id."""
    return f"[{marker_type.keyword}:{marker_id}]"
