"""
Scan + extract pipeline: document text -> ParsedDocument.

Algorithm Overview:
    1. Scan the whole text for markers (offsets relative to the text).
    2. Walk lines in order. Lines without markers pass through as content.
    3. On a marker line, the text left after removing the markers stays
       content if non-blank. Each marker on the line opens a block; the last
       one owns the body lines that follow (earlier ones on the same line
       are empty blocks).
    4. Classify the body layout, run the party machine, and read notary
       fields. Consumed body lines are removed from content.

Each block records ``content_index``: the position in ``content`` before
which it renders, so a renderer can interleave blocks and text without
re-scanning.
"""

import logging
from collections import defaultdict
from typing import Dict, List, Optional

from legalpdf.core.core_types import (
    BlockLayout,
    MarkerType,
    ParsedDocument,
    SignatureBlockData,
    SignatureMarker,
)
from legalpdf.signatures.blocks import BlockExtraction, extract_block
from legalpdf.signatures.layout_detection import classify_layout
from legalpdf.signatures.markers import marker_context, scan_markers
from legalpdf.signatures.parties import extract_notary_details, extract_parties
from legalpdf.signatures.templates import SignatureSchema

logger = logging.getLogger(__name__)


def build_block(
    marker: SignatureMarker,
    extraction: BlockExtraction,
    content_index: int,
    schema: Optional[SignatureSchema] = None,
) -> SignatureBlockData:
    """
    Assemble one SignatureBlockData from a marker and its extracted body.

    Args:
        marker: Marker that opened the block.
        extraction: Body lines following the marker.
        content_index: Position in the cleaned content the block precedes.
        schema: Optional template schema; ``notaryRequired`` there forces
            notarial acknowledgment for the block.

    Returns:
        Immutable block record.
    """
    layout = classify_layout(extraction.lines) if extraction.lines else BlockLayout.SINGLE
    parties = extract_parties(extraction.lines, layout)

    spec = schema.block_for_marker(marker) if schema is not None else None
    is_notary = marker.marker_type is MarkerType.NOTARY
    notary_required = is_notary or bool(spec and spec.notary_required)

    return SignatureBlockData(
        marker=marker,
        layout=layout,
        parties=tuple(parties),
        notary_required=notary_required,
        content_index=content_index,
        notary=extract_notary_details(extraction.lines) if is_notary else None,
        raw_lines=extraction.lines,
    )


def parse_document(text: str, schema: Optional[SignatureSchema] = None) -> ParsedDocument:
    """
    Separate signature blocks from ordinary content.

    Args:
        text: Complete generated document text.
        schema: Optional template schema for per-block flags.

    Returns:
        ParsedDocument with cleaned content lines and blocks in document order.

    Example:
        >>> doc = parse_document("Intro\\n[SIGNATURE_BLOCK:a-sig]\\nA:\\n")
        >>> doc.content, len(doc.signature_blocks)
        (('Intro',), 1)
    """
    lines = text.split("\n")

    markers_by_line: Dict[int, List[SignatureMarker]] = defaultdict(list)
    for marker in scan_markers(text):
        markers_by_line[marker.line_index].append(marker)

    content: List[str] = []
    blocks: List[SignatureBlockData] = []
    idx = 0

    while idx < len(lines):
        line = lines[idx]
        line_markers = markers_by_line.get(idx)

        if not line_markers:
            content.append(line)
            idx += 1
            continue

        residual = line
        for marker in line_markers:
            residual = residual.replace(marker.full_marker_text, "", 1)
        if residual.strip():
            content.append(residual)

        extraction = extract_block(lines, idx)
        empty = BlockExtraction(lines=(), lines_consumed=0)

        for position, marker in enumerate(line_markers):
            is_last = position == len(line_markers) - 1
            block = build_block(
                marker,
                extraction if is_last else empty,
                content_index=len(content),
                schema=schema,
            )
            blocks.append(block)
            logger.debug(
                f"Found {marker.marker_type.value} marker {marker.marker_id!r} "
                f"on line {idx} ({marker_context(marker.marker_id)}): "
                f"{len(block.parties)} parties, {block.layout.value}"
            )

        idx += 1 + extraction.lines_consumed

    logger.info(f"Parsed {len(blocks)} signature blocks, {len(content)} content lines")
    return ParsedDocument(content=tuple(content), signature_blocks=tuple(blocks))
