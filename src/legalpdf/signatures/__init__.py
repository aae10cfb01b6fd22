"""
Signature block parsing: markers, block bodies, layout, parties, templates.
"""

from legalpdf.signatures.markers import (
    expected_marker_text,
    find_markers_in_line,
    is_valid_marker_id,
    marker_context,
    scan_markers,
)
from legalpdf.signatures.blocks import (
    BlockExtraction,
    extract_block,
    is_section_header,
    looks_like_signature_content,
)
from legalpdf.signatures.layout_detection import (
    LayoutSignals,
    classify_layout,
    count_underscore_runs,
    detect_layout_signals,
    has_column_gap,
)
from legalpdf.signatures.parties import (
    extract_notary_details,
    extract_parties,
    split_columns,
)
from legalpdf.signatures.templates import (
    BlockSpec,
    SignatureSchema,
    load_signature_schema,
)
from legalpdf.signatures.parser import build_block, parse_document

__all__ = [
    # Markers
    "expected_marker_text",
    "find_markers_in_line",
    "is_valid_marker_id",
    "marker_context",
    "scan_markers",
    # Block bodies
    "BlockExtraction",
    "extract_block",
    "is_section_header",
    "looks_like_signature_content",
    # Layout
    "LayoutSignals",
    "classify_layout",
    "count_underscore_runs",
    "detect_layout_signals",
    "has_column_gap",
    # Parties
    "extract_notary_details",
    "extract_parties",
    "split_columns",
    # Templates
    "BlockSpec",
    "SignatureSchema",
    "load_signature_schema",
    # Parser
    "build_block",
    "parse_document",
]
