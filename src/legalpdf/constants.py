"""
Shared constants across legalpdf modules.

This module is the single source of truth for:
- Marker keywords and the marker regex
- Line-shape regexes used by the extractor and party parser
- Party role whitelist (roles that look like section headers)
- Page sizes in points
- Body text shapes (headings, list items, quotes, rules) used by the block builder
"""

import re

# =============================================================================
# MARKER KEYWORDS
# =============================================================================

KEYWORD_SIGNATURE = "SIGNATURE_BLOCK"
KEYWORD_INITIALS = "INITIALS_BLOCK"
KEYWORD_NOTARY = "NOTARY_BLOCK"

MARKER_KEYWORDS = (KEYWORD_SIGNATURE, KEYWORD_INITIALS, KEYWORD_NOTARY)

# [KEYWORD:id] on a single line; brackets never span lines
MARKER_RX = re.compile(
    r"\[(" + "|".join(MARKER_KEYWORDS) + r"):([^\[\]\n]+)\]"
)

# Kebab-case ids: lowercase letter first, hyphen-separated alphanumeric parts
MARKER_ID_RX = re.compile(r"^[a-z][a-z0-9]*(-[a-z0-9]+)*$")


# =============================================================================
# LINE SHAPES
# =============================================================================

# "ASSIGNOR:" / "DISCLOSING PARTY"
ROLE_LINE_RX = re.compile(r"^[A-Z][A-Z\s]*:?$")

# "LICENSEE: ______" (initials line)
INITIAL_LINE_RX = re.compile(r"^([A-Z][A-Z\s]*?):\s*(_{3,})$")

# Wet-ink signature rule
SIGNATURE_RULE_RX = re.compile(r"^_{10,}")

UNDERSCORE_RUN_RX = re.compile(r"_{3,}")

FIELD_RX = {
    "name": re.compile(r"^Name:\s*(.+)$", re.IGNORECASE),
    "title": re.compile(r"^Title:\s*(.+)$", re.IGNORECASE),
    "company": re.compile(r"^Company:\s*(.+)$", re.IGNORECASE),
    "date": re.compile(r"^Date:\s*(.+)$", re.IGNORECASE),
}

FIELD_LABEL_RX = re.compile(r"^(Name|Title|Company|Date):", re.IGNORECASE)

NOTARY_LINE_RX = re.compile(
    r"^(State of|County of|Notary|Subscribed and sworn|My Commission|Commission)",
    re.IGNORECASE,
)

# Column gaps
SIDE_BY_SIDE_SPLIT_RX = re.compile(r" {5,}|\t")
COLUMN_GAP_RX = re.compile(r" {10,}|\t")

SECTION_HEADER_PATTERNS = (
    re.compile(r"^[A-Z][A-Z\s]+:$"),         # "TERMS AND CONDITIONS:"
    re.compile(r"^[A-Z][A-Z\s]+$"),          # "TERMS AND CONDITIONS"
    re.compile(r"^\d+\.\s+[A-Z]"),           # "1. DEFINITIONS"
    re.compile(r"^ARTICLE\s+[IVX\d]+", re.IGNORECASE),
    re.compile(r"^SECTION\s+\d+", re.IGNORECASE),
)


# =============================================================================
# PARTY ROLES
# =============================================================================

# All-caps labels that open a party record rather than a new document section
COMMON_PARTY_ROLES = frozenset({
    "ASSIGNOR",
    "ASSIGNEE",
    "LICENSOR",
    "LICENSEE",
    "DISCLOSING PARTY",
    "RECEIVING PARTY",
    "PARTY",
    "INVENTOR",
    "APPLICANT",
    "COMPANY",
    "WITNESS",
    "TRANSFEROR",
    "TRANSFEREE",
    "ATTORNEY",
    "NOTARY PUBLIC",
})


# =============================================================================
# PAGE SIZES (points, portrait)
# =============================================================================

PAGE_SIZES = {
    "LETTER": (612.0, 792.0),
    "LEGAL": (612.0, 1008.0),
    "A4": (595.28, 841.89),
}


# =============================================================================
# BODY TEXT SHAPES
# =============================================================================

MARKDOWN_HEADING_RX = re.compile(r"^(#{1,6})\s+(.+?)\s*#*$")

# "1. DEFINITIONS" / "2.1 GRANT OF LICENSE" (all-caps title only)
NUMBERED_HEADING_RX = re.compile(r"^\d+(\.\d+)*\.?\s+[A-Z][A-Z0-9\s,&'()/-]*$")

ALL_CAPS_HEADING_RX = re.compile(r"^[A-Z][A-Z0-9\s,&'()/-]{2,}:?$")

ARTICLE_HEADING_RX = re.compile(r"^(ARTICLE|SECTION)\s+([IVXLC]+|\d+)\b")

LIST_ITEM_RX = re.compile(r"^\s*([-*+•]|\d+[.)]|\([a-z0-9]+\))\s+")

BLOCKQUOTE_RX = re.compile(r"^\s*>\s?")

HORIZONTAL_RULE_RX = re.compile(r"^\s*(-{3,}|\*{3,}|={3,})\s*$")
