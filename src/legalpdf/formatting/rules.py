"""
Per-document-type formatting rules.

Each supported document type maps to a DocumentFormattingRules record:
margins, font, body line spacing, page number placement, and the spacing of
signature content (always tighter than double-spaced body text).

Line spacing categories add a fixed gap, in points, on top of the font's
line height:

    single   -> +0
    one-half -> +6
    double   -> +12

So a 12pt line is 14.4pt single-spaced and 26.4pt double-spaced.

Office action responses reserve a 1.5in top margin on the first page only
(room for the application header); continuation pages fall back to 1in.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Dict, List, Mapping, Optional

from legalpdf.constants import PAGE_SIZES

logger = logging.getLogger(__name__)


# =============================================================================
# DOCUMENT TYPES
# =============================================================================

DOC_PROVISIONAL_PATENT = "provisional-patent-application"
DOC_TRADEMARK = "trademark-application"
DOC_OFFICE_ACTION = "office-action-response"
DOC_NDA_IP = "nda-ip-specific"
DOC_PATENT_ASSIGNMENT = "patent-assignment-agreement"
DOC_PATENT_LICENSE = "patent-license-agreement"
DOC_TECH_TRANSFER = "technology-transfer-agreement"
DOC_CEASE_AND_DESIST = "cease-and-desist-letter"

DOCUMENT_TYPES = (
    DOC_PROVISIONAL_PATENT,
    DOC_TRADEMARK,
    DOC_OFFICE_ACTION,
    DOC_NDA_IP,
    DOC_PATENT_ASSIGNMENT,
    DOC_PATENT_LICENSE,
    DOC_TECH_TRANSFER,
    DOC_CEASE_AND_DESIST,
)

LINE_SPACING_POINTS = {
    "single": 0.0,
    "one-half": 6.0,
    "double": 12.0,
}

PAGE_NUMBER_POSITIONS = ("bottom-center", "bottom-left", "bottom-right")

# Element spacing as a multiple of the document's paragraph spacing
ELEMENT_SPACING_FACTORS = {
    "paragraph": 1.0,
    "section": 1.5,
    "title": 2.0,
    "list": 0.5,
}


# =============================================================================
# RULE TYPES
# =============================================================================

@dataclass(frozen=True)
class Margins:
    """Page margins in points."""
    top: float = 72.0
    bottom: float = 72.0
    left: float = 72.0
    right: float = 72.0


@dataclass(frozen=True)
class PageNumberFormat:
    """
    Page number presentation.

    Attributes:
        format: "numeric" (1, 2), "roman" (i, ii) or "alpha" (a, b).
        prefix: Text before the number (e.g., "Page ").
        suffix: Text after the number.
        starting_number: Number printed on the first numbered page.
        font_size: Page number font size.
        font: Page number font.
    """
    format: str = "numeric"
    prefix: str = "Page "
    suffix: str = ""
    starting_number: int = 1
    font_size: float = 10.0
    font: str = "Times-Roman"


@dataclass(frozen=True)
class DocumentFormattingRules:
    """
    Formatting rules for one document type.

    Attributes:
        line_spacing: Body spacing category ("single", "one-half", "double").
        font_size: Body font size in points.
        font: Base-14 font name.
        margins: Page margins.
        page_number_position: "bottom-center", "bottom-left" or "bottom-right".
        title_case: Headings are title-cased.
        section_numbering: Sections carry numbers.
        paragraph_indent: First-line paragraph indent in points.
        paragraph_spacing: Space between paragraphs in points.
        block_quote_indent: Block quote indent in points.
        signature_line_spacing: Spacing category for signature content.
        page_size: "LETTER", "LEGAL" or "A4".
        page_numbers: Whether pages are numbered at all.
        page_number_format: Number style for numbered pages.
        continuation_top_margin: Top margin for pages after the first, when
            it differs from ``margins.top``.
    """
    line_spacing: str = "double"
    font_size: float = 12.0
    font: str = "Times-Roman"
    margins: Margins = field(default_factory=Margins)
    page_number_position: str = "bottom-center"
    title_case: bool = True
    section_numbering: bool = False
    paragraph_indent: float = 36.0
    paragraph_spacing: float = 12.0
    block_quote_indent: float = 72.0
    signature_line_spacing: str = "single"
    page_size: str = "LETTER"
    page_numbers: bool = True
    page_number_format: PageNumberFormat = field(default_factory=PageNumberFormat)
    continuation_top_margin: Optional[float] = None


# =============================================================================
# RULES TABLE
# =============================================================================

DEFAULT_RULES = DocumentFormattingRules()

_AGREEMENT_RULES = replace(
    DEFAULT_RULES,
    line_spacing="single",
    page_number_position="bottom-right",
    section_numbering=True,
)

DOCUMENT_FORMATTING_RULES: Dict[str, DocumentFormattingRules] = {
    # USPTO filings
    DOC_PROVISIONAL_PATENT: replace(DEFAULT_RULES, section_numbering=True),
    DOC_OFFICE_ACTION: replace(
        DEFAULT_RULES,
        margins=Margins(top=108.0),
        continuation_top_margin=72.0,
        page_number_position="bottom-right",
        section_numbering=True,
        paragraph_indent=0.0,
    ),
    DOC_TRADEMARK: replace(
        DEFAULT_RULES,
        line_spacing="single",
        title_case=False,
        paragraph_indent=0.0,
        block_quote_indent=36.0,
    ),
    # Agreements
    DOC_PATENT_ASSIGNMENT: replace(
        DEFAULT_RULES,
        line_spacing="one-half",
        section_numbering=True,
    ),
    DOC_NDA_IP: _AGREEMENT_RULES,
    DOC_PATENT_LICENSE: _AGREEMENT_RULES,
    DOC_TECH_TRANSFER: _AGREEMENT_RULES,
    # Correspondence
    DOC_CEASE_AND_DESIST: replace(
        DEFAULT_RULES,
        line_spacing="single",
        title_case=False,
        paragraph_indent=0.0,
    ),
}


# =============================================================================
# LOOKUP
# =============================================================================

def rules_for(document_type: str) -> DocumentFormattingRules:
    """
    Look up formatting rules for a document type.

    Unknown types fall back to the default rules with a warning; lookup never
    raises.

    Example:
        >>> rules_for("office-action-response").margins.top
        108.0
        >>> rules_for("unknown-type").line_spacing
        'double'
    """
    rules = DOCUMENT_FORMATTING_RULES.get(document_type)
    if rules is None:
        logger.warning(f"No formatting rules found for {document_type!r}, using defaults")
        return DEFAULT_RULES
    return rules


def line_spacing_points(spacing: str) -> float:
    """
    Extra points a spacing category adds to each line.

    Unrecognized categories count as single spacing.

    Example:
        >>> line_spacing_points("one-half")
        6.0
    """
    return LINE_SPACING_POINTS.get(spacing, 0.0)


def calculate_line_height(font_size: float, spacing: str, line_height_factor: float = 1.2) -> float:
    """Height of one line: font size x factor plus the spacing gap."""
    return font_size * line_height_factor + line_spacing_points(spacing)


def body_line_spacing(rules: DocumentFormattingRules, is_signature: bool = False) -> float:
    """Spacing gap for body text, or for signature content when ``is_signature``."""
    spacing = rules.signature_line_spacing if is_signature else rules.line_spacing
    return line_spacing_points(spacing)


def requires_double_spacing(document_type: str) -> bool:
    return rules_for(document_type).line_spacing == "double"


def element_spacing(rules: DocumentFormattingRules, element: str) -> float:
    """
    Vertical space after an element, scaled from paragraph spacing.

    Example:
        >>> element_spacing(rules_for("provisional-patent-application"), "section")
        18.0
    """
    return rules.paragraph_spacing * ELEMENT_SPACING_FACTORS.get(element, 1.0)


def needs_header_space(document_type: str, page_number: int) -> bool:
    """True on the first page of an office action response."""
    return document_type == DOC_OFFICE_ACTION and page_number == 1


def header_content(document_type: str, metadata: Optional[Mapping[str, str]] = None) -> Optional[List[str]]:
    """
    First-page header lines for document types that carry one.

    Example:
        >>> header_content("office-action-response", {"applicationNumber": "16/123,456"})
        ['Application No.: 16/123,456']
    """
    if document_type != DOC_OFFICE_ACTION or not metadata:
        return None

    lines = []
    if metadata.get("applicationNumber"):
        lines.append(f"Application No.: {metadata['applicationNumber']}")
    if metadata.get("responseDate"):
        lines.append(f"Response Date: {metadata['responseDate']}")
    return lines or None


# =============================================================================
# PAGE GEOMETRY
# =============================================================================

@dataclass(frozen=True)
class PageGeometry:
    """
    Physical page box and margins in points.

    ``usable_height`` is the first page's text area; later pages use
    ``continuation_top_margin`` when set.
    """
    page_width: float
    page_height: float
    margins: Margins = field(default_factory=Margins)
    continuation_top_margin: Optional[float] = None

    @property
    def usable_width(self) -> float:
        return self.page_width - self.margins.left - self.margins.right

    @property
    def usable_height(self) -> float:
        return self.page_height - self.margins.top - self.margins.bottom

    def margins_for_page(self, page_index: int) -> Margins:
        """Margins of a page (0-based)."""
        if page_index > 0 and self.continuation_top_margin is not None:
            return replace(self.margins, top=self.continuation_top_margin)
        return self.margins

    def usable_height_for(self, page_index: int) -> float:
        margins = self.margins_for_page(page_index)
        return self.page_height - margins.top - margins.bottom


def page_geometry(rules: DocumentFormattingRules) -> PageGeometry:
    """
    Derive page geometry from formatting rules.

    Unknown page sizes fall back to LETTER with a warning.

    Example:
        >>> page_geometry(rules_for("nda-ip-specific")).usable_height
        648.0
    """
    size = PAGE_SIZES.get(rules.page_size.upper())
    if size is None:
        logger.warning(f"Unknown page size {rules.page_size!r}, using LETTER")
        size = PAGE_SIZES["LETTER"]

    width, height = size
    return PageGeometry(
        page_width=width,
        page_height=height,
        margins=rules.margins,
        continuation_top_margin=rules.continuation_top_margin,
    )
