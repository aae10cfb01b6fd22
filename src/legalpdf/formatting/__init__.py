"""
Formatting rules: per-document-type table, page geometry, override merging.
"""

from legalpdf.formatting.rules import (
    DEFAULT_RULES,
    DOCUMENT_FORMATTING_RULES,
    DOCUMENT_TYPES,
    DocumentFormattingRules,
    Margins,
    PageGeometry,
    PageNumberFormat,
    body_line_spacing,
    calculate_line_height,
    element_spacing,
    header_content,
    line_spacing_points,
    needs_header_space,
    page_geometry,
    requires_double_spacing,
    rules_for,
)
from legalpdf.formatting.overrides import (
    FormattingConfiguration,
    merge_rules,
    resolve_rules,
)

__all__ = [
    # Rules
    "DEFAULT_RULES",
    "DOCUMENT_FORMATTING_RULES",
    "DOCUMENT_TYPES",
    "DocumentFormattingRules",
    "Margins",
    "PageGeometry",
    "PageNumberFormat",
    "body_line_spacing",
    "calculate_line_height",
    "element_spacing",
    "header_content",
    "line_spacing_points",
    "needs_header_space",
    "page_geometry",
    "requires_double_spacing",
    "rules_for",
    # Overrides
    "FormattingConfiguration",
    "merge_rules",
    "resolve_rules",
]
