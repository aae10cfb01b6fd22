"""
Override and default merging for formatting rules.

Resolution order, highest precedence first:

    per-document-type override  >  global defaults  >  base rules

Partial records are merged field by field. ``margins`` and
``pageNumberFormat`` are merged per attribute, so overriding only
``margins.top`` keeps the base bottom/left/right.

Keys may be given in camelCase (as in template JSON) or snake_case. An
unknown key is a caller bug and raises ValueError.
"""

import logging
from dataclasses import fields, is_dataclass, replace
from typing import Any, Dict, Mapping, Optional

from legalpdf.formatting.rules import (
    DocumentFormattingRules,
    Margins,
    PageNumberFormat,
    rules_for,
)

logger = logging.getLogger(__name__)

PartialRules = Mapping[str, Any]

_CAMEL_TO_SNAKE = {
    "lineSpacing": "line_spacing",
    "fontSize": "font_size",
    "pageNumberPosition": "page_number_position",
    "titleCase": "title_case",
    "sectionNumbering": "section_numbering",
    "paragraphIndent": "paragraph_indent",
    "paragraphSpacing": "paragraph_spacing",
    "blockQuoteIndent": "block_quote_indent",
    "signatureLineSpacing": "signature_line_spacing",
    "pageSize": "page_size",
    "pageNumbers": "page_numbers",
    "pageNumberFormat": "page_number_format",
    "continuationTopMargin": "continuation_top_margin",
    "startingNumber": "starting_number",
}

_RULE_FIELDS = frozenset(f.name for f in fields(DocumentFormattingRules))
_MARGIN_FIELDS = frozenset(f.name for f in fields(Margins))
_PAGE_NUMBER_FIELDS = frozenset(f.name for f in fields(PageNumberFormat))


def _normalize_keys(partial: Mapping[str, Any], allowed: frozenset, what: str) -> Dict[str, Any]:
    normalized = {}
    for key, value in partial.items():
        name = _CAMEL_TO_SNAKE.get(key, key)
        if name not in allowed:
            raise ValueError(f"Unknown {what} key: {key!r}")
        normalized[name] = value
    return normalized


def _merge_nested(base: Any, partial: Any, allowed: frozenset, what: str) -> Any:
    """Merge a partial mapping (or a full dataclass) into a nested record."""
    if partial is None:
        return base
    if is_dataclass(partial):
        return partial
    if not isinstance(partial, Mapping):
        raise ValueError(f"{what} override must be a mapping, got {type(partial).__name__}")
    return replace(base, **_normalize_keys(partial, allowed, what))


def merge_rules(base: DocumentFormattingRules, partial: Optional[PartialRules]) -> DocumentFormattingRules:
    """
    Merge one partial rule record over a full one.

    Args:
        base: Complete rules.
        partial: Partial record (camelCase or snake_case keys).

    Returns:
        New rules; ``base`` is unchanged.

    Raises:
        ValueError: If the partial names an unknown field.

    Example:
        >>> base = DocumentFormattingRules()
        >>> merge_rules(base, {"margins": {"top": 90}}).margins
        Margins(top=90, bottom=72.0, left=72.0, right=72.0)
    """
    if not partial:
        return base

    values = _normalize_keys(partial, _RULE_FIELDS, "formatting rule")

    if "margins" in values:
        values["margins"] = _merge_nested(base.margins, values["margins"], _MARGIN_FIELDS, "margins")
    if "page_number_format" in values:
        values["page_number_format"] = _merge_nested(
            base.page_number_format,
            values["page_number_format"],
            _PAGE_NUMBER_FIELDS,
            "page number format",
        )

    return replace(base, **values)


def resolve_rules(
    base: DocumentFormattingRules,
    defaults: Optional[PartialRules] = None,
    overrides: Optional[PartialRules] = None,
) -> DocumentFormattingRules:
    """
    Three-tier resolution: overrides > defaults > base.

    Example:
        >>> rules = resolve_rules(DocumentFormattingRules(), {"fontSize": 11}, {"fontSize": 14})
        >>> rules.font_size
        14
    """
    return merge_rules(merge_rules(base, defaults), overrides)


# =============================================================================
# CONFIGURATION HOLDER
# =============================================================================

class FormattingConfiguration:
    """
    Per-document-type overrides plus global defaults.

    Args:
        overrides: Mapping of document type -> partial rules.
        defaults: Partial rules applied to every document type.

    Example:
        >>> config = FormattingConfiguration(overrides={"nda-ip-specific": {"lineSpacing": "double"}})
        >>> config.rules_for("nda-ip-specific").line_spacing
        'double'
    """

    def __init__(
        self,
        overrides: Optional[Mapping[str, PartialRules]] = None,
        defaults: Optional[PartialRules] = None,
    ):
        self.overrides: Dict[str, PartialRules] = dict(overrides or {})
        self.defaults: Optional[PartialRules] = defaults

    def apply_overrides(self, document_type: str, base: DocumentFormattingRules) -> DocumentFormattingRules:
        """Apply the document type's override; ``base`` unchanged if there is none."""
        return merge_rules(base, self.overrides.get(document_type))

    def apply_defaults(self, base: DocumentFormattingRules) -> DocumentFormattingRules:
        return merge_rules(base, self.defaults)

    def resolve(self, document_type: str, base: DocumentFormattingRules) -> DocumentFormattingRules:
        """Resolve ``base`` with defaults, then the document type's override."""
        return resolve_rules(base, self.defaults, self.overrides.get(document_type))

    def rules_for(self, document_type: str) -> DocumentFormattingRules:
        """Table rules for the document type with this configuration applied."""
        return self.resolve(document_type, rules_for(document_type))

    def update_config(
        self,
        overrides: Optional[Mapping[str, PartialRules]] = None,
        defaults: Optional[PartialRules] = None,
    ) -> None:
        """
        Merge new settings into the configuration.

        Overrides are merged per document type (a new entry replaces the old
        entry for that type); defaults are replaced when given.
        """
        if overrides:
            self.overrides.update(overrides)
        if defaults is not None:
            self.defaults = defaults
        logger.debug(f"Formatting configuration updated: {sorted(self.overrides)}")

    def clear_overrides(self, document_type: str) -> None:
        self.overrides.pop(document_type, None)

    def has_overrides(self, document_type: str) -> bool:
        return bool(self.overrides.get(document_type))
