"""
Layout configuration for legalpdf.

This module defines the LayoutConfig dataclass that captures the geometry
units and pagination thresholds shared by the geometry calculator, the
layout block builder and the page layout engine.
"""

from dataclasses import dataclass

from legalpdf.core.core_types import MarkerType


@dataclass(frozen=True)
class LayoutConfig:
    """
    Configuration for signature geometry and page layout.

    Attributes:
        line_height_factor: Line height as a multiple of the font size.

        signature_line_units: Line units reserved for a wet-ink signature rule.
        party_padding: Points of padding above and below each party group.
        notary_ack_lines: Line units of acknowledgment boilerplate.
        notary_commission_lines: Line units for commission details.

        min_orphan_lines: Fewest lines of a split paragraph left at a page bottom.
        min_widow_lines: Fewest lines of a split paragraph carried to the next page.
        keep_with_next_lines: Lines of the following unit a keep-with-next
            heading must see on its page.

        text_width: Fallback usable text width in points (8.5in - 2 x 1in margins).
        heading_scale: Heading font size as a multiple of the body size.
        list_indent: Indent applied to list items, in points.
    """

    # Line units
    line_height_factor: float = 1.2

    # Signature geometry
    signature_line_units: float = 2.0
    party_padding: float = 12.0
    notary_ack_lines: int = 4
    notary_commission_lines: int = 2

    # Pagination
    min_orphan_lines: int = 2
    min_widow_lines: int = 2
    keep_with_next_lines: int = 2

    # Text measurement
    text_width: float = 468.0
    heading_scale: float = 1.2
    list_indent: float = 18.0

    def line_height(self, font_size: float, spacing_gap: float = 0.0) -> float:
        """One line unit in points for a font size plus a spacing gap."""
        return font_size * self.line_height_factor + spacing_gap

    def empty_block_units(self, marker_type: MarkerType) -> float:
        """
        Line units reserved for a block whose body produced no parties.

        Signature blocks collapse to nothing, initials keep a single
        placeholder line and notary blocks keep only the notary allowance.
        """
        if marker_type is MarkerType.INITIAL:
            return 1.0
        if marker_type is MarkerType.NOTARY:
            return float(self.notary_units)
        return 0.0

    @property
    def notary_units(self) -> float:
        return self.notary_ack_lines + self.signature_line_units + self.notary_commission_lines

    @classmethod
    def for_rules(cls, rules) -> "LayoutConfig":
        """
        Create configuration matched to a set of formatting rules.

        The fallback text width follows the rules' page size and side margins.

        Args:
            rules: DocumentFormattingRules for the document.

        Returns:
            LayoutConfig with text_width derived from the page geometry.
        """
        from legalpdf.formatting.rules import page_geometry

        return cls(text_width=page_geometry(rules).usable_width)
