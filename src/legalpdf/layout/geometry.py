"""
Block Geometry: vertical space a signature block needs.

Algorithm Overview:
    unit = font_size x line_height_factor + gap(signature_line_spacing)

    party units = signature_line_units      (blank rule allowance)
                + 1                         (name line)
                + 1 per title/company/date present

    single layout:       parties stacked, heights summed
    side-by-side layout: parties paired into rows (left, right); each row
                         is as tall as its taller party
    block = party rows + padding above and below the party group
    notary = (ack lines + signature allowance + commission lines) units,
             separated from the parties by one padding

Blocks that produced no parties keep only their marker semantics: a
signature block collapses to 0 (omitted from layout), an initials block
keeps one placeholder line, and a notary block keeps the notary allowance.

Signature spacing is independent of body spacing, so a double-spaced
document still lays out single-spaced signature blocks.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from legalpdf.config import LayoutConfig
from legalpdf.core.core_types import (
    BlockLayout,
    SignatureBlockData,
    SignatureParty,
)
from legalpdf.formatting.rules import DocumentFormattingRules, body_line_spacing

logger = logging.getLogger(__name__)


class GeometryContractError(ValueError):
    """Raised when height calculation is called with invalid inputs."""


def signature_unit(rules: DocumentFormattingRules, config: LayoutConfig) -> float:
    """One signature-content line in points."""
    return config.line_height(rules.font_size, body_line_spacing(rules, is_signature=True))


def party_units(party: SignatureParty, config: LayoutConfig) -> float:
    """
    Line units one party occupies.

    Example:
        >>> party_units(SignatureParty(role="ASSIGNOR", name="A", title="CEO"), LayoutConfig())
        4.0
    """
    optional_lines = sum(1 for value in (party.title, party.company, party.date) if value)
    return config.signature_line_units + 1 + optional_lines


def party_rows(block: SignatureBlockData) -> List[Tuple[SignatureParty, ...]]:
    """Parties grouped into horizontal rows according to the block layout."""
    parties = block.parties
    if block.layout is BlockLayout.SIDE_BY_SIDE:
        return [tuple(parties[i:i + 2]) for i in range(0, len(parties), 2)]
    return [(party,) for party in parties]


def signature_block_height(
    block: SignatureBlockData,
    rules: DocumentFormattingRules,
    config: Optional[LayoutConfig] = None,
) -> float:
    """
    Height in points needed to render a signature, initials or notary block.

    Args:
        block: Parsed block.
        rules: Formatting rules of the document.
        config: Geometry units; defaults to LayoutConfig().

    Returns:
        Height in points (0 for an empty signature block).

    Raises:
        GeometryContractError: If the block has no marker or the font size
            is not positive.
    """
    if block is None or getattr(block, "marker", None) is None:
        raise GeometryContractError("Cannot compute height of a signature block without a marker")
    if rules.font_size <= 0:
        raise GeometryContractError(f"Font size must be positive, got {rules.font_size}")

    config = config or LayoutConfig()
    unit = signature_unit(rules, config)

    if block.is_empty:
        if block.notary_required:
            units = config.notary_units
        else:
            units = config.empty_block_units(block.marker.marker_type)
        height = units * unit
        logger.debug(f"Empty {block.marker.marker_type.value} block {block.block_id!r}: {height:.1f}pt")
        return height

    rows = party_rows(block)
    party_height = sum(max(party_units(p, config) for p in row) for row in rows) * unit
    height = party_height + 2 * config.party_padding

    if block.notary_required:
        height += config.party_padding + config.notary_units * unit

    logger.debug(
        f"Block {block.block_id!r}: {len(block.parties)} parties in {len(rows)} rows, "
        f"notary={block.notary_required}, height={height:.1f}pt"
    )
    return height


def group_height(heights: Sequence[float], parallel: bool) -> float:
    """
    Height of an atomic group of blocks.

    Parallel (side-by-side) members share a band, so the group is as tall as
    its tallest member; stacked members add up.

    Example:
        >>> group_height([100.0, 120.0], parallel=True)
        120.0
        >>> group_height([100.0, 120.0], parallel=False)
        220.0
    """
    if not heights:
        return 0.0
    return float(max(heights)) if parallel else float(sum(heights))
