"""
Layout block construction: ParsedDocument -> ordered LayoutBlock sequence.

Content lines are grouped into placeable units:

- Headings (markdown "#", all-caps lines, "1. DEFINITIONS", ARTICLE/SECTION):
  one block each, never split, kept with the following unit.
- List items: one block each.
- Block quotes: consecutive "> " lines merge into one block.
- Horizontal rules ("---", "***", "==="): one fixed-height block.
- Paragraphs: consecutive other non-blank lines, joined with spaces.
  Paragraphs may split across pages at line granularity.

Signature blocks are inserted before the content line at their
``content_index``. Blocks the template links with ``groupWith`` carry a shared
group id; the layout engine places consecutive members as one unit.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Sequence, Union

from legalpdf.config import LayoutConfig
from legalpdf.constants import (
    ALL_CAPS_HEADING_RX,
    ARTICLE_HEADING_RX,
    BLOCKQUOTE_RX,
    HORIZONTAL_RULE_RX,
    LIST_ITEM_RX,
    MARKDOWN_HEADING_RX,
    NUMBERED_HEADING_RX,
)
from legalpdf.core.core_types import ParsedDocument, SignatureBlockData
from legalpdf.formatting.rules import (
    DocumentFormattingRules,
    element_spacing,
    line_spacing_points,
    page_geometry,
)
from legalpdf.layout.geometry import signature_block_height
from legalpdf.layout.measure import Measurer, wrap_line_count
from legalpdf.signatures.templates import SignatureSchema

logger = logging.getLogger(__name__)


class BlockKind(Enum):
    """Kinds of units the layout engine places."""
    TEXT = "text"
    HEADING = "heading"
    LIST_ITEM = "list-item"
    BLOCKQUOTE = "blockquote"
    HORIZONTAL_RULE = "horizontal-rule"
    SIGNATURE = "signature"


@dataclass(frozen=True)
class LayoutBlock:
    """
    One placeable unit with its measured height.

    Attributes:
        kind: Block kind.
        content: Text for text-like kinds, SignatureBlockData for signatures.
        height: Total height in points, excluding ``space_after``.
        breakable: May be split across pages at ``line_height`` steps.
        keep_with_next: Must share a page with the start of the next unit.
        line_height: Height of one line, the split granularity.
        group_id: Shared id of blocks placed as one atomic unit.
        parallel: Group members render side by side (group height = max).
        heading_level: 1-6 for headings, 0 otherwise.
        space_after: Gap after the block; dropped at a page bottom.
    """
    kind: BlockKind
    content: Union[str, SignatureBlockData]
    height: float
    breakable: bool = False
    keep_with_next: bool = False
    line_height: float = 0.0
    group_id: Optional[str] = None
    parallel: bool = False
    heading_level: int = 0
    space_after: float = 0.0

    @property
    def is_signature(self) -> bool:
        return self.kind is BlockKind.SIGNATURE

    @property
    def line_count(self) -> int:
        """Lines in a breakable block (1 for blocks without a line height)."""
        if self.line_height <= 0:
            return 1
        return max(1, int(round(self.height / self.line_height)))


# =============================================================================
# LINE CLASSIFICATION
# =============================================================================

def heading_level(text: str) -> int:
    """
    Heading level of a stripped line, or 0 for non-headings.

    Example:
        >>> heading_level("## Background")
        2
        >>> heading_level("ARTICLE IV")
        2
        >>> heading_level("1. The Licensee shall pay royalties.")
        0
    """
    match = MARKDOWN_HEADING_RX.match(text)
    if match:
        return len(match.group(1))
    if ARTICLE_HEADING_RX.match(text) or NUMBERED_HEADING_RX.match(text):
        return 2
    if ALL_CAPS_HEADING_RX.match(text):
        return 2
    return 0


def heading_text(text: str) -> str:
    match = MARKDOWN_HEADING_RX.match(text)
    return match.group(2) if match else text


def classify_line(text: str) -> Optional[BlockKind]:
    """Kind of a stripped non-blank content line (None for paragraph text)."""
    if HORIZONTAL_RULE_RX.match(text):
        return BlockKind.HORIZONTAL_RULE
    if heading_level(text):
        return BlockKind.HEADING
    if BLOCKQUOTE_RX.match(text):
        return BlockKind.BLOCKQUOTE
    if LIST_ITEM_RX.match(text):
        return BlockKind.LIST_ITEM
    return None


# =============================================================================
# BUILDER
# =============================================================================

class _BlockBuilder:
    """Measures text units against the rules' usable width."""

    def __init__(
        self,
        rules: DocumentFormattingRules,
        config: LayoutConfig,
        measurer: Optional[Measurer],
    ):
        self.rules = rules
        self.config = config
        self.measurer = measurer

        width = page_geometry(rules).usable_width
        self.width = width if width > 0 else config.text_width
        self.body_line = config.line_height(rules.font_size, line_spacing_points(rules.line_spacing))

    def _lines(self, text: str, width: float, font_size: float) -> int:
        return max(1, wrap_line_count(text, width, self.rules.font, font_size, self.measurer))

    def paragraph(self, text: str) -> LayoutBlock:
        lines = self._lines(text, self.width, self.rules.font_size)
        return LayoutBlock(
            kind=BlockKind.TEXT,
            content=text,
            height=lines * self.body_line,
            breakable=True,
            line_height=self.body_line,
            space_after=element_spacing(self.rules, "paragraph"),
        )

    def heading(self, text: str) -> LayoutBlock:
        level = heading_level(text)
        font_size = self.rules.font_size * (self.config.heading_scale if level <= 2 else 1.0)
        line = self.config.line_height(font_size)
        title = heading_text(text)
        return LayoutBlock(
            kind=BlockKind.HEADING,
            content=title,
            height=self._lines(title, self.width, font_size) * line,
            keep_with_next=True,
            line_height=line,
            heading_level=level,
            space_after=element_spacing(self.rules, "section"),
        )

    def list_item(self, text: str) -> LayoutBlock:
        lines = self._lines(text, self.width - self.config.list_indent, self.rules.font_size)
        return LayoutBlock(
            kind=BlockKind.LIST_ITEM,
            content=text,
            height=lines * self.body_line,
            breakable=lines > 1,
            line_height=self.body_line,
            space_after=element_spacing(self.rules, "list"),
        )

    def blockquote(self, text: str) -> LayoutBlock:
        lines = self._lines(text, self.width - self.rules.block_quote_indent, self.rules.font_size)
        return LayoutBlock(
            kind=BlockKind.BLOCKQUOTE,
            content=text,
            height=lines * self.body_line,
            breakable=True,
            line_height=self.body_line,
            space_after=element_spacing(self.rules, "paragraph"),
        )

    def horizontal_rule(self, text: str) -> LayoutBlock:
        return LayoutBlock(
            kind=BlockKind.HORIZONTAL_RULE,
            content=text,
            height=self.config.line_height(self.rules.font_size),
        )


def text_blocks(
    lines: Sequence[str],
    rules: DocumentFormattingRules,
    config: Optional[LayoutConfig] = None,
    measurer: Optional[Measurer] = None,
) -> List[LayoutBlock]:
    """
    Group content lines into measured text blocks.

    Args:
        lines: Content lines (no markers).
        rules: Formatting rules for the document.
        config: Layout units; defaults to LayoutConfig().
        measurer: Text width function; defaults to PyMuPDF metrics.

    Returns:
        Text blocks in document order.
    """
    builder = _BlockBuilder(rules, config or LayoutConfig(), measurer)
    blocks: List[LayoutBlock] = []
    paragraph: List[str] = []
    quote: List[str] = []

    def flush():
        if paragraph:
            blocks.append(builder.paragraph(" ".join(paragraph)))
            paragraph.clear()
        if quote:
            blocks.append(builder.blockquote(" ".join(quote)))
            quote.clear()

    for line in lines:
        text = line.strip()
        if not text:
            flush()
            continue

        kind = classify_line(text)
        if kind is BlockKind.BLOCKQUOTE:
            if paragraph:
                flush()
            quote.append(BLOCKQUOTE_RX.sub("", text, count=1))
            continue
        if kind is None:
            if quote:
                flush()
            paragraph.append(text)
            continue

        flush()
        if kind is BlockKind.HEADING:
            blocks.append(builder.heading(text))
        elif kind is BlockKind.LIST_ITEM:
            blocks.append(builder.list_item(text))
        else:
            blocks.append(builder.horizontal_rule(text))

    flush()
    return blocks


def signature_layout_block(
    block: SignatureBlockData,
    rules: DocumentFormattingRules,
    config: LayoutConfig,
    group_id: Optional[str] = None,
    parallel: bool = False,
) -> LayoutBlock:
    return LayoutBlock(
        kind=BlockKind.SIGNATURE,
        content=block,
        height=signature_block_height(block, rules, config),
        group_id=group_id,
        parallel=parallel,
    )


def _warn_split_groups(blocks: Sequence[LayoutBlock]) -> None:
    """Log groups whose members are separated by other blocks."""
    positions: Dict[str, List[int]] = {}
    for idx, block in enumerate(blocks):
        if block.group_id:
            positions.setdefault(block.group_id, []).append(idx)

    for group_id, indexes in positions.items():
        if indexes[-1] - indexes[0] + 1 != len(indexes):
            logger.warning(
                f"Group {group_id!r} members are not adjacent (blocks {indexes}); "
                f"each adjacent run is placed separately"
            )


def prepare_layout_blocks(
    parsed: ParsedDocument,
    rules: DocumentFormattingRules,
    config: Optional[LayoutConfig] = None,
    schema: Optional[SignatureSchema] = None,
    measurer: Optional[Measurer] = None,
) -> List[LayoutBlock]:
    """
    Build the ordered LayoutBlock sequence for a parsed document.

    Args:
        parsed: Scan + extract output.
        rules: Formatting rules for the document.
        config: Layout units; defaults to LayoutConfig.for_rules(rules).
        schema: Template schema supplying ``groupWith`` groups.
        measurer: Text width function; defaults to PyMuPDF metrics.

    Returns:
        Text and signature blocks in document order. Signature blocks with
        zero height (empty signature bodies) are omitted.
    """
    config = config or LayoutConfig.for_rules(rules)
    groups = schema.group_ids() if schema is not None else {}

    by_index: Dict[int, List[SignatureBlockData]] = {}
    for block in parsed.signature_blocks:
        by_index.setdefault(block.content_index, []).append(block)

    def signature_blocks_at(index: int) -> List[LayoutBlock]:
        placed = []
        for sig in by_index.get(index, ()):
            group_id = groups.get(sig.block_id)
            parallel = bool(group_id and schema.is_parallel(group_id))
            layout_block = signature_layout_block(sig, rules, config, group_id, parallel)
            if layout_block.height <= 0:
                logger.debug(f"Omitting empty signature block {sig.block_id!r}")
                continue
            placed.append(layout_block)
        return placed

    # Text between consecutive insertion points is measured as one run
    cut_points = sorted(i for i in by_index if i < len(parsed.content))
    blocks: List[LayoutBlock] = []
    start = 0
    for cut in cut_points:
        blocks.extend(text_blocks(parsed.content[start:cut], rules, config, measurer))
        blocks.extend(signature_blocks_at(cut))
        start = cut
    blocks.extend(text_blocks(parsed.content[start:], rules, config, measurer))
    for index in sorted(i for i in by_index if i >= len(parsed.content)):
        blocks.extend(signature_blocks_at(index))

    _warn_split_groups(blocks)
    logger.info(
        f"Prepared {len(blocks)} layout blocks "
        f"({sum(1 for b in blocks if b.is_signature)} signature)"
    )
    return blocks
