"""
Page Layout Engine: assign every layout block a page and a vertical offset.

Algorithm Overview:
    1. Group blocks into placement units. Consecutive blocks sharing a
       group_id form one atomic unit (height = max if parallel, else sum).
       Signature blocks and non-breakable blocks are atomic on their own.
    2. Fold over the units with an immutable Cursor
       (page_index, remaining, page_has_content). Each step returns the
       unit's placements and the next cursor.
    3. Atomic units that do not fit move to a fresh page when the current
       page has content. Units taller than any page start at the top of a
       fresh page and overflow (flagged, never dropped).
    4. Breakable units split at line granularity. A split point moves to
       respect orphan (lines left at the page bottom) and widow (lines
       carried over) minimums when the page allows it.
    5. A keep-with-next heading moves to a fresh page unless it fits
       together with the first lines of the following unit.
    6. Exhausted pages advance lazily, before the next unit, so the plan
       never ends with an empty page.

y_offset is measured from the top of the page's text area (top margin).
Placements come out in document order; a split block has one placement per
fragment.
"""

import logging
import math
from dataclasses import dataclass, replace
from typing import List, Optional, Sequence, Tuple

from legalpdf.config import LayoutConfig
from legalpdf.formatting.rules import PageGeometry
from legalpdf.layout.blocks import LayoutBlock
from legalpdf.layout.geometry import group_height

logger = logging.getLogger(__name__)

EPSILON = 1e-6


class LayoutContractError(ValueError):
    """Raised when the engine is given impossible blocks or page geometry."""


# =============================================================================
# RESULT TYPES
# =============================================================================

@dataclass(frozen=True)
class Placement:
    """
    Position of one block (or one fragment of a split block).

    Attributes:
        block_index: Index of the block in the input sequence.
        page_index: 0-based page.
        y_offset: Offset from the top of the page's text area.
        height: Height occupied on this page.
        fragment_index: 0 for the first (or only) fragment.
        continued: More of the block follows on a later page.
        overflow: The block is taller than the page area it was placed in.
        x_column: Column within a parallel group (0 = left).
    """
    block_index: int
    page_index: int
    y_offset: float
    height: float
    fragment_index: int = 0
    continued: bool = False
    overflow: bool = False
    x_column: int = 0


@dataclass(frozen=True)
class PageInfo:
    """Per-page summary; ``label`` is set by the page numbering pass."""
    page_index: int
    used_height: float
    has_content: bool
    label: Optional[str] = None
    number_position: Optional[str] = None


@dataclass(frozen=True)
class LayoutPlan:
    """Placement plan for a whole document."""
    placements: Tuple[Placement, ...] = ()
    pages: Tuple[PageInfo, ...] = ()

    @property
    def total_pages(self) -> int:
        return len(self.pages)

    @property
    def has_overflow(self) -> bool:
        return any(p.overflow for p in self.placements)

    @property
    def numbered_pages(self) -> int:
        return sum(1 for p in self.pages if p.label is not None)

    def placements_for(self, block_index: int) -> Tuple[Placement, ...]:
        return tuple(p for p in self.placements if p.block_index == block_index)

    def pages_of(self, block_index: int) -> Tuple[int, ...]:
        """Distinct pages a block occupies, in order."""
        return tuple(sorted({p.page_index for p in self.placements_for(block_index)}))


# =============================================================================
# CURSOR
# =============================================================================

@dataclass(frozen=True)
class Cursor:
    page_index: int
    remaining: float
    page_has_content: bool = False


def new_page(cursor: Cursor, geometry: PageGeometry) -> Cursor:
    index = cursor.page_index + 1
    return Cursor(page_index=index, remaining=geometry.usable_height_for(index))


def advance(cursor: Cursor, used: float) -> Cursor:
    return replace(cursor, remaining=cursor.remaining - used, page_has_content=True)


def y_offset(cursor: Cursor, geometry: PageGeometry) -> float:
    return geometry.usable_height_for(cursor.page_index) - cursor.remaining


# =============================================================================
# PLACEMENT UNITS
# =============================================================================

@dataclass(frozen=True)
class PlacementUnit:
    """One or more block indexes placed together."""
    indexes: Tuple[int, ...]
    height: float
    breakable: bool = False
    keep_with_next: bool = False
    parallel: bool = False
    line_height: float = 0.0
    space_after: float = 0.0

    @property
    def line_count(self) -> int:
        if self.line_height <= 0:
            return 1
        return max(1, int(round(self.height / self.line_height)))


def build_units(blocks: Sequence[LayoutBlock]) -> List[PlacementUnit]:
    """
    Group consecutive blocks that share a group id into atomic units.

    Example:
        >>> from legalpdf.layout.blocks import BlockKind
        >>> a = LayoutBlock(BlockKind.SIGNATURE, "a", 100.0, group_id="g", parallel=True)
        >>> b = LayoutBlock(BlockKind.SIGNATURE, "b", 120.0, group_id="g", parallel=True)
        >>> [u.height for u in build_units([a, b])]
        [120.0]
    """
    units: List[PlacementUnit] = []
    idx = 0

    while idx < len(blocks):
        block = blocks[idx]

        if block.group_id:
            end = idx + 1
            while end < len(blocks) and blocks[end].group_id == block.group_id:
                end += 1
            members = blocks[idx:end]
            parallel = any(m.parallel for m in members)
            units.append(PlacementUnit(
                indexes=tuple(range(idx, end)),
                height=group_height([m.height for m in members], parallel),
                parallel=parallel,
                space_after=members[-1].space_after,
            ))
            idx = end
            continue

        breakable = block.breakable and not block.is_signature and block.line_height > 0
        units.append(PlacementUnit(
            indexes=(idx,),
            height=block.height,
            breakable=breakable and block.line_count > 1,
            keep_with_next=block.keep_with_next,
            line_height=block.line_height,
            space_after=block.space_after,
        ))
        idx += 1

    return units


def lead_height(unit: PlacementUnit, config: LayoutConfig) -> float:
    """Height of the part of a unit that must follow a keep-with-next heading."""
    if unit.breakable:
        lines = min(unit.line_count, max(config.keep_with_next_lines, config.min_orphan_lines))
        return lines * unit.line_height
    return unit.height


# =============================================================================
# PLACEMENT STEPS
# =============================================================================

def _atomic_placements(
    unit: PlacementUnit,
    blocks: Sequence[LayoutBlock],
    cursor: Cursor,
    geometry: PageGeometry,
    overflow: bool,
) -> List[Placement]:
    top = y_offset(cursor, geometry)
    placements = []
    stacked = 0.0
    for column, idx in enumerate(unit.indexes):
        height = blocks[idx].height
        placements.append(Placement(
            block_index=idx,
            page_index=cursor.page_index,
            y_offset=top if unit.parallel else top + stacked,
            height=height,
            overflow=overflow,
            x_column=column if unit.parallel else 0,
        ))
        stacked += height
    return placements


def place_atomic(
    unit: PlacementUnit,
    blocks: Sequence[LayoutBlock],
    cursor: Cursor,
    geometry: PageGeometry,
) -> Tuple[List[Placement], Cursor]:
    """Place a unit that must stay on one page."""
    if unit.height > cursor.remaining + EPSILON:
        fresh_height = geometry.usable_height_for(cursor.page_index + 1)
        # An empty page is only abandoned when the next page is tall enough
        if cursor.page_has_content or unit.height <= fresh_height + EPSILON:
            cursor = new_page(cursor, geometry)

    overflow = unit.height > cursor.remaining + EPSILON
    if overflow:
        logger.warning(
            f"Blocks {list(unit.indexes)} ({unit.height:.1f}pt) exceed the page area "
            f"({cursor.remaining:.1f}pt) on page {cursor.page_index}; placing with overflow"
        )

    placements = _atomic_placements(unit, blocks, cursor, geometry, overflow)
    return placements, advance(cursor, unit.height)


def split_point(fits: int, lines_left: int, page_has_content: bool, config: LayoutConfig) -> int:
    """
    Lines of a breakable unit to place on the current page.

    Args:
        fits: Whole lines that fit in the remaining space.
        lines_left: Lines of the unit not yet placed.
        page_has_content: Whether the current page already holds content.
        config: Orphan/widow minimums.

    Returns:
        Lines to place here; 0 means move to the next page first.

    Example:
        >>> split_point(fits=5, lines_left=6, page_has_content=True, config=LayoutConfig())
        4
        >>> split_point(fits=1, lines_left=6, page_has_content=True, config=LayoutConfig())
        0
    """
    if fits >= lines_left:
        return lines_left

    take = fits
    if lines_left - take < config.min_widow_lines:
        take = lines_left - config.min_widow_lines
    if take < config.min_orphan_lines:
        take = 0

    if take <= 0 and not page_has_content:
        # Nothing placed yet on this page: progress beats orphan control
        take = max(1, min(fits, lines_left))
    return take


def place_breakable(
    unit: PlacementUnit,
    cursor: Cursor,
    geometry: PageGeometry,
    config: LayoutConfig,
) -> Tuple[List[Placement], Cursor]:
    """Place a text unit, splitting it across pages at line boundaries."""
    block_index = unit.indexes[0]
    line_height = unit.line_height
    lines_left = unit.line_count
    placements: List[Placement] = []

    while lines_left > 0:
        fits = int(math.floor((cursor.remaining + EPSILON) / line_height))
        take = split_point(fits, lines_left, cursor.page_has_content, config)

        if take == 0:
            cursor = new_page(cursor, geometry)
            continue

        height = take * line_height
        lines_left -= take
        placements.append(Placement(
            block_index=block_index,
            page_index=cursor.page_index,
            y_offset=y_offset(cursor, geometry),
            height=height,
            fragment_index=len(placements),
            continued=lines_left > 0,
            overflow=height > cursor.remaining + EPSILON,
        ))
        cursor = advance(cursor, height)
        if lines_left > 0:
            cursor = new_page(cursor, geometry)

    if len(placements) > 1:
        logger.debug(f"Block {block_index} split into {len(placements)} fragments")
    return placements, cursor


def place_unit(
    unit: PlacementUnit,
    next_unit: Optional[PlacementUnit],
    blocks: Sequence[LayoutBlock],
    cursor: Cursor,
    geometry: PageGeometry,
    config: LayoutConfig,
) -> Tuple[List[Placement], Cursor]:
    """One fold step: placements for ``unit`` and the cursor after it."""
    if cursor.page_has_content and cursor.remaining <= EPSILON:
        cursor = new_page(cursor, geometry)

    if unit.keep_with_next and next_unit is not None and cursor.page_has_content:
        needed = unit.height + unit.space_after + lead_height(next_unit, config)
        fresh_height = geometry.usable_height_for(cursor.page_index + 1)
        if needed > cursor.remaining + EPSILON and needed <= fresh_height + EPSILON:
            logger.debug(f"Moving heading block {unit.indexes[0]} to keep it with following content")
            cursor = new_page(cursor, geometry)

    if unit.breakable:
        placements, cursor = place_breakable(unit, cursor, geometry, config)
    else:
        placements, cursor = place_atomic(unit, blocks, cursor, geometry)

    # Trailing space never carries over to the next page
    cursor = replace(cursor, remaining=max(0.0, cursor.remaining - unit.space_after))
    return placements, cursor


# =============================================================================
# ENTRY POINT
# =============================================================================

def _validate(blocks: Sequence[LayoutBlock], geometry: PageGeometry) -> None:
    if geometry.usable_height <= 0 or geometry.usable_height_for(1) <= 0:
        raise LayoutContractError(
            f"Usable page height must be positive, got {geometry.usable_height}"
        )
    for idx, block in enumerate(blocks):
        if block.height < 0:
            raise LayoutContractError(f"Block {idx} has negative height {block.height}")


def _page_infos(placements: Sequence[Placement]) -> Tuple[PageInfo, ...]:
    if not placements:
        return ()
    last_page = max(p.page_index for p in placements)
    used = [0.0] * (last_page + 1)
    filled = [False] * (last_page + 1)
    for p in placements:
        used[p.page_index] = max(used[p.page_index], p.y_offset + p.height)
        filled[p.page_index] = True
    return tuple(
        PageInfo(page_index=i, used_height=used[i], has_content=filled[i])
        for i in range(last_page + 1)
    )


def layout_blocks(
    blocks: Sequence[LayoutBlock],
    geometry: PageGeometry,
    config: Optional[LayoutConfig] = None,
) -> LayoutPlan:
    """
    Lay out blocks onto pages.

    Args:
        blocks: Text and signature blocks in document order.
        geometry: Page box and margins.
        config: Orphan/widow and keep-with-next settings.

    Returns:
        LayoutPlan with placements in document order and one PageInfo per
        page up to the last page holding content.

    Raises:
        LayoutContractError: If a block height is negative or the page has
            no usable height.
    """
    _validate(blocks, geometry)
    config = config or LayoutConfig()

    units = build_units(blocks)
    cursor = Cursor(page_index=0, remaining=geometry.usable_height_for(0))
    placements: List[Placement] = []

    for position, unit in enumerate(units):
        next_unit = units[position + 1] if position + 1 < len(units) else None
        unit_placements, cursor = place_unit(unit, next_unit, blocks, cursor, geometry, config)
        placements.extend(unit_placements)

    plan = LayoutPlan(placements=tuple(placements), pages=_page_infos(placements))
    logger.info(
        f"Laid out {len(blocks)} blocks in {len(units)} units on {plan.total_pages} pages"
        + (" (overflow)" if plan.has_overflow else "")
    )
    return plan
