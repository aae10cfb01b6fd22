"""
Page layout: text measurement, block geometry, placement and page numbering.
"""

from legalpdf.layout.measure import (
    BASE14_FONT_CODES,
    Measurer,
    font_code,
    pymupdf_measurer,
    wrap_line_count,
)
from legalpdf.layout.geometry import (
    GeometryContractError,
    group_height,
    party_rows,
    party_units,
    signature_block_height,
    signature_unit,
)
from legalpdf.layout.blocks import (
    BlockKind,
    LayoutBlock,
    classify_line,
    heading_level,
    prepare_layout_blocks,
    signature_layout_block,
    text_blocks,
)
from legalpdf.layout.engine import (
    Cursor,
    LayoutContractError,
    LayoutPlan,
    PageInfo,
    Placement,
    PlacementUnit,
    build_units,
    layout_blocks,
    split_point,
)
from legalpdf.layout.page_numbers import (
    format_page_number,
    number_pages,
    to_alpha,
    to_roman,
)

__all__ = [
    # Measurement
    "BASE14_FONT_CODES",
    "Measurer",
    "font_code",
    "pymupdf_measurer",
    "wrap_line_count",
    # Geometry
    "GeometryContractError",
    "group_height",
    "party_rows",
    "party_units",
    "signature_block_height",
    "signature_unit",
    # Blocks
    "BlockKind",
    "LayoutBlock",
    "classify_line",
    "heading_level",
    "prepare_layout_blocks",
    "signature_layout_block",
    "text_blocks",
    # Engine
    "Cursor",
    "LayoutContractError",
    "LayoutPlan",
    "PageInfo",
    "Placement",
    "PlacementUnit",
    "build_units",
    "layout_blocks",
    "split_point",
    # Page numbers
    "format_page_number",
    "number_pages",
    "to_alpha",
    "to_roman",
]
