"""
Serialization utilities for parsed documents and layout plans.

Value objects are frozen dataclasses holding enums and tuples. Renderers and
notebooks want plain records: enums become their values, tuples become
lists, numpy scalars become Python numbers. DataFrame views are provided
for inspection; the JSON writer is what an external renderer consumes.
"""

import json
import logging
from dataclasses import fields, is_dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

import numpy as np
import pandas as pd

from legalpdf.core.core_types import ParsedDocument, SignatureBlockData
from legalpdf.layout.blocks import LayoutBlock
from legalpdf.layout.engine import LayoutPlan

logger = logging.getLogger(__name__)

PLACEMENT_COLUMNS = [
    "block_index",
    "page_index",
    "y_offset",
    "height",
    "fragment_index",
    "continued",
    "overflow",
    "x_column",
    "kind",
    "block_id",
    "page_label",
]

PARTY_COLUMNS = [
    "block_id",
    "marker_type",
    "layout",
    "notary_required",
    "content_index",
    "party_index",
    "role",
    "name",
    "title",
    "company",
    "date",
    "line_type",
]


def to_record(value: Any) -> Any:
    """
    Convert a value object tree into JSON-safe Python types.

    Example:
        >>> from legalpdf.core.core_types import MarkerType
        >>> to_record((MarkerType.NOTARY, np.float64(1.5)))
        ['notary', 1.5]
    """
    if isinstance(value, Enum):
        return value.value
    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_record(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, dict):
        return {str(k): to_record(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_record(v) for v in value]
    if isinstance(value, np.ndarray):
        return value.tolist()
    if isinstance(value, np.integer):
        return int(value)
    if isinstance(value, np.floating):
        return float(value)
    return value


def parsed_document_to_record(parsed: ParsedDocument) -> Dict[str, Any]:
    record = to_record(parsed)
    record["has_signatures"] = parsed.has_signatures
    return record


def _block_id(block: LayoutBlock) -> Optional[str]:
    if isinstance(block.content, SignatureBlockData):
        return block.content.block_id
    return None


def plan_to_dataframe(
    plan: LayoutPlan,
    blocks: Optional[Sequence[LayoutBlock]] = None,
) -> pd.DataFrame:
    """
    One row per placement (one per fragment for split blocks).

    Args:
        plan: Layout plan.
        blocks: The blocks the plan was built from; adds kind/block_id.

    Returns:
        DataFrame with PLACEMENT_COLUMNS, in document order.
    """
    labels = {page.page_index: page.label for page in plan.pages}
    rows = []
    for placement in plan.placements:
        row = to_record(placement)
        block = blocks[placement.block_index] if blocks is not None else None
        row["kind"] = block.kind.value if block is not None else None
        row["block_id"] = _block_id(block) if block is not None else None
        row["page_label"] = labels.get(placement.page_index)
        rows.append(row)

    return pd.DataFrame(rows, columns=PLACEMENT_COLUMNS)


def signature_blocks_to_dataframe(parsed: ParsedDocument) -> pd.DataFrame:
    """
    One row per party; blocks without parties get a single row with empty
    party columns.
    """
    rows = []
    for block in parsed.signature_blocks:
        base = {
            "block_id": block.block_id,
            "marker_type": block.marker.marker_type.value,
            "layout": block.layout.value,
            "notary_required": block.notary_required,
            "content_index": block.content_index,
        }
        if not block.parties:
            rows.append({**base, "party_index": None})
            continue
        for idx, party in enumerate(block.parties):
            rows.append({**base, "party_index": idx, **to_record(party)})

    return pd.DataFrame(rows, columns=PARTY_COLUMNS)


def plan_to_record(
    plan: LayoutPlan,
    blocks: Optional[Sequence[LayoutBlock]] = None,
) -> Dict[str, Any]:
    """Plan summary plus pages and placements as plain records."""
    placements: List[Dict[str, Any]] = []
    for placement in plan.placements:
        row = to_record(placement)
        if blocks is not None:
            block = blocks[placement.block_index]
            row["kind"] = block.kind.value
            row["content"] = to_record(block.content)
        placements.append(row)

    return {
        "total_pages": plan.total_pages,
        "has_overflow": plan.has_overflow,
        "numbered_pages": plan.numbered_pages,
        "pages": to_record(plan.pages),
        "placements": placements,
    }


def write_layout_plan(
    plan: LayoutPlan,
    path: Union[str, Path],
    blocks: Optional[Sequence[LayoutBlock]] = None,
) -> Path:
    """
    Write a layout plan as JSON.

    Args:
        plan: Layout plan.
        path: Output file; parent directories are created.
        blocks: Source blocks, to embed block kind and content.

    Returns:
        Path written.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(plan_to_record(plan, blocks), f, indent=2)

    logger.info(f"Wrote layout plan ({plan.total_pages} pages) to {path}")
    return path
