"""
Run the signature parsing + page layout pipeline on one document.

Stages:
    1. Parse: scan markers, extract block bodies, classify layout, extract
       parties -> ParsedDocument.
    2. Rules: table rules for the document type, with configured defaults
       and overrides applied.
    3. Blocks: measure text and signature blocks -> LayoutBlock sequence.
    4. Layout: place blocks on pages -> LayoutPlan.
    5. Numbering: label pages that received content.

Every stage is a pure function of its inputs; the same text and settings
always produce the same plan.

Usage:
    from legalpdf.run_layout import run_layout

    result = run_layout(text, "patent-assignment-agreement")
    result.plan.placements
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Mapping, Optional, Union

import pandas as pd

from legalpdf.config import LayoutConfig
from legalpdf.core.core_types import ParsedDocument
from legalpdf.formatting.overrides import FormattingConfiguration
from legalpdf.formatting.rules import DocumentFormattingRules, page_geometry, rules_for
from legalpdf.layout.blocks import LayoutBlock, prepare_layout_blocks
from legalpdf.layout.engine import LayoutPlan, layout_blocks
from legalpdf.layout.measure import Measurer
from legalpdf.layout.page_numbers import number_pages
from legalpdf.signatures.parser import parse_document
from legalpdf.signatures.templates import BlockSpec, SignatureSchema, load_signature_schema
from legalpdf.utils.serialize import plan_to_dataframe, write_layout_plan

logger = logging.getLogger(__name__)


@dataclass
class LayoutRunResult:
    """Outputs of every pipeline stage for one document."""
    document_type: str
    parsed: ParsedDocument
    rules: DocumentFormattingRules
    blocks: List[LayoutBlock]
    plan: LayoutPlan
    missing_blocks: List[BlockSpec] = field(default_factory=list)

    def placements_df(self) -> pd.DataFrame:
        return plan_to_dataframe(self.plan, self.blocks)


# =============================================================================
# PIPELINE STAGES
# =============================================================================

def stage_1_parse(text: str, schema: SignatureSchema) -> ParsedDocument:
    """Stage 1: Separate signature blocks from content."""
    parsed = parse_document(text, schema)
    logger.info(
        f"Stage 1: {len(parsed.signature_blocks)} signature blocks, "
        f"{len(parsed.content)} content lines"
    )
    return parsed


def stage_2_resolve_rules(
    document_type: str,
    formatting: Optional[FormattingConfiguration] = None,
) -> DocumentFormattingRules:
    """Stage 2: Look up rules and apply configured defaults/overrides."""
    base = rules_for(document_type)
    if formatting is None:
        return base

    rules = formatting.resolve(document_type, base)
    if rules != base:
        logger.info(f"Stage 2: applied formatting configuration for {document_type!r}")
    return rules


def stage_3_prepare_blocks(
    parsed: ParsedDocument,
    rules: DocumentFormattingRules,
    config: LayoutConfig,
    schema: SignatureSchema,
    measurer: Optional[Measurer] = None,
) -> List[LayoutBlock]:
    """Stage 3: Measure content and signature blocks."""
    blocks = prepare_layout_blocks(parsed, rules, config, schema, measurer)
    logger.info(f"Stage 3: {len(blocks)} layout blocks")
    return blocks


def stage_4_layout(
    blocks: List[LayoutBlock],
    rules: DocumentFormattingRules,
    config: LayoutConfig,
) -> LayoutPlan:
    """Stage 4: Place blocks on pages."""
    plan = layout_blocks(blocks, page_geometry(rules), config)
    logger.info(f"Stage 4: {plan.total_pages} pages, overflow={plan.has_overflow}")
    return plan


def stage_5_number_pages(plan: LayoutPlan, rules: DocumentFormattingRules) -> LayoutPlan:
    """Stage 5: Label pages that received content."""
    plan = number_pages(plan, rules)
    logger.info(f"Stage 5: numbered {plan.numbered_pages} pages")
    return plan


# =============================================================================
# ENTRY POINT
# =============================================================================

def run_layout(
    text: str,
    document_type: str,
    formatting: Optional[FormattingConfiguration] = None,
    template: Optional[Mapping[str, Any]] = None,
    config: Optional[LayoutConfig] = None,
    measurer: Optional[Measurer] = None,
    output_path: Optional[Union[str, Path]] = None,
) -> LayoutRunResult:
    """
    Run the full pipeline.

    Args:
        text: Generated document text containing signature markers.
        document_type: Document type key (e.g., "patent-assignment-agreement").
        formatting: Optional overrides/defaults for the formatting rules.
        template: Parsed template JSON declaring signature blocks.
        config: Layout units; defaults to LayoutConfig.for_rules(rules).
        measurer: Text width function; defaults to PyMuPDF metrics.
        output_path: If given, the plan is also written there as JSON.

    Returns:
        LayoutRunResult with every stage's output.
    """
    schema = load_signature_schema(template)

    parsed = stage_1_parse(text, schema)
    rules = stage_2_resolve_rules(document_type, formatting)
    config = config or LayoutConfig.for_rules(rules)

    blocks = stage_3_prepare_blocks(parsed, rules, config, schema, measurer)
    plan = stage_4_layout(blocks, rules, config)
    plan = stage_5_number_pages(plan, rules)

    missing = schema.missing_markers(parsed) if schema.blocks else []
    for spec in missing:
        logger.warning(f"Template block {spec.block_id!r} has no {spec.marker} marker in the text")

    if output_path is not None:
        write_layout_plan(plan, output_path, blocks)

    return LayoutRunResult(
        document_type=document_type,
        parsed=parsed,
        rules=rules,
        blocks=blocks,
        plan=plan,
        missing_blocks=missing,
    )
