"""Utility functions for legalpdf."""

from legalpdf.utils.serialize import (
    parsed_document_to_record,
    plan_to_dataframe,
    plan_to_record,
    signature_blocks_to_dataframe,
    to_record,
    write_layout_plan,
)

__all__ = [
    "parsed_document_to_record",
    "plan_to_dataframe",
    "plan_to_record",
    "signature_blocks_to_dataframe",
    "to_record",
    "write_layout_plan",
]
