"""
Layout classification for signature block bodies.

A block is side-by-side when its text shows two parties sharing a horizontal
band. Two signals are used, checked line by line:

1. Dual rules: two or more runs of >=3 underscores on one line
   ("_________          _________").
2. Column gap: a tab, or a run of >=10 spaces between content.

The underscore signal reflects physical line layout, so it wins whenever it
appears, even if other lines look like stacked single-column role labels.
"""

from dataclasses import dataclass
from typing import Optional, Sequence

from legalpdf.constants import COLUMN_GAP_RX, UNDERSCORE_RUN_RX
from legalpdf.core.core_types import BlockLayout


@dataclass(frozen=True)
class LayoutSignals:
    """
    Layout evidence found in a block body.

    Attributes:
        dual_rule_line: Index of the first line with two underscore runs.
        column_gap_line: Index of the first line with a tab / wide gap.
    """
    dual_rule_line: Optional[int] = None
    column_gap_line: Optional[int] = None

    @property
    def layout(self) -> BlockLayout:
        if self.dual_rule_line is not None or self.column_gap_line is not None:
            return BlockLayout.SIDE_BY_SIDE
        return BlockLayout.SINGLE


def count_underscore_runs(line: str) -> int:
    """
    Count runs of three or more underscores.

    Example:
        >>> count_underscore_runs("____________     ____________")
        2
        >>> count_underscore_runs("Name: __")
        0
    """
    return len(UNDERSCORE_RUN_RX.findall(line))


def has_column_gap(line: str) -> bool:
    """
    True if the line holds a tab or a run of >=10 spaces anywhere.

    Example:
        >>> has_column_gap("ASSIGNOR:          ASSIGNEE:")
        True
        >>> has_column_gap("\tASSIGNOR:")
        True
        >>> has_column_gap("   ASSIGNOR:")
        False
    """
    return bool(COLUMN_GAP_RX.search(line))


def detect_layout_signals(lines: Sequence[str]) -> LayoutSignals:
    """Record the first line carrying each side-by-side signal."""
    dual_rule_line = None
    column_gap_line = None

    for idx, line in enumerate(lines):
        if dual_rule_line is None and count_underscore_runs(line) >= 2:
            dual_rule_line = idx
        if column_gap_line is None and has_column_gap(line):
            column_gap_line = idx

    return LayoutSignals(dual_rule_line=dual_rule_line, column_gap_line=column_gap_line)


def classify_layout(lines: Sequence[str]) -> BlockLayout:
    """
    Classify a block body as single-column or side-by-side.

    Example:
        >>> classify_layout(["ASSIGNOR:", "_______________", "Name: A"])
        <BlockLayout.SINGLE: 'single'>
        >>> classify_layout(["By: _______     By: _______"])
        <BlockLayout.SIDE_BY_SIDE: 'side-by-side'>
    """
    return detect_layout_signals(lines).layout
