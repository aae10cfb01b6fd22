"""
Layout classification tests: single-column vs side-by-side block bodies.
"""

from legalpdf.core import BlockLayout
from legalpdf.signatures.layout_detection import (
    classify_layout,
    count_underscore_runs,
    detect_layout_signals,
    has_column_gap,
)


def test_two_underscore_runs_on_one_line_is_side_by_side():
    assert classify_layout(["_________   Text   _________"]) is BlockLayout.SIDE_BY_SIDE


def test_stacked_block_is_single():
    lines = ["ASSIGNOR:", "__________________", "Name: John Doe", "Title: CEO"]

    assert classify_layout(lines) is BlockLayout.SINGLE


def test_tab_separated_columns():
    assert classify_layout(["Name: Alice\tName: Bob"]) is BlockLayout.SIDE_BY_SIDE


def test_wide_space_gap():
    lines = ["DISCLOSING PARTY:          RECEIVING PARTY:"]

    assert classify_layout(lines) is BlockLayout.SIDE_BY_SIDE


def test_narrow_gap_is_not_a_column():
    assert classify_layout(["Name: Alice     Smith"]) is BlockLayout.SINGLE


def test_indentation_counts_as_a_column_gap():
    assert has_column_gap("            ASSIGNOR:")
    assert has_column_gap("\tASSIGNOR:")
    assert classify_layout(["\tASSIGNOR:"]) is BlockLayout.SIDE_BY_SIDE
    assert classify_layout(["            ASSIGNOR:", "            ____________"]) is BlockLayout.SIDE_BY_SIDE


def test_short_indentation_is_not_a_column_gap():
    assert not has_column_gap("    ASSIGNOR:")
    assert classify_layout(["    ASSIGNOR:", "    ____________"]) is BlockLayout.SINGLE


def test_dual_rule_wins_over_stacked_roles():
    lines = ["ASSIGNOR:", "ASSIGNEE:", "_____     _____"]

    signals = detect_layout_signals(lines)

    assert signals.dual_rule_line == 2
    assert signals.column_gap_line is None
    assert signals.layout is BlockLayout.SIDE_BY_SIDE


def test_empty_body_is_single():
    assert classify_layout([]) is BlockLayout.SINGLE


def test_count_underscore_runs():
    assert count_underscore_runs("____________     ____________") == 2
    assert count_underscore_runs("By: ___ Date: ___ Initials: ___") == 3
    assert count_underscore_runs("Name: __") == 0
