"""
Party extraction tests: the party state machine, column splitting and
notary field reading.
"""

from legalpdf.core import BlockLayout, LineType, NotaryDetails, SignatureParty
from legalpdf.signatures.parties import (
    BuildingParty,
    NoActiveParty,
    PartialParty,
    Token,
    TokenKind,
    classify_token,
    extract_notary_details,
    extract_parties,
    split_columns,
    step,
)

RULE = "______________"


# =============================================================================
# TOKENS AND TRANSITIONS
# =============================================================================

def test_classify_token():
    assert classify_token("ASSIGNOR:") == Token(TokenKind.ROLE, "ASSIGNOR")
    assert classify_token("DISCLOSING PARTY") == Token(TokenKind.ROLE, "DISCLOSING PARTY")
    assert classify_token("LICENSEE: ______") == Token(TokenKind.INITIAL_LINE, "LICENSEE")
    assert classify_token(RULE) == Token(TokenKind.SIGNATURE_LINE)
    assert classify_token("Name: John Doe") == Token(TokenKind.NAME, "John Doe")
    assert classify_token("Company: Acme Inc.") == Token(TokenKind.COMPANY, "Acme Inc.")


def test_short_or_blank_lines_are_other():
    assert classify_token("AB").kind is TokenKind.OTHER
    assert classify_token("_____").kind is TokenKind.OTHER
    assert classify_token("Name: ________").kind is TokenKind.OTHER
    assert classify_token("").kind is TokenKind.OTHER


def test_role_token_starts_a_record():
    state, emitted = step(NoActiveParty(), Token(TokenKind.ROLE, "ASSIGNOR"))

    assert state == BuildingParty(PartialParty(role="ASSIGNOR"))
    assert emitted == ()


def test_second_role_flushes_the_first():
    state = BuildingParty(PartialParty(role="ASSIGNOR", name="A"))

    state, emitted = step(state, Token(TokenKind.ROLE, "ASSIGNEE"))

    assert emitted == (PartialParty(role="ASSIGNOR", name="A"),)
    assert state == BuildingParty(PartialParty(role="ASSIGNEE"))


def test_initials_line_emits_and_resets():
    state = BuildingParty(PartialParty(role="ASSIGNOR"))

    state, emitted = step(state, Token(TokenKind.INITIAL_LINE, "LICENSEE"))

    assert state == NoActiveParty()
    assert emitted == (
        PartialParty(role="ASSIGNOR"),
        PartialParty(role="LICENSEE", line_type=LineType.INITIAL_LINE),
    )


# =============================================================================
# SINGLE COLUMN
# =============================================================================

def test_every_party_has_a_role():
    lines = [
        "ASSIGNOR:",
        RULE,
        "Name: John Doe",
        "Title: CEO",
        "ASSIGNEE:",
        RULE,
        "Name: Acme Corp",
    ]

    parties = extract_parties(lines, BlockLayout.SINGLE)

    assert parties == [
        SignatureParty(role="ASSIGNOR", name="John Doe", title="CEO", line_type=LineType.SIGNATURE_LINE),
        SignatureParty(role="ASSIGNEE", name="Acme Corp", line_type=LineType.SIGNATURE_LINE),
    ]
    assert all(p.role for p in parties)


def test_record_without_role_is_discarded():
    assert extract_parties([RULE, "Name: Nobody"], BlockLayout.SINGLE) == []


def test_fields_before_first_role_are_dropped():
    parties = extract_parties(["Name: Nobody", "ASSIGNOR:", "Name: A"], BlockLayout.SINGLE)

    assert parties == [SignatureParty(role="ASSIGNOR", name="A")]


def test_initials_party():
    parties = extract_parties(["LICENSEE: ______"], BlockLayout.SINGLE)

    assert parties == [SignatureParty(role="LICENSEE", line_type=LineType.INITIAL_LINE)]


def test_company_and_date_need_explicit_labels():
    labelled = extract_parties(
        ["ASSIGNEE:", "Company: Acme Inc.", "Date: January 1, 2025"],
        BlockLayout.SINGLE,
    )
    unlabelled = extract_parties(["ASSIGNEE:", "Acme Inc."], BlockLayout.SINGLE)

    assert labelled[0].company == "Acme Inc."
    assert labelled[0].date == "January 1, 2025"
    assert unlabelled == [SignatureParty(role="ASSIGNEE")]


def test_blank_field_is_not_a_value():
    parties = extract_parties(["ASSIGNOR:", RULE, "Name: ____________"], BlockLayout.SINGLE)

    assert parties[0].name is None


# =============================================================================
# SIDE BY SIDE
# =============================================================================

def test_split_columns():
    assert split_columns("ASSIGNOR:          ASSIGNEE:") == ("ASSIGNOR:", "ASSIGNEE:")
    assert split_columns("Name: A\tName: B") == ("Name: A", "Name: B")
    assert split_columns("   ASSIGNOR:") == ("ASSIGNOR:", "")
    assert split_columns(" " * 31 + "Title: CTO") == ("", "Title: CTO")
    assert split_columns("\tName: B") == ("", "Name: B")


def test_side_by_side_parties_left_then_right():
    lines = [
        "DISCLOSING PARTY:              RECEIVING PARTY:",
        "____________________          ____________________",
        "Name: Alice Smith              Name: Bob Jones",
        "Title: CEO                     Title: CTO",
    ]

    parties = extract_parties(lines, BlockLayout.SIDE_BY_SIDE)

    assert parties == [
        SignatureParty(
            role="DISCLOSING PARTY", name="Alice Smith", title="CEO",
            line_type=LineType.SIGNATURE_LINE,
        ),
        SignatureParty(
            role="RECEIVING PARTY", name="Bob Jones", title="CTO",
            line_type=LineType.SIGNATURE_LINE,
        ),
    ]


def test_right_only_row_stays_in_right_column():
    lines = [
        "DISCLOSING PARTY:              RECEIVING PARTY:",
        "____________________          ____________________",
        "Name: Alice Smith              Name: Bob Jones",
        " " * 31 + "Title: CTO",
    ]

    left, right = extract_parties(lines, BlockLayout.SIDE_BY_SIDE)

    assert left.role == "DISCLOSING PARTY"
    assert left.title is None
    assert right.role == "RECEIVING PARTY"
    assert right.title == "CTO"


def test_side_by_side_two_rows_in_reading_order():
    lines = [
        "ASSIGNOR:          ASSIGNEE:",
        "Name: A            Name: B",
        "WITNESS:           WITNESS:",
        "Name: C            Name: D",
    ]

    parties = extract_parties(lines, BlockLayout.SIDE_BY_SIDE)

    assert [p.name for p in parties] == ["A", "B", "C", "D"]


def test_side_by_side_with_empty_right_column():
    lines = [
        "ASSIGNOR:",
        "Name: A",
    ]

    parties = extract_parties(lines, BlockLayout.SIDE_BY_SIDE)

    assert parties == [SignatureParty(role="ASSIGNOR", name="A")]


# =============================================================================
# NOTARY
# =============================================================================

def test_notary_details():
    details = extract_notary_details([
        "State of California",
        "County of ________",
        "My Commission Expires: 12/31/2026",
        "Commission No.: 12345",
    ])

    assert details == NotaryDetails(
        state="California",
        county=None,
        commission_expires="12/31/2026",
        commission_number="12345",
    )


def test_notary_details_absent():
    assert extract_notary_details(["NOTARY PUBLIC:", RULE]) is None
    assert extract_notary_details([]) is None
