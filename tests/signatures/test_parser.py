"""
End-to-end scan + extract tests: document text -> ParsedDocument.
"""

from __future__ import annotations

from legalpdf.core import (
    BlockLayout,
    LineType,
    MarkerType,
    NotaryDetails,
    SignatureParty,
)
from legalpdf.signatures import load_signature_schema, parse_document


SINGLE_ASSIGNOR = """[SIGNATURE_BLOCK:assignor-signature]
ASSIGNOR:
__________________________
Name: John Doe
Title: CEO
"""

NDA_SIDE_BY_SIDE = """IN WITNESS WHEREOF, the parties have executed this Agreement.

[SIGNATURE_BLOCK:nda-signatures]
DISCLOSING PARTY:              RECEIVING PARTY:
____________________          ____________________
Name: Alice Smith              Name: Bob Jones
Title: CEO                     Title: CTO
"""

NOTARY = """[NOTARY_BLOCK:assignor-notary]
State of California
County of Santa Clara
NOTARY PUBLIC:
______________________
My Commission Expires: 12/31/2026
"""


def test_single_signature_block():
    parsed = parse_document(SINGLE_ASSIGNOR)

    assert len(parsed.signature_blocks) == 1
    block = parsed.signature_blocks[0]
    assert block.block_id == "assignor-signature"
    assert block.layout is BlockLayout.SINGLE
    assert block.parties == (
        SignatureParty(
            role="ASSIGNOR",
            name="John Doe",
            title="CEO",
            line_type=LineType.SIGNATURE_LINE,
        ),
    )
    assert not block.notary_required
    assert block.notary is None
    # Block body is removed from content
    assert parsed.content == ()


def test_side_by_side_block():
    parsed = parse_document(NDA_SIDE_BY_SIDE)

    block = parsed.signature_blocks[0]
    assert block.layout is BlockLayout.SIDE_BY_SIDE
    assert [p.role for p in block.parties] == ["DISCLOSING PARTY", "RECEIVING PARTY"]
    assert [p.name for p in block.parties] == ["Alice Smith", "Bob Jones"]
    assert parsed.content == (
        "IN WITNESS WHEREOF, the parties have executed this Agreement.",
        "",
    )
    assert block.content_index == 2


def test_notary_block():
    parsed = parse_document(NOTARY)

    block = parsed.signature_blocks[0]
    assert block.marker.marker_type is MarkerType.NOTARY
    assert block.notary_required
    assert block.notary == NotaryDetails(
        state="California",
        county="Santa Clara",
        commission_expires="12/31/2026",
    )
    assert block.parties == (
        SignatureParty(role="NOTARY PUBLIC", line_type=LineType.SIGNATURE_LINE),
    )


def test_parsing_is_deterministic():
    text = SINGLE_ASSIGNOR + "\n" + NDA_SIDE_BY_SIDE + "\n" + NOTARY

    assert parse_document(text) == parse_document(text)


def test_content_index_points_at_following_content():
    text = (
        "Para one.\n"
        "\n"
        "[SIGNATURE_BLOCK:assignor-signature]\n"
        "ASSIGNOR:\n"
        "______________\n"
        "\n"
        "\n"
        "After text."
    )

    parsed = parse_document(text)

    assert parsed.content == ("Para one.", "", "", "After text.")
    assert parsed.signature_blocks[0].content_index == 2
    assert parsed.signature_blocks[0].raw_lines == ("ASSIGNOR:", "______________")


def test_text_without_markers_passes_through():
    text = "Line one\n\nLine [1] two"

    parsed = parse_document(text)

    assert parsed.content == ("Line one", "", "Line [1] two")
    assert not parsed.has_signatures


def test_malformed_marker_stays_content():
    parsed = parse_document("See [SIGNATURE_BLOCK:Bad_Id] here")

    assert parsed.signature_blocks == ()
    assert parsed.content == ("See [SIGNATURE_BLOCK:Bad_Id] here",)


def test_malformed_marker_after_a_block_stays_content():
    parsed = parse_document(
        "[SIGNATURE_BLOCK:a-sig]\nASSIGNOR:\n______________\n[SIGNATURE_BLOCK:Bad_ID]"
    )

    assert [b.block_id for b in parsed.signature_blocks] == ["a-sig"]
    assert parsed.signature_blocks[0].raw_lines == ("ASSIGNOR:", "______________")
    assert parsed.content == ("[SIGNATURE_BLOCK:Bad_ID]",)


def test_prose_after_a_block_stays_content():
    text = (
        "[SIGNATURE_BLOCK:assignor-signature]\n"
        "ASSIGNOR:\n"
        "______________\n"
        "Name: John Doe\n"
        "\n"
        "This Agreement is governed by the laws of Delaware."
    )

    parsed = parse_document(text)

    block = parsed.signature_blocks[0]
    assert block.raw_lines == ("ASSIGNOR:", "______________", "Name: John Doe")
    assert parsed.content == ("This Agreement is governed by the laws of Delaware.",)
    assert block.content_index == 0


def test_text_around_marker_stays_content():
    parsed = parse_document("Signed: [SIGNATURE_BLOCK:a-sig]\nASSIGNOR:\n______________")

    assert parsed.content == ("Signed: ",)
    assert parsed.signature_blocks[0].content_index == 1
    assert parsed.signature_blocks[0].parties[0].role == "ASSIGNOR"


def test_last_marker_on_a_line_owns_the_body():
    parsed = parse_document(
        "[INITIALS_BLOCK:a-initials] [INITIALS_BLOCK:b-initials]\nLICENSOR: ____"
    )

    first, second = parsed.signature_blocks
    assert first.is_empty
    assert second.parties == (
        SignatureParty(role="LICENSOR", line_type=LineType.INITIAL_LINE),
    )
    assert parsed.content == ()


def test_marker_without_body():
    parsed = parse_document("[SIGNATURE_BLOCK:a-sig]\nThis Agreement is binding.")

    block = parsed.signature_blocks[0]
    assert block.is_empty
    assert block.layout is BlockLayout.SINGLE
    assert parsed.content == ("This Agreement is binding.",)
    assert block.content_index == 0


def test_blocks_in_document_order():
    text = (
        "[SIGNATURE_BLOCK:assignor-signature]\nASSIGNOR:\n______________\n\n\n"
        "[INITIALS_BLOCK:assignor-initials]\nASSIGNOR: ______\n\n\n"
        "[NOTARY_BLOCK:assignor-notary]\nState of Texas\n"
    )

    parsed = parse_document(text)

    assert [b.block_id for b in parsed.signature_blocks] == [
        "assignor-signature",
        "assignor-initials",
        "assignor-notary",
    ]
    assert len(parsed.blocks_of_type(MarkerType.INITIAL)) == 1


def test_template_notary_required_flag():
    schema = load_signature_schema({"signatureBlocks": [
        {"id": "assignor-signature", "notaryRequired": True},
    ]})

    with_schema = parse_document(SINGLE_ASSIGNOR, schema)
    without = parse_document(SINGLE_ASSIGNOR)

    assert with_schema.signature_blocks[0].notary_required
    assert not without.signature_blocks[0].notary_required
    # Non-notary markers never read notary fields
    assert with_schema.signature_blocks[0].notary is None


def test_every_party_has_a_role():
    text = "\n".join([SINGLE_ASSIGNOR, NDA_SIDE_BY_SIDE, NOTARY])

    parsed = parse_document(text)

    assert all(p.role for b in parsed.signature_blocks for p in b.parties)
