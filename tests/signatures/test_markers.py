"""
Marker scanning tests.

Every well-formed marker is found with offsets into the original text;
anything else in brackets is left alone.
"""

import logging

import pytest

from legalpdf.core import MarkerContext, MarkerType
from legalpdf.signatures.markers import (
    expected_marker_text,
    find_markers_in_line,
    is_valid_marker_id,
    marker_context,
    scan_markers,
)


DOCUMENT = (
    "Intro\n"
    "[SIGNATURE_BLOCK:assignor-signature]\n"
    "Initial here [INITIALS_BLOCK:licensee-initials] please\n"
    "[NOTARY_BLOCK:assignor-notary]\n"
)


class TestScanMarkers:

    def test_finds_every_marker_in_order(self):
        markers = scan_markers(DOCUMENT)

        assert [m.marker_id for m in markers] == [
            "assignor-signature",
            "licensee-initials",
            "assignor-notary",
        ]
        assert [m.marker_type for m in markers] == [
            MarkerType.SIGNATURE,
            MarkerType.INITIAL,
            MarkerType.NOTARY,
        ]

    def test_offsets_slice_back_to_marker_text(self):
        for marker in scan_markers(DOCUMENT):
            assert DOCUMENT[marker.start_offset:marker.end_offset] == marker.full_marker_text

    def test_first_marker_offset_and_line(self):
        first = scan_markers(DOCUMENT)[0]

        assert first.start_offset == len("Intro\n")
        assert first.line_index == 1

    def test_line_indexes(self):
        assert [m.line_index for m in scan_markers(DOCUMENT)] == [1, 2, 3]

    def test_same_id_different_types_are_distinct(self):
        markers = scan_markers("[SIGNATURE_BLOCK:assignor]\n[NOTARY_BLOCK:assignor]")

        assert len(markers) == 2
        assert markers[0].marker_type is MarkerType.SIGNATURE
        assert markers[1].marker_type is MarkerType.NOTARY

    def test_scan_is_deterministic(self):
        assert scan_markers(DOCUMENT) == scan_markers(DOCUMENT)

    def test_empty_text(self):
        assert scan_markers("") == []


class TestNonMarkers:

    @pytest.mark.parametrize("text", [
        "See [1] and [2].",
        "[PLACEHOLDER:client-name]",
        "[SIGNATURE_BLOCK:assignor-signature",
        "SIGNATURE_BLOCK:assignor-signature]",
        "[SIGNATURE_BLOCK:]",
        "[signature_block:assignor-signature]",
    ])
    def test_ignored(self, text):
        assert scan_markers(text) == []

    def test_invalid_id_is_logged_and_skipped(self, caplog):
        with caplog.at_level(logging.WARNING):
            markers = scan_markers("[SIGNATURE_BLOCK:Invalid_ID]")

        assert markers == []
        assert "Invalid marker ID" in caplog.text

    def test_valid_marker_next_to_invalid_one(self):
        markers = scan_markers("[SIGNATURE_BLOCK:Bad_Id] [SIGNATURE_BLOCK:good-id]")

        assert [m.marker_id for m in markers] == ["good-id"]


def test_multiple_markers_on_one_line():
    markers = find_markers_in_line(
        "[INITIALS_BLOCK:a-initials] [INITIALS_BLOCK:b-initials]",
        line_offset=10,
        line_index=4,
    )

    assert [m.marker_id for m in markers] == ["a-initials", "b-initials"]
    assert markers[0].start_offset == 10
    assert markers[1].start_offset == 10 + len("[INITIALS_BLOCK:a-initials] ")
    assert all(m.line_index == 4 for m in markers)


@pytest.mark.parametrize("marker_id, valid", [
    ("assignor-signature", True),
    ("assignor-signature-2", True),
    ("witness", True),
    ("a1-b2", True),
    ("Invalid_ID", False),
    ("123-numbers", False),
    ("trailing-", False),
    ("double--hyphen", False),
    ("has space", False),
])
def test_is_valid_marker_id(marker_id, valid):
    assert is_valid_marker_id(marker_id) is valid


def test_marker_context():
    assert marker_context("assignor-signature-2") == MarkerContext(
        party="assignor", role="assignor-signature", position=2
    )
    assert marker_context("licensee-initials") == MarkerContext(
        party="licensee", role="licensee", position=0
    )
    assert marker_context("witness") == MarkerContext()


def test_expected_marker_text_round_trips_through_scan():
    text = expected_marker_text(MarkerType.INITIAL, "licensee-initials")

    assert text == "[INITIALS_BLOCK:licensee-initials]"
    assert scan_markers(text)[0].full_marker_text == text
