"""
Party and field extraction from signature block bodies.

Party records are built by an explicit state machine rather than a mutable
"current party" accumulator:

    NoActiveParty --role--> BuildingParty(partial)
    BuildingParty --role--> flush(partial), BuildingParty(new partial)
    BuildingParty --signature rule / Name: / Title: / Company: / Date:--> BuildingParty(updated)
    any state     --"ROLE: ____" initials line--> flush, emit initials party, NoActiveParty
    end of input  --> flush

A flush emits the partial only if it has a role. Records without a role are
discarded: a role label is the minimum identifying information for a party.

Side-by-side bodies split every line at the first tab or run of >=5 spaces;
left and right segments drive two independent machines. Parties come out in
reading order: row by row, left column before right.
"""

import logging
import re
from dataclasses import dataclass, replace
from enum import Enum
from typing import List, Optional, Sequence, Tuple, Union

from legalpdf.constants import (
    FIELD_RX,
    INITIAL_LINE_RX,
    ROLE_LINE_RX,
    SIDE_BY_SIDE_SPLIT_RX,
    SIGNATURE_RULE_RX,
)
from legalpdf.core.core_types import BlockLayout, LineType, NotaryDetails, SignatureParty

logger = logging.getLogger(__name__)


# =============================================================================
# TOKENS
# =============================================================================

class TokenKind(Enum):
    """Line kinds the party state machine reacts to."""
    ROLE = "role"
    INITIAL_LINE = "initial_line"
    SIGNATURE_LINE = "signature_line"
    NAME = "name"
    TITLE = "title"
    COMPANY = "company"
    DATE = "date"
    OTHER = "other"


_FIELD_TOKENS = (
    (TokenKind.NAME, FIELD_RX["name"]),
    (TokenKind.TITLE, FIELD_RX["title"]),
    (TokenKind.COMPANY, FIELD_RX["company"]),
    (TokenKind.DATE, FIELD_RX["date"]),
)


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    value: Optional[str] = None


def classify_token(text: str) -> Token:
    """
    Classify one stripped line (or column segment) of block text.

    Example:
        >>> classify_token("ASSIGNOR:")
        Token(kind=<TokenKind.ROLE: 'role'>, value='ASSIGNOR')
        >>> classify_token("Name: John Doe")
        Token(kind=<TokenKind.NAME: 'name'>, value='John Doe')
    """
    if not text:
        return Token(TokenKind.OTHER)

    initial_match = INITIAL_LINE_RX.match(text)
    if initial_match:
        return Token(TokenKind.INITIAL_LINE, initial_match.group(1).strip())

    if ROLE_LINE_RX.match(text) and len(text) > 2:
        return Token(TokenKind.ROLE, text.replace(":", "").strip())

    if SIGNATURE_RULE_RX.match(text):
        return Token(TokenKind.SIGNATURE_LINE)

    for kind, pattern in _FIELD_TOKENS:
        match = pattern.match(text)
        if match:
            value = match.group(1).strip()
            # "Name: ________" is an empty field, not a value
            if value and value.strip("_ "):
                return Token(kind, value)
            return Token(TokenKind.OTHER)

    return Token(TokenKind.OTHER)


# =============================================================================
# STATE MACHINE
# =============================================================================

@dataclass(frozen=True)
class PartialParty:
    """A party record under construction."""
    role: Optional[str] = None
    name: Optional[str] = None
    title: Optional[str] = None
    company: Optional[str] = None
    date: Optional[str] = None
    line_type: Optional[LineType] = None

    def is_populated(self) -> bool:
        return any((self.role, self.name, self.title, self.company, self.date, self.line_type))

    def to_party(self) -> Optional[SignatureParty]:
        if not self.role:
            return None
        return SignatureParty(
            role=self.role,
            name=self.name,
            title=self.title,
            company=self.company,
            date=self.date,
            line_type=self.line_type,
        )


@dataclass(frozen=True)
class NoActiveParty:
    pass


@dataclass(frozen=True)
class BuildingParty:
    partial: PartialParty


PartyState = Union[NoActiveParty, BuildingParty]

_FIELD_ATTRS = {
    TokenKind.NAME: "name",
    TokenKind.TITLE: "title",
    TokenKind.COMPANY: "company",
    TokenKind.DATE: "date",
}


def flush(state: PartyState) -> Tuple[PartialParty, ...]:
    """Emit the in-progress record if it carries a role."""
    if not isinstance(state, BuildingParty):
        return ()
    if state.partial.role:
        return (state.partial,)
    if state.partial.is_populated():
        logger.debug(f"Discarding party record without role: {state.partial}")
    return ()


def step(state: PartyState, token: Token) -> Tuple[PartyState, Tuple[PartialParty, ...]]:
    """
    Apply one token to the machine.

    Returns:
        Tuple of (next state, records emitted by this transition).
    """
    if token.kind is TokenKind.ROLE:
        return BuildingParty(PartialParty(role=token.value)), flush(state)

    if token.kind is TokenKind.INITIAL_LINE:
        initials = PartialParty(role=token.value, line_type=LineType.INITIAL_LINE)
        return NoActiveParty(), flush(state) + (initials,)

    if token.kind is TokenKind.OTHER:
        return state, ()

    current = state.partial if isinstance(state, BuildingParty) else PartialParty()

    if token.kind is TokenKind.SIGNATURE_LINE:
        return BuildingParty(replace(current, line_type=LineType.SIGNATURE_LINE)), ()

    return BuildingParty(replace(current, **{_FIELD_ATTRS[token.kind]: token.value})), ()


def run_machine(segments: Sequence[str]) -> List[PartialParty]:
    """Drive one machine over stripped text segments and flush at the end."""
    state: PartyState = NoActiveParty()
    emitted: List[PartialParty] = []

    for text in segments:
        state, out = step(state, classify_token(text))
        emitted.extend(out)

    emitted.extend(flush(state))
    return emitted


# =============================================================================
# EXTRACTION
# =============================================================================

def split_columns(line: str) -> Tuple[str, str]:
    """
    Split a side-by-side line at the first tab or run of >=5 spaces.

    The raw line is split, so a row indented past the gap holds only
    right-column content.

    Example:
        >>> split_columns("ASSIGNOR:          ASSIGNEE:")
        ('ASSIGNOR:', 'ASSIGNEE:')
        >>> split_columns("ASSIGNOR:")
        ('ASSIGNOR:', '')
        >>> split_columns("                               Title: CTO")
        ('', 'Title: CTO')
    """
    parts = SIDE_BY_SIDE_SPLIT_RX.split(line.rstrip(), maxsplit=1)
    left = parts[0].strip()
    right = parts[1].strip() if len(parts) > 1 else ""
    return left, right


def extract_single_parties(lines: Sequence[str]) -> List[SignatureParty]:
    """Extract parties stacked vertically, in top-to-bottom order."""
    segments = [line.strip() for line in lines if line.strip()]
    return [p.to_party() for p in run_machine(segments)]


def extract_side_by_side_parties(lines: Sequence[str]) -> List[SignatureParty]:
    """Extract parties from two parallel columns, left before right per row."""
    left_segments = []
    right_segments = []

    for line in lines:
        if not line.strip():
            continue
        left, right = split_columns(line)
        if left:
            left_segments.append(left)
        if right:
            right_segments.append(right)

    # Row n of the grid is (left[n], right[n])
    ordered = sorted(
        [(n, 0, p) for n, p in enumerate(run_machine(left_segments))]
        + [(n, 1, p) for n, p in enumerate(run_machine(right_segments))],
        key=lambda item: item[:2],
    )
    return [item[2].to_party() for item in ordered]


def extract_parties(lines: Sequence[str], layout: BlockLayout) -> List[SignatureParty]:
    """
    Extract party records from a block body.

    Args:
        lines: Block body lines.
        layout: Classified layout of the body.

    Returns:
        Parties in reading order. Every returned party has a role.
    """
    if layout is BlockLayout.SIDE_BY_SIDE:
        parties = extract_side_by_side_parties(lines)
    else:
        parties = extract_single_parties(lines)

    logger.debug(f"Extracted {len(parties)} parties ({layout.value})")
    return parties


# =============================================================================
# NOTARY DETAILS
# =============================================================================

_NOTARY_FIELD_RX = (
    ("state", re.compile(r"^State of\s*:?\s*(.+)$", re.IGNORECASE)),
    ("county", re.compile(r"^County of\s*:?\s*(.+)$", re.IGNORECASE)),
    ("commission_expires", re.compile(r"Commission Expires\s*:?\s*(.+)$", re.IGNORECASE)),
    ("commission_number", re.compile(r"Commission (?:No\.?|Number|#)\s*:?\s*(.+)$", re.IGNORECASE)),
)


def extract_notary_details(lines: Sequence[str]) -> Optional[NotaryDetails]:
    """
    Read venue and commission fields from a notary block body.

    Blank placeholders ("State of ________") are left unset.

    Example:
        >>> extract_notary_details(["State of California", "County of ____"])
        NotaryDetails(state='California', county=None, commission_expires=None, commission_number=None)
    """
    values = {}
    for line in lines:
        text = line.strip()
        for attr, pattern in _NOTARY_FIELD_RX:
            if attr in values:
                continue
            match = pattern.search(text)
            if match:
                value = match.group(1).strip().rstrip(",;").strip()
                if value.strip("_ "):
                    values[attr] = value
                break

    details = NotaryDetails(**values)
    return None if details.is_empty() else details
