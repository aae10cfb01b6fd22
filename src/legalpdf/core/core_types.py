"""
Core Types: the value objects flowing through the signature pipeline.

Layer: Parsing
- SignatureMarker: one located [TYPE_BLOCK:id] occurrence
- SignatureParty: one signing party inside a block
- NotaryDetails: acknowledgment fields read from a notary block
- SignatureBlockData: one fully parsed block
- ParsedDocument: remaining content lines plus parsed blocks

Every type here is frozen and holds tuples, so two parses of the same text
compare equal field by field.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from legalpdf.constants import KEYWORD_INITIALS, KEYWORD_NOTARY, KEYWORD_SIGNATURE


# =============================================================================
# ENUMS
# =============================================================================

class MarkerType(Enum):
    """Kinds of signature-related regions a marker can open."""
    SIGNATURE = "signature"
    INITIAL = "initial"
    NOTARY = "notary"

    @classmethod
    def from_keyword(cls, keyword: str) -> Optional["MarkerType"]:
        """Resolve a marker keyword (``SIGNATURE_BLOCK``...) to its type."""
        return _KEYWORD_TO_TYPE.get(keyword)

    @property
    def keyword(self) -> str:
        return _TYPE_TO_KEYWORD[self]


_KEYWORD_TO_TYPE = {
    KEYWORD_SIGNATURE: MarkerType.SIGNATURE,
    KEYWORD_INITIALS: MarkerType.INITIAL,
    KEYWORD_NOTARY: MarkerType.NOTARY,
}
_TYPE_TO_KEYWORD = {v: k for k, v in _KEYWORD_TO_TYPE.items()}


class BlockLayout(Enum):
    """Arrangement of the parties inside a block."""
    SINGLE = "single"
    SIDE_BY_SIDE = "side-by-side"


class LineType(Enum):
    """Kind of blank rule a party signs on."""
    SIGNATURE_LINE = "signature-line"
    INITIAL_LINE = "initial-line"


# =============================================================================
# MARKERS
# =============================================================================

@dataclass(frozen=True)
class SignatureMarker:
    """
    One located marker occurrence.

    Attributes:
        marker_type: Region kind resolved from the keyword.
        marker_id: Kebab-case identifier (e.g., "assignor-signature").
        full_marker_text: Literal marker as it appears in the text.
        start_offset: Offset of "[" in the full source text.
        end_offset: Offset one past "]" in the full source text.
        line_index: Source line holding the marker.
    """
    marker_type: MarkerType
    marker_id: str
    full_marker_text: str
    start_offset: int
    end_offset: int
    line_index: int = 0


@dataclass(frozen=True)
class MarkerContext:
    """Party/role/position hints parsed from a marker id."""
    party: Optional[str] = None
    role: Optional[str] = None
    position: int = 0


# =============================================================================
# PARTIES
# =============================================================================

@dataclass(frozen=True)
class SignatureParty:
    """
    One signing party within a block.

    A party is only ever emitted with a role; ``line_type`` of
    SIGNATURE_LINE means a blank rule is rendered for a wet-ink signature.
    """
    role: str
    name: Optional[str] = None
    title: Optional[str] = None
    company: Optional[str] = None
    date: Optional[str] = None
    line_type: Optional[LineType] = None


@dataclass(frozen=True)
class NotaryDetails:
    """Acknowledgment fields filled in on a notary block, when present."""
    state: Optional[str] = None
    county: Optional[str] = None
    commission_expires: Optional[str] = None
    commission_number: Optional[str] = None

    def is_empty(self) -> bool:
        return not any((self.state, self.county, self.commission_expires, self.commission_number))


# =============================================================================
# BLOCKS
# =============================================================================

@dataclass(frozen=True)
class SignatureBlockData:
    """
    One fully parsed signature, initials or notary block.

    Attributes:
        marker: The marker that opened the block.
        layout: Single-column or side-by-side.
        parties: Parties in reading order (left-to-right, top-to-bottom).
        notary_required: Whether notarial acknowledgment must be rendered.
        content_index: Index into ParsedDocument.content before which the
            block is rendered.
        notary: Notary fields read from the block body.
        raw_lines: Body lines consumed after the marker line.
    """
    marker: SignatureMarker
    layout: BlockLayout = BlockLayout.SINGLE
    parties: Tuple[SignatureParty, ...] = ()
    notary_required: bool = False
    content_index: int = 0
    notary: Optional[NotaryDetails] = None
    raw_lines: Tuple[str, ...] = field(default=(), repr=False)

    @property
    def block_id(self) -> str:
        return self.marker.marker_id

    @property
    def is_empty(self) -> bool:
        """True when no body text produced any party."""
        return len(self.parties) == 0


@dataclass(frozen=True)
class ParsedDocument:
    """Scan+extract output: cleaned content lines and blocks in document order."""
    content: Tuple[str, ...] = ()
    signature_blocks: Tuple[SignatureBlockData, ...] = ()

    @property
    def has_signatures(self) -> bool:
        return len(self.signature_blocks) > 0

    def blocks_of_type(self, marker_type: MarkerType) -> Tuple[SignatureBlockData, ...]:
        return tuple(b for b in self.signature_blocks if b.marker.marker_type is marker_type)
