"""
legalpdf core types.

Usage:
    from legalpdf.core import (
        MarkerType,
        SignatureMarker,
        SignatureParty,
        SignatureBlockData,
        ParsedDocument,
    )
"""

from legalpdf.core.core_types import (
    # Enums
    MarkerType,
    BlockLayout,
    LineType,
    # Values
    SignatureMarker,
    MarkerContext,
    SignatureParty,
    NotaryDetails,
    SignatureBlockData,
    ParsedDocument,
)

__all__ = [
    "MarkerType",
    "BlockLayout",
    "LineType",
    "SignatureMarker",
    "MarkerContext",
    "SignatureParty",
    "NotaryDetails",
    "SignatureBlockData",
    "ParsedDocument",
]
