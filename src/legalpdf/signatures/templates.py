"""
Template signature schema interpretation.

A document template may declare the blocks its generated text is expected to
carry:

    {
      "signatureBlocks": [
        {
          "id": "assignor-signature",
          "placement": {"marker": "[SIGNATURE_BLOCK:assignor-signature]"},
          "layout": {"position": "side-by-side", "groupWith": "assignee-signature"},
          "party": {"role": "assignor", "label": "ASSIGNOR", "fields": {...}},
          "notaryRequired": true
        }
      ],
      "initialBlocks": [...],
      "notaryBlocks": [...]
    }

Only the parts that influence parsing and layout are read. ``groupWith`` links
are symmetric and transitive: every connected set of linked blocks becomes one
group, which the layout engine places as a single unit.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

import networkx as nx

from legalpdf.core.core_types import MarkerType, ParsedDocument, SignatureMarker
from legalpdf.signatures.markers import expected_marker_text

logger = logging.getLogger(__name__)

POSITION_STANDALONE = "standalone"
POSITION_SIDE_BY_SIDE = "side-by-side"

_SCHEMA_SECTIONS = (
    ("signatureBlocks", MarkerType.SIGNATURE),
    ("initialBlocks", MarkerType.INITIAL),
    ("notaryBlocks", MarkerType.NOTARY),
)


# =============================================================================
# SCHEMA TYPES
# =============================================================================

@dataclass(frozen=True)
class BlockSpec:
    """
    One declared block from a template.

    Attributes:
        block_id: Declared id (also the marker id).
        marker_type: Section the entry was declared in.
        marker: Literal marker text the generator is expected to emit.
        role: Party role key (e.g., "assignor").
        label: Display label (e.g., "ASSIGNOR").
        fields: Declared party field names, in declaration order.
        position: "standalone" or "side-by-side".
        group_with: Id of the block this one renders beside.
        prevent_page_break: Template asks for the block to stay on one page.
        notary_required: Template asks for notarial acknowledgment.
    """
    block_id: str
    marker_type: MarkerType
    marker: str
    role: Optional[str] = None
    label: Optional[str] = None
    fields: Tuple[str, ...] = ()
    position: str = POSITION_STANDALONE
    group_with: Optional[str] = None
    prevent_page_break: bool = False
    notary_required: bool = False

    @property
    def is_side_by_side(self) -> bool:
        return self.position == POSITION_SIDE_BY_SIDE


@dataclass(frozen=True)
class SignatureSchema:
    """All blocks a template declares, in declaration order."""
    blocks: Tuple[BlockSpec, ...] = ()

    def block(self, block_id: str) -> Optional[BlockSpec]:
        return next((b for b in self.blocks if b.block_id == block_id), None)

    def block_for_marker(self, marker: Union[SignatureMarker, str]) -> Optional[BlockSpec]:
        """
        Look up the declared block for a marker.

        Args:
            marker: A scanned marker or its literal text.

        Returns:
            Matching BlockSpec, or None if the template does not declare it.
        """
        text = marker.full_marker_text if isinstance(marker, SignatureMarker) else marker
        return next((b for b in self.blocks if b.marker == text), None)

    def group_graph(self) -> nx.Graph:
        """Undirected graph of declared blocks with an edge per ``groupWith`` link."""
        graph = nx.Graph()
        known = {b.block_id for b in self.blocks}
        graph.add_nodes_from(known)

        for spec in self.blocks:
            if not spec.group_with:
                continue
            if spec.group_with not in known:
                logger.warning(
                    f"Block {spec.block_id!r} groups with undeclared block {spec.group_with!r}"
                )
                continue
            graph.add_edge(spec.block_id, spec.group_with)

        return graph

    def group_ids(self) -> Dict[str, str]:
        """
        Map every grouped block id to its group id.

        Blocks without links are absent from the result. A group id is the
        sorted member ids joined with "+".

        Example:
            >>> schema = load_signature_schema({"signatureBlocks": [
            ...     {"id": "a-sig", "layout": {"position": "side-by-side", "groupWith": "b-sig"}},
            ...     {"id": "b-sig"},
            ... ]})
            >>> schema.group_ids()
            {'a-sig': 'a-sig+b-sig', 'b-sig': 'a-sig+b-sig'}
        """
        groups: Dict[str, str] = {}
        for component in nx.connected_components(self.group_graph()):
            if len(component) < 2:
                continue
            group_id = "+".join(sorted(component))
            for block_id in component:
                groups[block_id] = group_id
        return dict(sorted(groups.items()))

    def is_parallel(self, group_id: str) -> bool:
        """True if any member of the group is declared side-by-side."""
        members = group_id.split("+")
        return any(
            spec.is_side_by_side
            for spec in self.blocks
            if spec.block_id in members
        )

    def missing_markers(self, parsed: ParsedDocument) -> List[BlockSpec]:
        """Declared blocks whose marker never appeared in the parsed text."""
        found = {b.marker.full_marker_text for b in parsed.signature_blocks}
        missing = [spec for spec in self.blocks if spec.marker not in found]
        if missing:
            logger.debug(f"{len(missing)} declared blocks missing from text: "
                         f"{[m.block_id for m in missing]}")
        return missing


# =============================================================================
# LOADING
# =============================================================================

def _read_layout(layout: Any) -> Tuple[str, Optional[str], bool]:
    """Normalize the string-or-object ``layout`` entry."""
    if isinstance(layout, str):
        return layout, None, False
    if isinstance(layout, Mapping):
        return (
            layout.get("position", POSITION_STANDALONE),
            layout.get("groupWith"),
            bool(layout.get("preventPageBreak", False)),
        )
    return POSITION_STANDALONE, None, False


def _read_fields(entry: Mapping[str, Any]) -> Tuple[str, ...]:
    party_fields = (entry.get("party") or {}).get("fields")
    if isinstance(party_fields, Mapping):
        return tuple(party_fields.keys())
    # Office-action style: "fields": [{"id": "name", ...}]
    if isinstance(entry.get("fields"), list):
        return tuple(f["id"] for f in entry["fields"] if isinstance(f, Mapping) and "id" in f)
    return ()


def _read_block(entry: Mapping[str, Any], marker_type: MarkerType) -> Optional[BlockSpec]:
    block_id = entry.get("id")
    if not block_id:
        logger.warning(f"Skipping {marker_type.value} block entry without id: {entry!r}")
        return None

    party = entry.get("party") or {}
    placement = entry.get("placement") or {}
    position, group_with, prevent_page_break = _read_layout(entry.get("layout"))

    return BlockSpec(
        block_id=block_id,
        marker_type=marker_type,
        marker=placement.get("marker") or expected_marker_text(marker_type, block_id),
        role=party.get("role"),
        label=party.get("label") or entry.get("label"),
        fields=_read_fields(entry),
        position=position,
        group_with=group_with,
        prevent_page_break=prevent_page_break,
        notary_required=bool(entry.get("notaryRequired", False)),
    )


def load_signature_schema(template: Optional[Mapping[str, Any]]) -> SignatureSchema:
    """
    Read the signature-related declarations of a template dict.

    Args:
        template: Parsed template JSON (already loaded by the caller).

    Returns:
        SignatureSchema with blocks in declaration order; empty if the
        template declares none.
    """
    if not template:
        return SignatureSchema()

    blocks = []
    for key, marker_type in _SCHEMA_SECTIONS:
        for entry in template.get(key) or ():
            spec = _read_block(entry, marker_type)
            if spec is not None:
                blocks.append(spec)

    logger.debug(f"Loaded signature schema with {len(blocks)} blocks")
    return SignatureSchema(blocks=tuple(blocks))
