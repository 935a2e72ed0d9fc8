"""Figma node → NodeStyleInfo extraction.

Copies a closed set of recognized style fields from a raw Figma node tree
into a new tree of the same shape. A field is copied if and only if the key
is present on the source node with a non-null value; falsy values such as
0, "", False and [] are copied. Composite fields (size, constraints, text
style, style references) are rebuilt sub-field by sub-field so unknown
sub-keys never leak into the output.

Lists and opaque blobs (geometry, vector networks, effects) are referenced,
not deep-copied: callers must not mutate them after extraction.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

from ..models import NodeStyleInfo
from .style_parser import StyleParseError

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Recognized fields, by category
# ---------------------------------------------------------------------------

GEOMETRY_FIELDS = ("absoluteBoundingBox", "relativeTransform", "rotation")
FILL_FIELDS = ("backgroundColor", "fills", "fillGeometry")
STROKE_FIELDS = (
    "strokes", "strokeWeight", "strokeAlign", "strokeCap", "strokeJoin",
    "strokeMiterLimit", "strokeGeometry", "dashPattern",
)
CORNER_FIELDS = ("cornerRadius", "rectangleCornerRadii", "cornerSmoothing")
EFFECT_FIELDS = ("effects",)
BLEND_FIELDS = ("opacity", "blendMode", "isMask", "isMaskOutline")
TEXT_FIELDS = ("characters", "characterStyleOverrides", "styleOverrideTable")
LAYOUT_FIELDS = (
    "layoutMode", "layoutAlign", "layoutGrow", "layoutPositioning",
    "primaryAxisAlignItems", "counterAxisAlignItems",
    "primaryAxisSizingMode", "counterAxisSizingMode",
    "paddingLeft", "paddingRight", "paddingTop", "paddingBottom",
    "itemSpacing", "counterAxisSpacing", "layoutWrap",
)
SIZE_CONSTRAINT_FIELDS = ("minWidth", "maxWidth", "minHeight", "maxHeight")
CLIP_FIELDS = ("clipsContent", "overflowDirection")
GRID_FIELDS = ("layoutGrids",)
EXPORT_FIELDS = ("exportSettings",)
VISIBILITY_FIELDS = ("visible", "locked")
IMAGE_FIELDS = ("imageRef", "preserveRatio")
COMPONENT_FIELDS = (
    "componentId", "componentProperties", "componentPropertyReferences", "overrides",
)
PROTOTYPE_FIELDS = (
    "transitionNodeID", "transitionDuration", "transitionEasing", "reactions",
)
VECTOR_FIELDS = ("vectorNetwork", "handleMirroring")
BOOLEAN_FIELDS = ("booleanOperation",)

# Flat fields in output order
SCALAR_FIELDS: Tuple[str, ...] = (
    GEOMETRY_FIELDS
    + FILL_FIELDS
    + STROKE_FIELDS
    + CORNER_FIELDS
    + EFFECT_FIELDS
    + BLEND_FIELDS
    + TEXT_FIELDS
    + LAYOUT_FIELDS
    + SIZE_CONSTRAINT_FIELDS
    + CLIP_FIELDS
    + GRID_FIELDS
    + EXPORT_FIELDS
    + VISIBILITY_FIELDS
    + IMAGE_FIELDS
    + COMPONENT_FIELDS
    + PROTOTYPE_FIELDS
    + VECTOR_FIELDS
    + BOOLEAN_FIELDS
)

# Composite fields: key → recognized sub-keys
SIZE_SUBFIELDS = ("width", "height")
CONSTRAINT_SUBFIELDS = ("horizontal", "vertical")
TEXT_STYLE_SUBFIELDS = (
    "fontFamily", "fontPostScriptName", "fontSize", "fontWeight",
    "letterSpacing", "lineHeightPx", "lineHeightPercent",
    "lineHeightPercentFontSize", "lineHeightUnit",
    "textAlignHorizontal", "textAlignVertical", "textCase",
    "textDecoration", "paragraphIndent", "paragraphSpacing", "textAutoResize",
)
STYLE_REFERENCE_SUBFIELDS = ("fill", "stroke", "text", "effect", "grid")

COMPOSITE_FIELDS: Dict[str, Tuple[str, ...]] = {
    "size": SIZE_SUBFIELDS,
    "constraints": CONSTRAINT_SUBFIELDS,
    "style": TEXT_STYLE_SUBFIELDS,
    "styles": STYLE_REFERENCE_SUBFIELDS,
}


def has_field(source: Dict[str, Any], key: str) -> bool:
    """Presence check: key exists and is not null."""
    return key in source and source[key] is not None


def _copy_composite(value: Any, subfields: Tuple[str, ...]) -> Optional[Dict[str, Any]]:
    """Rebuild a composite field from its recognized sub-keys only."""
    if not isinstance(value, dict):
        return None
    return {key: value[key] for key in subfields if has_field(value, key)}


def _extract_own_fields(node: Dict[str, Any]) -> NodeStyleInfo:
    """Copy one node's recognized fields, without recursing."""
    info: NodeStyleInfo = {
        "id": node.get("id", ""),
        "name": node.get("name", ""),
        "type": node.get("type", ""),
    }

    for key in SCALAR_FIELDS:
        if has_field(node, key):
            info[key] = node[key]  # type: ignore[literal-required]

    for key, subfields in COMPOSITE_FIELDS.items():
        if has_field(node, key):
            composite = _copy_composite(node[key], subfields)
            if composite is not None:
                info[key] = composite  # type: ignore[literal-required]

    return info


def extract_node_styles(node: Dict[str, Any]) -> NodeStyleInfo:
    """Extract NodeStyleInfo for a node and, recursively, all its descendants.

    The result has the same branching and child order as the input. A node
    without a "children" list is a leaf. Traversal uses an explicit stack, so
    arbitrarily deep trees do not hit the recursion limit.

    Raises:
        StyleParseError: if the same node object is reached twice.
    """
    root = _extract_own_fields(node)
    stack: List[Tuple[Dict[str, Any], NodeStyleInfo]] = [(node, root)]
    visited = {id(node)}

    while stack:
        source, target = stack.pop()
        children = source.get("children")
        if not isinstance(children, list):
            continue

        extracted_children: List[NodeStyleInfo] = []
        for child in children:
            if not isinstance(child, dict):
                raise StyleParseError(
                    f"Malformed child of node '{source.get('id', '?')}': expected an "
                    f"object, got {type(child).__name__}"
                )
            if id(child) in visited:
                raise StyleParseError(
                    f"Node '{child.get('id', '?')}' appears more than once in the tree"
                )
            visited.add(id(child))
            child_info = _extract_own_fields(child)
            extracted_children.append(child_info)
            stack.append((child, child_info))
        target["children"] = extracted_children

    logger.debug(f"extract_node_styles: {node.get('id')} → {len(visited)} nodes")
    return root


def extract_file_styles(
    document: Dict[str, Any],
    components: Optional[Dict[str, Any]] = None,
    styles: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Extract a whole document plus the file's component and style tables."""
    return {
        "documentStyles": extract_node_styles(document),
        "components": components or {},
        "styles": styles or {},
    }
