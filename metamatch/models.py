"""Shared types: flattened style records, normalized styles, file metadata."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, TypedDict


@dataclass
class StyleRecord:
    """One flattened node, tagged with the id of its flattening root.

    raw_styles is the source node dict itself, not a copy.
    """
    id: str
    name: str
    root_id: str
    raw_styles: Dict[str, Any]


class Size(TypedDict, total=False):
    width: float
    height: float


class Constraints(TypedDict, total=False):
    horizontal: str
    vertical: str


class StyleReferences(TypedDict, total=False):
    fill: str
    stroke: str
    text: str
    effect: str
    grid: str


class TextStyle(TypedDict, total=False):
    fontFamily: str
    fontPostScriptName: str
    fontSize: float
    fontWeight: float
    letterSpacing: float
    lineHeightPx: float
    lineHeightPercent: float
    lineHeightPercentFontSize: float
    lineHeightUnit: str
    textAlignHorizontal: str
    textAlignVertical: str
    textCase: str
    textDecoration: str
    paragraphIndent: float
    paragraphSpacing: float
    textAutoResize: str


class NodeStyleInfo(TypedDict, total=False):
    """Closed-schema style extraction of one node and its descendants.

    A key is present only if the source node carried it.
    """
    id: str
    name: str
    type: str

    # Geometry
    size: Size
    absoluteBoundingBox: Dict[str, float]
    relativeTransform: List[List[float]]
    rotation: float

    # Background and fills
    backgroundColor: Dict[str, float]
    fills: List[Dict[str, Any]]
    fillGeometry: List[Any]

    # Strokes
    strokes: List[Dict[str, Any]]
    strokeWeight: float
    strokeAlign: str
    strokeCap: str
    strokeJoin: str
    strokeMiterLimit: float
    strokeGeometry: List[Any]
    dashPattern: List[float]

    # Corners
    cornerRadius: float
    rectangleCornerRadii: List[float]
    cornerSmoothing: float

    # Effects
    effects: List[Dict[str, Any]]

    # Opacity and blending
    opacity: float
    blendMode: str
    isMask: bool
    isMaskOutline: bool

    # Text
    characters: str
    style: TextStyle
    characterStyleOverrides: List[int]
    styleOverrideTable: Dict[str, Any]

    # Auto layout
    layoutMode: str
    layoutAlign: str
    layoutGrow: float
    layoutPositioning: str
    primaryAxisAlignItems: str
    counterAxisAlignItems: str
    primaryAxisSizingMode: str
    counterAxisSizingMode: str
    paddingLeft: float
    paddingRight: float
    paddingTop: float
    paddingBottom: float
    itemSpacing: float
    counterAxisSpacing: float
    layoutWrap: str

    # Sizing constraints
    minWidth: float
    maxWidth: float
    minHeight: float
    maxHeight: float

    # Alignment constraints
    constraints: Constraints

    # Clipping and overflow
    clipsContent: bool
    overflowDirection: str

    layoutGrids: List[Dict[str, Any]]
    exportSettings: List[Dict[str, Any]]

    # Visibility
    visible: bool
    locked: bool

    # Image
    imageRef: str
    preserveRatio: bool

    # Components and instances
    componentId: str
    componentProperties: Dict[str, Any]
    componentPropertyReferences: Dict[str, str]
    overrides: List[Dict[str, Any]]

    # Prototype
    transitionNodeID: str
    transitionDuration: float
    transitionEasing: str
    reactions: List[Dict[str, Any]]

    styles: StyleReferences

    # Vector
    vectorNetwork: Dict[str, Any]
    handleMirroring: str

    booleanOperation: str

    children: List["NodeStyleInfo"]


@dataclass
class FileMetadata:
    """Provenance of a stored style snapshot."""
    file_id: str
    file_name: str
    last_modified: str
    fetched_at: str
    version: Optional[str] = None
    thumbnail_url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "fileId": self.file_id,
            "fileName": self.file_name,
            "lastModified": self.last_modified,
            "fetchedAt": self.fetched_at,
        }
        if self.version is not None:
            data["version"] = self.version
        if self.thumbnail_url is not None:
            data["thumbnailUrl"] = self.thumbnail_url
        return data
