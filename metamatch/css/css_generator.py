"""Figma style bag → CSS declarations.

One converter per style category, each returning an ordered list of
declaration lines. generate_css() concatenates them in a fixed order
(background → fills → strokes → radius → layout → text → opacity) inside a
class block named after the node.

Only SOLID fills and strokes are rendered; gradients and images are skipped.
Alignment values outside the lookup tables produce no declaration.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

_NON_ALNUM_RE = re.compile(r"[^a-zA-Z0-9]")

INDENT = "  "
CLASS_PREFIX = "figma-"
CLASS_SUFFIX = "_class"

# counterAxisAlignItems → align-items
ALIGN_ITEMS_MAP = {
    "CENTER": "center",
    "MIN": "flex-start",
    "MAX": "flex-end",
    "BASELINE": "baseline",
}

# primaryAxisAlignItems → justify-content
JUSTIFY_CONTENT_MAP = {
    "MIN": "flex-start",
    "CENTER": "center",
    "MAX": "flex-end",
    "SPACE_BETWEEN": "space-between",
}

# layoutMode → flex-direction
FLEX_DIRECTION_MAP = {
    "HORIZONTAL": "row",
    "VERTICAL": "column",
}

TEXT_ALIGN_MAP = {
    "LEFT": "left",
    "CENTER": "center",
    "RIGHT": "right",
    "JUSTIFIED": "justify",
}

FALLBACK_FONT_FAMILY = "sans-serif"


def _present(styles: Dict[str, Any], key: str) -> bool:
    return key in styles and styles[key] is not None


def format_number(value: Any) -> str:
    """Render a number as JSON writes it: 1.0 → "1", 0.5 → "0.5"."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _decl(prop: str, value: str) -> str:
    return f"{INDENT}{prop}: {value};"


def _px(value: Any) -> str:
    return f"{format_number(value)}px"


def sanitize_identifier(value: str) -> str:
    """Replace every non-alphanumeric character with "_"."""
    return _NON_ALNUM_RE.sub("_", value)


def rgb_to_css(color: Dict[str, Any]) -> str:
    """Convert a Figma 0-1 RGBA color to a CSS rgba() string.

    Channels are scaled to 0-255 and rounded; alpha is kept as given.
    """
    r = round(color.get("r", 0) * 255)
    g = round(color.get("g", 0) * 255)
    b = round(color.get("b", 0) * 255)
    a = color.get("a", 1)
    return f"rgba({r}, {g}, {b}, {format_number(a)})"


def _solid_colors(paints: Any) -> List[Dict[str, Any]]:
    if not isinstance(paints, list):
        return []
    return [
        paint["color"]
        for paint in paints
        if isinstance(paint, dict) and paint.get("type") == "SOLID" and paint.get("color")
    ]


# ---------------------------------------------------------------------------
# Category converters
# ---------------------------------------------------------------------------


def convert_background_color(styles: Dict[str, Any]) -> List[str]:
    if not _present(styles, "backgroundColor"):
        return []
    return [_decl("background-color", rgb_to_css(styles["backgroundColor"]))]


def convert_fills(styles: Dict[str, Any]) -> List[str]:
    return [
        _decl("background", rgb_to_css(color))
        for color in _solid_colors(styles.get("fills"))
    ]


def convert_strokes(styles: Dict[str, Any]) -> List[str]:
    width = styles["strokeWeight"] if _present(styles, "strokeWeight") else 1
    return [
        _decl("border", f"{_px(width)} solid {rgb_to_css(color)}")
        for color in _solid_colors(styles.get("strokes"))
    ]


def convert_border_radius(styles: Dict[str, Any]) -> List[str]:
    if not _present(styles, "cornerRadius"):
        return []
    return [_decl("border-radius", _px(styles["cornerRadius"]))]


def convert_layout(styles: Dict[str, Any]) -> List[str]:
    """Size, auto-layout flex container, padding, gap and alignment."""
    rules: List[str] = []

    bbox = styles.get("absoluteBoundingBox")
    if isinstance(bbox, dict):
        if _present(bbox, "width"):
            rules.append(_decl("width", _px(bbox["width"])))
        if _present(bbox, "height"):
            rules.append(_decl("height", _px(bbox["height"])))

    layout_mode = styles.get("layoutMode")
    if _present(styles, "layoutMode") and layout_mode:
        rules.append(_decl("display", "flex"))
        direction = FLEX_DIRECTION_MAP.get(layout_mode)
        if direction:
            rules.append(_decl("flex-direction", direction))

    for key, prop in (
        ("paddingLeft", "padding-left"),
        ("paddingRight", "padding-right"),
        ("paddingTop", "padding-top"),
        ("paddingBottom", "padding-bottom"),
        ("itemSpacing", "gap"),
    ):
        if _present(styles, key):
            rules.append(_decl(prop, _px(styles[key])))

    align = ALIGN_ITEMS_MAP.get(styles.get("counterAxisAlignItems") or "")
    if align:
        rules.append(_decl("align-items", align))

    justify = JUSTIFY_CONTENT_MAP.get(styles.get("primaryAxisAlignItems") or "")
    if justify:
        rules.append(_decl("justify-content", justify))

    return rules


def convert_text_style(styles: Dict[str, Any]) -> List[str]:
    text_style = styles.get("style")
    if not isinstance(text_style, dict):
        return []

    rules: List[str] = []
    if text_style.get("fontFamily"):
        rules.append(_decl(
            "font-family", f"'{text_style['fontFamily']}', {FALLBACK_FONT_FAMILY}"
        ))
    if _present(text_style, "fontSize"):
        rules.append(_decl("font-size", _px(text_style["fontSize"])))
    if _present(text_style, "fontWeight"):
        rules.append(_decl("font-weight", format_number(text_style["fontWeight"])))
    if _present(text_style, "lineHeightPx"):
        rules.append(_decl("line-height", _px(text_style["lineHeightPx"])))
    if _present(text_style, "letterSpacing"):
        rules.append(_decl("letter-spacing", _px(text_style["letterSpacing"])))

    align = TEXT_ALIGN_MAP.get(text_style.get("textAlignHorizontal") or "")
    if align:
        rules.append(_decl("text-align", align))

    return rules


def convert_opacity(styles: Dict[str, Any]) -> List[str]:
    if not _present(styles, "opacity") or styles["opacity"] == 1:
        return []
    return [_decl("opacity", format_number(styles["opacity"]))]


CONVERTERS: List[Callable[[Dict[str, Any]], List[str]]] = [
    convert_background_color,
    convert_fills,
    convert_strokes,
    convert_border_radius,
    convert_layout,
    convert_text_style,
    convert_opacity,
]


# ---------------------------------------------------------------------------
# Block composition
# ---------------------------------------------------------------------------


def generate_class_name(node_id: str, name: str) -> str:
    """Class name for a node: prefixed so it never starts with a digit.

    "1:2", "Root" → "figma-1_2_Root_class"
    """
    return f"{CLASS_PREFIX}{sanitize_identifier(node_id)}_{sanitize_identifier(name)}{CLASS_SUFFIX}"


def generate_declarations(styles: Dict[str, Any]) -> List[str]:
    declarations: List[str] = []
    for converter in CONVERTERS:
        declarations.extend(converter(styles))
    return declarations


def generate_css(node_id: str, name: str, styles: Dict[str, Any]) -> str:
    """Render one node's styles as a CSS class block."""
    lines = [f".{generate_class_name(node_id, name)} {{"]
    lines.extend(generate_declarations(styles))
    lines.append("}")
    return "\n".join(lines)


def generate_css_file_content(
    node_id: str,
    name: str,
    styles: Dict[str, Any],
    generated_at: Optional[datetime] = None,
) -> str:
    """CSS block preceded by a header comment naming the node."""
    generated_at = generated_at or datetime.now(timezone.utc)
    timestamp = generated_at.isoformat(timespec="milliseconds").replace("+00:00", "Z")
    header = (
        "/**\n"
        f" * CSS for Figma Node: {name}\n"
        f" * Node ID: {node_id}\n"
        f" * Generated at: {timestamp}\n"
        " */\n"
        "\n"
    )
    return header + generate_css(node_id, name, styles) + "\n"
