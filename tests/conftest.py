"""Shared fixtures: sample Figma node trees and style snapshots."""

import copy

import pytest


@pytest.fixture
def rich_node():
    """A FRAME node carrying most recognized style fields, plus unknown ones."""
    return {
        "id": "16650:538",
        "name": "Header Bar",
        "type": "FRAME",
        "visible": True,
        "locked": False,
        "size": {"width": 393, "height": 92, "unknownSub": 1},
        "absoluteBoundingBox": {"x": 80, "y": 318, "width": 393, "height": 92},
        "relativeTransform": [[1, 0, 80], [0, 1, 318]],
        "rotation": 0,
        "backgroundColor": {"r": 1, "g": 1, "b": 1, "a": 1},
        "fills": [{"type": "SOLID", "color": {"r": 1, "g": 0, "b": 0, "a": 1}}],
        "strokes": [],
        "strokeWeight": 0,
        "strokeAlign": "INSIDE",
        "cornerRadius": 0,
        "effects": [],
        "opacity": 1,
        "blendMode": "PASS_THROUGH",
        "layoutMode": "HORIZONTAL",
        "primaryAxisAlignItems": "SPACE_BETWEEN",
        "counterAxisAlignItems": "CENTER",
        "paddingLeft": 16,
        "paddingRight": 16,
        "paddingTop": 0,
        "paddingBottom": 0,
        "itemSpacing": 8,
        "constraints": {"horizontal": "LEFT", "vertical": "TOP", "extra": "x"},
        "clipsContent": False,
        "styles": {"fill": "S:abc", "unknownRef": "S:zzz"},
        "exportSettings": [],
        "pluginData": {"should": "not leak"},
        "scrollBehavior": "SCROLLS",
        "children": [
            {
                "id": "16650:539",
                "name": "Title",
                "type": "TEXT",
                "characters": "",
                "style": {
                    "fontFamily": "Inter",
                    "fontSize": 16,
                    "fontWeight": 600,
                    "letterSpacing": 0,
                    "lineHeightPx": 22.5,
                    "textAlignHorizontal": "CENTER",
                    "hyperlink": {"url": "https://example.test"},
                },
            },
            {
                "id": "16650:540",
                "name": "Icon",
                "type": "VECTOR",
                "vectorNetwork": {"vertices": [], "segments": []},
                "booleanOperation": "UNION",
                "children": [],
            },
        ],
    }


@pytest.fixture
def styles_snapshot():
    """Stored node snapshot with a nested tree under the "styles" root."""
    return {
        "metadata": {"fileId": "AbC123", "fileName": "Test"},
        "styles": {
            "id": "1:2",
            "name": "Root",
            "type": "FRAME",
            "children": [
                {
                    "id": "1:3",
                    "name": "Child",
                    "type": "RECTANGLE",
                    "fills": [{"type": "SOLID", "color": {"r": 0, "g": 0, "b": 1, "a": 1}}],
                },
            ],
        },
    }


@pytest.fixture
def deep_snapshot():
    """Snapshot with nesting, an anonymous wrapper node, and duplicate names."""
    return {
        "styles": {
            "id": "10:1",
            "name": "Page",
            "type": "FRAME",
            "children": [
                {
                    "id": "10:2",
                    "name": "Card",
                    "type": "FRAME",
                    "children": [
                        {"id": "10:3", "name": "Label", "type": "TEXT"},
                        {"id": "10:4", "name": "Label", "type": "TEXT"},
                    ],
                },
                {
                    "type": "GROUP",
                    "children": [
                        {"id": "10:5", "name": "Nested", "type": "RECTANGLE"},
                    ],
                },
                {"id": "10:6", "name": "Footer", "type": "FRAME"},
            ],
        },
    }


@pytest.fixture
def copy_of():
    return copy.deepcopy
