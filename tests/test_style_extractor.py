"""Tests for metamatch.extraction.style_extractor."""

import pytest

from metamatch.extraction.style_extractor import (
    COMPOSITE_FIELDS,
    SCALAR_FIELDS,
    extract_file_styles,
    extract_node_styles,
)
from metamatch.extraction.style_parser import StyleParseError


class TestPresence:

    def test_identity_fields_always_present(self):
        result = extract_node_styles({"id": "1:1", "name": "N", "type": "FRAME"})
        assert result == {"id": "1:1", "name": "N", "type": "FRAME"}

    @pytest.mark.parametrize("key,value", [
        ("cornerRadius", 0),
        ("rotation", 0),
        ("opacity", 0),
        ("clipsContent", False),
        ("visible", False),
        ("characters", ""),
        ("imageRef", ""),
        ("strokes", []),
        ("effects", []),
        ("paddingTop", 0),
        ("layoutGrow", 0),
    ])
    def test_falsy_values_are_copied(self, key, value):
        result = extract_node_styles({"id": "1", "name": "N", "type": "FRAME", key: value})
        assert key in result
        assert result[key] == value

    def test_absent_fields_are_omitted(self):
        result = extract_node_styles({"id": "1", "name": "N", "type": "RECTANGLE"})
        for key in SCALAR_FIELDS + tuple(COMPOSITE_FIELDS):
            assert key not in result
        assert "children" not in result

    def test_null_values_are_omitted(self):
        result = extract_node_styles({
            "id": "1", "name": "N", "type": "FRAME",
            "cornerRadius": None, "style": None,
        })
        assert "cornerRadius" not in result
        assert "style" not in result

    def test_every_present_scalar_is_value_preserved(self, rich_node):
        result = extract_node_styles(rich_node)
        for key in SCALAR_FIELDS:
            if key in rich_node:
                assert result[key] == rich_node[key], key

    def test_unknown_top_level_keys_dropped(self, rich_node):
        result = extract_node_styles(rich_node)
        assert "pluginData" not in result
        assert "scrollBehavior" not in result


class TestCompositeFields:

    def test_text_style_copied_field_by_field(self, rich_node):
        title = extract_node_styles(rich_node)["children"][0]
        assert title["style"] == {
            "fontFamily": "Inter",
            "fontSize": 16,
            "fontWeight": 600,
            "letterSpacing": 0,
            "lineHeightPx": 22.5,
            "textAlignHorizontal": "CENTER",
        }

    def test_text_style_is_new_dict(self, rich_node):
        title = extract_node_styles(rich_node)["children"][0]
        assert title["style"] is not rich_node["children"][0]["style"]

    def test_constraints_drop_unknown_subkeys(self, rich_node):
        result = extract_node_styles(rich_node)
        assert result["constraints"] == {"horizontal": "LEFT", "vertical": "TOP"}

    def test_size_and_style_references(self, rich_node):
        result = extract_node_styles(rich_node)
        assert result["size"] == {"width": 393, "height": 92}
        assert result["styles"] == {"fill": "S:abc"}

    def test_empty_composite_kept(self):
        result = extract_node_styles({"id": "1", "name": "N", "type": "TEXT", "style": {}})
        assert result["style"] == {}


class TestTreeShape:

    def test_children_mirror_input(self, rich_node):
        result = extract_node_styles(rich_node)
        assert [c["id"] for c in result["children"]] == ["16650:539", "16650:540"]
        # TEXT leaf without a children key
        assert "children" not in result["children"][0]
        # VECTOR with an empty children list
        assert result["children"][1]["children"] == []

    def test_opaque_blobs_referenced(self, rich_node):
        result = extract_node_styles(rich_node)
        vector = result["children"][1]
        assert vector["vectorNetwork"] is rich_node["children"][1]["vectorNetwork"]
        assert vector["booleanOperation"] == "UNION"
        assert result["fills"] is rich_node["fills"]

    def test_result_independent_of_input_structure(self, rich_node):
        result = extract_node_styles(rich_node)
        result["children"].append({"id": "x"})
        result["name"] = "Changed"
        assert len(rich_node["children"]) == 2
        assert rich_node["name"] == "Header Bar"

    def test_deep_nesting(self):
        root = {"id": "0", "name": "n0", "type": "FRAME"}
        current = root
        for i in range(1, 3000):
            child = {"id": str(i), "name": f"n{i}", "type": "FRAME", "opacity": 0.5}
            current["children"] = [child]
            current = child

        result = extract_node_styles(root)

        depth = 0
        node = result
        while "children" in node:
            node = node["children"][0]
            depth += 1
        assert depth == 2999
        assert node["opacity"] == 0.5

    def test_cycle_raises(self):
        node = {"id": "1", "name": "Loop", "type": "FRAME"}
        node["children"] = [node]
        with pytest.raises(StyleParseError):
            extract_node_styles(node)

    def test_null_child_raises(self):
        node = {"id": "1", "name": "Frame", "type": "FRAME", "children": [None, None]}
        with pytest.raises(StyleParseError, match="expected an object"):
            extract_node_styles(node)


class TestExtractFileStyles:

    def test_defaults_empty_tables(self, rich_node):
        result = extract_file_styles(rich_node)
        assert result["documentStyles"]["id"] == "16650:538"
        assert result["components"] == {}
        assert result["styles"] == {}

    def test_passes_tables_through(self, rich_node):
        components = {"1:9": {"name": "Button"}}
        styles = {"S:abc": {"name": "Brand", "styleType": "FILL"}}
        result = extract_file_styles(rich_node, components, styles)
        assert result["components"] is components
        assert result["styles"] is styles
