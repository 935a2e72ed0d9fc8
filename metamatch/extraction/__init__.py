"""Style extraction: normalization of Figma nodes and tree flattening."""

from .style_extractor import extract_file_styles, extract_node_styles
from .style_parser import (
    StyleParseError,
    count_nodes,
    flatten_tree,
    group_by_root_id,
    parse_style_nodes,
)

__all__ = [
    "StyleParseError",
    "count_nodes",
    "extract_file_styles",
    "extract_node_styles",
    "flatten_tree",
    "group_by_root_id",
    "parse_style_nodes",
]
