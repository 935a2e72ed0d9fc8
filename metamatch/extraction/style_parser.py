"""Flatten a Figma style tree into per-node records grouped by root.

Input is a stored style snapshot whose "styles" key holds the root node.
Every node carrying both an id and a name becomes a StyleRecord tagged with
the id of that root; nodes without them are skipped but still traversed.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from ..models import StyleRecord

logger = logging.getLogger(__name__)


class StyleParseError(Exception):
    """Raised when a style snapshot or node tree is malformed."""


def flatten_tree(node: Dict[str, Any], root_id: str) -> List[StyleRecord]:
    """Pre-order flattening of the tree rooted at node.

    root_id is threaded unchanged to every descendant: nested frames are not
    re-rooted.
    """
    results: List[StyleRecord] = []
    stack = [node]
    visited = set()

    while stack:
        current = stack.pop()
        if not isinstance(current, dict):
            raise StyleParseError(
                f"Malformed node under root '{root_id}': expected an object, "
                f"got {type(current).__name__}"
            )
        if id(current) in visited:
            raise StyleParseError(
                f"Node '{current.get('id', '?')}' appears more than once in the tree"
            )
        visited.add(id(current))

        node_id = current.get("id")
        name = current.get("name")
        if node_id and name:
            results.append(StyleRecord(
                id=node_id,
                name=name,
                root_id=root_id,
                raw_styles=current,
            ))

        children = current.get("children")
        if isinstance(children, list):
            # Reversed so the first child is popped first
            stack.extend(reversed(children))

    return results


def parse_style_nodes(json_data: Dict[str, Any]) -> List[StyleRecord]:
    """Parse every style node from a snapshot's "styles" root.

    Raises:
        StyleParseError: if the snapshot has no "styles" node, the root has
            no id, or a node in the tree is not an object.
    """
    root_node = json_data.get("styles") if isinstance(json_data, dict) else None
    if not isinstance(root_node, dict):
        raise StyleParseError("JSON data does not contain a styles root node")

    root_id = root_node.get("id")
    if not isinstance(root_id, str) or not root_id:
        raise StyleParseError("Styles root node has no id")

    records = flatten_tree(root_node, root_id)
    logger.info(f"parse_style_nodes: root={root_id}, records={len(records)}")
    return records


def group_by_root_id(style_nodes: List[StyleRecord]) -> Dict[str, List[StyleRecord]]:
    """Partition records by root_id, keeping encounter order within each group."""
    grouped: Dict[str, List[StyleRecord]] = {}
    for record in style_nodes:
        grouped.setdefault(record.root_id, []).append(record)
    return grouped


def count_nodes(node: Dict[str, Any]) -> int:
    """Count every node in a subtree, with or without id and name."""
    count = 0
    stack = [node]
    while stack:
        current = stack.pop()
        if not isinstance(current, dict):
            continue
        count += 1
        children = current.get("children")
        if isinstance(children, list):
            stack.extend(children)
    return count
