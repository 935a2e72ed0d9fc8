"""Deterministic CSS file addressing and writing.

Layout: <base_dir>/<root id, ":" → "_">/<id>_<name>.css, with every
non-alphanumeric character of id and name replaced by "_". Re-running with
the same input overwrites the same files.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Iterable, List

from ..models import StyleRecord
from .css_generator import generate_css_file_content, sanitize_identifier

logger = logging.getLogger(__name__)

DEFAULT_BASE_DIR = "css"


class CSSWriteError(Exception):
    """Raised when a CSS file or its directory cannot be written."""

    def __init__(self, message: str, path: str):
        super().__init__(message)
        self.path = path


def sanitize_root_id(root_id: str) -> str:
    """Map ":" to "_", e.g. "16650:538" → "16650_538"."""
    return root_id.replace(":", "_")


def ensure_directory_exists(dir_path: str) -> None:
    os.makedirs(dir_path, exist_ok=True)


def generate_file_name(node_id: str, name: str) -> str:
    return f"{sanitize_identifier(node_id)}_{sanitize_identifier(name)}.css"


def generate_file_path(
    root_id: str,
    node_id: str,
    name: str,
    base_dir: str = DEFAULT_BASE_DIR,
) -> str:
    return os.path.join(base_dir, sanitize_root_id(root_id), generate_file_name(node_id, name))


def write_css_file(file_path: str, content: str) -> None:
    """Write content, creating parent directories; existing files are overwritten."""
    try:
        ensure_directory_exists(os.path.dirname(file_path) or ".")
        with open(file_path, "w", encoding="utf-8") as f:
            f.write(content)
    except OSError as e:
        raise CSSWriteError(f"Failed to write CSS file {file_path}: {e}", file_path) from e


def create_css_file(
    root_id: str,
    node_id: str,
    name: str,
    styles: Dict[str, Any],
    base_dir: str = DEFAULT_BASE_DIR,
) -> str:
    """Generate and write one node's CSS file; returns its path."""
    file_path = generate_file_path(root_id, node_id, name, base_dir)
    content = generate_css_file_content(node_id, name, styles)
    write_css_file(file_path, content)
    logger.debug(f"create_css_file: {node_id} → {file_path}")
    return file_path


def create_css_files(
    style_nodes: Iterable[StyleRecord],
    base_dir: str = DEFAULT_BASE_DIR,
) -> List[str]:
    """Write one CSS file per record, in order.

    The first failure aborts the batch; files already written are kept.
    """
    file_paths: List[str] = []
    for record in style_nodes:
        file_paths.append(create_css_file(
            record.root_id,
            record.id,
            record.name,
            record.raw_styles,
            base_dir,
        ))
    logger.info(f"create_css_files: {len(file_paths)} files under {base_dir}")
    return file_paths
