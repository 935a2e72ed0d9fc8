"""Style snapshot persistence.

Whole-file snapshots are written as compact JSON to bound memory on large
documents; single-node snapshots are pretty-printed.
"""

from __future__ import annotations

import json
import logging
import os
import time
from typing import Any, Dict, List, Optional

from . import settings
from .models import FileMetadata, NodeStyleInfo

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when a snapshot cannot be saved, loaded or listed."""


def _timestamp_ms() -> int:
    return int(time.time() * 1000)


def safe_node_id(node_id: str) -> str:
    """Map ":" and "/" to "-", e.g. "16650:538" → "16650-538"."""
    return node_id.replace("/", "-").replace(":", "-")


class StorageManager:
    """Reads and writes style snapshots under one output directory."""

    def __init__(self, output_dir: Optional[str] = None):
        self._output_dir = os.path.abspath(output_dir or settings.DATA_DIR)

    @property
    def output_dir(self) -> str:
        return self._output_dir

    def initialize(self) -> None:
        try:
            os.makedirs(self._output_dir, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to create storage directory {self._output_dir}: {e}") from e
        logger.info(f"Storage directory ready: {self._output_dir}")

    def save_file_styles(
        self,
        metadata: FileMetadata,
        styles: NodeStyleInfo,
        figma_components: Optional[Dict[str, Any]] = None,
        figma_styles: Optional[Dict[str, Any]] = None,
    ) -> str:
        """Save a whole-file snapshot as compact JSON; returns the file path."""
        data: Dict[str, Any] = {
            "metadata": metadata.to_dict(),
            "styles": styles,
        }
        if figma_components is not None:
            data["figmaComponents"] = figma_components
        if figma_styles is not None:
            data["figmaStyles"] = figma_styles

        filename = f"{settings.FILE_SNAPSHOT_PREFIX}{metadata.file_id}-{_timestamp_ms()}.json"
        filepath = os.path.join(self._output_dir, filename)

        logger.info("Saving file snapshot, large files may take a while...")
        try:
            json_string = json.dumps(data, ensure_ascii=False, separators=(",", ":"))
        except (MemoryError, OverflowError) as e:
            raise StorageError(
                "File data is too large to serialize. Fetch a specific node by ID "
                "instead of the whole file."
            ) from e
        except (TypeError, ValueError) as e:
            raise StorageError(f"Failed to serialize file snapshot: {e}") from e

        try:
            with open(filepath, "w", encoding="utf-8") as f:
                f.write(json_string)
            size_mb = os.path.getsize(filepath) / 1024 / 1024
        except OSError as e:
            raise StorageError(f"Failed to save file snapshot {filepath}: {e}") from e

        logger.info(f"File snapshot saved: {filepath} ({size_mb:.2f} MB)")
        return filepath

    def save_node_styles(self, metadata: FileMetadata, styles: NodeStyleInfo) -> str:
        """Save a single-node snapshot as pretty-printed JSON; returns the file path."""
        data = {
            "metadata": metadata.to_dict(),
            "styles": styles,
        }
        node_id = safe_node_id(styles.get("id", ""))
        filename = (
            f"{settings.NODE_SNAPSHOT_PREFIX}{metadata.file_id}-{node_id}-{_timestamp_ms()}.json"
        )
        filepath = os.path.join(self._output_dir, filename)

        try:
            with open(filepath, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
        except (OSError, TypeError, ValueError) as e:
            raise StorageError(f"Failed to save node snapshot {filepath}: {e}") from e

        logger.info(f"Node snapshot saved: {filepath}")
        return filepath

    def load_data(self, filepath: str) -> Dict[str, Any]:
        try:
            with open(filepath, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            raise StorageError(f"Failed to load snapshot {filepath}: {e}") from e

    def list_saved_files(self) -> List[str]:
        """JSON snapshot file names in the output directory, sorted."""
        try:
            files = os.listdir(self._output_dir)
        except FileNotFoundError:
            return []
        except OSError as e:
            raise StorageError(f"Failed to list {self._output_dir}: {e}") from e
        return sorted(f for f in files if f.endswith(".json"))
