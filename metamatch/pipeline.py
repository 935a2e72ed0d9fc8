"""Pipeline entry points.

- process_styles: stored style snapshot → per-node CSS files
- MetaMatch: Figma file or node → normalized style snapshot on disk
"""

from __future__ import annotations

import logging
import os
from datetime import datetime, timezone
from typing import List, Optional

from . import settings
from .config import FigmaConfig, load_figma_config
from .css.file_generator import create_css_files
from .extraction.style_extractor import extract_node_styles
from .extraction.style_parser import count_nodes, group_by_root_id, parse_style_nodes
from .integrations.figma_client import FigmaClient, FigmaClientError
from .models import FileMetadata
from .storage import StorageManager
from .utils.validator import validate_node_id

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Snapshot → CSS
# ---------------------------------------------------------------------------


def find_style_snapshot(data_dir: Optional[str] = None) -> str:
    """Path of the first node style snapshot (by name) in data_dir."""
    data_dir = data_dir or settings.DATA_DIR
    candidates = sorted(
        f for f in os.listdir(data_dir)
        if f.startswith(settings.NODE_SNAPSHOT_PREFIX) and f.endswith(".json")
    )
    if not candidates:
        raise FileNotFoundError(
            f"No {settings.NODE_SNAPSHOT_PREFIX}*.json file found in {data_dir}"
        )
    return os.path.join(data_dir, candidates[0])


def process_styles(json_file_path: str, output_base_dir: Optional[str] = None) -> List[str]:
    """Generate one CSS file per style node in a snapshot; returns written paths."""
    output_base_dir = output_base_dir or settings.CSS_OUTPUT_DIR

    logger.info(f"Step 1: reading {json_file_path}")
    storage = StorageManager(os.path.dirname(json_file_path) or None)
    json_data = storage.load_data(json_file_path)

    logger.info("Step 2: parsing style nodes")
    style_nodes = parse_style_nodes(json_data)
    logger.info(f"Found {len(style_nodes)} style nodes")

    logger.info("Step 3: grouping by root node")
    grouped = group_by_root_id(style_nodes)
    for root_id, records in grouped.items():
        logger.info(f"  root {root_id}: {len(records)} nodes")

    logger.info(f"Step 4: writing CSS files to {output_base_dir}")
    file_paths = create_css_files(style_nodes, output_base_dir)
    logger.info(f"Generated {len(file_paths)} CSS files")
    return file_paths


# ---------------------------------------------------------------------------
# Figma → snapshot
# ---------------------------------------------------------------------------


class MetaMatch:
    """Fetches Figma styles and stores normalized snapshots.

    Args:
        config: Validated Figma configuration. Loaded from env on initialize()
            when omitted.
        storage: Snapshot store. Defaults to settings.DATA_DIR.
        client: Figma API client. Built from config when omitted.
    """

    def __init__(
        self,
        config: Optional[FigmaConfig] = None,
        storage: Optional[StorageManager] = None,
        client: Optional[FigmaClient] = None,
    ):
        self.config = config
        self.storage = storage or StorageManager()
        self.client = client

    async def initialize(self) -> None:
        logger.info("Step 1/3: loading configuration")
        if self.config is None:
            self.config = load_figma_config()
        if self.config.node_id:
            logger.info(f"Node ID from URL: {self.config.node_id}")

        logger.info("Step 2/3: creating Figma API client")
        if self.client is None:
            self.client = FigmaClient(self.config.token)

        logger.info("Step 3/3: validating access token")
        if not await self.client.validate_token():
            raise FigmaClientError("Figma access token validation failed")

        self.storage.initialize()
        logger.info("Initialization complete")

    async def fetch_file_nodes(self, node_id: Optional[str] = None) -> str:
        """Fetch one node (or the whole file) and save its style snapshot.

        Returns the snapshot path.
        """
        if self.client is None or self.config is None:
            raise RuntimeError("MetaMatch is not initialized, call initialize() first")

        file_id = self.config.file_id
        logger.info(f"File URL: {self.config.file_url}")
        logger.info(f"File ID: {file_id}")

        validated_node_id = validate_node_id(node_id)
        if validated_node_id:
            node = await self.client.get_node(file_id, validated_node_id)

            logger.info("Extracting node styles")
            node_styles = extract_node_styles(node)
            now = datetime.now(timezone.utc).isoformat()
            metadata = FileMetadata(
                file_id=file_id,
                file_name=node.get("name", ""),
                last_modified=now,
                fetched_at=now,
            )
            saved_path = self.storage.save_node_styles(metadata, node_styles)
            logger.info(
                f"Node {validated_node_id} ({node.get('name')}, {node.get('type')}) "
                f"saved to {saved_path}"
            )
        else:
            logger.info("Fetching styles for the whole file")
            file_response = await self.client.get_file(file_id)
            document = file_response.get("document", {})

            logger.info("Extracting file styles")
            file_styles = extract_node_styles(document)
            metadata = self.client.extract_metadata(file_id, file_response)
            saved_path = self.storage.save_file_styles(
                metadata,
                file_styles,
                file_response.get("components"),
                file_response.get("styles"),
            )
            logger.info(
                f"File {file_response.get('name')} (version {file_response.get('version')}, "
                f"modified {file_response.get('lastModified')}) saved to {saved_path}"
            )
            logger.info(f"Total nodes: {count_nodes(document)}")

        logger.info(f"Data directory: {self.storage.output_dir}")
        return saved_path

    async def run(self, node_id: Optional[str] = None) -> str:
        try:
            await self.initialize()
            return await self.fetch_file_nodes(node_id or (self.config.node_id if self.config else None))
        finally:
            await self.close()

    async def close(self) -> None:
        if self.client is not None:
            await self.client.close()
