"""Runtime settings: tunable parameters for fetch and CSS generation.

All values read from environment variables with defaults. Credentials and
file URLs live in metamatch/config.py.
"""

from __future__ import annotations

import os


def _int(key: str, default: int) -> int:
    return int(os.getenv(key, str(default)))


def _float(key: str, default: float) -> float:
    return float(os.getenv(key, str(default)))


def _str(key: str, default: str) -> str:
    return os.getenv(key, default)


# =====================================================================
# Figma API
# =====================================================================

FIGMA_API_BASE = _str("FIGMA_API_BASE", "https://api.figma.com")

# HTTP request timeout (seconds)
FIGMA_HTTP_TIMEOUT = _float("FIGMA_HTTP_TIMEOUT", 30.0)

FIGMA_HTTP_MAX_CONNECTIONS = _int("FIGMA_HTTP_MAX_CONNECTIONS", 5)


# =====================================================================
# Output locations
# =====================================================================

# Raw JSON style snapshots
DATA_DIR = _str("METAMATCH_DATA_DIR", "data")

# Generated CSS tree
CSS_OUTPUT_DIR = _str("METAMATCH_CSS_DIR", "css")

# Snapshot file prefixes
NODE_SNAPSHOT_PREFIX = "figma-node-styles-"
FILE_SNAPSHOT_PREFIX = "figma-styles-"
