"""Validation for Figma tokens, file URLs and node IDs."""

from __future__ import annotations

import re
from typing import Optional

_FILE_URL_RE = re.compile(r"https://(?:www\.)?figma\.com/(file|design)/([a-zA-Z0-9]+)")
_NODE_ID_RE = re.compile(r"^[\d\-:]+$")
_URL_NODE_ID_RE = re.compile(r"[?&]node-id=([0-9\-:]+)")

TOKEN_PREFIX = "figd_"
TOKEN_MIN_LENGTH = 20


class ValidationError(ValueError):
    """Raised when a token, URL or node ID is malformed."""


def validate_token(token: Optional[str]) -> None:
    """Check a Figma Personal Access Token's shape (not its validity)."""
    if not token or not token.strip():
        raise ValidationError("Figma Personal Access Token is not configured or empty")

    if not token.startswith(TOKEN_PREFIX):
        raise ValidationError(
            f'Figma Personal Access Token is malformed, expected prefix "{TOKEN_PREFIX}"'
        )

    if len(token) < TOKEN_MIN_LENGTH:
        raise ValidationError("Figma Personal Access Token is too short")


def validate_and_extract_file_id(url: Optional[str]) -> str:
    """Return the file key from a figma.com/file/... or figma.com/design/... URL.

    Examples:
        "https://www.figma.com/file/AbC123/Name" → "AbC123"
        "https://figma.com/design/XyZ/Name?node-id=1-2" → "XyZ"
    """
    if not url or not url.strip():
        raise ValidationError("Figma file URL is not configured or empty")

    match = _FILE_URL_RE.search(url)
    if not match:
        raise ValidationError(
            "Figma file URL is malformed. Expected: "
            "https://www.figma.com/file/{fileId}/{fileName}"
        )
    return match.group(2)


def validate_node_id(node_id: Optional[str]) -> Optional[str]:
    """Normalize a node ID to the API's colon form ("1-2" → "1:2")."""
    if not node_id:
        return None

    if not _NODE_ID_RE.match(node_id):
        raise ValidationError(f"Malformed node ID: {node_id}")

    return node_id.replace("-", ":")


def extract_node_id_from_url(url: Optional[str]) -> Optional[str]:
    """Extract the node-id query parameter, if any, in colon form."""
    if not url:
        return None

    match = _URL_NODE_ID_RE.search(url)
    if match:
        return match.group(1).replace("-", ":")
    return None
