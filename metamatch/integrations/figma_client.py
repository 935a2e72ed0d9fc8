"""Figma REST API client for style extraction.

Fetches whole files or single nodes from Figma using Personal Access Token
(PAT) authentication.

Usage:
    client = FigmaClient(token)
    if await client.validate_token():
        node = await client.get_node("6kGd851qaAX4TiL44vpIrO", "16650:538")
    await client.close()
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import httpx

from .. import settings
from ..models import FileMetadata

logger = logging.getLogger(__name__)

_STATUS_MESSAGES = {
    400: "Figma API rejected the request parameters (400 Bad Request)",
    401: "Figma Personal Access Token is invalid or expired (401 Unauthorized)",
    403: "No permission to access this file (403 Forbidden). Check the file's sharing settings.",
    404: "Figma file or node not found (404)",
    429: "Figma API rate limit exceeded (429). Retry later.",
    500: "Figma server error (500). Retry later.",
    502: "Figma server error (502). Retry later.",
    503: "Figma server error (503). Retry later.",
}


class FigmaClientError(Exception):
    """Raised when a Figma API call fails."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class FigmaClient:
    """Async Figma REST API client.

    Args:
        token: Figma PAT.
        timeout: HTTP request timeout in seconds.
    """

    def __init__(self, token: str, timeout: Optional[float] = None):
        if not token:
            raise FigmaClientError(
                "Figma token not configured. Set FIGMA_ACCESS_TOKEN or pass token= to FigmaClient()."
            )
        self._token = token
        self._client: Optional[httpx.AsyncClient] = None
        self._timeout = timeout if timeout is not None else settings.FIGMA_HTTP_TIMEOUT

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=settings.FIGMA_API_BASE,
                headers={"X-FIGMA-TOKEN": self._token},
                timeout=self._timeout,
                limits=httpx.Limits(max_connections=settings.FIGMA_HTTP_MAX_CONNECTIONS),
            )
        return self._client

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Make a GET request to the Figma API."""
        client = await self._get_client()
        logger.debug(f"GET {path} params={params}")
        try:
            resp = await client.get(path, params=params)
        except httpx.TimeoutException as e:
            raise FigmaClientError(f"Figma API timeout: {path}") from e
        except httpx.ConnectError as e:
            raise FigmaClientError(f"Figma API connection error: {path}") from e

        logger.debug(f"GET {path} → {resp.status_code}")
        if resp.status_code != 200:
            raise FigmaClientError(self._error_message(resp), resp.status_code)

        return resp.json()

    @staticmethod
    def _error_message(resp: httpx.Response) -> str:
        known = _STATUS_MESSAGES.get(resp.status_code)
        if known:
            return known
        message = f"Figma API error {resp.status_code}"
        try:
            body = resp.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("err"):
            message = f"{message}: {body['err']}"
        return message

    # ------------------------------------------------------------------
    # API methods
    # ------------------------------------------------------------------

    async def get_file(
        self,
        file_id: str,
        depth: Optional[int] = None,
        geometry: Optional[bool] = None,
    ) -> Dict[str, Any]:
        """Fetch a whole Figma file.

        GET /v1/files/:key[?depth=N&geometry=paths|none]
        """
        params: Dict[str, str] = {}
        if depth:
            params["depth"] = str(depth)
        if geometry is not None:
            params["geometry"] = "paths" if geometry else "none"

        logger.info(f"get_file: fetching {file_id}")
        data = await self._get(f"/v1/files/{file_id}", params=params or None)
        logger.info(f"get_file: file={file_id}, name={data.get('name')}")
        return data

    async def get_node(self, file_id: str, node_id: str) -> Dict[str, Any]:
        """Fetch one node's document subtree.

        GET /v1/files/:key/nodes?ids=...
        """
        logger.info(f"get_node: fetching {node_id} from {file_id}")
        data = await self._get(f"/v1/files/{file_id}/nodes", params={"ids": node_id})

        node_data = (data.get("nodes") or {}).get(node_id)
        if not node_data or not node_data.get("document"):
            raise FigmaClientError(f"Node {node_id} does not exist in file {file_id}")

        document = node_data["document"]
        logger.info(f"get_node: node={node_id}, name={document.get('name')}")
        return document

    async def validate_token(self) -> bool:
        """Check the token against GET /v1/me."""
        try:
            await self._get("/v1/me")
        except FigmaClientError as e:
            logger.error(f"validate_token: token rejected: {e}")
            return False
        logger.info("validate_token: token accepted")
        return True

    @staticmethod
    def extract_metadata(file_id: str, file_response: Dict[str, Any]) -> FileMetadata:
        return FileMetadata(
            file_id=file_id,
            file_name=file_response.get("name", ""),
            last_modified=file_response.get("lastModified", ""),
            fetched_at=datetime.now(timezone.utc).isoformat(),
            version=file_response.get("version"),
            thumbnail_url=file_response.get("thumbnailUrl"),
        )
