"""Figma configuration: credentials and target file, read from the environment.

Environment (a local .env file is loaded when present):
    FIGMA_ACCESS_TOKEN: Figma Personal Access Token (FIGMA_TOKEN also accepted)
    FIGMA_FILE_URL: URL of the Figma file, optionally with ?node-id=
"""

from __future__ import annotations

import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ValidationError as PydanticValidationError, field_validator

from .utils.validator import (
    extract_node_id_from_url,
    validate_and_extract_file_id,
    validate_token,
)


class FigmaConfigError(Exception):
    """Raised when the Figma configuration is missing or invalid."""


class FigmaConfig(BaseModel):
    """Validated Figma access configuration."""
    token: str
    file_id: str
    file_url: str
    node_id: Optional[str] = None

    @field_validator("token")
    @classmethod
    def check_token(cls, token: str) -> str:
        validate_token(token)
        return token


def load_figma_config(
    token: Optional[str] = None,
    file_url: Optional[str] = None,
) -> FigmaConfig:
    """Build a FigmaConfig from explicit values, falling back to env vars."""
    load_dotenv()
    token = token or os.getenv("FIGMA_ACCESS_TOKEN") or os.getenv("FIGMA_TOKEN", "")
    file_url = file_url or os.getenv("FIGMA_FILE_URL", "")

    try:
        validate_token(token)
        file_id = validate_and_extract_file_id(file_url)
        node_id = extract_node_id_from_url(file_url)
        return FigmaConfig(
            token=token,
            file_id=file_id,
            file_url=file_url,
            node_id=node_id,
        )
    except (ValueError, PydanticValidationError) as e:
        raise FigmaConfigError(f"Configuration failed: {e}") from e
