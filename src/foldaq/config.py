"""Preprocessor configuration: settings schema and layered loader"""

import os
from typing import Any

from pydantic import BaseModel, Field, ValidationError


ENV_PREFIX = "FOLDAQ_"


class Settings(BaseModel):
    newlines_after_codeblock: int = Field(default=1, ge=1, description="Newlines written after a top-level fenced code block")
    log_level:                str = Field(default="info", pattern="^(debug|info|warning|error)$", description="Logging threshold")


def _normalize_keys(table: dict[str, Any]) -> dict[str, Any]:
    """Map book.toml style keys (newlines-after-codeblock) onto Settings fields."""
    data = {}
    for key, value in table.items():
        name = key.replace("-", "_")
        if name in Settings.model_fields:
            data[name] = value
    return data


def load_config(book_config: dict[str, Any] = None, overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from the [preprocessor.foldaq] table, then FOLDAQ_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = _normalize_keys(book_config or {})

    for name in Settings.model_fields:
        if val := os.getenv(f"{ENV_PREFIX}{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return Settings(**data)
    except ValidationError as e:
        raise ValueError(f"Invalid foldaq configuration: {e}") from e
