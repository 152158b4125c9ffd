"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"
ENV_PREFIX = "DOCSECT_"


class Settings(BaseModel):
    parser_config: str = Field(default="gfm-like", description="MarkdownIt parser preset name")
    fetch_timeout: float = Field(default=30.0, gt=0, description="HTTP timeout in seconds for fetch_docs")
    user_agent:    str = Field(default="docsect", description="User-Agent header sent by fetch_docs")
    chunk_size:    Optional[int] = Field(default=None, ge=1, description="Split HTML text nodes into chunks of this size; None = whole nodes")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then DOCSECT_<FIELD> env vars, then non-None overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e

    for name in Settings.model_fields:
        if val := os.getenv(f"{ENV_PREFIX}{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
