"""Configuration helpers for media-catalog."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, Field

ENV_OVERRIDES: Dict[str, str] = {
    "MEDIACAT_FLASH_ROOT": "internal_flash_root",
    "MEDIACAT_CARD_ROOT": "removable_card_root",
    "MEDIACAT_USB_ROOT": "host_attached_root",
    "MEDIACAT_CATALOG_CAP": "catalog_cap",
    "MEDIACAT_LOG_LEVEL": "log_level",
}


class AppConfig(BaseModel):
    """Application level configuration."""

    internal_flash_root: Path = Field(default=Path("/mnt/sdcard"))
    removable_card_root: Path = Field(default=Path("/mnt/sd-ext"))
    host_attached_root: Path = Field(default=Path("/mnt/usbhost"))
    catalog_cap: int = Field(default=500, ge=1)
    follow_symlinks: bool = True
    max_depth: Optional[int] = Field(default=None, ge=0)
    log_level: str = "INFO"


def load_config(path: Optional[Path] = None) -> AppConfig:
    """Load configuration from a YAML file, then apply ``MEDIACAT_*`` overrides."""

    data: Dict[str, Any] = {}
    if path is not None and path.exists():
        data = yaml.safe_load(path.read_text()) or {}
    for env_name, field_name in ENV_OVERRIDES.items():
        value = os.environ.get(env_name)
        if value:
            data[field_name] = value
    return AppConfig(**data)
