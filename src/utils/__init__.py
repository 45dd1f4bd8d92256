"""Utility helpers shared across the media-catalog codebase."""

from .config import AppConfig, load_config
from .logging import configure_logging, get_logger
from .paths import basename, is_beneath, normalise_root
from .parallel import run_in_executor

__all__ = [
    "AppConfig",
    "load_config",
    "configure_logging",
    "get_logger",
    "basename",
    "is_beneath",
    "normalise_root",
    "run_in_executor",
]
