from __future__ import annotations

import asyncio
import logging
import os
import threading
from pathlib import Path

import pytest
from pydantic import ValidationError

from utils.config import AppConfig, load_config
from utils.logging import configure_logging, get_logger
from utils.parallel import WORKER_PREFIX, run_in_executor
from utils.paths import basename, is_beneath, normalise_root


def test_load_config_defaults(tmp_path: Path) -> None:
    config = load_config(tmp_path / "missing.yml")
    assert isinstance(config, AppConfig)
    assert config.catalog_cap == 500
    assert str(config.internal_flash_root) == "/mnt/sdcard"


def test_load_config_from_yaml(tmp_path: Path) -> None:
    path = tmp_path / "mediacat.yml"
    path.write_text(
        "internal_flash_root: /data/flash\n"
        "catalog_cap: 25\n"
        "follow_symlinks: false\n"
        "max_depth: 4\n"
    )
    config = load_config(path)
    assert config.internal_flash_root == Path("/data/flash")
    assert config.catalog_cap == 25
    assert config.follow_symlinks is False
    assert config.max_depth == 4


def test_environment_overrides_yaml(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "mediacat.yml"
    path.write_text("host_attached_root: /yaml/usb\ncatalog_cap: 25\n")
    monkeypatch.setenv("MEDIACAT_USB_ROOT", "/env/usb")
    monkeypatch.setenv("MEDIACAT_CATALOG_CAP", "42")
    config = load_config(path)
    assert config.host_attached_root == Path("/env/usb")
    assert config.catalog_cap == 42


def test_invalid_cap_rejected() -> None:
    with pytest.raises(ValidationError):
        AppConfig(catalog_cap=0)


def test_normalise_root(tmp_path: Path) -> None:
    assert normalise_root(f"{tmp_path}{os.sep}{os.sep}") == str(tmp_path)
    assert normalise_root(tmp_path / "a" / ".." / "b") == str(tmp_path / "b")
    assert normalise_root(os.sep) == os.sep


def test_basename_and_is_beneath() -> None:
    assert basename("/card/Music/a.mp3") == "a.mp3"
    assert is_beneath("/card/a.mp3", "/card")
    assert is_beneath("/card", "/card")
    assert not is_beneath("/cardigan/a.mp3", "/card")
    assert is_beneath("/a.mp3", "/")


def test_run_in_executor_uses_worker_thread() -> None:
    caller = threading.get_ident()

    def work(value: int, *, scale: int) -> tuple:
        return value * scale, threading.get_ident()

    result, worker = asyncio.run(run_in_executor(work, 3, scale=2))
    assert result == 6
    assert worker != caller


def test_run_in_executor_names_its_worker() -> None:
    name = asyncio.run(run_in_executor(lambda: threading.current_thread().name))
    assert name.startswith(WORKER_PREFIX)


def test_configure_logging_bridges_stdlib() -> None:
    configure_logging("debug")
    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert any(type(handler).__name__ == "LoguruHandler" for handler in root.handlers)
    get_logger("media_catalog.test").debug("bridged")
    configure_logging("INFO")
