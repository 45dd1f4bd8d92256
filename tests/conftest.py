from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable, Iterable

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = PROJECT_ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from media_catalog import StorageRoots  # noqa: E402


@pytest.fixture(autouse=True)
def _configure_test_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("MEDIACAT_FLASH_ROOT", "MEDIACAT_CARD_ROOT", "MEDIACAT_USB_ROOT", "MEDIACAT_CATALOG_CAP", "MEDIACAT_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def touch() -> Callable[[Path, Iterable[str]], None]:
    def _touch(base: Path, names: Iterable[str]) -> None:
        for name in names:
            path = base / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(b"")

    return _touch


@pytest.fixture
def roots(tmp_path: Path) -> StorageRoots:
    for name in ("flash", "card", "usb"):
        (tmp_path / name).mkdir()
    return StorageRoots(
        internal_flash=tmp_path / "flash",
        removable_card=tmp_path / "card",
        host_attached=tmp_path / "usb",
    )
