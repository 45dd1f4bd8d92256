"""Registry of the three storage roots the catalog scans."""
from __future__ import annotations

import os
from enum import IntEnum
from typing import List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, field_validator

from utils.config import AppConfig
from utils.logging import get_logger
from utils.paths import is_beneath, normalise_root

LOGGER = get_logger(__name__)

THUMBNAIL_CACHE_PARTS = ("DCIM", ".thumbnails")


class StorageClass(IntEnum):
    """Storage selectors; values double as the external selector codes."""

    HOST_ATTACHED = 1
    REMOVABLE_CARD = 2
    INTERNAL_FLASH = 3
    UNKNOWN = 4

    @classmethod
    def coerce(cls, value: Union["StorageClass", int, str, None]) -> Optional["StorageClass"]:
        """Return the matching member, or ``None`` for anything unrecognised."""

        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError:
                return None
        if isinstance(value, str) and value.strip().isdecimal():
            return cls.coerce(int(value.strip()))
        if isinstance(value, str):
            return cls.__members__.get(value.strip().upper().replace("-", "_"))
        return None


class StorageRoots(BaseModel):
    """Immutable set of absolute root paths, resolved once per engine."""

    model_config = ConfigDict(frozen=True)

    internal_flash: str
    removable_card: str
    host_attached: str

    @field_validator("internal_flash", "removable_card", "host_attached", mode="before")
    @classmethod
    def _normalise(cls, value: object) -> str:
        return normalise_root(str(value))

    @classmethod
    def resolve(cls, config: Optional[AppConfig] = None) -> "StorageRoots":
        """Build the registry from ``config`` (defaults when omitted)."""

        config = config or AppConfig()
        roots = cls(
            internal_flash=config.internal_flash_root,
            removable_card=config.removable_card_root,
            host_attached=config.host_attached_root,
        )
        LOGGER.debug(
            "Resolved storage roots flash=%s card=%s usb=%s",
            roots.internal_flash,
            roots.removable_card,
            roots.host_attached,
        )
        return roots

    def root_for(self, storage_class: Union[StorageClass, int, str, None]) -> Optional[str]:
        member = StorageClass.coerce(storage_class)
        if member is StorageClass.INTERNAL_FLASH:
            return self.internal_flash
        if member is StorageClass.REMOVABLE_CARD:
            return self.removable_card
        if member is StorageClass.HOST_ATTACHED:
            return self.host_attached
        return None

    def scan_order(self) -> List[Tuple[StorageClass, str]]:
        """Roots in the priority order used when the cap truncates a scan."""

        return [
            (StorageClass.INTERNAL_FLASH, self.internal_flash),
            (StorageClass.REMOVABLE_CARD, self.removable_card),
            (StorageClass.HOST_ATTACHED, self.host_attached),
        ]

    @property
    def ignored_dir(self) -> str:
        """Thumbnail cache on the removable card; never scanned."""

        return os.path.join(self.removable_card, *THUMBNAIL_CACHE_PARTS)

    def storage_class_of(self, path: str) -> StorageClass:
        """Return the storage class whose root holds ``path``.

        The longest matching root wins so nested mount points are attributed
        to the innermost volume.
        """

        best = StorageClass.UNKNOWN
        best_len = -1
        for storage_class, root in self.scan_order():
            if is_beneath(path, root) and len(root) > best_len:
                best, best_len = storage_class, len(root)
        return best
