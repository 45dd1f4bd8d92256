"""The ordered, bounded media catalog and its incremental root operations."""
from __future__ import annotations

import copy
from dataclasses import replace
from typing import Iterator, List, Optional, Tuple, Union

from utils.config import AppConfig
from utils.logging import get_logger
from utils.parallel import run_in_executor
from utils.paths import basename, is_beneath

from .classifier import Category, PathPredicate, path_predicate
from .errors import CategoryNotSelectedError, ScanCancelledError
from .roots import StorageClass, StorageRoots
from .scanner import DEFAULT_CAP, CancelToken, CatalogScanner, ScanConfig
from .schema import CatalogSummary, ScanReport

LOGGER = get_logger(__name__)

CategoryLike = Union[Category, int, str, None]
StorageLike = Union[StorageClass, int, str, None]


def sort_key(path: str) -> str:
    """Case-insensitive basename used to order catalog entries."""

    return basename(path).lower()


class MediaCatalog:
    """Catalog of absolute file paths for one active category.

    The catalog is owned by a single caller at a time; it performs no
    locking of its own.
    """

    def __init__(
        self,
        roots: StorageRoots,
        *,
        scanner: Optional[CatalogScanner] = None,
        cap: Optional[int] = None,
    ) -> None:
        if scanner is not None and cap is not None:
            raise ValueError("pass either scanner or cap, not both")
        self.roots = roots
        if scanner is None:
            scanner = CatalogScanner(ScanConfig(cap=cap if cap is not None else DEFAULT_CAP))
        self.scanner = copy.copy(scanner)
        ignored_dirs = tuple(scanner.config.ignored_dirs)
        if roots.ignored_dir not in ignored_dirs:
            ignored_dirs = (*ignored_dirs, roots.ignored_dir)
        self.scanner.config = replace(scanner.config, ignored_dirs=ignored_dirs)
        self._entries: List[str] = []
        self._category: Optional[Category] = None
        self._predicate: Optional[PathPredicate] = None
        self.last_report = ScanReport()

    @classmethod
    def from_config(cls, config: AppConfig) -> "MediaCatalog":
        scanner = CatalogScanner(
            ScanConfig(
                cap=config.catalog_cap,
                follow_symlinks=config.follow_symlinks,
                max_depth=config.max_depth,
            )
        )
        return cls(StorageRoots.resolve(config), scanner=scanner)

    @property
    def cap(self) -> int:
        return self.scanner.config.cap

    @property
    def category(self) -> Optional[Category]:
        return self._category

    @property
    def entries(self) -> Tuple[str, ...]:
        return tuple(self._entries)

    @property
    def truncated(self) -> bool:
        return self.last_report.truncated

    @property
    def unreadable_dirs(self) -> List[str]:
        return list(self.last_report.unreadable_dirs)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))

    def __contains__(self, path: object) -> bool:
        return path in self._entries

    def select_category(
        self, category: CategoryLike, *, cancel: Optional[CancelToken] = None
    ) -> Optional[List[str]]:
        """Rebuild the catalog from all three roots for ``category``.

        Returns the sorted entries, or ``None`` when ``category`` is not one
        of the scannable categories; the catalog is left empty in that case.
        """

        self._entries.clear()
        self.last_report = ScanReport()
        predicate = path_predicate(category)
        if predicate is None:
            LOGGER.warning("Unrecognised category %r; catalog cleared", category)
            self._category = None
            self._predicate = None
            return None

        self._category = Category.coerce(category)
        self._predicate = predicate
        report = ScanReport()
        try:
            for _, root in self.roots.scan_order():
                report.merge(self._scan(root, predicate, cancel))
                if report.truncated:
                    break
        except ScanCancelledError:
            self._entries.clear()
            self._category = None
            self._predicate = None
            self.last_report = report
            raise
        self.last_report = report
        LOGGER.info(
            "Catalog rebuilt for %s: %d entries%s",
            self._category.name.lower(),
            len(self._entries),
            " (truncated)" if report.truncated else "",
        )
        return self.sort()

    async def select_category_async(
        self, category: CategoryLike, *, cancel: Optional[CancelToken] = None
    ) -> Optional[List[str]]:
        """Run :meth:`select_category` on a worker thread."""

        return await run_in_executor(self.select_category, category, cancel=cancel)

    def sort(self) -> List[str]:
        """Stable sort by case-insensitive basename; returns a copy."""

        self._entries.sort(key=sort_key)
        return list(self._entries)

    def attach_root(
        self, storage_class: StorageLike, *, cancel: Optional[CancelToken] = None
    ) -> List[str]:
        """Append the matches of one root without clearing or sorting."""

        predicate = self._require_category("attach_root")
        root = self.roots.root_for(storage_class)
        if root is None:
            LOGGER.debug("Ignoring attach for unrecognised storage class %r", storage_class)
            return list(self._entries)

        before = len(self._entries)
        try:
            report = self._scan(root, predicate, cancel)
        except ScanCancelledError:
            del self._entries[before:]
            raise
        self.last_report.merge(report)
        LOGGER.info("Attached %s: %d new entries", root, len(self._entries) - before)
        return list(self._entries)

    def detach_root(self, storage_class: StorageLike) -> List[str]:
        """Remove every entry that lies beneath the root for ``storage_class``."""

        self._require_category("detach_root")
        root = self.roots.root_for(storage_class)
        if root is None:
            LOGGER.debug("Ignoring detach for unrecognised storage class %r", storage_class)
            return list(self._entries)

        removed = 0
        for index in range(len(self._entries) - 1, -1, -1):
            if is_beneath(self._entries[index], root):
                del self._entries[index]
                removed += 1
        LOGGER.info("Detached %s: %d entries removed", root, removed)
        return list(self._entries)

    def summary(self) -> CatalogSummary:
        per_storage = {member.name.lower(): 0 for member in StorageClass}
        for path in self._entries:
            per_storage[self.roots.storage_class_of(path).name.lower()] += 1
        return CatalogSummary(
            category=self._category.name.lower() if self._category else None,
            total_entries=len(self._entries),
            per_storage=per_storage,
            truncated=self.truncated,
            unreadable_dirs=self.unreadable_dirs,
        )

    def _require_category(self, operation: str) -> PathPredicate:
        if self._predicate is None:
            raise CategoryNotSelectedError(operation)
        return self._predicate

    def _scan(self, root: str, predicate: PathPredicate, cancel: Optional[CancelToken]) -> ScanReport:
        return self.scanner.scan(root, predicate, self._entries, cancel=cancel)
