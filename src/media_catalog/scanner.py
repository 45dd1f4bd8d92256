"""Bounded recursive traversal that feeds the media catalog."""
from __future__ import annotations

import os
import threading
from dataclasses import dataclass, field
from typing import Callable, List, MutableSequence, Optional, Sequence, Set, Tuple

from utils.logging import get_logger

from .errors import ScanCancelledError
from .schema import ScanReport

LOGGER = get_logger(__name__)
DEFAULT_CAP = 500


class CancelToken:
    """Cooperative cancellation flag shared between a caller and a scan."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


@dataclass
class ScanConfig:
    """Configuration parameters controlling scan behaviour."""

    cap: int = DEFAULT_CAP
    ignored_dirs: Sequence[str] = ()
    follow_symlinks: bool = True
    max_depth: Optional[int] = None

    def __post_init__(self) -> None:
        if self.cap < 1:
            raise ValueError("cap must be >= 1")
        if self.max_depth is not None and self.max_depth < 0:
            raise ValueError("max_depth must be >= 0")
        self.ignored_dirs = tuple(self.ignored_dirs)


@dataclass
class _Walk:
    """Mutable state of one ``scan`` call."""

    classify: Callable[[str], bool]
    into: MutableSequence[str]
    report: ScanReport
    cancel: Optional[CancelToken]
    ignored: Set[str]
    visited: Set[Tuple[int, int]] = field(default_factory=set)


class CatalogScanner:
    """Walk a root and append every accepted file path to a shared list.

    The cap is checked against the size of the shared list, so a scan over
    several roots that reuses one list is bounded globally. Reaching the cap
    aborts the whole scan, not only the current directory.
    """

    def __init__(self, config: Optional[ScanConfig] = None) -> None:
        self.config = config or ScanConfig()

    def scan(
        self,
        root: str,
        classify: Callable[[str], bool],
        into: MutableSequence[str],
        *,
        cancel: Optional[CancelToken] = None,
    ) -> ScanReport:
        root = os.fspath(root)
        report = ScanReport(roots=[root])
        walk = _Walk(
            classify=classify,
            into=into,
            report=report,
            cancel=cancel,
            ignored={self._fold(path) for path in self.config.ignored_dirs},
        )
        try:
            self._mark_visited(walk, os.stat(root))
        except OSError:
            pass
        before = len(into)
        self._walk(walk, root, depth=0)
        LOGGER.debug(
            "Scanned %s: %d directories, %d files, %d matched",
            root,
            report.directories_listed,
            report.files_seen,
            len(into) - before,
        )
        if report.truncated:
            LOGGER.info("Catalog cap of %d reached while scanning %s", self.config.cap, root)
        return report

    @staticmethod
    def _fold(path: str) -> str:
        return os.path.normcase(os.fspath(path)).lower()

    @staticmethod
    def _mark_visited(walk: _Walk, st: os.stat_result) -> bool:
        key = (st.st_dev, st.st_ino)
        if key in walk.visited:
            return False
        walk.visited.add(key)
        return True

    def _list(self, walk: _Walk, path: str) -> Optional[List[os.DirEntry]]:
        try:
            with os.scandir(path) as it:
                children = list(it)
        except (FileNotFoundError, NotADirectoryError) as exc:
            LOGGER.debug("Skipping missing directory %s: %s", path, exc)
            walk.report.unreadable_dirs.append(path)
            return None
        except OSError as exc:
            LOGGER.warning("Unable to list %s: %s", path, exc)
            walk.report.unreadable_dirs.append(path)
            return None
        walk.report.directories_listed += 1
        if walk.cancel is not None and walk.cancel.cancelled:
            raise ScanCancelledError(path)
        return children

    def _walk(self, walk: _Walk, path: str, depth: int) -> bool:
        """Scan ``path``; return ``False`` once the cap stops the scan."""

        children = self._list(walk, path)
        if children is None:
            return True

        follow = self.config.follow_symlinks
        for child in children:
            try:
                is_dir = child.is_dir(follow_symlinks=follow)
                is_file = not is_dir and child.is_file(follow_symlinks=follow)
            except OSError as exc:
                LOGGER.debug("Unable to inspect %s: %s", child.path, exc)
                continue

            if is_dir:
                if self._fold(child.path) in walk.ignored:
                    walk.report.ignored_dirs += 1
                    continue
                if not self._may_descend(walk, child, depth + 1):
                    walk.report.skipped_dirs += 1
                    continue
                if not self._walk(walk, child.path, depth + 1):
                    return False
            elif is_file:
                if len(walk.into) >= self.config.cap:
                    walk.report.truncated = True
                    return False
                walk.report.files_seen += 1
                if walk.classify(child.path):
                    walk.into.append(child.path)
                    walk.report.files_matched += 1
        return True

    def _may_descend(self, walk: _Walk, child: os.DirEntry, depth: int) -> bool:
        max_depth = self.config.max_depth
        if max_depth is not None and depth > max_depth:
            LOGGER.debug("Depth bound reached at %s", child.path)
            return False
        try:
            st = child.stat(follow_symlinks=self.config.follow_symlinks)
        except OSError as exc:
            LOGGER.debug("Unable to stat %s: %s", child.path, exc)
            return True
        if not self._mark_visited(walk, st):
            LOGGER.debug("Skipping already visited directory %s", child.path)
            return False
        return True
