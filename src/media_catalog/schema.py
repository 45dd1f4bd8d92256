"""Pydantic models describing scan outcomes and catalog summaries."""
from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class ScanReport(BaseModel):
    """Statistics collected while scanning one or more roots."""

    roots: List[str] = Field(default_factory=list)
    directories_listed: int = 0
    files_seen: int = 0
    files_matched: int = 0
    ignored_dirs: int = 0
    skipped_dirs: int = 0
    unreadable_dirs: List[str] = Field(default_factory=list)
    truncated: bool = False

    def merge(self, other: "ScanReport") -> "ScanReport":
        """Fold ``other`` into this report and return ``self``."""

        self.roots.extend(other.roots)
        self.directories_listed += other.directories_listed
        self.files_seen += other.files_seen
        self.files_matched += other.files_matched
        self.ignored_dirs += other.ignored_dirs
        self.skipped_dirs += other.skipped_dirs
        self.unreadable_dirs.extend(other.unreadable_dirs)
        self.truncated = self.truncated or other.truncated
        return self


class CatalogSummary(BaseModel):
    """Aggregate information about the current catalog contents."""

    category: Optional[str]
    total_entries: int
    per_storage: Dict[str, int]
    truncated: bool = False
    unreadable_dirs: List[str] = Field(default_factory=list)
