"""Exceptions raised by the catalog engine."""
from __future__ import annotations


class CatalogError(RuntimeError):
    """Base class for catalog failures the caller must handle."""


class CategoryNotSelectedError(CatalogError):
    """A root was attached or detached before any category was selected."""

    def __init__(self, operation: str) -> None:
        super().__init__(f"{operation} requires an active category; call select_category first")
        self.operation = operation


class ScanCancelledError(CatalogError):
    """A scan was stopped through its cancel token."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Scan cancelled after listing {path}")
        self.path = path
